"""
Chat cards describing conditions.

Cards are whispered to whoever asked (``!ct conditions``) and list each
condition with its marker and description items.
"""

from html import escape
from typing import Iterable, Mapping

from .catalog import ConditionCatalog, sort_key
from .host import MarkerCatalog

CONTAINER_STYLE = "border: 2px solid rgba(100, 100, 100, 1); max-width: 300px;"
CAPTION_STYLE = "font-weight: bold; padding: 5px 10px; background-color: rgba(100, 100, 100, 1); color: #fff;"
ITEM_STYLE = "padding: 0 10px 5px;"

NO_DESCRIPTION = "No description has been defined for this condition."
NO_CONDITIONS = "No conditions are currently applied to this token."


def _caption(text: str) -> str:
    return f"<div style='{CAPTION_STYLE}'>{escape(text)}</div>"


def condition_entry(
    name: str,
    catalog: ConditionCatalog,
    markers: MarkerCatalog,
    count: int = 1,
) -> str:
    """One ``<dt>/<dd>`` pair for a condition, known to the catalog or not."""
    definition = catalog.find(name)
    title = definition.name if definition is not None else catalog.canonical_name(name)
    if count > 1:
        title += f" x{count}"

    term = escape(title)
    if definition is not None and definition.marker_ref:
        term += f" <span>[{escape(markers.label(definition.marker_ref))}]</span>"

    items = definition.description if definition is not None else []
    details = "".join(f"<div style='{ITEM_STYLE}'>{item}</div>" for item in items if item)
    if not details:
        details = f"<div style='{ITEM_STYLE}'>{NO_DESCRIPTION}</div>"

    return f"<dt>{term}</dt><dd>{details}</dd>"


def token_card(
    token_name: str,
    counts: Mapping[str, int],
    catalog: ConditionCatalog,
    markers: MarkerCatalog,
) -> str:
    """Card for the conditions currently on a token."""
    caption = _caption(f"Conditions for {token_name}")
    present = sorted((name for name, count in counts.items() if count > 0), key=sort_key)
    if not present:
        return f"<div style='{CONTAINER_STYLE}'>{caption}<div style='padding: 10px;'>{NO_CONDITIONS}</div></div>"

    entries = "".join(condition_entry(name, catalog, markers, counts[name]) for name in present)
    return f"<div style='{CONTAINER_STYLE}'>{caption}<dl>{entries}</dl></div>"


def catalog_card(
    catalog: ConditionCatalog,
    markers: MarkerCatalog,
    names: Iterable[str] | None = None,
) -> str:
    """Card for the named conditions, or the whole catalog when ``names`` is None."""
    selected = catalog.names() if names is None else list(names)
    entries = "".join(condition_entry(name, catalog, markers) for name in selected)
    return f"<div style='{CONTAINER_STYLE}'>{_caption('Campaign Conditions')}<dl>{entries}</dl></div>"
