"""Persistence formats for the condition catalog inside the config document.

The sync engine only talks to the TableCodec interface: locate the table in
the document, parse it into rows, and serialize definitions back. The HTML
table is the default; the YAML block is an alternative for hosts whose rich
text editor mangles tables.
"""

from __future__ import annotations

import html
import logging
from typing import Any, Iterable, Protocol

import yaml
from bs4 import BeautifulSoup, Tag

from ..errors import SyncFailure
from ..models import ConditionDefinition
from .models import ConditionRow

logger = logging.getLogger(__name__)

_BORDER_COLOR = "rgba(100, 100, 100, 1)"
TABLE_STYLE = f"border: 2px solid {_BORDER_COLOR};"
HEADER_CELL_STYLE = "vertical-align: top; background-color: blue; color: white; padding: 5px;"
TABLE_HEADERS = (
    "Condition (string)",
    "Marker (string or left blank)",
    "Description (list of strings)",
)


class TableCodec(Protocol):
    """Interface between the condition catalog and its textual table."""

    def extract(self, document: str) -> str:
        """Return the table text embedded in ``document``.

        Raises:
            SyncFailure: If no table can be found.
        """
        ...

    def parse(self, table: str) -> list[ConditionRow]:
        """Read rows from table text produced by ``extract``.

        Raises:
            SyncFailure: If the table structure cannot be read.
        """
        ...

    def serialize(self, definitions: Iterable[ConditionDefinition]) -> str:
        ...


def _escape(text: str) -> str:
    return html.escape(text, quote=False)


def _locate(document: str, opening: str, closing: str, label: str) -> str:
    start = document.find(opening)
    if start == -1:
        raise SyncFailure(
            f"Unable to find the conditions {label} in the config document. "
            "Switch to the Instructions tab and back to the Conditions tab to re-render it, "
            "or reset the tracker state (customizations will be lost).",
            details={"missing": opening},
        )
    end = document.rfind(closing)
    if end < start:
        raise SyncFailure(
            f"The conditions {label} in the config document is not closed.",
            details={"missing": closing},
        )
    return document[start:end + len(closing)]


class HtmlTableCodec:
    """Three-column HTML table: name, marker reference, description list."""

    def extract(self, document: str) -> str:
        return _locate(document, "<table", "</table>", "table")

    def serialize(self, definitions: Iterable[ConditionDefinition]) -> str:
        headers = "".join(
            f"<th style='{HEADER_CELL_STYLE}'>{header}</th>" for header in TABLE_HEADERS
        )
        rows = "".join(
            f"<tr><td>{_escape(d.name)}</td><td>{_escape(d.marker_ref)}</td>"
            f"<td>{self._description_list(d.description)}</td></tr>"
            for d in definitions
        )
        return (
            f"<table style='{TABLE_STYLE}'>"
            f"<thead><tr>{headers}</tr></thead>"
            f"<tbody>{rows}</tbody></table>"
        )

    def parse(self, table: str) -> list[ConditionRow]:
        soup = BeautifulSoup(table, "html.parser")
        element = soup.find("table")
        if element is None:
            raise SyncFailure("The conditions table could not be read.")

        rows: list[ConditionRow] = []
        for tr in element.find_all("tr"):
            cells = tr.find_all("td", recursive=False)
            if not cells:
                # Header row
                continue
            cells = cells + [None] * (3 - len(cells))
            rows.append(
                ConditionRow(
                    name=self._cell_text(cells[0]),
                    marker_ref=self._cell_text(cells[1]),
                    description=self._description_items(cells[2]),
                )
            )

        logger.debug("Parsed %d rows from conditions table", len(rows))
        return rows

    @staticmethod
    def _description_list(items: list[str]) -> str:
        if not items:
            return "<ul><li></li></ul>"
        return "<ul>" + "".join(f"<li>{item}</li>" for item in items) + "</ul>"

    @staticmethod
    def _cell_text(cell: Tag | None) -> str:
        if cell is None:
            return ""
        return cell.get_text().replace("\xa0", " ")

    @staticmethod
    def _description_items(cell: Tag | None) -> list[str]:
        """Flatten a description cell into list item fragments.

        Paragraph wrappers and line breaks added by rich text editors are dropped.
        A cell without a list is treated as a single item.
        """
        if cell is None:
            return []
        for br in cell.find_all("br"):
            br.decompose()
        for paragraph in cell.find_all("p"):
            paragraph.unwrap()

        items = cell.find_all("li")
        if not items:
            content = cell.decode_contents().strip()
            return [content] if cell.get_text(strip=True) else []

        fragments = (item.decode_contents().replace("\xa0", " ").strip() for item in items)
        return [fragment for fragment in fragments if fragment]


class YamlTableCodec:
    """Catalog as a YAML list inside a ``<pre>`` block."""

    def extract(self, document: str) -> str:
        return _locate(document, "<pre", "</pre>", "block")

    def serialize(self, definitions: Iterable[ConditionDefinition]) -> str:
        data = [
            {"name": d.name, "marker": d.marker_ref, "description": list(d.description)}
            for d in definitions
        ]
        text = yaml.safe_dump(data, sort_keys=False, allow_unicode=True, width=100000)
        return f"<pre>{_escape(text)}</pre>"

    def parse(self, table: str) -> list[ConditionRow]:
        text = BeautifulSoup(table, "html.parser").get_text()
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise SyncFailure(f"Invalid YAML in conditions block: {e}") from e

        if data is None:
            return []
        if not isinstance(data, list):
            raise SyncFailure(f"Conditions block must be a list, got {type(data).__name__}")

        rows: list[ConditionRow] = []
        for entry in data:
            if not isinstance(entry, dict):
                raise SyncFailure(f"Each condition must be a mapping, got {type(entry).__name__}")
            rows.append(
                ConditionRow(
                    name=_as_text(entry.get("name")),
                    marker_ref=_as_text(entry.get("marker")),
                    description=_as_items(entry.get("description")),
                )
            )
        return rows


def _as_text(value: Any) -> str:
    return "" if value is None else str(value)


def _as_items(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, list):
        return [str(item).strip() for item in value if item is not None and str(item).strip()]
    text = str(value).strip()
    return [text] if text else []


def get_table_codec(table_format: str) -> TableCodec:
    """Codec for a configured table format name ("html" or "yaml")."""
    if table_format == "html":
        return HtmlTableCodec()
    if table_format == "yaml":
        return YamlTableCodec()
    raise ValueError(f"Unknown table format: {table_format}")
