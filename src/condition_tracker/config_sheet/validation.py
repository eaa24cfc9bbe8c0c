"""Correct user-entered table rows into valid condition definitions.

Rows are checked in table order. Each accepted name is remembered so a later
row clashing with it (ignoring case) gets a unique suffix instead of being
dropped: the catalog always ends up with one definition per row.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable

from ..catalog import NameAllocator
from ..models import ConditionDefinition, MarkerDefinition
from .models import ConditionRow, CorrectionReason, CorrectionWarning, ValidatedTable

logger = logging.getLogger(__name__)

# Reserved by the command syntax: "|" separates options, "-" separates amounts.
RESERVED_CHARACTERS = re.compile(r"[|-]")

PLACEHOLDER_NAME = "Condition"


def normalize_whitespace(text: str) -> str:
    """Trim and collapse runs of whitespace (including &nbsp;) to single spaces."""
    return " ".join(text.replace("&nbsp;", " ").split())


def normalize_marker(raw: str) -> str:
    """Blank and the literal ``null`` both mean "no marker"."""
    marker = raw.replace("&nbsp;", " ").strip()
    if marker.lower() == "null":
        return ""
    return marker


def correct_name(
    raw: str,
    accepted: list[str],
    allocator: NameAllocator,
) -> tuple[str, CorrectionWarning | None]:
    """Return a valid, unique version of ``raw`` and the correction made, if any."""
    reasons: list[CorrectionReason] = []
    name = normalize_whitespace(raw)

    if RESERVED_CHARACTERS.search(name):
        name = normalize_whitespace(RESERVED_CHARACTERS.sub("", name))
        reasons.append(CorrectionReason.RESERVED_CHARACTERS)

    if not name:
        name = allocator.unique_name(PLACEHOLDER_NAME, accepted)
        reasons.append(CorrectionReason.BLANK)
    elif name.lower() in {existing.lower() for existing in accepted}:
        name = allocator.unique_name(name, accepted)
        reasons.append(CorrectionReason.DUPLICATE)

    if not reasons:
        return name, None
    return name, CorrectionWarning(original=raw, corrected=name, reasons=reasons)


def validate_rows(
    rows: Iterable[ConditionRow],
    allocator: NameAllocator,
    markers: Iterable[MarkerDefinition] | None = None,
) -> ValidatedTable:
    """Turn parsed rows into definitions, correcting names along the way.

    ``markers`` is only used to report marker references the host does not know;
    such references are kept as entered.
    """
    known_markers: set[str] | None = None
    if markers is not None:
        known_markers = set()
        for marker in markers:
            known_markers.add(marker.name)
            if marker.tag:
                known_markers.add(marker.tag)

    result = ValidatedTable()
    accepted: list[str] = []

    for row in rows:
        name, warning = correct_name(row.name, accepted, allocator)
        accepted.append(name)
        if warning is not None:
            logger.warning("Corrected condition name %r -> %r (%s)", row.name, name,
                           ", ".join(reason.value for reason in warning.reasons))
            result.corrections.append(warning)

        marker_ref = normalize_marker(row.marker_ref)
        if marker_ref and known_markers is not None and marker_ref not in known_markers:
            result.unknown_markers.append(marker_ref)

        result.definitions.append(
            ConditionDefinition(name=name, marker_ref=marker_ref, description=list(row.description))
        )

    return result
