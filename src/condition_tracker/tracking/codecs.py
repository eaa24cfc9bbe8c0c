"""
Encoders and decoders for the two token fields that carry conditions.

Marker field (``statusmarkers``): comma separated badge names. Repeated
instances are compacted with badge notation, ``name@N``, where the host only
renders a single digit, so larger counts are split over several badges.

Tooltip field: comma separated, human readable. Repeated instances are written
as ``Name xN``.

Decoders return count mappings and accumulate repeated entries; encoders take a
count mapping. ``decode`` gives the flat view, one entry per instance.
"""

from __future__ import annotations

import re
from typing import Mapping, Protocol

from ..catalog import sort_key

MAX_BADGE_COUNT = 9

_TOOLTIP_COUNT = re.compile(r"^(?P<name>.+?)\s+x(?P<count>\d+)$", re.IGNORECASE)


class NameResolver(Protocol):
    def canonical_name(self, name: str) -> str: ...


def split_field(field: str | None) -> list[str]:
    """Split a comma separated field into trimmed, non-empty items."""
    if not field:
        return []
    items = (item.replace("&nbsp;", "").strip() for item in field.split(","))
    return [item for item in items if item]


def expand_counts(counts: Mapping[str, int]) -> list[str]:
    """Flatten counts into one entry per instance."""
    instances: list[str] = []
    for name, count in counts.items():
        instances.extend([name] * max(count, 0))
    return instances


def capitalize_first(name: str) -> str:
    return name[:1].upper() + name[1:]


def _add_count(counts: dict[str, int], name: str, count: int) -> None:
    if count > 0:
        counts[name] = counts.get(name, 0) + count


def _parse_suffix(suffix: str) -> int:
    """Integer value of a count suffix; anything unparseable counts as 0."""
    if not suffix.isdecimal():
        return 0
    try:
        return int(suffix)
    except ValueError:
        return 0


class MarkerCodec:
    """Badge notation for the marker field."""

    @staticmethod
    def decode_counts(field: str | None) -> dict[str, int]:
        """Badge counts of a marker field, e.g. ``"X@9,X@2,red"`` -> ``{"X": 11, "red": 1}``.

        A suffix that is not an integer yields no instances.
        """
        counts: dict[str, int] = {}
        for token in split_field(field):
            if "@" not in token:
                _add_count(counts, token, 1)
                continue
            name, _, suffix = token.rpartition("@")
            _add_count(counts, name, _parse_suffix(suffix))
        return counts

    @staticmethod
    def decode(field: str | None) -> list[str]:
        """One entry per badge instance."""
        return expand_counts(MarkerCodec.decode_counts(field))

    @staticmethod
    def encode(counts: Mapping[str, int]) -> str:
        """Render counts as badges, e.g. ``{"X": 11}`` -> ``"X@9,X@2"``."""
        tokens: list[str] = []
        for name, count in counts.items():
            if count == 1:
                tokens.append(name)
                continue
            remaining = count
            while remaining > 0:
                chunk = min(remaining, MAX_BADGE_COUNT)
                tokens.append(f"{name}@{chunk}")
                remaining -= chunk
        return ",".join(tokens)


class TooltipCodec:
    """``Name xN`` notation for the tooltip field."""

    @staticmethod
    def decode_counts(field: str | None) -> dict[str, int]:
        """Counts keyed by lowercased condition name."""
        counts: dict[str, int] = {}
        for token in split_field(field):
            match = _TOOLTIP_COUNT.match(token)
            if match:
                _add_count(counts, match.group("name").strip().lower(), _parse_suffix(match.group("count")))
            else:
                _add_count(counts, token.lower(), 1)
        return counts

    @staticmethod
    def decode(field: str | None) -> list[str]:
        """One lowercased entry per condition instance."""
        return expand_counts(TooltipCodec.decode_counts(field))

    @staticmethod
    def encode(counts: Mapping[str, int], resolver: NameResolver | None = None) -> str:
        """Render counts sorted by name, using catalog casing where known."""
        entries: list[tuple[str, int]] = []
        for name, count in counts.items():
            if count <= 0:
                continue
            display = resolver.canonical_name(name) if resolver is not None else capitalize_first(name)
            entries.append((display, count))

        entries.sort(key=lambda entry: sort_key(entry[0]))
        return ", ".join(
            f"{display} x{count}" if count > 1 else display
            for display, count in entries
        )
