"""
Instance update engine.

Applies add / remove / set / toggle commands to tokens. The tooltip field is
the source of the current condition counts; the marker field carries the
projection of those counts onto linked markers. Both fields are re-encoded
from the same count mapping on every update, so they never drift apart.

The engine holds no state of its own beyond a reference to the catalog.
"""

from __future__ import annotations

import logging
from typing import Iterable, Mapping, Protocol

from pydantic import BaseModel, Field

from ..catalog import ConditionCatalog
from ..models import ALL, ChangeAmount, CommandKind, UpdateSpec
from .codecs import MarkerCodec, TooltipCodec

logger = logging.getLogger(__name__)

MARKER_FIELD = "statusmarkers"
TOOLTIP_FIELD = "tooltip"


class EntityRecord(Protocol):
    """Anything exposing the two condition fields of a token."""

    @property
    def id(self) -> str: ...

    def get(self, field: str) -> str: ...

    def set(self, field: str, value: str) -> None: ...


class TokenUpdate(BaseModel):
    """Outcome of one command on one token."""
    token_id: str
    command: CommandKind
    before: dict[str, int] = Field(default_factory=dict)
    after: dict[str, int] = Field(default_factory=dict)
    statusmarkers: str = ""
    tooltip: str = ""

    @property
    def changed(self) -> bool:
        return _nonzero(self.before) != _nonzero(self.after)


def _nonzero(counts: Mapping[str, int]) -> dict[str, int]:
    return {name: count for name, count in counts.items() if count > 0}


def calculate_delta(
    command: CommandKind,
    change_amount: ChangeAmount,
    limit: int | None,
    current: int,
) -> int:
    """How much ``current`` changes for a single condition.

    ``limit`` caps ``add`` from above and ``remove`` from below. A count that
    is already at or past the limit is left alone.

    Raises:
        ValueError: If ``"all"`` is used with ``add``.
    """
    command = CommandKind(command)

    if command == CommandKind.TOGGLE:
        return -current if current != 0 else 1

    if change_amount == ALL:
        if command in (CommandKind.REMOVE, CommandKind.SET):
            return -current
        raise ValueError(f"'{ALL}' is not a valid amount for {command.value}")

    amount = int(change_amount)

    if command == CommandKind.SET:
        return amount - current

    if limit is None:
        return amount if command == CommandKind.ADD else -amount

    if (
        current == limit
        or (command == CommandKind.ADD and current > limit)
        or (command == CommandKind.REMOVE and current < limit)
    ):
        return 0

    if command == CommandKind.ADD:
        return min(amount, limit - current)
    return max(-amount, limit - current)


def compute_counts(
    command: CommandKind,
    specs: Iterable[UpdateSpec],
    current: Mapping[str, int],
) -> dict[str, int]:
    """Apply every spec to a snapshot of ``current`` and return the new counts.

    All deltas are computed from the same snapshot. Conditions not named keep
    their count; named conditions missing from ``current`` start at zero. When
    a condition is named twice the first spec wins.
    """
    snapshot = {name.lower(): count for name, count in current.items()}
    updated = dict(snapshot)

    seen: set[str] = set()
    for spec in specs:
        if spec.key in seen:
            continue
        seen.add(spec.key)
        before = snapshot.get(spec.key, 0)
        delta = calculate_delta(command, spec.change_amount, spec.limit, before)
        updated[spec.key] = max(before + delta, 0)

    return updated


class InstanceUpdateEngine:
    """Reads, updates and writes condition instances on tokens."""

    def __init__(self, catalog: ConditionCatalog) -> None:
        self.catalog = catalog

    def read_counts(self, entity: EntityRecord) -> dict[str, int]:
        """Current condition counts on a token, keyed by lowercased name."""
        return TooltipCodec.decode_counts(entity.get(TOOLTIP_FIELD))

    @staticmethod
    def clear_all_specs(current: Mapping[str, int]) -> list[UpdateSpec]:
        """Specs removing every condition present in ``current``."""
        return [
            UpdateSpec(name=name, change_amount=ALL)
            for name, count in current.items()
            if count > 0
        ]

    def project_markers(
        self,
        marker_field: str,
        counts: Mapping[str, int],
        specs: Iterable[UpdateSpec],
    ) -> dict[str, int] | None:
        """Marker counts after an update, or None when no linked marker is involved.

        Markers linked to a named condition are recomputed as the total count of
        every condition on the token linked to that marker. Other badges are kept.
        """
        touched = {self.catalog.marker_for(spec.name) for spec in specs} - {""}
        if not touched:
            return None

        marker_counts = MarkerCodec.decode_counts(marker_field)
        for ref in touched:
            marker_counts[ref] = sum(
                count for name, count in counts.items()
                if self.catalog.marker_for(name) == ref
            )
        return marker_counts

    def update_entity(
        self,
        command: CommandKind,
        specs: list[UpdateSpec] | None,
        entity: EntityRecord,
    ) -> TokenUpdate:
        """Apply one command to one token and write both fields.

        ``specs=None`` with ``remove`` or ``set`` clears every condition on the token.
        """
        command = CommandKind(command)
        current = self.read_counts(entity)

        if specs is None:
            if command not in (CommandKind.REMOVE, CommandKind.SET):
                raise ValueError(f"{command.value} requires at least one condition")
            specs = self.clear_all_specs(current)

        updated = compute_counts(command, specs, current)

        # Encode both fields before writing either one.
        tooltip = TooltipCodec.encode(updated, self.catalog)
        marker_counts = self.project_markers(entity.get(MARKER_FIELD), updated, specs)
        statusmarkers = (
            MarkerCodec.encode(marker_counts)
            if marker_counts is not None
            else entity.get(MARKER_FIELD) or ""
        )

        if marker_counts is not None:
            entity.set(MARKER_FIELD, statusmarkers)
        entity.set(TOOLTIP_FIELD, tooltip)

        logger.debug(
            "%s on token %s: %s -> %s",
            command.value, entity.id, _nonzero(current), _nonzero(updated),
        )
        return TokenUpdate(
            token_id=entity.id,
            command=command,
            before=_nonzero(current),
            after=_nonzero(updated),
            statusmarkers=statusmarkers,
            tooltip=tooltip,
        )

    def apply(
        self,
        command: CommandKind,
        specs: list[UpdateSpec] | None,
        entities: Iterable[EntityRecord],
    ) -> list[TokenUpdate]:
        """Apply a command to each token in turn.

        Tokens are independent: an error on one token leaves the tokens already
        updated as they are.
        """
        return [self.update_entity(command, specs, entity) for entity in entities]
