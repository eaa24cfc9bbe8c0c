"""
Condition catalog and name allocation.

The catalog is a thin view over ``TrackerState.conditions``: it never owns a
copy of the definitions, so every component holding the same TrackerState sees
the same catalog. Definitions are always kept sorted case-insensitively, with
embedded numbers compared numerically ("Condition 2" before "Condition 10").
"""

from __future__ import annotations

import logging
import re
from copy import deepcopy
from typing import Iterable, Iterator

from .errors import CatalogError
from .models import ConditionDefinition, TrackerConfig, TrackerState

logger = logging.getLogger(__name__)

_DIGITS = re.compile(r"(\d+)")


def sort_key(name: str) -> tuple:
    """Case-insensitive natural sort key for condition and marker names."""
    return tuple(
        (0, int(part), "") if part.isdigit() else (1, 0, part)
        for part in _DIGITS.split(name.casefold())
        if part
    )


class NameAllocator:
    """Hands out monotonically increasing suffixes for generated names."""

    def __init__(self, start: int = 1) -> None:
        self._next = start

    @property
    def next_value(self) -> int:
        return self._next

    def allocate(self) -> int:
        value = self._next
        self._next = value + 1
        return value

    def unique_name(self, base: str, taken: Iterable[str]) -> str:
        """Append allocated suffixes to ``base`` until it clashes with nothing in ``taken``.

        ``taken`` is compared ignoring case.
        """
        lowered = {name.lower() for name in taken}
        while True:
            candidate = f"{base} {self.allocate()}".strip()
            if candidate.lower() not in lowered:
                return candidate


class StateNameAllocator(NameAllocator):
    """NameAllocator whose counter lives in persisted tracker config."""

    def __init__(self, config: TrackerConfig) -> None:
        self._config = config

    @property
    def next_value(self) -> int:
        return self._config.next_unique_id

    def allocate(self) -> int:
        value = self._config.next_unique_id
        self._config.next_unique_id = value + 1
        return value


class ConditionCatalog:
    """Sorted, case-insensitive registry of condition definitions."""

    def __init__(self, state: TrackerState) -> None:
        self._state = state

    def __iter__(self) -> Iterator[ConditionDefinition]:
        return iter(self._state.conditions)

    def __len__(self) -> int:
        return len(self._state.conditions)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.find(name) is not None

    @property
    def definitions(self) -> list[ConditionDefinition]:
        return list(self._state.conditions)

    def names(self) -> list[str]:
        return [definition.name for definition in self._state.conditions]

    def find(self, name: str) -> ConditionDefinition | None:
        """Look up a definition by name, ignoring case."""
        key = name.strip().lower()
        for definition in self._state.conditions:
            if definition.key == key:
                return definition
        return None

    def canonical_name(self, name: str) -> str:
        """Catalog casing for ``name``, or ``name`` with its first letter capitalized."""
        definition = self.find(name)
        if definition is not None:
            return definition.name
        return name[:1].upper() + name[1:]

    def marker_for(self, name: str) -> str:
        """The marker linked to a condition, or an empty string."""
        definition = self.find(name)
        return definition.marker_ref if definition is not None else ""

    def replace(self, definitions: Iterable[ConditionDefinition]) -> list[ConditionDefinition]:
        """Replace the whole catalog with ``definitions``.

        Raises:
            CatalogError: If two definitions share a name ignoring case.
        """
        incoming = list(definitions)
        seen: dict[str, str] = {}
        for definition in incoming:
            if definition.key in seen:
                raise CatalogError(
                    f"Duplicate condition name '{definition.name}' (already defined as '{seen[definition.key]}')",
                    details={"name": definition.name},
                )
            seen[definition.key] = definition.name

        self._state.conditions = sorted(incoming, key=lambda d: sort_key(d.name))
        logger.info("Condition catalog replaced (%d definitions)", len(self._state.conditions))
        return self.definitions

    def reset(self, defaults: Iterable[ConditionDefinition]) -> list[ConditionDefinition]:
        """Replace the catalog with deep copies of ``defaults``."""
        return self.replace(deepcopy(list(defaults)))
