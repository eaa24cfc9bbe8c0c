"""Config table sync: keeps the condition catalog and the config document in step.

Writing the corrected table back to the document fires the same change
notification that triggered the parse. The loop is broken by comparison, not
by suppression: the last table written is remembered in tracker state, and a
notification whose table matches it is not parsed again.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Protocol

from ..catalog import ConditionCatalog, NameAllocator, StateNameAllocator
from ..errors import SyncFailure
from ..models import ConfigTab, MarkerDefinition, TrackerState
from .models import SyncAction, SyncResult
from .renderer import render_document, render_header
from .table_codec import HtmlTableCodec, TableCodec
from .validation import validate_rows

logger = logging.getLogger(__name__)

# (message, recipient, kind) -- kind is one of "success", "warn", "error", "generic"
Notifier = Callable[[str, str | None, str], None]


class TextDocument(Protocol):
    """A rich text field read and written as a whole."""

    def get(self) -> str: ...

    def set(self, text: str) -> None: ...


def _log_notice(message: str, recipient: str | None, kind: str) -> None:
    logger.info("[%s -> %s] %s", kind, recipient or "all", message)


class ConfigTableSync:
    """Bidirectional sync between the catalog and the config document.

    Only the Conditions tab is editable. While the Instructions tab is shown,
    any edit to the document is reverted.
    """

    def __init__(
        self,
        state: TrackerState,
        document: TextDocument,
        *,
        codec: TableCodec | None = None,
        allocator: NameAllocator | None = None,
        markers: Callable[[], Iterable[MarkerDefinition]] | None = None,
        notify: Notifier | None = None,
    ) -> None:
        self.state = state
        self.document = document
        self.catalog = ConditionCatalog(state)
        self.codec: TableCodec = codec or HtmlTableCodec()
        self.allocator = allocator or StateNameAllocator(state.config)
        self._markers = markers
        self._notify = notify or _log_notice

    @property
    def current_tab(self) -> ConfigTab | None:
        return self.state.config.current_tab

    # --- Catalog -> document ---

    def refresh_content(self) -> str:
        """Re-serialize the catalog and remember it as the current table."""
        content = self.codec.serialize(self.catalog.definitions)
        self.state.config.conditions_content = content
        return content

    def render(self, tab: ConfigTab) -> str:
        if not self.state.config.conditions_content:
            self.refresh_content()
        return render_document(tab, self.state.config.conditions_content)

    def switch_tab(self, tab: ConfigTab | str) -> None:
        """Show ``tab`` in the config document."""
        tab = ConfigTab(tab)
        self.state.config.current_tab = tab
        logger.info("Config document switched to %s tab", tab.value)
        self.document.set(self.render(tab))

    # --- Document -> catalog ---

    def handle_change(self) -> SyncResult:
        """React to the config document having been written.

        This is the change-notification handler; it is safe to call for writes
        it made itself.
        """
        tab = self.current_tab
        if tab == ConfigTab.CONDITIONS:
            try:
                return self.sync_from_document()
            except SyncFailure as e:
                logger.warning("Conditions table sync failed: %s", e)
                self._notify(e.message, "gm", "error")
                return SyncResult(action=SyncAction.FAILED, error=e.message)

        if tab == ConfigTab.INSTRUCTIONS:
            expected = self.render(ConfigTab.INSTRUCTIONS)
            if self.document.get() != expected:
                logger.info("Reverting edit to the read-only instructions tab")
                self.document.set(expected)
                return SyncResult(action=SyncAction.REVERTED)
            return SyncResult(action=SyncAction.UNCHANGED)

        return SyncResult(action=SyncAction.IGNORED)

    def sync_from_document(self) -> SyncResult:
        """Parse the conditions table in the document into the catalog.

        Raises:
            SyncFailure: If the table is missing or unreadable. The catalog is
                left untouched.
        """
        text = self.document.get() or ""
        table = self.codec.extract(text)
        header = render_header(ConfigTab.CONDITIONS)
        expected = header + table

        if table == self.state.config.conditions_content:
            if text != expected:
                # Only the tab header was damaged.
                self.document.set(expected)
                return SyncResult(action=SyncAction.HEADER_RESTORED)
            return SyncResult(action=SyncAction.UNCHANGED)

        rows = self.codec.parse(table)
        markers = self._markers() if self._markers is not None else None
        validated = validate_rows(rows, self.allocator, markers)

        for correction in validated.corrections:
            self._notify(correction.message, "gm", "warn")
        for marker_ref in validated.unknown_markers:
            logger.info("Condition marker %r does not match any known marker", marker_ref)

        self.catalog.replace(validated.definitions)
        # Remember the new table before writing so the notification fired by
        # the write below sees a match and stops.
        content = self.refresh_content()

        if content == table and text == expected:
            action = SyncAction.CATALOG_UPDATED
        else:
            self.document.set(header + content)
            action = SyncAction.REWRITTEN

        logger.info("Conditions table synced (%s, %d conditions)", action.value, len(self.catalog))
        return SyncResult(
            action=action,
            corrections=validated.corrections,
            unknown_markers=validated.unknown_markers,
        )
