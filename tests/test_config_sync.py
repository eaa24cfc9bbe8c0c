"""Tests for config_sheet/sync.py: ConfigTableSync and the re-entrant write loop."""

from unittest.mock import MagicMock

import pytest

from condition_tracker.config_sheet import ConfigTableSync, SyncAction, SyncResult, YamlTableCodec
from condition_tracker.config_sheet.renderer import render_document, render_header
from condition_tracker.defaults import BUILTIN_MARKERS
from condition_tracker.host import ConfigDocument
from condition_tracker.models import ConfigTab, TrackerState


@pytest.fixture
def document() -> ConfigDocument:
    return ConfigDocument(name="ConditionTracker Config")


@pytest.fixture
def notify() -> MagicMock:
    return MagicMock()


@pytest.fixture
def results() -> list[SyncResult]:
    """Sync results in completion order (re-entrant calls complete first)."""
    return []


@pytest.fixture
def sync(state: TrackerState, document: ConfigDocument, notify: MagicMock, results: list) -> ConfigTableSync:
    s = ConfigTableSync(state, document, markers=lambda: BUILTIN_MARKERS, notify=notify)
    document.subscribe(lambda doc: results.append(s.handle_change()))
    return s


def edit_table(sync: ConfigTableSync, old: str, new: str) -> str:
    table = sync.state.config.conditions_content
    assert old in table
    return render_header(ConfigTab.CONDITIONS) + table.replace(old, new)


class TestTabs:

    def test_no_tab_ignores_changes(self, sync: ConfigTableSync, document: ConfigDocument, results: list) -> None:
        document.set("anything")
        assert [r.action for r in results] == [SyncAction.IGNORED]

    def test_switch_to_conditions_settles(self, sync: ConfigTableSync, document: ConfigDocument, results: list) -> None:
        sync.switch_tab("conditions")
        assert sync.current_tab == ConfigTab.CONDITIONS
        assert document.get() == render_document(ConfigTab.CONDITIONS, sync.state.config.conditions_content)
        assert "<td>Blinded</td>" in document.get()
        assert [r.action for r in results] == [SyncAction.UNCHANGED]

    def test_instructions_edits_are_reverted(
        self, sync: ConfigTableSync, document: ConfigDocument, results: list
    ) -> None:
        sync.switch_tab(ConfigTab.INSTRUCTIONS)
        rendered = document.get()
        results.clear()

        document.set(rendered + "<p>scribble</p>")

        assert document.get() == rendered
        assert [r.action for r in results] == [SyncAction.UNCHANGED, SyncAction.REVERTED]
        assert results[-1].written


class TestConditionsTab:

    @pytest.fixture(autouse=True)
    def on_conditions_tab(self, sync: ConfigTableSync, results: list) -> None:
        sync.switch_tab(ConfigTab.CONDITIONS)
        results.clear()

    def test_rename_updates_catalog_without_rewrite(
        self, sync: ConfigTableSync, document: ConfigDocument, results: list, notify: MagicMock
    ) -> None:
        edited = edit_table(sync, "<td>Prone</td>", "<td>Lying</td>")
        document.set(edited)

        assert [r.action for r in results] == [SyncAction.CATALOG_UPDATED]
        assert document.get() == edited
        assert "lying" in sync.catalog
        assert "prone" not in sync.catalog
        notify.assert_not_called()

    def test_duplicate_is_corrected_and_written_once(
        self, sync: ConfigTableSync, document: ConfigDocument, results: list, notify: MagicMock
    ) -> None:
        document.set(edit_table(sync, "<td>Deafened</td>", "<td>blinded</td>"))

        assert [r.action for r in results] == [SyncAction.UNCHANGED, SyncAction.REWRITTEN]
        assert sync.catalog.names()[:2] == ["Blinded", "blinded 1"]
        assert "<td>blinded 1</td>" in document.get()
        assert document.get() == render_header(ConfigTab.CONDITIONS) + sync.state.config.conditions_content

        notify.assert_called_once()
        message, recipient, kind = notify.call_args.args
        assert recipient == "gm" and kind == "warn"
        assert "blinded 1" in message
        assert results[-1].corrections[0].corrected == "blinded 1"

    def test_reordered_rows_are_sorted_back(
        self, sync: ConfigTableSync, document: ConfigDocument, results: list
    ) -> None:
        document.set(edit_table(sync, "<td>Blinded</td>", "<td>Zapped</td>"))

        assert results[-1].action == SyncAction.REWRITTEN
        assert sync.catalog.names()[-1] == "Zapped"
        assert document.get().rfind("Zapped") > document.get().rfind("Prone")

    def test_damaged_header_is_restored(
        self, sync: ConfigTableSync, document: ConfigDocument, results: list
    ) -> None:
        names = sync.catalog.names()
        document.set("<h1>oops</h1>" + sync.state.config.conditions_content)

        assert [r.action for r in results] == [SyncAction.UNCHANGED, SyncAction.HEADER_RESTORED]
        assert document.get().startswith(render_header(ConfigTab.CONDITIONS))
        assert sync.catalog.names() == names

    def test_missing_table_fails_without_touching_catalog(
        self, sync: ConfigTableSync, document: ConfigDocument, results: list, notify: MagicMock
    ) -> None:
        names = sync.catalog.names()
        document.set("<h1>deleted everything</h1>")

        assert [r.action for r in results] == [SyncAction.FAILED]
        assert sync.catalog.names() == names
        message, recipient, kind = notify.call_args.args
        assert (recipient, kind) == ("gm", "error")
        assert "Unable to find the conditions table" in message

    def test_new_row_with_blank_name(
        self, sync: ConfigTableSync, document: ConfigDocument, results: list
    ) -> None:
        document.set(edit_table(sync, "</tbody>", "<tr><td></td><td></td><td></td></tr></tbody>"))

        assert results[-1].action == SyncAction.REWRITTEN
        assert "Condition 1" in sync.catalog.names()
        assert sync.state.config.next_unique_id == 2

    def test_unknown_marker_reported(
        self, sync: ConfigTableSync, document: ConfigDocument, results: list
    ) -> None:
        document.set(edit_table(sync, "<td>yellow</td>", "<td>sparkles</td>"))

        assert results[-1].unknown_markers == ["sparkles", "Hex::1234"]
        assert sync.catalog.marker_for("exhaustion") == "sparkles"


class TestYamlSync:

    def test_yaml_block_edit(self, state: TrackerState, document: ConfigDocument, notify: MagicMock) -> None:
        sync = ConfigTableSync(state, document, codec=YamlTableCodec(), notify=notify)
        document.subscribe(lambda doc: sync.handle_change())
        sync.switch_tab(ConfigTab.CONDITIONS)

        document.set(document.get().replace("name: Prone", "name: Lying"))

        assert "lying" in sync.catalog
        assert "<pre>" in document.get()
