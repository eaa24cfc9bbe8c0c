"""Tests for the MCP tool logic helpers in main.py."""

from pathlib import Path

import pytest

from condition_tracker import main
from condition_tracker.main import (
    _add_token_logic,
    _chat_command_logic,
    _edit_config_logic,
    _list_conditions_logic,
    _list_tokens_logic,
    _token_conditions_logic,
    _update_conditions_logic,
)
from condition_tracker.errors import ValidationError
from condition_tracker.host import Campaign
from condition_tracker.models import ConfigTab, TrackerState
from condition_tracker.storage import StateStorage
from condition_tracker.tracker import ConditionTracker


@pytest.fixture
def tracker(state: TrackerState, campaign: Campaign) -> ConditionTracker:
    t = ConditionTracker(state, campaign)
    t.install()
    return t


class TestTokenTools:

    def test_add_and_list(self, tracker: ConditionTracker) -> None:
        assert _list_tokens_logic(tracker) == "No tokens on the tabletop."
        result = _add_token_logic(tracker, "Goblin")
        assert "Goblin" in result
        assert "Goblin" in _list_tokens_logic(tracker)
        assert "no conditions" in _list_tokens_logic(tracker)

    def test_update_conditions(self, tracker: ConditionTracker) -> None:
        token = tracker.campaign.add_token("Goblin")
        result = _update_conditions_logic(tracker, "add", "blinded-2", [token.id])
        assert "Goblin: Blinded x2" in result
        assert _token_conditions_logic(tracker, "Goblin") == "- Blinded x2"

        _update_conditions_logic(tracker, "remove", None, [token.id])
        assert _token_conditions_logic(tracker, token.id) == "No conditions are currently applied to " + token.id + "."

    def test_update_rejects_bad_options(self, tracker: ConditionTracker) -> None:
        token = tracker.campaign.add_token("Goblin")
        with pytest.raises(ValidationError):
            _update_conditions_logic(tracker, "add", "blinded-all", [token.id])

    def test_add_requires_conditions(self, tracker: ConditionTracker) -> None:
        token = tracker.campaign.add_token("Goblin")
        with pytest.raises(ValueError):
            _update_conditions_logic(tracker, "add", None, [token.id])


class TestChatTool:

    def test_command_replies(self, tracker: ConditionTracker) -> None:
        result = _chat_command_logic(tracker, "!ct tooltip")
        assert result == "[generic -> gm] Token tooltips are currently enabled."

    def test_silent_command(self, tracker: ConditionTracker) -> None:
        token = tracker.campaign.add_token("Goblin")
        assert _chat_command_logic(tracker, "!ct add|prone", [token.id]) == "✅ add done."

    def test_error_reply(self, tracker: ConditionTracker) -> None:
        result = _chat_command_logic(tracker, "!ct add|prone")
        assert result.startswith("[error -> gm]")

    def test_not_a_command(self, tracker: ConditionTracker) -> None:
        assert _chat_command_logic(tracker, "hello").startswith("❌")


class TestConfigTools:

    def test_list_conditions(self, tracker: ConditionTracker) -> None:
        result = _list_conditions_logic(tracker)
        assert result.startswith("**Conditions (5):**")
        assert "- Hexed [Hex::1234]" in result
        assert result.endswith("- Prone")

    def test_edit_config(self, tracker: ConditionTracker) -> None:
        tracker.sync.switch_tab(ConfigTab.CONDITIONS)
        text = tracker.campaign.config_document.get().replace("<td>Deafened</td>", "<td>blinded</td>")
        result = _edit_config_logic(tracker, text)
        assert result.startswith("📄 Config document updated (conditions).")
        assert "[warn -> gm]" in result


class TestGetTracker:

    def test_loads_and_saves(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setattr(main, "settings", main.settings.model_copy(update={"storage_dir": tmp_path}))
        monkeypatch.setattr(main, "_tracker", None)
        monkeypatch.setattr(main, "_storage", None)

        tracker = main.get_tracker()
        assert main.get_tracker() is tracker
        assert (tmp_path / "state.json").exists()
        assert StateStorage(tmp_path).load_state() == tracker.state
