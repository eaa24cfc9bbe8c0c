"""Tests for commands.py: chat command parsing and validation."""

import pytest

from condition_tracker.commands import (
    ChatInput,
    Verb,
    is_tracker_command,
    parse_command,
    parse_update_specs,
)
from condition_tracker.errors import ValidationError
from condition_tracker.models import ALL, CommandKind, UpdateSpec


def chat(content: str, selected: list[str] | None = None, **kwargs) -> ChatInput:
    return ChatInput(content=content, selected=selected or [], **kwargs)


class TestPrefix:

    @pytest.mark.parametrize("content", ["!ct add|x", "!CT conditions", "  !ct"])
    def test_recognized(self, content: str) -> None:
        assert is_tracker_command(content)

    @pytest.mark.parametrize("content", ["!cthelp", "hello !ct", "!roll 1d20"])
    def test_not_recognized(self, content: str) -> None:
        assert not is_tracker_command(content)


class TestParseUpdateSpecs:

    def test_name_only(self) -> None:
        assert parse_update_specs("blinded", CommandKind.ADD) == [UpdateSpec(name="blinded")]

    def test_amount_and_limit(self) -> None:
        specs = parse_update_specs("blinded-2-5, prone - 3", CommandKind.ADD)
        assert specs == [
            UpdateSpec(name="blinded", change_amount=2, limit=5),
            UpdateSpec(name="prone", change_amount=3),
        ]

    def test_limit_without_amount(self) -> None:
        assert parse_update_specs("blinded--5", CommandKind.ADD) == [
            UpdateSpec(name="blinded", change_amount=1, limit=5)
        ]

    def test_remove_all(self) -> None:
        specs = parse_update_specs("blinded-ALL", CommandKind.REMOVE)
        assert specs[0].change_amount == ALL

    def test_all_only_with_remove(self) -> None:
        with pytest.raises(ValidationError, match="remove"):
            parse_update_specs("blinded-all", CommandKind.ADD)

    @pytest.mark.parametrize("options", ["blinded-two", "blinded-1-x", "blinded-1.5", "blinded-²", "blinded-1-²"])
    def test_non_numeric(self, options: str) -> None:
        with pytest.raises(ValidationError):
            parse_update_specs(options, CommandKind.ADD)

    def test_too_many_parts(self) -> None:
        with pytest.raises(ValidationError, match="too many"):
            parse_update_specs("a-1-2-3", CommandKind.ADD)

    def test_blank_name(self) -> None:
        with pytest.raises(ValidationError, match="missing"):
            parse_update_specs("-2", CommandKind.ADD)


class TestParseCommand:

    def test_condition_command(self) -> None:
        command = parse_command(chat("!ct add|blinded-2", ["tok1"]))
        assert command.verb == Verb.ADD
        assert command.command_kind == CommandKind.ADD
        assert command.specs == [UpdateSpec(name="blinded", change_amount=2)]
        assert command.recipient == "gm"

    def test_remove_without_options_clears(self) -> None:
        command = parse_command(chat("!ct remove", ["tok1"]))
        assert command.specs is None

    def test_unknown_verb(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            parse_command(chat("!ct explode|now"))
        assert "<code>explode</code>" in exc_info.value.message
        assert "<code>toggle</code>" in exc_info.value.message
        assert exc_info.value.details == {"verb": "explode"}

    def test_missing_verb(self) -> None:
        with pytest.raises(ValidationError):
            parse_command(chat("!ct"))

    @pytest.mark.parametrize("verb", ["add", "remove", "set", "toggle"])
    def test_condition_verbs_need_selection(self, verb: str) -> None:
        with pytest.raises(ValidationError, match="select at least one token"):
            parse_command(chat(f"!ct {verb}|blinded"))

    @pytest.mark.parametrize("verb", ["add", "set", "toggle"])
    def test_options_required(self, verb: str) -> None:
        with pytest.raises(ValidationError, match="at least one option"):
            parse_command(chat(f"!ct {verb}", ["tok1"]))

    def test_only_separators(self) -> None:
        with pytest.raises(ValidationError, match="at least one condition"):
            parse_command(chat("!ct add| , ,", ["tok1"]))

    def test_player_errors_go_to_player(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            parse_command(chat("!ct add|blinded-x", ["tok1"], who="Alice", is_gm=False))
        assert exc_info.value.recipient == "Alice"

    @pytest.mark.parametrize("options", ["true", "false", None])
    def test_tooltip_values(self, options: str | None) -> None:
        content = "!ct tooltip" + (f"|{options}" if options else "")
        assert parse_command(chat(content)).options == options

    def test_tooltip_invalid(self) -> None:
        with pytest.raises(ValidationError, match="invalid value"):
            parse_command(chat("!ct tooltip|maybe"))

    def test_config_tab(self) -> None:
        assert parse_command(chat("!ct config|conditions")).options == "conditions"

    @pytest.mark.parametrize("content", ["!ct config", "!ct config|settings"])
    def test_config_invalid_tab(self, content: str) -> None:
        with pytest.raises(ValidationError):
            parse_command(chat(content))

    def test_conditions_and_reset_take_optional_options(self) -> None:
        assert parse_command(chat("!ct conditions")).options is None
        assert parse_command(chat("!ct reset|confirm")).options == "confirm"
