"""
Chat command parsing.

Syntax: ``!ct <verb>|<options>``. For the condition verbs the options are a
comma separated list of ``name[-amount[-limit]]``:

    !ct add|blinded-2-5      add 2 blinded, to a maximum of 5
    !ct add|blinded--5       add 1 blinded, to a maximum of 5
    !ct remove|blinded-all   remove every blinded instance
    !ct set|exhaustion-3     set exhaustion to exactly 3
"""

import re
from enum import Enum

from pydantic import BaseModel, Field

from .errors import ValidationError
from .models import ALL, CommandKind, ConfigTab, UpdateSpec
from .tracking.codecs import split_field


_PREFIX = re.compile(r"^!ct(\s|$)", re.IGNORECASE)
_SPEC_SEPARATOR = re.compile(r"\s*-\s*")


class Verb(str, Enum):
    ADD = "add"
    REMOVE = "remove"
    SET = "set"
    TOGGLE = "toggle"
    CONDITIONS = "conditions"
    CONFIG = "config"
    RESET = "reset"
    TOOLTIP = "tooltip"


CONDITION_VERBS = {Verb.ADD, Verb.REMOVE, Verb.SET, Verb.TOGGLE}
# Verbs that may be used without any options.
OPTIONAL_OPTION_VERBS = {Verb.REMOVE, Verb.CONDITIONS, Verb.RESET, Verb.TOOLTIP}


class ChatInput(BaseModel):
    """A chat message addressed to the tracker."""
    content: str
    who: str = "GM"
    is_gm: bool = True
    selected: list[str] = Field(default_factory=list, description="Ids of the selected tokens")


class ParsedCommand(BaseModel):
    verb: Verb
    options: str | None = None
    specs: list[UpdateSpec] | None = None
    recipient: str = "gm"

    @property
    def command_kind(self) -> CommandKind:
        return CommandKind(self.verb.value)


def is_tracker_command(content: str) -> bool:
    return bool(_PREFIX.match(content.strip()))


def _parse_count(raw: str, what: str, item: str) -> int:
    if raw.isdecimal():
        try:
            return int(raw)
        except ValueError:
            pass
    raise ValidationError(
        f"<code>{raw}</code> is not a valid {what} in <code>{item}</code>. Use a whole number."
    )


def parse_update_specs(options: str, command: CommandKind) -> list[UpdateSpec]:
    """Parse ``name[-amount[-limit]]`` items for a condition command.

    Raises:
        ValidationError: On a blank name, a non-numeric amount or limit, too many
            parts, or ``all`` used with anything but remove.
    """
    command = CommandKind(command)
    specs: list[UpdateSpec] = []

    for item in split_field(options):
        parts = _SPEC_SEPARATOR.split(item)
        if len(parts) > 3:
            raise ValidationError(
                f"<code>{item}</code> has too many hyphenated values. Use at most an amount and a limit."
            )
        name = parts[0].strip()
        if not name:
            raise ValidationError(f"A condition name is missing in <code>{item}</code>.")

        amount_raw = parts[1].strip() if len(parts) > 1 else ""
        limit_raw = parts[2].strip() if len(parts) > 2 else ""

        if amount_raw.lower() == ALL:
            if command != CommandKind.REMOVE:
                raise ValidationError(
                    f"<code>{ALL}</code> can only be used with the <code>remove</code> command."
                )
            amount: int | str = ALL
        elif amount_raw:
            amount = _parse_count(amount_raw, "amount", item)
        else:
            amount = 1

        limit = _parse_count(limit_raw, "limit", item) if limit_raw else None
        specs.append(UpdateSpec(name=name, change_amount=amount, limit=limit))

    return specs


def parse_command(message: ChatInput) -> ParsedCommand:
    """Split and validate a chat command.

    Raises:
        ValidationError: If the verb is unknown, required tokens or options are
            missing, or the options are malformed.
    """
    content = message.content.strip()
    prefix, _, options = content.partition("|")
    words = prefix.split()
    verb_raw = words[1].lower() if len(words) > 1 else ""
    options = options.strip() or None
    recipient = "gm" if message.is_gm else message.who

    try:
        verb = Verb(verb_raw)
    except ValueError:
        raise ValidationError(
            f"Command <code>{verb_raw}</code> not found. Valid commands: "
            + ", ".join(f"<code>{v.value}</code>" for v in Verb) + ".",
            recipient=recipient,
            details={"verb": verb_raw},
        ) from None

    if verb in CONDITION_VERBS and not message.selected:
        raise ValidationError(
            f"You must select at least one token before using the <code>{verb.value}</code> command.",
            recipient=recipient,
        )

    if verb not in OPTIONAL_OPTION_VERBS and not options:
        raise ValidationError(
            f"You must pass in at least one option when using the <code>{verb.value}</code> command.",
            recipient=recipient,
        )

    if verb == Verb.TOOLTIP and options and options not in ("true", "false"):
        raise ValidationError(
            f"{options} is an invalid value. When calling the <code>{verb.value}</code> command, "
            "you must pass either a value of <code>true</code> or <code>false</code>.",
            recipient=recipient,
        )

    if verb == Verb.CONFIG and options not in {tab.value for tab in ConfigTab}:
        raise ValidationError(
            f"<code>{options}</code> is not a config tab. Use <code>instructions</code> or <code>conditions</code>.",
            recipient=recipient,
        )

    specs = None
    if verb in CONDITION_VERBS and options:
        try:
            specs = parse_update_specs(options, CommandKind(verb.value))
        except ValidationError as e:
            e.recipient = recipient
            raise
        if not specs:
            if verb != Verb.REMOVE:
                raise ValidationError(
                    f"You must pass in at least one condition when using the <code>{verb.value}</code> command.",
                    recipient=recipient,
                )
            specs = None

    return ParsedCommand(verb=verb, options=options, specs=specs, recipient=recipient)
