"""
Condition Tracker MCP Server
Tracks condition instances on tabletop tokens and keeps an editable
conditions table in the campaign config document.
"""

import logging
from typing import Annotated, Literal

from fastmcp import FastMCP
from pydantic import Field

from .commands import ChatInput, parse_update_specs
from .errors import TrackerError
from .host import ChatMessage
from .models import CommandKind, ConfigTab
from .settings import load_settings
from .storage import StateStorage
from .tracker import ConditionTracker, install_state

logger = logging.getLogger("condition-tracker")

settings = load_settings()

logging.basicConfig(
    level=settings.log_level,
    )

mcp = FastMCP(
    name="condition-tracker"
)

_storage: StateStorage | None = None
_tracker: ConditionTracker | None = None


def get_tracker() -> ConditionTracker:
    """The installed tracker, loading state from storage on first use."""
    global _storage, _tracker
    if _tracker is None:
        _storage = StateStorage(settings.storage_dir)
        logger.debug(f"📂 Data path: {_storage.data_dir.resolve()}")
        state = install_state(_storage.load_state(), settings.show_tooltip)
        campaign = _storage.load_campaign()
        _tracker = ConditionTracker(state, campaign, settings=settings)
        _tracker.install()
        _save(_tracker)
        logger.debug("✅ Tracker installed")
    return _tracker


def _save(tracker: ConditionTracker) -> None:
    if _storage is None:
        return
    _storage.save_state(tracker.state)
    _storage.save_campaign(tracker.campaign)


def _format_messages(messages: list[ChatMessage]) -> str:
    if not messages:
        return "No messages."
    lines = []
    for message in messages:
        to = message.recipient or "all"
        lines.append(f"[{message.kind} -> {to}] {message.text}")
    return "\n".join(lines)


# ----------------------------------------------------------------------
# Logic helpers
# ----------------------------------------------------------------------

def _add_token_logic(tracker: ConditionTracker, name: str) -> str:
    token = tracker.campaign.add_token(name)
    return f"🪙 Added token '{token.name}' (id: {token.id})"


def _list_tokens_logic(tracker: ConditionTracker) -> str:
    tokens = list(tracker.campaign.tokens.values())
    if not tokens:
        return "No tokens on the tabletop."
    lines = ["**Tokens:**"]
    for token in tokens:
        conditions = token.tooltip or "no conditions"
        lines.append(f"- {token.name} (`{token.id}`): {conditions}")
    return "\n".join(lines)


def _chat_command_logic(
    tracker: ConditionTracker,
    content: str,
    selected: list[str] | None = None,
    who: str = "GM",
    is_gm: bool = True,
) -> str:
    chat = tracker.campaign.chat
    first_new = len(chat.messages)
    command = tracker.handle_chat_input(
        ChatInput(content=content, who=who, is_gm=is_gm, selected=selected or [])
    )
    replies = chat.messages[first_new:]
    if command is None and not replies:
        return f"❌ '{content}' is not a condition tracker command."
    return _format_messages(replies) if replies else f"✅ {command.verb.value} done."


def _update_conditions_logic(
    tracker: ConditionTracker,
    command: str,
    conditions: str | None,
    token_ids: list[str],
) -> str:
    kind = CommandKind(command)
    specs = parse_update_specs(conditions, kind) if conditions else None
    updates = tracker.apply(kind, specs, token_ids)
    lines = []
    for update in updates:
        token = tracker.campaign.get_token(update.token_id)
        lines.append(f"- {token.name}: {update.tooltip or 'no conditions'}")
    return f"✅ {kind.value} applied to {len(updates)} token(s):\n" + "\n".join(lines)


def _token_conditions_logic(tracker: ConditionTracker, token: str) -> str:
    counts = tracker.conditions_for(token)
    if not counts:
        return f"No conditions are currently applied to {token}."
    return "\n".join(
        f"- {name}" + (f" x{count}" if count > 1 else "") for name, count in counts.items()
    )


def _list_conditions_logic(tracker: ConditionTracker) -> str:
    lines = [f"**Conditions ({len(tracker.catalog)}):**"]
    for definition in tracker.catalog:
        marker = f" [{definition.marker_ref}]" if definition.marker_ref else ""
        lines.append(f"- {definition.name}{marker}")
    return "\n".join(lines)


def _edit_config_logic(tracker: ConditionTracker, text: str) -> str:
    chat = tracker.campaign.chat
    first_new = len(chat.messages)
    tracker.campaign.config_document.set(text)
    replies = chat.messages[first_new:]
    tab = tracker.state.config.current_tab
    summary = f"📄 Config document updated ({tab.value if tab else 'no tab'})."
    return summary + ("\n" + _format_messages(replies) if replies else "")


# ----------------------------------------------------------------------
# Tools
# ----------------------------------------------------------------------

@mcp.tool
def add_token(
    name: Annotated[str, Field(description="Token name")],
) -> str:
    """Place a new token on the tabletop."""
    tracker = get_tracker()
    result = _add_token_logic(tracker, name)
    _save(tracker)
    return result

@mcp.tool
def list_tokens() -> str:
    """List tokens with their current conditions."""
    return _list_tokens_logic(get_tracker())

@mcp.tool
def chat_command(
    content: Annotated[str, Field(description="Chat message, e.g. '!ct add|blinded-2'")],
    selected: Annotated[list[str] | None, Field(description="Ids of the selected tokens")] = None,
    who: Annotated[str, Field(description="Display name of the sender")] = "GM",
    is_gm: Annotated[bool, Field(description="Whether the sender is the GM")] = True,
) -> str:
    """Send a `!ct` chat command and return the tracker's replies."""
    tracker = get_tracker()
    result = _chat_command_logic(tracker, content, selected, who, is_gm)
    _save(tracker)
    return result

@mcp.tool
def update_conditions(
    command: Annotated[Literal["add", "remove", "set", "toggle"], Field(description="Update command")],
    token_ids: Annotated[list[str], Field(description="Ids of the tokens to update")],
    conditions: Annotated[str | None, Field(description="Comma separated name[-amount[-limit]] items")] = None,
) -> str:
    """Add, remove, set or toggle conditions on tokens."""
    tracker = get_tracker()
    try:
        result = _update_conditions_logic(tracker, command, conditions, token_ids)
    except (TrackerError, ValueError) as e:
        return f"❌ {getattr(e, 'message', e)}"
    _save(tracker)
    return result

@mcp.tool
def get_token_conditions(
    token: Annotated[str, Field(description="Token id or name")],
) -> str:
    """Show the conditions on one token."""
    try:
        return _token_conditions_logic(get_tracker(), token)
    except TrackerError as e:
        return f"❌ {e.message}"

@mcp.tool
def list_conditions() -> str:
    """List the conditions in the catalog."""
    return _list_conditions_logic(get_tracker())

@mcp.tool
def show_config_tab(
    tab: Annotated[Literal["instructions", "conditions"], Field(description="Tab to display")],
) -> str:
    """Switch the config document to a tab."""
    tracker = get_tracker()
    tracker.sync.switch_tab(ConfigTab(tab))
    _save(tracker)
    return f"📄 Config document now shows the {tab} tab."

@mcp.tool
def get_config_document() -> str:
    """Return the current config document text."""
    return get_tracker().campaign.config_document.get()

@mcp.tool
def edit_config_document(
    text: Annotated[str, Field(description="Full replacement text of the config document")],
) -> str:
    """Write the config document as the GM would, then sync the conditions table."""
    tracker = get_tracker()
    result = _edit_config_logic(tracker, text)
    _save(tracker)
    return result

@mcp.tool
def set_show_tooltip(
    value: Annotated[bool | None, Field(description="Show tooltips on tokens; omit to report the current setting")] = None,
) -> str:
    """Enable or disable token tooltips."""
    tracker = get_tracker()
    current = tracker.update_show_tooltip(value)
    _save(tracker)
    return f"Token tooltips are {'enabled' if current else 'disabled'}."

@mcp.tool
def reset_tracker(
    confirm: Annotated[Literal["confirm", "cancel"] | None, Field(description="Pass 'confirm' to reset")] = None,
) -> str:
    """Reset the condition catalog and config to the defaults."""
    tracker = get_tracker()
    if tracker.reset_state(confirm):
        _save(tracker)
        return "♻️ Condition tracker state reset to defaults."
    return "Condition tracker state was not reset."


def main() -> None:
    """Main entry point for the Condition Tracker MCP Server."""
    get_tracker()
    mcp.run()

if __name__ == "__main__":
    main()
