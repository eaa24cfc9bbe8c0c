"""
ConditionTracker facade.

Wires the catalog, the instance update engine and the config table sync to a
Campaign, and dispatches ``!ct`` chat commands to them.
"""

import logging
from copy import deepcopy

from .cards import catalog_card, token_card
from .catalog import ConditionCatalog
from .commands import ChatInput, ParsedCommand, Verb, is_tracker_command, parse_command
from .config_sheet import ConfigTableSync, SyncResult, get_table_codec
from .config_sheet.renderer import CONFIG_NAME
from .config_sheet.table_codec import TableCodec
from .defaults import DEFAULT_CONDITIONS
from .errors import ValidationError
from .host import Campaign, ConfigDocument, Token
from .models import STATE_VERSION, CommandKind, ConfigTab, TrackerConfig, TrackerState, UpdateSpec
from .settings import TrackerSettings
from .tracking import InstanceUpdateEngine, TokenUpdate
from .tracking.codecs import split_field

logger = logging.getLogger(__name__)

RESET_CONFIRM = "confirm"
RESET_CANCEL = "cancel"


def default_state(show_tooltip: bool = True) -> TrackerState:
    """A fresh state seeded with the default condition catalog."""
    return TrackerState(
        conditions=deepcopy(DEFAULT_CONDITIONS),
        config=TrackerConfig(show_tooltip=show_tooltip),
    )


def install_state(stored: TrackerState | None, show_tooltip: bool = True) -> TrackerState:
    """Bring stored state up to the current version.

    Nothing stored gives the default state. State saved by another version is
    laid over the defaults field by field (only the fields it actually
    carries), then stamped with the current version.
    """
    if stored is None:
        logger.info("Installing condition tracker %s", STATE_VERSION)
        return default_state(show_tooltip)

    if stored.version == STATE_VERSION:
        return stored

    logger.info("Updating condition tracker state from %s to %s", stored.version, STATE_VERSION)
    merged = default_state(show_tooltip).model_dump()
    merged.update(stored.model_dump(include=stored.model_fields_set))
    merged["version"] = STATE_VERSION
    return TrackerState.model_validate(merged)


class ConditionTracker:
    """Condition tracking for one campaign."""

    def __init__(
        self,
        state: TrackerState,
        campaign: Campaign,
        *,
        codec: TableCodec | None = None,
        settings: TrackerSettings | None = None,
    ) -> None:
        self.state = state
        self.campaign = campaign
        self.settings = settings or TrackerSettings()
        self.catalog = ConditionCatalog(state)
        self.engine = InstanceUpdateEngine(self.catalog)
        self.sync = ConfigTableSync(
            state,
            campaign.config_document,
            codec=codec or get_table_codec(self.settings.table_format),
            markers=campaign.marker_catalog,
            notify=self.notify,
        )
        self._installed = False

    # --- Lifecycle ---

    def install(self) -> None:
        """Attach to the campaign and render the config document.

        Safe to call more than once; handlers are only registered the first time.
        """
        document = self.campaign.config_document
        if not document.name:
            document.name = CONFIG_NAME
        self.state.config.config_id = document.id

        self.sync.refresh_content()

        if not self._installed:
            document.subscribe(self.handle_config_change)
            self.campaign.on_token_added(self.handle_token_added)
            self._installed = True

        if self.state.config.current_tab is None:
            self.sync.switch_tab(ConfigTab.INSTRUCTIONS)

        logger.info(
            "Condition tracker %s installed (%d conditions, tooltips %s)",
            self.state.version,
            len(self.catalog),
            "enabled" if self.state.config.show_tooltip else "disabled",
        )

    def notify(self, text: str, recipient: str | None = None, kind: str = "generic") -> None:
        self.campaign.chat.send(text, recipient=recipient, kind=kind)

    # --- Event handlers ---

    def handle_config_change(self, document: ConfigDocument | None = None) -> SyncResult:
        return self.sync.handle_change()

    def handle_token_added(self, token: Token) -> None:
        show_tooltip = self.state.config.show_tooltip
        if token.show_tooltip != show_tooltip:
            token.set("show_tooltip", show_tooltip)

    def handle_chat_input(self, message: ChatInput) -> ParsedCommand | None:
        """Run a chat command.

        Returns the parsed command, or None when the message is not a tracker
        command or was rejected. Rejections are reported in chat.
        """
        if not is_tracker_command(message.content):
            return None

        try:
            command = parse_command(message)
            self._dispatch(command, message)
        except ValidationError as e:
            logger.debug("Rejected command %r: %s", message.content, e.message)
            self.notify(e.message, e.recipient, "error")
            return None
        return command

    def _dispatch(self, command: ParsedCommand, message: ChatInput) -> None:
        verb = command.verb
        if verb in (Verb.ADD, Verb.REMOVE, Verb.SET, Verb.TOGGLE):
            tokens = self._selected_tokens(message.selected, command.recipient)
            self.engine.apply(command.command_kind, command.specs, tokens)
        elif verb == Verb.CONDITIONS:
            self._send_conditions(command, message)
        elif verb == Verb.CONFIG:
            self.sync.switch_tab(command.options)
        elif verb == Verb.RESET:
            self.reset_state(command.options)
        elif verb == Verb.TOOLTIP:
            self.update_show_tooltip(None if command.options is None else command.options == "true")

    def _selected_tokens(self, token_ids: list[str], recipient: str) -> list[Token]:
        tokens = []
        for token_id in token_ids:
            token = self.campaign.get_token(token_id)
            if token is None:
                raise ValidationError(
                    f"Token <code>{token_id}</code> could not be found.",
                    recipient=recipient,
                    details={"token_id": token_id},
                )
            tokens.append(token)
        return tokens

    def _send_conditions(self, command: ParsedCommand, message: ChatInput) -> None:
        markers = self.campaign.marker_catalog()
        if command.options:
            self.notify(catalog_card(self.catalog, markers, split_field(command.options)))
        elif not message.selected:
            self.notify(catalog_card(self.catalog, markers))
        else:
            for token in self._selected_tokens(message.selected, command.recipient):
                card = token_card(token.name, self.engine.read_counts(token), self.catalog, markers)
                self.notify(card, command.recipient)

    # --- Operations ---

    def apply(
        self, command: CommandKind, specs: list[UpdateSpec] | None, token_ids: list[str]
    ) -> list[TokenUpdate]:
        """Apply an update command to tokens by id."""
        return self.engine.apply(command, specs, self._selected_tokens(token_ids, "gm"))

    def conditions_for(self, token: Token | str) -> dict[str, int]:
        """Condition counts on a token, keyed by catalog name."""
        if isinstance(token, str):
            found = self.campaign.find_token(token)
            if found is None:
                raise ValidationError(f"Token <code>{token}</code> could not be found.")
            token = found
        counts = self.engine.read_counts(token)
        return {self.catalog.canonical_name(name): count for name, count in counts.items() if count > 0}

    def reset_state(self, confirm: str | None = None) -> bool:
        """Reset state to the defaults once the GM confirms.

        Returns True when the state was reset.
        """
        if confirm == RESET_CANCEL:
            self.notify("ConditionTracker state was not reset.", "gm", "success")
            return False

        if confirm != RESET_CONFIRM:
            self.notify(
                "Resetting ConditionTracker state will overwrite any customizations made to the "
                "current state. <strong>This cannot be undone</strong>. <br/><br/> "
                f"<a href='!ct reset|{RESET_CANCEL}'>Cancel</a> <a href='!ct reset|{RESET_CONFIRM}'>Confirm</a>",
                "gm",
                "error",
            )
            return False

        fresh = default_state(self.settings.show_tooltip)
        # Mutate in place: every component holds a reference to this object.
        self.state.version = fresh.version
        self.state.conditions = fresh.conditions
        for field in TrackerConfig.model_fields:
            setattr(self.state.config, field, getattr(fresh.config, field))
        self.state.config.config_id = self.campaign.config_document.id

        self.sync.refresh_content()
        self.sync.switch_tab(ConfigTab.INSTRUCTIONS)
        logger.info("Condition tracker state reset to defaults")
        self.notify("ConditionTracker state successfully reset to default state.", "gm", "success")
        return True

    def update_show_tooltip(self, value: bool | None) -> bool:
        """Set whether tokens show their tooltip; None reports the current setting."""
        if value is None:
            self.notify(
                f"Token tooltips are currently {'enabled' if self.state.config.show_tooltip else 'disabled'}.",
                "gm",
                "generic",
            )
            return self.state.config.show_tooltip

        self.state.config.show_tooltip = value
        for token in self.campaign.tokens.values():
            if token.show_tooltip != value:
                token.set("show_tooltip", value)

        self.notify(f"Token tooltips are now {'enabled' if value else 'disabled'}.", "gm", "success")
        return value
