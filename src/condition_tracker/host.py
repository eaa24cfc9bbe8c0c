"""
In-process host objects the tracker operates on.

These stand in for the virtual tabletop's object store: tokens with their two
condition fields, the rich text config document, the campaign marker set and
the chat. Change notifications are dispatched synchronously, like the host's
event loop does, so a handler that writes the document is re-entered before
the write returns.
"""

from datetime import datetime
from typing import Any, Callable, Iterable

from pydantic import BaseModel, Field, PrivateAttr
from shortuuid import random

from .catalog import sort_key
from .defaults import BUILTIN_MARKERS
from .models import MarkerDefinition


class Token(BaseModel):
    """A graphic on the tabletop."""
    id: str = Field(default_factory=lambda: random(length=8))
    name: str = ""
    statusmarkers: str = ""
    tooltip: str = ""
    show_tooltip: bool = True

    def get(self, field: str) -> Any:
        if field not in type(self).model_fields:
            raise KeyError(f"Token has no field '{field}'")
        return getattr(self, field)

    def set(self, field: str, value: Any) -> None:
        if field not in type(self).model_fields or field == "id":
            raise KeyError(f"Token field '{field}' cannot be set")
        setattr(self, field, value)


class ConfigDocument(BaseModel):
    """Rich text field holding the config tabs, with change listeners."""
    id: str = Field(default_factory=lambda: random(length=8))
    name: str = ""
    text: str = ""
    _listeners: list[Callable[["ConfigDocument"], Any]] = PrivateAttr(default_factory=list)

    def get(self) -> str:
        return self.text

    def set(self, text: str) -> None:
        """Replace the document text and notify listeners before returning."""
        self.text = text
        for listener in list(self._listeners):
            listener(self)

    def subscribe(self, listener: Callable[["ConfigDocument"], Any]) -> None:
        self._listeners.append(listener)


class ChatMessage(BaseModel):
    recipient: str | None = None
    text: str
    kind: str = "generic"
    sent_at: datetime = Field(default_factory=datetime.now)


class ChatLog(BaseModel):
    """Messages sent by the tracker; recipient None means everyone."""
    messages: list[ChatMessage] = Field(default_factory=list)

    def send(self, text: str, recipient: str | None = None, kind: str = "generic") -> ChatMessage:
        message = ChatMessage(recipient=recipient, text=text, kind=kind)
        self.messages.append(message)
        return message


class MarkerCatalog:
    """Read-only view of the markers available in a campaign.

    A reference containing ``::`` is a marker tag (custom marker sets);
    anything else is a marker name.
    """

    def __init__(self, markers: Iterable[MarkerDefinition]) -> None:
        combined = list(markers) + list(BUILTIN_MARKERS)
        self._markers = sorted(combined, key=lambda m: sort_key(m.name))

    def __iter__(self):
        return iter(self._markers)

    def find(self, ref: str) -> MarkerDefinition | None:
        if not ref:
            return None
        attribute = "tag" if "::" in ref else "name"
        for marker in self._markers:
            if getattr(marker, attribute) == ref:
                return marker
        return None

    def label(self, ref: str) -> str:
        """Human readable label for a marker reference."""
        marker = self.find(ref)
        return marker.name if marker is not None else ref


class Campaign(BaseModel):
    """Everything the tracker touches in one game."""
    tokens: dict[str, Token] = Field(default_factory=dict)
    config_document: ConfigDocument = Field(default_factory=ConfigDocument)
    markers: list[MarkerDefinition] = Field(default_factory=list, description="Custom token marker set")
    chat: ChatLog = Field(default_factory=ChatLog)
    _token_listeners: list[Callable[[Token], Any]] = PrivateAttr(default_factory=list)

    def add_token(self, name: str, **fields: Any) -> Token:
        token = Token(name=name, **fields)
        self.tokens[token.id] = token
        for listener in list(self._token_listeners):
            listener(token)
        return token

    def get_token(self, token_id: str) -> Token | None:
        return self.tokens.get(token_id)

    def find_token(self, id_or_name: str) -> Token | None:
        """Look a token up by id, then by name (case-insensitive)."""
        if id_or_name in self.tokens:
            return self.tokens[id_or_name]
        lowered = id_or_name.lower()
        for token in self.tokens.values():
            if token.name.lower() == lowered:
                return token
        return None

    def on_token_added(self, listener: Callable[[Token], Any]) -> None:
        self._token_listeners.append(listener)

    def marker_catalog(self) -> MarkerCatalog:
        return MarkerCatalog(self.markers)
