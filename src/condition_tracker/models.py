"""
Data models for the condition tracker.
"""

from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field, field_validator

STATE_VERSION = "1.3"

# Sentinel change amount meaning "every instance currently on the token".
ALL = "all"

ChangeAmount = int | Literal["all"]


class CommandKind(str, Enum):
    """Instance update commands understood by the engine."""
    ADD = "add"
    REMOVE = "remove"
    SET = "set"
    TOGGLE = "toggle"


class ConfigTab(str, Enum):
    """Display states of the config document."""
    INSTRUCTIONS = "instructions"
    CONDITIONS = "conditions"


class ConditionDefinition(BaseModel):
    """A single entry of the condition catalog."""
    name: str = Field(description="Condition name, unique ignoring case")
    marker_ref: str = Field(default="", description="Name or tag of the linked token marker, blank for none")
    description: list[str] = Field(default_factory=list, description="Ordered description items (inline HTML allowed)")

    @property
    def key(self) -> str:
        """Lowercased name used for case-insensitive lookups."""
        return self.name.lower()


class UpdateSpec(BaseModel):
    """How a single named condition should change on a token."""
    name: str
    change_amount: ChangeAmount = 1
    limit: int | None = Field(default=None, ge=0)

    @field_validator("change_amount")
    @classmethod
    def _check_amount(cls, value: ChangeAmount) -> ChangeAmount:
        if isinstance(value, int) and value < 0:
            raise ValueError(f"change amount must be non-negative, got {value}")
        return value

    @property
    def key(self) -> str:
        return self.name.lower()


class MarkerDefinition(BaseModel):
    """A badge available on the host (token marker set or built-in color)."""
    name: str
    tag: str = ""
    image_ref: str = ""


class TrackerConfig(BaseModel):
    """Config document bookkeeping kept in process state."""
    config_id: str = ""
    current_tab: ConfigTab | None = None
    conditions_content: str = Field(default="", description="Last conditions table written to the config document")
    show_tooltip: bool = True
    next_unique_id: int = Field(default=1, ge=1, description="Next suffix handed out by the NameAllocator")


class TrackerState(BaseModel):
    """The explicit process store shared by every component."""
    version: str = STATE_VERSION
    conditions: list[ConditionDefinition] = Field(default_factory=list)
    config: TrackerConfig = Field(default_factory=TrackerConfig)
