"""Pydantic models for the config table sync."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from ..models import ConditionDefinition


class ConditionRow(BaseModel):
    """One table row exactly as read, before validation."""
    name: str = ""
    marker_ref: str = ""
    description: list[str] = Field(default_factory=list)


class CorrectionReason(str, Enum):
    """Why a condition name was rewritten during a table parse."""
    BLANK = "blank"
    RESERVED_CHARACTERS = "reserved_characters"
    DUPLICATE = "duplicate"


class CorrectionWarning(BaseModel):
    """Non-fatal notice that a condition name was corrected."""
    original: str
    corrected: str
    reasons: list[CorrectionReason] = Field(default_factory=list)

    @property
    def message(self) -> str:
        parts: list[str] = []
        if CorrectionReason.BLANK in self.reasons:
            parts.append("Condition name cannot be blank")
        if CorrectionReason.RESERVED_CHARACTERS in self.reasons:
            parts.append(
                "Condition name cannot include vertical pipe characters <code>|</code> or hyphens <code>-</code>"
            )
        if CorrectionReason.DUPLICATE in self.reasons:
            parts.append(f"Condition with name <code>{self.original.strip()}</code> already exists")
        return "; ".join(parts) + f". Created condition with name <code>{self.corrected}</code> instead."


class ValidatedTable(BaseModel):
    """Definitions produced from parsed rows, plus what had to be fixed."""
    definitions: list[ConditionDefinition] = Field(default_factory=list)
    corrections: list[CorrectionWarning] = Field(default_factory=list)
    unknown_markers: list[str] = Field(default_factory=list)


class SyncAction(str, Enum):
    """What a config document change notification resulted in."""
    UNCHANGED = "unchanged"
    HEADER_RESTORED = "header_restored"
    CATALOG_UPDATED = "catalog_updated"
    REWRITTEN = "rewritten"
    REVERTED = "reverted"
    IGNORED = "ignored"
    FAILED = "failed"


class SyncResult(BaseModel):
    """Outcome of handling one config document change."""
    action: SyncAction
    corrections: list[CorrectionWarning] = Field(default_factory=list)
    unknown_markers: list[str] = Field(default_factory=list)
    error: str = ""

    @property
    def written(self) -> bool:
        """Whether the config document was written back."""
        return self.action in (SyncAction.HEADER_RESTORED, SyncAction.REWRITTEN, SyncAction.REVERTED)
