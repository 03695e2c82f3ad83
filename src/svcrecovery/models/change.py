"""Change models produced by the reconciler."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field


class AttributeChange(BaseModel):
    service: str
    attribute: str
    old: Any = None
    new: Any = None


class RecoveryPlan(BaseModel):
    service: str
    changes: list[AttributeChange] = Field(default_factory=list)
    arguments: list[str] = Field(default_factory=list)

    @property
    def has_changes(self) -> bool:
        return bool(self.changes)

    def command_line(self, tool: str = "sc.exe") -> str:
        return " ".join([tool, "failure", self.service, *self.arguments])


class MutationResult(BaseModel):
    service: str
    applied: bool
    dry_run: bool = False
    arguments: list[str] = Field(default_factory=list)
    changes: list[AttributeChange] = Field(default_factory=list)
    output: str = ""
    executed_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )
