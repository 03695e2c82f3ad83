"""Recovery configuration models, one record per service."""

from __future__ import annotations

import enum

from pydantic import BaseModel, Field

MANAGED_ATTRIBUTES = ("reset_period", "reboot_message", "command", "failure_actions")


class FailureActionKind(str, enum.Enum):
    RESTART = "restart"
    REBOOT = "reboot"
    RUN_COMMAND = "run_command"
    NOOP = "noop"


class FailureAction(BaseModel):
    kind: FailureActionKind
    delay_ms: int = Field(default=0, ge=0)


class RecoveryConfig(BaseModel):
    """Failure-recovery settings of a single service.

    Used both for the current state read back from the service ("is") and
    for the desired state supplied by the caller ("should"). For desired
    state an attribute is managed only when it was given explicitly and is
    not None; see :meth:`manages`.
    """

    name: str = Field(frozen=True)
    reset_period: int | None = Field(default=None, ge=0)
    reboot_message: str | None = None
    command: str | None = None
    failure_actions: list[FailureAction] = Field(default_factory=list)

    def manages(self, attribute: str) -> bool:
        if attribute not in MANAGED_ATTRIBUTES:
            raise ValueError(f"Unknown recovery attribute: {attribute}")
        return attribute in self.model_fields_set and getattr(self, attribute) is not None

    def has_noop_actions(self) -> bool:
        return any(a.kind == FailureActionKind.NOOP for a in self.failure_actions)
