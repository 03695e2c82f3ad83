"""Render failure actions into the argument grammar of ``sc.exe failure``."""

from __future__ import annotations

from collections.abc import Iterable

from svcrecovery.models.recovery import FailureAction, FailureActionKind

ACTION_TOKENS: dict[FailureActionKind, str] = {
    FailureActionKind.RESTART: "restart",
    FailureActionKind.REBOOT: "reboot",
    FailureActionKind.RUN_COMMAND: "run",
    FailureActionKind.NOOP: "",
}


def encode_actions(actions: Iterable[FailureAction]) -> str:
    # Order is the escalation order and must not change.
    return "".join(f"{ACTION_TOKENS[a.kind]}/{a.delay_ms}/" for a in actions)


def actions_argument(actions: Iterable[FailureAction]) -> str:
    return f"actions={encode_actions(actions)}"


def reset_argument(seconds: int) -> str:
    return f"reset={seconds}"


def reboot_argument(message: str) -> str:
    """Render ``reboot="<message>"`` as one argv entry.

    The quotes are part of the value handed to the process runner, not shell
    quoting. On Windows the runner's command line is built with
    ``subprocess.list2cmdline``, which escapes them as ``\\"``, so ``sc.exe``
    sees the quote characters. The same holds for :func:`command_argument`.
    """
    return f'reboot="{message}"'


def command_argument(command: str) -> str:
    return f'command="{command}"'
