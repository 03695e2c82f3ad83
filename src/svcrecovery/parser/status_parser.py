"""Parse ``sc.exe qfailure`` and ``sc.exe query`` output into typed records."""

from __future__ import annotations

import logging
import re
from typing import NamedTuple

from svcrecovery.exceptions import ParseError
from svcrecovery.models.recovery import FailureAction, FailureActionKind, RecoveryConfig

logger = logging.getLogger(__name__)

_SERVICE_NAME = re.compile(r"SERVICE_NAME: (.*)")


class LineMatcher(NamedTuple):
    pattern: re.Pattern[str]
    field: str
    # Set for failure-action lines, which append instead of assign.
    kind: FailureActionKind | None = None


# Evaluated in order; the first matcher that applies claims the line.
LINE_MATCHERS: tuple[LineMatcher, ...] = (
    LineMatcher(re.compile(r"RESET_PERIOD \(in seconds\)    : (.*)"), "reset_period"),
    LineMatcher(re.compile(r"REBOOT_MESSAGE               : (.*)"), "reboot_message"),
    LineMatcher(re.compile(r"COMMAND_LINE                 : (.*)"), "command"),
    LineMatcher(
        re.compile(r"RESTART -- Delay = (\S+) milliseconds\."),
        "failure_actions",
        FailureActionKind.RESTART,
    ),
    LineMatcher(
        re.compile(r"RUN PROCESS -- Delay = (\S+) milliseconds\."),
        "failure_actions",
        FailureActionKind.RUN_COMMAND,
    ),
    LineMatcher(
        re.compile(r"REBOOT -- Delay = (\S+) milliseconds\."),
        "failure_actions",
        FailureActionKind.REBOOT,
    ),
)


def _to_int(raw: str, field: str) -> int:
    value = raw.strip()
    if not value.isdecimal():
        raise ParseError(f"Malformed {field} value: {value!r}")
    return int(value, 10)


class StatusParser:
    """Turns the status text of one service into a :class:`RecoveryConfig`.

    ``reset_period``, ``reboot_message`` and ``command`` keep the first value
    seen; once set, later lines for the same field fall through to the
    remaining matchers. Failure-action lines are appended in the order they
    appear, which is the tool's escalation order.

    Lines that match nothing are ignored. A line whose numeric value is not a
    base-10 integer is rejected as a whole: it contributes nothing and the
    field stays unset.
    """

    def __init__(self, matchers: tuple[LineMatcher, ...] = LINE_MATCHERS) -> None:
        self._matchers = matchers

    def parse(self, service: str, text: str) -> RecoveryConfig:
        values: dict[str, object] = {}
        actions: list[FailureAction] = []

        for line in text.splitlines():
            try:
                matched = self._classify(line, values, actions)
            except ParseError as exc:
                logger.warning("%s: skipping line %r: %s", service, line, exc)
                continue
            if matched is None:
                logger.debug("%s: line %r didn't match anything", service, line)
            else:
                logger.debug("%s: line %r matched %s", service, line, matched)

        return RecoveryConfig(name=service, failure_actions=actions, **values)

    def _classify(
        self,
        line: str,
        values: dict[str, object],
        actions: list[FailureAction],
    ) -> str | None:
        for matcher in self._matchers:
            if matcher.kind is None and matcher.field in values:
                continue
            match = matcher.pattern.search(line)
            if match is None:
                continue

            captured = match.group(1)
            if matcher.kind is not None:
                delay_ms = _to_int(captured, "delay")
                actions.append(FailureAction(kind=matcher.kind, delay_ms=delay_ms))
                return matcher.kind.value
            if matcher.field == "reset_period":
                values["reset_period"] = _to_int(captured, "reset_period")
                return matcher.field

            text = captured.strip()
            if not text:
                # Empty value means nothing is configured for this field.
                return matcher.field
            values[matcher.field] = text
            return matcher.field
        return None


def parse_qfailure(service: str, text: str) -> RecoveryConfig:
    return StatusParser().parse(service, text)


def parse_service_names(text: str) -> list[str]:
    names: list[str] = []
    for line in text.splitlines():
        match = _SERVICE_NAME.search(line)
        if match:
            names.append(match.group(1).strip())
    return names
