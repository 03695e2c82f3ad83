"""Compare current and desired recovery settings and apply the difference."""

from __future__ import annotations

import logging
from typing import Any

from svcrecovery.executor.sc_runner import ScRunner
from svcrecovery.executor.service_list import ServiceListCache
from svcrecovery.models.change import AttributeChange, MutationResult, RecoveryPlan
from svcrecovery.models.recovery import FailureAction, RecoveryConfig
from svcrecovery.parser.status_parser import StatusParser
from svcrecovery.reconciler.encoder import (
    actions_argument,
    command_argument,
    reboot_argument,
    reset_argument,
)
from svcrecovery.reconciler.notifications import ChangeSink, NullSink

logger = logging.getLogger(__name__)

# Sent with actions= when neither the desired nor the current state has a reset period.
DEFAULT_RESET_PERIOD = 0


def _actions_value(actions: list[FailureAction]) -> list[dict[str, Any]]:
    return [a.model_dump(mode="json") for a in actions]


def _differs(is_: RecoveryConfig, should: RecoveryConfig, attribute: str) -> bool:
    return should.manages(attribute) and getattr(is_, attribute) != getattr(should, attribute)


def plan_changes(is_: RecoveryConfig, should: RecoveryConfig) -> RecoveryPlan:
    """Work out what has to change to move ``is_`` to ``should``.

    Only attributes managed by ``should`` are compared. ``sc.exe failure``
    resets whichever of ``reset`` and ``actions`` is left off the command
    line, so when either one differs both are sent.
    """
    service = is_.name
    changes: list[AttributeChange] = []
    arguments: list[str] = []

    reset_changed = _differs(is_, should, "reset_period")
    if reset_changed:
        changes.append(
            AttributeChange(
                service=service,
                attribute="reset_period",
                old=is_.reset_period,
                new=should.reset_period,
            )
        )

    if _differs(is_, should, "reboot_message"):
        changes.append(
            AttributeChange(
                service=service,
                attribute="reboot_message",
                old=is_.reboot_message,
                new=should.reboot_message,
            )
        )
        arguments.append(reboot_argument(should.reboot_message))

    if _differs(is_, should, "command"):
        changes.append(
            AttributeChange(
                service=service,
                attribute="command",
                old=is_.command,
                new=should.command,
            )
        )
        arguments.append(command_argument(should.command))

    actions_changed = _differs(is_, should, "failure_actions")
    if actions_changed:
        changes.append(
            AttributeChange(
                service=service,
                attribute="failure_actions",
                old=_actions_value(is_.failure_actions),
                new=_actions_value(should.failure_actions),
            )
        )
        if should.has_noop_actions():
            logger.debug(
                "%s: desired failure actions contain noop entries, which the "
                "service never reports back; they will always look changed",
                service,
            )

    if reset_changed or actions_changed:
        if should.manages("reset_period"):
            reset = should.reset_period
        elif is_.reset_period is not None:
            reset = is_.reset_period
        else:
            reset = DEFAULT_RESET_PERIOD
        actions = (
            should.failure_actions
            if should.manages("failure_actions")
            else is_.failure_actions
        )
        for action in actions:
            logger.debug("%s: action=%s delay=%d", service, action.kind.value, action.delay_ms)
        arguments.append(reset_argument(reset))
        arguments.append(actions_argument(actions))

    return RecoveryPlan(service=service, changes=changes, arguments=arguments)


class Reconciler:
    def __init__(
        self,
        runner: ScRunner | None = None,
        parser: StatusParser | None = None,
        sink: ChangeSink | None = None,
    ) -> None:
        self._runner = runner or ScRunner()
        self._parser = parser or StatusParser()
        self._sink = sink or NullSink()

    def new_service_list(self) -> ServiceListCache:
        return ServiceListCache(self._runner)

    async def current(self, service: str) -> RecoveryConfig:
        output = await self._runner.qfailure(service)
        return self._parser.parse(service, output)

    async def get(self, names: list[str] | None = None) -> list[RecoveryConfig]:
        if not names:
            return []
        return [await self.current(name) for name in names]

    async def get_all(self, services: ServiceListCache | None = None) -> list[RecoveryConfig]:
        services = services or self.new_service_list()
        return await self.get(await services.names())

    async def plan(self, service: str, should: RecoveryConfig) -> RecoveryPlan:
        is_ = await self.current(service)
        logger.debug("%s: is=%r should=%r", service, is_, should)
        return plan_changes(is_, should)

    async def set(
        self,
        changes: dict[str, RecoveryConfig | None],
        dry_run: bool = False,
    ) -> list[MutationResult]:
        results: list[MutationResult] = []
        for service, should in changes.items():
            if should is None:
                continue
            result = await self.set_one(service, should, dry_run=dry_run)
            if result is not None:
                results.append(result)
        return results

    async def set_one(
        self,
        service: str,
        should: RecoveryConfig,
        dry_run: bool = False,
    ) -> MutationResult | None:
        plan = await self.plan(service, should)
        if not plan.has_changes:
            logger.debug("%s: recovery settings already in sync", service)
            return None

        if dry_run:
            logger.info(
                "%s: would have run: %s",
                service,
                plan.command_line(self._runner.sc_path),
            )
            await self._notify(plan, dry_run=True)
            return MutationResult(
                service=service,
                applied=False,
                dry_run=True,
                arguments=plan.arguments,
                changes=plan.changes,
            )

        # A failed mutation raises here, so no change is reported for it.
        output = await self._runner.failure(service, plan.arguments)
        logger.info("%s: applied %s", service, " ".join(plan.arguments))
        await self._notify(plan)
        return MutationResult(
            service=service,
            applied=True,
            arguments=plan.arguments,
            changes=plan.changes,
            output=output,
        )

    async def _notify(self, plan: RecoveryPlan, dry_run: bool = False) -> None:
        for change in plan.changes:
            await self._sink.attribute_changed(
                change.service, change.attribute, change.old, change.new, dry_run=dry_run
            )
