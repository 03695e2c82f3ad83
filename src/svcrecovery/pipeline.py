"""Pipeline orchestrator: desired state → plan → confirm → apply → audit."""

from __future__ import annotations

import logging
from collections.abc import Callable

from svcrecovery.audit.store import AuditStore
from svcrecovery.exceptions import UserCancelledError
from svcrecovery.models.change import MutationResult, RecoveryPlan
from svcrecovery.models.recovery import RecoveryConfig
from svcrecovery.reconciler.reconciler import Reconciler

logger = logging.getLogger(__name__)

ConfirmCallback = Callable[[list[RecoveryPlan]], bool]


class Pipeline:
    def __init__(
        self,
        reconciler: Reconciler,
        store: AuditStore,
        dry_run: bool = False,
        confirm_callback: ConfirmCallback | None = None,
    ) -> None:
        self._reconciler = reconciler
        self._store = store
        self._dry_run = dry_run
        self._confirm_callback = confirm_callback

    @property
    def dry_run(self) -> bool:
        return self._dry_run

    async def plan(self, desired: dict[str, RecoveryConfig | None]) -> list[RecoveryPlan]:
        plans: list[RecoveryPlan] = []
        for service, should in desired.items():
            if should is None:
                continue
            plans.append(await self._reconciler.plan(service, should))
        return plans

    async def run(self, desired: dict[str, RecoveryConfig | None]) -> list[MutationResult]:
        # 1. Confirm pending changes; dry run never asks
        if self._confirm_callback and not self._dry_run:
            pending = [p for p in await self.plan(desired) if p.has_changes]
            if not pending:
                return []
            if not self._confirm_callback(pending):
                raise UserCancelledError("User cancelled recovery changes.")

        # 2. Apply one service at a time, re-reading its current state; each
        # result is logged before the next service is touched
        results: list[MutationResult] = []
        for service, should in desired.items():
            if should is None:
                continue
            result = await self._reconciler.set_one(service, should, dry_run=self._dry_run)
            if result is None:
                continue
            await self._store.log_mutation(result)
            logger.debug("%s: logged mutation (applied=%s)", result.service, result.applied)
            results.append(result)
        return results
