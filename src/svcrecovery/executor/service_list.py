"""Memoized service enumeration, scoped to one reconciliation session."""

from __future__ import annotations

from svcrecovery.executor.sc_runner import ScRunner
from svcrecovery.parser.status_parser import parse_service_names


class ServiceListCache:
    """Holds the result of a single ``sc.exe query``.

    The list is fetched on first use and never refreshed. Create a new cache
    for each session instead of sharing one.
    """

    def __init__(self, runner: ScRunner) -> None:
        self._runner = runner
        self._names: list[str] | None = None

    async def names(self) -> list[str]:
        if self._names is None:
            output = await self._runner.query()
            self._names = parse_service_names(output)
        return list(self._names)
