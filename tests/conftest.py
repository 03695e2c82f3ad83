"""Shared fixtures and mocks for all tests."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest
import pytest_asyncio

from svcrecovery.audit.store import AuditStore
from svcrecovery.config.settings import Settings
from svcrecovery.models.recovery import FailureAction, FailureActionKind, RecoveryConfig

QFAILURE_SPOOLER = (
    "[SC] QueryServiceConfig2 SUCCESS\r\n"
    "\r\n"
    "SERVICE_NAME: Spooler\r\n"
    "        RESET_PERIOD (in seconds)    : 86400\r\n"
    "        REBOOT_MESSAGE               : \r\n"
    "        COMMAND_LINE                 : \r\n"
    "        FAILURE_ACTIONS              : RESTART -- Delay = 60000 milliseconds.\r\n"
    "                                       RUN PROCESS -- Delay = 120000 milliseconds.\r\n"
    "                                       REBOOT -- Delay = 300000 milliseconds.\r\n"
)

QFAILURE_EMPTY = (
    "[SC] QueryServiceConfig2 SUCCESS\r\n"
    "\r\n"
    "SERVICE_NAME: W32Time\r\n"
    "        RESET_PERIOD (in seconds)    : 0\r\n"
    "        REBOOT_MESSAGE               : \r\n"
    "        COMMAND_LINE                 : \r\n"
)

QUERY_OUTPUT = (
    "\r\n"
    "SERVICE_NAME: Spooler\r\n"
    "DISPLAY_NAME: Print Spooler\r\n"
    "        TYPE               : 110  WIN32_OWN_PROCESS  (interactive)\r\n"
    "        STATE              : 4  RUNNING\r\n"
    "\r\n"
    "SERVICE_NAME: W32Time \r\n"
    "DISPLAY_NAME: Windows Time\r\n"
    "        STATE              : 4  RUNNING\r\n"
)


@pytest.fixture
def mock_settings(monkeypatch, tmp_path):
    monkeypatch.setenv("SVCRECOVERY_SC_PATH", "sc.exe")
    monkeypatch.setenv("SVCRECOVERY_DB_PATH", str(tmp_path / "audit.db"))
    monkeypatch.setenv("SVCRECOVERY_DRY_RUN", "false")
    monkeypatch.setenv("SVCRECOVERY_LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("SVCRECOVERY_REQUIRE_CONFIRMATION", "false")
    return Settings()


@pytest_asyncio.fixture
async def temp_store():
    store = AuditStore(db_path=":memory:")
    await store.initialize()
    yield store
    await store.close()


@pytest.fixture
def mock_runner():
    """ScRunner double that answers qfailure from a dict of service -> text."""
    def _make(outputs: dict[str, str]):
        runner = AsyncMock()
        runner.sc_path = "sc.exe"
        runner.qfailure.side_effect = lambda service: outputs[service]
        runner.failure.return_value = "[SC] ChangeServiceConfig2 SUCCESS\r\n"
        runner.query.return_value = QUERY_OUTPUT
        return runner
    return _make


@pytest.fixture
def spooler_is():
    return RecoveryConfig(
        name="Spooler",
        reset_period=86400,
        failure_actions=[
            FailureAction(kind=FailureActionKind.RESTART, delay_ms=60000),
            FailureAction(kind=FailureActionKind.RUN_COMMAND, delay_ms=120000),
            FailureAction(kind=FailureActionKind.REBOOT, delay_ms=300000),
        ],
    )
