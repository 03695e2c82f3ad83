"""Entry point and dependency wiring."""

from __future__ import annotations

import logging

from rich.logging import RichHandler

from svcrecovery.audit.store import AuditStore
from svcrecovery.cli.app import app
from svcrecovery.cli.prompts import confirm_changes
from svcrecovery.config.settings import Settings
from svcrecovery.executor.sc_runner import ScRunner
from svcrecovery.parser.status_parser import StatusParser
from svcrecovery.pipeline import Pipeline
from svcrecovery.reconciler.reconciler import Reconciler


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        force=True,
    )


def build_pipeline(
    dry_run: bool = False,
    force: bool = False,
    settings: Settings | None = None,
) -> Pipeline:
    settings = settings or Settings()
    configure_logging(settings.log_level)

    store = AuditStore(db_path=settings.db_path)
    reconciler = Reconciler(
        runner=ScRunner(settings.sc_path),
        parser=StatusParser(),
        sink=store,
    )
    require_confirmation = settings.require_confirmation and not force

    return Pipeline(
        reconciler=reconciler,
        store=store,
        dry_run=dry_run or settings.dry_run,
        confirm_callback=confirm_changes if require_confirmation else None,
    )


if __name__ == "__main__":
    app()
