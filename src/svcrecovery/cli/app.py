"""Typer CLI commands."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from svcrecovery.cli.output import (
    print_changes,
    print_error,
    print_history,
    print_info,
    print_plans,
    print_recovery,
    print_results,
    print_services,
)
from svcrecovery.exceptions import RecoveryError

console = Console()
app = typer.Typer(name="svcrecovery", help="Reconcile Windows service recovery settings.")


def _get_pipeline(dry_run: bool = False, force: bool = False):
    from svcrecovery.main import build_pipeline
    return build_pipeline(dry_run=dry_run, force=force)


def _load(path: Path):
    from svcrecovery.desired.source import load_desired_state
    return load_desired_state(path)


@app.command()
def show(
    names: list[str] = typer.Argument(..., help="Service names to inspect"),
) -> None:
    """Show the current recovery settings of one or more services."""
    async def _run():
        pipeline = _get_pipeline()
        configs = await pipeline._reconciler.get(names)
        for config in configs:
            print_recovery(config)

    try:
        asyncio.run(_run())
    except RecoveryError as exc:
        print_error(str(exc))
        raise typer.Exit(1)


@app.command()
def services(
    details: bool = typer.Option(
        False, "--details", "-d", help="Also show each service's recovery settings"
    ),
) -> None:
    """List the services known to the service-control manager."""
    async def _run():
        reconciler = _get_pipeline()._reconciler
        service_list = reconciler.new_service_list()
        names = await service_list.names()
        configs = await reconciler.get_all(service_list) if details else []
        return names, configs

    try:
        names, configs = asyncio.run(_run())
    except RecoveryError as exc:
        print_error(str(exc))
        raise typer.Exit(1)

    if not names:
        print_info("No services found.")
    elif details:
        for config in configs:
            print_recovery(config)
    else:
        print_services(names)


@app.command()
def plan(
    desired_file: Path = typer.Argument(..., help="JSON file with desired recovery settings"),
) -> None:
    """Show what apply would change, without changing anything."""
    async def _run():
        pipeline = _get_pipeline(dry_run=True)
        return await pipeline.plan(_load(desired_file))

    try:
        plans = asyncio.run(_run())
    except RecoveryError as exc:
        print_error(str(exc))
        raise typer.Exit(1)

    if not plans:
        print_info("No managed services in desired state.")
    else:
        print_plans(plans)


@app.command()
def apply(
    desired_file: Path = typer.Argument(..., help="JSON file with desired recovery settings"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Report changes without applying"),
    force: bool = typer.Option(False, "--force", help="Skip confirmations"),
) -> None:
    """Reconcile services against the desired recovery settings."""
    async def _run():
        pipeline = _get_pipeline(dry_run=dry_run, force=force)
        await pipeline._store.initialize()
        try:
            return await pipeline.run(_load(desired_file))
        finally:
            await pipeline._store.close()

    try:
        results = asyncio.run(_run())
    except RecoveryError as exc:
        print_error(str(exc))
        raise typer.Exit(1)

    if not results:
        print_info("All services already in sync.")
    else:
        print_results(results)


@app.command()
def history(
    limit: int = typer.Option(20, "--limit", "-n", help="Number of records"),
    changes: bool = typer.Option(
        False, "--changes", help="Show individual attribute changes instead of mutations"
    ),
    service: Optional[str] = typer.Option(
        None, "--service", "-s", help="Only this service (with --changes)"
    ),
    include_dry_run: bool = typer.Option(
        False, "--include-dry-run", help="Include changes reported by dry runs (with --changes)"
    ),
) -> None:
    """Show recent recovery changes."""
    async def _run():
        pipeline = _get_pipeline()
        await pipeline._store.initialize()
        try:
            if changes:
                return await pipeline._store.get_changes(
                    service=service, limit=limit, include_dry_run=include_dry_run
                )
            return await pipeline._store.get_history(limit=limit)
        finally:
            await pipeline._store.close()

    try:
        rows = asyncio.run(_run())
    except RecoveryError as exc:
        print_error(str(exc))
        raise typer.Exit(1)

    if not rows:
        print_info("No history found.")
    elif changes:
        print_changes(rows)
    else:
        print_history(rows)


@app.command(name="config")
def show_config() -> None:
    """Show current configuration."""
    from svcrecovery.config.settings import Settings

    try:
        settings = Settings()
    except Exception as exc:
        print_error(f"Failed to load settings: {exc}")
        raise typer.Exit(1)

    table_data = {
        "sc.exe Path": settings.sc_path,
        "DB Path": str(settings.db_path),
        "Dry Run": str(settings.dry_run),
        "Log Level": settings.log_level,
        "Require Confirmation": str(settings.require_confirmation),
    }

    from rich.table import Table
    table = Table(title="Configuration", show_header=False)
    table.add_column("Setting", style="bold cyan")
    table.add_column("Value")
    for k, v in table_data.items():
        table.add_row(k, v)
    console.print(table)
