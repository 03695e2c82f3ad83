"""Rich display helpers for CLI output."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from svcrecovery.models.change import MutationResult, RecoveryPlan
from svcrecovery.models.recovery import RecoveryConfig
from svcrecovery.reconciler.encoder import encode_actions

console = Console()


def _or_dash(value: object) -> str:
    return "-" if value is None or value == "" else str(value)


def print_recovery(config: RecoveryConfig) -> None:
    table = Table(title=f"Recovery: {config.name}", show_header=False, expand=True)
    table.add_column("Field", style="bold cyan")
    table.add_column("Value")
    table.add_row("Reset period (s)", _or_dash(config.reset_period))
    table.add_row("Reboot message", _or_dash(config.reboot_message))
    table.add_row("Command", _or_dash(config.command))
    if config.failure_actions:
        for i, action in enumerate(config.failure_actions, 1):
            table.add_row(f"Failure {i}", f"{action.kind.value} after {action.delay_ms} ms")
    else:
        table.add_row("Failure actions", "-")
    table.add_row("Encoded", describe_actions(config))
    console.print(table)


def print_plans(plans: list[RecoveryPlan], tool: str = "sc.exe") -> None:
    table = Table(title="Planned Changes", expand=True)
    table.add_column("Service", style="cyan")
    table.add_column("Changed")
    table.add_column("Command")

    for plan in plans:
        if not plan.has_changes:
            table.add_row(plan.service, "[green]in sync[/]", "")
            continue
        changed = ", ".join(c.attribute for c in plan.changes)
        table.add_row(plan.service, changed, plan.command_line(tool))

    console.print(table)


def print_results(results: list[MutationResult]) -> None:
    table = Table(title="Reconciliation Results", expand=True)
    table.add_column("#", style="bold", width=3)
    table.add_column("Service", style="cyan")
    table.add_column("Status", justify="center")
    table.add_column("Arguments")

    for i, r in enumerate(results, 1):
        if r.applied:
            status = "[green]APPLIED[/]"
        elif r.dry_run:
            status = "[yellow]DRY RUN[/]"
        else:
            status = "[red]SKIPPED[/]"
        table.add_row(str(i), r.service, status, " ".join(r.arguments))

    console.print(table)


def print_services(names: list[str]) -> None:
    table = Table(title="Services", expand=True)
    table.add_column("#", style="bold", width=5)
    table.add_column("Name")
    for i, name in enumerate(names, 1):
        table.add_row(str(i), name)
    console.print(table)


def print_error(message: str) -> None:
    console.print(Panel(f"[red]{message}[/]", title="Error", border_style="red"))


def print_info(message: str) -> None:
    console.print(f"[dim]{message}[/]")


def print_history(rows: list[dict]) -> None:
    table = Table(title="Recovery History", expand=True)
    table.add_column("Time")
    table.add_column("Service")
    table.add_column("Applied", justify="center")
    table.add_column("Arguments")

    for row in rows:
        if row.get("dry_run"):
            applied = "[yellow]Dry run[/]"
        else:
            applied = "[green]Yes[/]" if row.get("applied") else "[red]No[/]"
        table.add_row(
            str(row.get("executed_at", "")),
            row.get("service", ""),
            applied,
            " ".join(row.get("arguments") or []),
        )

    console.print(table)


def print_changes(rows: list[dict]) -> None:
    table = Table(title="Attribute Changes", expand=True)
    table.add_column("Time")
    table.add_column("Service", style="cyan")
    table.add_column("Attribute")
    table.add_column("Old")
    table.add_column("New")

    for row in rows:
        attribute = row.get("attribute", "")
        if row.get("dry_run"):
            attribute = f"{attribute} [yellow](dry run)[/]"
        table.add_row(
            str(row.get("recorded_at", "")),
            row.get("service", ""),
            attribute,
            escape(_or_dash(row.get("old"))),
            escape(_or_dash(row.get("new"))),
        )

    console.print(table)


def describe_actions(config: RecoveryConfig) -> str:
    return encode_actions(config.failure_actions) or "-"
