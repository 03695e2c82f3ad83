"""User confirmation dialogs."""

from __future__ import annotations

from rich.console import Console
from rich.prompt import Confirm

from svcrecovery.models.change import RecoveryPlan

console = Console()


def confirm_changes(plans: list[RecoveryPlan]) -> bool:
    console.print("\n[bold yellow]The following recovery settings will change:[/]\n")

    for i, plan in enumerate(plans, 1):
        changed = ", ".join(c.attribute for c in plan.changes)
        console.print(f"  {i}. {plan.service}: {changed}")
        console.print(f"     Command: [dim]{plan.command_line()}[/]")

    console.print()
    return Confirm.ask("Proceed with changes?", default=False)
