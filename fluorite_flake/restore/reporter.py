"""Cleanup report formatting and display."""

from __future__ import annotations

import math
from typing import List, Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from fluorite_flake.models.cleanup_plan import CleanupPlan, DeletionStep, ResourceSelection
from fluorite_flake.models.cleanup_result import CleanupResult, StepResult, StepStatus
from fluorite_flake.models.dependency_graph import ResourceType, RiskAssessment, RiskLevel
from fluorite_flake.models.inventory import ProjectInventory

RISK_STYLES = {
    RiskLevel.LOW: "green",
    RiskLevel.MEDIUM: "yellow",
    RiskLevel.HIGH: "red",
    RiskLevel.CRITICAL: "bold bright_red",
}

RESOURCE_LABELS = {
    ResourceType.VERCEL_PROJECT: "🌐 Vercel project",
    ResourceType.TURSO_DATABASE: "🗄️  Turso database",
    ResourceType.SUPABASE_PROJECT: "🗄️  Supabase project",
    ResourceType.BLOB_STORE: "📦 Vercel Blob store",
    ResourceType.ENVIRONMENT_VARIABLES: "🔧 Environment variables",
    ResourceType.DOMAINS: "🌍 Custom domains",
}

PROGRESS_WIDTH = 20


def resource_label(resource_type: ResourceType) -> str:
    """Display label for a resource type."""
    return RESOURCE_LABELS.get(resource_type, resource_type.value)


def format_risk(level: RiskLevel) -> str:
    style = RISK_STYLES.get(level, "white")
    return f"[{style}]{level.value}[/{style}]"


def duration_minutes(seconds: int) -> int:
    """Round an estimated duration up to whole minutes (at least one)."""
    return max(1, math.ceil(seconds / 60))


def progress_bar(completed: int, total: int) -> str:
    percentage = int(completed / total * 100) if total else 100
    filled = round(percentage / 100 * PROGRESS_WIDTH)
    return f"{'█' * filled}{'░' * (PROGRESS_WIDTH - filled)} {completed}/{total} ({percentage}%)"


class CleanupReporter:
    """Format and display discovery results, cleanup plans and execution results."""

    def __init__(self, console: Optional[Console] = None):
        """Initialize cleanup reporter.

        Args:
            console: Rich console instance (creates new one if not provided)
        """
        self.console = console or Console()

    def display_header(self) -> None:
        self.console.print()
        self.console.print(
            Panel(
                "[bold]🗑️  Deployment Cleanup[/bold]\nSafely delete the cloud resources discovered for this project",
                style="cyan",
            )
        )

    def display_inventory(self, inventory: ProjectInventory) -> None:
        """Display discovered resources.

        Args:
            inventory: Discovered project inventory
        """
        self.console.print(f"\n📋 Discovered resources for [bold]{escape(inventory.project_name)}[/bold]")
        self.console.print(f"   [dim]{escape(inventory.project_path)}[/dim]\n")

        if not inventory.has_resources:
            self.console.print("[yellow]No deletable resources were found[/yellow]")
            return

        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("Resource", style="cyan")
        table.add_column("Environment", width=12)
        table.add_column("Identifier", style="white")
        table.add_column("Details", style="dim")

        if inventory.vercel is not None:
            vercel = inventory.vercel
            if vercel.domains:
                details = escape(", ".join(vercel.domains))
            else:
                details = f"{len(vercel.environment_variables)} env vars"
            table.add_row(
                resource_label(ResourceType.VERCEL_PROJECT),
                "-",
                escape(vercel.project_id) if vercel.project_id else "[yellow]unknown[/yellow]",
                details,
            )

        if inventory.databases is not None:
            for resource in inventory.databases.resources:
                table.add_row(
                    resource_label(inventory.databases.type),
                    resource.environment.value,
                    escape(resource.identifier),
                    escape(resource.url),
                )

        if inventory.storage is not None:
            for store in inventory.storage.blob_stores:
                table.add_row(resource_label(ResourceType.BLOB_STORE), "-", escape(store.id), escape(store.name))

        self.console.print(table)

    def display_environment_variables(self, inventory: ProjectInventory) -> None:
        """Display provider environment variables (masked)."""
        if inventory.vercel is None or not inventory.vercel.environment_variables:
            return

        table = Table(title="Vercel environment variables", show_header=True, box=None, padding=(0, 2))
        table.add_column("Key", style="cyan")
        table.add_column("Value", style="dim")
        for variable in inventory.vercel.environment_variables:
            table.add_row(escape(variable.key), escape(variable.masked_value))
        self.console.print()
        self.console.print(table)

    def display_risk(self, assessment: RiskAssessment, selection: ResourceSelection) -> None:
        """Display the risk factors relevant to the selected resource types.

        Args:
            assessment: Inventory risk assessment
            selection: User's resource selection
        """
        self.console.print("\n[bold yellow]⚠️  Risk assessment[/bold yellow]")
        self.console.print(f"Risk level: {format_risk(assessment.overall)}")

        for factor in assessment.relevant_factors(selection.selected_types):
            self.console.print(f"  • {format_risk(factor.severity)}: {factor.description}")

        if assessment.mitigations:
            self.console.print("\n[dim]Recommended mitigations:[/dim]")
            for mitigation in assessment.mitigations:
                self.console.print(f"  • {mitigation}")

    def display_backup_notice(self, selection: ResourceSelection) -> None:
        self.console.print("\n[bold blue]💾 Backup check[/bold blue]")
        if any(resource_type.is_database for resource_type in selection.selected_types):
            self.console.print("[yellow]⚠️  Deleted databases cannot be recovered.[/yellow]")
        self.console.print("Make sure every required backup has been taken.")

    def display_plan(self, plan: CleanupPlan) -> None:
        """Display the ordered deletion plan.

        Args:
            plan: Cleanup plan to review
        """
        self.console.print("\n[bold blue]📋 Deletion plan[/bold blue]")
        self.console.print(f"Steps: {len(plan.steps)}")
        self.console.print(f"Estimated time: about {duration_minutes(plan.estimated_duration)} min")
        self.console.print(f"Risk level: {format_risk(plan.risk_level)}\n")

        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("#", justify="right", width=4)
        table.add_column("Resource", style="cyan")
        table.add_column("Environment", width=12)
        table.add_column("Backup", width=8)

        for step in plan.steps:
            table.add_row(
                str(step.order),
                escape(step.description),
                step.environment.value if step.environment else "-",
                "[yellow]yes[/yellow]" if step.requires_backup else "no",
            )

        self.console.print(table)

    def display_final_warning(self, project_name: str) -> None:
        self.console.print("\n[bold red]⚠️  Final confirmation[/bold red]")
        self.console.print("[yellow]This operation cannot be undone.[/yellow]")
        self.console.print(f"Type the project name [bold]{escape(project_name)}[/bold] to continue.")

    def display_approved(self) -> None:
        self.console.print("[green]✓ Confirmation complete.[/green]\n")

    def display_aborted(self, stage: str, reason: str) -> None:
        """Explain which confirmation stage stopped the cleanup."""
        self.console.print(f"\n[yellow]Cleanup cancelled at {stage}: {escape(reason)}[/yellow]")
        self.console.print("[dim]Nothing was deleted.[/dim]")

    def display_step_started(self, step: DeletionStep) -> None:
        self.console.print(f"\n{resource_label(step.type)}: deleting {escape(step.description)}...")

    def display_step_result(self, result: StepResult, completed: int, total: int) -> None:
        """Display the outcome of one step with overall progress."""
        if result.success:
            self.console.print(f"[green]✓ Deleted {escape(result.step.description)}[/green]")
            self.console.print(f"[dim]Progress: {progress_bar(completed, total)}[/dim]")
        else:
            error = escape(result.error_message or "unknown error")
            self.console.print(f"[bold red]✗ Failed to delete {escape(result.step.description)}: {error}[/bold red]")

    def display_rollback(self, deleted: List[StepResult]) -> None:
        """List resources that must be recreated by hand, most recent first."""
        if not deleted:
            return

        self.console.print("\n[yellow]🔄 Manual rollback required[/yellow]")
        for result in reversed(deleted):
            description = escape(result.step.description)
            self.console.print(f"[yellow]  • Recreate {description} (step: {escape(result.step.id)})[/yellow]")
        self.console.print("[dim]Automatic rollback is not supported. Restore each service manually.[/dim]")

    def display_summary(self, result: CleanupResult) -> None:
        """Display execution summary statistics."""
        table = Table(title="Cleanup summary", show_header=True, header_style="bold magenta")
        table.add_column("Status", style="cyan", width=15)
        table.add_column("Count", justify="right", style="yellow", width=10)

        table.add_row("✓ Succeeded", f"[green]{result.succeeded_count}[/green]")
        failed_style = "red" if result.failed_count else "dim"
        table.add_row("✗ Failed", f"[{failed_style}]{result.failed_count}[/{failed_style}]")
        if result.skipped_count:
            table.add_row("⏭ Skipped", str(result.skipped_count))

        self.console.print()
        self.console.print(table)
        if result.duration_seconds is not None:
            self.console.print(f"Duration: {round(result.duration_seconds)} s")

        if result.success:
            self.console.print("\n[bold green]✓ All selected resources were deleted[/bold green]")
        else:
            self.console.print("\n[bold red]✗ Some deletions failed[/bold red]")

        if result.rollback_required:
            self.console.print("[yellow]Review the manual rollback steps above.[/yellow]")

    def display_skipped(self, results: List[StepResult]) -> None:
        skipped = [r for r in results if r.status == StepStatus.SKIPPED]
        for result in skipped:
            self.console.print(f"[dim]  ⏭ Not attempted: {escape(result.step.description)}[/dim]")
