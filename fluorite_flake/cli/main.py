"""Main CLI entry point using Typer."""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

import typer
import yaml
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .. import __version__
from ..discovery import DiscoveryError, ResourceDiscoverer
from ..models.inventory import ProjectInventory
from ..restore.audit import AuditStorage
from ..restore.executor import CleanupExecutor
from ..restore.gate import ConfirmationGate
from ..restore.prompts import TyperPrompter
from ..restore.reporter import CleanupReporter
from ..utils.logging import setup_logging
from .config import Config, ConfigError

logger = logging.getLogger(__name__)

# Create Typer app
app = typer.Typer(
    name="fluorite-flake",
    help="fluorite-flake - discover and safely clean up the cloud resources of a generated project",
    add_completion=False,
)

# Create Rich console for output
console = Console()

# Global config
config: Optional[Config] = None


def _get_config() -> Config:
    global config
    if config is None:
        config = Config.load()
    return config


def _parse_date(value: Optional[str], option: str) -> Optional[datetime]:
    if value is None:
        return None
    try:
        return datetime.strptime(value, "%Y-%m-%d")
    except ValueError:
        console.print(f"✗ Invalid {option} date '{escape(value)}' (expected YYYY-MM-DD)", style="bold red")
        raise typer.Exit(code=2)


def _discover(path: Path) -> ProjectInventory:
    try:
        return ResourceDiscoverer().discover(path)
    except DiscoveryError as e:
        console.print(f"✗ {escape(str(e))}", style="bold red")
        raise typer.Exit(code=1)


@app.callback()
def main(
    config_file: Optional[str] = typer.Option(
        None, "--config", help="Config file path (default: ~/.fluorite-flake/config.yaml)"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress output except errors"),
    no_color: bool = typer.Option(False, "--no-color", help="Disable colored output"),
):
    """fluorite-flake - discover and safely clean up the cloud resources of a generated project."""
    global config

    try:
        config = Config.load(config_file)
    except ConfigError as e:
        console.print(f"✗ {escape(str(e))}", style="bold red")
        raise typer.Exit(code=2)

    log_level = "ERROR" if quiet else ("DEBUG" if verbose else config.log_level)
    setup_logging(level=log_level, verbose=verbose)

    if no_color:
        console.no_color = True


@app.command()
def version():
    """Show version information."""
    console.print(f"fluorite-flake version {__version__}")


@app.command()
def discover(
    path: Path = typer.Argument(Path("."), help="Project directory (default: current directory)"),
    as_json: bool = typer.Option(False, "--json", help="Print the inventory as JSON"),
    show_env: bool = typer.Option(False, "--show-env", help="List Vercel environment variables (masked)"),
):
    """Discover the cloud resources linked to a project.

    Reads the project's .env files, vercel.json and domains.json. No provider
    API is called.
    """
    inventory = _discover(path)

    if as_json:
        console.print_json(data=inventory.to_dict())
        return

    reporter = CleanupReporter(console)
    reporter.display_inventory(inventory)
    if show_env:
        reporter.display_environment_variables(inventory)


@app.command()
def cleanup(
    path: Path = typer.Argument(Path("."), help="Project directory (default: current directory)"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Stop after approval without deleting anything"),
):
    """Delete the cloud resources linked to a project.

    Walks through resource selection, risk review, backup confirmation, plan
    review and project-name confirmation before anything is deleted.
    """
    cfg = _get_config()
    inventory = _discover(path)

    reporter = CleanupReporter(console)
    gate = ConfirmationGate(prompter=TyperPrompter(console), reporter=reporter)
    outcome = gate.run(inventory)

    if not outcome.approved:
        raise typer.Exit(code=0)

    if dry_run:
        console.print("✓ Plan approved (dry run). No resources were deleted.", style="green")
        raise typer.Exit(code=0)

    audit_storage = AuditStorage(cfg.audit_dir) if cfg.audit_enabled else None
    executor = CleanupExecutor(reporter=reporter, audit_storage=audit_storage)
    result = executor.execute(outcome.plan)

    logger.info(
        f"Cleanup {result.operation_id} of {inventory.project_name}: "
        f"{result.succeeded_count} succeeded, {result.failed_count} failed, {result.skipped_count} skipped"
    )

    if not result.success:
        raise typer.Exit(code=1)


# Audit commands group
audit_app = typer.Typer(help="Cleanup audit log commands")
app.add_typer(audit_app, name="audit")


@audit_app.command("list")
def audit_list(
    since: Optional[str] = typer.Option(None, "--since", help="Only cleanups started on/after date (YYYY-MM-DD)"),
    until: Optional[str] = typer.Option(None, "--until", help="Only cleanups started on/before date (YYYY-MM-DD)"),
):
    """List executed cleanups."""
    cfg = _get_config()
    storage = AuditStorage(cfg.audit_dir)
    operations = storage.query_operations(since=_parse_date(since, "--since"), until=_parse_date(until, "--until"))

    if not operations:
        console.print("No cleanup operations found", style="yellow")
        return

    table = Table(title="Cleanup operations", show_header=True, header_style="bold magenta")
    table.add_column("Operation ID", style="cyan")
    table.add_column("Project")
    table.add_column("Started")
    table.add_column("Succeeded", justify="right", style="green")
    table.add_column("Failed", justify="right", style="red")
    table.add_column("Skipped", justify="right")

    for audit_data in operations:
        operation = audit_data["operation"]
        table.add_row(
            escape(operation["operation_id"]),
            escape(operation["project_name"]),
            operation["started_at"],
            str(operation["succeeded_count"]),
            str(operation["failed_count"]),
            str(operation["skipped_count"]),
        )

    console.print(table)


@audit_app.command("show")
def audit_show(operation_id: str = typer.Argument(..., help="Operation ID to show")):
    """Show the audit log of one cleanup."""
    cfg = _get_config()
    storage = AuditStorage(cfg.audit_dir)
    audit_data = storage.get_operation(operation_id)

    if audit_data is None:
        console.print(f"✗ Operation '{escape(operation_id)}' not found", style="bold red")
        raise typer.Exit(code=1)

    console.print(yaml.dump(audit_data, default_flow_style=False, sort_keys=False, allow_unicode=True), markup=False)


def cli_main():
    """Console script entry point."""
    app()


if __name__ == "__main__":
    cli_main()
