"""CLI commands for validating, planning and applying agent configurations."""

from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from agentconf.errors import AgentConfError

console = Console()


def _load(config_path: str):
    from agentconf.config.loader import load_agent_config

    try:
        return load_agent_config(Path(config_path))
    except AgentConfError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise SystemExit(1)


def _details(intent) -> str:
    """One-line description of what an intent asserts."""
    kind = intent.kind
    if kind == "package":
        return f"ensure={intent.version}"
    if kind == "ini_setting":
        entry = intent.entry
        if entry.present:
            return f"[{entry.section}] {entry.key} = {entry.value}"
        return f"[{entry.section}] {entry.key} absent"
    if kind == "file":
        return f"{intent.owner}:{intent.group} {intent.mode}"
    if kind == "service":
        return f"ensure={intent.ensure} enable={str(intent.enable).lower()}"
    if intent.ensure == "absent":
        return "absent"
    return f"'{intent.schedule}' {intent.user}: {intent.command}"


def _print_plan(plan) -> None:
    table = Table(title=f"Plan ({plan.os_family.value})")
    table.add_column("Resource", style="cyan")
    table.add_column("Desired state")
    table.add_column("Requires", style="dim")

    for intent in plan:
        table.add_row(
            escape(intent.describe()),
            escape(_details(intent)),
            escape(getattr(intent, "require", "")),
        )
    console.print(table)

    counts = ", ".join(f"{n} {kind}" for kind, n in plan.summary().items())
    console.print(f"  {len(plan)} intents: {counts}")


def _resolve_os_family(os_family: str | None, host=None) -> str:
    if os_family:
        return os_family
    if host is not None:
        return host.detect_os_family()
    from agentconf.platform.facts import detect_os_family

    return detect_os_family()


@click.command()
@click.argument("config_path", type=click.Path(exists=True, dir_okay=False))
def validate(config_path):
    """Check a configuration file for schema and cross-field errors."""
    _load(config_path)
    console.print(f"[green]{config_path} is valid.[/green]")


@click.command()
@click.argument("config_path", type=click.Path(exists=True, dir_okay=False))
@click.option("--os-family", default=None, help="OS family (default: detect).")
@click.option("--fqdn", default=None, help="Host name for cron minute spreading.")
def plan(config_path, os_family, fqdn):
    """Show the intents that would converge this host."""
    from agentconf.planner.plan import build_plan

    config = _load(config_path)
    try:
        reconciliation_plan = build_plan(config, _resolve_os_family(os_family), fqdn)
    except AgentConfError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise SystemExit(1)

    _print_plan(reconciliation_plan)


@click.command()
@click.argument("config_path", type=click.Path(exists=True, dir_okay=False))
@click.option("--os-family", default=None, help="OS family (default: detect).")
@click.option("--fqdn", default=None, help="Host name for cron minute spreading.")
@click.option(
    "--root",
    type=click.Path(file_okay=False),
    default="/",
    help="Write files below this directory (default: /).",
)
@click.option("--dry-run", is_flag=True, help="Report changes without making them.")
def apply(config_path, os_family, fqdn, root, dry_run):
    """Converge this host to the configuration."""
    from agentconf.host.apply import apply as apply_plan
    from agentconf.host.local import LocalHost
    from agentconf.planner.plan import build_plan

    config = _load(config_path)
    host = LocalHost(root=Path(root), dry_run=dry_run)

    try:
        reconciliation_plan = build_plan(config, _resolve_os_family(os_family, host), fqdn)
        report = apply_plan(reconciliation_plan, host)
    except AgentConfError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise SystemExit(1)

    verb = "Would change" if dry_run else "Changed"
    for intent in report.changed:
        console.print(f"  [yellow]{verb}[/yellow] {escape(intent.describe())}")
    console.print(
        f"[green]{len(report.changed)} of {len(report.results)} intents "
        f"{'out of sync' if dry_run else 'changed'}.[/green]"
    )
