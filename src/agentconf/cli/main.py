"""agentconf CLI - Main entry point."""

import logging
import logging.handlers
from pathlib import Path

import click
from rich.console import Console

from agentconf import __version__

console = Console()

# Log rotation: 5 MB per file, keep 3 backups
_LOG_MAX_BYTES = 5 * 1024 * 1024
_LOG_BACKUP_COUNT = 3


def _setup_logging(verbose: bool, log_file: str | None) -> None:
    """Configure logging with a console handler and an optional rotating file."""
    log_format = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    if not root_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(log_format))
        root_logger.addHandler(handler)

    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            path,
            maxBytes=_LOG_MAX_BYTES,
            backupCount=_LOG_BACKUP_COUNT,
        )
        file_handler.setFormatter(logging.Formatter(log_format))
        root_logger.addHandler(file_handler)


@click.group()
@click.version_option(version=__version__, prog_name="agentconf")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.option("--log-file", default=None, help="Also log to this file (rotated).")
def cli(verbose, log_file):
    """agentconf - install and configure the Puppet agent on this host.

    Plans are computed from a YAML file of agent parameters and applied
    idempotently: re-running converges any remaining drift.
    """
    _setup_logging(verbose, log_file)


from .plan_commands import apply, plan, validate  # noqa: E402

cli.add_command(validate)
cli.add_command(plan)
cli.add_command(apply)


@cli.command()
def facts():
    """Show the host facts used for planning."""
    from agentconf.platform.facts import detect_fqdn, detect_os_family

    console.print(f"[bold]OS family:[/bold] {detect_os_family()}")
    console.print(f"[bold]FQDN:[/bold] {detect_fqdn()}")


if __name__ == "__main__":
    cli()
