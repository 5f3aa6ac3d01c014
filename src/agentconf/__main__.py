"""Allow running as ``python -m agentconf``."""

from agentconf.cli.main import cli

if __name__ == "__main__":
    cli()
