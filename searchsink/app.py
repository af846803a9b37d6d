# ==============================================================================
# searchsink CLI
# ==============================================================================
"""
Command-line interface for the OpenSearch bulk sink.

Usage:
    searchsink --help
    searchsink load events.jsonl --index events --id-field event_id
    searchsink check
    searchsink config show
"""

import os

import typer

# ==============================================================================
# App Configuration
# ==============================================================================
# Set consistent terminal width for help output formatting
if "COLUMNS" not in os.environ:
    os.environ["COLUMNS"] = "115"

app = typer.Typer(
    name="searchsink",
    help="Bulk-write sink for OpenSearch",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# Register load command from cli.load module
from searchsink.cli.load import load

app.command("load")(load)

# Register check command from cli.opensearch module
from searchsink.cli.opensearch import opensearch_check

app.command("check")(opensearch_check)

config_app = typer.Typer(
    help="Configuration management",
    no_args_is_help=True,
)
app.add_typer(config_app, name="config")

# Register config commands from cli.config module
from searchsink.cli.config import config_show

config_app.command("show")(config_show)


# ==============================================================================
# Entry Point
# ==============================================================================


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
