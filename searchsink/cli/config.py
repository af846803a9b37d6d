# ==============================================================================
# Config Commands
# ==============================================================================
"""
Configuration commands for the searchsink CLI.
"""

import json
from typing import Annotated

import typer

from searchsink.cli.shared import C
from searchsink.utils.config import get_settings


# ==============================================================================
# Commands
# ==============================================================================


def config_show(
    json_output: Annotated[
        bool, typer.Option("--json", "-j", help="Output configuration as JSON")
    ] = False,
) -> None:
    """Display current configuration (includes secrets in JSON mode)."""
    settings = get_settings()

    # JSON output mode
    if json_output:
        config = {
            "opensearch": {
                "host": settings.opensearch.host,
                "port": settings.opensearch.port,
                "ssl_enabled": settings.opensearch.use_ssl,
                "verify_certs": settings.opensearch.verify_certs,
                "user": settings.opensearch.user,
                "password": settings.opensearch.password,
                "timeout": settings.opensearch.timeout,
            },
            "sink": {
                "name": settings.sink.name,
                "parallelism": settings.sink.parallelism,
                "refresh": settings.sink.refresh,
            },
            "log_level": settings.log_level,
        }
        print(json.dumps(config, indent=2))
        return

    # Human-readable output
    print()
    print(f"{C.BOLD}Configuration{C.RESET}")
    print()

    # OpenSearch
    print(f"{C.CYAN}OpenSearch{C.RESET}")
    print(f"  Host:       {C.WHITE}{settings.opensearch.host}{C.RESET}")
    print(f"  Port:       {C.WHITE}{settings.opensearch.port}{C.RESET}")
    opensearch_ssl = "enabled" if settings.opensearch.use_ssl else "disabled"
    print(f"  SSL:        {C.WHITE}{opensearch_ssl}{C.RESET}")
    print(f"  User:       {C.WHITE}{settings.opensearch.user}{C.RESET}")
    print(f"  Timeout:    {C.WHITE}{settings.opensearch.timeout}s{C.RESET}")
    print()

    # Sink
    print(f"{C.CYAN}Sink{C.RESET}")
    print(f"  Name:       {C.WHITE}{settings.sink.name}{C.RESET}")
    print(f"  Workers:    {C.WHITE}{settings.sink.parallelism}{C.RESET}")
    print(f"  Refresh:    {C.WHITE}{settings.sink.refresh or 'default'}{C.RESET}")
    print()
