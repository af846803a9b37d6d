# ==============================================================================
# OpenSearch Commands
# ==============================================================================
"""
OpenSearch commands for the searchsink CLI.
"""

import warnings

import typer

from searchsink.cli.shared import C, I, configure_logging
from searchsink.infrastructure.search import check_opensearch_connection
from searchsink.utils.config import get_settings


# ==============================================================================
# Commands
# ==============================================================================


def opensearch_check() -> None:
    """Check that OpenSearch is reachable with the configured credentials."""
    import urllib3

    # Suppress SSL warnings for local development (verify_certs=False)
    warnings.filterwarnings("ignore", category=UserWarning, module="opensearchpy")
    urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

    configure_logging("WARNING")
    settings = get_settings()
    target = f"{settings.opensearch.host}:{settings.opensearch.port}"

    print()
    if check_opensearch_connection(settings):
        print(f"  {C.BRIGHT_GREEN}{I.CHECK}{C.RESET} OpenSearch is reachable ({target})")
        print()
        return

    print(f"  {C.BRIGHT_RED}{I.CROSS}{C.RESET} OpenSearch is not reachable ({target})")
    print(f"    Check {C.WHITE}OPENSEARCH_HOST{C.RESET} and credentials in .env")
    print()
    raise typer.Exit(1)
