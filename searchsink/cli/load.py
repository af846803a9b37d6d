# ==============================================================================
# Load Command
# ==============================================================================
"""
Bulk-load a JSON lines file into OpenSearch through the Bytewax dataflow.
"""

from pathlib import Path
from typing import Annotated, Optional

import typer

from searchsink.cli.shared import C, I, configure_logging
from searchsink.core.exceptions import SinkError


# ==============================================================================
# Commands
# ==============================================================================


def load(
    path: Annotated[
        Path,
        typer.Argument(
            help="JSON lines file, one document per line",
            exists=True,
            dir_okay=False,
            readable=True,
        ),
    ],
    index: Annotated[str, typer.Option("--index", "-i", help="Target index name")],
    id_field: Annotated[
        Optional[str],
        typer.Option("--id-field", help="Document field used as the document id"),
    ] = None,
    workers: Annotated[
        Optional[int],
        typer.Option("--workers", "-w", min=1, help="Workers per process (default: SINK_PARALLELISM)"),
    ] = None,
) -> None:
    """Bulk-index a JSON lines file into OpenSearch."""
    from searchsink.framework.bytewax.loader import run

    configure_logging()

    print(f"  {C.BOLD}Loading{C.RESET} {path} {I.ARROW} {C.WHITE}{index}{C.RESET}")
    try:
        run(path, index, id_field=id_field, workers=workers)
    except (SinkError, RuntimeError) as e:
        # Bytewax re-raises worker errors wrapped in RuntimeError
        print(f"  {C.BRIGHT_RED}{I.CROSS}{C.RESET} Load failed")
        print(f"    {C.DIM}{e}{C.RESET}")
        raise typer.Exit(1)

    print(f"  {C.BRIGHT_GREEN}{I.CHECK}{C.RESET} Load complete")
