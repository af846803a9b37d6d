# ==============================================================================
# CLI Command Modules
# ==============================================================================
"""
Command implementations registered on the Typer app in searchsink.app.
"""
