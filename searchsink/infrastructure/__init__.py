# ==============================================================================
# Infrastructure Layer
# ==============================================================================
"""
Concrete adapters for external systems.

- search/: OpenSearch bulk client
"""
