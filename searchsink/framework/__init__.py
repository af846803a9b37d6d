# ==============================================================================
# Streaming Framework Adapters
# ==============================================================================
"""
Adapters that let host dataflow frameworks drive a BulkSink.

Currently supported:
- Bytewax (bytewax/)
"""
