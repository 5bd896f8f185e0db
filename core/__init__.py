# =============================================================================
# core/__init__.py
# =============================================================================
# This package contains the XAPIHub client layer.
#
# LAYERS (dependency order):
#   transport.py       →  authenticated httpx requests, TransportError
#   normalizers.py     →  raw JSON envelopes → canonical records (models.py)
#   xapihub_client.py  →  one method per capability, returns Success/Failure
#
# CRITICAL ARCHITECTURAL RULE:
#   Nothing in this package imports FastMCP, Google ADK, or dotenv.  The
#   tools/ layer wraps it for MCP; the agent/ layer never touches it.
# =============================================================================
