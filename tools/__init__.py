# =============================================================================
# tools/__init__.py
# =============================================================================
# This package contains the FastMCP tool wrappers around core/.
#
# ARCHITECTURAL ROLE:
#   tools/ is the "translation layer" between MCP clients and the XAPIHub
#   client in core/.  Each tool:
#     1. Checks that its required ids are present (invalid params otherwise)
#     2. Calls one XAPIHubClient method
#     3. Renders the Success/Failure into a JSON-friendly dict
#
# WHAT TOOLS DO NOT DO:
#   - They do NOT talk HTTP (that's core/transport.py)
#   - They do NOT reconcile response shapes (that's core/normalizers.py)
#   - They do NOT know about Google ADK (any MCP client can use them)
# =============================================================================
