# =============================================================================
# agent/__init__.py
# =============================================================================
# This package contains the Google ADK explorer agent used by main.py.
#
# ARCHITECTURAL ROLE:
#   The agent is a coordinator.  It decides which XAPIHub tool to call next
#   (organizations → projects → catalogues → APIs), reads the results, and
#   answers the user.  It never imports core/: all XAPIHub access goes
#   through the MCP tools in tools/mcp_server.py.
# =============================================================================
