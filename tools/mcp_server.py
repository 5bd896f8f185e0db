# =============================================================================
# tools/mcp_server.py  —  FastMCP Tool Server (ALL XAPIHub tools in one place)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Defines ALL MCP tools that an agent (Cursor, Claude Desktop, or our own
#   explorer in main.py) can call.  Each tool is a thin wrapper around one
#   core.xapihub_client.XAPIHubClient method: it checks the required
#   parameters, calls the client, and renders the Success/Failure into a
#   plain dict.
#
# HOW IT WORKS (the flow):
#   1. The agent calls a tool by name via MCP (e.g., "get_catalogues")
#   2. FastMCP routes the call to the matching function below
#   3. The function rejects missing ids with a ToolError (invalid params)
#   4. The client does one HTTP round trip and returns Success or Failure
#   5. The render_* helper turns that into the dict the agent receives
#
# THE DRILL-DOWN:
#   get_accessed_organizations → organization id
#   get_recent_accessed_projects / search_projects → project id
#   get_catalogues → catalogue id + root_collection_id
#   get_api_details(organization, project, catalogue, root collection)
#
# ERRORS:
#   - Missing required ids: ToolError, reported by FastMCP as a tool error.
#   - Backend/network problems: NOT an exception.  The tool returns
#     {"success": false, "error": ..., "message": ...} plus the parameters
#     it was called with, so the agent can explain what went wrong.
#
# RUNNING THIS SERVER:
#     a) python -m tools.mcp_server      (or the xapihub-mcp console script)
#     b) spawned over stdio by the explorer agent (agent/catalogue_agent.py)
#   XAPIHUB_BASE_URL and XAPIHUB_TOKEN must be set (or present in .env).
# =============================================================================

import json
import logging
import sys
from dataclasses import asdict
from typing import Any, Optional

from dotenv import load_dotenv
from fastmcp import FastMCP
from fastmcp.exceptions import ToolError

from core.config import ConfigurationError, load_config
from core.models import APIFilterParams, Failure, Page, ProjectSearchParams, Success
from core.xapihub_client import XAPIHubClient, create_client

# =============================================================================
# Logging Setup
# =============================================================================
# We log to STDERR because the MCP server talks to its client over STDOUT.
# Anything we printed to stdout would corrupt the MCP JSON stream.
# =============================================================================

_CYAN = "\033[36m"     # Requests (tool calls with params)
_GREEN = "\033[32m"    # Responses (JSON output)
_YELLOW = "\033[33m"   # Status/progress messages
_RESET = "\033[0m"

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [MCP] %(message)s",
    datefmt="%H:%M:%S",
    stream=sys.stderr,
)


def _log_request(tool_name: str, **params) -> None:
    """Log an incoming tool call with its parameters in CYAN."""
    param_str = ", ".join(f"{k}={v!r}" for k, v in params.items())
    logging.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    """Log an intermediate status message in YELLOW."""
    logging.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_response(tool_name: str, result: dict) -> dict:
    """Log the tool response as compact JSON in GREEN, then return it."""
    logging.info(f"{_GREEN}  ← {tool_name} response: {json.dumps(result, separators=(',', ':'))}{_RESET}")
    return result


# =============================================================================
# The XAPIHub client
# =============================================================================
# Built lazily from the environment on first use, or installed up front by
# main() / the tests via set_client().
# =============================================================================
_client: Optional[XAPIHubClient] = None


def get_client() -> XAPIHubClient:
    global _client
    if _client is None:
        _client = create_client(load_config())
    return _client


def set_client(client: Optional[XAPIHubClient]) -> None:
    global _client
    _client = client


# =============================================================================
# Parameter checks and rendering
# =============================================================================
def require_params(**params: Any) -> None:
    """Reject missing or blank required parameters with a ToolError."""
    missing = [
        name for name, value in params.items()
        if value is None or (isinstance(value, str) and not value.strip())
    ]
    if not missing:
        return
    if len(missing) == 1:
        raise ToolError(f"{missing[0]} parameter is required")
    names = ", ".join(missing[:-1]) + f" and {missing[-1]}"
    raise ToolError(f"{names} parameters are required")


def _render_failure(result: Failure, fallback_error: str, **params: Any) -> dict:
    return {
        "success": False,
        "error": result.error or fallback_error,
        "message": result.message,
        **params,
    }


def _render_pagination(page: Page) -> dict:
    return {
        "total_elements": page.total_elements,
        "total_pages": page.total_pages,
        "size": page.size,
        "number": page.number,
        "first": page.first,
        "last": page.last,
    }


def render_user(result) -> dict:
    if isinstance(result, Success):
        return {"success": True, "message": result.message, "user": asdict(result.data)}
    return _render_failure(result, "Failed to retrieve user details")


def render_connection(result) -> dict:
    connected = isinstance(result, Success) and bool(result.data)
    rendered = {"success": result.ok, "connected": connected, "message": result.message}
    if isinstance(result, Failure):
        rendered["error"] = result.error
    return rendered


def render_organizations(result) -> dict:
    if isinstance(result, Success):
        return {
            "success": True,
            "message": result.message,
            "organizations": [asdict(org) for org in result.data],
            "count": len(result.data),
        }
    return _render_failure(result, "Failed to retrieve accessed organizations")


def render_recent_projects(result, organization_id: str) -> dict:
    if isinstance(result, Success):
        return {
            "success": True,
            "message": result.message,
            "organization_id": organization_id,
            "projects": [asdict(project) for project in result.data],
            "count": len(result.data),
        }
    return _render_failure(
        result, "Failed to retrieve recent accessed projects",
        organization_id=organization_id,
    )


def render_project_search(result, params: ProjectSearchParams) -> dict:
    search_params = asdict(params)
    if isinstance(result, Success):
        page = result.data
        return {
            "success": True,
            "message": result.message,
            "search_params": search_params,
            "pagination": _render_pagination(page),
            "projects": [asdict(project) for project in page.content],
            "count": len(page.content),
        }
    return _render_failure(result, "Failed to search projects", search_params=search_params)


def render_catalogues(result, organization_id: str, project_id: str) -> dict:
    if isinstance(result, Success):
        return {
            "success": True,
            "message": result.message,
            "organization_id": organization_id,
            "project_id": project_id,
            "catalogues": [asdict(catalogue) for catalogue in result.data],
            "count": len(result.data),
        }
    return _render_failure(
        result, "Failed to retrieve catalogues",
        organization_id=organization_id, project_id=project_id,
    )


def render_api_details(result, params: APIFilterParams) -> dict:
    filter_params = asdict(params)
    if isinstance(result, Success):
        page = result.data
        # Only the fields an agent needs to pick an API; keeps responses small.
        apis = [
            {
                "id": api.id,
                "name": api.name,
                "description": api.description,
                "version": api.version,
                "status": api.status,
                "api_type": api.api_type,
            }
            for api in page.content
        ]
        return {
            "success": True,
            "message": result.message,
            "filter_params": filter_params,
            "pagination": _render_pagination(page),
            "apis": apis,
            "count": len(apis),
        }
    return _render_failure(result, "Failed to retrieve API details", filter_params=filter_params)


# =============================================================================
# Create the FastMCP server instance
# =============================================================================
mcp = FastMCP("xapihub-mcp-server")


# =============================================================================
# TOOL 1: get_current_user
# =============================================================================
@mcp.tool()
def get_current_user() -> dict:
    """Get the XAPIHub user that owns the configured token.

    Returns:
        A dict with success, message and user (id, username, email,
        created_on, modified_on), or success=false with error and message.
    """
    _log_request("get_current_user")
    result = get_client().get_current_user()
    return _log_response("get_current_user", render_user(result))


# =============================================================================
# TOOL 2: test_xapihub_connection
# =============================================================================
@mcp.tool()
def test_xapihub_connection() -> dict:
    """Test the connection to the XAPIHub API.

    WHEN TO CALL THIS: When another tool fails with an authentication or
    network error and you want to confirm whether the API is reachable.

    Returns:
        A dict with success, connected (true/false), message and, on
        failure, error.
    """
    _log_request("test_xapihub_connection")
    result = get_client().test_connection()
    _log_status(f"connected={result.ok}")
    return _log_response("test_xapihub_connection", render_connection(result))


# =============================================================================
# TOOL 3: get_accessed_organizations
# =============================================================================
@mcp.tool()
def get_accessed_organizations() -> dict:
    """List the organizations the user accessed recently.

    WHEN TO CALL THIS: FIRST, whenever you need an organization_id.  Every
    other XAPIHub lookup is scoped to an organization.

    Returns:
        A dict with organizations (id, name, description, visibility,
        created_on, modified_on) and count.
    """
    _log_request("get_accessed_organizations")
    result = get_client().get_accessed_organizations()
    if isinstance(result, Success):
        _log_status(f"Found {len(result.data)} organizations")
    return _log_response("get_accessed_organizations", render_organizations(result))


# =============================================================================
# TOOL 4: get_recent_accessed_projects
# =============================================================================
@mcp.tool()
def get_recent_accessed_projects(organization_id: str) -> dict:
    """List the projects the user accessed recently in one organization.

    Args:
        organization_id: The organization ID (from get_accessed_organizations).

    Returns:
        A dict with projects (id, name, description, enable_kanban_board)
        and count.
    """
    _log_request("get_recent_accessed_projects", organization_id=organization_id)
    require_params(organization_id=organization_id)

    result = get_client().get_recent_accessed_projects(organization_id)
    return _log_response(
        "get_recent_accessed_projects",
        render_recent_projects(result, organization_id),
    )


# =============================================================================
# TOOL 5: search_projects
# =============================================================================
@mcp.tool()
def search_projects(
    organization_id: str,
    search_string: str = "",
    is_assign: bool = True,
    page: int = 0,
    size: int = 12,
    is_default: bool = False,
    sort: str = "name,asc",
) -> dict:
    """Search projects in an organization with filtering and pagination.

    WHEN TO CALL THIS: When the project you need is not among the recently
    accessed ones, or when the user names a project.

    Args:
        organization_id: The organization ID to search in.
        search_string: Text matched against project names/descriptions.
        is_assign: Include projects assigned to the user (default: true).
        page: Zero-based page number (default: 0).
        size: Results per page (default: 12).
        is_default: Include the organization's default projects (default: false).
        sort: Sort criteria (default: "name,asc").

    Returns:
        A dict with search_params, pagination (total_elements, total_pages,
        size, number, first, last), projects and count.
    """
    _log_request("search_projects",
                 organization_id=organization_id, search_string=search_string,
                 is_assign=is_assign, page=page, size=size,
                 is_default=is_default, sort=sort)
    require_params(organization_id=organization_id)

    params = ProjectSearchParams(
        organization_id=organization_id,
        search_string=search_string or "",
        is_assign=is_assign,
        page=page,
        size=size,
        is_default=is_default,
        sort=sort or "name,asc",
    )
    result = get_client().search_projects(params)
    if isinstance(result, Success):
        _log_status(f"Page {result.data.number}: {len(result.data.content)} of "
                    f"{result.data.total_elements} projects")
    return _log_response("search_projects", render_project_search(result, params))


# =============================================================================
# TOOL 6: get_catalogues
# =============================================================================
@mcp.tool()
def get_catalogues(organization_id: str, project_id: str) -> dict:
    """List the API catalogues of a project.

    Each catalogue carries a root_collection_id: pass it as collection_id
    to get_api_details to list the catalogue's APIs.

    Args:
        organization_id: The organization ID.
        project_id: The project ID.

    Returns:
        A dict with catalogues (id, name, description, version, status,
        created_on, modified_on, root_collection_id) and count.
    """
    _log_request("get_catalogues", organization_id=organization_id, project_id=project_id)
    require_params(organization_id=organization_id, project_id=project_id)

    result = get_client().get_catalogues(organization_id, project_id)
    return _log_response(
        "get_catalogues",
        render_catalogues(result, organization_id, project_id),
    )


# =============================================================================
# TOOL 7: get_api_details
# =============================================================================
@mcp.tool()
def get_api_details(
    organization_id: str,
    project_id: str,
    catalogue_id: str,
    collection_id: str,
    creators: Optional[list[str]] = None,
    collections: Optional[list[str]] = None,
    projects: Optional[list[str]] = None,
    page: int = 0,
    size: int = 8,
) -> dict:
    """List the APIs inside a catalogue collection, with optional filters.

    Args:
        organization_id: The organization ID.
        project_id: The project ID.
        catalogue_id: The catalogue ID.
        collection_id: The catalogue's root_collection_id (from get_catalogues).
        creators: Creator IDs to filter by (optional).
        collections: Collection IDs to filter by (optional).
        projects: Project IDs to filter by (optional).
        page: Zero-based page number (default: 0).
        size: Results per page (default: 8).

    Returns:
        A dict with filter_params, pagination, apis (id, name, description,
        version, status, api_type) and count.
    """
    _log_request("get_api_details",
                 organization_id=organization_id, project_id=project_id,
                 catalogue_id=catalogue_id, collection_id=collection_id,
                 creators=creators, collections=collections, projects=projects,
                 page=page, size=size)
    require_params(
        organization_id=organization_id,
        project_id=project_id,
        catalogue_id=catalogue_id,
        collection_id=collection_id,
    )

    params = APIFilterParams(
        organization_id=organization_id,
        project_id=project_id,
        catalogue_id=catalogue_id,
        collection_id=collection_id,
        creators=list(creators or []),
        collections=list(collections or []),
        projects=list(projects or []),
        page=page,
        size=size,
    )
    result = get_client().get_api_details(params)
    return _log_response("get_api_details", render_api_details(result, params))


# =============================================================================
# Server entry point
# =============================================================================
def main() -> None:
    """Load configuration, build the client and serve MCP over stdio."""
    load_dotenv()
    try:
        config = load_config()
    except ConfigurationError as e:
        logging.error(f"Error: {e}")
        sys.exit(1)

    set_client(create_client(config))
    logging.info(f"XAPIHub MCP server running on stdio ({config.base_url})")
    mcp.run()


if __name__ == "__main__":
    main()
