# =============================================================================
# core/xapihub_client.py  —  One method per XAPIHub capability
# =============================================================================
#
# HOW EVERY OPERATION WORKS (the flow):
#   1. Build the request from typed parameters: path, query string, body
#   2. Send it through core/transport.py
#   3. Pipe the raw JSON through the matching normalizer
#   4. Wrap the canonical record(s) in Success
#
#   If step 2 raises TransportError, the operation returns
#       Failure(error=<transport message>,
#               message="Failed to <operation>: <status or 'Unknown error'>")
#   instead.  Nothing else is caught: a normalizer cannot fail (it is
#   total), and a genuine bug should surface rather than be dressed up as a
#   backend problem.
#
# WHAT THIS MODULE DOES NOT DO:
#   - It does not check required parameters; the MCP tools do that before
#     calling in.
#   - It does not format anything for display.
# =============================================================================

from typing import Any, Callable, Optional, TypeVar
from urllib.parse import quote

from core.config import XAPIHubConfig
from core.models import (
    APIFilterParams,
    APIResource,
    Catalogue,
    Failure,
    Organization,
    Page,
    Project,
    ProjectSearchParams,
    Result,
    Success,
    User,
)
from core.normalizers import (
    normalize_api_page,
    normalize_catalogues,
    normalize_organizations,
    normalize_project_page,
    normalize_projects,
    normalize_user,
)
from core.transport import Transport, TransportError

T = TypeVar("T")

# Versioned service prefixes on the XAPIHub gateway.
PLATFORM = "/platform/1.0.0"
PROJECT = "/project/1.0.0"
API_DESIGN = "/api-design/1.0.0"
GLOBAL_SEARCH = "/global-search-read/1.0.0"


def _segment(value: str) -> str:
    """Encode an id as a single URL path segment."""
    return quote(str(value), safe="")


def _query_bool(value: bool) -> str:
    return "true" if value else "false"


def failure_from(action: str, error: TransportError) -> Failure:
    status = error.status_code or "Unknown error"
    return Failure(
        error=error.message,
        message=f"Failed to {action}: {status}",
        status_code=error.status_code,
    )


class XAPIHubClient:
    """Façade over the XAPIHub REST API.

    Every public method returns a Success or a Failure; none of them raises
    for network or HTTP problems.
    """

    def __init__(self, transport: Transport):
        self.transport = transport

    def close(self) -> None:
        self.transport.close()

    def _call(
        self,
        action: str,
        success_message: str,
        normalize: Callable[[Any], T],
        method: str,
        path: str,
        params: Optional[dict[str, Any]] = None,
        body: Any = None,
    ) -> Result[T]:
        try:
            raw = self.transport.request(method, path, params=params, json=body)
        except TransportError as e:
            return failure_from(action, e)
        return Success(data=normalize(raw), message=success_message)

    # -------------------------------------------------------------------------
    # Platform
    # -------------------------------------------------------------------------
    def get_current_user(self) -> Result[User]:
        """GET /platform/1.0.0/users/current-user"""
        return self._call(
            "get current user",
            "User details retrieved successfully",
            normalize_user,
            "GET",
            f"{PLATFORM}/users/current-user",
        )

    def test_connection(self) -> Result[bool]:
        """Check the base URL and token by fetching the current user.

        Returns Success(True) when the user could be fetched.  Otherwise a
        Failure that keeps the user lookup's error and, in its message, the
        HTTP status it failed with.
        """
        result = self.get_current_user()
        if isinstance(result, Success):
            return Success(data=True, message="Successfully connected to XAPIHub API")

        status = result.status_code or "Unknown error"
        return Failure(
            error=result.error,
            message=f"Failed to connect to XAPIHub API: {status}",
            status_code=result.status_code,
        )

    def get_accessed_organizations(self) -> Result[list[Organization]]:
        """GET /platform/1.0.0/organizations/recent-accessed-organizations"""
        return self._call(
            "get accessed organizations",
            "Accessed organizations retrieved successfully",
            normalize_organizations,
            "GET",
            f"{PLATFORM}/organizations/recent-accessed-organizations",
        )

    # -------------------------------------------------------------------------
    # Projects
    # -------------------------------------------------------------------------
    def get_recent_accessed_projects(self, organization_id: str) -> Result[list[Project]]:
        """GET /project/1.0.0/organizations/{org}/projects/recent-accessed-project"""
        return self._call(
            "get recent accessed projects",
            "Recent accessed projects retrieved successfully",
            normalize_projects,
            "GET",
            f"{PROJECT}/organizations/{_segment(organization_id)}"
            "/projects/recent-accessed-project",
        )

    def search_projects(self, params: ProjectSearchParams) -> Result[Page[Project]]:
        """Search projects in an organization, one page at a time.

        Sends POST .../projects/search with isAssign, page, size, isDefault
        and sort in the query string and {"searchString": ...} as the body.
        """
        query = {
            "isAssign": _query_bool(params.is_assign),
            "page": params.page,
            "size": params.size,
            "isDefault": _query_bool(params.is_default),
            "sort": params.sort,
        }
        return self._call(
            "search projects",
            "Project search completed successfully",
            lambda raw: normalize_project_page(raw, params.page, params.size),
            "POST",
            f"{PROJECT}/organizations/{_segment(params.organization_id)}/projects/search",
            params=query,
            body={"searchString": params.search_string},
        )

    # -------------------------------------------------------------------------
    # Catalogues and APIs
    # -------------------------------------------------------------------------
    def get_catalogues(self, organization_id: str, project_id: str) -> Result[list[Catalogue]]:
        """GET /api-design/1.0.0/organizations/{org}/projects/{project}/catalogues"""
        return self._call(
            "get catalogues",
            "Catalogues retrieved successfully",
            normalize_catalogues,
            "GET",
            f"{API_DESIGN}/organizations/{_segment(organization_id)}"
            f"/projects/{_segment(project_id)}/catalogues",
        )

    def get_api_details(self, params: APIFilterParams) -> Result[Page[APIResource]]:
        """Filter the APIs of one catalogue collection.

        The collection id is the catalogue's root_collection_id.  Sends
        POST .../apis/filter?page=&size= with the creator, collection and
        project filters (empty lists mean "no filter") as the body.
        """
        path = (
            f"{GLOBAL_SEARCH}/organizations/{_segment(params.organization_id)}"
            f"/projects/{_segment(params.project_id)}"
            f"/catalogues/{_segment(params.catalogue_id)}"
            f"/collections/{_segment(params.collection_id)}/apis/filter"
        )
        body = {
            "creators": list(params.creators),
            "collections": list(params.collections),
            "projects": list(params.projects),
        }
        return self._call(
            "get API details",
            "API details retrieved successfully",
            lambda raw: normalize_api_page(raw, params.page, params.size),
            "POST",
            path,
            params={"page": params.page, "size": params.size},
            body=body,
        )


def create_client(config: XAPIHubConfig) -> XAPIHubClient:
    """Wire a Transport for ``config`` into a ready-to-use client."""
    return XAPIHubClient(Transport(config))
