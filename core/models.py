# =============================================================================
# core/models.py  —  Data Models (the "nouns" of the system)
# =============================================================================
#
# These dataclasses define the *shape* of every record that flows out of the
# XAPIHub layer.  They carry no behavior.  The normalizers in
# core/normalizers.py are the only code that builds entity records from raw
# JSON; everything downstream (the MCP tools, the explorer agent) only ever
# sees these canonical shapes.
#
# FROZEN RECORDS:
#   Entities live for one request/response cycle and are never mutated, so
#   every entity is a frozen dataclass.  Lists inside records are tuples for
#   the same reason.
#
# RESULT-AS-DATA:
#   Every client operation returns Success or Failure.  Transport problems
#   are reported as a Failure value; they never escape as exceptions.  The
#   caller has to look at which variant it got.
# =============================================================================

from dataclasses import dataclass, field
from typing import Generic, Optional, TypeVar, Union

T = TypeVar("T")


# -----------------------------------------------------------------------------
# Entities
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class User:
    """The user that owns the configured bearer token."""

    id: str = ""
    username: str = ""
    email: str = ""
    created_on: str = ""
    modified_on: str = ""


@dataclass(frozen=True)
class Organization:
    """An organization the user has recently accessed."""

    id: str = ""
    name: str = ""
    description: str = ""
    visibility: str = "PRIVATE"        # open enum: PRIVATE, PUBLIC, ...
    created_on: str = ""
    modified_on: str = ""


@dataclass(frozen=True)
class Project:
    """A project inside an organization."""

    id: str = ""
    name: str = ""
    description: str = ""
    enable_kanban_board: bool = False


@dataclass(frozen=True)
class Catalogue:
    """An API catalogue inside a project.

    root_collection_id is the entry point for get_api_details: the APIs of
    a catalogue are filtered by (organization, project, catalogue, root
    collection).
    """

    id: str = ""
    name: str = ""
    description: str = ""
    version: str = ""
    status: str = ""
    created_on: str = ""
    modified_on: str = ""
    root_collection_id: str = ""


@dataclass(frozen=True)
class APIResource:
    """One API listed inside a catalogue collection."""

    id: str = ""
    name: str = ""
    description: str = ""
    version: str = ""
    status: str = ""
    created_on: str = ""
    modified_on: str = ""
    created_by: str = ""
    modified_by: str = ""
    api_type: str = ""
    visibility: str = ""


# -----------------------------------------------------------------------------
# Page — one slice of a paginated result set
# -----------------------------------------------------------------------------
# Field names follow the backend's Spring-style pagination envelope:
# "number" is the zero-based page index, "size" the page size.
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class Page(Generic[T]):
    """A bounded slice of a larger result set plus its position metadata."""

    content: tuple[T, ...] = ()
    total_elements: int = 0
    total_pages: int = 0
    size: int = 0
    number: int = 0
    first: bool = True
    last: bool = True


# -----------------------------------------------------------------------------
# Request parameters
# -----------------------------------------------------------------------------
# Defaults here ARE the operation defaults.  The MCP tools pass through
# whatever the agent supplied and let these fill in the rest.
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class ProjectSearchParams:
    """Parameters for POST .../projects/search."""

    organization_id: str
    search_string: str = ""
    is_assign: bool = True             # include projects assigned to the user
    page: int = 0
    size: int = 12
    is_default: bool = False           # include the organization's default project
    sort: str = "name,asc"


@dataclass(frozen=True)
class APIFilterParams:
    """Parameters for POST .../collections/{collection_id}/apis/filter."""

    organization_id: str
    project_id: str
    catalogue_id: str
    collection_id: str                 # the catalogue's root_collection_id
    creators: list[str] = field(default_factory=list)
    collections: list[str] = field(default_factory=list)
    projects: list[str] = field(default_factory=list)
    page: int = 0
    size: int = 8


# -----------------------------------------------------------------------------
# Result — the two-variant envelope every client operation returns
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class Success(Generic[T]):
    """The operation completed; data is always structurally complete."""

    data: T
    message: str = ""

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure:
    """The operation failed.

    error is the underlying transport message (e.g. httpx's status error
    text); message is the human-readable summary, which includes the HTTP
    status when there was one.  status_code is None when no response was
    received.
    """

    error: str
    message: str = ""
    status_code: Optional[int] = None

    @property
    def ok(self) -> bool:
        return False


Result = Union[Success[T], Failure]
