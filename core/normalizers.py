# =============================================================================
# core/normalizers.py  —  Raw XAPIHub JSON → canonical records
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   The XAPIHub backend has changed its response envelopes over time.  The
#   same list of organizations may arrive as:
#
#     [ {...}, {...} ]                                           bare array
#     { "recentAccessedOrganizationResourceList": [ ... ] }      named list
#     { "data": [ ... ] }                                        generic data
#     { "content": [ ... ] }                                     paged content
#
#   and field names drift too ("userName" vs "username").  This module maps
#   whatever came back into the records of core/models.py.
#
# TWO RULES:
#   1. Every function here is TOTAL.  It accepts any decoded JSON value
#      (dict, list, str, None, ...) and returns a fully populated record.
#      A missing or odd field becomes its default ("" / False / PRIVATE);
#      it never raises.
#   2. Envelope handling is DECLARATIVE.  Each list-returning resource has an
#      ordered tuple of extractors; the first one that finds a list wins.
#      Nothing matching means an empty list, not an error.
#
# All historical envelope names are kept on purpose.  Do not drop one until
# the backend has been confirmed to no longer send it.
#
# Each field lists its source keys in priority order.  The canonical
# snake_case name is always the last alias, so a record that has already
# been normalized (or its asdict() form) normalizes to an equal record.
# =============================================================================

import math
from dataclasses import asdict, is_dataclass
from typing import Any, Callable, Mapping, Optional, Sequence, TypeVar

from core.models import APIResource, Catalogue, Organization, Page, Project, User

T = TypeVar("T")

Extractor = Callable[[Any], Optional[list]]


# =============================================================================
# Field coalescing
# =============================================================================
def _as_mapping(raw: Any) -> Mapping[str, Any]:
    if isinstance(raw, Mapping):
        return raw
    if is_dataclass(raw) and not isinstance(raw, type):
        return asdict(raw)
    return {}


def _text(obj: Mapping[str, Any], *keys: str, default: str = "") -> str:
    """First non-empty scalar among keys, as a string."""
    for key in keys:
        value = obj.get(key)
        if isinstance(value, bool):
            continue
        if isinstance(value, str) and value:
            return value
        if isinstance(value, (int, float)):
            return str(value)
    return default


def _flag(obj: Mapping[str, Any], *keys: str) -> bool:
    """True if any key holds true, a non-zero integer or the string "true".

    Other strings (including "false" and "0") count as false.
    """
    for key in keys:
        value = obj.get(key)
        if isinstance(value, str):
            if value.strip().lower() == "true":
                return True
        elif isinstance(value, (bool, int)) and value:
            return True
    return False


def _count(obj: Mapping[str, Any], *keys: str, default: int = 0) -> int:
    """First non-zero finite number among keys, truncated to int.

    Zero, inf, NaN and junk fall back to default.
    """
    for key in keys:
        value = obj.get(key)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            continue
        if isinstance(value, float) and not math.isfinite(value):
            continue
        if value:
            return int(value)
    return default


def _switch(obj: Mapping[str, Any], *keys: str) -> bool:
    """Pagination booleans: absent means True."""
    for key in keys:
        value = obj.get(key)
        if isinstance(value, bool):
            return value
    return True


# =============================================================================
# Entity mappers
# =============================================================================
def normalize_user(raw: Any) -> User:
    obj = _as_mapping(raw)
    return User(
        id=_text(obj, "id"),
        username=_text(obj, "userName", "username"),
        email=_text(obj, "emailAddress", "email"),
        created_on=_text(obj, "createdOn", "created_on"),
        modified_on=_text(obj, "modifiedOn", "modified_on"),
    )


def normalize_organization(raw: Any) -> Organization:
    obj = _as_mapping(raw)
    return Organization(
        id=_text(obj, "id"),
        name=_text(obj, "name", "displayName"),
        description=_text(obj, "description"),
        visibility=_text(obj, "visibility", "organizationVisibility", default="PRIVATE"),
        created_on=_text(obj, "createdOn", "created_on"),
        modified_on=_text(obj, "modifiedOn", "modified_on"),
    )


def normalize_project(raw: Any) -> Project:
    obj = _as_mapping(raw)
    return Project(
        id=_text(obj, "id"),
        name=_text(obj, "name", "displayName", "projectName"),
        description=_text(obj, "description"),
        enable_kanban_board=_flag(obj, "enableKanbanBoard", "enable_kanban_board"),
    )


def normalize_catalogue(raw: Any) -> Catalogue:
    obj = _as_mapping(raw)
    return Catalogue(
        id=_text(obj, "id"),
        name=_text(obj, "name", "displayName"),
        description=_text(obj, "description"),
        version=_text(obj, "version"),
        status=_text(obj, "status"),
        created_on=_text(obj, "createdOn", "created_on"),
        modified_on=_text(obj, "modifiedOn", "modified_on"),
        root_collection_id=_text(obj, "rootCollectionId", "root_collection_id"),
    )


def normalize_api_resource(raw: Any) -> APIResource:
    obj = _as_mapping(raw)
    return APIResource(
        id=_text(obj, "id"),
        name=_text(obj, "name", "displayName", "apiName"),
        description=_text(obj, "description"),
        version=_text(obj, "version"),
        status=_text(obj, "status"),
        created_on=_text(obj, "createdOn", "created_on"),
        modified_on=_text(obj, "modifiedOn", "modified_on"),
        created_by=_text(obj, "createdBy", "created_by"),
        modified_by=_text(obj, "modifiedBy", "modified_by"),
        api_type=_text(obj, "apiType", "type", "api_type"),
        visibility=_text(obj, "visibility"),
    )


# =============================================================================
# Envelope extractors
# =============================================================================
def bare_array(raw: Any) -> Optional[list]:
    """The payload itself is the list."""
    if isinstance(raw, (list, tuple)):
        return list(raw)
    return None


def list_field(name: str) -> Extractor:
    """Build an extractor for a list stored under ``name``."""

    def extract(raw: Any) -> Optional[list]:
        if isinstance(raw, Mapping):
            value = raw.get(name)
            if isinstance(value, (list, tuple)):
                return list(value)
        return None

    extract.__name__ = f"list_field_{name}"
    return extract


ORGANIZATION_EXTRACTORS: tuple[Extractor, ...] = (
    bare_array,
    list_field("recentAccessedOrganizationResourceList"),
    list_field("organizations"),
    list_field("data"),
    list_field("content"),
)

PROJECT_EXTRACTORS: tuple[Extractor, ...] = (
    bare_array,
    list_field("recentAccessedProjectResourceList"),
    list_field("projects"),
    list_field("data"),
    list_field("content"),
)

CATALOGUE_EXTRACTORS: tuple[Extractor, ...] = (
    bare_array,
    list_field("catalogues"),
    list_field("data"),
    list_field("content"),
)


def extract_list(raw: Any, extractors: Sequence[Extractor]) -> list:
    """Return the first list any extractor finds, or an empty list."""
    for extractor in extractors:
        items = extractor(raw)
        if items is not None:
            return items
    return []


def normalize_list(
    raw: Any,
    extractors: Sequence[Extractor],
    mapper: Callable[[Any], T],
) -> list[T]:
    return [mapper(item) for item in extract_list(raw, extractors)]


def normalize_organizations(raw: Any) -> list[Organization]:
    return normalize_list(raw, ORGANIZATION_EXTRACTORS, normalize_organization)


def normalize_projects(raw: Any) -> list[Project]:
    return normalize_list(raw, PROJECT_EXTRACTORS, normalize_project)


def normalize_catalogues(raw: Any) -> list[Catalogue]:
    return normalize_list(raw, CATALOGUE_EXTRACTORS, normalize_catalogue)


# =============================================================================
# Pages
# =============================================================================
def normalize_page(
    raw: Any,
    mapper: Callable[[Any], T],
    page: int,
    size: int,
) -> Page[T]:
    """Map a paginated envelope (or a bare array) into a Page.

    Args:
        raw: Decoded response body.
        mapper: Entity mapper applied to every element of the page.
        page: The page index the caller asked for.
        size: The page size the caller asked for.

    Returns:
        A Page.  A bare array becomes a single complete page; an envelope
        with missing size/number falls back to the requested values,
        missing totals to 0 and missing first/last flags to True.  Anything
        unrecognisable becomes an empty page.
    """
    items = bare_array(raw)
    if items is not None:
        return Page(
            content=tuple(mapper(item) for item in items),
            total_elements=len(items),
            total_pages=1,
            size=size,
            number=page,
            first=True,
            last=True,
        )

    obj = _as_mapping(raw)
    content = obj.get("content")
    if not isinstance(content, (list, tuple)):
        return Page(content=(), size=size, number=page)

    return Page(
        content=tuple(mapper(item) for item in content),
        total_elements=_count(obj, "totalElements", "total_elements"),
        total_pages=_count(obj, "totalPages", "total_pages"),
        size=_count(obj, "size", default=size),
        number=_count(obj, "number", default=page),
        first=_switch(obj, "first"),
        last=_switch(obj, "last"),
    )


def normalize_project_page(raw: Any, page: int, size: int) -> Page[Project]:
    return normalize_page(raw, normalize_project, page, size)


def normalize_api_page(raw: Any, page: int, size: int) -> Page[APIResource]:
    return normalize_page(raw, normalize_api_resource, page, size)
