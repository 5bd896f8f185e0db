from dataclasses import asdict

import pytest

from core.models import APIResource, Catalogue, Organization, Page, Project, User
from core.normalizers import (
    CATALOGUE_EXTRACTORS,
    bare_array,
    extract_list,
    list_field,
    normalize_api_page,
    normalize_api_resource,
    normalize_catalogue,
    normalize_catalogues,
    normalize_organization,
    normalize_organizations,
    normalize_project,
    normalize_project_page,
    normalize_projects,
    normalize_user,
)

RAW_ORGS = [
    {"id": "org-1", "name": "Acme", "visibility": "PUBLIC", "createdOn": "2024-01-01"},
    {"id": "org-2", "displayName": "Globex"},
]

RAW_PROJECTS = [
    {"id": "p-1", "name": "Payments", "enableKanbanBoard": True},
    {"id": "p-2", "projectName": "Ledger", "description": "Books"},
]

RAW_CATALOGUES = [
    {"id": "c-1", "name": "Public APIs", "rootCollectionId": "col-1", "version": "1.0"},
]


# -----------------------------------------------------------------------------
# Entities
# -----------------------------------------------------------------------------
def test_user_reads_backend_field_names():
    user = normalize_user({
        "id": "u-1",
        "userName": "jdoe",
        "emailAddress": "jdoe@example.com",
        "createdOn": "2024-01-01T00:00:00Z",
        "modifiedOn": "2024-02-01T00:00:00Z",
    })
    assert user == User(
        id="u-1",
        username="jdoe",
        email="jdoe@example.com",
        created_on="2024-01-01T00:00:00Z",
        modified_on="2024-02-01T00:00:00Z",
    )


def test_user_falls_back_to_alternate_names():
    user = normalize_user({"id": "u-1", "username": "jdoe", "email": "j@example.com"})
    assert user.username == "jdoe"
    assert user.email == "j@example.com"


def test_user_prefers_first_present_name():
    user = normalize_user({"userName": "primary", "username": "secondary"})
    assert user.username == "primary"


@pytest.mark.parametrize("raw", [None, {}, [], "oops", 42, {"id": None, "userName": {"x": 1}}])
def test_user_mapping_is_total(raw):
    assert normalize_user(raw) == User()


def test_organization_defaults():
    org = normalize_organization({"id": "org-1"})
    assert org == Organization(id="org-1", name="", description="", visibility="PRIVATE")


def test_organization_name_and_visibility_fallbacks():
    org = normalize_organization({
        "id": "org-1",
        "displayName": "Acme Corp",
        "organizationVisibility": "PUBLIC",
    })
    assert org.name == "Acme Corp"
    assert org.visibility == "PUBLIC"


def test_project_name_falls_back_through_display_and_project_name():
    assert normalize_project({"displayName": "A", "projectName": "B"}).name == "A"
    assert normalize_project({"projectName": "B"}).name == "B"
    assert normalize_project({}).name == ""


def test_project_kanban_flag_defaults_to_false():
    assert normalize_project({"id": "p"}).enable_kanban_board is False
    assert normalize_project({"enableKanbanBoard": None}).enable_kanban_board is False
    assert normalize_project({"enableKanbanBoard": True}).enable_kanban_board is True


@pytest.mark.parametrize("value, expected", [
    ("false", False),
    ("0", False),
    ("", False),
    ("true", True),
    (" TRUE ", True),
    (1, True),
    (0, False),
])
def test_project_kanban_flag_reads_strings_literally(value, expected):
    assert normalize_project({"enableKanbanBoard": value}).enable_kanban_board is expected


def test_catalogue_keeps_root_collection_id():
    catalogue = normalize_catalogue(RAW_CATALOGUES[0])
    assert catalogue.root_collection_id == "col-1"
    assert catalogue.status == ""
    assert catalogue.description == ""


def test_api_resource_fallbacks():
    api = normalize_api_resource({
        "id": "a-1",
        "apiName": "Orders",
        "type": "REST",
        "createdBy": "u-1",
    })
    assert api == APIResource(id="a-1", name="Orders", api_type="REST", created_by="u-1")


def test_numeric_ids_are_stringified():
    assert normalize_project({"id": 17}).id == "17"
    assert normalize_project({"id": True}).id == ""


# -----------------------------------------------------------------------------
# List envelopes
# -----------------------------------------------------------------------------
@pytest.mark.parametrize("envelope", [
    lambda items: items,
    lambda items: {"recentAccessedOrganizationResourceList": items},
    lambda items: {"organizations": items},
    lambda items: {"data": items},
    lambda items: {"content": items},
])
def test_organization_envelopes_agree(envelope):
    assert normalize_organizations(envelope(RAW_ORGS)) == normalize_organizations(RAW_ORGS)
    assert [org.name for org in normalize_organizations(envelope(RAW_ORGS))] == ["Acme", "Globex"]


@pytest.mark.parametrize("envelope", [
    lambda items: items,
    lambda items: {"recentAccessedProjectResourceList": items},
    lambda items: {"projects": items},
    lambda items: {"data": items},
    lambda items: {"content": items},
])
def test_project_envelopes_agree(envelope):
    assert normalize_projects(envelope(RAW_PROJECTS)) == normalize_projects(RAW_PROJECTS)


@pytest.mark.parametrize("envelope", [
    lambda items: items,
    lambda items: {"catalogues": items},
    lambda items: {"data": items},
    lambda items: {"content": items},
])
def test_catalogue_envelopes_agree(envelope):
    catalogues = normalize_catalogues(envelope(RAW_CATALOGUES))
    assert catalogues == [normalize_catalogue(RAW_CATALOGUES[0])]


def test_named_list_wins_over_generic_fields():
    raw = {"data": [{"id": "from-data"}], "catalogues": [{"id": "from-catalogues"}]}
    assert [c.id for c in normalize_catalogues(raw)] == ["from-catalogues"]


def test_non_list_field_is_skipped():
    raw = {"organizations": "not-a-list", "data": [{"id": "org-1"}]}
    assert [org.id for org in normalize_organizations(raw)] == ["org-1"]


@pytest.mark.parametrize("raw", [None, {}, "", 0, {"catalogues": None}, {"unexpected": [1, 2]}])
def test_unrecognised_list_envelope_is_empty(raw):
    assert normalize_catalogues(raw) == []


def test_extractors_are_independently_usable():
    assert bare_array([1, 2]) == [1, 2]
    assert bare_array({"data": []}) is None
    assert list_field("data")({"data": [1]}) == [1]
    assert list_field("data")([1]) is None
    assert extract_list({"content": ["x"]}, CATALOGUE_EXTRACTORS) == ["x"]


# -----------------------------------------------------------------------------
# Pages
# -----------------------------------------------------------------------------
def test_paginated_envelope():
    raw = {
        "content": RAW_PROJECTS,
        "totalElements": 14,
        "totalPages": 2,
        "size": 12,
        "number": 1,
        "first": False,
        "last": True,
    }
    page = normalize_project_page(raw, page=1, size=12)
    assert [p.id for p in page.content] == ["p-1", "p-2"]
    assert page.total_elements == 14
    assert page.total_pages == 2
    assert (page.size, page.number) == (12, 1)
    assert page.first is False
    assert page.last is True


@pytest.mark.parametrize("length", [0, 1, 5])
def test_bare_array_becomes_single_page(length):
    raw = [{"id": f"a-{i}"} for i in range(length)]
    page = normalize_api_page(raw, page=3, size=8)
    assert len(page.content) == length
    assert page.total_elements == length
    assert page.total_pages == 1
    assert page.first is True
    assert page.last is True
    assert page.size == 8
    assert page.number == 3


def test_missing_page_metadata_uses_request_values():
    page = normalize_api_page({"content": [{"id": "a-1"}]}, page=2, size=8)
    assert page.total_elements == 0
    assert page.total_pages == 0
    assert page.size == 8
    assert page.number == 2
    assert page.first is True
    assert page.last is True


def test_zero_size_and_number_fall_back_to_request_values():
    page = normalize_api_page({"content": [], "size": 0, "number": 0}, page=4, size=20)
    assert (page.size, page.number) == (20, 4)


@pytest.mark.parametrize("raw", [
    {"content": [], "totalElements": float("inf")},
    {"content": [], "totalPages": float("-inf")},
    {"content": [], "size": float("nan")},
    {"content": [], "number": float("nan")},
])
def test_non_finite_page_numbers_fall_back_to_defaults(raw):
    page = normalize_api_page(raw, page=4, size=20)
    assert page.total_elements == 0
    assert page.total_pages == 0
    assert (page.size, page.number) == (20, 4)


@pytest.mark.parametrize("raw", [None, {}, {"content": None}, "text", {"data": []}])
def test_unrecognised_page_is_empty(raw):
    assert normalize_project_page(raw, page=0, size=12) == Page(
        content=(), total_elements=0, total_pages=0, size=12, number=0, first=True, last=True,
    )


# -----------------------------------------------------------------------------
# Canonical records are fixed points
# -----------------------------------------------------------------------------
@pytest.mark.parametrize("normalize, raw", [
    (normalize_user, {"id": "u", "userName": "n", "emailAddress": "e", "createdOn": "c"}),
    (normalize_organization, RAW_ORGS[0]),
    (normalize_organization, {}),
    (normalize_project, RAW_PROJECTS[0]),
    (normalize_catalogue, RAW_CATALOGUES[0]),
    (normalize_api_resource, {"id": "a", "displayName": "A", "apiType": "REST", "modifiedBy": "m"}),
])
def test_normalizing_canonical_record_is_identity(normalize, raw):
    record = normalize(raw)
    assert normalize(record) == record
    assert normalize(asdict(record)) == record


def test_normalizing_canonical_page_is_identity():
    page = normalize_project_page({"content": RAW_PROJECTS, "totalElements": 2, "totalPages": 1},
                                  page=0, size=12)
    assert normalize_project_page(page, page=0, size=12) == page
    assert normalize_project_page(asdict(page), page=0, size=12) == page


def test_catalogue_default_record_is_complete():
    catalogue = normalize_catalogue({})
    assert catalogue == Catalogue()
    assert all(value == "" for value in asdict(catalogue).values())


def test_project_default_record():
    assert normalize_project(None) == Project(id="", name="", description="", enable_kanban_board=False)
