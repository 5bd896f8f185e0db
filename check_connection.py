# =============================================================================
# check_connection.py  —  Live smoke check against the XAPIHub API
# =============================================================================
#
# HOW TO RUN:
#   uv run python check_connection.py
#
# WHAT IT DOES:
#   Walks the same path an agent would, against the real backend:
#     1. test the connection (current user)
#     2. list accessed organizations
#     3. list recent projects of the first organization
#     4. list catalogues of the first project
#     5. list the first page of APIs of the first catalogue
#   and prints what it finds.  Exits 1 if the connection test fails, so it
#   can gate a deployment script.
# =============================================================================

import sys
from typing import Callable

from dotenv import load_dotenv

from core.config import ConfigurationError, load_config
from core.models import APIFilterParams, Success
from core.xapihub_client import XAPIHubClient, create_client


def run_checks(client: XAPIHubClient, out: Callable[[str], None] = print) -> bool:
    """Exercise every read path once.  Returns False if the API is unreachable."""
    out("1️⃣  Testing connection...")
    connection = client.test_connection()
    if not isinstance(connection, Success):
        out(f"❌ {connection.message}")
        out(f"   {connection.error}")
        return False
    out(f"✅ {connection.message}")

    user = client.get_current_user()
    if isinstance(user, Success):
        out(f"👤 {user.data.username} <{user.data.email}> (ID: {user.data.id})")

    out("\n2️⃣  Accessed organizations...")
    organizations = client.get_accessed_organizations()
    if not isinstance(organizations, Success):
        out(f"❌ {organizations.message}")
        return True
    for org in organizations.data:
        out(f"   • {org.name} (ID: {org.id}) [{org.visibility}]")
    if not organizations.data:
        out("   (none)")
        return True
    org = organizations.data[0]

    out(f"\n3️⃣  Recent projects in {org.name}...")
    projects = client.get_recent_accessed_projects(org.id)
    if not isinstance(projects, Success):
        out(f"❌ {projects.message}")
        return True
    for project in projects.data:
        out(f"   • {project.name} (ID: {project.id})")
    if not projects.data:
        out("   (none)")
        return True
    project = projects.data[0]

    out(f"\n4️⃣  Catalogues in {project.name}...")
    catalogues = client.get_catalogues(org.id, project.id)
    if not isinstance(catalogues, Success):
        out(f"❌ {catalogues.message}")
        return True
    for catalogue in catalogues.data:
        out(f"   • {catalogue.name} (ID: {catalogue.id}, "
            f"root collection: {catalogue.root_collection_id or 'N/A'})")
    if not catalogues.data:
        out("   (none)")
        return True
    catalogue = catalogues.data[0]
    if not catalogue.root_collection_id:
        out(f"   ⚠ {catalogue.name} has no root collection; skipping API lookup")
        return True

    out(f"\n5️⃣  APIs in {catalogue.name}...")
    apis = client.get_api_details(APIFilterParams(
        organization_id=org.id,
        project_id=project.id,
        catalogue_id=catalogue.id,
        collection_id=catalogue.root_collection_id,
    ))
    if not isinstance(apis, Success):
        out(f"❌ {apis.message}")
        return True
    for api in apis.data.content:
        out(f"   • {api.name} {api.version} [{api.status}]")
    out(f"   Page {apis.data.number + 1} of {apis.data.total_pages}, "
        f"{apis.data.total_elements} APIs in total")
    return True


def main() -> None:
    load_dotenv()
    print("🔍 Checking XAPIHub API connection...\n")
    try:
        config = load_config()
    except ConfigurationError as e:
        print(f"❌ Error: {e}")
        sys.exit(1)

    print(f"📡 Base URL: {config.base_url}\n")
    client = create_client(config)
    try:
        ok = run_checks(client)
    finally:
        client.close()

    print("\n🎉 Done!" if ok else "\n💥 Connection check failed.")
    sys.exit(0 if ok else 1)


if __name__ == "__main__":
    main()
