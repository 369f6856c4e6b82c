# services/embeds.py

"""
Related rows shown on listings: the creator of a project, the project a
submission or edit request belongs to, and who submitted, requested or
reviewed it. Each helper does one batched read per related table.
"""

from typing import Dict, Iterable, List

PROFILES = "profiles"
PROJECTS = "projects"

PROFILE_SUMMARY_FIELDS = ("id", "full_name", "email")
PROJECT_SUMMARY_FIELDS = ("id", "title", "expected_hours", "created_by")


def _by_id(store, table: str, ids: Iterable, fields: tuple) -> Dict[str, dict]:
    wanted = {i for i in ids if i}
    rows = store.read_many(table, "id", sorted(wanted))
    return {row["id"]: {field: row.get(field) for field in fields} for row in rows}


def profiles_by_id(store, ids: Iterable) -> Dict[str, dict]:
    return _by_id(store, PROFILES, ids, PROFILE_SUMMARY_FIELDS)


def projects_by_id(store, ids: Iterable) -> Dict[str, dict]:
    return _by_id(store, PROJECTS, ids, PROJECT_SUMMARY_FIELDS)


def attach_profiles(store, rows: List[dict], column: str, key: str) -> List[dict]:
    """Set row[key] to the profile whose id is row[column] (None if missing)."""
    profiles = profiles_by_id(store, (row.get(column) for row in rows))
    return [{**row, key: profiles.get(row.get(column))} for row in rows]


def attach_projects(store, rows: List[dict]) -> List[dict]:
    """Set row["project"] from row["project_id"] (None if the project is gone)."""
    projects = projects_by_id(store, (row.get("project_id") for row in rows))
    return [{**row, "project": projects.get(row.get("project_id"))} for row in rows]


def attach_creators(store, projects: List[dict]) -> List[dict]:
    return attach_profiles(store, projects, "created_by", "creator")
