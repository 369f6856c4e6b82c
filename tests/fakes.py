# tests/fakes.py

"""
In-memory Data & Identity Store with the same contract as
core.store.SupabaseStore, including the schema's unique constraints and
compare-and-set updates.
"""

import copy
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

from core.errors import AuthError, ConflictError, NotFoundError, StorageError
from dependencies.auth import CurrentUser
from models.auth import Identity


UNIQUE_KEYS = {
    "profiles": [("id",)],
    "project_signups": [("project_id", "user_id")],
}

TIMESTAMP_COLUMNS = {
    "profiles": ("created_at", "updated_at"),
    "projects": ("created_at", "updated_at"),
    "project_edit_requests": ("created_at", "updated_at"),
    "project_signups": ("created_at",),
    "hour_submissions": ("submitted_at",),
}

BLOB_BASE_URL = "https://example.supabase.co/storage/v1/object/public"


class InMemoryStore:

    def __init__(self, provision_profiles: bool = True):
        self.tables: Dict[str, List[dict]] = {name: [] for name in TIMESTAMP_COLUMNS}
        self.blobs: Dict[tuple, bytes] = {}
        self.users: Dict[str, dict] = {}
        self.tokens: Dict[str, Identity] = {}

        # Mimics the on-signup trigger that creates profile rows
        self.provision_profiles = provision_profiles
        self.profile_delay_reads = 0
        self._delayed_profiles: Dict[str, list] = {}

        self.failing_updates: Dict[str, Exception] = {}
        self.update_calls: List[tuple] = []
        self._clock = datetime(2026, 1, 1, tzinfo=timezone.utc)

    # ---------------------------------------------------------
    # Test helpers
    # ---------------------------------------------------------
    def _now(self) -> str:
        self._clock += timedelta(seconds=1)
        return self._clock.isoformat()

    def fail_next_update(self, table: str, error: Optional[Exception] = None):
        self.failing_updates[table] = error or StorageError(f"Failed to update {table}")

    def create_user(self, email: str, full_name: str = "", role: str = "user", password: str = "secret123"):
        identity = self.register(email, password, full_name)
        if not self.read("profiles", {"id": identity.id}):
            self.insert(
                "profiles",
                {"id": identity.id, "email": email, "full_name": full_name, "role": "user"},
            )
        if role != "user":
            self.update("profiles", identity.id, {"role": role})
        return identity

    def rows(self, table: str) -> List[dict]:
        return copy.deepcopy(self.tables[table])

    # ---------------------------------------------------------
    # Identity
    # ---------------------------------------------------------
    def authenticate(self, email: str, password: str) -> Identity:
        user = self.users.get(email)
        if user is None or user["password"] != password:
            raise AuthError("Invalid email or password")
        return user["identity"].model_copy(update={"access_token": user["token"]})

    def register(self, email: str, password: str, full_name: str) -> Identity:
        if email in self.users:
            raise ConflictError("Registration: record already exists")

        user_id = str(uuid.uuid4())
        token = f"token-{user_id}"
        identity = Identity(id=user_id, email=email, full_name=full_name)
        self.users[email] = {"password": password, "identity": identity, "token": token}
        self.tokens[token] = identity

        if self.provision_profiles:
            row = {"id": user_id, "email": email, "full_name": full_name, "role": "user"}
            if self.profile_delay_reads:
                self._delayed_profiles[user_id] = [self.profile_delay_reads, row]
            else:
                self.insert("profiles", row)

        return identity.model_copy(update={"access_token": token})

    def current_identity(self, token: str) -> Optional[Identity]:
        return self.tokens.get(token)

    def token_for(self, user_id: str) -> str:
        return f"token-{user_id}"

    # ---------------------------------------------------------
    # Tables
    # ---------------------------------------------------------
    def _materialize_delayed_profiles(self):
        for user_id, entry in list(self._delayed_profiles.items()):
            entry[0] -= 1
            if entry[0] <= 0:
                del self._delayed_profiles[user_id]
                self.insert("profiles", entry[1])

    @staticmethod
    def _matches(row: dict, filters: Dict[str, Any]) -> bool:
        return all(row.get(key) == val for key, val in filters.items())

    def read(self, table, filters=None, order=None, desc=False, limit=None) -> List[dict]:
        if table == "profiles":
            self._materialize_delayed_profiles()

        rows = [r for r in self.tables[table] if self._matches(r, filters or {})]
        if order:
            rows.sort(key=lambda r: (r.get(order) is None, r.get(order) or ""), reverse=desc)
        if limit is not None:
            rows = rows[:limit]
        return copy.deepcopy(rows)

    def read_one(self, table, row_id) -> dict:
        rows = self.read(table, {"id": row_id}, limit=1)
        if not rows:
            raise NotFoundError(f"{table} row {row_id} not found")
        return rows[0]

    def read_many(self, table, column, values) -> List[dict]:
        wanted = set(values)
        if not wanted:
            return []
        return [row for row in self.read(table) if row.get(column) in wanted]

    def count(self, table, filters=None) -> int:
        return len(self.read(table, filters))

    def insert(self, table, row) -> dict:
        row = copy.deepcopy(row)
        row.setdefault("id", str(uuid.uuid4()))
        for column in TIMESTAMP_COLUMNS[table]:
            row.setdefault(column, self._now())

        for key in UNIQUE_KEYS.get(table, []):
            value = tuple(row.get(k) for k in key)
            if any(tuple(r.get(k) for k in key) == value for r in self.tables[table]):
                raise ConflictError(f"Failed to insert into {table}: record already exists")

        self.tables[table].append(row)
        return copy.deepcopy(row)

    def update(self, table, row_id, patch, expected=None) -> dict:
        self.update_calls.append((table, row_id, dict(patch)))
        if table in self.failing_updates:
            raise self.failing_updates.pop(table)

        for row in self.tables[table]:
            if row["id"] != row_id:
                continue
            if expected and not self._matches(row, expected):
                raise ConflictError(
                    f"{table} row {row_id} changed before this update was applied"
                )
            row.update(copy.deepcopy(patch))
            return copy.deepcopy(row)
        raise NotFoundError(f"{table} row {row_id} not found")

    def delete(self, table, row_id=None, filters=None) -> None:
        match = dict(filters or {})
        if row_id is not None:
            match["id"] = row_id
        keep = [r for r in self.tables[table] if not self._matches(r, match)]
        if len(keep) == len(self.tables[table]):
            raise NotFoundError(f"No {table} row matched {match}")
        self.tables[table] = keep

    # ---------------------------------------------------------
    # Blob storage
    # ---------------------------------------------------------
    def upload_blob(self, bucket, path, data, content_type) -> str:
        if (bucket, path) in self.blobs:
            raise StorageError(f"Failed to upload {path}")
        self.blobs[(bucket, path)] = data
        return f"{BLOB_BASE_URL}/{bucket}/{path}"

    def delete_blob(self, bucket, path) -> None:
        self.blobs.pop((bucket, path), None)


# ---------------------------------------------------------
# Actors
# ---------------------------------------------------------
def as_actor(identity, role: str = "user") -> CurrentUser:
    return CurrentUser(id=identity.id, email=identity.email, role=role, full_name=identity.full_name)


def auth_headers(store: InMemoryStore, user) -> dict:
    return {"Authorization": f"Bearer {store.token_for(user.id)}"}
