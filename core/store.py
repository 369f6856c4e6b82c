# core/store.py

"""
Data & Identity Store.

Every read, write, auth call and blob operation the services perform goes
through ``SupabaseStore``. Raw Supabase exceptions never leave this module:
they are translated onto the domain taxonomy in ``core.errors``.

The services only depend on the method names below, so tests substitute an
in-memory implementation with the same contract.
"""

from typing import Any, Dict, List, Optional

from supabase import Client

from core.errors import (
    AuthError,
    ConflictError,
    NotFoundError,
    StorageError,
    translate_supabase_error,
)
from core.logging_config import logger
from models.auth import Identity


def _identity_from_user(user, access_token: Optional[str] = None) -> Identity:
    metadata = getattr(user, "user_metadata", None) or {}
    return Identity(
        id=str(user.id),
        email=user.email or "",
        full_name=metadata.get("full_name") or "",
        access_token=access_token,
    )


class SupabaseStore:
    """Thin adapter from the store contract onto supabase-py."""

    def __init__(self, client: Client):
        self.client = client

    # ---------------------------------------------------------
    # Identity
    # ---------------------------------------------------------
    def authenticate(self, email: str, password: str) -> Identity:
        try:
            response = self.client.auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        except Exception as e:
            logger.warning(f"Login attempt failed for {email}: {type(e).__name__}")
            raise AuthError("Invalid email or password") from e

        if not response or not response.user or not response.session:
            raise AuthError("Invalid email or password")

        return _identity_from_user(response.user, response.session.access_token)

    def register(self, email: str, password: str, full_name: str) -> Identity:
        try:
            response = self.client.auth.sign_up(
                {
                    "email": email,
                    "password": password,
                    "options": {"data": {"full_name": full_name}},
                }
            )
        except Exception as e:
            err = translate_supabase_error(e, "Registration")
            if isinstance(err, ConflictError):
                raise err from e
            raise AuthError(f"Registration failed: {err.message}") from e

        if not response or not response.user:
            raise AuthError("Registration failed")

        # No session when email confirmation is required
        token = response.session.access_token if response.session else None
        return _identity_from_user(response.user, token)

    def current_identity(self, token: str) -> Optional[Identity]:
        try:
            response = self.client.auth.get_user(token)
        except Exception:
            return None
        if not response or not response.user or not response.user.email:
            return None
        return _identity_from_user(response.user)

    # ---------------------------------------------------------
    # Tables
    # ---------------------------------------------------------
    def read(
        self,
        table: str,
        filters: Optional[Dict[str, Any]] = None,
        order: Optional[str] = None,
        desc: bool = False,
        limit: Optional[int] = None,
    ) -> List[dict]:
        try:
            query = self.client.table(table).select("*")
            for key, val in (filters or {}).items():
                query = query.eq(key, val)
            if order:
                query = query.order(order, desc=desc)
            if limit is not None:
                query = query.limit(limit)
            result = query.execute()
        except Exception as e:
            raise translate_supabase_error(e, f"Failed to read {table}") from e
        return result.data or []

    def read_one(self, table: str, row_id: str) -> dict:
        rows = self.read(table, {"id": row_id}, limit=1)
        if not rows:
            raise NotFoundError(f"{table} row {row_id} not found")
        return rows[0]

    def read_many(self, table: str, column: str, values) -> List[dict]:
        """Rows whose ``column`` is any of ``values`` (one round trip)."""
        values = list(values)
        if not values:
            return []
        try:
            result = self.client.table(table).select("*").in_(column, values).execute()
        except Exception as e:
            raise translate_supabase_error(e, f"Failed to read {table}") from e
        return result.data or []

    def count(self, table: str, filters: Optional[Dict[str, Any]] = None) -> int:
        try:
            query = self.client.table(table).select("id", count="exact")
            for key, val in (filters or {}).items():
                query = query.eq(key, val)
            result = query.execute()
        except Exception as e:
            raise translate_supabase_error(e, f"Failed to count {table}") from e
        if result.count is not None:
            return result.count
        return len(result.data or [])

    def insert(self, table: str, row: dict) -> dict:
        try:
            result = self.client.table(table).insert(row).execute()
        except Exception as e:
            raise translate_supabase_error(e, f"Failed to insert into {table}") from e
        if not result.data:
            raise StorageError(f"Insert into {table} returned no row")
        return result.data[0]

    def update(
        self,
        table: str,
        row_id: str,
        patch: dict,
        expected: Optional[Dict[str, Any]] = None,
    ) -> dict:
        """
        Update one row by id. ``expected`` turns the write into a
        compare-and-set: it only applies where those columns still hold.
        """
        try:
            query = self.client.table(table).update(patch).eq("id", row_id)
            for key, val in (expected or {}).items():
                query = query.eq(key, val)
            result = query.execute()
        except Exception as e:
            raise translate_supabase_error(e, f"Failed to update {table}") from e

        if result.data:
            return result.data[0]

        if expected:
            # Distinguish a vanished row from a lost race
            self.read_one(table, row_id)
            raise ConflictError(
                f"{table} row {row_id} changed before this update was applied"
            )
        raise NotFoundError(f"{table} row {row_id} not found")

    def delete(
        self,
        table: str,
        row_id: Optional[str] = None,
        filters: Optional[Dict[str, Any]] = None,
    ) -> None:
        match = dict(filters or {})
        if row_id is not None:
            match["id"] = row_id
        if not match:
            raise ValueError("delete() requires a row id or filters")

        try:
            query = self.client.table(table).delete()
            for key, val in match.items():
                query = query.eq(key, val)
            result = query.execute()
        except Exception as e:
            raise translate_supabase_error(e, f"Failed to delete from {table}") from e

        if not result.data:
            raise NotFoundError(f"No {table} row matched {match}")

    # ---------------------------------------------------------
    # Blob storage
    # ---------------------------------------------------------
    def upload_blob(self, bucket: str, path: str, data: bytes, content_type: str) -> str:
        try:
            storage = self.client.storage.from_(bucket)
            storage.upload(
                path=path,
                file=data,
                file_options={
                    "content-type": content_type,
                    "cache-control": "3600",
                    "upsert": "false",
                },
            )
            return storage.get_public_url(path)
        except Exception as e:
            logger.error(f"Blob upload failed ({bucket}/{path}): {e}")
            raise StorageError(f"Failed to upload {path}") from e

    def delete_blob(self, bucket: str, path: str) -> None:
        try:
            self.client.storage.from_(bucket).remove([path])
        except Exception as e:
            logger.error(f"Blob delete failed ({bucket}/{path}): {e}")
            raise StorageError(f"Failed to delete {path}") from e
