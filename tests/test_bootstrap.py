# tests/test_bootstrap.py

"""
Tests for the first-admin bootstrap gate, profile provisioning
and admin promotion.
"""

import pytest

from core.errors import ConflictError, NotFoundError, PermissionDeniedError
from services.profiles import (
    can_self_promote,
    ensure_profile,
    get_profile,
    list_profiles,
    promote_user,
    register_user,
    wait_for_profile,
)
from tests.fakes import InMemoryStore, as_actor


# -----------------------------------------------------
# Gate
# -----------------------------------------------------
def test_gate_open_on_empty_system(store):
    assert can_self_promote(store) is True


def test_gate_closed_once_an_admin_exists(store, admin):
    assert can_self_promote(store) is False


def test_gate_ignores_regular_users(store, creator, volunteer):
    assert can_self_promote(store) is True


def test_first_registration_may_become_admin(store):
    profile, admin_granted, token = register_user(
        store, "First@Example.com", "secret123", "First Admin", make_admin=True
    )

    assert admin_granted is True
    assert profile["role"] == "admin"
    assert profile["email"] == "first@example.com"
    assert token == store.token_for(profile["id"])
    assert can_self_promote(store) is False


def test_second_registration_cannot_self_promote(store):
    register_user(store, "first@example.com", "secret123", "First", make_admin=True)

    profile, admin_granted, _ = register_user(
        store, "second@example.com", "secret123", "Second", make_admin=True
    )

    assert admin_granted is False
    assert profile["role"] == "user"
    assert store.count("profiles", {"role": "admin"}) == 1


def test_gate_closed_between_check_and_registration(store):
    """The client saw the gate open, then someone else became admin first."""
    assert can_self_promote(store) is True
    store.create_user("quick@example.com", "Quick", role="admin")

    profile, admin_granted, _ = register_user(
        store, "slow@example.com", "secret123", "Slow", make_admin=True
    )

    assert admin_granted is False
    assert profile["role"] == "user"


def test_rejected_promotion_write_keeps_user_role(store):
    store.fail_next_update("profiles")

    profile, admin_granted, _ = register_user(
        store, "first@example.com", "secret123", "First", make_admin=True
    )

    assert admin_granted is False
    assert profile["role"] == "user"
    assert can_self_promote(store) is True


def test_registration_without_make_admin(store):
    profile, admin_granted, _ = register_user(store, "plain@example.com", "secret123", "Plain")

    assert admin_granted is False
    assert profile["role"] == "user"
    assert profile["total_hours"] == 0


def test_duplicate_registration_is_conflict(store):
    register_user(store, "dup@example.com", "secret123", "Dup")

    with pytest.raises(ConflictError):
        register_user(store, "dup@example.com", "secret123", "Dup")


# -----------------------------------------------------
# Provisioning
# -----------------------------------------------------
def test_polls_until_trigger_creates_profile(store):
    store.profile_delay_reads = 3
    sleeps = []

    profile, _, _ = register_user(
        store, "late@example.com", "secret123", "Late", sleep=sleeps.append
    )

    assert profile["email"] == "late@example.com"
    assert len(store.rows("profiles")) == 1
    assert len(sleeps) == 2


def test_missing_profile_is_created_after_polling():
    store = InMemoryStore(provision_profiles=False)
    sleeps = []

    profile, _, _ = register_user(
        store, "notrigger@example.com", "secret123", "No Trigger", sleep=sleeps.append
    )

    assert profile["role"] == "user"
    assert profile["full_name"] == "No Trigger"
    assert len(sleeps) == 4
    assert len(store.rows("profiles")) == 1


def test_wait_for_profile_gives_up():
    store = InMemoryStore(provision_profiles=False)
    sleeps = []

    assert wait_for_profile(store, "nobody", attempts=3, interval=0.25, sleep=sleeps.append) is None
    assert sleeps == [0.25, 0.25]


def test_profile_created_concurrently_with_fallback_insert():
    store = InMemoryStore(provision_profiles=False)
    identity = store.register("race@example.com", "secret123", "Race")
    original_insert = store.insert

    def trigger_wins(table, row):
        original_insert(table, row)
        raise ConflictError(f"Failed to insert into {table}: record already exists")

    store.insert = trigger_wins

    profile = ensure_profile(store, identity, attempts=1)

    assert profile["id"] == identity.id
    assert len(store.rows("profiles")) == 1


# -----------------------------------------------------
# Derived totals
# -----------------------------------------------------
def test_total_hours_is_derived_from_approved_submissions(store, volunteer):
    store.tables["profiles"][-1]["total_hours"] = 999
    for hours, status in [(3, "approved"), (2, "approved"), (8, "pending"), (5, "rejected")]:
        store.insert(
            "hour_submissions",
            {
                "project_id": "p1",
                "user_id": volunteer.id,
                "hours_completed": hours,
                "description": "work",
                "status": status,
            },
        )

    assert get_profile(store, volunteer.id)["total_hours"] == 5


def test_get_profile_missing(store):
    with pytest.raises(NotFoundError):
        get_profile(store, "ghost")


def test_list_profiles_admin_only(store, admin, creator, volunteer):
    profiles = list_profiles(store, admin)
    assert {p["email"] for p in profiles} == {
        "admin@example.com", "alice@example.com", "bob@example.com"
    }
    assert all(p["total_hours"] == 0 for p in profiles)

    with pytest.raises(PermissionDeniedError):
        list_profiles(store, volunteer)


# -----------------------------------------------------
# Promotion by an existing admin
# -----------------------------------------------------
def test_admin_promotes_volunteer(store, admin, volunteer):
    promoted = promote_user(store, admin, volunteer.id)

    assert promoted["role"] == "admin"
    assert store.read_one("profiles", volunteer.id)["role"] == "admin"


def test_promoted_admin_can_promote_others(store, admin, creator, volunteer):
    promote_user(store, admin, creator.id)

    promoted = promote_user(store, as_actor(creator, role="admin"), volunteer.id)

    assert promoted["role"] == "admin"


def test_admin_cannot_promote_self(store, admin):
    with pytest.raises(PermissionDeniedError):
        promote_user(store, admin, admin.id)


def test_promote_unknown_user(store, admin):
    with pytest.raises(NotFoundError):
        promote_user(store, admin, "ghost")


def test_promote_existing_admin_is_conflict(store, admin, volunteer):
    promote_user(store, admin, volunteer.id)

    with pytest.raises(ConflictError):
        promote_user(store, admin, volunteer.id)


def test_volunteer_cannot_promote(store, creator, volunteer):
    with pytest.raises(PermissionDeniedError):
        promote_user(store, creator, volunteer.id)
