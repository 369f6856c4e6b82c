# tests/test_scenario.py

"""
End-to-end volunteer journey through the HTTP API.
"""

from tests.fakes import auth_headers


def register(client, email, full_name, make_admin=False):
    response = client.post(
        "/auth/register",
        json={"email": email, "password": "secret123", "full_name": full_name, "make_admin": make_admin},
    )
    assert response.status_code == 201
    data = response.json()
    return data["profile"], {"Authorization": f"Bearer {data['access_token']}"}


def test_project_to_approved_hours_and_rejected_edit(client, store):
    admin, admin_headers = register(client, "admin@example.com", "Ada Admin", make_admin=True)
    _, alice = register(client, "alice@example.com", "Alice")
    bob_profile, bob = register(client, "bob@example.com", "Bob")
    assert admin["role"] == "admin"

    # A proposes a project; it waits for review
    project = client.post(
        "/projects",
        json={
            "title": "Beach Cleanup Drive",
            "description": "Pick up litter along the shoreline",
            "expected_hours": 6,
            "location": "Ala Moana Beach",
            "date": "2026-05-01",
        },
        headers=alice,
    ).json()
    assert project["status"] == "pending"
    assert client.get("/projects", headers=bob).json() == []

    pending = client.get("/admin/projects/pending", headers=admin_headers).json()
    assert [p["id"] for p in pending] == [project["id"]]

    approved = client.post(f"/admin/projects/{project['id']}/approve", headers=admin_headers).json()
    assert approved["status"] == "approved"

    # B joins and logs 5 hours
    listed = client.get("/projects", params={"search": "beach"}, headers=bob).json()
    assert [(p["id"], p["signed_up"]) for p in listed] == [(project["id"], False)]

    assert client.post(f"/projects/{project['id']}/signup", headers=bob).status_code == 201
    assert client.get("/projects", headers=bob).json()[0]["signed_up"] is True
    assert [p["id"] for p in client.get("/projects/joined", headers=bob).json()] == [project["id"]]

    submission = client.post(
        "/hours",
        json={"project_id": project["id"], "hours_completed": 5, "description": "Collected 3 bags"},
        headers=bob,
    ).json()
    assert submission["status"] == "pending"

    summary = client.get("/hours", headers=bob).json()
    assert (summary["approved_hours"], summary["pending_hours"]) == (0, 5)

    reviewed = client.post(f"/admin/hours/{submission['id']}/approve", headers=admin_headers).json()
    assert reviewed["status"] == "approved"
    assert reviewed["reviewed_by"] == admin["id"]

    assert client.get("/auth/me", headers=bob).json()["total_hours"] == 5
    summary = client.get("/hours", headers=bob).json()
    assert (summary["approved_hours"], summary["pending_hours"]) == (5, 0)
    users = {u["id"]: u for u in client.get("/admin/users", headers=admin_headers).json()}
    assert users[bob_profile["id"]]["total_hours"] == 5

    # A asks to move the project; the admin refuses
    edit = client.post(
        f"/projects/{project['id']}/edit-requests",
        json={**{k: project[k] for k in ("title", "description", "expected_hours", "date")}, "location": "Kailua Beach"},
        headers=alice,
    )
    assert edit.status_code == 201
    edit_id = edit.json()["id"]

    rejected = client.post(
        f"/admin/edit-requests/{edit_id}/reject",
        json={"admin_notes": "wrong address"},
        headers=admin_headers,
    ).json()
    assert rejected["status"] == "rejected"

    assert client.get(f"/projects/{project['id']}", headers=alice).json()["location"] == "Ala Moana Beach"
    mine = client.get("/edit-requests", headers=alice).json()
    assert [(r["id"], r["status"], r["admin_notes"]) for r in mine] == [(edit_id, "rejected", "wrong address")]


def test_approved_edit_updates_project(client, store, admin, creator, project_fields):
    headers = auth_headers(store, creator)
    admin_headers = auth_headers(store, admin)
    project_id = client.post("/projects", json=project_fields, headers=headers).json()["id"]
    client.post(f"/admin/projects/{project_id}/approve", headers=admin_headers)

    edit_id = client.post(
        f"/projects/{project_id}/edit-requests",
        json={**project_fields, "expected_hours": 8, "thumbnail_url": ""},
        headers=headers,
    ).json()["id"]

    response = client.post(f"/admin/edit-requests/{edit_id}/approve", headers=admin_headers)

    assert response.status_code == 200
    project = client.get(f"/projects/{project_id}", headers=headers).json()
    assert project["expected_hours"] == 8
    assert project["thumbnail_url"] is None
    assert project["status"] == "approved"
