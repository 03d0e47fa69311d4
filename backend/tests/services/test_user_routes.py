"""User Routes — admin-only listing and deletion over HTTP."""


async def test_list_users_as_admin(client, admin_headers, regular_user):
    res = await client.get("/api/users", headers=admin_headers)
    assert res.status_code == 200
    users = res.json()
    assert [u["login"] for u in users] == ["admin", "maria"]
    assert all("password" not in u and "password_hash" not in u for u in users)


async def test_list_users_forbidden_for_user(client, user_headers):
    res = await client.get("/api/users", headers=user_headers)
    assert res.status_code == 403
    assert res.json()["error"]["message"] == "Access denied. Administrators only."


async def test_list_users_requires_token(client):
    res = await client.get("/api/users")
    assert res.status_code == 401


async def test_delete_user(client, admin_headers, regular_user):
    res = await client.delete(f"/api/users/{regular_user.id}", headers=admin_headers)
    assert res.status_code == 200
    assert res.json() == {"message": "User deleted successfully", "id": regular_user.id}

    res = await client.get("/api/users", headers=admin_headers)
    assert [u["login"] for u in res.json()] == ["admin"]


async def test_admin_cannot_delete_self(client, admin_headers, admin_user):
    res = await client.delete(f"/api/users/{admin_user.id}", headers=admin_headers)
    assert res.status_code == 400


async def test_delete_unknown_user(client, admin_headers):
    res = await client.delete("/api/users/999", headers=admin_headers)
    assert res.status_code == 404


async def test_delete_oversized_user_id(client, admin_headers, regular_user):
    res = await client.delete(f"/api/users/{2**63}", headers=admin_headers)
    assert res.status_code == 404

    res = await client.get("/api/users", headers=admin_headers)
    assert len(res.json()) == 2
