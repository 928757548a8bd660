def create_user(client, name="Ada Lovelace", email="ada@example.com", **extra):
    payload = {"name": name, "email_address": email, **extra}
    response = client.post("/api/v1/users", json=payload)
    assert response.status_code == 200
    return response.json()


def test_hello_world(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.text == "Hello world"


def test_create_user_assigns_id_and_defaults_corporate(client):
    created = create_user(client)

    assert created["id"]
    assert created["corporate"] is False
    assert "company" not in created

    fetched = client.get(f"/api/v1/users/{created['id']}").json()
    assert fetched == created


def test_create_user_ignores_client_supplied_id(client):
    created = create_user(client, id="chosen-by-client")
    assert created["id"] != "chosen-by-client"


def test_create_user_without_name_is_rejected(client):
    response = client.post("/api/v1/users", json={"email_address": "nobody@example.com"})
    assert response.status_code == 400
    assert client.get("/api/v1/users").json() == []


def test_malformed_body_is_rejected(client):
    response = client.post("/api/v1/users", content=b"{not json", headers={"Content-Type": "application/json"})
    assert response.status_code == 400
    assert response.text == "Invalid request body"


def test_get_unknown_user_is_not_found(client):
    response = client.get("/api/v1/users/does-not-exist")
    assert response.status_code == 404


def test_list_users_is_ordered_and_paginated(client):
    for index in range(12):
        create_user(client, name=f"user {index}", email=f"user{index:02d}@example.com")

    first_page = client.get("/api/v1/users").json()
    assert len(first_page) == 10
    assert [user["email_address"] for user in first_page] == sorted(user["email_address"] for user in first_page)

    second_page = client.get("/api/v1/users", params={"page": 2, "pageSize": 10}).json()
    assert [user["email_address"] for user in second_page] == ["user10@example.com", "user11@example.com"]

    assert client.get("/api/v1/users", params={"page": 5}).json() == []


def test_invalid_pagination_falls_back_to_defaults(client):
    for index in range(3):
        create_user(client, name=f"user {index}", email=f"user{index}@example.com")

    response = client.get("/api/v1/users", params={"page": "abc", "pageSize": "-4"})
    assert response.status_code == 200
    assert len(response.json()) == 3


def test_update_user_merges_fields(client):
    created = create_user(client)

    response = client.put(
        f"/api/v1/users/{created['id']}",
        json={"name": "Ada King", "email_address": "ada@example.com", "company": "Analytical Engines"},
    )
    assert response.status_code == 200

    fetched = client.get(f"/api/v1/users/{created['id']}").json()
    assert fetched["name"] == "Ada King"
    assert fetched["company"] == "Analytical Engines"


def test_delete_user_is_idempotent(client):
    created = create_user(client)

    assert client.delete(f"/api/v1/users/{created['id']}").status_code == 200
    assert client.delete(f"/api/v1/users/{created['id']}").status_code == 200
    assert client.get(f"/api/v1/users/{created['id']}").status_code == 404


def test_bare_options_request_succeeds(client):
    response = client.options("/api/v1/users")
    assert response.status_code == 200


def test_cors_allows_any_origin(client):
    response = client.get("/api/v1/users", headers={"Origin": "https://scoping.example.com"})
    assert response.headers["access-control-allow-origin"] == "*"
