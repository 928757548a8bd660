AUTH = {"Authorization": "Bearer valid-token"}

OUTLINE = {
    "technology_name": "AWS",
    "course_code": "AWS-101",
    "course_name": "Cloud Practitioner Essentials",
    "outline": "Cloud concepts, security, pricing.",
}


def test_requests_without_token_are_unauthorized(client):
    assert client.get("/api/v1/course-outlines").status_code == 401
    assert client.post("/api/v1/course-outlines", json=OUTLINE).status_code == 401


def test_requests_with_invalid_token_are_unauthorized(client):
    response = client.get("/api/v1/course-outlines", headers={"Authorization": "Bearer forged"})
    assert response.status_code == 401

    response = client.get("/api/v1/course-outlines", headers={"Authorization": "valid-token"})
    assert response.status_code == 401


def test_other_routes_do_not_require_a_token(client):
    assert client.get("/api/v1/users").status_code == 200


def test_create_and_fetch_outline(client):
    created = client.post("/api/v1/course-outlines", json=OUTLINE, headers=AUTH).json()
    assert created["id"]

    fetched = client.get(f"/api/v1/course-outlines/{created['id']}", headers=AUTH).json()
    assert fetched == created


def test_filter_outlines(client):
    client.post("/api/v1/course-outlines", json=OUTLINE, headers=AUTH)
    client.post(
        "/api/v1/course-outlines",
        json={**OUTLINE, "technology_name": "Azure", "course_code": "AZ-900"},
        headers=AUTH,
    )

    filtered = client.get(
        "/api/v1/course-outlines",
        params={"filterName": "technology_name", "filterValue": "Azure"},
        headers=AUTH,
    ).json()
    assert [outline["course_code"] for outline in filtered] == ["AZ-900"]

    # A filter without a value lists everything
    unfiltered = client.get(
        "/api/v1/course-outlines", params={"filterName": "technology_name"}, headers=AUTH
    ).json()
    assert [outline["technology_name"] for outline in unfiltered] == ["AWS", "Azure"]


def test_update_outline_overwrites_document(client):
    created = client.post("/api/v1/course-outlines", json=OUTLINE, headers=AUTH).json()

    client.put(
        f"/api/v1/course-outlines/{created['id']}",
        json={"technology_name": "AWS", "course_name": "Renamed"},
        headers=AUTH,
    )
    fetched = client.get(f"/api/v1/course-outlines/{created['id']}", headers=AUTH).json()
    assert fetched["course_name"] == "Renamed"
    assert "course_code" not in fetched
    assert "outline" not in fetched


def test_delete_outline(client):
    created = client.post("/api/v1/course-outlines", json=OUTLINE, headers=AUTH).json()
    assert client.delete(f"/api/v1/course-outlines/{created['id']}", headers=AUTH).status_code == 200
    assert client.get(f"/api/v1/course-outlines/{created['id']}", headers=AUTH).status_code == 404
