import pytest

from conftest import login, project_payload

pytestmark = pytest.mark.integration


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["storage"]["projects"] == 1
    assert body["scheduler"]["running"] is True


def test_register_and_login(client):
    response = client.post(
        "/api/register",
        json={"email": "lead@example.com", "password": "long-enough", "role": "manager"},
    )
    assert response.status_code == 201
    assert response.json()["message"] == "User registered"

    response = client.post("/api/login", json={"email": "lead@example.com", "password": "long-enough"})
    assert response.status_code == 200
    body = response.json()
    assert body["user"]["email"] == "lead@example.com"
    assert body["user"]["role"] == "manager"
    assert "password_hash" not in body["user"]

    me = client.get("/api/me", headers={"Authorization": f"Bearer {body['token']}"})
    assert me.json()["email"] == "lead@example.com"


def test_register_rejects_duplicate_email(client):
    response = client.post(
        "/api/register",
        json={"email": "manager@example.com", "password": "whatever123", "role": "manager"},
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Email already exists"


def test_register_rejects_unknown_role(client):
    response = client.post(
        "/api/register",
        json={"email": "x@example.com", "password": "whatever123", "role": "admin"},
    )
    assert response.status_code == 400


def test_register_rejects_password_longer_than_bcrypt_accepts(client):
    response = client.post(
        "/api/register",
        json={"email": "long@example.com", "password": "p" * 80, "role": "manager"},
    )
    assert response.status_code == 400
    assert client.get("/health").json()["storage"]["users"] == 2

    # 24 three-byte characters is exactly the limit
    response = client.post(
        "/api/register",
        json={"email": "edge@example.com", "password": "€" * 24, "role": "manager"},
    )
    assert response.status_code == 201


def test_login_with_overlong_password_is_unauthorized(client):
    response = client.post("/api/login", json={"email": "manager@example.com", "password": "p" * 80})
    assert response.status_code == 401


def test_login_rejects_bad_password(client):
    response = client.post("/api/login", json={"email": "manager@example.com", "password": "nope"})
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid email or password"


def test_submit_project_provisions_candidate_once(client):
    first = client.post("/api/projects", json=project_payload())
    second = client.post("/api/projects", json=project_payload(projectTitle="Second"))

    assert first.status_code == 201
    project = first.json()["project"]
    assert project["isNew"] is True
    assert project["projectTitle"] == "Churn Model"
    assert project["githubLink"] == "https://github.com/jane/churn"
    assert second.json()["project"]["submittedBy"] == project["submittedBy"]
    assert client.get("/health").json()["storage"]["users"] == 3  # manager, demo candidate, jane


def test_submit_project_optional_repository_link(client):
    payload = project_payload()
    del payload["githubLink"]
    response = client.post("/api/projects", json=payload)
    assert response.status_code == 201
    assert response.json()["project"]["githubLink"] is None


@pytest.mark.parametrize("missing", ["fullName", "email", "industryRole", "projectTitle",
                                     "projectDescription", "projectLink"])
def test_submit_project_requires_fields(client, missing):
    payload = project_payload()
    del payload[missing]

    response = client.post("/api/projects", json=payload)

    assert response.status_code == 400
    assert response.json()["detail"] == "All required fields must be provided"
    storage = client.get("/health").json()["storage"]
    assert storage["projects"] == 1
    assert storage["users"] == 2


def test_submit_project_rejects_blank_fields(client):
    response = client.post("/api/projects", json=project_payload(projectTitle="   "))
    assert response.status_code == 400


def test_list_projects_requires_manager(client, candidate_headers):
    before = client.get("/health").json()["storage"]

    response = client.get("/api/projects", headers=candidate_headers)

    assert response.status_code == 403
    assert client.get("/health").json()["storage"] == before


def test_list_projects_requires_token(client):
    assert client.get("/api/projects").status_code == 401
    response = client.get("/api/projects", headers={"Authorization": "Bearer garbage"})
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid token"


def test_list_projects_hydrates_submitter(client, manager_headers):
    response = client.get("/api/projects", headers=manager_headers)

    assert response.status_code == 200
    [project] = response.json()
    assert project["id"] == "project1"
    assert project["submittedBy"] == {"id": "candidate1", "email": "john@example.com", "role": "candidate"}


def test_save_project_marks_seen_and_keeps_duplicates(client, manager_headers):
    for _ in range(2):
        response = client.post("/api/saved-projects", json={"projectId": "project1"}, headers=manager_headers)
        assert response.status_code == 201

    saved = client.get("/api/saved-projects", headers=manager_headers).json()
    assert [p["id"] for p in saved] == ["project1", "project1"]
    assert all(p["isNew"] is False for p in saved)

    [project] = client.get("/api/projects", headers=manager_headers).json()
    assert project["isNew"] is False


def test_saved_projects_are_per_manager(client, manager_headers):
    client.post("/api/saved-projects", json={"projectId": "project1"}, headers=manager_headers)
    client.post(
        "/api/register",
        json={"email": "other@example.com", "password": "other-pass", "role": "manager"},
    )
    other = login(client, "other@example.com", "other-pass")

    assert client.get("/api/saved-projects", headers=other).json() == []


def test_save_unknown_project(client, manager_headers):
    response = client.post("/api/saved-projects", json={"projectId": "nope"}, headers=manager_headers)
    assert response.status_code == 404
    assert client.get("/health").json()["storage"]["saved_projects"] == 0


def test_save_project_forbidden_for_candidate(client, candidate_headers):
    response = client.post("/api/saved-projects", json={"projectId": "project1"}, headers=candidate_headers)
    assert response.status_code == 403


def test_messages_history_any_authenticated_user(client, candidate_headers):
    # A candidate message arms no auto-reply, so the history is deterministic
    client.app.state.hub.send("project1", "candidate1", "Hello from John")

    response = client.get("/api/messages/project1", headers=candidate_headers)

    assert response.status_code == 200
    [message] = response.json()
    assert message["body"] == "Hello from John"
    assert message["senderId"] == {"id": "candidate1", "email": "john@example.com", "role": "candidate"}
    assert client.get("/api/messages/project1").status_code == 401


def test_analytics_ranking(client, manager_headers):
    # jane: 250 chars + both links = 12.5; john (demo): ~1.4 + 10
    client.post("/api/projects", json=project_payload())

    response = client.get("/api/analytics", headers=manager_headers)

    assert response.status_code == 200
    ranked = response.json()
    assert [c["email"] for c in ranked] == ["jane@example.com", "john@example.com"]
    assert [c["rank"] for c in ranked] == [1, 2]
    assert ranked[0]["averageScore"] == 12.5
    assert ranked[0]["totalProjects"] == 1
    assert ranked[0]["projectsByIndustry"] == {"Data Science": 1}
    assert ranked[0]["latestSubmission"]["projectTitle"] == "Churn Model"


def test_candidate_analytics_detail(client, manager_headers):
    client.post("/api/projects", json=project_payload())
    client.post("/api/projects", json=project_payload(projectDescription="y" * 100, githubLink=None))

    response = client.get("/api/analytics/jane@example.com", headers=manager_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["totalProjects"] == 2
    assert sorted(p["score"] for p in body["projects"]) == [6.0, 12.5]
    assert body["averageScore"] == pytest.approx(9.25)


def test_candidate_analytics_unknown_email(client, manager_headers):
    response = client.get("/api/analytics/ghost@example.com", headers=manager_headers)
    assert response.status_code == 404
    assert response.json()["detail"] == "Candidate not found"


def test_analytics_forbidden_for_candidate(client, candidate_headers):
    assert client.get("/api/analytics", headers=candidate_headers).status_code == 403
    assert client.get("/api/analytics/john@example.com", headers=candidate_headers).status_code == 403
