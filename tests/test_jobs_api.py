import pytest


@pytest.fixture
def client_id(client, admin_headers):
    response = client.post("/clients", json={"name": "Mario Rossi"}, headers=admin_headers)
    return response.json()["id"]


def create_job(client, headers, client_id, **fields):
    payload = {"title": "Boiler service", "clientId": client_id, "startDate": "2025-03-10T09:00:00"}
    payload.update(fields)
    response = client.post("/jobs", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


def test_cost_defaults(client, admin_headers, client_id):
    job = create_job(client, admin_headers, client_id, materialsCost=20)

    assert job["duration"] == 2
    assert job["hourlyRate"] == 25
    assert job["laborCost"] == 50
    assert job["cost"] == 70
    assert job["status"] == "scheduled"
    assert job["clientName"] == "Mario Rossi"
    assert job["effectiveEndDate"] == "2025-03-10T11:00:00"


def test_explicit_costs_are_kept(client, admin_headers, client_id):
    job = create_job(client, admin_headers, client_id, cost=500, laborCost=400)
    assert (job["cost"], job["laborCost"]) == (500, 400)


def test_planned_status_is_stored_as_scheduled(client, admin_headers, client_id):
    assert create_job(client, admin_headers, client_id, status="planned")["status"] == "scheduled"


def test_end_before_start_is_rejected(client, admin_headers, client_id):
    response = client.post(
        "/jobs",
        json={
            "title": "Backwards",
            "clientId": client_id,
            "startDate": "2025-03-10T09:00:00",
            "endDate": "2025-03-09T09:00:00",
        },
        headers=admin_headers,
    )
    assert response.status_code == 422


def test_unknown_client_is_rejected(client, admin_headers):
    response = client.post(
        "/jobs", json={"title": "Orphan", "clientId": 999, "startDate": "2025-03-10T09:00:00"}, headers=admin_headers
    )
    assert response.status_code == 400


def test_job_is_assigned_to_creator(client, make_user, admin_headers, client_id):
    creator = make_user(["canCreateJobs", "canViewJobs"])
    job = create_job(client, creator, client_id)
    assert job.get("assignedUserId") is not None


def test_financial_fields_need_permission(client, admin_headers, make_user, client_id):
    job = create_job(client, admin_headers, client_id, notes="Bring ladder")
    viewer = make_user(["canViewJobs"])

    seen = client.get(f"/jobs/{job['id']}", headers=viewer).json()
    for field in ("cost", "laborCost", "materialsCost", "hourlyRate", "notes", "photos"):
        assert field not in seen
    assert seen["title"] == "Boiler service"


def test_listing_requires_view_permission(client, make_user):
    assert client.get("/jobs", headers=make_user(["canViewClients"])).status_code == 403


def test_list_filters(client, admin_headers, client_id):
    create_job(client, admin_headers, client_id, title="A")
    create_job(client, admin_headers, client_id, title="B", status="cancelled")

    cancelled = client.get("/jobs", params={"status": "cancelled"}, headers=admin_headers).json()
    assert [j["title"] for j in cancelled] == ["B"]
    by_client = client.get("/jobs", params={"clientId": client_id}, headers=admin_headers).json()
    assert len(by_client) == 2


def test_update_recomputes_costs(client, admin_headers, client_id):
    job = create_job(client, admin_headers, client_id)
    response = client.patch(f"/jobs/{job['id']}", json={"duration": 4}, headers=admin_headers)

    assert response.status_code == 200
    assert response.json()["laborCost"] == 100
    assert response.json()["cost"] == 100


def test_status_change_needs_status_permission(client, admin_headers, make_user, client_id):
    job = create_job(client, admin_headers, client_id)
    editor = make_user(["canEditJobs", "canViewJobs"])

    assert client.patch(f"/jobs/{job['id']}", json={"status": "in_progress"}, headers=editor).status_code == 403
    assert client.patch(f"/jobs/{job['id']}", json={"title": "Renamed"}, headers=editor).status_code == 200


def test_update_rejects_end_before_start(client, admin_headers, client_id):
    job = create_job(client, admin_headers, client_id)
    response = client.patch(f"/jobs/{job['id']}", json={"endDate": "2025-03-01T00:00:00"}, headers=admin_headers)
    assert response.status_code == 400


def test_complete_job(client, admin_headers, client_id):
    job = create_job(client, admin_headers, client_id, startDate="2099-01-01T09:00:00")
    assert job["progressPercentage"] == 0

    response = client.post(
        f"/jobs/{job['id']}/complete",
        json={"completedDate": "2099-01-01T12:00:00", "actualDuration": 3, "notes": "Done"},
        headers=admin_headers,
    )
    body = response.json()
    assert response.status_code == 200
    assert body["status"] == "completed"
    assert body["actualDuration"] == 3
    assert body["progressPercentage"] == 100


def test_cancelled_job_cannot_be_completed(client, admin_headers, client_id):
    job = create_job(client, admin_headers, client_id, status="cancelled")
    response = client.post(
        f"/jobs/{job['id']}/complete",
        json={"completedDate": "2025-03-10T12:00:00", "actualDuration": 1},
        headers=admin_headers,
    )
    assert response.status_code == 400


def test_delete_job(client, admin_headers, client_id):
    job = create_job(client, admin_headers, client_id)
    assert client.delete(f"/jobs/{job['id']}", headers=admin_headers).status_code == 200
    assert client.get(f"/jobs/{job['id']}", headers=admin_headers).status_code == 404


def test_calendar_feed_shape(client, admin_headers, client_id):
    create_job(client, admin_headers, client_id, endDate="2025-03-12T17:00:00")
    feed = client.get("/jobs/calendar-feed", headers=admin_headers).json()

    assert len(feed) == 1
    assert feed[0]["clientId"] == client_id
    assert feed[0]["isActivity"] is False
    assert feed[0]["endDate"] == "2025-03-12T17:00:00"


def test_update_rejects_blank_title(client, admin_headers, client_id):
    job = create_job(client, admin_headers, client_id)

    assert client.patch(f"/jobs/{job['id']}", json={"title": ""}, headers=admin_headers).status_code == 422
    assert client.patch(f"/jobs/{job['id']}", json={"title": "  "}, headers=admin_headers).status_code == 422
    assert client.get(f"/jobs/{job['id']}", headers=admin_headers).json()["title"] == "Boiler service"


def test_jobs_in_range(client, admin_headers, client_id):
    create_job(client, admin_headers, client_id, title="Before", startDate="2025-03-01T09:00:00")
    create_job(client, admin_headers, client_id, title="Inside", startDate="2025-03-11T09:00:00")
    create_job(
        client,
        admin_headers,
        client_id,
        title="Running into range",
        startDate="2025-03-08T09:00:00",
        endDate="2025-03-10T12:00:00",
    )
    create_job(client, admin_headers, client_id, title="Overnight", startDate="2025-03-09T22:00:00", duration=6)
    create_job(client, admin_headers, client_id, title="After", startDate="2025-03-17T09:00:00")

    response = client.get(
        "/jobs/range", params={"start": "2025-03-10", "end": "2025-03-16"}, headers=admin_headers
    )
    assert response.status_code == 200
    jobs = response.json()

    assert [j["title"] for j in jobs] == ["Running into range", "Overnight", "Inside"]
    assert jobs[0]["client"] == {"id": client_id, "name": "Mario Rossi"}


def test_jobs_in_range_needs_both_bounds(client, admin_headers):
    missing = client.get("/jobs/range", params={"start": "2025-03-10"}, headers=admin_headers)
    assert missing.status_code == 400
    assert missing.json()["detail"] == "Start and end dates are required"

    bad = client.get("/jobs/range", params={"start": "tomorrow", "end": "2025-03-16"}, headers=admin_headers)
    assert bad.status_code == 400

    reversed_range = client.get(
        "/jobs/range", params={"start": "2025-03-16", "end": "2025-03-10"}, headers=admin_headers
    )
    assert reversed_range.status_code == 400


def test_jobs_in_range_accepts_timestamps(client, admin_headers, client_id):
    create_job(client, admin_headers, client_id, title="Inside", startDate="2025-03-11T09:00:00")
    jobs = client.get(
        "/jobs/range",
        params={"start": "2025-03-11T00:00:00", "end": "2025-03-11T23:59:59"},
        headers=admin_headers,
    ).json()
    assert [j["title"] for j in jobs] == ["Inside"]
