import pytest


@pytest.fixture
def job(client, admin_headers):
    client_id = client.post("/clients", json={"name": "Mario Rossi"}, headers=admin_headers).json()["id"]
    response = client.post(
        "/jobs",
        json={"title": "Kitchen install", "clientId": client_id, "startDate": "2025-03-10T08:00:00", "duration": 8},
        headers=admin_headers,
    )
    return response.json()


@pytest.fixture
def activity(client, admin_headers):
    job_type = client.post("/job-types", json={"name": "Installation"}, headers=admin_headers).json()
    response = client.post(
        "/activities",
        json={"name": "Tiling", "jobTypeId": job_type["id"], "defaultDuration": 3},
        headers=admin_headers,
    )
    assert response.status_code == 201, response.text
    return response.json()


def test_catalogue(client, admin_headers, activity):
    listed = client.get("/activities", params={"jobTypeId": activity["jobTypeId"]}, headers=admin_headers).json()
    assert [a["name"] for a in listed] == ["Tiling"]
    assert client.get("/activities", params={"jobTypeId": 999}, headers=admin_headers).json() == []
    assert client.get(f"/activities/{activity['id']}", headers=admin_headers).json()["defaultDuration"] == 3


def test_activity_with_unknown_job_type(client, admin_headers):
    response = client.post("/activities", json={"name": "Ghost", "jobTypeId": 42}, headers=admin_headers)
    assert response.status_code == 400


def test_catalogue_permissions(client, make_user):
    viewer = make_user(["canViewJobs"])
    assert client.get("/activities", headers=viewer).status_code == 403
    assert client.post("/job-types", json={"name": "X"}, headers=viewer).status_code == 403


def test_schedule_activity_uses_catalogue_duration(client, admin_headers, job, activity):
    response = client.post(
        f"/jobs/{job['id']}/activities",
        json={"activityId": activity["id"], "startDate": "2025-03-10T13:00:00"},
        headers=admin_headers,
    )
    assert response.status_code == 201, response.text
    scheduled = response.json()
    assert scheduled["duration"] == 3
    assert scheduled["activityName"] == "Tiling"

    listed = client.get(f"/jobs/{job['id']}/activities", headers=admin_headers).json()
    assert [a["id"] for a in listed] == [scheduled["id"]]


def test_activities_appear_in_calendar_feed(client, admin_headers, job, activity):
    client.post(
        f"/jobs/{job['id']}/activities",
        json={"activityId": activity["id"], "startDate": "2025-03-10T13:00:00", "duration": 2},
        headers=admin_headers,
    )
    feed = client.get("/jobs/calendar-feed", headers=admin_headers).json()

    activities = [item for item in feed if item["isActivity"]]
    assert len(activities) == 1
    assert activities[0]["jobId"] == job["id"]
    assert activities[0]["title"] == "Tiling - Kitchen install"


def test_complete_and_delete_job_activity(client, admin_headers, job, activity):
    scheduled = client.post(
        f"/jobs/{job['id']}/activities",
        json={"activityId": activity["id"], "startDate": "2099-03-10T13:00:00"},
        headers=admin_headers,
    ).json()
    assert scheduled["progressPercentage"] == 0

    completed = client.post(
        f"/job-activities/{scheduled['id']}/complete",
        json={"completedDate": "2099-03-10T15:00:00", "actualDuration": 2.5},
        headers=admin_headers,
    ).json()
    assert completed["status"] == "completed"
    assert completed["progressPercentage"] == 100

    assert client.delete(f"/activities/{activity['id']}", headers=admin_headers).status_code == 400
    assert client.delete(f"/job-activities/{scheduled['id']}", headers=admin_headers).status_code == 200
    assert client.delete(f"/activities/{activity['id']}", headers=admin_headers).status_code == 200


def test_schedule_on_missing_job(client, admin_headers, activity):
    response = client.post(
        "/jobs/999/activities",
        json={"activityId": activity["id"], "startDate": "2025-03-10T13:00:00"},
        headers=admin_headers,
    )
    assert response.status_code == 404


def test_update_and_delete_job_type(client, admin_headers):
    job_type = client.post("/job-types", json={"name": "Repair"}, headers=admin_headers).json()
    base = f"/job-types/{job_type['id']}"

    updated = client.patch(base, json={"description": "Fix what is broken"}, headers=admin_headers)
    assert updated.status_code == 200
    assert updated.json() == {"id": job_type["id"], "name": "Repair", "description": "Fix what is broken"}
    assert client.patch(base, json={"name": ""}, headers=admin_headers).status_code == 422

    assert client.delete(base, headers=admin_headers).status_code == 200
    assert client.get(base, headers=admin_headers).status_code == 404


def test_job_type_with_activities_cannot_be_deleted(client, admin_headers, activity):
    response = client.delete(f"/job-types/{activity['jobTypeId']}", headers=admin_headers)
    assert response.status_code == 400


def test_job_type_changes_need_permissions(client, admin_headers, make_user):
    job_type = client.post("/job-types", json={"name": "Repair"}, headers=admin_headers).json()
    viewer = make_user(["canViewJobTypes"])

    assert client.get(f"/job-types/{job_type['id']}", headers=viewer).status_code == 200
    assert client.patch(f"/job-types/{job_type['id']}", json={"name": "X"}, headers=viewer).status_code == 403
    assert client.delete(f"/job-types/{job_type['id']}", headers=viewer).status_code == 403
