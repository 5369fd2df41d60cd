from datetime import datetime

import pytest

from fieldservice.domain.dashboard.service import DashboardService, monthly_income
from fieldservice.models import Client, Job
from fieldservice.permissions import PermissionSet

NOW = datetime(2025, 3, 12, 10, 0)


@pytest.fixture
def jobs(db):
    rossi = Client(name="Mario Rossi", type="residential")
    db.add(rossi)
    db.commit()
    rows = [
        # title, status, start, duration, hourly rate, materials
        ("Done this month", "completed", datetime(2025, 3, 3, 9, 0), 2, 30, 15),
        ("Done last month", "completed", datetime(2025, 2, 27, 9, 0), 4, 25, 0),
        ("Today", "scheduled", datetime(2025, 3, 12, 14, 0), 2, 25, 0),
        ("Started yesterday", "in_progress", datetime(2025, 3, 11, 8, 0), 30, 25, 0),
        ("Cancelled", "cancelled", datetime(2025, 3, 20, 9, 0), 1, 25, 0),
    ]
    for title, status, start, duration, rate, materials in rows:
        db.add(
            Job(
                title=title,
                client_id=rossi.id,
                status=status,
                start_date=start,
                duration=duration,
                hourly_rate=rate,
                materials_cost=materials,
                cost=rate * duration + materials,
                labor_cost=rate * duration,
                photos=[],
            )
        )
    db.commit()
    return db.query(Job).all()


def test_monthly_income_counts_completed_jobs_of_the_month(jobs):
    assert monthly_income(jobs, NOW) == 75.0


def test_stats_with_full_access(db, jobs):
    result = DashboardService(db, PermissionSet.full(), now=NOW).get_stats()

    assert result["stats"] == {"activeJobs": 2, "completedJobs": 2, "totalClients": 1, "monthlyIncome": 75.0}
    today = [(j["title"], j["dayRole"]) for j in result["todayJobs"]]
    assert today == [("Started yesterday", "end"), ("Today", "single-day")]
    assert result["todayJobs"][0]["client"] == {"id": jobs[0].client_id, "name": "Mario Rossi"}


def test_stats_hide_income_and_clients_without_permission(db, jobs):
    result = DashboardService(db, PermissionSet.from_names(["canViewJobs"]), now=NOW).get_stats()

    assert "monthlyIncome" not in result["stats"]
    assert "totalClients" not in result["stats"]
    assert "cost" not in result["todayJobs"][0]


def test_stats_endpoint_permissions(client, admin_headers, make_user):
    response = client.get("/stats", headers=admin_headers)
    assert response.status_code == 200
    assert set(response.json()) == {"stats", "todayJobs"}

    assert client.get("/stats", headers=make_user(["canViewClients"])).status_code == 403
