from datetime import date, datetime, timedelta

import pytest

from fieldservice.calendar.placement import (
    CalendarJob,
    JobDataError,
    classify_day,
    effective_end,
    is_placed_on,
    jobs_for_day,
    jobs_for_hour,
    overlaps_range,
    parse_job,
    parse_jobs,
)


def make_job(**fields):
    data = {"id": 1, "title": "Boiler repair", "clientId": 1, "startDate": datetime(2025, 3, 10, 9, 0)}
    data.update(fields)
    return CalendarJob(**data)


def test_effective_end_prefers_end_date():
    job = make_job(endDate=datetime(2025, 3, 12, 17, 0), duration=2)
    assert effective_end(job) == datetime(2025, 3, 12, 17, 0)


def test_effective_end_from_duration():
    job = make_job(duration=2)
    assert effective_end(job) == job.startDate + timedelta(hours=2)


def test_effective_end_defaults_to_end_of_start_day():
    job = make_job()
    assert effective_end(job) == datetime(2025, 3, 10, 23, 59, 59)


def test_zero_duration_falls_back_to_end_of_day():
    job = make_job(duration=0)
    assert effective_end(job) == datetime(2025, 3, 10, 23, 59, 59)


def test_overnight_job_placement():
    job = make_job(startDate=datetime(2025, 3, 10, 22, 0), duration=6)

    assert effective_end(job) == datetime(2025, 3, 11, 4, 0)
    assert classify_day(job, date(2025, 3, 10)) == "start"
    assert classify_day(job, date(2025, 3, 11)) == "end"
    assert classify_day(job, date(2025, 3, 9)) is None
    assert classify_day(job, date(2025, 3, 12)) is None


def test_multi_day_job_roles_are_consistent():
    job = make_job(startDate=datetime(2025, 3, 10, 8, 0), endDate=datetime(2025, 3, 13, 12, 0))
    roles = [classify_day(job, date(2025, 3, d)) for d in range(9, 15)]
    assert roles == [None, "start", "middle", "middle", "end", None]


def test_single_day_job():
    job = make_job(duration=3)
    assert classify_day(job, datetime(2025, 3, 10, 23, 0)) == "single-day"


def test_end_before_start_is_placed_on_start_day_only():
    job = make_job(endDate=datetime(2025, 3, 8, 9, 0))
    assert effective_end(job) == job.startDate
    assert is_placed_on(job, date(2025, 3, 10))
    assert not is_placed_on(job, date(2025, 3, 9))
    assert classify_day(job, date(2025, 3, 10)) == "single-day"


def test_jobs_for_day_orders_by_start():
    late = make_job(id=2, startDate=datetime(2025, 3, 10, 15, 0), duration=1)
    early = make_job(id=3, startDate=datetime(2025, 3, 10, 8, 0), duration=1)
    running = make_job(id=4, startDate=datetime(2025, 3, 8, 8, 0), endDate=datetime(2025, 3, 11, 8, 0))
    other = make_job(id=5, startDate=datetime(2025, 3, 12, 8, 0), duration=1)

    placed = jobs_for_day([late, early, running, other], date(2025, 3, 10))

    assert [(job.id, role) for job, role in placed] == [
        (4, "middle"),
        (3, "single-day"),
        (2, "single-day"),
    ]


def test_jobs_for_hour_uses_the_full_interval():
    job = make_job(startDate=datetime(2025, 3, 10, 9, 30), duration=2)
    day = date(2025, 3, 10)

    assert jobs_for_hour([job], day, 9) == []
    assert jobs_for_hour([job], day, 10) == [job]
    assert jobs_for_hour([job], day, 11) == [job]
    assert jobs_for_hour([job], day, 12) == []


def test_activity_flag_derived_from_activity_id():
    job = parse_job({"id": 7, "activityId": 3, "startDate": "2025-03-10T09:00:00"})
    assert job.isActivity is True


def test_planned_status_is_normalized():
    assert make_job(status="planned").status == "scheduled"


def test_parse_job_rejects_missing_start():
    with pytest.raises(JobDataError):
        parse_job({"id": 1, "title": "No start"})


def test_parse_job_rejects_garbage_start():
    with pytest.raises(JobDataError):
        parse_job({"id": 1, "startDate": "next tuesday-ish"})


def test_parse_jobs_drops_bad_records():
    jobs = parse_jobs(
        [
            {"id": 1, "startDate": "2025-03-10T09:00:00"},
            {"id": 2, "startDate": None},
            {"id": 3, "startDate": "2025-03-11T09:00:00", "duration": 1.5},
        ]
    )
    assert [j.id for j in jobs] == [1, 3]


def test_aware_timestamps_become_local_wall_clock():
    job = parse_job({"id": 1, "startDate": "2025-03-10T09:00:00Z"})
    assert job.startDate.tzinfo is None


def test_overlaps_range():
    job = make_job(startDate=datetime(2025, 3, 9, 22, 0), duration=6)

    assert overlaps_range(job, date(2025, 3, 10), date(2025, 3, 16))
    assert overlaps_range(job, date(2025, 3, 3), date(2025, 3, 9))
    assert not overlaps_range(job, date(2025, 3, 11), date(2025, 3, 17))
    assert not overlaps_range(job, date(2025, 3, 1), date(2025, 3, 8))
