from datetime import datetime

import pytest

from fieldservice.calendar import CalendarJob, progress_percentage

START = datetime(2025, 3, 10, 8, 0)


def make_job(status="scheduled", **fields):
    return CalendarJob(id=1, title="Garden cleanup", status=status, startDate=START, **fields)


def test_midpoint_is_fifty():
    job = make_job(endDate=datetime(2025, 3, 10, 12, 0))
    assert progress_percentage(job, datetime(2025, 3, 10, 10, 0)) == 50


def test_rounds_half_up():
    job = make_job(duration=8)
    # 1 hour of 8 is 12.5%
    assert progress_percentage(job, datetime(2025, 3, 10, 9, 0)) == 13


@pytest.mark.parametrize(
    "now",
    [datetime(2024, 1, 1), START, datetime(2025, 3, 10, 10, 0), datetime(2030, 1, 1)],
)
def test_completed_is_always_full(now):
    assert progress_percentage(make_job("completed", duration=4), now) == 100


@pytest.mark.parametrize(
    "now",
    [datetime(2024, 1, 1), START, datetime(2025, 3, 10, 10, 0), datetime(2030, 1, 1)],
)
def test_cancelled_is_always_zero(now):
    assert progress_percentage(make_job("cancelled", duration=4), now) == 0


def test_before_start_is_zero():
    assert progress_percentage(make_job(duration=4), datetime(2025, 3, 9, 23, 0)) == 0


def test_after_end_is_full_even_when_still_scheduled():
    assert progress_percentage(make_job(duration=4), datetime(2025, 3, 10, 12, 1)) == 100


def test_in_progress_uses_default_end_of_day():
    job = make_job("in_progress")
    value = progress_percentage(job, datetime(2025, 3, 10, 16, 0))
    assert 0 < value < 100


def test_zero_length_interval():
    job = make_job(endDate=START)
    assert progress_percentage(job, START) == 100
    assert progress_percentage(job, datetime(2025, 3, 10, 7, 59)) == 0
