from datetime import datetime, timedelta, timezone as dt_timezone

from algorithms.eligibility import (
    add_months,
    cooldown_end_for,
    cooldown_status,
    days_remaining,
    is_on_cooldown,
)
from tests.factories import NOW, make_donor


def test_donor_without_cooldown_can_donate():
    donor = make_donor(cooldown_end_date=None)

    assert not is_on_cooldown(donor, NOW)
    assert days_remaining(donor, NOW) == 0


def test_is_on_cooldown_is_idempotent():
    donor = make_donor(cooldown_end_date=NOW + timedelta(days=10))

    assert is_on_cooldown(donor, NOW) == is_on_cooldown(donor, NOW) is True


def test_fraction_of_a_day_counts_as_one():
    donor = make_donor(cooldown_end_date=NOW + timedelta(hours=1))

    assert days_remaining(donor, NOW) == 1


def test_days_remaining_rounds_up():
    donor = make_donor(cooldown_end_date=NOW + timedelta(days=2, hours=3))

    assert days_remaining(donor, NOW) == 3


def test_cooldown_ends_exactly_at_end_date():
    donor = make_donor(cooldown_end_date=NOW)

    assert not is_on_cooldown(donor, NOW)
    assert days_remaining(donor, NOW) == 0


def test_expired_cooldown():
    donor = make_donor(cooldown_end_date=NOW - timedelta(days=1))

    assert not is_on_cooldown(donor, NOW)
    assert days_remaining(donor, NOW) == 0


def test_cooldown_is_three_calendar_months():
    assert cooldown_end_for(NOW) == datetime(2024, 4, 15, 10, 0, tzinfo=dt_timezone.utc)


def test_add_months_clamps_to_month_end():
    moment = datetime(2023, 11, 30, 8, 0, tzinfo=dt_timezone.utc)

    assert add_months(moment, 3) == datetime(2024, 2, 29, 8, 0, tzinfo=dt_timezone.utc)


def test_add_months_crosses_year():
    moment = datetime(2024, 12, 31, tzinfo=dt_timezone.utc)

    assert add_months(moment, 3) == datetime(2025, 3, 31, tzinfo=dt_timezone.utc)


def test_cooldown_status_summary():
    donor = make_donor(
        last_donation_date=NOW - timedelta(days=1),
        cooldown_end_date=NOW + timedelta(days=5),
    )

    assert cooldown_status(donor, NOW) == {
        'on_cooldown': True,
        'days_remaining': 5,
        'last_donation_date': NOW - timedelta(days=1),
        'cooldown_end_date': NOW + timedelta(days=5),
    }
