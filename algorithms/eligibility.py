import calendar
import math
from datetime import timedelta

from django.utils import timezone

# Constants
COOLDOWN_MONTHS = 3
SECONDS_PER_DAY = 24 * 60 * 60


def add_months(moment, months):
    """
    Shift a datetime by whole calendar months.

    The day of month is clamped to the last day of the target month,
    so 30 November + 3 months is 28 (or 29) February.
    """
    month_index = moment.month - 1 + months
    year = moment.year + month_index // 12
    month = month_index % 12 + 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def cooldown_end_for(donation_date):
    """Cooldown end for a donation made at ``donation_date``"""
    return add_months(donation_date, COOLDOWN_MONTHS)


def is_on_cooldown(donor, now=None) -> bool:
    """
    Check whether a donor is inside the post-donation cooldown window.

    The state is always computed from ``cooldown_end_date``; it is never
    stored on the donor.

    Args:
        donor: object with an optional ``cooldown_end_date``
        now (datetime): reference time, defaults to ``timezone.now()``

    Returns:
        bool: True while ``now`` is strictly before the cooldown end
    """
    if now is None:
        now = timezone.now()
    cooldown_end = getattr(donor, 'cooldown_end_date', None)
    return cooldown_end is not None and now < cooldown_end


def days_remaining(donor, now=None) -> int:
    """
    Whole days left on a donor's cooldown, rounded up.

    A fraction of a day still counts as one day, so the result is never 0
    while the cooldown is active and exactly 0 once it has expired.
    """
    if now is None:
        now = timezone.now()
    if not is_on_cooldown(donor, now):
        return 0
    remaining = donor.cooldown_end_date - now
    return math.ceil(remaining / timedelta(seconds=SECONDS_PER_DAY))


def cooldown_status(donor, now=None):
    """Summary of a donor's cooldown for dashboards"""
    if now is None:
        now = timezone.now()
    return {
        'on_cooldown': is_on_cooldown(donor, now),
        'days_remaining': days_remaining(donor, now),
        'last_donation_date': getattr(donor, 'last_donation_date', None),
        'cooldown_end_date': getattr(donor, 'cooldown_end_date', None),
    }
