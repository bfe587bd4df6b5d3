# algorithms/lifecycle.py
"""
Donation lifecycle state machine.

    pending -> matched -> fulfilled
    pending -> cancelled

``fulfilled`` and ``cancelled`` are terminal. Every operation works on
shallow copies and returns them; the caller decides how to persist them.
"""
import copy
import logging
from collections import namedtuple
from types import SimpleNamespace

from django.utils import timezone

from algorithms.eligibility import cooldown_end_for
from algorithms.exceptions import InvalidTransition

PENDING = 'pending'
MATCHED = 'matched'
FULFILLED = 'fulfilled'
CANCELLED = 'cancelled'

REQUEST_STATUSES = [PENDING, MATCHED, FULFILLED, CANCELLED]

ALLOWED_TRANSITIONS = {
    PENDING: frozenset([MATCHED, CANCELLED]),
    MATCHED: frozenset([FULFILLED]),
    FULFILLED: frozenset(),
    CANCELLED: frozenset(),
}

MatchResult = namedtuple('MatchResult', ['request', 'donation', 'donor'])

logger = logging.getLogger(__name__)


def can_transition(current_status, target_status):
    return target_status in ALLOWED_TRANSITIONS.get(current_status, ())


def _transition(blood_request, target_status, now):
    if not can_transition(blood_request.status, target_status):
        raise InvalidTransition(blood_request.status, target_status)
    updated = copy.copy(blood_request)
    updated.status = target_status
    updated.updated_at = now
    return updated


def accept_match(donor, blood_request, now=None, record_factory=SimpleNamespace):
    """
    A donor accepts a pending request.

    The donor must not be on cooldown. That is checked by the caller
    (see ``donors.services.accept_request``), not here.

    Args:
        donor: donor entity (``name``, ``contact_number``)
        blood_request: request entity in ``pending`` status
        now (datetime): acceptance time, defaults to ``timezone.now()``
        record_factory: callable building the donation record from keyword
            fields, e.g. the ``DonationRecord`` model class

    Returns:
        MatchResult(request, donation, donor) with the updated copies and
        the new, unsaved donation record

    Raises:
        InvalidTransition: the request is not pending; nothing is changed
    """
    if now is None:
        now = timezone.now()

    updated_request = _transition(blood_request, MATCHED, now)
    cooldown_end = cooldown_end_for(now)

    updated_donor = copy.copy(donor)
    updated_donor.last_donation_date = now
    updated_donor.cooldown_end_date = cooldown_end

    updated_request.donor = updated_donor
    updated_request.donor_name = donor.name
    updated_request.donor_contact = donor.contact_number

    donation = record_factory(
        donor=updated_donor,
        blood_request=updated_request,
        receiver_name=blood_request.receiver_name,
        blood_group=blood_request.blood_group,
        hospital_name=blood_request.hospital_name,
        donation_date=now,
        cooldown_end_date=cooldown_end,
    )

    logger.info(
        f"Request {blood_request.id} matched with donor {donor.id}; "
        f"cooldown until {cooldown_end.isoformat()}"
    )
    return MatchResult(updated_request, donation, updated_donor)


def cancel_request(blood_request, now=None):
    """Receiver withdraws a pending request"""
    if now is None:
        now = timezone.now()
    updated = _transition(blood_request, CANCELLED, now)
    logger.info(f"Request {blood_request.id} cancelled")
    return updated


def mark_fulfilled(blood_request, now=None):
    """Receiver confirms that a matched request was fulfilled"""
    if now is None:
        now = timezone.now()
    updated = _transition(blood_request, FULFILLED, now)
    logger.info(f"Request {blood_request.id} fulfilled")
    return updated
