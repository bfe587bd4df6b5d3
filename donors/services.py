import logging
from functools import partial

from django.conf import settings
from django.utils import timezone

from algorithms.eligibility import cooldown_status, days_remaining, is_on_cooldown
from algorithms.exceptions import DonorOnCooldown, RecordNotFound
from algorithms.lifecycle import accept_match
from algorithms.matching import find_candidates
from bloodlink.store import BLOOD_REQUESTS, DONATIONS, DONORS, default_store

# Logger setup
logger = logging.getLogger(__name__)


def get_donor(donor_id, store=None):
    store = store or default_store()
    donor = store.get_by_id(DONORS, donor_id)
    if donor is None:
        raise RecordNotFound(DONORS, donor_id)
    return donor


def candidate_requests(donor_id, store=None):
    """
    Pending requests the donor can fulfil, most urgent first.

    Only the donor's city is read from the store; the rules core applies
    the full filter.
    """
    store = store or default_store()
    donor = get_donor(donor_id, store)
    city_requests = store.query_by_field(BLOOD_REQUESTS, 'city', donor.city)
    candidates = find_candidates(donor, city_requests)
    logger.debug(f"{len(candidates)} candidate requests for donor {donor_id}")
    return candidates


def accept_request(donor_id, request_id, store=None, now=None):
    """
    Donor accepts a blood request.

    The donor, the request and the new donation record are saved together
    or not at all.

    Raises:
        RecordNotFound: unknown donor or request
        DonorOnCooldown: the donor donated less than three months ago
        InvalidTransition: the request is no longer pending
    """
    store = store or default_store()
    if now is None:
        now = timezone.now()

    with store.atomic():
        donor = get_donor(donor_id, store)
        blood_request = store.get_by_id(BLOOD_REQUESTS, request_id)
        if blood_request is None:
            raise RecordNotFound(BLOOD_REQUESTS, request_id)

        if is_on_cooldown(donor, now):
            remaining = days_remaining(donor, now)
            logger.warning(f"Donor {donor_id} tried to accept request {request_id} with {remaining} day(s) of cooldown left")
            raise DonorOnCooldown(remaining)

        result = accept_match(
            donor,
            blood_request,
            now=now,
            record_factory=partial(store.new_record, DONATIONS),
        )

        store.save(DONORS, result.donor)
        store.save(BLOOD_REQUESTS, result.request)
        store.save(DONATIONS, result.donation)

    return result


def donation_history(donor_id, store=None):
    """Donor's donations, newest first"""
    store = store or default_store()
    donations = store.query_by_field(DONATIONS, 'donor', donor_id)
    return sorted(donations, key=lambda d: d.donation_date, reverse=True)


def donor_dashboard(donor_id, store=None, now=None):
    store = store or default_store()
    donor = get_donor(donor_id, store)
    donations = donation_history(donor_id, store)
    lives_per_donation = settings.BLOODLINK['LIVES_PER_DONATION']
    return {
        'donor': donor,
        'cooldown': cooldown_status(donor, now),
        'donations': donations,
        'total_donations': len(donations),
        'lives_saved': len(donations) * lives_per_donation,
    }
