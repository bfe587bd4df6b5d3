# algorithms/matching.py
"""
Matching Engine: which pending blood requests a donor can fulfil, and in
what order they are shown.
"""
from algorithms.blood_compatibility import is_compatible

PENDING = 'pending'

# Lower rank is shown first
URGENCY_RANK = {
    'emergency': 0,
    'within_24_hours': 1,
    'planned': 2,
}


def can_donor_fulfil(donor, blood_request):
    """
    Check a single request against a donor.

    Criteria:
    - Request is still pending
    - Request is in the donor's city (exact string match)
    - Donor blood group can supply the requested group
    """
    if blood_request.status != PENDING:
        return False

    if blood_request.city != donor.city:
        return False

    return is_compatible(donor.blood_group, blood_request.blood_group)


def rank_requests(blood_requests):
    """
    Order requests by urgency, then newest first.

    Both passes use Python's stable sort, so requests with the same urgency
    and the same creation time keep their incoming order.
    """
    ranked = sorted(blood_requests, key=lambda r: r.created_at, reverse=True)
    ranked.sort(key=lambda r: URGENCY_RANK[r.urgency_level])
    return ranked


def find_candidates(donor, blood_requests):
    """
    Produce the ranked list of requests a donor may fulfil.

    Cooldown is not considered here: a donor on cooldown can still browse
    candidates, only accepting one is blocked.

    Args:
        donor: object with ``city`` and ``blood_group``
        blood_requests: iterable of request objects

    Returns:
        New list of matching requests; inputs are not modified
    """
    eligible = [r for r in blood_requests if can_donor_fulfil(donor, r)]
    return rank_requests(eligible)
