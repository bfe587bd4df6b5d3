from datetime import timedelta

from algorithms.matching import can_donor_fulfil, find_candidates, rank_requests
from tests.factories import NOW, make_donor, make_request


def test_request_in_another_city_is_never_a_candidate():
    donor = make_donor(city='Mumbai', blood_group='O-')
    blood_request = make_request(city='Pune', blood_group='AB+')

    assert find_candidates(donor, [blood_request]) == []


def test_city_match_is_exact():
    donor = make_donor(city='Delhi')
    assert not can_donor_fulfil(donor, make_request(city='delhi'))
    assert can_donor_fulfil(donor, make_request(city='Delhi'))


def test_only_pending_requests_are_candidates():
    donor = make_donor()
    requests = [
        make_request(id=1, status='pending'),
        make_request(id=2, status='matched'),
        make_request(id=3, status='fulfilled'),
        make_request(id=4, status='cancelled'),
    ]

    assert [r.id for r in find_candidates(donor, requests)] == [1]


def test_urgency_orders_candidates():
    donor = make_donor()
    requests = [
        make_request(id=1, urgency_level='planned', created_at=NOW),
        make_request(id=2, urgency_level='emergency', created_at=NOW + timedelta(minutes=1)),
        make_request(id=3, urgency_level='within_24_hours', created_at=NOW + timedelta(minutes=2)),
    ]

    candidates = find_candidates(donor, requests)

    assert [r.urgency_level for r in candidates] == ['emergency', 'within_24_hours', 'planned']


def test_newest_first_within_same_urgency():
    requests = [
        make_request(id=1, urgency_level='emergency', created_at=NOW),
        make_request(id=2, urgency_level='emergency', created_at=NOW + timedelta(hours=1)),
        make_request(id=3, urgency_level='planned', created_at=NOW + timedelta(hours=2)),
    ]

    assert [r.id for r in rank_requests(requests)] == [2, 1, 3]


def test_ties_keep_incoming_order():
    requests = [make_request(id=i, urgency_level='planned', created_at=NOW) for i in (5, 3, 9)]

    assert [r.id for r in rank_requests(requests)] == [5, 3, 9]


def test_donor_on_cooldown_still_sees_candidates():
    donor = make_donor(cooldown_end_date=NOW + timedelta(days=30))

    assert len(find_candidates(donor, [make_request()])) == 1


def test_inputs_are_not_modified():
    requests = [
        make_request(id=1, urgency_level='planned'),
        make_request(id=2, urgency_level='emergency'),
    ]

    find_candidates(make_donor(), requests)

    assert [r.id for r in requests] == [1, 2]
