"""Service layer against the in-memory store"""
from datetime import timedelta

import pytest

from algorithms.eligibility import add_months
from algorithms.exceptions import (
    DonorOnCooldown,
    InvalidTransition,
    NotInServiceArea,
    NotOwner,
    RecordNotFound,
    VerificationAlreadyReviewed,
)
from bloodlink.store import (
    BLOOD_REQUESTS,
    DONATIONS,
    DONORS,
    INVENTORY_ITEMS,
    ORGANIZATIONS,
    RECEIVERS,
    VERIFICATION_REQUESTS,
)
from donors import services as donor_services
from organizations import services as organization_services
from receivers import services as receiver_services
from tests.factories import NOW, make_donor, make_organization, make_receiver, make_request


# ---------------------------
# Donors
# ---------------------------
def test_candidate_requests_for_donor(seeded):
    store = seeded.store
    store.save(BLOOD_REQUESTS, make_request(city='Mumbai'))
    store.save(BLOOD_REQUESTS, make_request(urgency_level='emergency', created_at=NOW - timedelta(hours=1)))

    candidates = donor_services.candidate_requests(seeded.donor.id, store=store)

    assert [r.urgency_level for r in candidates] == ['emergency', 'planned']
    assert all(r.city == 'Delhi' for r in candidates)


def test_accept_request_saves_donor_request_and_donation(seeded):
    store = seeded.store

    result = donor_services.accept_request(seeded.donor.id, seeded.request.id, store=store, now=NOW)

    saved_request = store.get_by_id(BLOOD_REQUESTS, seeded.request.id)
    saved_donor = store.get_by_id(DONORS, seeded.donor.id)
    donations = store.get_all(DONATIONS)
    assert saved_request.status == 'matched'
    assert saved_request.donor.id == seeded.donor.id
    assert saved_donor.cooldown_end_date == add_months(NOW, 3)
    assert len(donations) == 1
    assert donations[0] is result.donation
    assert donations[0].id is not None


def test_accept_request_on_cooldown_is_refused(seeded):
    store = seeded.store
    store.save(DONORS, make_donor(id=seeded.donor.id, cooldown_end_date=NOW + timedelta(days=10)))

    with pytest.raises(DonorOnCooldown) as excinfo:
        donor_services.accept_request(seeded.donor.id, seeded.request.id, store=store, now=NOW)

    assert excinfo.value.days_remaining == 10
    assert store.get_by_id(BLOOD_REQUESTS, seeded.request.id).status == 'pending'
    assert store.get_all(DONATIONS) == []


def test_accept_request_twice_is_refused(seeded):
    store = seeded.store
    other = store.save(DONORS, make_donor(email='other@example.com'))
    donor_services.accept_request(seeded.donor.id, seeded.request.id, store=store, now=NOW)

    with pytest.raises(InvalidTransition):
        donor_services.accept_request(other.id, seeded.request.id, store=store, now=NOW)

    assert store.get_by_id(DONORS, other.id).cooldown_end_date is None
    assert len(store.get_all(DONATIONS)) == 1


def test_accept_unknown_request(seeded):
    with pytest.raises(RecordNotFound):
        donor_services.accept_request(seeded.donor.id, 999, store=seeded.store, now=NOW)


def test_donor_dashboard_counts_lives(seeded, settings):
    settings.BLOODLINK = {**settings.BLOODLINK, 'LIVES_PER_DONATION': 3}
    donor_services.accept_request(seeded.donor.id, seeded.request.id, store=seeded.store, now=NOW)

    dashboard = donor_services.donor_dashboard(seeded.donor.id, store=seeded.store, now=NOW)

    assert dashboard['total_donations'] == 1
    assert dashboard['lives_saved'] == 3
    assert dashboard['cooldown']['on_cooldown']


# ---------------------------
# Receivers
# ---------------------------
def test_create_blood_request_defaults_to_receiver_city(seeded):
    blood_request = receiver_services.create_blood_request(
        seeded.receiver.id, 'B+', 2, 'City Hospital', 'emergency', store=seeded.store, now=NOW
    )

    assert blood_request.status == 'pending'
    assert blood_request.city == 'Delhi'
    assert blood_request.receiver_name == seeded.receiver.name
    assert blood_request.donor is None


def test_receiver_requests_newest_first(seeded):
    store = seeded.store
    newer = store.save(BLOOD_REQUESTS, make_request(receiver=seeded.receiver, created_at=NOW + timedelta(hours=1)))

    requests = receiver_services.receiver_requests(seeded.receiver.id, store=store)

    assert [r.id for r in requests] == [newer.id, seeded.request.id]


def test_cancel_own_request(seeded):
    cancelled = receiver_services.cancel_blood_request(
        seeded.receiver.id, seeded.request.id, store=seeded.store, now=NOW
    )

    assert cancelled.status == 'cancelled'
    assert seeded.store.get_by_id(BLOOD_REQUESTS, seeded.request.id).status == 'cancelled'


def test_cannot_cancel_someone_elses_request(seeded):
    other = seeded.store.save(RECEIVERS, make_receiver(email='x@example.com'))

    with pytest.raises(NotOwner):
        receiver_services.cancel_blood_request(other.id, seeded.request.id, store=seeded.store, now=NOW)


def test_fulfil_after_match(seeded):
    store = seeded.store
    donor_services.accept_request(seeded.donor.id, seeded.request.id, store=store, now=NOW)

    fulfilled = receiver_services.fulfil_blood_request(seeded.receiver.id, seeded.request.id, store=store, now=NOW)

    assert fulfilled.status == 'fulfilled'


def _pending_verification(store, city='Delhi'):
    return store.save(VERIFICATION_REQUESTS, store.new_record(
        VERIFICATION_REQUESTS,
        hospital=None,
        hospital_name='City Hospital',
        hospital_email='city.hospital@example.com',
        city=city,
        status='pending',
        reviewed_by=None,
        reviewed_at=None,
        notes='',
        created_at=NOW,
    ))


def test_approve_verification_verifies_hospital(seeded):
    store = seeded.store
    verification = _pending_verification(store)

    result = receiver_services.approve_verification(
        seeded.organization.id, verification.id, notes='ok', store=store, now=NOW
    )

    assert result.verification.status == 'approved'
    assert store.get_by_id(RECEIVERS, seeded.receiver.id).is_verified
    assert store.get_by_id(VERIFICATION_REQUESTS, verification.id).reviewed_at == NOW


def test_approve_twice_keeps_first_review(seeded):
    store = seeded.store
    verification = _pending_verification(store)
    receiver_services.approve_verification(seeded.organization.id, verification.id, store=store, now=NOW)

    with pytest.raises(VerificationAlreadyReviewed):
        receiver_services.approve_verification(
            seeded.organization.id, verification.id, store=store, now=NOW + timedelta(days=1)
        )
    assert store.get_by_id(VERIFICATION_REQUESTS, verification.id).reviewed_at == NOW


def test_verification_outside_city_is_refused(seeded):
    store = seeded.store
    verification = _pending_verification(store, city='Mumbai')

    with pytest.raises(NotInServiceArea):
        receiver_services.reject_verification(seeded.organization.id, verification.id, store=store, now=NOW)


def test_verifications_for_organization_filters_city_and_status(seeded):
    store = seeded.store
    pending = _pending_verification(store)
    _pending_verification(store, city='Mumbai')
    rejected = _pending_verification(store)
    receiver_services.reject_verification(seeded.organization.id, rejected.id, store=store, now=NOW)

    visible = receiver_services.verifications_for_organization(seeded.organization.id, store=store)
    only_pending = receiver_services.verifications_for_organization(
        seeded.organization.id, status='pending', store=store
    )

    assert {v.id for v in visible} == {pending.id, rejected.id}
    assert [v.id for v in only_pending] == [pending.id]


# ---------------------------
# Organizations
# ---------------------------
def test_update_stock_creates_then_updates(seeded):
    store = seeded.store
    org_id = seeded.organization.id
    expiry = (NOW + timedelta(days=30)).date()

    created = organization_services.update_stock(org_id, 'O+', 3, expiry, store=store, now=NOW)
    updated = organization_services.update_stock(org_id, 'O+', 25, expiry, store=store, now=NOW)

    assert created.stock_level == 'low'
    assert updated.id == created.id
    assert updated.stock_level == 'full'
    assert len(store.get_all(INVENTORY_ITEMS)) == 1


def test_restock_alerts(seeded):
    store = seeded.store
    org_id = seeded.organization.id
    expiry = (NOW + timedelta(days=30)).date()
    organization_services.update_stock(org_id, 'A+', 0, expiry, store=store, now=NOW)
    organization_services.update_stock(org_id, 'B+', 10, expiry, store=store, now=NOW)
    organization_services.update_stock(org_id, 'O-', 2, expiry, store=store, now=NOW)

    alerts = organization_services.restock_alerts(org_id, store=store)

    assert [item.blood_group for item in alerts] == ['O-', 'A+']


def test_inventory_for_city(seeded):
    store = seeded.store
    expiry = (NOW + timedelta(days=30)).date()
    other = store.save(ORGANIZATIONS, make_organization(email='mumbai@example.com', city='Mumbai'))
    organization_services.update_stock(seeded.organization.id, 'A+', 8, expiry, store=store, now=NOW)
    organization_services.update_stock(other.id, 'A+', 8, expiry, store=store, now=NOW)

    items = organization_services.inventory_for_city('Delhi', store=store)

    assert [item.organization.id for item in items] == [seeded.organization.id]


def test_organization_dashboard(seeded):
    store = seeded.store
    store.save(DONORS, make_donor(email='resting@example.com', cooldown_end_date=NOW + timedelta(days=3)))
    organization_services.update_stock(
        seeded.organization.id, 'AB-', 7, (NOW + timedelta(days=30)).date(), store=store, now=NOW
    )

    dashboard = organization_services.organization_dashboard(seeded.organization.id, store=store, now=NOW)

    assert dashboard['requests'] == {'pending': 1, 'matched': 0, 'fulfilled': 0, 'cancelled': 0}
    assert dashboard['donors'] == {'total': 2, 'available': 1, 'on_cooldown': 1}
    assert dashboard['inventory']['AB-'] == 7
    assert dashboard['inventory']['O+'] == 0


def test_unknown_organization(memory_store):
    with pytest.raises(RecordNotFound):
        organization_services.get_organization(404, store=memory_store)
