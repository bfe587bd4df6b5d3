import logging

from django.utils import timezone

from algorithms import verification as verification_rules
from algorithms.exceptions import NotInServiceArea, NotOwner, RecordNotFound
from algorithms.lifecycle import PENDING, cancel_request, mark_fulfilled
from bloodlink.store import (
    BLOOD_REQUESTS,
    ORGANIZATIONS,
    RECEIVERS,
    VERIFICATION_REQUESTS,
    default_store,
)

# Logger setup
logger = logging.getLogger(__name__)


def _get(store, collection, record_id):
    record = store.get_by_id(collection, record_id)
    if record is None:
        raise RecordNotFound(collection, record_id)
    return record


# ============================================
# BLOOD REQUESTS
# ============================================
def create_blood_request(receiver_id, blood_group, units_needed, hospital_name,
                         urgency_level, notes='', city=None, store=None, now=None):
    """
    Post a new pending blood request for a receiver.

    Receiver name and contact are copied onto the request; the city
    defaults to the receiver's own city.
    """
    store = store or default_store()
    if now is None:
        now = timezone.now()
    receiver = _get(store, RECEIVERS, receiver_id)

    blood_request = store.new_record(
        BLOOD_REQUESTS,
        receiver=receiver,
        receiver_name=receiver.name,
        receiver_contact=receiver.contact_number,
        blood_group=blood_group,
        units_needed=units_needed,
        hospital_name=hospital_name,
        city=city or receiver.city,
        urgency_level=urgency_level,
        notes=notes or '',
        status=PENDING,
        donor=None,
        donor_name='',
        donor_contact='',
        created_at=now,
        updated_at=now,
    )
    store.save(BLOOD_REQUESTS, blood_request)
    logger.info(f"Request {blood_request.id} created: {units_needed} unit(s) of {blood_group} in {blood_request.city} ({urgency_level})")
    return blood_request


def receiver_requests(receiver_id, store=None):
    """Receiver's own requests, newest first"""
    store = store or default_store()
    requests = store.query_by_field(BLOOD_REQUESTS, 'receiver', receiver_id)
    return sorted(requests, key=lambda r: r.created_at, reverse=True)


def _owned_request(store, receiver_id, request_id):
    blood_request = _get(store, BLOOD_REQUESTS, request_id)
    if blood_request.receiver.id != receiver_id:
        raise NotOwner(f"Request {request_id} belongs to another receiver")
    return blood_request


def cancel_blood_request(receiver_id, request_id, store=None, now=None):
    store = store or default_store()
    blood_request = _owned_request(store, receiver_id, request_id)
    return store.save(BLOOD_REQUESTS, cancel_request(blood_request, now))


def fulfil_blood_request(receiver_id, request_id, store=None, now=None):
    store = store or default_store()
    blood_request = _owned_request(store, receiver_id, request_id)
    return store.save(BLOOD_REQUESTS, mark_fulfilled(blood_request, now))


# ============================================
# HOSPITAL VERIFICATION
# ============================================
def verifications_for_organization(organization_id, status=None, store=None):
    """Verification requests in the organization's city, newest first"""
    store = store or default_store()
    organization = _get(store, ORGANIZATIONS, organization_id)
    verifications = [
        v for v in store.query_by_field(VERIFICATION_REQUESTS, 'city', organization.city)
        if verification_rules.is_visible_to(v, organization)
    ]
    if status is not None:
        verifications = [v for v in verifications if v.status == status]
    return sorted(verifications, key=lambda v: v.created_at, reverse=True)


def _visible_verification(store, organization, verification_id):
    verification = _get(store, VERIFICATION_REQUESTS, verification_id)
    if not verification_rules.is_visible_to(verification, organization):
        raise NotInServiceArea(verification.city, organization.city)
    return verification


def approve_verification(organization_id, verification_id, notes='', store=None, now=None):
    """
    Approve a hospital and mark the matching receiver as verified.

    Returns the ApprovalResult; ``hospital`` is None when no receiver has
    the verification's email.
    """
    store = store or default_store()
    with store.atomic():
        organization = _get(store, ORGANIZATIONS, organization_id)
        verification = _visible_verification(store, organization, verification_id)
        receivers = store.query_by_field(RECEIVERS, 'email', verification.hospital_email)

        result = verification_rules.approve(verification, organization, notes or '', receivers, now)

        if result.hospital is not None:
            store.save(RECEIVERS, result.hospital)
        store.save(VERIFICATION_REQUESTS, result.verification)
    return result


def reject_verification(organization_id, verification_id, notes='', store=None, now=None):
    store = store or default_store()
    organization = _get(store, ORGANIZATIONS, organization_id)
    verification = _visible_verification(store, organization, verification_id)
    updated = verification_rules.reject(verification, organization, notes or '', now)
    return store.save(VERIFICATION_REQUESTS, updated)
