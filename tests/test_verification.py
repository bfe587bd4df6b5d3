from datetime import timedelta
from types import SimpleNamespace

import pytest

from algorithms.exceptions import VerificationAlreadyReviewed
from algorithms.verification import APPROVED, PENDING, REJECTED, approve, is_visible_to, reject
from tests.factories import NOW, make_organization, make_receiver


def make_verification(**fields):
    values = {
        'id': 1,
        'hospital': None,
        'hospital_name': 'City Hospital',
        'hospital_email': 'city.hospital@example.com',
        'city': 'Delhi',
        'status': PENDING,
        'reviewed_by': None,
        'reviewed_at': None,
        'notes': '',
    }
    values.update(fields)
    return SimpleNamespace(**values)


def test_visibility_is_limited_to_the_organization_city():
    organization = make_organization(city='Delhi')

    assert is_visible_to(make_verification(city='Delhi'), organization)
    assert not is_visible_to(make_verification(city='Mumbai'), organization)


def test_approve_verifies_hospital():
    organization = make_organization(id=4)
    hospital = make_receiver(id=9)

    result = approve(make_verification(), organization, 'ok', [hospital], now=NOW)

    assert result.verification.status == APPROVED
    assert result.verification.reviewed_by is organization
    assert result.verification.reviewed_at == NOW
    assert result.verification.notes == 'ok'
    assert result.hospital.is_verified
    assert result.verification.hospital is result.hospital
    assert not hospital.is_verified


def test_approve_without_matching_hospital_still_approves():
    other = make_receiver(id=9, email='other@example.com')

    result = approve(make_verification(), make_organization(id=4), '', [other], now=NOW)

    assert result.verification.status == APPROVED
    assert result.hospital is None


def test_second_approval_fails_and_keeps_review_time():
    organization = make_organization(id=4)
    first = approve(make_verification(), organization, '', [], now=NOW).verification

    with pytest.raises(VerificationAlreadyReviewed):
        approve(first, organization, '', [], now=NOW + timedelta(hours=1))
    assert first.reviewed_at == NOW


def test_reject_leaves_hospital_unverified():
    rejected = reject(make_verification(), make_organization(id=4), 'license expired', now=NOW)

    assert rejected.status == REJECTED
    assert rejected.notes == 'license expired'


def test_cannot_reject_an_approved_verification():
    with pytest.raises(VerificationAlreadyReviewed):
        reject(make_verification(status=APPROVED), make_organization(id=4), '', now=NOW)
