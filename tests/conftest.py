from types import SimpleNamespace

import pytest
from rest_framework.test import APIClient

from accounts import services as account_services
from bloodlink.store import (
    BLOOD_REQUESTS,
    DONORS,
    ORGANIZATIONS,
    RECEIVERS,
    InMemoryRecordStore,
)
from receivers.models import ReceiverProfile
from tests.factories import make_donor, make_organization, make_receiver, make_request


@pytest.fixture
def memory_store():
    """In-memory store with one donor, one receiver and one organization in Delhi"""
    store = InMemoryRecordStore()
    store.save(DONORS, make_donor())
    store.save(RECEIVERS, make_receiver())
    store.save(ORGANIZATIONS, make_organization())
    return store


@pytest.fixture
def seeded(memory_store):
    donor = memory_store.get_all(DONORS)[0]
    receiver = memory_store.get_all(RECEIVERS)[0]
    organization = memory_store.get_all(ORGANIZATIONS)[0]
    blood_request = memory_store.save(BLOOD_REQUESTS, make_request(receiver=receiver))
    return SimpleNamespace(
        store=memory_store,
        donor=donor,
        receiver=receiver,
        organization=organization,
        request=blood_request,
    )


# ---------------------------
# Database fixtures
# ---------------------------
@pytest.fixture
def db_donor(db):
    return account_services.register_donor(
        name='Asha Rao',
        email='asha@example.com',
        password='donor-pass-123',
        city='Delhi',
        contact_number='9800000001',
        blood_group='O-',
    )


@pytest.fixture
def db_receiver(db):
    return account_services.register_receiver(
        name='Ravi Kumar',
        email='ravi@example.com',
        password='receiver-pass-123',
        city='Delhi',
        contact_number='9800000003',
    )


@pytest.fixture
def db_hospital(db):
    return account_services.register_receiver(
        name='City Hospital',
        email='city.hospital@example.com',
        password='hospital-pass-123',
        city='Delhi',
        contact_number='9800000002',
        receiver_type=ReceiverProfile.HOSPITAL,
    )


@pytest.fixture
def db_organization(db):
    return account_services.register_organization(
        name='Delhi Blood Bank',
        email='bank@example.com',
        password='bank-pass-123',
        city='Delhi',
        contact_number='9800000004',
        organization_type='blood_bank',
        license_id='LIC-001',
    )


@pytest.fixture
def api_client():
    return APIClient()
