import logging

from django.contrib.auth import get_user_model
from django.db import transaction

from donors.models import DonorProfile
from organizations.models import OrganizationProfile
from receivers.models import ReceiverProfile, VerificationRequest

User = get_user_model()

# Logger setup
logger = logging.getLogger(__name__)


def _create_user(user_type, name, email, password, city, contact_number):
    return User.objects.create_user(
        username=email.lower(),
        email=email,
        password=password,
        user_type=user_type,
        name=name,
        city=city,
        contact_number=contact_number,
    )


@transaction.atomic
def register_donor(name, email, password, city, contact_number, blood_group, last_donation_date=None):
    """
    Register a donor.

    A donation date given at registration is history only: cooldown is set
    exclusively when a match is accepted.
    """
    user = _create_user(User.DONOR, name, email, password, city, contact_number)
    donor = DonorProfile.objects.create(
        user=user,
        blood_group=blood_group,
        last_donation_date=last_donation_date,
    )
    logger.info(f"Donor {email} registered in {city}")
    return donor


@transaction.atomic
def register_receiver(name, email, password, city, contact_number, receiver_type=ReceiverProfile.INDIVIDUAL):
    """
    Register an individual or hospital receiver.

    Individuals are verified straight away. Hospitals start unverified and
    get a pending verification request for an organization in their city.
    """
    user = _create_user(User.RECEIVER, name, email, password, city, contact_number)
    is_hospital = receiver_type == ReceiverProfile.HOSPITAL
    receiver = ReceiverProfile.objects.create(
        user=user,
        receiver_type=receiver_type,
        is_verified=not is_hospital,
    )

    if is_hospital:
        VerificationRequest.objects.create(
            hospital=receiver,
            hospital_name=name,
            hospital_email=email,
            city=city,
        )
        logger.info(f"Hospital {name} registered in {city}; verification pending")
    else:
        logger.info(f"Receiver {email} registered in {city}")
    return receiver


@transaction.atomic
def register_organization(name, email, password, city, contact_number, organization_type, license_id):
    user = _create_user(User.ORGANIZATION, name, email, password, city, contact_number)
    organization = OrganizationProfile.objects.create(
        user=user,
        organization_type=organization_type,
        license_id=license_id,
    )
    logger.info(f"Organization {name} registered in {city}")
    return organization


@transaction.atomic
def update_profile(user, name=None, contact_number=None, city=None):
    """
    Update the common profile fields of any role; None leaves a field as is.

    ``city`` is the matching key, so a donor who moves sees the new city's
    requests from the next refresh on.
    """
    changes = {
        field: value
        for field, value in (('name', name), ('contact_number', contact_number), ('city', city))
        if value is not None
    }
    if not changes:
        return user

    if 'city' in changes and changes['city'] != user.city:
        logger.info(f"User {user.email} moved from {user.city} to {changes['city']}")
    for field, value in changes.items():
        setattr(user, field, value)
    user.save(update_fields=list(changes))
    return user
