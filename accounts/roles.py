# accounts/roles.py
"""
Users are a tagged union keyed by ``user_type``: each user owns exactly
one role profile. Every branch on role goes through this module.
"""
from django.core.exceptions import ObjectDoesNotExist

from accounts.models import CustomUser
from algorithms.exceptions import MissingProfile

ROLES = (CustomUser.RECEIVER, CustomUser.DONOR, CustomUser.ORGANIZATION)


class UnknownRole(ValueError):
    def __init__(self, user_type):
        self.user_type = user_type
        super().__init__(f"Unknown user type {user_type!r}")


def get_profile(user):
    """
    Return the role profile of a user (DonorProfile, ReceiverProfile or
    OrganizationProfile).

    Raises MissingProfile for users created outside registration, such as
    superusers, whose profile row does not exist.
    """
    try:
        if user.user_type == CustomUser.DONOR:
            return user.donor_profile
        elif user.user_type == CustomUser.RECEIVER:
            return user.receiver_profile
        elif user.user_type == CustomUser.ORGANIZATION:
            return user.organization_profile
    except ObjectDoesNotExist:
        raise MissingProfile(user.user_type)
    raise UnknownRole(user.user_type)


def profile_summary(user):
    """Role specific fields shown next to the common user fields"""
    profile = get_profile(user)
    if user.user_type == CustomUser.DONOR:
        return {
            'blood_group': profile.blood_group,
            'last_donation_date': profile.last_donation_date,
            'cooldown_end_date': profile.cooldown_end_date,
        }
    elif user.user_type == CustomUser.RECEIVER:
        return {
            'receiver_type': profile.receiver_type,
            'is_verified': profile.is_verified,
        }
    elif user.user_type == CustomUser.ORGANIZATION:
        return {
            'organization_type': profile.organization_type,
            'license_id': profile.license_id,
        }
    raise UnknownRole(user.user_type)
