"""
Errors raised by the BloodLink rules core and its services
"""


class BloodLinkError(Exception):
    """Base class for all BloodLink errors"""


class PreconditionFailed(BloodLinkError):
    """The operation was refused and nothing was changed"""


class InvalidTransition(PreconditionFailed):
    def __init__(self, current_status, target_status):
        self.current_status = current_status
        self.target_status = target_status
        super().__init__(
            f"Cannot move a {current_status} request to {target_status}"
        )


class DonorOnCooldown(PreconditionFailed):
    def __init__(self, days_remaining):
        self.days_remaining = days_remaining
        super().__init__(
            f"Donor is on cooldown and can donate again in {days_remaining} day(s)"
        )


class VerificationAlreadyReviewed(PreconditionFailed):
    def __init__(self, status):
        self.status = status
        super().__init__(f"Verification has already been {status}")


class NotInServiceArea(BloodLinkError):
    def __init__(self, verification_city, organization_city):
        super().__init__(
            f"Verification for {verification_city} is outside the "
            f"organization's service city {organization_city}"
        )


class RecordNotFound(BloodLinkError):
    def __init__(self, collection, record_id):
        self.collection = collection
        self.record_id = record_id
        super().__init__(f"No record {record_id!r} in {collection}")


class UnknownCollection(BloodLinkError):
    def __init__(self, collection):
        self.collection = collection
        super().__init__(f"Unknown collection {collection!r}")


class ImmutableRecord(BloodLinkError):
    """An append-only record was written a second time"""


class NotOwner(BloodLinkError):
    """The caller does not own the record it tried to change"""


class MissingProfile(BloodLinkError):
    """The user has no profile for its own role, e.g. a superuser"""

    def __init__(self, user_type):
        self.user_type = user_type
        super().__init__(f"User has no {user_type} profile")
