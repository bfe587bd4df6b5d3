# algorithms/verification.py
"""
Hospital verification workflow, scoped to an organization's service city
"""
import copy
import logging
from collections import namedtuple

from django.utils import timezone

from algorithms.exceptions import VerificationAlreadyReviewed

PENDING = 'pending'
APPROVED = 'approved'
REJECTED = 'rejected'

VERIFICATION_STATUSES = [PENDING, APPROVED, REJECTED]

ApprovalResult = namedtuple('ApprovalResult', ['verification', 'hospital'])

logger = logging.getLogger(__name__)


def is_visible_to(verification, organization) -> bool:
    """Organizations only see verification requests from their own city"""
    return verification.city == organization.city


def find_hospital(verification, receivers):
    """Receiver whose email matches the verification's hospital email"""
    for receiver in receivers:
        if receiver.email == verification.hospital_email:
            return receiver
    return None


def _review(verification, status, reviewer, notes, now):
    if verification.status != PENDING:
        raise VerificationAlreadyReviewed(verification.status)
    updated = copy.copy(verification)
    updated.status = status
    updated.reviewed_by = reviewer
    updated.reviewed_at = now
    updated.notes = notes
    return updated


def approve(verification, reviewer, notes, receivers, now=None):
    """
    Approve a pending hospital verification.

    The hospital is looked up among ``receivers`` by email. A missing match
    is tolerated: the verification is still approved and ``hospital`` in
    the result is None.

    Args:
        verification: pending verification request
        reviewer: organization doing the review
        notes (str): reviewer notes
        receivers: iterable of receiver entities (``email``, ``is_verified``)
        now (datetime): review time, defaults to ``timezone.now()``

    Returns:
        ApprovalResult(verification, hospital)

    Raises:
        VerificationAlreadyReviewed: the verification is not pending
    """
    if now is None:
        now = timezone.now()

    updated = _review(verification, APPROVED, reviewer, notes, now)

    hospital = find_hospital(verification, receivers)
    if hospital is None:
        logger.warning(
            f"Verification {verification.id} approved but no receiver "
            f"with email {verification.hospital_email} was found"
        )
        return ApprovalResult(updated, None)

    verified_hospital = copy.copy(hospital)
    verified_hospital.is_verified = True
    updated.hospital = verified_hospital

    logger.info(f"Hospital {verification.hospital_name} verified by {reviewer.id}")
    return ApprovalResult(updated, verified_hospital)


def reject(verification, reviewer, notes, now=None):
    """Reject a pending hospital verification; the hospital is untouched"""
    if now is None:
        now = timezone.now()
    updated = _review(verification, REJECTED, reviewer, notes, now)
    logger.info(f"Hospital {verification.hospital_name} rejected by {reviewer.id}")
    return updated
