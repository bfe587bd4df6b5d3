# api/exceptions.py
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from algorithms.exceptions import (
    BloodLinkError,
    DonorOnCooldown,
    MissingProfile,
    NotInServiceArea,
    NotOwner,
    PreconditionFailed,
    RecordNotFound,
)


def bloodlink_exception_handler(exc, context):
    """
    Turn rules-core errors into API responses.

    Refused operations are 409 with a human readable reason; everything
    else falls through to DRF's handler.
    """
    if not isinstance(exc, BloodLinkError):
        return exception_handler(exc, context)

    body = {'error': str(exc)}
    if isinstance(exc, DonorOnCooldown):
        body['days_remaining'] = exc.days_remaining

    if isinstance(exc, PreconditionFailed):
        code = status.HTTP_409_CONFLICT
    elif isinstance(exc, RecordNotFound):
        code = status.HTTP_404_NOT_FOUND
    elif isinstance(exc, (NotOwner, NotInServiceArea, MissingProfile)):
        code = status.HTTP_403_FORBIDDEN
    else:
        code = status.HTTP_400_BAD_REQUEST
    return Response(body, status=code)
