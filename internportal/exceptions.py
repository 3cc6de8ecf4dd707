import logging

from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class PortalError(APIException):
    """
    Base class for domain errors raised by the service layer.
    DRF renders these directly, so views don't need try/except blocks.
    """

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Request could not be processed."
    default_code = "error"


class ValidationError(PortalError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid input."
    default_code = "invalid"


class NotFoundError(PortalError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found."
    default_code = "not_found"


class ConflictError(PortalError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Conflicting state."
    default_code = "conflict"


class ConcurrencyError(PortalError):
    """A write collided with another client and could not be reconciled."""

    status_code = status.HTTP_409_CONFLICT
    default_detail = "The record was modified concurrently, retry the request."
    default_code = "concurrency"


class PartialAggregationFailure(Exception):
    """
    Raised when a batched report has failed entries and the caller
    asked for all-or-nothing behaviour.
    """

    def __init__(self, failures):
        self.failures = dict(failures)
        super().__init__(
            f"{len(self.failures)} report(s) failed: "
            + ", ".join(f"{key}: {reason}" for key, reason in self.failures.items())
        )


def portal_exception_handler(exc, context):
    """
    Renders errors as {"error": ..., "code": ...}, the shape the frontend
    already reads, and turns anything unexpected into a logged 500.
    """
    if isinstance(exc, PartialAggregationFailure):
        logger.warning("%s", exc)
        return Response(
            {
                "error": "One or more reports could not be built.",
                "code": "partial_failure",
                "failed": {str(key): reason for key, reason in exc.failures.items()},
            },
            status=status.HTTP_422_UNPROCESSABLE_ENTITY,
        )

    response = exception_handler(exc, context)

    if response is None:
        view = context.get("view")
        logger.exception(
            "Unhandled error in %s", view.__class__.__name__ if view else "unknown view"
        )
        return Response(
            {"error": "Internal Server Error"},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    if isinstance(exc, PortalError):
        response.data = {"error": str(exc.detail), "code": exc.get_codes()}
        if response.status_code >= 500:
            logger.error("%s: %s", exc.__class__.__name__, exc.detail)
        else:
            logger.info("%s: %s", exc.__class__.__name__, exc.detail)

    return response
