# ledger/api/errors.py

"""
Service error -> HTTP response.

Body: {"detail": <message>, "code": <stable code>[, "field": <field>]}

- IMMUTABLE_FIELD -> 409
- NOT_FOUND       -> 404
- TRANSIENT       -> 503 + Retry-After (safe to retry)
- everything else -> 400
"""

from __future__ import annotations

import logging

from rest_framework import status
from rest_framework.response import Response

from ledger.services.exceptions import LedgerServiceError

logger = logging.getLogger(__name__)

RETRY_AFTER_SECONDS = 1

STATUS_BY_CODE = {
    "IMMUTABLE_FIELD": status.HTTP_409_CONFLICT,
    "NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "TRANSIENT": status.HTTP_503_SERVICE_UNAVAILABLE,
}


def ledger_error_response(exc: LedgerServiceError) -> Response:
    http_status = STATUS_BY_CODE.get(exc.code, status.HTTP_400_BAD_REQUEST)

    logger.warning(
        "Ledger operation rejected",
        extra={"code": exc.code, "field": exc.field, "detail": str(exc), "http_status": http_status},
    )

    body = {"detail": str(exc), "code": exc.code}
    if exc.field:
        body["field"] = exc.field

    response = Response(body, status=http_status)
    if http_status == status.HTTP_503_SERVICE_UNAVAILABLE:
        response["Retry-After"] = str(RETRY_AFTER_SECONDS)
    return response
