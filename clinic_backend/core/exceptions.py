"""
Clinic exceptions and the project-wide DRF exception handler.

Every error response has the same envelope::

    {"error": "<message>", "details": <optional structured info>}

Status codes: 400 validation, 401 unauthenticated, 403 forbidden, 404 not
found, 409 conflict, 500 unexpected. Unhandled exceptions are logged with
their traceback and answered with a fixed 500 message.
"""

from __future__ import annotations

import logging
from typing import Any

from rest_framework import status
from rest_framework.exceptions import APIException, ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = 'Internal server error'

_MISSING_CODES = {'required', 'null', 'blank'}


class Conflict(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'Resource already exists.'
    default_code = 'conflict'


class ClinicError(Exception):
    """Base exception for clinic domain errors raised by service functions."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {'error': self.message}


class WorkflowStepError(ClinicError):
    """
    Raised when a later step of a multi-step appointment workflow fails.

    Earlier steps are already committed and are NOT rolled back; the response
    lists them so the client can show what actually happened.

    Attributes:
        action: The workflow action ('lab-request', 'refer-doctor', 'diagnose')
        failed_step: Name of the step that failed
        completed_steps: Names of the steps that were committed before the failure
    """

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(
        self,
        *,
        action: str,
        failed_step: str,
        completed_steps: list[str],
        message: str,
    ):
        self.action = action
        self.failed_step = failed_step
        self.completed_steps = list(completed_steps)
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            'error': self.message,
            'details': {
                'action': self.action,
                'failed_step': self.failed_step,
                'completed_steps': self.completed_steps,
            },
        }


def _first_message(data) -> str | None:
    if isinstance(data, dict):
        for key, value in data.items():
            msg = _first_message(value)
            if msg is None:
                continue
            if key in ('non_field_errors', 'detail') or isinstance(key, int):
                return msg
            return f'{key}: {msg}'
        return None
    if isinstance(data, (list, tuple)):
        for item in data:
            msg = _first_message(item)
            if msg is not None:
                return msg
        return None
    return str(data)


def _validation_message(exc: ValidationError) -> str:
    codes = exc.get_codes()
    if isinstance(codes, dict) and codes:
        missing = [
            field
            for field, field_codes in codes.items()
            if isinstance(field_codes, list)
            and field_codes
            and all(isinstance(code, str) and code in _MISSING_CODES for code in field_codes)
        ]
        if missing and len(missing) == len(codes):
            return 'Missing required fields: ' + ', '.join(missing)
    return _first_message(exc.detail) or 'Invalid input.'


def clinic_exception_handler(exc, context):
    """DRF ``EXCEPTION_HANDLER`` producing the ``{"error": ...}`` envelope."""

    view = context.get('view')
    view_name = view.__class__.__name__ if view is not None else '-'

    if isinstance(exc, ClinicError):
        logger.error('%s failed: %s', view_name, exc)
        return Response(exc.to_dict(), status=exc.status_code)

    response = exception_handler(exc, context)
    if response is None:
        logger.exception('Unexpected error in %s', view_name, exc_info=exc)
        return Response(
            {'error': INTERNAL_ERROR_MESSAGE},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    if isinstance(exc, ValidationError):
        response.data = {'error': _validation_message(exc), 'details': response.data}
    else:
        response.data = {'error': _first_message(response.data) or str(exc)}

    logger.warning('%s -> %s: %s', view_name, response.status_code, response.data['error'])
    return response
