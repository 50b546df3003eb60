"""Mapping of raw HTTP responses onto the typed envelope.

This is the one place where malformed upstream output is normalised: every
``httpx.Response`` maps to a well-formed ``ApiResult`` and nothing here
raises for the caller.
"""

import json
import logging
from http import HTTPStatus
from typing import Any

import httpx
from pydantic import ValidationError

from typed_api_client.envelope.models import ApiError, ApiResponse
from typed_api_client.envelope.problem import PROBLEM_CONTENT_TYPE, ProblemDetail
from typed_api_client.envelope.result import ApiResult

logger = logging.getLogger(__name__)

DESERIALIZATION_ERROR_CODE = "DeserializationError"
UNEXPECTED_ERROR_CODE = "UnexpectedError"

DESERIALIZATION_ERROR_MESSAGE = "Response received by client could not be transformed into an API response."

# Statuses that never carry a body
_NO_BODY_STATUS_CODES = frozenset([204, 304])

_MAX_TEXT_LENGTH = 200


def to_api_result(response: httpx.Response, result_type: Any = Any) -> ApiResult:
    """Map a raw HTTP response onto ``ApiResult[result_type]``.

    Args:
        response: The raw response returned by a transport
        result_type: Type of the ``result`` member (any pydantic-compatible annotation)

    Returns:
        API result with the original status code and a populated envelope
    """
    status_code = response.status_code
    try:
        envelope = _map_envelope(response, result_type)
    except Exception as e:
        logger.warning(f"Unexpected error mapping response with status {status_code}: {e}")
        # Untyped: result_type may be what failed
        envelope = ApiResponse[Any].from_error(
            status_code,
            ApiError(
                code=UNEXPECTED_ERROR_CODE,
                message=f"Unexpected error during response processing: {e}",
            ),
        )
    return ApiResult(status_code=status_code, response=envelope)


def _map_envelope(response: httpx.Response, result_type: Any) -> ApiResponse:
    status_code = response.status_code
    envelope_type = ApiResponse[result_type]
    is_success = 200 <= status_code < 300

    if not _expects_body(response) or not response.content.strip():
        if is_success:
            return envelope_type(status_code=status_code)
        return envelope_type.from_error(status_code, status_error(response))

    content_type = response.headers.get("content-type", "").lower()

    if PROBLEM_CONTENT_TYPE in content_type:
        return _map_problem(response, envelope_type)

    if not _is_structured(content_type):
        if is_success:
            return envelope_type.from_error(status_code, _deserialization_error())
        return envelope_type.from_error(status_code, status_error(response, message=response.text[:_MAX_TEXT_LENGTH]))

    try:
        envelope = envelope_type.model_validate_json(response.content)
    except ValidationError as e:
        logger.debug(f"Response body with status {status_code} is not an API envelope: {e.error_count()} errors")
        return envelope_type.from_error(status_code, _deserialization_error(detail=_first_validation_message(e)))

    return envelope.with_status(status_code)


def _map_problem(response: httpx.Response, envelope_type: type[ApiResponse]) -> ApiResponse:
    status_code = response.status_code
    try:
        data = json.loads(response.content)
    except ValueError:
        return envelope_type.from_error(status_code, _deserialization_error())

    problem = ProblemDetail.from_payload(data)
    if problem is None:
        return envelope_type.from_error(status_code, _deserialization_error())
    return envelope_type.from_error(status_code, problem.to_api_error(fallback_code=status_code_name(status_code)))


def _expects_body(response: httpx.Response) -> bool:
    if response.status_code in _NO_BODY_STATUS_CODES:
        return False
    try:
        method = response.request.method
    except RuntimeError:
        # Response constructed without a request (test doubles)
        return True
    return method != "HEAD"


def _is_structured(content_type: str) -> bool:
    if not content_type:
        return True
    media_type = content_type.split(";", 1)[0].strip()
    return media_type == "application/json" or media_type.endswith("+json")


def _deserialization_error(detail: str | None = None) -> ApiError:
    return ApiError(code=DESERIALIZATION_ERROR_CODE, message=DESERIALIZATION_ERROR_MESSAGE, detail=detail)


def _first_validation_message(error: ValidationError) -> str | None:
    details = error.errors()
    if not details:
        return None
    first = details[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    return f"{location}: {first.get('msg')}" if location else first.get("msg")


def status_code_name(status_code: int) -> str:
    """Symbolic name for a status code, e.g. ``NOT_FOUND`` or ``HTTP_599``."""
    try:
        return HTTPStatus(status_code).name
    except ValueError:
        return f"HTTP_{status_code}"


def status_error(response: httpx.Response, message: str | None = None) -> ApiError:
    """Build a single error from the status code and reason phrase."""
    reason = response.reason_phrase or f"HTTP {response.status_code}"
    return ApiError(code=status_code_name(response.status_code), message=message or reason)
