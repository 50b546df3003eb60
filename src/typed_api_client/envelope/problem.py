"""RFC 7807 Problem Details support for error bodies."""

from dataclasses import dataclass
from typing import Any

from typed_api_client.envelope.models import ApiError

PROBLEM_CONTENT_TYPE = "application/problem+json"

_STANDARD_FIELDS = frozenset({"type", "title", "status", "detail", "instance"})


@dataclass
class ProblemDetail:
    """RFC 7807 Problem Details object.

    See: https://datatracker.ietf.org/doc/html/rfc7807
    """

    type: str | None = None  # URI reference identifying the problem type
    title: str | None = None  # Short, human-readable summary
    status: int | None = None  # HTTP status code
    detail: str | None = None  # Human-readable explanation
    instance: str | None = None  # URI reference identifying specific occurrence

    # Extension members (additional fields from API)
    extensions: dict[str, Any] | None = None

    @classmethod
    def from_payload(cls, data: Any) -> "ProblemDetail | None":
        """Build problem details from a decoded JSON body.

        Args:
            data: Decoded JSON body

        Returns:
            ProblemDetail object or None if the body has none of the standard members
        """
        if not isinstance(data, dict):
            return None
        if not any(field in data for field in _STANDARD_FIELDS):
            return None

        status = data.get("status")
        extensions = {k: v for k, v in data.items() if k not in _STANDARD_FIELDS}

        return cls(
            type=data.get("type"),
            title=data.get("title"),
            status=status if isinstance(status, int) else None,
            detail=data.get("detail"),
            instance=data.get("instance"),
            extensions=extensions if extensions else None,
        )

    def to_api_error(self, fallback_code: str) -> ApiError:
        """Convert problem details to a single envelope error."""
        code = self.title or fallback_code
        message = self.detail or self.title or "Unknown API error"
        detail = self.type if self.type and self.type != "about:blank" else None
        return ApiError(code=code, message=message, detail=detail, target=self.instance)
