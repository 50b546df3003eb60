"""Result carrier returned by every client call."""

from dataclasses import dataclass
from typing import Generic, TypeVar

from typed_api_client.envelope.models import ApiError, ApiResponse

T = TypeVar("T")


@dataclass(frozen=True)
class ApiResult(Generic[T]):
    """Pairs the transport-level status code with the mapped envelope.

    Produced exactly once per client call and never mutated afterwards.
    """

    status_code: int
    response: ApiResponse[T] | None = None

    @property
    def is_success(self) -> bool:
        return self.response is not None and 200 <= self.status_code < 300 and self.response.is_success

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404

    @property
    def is_conflict(self) -> bool:
        return self.status_code == 409

    @property
    def result(self) -> T | None:
        if self.response is None:
            return None
        return self.response.result

    @property
    def errors(self) -> list[ApiError]:
        if self.response is None:
            return []
        return list(self.response.errors)
