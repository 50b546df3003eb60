"""Standard response envelope shared by every typed API client.

Wire shape:

    {
        "result": <T | null>,
        "errors": [{"code": ..., "message": ..., "detail": ..., "target": ...}],
        "pagination": {...},
        "metadata": {...}
    }

The HTTP status code travels alongside the envelope, never inside it.
"""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

T = TypeVar("T")


class ApiError(BaseModel):
    """Structured error detail."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    code: str = ""
    message: str = ""
    detail: str | None = None
    target: str | None = None


class ApiPagination(BaseModel):
    """Pagination information for collection results."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    total_count: int = Field(default=0, alias="totalCount")
    filtered_count: int = Field(default=0, alias="filteredCount")
    skip: int = 0
    top: int = 0
    has_more: bool = Field(default=False, alias="hasMore")

    @classmethod
    def create(cls, total_count: int, filtered_count: int, skip: int, top: int) -> "ApiPagination":
        return cls(
            total_count=total_count,
            filtered_count=filtered_count,
            skip=skip,
            top=top,
            has_more=filtered_count > skip + top,
        )


class ApiResponse(BaseModel, Generic[T]):
    """Uniform success/error wrapper for any payload type.

    ``is_success`` holds only when the status is in the 2xx range and no
    errors are present. ``is_not_found`` depends on the status alone.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    status_code: int = Field(default=200, exclude=True)
    result: T | None = None
    errors: list[ApiError] = Field(default_factory=list)
    pagination: ApiPagination | None = None
    metadata: dict[str, str] | None = None

    @field_validator("errors", mode="before")
    @classmethod
    def _errors_default(cls, value):
        return [] if value is None else value

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300 and not self.errors

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404

    @property
    def is_conflict(self) -> bool:
        return self.status_code == 409

    @classmethod
    def from_error(cls, status_code: int, error: ApiError) -> "ApiResponse[T]":
        return cls(status_code=status_code, errors=[error])

    def with_status(self, status_code: int) -> "ApiResponse[T]":
        """Return a copy carrying the given transport status."""
        return self.model_copy(update={"status_code": status_code})

    def to_wire(self) -> dict:
        """Serialise to the wire shape, dropping empty optional members."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class CollectionModel(BaseModel, Generic[T]):
    """A list payload with optional metadata."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    items: list[T] = Field(default_factory=list)
    metadata: dict[str, str] | None = None

    @field_validator("items", mode="before")
    @classmethod
    def _items_default(cls, value):
        return [] if value is None else value
