"""Request objects prepared by clients and executed by transports."""

from dataclasses import dataclass, field
from http import HTTPMethod
from typing import Any, Self


@dataclass
class FilterOptions:
    """OData-style query options for collection endpoints."""

    filter_expression: str | None = None
    select: list[str] | None = None
    expand: list[str] | None = None
    order_by: str | None = None
    skip: int = 0
    top: int = 0
    count: bool = False

    def to_query_parameters(self) -> list[tuple[str, str]]:
        params: list[tuple[str, str]] = []
        if self.filter_expression and self.filter_expression.strip():
            params.append(("$filter", self.filter_expression))
        if self.select:
            params.append(("$select", ",".join(self.select)))
        if self.expand:
            params.append(("$expand", ",".join(self.expand)))
        if self.order_by and self.order_by.strip():
            params.append(("$orderby", self.order_by))
        if self.skip > 0:
            params.append(("$skip", str(self.skip)))
        if self.top > 0:
            params.append(("$top", str(self.top)))
        if self.count:
            params.append(("$count", "true"))
        return params


@dataclass
class RestRequest:
    """A logical request: resource path relative to a base URL plus verb.

    The base URL is applied by the transport, so the same request can be
    executed against any configured host.
    """

    resource: str
    method: str = HTTPMethod.GET.value
    headers: dict[str, str] = field(default_factory=dict)
    params: list[tuple[str, str]] = field(default_factory=list)
    json: Any = None

    def __post_init__(self) -> None:
        if not self.resource:
            raise ValueError("Resource cannot be null or empty")
        self.method = str(self.method).upper()

    def add_header(self, name: str, value: str) -> Self:
        if not name:
            raise ValueError("Header name cannot be null or empty")
        self.headers[name] = value
        return self

    def add_query_parameter(self, name: str, value: Any) -> Self:
        if not name:
            raise ValueError("Query parameter name cannot be null or empty")
        self.params.append((name, str(value)))
        return self

    def add_json_body(self, body: Any) -> Self:
        self.json = body
        return self

    def add_filter_options(self, filter_options: FilterOptions | None) -> Self:
        if filter_options is None:
            return self
        self.params.extend(filter_options.to_query_parameters())
        return self
