"""
Base class for Polar API resources.

Resources translate typed arguments into requests on the shared client and
return PolarResult values. The transport raises PolarAPIError subclasses
so retries can act on them; this is the layer where they become failure
results.
"""

from typing import TYPE_CHECKING, Any, Callable, Iterator, Mapping, TypeVar
from urllib.parse import quote

import structlog
from pydantic import BaseModel, TypeAdapter, ValidationError

from ..errors import PolarAPIError, PolarValidationError
from ..models.base import PolarRequest
from ..models.exports import ExportFormat, ExportResponse
from ..pagination import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, Page, iterate_pages
from ..query import QueryBuilder, format_query_value
from ..result import PolarResult

if TYPE_CHECKING:
    from ..client import PolarClient

logger = structlog.get_logger(__name__)

T = TypeVar("T", bound=BaseModel)

Payload = BaseModel | Mapping[str, Any]


def segment(value: str) -> str:
    """Escape a caller-supplied id for use as a path segment."""
    return quote(str(value), safe="")


def validation_error_from_pydantic(exc: ValidationError, message: str) -> PolarValidationError:
    """Turn a pydantic ValidationError into a client-side PolarValidationError."""
    field_errors = [
        {
            "field": ".".join(str(p) for p in err["loc"]) or None,
            "message": err["msg"],
            "type": err["type"],
        }
        for err in exc.errors()
    ]
    summary = "; ".join(
        f"{e['field']}: {e['message']}" if e["field"] else e["message"]
        for e in field_errors
    )
    return PolarValidationError(
        f"{message}: {summary}" if summary else message,
        status_code=None,
        field_errors=field_errors,
    )


class BaseResource:
    """
    Shared request plumbing for resource clients.

    Subclasses set `query_builder` to the builder matching their list
    endpoint and call the `_get/_post/_patch/_delete/_list` helpers.
    """

    query_builder: type[QueryBuilder] = QueryBuilder

    def __init__(self, client: "PolarClient") -> None:
        self._client = client
        self._log = logger.bind(resource=type(self).__name__)
        # Sent with every request this resource makes
        self._headers: dict[str, str] | None = None

    # ------------------------------------------------------------------
    # Request helpers
    # ------------------------------------------------------------------

    def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
        form: dict[str, Any] | None = None,
        parse: Callable[[Any], Any] | None = None,
        timeout: float | None = None,
    ) -> PolarResult[Any]:
        try:
            body = self._client.request(
                method, path, params=params, json=json, data=form, timeout=timeout, headers=self._headers
            )
        except PolarAPIError as e:
            return PolarResult.fail(e)

        if parse is None:
            return PolarResult.ok(body)

        try:
            return PolarResult.ok(parse(body))
        except ValidationError as e:
            self._log.warning("Unexpected response shape", path=path, errors=e.error_count())
            return PolarResult.fail(
                PolarAPIError(
                    f"Could not parse response from {method} {path}: {e.error_count()} validation error(s)",
                    error_type="response_validation",
                    details=e.errors(include_url=False),
                )
            )

    @staticmethod
    def _parser(model: type[T] | None) -> Callable[[Any], Any] | None:
        if model is None:
            return None
        return model.model_validate

    @staticmethod
    def _list_parser(model: type[T]) -> Callable[[Any], list[T]]:
        """Parser for endpoints that answer with a bare JSON array (or an `items` envelope)."""
        adapter = TypeAdapter(list[model])

        def parse(body: Any) -> list[T]:
            if isinstance(body, dict) and "items" in body:
                body = body["items"]
            return adapter.validate_python(body)

        return parse

    def _get(
        self,
        path: str,
        model: type[T] | None = None,
        params: dict[str, Any] | None = None,
        timeout: float | None = None,
    ) -> PolarResult[Any]:
        return self._request("GET", path, params=params, parse=self._parser(model), timeout=timeout)

    def _post(
        self,
        path: str,
        model: type[T] | None = None,
        json: Any = None,
        params: dict[str, Any] | None = None,
        timeout: float | None = None,
    ) -> PolarResult[Any]:
        return self._request("POST", path, params=params, json=json, parse=self._parser(model), timeout=timeout)

    def _patch(
        self,
        path: str,
        model: type[T] | None = None,
        json: Any = None,
        timeout: float | None = None,
    ) -> PolarResult[Any]:
        return self._request("PATCH", path, json=json, parse=self._parser(model), timeout=timeout)

    def _delete(self, path: str, timeout: float | None = None) -> PolarResult[None]:
        return self._request("DELETE", path, timeout=timeout).map(lambda _: None)

    def _export(
        self,
        path: str,
        format: ExportFormat | str = ExportFormat.CSV,
        params: Mapping[str, Any] | None = None,
        timeout: float | None = None,
    ) -> PolarResult[ExportResponse]:
        """Request a GET export; unknown formats fail without a request."""
        try:
            fmt = ExportFormat(format).value
        except ValueError:
            return PolarResult.fail(
                PolarValidationError(
                    f"Invalid export format '{format}'",
                    status_code=None,
                    field_errors=[{"field": "format", "message": "invalid choice", "type": "enum"}],
                )
            )
        query = {"format": fmt}
        query.update({k: format_query_value(v) for k, v in (params or {}).items()})
        return self._get(path, ExportResponse, params=query, timeout=timeout)

    # ------------------------------------------------------------------
    # Payloads
    # ------------------------------------------------------------------

    @staticmethod
    def _payload(data: Payload, request_model: type[PolarRequest]) -> dict[str, Any]:
        """
        Validate a request body against its model and dump it.

        Raises PolarValidationError when the body is invalid.
        """
        if isinstance(data, request_model):
            model = data
        else:
            raw = data.model_dump(exclude_none=True) if isinstance(data, BaseModel) else dict(data)
            try:
                model = request_model.model_validate(raw)
            except ValidationError as e:
                raise validation_error_from_pydantic(e, f"Invalid {request_model.__name__}") from e
        return model.to_payload()

    def _send(
        self,
        method: str,
        path: str,
        data: Payload,
        request_model: type[PolarRequest],
        model: type[T] | None,
        timeout: float | None = None,
    ) -> PolarResult[Any]:
        """Validate `data` client-side, then send it. Invalid bodies never hit the network."""
        try:
            body = self._payload(data, request_model)
        except PolarValidationError as e:
            return PolarResult.fail(e)
        return self._request(method, path, json=body, parse=self._parser(model), timeout=timeout)

    @staticmethod
    def _require(**values: Any) -> PolarValidationError | None:
        """Client-side check for blank identifiers."""
        missing = [k for k, v in values.items() if v is None or (isinstance(v, str) and not v.strip())]
        if not missing:
            return None
        return PolarValidationError(
            f"Missing required value: {', '.join(missing)}",
            status_code=None,
            field_errors=[{"field": k, "message": "required", "type": "missing"} for k in missing],
        )

    # ------------------------------------------------------------------
    # Listing
    # ------------------------------------------------------------------

    def _build_query(
        self,
        query: QueryBuilder | Mapping[str, Any] | None,
        filters: Mapping[str, Any],
    ) -> QueryBuilder:
        if isinstance(query, self.query_builder):
            builder = query.copy()
        else:
            # A builder of another type is re-read so this endpoint's checks apply
            builder = self.query_builder()
            if isinstance(query, QueryBuilder):
                builder.extend(query.values())
            elif query:
                builder.extend(dict(query))
        builder.extend(dict(filters))
        return builder

    def _list(
        self,
        path: str,
        model: type[T],
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
        query: QueryBuilder | Mapping[str, Any] | None = None,
        filters: Mapping[str, Any] | None = None,
        timeout: float | None = None,
    ) -> PolarResult[Page[T]]:
        """
        Fetch one page.

        `limit` is clamped to the API maximum of 100; non-positive page or
        limit values fail without a request.
        """
        if page < 1 or limit < 1:
            return PolarResult.fail(
                PolarValidationError(
                    "page and limit must be positive integers",
                    status_code=None,
                    field_errors=[
                        {"field": name, "message": "must be >= 1", "type": "greater_than_equal"}
                        for name, value in (("page", page), ("limit", limit)) if value < 1
                    ],
                )
            )

        try:
            builder = self._build_query(query, filters or {})
            builder.validate()
        except PolarValidationError as e:
            return PolarResult.fail(e)

        params: dict[str, Any] = {"page": page, "limit": min(limit, MAX_PAGE_SIZE)}
        params.update(builder.params())

        return self._request(
            "GET",
            path,
            params=params,
            parse=Page[model].model_validate,
            timeout=timeout,
        )

    def _list_all(
        self,
        path: str,
        model: type[T],
        query: QueryBuilder | Mapping[str, Any] | None = None,
        filters: Mapping[str, Any] | None = None,
        timeout: float | None = None,
    ) -> Iterator[PolarResult[T]]:
        return iterate_pages(
            lambda page, limit: self._list(path, model, page, limit, query, filters, timeout),
            limit=MAX_PAGE_SIZE,
            resource=type(self).__name__,
        )
