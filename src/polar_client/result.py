"""
Result wrapper returned by every resource operation.

A PolarResult holds either a value or a PolarAPIError. Callers pick the
style they prefer:

    result = client.customers.get("cus_123")
    if result:
        print(result.value.email)
    else:
        print(result.error)

    customer = client.customers.get("cus_123").unwrap()  # raises on failure

    customer, error = client.customers.get("cus_123")
"""

from typing import Any, Callable, Generic, Iterator, TypeVar

from .errors import PolarAPIError

T = TypeVar("T")
U = TypeVar("U")


class PolarResult(Generic[T]):
    """Success value or typed error, never both."""

    __slots__ = ("_value", "_error")

    def __init__(self, value: Any = None, error: PolarAPIError | None = None):
        self._value = value
        self._error = error

    @classmethod
    def ok(cls, value: T = None) -> "PolarResult[T]":
        return cls(value=value)

    @classmethod
    def fail(cls, error: PolarAPIError) -> "PolarResult[T]":
        if not isinstance(error, PolarAPIError):
            raise TypeError(f"expected PolarAPIError, got {type(error).__name__}")
        return cls(error=error)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def is_success(self) -> bool:
        return self._error is None

    @property
    def is_failure(self) -> bool:
        return self._error is not None

    def __bool__(self) -> bool:
        return self.is_success

    @property
    def error(self) -> PolarAPIError | None:
        return self._error

    @property
    def value(self) -> T:
        """The success value. Raises the stored error on failure."""
        if self._error is not None:
            raise self._error
        return self._value

    def unwrap(self) -> T:
        return self.value

    def value_or(self, default: Any = None) -> Any:
        if self._error is not None:
            return default
        return self._value

    # ------------------------------------------------------------------
    # Error kind shortcuts
    # ------------------------------------------------------------------

    def _kind(self, name: str) -> bool:
        return self._error is not None and getattr(self._error, name)

    @property
    def is_validation_error(self) -> bool:
        return self._kind("is_validation_error")

    @property
    def is_auth_error(self) -> bool:
        return self._kind("is_auth_error")

    @property
    def is_not_found_error(self) -> bool:
        return self._kind("is_not_found_error")

    @property
    def is_conflict_error(self) -> bool:
        return self._kind("is_conflict_error")

    @property
    def is_rate_limit_error(self) -> bool:
        return self._kind("is_rate_limit_error")

    @property
    def is_server_error(self) -> bool:
        return self._kind("is_server_error")

    @property
    def is_network_error(self) -> bool:
        return self._kind("is_network_error")

    @property
    def is_timeout_error(self) -> bool:
        return self._kind("is_timeout_error")

    @property
    def is_client_error(self) -> bool:
        return self._kind("is_client_error")

    # ------------------------------------------------------------------
    # Combinators
    # ------------------------------------------------------------------

    def map(self, fn: Callable[[T], U]) -> "PolarResult[U]":
        """Transform the value; failures pass through untouched."""
        if self._error is not None:
            return PolarResult(error=self._error)
        return PolarResult(value=fn(self._value))

    def bind(self, fn: Callable[[T], "PolarResult[U]"]) -> "PolarResult[U]":
        """Chain another result-returning call; failures short-circuit."""
        if self._error is not None:
            return PolarResult(error=self._error)
        return fn(self._value)

    def match(
        self,
        on_success: Callable[[T], U],
        on_failure: Callable[[PolarAPIError], U],
    ) -> U:
        if self._error is not None:
            return on_failure(self._error)
        return on_success(self._value)

    def __iter__(self) -> Iterator[Any]:
        yield self._value if self._error is None else None
        yield self._error

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PolarResult):
            return NotImplemented
        return self._value == other._value and self._error is other._error

    def __repr__(self) -> str:
        if self._error is not None:
            return f"PolarResult.fail({self._error!r})"
        return f"PolarResult.ok({self._value!r})"
