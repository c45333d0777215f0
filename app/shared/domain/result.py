"""
Result type for use-case outcomes.

Use cases return a Result instead of raising for expected business
failures. The failure carries a human-readable message that is shown
to the end user as-is. Unexpected errors (database, network) are still
raised and handled at the request boundary.
"""

from typing import Any, Callable, Generic, Iterable, Optional, TypeVar

T = TypeVar("T")
U = TypeVar("U")


class Result(Generic[T]):
    """Success/failure wrapper.

    Build instances with ``Result.ok(value)`` or ``Result.fail(error)``,
    never through the constructor directly.
    """

    __slots__ = ("_is_success", "_value", "_error")

    def __init__(
        self, is_success: bool, value: Optional[T] = None, error: Optional[str] = None
    ) -> None:
        if is_success and error is not None:
            raise ValueError("A successful result cannot carry an error")
        if not is_success and not error:
            raise ValueError("A failed result must carry an error message")
        self._is_success = is_success
        self._value = value
        self._error = error

    @classmethod
    def ok(cls, value: Optional[T] = None) -> "Result[T]":
        """Return a successful result wrapping ``value``."""
        return cls(True, value=value)

    @classmethod
    def fail(cls, error: str) -> "Result[T]":
        """Return a failed result with the given message."""
        return cls(False, error=error)

    @classmethod
    def combine(cls, results: Iterable["Result[Any]"]) -> "Result[None]":
        """Return the first failure among ``results``, or an empty success."""
        for result in results:
            if result.is_failure:
                return cls.fail(result.error)  # type: ignore[arg-type]
        return cls.ok()

    @property
    def is_success(self) -> bool:
        return self._is_success

    @property
    def is_failure(self) -> bool:
        return not self._is_success

    @property
    def value(self) -> T:
        """The wrapped value.

        Raises:
            ValueError: If the result is a failure.
        """
        if not self._is_success:
            raise ValueError(f"Cannot read the value of a failed result: {self._error}")
        return self._value  # type: ignore[return-value]

    @property
    def error(self) -> Optional[str]:
        return self._error

    def map(self, fn: Callable[[T], U]) -> "Result[U]":
        """Apply ``fn`` to the value of a success; pass failures through."""
        if self.is_failure:
            return Result.fail(self._error)  # type: ignore[arg-type]
        return Result.ok(fn(self._value))  # type: ignore[arg-type]

    def bind(self, fn: Callable[[T], "Result[U]"]) -> "Result[U]":
        """Chain a Result-returning function; pass failures through."""
        if self.is_failure:
            return Result.fail(self._error)  # type: ignore[arg-type]
        return fn(self._value)  # type: ignore[arg-type]

    flat_map = bind

    def get_or_else(self, default: T) -> T:
        """Return the value of a success, or ``default`` on failure."""
        return self._value if self._is_success else default  # type: ignore[return-value]

    def __repr__(self) -> str:
        if self._is_success:
            return f"Result.ok({self._value!r})"
        return f"Result.fail({self._error!r})"
