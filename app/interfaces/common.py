"""
Helpers shared by the routers.
"""

from typing import TypeVar

from app.shared.domain import Result
from app.shared.errors.exceptions import ActionFailedError

T = TypeVar("T")


def unwrap(result: Result[T]) -> T:
    """Return the value of a success, or raise ActionFailedError.

    Raises:
        ActionFailedError: Carrying the use case's user-facing message.
    """
    if result.is_failure:
        raise ActionFailedError(result.error or "Action impossible")
    return result.value
