"""
Domain-specific errors for the orders bounded context.

Business rule violations are returned as Result failures by the
aggregate. The errors below come from persistence and propagate to
the request boundary, where they are mapped to HTTP responses.
No framework imports allowed.
"""


class OrderDomainError(Exception):
    """Base error for all orders domain errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class ConcurrentModificationError(OrderDomainError):
    """Raised when an order was changed by someone else since it was loaded."""

    def __init__(self, order_id: str) -> None:
        super().__init__(
            f"Order {order_id} was modified concurrently; reload and retry"
        )
        self.order_id = order_id


class OrderMappingError(OrderDomainError):
    """Raised when a persisted order row cannot be rehydrated."""

    def __init__(self, order_id: str, reason: str) -> None:
        super().__init__(f"Invalid persisted order {order_id}: {reason}")
        self.order_id = order_id
        self.reason = reason
