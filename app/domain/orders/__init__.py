"""
Orders bounded context: domain layer.

The Order aggregate and its line items:
- Status state machine (pending, paid, shipped, delivered, cancelled, refunded)
- Totals computed from line items
- Optimistic concurrency contract for persistence
"""
