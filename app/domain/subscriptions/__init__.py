"""
Subscriptions bounded context: domain layer.

Creator plans (FREE / PRO), usage counters and billing state:
- Plan limits and limit checks
- Upgrade / downgrade lifecycle
- Payment failure grace period
"""
