"""Subscriptions HTTP interface."""
