"""
Infrastructure layer package.

Contains concrete implementations (adapters) of the ports
defined in the domain layer. This is where the database, billing,
image hosting and other external integrations live.
"""
