"""
Shared module package.

Code every bounded context of the marketplace relies on:
- domain: Result, Entity / ValueObject base classes, id generation
- errors: interface exceptions and their HTTP mapping
- security: secure headers and slowapi rate limiting
- logging: process-wide log format
"""
