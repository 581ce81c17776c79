"""
Core application modules.
Contains essential infrastructure components:
- bootstrap: Startup housekeeping (expired session purge)
- clock: UTC time helpers and timestamp formatting
- db: Database configuration and connection management
- errors: Service error taxonomy mapped to HTTP statuses
- security: Password hashing and session/order identifiers
"""
