"""
Shared error handling package.

Centralizes error-to-HTTP mapping so that failures
are consistently translated into API responses.
"""
