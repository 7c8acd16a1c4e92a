"""
Shared module package.

Contains cross-cutting concerns used across bounded contexts:
- Error handling and error pages
- Header policy middleware
- Logging configuration
"""
