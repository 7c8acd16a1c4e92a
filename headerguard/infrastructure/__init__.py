"""
Infrastructure layer package.

Adapters that bind the domain to Starlette primitives.
"""
