"""
Domain layer package.

Contains pure policy logic: entities, value objects, header policies,
and port interfaces. This layer has ZERO external dependencies.
No framework imports, no IO, no side effects.
"""
