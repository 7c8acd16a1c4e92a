"""
Interfaces layer package.

Contains FastAPI routers and Pydantic response schemas.
No policy logic belongs here.
"""
