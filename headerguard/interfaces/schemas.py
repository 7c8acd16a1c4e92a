"""
Pydantic schemas for API responses.

These schemas define the API contract.
No policy logic belongs here.
"""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response schema for the health check endpoint.

    Attributes:
        status: Application health status.
        version: Application version string.
        header_stages: Header pipeline stages, in the order they run.
    """

    status: str = Field(..., description="Health status")
    version: str = Field(..., description="Application version")
    header_stages: list[str] = Field(
        default_factory=list, description="Header pipeline stages in order"
    )
