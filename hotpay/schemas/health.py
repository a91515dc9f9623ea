"""
Health check endpoint schemas.
"""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """
    Response model for GET /health.

    Used by load balancers and deployment checks. Does not touch the database.
    """

    status: str = Field(
        default="ok",
        description="Always 'ok' if the process is responding",
        examples=["ok"]
    )
    service: str = Field(
        default="hotpay-anychain",
        description="Service identifier",
    )
