"""Pydantic schemas for API requests and responses.

Field names on the wire follow the published API (camelCase) through aliases.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime


class ShortenRequest(BaseModel):
    """Request to shorten a URL."""

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {"originalURL": "https://example.com/very/long/path/to/resource"}
            ]
        },
    )

    original_url: str = Field(
        ...,
        alias="originalURL",
        description="The URL to shorten",
        min_length=1,
        max_length=2048,
    )


class ShortenResponse(BaseModel):
    """Response after shortening a URL."""

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "shortURL": "https://short.link/aB3dE9x",
                    "statsURL": "https://short.link/stats/aB3dE9x",
                }
            ]
        },
    )

    short_url: str = Field(..., alias="shortURL", description="The complete short URL")
    stats_url: str = Field(..., alias="statsURL", description="URL of the redirect statistics")


class StatsResponse(BaseModel):
    """Redirect statistics of a short URL."""

    model_config = ConfigDict(populate_by_name=True)

    short_url: str = Field(..., alias="shortURL", description="The complete short URL")
    num_redirects: int = Field(..., alias="numRedirects", ge=0, description="Number of redirects served")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Overall status")
    database: str = Field(..., description="Store status")
    timestamp: datetime = Field(..., description="Check timestamp")


class ErrorResponse(BaseModel):
    """Error response."""

    detail: Optional[str] = Field(None, description="Error message")
