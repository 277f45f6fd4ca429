"""Health check response models."""

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, Field


class ServiceStatus(str, Enum):
    """Health status values for the API and its dependencies."""

    healthy = "healthy"
    unhealthy = "unhealthy"
    unknown = "unknown"


class Services(BaseModel):
    """Per-service health values."""

    api: ServiceStatus = ServiceStatus.healthy
    weather_api: ServiceStatus = ServiceStatus.unknown


def utc_timestamp() -> str:
    """Return the current UTC time as an ISO-8601 string."""
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


class HealthStatus(BaseModel):
    """API health response payload."""

    status: str = "healthy"
    timestamp: str = Field(default_factory=utc_timestamp)
    services: Services = Field(default_factory=Services)


class HealthErrorResponse(BaseModel):
    """Payload returned when the health check itself fails."""

    status: str = "unhealthy"
    timestamp: str = Field(default_factory=utc_timestamp)
    error: str = "Internal server error"
