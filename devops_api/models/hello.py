"""Response models for the root and hello endpoints."""

from pydantic import BaseModel

from devops_api.models.weather import CityWeather


class Endpoints(BaseModel):
    """Paths of the public endpoints."""

    hello: str = "/api/hello"
    health: str = "/api/health"


class RootInfo(BaseModel):
    """Static service information."""

    message: str = "DevOps Task API"
    version: str
    endpoints: Endpoints = Endpoints()


class HelloResponse(BaseModel):
    """Host metadata merged with the Dhaka weather reading."""

    hostname: str
    datetime: str
    version: str
    weather: CityWeather


class ErrorResponse(BaseModel):
    """Error payload with a short label and a detail message."""

    error: str
    message: str
