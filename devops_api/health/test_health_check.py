import pytest

from devops_api.config import Settings
from devops_api.health.health_check import check_health
from devops_api.models.health import HealthStatus, ServiceStatus
from devops_api.models.weather import WeatherResult
from devops_api.weather_service.weather import fallback_weather


def patch_fetch_weather(monkeypatch, result=None, error=None):
    async def fake_fetch_weather(settings):
        if error is not None:
            raise error
        return result

    monkeypatch.setattr(
        "devops_api.health.health_check.weather.fetch_weather", fake_fetch_weather
    )


@pytest.mark.asyncio
async def test_check_health_weather_healthy(monkeypatch):
    patch_fetch_weather(monkeypatch, WeatherResult(temperature="31"))
    status = await check_health(Settings())
    assert status.status == "healthy"
    assert status.services.api == ServiceStatus.healthy
    assert status.services.weather_api == ServiceStatus.healthy


@pytest.mark.asyncio
async def test_check_health_fallback_reads_as_healthy(monkeypatch):
    patch_fetch_weather(monkeypatch, fallback_weather())
    status = await check_health(Settings())
    assert status.services.weather_api == ServiceStatus.healthy


@pytest.mark.asyncio
async def test_check_health_empty_temperature_is_unhealthy(monkeypatch):
    patch_fetch_weather(monkeypatch, WeatherResult(temperature=""))
    status = await check_health(Settings())
    assert status.status == "healthy"
    assert status.services.api == ServiceStatus.healthy
    assert status.services.weather_api == ServiceStatus.unhealthy


@pytest.mark.asyncio
async def test_check_health_lookup_error_is_unhealthy(monkeypatch):
    patch_fetch_weather(monkeypatch, error=RuntimeError("boom"))
    status = await check_health(Settings())
    assert status.services.api == ServiceStatus.healthy
    assert status.services.weather_api == ServiceStatus.unhealthy


def test_health_status_defaults():
    dumped = HealthStatus().model_dump(mode="json")
    assert dumped["status"] == "healthy"
    assert dumped["services"] == {"api": "healthy", "weather_api": "unknown"}
    assert dumped["timestamp"].endswith("Z")
