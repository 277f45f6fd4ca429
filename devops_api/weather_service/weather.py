"""OpenWeatherMap lookup for Dhaka with a fixed fallback reading."""

import httpx

from devops_api.config import Settings
from devops_api.logging_config import logger
from devops_api.models.weather import WeatherResult

WEATHER_API_URL = "https://api.openweathermap.org/data/2.5/weather"
WEATHER_CITY_QUERY = "Dhaka,BD"
WEATHER_TIMEOUT_S = 5.0
FALLBACK_TEMPERATURE = "25"


def fallback_weather() -> WeatherResult:
    """Return the reading reported when the weather API cannot be used."""
    return WeatherResult(temperature=FALLBACK_TEMPERATURE)


async def fetch_weather(settings: Settings) -> WeatherResult:
    """Return the current Dhaka temperature, or the fallback on any failure.

    A single GET is issued with a 5 second timeout. Transport errors,
    timeouts, non-2xx statuses and malformed payloads are logged and
    absorbed; the caller always receives a WeatherResult.

    Args:
        settings: Service settings carrying the API key.

    Returns:
        The rounded Celsius reading, or ``{"temperature": "25", "temp_unit": "c"}``.
    """
    params = {
        "q": WEATHER_CITY_QUERY,
        "appid": settings.weather_api_key,
        "units": "metric",
    }
    try:
        async with httpx.AsyncClient(timeout=WEATHER_TIMEOUT_S) as client:
            response = await client.get(WEATHER_API_URL, params=params)
            logger.info(
                "WEATHER_RESPONSE",
                city=WEATHER_CITY_QUERY,
                status=response.status_code,
            )
            response.raise_for_status()
            return WeatherResult.from_api_response(response.json())
    except Exception as exc:
        logger.error("WEATHER_API_ERROR", city=WEATHER_CITY_QUERY, error=str(exc))
        return fallback_weather()
