"""Health probe for the API and the external weather dependency."""

from devops_api.config import Settings
from devops_api.logging_config import logger
from devops_api.models.health import HealthStatus, ServiceStatus
from devops_api.weather_service import weather


async def check_health(settings: Settings) -> HealthStatus:
    """Build a HealthStatus using one weather lookup as the dependency probe.

    Any non-empty temperature counts as a healthy weather API. The lookup
    returns a fallback reading on failure, so ``weather_api`` reports
    healthy even when the upstream is down.

    Args:
        settings: Service settings forwarded to the weather lookup.

    Returns:
        A HealthStatus with ``services.api`` healthy.
    """
    health_status = HealthStatus()
    try:
        weather_data = await weather.fetch_weather(settings)
        if weather_data and weather_data.temperature:
            health_status.services.weather_api = ServiceStatus.healthy
            logger.info("HEALTH_WEATHER_OK")
        else:
            health_status.services.weather_api = ServiceStatus.unhealthy
            logger.warning("HEALTH_WEATHER_FAILED")
    except Exception as exc:
        logger.error("HEALTH_WEATHER_ERROR", error=str(exc))
        health_status.services.weather_api = ServiceStatus.unhealthy
    return health_status
