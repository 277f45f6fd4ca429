"""Weather models returned by the weather lookup."""

import math

from pydantic import BaseModel

TEMP_UNIT_CELSIUS = "c"


class WeatherResult(BaseModel):
    """Normalized temperature reading for a single city."""

    temperature: str
    temp_unit: str = TEMP_UNIT_CELSIUS

    @classmethod
    def from_api_response(cls, api_data: dict) -> "WeatherResult":
        """Create a WeatherResult from an OpenWeatherMap payload.

        Args:
            api_data: API payload containing ``main.temp`` in Celsius.

        Returns:
            A WeatherResult with the temperature rounded to a whole degree.

        Raises:
            KeyError, TypeError, ValueError: If ``main.temp`` is missing or
                not numeric.
        """
        temp = float(api_data["main"]["temp"])
        # halves round up: 2.5 -> 3, -2.5 -> -2
        return cls(temperature=str(math.floor(temp + 0.5)))


class CityWeather(BaseModel):
    """Weather readings keyed by city."""

    dhaka: WeatherResult
