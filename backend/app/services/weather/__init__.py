"""Weather service module.

Current conditions and forecasts from WeatherAPI.com.
"""

from .normalizer import MAX_FORECAST_DAYS, normalize_current, normalize_forecast
from .service import DEFAULT_FORECAST_DAYS, WeatherService

__all__ = [
    "DEFAULT_FORECAST_DAYS",
    "MAX_FORECAST_DAYS",
    "WeatherService",
    "normalize_current",
    "normalize_forecast",
]
