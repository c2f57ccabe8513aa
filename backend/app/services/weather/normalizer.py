"""WeatherAPI.com response normalization."""

from typing import Any

from app.models import DaySummary, ForecastDay, ForecastPayload, WeatherPayload

MAX_FORECAST_DAYS = 7


def normalize_current(payload: dict[str, Any]) -> WeatherPayload:
    """Reshape a ``current.json`` (or ``forecast.json``) response."""
    location = payload["location"]
    current = payload["current"]
    return WeatherPayload(
        location=location["name"],
        region=location.get("region", ""),
        country=location.get("country", ""),
        temp_c=current["temp_c"],
        temp_f=current["temp_f"],
        condition=current["condition"]["text"],
        icon=current["condition"]["icon"],
        humidity=current["humidity"],
        wind_kph=current["wind_kph"],
        feels_like_c=current["feelslike_c"],
        last_updated=current["last_updated"],
    )


def normalize_forecast_day(forecast_day: dict[str, Any]) -> ForecastDay:
    day = forecast_day["day"]
    return ForecastDay(
        date=forecast_day["date"],
        day=DaySummary(
            maxtemp_c=day["maxtemp_c"],
            mintemp_c=day["mintemp_c"],
            condition=day["condition"]["text"],
            chance_of_rain=day.get("daily_chance_of_rain", 0),
        ),
    )


def normalize_forecast(payload: dict[str, Any]) -> ForecastPayload:
    """Reshape a ``forecast.json`` response, keeping at most 7 days."""
    days = payload["forecast"]["forecastday"][:MAX_FORECAST_DAYS]
    return ForecastPayload(
        location=payload["location"]["name"],
        current=normalize_current(payload),
        forecast=[normalize_forecast_day(day) for day in days],
    )
