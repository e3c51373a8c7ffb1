"""Forecast data model, the forecast client capability and the temperature labels."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Protocol, Union

# Temperature thresholds in Fahrenheit
COLD_MAX_F = 40.0  # at or below this is cold
HOT_MIN_F = 85.0  # at or above this is hot

COLD = "Cold"
MODERATE = "Moderate"
HOT = "Hot"


class ForecastError(RuntimeError):
    """Raised when the forecast provider cannot be reached or returns garbage."""


@dataclass
class ForecastPeriod:
    """A single time-bounded forecast entry from the provider."""

    temperature: float
    summary: str
    number: int = 0
    name: str = ""
    temperature_unit: str = "F"
    is_daytime: bool = True


@dataclass
class WeatherResponse:
    temperature: str
    forecast: str


@dataclass
class ErrorResponse:
    error: str


class ForecastClient(Protocol):
    """Anything that turns coordinates into an ordered list of forecast periods."""

    def forecast(
        self, latitude: Union[float, str], longitude: Union[float, str]
    ) -> List[ForecastPeriod]:
        """Return periods nearest-term first, or raise ForecastError."""
        ...


def classify_temperature(temp: float) -> str:
    """Map a Fahrenheit temperature to Cold, Moderate or Hot."""
    if temp <= COLD_MAX_F:
        return COLD
    elif temp < HOT_MIN_F:
        return MODERATE
    else:
        return HOT
