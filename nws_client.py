import logging
from typing import Any, Dict, List, Optional, Union

import requests

from forecast import ForecastError, ForecastPeriod

logger = logging.getLogger(__name__)

NWS_BASE_URL = "https://api.weather.gov"
NWS_USER_AGENT = "weather-summary-service"


def format_coordinate(value: Union[float, str]) -> str:
    """NWS only accepts up to 4 decimal places and redirects on trailing zeros."""
    text = f"{float(value):.4f}".rstrip("0").rstrip(".")
    if text == "-0":
        return "0"
    return text


class NWSForecastClient:
    """
    Forecast client for the National Weather Service API.
    Resolves the grid point for a coordinate and then fetches its forecast periods.
    """

    def __init__(
        self,
        base_url: str = NWS_BASE_URL,
        user_agent: str = NWS_USER_AGENT,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            'User-Agent': user_agent,
            'Accept': 'application/geo+json',
        })

    def forecast(self, latitude: Union[float, str], longitude: Union[float, str]) -> List[ForecastPeriod]:
        try:
            points_url = f"{self.base_url}/points/{format_coordinate(latitude)},{format_coordinate(longitude)}"
        except ValueError as exc:
            raise ForecastError(f"invalid coordinates: {exc}") from exc

        points = self._get_json(points_url)
        try:
            forecast_url = points['properties']['forecast']
        except (KeyError, TypeError) as exc:
            raise ForecastError(f"grid point response has no forecast url: {exc!r}") from exc
        if not forecast_url:
            raise ForecastError("grid point response has an empty forecast url")

        data = self._get_json(forecast_url, params={'units': 'us'})
        try:
            periods = data['properties']['periods']
            return [self._to_period(item) for item in periods]
        except (KeyError, TypeError, ValueError) as exc:
            raise ForecastError(f"malformed forecast response: {exc!r}") from exc

    def _get_json(self, url: str, params: Optional[Dict[str, str]] = None) -> Any:
        logger.debug("GET %s params=%s", url, params)
        try:
            resp = self.session.get(url, params=params, timeout=self.timeout)
            resp.raise_for_status()
            return resp.json()
        except requests.RequestException as exc:
            raise ForecastError(f"request to {url} failed: {exc}") from exc
        except ValueError as exc:
            # body was not JSON
            raise ForecastError(f"invalid JSON from {url}: {exc}") from exc

    @staticmethod
    def _to_period(item: Dict[str, Any]) -> ForecastPeriod:
        summary = item['shortForecast']
        if not isinstance(summary, str):
            raise ValueError(f"shortForecast is not a string: {summary!r}")
        return ForecastPeriod(
            temperature=float(item['temperature']),
            summary=summary,
            number=int(item.get('number', 0)),
            name=item.get('name', ''),
            temperature_unit=item.get('temperatureUnit', 'F'),
            is_daytime=bool(item.get('isDaytime', True)),
        )
