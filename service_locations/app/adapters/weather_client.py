"""
Async client for the OpenWeatherMap current-weather endpoint.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, Any, Dict, Optional

import httpx

from shared.errors import ProviderError, ProviderUnavailableError
from shared.logging import get_logger

if TYPE_CHECKING:  # pragma: no cover - imported for typing only
    from shared.metrics import MetricsCollector


PROVIDER_NAME = "openweathermap"
UNITS = "imperial"


class WeatherProviderClient:
    """Issues a single GET per lookup against the weather provider."""

    def __init__(
        self,
        api_url: str,
        api_key: str,
        *,
        timeout: float = 10.0,
        metrics: Optional["MetricsCollector"] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.api_url = api_url
        self.api_key = api_key
        self.metrics = metrics
        self.logger = get_logger("locations.weather_client")
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport)

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    async def get_current_weather(self, latitude: str, longitude: str) -> Dict[str, Any]:
        """Fetch current weather for a coordinate pair."""
        params = {
            "units": UNITS,
            "lat": latitude,
            "lon": longitude,
            "appid": self.api_key,
        }
        log_params = {"lat": latitude, "lon": longitude}

        start = time.perf_counter()
        try:
            response = await self._client.get(self.api_url, params=params)
        except httpx.HTTPError as exc:
            self._record("unavailable", start)
            self.logger.error("Weather provider unreachable", error=str(exc), **log_params)
            raise ProviderUnavailableError(PROVIDER_NAME, str(exc), details=log_params) from exc

        if not response.is_success:
            self._record("error", start)
            self.logger.error(
                "Weather provider request failed",
                status_code=response.status_code,
                response=response.text,
                **log_params
            )
            raise ProviderError(
                PROVIDER_NAME,
                f"Unexpected status {response.status_code}",
                details={"status_code": response.status_code},
            )

        try:
            payload = response.json()
        except ValueError as exc:
            self._record("error", start)
            self.logger.error("Weather provider returned invalid JSON", **log_params)
            raise ProviderError(PROVIDER_NAME, "Response body is not JSON", details=log_params) from exc

        self._record("ok", start)
        self.logger.debug("Weather retrieved from provider", **log_params)
        return payload

    def _record(self, outcome: str, start: float) -> None:
        if not self.metrics:
            return
        self.metrics.increment_counter("weather_provider_requests_total", outcome=outcome)
        self.metrics.observe_histogram("weather_provider_duration_seconds", time.perf_counter() - start)
