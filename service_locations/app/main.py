"""
Locations service for the Locations service layer.
"""

from typing import Dict, Optional

from fastapi import Path, Query, Response

from shared.base_service import BaseService
from service_locations.app.adapters.weather_client import WeatherProviderClient
from service_locations.app.domain import project_location, resolve_sections
from service_locations.app.keys import location_details_key, location_key
from service_locations.app.store import DocumentRead, FlatMapRead, RedisDocumentStore
from service_locations.app.weather import WeatherCacheAside


class LocationsService(BaseService):
    """Locations service implementation."""

    def __init__(
        self,
        store: Optional[RedisDocumentStore] = None,
        provider: Optional[WeatherProviderClient] = None,
    ):
        super().__init__("locations", 8081)
        self.store = store or RedisDocumentStore(
            self.config.redis_url,
            socket_timeout=self.config.redis_socket_timeout,
            metrics=self.metrics,
        )
        self.provider = provider or WeatherProviderClient(
            self.config.weather_api_url,
            self.config.weather_api_key,
            timeout=self.config.weather_timeout,
            metrics=self.metrics,
        )
        if not self.config.weather_api_key and provider is None:
            self.logger.warning("Weather API key is not configured; the provider will reject lookups")

        self.weather = WeatherCacheAside(
            self.store,
            self.provider,
            ttl_seconds=self.config.weather_cache_ttl,
            metrics=self.metrics,
        )

        @self.app.on_event("shutdown")
        async def _shutdown():
            await self.weather.drain()
            await self.provider.close()
            await self.store.close()

        self._setup_location_routes()

        # Expose service instance via app state for introspection/testing
        self.app.state.locations_service = self

    def _setup_location_routes(self):
        """Set up location routes."""

        @self.app.get("/")
        async def root():
            """Root endpoint."""
            return {
                "service": self.service_name,
                "message": "Locations Service Layer - Locations API",
                "version": "1.0.0",
            }

        @self.app.get("/location/{location_id}")
        async def get_location(
            location_id: int = Path(..., ge=1),
            with_details: bool = Query(False, alias="withDetails"),
        ):
            """Location overview, optionally merged with its details document."""
            ops = [FlatMapRead(location_key(location_id))]
            if with_details:
                ops.append(DocumentRead(location_details_key(location_id)))

            results = await self.store.batch_read(ops)
            details = results[1] if with_details else None
            return project_location(results[0], details)

        @self.app.get("/location/{location_id}/details")
        async def get_location_details(
            location_id: int = Path(..., ge=1),
            sections: Optional[str] = Query(None),
        ):
            """Whole details document, or only the requested sections."""
            paths = resolve_sections(sections)
            return await self.store.get_document(location_details_key(location_id), paths)

        @self.app.get("/location/{location_id}/weather")
        async def get_location_weather(
            response: Response,
            location_id: int = Path(..., ge=1),
        ):
            """Current weather for a location, cached for an hour."""
            result = await self.weather.get_weather(location_id)
            response.headers["X-Cache"] = "HIT" if result.cached else "MISS"
            return result.payload

    async def _check_dependencies(self) -> Dict[str, str]:
        """Check Redis connectivity."""
        return {"redis": "ok" if await self.store.ping() else "error"}


def create_app(
    store: Optional[RedisDocumentStore] = None,
    provider: Optional[WeatherProviderClient] = None,
):
    """Create FastAPI application."""
    service = LocationsService(store=store, provider=provider)
    return service.app


if __name__ == "__main__":
    service = LocationsService()
    service.run()
