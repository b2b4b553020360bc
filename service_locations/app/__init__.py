"""
Locations Service package for the Locations service layer.

The service is a read-only gateway over Redis that serves:
- Location overviews, optionally merged with their details document
- Whitelisted sections of a location's details document
- Current weather for a location, cached for an hour in front of the provider

Structure:
- app.main: FastAPI app, routes, and lifecycle wiring.
- app.keys: Redis key namespace.
- app.store: Redis hash / RedisJSON / string client with pipelined reads.
- app.domain: Pure shaping helpers (projection, section selectors).
- app.weather: Cache-aside weather lookup.
- app.adapters: HTTP client for the weather provider.
"""
