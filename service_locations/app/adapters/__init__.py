"""
Adapters package for the Locations Service.

Contains HTTP clients for external dependencies. Adapters map transport and
status failures onto shared errors and never retry on their own.
"""

from .weather_client import WeatherProviderClient

__all__ = ["WeatherProviderClient"]
