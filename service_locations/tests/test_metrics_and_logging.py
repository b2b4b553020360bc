"""
Tests for the shared metrics collector and log processors.
"""

from prometheus_client import CollectorRegistry

from service_locations.app.main import LocationsService
from service_locations.tests.helpers import InMemoryDocumentStore
from shared.logging import add_service_context
from shared.metrics import MetricsCollector, get_metrics_collector


class TestMetricsCollector:
    """Counters and histograms recorded through the collector."""

    def test_increment_counter_with_labels(self):
        registry = CollectorRegistry()
        metrics = MetricsCollector("locations", registry)

        metrics.increment_counter("weather_cache_requests_total", result="hit")
        metrics.increment_counter("weather_cache_requests_total", result="hit")

        assert registry.get_sample_value("weather_cache_requests_total", {"result": "hit"}) == 2.0

    def test_observe_histogram_without_labels(self):
        registry = CollectorRegistry()
        metrics = MetricsCollector("locations", registry)

        metrics.observe_histogram("weather_provider_duration_seconds", 0.25)

        assert registry.get_sample_value("weather_provider_duration_seconds_count") == 1.0
        assert registry.get_sample_value("weather_provider_duration_seconds_sum") == 0.25

    def test_unknown_metric_names_are_ignored(self):
        metrics = get_metrics_collector("locations")

        metrics.increment_counter("no_such_counter", result="hit")
        metrics.observe_histogram("no_such_histogram", 1.0)

    def test_collectors_do_not_share_registries(self):
        first = get_metrics_collector("locations")
        second = get_metrics_collector("locations")

        first.record_error("STORE_UNAVAILABLE")

        assert first.registry.get_sample_value(
            "errors_total", {"error_type": "STORE_UNAVAILABLE", "service": "locations"}
        ) == 1.0
        assert second.registry.get_sample_value(
            "errors_total", {"error_type": "STORE_UNAVAILABLE", "service": "locations"}
        ) is None


class TestServiceContext:
    """The service field attached to every log event."""

    def test_dotted_logger_name_uses_first_segment(self):
        event = add_service_context(None, "info", {"logger": "locations.weather"})

        assert event["service"] == "locations"

    def test_bare_logger_name_is_the_service(self):
        event = add_service_context(None, "info", {"logger": "locations"})

        assert event["service"] == "locations"

    def test_missing_logger_name_adds_nothing(self):
        assert "service" not in add_service_context(None, "info", {"event": "x"})

    def test_service_logger_is_namespaced_under_service(self):
        service = LocationsService(store=InMemoryDocumentStore())

        assert service.logger.bind().name == "locations.service"
