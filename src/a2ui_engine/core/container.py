"""Dependency Injection Container."""

from injector import Injector, Module, provider, singleton

from ..catalog.registry import CatalogRegistry
from ..monitoring.metrics import MetricsCollector, metrics_collector
from ..protocol.validator import EnvelopeValidator
from .config import Limits, Settings, get_settings


class CoreModule(Module):
    """Core dependencies."""

    def __init__(self, settings: Settings | None = None, metrics: MetricsCollector | None = None) -> None:
        self.settings = settings
        self.metrics = metrics

    @singleton
    @provider
    def provide_settings(self) -> Settings:
        """Provide engine settings."""
        return self.settings or get_settings()

    @singleton
    @provider
    def provide_limits(self, settings: Settings) -> Limits:
        return settings.limits()

    @singleton
    @provider
    def provide_registry(self, settings: Settings) -> CatalogRegistry:
        """Provide the catalog registry singleton under the configured catalog id."""
        return CatalogRegistry(catalog_id=settings.catalog_id)

    @singleton
    @provider
    def provide_validator(self, registry: CatalogRegistry, limits: Limits) -> EnvelopeValidator:
        """Provide envelope validator with registry and limits."""
        return EnvelopeValidator(registry, limits)

    @singleton
    @provider
    def provide_metrics(self) -> MetricsCollector:
        # Default collector is bound to the global Prometheus registry
        return self.metrics or metrics_collector


def create_container(settings: Settings | None = None, metrics: MetricsCollector | None = None) -> Injector:
    """Create configured injector."""
    return Injector([CoreModule(settings, metrics)])
