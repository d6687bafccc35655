from typing import Any, Optional, cast

from clean_test_linter.domain.config import ConfigurationLoader
from clean_test_linter.domain.protocols import FixerGatewayProtocol, GuidanceServiceProtocol
from clean_test_linter.infrastructure.config_file_loader import ConfigFileLoader
from clean_test_linter.infrastructure.gateways.libcst_fixer_gateway import LibCSTFixerGateway
from clean_test_linter.infrastructure.services.guidance_service import GuidanceService


class CleanTestContainer:
    """Dependency Injection Container for the clean-test checker."""

    _instance: Optional["CleanTestContainer"] = None

    def __init__(self) -> None:
        self._singletons: dict[str, Any] = {}
        self._register_defaults()

    def _register_defaults(self) -> None:
        """Register default implementations for protocols."""
        config_dict = ConfigFileLoader.load_config_from_fs()
        config_loader = ConfigurationLoader(config_dict)
        self.register_singleton("ConfigurationLoader", config_loader)
        self.register_singleton(
            "GuidanceService", GuidanceService(config_loader.registry_path)
        )
        self.register_singleton("LibCSTFixerGateway", LibCSTFixerGateway())

    # JUSTIFICATION: DI Container must handle any type of service
    def register_singleton(self, key: str, instance: Any) -> None:
        """Register a singleton instance."""
        self._singletons[key] = instance

    # JUSTIFICATION: DI Container must return any type of service
    def get(self, key: str) -> Any:
        """Retrieve a dependency by key. Prefer explicit get_* methods for type safety."""
        if key in self._singletons:
            return self._singletons[key]
        raise ValueError(f"Dependency '{key}' not registered.")

    def get_config_loader(self) -> ConfigurationLoader:
        """Return the configuration loader (created at composition root)."""
        return cast(ConfigurationLoader, self.get("ConfigurationLoader"))

    def get_guidance_service(self) -> GuidanceServiceProtocol:
        """Return the guidance service (rule registry)."""
        return cast(GuidanceServiceProtocol, self.get("GuidanceService"))

    def get_fixer_gateway(self) -> FixerGatewayProtocol:
        """Return the LibCST fixer gateway."""
        return cast(FixerGatewayProtocol, self.get("LibCSTFixerGateway"))

    @classmethod
    def get_instance(cls) -> "CleanTestContainer":
        """Get or create global container instance."""
        if cls._instance is None:
            cls._instance = CleanTestContainer()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Drop the global instance so the next get_instance() reloads configuration."""
        cls._instance = None
