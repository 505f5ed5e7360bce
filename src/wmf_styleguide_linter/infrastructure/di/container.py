from typing import Any, Optional, cast

from wmf_styleguide_linter.domain.config import ConfigurationLoader
from wmf_styleguide_linter.domain.registry_types import RuleRegistryEntry
from wmf_styleguide_linter.infrastructure.config_file_loader import ConfigFileLoader
from wmf_styleguide_linter.infrastructure.services.rule_registry_service import (
    RuleRegistryService,
)
from wmf_styleguide_linter.use_cases.check_styleguide import StyleguideRuleEngine
from wmf_styleguide_linter.use_cases.checks.styleguide import NotifySink, WmfStyleguideCheck


class StyleguideContainer:
    """Dependency Injection Container for the WMF styleguide check."""

    _instance: Optional["StyleguideContainer"] = None

    def __init__(self) -> None:
        self._singletons: dict[str, Any] = {}
        self._register_defaults()

    def _register_defaults(self) -> None:
        """Register default implementations."""
        config_dict = ConfigFileLoader.load_config_from_fs()
        config_loader = ConfigurationLoader(config_dict)
        self.register_singleton("ConfigurationLoader", config_loader)

        registry_service = RuleRegistryService()
        self.register_singleton("RuleRegistryService", registry_service)
        self.register_singleton(
            "StyleguideRuleEngine",
            StyleguideRuleEngine(config_loader, registry_service.get_registry()),
        )

    def register_singleton(self, key: str, instance: Any) -> None:
        """Register a singleton instance."""
        self._singletons[key] = instance

    def get(self, key: str) -> Any:
        """Retrieve a dependency by key. Prefer explicit get_* methods for type safety."""
        if key in self._singletons:
            return self._singletons[key]
        raise ValueError(f"Dependency '{key}' not registered.")

    def get_config_loader(self) -> ConfigurationLoader:
        """Return the configuration loader (created at composition root)."""
        return cast(ConfigurationLoader, self.get("ConfigurationLoader"))

    def get_registry_service(self) -> RuleRegistryService:
        """Return the rule registry service."""
        return cast(RuleRegistryService, self.get("RuleRegistryService"))

    def get_registry(self) -> dict[str, RuleRegistryEntry]:
        return self.get_registry_service().get_registry()

    def get_rule_engine(self) -> StyleguideRuleEngine:
        return cast(StyleguideRuleEngine, self.get("StyleguideRuleEngine"))

    def create_check(self, notify: NotifySink) -> WmfStyleguideCheck:
        """Build a check bound to the host's notify sink."""
        return WmfStyleguideCheck(
            notify, self.get_config_loader(), self.get_registry(), self.get_rule_engine()
        )

    @classmethod
    def get_instance(cls) -> "StyleguideContainer":
        """Get or create global container instance."""
        if cls._instance is None:
            cls._instance = StyleguideContainer()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset the singleton instance (primarily for testing)."""
        cls._instance = None
