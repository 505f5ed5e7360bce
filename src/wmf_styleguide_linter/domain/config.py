"""Configuration for styleguide rules. Immutable value object created by Infrastructure."""

from __future__ import annotations

import logging

from wmf_styleguide_linter.domain.constants import (
    DEFAULT_DEPRECATED_DEFINES,
    DEFAULT_LEGACY_LOOKUP_FUNCTIONS,
    DEFAULT_LEGACY_VALIDATE_PREFIX,
    DEFAULT_LOOKUP_FUNCTION,
    DEFAULT_NODE_ALLOWED_RESOURCES,
    DEFAULT_NODE_DISALLOWED_TLDS,
    DEFAULT_PROFILE_INCLUDE_CLASSES,
    DEFAULT_PROFILE_INCLUDE_MODULES,
    DEFAULT_PROFILE_MODULE,
    DEFAULT_ROLE_MODULE,
    DEFAULT_SYSTEM_ROLE_RESOURCE,
)

_STRING_KEYS: dict[str, str] = {
    "profile_module": DEFAULT_PROFILE_MODULE,
    "role_module": DEFAULT_ROLE_MODULE,
    "system_role_resource": DEFAULT_SYSTEM_ROLE_RESOURCE,
    "lookup_function": DEFAULT_LOOKUP_FUNCTION,
    "legacy_validate_prefix": DEFAULT_LEGACY_VALIDATE_PREFIX,
}
_LIST_KEYS: dict[str, tuple[str, ...]] = {
    "legacy_lookup_functions": DEFAULT_LEGACY_LOOKUP_FUNCTIONS,
    "profile_include_modules": DEFAULT_PROFILE_INCLUDE_MODULES,
    "profile_include_classes": DEFAULT_PROFILE_INCLUDE_CLASSES,
    "deprecated_defines": DEFAULT_DEPRECATED_DEFINES,
    "node_allowed_resources": DEFAULT_NODE_ALLOWED_RESOURCES,
    "node_disallowed_tlds": DEFAULT_NODE_DISALLOWED_TLDS,
}


class ConfigurationLoader:
    """
    Immutable configuration for the styleguide check.

    Created by Infrastructure from the ``[tool.wmf-styleguide]`` table. Domain
    does not read the filesystem; the composition root calls
    ConfigFileLoader.load_config_from_fs() and constructs
    ConfigurationLoader(config_dict). Values of the wrong type are dropped
    with a warning and the default applies.
    """

    def __init__(self, config_dict: dict[str, object] | None = None) -> None:
        self._config: dict[str, object] = dict(config_dict or {})
        self._strings: dict[str, str] = {}
        self._lists: dict[str, tuple[str, ...]] = {}
        if self._config:
            self.validate_config(self._config)

    def validate_config(self, config: dict[str, object]) -> None:
        """Validate configuration values, keeping only well-typed ones."""
        for key, value in config.items():
            if key in _STRING_KEYS:
                if isinstance(value, str) and value:
                    self._strings[key] = value
                else:
                    logging.warning(
                        "Configuration Warning: '%s' must be a non-empty string; using %r.",
                        key,
                        _STRING_KEYS[key],
                    )
            elif key in _LIST_KEYS:
                if isinstance(value, list) and all(isinstance(v, str) for v in value):
                    self._lists[key] = tuple(value)
                else:
                    logging.warning(
                        "Configuration Warning: '%s' must be a list of strings; using %r.",
                        key,
                        list(_LIST_KEYS[key]),
                    )
            else:
                logging.warning("Configuration Warning: unknown key '%s' ignored.", key)

    @property
    def config(self) -> dict[str, object]:
        """Return the raw configuration table."""
        return self._config

    def _string(self, key: str) -> str:
        return self._strings.get(key, _STRING_KEYS[key])

    def _list(self, key: str) -> tuple[str, ...]:
        return self._lists.get(key, _LIST_KEYS[key])

    @property
    def profile_module(self) -> str:
        """Module holding profiles."""
        return self._string("profile_module")

    @property
    def role_module(self) -> str:
        """Module holding roles."""
        return self._string("role_module")

    @property
    def system_role_resource(self) -> str:
        return self._string("system_role_resource")

    @property
    def lookup_function(self) -> str:
        return self._string("lookup_function")

    @property
    def legacy_lookup_functions(self) -> tuple[str, ...]:
        return self._list("legacy_lookup_functions")

    @property
    def legacy_validate_prefix(self) -> str:
        return self._string("legacy_validate_prefix")

    @property
    def profile_include_modules(self) -> tuple[str, ...]:
        """Modules a profile may include; the profile module is always allowed."""
        modules = self._list("profile_include_modules")
        if self.profile_module in modules:
            return modules
        return (self.profile_module, *modules)

    @property
    def profile_include_classes(self) -> tuple[str, ...]:
        return self._list("profile_include_classes")

    @property
    def role_include_modules(self) -> tuple[str, ...]:
        return (self.role_module, self.profile_module)

    @property
    def deprecated_defines(self) -> tuple[str, ...]:
        return self._list("deprecated_defines")

    @property
    def node_allowed_resources(self) -> tuple[str, ...]:
        return self._list("node_allowed_resources")

    @property
    def node_disallowed_tlds(self) -> tuple[str, ...]:
        return self._list("node_disallowed_tlds")
