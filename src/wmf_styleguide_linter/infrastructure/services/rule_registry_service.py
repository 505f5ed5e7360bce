"""RuleRegistryService: loads the rule registry used for messages, symbols and fixable flags."""

import logging
from pathlib import Path
from typing import cast

import yaml

from wmf_styleguide_linter.domain.registry_types import RuleRegistryEntry


class RuleRegistryService:
    """Loads rule_registry.yaml; the domain reads entries from the returned mapping."""

    def __init__(self, registry_path: str | None = None) -> None:
        if registry_path is not None:
            self._path = Path(registry_path)
        else:
            # Default: packaged resource next to this package
            _base = Path(__file__).resolve().parent.parent.parent
            self._path = _base / "resources" / "rule_registry.yaml"
        self._registry: dict[str, RuleRegistryEntry] = {}
        self._load()

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> None:
        if not self._path.exists():
            self._registry = {}
            return
        try:
            with open(self._path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            logging.warning("Rule registry %s is not valid YAML: %s", self._path, exc)
            data = None
        self._registry = (
            cast(dict[str, RuleRegistryEntry], data) if isinstance(data, dict) else {}
        )

    def get_registry(self) -> dict[str, RuleRegistryEntry]:
        """Return a shallow copy of the loaded registry for use by domain/use_cases."""
        return dict(self._registry)
