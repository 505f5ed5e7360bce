"""Load [tool.wmf-styleguide] from pyproject.toml. Infrastructure I/O only."""

import logging
import tomllib
from pathlib import Path

from wmf_styleguide_linter.domain.constants import CONFIG_SECTION


class ConfigFileLoader:
    """
    Loads config from the nearest pyproject.toml, walking up from a start directory.
    """

    @staticmethod
    def load_config_from_fs(start: Path | None = None) -> dict[str, object]:
        """Return the [tool.wmf-styleguide] table, or an empty dict when there is none."""
        current_path = (start or Path.cwd()).resolve()
        empty: dict[str, object] = {}
        while True:
            config_file = current_path / "pyproject.toml"
            if config_file.exists():
                try:
                    with config_file.open("rb") as f:
                        data = tomllib.load(f)
                except (OSError, tomllib.TOMLDecodeError) as exc:
                    logging.warning("Configuration Warning: cannot read %s: %s", config_file, exc)
                    return empty
                tool_section = data.get("tool", {}) or {}
                section = tool_section.get(CONFIG_SECTION, {}) or {}
                return dict(section) if isinstance(section, dict) else empty
            if current_path.parent == current_path:
                return empty
            current_path = current_path.parent
