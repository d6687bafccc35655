"""Load [tool.clean-test] from pyproject.toml. Infrastructure I/O only."""

import logging
import sys
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib as toml_lib
else:
    import tomli as toml_lib

from clean_test_linter.domain.constants import CONFIG_SECTION


class ConfigFileLoader:
    """Loads config from the nearest pyproject.toml, walking up from a start directory."""

    @staticmethod
    def load_config_from_fs(start: Path | None = None) -> dict[str, object]:
        """Load [tool.clean-test] from the nearest pyproject.toml; {} when there is none."""
        current_path = (start or Path.cwd()).resolve()
        for directory in (current_path, *current_path.parents):
            config_file = directory / "pyproject.toml"
            if not config_file.exists():
                continue
            try:
                with config_file.open("rb") as f:
                    data = toml_lib.load(f)
            except (OSError, toml_lib.TOMLDecodeError) as exc:
                logging.warning("Configuration Warning: cannot read %s: %s", config_file, exc)
                return {}
            tool_section = data.get("tool", {}) or {}
            return dict(tool_section.get(CONFIG_SECTION, {}) or {})
        return {}
