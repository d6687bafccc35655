"""Configuration for the checker. Immutable value object created by Infrastructure."""

from __future__ import annotations

import logging

KNOWN_KEYS: frozenset[str] = frozenset({"registry_path", "report_fix_hints"})


class ConfigurationLoader:
    """
    Immutable configuration read from `[tool.clean-test]`.

    Domain does not read the filesystem; Infrastructure calls
    ConfigFileLoader.load_config_from_fs() and constructs
    ConfigurationLoader(config_dict) at the composition root.
    The naming conventions themselves are constants and cannot be configured.
    """

    def __init__(self, config_dict: dict[str, object]) -> None:
        self._config = config_dict
        if config_dict:
            self.validate_config(config_dict)

    def validate_config(self, config: dict[str, object]) -> None:
        """Warn about keys this checker does not understand."""
        for key in sorted(set(config) - KNOWN_KEYS):
            logging.warning("Configuration Warning: unknown key '%s' in [tool.clean-test].", key)
        registry_path = config.get("registry_path")
        if registry_path is not None and not isinstance(registry_path, str):
            logging.warning(
                "Configuration Warning: 'registry_path' must be a string, got %s.",
                type(registry_path).__name__,
            )

    @property
    def registry_path(self) -> str | None:
        """Custom message registry (YAML) replacing the packaged one."""
        raw = self._config.get("registry_path")
        return raw if isinstance(raw, str) else None

    @property
    def report_fix_hints(self) -> bool:
        """Log the manual instructions and rendered fixes of every violation."""
        return bool(self._config.get("report_fix_hints", False))
