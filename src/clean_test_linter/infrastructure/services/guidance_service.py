"""GuidanceService: loads the rule registry that backs the pylint messages."""

import logging
from pathlib import Path
from typing import cast

import yaml

from clean_test_linter.domain.constants import CLEAN_TEST_PREFIX
from clean_test_linter.domain.protocols import GuidanceServiceProtocol
from clean_test_linter.domain.registry_types import RuleRegistryEntry

logger = logging.getLogger(__name__)


class GuidanceService(GuidanceServiceProtocol):
    """Loads rule_registry.yaml and resolves entries by code or symbol."""

    def __init__(self, registry_path: str | None = None) -> None:
        if registry_path is not None:
            self._path = Path(registry_path)
        else:
            # Default: packaged resource next to this package
            _base = Path(__file__).resolve().parent.parent
            self._path = _base / "resources" / "rule_registry.yaml"
        self._registry: dict[str, RuleRegistryEntry] = {}
        self._load()

    def _load(self) -> None:
        if not self._path.exists():
            logger.warning("Rule registry %s not found; no messages will be defined.", self._path)
            self._registry = {}
            return
        with open(self._path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
        self._registry = (
            cast(dict[str, RuleRegistryEntry], data) if isinstance(data, dict) else {}
        )

    def get_registry(self) -> dict[str, RuleRegistryEntry]:
        """Return a shallow copy of the loaded registry."""
        return dict(self._registry)

    def get_entry(self, rule_code: str) -> RuleRegistryEntry | None:
        """Return the full registry entry for a rule by code or symbol."""
        entry = self._registry.get(f"{CLEAN_TEST_PREFIX}{rule_code}")
        if entry:
            return cast(RuleRegistryEntry, dict(entry))
        for rule_id, candidate in self._registry.items():
            if rule_id.startswith(CLEAN_TEST_PREFIX) and candidate.get("symbol") == rule_code:
                return cast(RuleRegistryEntry, dict(candidate))
        return None

    def get_manual_instructions(self, rule_code: str) -> str:
        """Return manual fix instructions for the given rule code."""
        entry = self.get_entry(rule_code)
        if entry and "manual_instructions" in entry:
            return str(entry["manual_instructions"])
        return "Fix the violation at the reported location."
