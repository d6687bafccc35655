"""Ports implemented by infrastructure and consumed by the checker."""

from typing import Protocol

from clean_test_linter.domain.entities import TransformationPlan
from clean_test_linter.domain.registry_types import RuleRegistryEntry


class GuidanceServiceProtocol(Protocol):
    """Protocol for the rule registry. Implemented by GuidanceService in infrastructure."""

    def get_registry(self) -> dict[str, RuleRegistryEntry]:
        """Return the loaded registry keyed by rule id."""
        ...

    def get_manual_instructions(self, rule_code: str) -> str:
        """Return manual fix instructions for the rule code."""
        ...


class FixerGatewayProtocol(Protocol):
    """Protocol for rendering fixes. Implementers accept only TransformationPlan at boundary."""

    def render(self, plan: TransformationPlan) -> str:
        """Return the source of the sub-tree that replaces `plan.old_source`."""
        ...
