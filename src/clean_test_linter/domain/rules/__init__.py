"""Domain models for rules and violations."""

from dataclasses import dataclass

__all__ = [
    "ExpansionError",
    "FixSuggestion",
    "Violation",
]

import astroid  # type: ignore[import-untyped]

from clean_test_linter.domain.entities import (
    Severity,
    SourceLocation,
    TransformationPlan,
)


@dataclass(frozen=True)
class FixSuggestion:
    """A mechanical edit that resolves a violation: replace `plan.old_source` by its rewrite."""

    description: str
    plan: TransformationPlan


@dataclass(frozen=True)
class Violation:
    """A rule violation with code, message, location, and fix suggestions."""

    code: str
    message: str
    location: SourceLocation
    node: astroid.nodes.NodeNG
    fixes: tuple[FixSuggestion, ...] = ()
    message_args: tuple[str, ...] | None = None
    """Optional args for Pylint add_message (e.g. (class_name,))."""

    @property
    def severity(self) -> Severity:
        """E-codes block a rewrite; W-codes are advisory."""
        if self.code.startswith("E"):
            return Severity.EXPANSION
        return Severity.CONVENTION

    @property
    def fixable(self) -> bool:
        return bool(self.fixes)

    @classmethod
    def from_node(
        cls,
        *,
        code: str,
        message: str,
        node: astroid.nodes.NodeNG,
        fixes: tuple[FixSuggestion, ...] = (),
        message_args: tuple[str, ...] | None = None,
    ) -> "Violation":
        """Build a Violation with location derived from node. Prefer over manual location=."""
        return cls(
            code=code,
            message=message,
            location=SourceLocation.of(node),
            node=node,
            fixes=fixes,
            message_args=message_args,
        )


class ExpansionError(Exception):
    """
    A decorator was attached where its rewrite cannot apply.

    Fatal for the rewrite being requested: hosts must not splice anything
    for the declaration once this is raised.
    """

    def __init__(self, violation: Violation) -> None:
        super().__init__(violation.message)
        self.violation = violation

    @property
    def code(self) -> str:
        return self.violation.code
