"""Test body analysis (W9612): SUT calls and suppressed errors inside one test body."""

from enum import Enum
from typing import Iterable, Optional

import astroid  # type: ignore[import-untyped]

from clean_test_linter.domain.constants import SUPPRESS_CONTEXT_MANAGER, SUT_NAME
from clean_test_linter.domain.entities import TransformationPlan
from clean_test_linter.domain.rules import FixSuggestion, Violation

_ATTRIBUTE_NODES = (
    astroid.nodes.Attribute,
    astroid.nodes.AssignAttr,
    astroid.nodes.DelAttr,
)


class _SutState(Enum):
    IDLE = "idle"
    SAW_SUT = "saw_sut"


class BodyCallAnalyzer:
    """
    Single pass over one function body.

    Identifier references are fed in left-to-right source order, so
    `self.sut.go()` produces `self`, `sut`, `go`: the name right after each
    `sut` reference is recorded as a SUT call. Suppressed-error statements
    are reported as they are met.
    """

    code: str = "W9612"
    description: str = "Suppressed-error expressions should not be used in tests."

    def __init__(self) -> None:
        self._state = _SutState.IDLE
        self._calls: set[str] = set()
        self._violations: list[Violation] = []

    def analyse(
        self, body: Iterable[astroid.nodes.NodeNG]
    ) -> tuple[list[Violation], set[str]]:
        """Return (violations, names called on the SUT). State starts fresh on every call."""
        self._state = _SutState.IDLE
        self._calls = set()
        self._violations = []
        for statement in body:
            self._walk(statement)
        return self._violations, self._calls

    def _walk(self, node: astroid.nodes.NodeNG) -> None:
        if self._is_suppression(node):
            self._violations.append(self._suppression_violation(node))
        if isinstance(node, _ATTRIBUTE_NODES):
            self._walk(node.expr)
            self._reference(node.attrname)
            return
        if isinstance(node, astroid.nodes.Name):
            self._reference(node.name)
            return
        if isinstance(node, astroid.nodes.IfExp):
            # `body if test else orelse`
            for child in (node.body, node.test, node.orelse):
                self._walk(child)
            return
        for child in node.get_children():
            self._walk(child)

    def _reference(self, name: str) -> None:
        if name == SUT_NAME:
            self._state = _SutState.SAW_SUT
        elif self._state is _SutState.SAW_SUT:
            self._calls.add(name)
            self._state = _SutState.IDLE
        else:
            self._state = _SutState.IDLE

    # --- suppressed errors ---------------------------------------------------

    def _is_suppression(self, node: astroid.nodes.NodeNG) -> bool:
        if isinstance(node, astroid.nodes.With):
            return any(self._is_suppress_call(expr) for expr, _ in node.items)
        if isinstance(node, astroid.nodes.Try):
            return (
                bool(node.handlers)
                and not node.finalbody
                and all(self._swallows(handler) for handler in node.handlers)
            )
        return False

    @staticmethod
    def _is_suppress_call(expr: astroid.nodes.NodeNG) -> bool:
        if not isinstance(expr, astroid.nodes.Call):
            return False
        func = expr.func
        name: Optional[str] = None
        if isinstance(func, astroid.nodes.Name):
            name = func.name
        elif isinstance(func, astroid.nodes.Attribute):
            name = func.attrname
        return name == SUPPRESS_CONTEXT_MANAGER

    @staticmethod
    def _swallows(handler: astroid.nodes.ExceptHandler) -> bool:
        """True if the handler body only passes: the error becomes nothing."""
        for statement in handler.body:
            if isinstance(statement, astroid.nodes.Pass):
                continue
            if (
                isinstance(statement, astroid.nodes.Expr)
                and isinstance(statement.value, astroid.nodes.Const)
                and statement.value.value is Ellipsis
            ):
                continue
            return False
        return True

    def _suppression_violation(self, node: astroid.nodes.NodeNG) -> Violation:
        fix = FixSuggestion(
            description="remove the error suppression",
            plan=TransformationPlan.unwrap_suppression(node.as_string()),
        )
        return Violation.from_node(
            code=self.code,
            message=self.description,
            node=node,
            fixes=(fix,),
        )
