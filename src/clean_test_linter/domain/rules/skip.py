"""Skip rules (E9614-E9617): bail out of a test before its body runs."""

import astroid  # type: ignore[import-untyped]

from clean_test_linter.domain.constants import (
    SKIP_ALL_DECORATOR,
    SKIP_DECORATOR,
    SKIP_STATEMENT,
    TEST_PREFIX,
)
from clean_test_linter.domain.entities import (
    DeclarationKind,
    SkipExpansion,
    TransformationPlan,
)
from clean_test_linter.domain.rules import ExpansionError, FixSuggestion, Violation
from clean_test_linter.domain.rules.declarations import DeclarationClassifier


class SkipRule:
    """
    Rule for `@skip` functions.

    Preconditions are checked in order and the first failure raises
    ExpansionError. On success the rule describes the statement to insert
    first in the body; the rest of the body is left as it is.
    """

    code_not_function: str = "E9614"
    code_not_test: str = "E9615"
    code_not_fallible: str = "E9616"
    description: str = "Skipped tests raise SkipTest before running their body."

    def expansion(self, node: astroid.nodes.NodeNG) -> SkipExpansion:
        if not isinstance(node, astroid.nodes.FunctionDef):
            raise ExpansionError(
                Violation.from_node(
                    code=self.code_not_function,
                    message=f"@{SKIP_DECORATOR} affects functions only.",
                    node=node,
                )
            )
        if not node.name.startswith(TEST_PREFIX):
            raise ExpansionError(
                Violation.from_node(
                    code=self.code_not_test,
                    message=(
                        f"@{SKIP_DECORATOR} affects functions whose name "
                        f"starts with '{TEST_PREFIX}'."
                    ),
                    node=node,
                )
            )
        source = node.as_string()
        if not DeclarationClassifier.is_fallible(node):
            fix = FixSuggestion(
                description="add '-> None'",
                plan=TransformationPlan.add_none_return(source, node.name),
            )
            raise ExpansionError(
                Violation.from_node(
                    code=self.code_not_fallible,
                    message=f"@{SKIP_DECORATOR} can only be used with a function that can fail.",
                    node=node,
                    fixes=(fix,),
                )
            )
        return SkipExpansion(
            function_name=node.name,
            statement=SKIP_STATEMENT,
            plan=TransformationPlan.prepend_statement(source, node.name, SKIP_STATEMENT),
        )


class SkipAllRule:
    """
    Rule for `@skip_all` declarations, called once per member.

    Returns the decorators to attach to the member: `skip` for every test
    method that satisfies the skip preconditions. A test method that does not
    makes the skip rule's ExpansionError propagate.
    """

    code: str = "E9617"
    description: str = f"@{SKIP_ALL_DECORATOR} works on classes and extensions only."

    def __init__(
        self,
        skip_rule: SkipRule | None = None,
        classifier: DeclarationClassifier | None = None,
    ) -> None:
        self._skip_rule = skip_rule or SkipRule()
        self._classifier = classifier or DeclarationClassifier()

    def expansion(
        self, node: astroid.nodes.NodeNG, member: astroid.nodes.NodeNG
    ) -> list[str]:
        if not isinstance(node, astroid.nodes.ClassDef) or self._classifier.kind_of(
            node
        ) not in (DeclarationKind.CLASS, DeclarationKind.EXTENSION):
            raise ExpansionError(
                Violation.from_node(code=self.code, message=self.description, node=node)
            )
        if not isinstance(member, astroid.nodes.FunctionDef) or not member.name.startswith(
            TEST_PREFIX
        ):
            return []
        self._skip_rule.expansion(member)
        return [SKIP_DECORATOR]
