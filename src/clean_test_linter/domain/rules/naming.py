"""Naming and shape rules (W9601-W9607): test class names, base, file, SUT and test names."""

from clean_test_linter.domain.constants import (
    BASE_TEST_CASE,
    SOURCE_EXTENSION,
    SUT_NAME,
    TEST_PREFIX,
    TESTS_SUFFIX,
)
from clean_test_linter.domain.entities import Declaration, DeclarationKind, Method
from clean_test_linter.domain.rules import Violation
from clean_test_linter.domain.rules.body_calls import BodyCallAnalyzer
from clean_test_linter.domain.rules.declarations import DeclarationClassifier


class NamingShapeRule:
    """
    Rule for W9601-W9605 (declaration shape) and W9606-W9607 (test methods).

    Every check runs independently: a declaration breaking several
    conventions gets one violation per broken convention.
    """

    code_suffix: str = "W9601"
    code_inheritance: str = "W9602"
    code_file_name: str = "W9603"
    code_missing_sut: str = "W9604"
    code_sut_type: str = "W9605"
    code_untested_sut: str = "W9606"
    code_test_name: str = "W9607"
    description: str = "Test classes are named after their SUT and test it through `sut`."

    def __init__(self, classifier: DeclarationClassifier | None = None) -> None:
        self._classifier = classifier or DeclarationClassifier()

    def check_declaration(self, declaration: Declaration) -> list[Violation]:
        """Shape checks; extensions only get the name suffix check."""
        violations = self.check_type_name(declaration)
        if declaration.kind is DeclarationKind.CLASS:
            violations.extend(self.check_file_name(declaration))
            violations.extend(self.check_inheritance(declaration))
            violations.extend(self.check_sut(declaration))
        return violations

    def check_type_name(self, declaration: Declaration) -> list[Violation]:
        name = declaration.name
        if name is None or name.endswith(TESTS_SUFFIX):
            return []
        return [
            Violation.from_node(
                code=self.code_suffix,
                message=f'{name} name must end with "{TESTS_SUFFIX}".',
                node=declaration.node,
                message_args=(name,),
            )
        ]

    def check_inheritance(self, declaration: Declaration) -> list[Violation]:
        name = declaration.name
        if name is None or BASE_TEST_CASE in declaration.inherited_names:
            return []
        return [
            Violation.from_node(
                code=self.code_inheritance,
                message=f"A test class {name} must inherit from {BASE_TEST_CASE}.",
                node=declaration.node,
                message_args=(name,),
            )
        ]

    def check_file_name(self, declaration: Declaration) -> list[Violation]:
        """No-op when the host does not know the originating file."""
        file_name = declaration.source_file
        name = declaration.name or ""
        if file_name is None or file_name == self.expected_file_name(name):
            return []
        return [
            Violation.from_node(
                code=self.code_file_name,
                message=f'Incorrect file name "{file_name}", for the declaration of "{name}".',
                node=declaration.node,
                message_args=(file_name, name),
            )
        ]

    def check_sut(self, declaration: Declaration) -> list[Violation]:
        name = declaration.name or ""
        fields = self._classifier.field_types(declaration)
        if SUT_NAME not in fields:
            return [
                Violation.from_node(
                    code=self.code_missing_sut,
                    message=f"Test class {name} doesn't have SUT declaration.",
                    node=declaration.node,
                    message_args=(name,),
                )
            ]
        expected = name.removesuffix(TESTS_SUFFIX)
        declared = fields[SUT_NAME]
        if declared is not None and self._classifier.unwrap_optional(declared) == expected:
            return []
        return [
            Violation.from_node(
                code=self.code_sut_type,
                message=f"Class name {expected}{TESTS_SUFFIX} doesn't match the type of the SUT.",
                node=declaration.node,
                message_args=(expected,),
            )
        ]

    def check_function(self, method: Method) -> list[Violation]:
        """Body checks for `test*` methods: suppressed errors, SUT usage, naming pattern."""
        if not method.name.startswith(TEST_PREFIX) or not method.has_body:
            return []
        violations, calls = BodyCallAnalyzer().analyse(method.body)
        if not calls:
            violations.append(
                Violation.from_node(
                    code=self.code_untested_sut,
                    message="Test case doesn't test any interface of the SUT.",
                    node=method.node,
                )
            )
        elif not any(method.name.startswith(f"{TEST_PREFIX}_{call}_") for call in calls):
            violations.append(
                Violation.from_node(
                    code=self.code_test_name,
                    message=(
                        "Test method should be declared with the following pattern: "
                        "`def test_<interfaceUnderTest>_<testDescription>()`. Please rename it."
                    ),
                    node=method.node,
                )
            )
        return violations

    @staticmethod
    def expected_file_name(type_name: str) -> str:
        """`CalculatorTests` lives in `CalculatorTests.py`."""
        return f"{type_name}.{SOURCE_EXTENSION}"
