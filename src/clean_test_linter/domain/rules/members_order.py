"""Members order rules (W9608-W9611): fields first, methods grouped under MARK sections."""

from dataclasses import dataclass, replace
from typing import Optional

from clean_test_linter.domain.constants import (
    HELPER_SECTION,
    MARK_KEYWORD,
    MARK_SEPARATOR,
    TEST_PREFIX,
)
from clean_test_linter.domain.entities import (
    Declaration,
    Field,
    Member,
    Method,
    SectionMarker,
)
from clean_test_linter.domain.rules import Violation


@dataclass(frozen=True)
class OrderState:
    """Traversal state: the section in effect and whether a method was seen yet."""

    current_section: Optional[str] = None
    saw_function: bool = False


class MembersOrderAnalyzer:
    """
    Walks the direct members of a declaration in source order.

    The state is threaded explicitly through `step`; a malformed MARK comment
    is reported and leaves the current section untouched.
    """

    code_field: str = "W9608"
    code_test_section: str = "W9609"
    code_helper_section: str = "W9610"
    code_malformed_mark: str = "W9611"
    description: str = "Fields before methods; test methods grouped under MARK sections."

    def analyse(self, declaration: Declaration) -> list[Violation]:
        state = OrderState()
        violations: list[Violation] = []
        for member in declaration.members:
            state, found = self.step(state, member)
            violations.extend(found)
        return violations

    def step(
        self, state: OrderState, member: Member
    ) -> tuple[OrderState, list[Violation]]:
        """Advance the state machine by one member."""
        state, violations = self._read_markers(state, member)
        if isinstance(member, Field):
            if state.current_section is not None or state.saw_function:
                violations.append(
                    Violation.from_node(
                        code=self.code_field,
                        message="All fields must be declared before any methods.",
                        node=member.node,
                    )
                )
            return state, violations
        state = replace(state, saw_function=True)
        violations.extend(self._check_method(state, member))
        return state, violations

    @staticmethod
    def parse_marker(comment: str) -> Optional[SectionMarker]:
        """`# MARK: - name free text` gives SectionMarker("name"); None when malformed."""
        if MARK_SEPARATOR not in comment:
            return None
        text = comment.partition(MARK_SEPARATOR)[2]
        return SectionMarker(name=text.split(" ")[0])

    def _read_markers(
        self, state: OrderState, member: Member
    ) -> tuple[OrderState, list[Violation]]:
        violations: list[Violation] = []
        for comment in member.leading_comments:
            if MARK_KEYWORD not in comment:
                continue
            marker = self.parse_marker(comment)
            if marker is None:
                violations.append(
                    Violation.from_node(
                        code=self.code_malformed_mark,
                        message=(
                            'The MARK comment should be formatted: '
                            '"# MARK: - `interfaceUnderTest` `optional description`".'
                        ),
                        node=member.node,
                    )
                )
                continue
            state = replace(state, current_section=marker.name)
        return state, violations

    def _check_method(self, state: OrderState, method: Method) -> list[Violation]:
        segments = method.name.split("_")
        section = state.current_section
        if segments[0] == TEST_PREFIX:
            expected = segments[1] if len(segments) > 1 else None
            if expected is not None and section is not None and expected != section:
                return [
                    Violation.from_node(
                        code=self.code_test_section,
                        message=(
                            f'The {method.name} method must belong to a '
                            f'"# MARK: - {expected} <optionalComment>" section.'
                        ),
                        node=method.node,
                        message_args=(method.name, expected),
                    )
                ]
            return []
        if section is not None and section != HELPER_SECTION:
            return [
                Violation.from_node(
                    code=self.code_helper_section,
                    message=(
                        f'The {method.name} helper method must be in a '
                        '"# MARK: - helper methods" section, or moved to a designated extension.'
                    ),
                    node=method.node,
                    message_args=(method.name,),
                )
            ]
        return []
