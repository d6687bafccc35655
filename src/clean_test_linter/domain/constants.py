"""
Clean Test conventions. Fixed by design: not read from configuration.
"""

# Registry keys look like "clean-test.W9601".
CLEAN_TEST_PREFIX: str = "clean-test."

TESTS_SUFFIX: str = "Tests"
BASE_TEST_CASE: str = "TestCase"
SUT_NAME: str = "sut"
TEST_PREFIX: str = "test"
SOURCE_EXTENSION: str = "py"

MARK_KEYWORD: str = "MARK:"
MARK_SEPARATOR: str = "MARK: - "
HELPER_SECTION: str = "helper"

# Decorator names that attach the rules to a declaration.
CLEAN_TEST_DECORATOR: str = "clean_test"
SKIP_DECORATOR: str = "skip"
SKIP_ALL_DECORATOR: str = "skip_all"
EXTENDS_DECORATOR: str = "extends"

SKIP_MESSAGE: str = "⚠️ This test is ignored due to the effect of the @skip decorator."
SKIP_STATEMENT: str = f'raise unittest.SkipTest("{SKIP_MESSAGE}")'

ENUM_BASES: frozenset[str] = frozenset(
    {"Enum", "IntEnum", "StrEnum", "Flag", "IntFlag"}
)
STRUCT_BASES: frozenset[str] = frozenset({"NamedTuple", "TypedDict"})
STRUCT_DECORATORS: frozenset[str] = frozenset(
    {"dataclass", "s", "attrs", "define", "frozen", "mutable"}
)
ACTOR_BASE_SUFFIX: str = "Actor"

SUPPRESS_CONTEXT_MANAGER: str = "suppress"

# pyproject.toml section: [tool.clean-test]
CONFIG_SECTION: str = "clean-test"
