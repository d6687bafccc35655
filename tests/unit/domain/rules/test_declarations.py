"""Unit tests for DeclarationClassifier."""

import unittest

import astroid

from clean_test_linter.domain.entities import DeclarationKind, Field, Method
from clean_test_linter.domain.rules.declarations import DeclarationClassifier


def _first(code: str) -> astroid.nodes.NodeNG:
    return astroid.parse(code).body[-1]


class TestDeclarationKinds(unittest.TestCase):
    """kind_of maps Python declarations onto the five declaration kinds."""

    def setUp(self) -> None:
        self.classifier = DeclarationClassifier()

    def test_classify_returns_none_for_functions(self) -> None:
        node = _first("def test_x():\n    pass\n")
        self.assertIsNone(self.classifier.classify(node))

    def test_plain_class_is_class(self) -> None:
        node = _first("class CalculatorTests(unittest.TestCase):\n    pass\n")
        self.assertIs(self.classifier.kind_of(node), DeclarationKind.CLASS)

    def test_dataclass_and_named_tuple_are_structs(self) -> None:
        for code in (
            "@dataclass\nclass Point:\n    x: int\n",
            "@dataclasses.dataclass(frozen=True)\nclass Point:\n    x: int\n",
            "@attr.s\nclass Point:\n    x = attr.ib()\n",
            "class Point(NamedTuple):\n    x: int\n",
        ):
            with self.subTest(code=code):
                self.assertIs(self.classifier.kind_of(_first(code)), DeclarationKind.STRUCT)

    def test_enum_bases_are_enums(self) -> None:
        node = _first("class Color(enum.IntEnum):\n    RED = 1\n")
        self.assertIs(self.classifier.kind_of(node), DeclarationKind.ENUM)

    def test_actor_suffix_is_actor(self) -> None:
        node = _first("class Worker(pykka.ThreadingActor):\n    pass\n")
        self.assertIs(self.classifier.kind_of(node), DeclarationKind.ACTOR)

    def test_extends_takes_the_target_name(self) -> None:
        node = _first(
            "@extends(CalculatorTests)\n"
            "class CalculatorHelpers:\n"
            "    def make(self):\n"
            "        pass\n"
        )
        declaration = self.classifier.classify(node)
        self.assertIs(declaration.kind, DeclarationKind.EXTENSION)
        self.assertEqual(declaration.name, "CalculatorTests")


class TestDeclarationMembers(unittest.TestCase):
    """classify() exposes members in source order with their leading comments."""

    CODE = '''
@clean_test
class CalculatorTests(unittest.TestCase):
    """Docstring."""

    # the system under test
    sut: Optional[Calculator] = None
    count = 0

    # MARK: - add

    # adds things
    @some_decorator
    def test_add_returnsSum(self) -> None:
        self.sut.add(1, 2)  # trailing comment is ignored

    async def test_add_async(self):
        pass
'''

    def setUp(self) -> None:
        self.declaration = DeclarationClassifier().classify(_first(self.CODE))

    def test_members_keep_source_order(self) -> None:
        names = [m.name for m in self.declaration.members]
        self.assertEqual(names, ["sut", "count", "test_add_returnsSum", "test_add_async"])
        self.assertIsInstance(self.declaration.members[0], Field)
        self.assertIsInstance(self.declaration.members[2], Method)

    def test_leading_comments_stop_at_previous_statement(self) -> None:
        sut, count, add, add_async = self.declaration.members
        self.assertEqual(sut.leading_comments, ("# the system under test",))
        self.assertEqual(count.leading_comments, ())
        self.assertEqual(add.leading_comments, ("# MARK: - add", "# adds things"))
        self.assertEqual(add_async.leading_comments, ())

    def test_field_types_maps_names_to_declared_types(self) -> None:
        self.assertEqual(
            DeclarationClassifier.field_types(self.declaration),
            {"sut": "Optional[Calculator]", "count": None},
        )

    def test_methods_report_fallibility_and_async(self) -> None:
        add, add_async = self.declaration.methods
        self.assertTrue(add.is_fallible)
        self.assertFalse(add.is_async)
        self.assertFalse(add_async.is_fallible)
        self.assertTrue(add_async.is_async)

    def test_inherited_names_use_last_dotted_segment(self) -> None:
        self.assertEqual(self.declaration.inherited_names, ("TestCase",))

    def test_source_file_unknown_for_in_memory_modules(self) -> None:
        self.assertIsNone(self.declaration.source_file)


class TestDeclarationHelpers(unittest.TestCase):
    def test_unwrap_optional_strips_every_optional_spelling(self) -> None:
        for spelling in (
            "Calculator",
            "Optional[Calculator]",
            "typing.Optional[Calculator]",
            "Calculator | None",
            "None | Calculator",
            "'Calculator'",
            '"Calculator | None"',
        ):
            with self.subTest(spelling=spelling):
                self.assertEqual(DeclarationClassifier.unwrap_optional(spelling), "Calculator")

    def test_unwrap_optional_keeps_real_unions(self) -> None:
        self.assertEqual(DeclarationClassifier.unwrap_optional("int | str"), "int | str")

    def test_source_file_is_the_base_name(self) -> None:
        module = astroid.parse("class CalculatorTests:\n    pass\n")
        module.file = "/project/tests/test_calculator.py"
        self.assertEqual(
            DeclarationClassifier.source_file(module.body[0]), "test_calculator.py"
        )

    def test_has_marker_ignores_called_and_foreign_skips(self) -> None:
        module = astroid.parse(
            "@skip\ndef test_a() -> None: pass\n"
            "@markers.skip\ndef test_b() -> None: pass\n"
            "@unittest.skip('why')\ndef test_c() -> None: pass\n"
            "@pytest.mark.skip\ndef test_d() -> None: pass\n"
        )
        found = [DeclarationClassifier.has_marker(f, "skip") for f in module.body]
        self.assertEqual(found, [True, True, False, False])

    def test_is_fallible_requires_none_return(self) -> None:
        module = astroid.parse(
            "def a() -> None: pass\n"
            "def b() -> 'None': pass\n"
            "def c(): pass\n"
            "def d() -> int: pass\n"
        )
        self.assertEqual(
            [DeclarationClassifier.is_fallible(f) for f in module.body],
            [True, True, False, False],
        )
