"""Unit tests for the runtime markers (clean_test, extends, skip, skip_all)."""

import asyncio
import enum
import unittest

from clean_test_linter.domain.constants import SKIP_MESSAGE
from clean_test_linter.domain.rules import ExpansionError
from clean_test_linter.markers import clean_test, extends, skip, skip_all


class TestCleanTestMarker(unittest.TestCase):
    def test_clean_test_returns_the_class_unchanged(self) -> None:
        class CalculatorTests(unittest.TestCase):
            pass

        self.assertIs(clean_test(CalculatorTests), CalculatorTests)


class TestExtendsMarker(unittest.TestCase):
    def test_extends_copies_functions_onto_the_target(self) -> None:
        class CalculatorTests(unittest.TestCase):
            pass

        @extends(CalculatorTests)
        class CalculatorHelpers:
            limit = 3

            def make_numbers(self):
                return [1, 2]

        self.assertIs(
            vars(CalculatorTests)["make_numbers"], vars(CalculatorHelpers)["make_numbers"]
        )
        self.assertNotIn("limit", vars(CalculatorTests))
        self.assertEqual(CalculatorTests().make_numbers(), [1, 2])

    def test_extends_copies_class_and_static_methods(self) -> None:
        class CalculatorTests(unittest.TestCase):
            pass

        @extends(CalculatorTests)
        class CalculatorFixtures:
            @classmethod
            def setUpClass(cls) -> None:
                cls.shared = [1, 2]

            @staticmethod
            def zero() -> int:
                return 0

        self.assertIsInstance(vars(CalculatorTests)["setUpClass"], classmethod)
        self.assertIsInstance(vars(CalculatorTests)["zero"], staticmethod)
        CalculatorTests.setUpClass()
        self.assertEqual(CalculatorTests.shared, [1, 2])
        self.assertEqual(CalculatorTests.zero(), 0)


class TestSkipMarker(unittest.TestCase):
    def test_skip_raises_skip_test_before_the_body(self) -> None:
        calls = []

        @skip
        def test_something() -> None:
            calls.append("ran")

        with self.assertRaises(unittest.SkipTest) as ctx:
            test_something()
        self.assertEqual(str(ctx.exception), SKIP_MESSAGE)
        self.assertEqual(calls, [])
        self.assertEqual(test_something.__name__, "test_something")

    def test_skip_wraps_coroutines(self) -> None:
        @skip
        async def test_something() -> None:
            pass

        with self.assertRaises(unittest.SkipTest):
            asyncio.run(test_something())

    def test_skip_rejects_functions_that_cannot_fail(self) -> None:
        with self.assertRaises(ExpansionError) as ctx:

            @skip
            def test_something():
                pass

        self.assertEqual(ctx.exception.code, "E9616")
        self.assertEqual(ctx.exception.violation.fixes[0].description, "add '-> None'")

    def test_skip_rejects_non_test_functions(self) -> None:
        with self.assertRaises(ExpansionError) as ctx:

            @skip
            def helper() -> None:
                pass

        self.assertEqual(ctx.exception.code, "E9615")

    def test_skip_rejects_classes(self) -> None:
        with self.assertRaises(ExpansionError) as ctx:

            @skip
            class CalculatorTests(unittest.TestCase):
                pass

        self.assertEqual(ctx.exception.code, "E9614")


class TestSkipAllMarker(unittest.TestCase):
    def test_skip_all_skips_every_test_method(self) -> None:
        @skip_all
        class CalculatorTests(unittest.TestCase):
            def setUp(self) -> None:
                self.ready = True

            def test_add_x(self) -> None:
                raise AssertionError("must not run")

            def test_subtract_y(self) -> None:
                raise AssertionError("must not run")

        result = unittest.TestResult()
        unittest.defaultTestLoader.loadTestsFromTestCase(CalculatorTests).run(result)
        self.assertEqual(result.testsRun, 2)
        self.assertEqual(len(result.skipped), 2)
        self.assertEqual(result.failures, [])
        self.assertEqual(result.skipped[0][1], SKIP_MESSAGE)

    def test_skip_all_reaches_the_extended_class(self) -> None:
        class CalculatorTests(unittest.TestCase):
            pass

        @skip_all
        @extends(CalculatorTests)
        class CalculatorMoreTests:
            def test_add_more(self) -> None:
                raise AssertionError("must not run")

        result = unittest.TestResult()
        CalculatorTests("test_add_more").run(result)
        self.assertEqual(len(result.skipped), 1)

    def test_skip_all_surfaces_member_errors(self) -> None:
        with self.assertRaises(ExpansionError) as ctx:

            @skip_all
            class CalculatorTests(unittest.TestCase):
                def test_add_x(self):
                    pass

        self.assertEqual(ctx.exception.code, "E9616")

    def test_skip_all_rejects_enums(self) -> None:
        with self.assertRaises(ExpansionError) as ctx:

            @skip_all
            class Color(enum.Enum):
                RED = 1

        self.assertEqual(ctx.exception.code, "E9617")
