"""
Runtime markers that attach the clean-test rules to test code.

`clean_test` only marks a class for the pylint checker. `skip` and `skip_all`
validate their target when the decorated code is defined, raising
ExpansionError for misuse, and make the test raise `unittest.SkipTest` before
its body runs.
"""

import functools
import inspect
import logging
import textwrap
import unittest
from typing import Any, Callable, TypeVar

import astroid  # type: ignore[import-untyped]

from clean_test_linter.domain.constants import SKIP_MESSAGE
from clean_test_linter.domain.rules.skip import SkipAllRule, SkipRule

logger = logging.getLogger(__name__)

T = TypeVar("T")
F = TypeVar("F", bound=Callable[..., Any])

# Set on extension classes by `extends`.
EXTENDS_TARGET_ATTR = "__clean_test_extends__"


def clean_test(cls: type[T]) -> type[T]:
    """Mark a test class for the clean-test checker. Returns it unchanged."""
    return cls


def extends(target: type) -> Callable[[type[T]], type[T]]:
    """
    Declare the decorated class as an extension of `target`.

    Its functions are copied onto `target`, so helpers and test methods can be
    grouped in separate classes (and modules) while running as part of `target`.
    """

    def decorator(cls: type[T]) -> type[T]:
        for name, value in vars(cls).items():
            if name.startswith("__"):
                continue
            if not (callable(value) or isinstance(value, (classmethod, staticmethod))):
                continue
            setattr(target, name, value)
        setattr(cls, EXTENDS_TARGET_ATTR, target)
        return cls

    return decorator


def skip(func: F) -> F:
    """
    Skip a test function declared `-> None`.

    Raises:
        ExpansionError: if `func` is not a function named `test*` declared `-> None`.
    """
    SkipRule().expansion(_parse(func))
    logger.debug("skipping %s", func.__qualname__)
    return _skipped(func)


def skip_all(cls: type[T]) -> type[T]:
    """
    Skip every `test*` method of a test class or extension.

    Raises:
        ExpansionError: if `cls` is not a class or extension, or one of its
            test methods cannot be skipped.
    """
    node = _parse(cls)
    rule = SkipAllRule()
    owners = [cls]
    target = vars(cls).get(EXTENDS_TARGET_ATTR)
    if target is not None:
        owners.append(target)
    for member in node.body:
        if not rule.expansion(node, member):
            continue
        func = vars(cls)[member.name]
        logger.debug("skipping %s.%s", cls.__qualname__, member.name)
        for owner in owners:
            setattr(owner, member.name, _skipped(func))
    return cls


def _parse(obj: Any) -> astroid.nodes.NodeNG:
    """The astroid node of a function or class, parsed from its own source."""
    source = textwrap.dedent(inspect.getsource(obj))
    return astroid.parse(source).body[0]


def _skipped(func: F) -> F:
    if inspect.iscoroutinefunction(func):

        @functools.wraps(func)
        async def async_wrapper(*args: Any, **kwargs: Any) -> None:
            raise unittest.SkipTest(SKIP_MESSAGE)

        return async_wrapper  # type: ignore[return-value]

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> None:
        raise unittest.SkipTest(SKIP_MESSAGE)

    return wrapper  # type: ignore[return-value]
