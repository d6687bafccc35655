"""
Pylint plugin entry point - composition root for the checker plugin.

Load with `pylint --load-plugins=clean_test_linter.checker`.
"""

from pylint.lint import PyLinter

from clean_test_linter.infrastructure.di.container import CleanTestContainer
from clean_test_linter.use_cases.checks.clean_test import CleanTestChecker


def register(linter: PyLinter) -> None:
    """Register checkers."""
    container = CleanTestContainer.get_instance()
    guidance = container.get_guidance_service()
    linter.register_checker(
        CleanTestChecker(
            linter,
            registry=guidance.get_registry(),
            config_loader=container.get_config_loader(),
            fixer_gateway=container.get_fixer_gateway(),
            guidance=guidance,
        )
    )
