"""LibCST based Fixer Gateway."""

import textwrap

import libcst as cst

from clean_test_linter.domain.entities import TransformationPlan, TransformationType
from clean_test_linter.domain.protocols import FixerGatewayProtocol
from clean_test_linter.infrastructure.gateways.transformers import (
    AddNoneReturnTransformer,
    PrependStatementTransformer,
    UnwrapSuppressionTransformer,
)


class LibCSTFixerGateway(FixerGatewayProtocol):
    """
    Gateway for rendering fix suggestions using LibCST.

    A plan carries the old sub-tree; rendering returns the new one. Nothing is
    written back: splicing the result in is left to the host.
    """

    def _plan_to_transformer(self, plan: TransformationPlan) -> cst.CSTTransformer:
        """Convert a TransformationPlan to a LibCST transformer."""
        params = plan.params
        t = plan.transformation_type
        if t == TransformationType.UNWRAP_SUPPRESSION:
            return UnwrapSuppressionTransformer(params)
        elif t == TransformationType.ADD_NONE_RETURN:
            return AddNoneReturnTransformer(params)
        elif t == TransformationType.PREPEND_STATEMENT:
            return PrependStatementTransformer(params)
        else:
            raise ValueError(f"Unknown transformation type: {plan.transformation_type}")

    def render(self, plan: TransformationPlan) -> str:
        """
        Return the source of the sub-tree that replaces `plan.old_source`.

        Raises:
            ValueError: for a plan type no transformer handles, or an old
                sub-tree that does not parse.
        """
        transformer = self._plan_to_transformer(plan)
        try:
            module = cst.parse_module(textwrap.dedent(plan.old_source))
        except cst.ParserSyntaxError as exc:
            raise ValueError(f"Cannot parse sub-tree for {plan.transformation_type}: {exc}") from exc
        return module.visit(transformer).code
