"""LibCST Transformers for fix rendering."""

from typing import Union

import libcst as cst

from clean_test_linter.domain.constants import SUPPRESS_CONTEXT_MANAGER

Block = Union[cst.IndentedBlock, cst.SimpleStatementSuite]


class UnwrapSuppressionTransformer(cst.CSTTransformer):
    """Transformer to replace `with suppress(...)` and `try/except: pass` by their bodies."""

    def __init__(self, context: dict) -> None:
        super().__init__()

    def leave_With(
        self, original_node: cst.With, updated_node: cst.With
    ) -> Union[cst.BaseStatement, cst.FlattenSentinel[cst.BaseStatement]]:
        kept = [item for item in updated_node.items if not self._is_suppress(item.item)]
        if len(kept) == len(updated_node.items):
            return updated_node
        if not kept:
            return cst.FlattenSentinel(self._statements(updated_node.body))
        kept[-1] = kept[-1].with_changes(comma=cst.MaybeSentinel.DEFAULT)
        return updated_node.with_changes(items=kept)

    def leave_Try(
        self, original_node: cst.Try, updated_node: cst.Try
    ) -> Union[cst.BaseStatement, cst.FlattenSentinel[cst.BaseStatement]]:
        if (
            not updated_node.handlers
            or updated_node.finalbody is not None
            or not all(self._swallows(h.body) for h in updated_node.handlers)
        ):
            return updated_node
        statements = self._statements(updated_node.body)
        if updated_node.orelse is not None:
            statements.extend(self._statements(updated_node.orelse.body))
        return cst.FlattenSentinel(statements)

    @staticmethod
    def _is_suppress(expr: cst.BaseExpression) -> bool:
        if not isinstance(expr, cst.Call):
            return False
        func = expr.func
        if isinstance(func, cst.Name):
            return func.value == SUPPRESS_CONTEXT_MANAGER
        if isinstance(func, cst.Attribute):
            return func.attr.value == SUPPRESS_CONTEXT_MANAGER
        return False

    @staticmethod
    def _swallows(block: Block) -> bool:
        """True if the handler body is only `pass` or `...`."""
        if isinstance(block, cst.SimpleStatementSuite):
            small = list(block.body)
        else:
            small = []
            for statement in block.body:
                if not isinstance(statement, cst.SimpleStatementLine):
                    return False
                small.extend(statement.body)
        return all(
            isinstance(s, cst.Pass)
            or (isinstance(s, cst.Expr) and isinstance(s.value, cst.Ellipsis))
            for s in small
        )

    @staticmethod
    def _statements(block: Block) -> list[cst.BaseStatement]:
        if isinstance(block, cst.IndentedBlock):
            return list(block.body)
        return [cst.SimpleStatementLine(body=block.body)]


class AddNoneReturnTransformer(cst.CSTTransformer):
    """Transformer to declare `-> None` on a function, leaving name, parameters and body as they are."""

    def __init__(self, context: dict) -> None:
        super().__init__()
        self.function_name = context.get("function_name")

    def leave_FunctionDef(
        self, original_node: cst.FunctionDef, updated_node: cst.FunctionDef
    ) -> cst.FunctionDef:
        if original_node.name.value == self.function_name:
            return updated_node.with_changes(
                returns=cst.Annotation(annotation=cst.Name("None"))
            )
        return updated_node


class PrependStatementTransformer(cst.CSTTransformer):
    """Transformer to insert a statement before the first statement of a function body."""

    def __init__(self, context: dict) -> None:
        super().__init__()
        self.function_name = context.get("function_name")
        self.statement = str(context.get("statement", ""))

    def leave_FunctionDef(
        self, original_node: cst.FunctionDef, updated_node: cst.FunctionDef
    ) -> cst.FunctionDef:
        if original_node.name.value != self.function_name:
            return updated_node
        inserted = cst.parse_statement(self.statement)
        body = updated_node.body
        if isinstance(body, cst.IndentedBlock):
            new_body = body.with_changes(body=[inserted, *body.body])
        else:
            new_body = cst.IndentedBlock(
                body=[inserted, cst.SimpleStatementLine(body=body.body)]
            )
        return updated_node.with_changes(body=new_body)
