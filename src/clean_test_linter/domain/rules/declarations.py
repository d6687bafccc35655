"""Declaration classifier: read-only queries over astroid class statements."""

import io
import logging
import tokenize
from pathlib import PurePath
from typing import Iterator, Optional

import astroid  # type: ignore[import-untyped]

from clean_test_linter.domain.constants import (
    ACTOR_BASE_SUFFIX,
    ENUM_BASES,
    EXTENDS_DECORATOR,
    STRUCT_BASES,
    STRUCT_DECORATORS,
)
from clean_test_linter.domain.entities import (
    Declaration,
    DeclarationKind,
    Field,
    Member,
    Method,
)

logger = logging.getLogger(__name__)


class DeclarationClassifier:
    """
    Builds Declaration views from astroid nodes.

    Pure queries: the classifier never mutates the tree. Leading comments are
    not part of the astroid tree, so they are read from the module token
    stream once per classification.
    """

    def classify(self, node: astroid.nodes.NodeNG) -> Optional[Declaration]:
        """Return the Declaration view of a class statement, None for any other node."""
        if not isinstance(node, astroid.nodes.ClassDef):
            return None
        kind = self.kind_of(node)
        comments = self._comment_lines(node.root())
        return Declaration(
            kind=kind,
            name=self._type_name(node, kind),
            members=tuple(self._members(node, comments)),
            inherited_names=tuple(self.inherited_names(node)),
            source_file=self.source_file(node),
            node=node,
        )

    def kind_of(self, node: astroid.nodes.ClassDef) -> DeclarationKind:
        decorators = self.decorator_names(node)
        if EXTENDS_DECORATOR in decorators:
            return DeclarationKind.EXTENSION
        bases = self.inherited_names(node)
        if any(base in ENUM_BASES for base in bases):
            return DeclarationKind.ENUM
        if any(base in STRUCT_BASES for base in bases) or any(
            name in STRUCT_DECORATORS for name in decorators
        ):
            return DeclarationKind.STRUCT
        if any(base.endswith(ACTOR_BASE_SUFFIX) for base in bases):
            return DeclarationKind.ACTOR
        return DeclarationKind.CLASS

    @staticmethod
    def decorator_names(node: astroid.nodes.NodeNG) -> list[str]:
        """Last dotted segment of every decorator: `@a.b(...)` gives `b`."""
        decorators = getattr(node, "decorators", None)
        if decorators is None:
            return []
        return [
            name
            for name in (
                DeclarationClassifier.reference_name(d) for d in decorators.nodes
            )
            if name
        ]

    @staticmethod
    def has_marker(node: astroid.nodes.NodeNG, marker: str) -> bool:
        """
        True if `node` is decorated with the bare marker `marker`.

        `@skip`, `@markers.skip` and `@clean_test_linter.markers.skip` qualify;
        `@unittest.skip("why")` and `@pytest.mark.skip` do not.
        """
        decorators = getattr(node, "decorators", None)
        if decorators is None:
            return False
        for decorator in decorators.nodes:
            if isinstance(decorator, astroid.nodes.Call):
                continue
            text = decorator.as_string()
            if text == marker or text == f"markers.{marker}" or text.endswith(
                f".markers.{marker}"
            ):
                return True
        return False

    @staticmethod
    def inherited_names(node: astroid.nodes.ClassDef) -> list[str]:
        """Base names, keeping only bases that are plain (possibly dotted) references."""
        names: list[str] = []
        for base in node.bases:
            if isinstance(base, astroid.nodes.Subscript):
                base = base.value
            name = DeclarationClassifier.reference_name(base)
            if name:
                names.append(name)
        return names

    @staticmethod
    def source_file(node: astroid.nodes.NodeNG) -> Optional[str]:
        """Base name of the originating file; None for modules built in memory."""
        path = getattr(node.root(), "file", None)
        if not path or path.startswith("<"):
            return None
        return PurePath(path).name

    @staticmethod
    def is_fallible(node: astroid.nodes.FunctionDef) -> bool:
        """A function declared `-> None` can only complete or raise."""
        returns = node.returns
        return isinstance(returns, astroid.nodes.Const) and returns.value in (
            None,
            "None",
        )

    @staticmethod
    def field_types(declaration: Declaration) -> dict[str, Optional[str]]:
        """Map every field name to its declared type, None when untyped."""
        return {f.name: f.declared_type for f in declaration.fields}

    @staticmethod
    def unwrap_optional(type_name: str) -> str:
        """Strip the optional marker: `Optional[T]`, `T | None` and `"T"` all give `T`."""
        text = type_name.strip().strip("'\"")
        for prefix in ("typing.Optional[", "Optional["):
            if text.startswith(prefix) and text.endswith("]"):
                return DeclarationClassifier.unwrap_optional(text[len(prefix):-1])
        parts = [part.strip() for part in text.split("|")]
        if len(parts) > 1 and "None" in parts:
            rest = [part for part in parts if part != "None"]
            if len(rest) == 1:
                return DeclarationClassifier.unwrap_optional(rest[0])
        return text

    @staticmethod
    def reference_name(node: astroid.nodes.NodeNG) -> Optional[str]:
        if isinstance(node, astroid.nodes.Call):
            node = node.func
        if isinstance(node, astroid.nodes.Name):
            return node.name
        if isinstance(node, astroid.nodes.Attribute):
            return node.attrname
        return None

    # --- internals -----------------------------------------------------------

    def _type_name(
        self, node: astroid.nodes.ClassDef, kind: DeclarationKind
    ) -> Optional[str]:
        if kind is not DeclarationKind.EXTENSION:
            return node.name
        for decorator in node.decorators.nodes:
            if (
                isinstance(decorator, astroid.nodes.Call)
                and self.reference_name(decorator) == EXTENDS_DECORATOR
                and decorator.args
            ):
                target = decorator.args[0]
                if isinstance(target, (astroid.nodes.Name, astroid.nodes.Attribute)):
                    return self.reference_name(target)
        return None

    def _members(
        self, node: astroid.nodes.ClassDef, comments: dict[int, str]
    ) -> Iterator[Member]:
        previous_end = self._header_end(node)
        for statement in node.body:
            start = self._start_line(statement)
            leading = tuple(
                comments[line]
                for line in range(previous_end + 1, start)
                if line in comments
            )
            member = self._member(statement, leading)
            if member is not None:
                yield member
            previous_end = statement.tolineno

    @staticmethod
    def _header_end(node: astroid.nodes.ClassDef) -> int:
        doc_node = getattr(node, "doc_node", None)
        if doc_node is not None:
            return doc_node.tolineno
        return node.blockstart_tolineno

    @staticmethod
    def _start_line(statement: astroid.nodes.NodeNG) -> int:
        decorators = getattr(statement, "decorators", None)
        lines = [statement.lineno or 0]
        if decorators is not None:
            lines.extend(d.lineno or 0 for d in decorators.nodes)
        return min(lines)

    def _member(
        self, statement: astroid.nodes.NodeNG, leading: tuple[str, ...]
    ) -> Optional[Member]:
        if isinstance(statement, astroid.nodes.FunctionDef):
            return Method(
                name=statement.name,
                is_fallible=self.is_fallible(statement),
                is_async=isinstance(statement, astroid.nodes.AsyncFunctionDef),
                has_body=bool(statement.body),
                leading_comments=leading,
                body=tuple(statement.body),
                node=statement,
            )
        if isinstance(statement, astroid.nodes.AnnAssign):
            return Field(
                name=self._target_name(statement.target),
                declared_type=statement.annotation.as_string(),
                leading_comments=leading,
                node=statement,
            )
        if isinstance(statement, astroid.nodes.Assign):
            return Field(
                name=self._target_name(statement.targets[0]),
                declared_type=None,
                leading_comments=leading,
                node=statement,
            )
        return None

    @staticmethod
    def _target_name(target: astroid.nodes.NodeNG) -> str:
        if isinstance(target, astroid.nodes.AssignName):
            return target.name
        return target.as_string()

    @staticmethod
    def _comment_lines(module: astroid.nodes.Module) -> dict[int, str]:
        """Full-line comments of the module, keyed by line number."""
        stream = module.stream()
        if stream is None:
            return {}
        with stream:
            data = stream.read()
        comments: dict[int, str] = {}
        try:
            for token in tokenize.tokenize(io.BytesIO(data).readline):
                if token.type != tokenize.COMMENT:
                    continue
                line, column = token.start
                if not token.line[:column].strip():
                    comments[line] = token.string
        except (tokenize.TokenError, SyntaxError):
            logger.debug("Incomplete token stream for %s", module.name)
        return comments
