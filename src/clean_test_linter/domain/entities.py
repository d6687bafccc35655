from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Union

import astroid  # type: ignore[import-untyped]


class DeclarationKind(Enum):
    """Kinds of type declarations the classifier distinguishes."""
    CLASS = "class"
    EXTENSION = "extension"
    STRUCT = "struct"
    ACTOR = "actor"
    ENUM = "enum"


class Severity(Enum):
    """Convention diagnostics are advisory; expansion errors block a rewrite."""
    CONVENTION = "convention"
    EXPANSION = "expansion"


@dataclass(frozen=True)
class SourceLocation:
    """File-relative position of the node a diagnostic is anchored to."""
    path: str
    line: int
    column: int

    @classmethod
    def of(cls, node: astroid.nodes.NodeNG) -> "SourceLocation":
        root = node.root()
        path = getattr(root, "file", "") or ""
        return cls(
            path=path,
            line=getattr(node, "lineno", 0) or 0,
            column=getattr(node, "col_offset", 0) or 0,
        )

    def __str__(self) -> str:
        return f"{self.path}:{self.line}:{self.column}"


@dataclass(frozen=True)
class SectionMarker:
    """A `# MARK: - <name> [free text]` comment."""
    name: str


@dataclass(frozen=True)
class Field:
    """A class-level attribute declaration (`name: T = value` or `name = value`)."""
    name: str
    declared_type: Optional[str]
    leading_comments: tuple[str, ...]
    node: astroid.nodes.NodeNG


@dataclass(frozen=True)
class Method:
    """A function declared directly in the class body."""
    name: str
    is_fallible: bool
    is_async: bool
    has_body: bool
    leading_comments: tuple[str, ...]
    body: tuple[astroid.nodes.NodeNG, ...]
    node: astroid.nodes.FunctionDef


Member = Union[Field, Method]


@dataclass(frozen=True)
class Declaration:
    """
    Read-only view over a class statement.

    Built once per validation pass by the DeclarationClassifier and discarded
    afterwards. `members` keeps source order: the members-order analyzer
    depends on it.
    """
    kind: DeclarationKind
    name: Optional[str]
    members: tuple[Member, ...]
    inherited_names: tuple[str, ...]
    source_file: Optional[str]
    node: astroid.nodes.ClassDef

    @property
    def fields(self) -> list[Field]:
        return [m for m in self.members if isinstance(m, Field)]

    @property
    def methods(self) -> list[Method]:
        return [m for m in self.members if isinstance(m, Method)]


class TransformationType(Enum):
    """Sub-tree rewrites a fix suggestion or the skip rule can describe."""
    UNWRAP_SUPPRESSION = "unwrap_suppression"
    ADD_NONE_RETURN = "add_none_return"
    PREPEND_STATEMENT = "prepend_statement"


@dataclass(frozen=True)
class TransformationPlan:
    """
    Pure data structure describing the replacement of one sub-tree.

    `params["source"]` holds the old sub-tree. The fixer gateway interprets
    the plan with LibCST and renders the new sub-tree; rules never touch
    LibCST themselves.
    """
    transformation_type: TransformationType
    params: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def unwrap_suppression(cls, source: str) -> "TransformationPlan":
        """Create plan to replace a suppressing statement by its propagating form."""
        return cls(
            transformation_type=TransformationType.UNWRAP_SUPPRESSION,
            params={"source": source},
        )

    @classmethod
    def add_none_return(cls, source: str, function_name: str) -> "TransformationPlan":
        """Create plan to add `-> None` to a function signature."""
        return cls(
            transformation_type=TransformationType.ADD_NONE_RETURN,
            params={"source": source, "function_name": function_name},
        )

    @classmethod
    def prepend_statement(
        cls, source: str, function_name: str, statement: str
    ) -> "TransformationPlan":
        """Create plan to insert `statement` as the first statement of a function body."""
        return cls(
            transformation_type=TransformationType.PREPEND_STATEMENT,
            params={
                "source": source,
                "function_name": function_name,
                "statement": statement,
            },
        )

    @property
    def old_source(self) -> str:
        return str(self.params.get("source", ""))


@dataclass(frozen=True)
class SkipExpansion:
    """Result of a successful skip expansion: the statement to prepend to the body."""
    function_name: str
    statement: str
    plan: TransformationPlan
