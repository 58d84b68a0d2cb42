"""
jscore - AST Node Definitions
Immutable tree produced by the parser and walked by the runtime.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple


@dataclass(frozen=True)
class Node:
    """Base class for all AST nodes."""
    line: int = field(default=0, compare=False, repr=False)


@dataclass(frozen=True)
class Program:
    """Top-level statements in source order."""
    statements: Tuple[Node, ...] = ()


@dataclass(frozen=True)
class ExpressionStatement(Node):
    expression: Optional[Node] = None


@dataclass(frozen=True)
class AdditiveExpression(Node):
    """left + right, left - right"""
    operator: str = "+"
    left: Optional[Node] = None
    right: Optional[Node] = None


@dataclass(frozen=True)
class AssignmentExpression(Node):
    """left = right"""
    operator: str = "="
    left: Optional[Node] = None
    right: Optional[Node] = None


@dataclass(frozen=True)
class MemberExpression(Node):
    """object.property"""
    object: Optional[Node] = None
    property: Optional[Node] = None


@dataclass(frozen=True)
class NumericLiteral(Node):
    value: int = 0


@dataclass(frozen=True)
class StringLiteral(Node):
    value: str = ""


@dataclass(frozen=True)
class Identifier(Node):
    name: str = ""


@dataclass(frozen=True)
class VariableDeclarator(Node):
    """id = init; init is None for a bare `var x`."""
    id: Optional[Identifier] = None
    init: Optional[Node] = None


@dataclass(frozen=True)
class VariableDeclaration(Node):
    declarations: Tuple[VariableDeclarator, ...] = ()
