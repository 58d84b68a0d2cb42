"""
jscore - Tree-Walking Runtime
Evaluates a Program against a global Environment.

Value model:
  Number     unsigned 64-bit integer; overflow and underflow are reported
  Str        text
  Undefined  bound by `var x;` with no initializer

Evaluation is dispatched on the node class name (`_eval_<ClassName>`).
"""

from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Tuple
from .ast_nodes import (
    Program, Node, ExpressionStatement, AdditiveExpression,
    AssignmentExpression, MemberExpression, NumericLiteral, StringLiteral,
    Identifier, VariableDeclaration,
)

U64_MAX = 2 ** 64 - 1


# ── Values ───────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class RuntimeValue:
    """Base class for evaluation results."""

    @property
    def kind(self) -> str:
        return type(self).__name__


@dataclass(frozen=True)
class Number(RuntimeValue):
    value: int = 0

    def __str__(self):
        return str(self.value)


@dataclass(frozen=True)
class Str(RuntimeValue):
    value: str = ""

    def __str__(self):
        return self.value


@dataclass(frozen=True)
class UndefinedType(RuntimeValue):

    @property
    def kind(self) -> str:
        return "Undefined"

    def __str__(self):
        return "undefined"


Undefined = UndefinedType()


# ── Errors ───────────────────────────────────────────────────────────────────

class EvaluationError(Exception):
    kind = "EvaluationError"

    def __init__(self, message: str, line: int = 0):
        super().__init__(f"[{self.kind}] Line {line}: {message}")
        self.line = line


class UnboundIdentifier(EvaluationError):
    kind = "UnboundIdentifier"

    def __init__(self, name: str, line: int = 0):
        super().__init__(f"'{name}' is not defined", line)
        self.name = name


class TypeMismatch(EvaluationError):
    kind = "TypeMismatch"


class UnsupportedConstruct(EvaluationError):
    kind = "UnsupportedConstruct"


class InvalidAssignmentTarget(UnsupportedConstruct):
    kind = "InvalidAssignmentTarget"


class NumericOverflow(EvaluationError):
    kind = "NumericOverflow"


class EvaluationTooDeep(EvaluationError):
    kind = "EvaluationTooDeep"


# ── Environment ──────────────────────────────────────────────────────────────

class Environment:
    """Global name -> RuntimeValue bindings for one program execution."""

    def __init__(self, bindings: Optional[Dict[str, RuntimeValue]] = None):
        self._bindings: Dict[str, RuntimeValue] = dict(bindings or {})

    def define(self, name: str, value: RuntimeValue) -> None:
        self._bindings[name] = value

    # Global scope only, so assignment and declaration write the same slot.
    assign = define

    def lookup(self, name: str, line: int = 0) -> RuntimeValue:
        try:
            return self._bindings[name]
        except KeyError:
            raise UnboundIdentifier(name, line) from None

    def get(self, name: str, default=None):
        return self._bindings.get(name, default)

    def __contains__(self, name: str) -> bool:
        return name in self._bindings

    def __len__(self) -> int:
        return len(self._bindings)

    def __iter__(self) -> Iterator[str]:
        return iter(self._bindings)

    def items(self) -> List[Tuple[str, RuntimeValue]]:
        return list(self._bindings.items())

    def __repr__(self):
        inner = ", ".join(f"{k}={v!r}" for k, v in self._bindings.items())
        return f"Environment({inner})"


# ── Arithmetic ───────────────────────────────────────────────────────────────

def _check_numbers(op: str, left: RuntimeValue, right: RuntimeValue, line: int) -> Tuple[int, int]:
    if isinstance(left, Number) and isinstance(right, Number):
        return left.value, right.value
    raise TypeMismatch(
        f"Unsupported operand kinds for '{op}': {left.kind} and {right.kind}",
        line
    )


def add_values(left: RuntimeValue, right: RuntimeValue, line: int = 0) -> RuntimeValue:
    a, b = _check_numbers('+', left, right, line)
    result = a + b
    if result > U64_MAX:
        raise NumericOverflow(f"{a} + {b} exceeds {U64_MAX}", line)
    return Number(result)


def sub_values(left: RuntimeValue, right: RuntimeValue, line: int = 0) -> RuntimeValue:
    a, b = _check_numbers('-', left, right, line)
    if b > a:
        raise NumericOverflow(f"{a} - {b} is below zero", line)
    return Number(a - b)


_BINARY_OPS = {
    '+': add_values,
    '-': sub_values,
}


# ── Runtime ──────────────────────────────────────────────────────────────────

class Runtime:
    def __init__(self, environment: Optional[Environment] = None):
        self.environment = environment if environment is not None else Environment()

    def execute(self, program: Program) -> List[RuntimeValue]:
        """
        Evaluate every top-level statement in order. Returns the values
        produced by statements that produce one; the first error aborts
        the rest of the program.
        """
        produced: List[RuntimeValue] = []
        for stmt in program.statements:
            try:
                value = self.eval(stmt)
            except RecursionError:
                raise EvaluationTooDeep("Expression nested too deeply", getattr(stmt, "line", 0)) from None
            if value is not None:
                produced.append(value)
        return produced

    def eval(self, node: Optional[Node]) -> Optional[RuntimeValue]:
        if node is None:
            return None
        method = f"_eval_{type(node).__name__}"
        evaluator = getattr(self, method, self._eval_generic)
        return evaluator(node)

    # ------------------------------------------------------------------ rules

    def _eval_generic(self, node: Node) -> Optional[RuntimeValue]:
        raise UnsupportedConstruct(
            f"No evaluation rule for {type(node).__name__}", node.line
        )

    def _eval_ExpressionStatement(self, node: ExpressionStatement) -> Optional[RuntimeValue]:
        return self.eval(node.expression)

    def _eval_AdditiveExpression(self, node: AdditiveExpression) -> Optional[RuntimeValue]:
        left = self.eval(node.left)
        if left is None:
            return None
        right = self.eval(node.right)
        if right is None:
            return None

        op = _BINARY_OPS.get(node.operator)
        if op is None:
            raise UnsupportedConstruct(f"Unknown additive operator {node.operator!r}", node.line)
        return op(left, right, node.line)

    def _eval_AssignmentExpression(self, node: AssignmentExpression) -> Optional[RuntimeValue]:
        if node.operator != '=':
            raise UnsupportedConstruct(f"Unknown assignment operator {node.operator!r}", node.line)

        value = self.eval(node.right)
        if not isinstance(node.left, Identifier):
            target = type(node.left).__name__ if node.left is not None else "nothing"
            raise InvalidAssignmentTarget(f"Cannot assign to {target}", node.line)
        if value is None:
            return None
        self.environment.assign(node.left.name, value)
        return value

    def _eval_VariableDeclaration(self, node: VariableDeclaration) -> None:
        for decl in node.declarations:
            if decl is None or decl.id is None:
                continue
            value = self.eval(decl.init) if decl.init is not None else None
            self.environment.define(decl.id.name, Undefined if value is None else value)
        return None

    def _eval_Identifier(self, node: Identifier) -> RuntimeValue:
        return self.environment.lookup(node.name, node.line)

    def _eval_NumericLiteral(self, node: NumericLiteral) -> RuntimeValue:
        if not 0 <= node.value <= U64_MAX:
            raise NumericOverflow(f"Numeric literal {node.value} is out of range", node.line)
        return Number(node.value)

    def _eval_StringLiteral(self, node: StringLiteral) -> RuntimeValue:
        return Str(node.value)

    def _eval_MemberExpression(self, node: MemberExpression) -> RuntimeValue:
        raise UnsupportedConstruct("Property access is not supported", node.line)


def execute(program: Program, environment: Optional[Environment] = None) -> List[RuntimeValue]:
    """Run ``program`` against ``environment`` (a fresh one if omitted)."""
    return Runtime(environment).execute(program)
