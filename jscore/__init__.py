"""
jscore - embedded script front end and evaluator.

    source text -> tokenize -> parse -> execute
"""

from .lexer import Token, TokenType, Lexer, tokenize
from .parser import (
    Parser, ParseError, UnexpectedToken, UnexpectedEndOfInput, NestingTooDeep, parse,
)
from .runtime import (
    RuntimeValue, Number, Str, Undefined, Environment, Runtime, execute,
    EvaluationError, UnboundIdentifier, TypeMismatch, UnsupportedConstruct,
    InvalidAssignmentTarget, NumericOverflow, EvaluationTooDeep,
)

__version__ = "0.1.0"
