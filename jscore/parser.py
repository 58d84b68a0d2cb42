"""
jscore - Recursive Descent Parser
Converts a token stream into a Program with one token of lookahead.
"""

from typing import Iterable, List, Optional
from .lexer import Token, TokenType
from .ast_nodes import (
    Program, Node, ExpressionStatement, AdditiveExpression,
    AssignmentExpression, MemberExpression, NumericLiteral, StringLiteral,
    Identifier, VariableDeclaration, VariableDeclarator,
)


class ParseError(Exception):
    def __init__(self, message: str, line: int, column: int = 0):
        super().__init__(f"[ParseError] Line {line}: {message}")
        self.line = line
        self.column = column


class UnexpectedToken(ParseError):
    def __init__(self, token: Token, expected: str):
        super().__init__(
            f"Expected {expected} but got {token.type.name} ({token.value!r})",
            token.line, token.column
        )
        self.token = token


class UnexpectedEndOfInput(ParseError):
    def __init__(self, expected: str, line: int, column: int = 0):
        super().__init__(f"Unexpected end of input, expected {expected}", line, column)


class NestingTooDeep(ParseError):
    def __init__(self, line: int, column: int = 0):
        super().__init__("Expression nested too deeply", line, column)


_ADDITIVE_OPS = ('+', '-')


class Parser:
    def __init__(self, tokens: Iterable[Token]):
        self._tokens = iter(tokens)
        self._current: Optional[Token] = next(self._tokens, None)
        self._last: Optional[Token] = None

    # ------------------------------------------------------------------ helpers

    def _peek(self) -> Optional[Token]:
        return self._current

    def _advance(self) -> Token:
        tok = self._current
        self._last = tok
        self._current = next(self._tokens, None)
        return tok

    def _match(self, ttype: TokenType, value=None) -> bool:
        tok = self._current
        if tok is None or tok.type != ttype:
            return False
        return value is None or tok.value == value

    def _expect(self, ttype: TokenType, expected: str) -> Token:
        tok = self._current
        if tok is None:
            raise self._end_of_input(expected)
        if tok.type != ttype:
            raise UnexpectedToken(tok, expected)
        return self._advance()

    def _end_of_input(self, expected: str) -> UnexpectedEndOfInput:
        last = self._last
        if last is None:
            return UnexpectedEndOfInput(expected, 1, 1)
        return UnexpectedEndOfInput(expected, last.line, last.column)

    def _skip_semicolon(self) -> None:
        if self._match(TokenType.PUNCTUATOR, ';'):
            self._advance()

    # ------------------------------------------------------------------ public

    def parse(self) -> Program:
        stmts: List[Node] = []
        try:
            while self._peek() is not None:
                stmts.append(self._parse_statement())
        except RecursionError:
            tok = self._peek() or self._last
            raise NestingTooDeep(tok.line, tok.column) from None
        return Program(statements=tuple(stmts))

    # ------------------------------------------------------------------ statements

    def _parse_statement(self) -> Node:
        tok = self._peek()

        if tok.type == TokenType.KEYWORD and tok.value == 'var':
            node = self._parse_variable_declaration()
        else:
            expr = self._parse_assignment()
            node = ExpressionStatement(expression=expr, line=tok.line)

        self._skip_semicolon()
        return node

    def _parse_variable_declaration(self) -> VariableDeclaration:
        var_tok = self._advance()  # consume 'var'
        # Only a single declarator per statement for now.
        declarator = self._parse_variable_declarator()
        return VariableDeclaration(declarations=(declarator,), line=var_tok.line)

    def _parse_variable_declarator(self) -> VariableDeclarator:
        id_tok = self._expect(TokenType.IDENTIFIER, "variable name")
        ident = Identifier(name=id_tok.value, line=id_tok.line)

        init = None
        if self._match(TokenType.PUNCTUATOR, '='):
            self._advance()
            init = self._parse_assignment()
        return VariableDeclarator(id=ident, init=init, line=id_tok.line)

    # ------------------------------------------------------------------ expressions

    def _parse_assignment(self) -> Node:
        left = self._parse_additive()

        if self._match(TokenType.PUNCTUATOR, '='):
            op_tok = self._advance()
            right = self._parse_assignment()
            return AssignmentExpression(operator='=', left=left, right=right, line=op_tok.line)

        return left

    def _parse_additive(self) -> Node:
        left = self._parse_left_hand_side()

        tok = self._peek()
        if tok is not None and tok.type == TokenType.PUNCTUATOR and tok.value in _ADDITIVE_OPS:
            op_tok = self._advance()
            # The right operand is a full assignment expression, so
            # `a - b - c` groups as `a - (b - c)`.
            right = self._parse_assignment()
            return AdditiveExpression(operator=op_tok.value, left=left, right=right, line=op_tok.line)

        return left

    def _parse_left_hand_side(self) -> Node:
        return self._parse_member()

    def _parse_member(self) -> Node:
        obj = self._parse_primary()

        while self._match(TokenType.PUNCTUATOR, '.'):
            dot_tok = self._advance()
            prop_tok = self._expect(TokenType.IDENTIFIER, "property name")
            prop = Identifier(name=prop_tok.value, line=prop_tok.line)
            obj = MemberExpression(object=obj, property=prop, line=dot_tok.line)

        return obj

    def _parse_primary(self) -> Node:
        tok = self._peek()
        if tok is None:
            raise self._end_of_input("expression")

        if tok.type == TokenType.IDENTIFIER:
            self._advance()
            return Identifier(name=tok.value, line=tok.line)

        if tok.type == TokenType.STRING_LITERAL:
            self._advance()
            return StringLiteral(value=tok.value, line=tok.line)

        if tok.type == TokenType.NUMBER:
            self._advance()
            return NumericLiteral(value=tok.value, line=tok.line)

        raise UnexpectedToken(tok, "expression")


def parse(tokens: Iterable[Token]) -> Program:
    """Parse a token stream into a Program."""
    return Parser(tokens).parse()
