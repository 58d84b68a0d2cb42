"""
jscore - Lexer
Scans script source into a lazy stream of tokens.
"""

import re
from dataclasses import dataclass, field
from typing import Iterator, Union
from enum import Enum, auto


class TokenType(Enum):
    KEYWORD        = auto()   # var
    PUNCTUATOR     = auto()   # + - = ; ( ) { } , .
    IDENTIFIER     = auto()
    STRING_LITERAL = auto()   # "..." or '...'
    NUMBER         = auto()   # unsigned integer


KEYWORDS = {"var"}
PUNCTUATORS = set("+-=;(){},.")


@dataclass(frozen=True)
class Token:
    type: TokenType
    value: Union[str, int]
    line: int = field(default=1, compare=False)
    column: int = field(default=1, compare=False)

    def __repr__(self):
        return f"Token({self.type.name}, {self.value!r}, line={self.line}, col={self.column})"


# Token specification: ordered list of (TokenType, regex) pairs
_TOKEN_SPEC = [
    (TokenType.NUMBER,         r'\d+'),
    (TokenType.IDENTIFIER,     r'[A-Za-z_$][A-Za-z0-9_$]*'),
    (TokenType.STRING_LITERAL, r'"[^"]*"?|\'[^\']*\'?'),
    (TokenType.PUNCTUATOR,     '[' + re.escape(''.join(sorted(PUNCTUATORS))) + ']'),
]

_MASTER_RE = re.compile(
    r'(?:' + '|'.join(f'(?P<T{i}>{spec[1]})' for i, spec in enumerate(_TOKEN_SPEC)) + r')',
    re.ASCII
)

_WHITESPACE_RE = re.compile(r'[ \t\r\f\v]+')
_COMMENT_RE    = re.compile(r'//[^\n]*')
_NEWLINE_RE    = re.compile(r'\n')


class Lexer:
    """
    Pull-based tokenizer. Iterating yields Tokens until the source is
    exhausted; a consumed token cannot be replayed, build a new Lexer over
    the same text to lex it again.

    Lexing never fails: a character outside the token spec is emitted as a
    single-character PUNCTUATOR and left for the parser to reject.
    """

    def __init__(self, source: str):
        self._source = source
        self._pos = 0
        self._line = 1
        self._line_start = 0
        self._tokens = self._scan()

    def __iter__(self) -> "Lexer":
        return self

    def __next__(self) -> Token:
        return next(self._tokens)

    def _scan(self) -> Iterator[Token]:
        source = self._source
        length = len(source)

        while self._pos < length:
            pos = self._pos

            m = _WHITESPACE_RE.match(source, pos) or _COMMENT_RE.match(source, pos)
            if m:
                self._pos = m.end()
                continue

            if _NEWLINE_RE.match(source, pos):
                self._pos = pos + 1
                self._line += 1
                self._line_start = self._pos
                continue

            line, column = self._line, pos - self._line_start + 1
            m = _MASTER_RE.match(source, pos)
            if not m:
                self._pos = pos + 1
                yield Token(TokenType.PUNCTUATOR, source[pos], line, column)
                continue

            raw = m.group(0)
            tok_type = None
            for i, (ttype, _) in enumerate(_TOKEN_SPEC):
                if m.group(f'T{i}') is not None:
                    tok_type = ttype
                    break

            self._pos = m.end()
            yield _make_token(tok_type, raw, line, column)

            # A string literal may span newlines
            newlines = raw.count('\n')
            if newlines:
                self._line += newlines
                self._line_start = pos + raw.rindex('\n') + 1


def _make_token(tok_type: TokenType, raw: str, line: int, column: int) -> Token:
    if tok_type == TokenType.IDENTIFIER and raw in KEYWORDS:
        return Token(TokenType.KEYWORD, raw, line, column)
    if tok_type == TokenType.NUMBER:
        return Token(TokenType.NUMBER, int(raw), line, column)
    if tok_type == TokenType.STRING_LITERAL:
        quote = raw[0]
        body = raw[1:-1] if len(raw) > 1 and raw.endswith(quote) else raw[1:]
        return Token(TokenType.STRING_LITERAL, body, line, column)
    return Token(tok_type, raw, line, column)


def tokenize(source: str) -> Lexer:
    """Return a fresh lazy token stream over ``source``."""
    return Lexer(source)
