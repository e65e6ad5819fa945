"""
Tokenizer for firattr binding expressions and action keys.

Each lexer is an ordered table of (kind, pattern) rules compiled into a
single master regex. Compilation happens once per process through the
cached ``get_*_lexer`` accessors; the compiled lexer holds no per-call
state and is safe to share between threads.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from enum import StrEnum, auto
from functools import cache

from firattr.core.errors import make_grammar_error


class TokenKind(StrEnum):
    """Token types for binding expressions and action keys."""

    # Shared
    IDENT = auto()
    COMMA = auto()
    LBRACKET = auto()
    RBRACKET = auto()

    # Binding expressions
    FIR_ACTION = auto()  # $fir.replace()
    STATE = auto()  # :ok
    DOUBLE_COLON = auto()  # ::
    MODIFIER = auto()  # .debounce
    ARROW = auto()  # ->
    DOUBLE_ARROW = auto()  # =>
    SEMICOLON = auto()

    # Action keys
    PREFIX = auto()  # x-fir-
    COLON = auto()

    # End of input
    EOF = auto()


class Token:
    """A single token from a firattr lexer."""

    __slots__ = ("kind", "value", "pos")

    def __init__(self, kind: TokenKind, value: str, pos: int) -> None:
        self.kind = kind
        self.value = value
        self.pos = pos

    def __repr__(self) -> str:
        return f"Token({self.kind}, {self.value!r}, pos={self.pos})"


# Order matters: earlier rules win at the same position.
EXPRESSION_RULES: list[tuple[TokenKind, str]] = [
    (TokenKind.FIR_ACTION, r"\$fir\.[a-zA-Z]+\(\)"),
    # A hyphen ends the identifier when it starts an arrow: "create->todo"
    (TokenKind.IDENT, r"[a-zA-Z_](?:[a-zA-Z0-9_]|-(?!>))*"),
    (TokenKind.DOUBLE_COLON, r"::"),
    # A state may be followed directly by "->"
    (TokenKind.STATE, r":(?:ok|error|pending|done)(?![a-zA-Z0-9_]|-(?!>))"),
    (TokenKind.MODIFIER, r"\.[a-zA-Z]+"),
    (TokenKind.ARROW, r"->"),
    (TokenKind.DOUBLE_ARROW, r"=>"),
    (TokenKind.LBRACKET, r"\["),
    (TokenKind.RBRACKET, r"\]"),
    (TokenKind.COMMA, r","),
    (TokenKind.SEMICOLON, r";"),
]

ACTION_KEY_RULES: list[tuple[TokenKind, str]] = [
    (TokenKind.PREFIX, r"x-fir-"),
    (TokenKind.IDENT, r"[a-zA-Z0-9_-]+"),
    (TokenKind.LBRACKET, r"\["),
    (TokenKind.RBRACKET, r"\]"),
    (TokenKind.COMMA, r","),
    (TokenKind.COLON, r":"),
]

_WHITESPACE_RE = re.compile(r"\s+")


class Lexer:
    """Compiled rule table that turns a string into tokens."""

    def __init__(self, rules: Sequence[tuple[TokenKind, str]]) -> None:
        self.kinds = [kind for kind, _ in rules]
        alternatives = "|".join(f"(?P<{kind.name}>{pattern})" for kind, pattern in rules)
        self.pattern = re.compile(alternatives)

    def tokenize(self, source: str) -> list[Token]:
        """
        Tokenize a string, skipping whitespace between tokens.

        Raises:
            GrammarError: On a character no rule matches.
        """
        tokens: list[Token] = []
        i = 0
        n = len(source)

        while i < n:
            ws = _WHITESPACE_RE.match(source, i)
            if ws:
                i = ws.end()
                continue

            m = self.pattern.match(source, i)
            if m is None:
                raise make_grammar_error(_describe_unexpected(source, i), source, i)

            kind = TokenKind[m.lastgroup]  # type: ignore[misc]
            tokens.append(Token(kind, m.group(0), i))
            i = m.end()

        tokens.append(Token(TokenKind.EOF, "", n))
        return tokens


def _describe_unexpected(source: str, pos: int) -> str:
    c = source[pos]
    if c == ".":
        return "Dangling modifier: '.' must be followed by a modifier name"
    if c == ":":
        return f"Invalid state suffix at {source[pos:]!r}: expected one of :ok, :error, :pending, :done"
    return f"Unexpected character: {c!r}"


@cache
def get_expression_lexer() -> Lexer:
    """Return the process-wide lexer for binding expressions."""
    return Lexer(EXPRESSION_RULES)


@cache
def get_action_key_lexer() -> Lexer:
    """Return the process-wide lexer for ``x-fir-*`` attribute keys."""
    return Lexer(ACTION_KEY_RULES)


def tokenize(source: str) -> list[Token]:
    """Tokenize a binding expression into a list of tokens."""
    return get_expression_lexer().tokenize(source)
