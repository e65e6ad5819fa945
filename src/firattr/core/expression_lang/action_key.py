"""
Parser for ``x-fir-*`` action attribute keys.

Grammar:
    action_key → PREFIX IDENT (":" params)?
    params     → "[" (IDENT ("," IDENT)*)? "]" | IDENT

Examples:
    x-fir-refresh                  → ("refresh", [])
    x-fir-append:todo              → ("append", ["todo"])
    x-fir-toggleClass:[a,b]        → ("toggleClass", ["a", "b"])
    x-fir-setValue:[]              → ("setValue", [])
"""

from __future__ import annotations

from firattr.core.errors import make_grammar_error
from firattr.core.expression_lang.parser import TokenStream
from firattr.core.expression_lang.tokenizer import TokenKind, get_action_key_lexer

ACTION_PREFIX = "x-fir-"


class _ActionKeyParser(TokenStream):
    """Recursive descent parser for action keys."""

    def parse_action_key(self) -> tuple[str, list[str]]:
        self.expect(TokenKind.PREFIX, f"'{ACTION_PREFIX}' prefix")
        name = self.expect(TokenKind.IDENT, "action name").value

        params: list[str] = []
        if self.match(TokenKind.COLON):
            params = self.parse_params()

        if self.current.kind != TokenKind.EOF:
            raise self.error(f"Unexpected {self.current.value!r} in action key")
        return name, params

    def parse_params(self) -> list[str]:
        """'[' (IDENT (',' IDENT)*)? ']' | IDENT"""
        if not self.match(TokenKind.LBRACKET):
            return [self.expect(TokenKind.IDENT, "parameter or '[' after ':'").value]

        params: list[str] = []
        if self.current.kind != TokenKind.RBRACKET:
            params.append(self.expect(TokenKind.IDENT, "parameter name").value)
            while self.match(TokenKind.COMMA):
                params.append(self.expect(TokenKind.IDENT, "parameter name after ','").value)
        self.expect(TokenKind.RBRACKET, "']' to close the parameter list")
        return params


def parse_action_key(key: str) -> tuple[str, list[str]]:
    """Parse an attribute key like ``x-fir-toggleClass:[loading,busy]``.

    Returns:
        The action name and its parameters; parameters are an empty list
        when absent or given as ``[]``.

    Raises:
        GrammarError: If the key is empty, lacks the ``x-fir-`` prefix or
            is malformed.
    """
    key = key.strip()
    if not key:
        raise make_grammar_error("Action key cannot be empty", key, 0)
    if not key.startswith(ACTION_PREFIX):
        raise make_grammar_error(f"Invalid prefix for action key: expected '{ACTION_PREFIX}'", key, 0)

    parser = _ActionKeyParser(get_action_key_lexer().tokenize(key), key)
    return parser.parse_action_key()


def split_action_key(attr_name: str) -> str:
    """
    Drop Alpine-style directive modifiers from an attribute key.

    ``x-fir-refresh.once.passive`` → ``x-fir-refresh``. Modifiers never
    carry meaning for the compiler.
    """
    return attr_name.split(".", 1)[0]
