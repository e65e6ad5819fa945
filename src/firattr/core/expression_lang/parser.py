"""
Recursive descent parser for firattr binding expressions.

Grammar:
    expressions → expression (";" expression)* ";"?
    expression  → binding ("," binding)*
    binding     → event_expr ("," event_expr)* target
    event_expr  → IDENT STATE? MODIFIER*
                | "[" IDENT STATE? ("," IDENT STATE?)* "]" MODIFIER*
    target      → ("->" IDENT)? ("=>" (IDENT | FIR_ACTION))?

A comma is ambiguous between "next event of this binding" and "next
binding of this expression". Event expressions are consumed greedily, so
a new binding only starts after a binding that carries a target:
``a->t1,b->t2`` is two bindings, ``a,b->t`` is one.

A bracketed event list modifies every event inside it; modifiers after
the closing bracket apply to the whole group.
"""

from __future__ import annotations

from firattr.core.errors import make_grammar_error
from firattr.core.expression_lang.tokenizer import Token, TokenKind, tokenize
from firattr.core.ir.bindings import (
    Binding,
    EventExpr,
    EventState,
    Expression,
    Expressions,
    Target,
)

_BINDING_END = (TokenKind.SEMICOLON, TokenKind.EOF)


class TokenStream:
    """Cursor over a token list shared by the firattr grammars."""

    def __init__(self, tokens: list[Token], source: str) -> None:
        self.tokens = tokens
        self.source = source
        self.pos = 0

    @property
    def current(self) -> Token:
        return self.tokens[self.pos]

    def peek(self, offset: int = 0) -> Token:
        idx = self.pos + offset
        if idx < len(self.tokens):
            return self.tokens[idx]
        return self.tokens[-1]  # EOF

    def advance(self) -> Token:
        tok = self.tokens[self.pos]
        if self.pos < len(self.tokens) - 1:
            self.pos += 1
        return tok

    def match(self, *kinds: TokenKind) -> Token | None:
        if self.current.kind in kinds:
            return self.advance()
        return None

    def expect(self, kind: TokenKind, what: str) -> Token:
        tok = self.current
        if tok.kind != kind:
            raise self.error(f"Expected {what}, got {_describe(tok)}", tok)
        return self.advance()

    def error(self, message: str, tok: Token | None = None):
        tok = tok or self.current
        return make_grammar_error(message, self.source, tok.pos)


def _describe(tok: Token) -> str:
    if tok.kind == TokenKind.EOF:
        return "end of input"
    return f"{tok.kind} ({tok.value!r})"


class _Parser(TokenStream):
    """Recursive descent parser for binding expressions."""

    # -- Grammar rules --

    def parse_expressions(self) -> Expressions:
        """expression (';' expression)* ';'?"""
        expressions = [self.parse_expression()]
        while self.match(TokenKind.SEMICOLON):
            if self.current.kind == TokenKind.EOF:
                break  # single trailing semicolon
            if self.current.kind == TokenKind.SEMICOLON:
                raise self.error("Empty expression between semicolons")
            expressions.append(self.parse_expression())

        if self.current.kind != TokenKind.EOF:
            raise self.error(f"Unexpected token after expression: {_describe(self.current)}")
        return Expressions(expressions=expressions)

    def parse_expression(self) -> Expression:
        """binding (',' binding)*"""
        bindings = [self.parse_binding()]
        while self.match(TokenKind.COMMA):
            bindings.append(self.parse_binding())
        return Expression(bindings=bindings)

    def parse_binding(self) -> Binding:
        """event_expr (',' event_expr)* target"""
        events = self.parse_event_expr()
        # Keep absorbing events until a target or the end of the binding
        while self.current.kind == TokenKind.COMMA and self.peek(1).kind in (
            TokenKind.IDENT,
            TokenKind.LBRACKET,
        ):
            self.advance()
            events.extend(self.parse_event_expr())

        target = self.parse_target()
        if self.current.kind not in (TokenKind.COMMA, *_BINDING_END):
            raise self.error(f"Unexpected {_describe(self.current)} after binding")
        return Binding(events=events, target=target)

    def parse_event_expr(self) -> list[EventExpr]:
        """IDENT STATE? MODIFIER* | '[' IDENT STATE? (',' IDENT STATE?)* ']' MODIFIER*"""
        if self.match(TokenKind.LBRACKET):
            group: list[tuple[str, EventState | None]] = [self._parse_event_id()]
            while self.match(TokenKind.COMMA):
                group.append(self._parse_event_id())
            self.expect(TokenKind.RBRACKET, "']' to close the event list")
            modifiers = self._parse_modifiers()
            return [EventExpr(name=name, state=state, modifiers=modifiers) for name, state in group]

        name, state = self._parse_event_id()
        return [EventExpr(name=name, state=state, modifiers=self._parse_modifiers())]

    def _parse_event_id(self) -> tuple[str, EventState | None]:
        tok = self.current
        if tok.kind != TokenKind.IDENT:
            raise self.error(f"Expected event name, got {_describe(tok)}", tok)
        self.advance()
        state_tok = self.match(TokenKind.STATE)
        state = EventState(state_tok.value[1:]) if state_tok else None
        return tok.value, state

    def _parse_modifiers(self) -> list[str]:
        modifiers: list[str] = []
        while self.current.kind == TokenKind.MODIFIER:
            modifiers.append(self.advance().value[1:])
        return modifiers

    def parse_target(self) -> Target:
        """('->' IDENT)? ('=>' (IDENT | FIR_ACTION))?"""
        template = None
        action = None
        if self.match(TokenKind.ARROW):
            template = self.expect(TokenKind.IDENT, "template name after '->'").value
        if self.match(TokenKind.DOUBLE_ARROW):
            tok = self.current
            if tok.kind not in (TokenKind.IDENT, TokenKind.FIR_ACTION):
                raise self.error(f"Expected action after '=>', got {_describe(tok)}", tok)
            action = self.advance().value
        return Target(template=template, action=action)


def parse_expressions(source: str) -> Expressions:
    """Parse a binding expression string into an AST.

    Args:
        source: Attribute value (e.g., "create:ok.debounce->todo=>doSave")

    Returns:
        Parsed expressions AST.

    Raises:
        GrammarError: If the expression is invalid. No partial result is
            ever returned.
    """
    if not source or not source.strip():
        raise make_grammar_error("Binding expression cannot be empty", source, 0)

    parser = _Parser(tokenize(source), source)
    return parser.parse_expressions()
