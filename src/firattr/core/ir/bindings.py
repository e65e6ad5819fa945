"""
Binding expression types for firattr IR.

Two layers live here:

- The raw AST produced by the expression grammar (EventExpr, Target,
  Binding, Expression, Expressions). Optional parts stay ``None`` so the
  normalizer can tell "absent" from "given".
- The normalized form (EventInfo, ParsedAttribute) that the canonicalizer
  serializes back to ``@fir:...="..."`` text.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_ACTION = "$fir.replace()"


class EventState(StrEnum):
    """Outcome of a server event that a binding reacts to."""

    OK = "ok"
    ERROR = "error"
    PENDING = "pending"
    DONE = "done"


# ---------------------------------------------------------------------------
# Raw AST
# ---------------------------------------------------------------------------


class EventExpr(BaseModel):
    """
    One event reference inside a binding.

    Examples:
        - EventExpr(name="create") → create
        - EventExpr(name="create", state=EventState.PENDING, modifiers=["debounce"])
          → create:pending.debounce
    """

    name: str = Field(description="Event identifier")
    state: EventState | None = Field(default=None, description="Explicit state suffix")
    modifiers: list[str] = Field(default_factory=list, description="Modifiers without dots")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        text = self.name
        if self.state is not None:
            text += f":{self.state}"
        for mod in self.modifiers:
            text += f".{mod}"
        return text


class Target(BaseModel):
    """Optional ``->template`` and ``=>action`` half of a binding."""

    template: str | None = None
    action: str | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def is_empty(self) -> bool:
        return self.template is None and self.action is None


class Binding(BaseModel):
    """One or more event expressions followed by an optional target."""

    events: list[EventExpr] = Field(min_length=1)
    target: Target = Field(default_factory=Target)

    model_config = ConfigDict(frozen=True)


class Expression(BaseModel):
    """Comma-joined bindings; produces a single canonical line."""

    bindings: list[Binding] = Field(min_length=1)

    model_config = ConfigDict(frozen=True)


class Expressions(BaseModel):
    """Semicolon-joined, independent expressions."""

    expressions: list[Expression] = Field(min_length=1)

    model_config = ConfigDict(frozen=True)

    def iter_bindings(self):
        for expression in self.expressions:
            yield from expression.bindings

    def iter_events(self):
        for binding in self.iter_bindings():
            yield from binding.events


# ---------------------------------------------------------------------------
# Normalized form
# ---------------------------------------------------------------------------


class EventInfo(BaseModel):
    """An event name paired with a resolved state."""

    name: str
    state: EventState = EventState.OK

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"{self.name}:{self.state}"


class ParsedAttribute(BaseModel):
    """
    A fully normalized binding, ready to be canonicalized.

    Modifiers are deduplicated and sorted; events keep declaration order.
    """

    events: tuple[EventInfo, ...] = Field(min_length=1)
    template: str | None = None
    action: str = DEFAULT_ACTION
    modifiers: tuple[str, ...] = ()

    model_config = ConfigDict(frozen=True)


class EventFilter(BaseModel):
    """
    A bracketed event list inside a canonical key.

    ``[e1:ok,e2:error]::todo`` has an empty ``before_bracket``, values
    ``["e1:ok", "e2:error"]`` and ``after_bracket`` ``"::todo"``.
    """

    before_bracket: str = ""
    values: list[str] = Field(default_factory=list)
    after_bracket: str = ""

    model_config = ConfigDict(frozen=True)

    def expand(self) -> list[str]:
        return [f"{self.before_bracket}{value}{self.after_bracket}" for value in self.values]
