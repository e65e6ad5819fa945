"""
Reader for canonical ``@fir:`` attribute keys.

Once compiled, a key such as ``@fir:[create:ok,update:ok]::todo.once``
tells the server which templates must be rendered for which
``event:state``. Bracket lists are handled by the grammar instead of
regex pre-processing.

Grammar (after the ``@fir:`` / ``x-on:fir:`` prefix):
    event_key  → event_list ("::" IDENT)? MODIFIER*
    event_list → IDENT STATE | "[" IDENT STATE ("," IDENT STATE)* "]"
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from firattr.core.errors import GrammarError, make_grammar_error
from firattr.core.expression_lang.parser import TokenStream
from firattr.core.expression_lang.tokenizer import TokenKind, tokenize
from firattr.core.ir.bindings import EventFilter, EventInfo, EventState

logger = logging.getLogger(__name__)

EVENT_KEY_PREFIXES = ("@fir:", "x-on:fir:")
NO_TEMPLATE = "-"

# Only settled outcomes have markup to render
_TEMPLATE_STATES = (EventState.OK, EventState.ERROR)

EventTemplates = dict[str, set[str]]


@dataclass
class EventKey:
    """A parsed canonical key."""

    events: list[EventInfo]
    template: str | None = None
    modifiers: list[str] = field(default_factory=list)
    bracket: EventFilter | None = None


class _EventKeyParser(TokenStream):
    def parse_event_key(self) -> EventKey:
        bracket = None
        if self.current.kind == TokenKind.LBRACKET:
            open_tok = self.advance()
            events = [self._parse_event_id()]
            while self.match(TokenKind.COMMA):
                events.append(self._parse_event_id())
            close_tok = self.expect(TokenKind.RBRACKET, "']' to close the event filter")
            bracket = EventFilter(
                before_bracket=self.source[: open_tok.pos],
                values=[str(event) for event in events],
                after_bracket=self.source[close_tok.pos + 1 :],
            )
        else:
            events = [self._parse_event_id()]

        template = None
        if self.match(TokenKind.DOUBLE_COLON):
            template = self.expect(TokenKind.IDENT, "template name after '::'").value

        modifiers = []
        while self.current.kind == TokenKind.MODIFIER:
            modifiers.append(self.advance().value[1:])

        if self.current.kind != TokenKind.EOF:
            raise self.error(f"Unexpected {self.current.value!r} in event key")
        return EventKey(events=events, template=template, modifiers=modifiers, bracket=bracket)

    def _parse_event_id(self) -> EventInfo:
        name = self.expect(TokenKind.IDENT, "event name").value
        state = self.expect(TokenKind.STATE, f"state after {name!r} (:ok, :error, :pending or :done)")
        return EventInfo(name=name, state=EventState(state.value[1:]))


def strip_key_prefix(attr_name: str) -> str:
    for prefix in EVENT_KEY_PREFIXES:
        if attr_name.startswith(prefix):
            return attr_name[len(prefix) :]
    return attr_name


def is_event_key(attr_name: str) -> bool:
    return attr_name.startswith(EVENT_KEY_PREFIXES)


def parse_event_key(event_ns: str) -> EventKey:
    """
    Parse the part of a canonical key after its prefix.

    Raises:
        GrammarError: If the key is malformed.
    """
    if not event_ns.strip():
        raise make_grammar_error("Event key cannot be empty", event_ns, 0)
    return _EventKeyParser(tokenize(event_ns), event_ns).parse_event_key()


def get_event_filter(event_ns: str) -> EventFilter | None:
    """Return the bracket filter of a key, or None for a single-event key."""
    return parse_event_key(event_ns).bracket


def event_ns_list(event_ns: str) -> list[str]:
    """
    Unbundle a bracketed key into one key per event.

    ``[a:ok,b:error]::todo`` → ``["a:ok::todo", "b:error::todo"]``. Keys
    without brackets come back unchanged.
    """
    bracket = get_event_filter(event_ns)
    if bracket is None:
        return [event_ns]
    return bracket.expand()


def event_templates_from_attr(attr_name: str) -> EventTemplates:
    """
    Map each ``event:state`` of a canonical key to the templates it renders.

    ``@fir:create:ok::todo`` → ``{"create:ok": {"todo"}}``; a key without a
    template maps to ``{"-"}``. Invalid keys are logged and yield an empty
    mapping.
    """
    event_ns = strip_key_prefix(attr_name)
    try:
        key = parse_event_key(event_ns)
    except GrammarError as e:
        logger.warning("Skipping invalid event binding %r: %s", attr_name, e.message)
        return {}

    if key.template and any(event.state not in _TEMPLATE_STATES for event in key.events):
        logger.warning(
            "Skipping event binding %r: a template can only follow an :ok or :error state",
            attr_name,
        )
        return {}

    evt: EventTemplates = {}
    for event in key.events:
        evt.setdefault(str(event), set()).add(key.template or NO_TEMPLATE)
    return evt


def deep_merge_event_templates(
    first: Mapping[str, set[str]], second: Mapping[str, set[str]]
) -> EventTemplates:
    merged: EventTemplates = {event_id: set(templates) for event_id, templates in first.items()}
    for event_id, templates in second.items():
        merged.setdefault(event_id, set()).update(templates)
    return merged


def collect_event_templates(attributes: Iterable[tuple[str, str]]) -> EventTemplates:
    """Merge the event templates of every canonical key in an attribute list."""
    evt: EventTemplates = {}
    for attr_name, _ in attributes:
        if is_event_key(attr_name):
            evt = deep_merge_event_templates(evt, event_templates_from_attr(attr_name))
    return evt


def class_name(event_ns: str, key: str | None = None) -> str:
    """
    CSS class marking elements bound to an event.

    ``class_name("create:ok")`` → ``fir-create-ok``; with a ``fir-key`` of
    ``"row 1"`` → ``fir-create-ok--row-1``.
    """
    cls = "fir-" + event_ns.replace(":", "-")
    if key:
        cls += "--" + key.replace(" ", "-")
    return cls
