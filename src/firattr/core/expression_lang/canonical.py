"""
Canonical ``@fir:`` attribute rendering.

    @fir:<events>[::<template>][.<modifiers>]="<action>"

A single event renders as ``name:state``; two or more render as a
bracket list in declaration order. Modifiers are already sorted by the
normalizer.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from firattr.core.expression_lang.normalizer import normalize_binding, normalize_expression
from firattr.core.expression_lang.parser import parse_expressions
from firattr.core.ir.bindings import Binding, ParsedAttribute, Target

ATTR_PREFIX = "@fir:"


def render_events(parsed: ParsedAttribute) -> str:
    if len(parsed.events) == 1:
        return str(parsed.events[0])
    return "[" + ",".join(str(event) for event in parsed.events) + "]"


def canonical_key(parsed: ParsedAttribute) -> str:
    """Render the attribute key half, e.g. ``@fir:[a:ok,b:ok]::todo.once``."""
    key = ATTR_PREFIX + render_events(parsed)
    if parsed.template:
        key += f"::{parsed.template}"
    if parsed.modifiers:
        key += "." + ".".join(parsed.modifiers)
    return key


def canonicalize(parsed: ParsedAttribute) -> str:
    """Serialize a normalized binding to one canonical attribute line."""
    return f'{canonical_key(parsed)}="{parsed.action}"'


def translate_render_expression(source: str, actions_map: Mapping[str, str] | None = None) -> str:
    """
    Translate a binding expression into canonical attributes.

    One line is produced per top-level (``;``-separated) expression, in
    source order.

    Args:
        source: Binding expression, e.g. "save=>saveData;load=>loadData"
        actions_map: Optional name → action value table for ``=>name``

    Returns:
        Canonical lines joined by ``\\n``.

    Raises:
        GrammarError: If the expression is invalid.
    """
    parsed = parse_expressions(source)
    return "\n".join(
        canonicalize(normalize_expression(expression, actions_map))
        for expression in parsed.expressions
    )


def translate_event_expression(
    source: str,
    action_value: str,
    template: str | None = None,
    additional_modifiers: Iterable[str] = (),
) -> str:
    """
    Translate only the event half of a binding expression.

    Targets written in ``source`` are ignored: the caller (an action
    handler) supplies the action and, optionally, the template. One line
    is produced per binding.

    Raises:
        GrammarError: If the expression is invalid.
    """
    parsed = parse_expressions(source)
    extra = tuple(additional_modifiers)
    lines = []
    for binding in parsed.iter_bindings():
        stripped = Binding(events=binding.events, target=Target(template=template, action=action_value))
        lines.append(canonicalize(normalize_binding(stripped, additional_modifiers=extra)))
    return "\n".join(lines)
