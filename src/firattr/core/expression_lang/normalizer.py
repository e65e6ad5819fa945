"""
Semantic normalization of parsed bindings.

Rules, applied in order:
    1. A missing state defaults to ``ok``.
    2. Modifiers from every event (plus any additional ones) are merged,
       deduplicated and sorted.
    3. A missing action defaults to ``$fir.replace()``.
    4. A plain identifier action is looked up in the actions map; a
       ``$fir.<name>()`` literal never is. Unknown names are kept verbatim.
    5. The template is carried through unchanged.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from firattr.core.ir.bindings import (
    DEFAULT_ACTION,
    Binding,
    EventExpr,
    EventInfo,
    EventState,
    Expression,
    ParsedAttribute,
)

FIR_ACTION_PREFIX = "$fir."


def event_info(event: EventExpr) -> EventInfo:
    """Resolve an event expression's state, defaulting to ``ok``."""
    return EventInfo(name=event.name, state=event.state or EventState.OK)


def merge_modifiers(events: Iterable[EventExpr], additional: Iterable[str] = ()) -> tuple[str, ...]:
    modifiers = {mod for event in events for mod in event.modifiers}
    modifiers.update(additional)
    return tuple(sorted(modifiers))


def resolve_action(action: str | None, actions_map: Mapping[str, str] | None = None) -> str:
    """
    Resolve a target action against the actions map.

    Lookup ignores case so ``=>doSave`` finds a ``dosave`` entry. The
    caller's map is never modified.
    """
    if not action:
        return DEFAULT_ACTION
    if action.startswith(FIR_ACTION_PREFIX) or not actions_map:
        return action

    if action in actions_map:
        return actions_map[action]
    lowered = action.lower()
    for key, value in actions_map.items():
        if key.lower() == lowered:
            return value
    return action


def normalize_binding(
    binding: Binding,
    actions_map: Mapping[str, str] | None = None,
    additional_modifiers: Iterable[str] = (),
) -> ParsedAttribute:
    """Normalize one binding into a ParsedAttribute."""
    return ParsedAttribute(
        events=tuple(event_info(event) for event in binding.events),
        template=binding.target.template,
        action=resolve_action(binding.target.action, actions_map),
        modifiers=merge_modifiers(binding.events, additional_modifiers),
    )


def normalize_expression(
    expression: Expression,
    actions_map: Mapping[str, str] | None = None,
) -> ParsedAttribute:
    """
    Normalize every binding of an expression into a single ParsedAttribute.

    Events are concatenated in declaration order; the last non-empty
    template and the last non-empty action across the bindings win.
    """
    events: list[EventExpr] = []
    template = None
    action = None
    for binding in expression.bindings:
        events.extend(binding.events)
        if binding.target.template:
            template = binding.target.template
        if binding.target.action:
            action = binding.target.action

    return ParsedAttribute(
        events=tuple(event_info(event) for event in events),
        template=template,
        action=resolve_action(action, actions_map),
        modifiers=merge_modifiers(events),
    )
