"""
Conflict detection between actions collected for one element.

Two actions conflict when both manipulate the same DOM node in mutually
exclusive ways *and* can be triggered by the same ``event:state``. The
policy is symmetric, and precedence plays no part in it: precedence only
orders emission.
"""

from __future__ import annotations

from collections.abc import Sequence

from firattr.core.errors import ConflictError
from firattr.core.expression_lang.normalizer import event_info
from firattr.core.expression_lang.parser import parse_expressions
from firattr.core.ir.actions import CollectedAction

CONFLICTING_ACTIONS: dict[str, frozenset[str]] = {
    "refresh": frozenset({"remove", "remove-parent"}),
    "remove": frozenset({"refresh", "remove-parent", "append", "prepend"}),
    "remove-parent": frozenset({"refresh", "remove", "append", "prepend"}),
    "append": frozenset({"remove", "remove-parent", "prepend"}),
    "prepend": frozenset({"remove", "remove-parent", "append"}),
}


def declared_events(action: CollectedAction) -> frozenset[str]:
    """
    Every ``event:state`` pair an action's value can fire on.

    Modifiers and targets are ignored; a missing state counts as ``ok``.

    Raises:
        GrammarError: If the value is not a valid binding expression.
    """
    parsed = parse_expressions(action.info.value)
    return frozenset(str(event_info(event)) for event in parsed.iter_events())


def _exclusive(a: str, b: str) -> bool:
    return b in CONFLICTING_ACTIONS.get(a, ()) and a in CONFLICTING_ACTIONS.get(b, ())


def conflicts(a: CollectedAction, b: CollectedAction) -> bool:
    """Return True if the two actions cannot both live on one element."""
    if a.handler.coexists or b.handler.coexists:
        return False
    if not _exclusive(a.name, b.name):
        return False
    return bool(declared_events(a) & declared_events(b))


def find_conflicts(actions: Sequence[CollectedAction]) -> list[tuple[CollectedAction, CollectedAction]]:
    """Return every conflicting pair, in collection order."""
    pairs = []
    for i, first in enumerate(actions):
        for second in actions[i + 1 :]:
            if conflicts(first, second):
                pairs.append((first, second))
    return pairs


def check_conflicts(actions: Sequence[CollectedAction]) -> None:
    """
    Raise for the first conflicting pair.

    Raises:
        ConflictError: If any two actions are mutually exclusive.
    """
    for first, second in find_conflicts(actions):
        shared = sorted(declared_events(first) & declared_events(second))
        raise ConflictError(
            f"{first} conflicts with {second} on {', '.join(shared)}: "
            f"{first.name} and {second.name} cannot both handle the same event",
            first,
            second,
        )
