"""
firattr intermediate representation.

Pydantic models shared by the expression grammar, the normalizer, the
canonicalizer and the action handlers.
"""

from .actions import ActionInfo, CollectedAction
from .bindings import (
    DEFAULT_ACTION,
    Binding,
    EventExpr,
    EventFilter,
    EventInfo,
    EventState,
    Expression,
    Expressions,
    ParsedAttribute,
    Target,
)

__all__ = [
    "DEFAULT_ACTION",
    "ActionInfo",
    "Binding",
    "CollectedAction",
    "EventExpr",
    "EventFilter",
    "EventInfo",
    "EventState",
    "Expression",
    "Expressions",
    "ParsedAttribute",
    "Target",
]
