"""
Action handler registry.

The registry is an immutable name → handler table. ``default_registry()``
builds the built-in table once per process and returns the same instance
on every call; it is never mutated afterwards, so it can be read from any
number of threads. Code that needs a different table (tests, embedders
adding handlers) builds its own with ``build_registry``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from functools import cache
from types import MappingProxyType

from firattr.core.actions.handlers import ActionHandler, default_handlers

logger = logging.getLogger(__name__)


class ActionRegistry(Mapping[str, ActionHandler]):
    """Read-only lookup of action handlers by name."""

    def __init__(self, handlers: Mapping[str, ActionHandler]) -> None:
        self._handlers = MappingProxyType(dict(handlers))

    def __getitem__(self, name: str) -> ActionHandler:
        return self._handlers[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._handlers)

    def __len__(self) -> int:
        return len(self._handlers)

    def __repr__(self) -> str:
        return f"ActionRegistry({sorted(self._handlers)})"

    def by_precedence(self) -> list[ActionHandler]:
        """Handlers ordered from highest priority (lowest number) down."""
        return sorted(self._handlers.values(), key=lambda h: (h.precedence, h.name))


def build_registry(handlers: Iterable[ActionHandler]) -> ActionRegistry:
    """
    Build a registry from handler instances.

    Raises:
        ValueError: If two handlers share a name.
    """
    table: dict[str, ActionHandler] = {}
    for handler in handlers:
        if handler.name in table:
            raise ValueError(f"action handler already registered for name: {handler.name}")
        table[handler.name] = handler
    return ActionRegistry(table)


@cache
def default_registry() -> ActionRegistry:
    """Return the process-wide registry of built-in handlers."""
    registry = build_registry(default_handlers())
    logger.debug("Built action registry with %d handlers", len(registry))
    return registry
