"""
Action handlers for ``x-fir-*`` attributes.

    from firattr.core.actions import default_registry

    handler = default_registry()["append"]
    handler.translate(info, actions_map={})
"""

from firattr.core.actions.conflicts import check_conflicts, conflicts, find_conflicts
from firattr.core.actions.handlers import ActionHandler, BaseActionHandler, default_handlers
from firattr.core.actions.registry import ActionRegistry, build_registry, default_registry

__all__ = [
    "ActionHandler",
    "ActionRegistry",
    "BaseActionHandler",
    "build_registry",
    "check_conflicts",
    "conflicts",
    "default_handlers",
    "default_registry",
    "find_conflicts",
]
