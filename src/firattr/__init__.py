"""
firattr - compiler for fir reactive-UI template attributes.

Turns ``@fir:`` binding expressions and ``x-fir-*`` action attributes into
canonical ``@fir:<events>[::template][.modifiers]="<action>"`` attributes,
and rejects declarations that would fight over the same DOM node.
"""

from __future__ import annotations

from ._version import get_version
from .core import ir
from .core.actions import ActionRegistry, build_registry, conflicts, default_registry
from .core.config import ErrorPolicy, FirattrConfig, load_config
from .core.element import compile_element
from .core.errors import (
    ActionLookupError,
    ConfigError,
    ConflictError,
    FirattrError,
    GrammarError,
    ParamArityError,
)
from .core.event_keys import collect_event_templates, event_templates_from_attr
from .core.expression_lang import (
    parse_action_key,
    parse_expressions,
    translate_event_expression,
    translate_render_expression,
)

__version__ = get_version()

__all__ = [
    "__version__",
    "ir",
    "ActionLookupError",
    "ActionRegistry",
    "ConfigError",
    "ConflictError",
    "ErrorPolicy",
    "FirattrConfig",
    "FirattrError",
    "GrammarError",
    "ParamArityError",
    "build_registry",
    "collect_event_templates",
    "compile_element",
    "conflicts",
    "default_registry",
    "event_templates_from_attr",
    "load_config",
    "parse_action_key",
    "parse_expressions",
    "translate_event_expression",
    "translate_render_expression",
]
