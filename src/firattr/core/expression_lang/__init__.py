"""
firattr binding expression language.

Tokenizer, parsers, normalizer and canonicalizer for ``@fir:`` bindings
and ``x-fir-*`` action keys.

Usage:
    from firattr.core.expression_lang import translate_render_expression

    translate_render_expression("create,update.debounce->todo")
    # '@fir:[create:ok,update:ok]::todo.debounce="$fir.replace()"'
"""

from firattr.core.expression_lang.action_key import parse_action_key, split_action_key
from firattr.core.expression_lang.canonical import (
    canonicalize,
    translate_event_expression,
    translate_render_expression,
)
from firattr.core.expression_lang.normalizer import normalize_binding, normalize_expression
from firattr.core.expression_lang.parser import parse_expressions

__all__ = [
    "canonicalize",
    "normalize_binding",
    "normalize_expression",
    "parse_action_key",
    "parse_expressions",
    "split_action_key",
    "translate_event_expression",
    "translate_render_expression",
]
