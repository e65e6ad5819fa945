"""
Per-element attribute compilation.

The tree walker hands over one element's attributes at a time. For each
element:

    1. collect  - ``x-fir-*`` keys are parsed and paired with a handler
    2. sort     - collected actions are ordered by handler precedence
    3. check    - mutually exclusive actions raise ConflictError before
                  anything is emitted
    4. emit     - each handler translates its attribute into canonical
                  ``@fir:`` attributes

Nothing is shared between elements, so callers may compile elements in
parallel.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence

from firattr.core.actions.conflicts import check_conflicts
from firattr.core.actions.handlers import JsPrefixActionHandler
from firattr.core.actions.registry import ActionRegistry, default_registry
from firattr.core.config import ErrorPolicy
from firattr.core.errors import ActionLookupError, GrammarError, ParamArityError
from firattr.core.expression_lang.action_key import ACTION_PREFIX, parse_action_key, split_action_key
from firattr.core.expression_lang.canonical import translate_render_expression
from firattr.core.ir.actions import ActionInfo, CollectedAction

logger = logging.getLogger(__name__)

Attribute = tuple[str, str]

# Bare keys whose value is a raw binding expression
RENDER_EXPRESSION_KEYS = ("@fir", "x-on:fir")

_ATTRIBUTE_ERRORS = (GrammarError, ParamArityError, ActionLookupError)


def parse_translated(translated: str) -> list[Attribute]:
    """Split canonical output lines into (key, value) pairs."""
    attrs: list[Attribute] = []
    for line in translated.split("\n"):
        line = line.strip()
        if not line:
            continue
        key, sep, value = line.partition("=")
        if not sep:
            logger.warning("Skipping malformed translated attribute line: %s", line)
            continue
        attrs.append((key, value.removeprefix('"').removesuffix('"')))
    return attrs


def collect_actions(
    attributes: Sequence[Attribute],
    registry: ActionRegistry,
    on_error: ErrorPolicy = ErrorPolicy.RAISE,
) -> tuple[list[CollectedAction], list[Attribute]]:
    """
    Pair every ``x-fir-*`` attribute with its handler.

    Returns:
        The collected actions in attribute order, and the attributes that
        stay on the element as they are.
    """
    collected: list[CollectedAction] = []
    kept: list[Attribute] = []
    for attr_name, value in attributes:
        if not attr_name.startswith(ACTION_PREFIX):
            kept.append((attr_name, value))
            continue

        try:
            action_name, params = parse_action_key(split_action_key(attr_name))
        except GrammarError as e:
            _handle_attribute_error(attr_name, e, on_error)
            kept.append((attr_name, value))
            continue

        handler = registry.get(action_name)
        if handler is None:
            # Other x-fir-* directives belong to the client runtime
            logger.debug("No handler for %s, leaving it in place", attr_name)
            kept.append((attr_name, value))
            continue

        info = ActionInfo(attr_name=attr_name, action_name=action_name, params=params, value=value)
        collected.append(CollectedAction(handler=handler, info=info))
    return collected, kept


def element_actions_map(
    actions: Sequence[CollectedAction],
    actions_map: Mapping[str, str] | None = None,
) -> dict[str, str]:
    """Overlay the element's ``x-fir-js:<name>`` scripts on the given map."""
    merged = dict(actions_map or {})
    for action in actions:
        # Malformed x-fir-js keys are reported when the action translates
        if isinstance(action.handler, JsPrefixActionHandler) and len(action.info.params) == 1:
            merged[action.info.params[0]] = action.info.value
    return merged


def sort_by_precedence(actions: Sequence[CollectedAction]) -> list[CollectedAction]:
    """Stable sort: equal precedences keep attribute order."""
    return sorted(actions, key=lambda action: action.precedence)


def compile_element(
    attributes: Sequence[Attribute],
    actions_map: Mapping[str, str] | None = None,
    registry: ActionRegistry | None = None,
    on_error: ErrorPolicy = ErrorPolicy.RAISE,
) -> list[Attribute]:
    """Compile one element's attributes.

    Non-fir attributes keep their position; translated ``@fir:``
    attributes are appended in precedence order with exact duplicates
    removed. Keys already in canonical form pass through unchanged.

    Args:
        attributes: The element's (key, value) pairs in document order
        actions_map: Global name → action value table
        registry: Handler table (defaults to the built-in registry)
        on_error: RAISE aborts on the first bad attribute; SKIP logs it and
            keeps it untranslated

    Returns:
        The element's new attribute list.

    Raises:
        GrammarError, ParamArityError, ActionLookupError: For a bad
            attribute when on_error is RAISE.
        ConflictError: If two actions are mutually exclusive, regardless
            of on_error.
    """
    registry = registry if registry is not None else default_registry()

    collected, kept = collect_actions(attributes, registry, on_error)
    actions = sort_by_precedence(collected)
    resolved_map = element_actions_map(actions, actions_map)

    translations: list[tuple[CollectedAction, str]] = []
    untranslated: list[Attribute] = []
    for action in actions:
        try:
            translations.append((action, action.handler.translate(action.info, resolved_map)))
        except _ATTRIBUTE_ERRORS as e:
            _handle_attribute_error(action.info.attr_name, e, on_error)
            untranslated.append((action.info.attr_name, action.info.value))

    # Every surviving value parsed during translation, so only real
    # conflicts can be raised here.
    check_conflicts([action for action, _ in translations])

    output: list[Attribute] = []
    emitted: set[Attribute] = set()

    def emit(attrs: list[Attribute]) -> None:
        for attr in attrs:
            if attr not in emitted:
                emitted.add(attr)
                output.append(attr)

    for attr_name, value in kept:
        if attr_name in RENDER_EXPRESSION_KEYS:
            try:
                emit(parse_translated(translate_render_expression(value, resolved_map)))
            except GrammarError as e:
                _handle_attribute_error(attr_name, e, on_error)
                output.append((attr_name, value))
            continue
        output.append((attr_name, value))

    output.extend(untranslated)
    for action, translated in translations:
        logger.debug("%s -> %s", action, translated.replace("\n", " "))
        emit(parse_translated(translated))

    return output


def _handle_attribute_error(attr_name: str, error: Exception, on_error: ErrorPolicy) -> None:
    if on_error is ErrorPolicy.RAISE:
        raise error
    logger.warning("Skipping attribute %s: %s", attr_name, error)
