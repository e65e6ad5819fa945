"""
Action handlers for ``x-fir-*`` attributes.

Each handler owns the *action* half of the compiled attribute (which JS
call runs) and validates its own key parameters. The *event* half of the
attribute value is delegated to ``translate_event_expression``; targets
written in the value are ignored, except the template kept by dispatch.

Precedence orders handlers collected on one element before conflict
checking and emission: a lower number is emitted first.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import ClassVar, Protocol, runtime_checkable

from firattr.core.errors import ActionLookupError, ParamArityError
from firattr.core.expression_lang.canonical import translate_event_expression
from firattr.core.expression_lang.parser import parse_expressions
from firattr.core.ir.actions import ActionInfo


@runtime_checkable
class ActionHandler(Protocol):
    """Capability set shared by every handler variant."""

    name: str
    precedence: int
    coexists: bool

    def translate(self, info: ActionInfo, actions_map: Mapping[str, str]) -> str: ...


class BaseActionHandler:
    """Shared plumbing: a fixed JS action and no key parameters."""

    name: ClassVar[str]
    precedence: ClassVar[int]
    action: ClassVar[str] = ""
    # Coexisting handlers never fight over the DOM node with anything else
    coexists: ClassVar[bool] = False

    def translate(self, info: ActionInfo, actions_map: Mapping[str, str]) -> str:
        self.check_no_params(info)
        return translate_event_expression(info.value, self.action)

    def check_no_params(self, info: ActionInfo) -> None:
        if info.params:
            raise ParamArityError(
                f"{info.attr_name}: x-fir-{self.name} takes no parameters, got {len(info.params)}"
            )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, precedence={self.precedence})"


def _quoted_args(params: list[str]) -> str:
    return ",".join(f"'{param}'" for param in params)


def _require_params(info: ActionInfo, what: str) -> list[str]:
    if not info.params:
        raise ParamArityError(f"{info.attr_name}: at least one {what} is required")
    for param in info.params:
        if not param.strip():
            raise ParamArityError(f"{info.attr_name}: {what} cannot be empty")
    return info.params


def _value_template(value: str) -> str | None:
    """First ``->template`` written in an attribute value, if any."""
    for binding in parse_expressions(value).iter_bindings():
        if binding.target.template:
            return binding.target.template
    return None


def _require_single_param(info: ActionInfo, what: str) -> str:
    if len(info.params) != 1 or not info.params[0].strip():
        raise ParamArityError(
            f"{info.attr_name}: exactly one {what} is required, got {len(info.params)}"
        )
    return info.params[0]


# ---------------------------------------------------------------------------
# DOM mutation handlers
# ---------------------------------------------------------------------------


class RefreshActionHandler(BaseActionHandler):
    """x-fir-refresh: re-render the element."""

    name = "refresh"
    precedence = 20
    action = "$fir.replace()"


class RemoveActionHandler(BaseActionHandler):
    """x-fir-remove: remove the element."""

    name = "remove"
    precedence = 30
    action = "$fir.removeEl()"


class RemoveParentActionHandler(BaseActionHandler):
    """x-fir-remove-parent: remove the element's parent."""

    name = "remove-parent"
    precedence = 40
    action = "$fir.removeParentEl()"


class AppendActionHandler(BaseActionHandler):
    """x-fir-append[:<template>]: append the rendered template to the element."""

    name = "append"
    precedence = 50
    action = "$fir.appendEl()"

    def translate(self, info: ActionInfo, actions_map: Mapping[str, str]) -> str:
        if len(info.params) > 1:
            raise ParamArityError(
                f"{info.attr_name}: x-fir-{self.name} takes at most one template, "
                f"got {len(info.params)}"
            )
        template = info.params[0] if info.params and info.params[0].strip() else None
        return translate_event_expression(info.value, self.action, template=template)


class PrependActionHandler(AppendActionHandler):
    """x-fir-prepend[:<template>]: prepend the rendered template to the element."""

    name = "prepend"
    precedence = 60
    action = "$fir.prependEl()"


# ---------------------------------------------------------------------------
# Handlers that leave the node in place
# ---------------------------------------------------------------------------


class ResetActionHandler(BaseActionHandler):
    """x-fir-reset: reset a form."""

    name = "reset"
    precedence = 35
    action = "$el.reset()"
    coexists = True


class ToggleDisabledActionHandler(BaseActionHandler):
    """x-fir-toggle-disabled: flip the element's disabled attribute."""

    name = "toggle-disabled"
    precedence = 34
    action = "$fir.toggleDisabled()"
    coexists = True


class ToggleClassActionHandler(BaseActionHandler):
    """x-fir-toggleClass:[a,b]: toggle one or more classes."""

    name = "toggleClass"
    precedence = 33
    coexists = True

    def translate(self, info: ActionInfo, actions_map: Mapping[str, str]) -> str:
        classes = _require_params(info, "class name")
        return translate_event_expression(info.value, f"$fir.toggleClass({_quoted_args(classes)})")


class DispatchActionHandler(BaseActionHandler):
    """
    x-fir-dispatch:[a,b]: re-dispatch as client-side events.

    Unlike the other handlers, a ``->template`` written in the value is kept:
    the first one found applies to every emitted line.
    """

    name = "dispatch"
    precedence = 33

    def translate(self, info: ActionInfo, actions_map: Mapping[str, str]) -> str:
        events = _require_params(info, "event name")
        return translate_event_expression(
            info.value,
            f"$dispatch({_quoted_args(events)})",
            template=_value_template(info.value),
        )


class RunjsActionHandler(BaseActionHandler):
    """x-fir-runjs:<name>: run the script declared by x-fir-js:<name>."""

    name = "runjs"
    precedence = 32
    coexists = True

    def translate(self, info: ActionInfo, actions_map: Mapping[str, str]) -> str:
        script_name = _require_single_param(info, "script name")
        if script_name not in actions_map:
            raise ActionLookupError(
                f"{info.attr_name}: no x-fir-js:{script_name} action found on the element"
            )
        script = actions_map[script_name]
        if not script.strip():
            raise ActionLookupError(f"{info.attr_name}: x-fir-js:{script_name} is empty")
        return translate_event_expression(info.value, script)


class RedirectActionHandler(BaseActionHandler):
    """x-fir-redirect[:<path>]: navigate to ``/<path>`` (default ``/``)."""

    name = "redirect"
    precedence = 90

    def translate(self, info: ActionInfo, actions_map: Mapping[str, str]) -> str:
        if len(info.params) > 1:
            raise ParamArityError(
                f"{info.attr_name}: redirect takes at most one path, got {len(info.params)}"
            )
        path = "/" + (info.params[0] if info.params else "")
        return translate_event_expression(info.value, f"$fir.redirect('{path}')")


class JsPrefixActionHandler(BaseActionHandler):
    """
    x-fir-js:<name>: declare a named script for x-fir-runjs.

    Emits nothing itself; the element compiler collects its value into
    the actions map before other handlers run.
    """

    name = "js"
    precedence = 100
    coexists = True

    def translate(self, info: ActionInfo, actions_map: Mapping[str, str]) -> str:
        _require_single_param(info, "script name")
        return ""


def default_handlers() -> list[BaseActionHandler]:
    """The built-in handler set, one instance per action name."""
    return [
        RefreshActionHandler(),
        RemoveActionHandler(),
        RemoveParentActionHandler(),
        AppendActionHandler(),
        PrependActionHandler(),
        ResetActionHandler(),
        ToggleDisabledActionHandler(),
        ToggleClassActionHandler(),
        DispatchActionHandler(),
        RunjsActionHandler(),
        RedirectActionHandler(),
        JsPrefixActionHandler(),
    ]
