"""Tests for per-element attribute compilation."""

from __future__ import annotations

import logging

import pytest

from firattr.core.actions import build_registry, default_handlers
from firattr.core.config import ErrorPolicy
from firattr.core.element import compile_element, parse_translated
from firattr.core.errors import ActionLookupError, ConflictError, GrammarError, ParamArityError


class TestParseTranslated:
    def test_splits_lines(self) -> None:
        text = '@fir:a:ok="$fir.replace()"\n@fir:b:ok::t="$fir.redirect(\'/\')"'
        assert parse_translated(text) == [
            ("@fir:a:ok", "$fir.replace()"),
            ("@fir:b:ok::t", "$fir.redirect('/')"),
        ]

    def test_empty(self) -> None:
        assert parse_translated("") == []


class TestCompileElement:
    """compile_element rewrites one element's attributes."""

    def test_plain_attributes_untouched(self) -> None:
        attrs = [("class", "btn"), ("id", "save")]
        assert compile_element(attrs) == attrs

    def test_refresh(self) -> None:
        result = compile_element([("class", "btn"), ("x-fir-refresh", "create")])
        assert result == [("class", "btn"), ("@fir:create:ok", "$fir.replace()")]

    def test_directive_modifiers_stripped(self) -> None:
        result = compile_element([("x-fir-refresh.once.passive", "create")])
        assert result == [("@fir:create:ok", "$fir.replace()")]

    def test_dispatch(self) -> None:
        result = compile_element([("x-fir-dispatch:[switch-tab,now]", "update-now:ok")])
        assert result == [("@fir:update-now:ok", "$dispatch('switch-tab','now')")]

    def test_unknown_directive_left_in_place(self) -> None:
        attrs = [("x-fir-mutation-observer.child-list.subtree", "$fir.replace()")]
        assert compile_element(attrs) == attrs

    def test_emitted_in_precedence_order(self) -> None:
        result = compile_element(
            [
                ("x-fir-redirect", "logout"),
                ("x-fir-append:row", "create"),
                ("x-fir-refresh", "update"),
            ]
        )
        assert [key for key, _ in result] == [
            "@fir:update:ok",
            "@fir:create:ok::row",
            "@fir:logout:ok",
        ]

    def test_render_expression_key(self) -> None:
        result = compile_element([("@fir", "create->todo")])
        assert result == [("@fir:create:ok::todo", "$fir.replace()")]

    def test_alpine_render_expression_key(self) -> None:
        result = compile_element([("x-on:fir", "create;delete=>$fir.removeEl()")])
        assert result == [
            ("@fir:create:ok", "$fir.replace()"),
            ("@fir:delete:ok", "$fir.removeEl()"),
        ]

    def test_render_expression_uses_actions_map(self) -> None:
        result = compile_element([("@fir", "save=>doSave")], actions_map={"doSave": "save()"})
        assert result == [("@fir:save:ok", "save()")]

    def test_canonical_keys_pass_through(self) -> None:
        attrs = [("@fir:create:ok::todo", "$fir.replace()")]
        assert compile_element(attrs) == attrs

    def test_duplicates_removed(self) -> None:
        result = compile_element([("@fir", "create"), ("x-fir-refresh", "create")])
        assert result == [("@fir:create:ok", "$fir.replace()")]

    def test_same_key_different_values_kept(self) -> None:
        result = compile_element([("x-fir-refresh", "create"), ("x-fir-reset", "create")])
        assert result == [
            ("@fir:create:ok", "$fir.replace()"),
            ("@fir:create:ok", "$el.reset()"),
        ]


class TestScriptsOnElement:
    def test_runjs_with_element_script(self) -> None:
        result = compile_element([("x-fir-js:doIt", "alert(1)"), ("x-fir-runjs:doIt", "click")])
        assert result == [("@fir:click:ok", "alert(1)")]

    def test_element_script_overrides_global(self) -> None:
        result = compile_element(
            [("x-fir-js:doIt", "local()"), ("x-fir-runjs:doIt", "click")],
            actions_map={"doIt": "global()"},
        )
        assert result == [("@fir:click:ok", "local()")]

    def test_runjs_with_global_script(self) -> None:
        result = compile_element([("x-fir-runjs:doIt", "click")], actions_map={"doIt": "global()"})
        assert result == [("@fir:click:ok", "global()")]

    def test_runjs_missing_script(self) -> None:
        with pytest.raises(ActionLookupError):
            compile_element([("x-fir-runjs:doIt", "click")])

    def test_caller_map_not_modified(self) -> None:
        actions_map = {"other": "x()"}
        compile_element([("x-fir-js:doIt", "alert(1)")], actions_map=actions_map)
        assert actions_map == {"other": "x()"}


class TestErrors:
    def test_bad_key_raises(self) -> None:
        with pytest.raises(GrammarError):
            compile_element([("x-fir-append:[row", "create")])

    def test_bad_params_raise(self) -> None:
        with pytest.raises(ParamArityError):
            compile_element([("x-fir-dispatch:[]", "create")])

    def test_bad_value_raises(self) -> None:
        with pytest.raises(GrammarError):
            compile_element([("x-fir-refresh", "create:bogus")])

    def test_bad_render_expression_raises(self) -> None:
        with pytest.raises(GrammarError):
            compile_element([("@fir", "->todo")])

    def test_skip_keeps_bad_attribute(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="firattr.core.element"):
            result = compile_element(
                [("x-fir-dispatch:[]", "create"), ("x-fir-refresh", "update")],
                on_error=ErrorPolicy.SKIP,
            )
        assert result == [
            ("x-fir-dispatch:[]", "create"),
            ("@fir:update:ok", "$fir.replace()"),
        ]
        assert "x-fir-dispatch:[]" in caplog.text

    def test_skip_keeps_unparseable_key(self) -> None:
        result = compile_element([("x-fir-append:[row", "create")], on_error=ErrorPolicy.SKIP)
        assert result == [("x-fir-append:[row", "create")]

    def test_skip_keeps_bad_render_expression(self) -> None:
        result = compile_element([("@fir", "->todo")], on_error=ErrorPolicy.SKIP)
        assert result == [("@fir", "->todo")]

    def test_conflict_raises(self) -> None:
        with pytest.raises(ConflictError):
            compile_element([("x-fir-refresh", "create"), ("x-fir-remove", "create")])

    def test_conflict_raises_when_skipping(self) -> None:
        with pytest.raises(ConflictError):
            compile_element(
                [("x-fir-append:row", "create"), ("x-fir-remove", "create")],
                on_error=ErrorPolicy.SKIP,
            )

    def test_skipped_attribute_not_checked_for_conflicts(self) -> None:
        result = compile_element(
            [("x-fir-refresh", "create"), ("x-fir-remove", "create:bogus")],
            on_error=ErrorPolicy.SKIP,
        )
        assert result == [
            ("x-fir-remove", "create:bogus"),
            ("@fir:create:ok", "$fir.replace()"),
        ]

    def test_no_conflict_on_different_events(self) -> None:
        result = compile_element([("x-fir-refresh", "create"), ("x-fir-remove", "delete")])
        assert result == [
            ("@fir:create:ok", "$fir.replace()"),
            ("@fir:delete:ok", "$fir.removeEl()"),
        ]


class TestCustomRegistry:
    def test_handler_missing_from_registry_left_in_place(self) -> None:
        registry = build_registry(h for h in default_handlers() if h.name != "redirect")
        attrs = [("x-fir-redirect", "logout")]
        assert compile_element(attrs, registry=registry) == attrs


class TestTodoItem:
    def test_full_element(self, registry, todo_item_attributes) -> None:
        result = compile_element(todo_item_attributes, registry=registry)
        assert result == [
            ("class", "todo"),
            ("@fir:update:ok::todo", "$fir.replace()"),
            ("@fir:delete:ok", "$fir.removeEl()"),
            ("@fir:update:ok", "$el.classList.add('flash')"),
            ("@fir:[update:pending,update:ok]", "$fir.toggleClass('is-loading')"),
        ]


class TestTemplates:
    def test_render_expression_with_state_and_template(self) -> None:
        result = compile_element([("@fir", "create:ok->todo=>$fir.appendEl()")])
        assert result == [("@fir:create:ok::todo", "$fir.appendEl()")]

    def test_list_item_element(self) -> None:
        item = compile_element(
            [("x-fir-remove", "delete"), ("x-fir-toggleClass:[is-loading]", "update:pending,update:ok")]
        )
        assert item == [
            ("@fir:delete:ok", "$fir.removeEl()"),
            ("@fir:[update:pending,update:ok]", "$fir.toggleClass('is-loading')"),
        ]

    def test_dispatch_keeps_value_template(self) -> None:
        result = compile_element([("x-fir-dispatch:[form-submit,validation]", "submit->form")])
        assert result == [("@fir:submit:ok::form", "$dispatch('form-submit','validation')")]

    def test_append_without_template(self) -> None:
        result = compile_element([("x-fir-append", "create")])
        assert result == [("@fir:create:ok", "$fir.appendEl()")]
