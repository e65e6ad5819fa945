"""Shared pytest fixtures for firattr tests."""

import pytest

from firattr.core.actions import ActionRegistry, build_registry, default_handlers


@pytest.fixture
def registry() -> ActionRegistry:
    """Return a fresh registry of the built-in handlers."""
    return build_registry(default_handlers())


@pytest.fixture
def todo_item_attributes() -> list[tuple[str, str]]:
    """Return the attributes of a typical todo list item."""
    return [
        ("class", "todo"),
        ("x-fir-remove", "delete"),
        ("x-fir-toggleClass:[is-loading]", "update:pending,update:ok"),
        ("@fir", "update:ok->todo"),
        ("x-fir-js:flash", "$el.classList.add('flash')"),
        ("x-fir-runjs:flash", "update"),
    ]
