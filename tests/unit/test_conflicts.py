"""Tests for conflict detection between actions on one element."""

from __future__ import annotations

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from firattr.core.actions import check_conflicts, conflicts, default_registry, find_conflicts
from firattr.core.actions.conflicts import CONFLICTING_ACTIONS, declared_events
from firattr.core.errors import ConflictError
from firattr.core.ir.actions import ActionInfo, CollectedAction


def _action(name: str, value: str, params: list[str] | None = None) -> CollectedAction:
    info = ActionInfo(attr_name=f"x-fir-{name}", action_name=name, params=params or [], value=value)
    return CollectedAction(handler=default_registry()[name], info=info)


class TestDeclaredEvents:
    def test_state_defaults_to_ok(self) -> None:
        assert declared_events(_action("refresh", "create")) == {"create:ok"}

    def test_modifiers_and_targets_ignored(self) -> None:
        events = declared_events(_action("refresh", "create:error.nohtml->row; delete"))
        assert events == {"create:error", "delete:ok"}


class TestConflicts:
    @pytest.mark.parametrize(
        "first,second",
        [
            ("refresh", "remove"),
            ("refresh", "remove-parent"),
            ("remove", "append"),
            ("remove", "prepend"),
            ("remove-parent", "append"),
            ("append", "prepend"),
        ],
    )
    def test_exclusive_pairs_on_same_event(self, first: str, second: str) -> None:
        a = _action(first, "create", ["t"] if first in ("append", "prepend") else None)
        b = _action(second, "create", ["t"] if second in ("append", "prepend") else None)
        assert conflicts(a, b)
        assert conflicts(b, a)

    def test_different_events_do_not_conflict(self) -> None:
        assert not conflicts(_action("refresh", "create"), _action("remove", "delete"))

    def test_different_states_do_not_conflict(self) -> None:
        assert not conflicts(_action("refresh", "create:ok"), _action("remove", "create:error"))

    def test_refresh_and_append_compatible(self) -> None:
        assert not conflicts(_action("refresh", "create"), _action("append", "create", ["t"]))

    def test_coexisting_handler_never_conflicts(self) -> None:
        assert not conflicts(_action("reset", "create"), _action("remove", "create"))
        assert not conflicts(_action("toggleClass", "create", ["a"]), _action("refresh", "create"))

    def test_find_conflicts(self) -> None:
        actions = [
            _action("refresh", "create"),
            _action("reset", "create"),
            _action("remove", "create"),
        ]
        pairs = find_conflicts(actions)
        assert [(a.name, b.name) for a, b in pairs] == [("refresh", "remove")]

    def test_check_conflicts_raises(self) -> None:
        first = _action("refresh", "create")
        second = _action("remove", "create; delete")
        with pytest.raises(ConflictError, match="create:ok") as exc_info:
            check_conflicts([first, second])
        assert exc_info.value.first is first
        assert exc_info.value.second is second

    def test_check_conflicts_passes(self) -> None:
        check_conflicts([_action("refresh", "create"), _action("remove", "delete")])


# Parameters each handler accepts; the others take none
VALID_PARAMS = {
    "append": ["row"],
    "prepend": ["row"],
    "runjs": ["flash"],
    "js": ["flash"],
    "toggleClass": ["is-loading"],
    "dispatch": ["done"],
}

HANDLER_NAMES = sorted(default_registry())
EVENT_VALUES = st.lists(st.sampled_from(["a", "b:error", "c"]), min_size=1, max_size=3)


class TestConflictProperties:
    @given(
        first=st.sampled_from(HANDLER_NAMES),
        second=st.sampled_from(HANDLER_NAMES),
        first_events=EVENT_VALUES,
        second_events=EVENT_VALUES,
    )
    @settings(max_examples=200)
    def test_conflict_is_symmetric(
        self, first: str, second: str, first_events: list[str], second_events: list[str]
    ) -> None:
        """Invariant: conflicts(a, b) == conflicts(b, a) for every handler pair."""
        a = _action(first, "; ".join(first_events), VALID_PARAMS.get(first))
        b = _action(second, "; ".join(second_events), VALID_PARAMS.get(second))
        assert conflicts(a, b) == conflicts(b, a)

    @given(
        name=st.sampled_from(HANDLER_NAMES),
        other=st.sampled_from(HANDLER_NAMES),
        events=EVENT_VALUES,
    )
    @settings(max_examples=100)
    def test_coexisting_and_unlisted_never_conflict(
        self, name: str, other: str, events: list[str]
    ) -> None:
        """Invariant: only two non-coexisting handlers in the table can conflict."""
        registry = default_registry()
        value = "; ".join(events)
        a = _action(name, value, VALID_PARAMS.get(name))
        b = _action(other, value, VALID_PARAMS.get(other))
        if registry[name].coexists or name not in CONFLICTING_ACTIONS:
            assert not conflicts(a, b)
            assert not conflicts(b, a)

    def test_table_is_symmetric(self) -> None:
        for name, others in CONFLICTING_ACTIONS.items():
            for other in others:
                assert name in CONFLICTING_ACTIONS[other]
