"""Unit tests for keyword-presence dispatch."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import pytest


ROOT_DIR = Path(__file__).resolve().parents[2] / "src"
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from netkw.framework.dispatch import (
    DispatchError, Rule, contains_many, dispatch, require_keys, supplied
)


RULES = [
    Rule(("a", "b", "c"), lambda o: "abc", name="abc"),
    Rule(("a", "b"), lambda o: "ab"),
    Rule(("a",), lambda o: "a"),
]


class TestDispatch:
    """Priority order and failure behaviour."""

    @pytest.mark.parametrize("opts, expected", [
        ({"a": 1, "b": 2, "c": 3}, "abc"),
        ({"a": 1, "b": 2}, "ab"),
        ({"a": 1}, "a"),
        ({"a": 1, "c": 3}, "a"),
    ])
    def test_first_matching_rule_wins(self, opts, expected) -> None:
        assert dispatch(opts, RULES) == expected

    def test_superset_selects_higher_priority_rule(self) -> None:
        """Extra keys never demote a call to a later rule."""

        rules = [
            Rule(("a",), lambda o: "first"),
            Rule(("a", "b"), lambda o: "more specific"),
        ]
        assert dispatch({"a": 1, "b": 2}, rules) == "first"

    def test_presence_not_value_decides(self) -> None:
        assert dispatch({"a": None, "b": None}, RULES) == "ab"

    def test_no_match_raises_message(self) -> None:
        with pytest.raises(DispatchError, match="need a"):
            dispatch({"b": 1}, RULES, message="need a")

    def test_dispatch_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            dispatch({}, RULES)

    def test_fallback_used_when_nothing_matches(self) -> None:
        assert dispatch({"z": 1}, RULES, otherwise=lambda o: o["z"]) == 1

    def test_predicate_guard(self) -> None:
        rules = [Rule(lambda o: supplied(o, "x"), lambda o: "x")]
        assert dispatch({"x": 0}, rules) == "x"
        with pytest.raises(DispatchError):
            dispatch({"x": None}, rules)

    def test_action_receives_options(self) -> None:
        rules = [Rule(("a",), lambda o: o["a"] * 2)]
        assert dispatch({"a": 21}, rules) == 42

    def test_selection_is_logged(self, caplog) -> None:
        with caplog.at_level(logging.DEBUG, logger="netkw.framework.dispatch"):
            dispatch({"a": 1, "b": 2}, RULES, operation="demo")
        assert "demo: selected {a, b}" in caplog.text


class TestHelpers:

    def test_contains_many(self) -> None:
        assert contains_many({"a": None, "b": 0}, "a", "b")
        assert not contains_many({"a": 1}, "a", "b")
        assert contains_many({})

    @pytest.mark.parametrize("value, expected", [
        (None, False),
        (False, False),
        (0, True),
        ("", True),
        ([], True),
        (True, True),
    ])
    def test_supplied(self, value, expected) -> None:
        assert supplied({"k": value}, "k") is expected

    def test_supplied_missing_key(self) -> None:
        assert supplied({}, "k") is False

    def test_require_keys(self) -> None:
        assert require_keys({"a": 1, "b": 2}, "a", message="m") == {"a": 1, "b": 2}
        with pytest.raises(DispatchError, match="missing b"):
            require_keys({"a": 1}, "a", "b", message="missing b")
