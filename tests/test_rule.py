"""Tests for Rule: option validation and actions."""

from __future__ import annotations

import warnings

import pytest

from tokenrules import Rule, RulesetError


class TestSpec:
    def test_single_string_is_one_option(self) -> None:
        rule = Rule("r", '"a b')
        assert rule.spec == ['"a b']
        assert rule.options == [['"a', "b"]]

    def test_list_keeps_declaration_order(self) -> None:
        rule = Rule("r", ['"x', '"y z'])
        assert list(rule) == [['"x'], ['"y', "z"]]

    def test_spec_getter_returns_a_copy(self) -> None:
        rule = Rule("r", ['"x'])
        rule.spec.append('"y')
        assert rule.spec == ['"x']

    def test_non_string_option_is_rejected(self) -> None:
        with pytest.raises(RulesetError):
            Rule("r", ['"x', 3])

    def test_other_spec_types_are_rejected(self) -> None:
        with pytest.raises(RulesetError):
            Rule("r", 3)

    def test_name_must_be_a_non_empty_string(self) -> None:
        with pytest.raises(RulesetError):
            Rule("", '"x')
        with pytest.raises(RulesetError):
            Rule(None, '"x')

    def test_allows_empty(self) -> None:
        assert Rule("r", ['"x', ""]).allows_empty()
        assert Rule("r", "   ").allows_empty()
        assert not Rule("r", ['"x']).allows_empty()

    def test_shadowing_empty_option_warns(self) -> None:
        with pytest.warns(UserWarning, match="shadows") as record:
            Rule("r", ["", '"x'])
        assert record[0].filename == __file__

    def test_shadowing_warning_from_the_setter(self) -> None:
        rule = Rule("r", '"x')
        with pytest.warns(UserWarning, match="shadows") as record:
            rule.spec = ["", '"x']
        assert record[0].filename == __file__

    def test_trailing_empty_option_does_not_warn(self) -> None:
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            Rule("r", ['"x', ""])


class TestAction:
    def test_default_is_identity(self) -> None:
        node = ["a"]
        assert Rule("r", '"a').trigger(node) is node

    def test_action_receives_node_and_name(self) -> None:
        rule = Rule("greet", '"hi', lambda node, name: (name, list(node)))
        assert rule.trigger(["hi"]) == ("greet", ["hi"])

    def test_non_callable_action_is_rejected(self) -> None:
        with pytest.raises(RulesetError):
            Rule("r", '"a', "not callable")
