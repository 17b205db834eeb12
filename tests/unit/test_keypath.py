"""
Unit tests for key-path helpers.
"""

from keysync.tree import MISSING, flatten, get_value, last_segment, set_value


class TestFlatten:
    """Test leaf path extraction."""

    def test_nested_paths_in_sorted_order(self):
        tree = {"z": "1", "a": {"y": "2", "b": {"c": "3"}}}

        assert flatten(tree) == ["a.b.c", "a.y", "z"]

    def test_empty_branch_vanishes(self):
        assert flatten({"a": {}, "b": "x"}) == ["b"]
        assert flatten({}) == []

    def test_non_string_values_are_leaves(self):
        tree = {"list": [1, 2], "number": 3, "flag": False, "none": None}

        assert flatten(tree) == ["flag", "list", "none", "number"]


class TestGetValue:
    """Test path resolution."""

    def test_resolves_nested_leaf(self):
        assert get_value({"a": {"b": {"c": "x"}}}, "a.b.c") == "x"

    def test_resolves_branch(self):
        assert get_value({"a": {"b": "x"}}, "a") == {"b": "x"}

    def test_missing_segment(self):
        tree = {"a": {"b": "x"}}

        assert get_value(tree, "a.c") is MISSING
        assert get_value(tree, "q.r.s") is MISSING

    def test_leaf_in_the_middle(self):
        assert get_value({"a": "leaf"}, "a.b") is MISSING

    def test_falsy_values_are_present(self):
        tree = {"empty": "", "zero": 0, "no": False}

        assert get_value(tree, "empty") == ""
        assert get_value(tree, "zero") == 0
        assert get_value(tree, "no") is False

    def test_custom_default(self):
        assert get_value({}, "a", default=None) is None


class TestSetValue:
    """Test path insertion."""

    def test_creates_intermediate_branches(self):
        tree = {}

        result = set_value(tree, "a.b.c", "x")

        assert result is tree
        assert tree == {"a": {"b": {"c": "x"}}}

    def test_keeps_siblings(self):
        tree = {"a": {"keep": "1"}, "other": "2"}

        set_value(tree, "a.new", "3")

        assert tree == {"a": {"keep": "1", "new": "3"}, "other": "2"}

    def test_leaf_conflict_becomes_branch(self):
        tree = {"a": "leaf", "sibling": "s"}

        set_value(tree, "a.b", "x")

        assert tree == {"a": {"b": "x"}, "sibling": "s"}

    def test_overwrites_leaf(self):
        tree = {"a": "old"}

        set_value(tree, "a", "new")

        assert tree == {"a": "new"}


def test_last_segment():
    assert last_segment("a.b.c") == "c"
    assert last_segment("single") == "single"
