"""Tests for widget helpers that do not need a running app."""

import re

import pytest

from taskboard.ui.widgets.column import css_id
from taskboard.ui.widgets.confirm_modal import format_details

VALID_ID = re.compile(r"[A-Za-z0-9_-]*")


class TestCssId:
    """Tests for widget ids built from task and list ids."""

    @pytest.mark.parametrize("identifier", ["todo", "t1", "PROJ-42", "in-progress"])
    def test_plain_ids_unchanged(self, identifier):
        assert css_id(identifier) == identifier

    @pytest.mark.parametrize(
        "first,second",
        [
            ("a.b", "a_b"),
            ("in_progress", "in-progress"),
            ("a b", "a_b"),
            ("task 1", "task_1"),
            ("_2e_", "."),
        ],
    )
    def test_distinct_ids_stay_distinct(self, first, second):
        assert css_id(first) != css_id(second)

    @pytest.mark.parametrize("identifier", ["a.b", "in_progress", "täsk #1", "x/y:z"])
    def test_result_is_valid_widget_id(self, identifier):
        assert VALID_ID.fullmatch(css_id(identifier))

    def test_ids_from_one_board_never_collide(self):
        identifiers = ["a.b", "a_b", "a-b", "a b", "ab", "a__b", "a_5f_b"]
        assert len({css_id(i) for i in identifiers}) == len(identifiers)


class TestFormatDetails:
    """Tests for the confirm dialog's detail list."""

    def test_short_list(self):
        assert format_details(["Fix login bug", "Write docs"], 5) == "• Fix login bug\n• Write docs"

    def test_long_list_is_summarised(self):
        text = format_details([f"Task {i}" for i in range(7)], 5)

        lines = text.splitlines()
        assert lines[:5] == [f"• Task {i}" for i in range(5)]
        assert lines[5] == "  and 2 more"
