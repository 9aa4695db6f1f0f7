"""Tests for the line buffer editor and positions."""

import unittest

from bindstrip.lines import LineBuffer, blank, split_lines
from bindstrip.position import Position


class TestPosition(unittest.TestCase):
    def test_clamp_pulls_column_back_to_line_end(self):
        position = Position(0, 10).clamp(["abc"])
        assert position.column == 3

    def test_clamp_keeps_columns_in_range(self):
        assert Position(0, 2).clamp(["abc"]).column == 2

    def test_positions_order_by_line_then_column(self):
        assert Position(0, 99) < Position(1, 0)
        assert Position(2, 3) < Position(2, 4)
        assert Position(2, 4) == Position(2, 4)
        assert sorted([Position(3, 2), Position(5, 10), Position(3, 1)]) == [
            Position(3, 1),
            Position(3, 2),
            Position(5, 10),
        ]


class TestSplitLines(unittest.TestCase):
    def test_splits_on_every_line_break_style(self):
        assert split_lines("a\nb\r\nc\rd") == ["a", "b", "c", "d"]

    def test_trailing_break_does_not_open_a_line(self):
        assert split_lines("a\nb\n") == ["a", "b"]
        assert split_lines("a\n\n") == ["a", ""]

    def test_empty_text_has_no_lines(self):
        assert split_lines("") == []

    def test_blank_keeps_length(self):
        assert blank("abcdef", 1, 4) == "a   ef"
        assert blank("abcdef", 3, 3) == "abcdef"


class TestReplace(unittest.TestCase):
    def test_same_line_text_that_fits_is_padded_with_spaces(self):
        buffer = LineBuffer(["abcdefgh"])
        assert buffer.replace(Position(0, 2), Position(0, 6), "XY") is True
        assert buffer[0] == "abXY  gh"

    def test_same_line_text_that_fits_exactly(self):
        buffer = LineBuffer(["abcdefgh"])
        assert buffer.replace(Position(0, 2), Position(0, 5), "XYZ") is True
        assert buffer[0] == "abXYZfgh"

    def test_same_line_text_too_long_only_blanks_the_span(self):
        buffer = LineBuffer(["abcdefgh"])
        assert buffer.replace(Position(0, 2), Position(0, 4), "XYZ") is False
        assert buffer[0] == "ab  efgh"

    def test_same_line_edits_never_change_length(self):
        line = 'x android:text="@{user.name}" y'
        buffer = LineBuffer([line])
        buffer.replace(Position(0, 2), Position(0, 29), 'android:tag="binding_0"')
        assert len(buffer[0]) == len(line)
        buffer.replace(Position(0, 2), Position(0, 29), "")
        assert len(buffer[0]) == len(line)
        assert buffer[0] == "x" + " " * 28 + "y"

    def test_multi_line_keeps_prefix_and_blanks_the_rest(self):
        buffer = LineBuffer(["0123456789", "abcdef", "ghijkl"])
        assert buffer.replace(Position(0, 3), Position(2, 2), "Z") is True
        assert buffer.lines == ["012Z", "      ", "  ijkl"]

    def test_multi_line_keeps_interior_and_last_line_lengths(self):
        lines = ["<data>", "    <variable name='a'/>", "</data> tail"]
        buffer = LineBuffer(lines)
        buffer.replace(Position(0, 0), Position(2, 7), "")
        assert buffer[0] == ""
        assert len(buffer[1]) == len(lines[1])
        assert buffer[1].strip() == ""
        assert buffer[2] == "        tail"

    def test_positions_are_clamped_after_earlier_edits(self):
        buffer = LineBuffer(["0123456789", "abc"])
        buffer.replace(Position(0, 2), Position(1, 1), "")
        assert buffer[0] == "01"
        # The line is now shorter than the columns recorded by the parser.
        assert buffer.replace(Position(0, 1), Position(0, 8), "") is True
        assert buffer[0] == "0 "

    def test_line_count_never_changes(self):
        buffer = LineBuffer(["a", "b", "c", "d"])
        buffer.replace(Position(0, 0), Position(3, 1), "")
        assert len(buffer) == 4


class TestInsert(unittest.TestCase):
    def test_insert_shifts_only_the_rest_of_the_line(self):
        buffer = LineBuffer(["abc", "def"])
        buffer.insert(Position(0, 1), "XY")
        assert buffer.lines == ["aXYbc", "def"]

    def test_insert_clamps_its_position(self):
        buffer = LineBuffer(["abc"])
        buffer.insert(Position(0, 10), "!")
        assert buffer[0] == "abc!"

    def test_rfind_searches_upwards(self):
        buffer = LineBuffer(["</a>", "text", "more"])
        assert buffer.rfind("</", 2) == (0, 0)
        assert buffer.rfind("zz", 2) is None

    def test_to_text_joins_with_separator(self):
        buffer = LineBuffer.from_text("a\nb")
        assert buffer.to_text("\r\n") == "a\r\nb"
