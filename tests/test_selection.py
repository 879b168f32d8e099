# pylint:disable=no-self-use
from __future__ import annotations

import unittest

from binprobe.models import SelectionRange
from binprobe.selection import Selection


class SelectionTests(unittest.TestCase):
    """
    Test cases for click-driven selection
    """

    def test_click_selects_single_byte(self):
        selection = Selection()
        assert selection.click(5) == SelectionRange(5, 5)
        assert selection.count == 1

    def test_click_same_start_clears(self):
        selection = Selection()
        selection.click(5)
        assert selection.click(5) is None
        assert not selection
        assert selection.count == 0

    def test_click_elsewhere_moves(self):
        selection = Selection()
        selection.click(5)
        assert selection.click(9) == SelectionRange(9, 9)

    def test_plain_click_on_range_start_clears(self):
        selection = Selection(SelectionRange(5, 10))
        assert selection.click(5) is None

    def test_shift_click_extends_forward(self):
        selection = Selection()
        selection.click(5)
        assert selection.click(10, extend=True) == SelectionRange(5, 10)
        assert selection.count == 6

    def test_shift_click_on_start_collapses(self):
        selection = Selection(SelectionRange(5, 10))
        assert selection.click(5, extend=True) == SelectionRange(5, 5)

    def test_shift_click_before_start_extends_backward(self):
        selection = Selection(SelectionRange(5, 10))
        assert selection.click(2, extend=True) == SelectionRange(2, 10)

    def test_shift_click_inside_shrinks(self):
        selection = Selection(SelectionRange(5, 10))
        assert selection.click(7, extend=True) == SelectionRange(5, 7)

    def test_shift_click_on_end_is_noop(self):
        selection = Selection(SelectionRange(5, 10))
        assert selection.click(10, extend=True) == SelectionRange(5, 10)

    def test_shift_click_without_selection(self):
        selection = Selection()
        assert selection.click(4, extend=True) == SelectionRange(4, 4)

    def test_negative_offset(self):
        with self.assertRaises(ValueError):
            Selection().click(-1)

    def test_start_never_after_end(self):
        selection = Selection()
        for offset, extend in ((8, False), (3, True), (12, True), (6, True), (6, True), (0, False),
                               (20, True), (20, True), (1, True), (15, False), (15, False), (4, True)):
            current = selection.click(offset, extend)
            if current is not None:
                assert current.start <= current.end

    def test_clamp(self):
        selection = Selection(SelectionRange(5, 10))
        assert selection.clamp(8) == SelectionRange(5, 7)
        assert selection.clamp(3) == SelectionRange(2, 2)
        assert selection.clamp(0) is None
        assert selection.clamp(10) is None

    def test_clamp_keeps_range_that_fits(self):
        selection = Selection(SelectionRange(5, 10))
        assert selection.clamp(11) == SelectionRange(5, 10)

    def test_slice(self):
        data = bytes(range(20))
        selection = Selection(SelectionRange(2, 4))
        assert selection.slice(data) == b"\x02\x03\x04"
        selection.clear()
        assert selection.slice(data) == b""

    def test_range_validation(self):
        with self.assertRaises(ValueError):
            SelectionRange(4, 3)
        with self.assertRaises(ValueError):
            SelectionRange(-1, 3)
        assert SelectionRange(3, 3).contains(3)
        assert not SelectionRange(3, 5).contains(6)


if __name__ == "__main__":
    unittest.main()
