"""
Unit tests for text layout.

Covers static word-wrapping (wrap_to_width), the cursor-relative splitter
behind live printing, and print_wrapped drawing onto a surface.
"""
import pytest

from uncursed.core.enums import Colour, TextFlag
from uncursed.core.surface import SurfaceConfig
from uncursed.core.text_layout import print_wrapped, split_from_cursor, wrap_to_width
from uncursed.renderers.buffer_surface import BufferSurface


class TestWrapToWidth:
    """Test greedy wrapping against a fixed width."""

    def test_short_text_returned_unchanged(self):
        assert wrap_to_width("hello", 10) == ["hello"]

    def test_text_exactly_width(self):
        assert wrap_to_width("0123456789", 10) == ["0123456789"]

    def test_empty_text(self):
        assert wrap_to_width("", 5) == [""]

    def test_short_text_keeps_spacing(self):
        """Text that fits is not re-split, so odd spacing survives."""
        assert wrap_to_width("  a  b ", 10) == ["  a  b "]

    def test_quick_brown_fox(self):
        lines = wrap_to_width("the quick brown fox jumps", 10)
        assert lines == ["the quick", "brown fox", "jumps"]
        assert all(len(line) <= 10 for line in lines)
        assert " ".join(lines) == "the quick brown fox jumps"

    def test_word_exactly_width_after_other_words(self):
        lines = wrap_to_width("ab abcdefghij cd", 10)
        assert lines == ["ab", "abcdefghij", "cd"]

    def test_word_exactly_width_first(self):
        """A full-width first word does not leave an empty line before it."""
        lines = wrap_to_width("abcdefghij klm", 10)
        assert lines == ["abcdefghij", "klm"]

    def test_overlong_word_split_at_width(self):
        lines = wrap_to_width("abcdefghijklmnop", 10)
        assert lines[0] == "abcdefghij"
        assert lines == ["abcdefghij", "klmnop"]

    def test_overlong_word_split_repeatedly(self):
        lines = wrap_to_width("x" * 25, 10)
        assert lines == ["x" * 10, "x" * 10, "x" * 5]

    def test_overlong_word_keeps_all_characters(self):
        word = "supercalifragilistic"
        lines = wrap_to_width(f"a {word} b", 6)
        assert "".join(lines).replace(" ", "") == f"a{word}b"
        assert all(len(line) <= 6 for line in lines)

    def test_remainder_joins_following_words(self):
        lines = wrap_to_width("abcdefghijkl mn op", 10)
        assert lines == ["abcdefghij", "kl mn op"]

    @pytest.mark.parametrize("width", [1, 3, 7, 12, 20])
    def test_no_line_exceeds_width(self, width):
        text = "Lorem ipsum dolor sit amet, consectetur adipiscing elit, sed do eiusmod tempor"
        for line in wrap_to_width(text, width):
            assert len(line) <= width

    @pytest.mark.parametrize("width", [0, -4])
    def test_non_positive_width_rejected(self, width):
        with pytest.raises(ValueError):
            wrap_to_width("some text here", width)


class TestSplitFromCursor:
    """Test the cursor-relative splitter."""

    def test_fits_on_current_row(self):
        assert split_from_cursor("hello world", 0, 80) == ["hello world"]

    def test_break_counts_cursor_column(self):
        """A word that would reach the edge from the cursor column moves down."""
        segments = split_from_cursor("alpha beta", 71, 80)
        # 0 + 5 + 71 < 80 so alpha fits; 5 + 4 + 71 >= 80 forces a break
        assert segments == ["alpha", "beta"]

    def test_first_word_moves_to_next_row(self):
        segments = split_from_cursor("unbreakable", 75, 80)
        assert segments == ["", "unbreakable"]

    def test_after_break_cursor_is_column_zero(self):
        segments = split_from_cursor("aaaa bbbb cccc dddd", 5, 12)
        assert segments == ["aaaa", "bbbb cccc", "dddd"]

    def test_break_uses_greater_or_equal(self):
        """Reaching the width exactly already breaks, unlike wrap_to_width."""
        assert split_from_cursor("abcde", 0, 5) == ["", "abcde"]
        assert wrap_to_width("abcde", 5) == ["abcde"]

    def test_leading_spaces_kept_on_first_word(self):
        assert split_from_cursor("   indented text", 0, 80) == ["   indented text"]

    def test_leading_spaces_only_on_first_word(self):
        segments = split_from_cursor("  one two three", 0, 10)
        assert segments[0].startswith("  one")
        assert not any(segment.startswith(" ") for segment in segments[1:])


class TestPrintWrapped:
    """Test drawing wrapped text onto a surface."""

    def _surface(self):
        surface = BufferSurface(SurfaceConfig(width=20, height=6, min_width=1, min_height=1))
        surface.start()
        return surface

    def test_prints_from_cursor(self):
        surface = self._surface()
        handle = surface.create_handle(0, 0, 20, 6)
        surface.set_cursor_position(handle, 3, 1)
        print_wrapped(surface, "hi there", handle=handle)
        assert surface.handle_lines(handle)[1].rstrip() == "   hi there"

    def test_wraps_onto_following_rows(self):
        surface = self._surface()
        handle = surface.create_handle(0, 0, 20, 6)
        print_wrapped(surface, "the quick brown fox jumps over the lazy dog", handle=handle)
        lines = [line.rstrip() for line in surface.handle_lines(handle)]
        assert lines[:3] == ["the quick brown fox", "jumps over the lazy", "dog"]

    def test_continues_partially_used_row(self):
        surface = self._surface()
        handle = surface.create_handle(0, 0, 20, 6)
        surface.write(handle, "Name:")
        print_wrapped(surface, " alpha beta gamma", handle=handle)
        lines = [line.rstrip() for line in surface.handle_lines(handle)]
        assert lines[0] == "Name: alpha beta"
        assert lines[1] == "gamma"

    def test_newline_flag_moves_to_next_row(self):
        surface = self._surface()
        handle = surface.create_handle(0, 0, 20, 6)
        print_wrapped(surface, "first", flags=TextFlag.NL, handle=handle)
        assert surface.get_cursor(handle) == (0, 1)

    def test_colour_and_flags_recorded(self):
        surface = self._surface()
        handle = surface.create_handle(0, 0, 20, 6)
        print_wrapped(surface, "red", Colour.RED, TextFlag.BOLD, handle)
        assert handle.colours[0, 0] == Colour.RED.value
        assert handle.flags[0, 2] == int(TextFlag.BOLD)

    def test_empty_text_draws_nothing(self):
        surface = self._surface()
        handle = surface.create_handle(0, 0, 20, 6)
        print_wrapped(surface, "", handle=handle)
        assert surface.get_cursor(handle) == (0, 0)
