"""
Unit tests for font size selection and line wrapping.
"""
import pytest

from ogp_service.services.text_fit import (
    ELLIPSIS,
    SUBTITLE,
    TITLE_ONLY,
    TITLE_WITH_SUBTITLE,
    FittingEnvelope,
    calculate_font_size,
    chars_per_line,
    clamp_lines,
    fit_text,
    layout_texts,
)

SAMPLE_TEXTS = [
    "",
    "A",
    "Lost Logs",
    "SCP-1048-JP",
    "The Clockwork Heart",
    "x" * 50,
    "財団" * 40,
    "a very long title " * 30,
]


class TestCalculateFontSize:
    """Test class for font size selection."""

    def test_empty_text_returns_min_size(self):
        """Test that empty text gets the minimum size."""
        # Act & Assert
        assert calculate_font_size("", TITLE_ONLY) == TITLE_ONLY.min_size
        assert calculate_font_size("", SUBTITLE) == SUBTITLE.min_size

    def test_short_text_uses_max_size(self):
        """Test that text under the width keeps the maximum size."""
        # Act
        # 9 chars * 110 * 0.7 = 693px, under the 700px width
        size = calculate_font_size("Lost Logs", TITLE_ONLY)

        # Assert
        assert size == 110

    def test_long_text_clamped_to_min_size(self):
        """Test that very long text is clamped to the minimum size."""
        # Act
        size = calculate_font_size("x" * 100, TITLE_ONLY)

        # Assert
        assert size == 60

    def test_scales_between_limits(self):
        """Test proportional scaling between the limits."""
        # Act
        # 20 chars * 70 * 0.7 = 980px -> scale 700/980
        size = calculate_font_size("y" * 20, SUBTITLE)

        # Assert
        assert size == pytest.approx(70 * 700 / 980)
        assert SUBTITLE.min_size < size < SUBTITLE.max_size

    @pytest.mark.parametrize("envelope", [TITLE_ONLY, TITLE_WITH_SUBTITLE, SUBTITLE])
    @pytest.mark.parametrize("text", SAMPLE_TEXTS)
    def test_always_within_envelope(self, text, envelope):
        """Test that the size always stays inside the envelope."""
        # Act
        size = calculate_font_size(text, envelope)

        # Assert
        assert envelope.min_size <= size <= envelope.max_size

    def test_longer_text_never_larger(self):
        """Test that longer text never gets a larger size."""
        # Act
        sizes = [calculate_font_size("z" * n, TITLE_ONLY) for n in range(1, 60)]

        # Assert
        assert all(a >= b for a, b in zip(sizes, sizes[1:]))


class TestClampLines:
    """Test class for line wrapping and truncation."""

    def test_empty_text_has_no_lines(self):
        """Test that empty text yields no lines."""
        # Act & Assert
        assert clamp_lines("", 110, TITLE_ONLY) == []

    def test_text_that_fits_is_unchanged(self):
        """Test that text fitting one line is returned as is."""
        # Act & Assert
        assert clamp_lines("Lost Logs", 110, TITLE_ONLY) == ["Lost Logs"]

    def test_splits_mid_word_at_fixed_width(self):
        """Test fixed-width splitting without word boundaries."""
        # Act
        # 700 / (110 * 0.7) -> 9 chars per line
        lines = clamp_lines("abcdefghijklmnopqr", 110, TITLE_ONLY)

        # Assert
        assert lines == ["abcdefghi", "jklmnopqr"]

    def test_truncates_with_ellipsis(self):
        """Test truncation of overlong text to exactly the line budget."""
        # Arrange
        text = "x" * 100

        # Act
        lines = clamp_lines(text, 60, TITLE_ONLY)

        # Assert
        per_line = chars_per_line(60, TITLE_ONLY)  # 700 / 42 -> 16
        assert per_line == 16
        assert len(lines) == 4
        joined = "".join(lines)
        assert joined.endswith(ELLIPSIS)
        assert len(joined) == per_line * TITLE_ONLY.max_lines
        assert joined == "x" * (per_line * 4 - 3) + ELLIPSIS

    def test_single_line_envelope(self):
        """Test truncation in a one-line envelope."""
        # Act
        lines = clamp_lines("abcdefghijklmnopqrstuvwxyz", 110, TITLE_WITH_SUBTITLE)

        # Assert
        assert lines == ["abcdef..."]

    @pytest.mark.parametrize("envelope", [TITLE_ONLY, TITLE_WITH_SUBTITLE, SUBTITLE])
    @pytest.mark.parametrize("text", SAMPLE_TEXTS)
    def test_never_exceeds_max_lines(self, text, envelope):
        """Test that the line count never exceeds the envelope."""
        # Act
        fitted = fit_text(text, envelope)

        # Assert
        assert len(fitted.lines) <= envelope.max_lines

    def test_degenerate_envelope_terminates(self):
        """Test that an envelope narrower than one glyph still wraps."""
        # Arrange
        tiny = FittingEnvelope(min_size=500, max_size=500, max_lines=1, max_width=10)

        # Act & Assert
        assert chars_per_line(500, tiny) == 1
        assert len(clamp_lines("hello", 500, tiny)) == 1


class TestLayoutTexts:
    """Test class for role-specific envelopes."""

    def test_title_only_uses_four_line_envelope(self):
        """Test the title-only envelope."""
        # Act
        title, subtitle = layout_texts("Lost Logs", None)

        # Assert
        assert subtitle is None
        assert title.font_size == 110
        assert title.lines == ["Lost Logs"]

    def test_subtitle_shrinks_title_to_one_line(self):
        """Test that a subtitle limits the title to one line."""
        # Act
        title, subtitle = layout_texts("t" * 40, "The Clockwork Heart")

        # Assert
        assert title.font_size == TITLE_WITH_SUBTITLE.min_size
        assert len(title.lines) == 1
        assert subtitle is not None
        assert 1 <= len(subtitle.lines) <= SUBTITLE.max_lines
        assert SUBTITLE.min_size <= subtitle.font_size <= SUBTITLE.max_size

    def test_empty_subtitle_treated_as_absent(self):
        """Test that an empty subtitle is ignored."""
        # Act
        title, subtitle = layout_texts("Lost Logs", "")

        # Assert
        assert subtitle is None
        assert title.font_size == 110
