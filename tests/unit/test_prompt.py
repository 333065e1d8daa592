"""Unit tests for the recolor instruction builder."""

import pytest

from visionai.core.prompt import SUPPORTED_LANGUAGES, build_recolor_prompt


class TestBuildRecolorPrompt:
    """Tests for build_recolor_prompt."""

    def test_contains_target_color(self):
        """The color is substituted into the instruction."""
        prompt = build_recolor_prompt("RAL 7016 Anthrazitgrau")
        assert "in die Farbe RAL 7016 Anthrazitgrau." in prompt

    def test_color_is_stripped(self):
        """Surrounding whitespace does not leak into the instruction."""
        assert "Farbe ocker." in build_recolor_prompt("  ocker \n")

    def test_german_instruction_restricts_to_mask(self):
        """The default instruction limits edits to the mask."""
        prompt = build_recolor_prompt("weiß")
        assert "weißen Bereich in der Maske (zweites Bild)" in prompt
        assert "Ändere nichts außerhalb der Maske!" in prompt
        assert "Schatten und Licht" in prompt

    def test_english_instruction(self):
        """The English template carries the same constraints."""
        prompt = build_recolor_prompt("sage green", language="en")
        assert "to the color sage green." in prompt
        assert "white area of the mask (second image)" in prompt
        assert "Do not change anything outside the mask!" in prompt

    def test_is_deterministic(self):
        """Same input, same output."""
        assert build_recolor_prompt("blue") == build_recolor_prompt("blue")

    def test_only_color_varies(self):
        """Two prompts differ only where the color is placed."""
        a = build_recolor_prompt("COLOR_A")
        b = build_recolor_prompt("COLOR_B")
        assert a.replace("COLOR_A", "X") == b.replace("COLOR_B", "X")

    def test_braces_in_color_are_literal(self):
        """Format-like text in the color is not interpreted."""
        assert "{0}" in build_recolor_prompt("{0}")

    def test_unknown_language_raises(self):
        """Languages without a template raise ValueError."""
        with pytest.raises(ValueError, match="Unsupported prompt language"):
            build_recolor_prompt("red", language="fr")

    def test_supported_languages(self):
        assert set(SUPPORTED_LANGUAGES) == {"de", "en"}
