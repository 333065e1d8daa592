"""Recolor instruction sent to the generation model.

The instruction is fixed apart from the target color: recolor only the
white region of the mask (the second image) in the original photo, keep
texture, plaster, shadows and light intact, and change nothing outside the
mask.  The German wording is the service's original; an English variant is
available for vendors or models that follow English instructions better.

Usage
-----
::

    prompt = build_recolor_prompt("Ochre yellow RAL 1024")
    prompt_en = build_recolor_prompt("sage green", language="en")
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Instruction templates.  ``{color}`` is the only placeholder.
# ---------------------------------------------------------------------------

_TEMPLATES: dict[str, str] = {
    "de": (
        "Du bist ein Meister der Fassaden-Retusche.\n"
        "Ändere exakt nur den weißen Bereich in der Maske (zweites Bild) des "
        "Originalfotos in die Farbe {color}.\n"
        "Behalte alle Texturen, Putz, Schatten und Licht perfekt bei, "
        "photorealistisch und nahtlos.\n"
        "Ändere nichts außerhalb der Maske!"
    ),
    "en": (
        "You are a master of facade retouching.\n"
        "Change exactly and only the white area of the mask (second image) in the "
        "original photo to the color {color}.\n"
        "Keep every texture, the plaster, all shadows and the lighting perfectly "
        "intact, photorealistic and seamless.\n"
        "Do not change anything outside the mask!"
    ),
}

SUPPORTED_LANGUAGES: tuple[str, ...] = tuple(_TEMPLATES)


def build_recolor_prompt(target_color: str, language: str = "de") -> str:
    """Return the recolor instruction for *target_color*.

    Args:
        target_color: Free-text color description (e.g. ``"RAL 9010"``).
            Surrounding whitespace is stripped.
        language: ``"de"`` (default) or ``"en"``.

    Returns:
        The instruction text with the color substituted.

    Raises:
        ValueError: If *language* has no template.
    """
    try:
        template = _TEMPLATES[language]
    except KeyError:
        raise ValueError(
            f"Unsupported prompt language {language!r}; expected one of {SUPPORTED_LANGUAGES}"
        ) from None
    return template.format(color=target_color.strip())
