"""
Geometry of the inline text editor overlay.

The host gives a canvas point where the text *baseline* starts; the
overlay widget must be placed so that its text lands exactly there.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

# Appended while measuring, so typing does not scroll the entry.
MEASURE_SUFFIX = " "


@dataclass(frozen=True)
class Margins:
    left: int = 0
    top: int = 0
    right: int = 0
    bottom: int = 0


@dataclass(frozen=True)
class EditorRect:
    x: int
    y: int
    width: int


def measured_text(text: str) -> str:
    """Text actually passed to the shaping engine for width measurement."""
    return text + MEASURE_SUFFIX


def editor_rect(
    x: float,
    y: float,
    ascent: float,
    text_width: float,
    min_width: float,
    padding: Margins = Margins(),
    border: Margins = Margins(),
    margin: Margins = Margins(),
) -> EditorRect:
    """
    Compute the overlay widget rectangle.

    Args:
        x, y: Baseline origin of the text in widget coordinates.
        ascent: Font ascent in pixels.
        text_width: Shaped width of `measured_text(text)` in pixels.
        min_width: Lower bound for the resulting width.
        padding, border, margin: Frame of the entry widget around its text.

    Returns:
        Top-left corner of the entry widget and its width.
    """
    top = y - ascent
    left = int(x) - margin.left - border.left - padding.left
    top = int(top) - margin.top - border.top - padding.top

    fit_width = math.ceil(text_width) + padding.left + padding.right
    width = max(fit_width, math.ceil(min_width))
    return EditorRect(x=left, y=top, width=width)
