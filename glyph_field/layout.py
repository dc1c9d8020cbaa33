# SPDX-FileCopyrightText: Copyright (c) 2025 NBEL
# SPDX-License-Identifier: Apache-2.0
#
# Text layout: rest positions for every glyph and the mirror pair table

from typing import Callable, List, Tuple

import numpy as np

from .config import FieldConfig

# measure(text) -> advance width in pixels
Measure = Callable[[str], float]


def font_size_for(width: float, config: FieldConfig) -> float:
    """Font size that fits the text to the viewport width."""
    return min(config.max_font_size, width / config.font_width_divisor)


def fixed_advance_metrics(font_size: float) -> Measure:
    """
    Headless text metrics: every character advances 0.6 * font size.

    Used when no font backend is available (tests, headless runs).
    """
    advance = 0.6 * font_size

    def measure(text: str) -> float:
        return len(text) * advance

    return measure


def layout_text(
    text: str,
    width: float,
    height: float,
    measure: Measure,
    font_size: float,
    spacing_ratio: float = 0.5,
) -> Tuple[np.ndarray, List[str]]:
    """
    Center a line of text in the viewport, one rest position per glyph.

    The line is centered horizontally including the extra letter spacing
    and sits at half height. Spaces get a position too.

    Args:
        text: Text to lay out
        width: Viewport width in pixels
        height: Viewport height in pixels
        measure: Advance width of a string at the layout font size
        font_size: Layout font size in pixels
        spacing_ratio: Extra spacing between glyphs as a fraction of font size

    Returns:
        (rest, glyphs): rest is an array of shape (N, 2), glyphs a list of N characters
    """
    glyphs = list(text)
    n = len(glyphs)

    spacing = font_size * spacing_ratio
    total_width = measure(text)
    start_x = (width - (total_width + spacing * (n - 1))) / 2.0
    start_y = height / 2.0

    rest = np.zeros((n, 2), dtype=np.float64)
    for i in range(n):
        rest[i, 0] = start_x + measure(text[:i]) + spacing * i
        rest[i, 1] = start_y

    return rest, glyphs


def mirror_pairs(rest_x: np.ndarray, center_x: float, tolerance: float = 1e-6) -> np.ndarray:
    """
    Pair each left-of-center glyph with its horizontal mirror.

    A glyph at rest x < center_x is paired with the first unclaimed glyph
    whose rest x equals 2 * center_x - x within `tolerance`. Glyphs with no
    match, and every glyph at or right of center, get -1.

    Args:
        rest_x: Array of shape (N,) with rest x coordinates
        center_x: Mirror axis
        tolerance: Absolute matching tolerance in pixels

    Returns:
        Integer array of shape (N,) with partner indices or -1
    """
    n = len(rest_x)
    pairs = np.full(n, -1, dtype=np.int64)

    for i in range(n):
        if rest_x[i] >= center_x:
            continue
        target = 2.0 * center_x - rest_x[i]
        matches = np.flatnonzero(np.abs(rest_x - target) <= tolerance)
        matches = matches[~np.isin(matches, pairs)]
        if len(matches) > 0:
            pairs[i] = matches[0]

    return pairs
