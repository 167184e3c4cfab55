"""
bar_chart.py
Fixed-width text bars and display-width aware padding for the gist report.

Bars are made of full blocks followed by light shade so they line up in the
monospace gist view. The filled length is round-half-up of percent * width,
clamped to [0, width].
"""

import math

import wcwidth

FILLED = "█"
EMPTY = "░"
BAR_WIDTH = 21


def filled_length(percent: float, width: int) -> int:
    # round half up, not Python's banker's rounding
    n = int(math.floor(percent / 100.0 * width + 0.5))
    return max(0, min(width, n))


def render_bar(percent: float, width: int = BAR_WIDTH) -> str:
    if width <= 0:
        raise ValueError(f"bar width must be positive, got {width}")
    n = filled_length(percent, width)
    return FILLED * n + EMPTY * (width - n)


def display_width(s: str) -> int:
    w = wcwidth.wcswidth(s)
    # non-printable characters make wcswidth return -1
    return w if w >= 0 else len(s)


def pad_to_width(s: str, target: int, align: str = 'left') -> str:
    """
    Pad `s` with spaces to display width `target`.
    Emoji count as two columns. Strings already wider than target are returned as-is.
    """
    pad = target - display_width(s)
    if pad <= 0:
        return s
    if align == 'right':
        return " " * pad + s
    return s + " " * pad
