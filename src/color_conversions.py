#!/usr/bin/env python3
"""
Palette Studio – Colour conversions
Hex / RGB / HSL conversion, relative luminance and WCAG contrast ratios.
"""
from __future__ import annotations

import re
from typing import Dict, NamedTuple, Optional, Sequence

_HEX_RE = re.compile(r"^#?([a-f\d]{2})([a-f\d]{2})([a-f\d]{2})$", re.IGNORECASE)


# ── Data models ───────────────────────────────────────────────────────────────
class RGB(NamedTuple):
    r: int
    g: int
    b: int


class HSL(NamedTuple):
    h: float
    s: float
    l: float


BLACK = RGB(0, 0, 0)
WHITE = RGB(255, 255, 255)


# ── Hex / RGB / HSL ───────────────────────────────────────────────────────────
def hex_to_rgb(hex_color: str) -> Optional[RGB]:
    """Parse a #rrggbb or rrggbb string. Returns None for any other shape."""
    if not isinstance(hex_color, str):
        return None
    match = _HEX_RE.fullmatch(hex_color)
    if match is None:
        return None
    r, g, b = (int(pair, 16) for pair in match.groups())
    return RGB(r, g, b)


def rgb_to_hex(r: int, g: int, b: int) -> str:
    r, g, b = max(0, min(255, r)), max(0, min(255, g)), max(0, min(255, b))
    return f"#{r:02x}{g:02x}{b:02x}"


def rgb_to_hsl(rgb: Sequence[int]) -> HSL:
    """Convert (r, g, b) to HSL with h in degrees and s, l in percent."""
    r1, g1, b1 = rgb[0] / 255, rgb[1] / 255, rgb[2] / 255
    max_c = max(r1, g1, b1)
    min_c = min(r1, g1, b1)

    l = (max_c + min_c) / 2
    s = 0.0
    h = 0.0

    if max_c != min_c:
        delta = max_c - min_c
        if l < 0.5:
            s = delta / (max_c + min_c)
        else:
            s = delta / (2.0 - max_c - min_c)

        if r1 == max_c:
            h = (g1 - b1) / delta
        elif g1 == max_c:
            h = 2.0 + (b1 - r1) / delta
        else:
            h = 4.0 + (r1 - g1) / delta

    h *= 60
    if h < 0:
        h += 360
    return HSL(h, s * 100, l * 100)


# ── WCAG accessibility ────────────────────────────────────────────────────────
def _linearize(value: int) -> float:
    v = value / 255
    return v / 12.92 if v <= 0.03928 else ((v + 0.055) / 1.055) ** 2.4


def relative_luminance(r: int, g: int, b: int) -> float:
    return 0.2126 * _linearize(r) + 0.7152 * _linearize(g) + 0.0722 * _linearize(b)


def contrast_ratio(rgb1: Sequence[int], rgb2: Sequence[int]) -> float:
    """(L1 + 0.05) / (L2 + 0.05) in argument order; below 1 when rgb1 is darker."""
    return (relative_luminance(*rgb1[:3]) + 0.05) / (relative_luminance(*rgb2[:3]) + 0.05)


def calculate_ratio(color1: Sequence[int], color2: Sequence[int]) -> float:
    """Contrast ratio with the lighter colour on top, so always >= 1."""
    l1 = relative_luminance(*color1[:3])
    l2 = relative_luminance(*color2[:3])
    if l1 > l2:
        return (l1 + 0.05) / (l2 + 0.05)
    return (l2 + 0.05) / (l1 + 0.05)


def wcag_contrast_ratio(color1: str, color2: str) -> float:
    """Return WCAG 2.1 contrast ratio (1–21) between two hex strings."""
    rgb1, rgb2 = hex_to_rgb(color1), hex_to_rgb(color2)
    if rgb1 is None or rgb2 is None:
        raise ValueError(f"Invalid hex color: {color1 if rgb1 is None else color2!r}")
    return round(calculate_ratio(rgb1, rgb2), 2)


def wcag_grade(ratio: float) -> str:
    if ratio >= 7.0:  return "AAA"
    if ratio >= 4.5:  return "AA"
    if ratio >= 3.0:  return "AA-Large"
    return "Fail"


def meets_contrast_guidelines(color1: str, color2: str) -> Dict[str, bool]:
    """Pass/fail per WCAG level for text in color2 on color1 (or vice versa)."""
    ratio = wcag_contrast_ratio(color1, color2)
    return {
        "AA": ratio >= 4.5,
        "AALarge": ratio >= 3.0,
        "AAA": ratio >= 7.0,
        "AAALarge": ratio >= 4.5,
    }
