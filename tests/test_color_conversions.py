"""Tests for color_conversions.py"""
import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

import itertools
import pytest
from color_conversions import (
    BLACK, WHITE, RGB, hex_to_rgb, rgb_to_hex, rgb_to_hsl, relative_luminance,
    contrast_ratio, calculate_ratio, wcag_contrast_ratio, wcag_grade,
    meets_contrast_guidelines,
)


# ── Hex / RGB ─────────────────────────────────────────────────────────────────
def test_hex_to_rgb_full():
    assert hex_to_rgb("#3b82f6") == (59, 130, 246)

def test_hex_to_rgb_no_hash_upper():
    assert hex_to_rgb("3B82F6") == RGB(59, 130, 246)

def test_hex_to_rgb_named_fields():
    rgb = hex_to_rgb("#336699")
    assert (rgb.r, rgb.g, rgb.b) == (51, 102, 153)

@pytest.mark.parametrize("bad", ["#fff", "zzzzzz", "#12345", "#1234567", "#336699\n", " #336699", "", None, 0x336699])
def test_hex_to_rgb_malformed_returns_none(bad):
    assert hex_to_rgb(bad) is None

def test_rgb_to_hex_clamps():
    assert rgb_to_hex(-10, 300, 0) == "#00ff00"

def test_rgb_hex_roundtrip():
    for r, g, b in itertools.product(range(0, 256, 17), repeat=3):
        assert hex_to_rgb(rgb_to_hex(r, g, b)) == (r, g, b)


# ── HSL ───────────────────────────────────────────────────────────────────────
@pytest.mark.parametrize("rgb,expected", [
    ((255, 0, 0),   (0, 100, 50)),
    ((0, 255, 0),   (120, 100, 50)),
    ((0, 0, 255),   (240, 100, 50)),
    ((255, 0, 255), (300, 100, 50)),
    ((51, 102, 153), (210, 50, 40)),
])
def test_rgb_to_hsl(rgb, expected):
    h, s, l = rgb_to_hsl(rgb)
    assert (h, s, l) == pytest.approx(expected)

def test_rgb_to_hsl_grey_has_no_hue():
    hsl = rgb_to_hsl((128, 128, 128))
    assert hsl.h == 0
    assert hsl.s == 0
    assert hsl.l == pytest.approx(128 / 255 * 100)

def test_rgb_to_hsl_light_saturation_branch():
    # l >= 0.5 uses (max - min) / (2 - max - min)
    h, s, l = rgb_to_hsl((255, 204, 204))
    assert l == pytest.approx(90)
    assert s == pytest.approx(100)
    assert h == pytest.approx(0)


# ── WCAG ─────────────────────────────────────────────────────────────────────
def test_relative_luminance_black():
    assert relative_luminance(0, 0, 0) == 0

def test_relative_luminance_white():
    assert relative_luminance(255, 255, 255) == pytest.approx(1.0)

def test_contrast_white_on_black():
    assert contrast_ratio(WHITE, BLACK) == pytest.approx(21.0)

def test_contrast_is_ordered():
    assert contrast_ratio(BLACK, WHITE) == pytest.approx(1 / 21)

@pytest.mark.parametrize("a,b", [
    ((0, 0, 0), (255, 255, 255)),
    ((51, 102, 153), (255, 204, 0)),
    ((12, 200, 7), (12, 200, 7)),
    ((153, 0, 51), (0, 153, 255)),
])
def test_calculate_ratio_symmetric(a, b):
    assert calculate_ratio(a, b) == pytest.approx(calculate_ratio(b, a))
    assert calculate_ratio(a, b) >= 1

def test_calculate_ratio_same_colour():
    assert calculate_ratio((59, 130, 246), (59, 130, 246)) == 1.0

def test_wcag_contrast_ratio_rounded():
    assert wcag_contrast_ratio("#000000", "#ffffff") == 21.0
    assert wcag_contrast_ratio("#ffffff", "#000000") == 21.0

def test_wcag_contrast_ratio_invalid():
    with pytest.raises(ValueError):
        wcag_contrast_ratio("#fff", "#000000")

def test_wcag_grades():
    assert wcag_grade(21.0) == "AAA"
    assert wcag_grade(4.5)  == "AA"
    assert wcag_grade(3.0)  == "AA-Large"
    assert wcag_grade(2.5)  == "Fail"


# ── Guidelines ────────────────────────────────────────────────────────────────
def test_guidelines_all_pass():
    result = meets_contrast_guidelines("#000000", "#FFFFFF")
    assert result == {"AA": True, "AALarge": True, "AAA": True, "AAALarge": True}

def test_guidelines_all_fail():
    assert not any(meets_contrast_guidelines("#777777", "#888888").values())

def test_guidelines_large_text_only():
    # #767676 on white is ~4.54:1, #949494 is ~3.03:1
    result = meets_contrast_guidelines("#949494", "#FFFFFF")
    assert result == {"AA": False, "AALarge": True, "AAA": False, "AAALarge": False}
