#!/usr/bin/env python3
"""
Palette Studio – Web-safe Palette Generator
Enumerate the web-safe palette, classify every colour pair by WCAG contrast and
export the result as JSON data, a utility stylesheet and a static HTML page.
"""
from __future__ import annotations

import argparse
import json
import logging
import math
import os
import sys
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from jinja2 import Environment, StrictUndefined, TemplateError, TemplateSyntaxError, UndefinedError

from color_conversions import (
    BLACK, WHITE, calculate_ratio, contrast_ratio, hex_to_rgb,
    meets_contrast_guidelines, relative_luminance, rgb_to_hsl,
    wcag_contrast_ratio, wcag_grade,
)
from combinatorics import permutations

logger = logging.getLogger(__name__)

# ── Type aliases ──────────────────────────────────────────────────────────────
GuidelineClassifier = Callable[[str, str], Mapping[str, bool]]

HEX_TOKENS: Tuple[str, ...] = ("00", "33", "66", "99", "CC", "FF")
OUT_DIR = Path(os.environ.get("PALETTE_OUT_DIR", "public"))

DATA_FILE = "colors.json"
STYLESHEET_FILE = "colors.css"
MARKUP_FILE = "index.html"


class RenderError(Exception):
    """Raised when the markup template cannot be rendered."""


# ── Configuration ─────────────────────────────────────────────────────────────
@dataclass
class GeneratorConfig:
    tokens: Sequence[str] = HEX_TOKENS
    repeat: int = 3
    size: int = 3
    minimum_contrast: float = 10.0
    out_dir: Path = OUT_DIR


# ── Data models ───────────────────────────────────────────────────────────────
@dataclass(frozen=True)
class ContrastSummary:
    black: float
    white: float
    max: float
    text: str


@dataclass(frozen=True)
class ColorRecord:
    r: int
    g: int
    b: int
    hex: str
    h: float
    s: float
    l: float
    luminance: float
    contrast: ContrastSummary

    @property
    def rgb(self) -> Tuple[int, int, int]:
        return self.r, self.g, self.b

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class PairRecord:
    base_color: str
    accent_color: str
    contrast: float

    def to_dict(self) -> dict:
        return {
            "baseColor": self.base_color,
            "accentColor": self.accent_color,
            "contrast": self.contrast,
        }


@dataclass(frozen=True)
class ComboRecord:
    base_color: str
    accent_color: str
    contrast: ContrastSummary
    contrast_guidelines: Dict[str, bool]

    @property
    def passed_guidelines(self) -> List[str]:
        return [name for name, ok in self.contrast_guidelines.items() if ok]

    def to_dict(self) -> dict:
        return {
            "baseColor": self.base_color,
            "accentColor": self.accent_color,
            "contrast": asdict(self.contrast),
            "contrastGuidelines": dict(self.contrast_guidelines),
        }


@dataclass
class GenerationResult:
    colors: List[ColorRecord] = field(default_factory=list)
    sorted_colors: List[ColorRecord] = field(default_factory=list)
    combos: List[ComboRecord] = field(default_factory=list)
    pairs: List[PairRecord] = field(default_factory=list)
    contrast_counts: Dict[int, int] = field(default_factory=dict)

    @property
    def hexes(self) -> List[str]:
        return [c.hex for c in self.colors]

    def to_dict(self) -> dict:
        return {
            "combos": [c.to_dict() for c in self.combos],
            "colorCombinations": [p.to_dict() for p in self.pairs],
            "sorted": [c.to_dict() for c in self.sorted_colors],
            "contrastCounts": dict(self.contrast_counts),
        }


# ── Palette builder ───────────────────────────────────────────────────────────
def build_alphabet(tokens: Sequence[str] = HEX_TOKENS, repeat: int = 3) -> List[str]:
    """Each token repeated so a channel value can appear more than once per colour."""
    return list(tokens) * repeat


def generate_hexes(alphabet: Sequence[str], size: int = 3) -> List[str]:
    """Permute the alphabet `size` at a time into unique #rrggbb strings."""
    joined = ("#" + "".join(arrangement) for arrangement in permutations(alphabet, size))
    return list(dict.fromkeys(joined))


def build_color_record(hex_color: str) -> ColorRecord:
    rgb = hex_to_rgb(hex_color)
    if rgb is None:
        raise ValueError(f"Invalid hex color: {hex_color!r}")
    h, s, l = rgb_to_hsl(rgb)
    black = contrast_ratio(rgb, BLACK)
    white = contrast_ratio(WHITE, rgb)
    return ColorRecord(
        r=rgb.r, g=rgb.g, b=rgb.b,
        hex=hex_color,
        h=h, s=s, l=l,
        luminance=relative_luminance(*rgb),
        contrast=ContrastSummary(
            black=black,
            white=white,
            max=black if black > white else white,
            text="black" if black > white else "white",
        ),
    )


def build_palette(config: Optional[GeneratorConfig] = None) -> List[ColorRecord]:
    config = config or GeneratorConfig()
    alphabet = build_alphabet(config.tokens, config.repeat)
    hexes = generate_hexes(alphabet, config.size)
    logger.debug("alphabet of %d tokens -> %d unique colours", len(alphabet), len(hexes))
    return [build_color_record(h) for h in hexes]


def sort_palette(colors: Iterable[ColorRecord]) -> List[ColorRecord]:
    return sorted(colors, key=lambda c: (c.h, c.luminance, c.s))


# ── Pairwise classifier ───────────────────────────────────────────────────────
def cross_join(
    colors: Sequence[ColorRecord],
    classifier: GuidelineClassifier = meets_contrast_guidelines,
) -> List[ComboRecord]:
    """Every base × accent pair that passes at least one guideline."""
    combos: List[ComboRecord] = []
    for base in colors:
        for accent in colors:
            guidelines = dict(classifier(base.hex, accent.hex))
            if not any(guidelines.values()):
                continue
            combos.append(ComboRecord(
                base_color=base.hex,
                accent_color=accent.hex,
                contrast=base.contrast,
                contrast_guidelines=guidelines,
            ))
    return combos


def high_contrast_pairs(colors: Sequence[ColorRecord],
                        minimum_contrast: float = 10.0) -> List[PairRecord]:
    pairs: List[PairRecord] = []
    for base in colors:
        for accent in colors:
            ratio = calculate_ratio(base.rgb, accent.rgb)
            if ratio > minimum_contrast:
                pairs.append(PairRecord(base.hex, accent.hex, ratio))
    return pairs


def contrast_counts(pairs: Iterable[PairRecord]) -> Dict[int, int]:
    """Histogram of pairs keyed by the integer part of their contrast ratio."""
    counts: Dict[int, int] = {}
    for pair in pairs:
        key = math.floor(pair.contrast)
        counts[key] = counts.get(key, 0) + 1
    return counts


def group_by_base(combos: Iterable[ComboRecord]) -> Dict[str, List[ComboRecord]]:
    groups: Dict[str, List[ComboRecord]] = {}
    for combo in combos:
        groups.setdefault(combo.base_color, []).append(combo)
    return groups


def generate(config: Optional[GeneratorConfig] = None,
             classifier: GuidelineClassifier = meets_contrast_guidelines) -> GenerationResult:
    """Main factory – computes every derived structure for one run."""
    config = config or GeneratorConfig()
    colors = build_palette(config)
    combos = cross_join(colors, classifier)
    pairs = high_contrast_pairs(colors, config.minimum_contrast)
    logger.debug("%d combos, %d pairs above %.1f:1", len(combos), len(pairs), config.minimum_contrast)
    return GenerationResult(
        colors=colors,
        sorted_colors=sort_palette(colors),
        combos=combos,
        pairs=pairs,
        contrast_counts=contrast_counts(pairs),
    )


# ── Export functions ──────────────────────────────────────────────────────────
DEFAULT_TEMPLATE = """\
<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <title>{{ title }}</title>
  <link rel="stylesheet" href="{{ stylesheet }}">
</head>
<body>
{% for base, combos in groups.items() %}
  <section class="palette bg-{{ base | hexless }}">
    <h2 class="primary" style="color:{{ combos[0].contrast.text }}">{{ base }}</h2>
{% for combo in combos %}
    <button class="colorBlock bg-{{ combo.accent_color | hexless }}" data-color="{{ combo.accent_color }}" title="{{ combo.passed_guidelines | join(', ') }}"></button>
{% endfor %}
  </section>
{% endfor %}
  <script>
    document.querySelectorAll('.colorBlock').forEach(function (block) {
      block.addEventListener('click', function (event) {
        var target = event.currentTarget;
        var primary = target.parentElement.querySelector('.primary');
        primary.style.color = target.dataset.color;
      });
    });
  </script>
</body>
</html>
"""


def _hexless(hex_color: str) -> str:
    return hex_color.lstrip("#")


def to_stylesheet(hexes: Iterable[str]) -> str:
    return "".join(
        f".bg-{_hexless(c)}{{background-color:{c};}} .color-{_hexless(c)}{{color:{c};}}\n"
        for c in hexes
    )


def to_data_json(result: GenerationResult) -> str:
    return json.dumps(result.to_dict(), separators=(",", ":"))


def render_markup(result: GenerationResult, template: Optional[Path] = None,
                  title: str = "Accessible Colour Combinations") -> str:
    env = Environment(undefined=StrictUndefined, autoescape=True,
                      trim_blocks=True, lstrip_blocks=True)
    env.filters["hexless"] = _hexless
    source = template.read_text(encoding="utf-8") if template else DEFAULT_TEMPLATE
    try:
        return env.from_string(source).render(
            title=title,
            stylesheet=STYLESHEET_FILE,
            groups=group_by_base(result.combos),
            colors=result.sorted_colors,
            pairs=result.pairs,
            contrast_counts=result.contrast_counts,
        )
    except UndefinedError as e:
        raise RenderError(f"Missing variable in template: {e}") from e
    except TemplateSyntaxError as e:
        raise RenderError(f"Invalid template syntax: {e}") from e
    except TemplateError as e:
        raise RenderError(f"Template rendering failed: {e}") from e


def _write_atomic(path: Path, text: str) -> None:
    tmp = path.with_name(path.name + ".tmp")
    try:
        tmp.write_text(text, encoding="utf-8")
        os.replace(tmp, path)
    except OSError:
        tmp.unlink(missing_ok=True)
        raise


def write_assets(result: GenerationResult, out_dir: Path = OUT_DIR,
                 template: Optional[Path] = None) -> List[Path]:
    """Render every asset in memory, then write them; nothing is written on a render failure."""
    rendered = {
        DATA_FILE: to_data_json(result),
        STYLESHEET_FILE: to_stylesheet(result.hexes),
        MARKUP_FILE: render_markup(result, template),
    }
    out_dir.mkdir(parents=True, exist_ok=True)
    written: List[Path] = []
    for name, text in rendered.items():
        path = out_dir / name
        _write_atomic(path, text)
        logger.info("wrote %s (%d bytes)", path, len(text.encode("utf-8")))
        written.append(path)
    return written


# ── CLI ───────────────────────────────────────────────────────────────────────
def _config_from_args(args: argparse.Namespace) -> GeneratorConfig:
    config = GeneratorConfig(minimum_contrast=args.min_contrast)
    if getattr(args, "tokens", None):
        config.tokens = tuple(args.tokens)
    if getattr(args, "repeat", None) is not None:
        config.repeat = args.repeat
    if getattr(args, "out", None) is not None:
        config.out_dir = args.out
    return config


def _print_counts(counts: Mapping[int, int]) -> None:
    for key in sorted(counts):
        print(f"    {key:>2}:1  {counts[key]}")


def main(argv: Optional[List[str]] = None) -> None:
    ap = argparse.ArgumentParser(
        prog="palette",
        description="Palette Studio – Web-safe Palette Generator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
examples:
  palette generate --out public
  palette generate --min-contrast 12 --template page.html.j2
  palette contrast '#ffffff' '#336699'
  palette stats
""",
    )
    ap.add_argument("-v", "--verbose", action="store_true")
    sub = ap.add_subparsers(dest="cmd", required=True)

    p_gen = sub.add_parser("generate", help="Generate colors.json, colors.css and index.html")
    p_gen.add_argument("--out", type=Path, default=None)
    p_gen.add_argument("--min-contrast", type=float, default=10.0)
    p_gen.add_argument("--template", type=Path, default=None)
    p_gen.add_argument("--tokens", nargs="+", default=None)
    p_gen.add_argument("--repeat", type=int, default=None)

    p_con = sub.add_parser("contrast", help="Contrast ratio between two colours")
    p_con.add_argument("color1")
    p_con.add_argument("color2")

    p_st = sub.add_parser("stats", help="Palette size and contrast histogram")
    p_st.add_argument("--min-contrast", type=float, default=10.0)

    args = ap.parse_args(argv)
    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")

    if args.cmd == "generate":
        config = _config_from_args(args)
        try:
            result = generate(config)
            paths = write_assets(result, config.out_dir, args.template)
        except (RenderError, ValueError, OSError) as e:
            sys.exit(f"❌ generation failed: {e}")
        print(f"🎨  {len(result.colors)} colours, {len(result.combos)} combos, "
              f"{len(result.pairs)} pairs above {config.minimum_contrast}:1")
        for path in paths:
            print(f"    ✅ {path}")

    elif args.cmd == "contrast":
        try:
            ratio = wcag_contrast_ratio(args.color1, args.color2)
        except ValueError as e:
            sys.exit(f"❌ {e}")
        grade = wcag_grade(ratio)
        print(f"ratio {ratio}:1  grade={grade}")
        print(f"AA-normal  (≥4.5): {'✅' if ratio>=4.5 else '❌'}")
        print(f"AA-large   (≥3.0): {'✅' if ratio>=3.0 else '❌'}")
        print(f"AAA-normal (≥7.0): {'✅' if ratio>=7.0 else '❌'}")

    elif args.cmd == "stats":
        config = _config_from_args(args)
        colors = build_palette(config)
        pairs = high_contrast_pairs(colors, config.minimum_contrast)
        print(f"colours: {len(colors)}")
        print(f"pairs above {config.minimum_contrast}:1: {len(pairs)}")
        _print_counts(contrast_counts(pairs))


if __name__ == "__main__":
    main()
