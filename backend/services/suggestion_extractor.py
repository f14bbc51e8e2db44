"""
Suggestion Extractor - Structured signals from freeform design suggestions

Parses the generative-text output to pull the heading, hex color codes and
style/font keywords used to refine later provider queries, and derives the
color palette returned to the client.

The extractor never raises: on empty or unmatched input it returns empty
containers and the default heading.
"""

import colorsys
import random
import re
from typing import Callable, Dict, Iterable, List, Optional

from backend.models.schema import DEFAULT_HEADING, ExtractedSignals

MAX_HEX_CODES = 5
MAX_PALETTE_SIZE = 5
MIN_PALETTE_SIZE = 3

HEX_COLOR_RE = re.compile(r"(?<![\w&])#(?:[0-9A-Fa-f]{6}|[0-9A-Fa-f]{3})(?![0-9A-Za-z])")
BARE_HEX_RE = re.compile(r"^#?(?:[0-9A-Fa-f]{6}|[0-9A-Fa-f]{3})$")
HEADING_RE = re.compile(r"^\s*#{1,2}\s+(.+?)\s*#*\s*$")
COLOR_NAME_RE = re.compile(
    r"\b(red|blue|green|yellow|purple|orange|pink|brown|gray|grey|black|white)\b",
    re.IGNORECASE,
)

NAMED_COLORS: Dict[str, List[str]] = {
    "red": ["#FF0000", "#DC143C", "#B22222"],
    "blue": ["#0000FF", "#1E90FF", "#4169E1"],
    "green": ["#008000", "#32CD32", "#3CB371"],
    "yellow": ["#FFD700", "#FFFF00", "#FFA500"],
    "purple": ["#800080", "#8A2BE2", "#9400D3"],
    "orange": ["#FFA500", "#FF4500", "#FF6347"],
    "pink": ["#FFC0CB", "#FF69B4", "#FF1493"],
    "brown": ["#8B4513", "#A52A2A", "#D2691E"],
    "gray": ["#808080", "#A9A9A9", "#696969"],
    "grey": ["#808080", "#A9A9A9", "#696969"],
    "black": ["#000000"],
    "white": ["#FFFFFF"],
}

STYLE_VOCABULARY = (
    "minimalist", "minimal", "modern", "vintage", "retro", "flat", "brutalist",
    "art deco", "art nouveau", "bauhaus", "swiss", "scandinavian", "geometric",
    "organic", "playful", "luxury", "elegant", "bold", "grunge", "futuristic",
    "corporate", "hand-drawn", "watercolor", "neumorphism", "glassmorphism",
    "skeuomorphic", "abstract", "monochrome", "pastel", "industrial", "bohemian",
    "editorial", "y2k", "memphis", "material design",
)

FONT_VOCABULARY = (
    "serif", "sans-serif", "slab serif", "script", "display", "monospace",
    "helvetica", "inter", "roboto", "open sans", "montserrat", "lato", "poppins",
    "playfair display", "merriweather", "garamond", "futura", "didot", "bodoni",
    "proxima nova", "source sans pro", "raleway", "nunito", "oswald", "georgia",
    "baskerville", "avenir", "gotham", "work sans", "dm sans", "space grotesk",
)


def _term_pattern(term: str) -> "re.Pattern[str]":
    body = r"\s+".join(re.escape(word) for word in term.split())
    return re.compile(rf"(?<![\w-]){body}(?![\w-])", re.IGNORECASE)


_STYLE_PATTERNS = [(term, _term_pattern(term)) for term in STYLE_VOCABULARY]
_FONT_PATTERNS = [(term, _term_pattern(term)) for term in FONT_VOCABULARY]


def _unique_ci(values: Iterable[str]) -> List[str]:
    """Deduplicate case-insensitively, keeping first spelling and order."""
    seen = set()
    unique = []
    for value in values:
        key = value.upper()
        if key not in seen:
            seen.add(key)
            unique.append(value)
    return unique


# ============================================================================
# COLOR THEORY
# ============================================================================

def _hex_to_rgb(hex_code: str):
    digits = hex_code.lstrip("#")
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    return tuple(int(digits[i:i + 2], 16) / 255.0 for i in (0, 2, 4))


def _rgb_to_hex(rgb) -> str:
    return "#" + "".join(f"{round(max(0.0, min(1.0, c)) * 255):02X}" for c in rgb)


def rotate_hue(hex_code: str, degrees: float) -> str:
    h, l, s = colorsys.rgb_to_hls(*_hex_to_rgb(hex_code))
    return _rgb_to_hex(colorsys.hls_to_rgb((h + degrees / 360.0) % 1.0, l, s))


def adjust_lightness(hex_code: str, amount: float) -> str:
    """Move lightness toward white (amount > 0) or black (amount < 0)."""
    h, l, s = colorsys.rgb_to_hls(*_hex_to_rgb(hex_code))
    l = l + (1.0 - l) * amount if amount >= 0 else l * (1.0 + amount)
    return _rgb_to_hex(colorsys.hls_to_rgb(h, l, s))


def complementary_colors(base: str) -> List[str]:
    return [rotate_hue(base, 180), adjust_lightness(base, 0.2)]


def analogous_colors(base: str) -> List[str]:
    return [rotate_hue(base, 30), rotate_hue(base, -30)]


def triadic_colors(base: str) -> List[str]:
    return [rotate_hue(base, 120), rotate_hue(base, -120)]


COLOR_THEORY_RULES: Dict[str, Callable[[str], List[str]]] = {
    "complementary": complementary_colors,
    "analogous": analogous_colors,
    "triadic": triadic_colors,
}


# ============================================================================
# EXTRACTION
# ============================================================================

def extract_heading(text: str) -> str:
    """First '#'/'##' heading line, else the first non-empty line."""
    if not text or not text.strip():
        return DEFAULT_HEADING

    lines = text.splitlines()
    for line in lines:
        match = HEADING_RE.match(line)
        if match:
            heading = match.group(1).replace("**", "").strip()
            if heading:
                return heading

    for line in lines:
        heading = line.replace("**", "").strip()
        if heading:
            return heading
    return DEFAULT_HEADING


def extract_hex_colors(text: str, limit: int = MAX_HEX_CODES) -> List[str]:
    """Hex color codes in order of appearance, deduplicated."""
    if not text:
        return []
    return _unique_ci(HEX_COLOR_RE.findall(text))[:limit]


def _match_vocabulary(text: str, patterns) -> List[str]:
    found = []
    for term, pattern in patterns:
        match = pattern.search(text)
        if match:
            found.append((match.start(), term))
    found.sort(key=lambda pair: pair[0])
    return [term.lower() for _, term in found]


def extract_style_keywords(text: str) -> List[str]:
    return _match_vocabulary(text or "", _STYLE_PATTERNS)


def extract_font_keywords(text: str) -> List[str]:
    return _match_vocabulary(text or "", _FONT_PATTERNS)


def resolve_color(color: Optional[str]) -> Optional[str]:
    """Map a request color (hex, bare hex or color name) to a hex code."""
    if not color:
        return None
    color = color.strip()
    if BARE_HEX_RE.match(color):
        return color if color.startswith("#") else f"#{color}"
    named = NAMED_COLORS.get(color.lower())
    return named[0] if named else None


class SuggestionExtractor:
    """Extracts structured signals and the color palette from AI suggestions."""

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def extract(self, text: str) -> ExtractedSignals:
        """Heading, hex codes and style/font keywords from freeform text."""
        text = text or ""
        return ExtractedSignals(
            heading=extract_heading(text),
            color_hex_codes=extract_hex_colors(text),
            style_keywords=extract_style_keywords(text),
            font_keywords=extract_font_keywords(text),
        )

    def build_color_palette(self, text: str, input_color: Optional[str] = None) -> List[str]:
        """
        Build the client color palette.

        Hex codes from the text come first, then the request color, then
        colors for any color names mentioned. When only one or two colors are
        found, one color theory rule (chosen at random from the injected RNG)
        extends the palette from the first color.

        Returns:
            Up to five unique hex codes, or [] if no color was found
        """
        text = text or ""
        colors = extract_hex_colors(text)

        resolved = resolve_color(input_color)
        if resolved:
            colors.append(resolved)

        for name in COLOR_NAME_RE.findall(text):
            colors.extend(NAMED_COLORS[name.lower()])

        colors = _unique_ci(colors)

        if 0 < len(colors) < MIN_PALETTE_SIZE:
            rule = self.rng.choice(sorted(COLOR_THEORY_RULES))
            colors = _unique_ci(colors + COLOR_THEORY_RULES[rule](colors[0]))

        return colors[:MAX_PALETTE_SIZE]
