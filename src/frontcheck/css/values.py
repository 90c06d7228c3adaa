# src/frontcheck/css/values.py
import re
from typing import Iterator, List, Optional, Sequence, Tuple

import tinycss2
from tinycss2.color3 import RGBA, parse_color

HEX_RE = re.compile(r'#(?:[0-9a-fA-F]{8}|[0-9a-fA-F]{6}|[0-9a-fA-F]{3,4})(?![0-9a-zA-Z_-])')
URL_RE = re.compile(r'url\(\s*([\'"]?)(.*?)\1\s*\)', re.IGNORECASE)
LENGTH_RE = re.compile(r'(?<![\w.#$-])-?(?:\d+\.?\d*|\.\d+)(px|em|rem)\b')
VENDOR_PREFIX_RE = re.compile(r'^-(webkit|moz|ms|o)-', re.IGNORECASE)
VENDOR_VALUE_RE = re.compile(r'(?:^|[\s,(])(-(?:webkit|moz|ms|o)-[a-z-]+)', re.IGNORECASE)

# Properties whose values may carry a colour keyword
COLOR_PROPERTIES = {
    "color", "background", "background-color", "border", "border-color", "border-top",
    "border-right", "border-bottom", "border-left", "border-top-color", "border-right-color",
    "border-bottom-color", "border-left-color", "outline", "outline-color", "fill", "stroke",
    "box-shadow", "text-shadow", "text-decoration", "text-decoration-color", "caret-color",
    "column-rule", "column-rule-color", "accent-color",
}

COLOR_FUNCTIONS = {"rgb", "rgba", "hsl", "hsla"}
# Keywords parse_color accepts that do not hard-code a colour
NON_COLOR_KEYWORDS = {"transparent"}

# Vendor-prefixed names autoprefixer never generates
VENDOR_EXEMPT = {
    "-webkit-line-clamp", "-webkit-box-orient", "-webkit-box", "-webkit-text-fill-color",
    "-webkit-tap-highlight-color", "-webkit-text-stroke", "-webkit-font-smoothing",
    "-moz-osx-font-smoothing", "-webkit-overflow-scrolling",
}


def _without_urls(value: str) -> str:
    return URL_RE.sub(' ', value)


def hex_colors(value: str) -> List[str]:
    return [m.lower() for m in HEX_RE.findall(_without_urls(value))]


def _tokens(value: str) -> Iterator[Tuple[object, object]]:
    """(token, preceding token) pairs of a value; url() and var() arguments are skipped."""
    def visit(tokens):
        previous = None
        for token in tokens:
            yield token, previous
            if token.type == 'function' and token.lower_name not in ('url', 'var'):
                yield from visit(token.arguments)
            elif token.type == '() block':
                yield from visit(token.content)
            previous = token

    yield from visit(tinycss2.parse_component_value_list(value))


def color_functions(value: str) -> List[str]:
    return [
        token.lower_name for token, _ in _tokens(value)
        if token.type == 'function' and token.lower_name in COLOR_FUNCTIONS
    ]


def named_colors(value: str) -> List[str]:
    """Colour keywords known to tinycss2 (SCSS $variables excluded)."""
    found = []
    for token, previous in _tokens(value):
        if token.type != 'ident' or token.lower_value in NON_COLOR_KEYWORDS:
            continue
        if previous is not None and previous.type == 'literal' and previous.value == '$':
            continue
        if isinstance(parse_color(token), RGBA):
            found.append(token.lower_value)
    return found


def has_color(value: str) -> bool:
    return bool(hex_colors(value) or color_functions(value) or named_colors(value)
                or 'var(' in value or '$' in value)


def urls(value: str) -> List[str]:
    return [m[1].strip() for m in URL_RE.findall(value)]


def is_svg_url(url: str) -> bool:
    path = re.split(r'[?#]', url, maxsplit=1)[0]
    return path.lower().endswith('.svg') or url.lower().startswith('data:image/svg')


def first_unit(value: str, units: Sequence[str] = ("px", "em", "rem")) -> Optional[str]:
    for unit in LENGTH_RE.findall(value):
        if unit.lower() in units:
            return unit.lower()
    return None


def is_vendor_prefixed(name: str) -> bool:
    return bool(VENDOR_PREFIX_RE.match(name)) and name.lower() not in VENDOR_EXEMPT


def vendor_values(value: str) -> List[str]:
    return [v for v in VENDOR_VALUE_RE.findall(value) if v.lower() not in VENDOR_EXEMPT]


def normalize_value(value: str) -> str:
    return " ".join(value.lower().split())
