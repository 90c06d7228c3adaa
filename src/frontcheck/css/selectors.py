# src/frontcheck/css/selectors.py
import re
from typing import List, Sequence

CLASS_RE = re.compile(r'\.(-?[_a-zA-Z][_a-zA-Z0-9-]*)')
ATTRIBUTE_RE = re.compile(r'\[[^\]]*\]')
PSEUDO_RE = re.compile(r'::?([a-zA-Z-]+)')
COMBINATOR_RE = re.compile(r'\s*[>+~]\s*|\s+')

# Pseudo-classes describing an interaction/validation state
STATE_PSEUDO_CLASSES = {
    "hover", "focus", "focus-visible", "focus-within", "active", "checked",
    "disabled", "enabled", "invalid", "valid", "required", "visited",
    "target", "placeholder-shown",
}


def split_selector_list(selector: str) -> List[str]:
    """Splits 'a, b:not(c, d)' on top-level commas only."""
    parts, depth, current = [], 0, []
    for char in selector:
        if char in '([':
            depth += 1
        elif char in ')]':
            depth = max(depth - 1, 0)
        if char == ',' and depth == 0:
            parts.append("".join(current).strip())
            current = []
            continue
        current.append(char)
    parts.append("".join(current).strip())
    return [p for p in parts if p]


def resolve_selectors(parents: Sequence[str], selector: str) -> List[str]:
    """
    Expands an SCSS selector against its parent selectors.
    '&__item' under '.card' -> '.card__item'; '.title' under '.card' -> '.card .title'.
    """
    parts = [" ".join(p.split()) for p in split_selector_list(selector)]
    if not parents:
        return [p.replace('&', '').strip() or p for p in parts]

    resolved = []
    for parent in parents:
        for part in parts:
            if '&' in part:
                resolved.append(part.replace('&', parent))
            else:
                resolved.append(f"{parent} {part}")
    return resolved


def strip_functional(selector: str) -> str:
    """Removes attribute selectors and the arguments of :not()/:is()... ."""
    result = ATTRIBUTE_RE.sub('', selector)
    previous = None
    while previous != result:
        previous = result
        result = re.sub(r'\([^()]*\)', '', result)
    return result


def compounds(selector: str) -> List[str]:
    """'.a > .b .c' -> ['.a', '.b', '.c'] (combinators dropped)."""
    cleaned = strip_functional(selector).strip()
    return [c for c in COMBINATOR_RE.split(cleaned) if c]


def nesting_levels(selector: str) -> int:
    """Number of descendant/child combinators (sibling combinators do not nest)."""
    cleaned = " ".join(strip_functional(selector).split())
    cleaned = re.sub(r'\s*[+~]\s*', '+', cleaned)
    cleaned = re.sub(r'\s*>\s*', ' ', cleaned)
    return cleaned.count(' ')


def class_names(selector: str) -> List[str]:
    return CLASS_RE.findall(strip_functional(selector))


def pseudo_classes(selector: str) -> List[str]:
    return [p.lower() for p in PSEUDO_RE.findall(selector)]


def has_state_guard(selector: str) -> bool:
    """True for selectors carrying a state pseudo-class or an attribute selector."""
    if ATTRIBUTE_RE.search(selector):
        return True
    return any(p in STATE_PSEUDO_CLASSES for p in pseudo_classes(selector))


def bem_depth(selector: str) -> int:
    """
    Nesting depth as seen by a BEM reader: the deepest chain of '__' elements
    in any class plus the descendant/child combinator levels.
    """
    element_depth = max((name.count('__') for name in class_names(selector)), default=0)
    return element_depth + nesting_levels(selector)


def bem_parts(class_name: str) -> List[str]:
    """'menu__item--active' -> ['menu', 'item'] (modifier dropped)."""
    base = class_name.split('--', 1)[0]
    return [p for p in base.split('__') if p]
