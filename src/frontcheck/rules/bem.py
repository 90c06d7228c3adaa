# src/frontcheck/rules/bem.py
import re
from typing import List

from ..dom.core import ElementBase
from ..model import Finding
from ..snapshot import ProjectSnapshot
from .base import Findings, rule_spec

BEM_CLASS_RE = re.compile(r'^[a-z]+(-[a-z]+)*(__[a-z]+(-[a-z]+)*)?(--[a-z]+(-[a-z]+)*)?$')

PRESENTATIONAL_PREFIXES = {"fz", "fs", "color", "bg", "margin", "padding", "left", "right", "top", "bottom"}
PRESENTATIONAL_SUFFIXES = {"left", "right", "center", "bold", "italic"}

# Classes that legitimately wrap a single child
WRAPPER_EXEMPT_CLASSES = {"visually-hidden"}
# Parents whose single child is structural, not a wrapper smell
WRAPPER_EXEMPT_TAGS = {
    "html", "head", "body", "picture", "ul", "ol", "tr", "select", "label", "button", "a",
}
MEDIA_TAGS = ("img", "picture", "svg")


def is_valid_bem(class_name: str) -> bool:
    return bool(BEM_CLASS_RE.match(class_name))


def is_presentational(class_name: str) -> bool:
    """
    Checks whole-word segments: 'bg-dark' and 'title--center' are presentational,
    'bgimage' and 'topics' are not.
    """
    words = [w for w in re.split(r'__|--|-|_', class_name.lower()) if w]
    if not words:
        return False
    return words[0] in PRESENTATIONAL_PREFIXES or words[-1] in PRESENTATIONAL_SUFFIXES


def is_unnecessary_wrapper(node: ElementBase) -> bool:
    if node.tag in WRAPPER_EXEMPT_TAGS or len(node.children) != 1:
        return False
    if node.text:
        return False
    if any(c in WRAPPER_EXEMPT_CLASSES for c in node.classes):
        return False
    return not node.has_descendant(*MEDIA_TAGS)


@rule_spec(
    name="bem",
    category="BEM",
    codes=["INVALID_BEM_CLASS", "PRESENTATIONAL_CLASS", "UNNECESSARY_WRAPPER"],
)
def check_bem(snapshot: ProjectSnapshot) -> List[Finding]:
    """BEM class naming, presentational class names and pointless wrappers."""
    out = Findings("bem", "BEM")

    for doc in snapshot.documents:
        for node in doc.iter_elements():
            classes = node.classes
            if not classes:
                continue

            for class_name in classes:
                if not is_valid_bem(class_name):
                    out.add(
                        "INVALID_BEM_CLASS", doc.path,
                        f"Invalid BEM class name: \"{class_name}\"",
                        line=node.line,
                        context=node.snippet,
                        suggestion="Use block, block__element or block--modifier in lowercase-hyphen form",
                    )
                if is_presentational(class_name):
                    out.add(
                        "PRESENTATIONAL_CLASS", doc.path,
                        f"Presentational class name detected: \"{class_name}\"",
                        line=node.line,
                        context=node.snippet,
                        suggestion="Name the class after what the element is, not how it looks",
                    )

            if is_unnecessary_wrapper(node):
                out.add(
                    "UNNECESSARY_WRAPPER", doc.path,
                    f"Unnecessary wrapper element detected: <{node.tag}>",
                    line=node.line,
                    context=node.snippet,
                    severity="WARNING",
                )

    return out.as_list()


RULES = [check_bem]
