# src/frontcheck/rules/layout.py
from typing import List, Optional, Tuple

from ..dom.core import ElementBase
from ..dom.elements.link import is_active_class
from ..dom.models import HTMLDocument
from ..model import Finding
from ..snapshot import ProjectSnapshot
from .base import Findings, rule_spec

REGIONS = ("header", "footer")
# Attributes expected to vary per page
IGNORED_ATTRS = {"href", "aria-current"}

OutlineLine = Tuple[str, Optional[int]]


def _describe(node: ElementBase) -> str:
    parts = [node.tag]
    for name in sorted(node.attrs):
        if name in IGNORED_ATTRS:
            continue
        if name == 'class':
            classes = [c for c in node.classes if not is_active_class(c)]
            if classes:
                parts.append(f'class="{" ".join(classes)}"')
            continue
        value = node.get(name)
        parts.append(name if value in (None, "") else f'{name}="{value}"')
    return f"<{' '.join(parts)}>"


def outline(region: ElementBase) -> List[OutlineLine]:
    """Normalized, indented tag outline of a region with the source line of each entry."""
    lines: List[OutlineLine] = []

    def visit(node: ElementBase, depth: int) -> None:
        lines.append(("  " * depth + _describe(node), node.line))
        for child in node.children:
            visit(child, depth + 1)

    visit(region, 0)
    return lines


def first_difference(expected: List[OutlineLine], found: List[OutlineLine]) -> Optional[int]:
    for index in range(max(len(expected), len(found))):
        exp = expected[index][0] if index < len(expected) else None
        got = found[index][0] if index < len(found) else None
        if exp != got:
            return index
    return None


def _compare_region(
        tag: str,
        reference: HTMLDocument,
        ref_region: ElementBase,
        doc: HTMLDocument,
        out: Findings
) -> None:
    label = tag.capitalize()
    region = doc.find(tag)
    if region is None:
        body = doc.body
        out.add(
            f"{tag.upper()}_MISSING", doc.path,
            f"{label} missing (present in {reference.path})",
            line=body.line if body else None,
        )
        return

    expected = outline(ref_region)
    found = outline(region)
    index = first_difference(expected, found)
    if index is None:
        return

    exp_text = expected[index][0].strip() if index < len(expected) else "(end of region)"
    if index < len(found):
        got_text, line = found[index][0].strip(), found[index][1]
    else:
        got_text, line = "(end of region)", found[-1][1]

    out.add(
        f"{tag.upper()}_MISMATCH", doc.path,
        f"{label} structure differs from {reference.path}",
        line=line,
        context=f"Expected: {exp_text}\nFound:    {got_text}",
        suggestion=f"Copy the <{tag}> markup from {reference.path}",
    )


@rule_spec(
    name="layout-consistency",
    category="HTML",
    codes=["HEADER_MISMATCH", "FOOTER_MISMATCH", "HEADER_MISSING", "FOOTER_MISSING"],
)
def check_layout_consistency(snapshot: ProjectSnapshot) -> List[Finding]:
    """Header and footer of every page must match the entry page."""
    out = Findings("layout-consistency", "HTML")
    reference = snapshot.reference_document
    if reference is None or reference.root is None:
        return []

    for doc in snapshot.documents:
        if doc.path == reference.path or doc.root is None:
            continue
        for tag in REGIONS:
            ref_region = reference.find(tag)
            if ref_region is not None:
                _compare_region(tag, reference, ref_region, doc, out)

    return out.as_list()


RULES = [check_layout_consistency]
