# src/frontcheck/rules/document.py
from typing import Dict, List, Optional

from ..dom.models import HTMLDocument
from ..model import Finding
from ..snapshot import ProjectSnapshot
from .base import Findings, rule_spec

SEMANTIC_TAGS = ("header", "main", "footer", "nav", "article", "section", "aside")
MIN_SEMANTIC_TAGS = 3


def _line(doc: HTMLDocument, tag: str) -> Optional[int]:
    node = doc.find(tag)
    if node is not None:
        return node.line
    return doc.line_of(f"<{tag}")


def _check_head(doc: HTMLDocument, out: Findings) -> None:
    head = doc.head
    head_line = _line(doc, 'head')

    if head is None or not head.has_charset:
        out.add("MISSING_CHARSET", doc.path, "Missing charset meta tag", line=head_line,
                suggestion='Add <meta charset="utf-8"> as the first element of <head>')

    if head is None or not head.title_text:
        out.add("MISSING_TITLE", doc.path, "Missing or empty title tag",
                line=(head.title_line if head and head.title_line else head_line))

    if head is None or not head.meta_desc_text:
        out.add("MISSING_META_DESCRIPTION", doc.path, "Missing or empty meta description",
                line=(head.meta_desc_line if head and head.meta_desc_line else head_line))

    if head is None or not head.has_favicon:
        out.add("MISSING_FAVICON", doc.path, "Missing favicon", line=head_line,
                suggestion='Add <link rel="icon" href="..."> to <head>', severity="WARNING")


def _check_body(doc: HTMLDocument, out: Findings) -> None:
    body_line = _line(doc, 'body')

    h1s = doc.find_all('h1')
    if not h1s:
        out.add("MISSING_H1", doc.path, "Missing h1 tag", line=body_line)
    elif len(h1s) > 1:
        out.add(
            "MULTIPLE_H1", doc.path, f"Multiple h1 tags found ({len(h1s)})",
            line=h1s[1].line,
            context="\n".join(h.snippet for h in h1s),
        )

    used = [tag for tag in SEMANTIC_TAGS if doc.find(tag) is not None]
    if len(used) < MIN_SEMANTIC_TAGS:
        out.add(
            "INSUFFICIENT_SEMANTIC_TAGS", doc.path, "Insufficient use of semantic tags",
            line=body_line,
            context=f"Found: {', '.join(used) or 'none'}",
            suggestion=f"Use at least {MIN_SEMANTIC_TAGS} of: {', '.join(SEMANTIC_TAGS)}",
        )


@rule_spec(
    name="document",
    category="HTML",
    codes=[
        "HTML_PARSE_ERROR", "INVALID_DOCTYPE", "MISSING_LANG", "MISSING_CHARSET", "MISSING_TITLE",
        "MISSING_META_DESCRIPTION", "MISSING_FAVICON", "MISSING_H1", "MULTIPLE_H1",
        "INSUFFICIENT_SEMANTIC_TAGS", "DUPLICATE_TITLE", "DUPLICATE_META_DESCRIPTION",
    ],
)
def check_document(snapshot: ProjectSnapshot) -> List[Finding]:
    """Page-level markup: doctype, lang, head metadata, headings, landmarks, uniqueness."""
    out = Findings("document", "HTML")

    # First owner of every title / description, in sorted path order
    titles: Dict[str, str] = {}
    descriptions: Dict[str, str] = {}

    for doc in sorted(snapshot.documents, key=lambda d: d.path):
        if doc.parse_error:
            out.add("HTML_PARSE_ERROR", doc.path, f"Could not parse HTML: {doc.parse_error}")
            continue
        if doc.root is None:
            # Empty pages are reported by the structure rule
            continue

        # --- Root level checks ---
        if not doc.doctype_ok:
            out.add("INVALID_DOCTYPE", doc.path, "Missing or incorrect DOCTYPE declaration",
                    line=1, context=doc.source_line(1), suggestion="Start the file with <!DOCTYPE html>")

        html = doc.html
        if html is None or not (html.get('lang') or '').strip():
            out.add("MISSING_LANG", doc.path, "Missing lang attribute on <html> tag",
                    line=html.line if html else None, context=html.snippet if html else None)

        _check_head(doc, out)
        _check_body(doc, out)

        # --- Cross-page uniqueness ---
        head = doc.head
        if head is None:
            continue

        if head.title_text:
            owner = titles.setdefault(head.title_text, doc.path)
            if owner != doc.path:
                out.add(
                    "DUPLICATE_TITLE", doc.path,
                    f"Duplicate title \"{head.title_text}\" also used in {owner}",
                    line=head.title_line,
                    context=doc.source_line(head.title_line),
                )

        if head.meta_desc_text:
            owner = descriptions.setdefault(head.meta_desc_text, doc.path)
            if owner != doc.path:
                out.add(
                    "DUPLICATE_META_DESCRIPTION", doc.path,
                    f"Duplicate meta description also used in {owner}",
                    line=head.meta_desc_line,
                    context=doc.source_line(head.meta_desc_line),
                )

    return out.as_list()


RULES = [check_document]
