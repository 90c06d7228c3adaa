# src/frontcheck/rules/interactive.py
import posixpath
from typing import List, Optional
from urllib.parse import urlparse

from ..dom.core import ElementBase
from ..dom.elements.image import ImageElement
from ..dom.elements.link import LinkElement
from ..dom.models import HTMLDocument
from ..model import Finding
from ..snapshot import ProjectSnapshot
from .base import Findings, rule_spec


def has_accessible_name(node: ElementBase) -> bool:
    """Visible text, an ARIA name, a title, an image with alt text or a titled SVG."""
    if node.text:
        return True
    for attr in ('aria-label', 'aria-labelledby', 'title'):
        if (node.get(attr) or '').strip():
            return True
    for child in node.descendants():
        if isinstance(child, ImageElement) and (child.alt or '').strip():
            return True
        if child.tag == 'svg' and child.has_descendant('title'):
            return True
    return False


def resolve_local_href(page: str, href: Optional[str]) -> Optional[str]:
    """
    Page path a local href points at, relative to the working directory.
    Returns None for external, fragment-only and non-page links.
    """
    if not href:
        return None
    parsed = urlparse(href)
    if parsed.scheme or parsed.netloc or not parsed.path:
        return None
    path = parsed.path
    if path.startswith('/'):
        target = path.lstrip('/')
    else:
        target = posixpath.join(posixpath.dirname(page), path)
    if not target or target.endswith('/') or target in ('.', './'):
        target = posixpath.join(target, "index.html")
    return posixpath.normpath(target)


def _is_marked_current(link: ElementBase) -> bool:
    return link.get('aria-current') == 'page'


def _check_link(doc: HTMLDocument, link: LinkElement, out: Findings) -> None:
    href = link.href
    if href is None:
        out.add("LINK_MISSING_HREF", doc.path, "Link missing href attribute",
                line=link.line, context=link.snippet)
    elif not href:
        out.add("LINK_EMPTY_HREF", doc.path, "Link has an empty href attribute",
                line=link.line, context=link.snippet)

    if not has_accessible_name(link):
        out.add(
            "LINK_WITHOUT_NAME", doc.path, "Link has no text or accessible name",
            line=link.line, context=link.snippet,
            suggestion="Add visible text, aria-label, or an image with alt text",
        )

    if link.is_external:
        if (link.get('target') or '') != '_blank':
            out.add("EXTERNAL_LINK_TARGET", doc.path, 'External link missing target="_blank" attribute',
                    line=link.line, context=link.snippet)
        elif 'noopener' not in link.rel.split() and 'noreferrer' not in link.rel.split():
            out.add("EXTERNAL_LINK_REL", doc.path, 'External link opened in a new tab should have rel="noopener"',
                    line=link.line, context=link.snippet, severity="WARNING")


def _check_navigation(doc: HTMLDocument, out: Findings) -> None:
    """Inside <nav>: the link to the page itself is marked, and only that one."""
    for nav in doc.find_all('nav'):
        for link in nav.find_all('a'):
            target = resolve_local_href(doc.path, link.get('href'))
            is_current = target == doc.path
            has_active = isinstance(link, LinkElement) and link.has_active_class
            has_aria = _is_marked_current(link)

            if is_current:
                if not has_active:
                    out.add(
                        "CURRENT_LINK_NOT_ACTIVE", doc.path,
                        "Link to the current page is not marked with an active class",
                        line=link.line, context=link.snippet,
                        suggestion="Add a modifier such as 'nav__link--active'",
                    )
                if not has_aria:
                    out.add(
                        "CURRENT_LINK_NO_ARIA", doc.path,
                        'Link to the current page is missing aria-current="page"',
                        line=link.line, context=link.snippet,
                    )
            elif has_active or has_aria:
                out.add(
                    "ACTIVE_LINK_MISMATCH", doc.path,
                    f"Link marked as current page points to {link.get('href') or 'nothing'}",
                    line=link.line, context=link.snippet,
                )


@rule_spec(
    name="interactive",
    category="ACCESSIBILITY",
    codes=[
        "LINK_MISSING_HREF", "LINK_EMPTY_HREF", "LINK_WITHOUT_NAME", "BUTTON_WITHOUT_NAME",
        "EXTERNAL_LINK_TARGET", "EXTERNAL_LINK_REL", "CURRENT_LINK_NOT_ACTIVE",
        "CURRENT_LINK_NO_ARIA", "ACTIVE_LINK_MISMATCH",
    ],
)
def check_interactive(snapshot: ProjectSnapshot) -> List[Finding]:
    """Links and buttons: accessible names, external targets, current-page marking."""
    out = Findings("interactive", "ACCESSIBILITY")

    for doc in snapshot.documents:
        if doc.root is None:
            continue

        for link in doc.find_all('a'):
            if isinstance(link, LinkElement):
                _check_link(doc, link, out)

        for button in doc.find_all('button'):
            if not has_accessible_name(button):
                out.add(
                    "BUTTON_WITHOUT_NAME", doc.path, "Button has no text or accessible name",
                    line=button.line, context=button.snippet,
                    suggestion="Add visible text or aria-label; icon-only buttons need a titled SVG",
                )

        _check_navigation(doc, out)

    return out.as_list()


RULES = [check_interactive]
