# src/frontcheck/dom/builder.py
import logging
import re
from typing import Any, Dict, List, Optional

from bs4 import BeautifulSoup, Tag, Doctype, NavigableString
from bs4.element import PreformattedString

from ..errors import ParseError
from .models import HTMLDocument
from .core import ElementBase
from .elements.head import HeadElement
from .registry import DOMRegistry

logger = logging.getLogger(__name__)

SNIPPET_MAX = 200
DOCTYPE_RE = re.compile(r'^<!doctype html>', re.IGNORECASE)


class DOMBuilder:
    """
    Builder responsible for parsing raw HTML into a structured HTMLDocument model.
    It keeps the source line of every element so rules can point at it.
    """

    def __init__(self):
        """Initializes the builder and ensures the DOMRegistry is populated."""
        DOMRegistry.discover()

    def parse_doc(self, path: str, html: str) -> HTMLDocument:
        """
        Parses raw HTML content into an HTMLDocument.

        Args:
            path (str): Path of the page relative to the working directory.
            html (str): The raw HTML string.

        Returns:
            HTMLDocument: A structured representation of the page.

        Raises:
            ParseError: BeautifulSoup could not make sense of the markup.
        """
        # Basic cleanup of potentially dirty HTML (e.g., BOM)
        clean_html = html.replace('\ufeff', '')
        lines = clean_html.splitlines()

        if not clean_html.strip():
            return HTMLDocument(path=path, text=clean_html, lines=lines)

        try:
            soup = BeautifulSoup(clean_html, 'html.parser')
        except Exception as e:
            raise ParseError(str(e), path) from e

        # --- Basic Validity Checks ---
        found_doctype = any(isinstance(item, Doctype) for item in soup.contents)
        doctype_ok = bool(DOCTYPE_RE.match(clean_html.lstrip()))

        try:
            root = self._build_root(soup, lines)
        except RecursionError as e:
            raise ParseError("Markup is nested too deeply", path) from e
        head_node = root.find('head')

        return HTMLDocument(
            path=path,
            text=clean_html,
            lines=lines,
            has_doctype=found_doctype,
            doctype_ok=doctype_ok,
            root=root,
            head=head_node if isinstance(head_node, HeadElement) else None,
        )

    def _build_root(self, soup: BeautifulSoup, lines: List[str]) -> ElementBase:
        """Wraps the top-level tags in a synthetic '#document' node."""
        children = [self._build_tree(child, lines) for child in soup.children if isinstance(child, Tag)]
        return ElementBase(
            tag="#document",
            text=soup.get_text(" ", strip=True),
            line=1,
            children=children,
        )

    def _build_tree(self, tag: Tag, lines: List[str]) -> ElementBase:
        """
        Recursively builds a simplified element tree from a BeautifulSoup Tag.
        Specific tags are handed to the parser registered in the DOMRegistry.
        """
        children = [self._build_tree(child, lines) for child in tag.children if isinstance(child, Tag)]

        line = tag.sourceline
        base: Dict[str, Any] = {
            "tag": tag.name,
            "attrs": dict(tag.attrs),
            "text": tag.get_text(" ", strip=True),
            "own_text": self._own_text(tag),
            "line": line,
            "snippet": self._snippet(lines, line),
            "children": children,
        }

        parser = DOMRegistry.get_parser(tag.name)
        if parser:
            return parser(tag, base)
        return ElementBase(**base)

    @staticmethod
    def _own_text(tag: Tag) -> str:
        parts = [
            str(child).strip() for child in tag.children
            if isinstance(child, NavigableString) and not isinstance(child, PreformattedString)
        ]
        return " ".join(p for p in parts if p)

    @staticmethod
    def _snippet(lines: List[str], line: Optional[int]) -> str:
        if not line or line > len(lines):
            return ""
        return lines[line - 1].strip()[:SNIPPET_MAX]
