# src/frontcheck/dom/models.py
from typing import Optional, List
from pydantic import BaseModel, Field

from .core import ElementBase
from .elements.head import HeadElement


class HTMLDocument(BaseModel):
    """
    Represents a parsed HTML page of the project.

    Serves as the root container for the element tree plus the document-level
    facts (doctype, head metadata) and the raw source lines used for
    line lookups and context snippets.
    """
    path: str  # relative to the working directory, posix separators
    text: str = ""
    lines: List[str] = Field(default_factory=list)
    has_doctype: bool = False
    doctype_ok: bool = False  # exactly '<!doctype html>' at the very start
    parse_error: Optional[str] = None

    # The DOM Tree Structure
    root: Optional[ElementBase] = None
    head: Optional[HeadElement] = None

    @property
    def html(self) -> Optional[ElementBase]:
        if self.root is None:
            return None
        if self.root.tag == 'html':
            return self.root
        return self.root.find('html')

    @property
    def body(self) -> Optional[ElementBase]:
        return self.root.find('body') if self.root else None

    def iter_elements(self):
        if self.root is None:
            return iter(())
        return self.root.descendants()

    def find_all(self, *tags: str) -> List[ElementBase]:
        return self.root.find_all(*tags) if self.root else []

    def find(self, *tags: str) -> Optional[ElementBase]:
        return self.root.find(*tags) if self.root else None

    def line_of(self, needle: str, start: int = 1) -> Optional[int]:
        """First 1-based line (from `start`) containing `needle`."""
        if not needle:
            return None
        for index in range(max(start, 1) - 1, len(self.lines)):
            if needle in self.lines[index]:
                return index + 1
        return None

    def source_line(self, line: Optional[int]) -> str:
        if not line or line > len(self.lines):
            return ""
        return self.lines[line - 1].strip()
