from typing import Any, Dict, Optional
from bs4 import Tag
from ..core import ElementBase, ElementDefinition


class HeadElement(ElementBase):
    """
    Structured model for the <head> section of an HTML document.
    Stores the metadata the document rule and the uniqueness checks need.
    """
    tag: str = "head"

    # Title Metadata
    title_text: str = ""
    title_line: Optional[int] = None

    # Meta Description Metadata
    meta_desc_text: str = ""
    meta_desc_line: Optional[int] = None

    # Technical Metadata
    has_charset: bool = False
    has_favicon: bool = False


def _is_favicon(link: Tag) -> bool:
    rel = link.get('rel') or []
    if isinstance(rel, str):
        rel = rel.split()
    return 'icon' in [r.lower() for r in rel]


def parse_head(tag: Tag, base: Dict[str, Any]) -> HeadElement:
    """
    Extracts high-level metadata from a BeautifulSoup <head> tag.
    """
    title_tag = tag.find('title')
    meta_desc = tag.find('meta', attrs={'name': 'description'})
    charset = tag.find('meta', attrs={'charset': True})

    t_text = title_tag.get_text(" ", strip=True) if title_tag else ""
    d_text = (meta_desc.get('content') or '').strip() if meta_desc else ""

    return HeadElement(
        **base,
        title_text=t_text,
        title_line=title_tag.sourceline if title_tag else None,
        meta_desc_text=d_text,
        meta_desc_line=meta_desc.sourceline if meta_desc else None,
        has_charset=bool(charset),
        has_favicon=any(_is_favicon(link) for link in tag.find_all('link')),
    )


# --- ELEMENT DEFINITION ---
DEFINITION = ElementDefinition(
    tag_names=["head"],
    parser=parse_head,
)
