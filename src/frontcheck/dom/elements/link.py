from typing import Any, Dict, Optional
from urllib.parse import urlparse
from bs4 import Tag
from ..core import ElementBase, ElementDefinition


class LinkElement(ElementBase):
    """
    Data model for anchor (<a>) tags.
    Knows whether the target leaves the site and which classes mark it active.
    """
    tag: str = "a"

    @property
    def href(self) -> Optional[str]:
        """Convenience property to access the href attribute."""
        href = self.attrs.get('href')
        return href.strip() if isinstance(href, str) else href

    @property
    def is_external(self) -> bool:
        if not self.href:
            return False
        parsed = urlparse(self.href)
        return parsed.scheme in ('http', 'https') or self.href.startswith('//')

    @property
    def rel(self) -> str:
        return (self.get('rel') or '').lower()

    @property
    def has_active_class(self) -> bool:
        return any(is_active_class(c) for c in self.classes)


def is_active_class(class_name: str) -> bool:
    """'active', 'is-active', 'nav__link--active', 'nav__link_active'."""
    name = class_name.lower()
    return name == 'active' or name.endswith(('--active', '_active', '-active'))


def parse_link(tag: Tag, base: Dict[str, Any]) -> LinkElement:
    """Parses a <a> tag into the LinkElement model."""
    return LinkElement(**base)


# --- ELEMENT DEFINITION ---

DEFINITION = ElementDefinition(
    tag_names=["a"],
    parser=parse_link,
)
