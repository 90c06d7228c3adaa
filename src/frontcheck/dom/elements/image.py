from typing import Any, Dict, Optional
from bs4 import Tag
from ..core import ElementBase, ElementDefinition


class ImageElement(ElementBase):
    tag: str = "img"
    in_picture_with_webp: bool = False

    @property
    def src(self) -> str: return (self.attrs.get('src') or '').strip()

    @property
    def alt(self) -> Optional[str]: return self.attrs.get('alt')


def _picture_offers_webp(tag: Tag) -> bool:
    parent = tag.parent
    if parent is None or parent.name != 'picture':
        return False
    for source in parent.find_all('source'):
        source_type = (source.get('type') or '').lower()
        srcset = (source.get('srcset') or '').lower()
        if source_type == 'image/webp' or '.webp' in srcset:
            return True
    return False


def parse_image(tag: Tag, base: Dict[str, Any]) -> ImageElement:
    return ImageElement(**base, in_picture_with_webp=_picture_offers_webp(tag))


DEFINITION = ElementDefinition(
    tag_names=["img"],
    parser=parse_image,
)
