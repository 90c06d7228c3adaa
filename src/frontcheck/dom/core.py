from typing import Dict, Any, List, Callable, Iterator, Optional, Sequence
from pydantic import BaseModel, Field
from bs4 import Tag


class ElementBase(BaseModel):
    """
    Base data model representing a generic DOM element in the simplified tree.
    Every node remembers where its opening tag starts in the source file.
    """
    tag: str
    attrs: Dict[str, Any] = Field(default_factory=dict)
    text: str = ""  # all descendant text, whitespace collapsed
    own_text: str = ""  # direct text nodes only
    line: Optional[int] = None
    snippet: str = ""  # source line of the opening tag
    children: List['ElementBase'] = Field(default_factory=list)

    @property
    def classes(self) -> List[str]:
        """Class names in source order (bs4 already splits multi-valued attributes)."""
        value = self.attrs.get('class')
        if value is None:
            return []
        if isinstance(value, str):
            return [c for c in value.split() if c]
        return [c for c in value if c]

    def get(self, name: str, default: Any = None) -> Any:
        value = self.attrs.get(name, default)
        if isinstance(value, list):
            return " ".join(value)
        return value

    def has_attr(self, name: str) -> bool:
        return name in self.attrs

    def iter(self) -> Iterator['ElementBase']:
        """Pre-order traversal including the node itself."""
        yield self
        for child in self.children:
            yield from child.iter()

    def descendants(self) -> Iterator['ElementBase']:
        for child in self.children:
            yield from child.iter()

    def find_all(self, *tags: str) -> List['ElementBase']:
        return [node for node in self.descendants() if node.tag in tags]

    def find(self, *tags: str) -> Optional['ElementBase']:
        for node in self.descendants():
            if node.tag in tags:
                return node
        return None

    def has_descendant(self, *tags: str) -> bool:
        return self.find(*tags) is not None


# Parser signature: (bs4 tag, common fields computed by the builder) -> model
ElementParser = Callable[[Tag, Dict[str, Any]], ElementBase]


class ElementDefinition:
    """
    Binds one or more HTML tags to the parser producing their typed model.
    """

    def __init__(
            self,
            tag_names: Sequence[str],
            parser: ElementParser,
    ):
        self.tag_names = tuple(tag_names)
        self.parser = parser
