# src/frontcheck/dom/registry.py
import importlib
import pkgutil
import logging
from typing import Dict, Optional

from .core import ElementDefinition, ElementParser

logger = logging.getLogger(__name__)


class DOMRegistry:
    """
    Central registry for specialised DOM element parsers.

    Discovers ElementDefinition modules in the 'frontcheck.dom.elements'
    package so the builder can produce typed nodes (links, images, form
    controls, head) instead of generic ElementBase nodes.
    """

    _parsers: Dict[str, ElementParser] = {}
    _loaded: bool = False

    @classmethod
    def discover(cls) -> None:
        """
        Registers every module in 'frontcheck.dom.elements' exposing a
        `DEFINITION` attribute (instance of `ElementDefinition`).
        """
        if cls._loaded:
            return

        try:
            import frontcheck.dom.elements as elements_pkg

            for _, name, _ in sorted(pkgutil.iter_modules(elements_pkg.__path__), key=lambda m: m[1]):
                full_name = f"frontcheck.dom.elements.{name}"
                try:
                    module = importlib.import_module(full_name)
                    defn = getattr(module, "DEFINITION", None)
                    if isinstance(defn, ElementDefinition):
                        cls.register(defn)
                        logger.debug("Element definition loaded: %s", ", ".join(defn.tag_names))
                except Exception as e:
                    logger.error("Error loading element module %s: %s", name, e)

            cls._loaded = True
        except ImportError as e:
            logger.error("Could not find elements package: %s", e)

    @classmethod
    def register(cls, definition: ElementDefinition) -> None:
        for tag_name in definition.tag_names:
            cls._parsers[tag_name] = definition.parser

    @classmethod
    def get_parser(cls, tag_name: str) -> Optional[ElementParser]:
        """Retrieves the parser function for a specific HTML tag."""
        return cls._parsers.get(tag_name)
