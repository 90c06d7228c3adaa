# src/frontcheck/loader.py
import logging
from pathlib import Path
from typing import List, Optional, Tuple

from .css.parser import StyleSheetParser
from .css.models import StyleSheet
from .dom.builder import DOMBuilder
from .dom.models import HTMLDocument
from .errors import ParseError, ProjectLoadError
from .settings import CheckerSettings
from .snapshot import ImageAsset, ProjectSnapshot, TreeEntry

logger = logging.getLogger(__name__)

# Directories never considered part of the student's project
IGNORED_DIRS = {"node_modules", ".git", ".svn", ".hg", ".idea", ".vscode", "__pycache__"}
STYLE_SUFFIXES = (".scss", ".css")


class ProjectLoader:
    """
    Reads a working directory into an immutable ProjectSnapshot.

    Only an unusable working directory is fatal; missing optional
    directories simply produce empty collections and broken files are kept
    with their read/parse error attached.
    """

    def __init__(self, settings: CheckerSettings):
        self.settings = settings
        self.root = settings.working_dir
        self.dom_builder = DOMBuilder()
        self.css_parser = StyleSheetParser()

    def load(self) -> ProjectSnapshot:
        if not self.root.exists():
            raise ProjectLoadError(f"Working directory not found: {self.root}")
        if not self.root.is_dir():
            raise ProjectLoadError(f"Working directory is not a directory: {self.root}")

        tree = self._scan_tree()
        documents = self._load_documents()
        stylesheets = self._load_stylesheets()
        images = self._load_images()

        logger.info(
            "Loaded %s: %d pages, %d stylesheets, %d images, %d tree entries",
            self.root, len(documents), len(stylesheets), len(images), len(tree)
        )
        return ProjectSnapshot(
            settings=self.settings,
            documents=documents,
            stylesheets=stylesheets,
            images=images,
            tree=tree,
        )

    # --- Helpers ---

    def _relative(self, path: Path) -> str:
        return path.relative_to(self.root).as_posix()

    def _read_text(self, path: Path) -> Tuple[str, Optional[str]]:
        try:
            return path.read_text(encoding="utf-8"), None
        except UnicodeDecodeError as e:
            logger.warning("%s is not valid UTF-8: %s", path, e)
            return path.read_text(encoding="utf-8", errors="replace"), f"File is not valid UTF-8: {e.reason}"
        except OSError as e:
            logger.error("Could not read %s: %s", path, e)
            return "", f"Could not read file: {e.strerror or e}"

    def _scan_tree(self) -> List[TreeEntry]:
        entries: List[TreeEntry] = []

        def walk(directory: Path) -> None:
            try:
                items = sorted(directory.iterdir(), key=lambda p: p.name)
            except OSError as e:
                logger.warning("Cannot list %s: %s", directory, e)
                return
            for item in items:
                if item.is_dir() and not item.is_symlink():
                    if item.name in IGNORED_DIRS or item.name.startswith('.'):
                        continue
                    entries.append(TreeEntry(path=self._relative(item), is_dir=True))
                    walk(item)
                elif item.is_file():
                    entries.append(TreeEntry(path=self._relative(item), size=item.stat().st_size))

        walk(self.root)
        return entries

    def _load_documents(self) -> List[HTMLDocument]:
        documents = []
        for path in sorted(self.root.glob("*.html")):
            if not path.is_file():
                continue
            text, error = self._read_text(path)
            try:
                doc = self.dom_builder.parse_doc(self._relative(path), text)
            except ParseError as e:
                logger.warning("Could not parse %s: %s", e.file_path, e.message)
                doc = HTMLDocument(path=e.file_path, text=text, lines=text.splitlines(), parse_error=e.message)
            if error and not doc.parse_error:
                doc = doc.model_copy(update={"parse_error": error})
            documents.append(doc)
        return documents

    def _load_stylesheets(self) -> List[StyleSheet]:
        styles_path = self.settings.styles_path
        if not styles_path.is_dir():
            logger.debug("Styles directory %s missing; no stylesheets loaded.", styles_path)
            return []

        sheets = []
        for path in sorted(styles_path.rglob("*")):
            if not path.is_file() or path.suffix.lower() not in STYLE_SUFFIXES:
                continue
            if any(part in IGNORED_DIRS for part in path.relative_to(styles_path).parts):
                continue
            text, error = self._read_text(path)
            is_normalize = "normalize" in path.name.lower()
            try:
                sheet = self.css_parser.parse(self._relative(path), text, is_normalize=is_normalize)
            except ParseError as e:
                logger.warning("Could not parse %s: %s", e.file_path, e.message)
                sheet = StyleSheet(path=e.file_path, text=text, lines=text.splitlines(), is_normalize=is_normalize)
                error = error or f"Could not parse stylesheet: {e.message}"
            if error:
                sheet.read_error = error
            sheets.append(sheet)
        return sheets

    def _load_images(self) -> List[ImageAsset]:
        images: List[ImageAsset] = []
        seen = set()
        for directory, in_assets in (
                (self.settings.images_path, False),
                (self.settings.assets_images_path, True),
        ):
            if not directory.is_dir():
                continue
            for path in sorted(directory.rglob("*")):
                if path.is_file() and path not in seen:
                    seen.add(path)
                    images.append(ImageAsset(
                        path=self._relative(path),
                        size=path.stat().st_size,
                        in_assets=in_assets,
                    ))
        return images


def load_project(settings: CheckerSettings) -> ProjectSnapshot:
    """Loads the working directory named by `settings` in one call."""
    return ProjectLoader(settings).load()
