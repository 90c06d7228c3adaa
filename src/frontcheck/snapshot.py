# src/frontcheck/snapshot.py
from pathlib import PurePosixPath
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .css.models import StyleSheet
from .dom.models import HTMLDocument
from .settings import CheckerSettings


class TreeEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    path: str  # relative, posix separators
    is_dir: bool = False
    size: int = 0

    @property
    def name(self) -> str:
        return PurePosixPath(self.path).name

    @property
    def suffix(self) -> str:
        return PurePosixPath(self.path).suffix.lower()


class ImageAsset(BaseModel):
    model_config = ConfigDict(frozen=True)

    path: str  # relative to the working directory
    size: int = 0
    in_assets: bool = False  # lives under <assets>/images (generated output)

    @property
    def name(self) -> str:
        return PurePosixPath(self.path).name

    @property
    def suffix(self) -> str:
        return PurePosixPath(self.path).suffix.lower()


class ProjectSnapshot(BaseModel):
    """
    Everything one validation run looks at, loaded up-front.
    Rules only read from it; it is discarded after the run.
    """
    settings: CheckerSettings
    documents: List[HTMLDocument] = Field(default_factory=list)
    stylesheets: List[StyleSheet] = Field(default_factory=list)
    images: List[ImageAsset] = Field(default_factory=list)
    tree: List[TreeEntry] = Field(default_factory=list)

    @property
    def reference_document(self) -> Optional[HTMLDocument]:
        """The entry page other pages are compared against."""
        return self.get_document(self.settings.entry_page)

    def get_document(self, path: str) -> Optional[HTMLDocument]:
        for doc in self.documents:
            if doc.path == path:
                return doc
        return None

    def authored_stylesheets(self) -> List[StyleSheet]:
        """Stylesheets written by the student (normalize excluded)."""
        return [sheet for sheet in self.stylesheets if not sheet.is_normalize]

    def has_dir(self, path: str) -> bool:
        return any(entry.is_dir and entry.path == path for entry in self.tree)

    def has_file(self, path: str) -> bool:
        return any(not entry.is_dir and entry.path == path for entry in self.tree)

    def entries_under(self, directory: str) -> List[TreeEntry]:
        prefix = directory.rstrip('/') + '/'
        return [entry for entry in self.tree if entry.path.startswith(prefix)]

    def file_index(self) -> Dict[str, TreeEntry]:
        return {entry.path: entry for entry in self.tree if not entry.is_dir}

    @property
    def files_checked(self) -> int:
        return len(self.documents) + len(self.stylesheets) + len(self.images)
