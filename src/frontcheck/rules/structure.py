# src/frontcheck/rules/structure.py
import re
from typing import List, Set

from ..model import Finding
from ..snapshot import ProjectSnapshot, TreeEntry
from .base import Findings, rule_spec

PROJECT = "."

FILE_NAME_RE = re.compile(r'^[a-z0-9._-]+$')
# Conventional upper-case names that are fine at any level
ALLOWED_NAMES = {"README.md", "LICENSE", "LICENSE.md", "CHANGELOG.md"}

SYSTEM_FILES = {".ds_store", "thumbs.db", "desktop.ini", "ehthumbs.db"}
UNNECESSARY_SUFFIXES = (".zip", ".rar", ".7z", ".tar", ".gz", ".bak", ".tmp", ".swp", ".orig", ".log")

STYLE_SUFFIXES = (".scss", ".css")
IMAGE_SUFFIXES = (".jpg", ".jpeg", ".png", ".gif", ".svg", ".webp", ".avif", ".ico")


def is_system_file(name: str) -> bool:
    return name.lower() in SYSTEM_FILES


def is_unnecessary_file(name: str) -> bool:
    lower = name.lower()
    return lower.endswith('~') or lower.endswith(UNNECESSARY_SUFFIXES)


def file_name_problems(name: str) -> List[str]:
    """Human readable reasons why `name` breaks the naming convention."""
    if name in ALLOWED_NAMES or FILE_NAME_RE.match(name):
        return []
    problems = []
    if ' ' in name:
        problems.append("contains spaces")
    if name != name.lower():
        problems.append("contains uppercase letters")
    if re.search(r'[^A-Za-z0-9._\- ]', name):
        problems.append("contains forbidden characters")
    return problems


@rule_spec(
    name="structure",
    category="STRUCTURE",
    codes=[
        "MISSING_DIRECTORY", "MISSING_ENTRY_PAGE", "INVALID_FILE_NAME", "SYSTEM_FILE",
        "UNNECESSARY_FILE", "EMPTY_HTML", "MISSING_NORMALIZE", "UNEXPECTED_STYLE_FILE",
        "INVALID_IMAGE_EXTENSION",
    ],
)
def check_structure(snapshot: ProjectSnapshot) -> List[Finding]:
    """Project layout: required directories, entry page, file names and stray files."""
    settings = snapshot.settings
    out = Findings("structure", "STRUCTURE")

    # --- Required directories & entry page ---
    for directory in (settings.styles_dir, settings.images_dir, settings.assets_dir):
        if not snapshot.has_dir(directory.strip('/')):
            out.add(
                "MISSING_DIRECTORY", PROJECT,
                f"Required directory not found: {directory}",
                suggestion=f"Create the '{directory}' directory",
            )

    if not snapshot.has_file(settings.entry_page):
        out.add(
            "MISSING_ENTRY_PAGE", PROJECT,
            f"Entry page not found: {settings.entry_page}",
        )

    # --- Whole tree ---
    flagged: Set[str] = set()
    for entry in snapshot.tree:
        if not entry.is_dir and is_system_file(entry.name):
            out.add("SYSTEM_FILE", entry.path, f"System file should be removed: {entry.path}")
            flagged.add(entry.path)
            continue
        if not entry.is_dir and is_unnecessary_file(entry.name):
            out.add(
                "UNNECESSARY_FILE", entry.path,
                f"Unnecessary file should be removed: {entry.path}",
                suggestion="Archives, backups and temporary files do not belong in the project",
            )
            flagged.add(entry.path)
            continue

        problems = file_name_problems(entry.name)
        if problems:
            kind = "Directory" if entry.is_dir else "File"
            out.add(
                "INVALID_FILE_NAME", entry.path,
                f"{kind} name \"{entry.name}\" {', '.join(problems)}",
                suggestion="Use lowercase letters, digits, '-', '_' and '.' only",
            )

    for doc in snapshot.documents:
        if not doc.text.strip():
            out.add("EMPTY_HTML", doc.path, "HTML file is empty")

    # --- Styles directory ---
    styles_dir = settings.styles_dir.strip('/')
    if snapshot.has_dir(styles_dir):
        style_files = [e for e in snapshot.entries_under(styles_dir) if not e.is_dir]
        if not any(_is_normalize(e) for e in style_files):
            out.add(
                "MISSING_NORMALIZE", styles_dir,
                f"Normalize stylesheet not found in {styles_dir}",
                suggestion="Add normalize.css (or _normalize.scss) to reset browser defaults",
            )
        for entry in style_files:
            if entry.path not in flagged and entry.suffix not in STYLE_SUFFIXES:
                out.add(
                    "UNEXPECTED_STYLE_FILE", entry.path,
                    f"Only style files are allowed in {styles_dir}: {entry.name}",
                )

    # --- Images directory (recursive) ---
    images_dir = settings.images_dir.strip('/')
    for entry in snapshot.entries_under(images_dir):
        if entry.is_dir or entry.path in flagged:
            continue
        if entry.suffix not in IMAGE_SUFFIXES:
            out.add(
                "INVALID_IMAGE_EXTENSION", entry.path,
                f"Invalid image file extension: {entry.name}",
                suggestion=f"Allowed: {' '.join(IMAGE_SUFFIXES)}",
            )

    return out.as_list()


def _is_normalize(entry: TreeEntry) -> bool:
    return "normalize" in entry.name.lower() and entry.suffix in STYLE_SUFFIXES


RULES = [check_structure]
