# src/frontcheck/rules/images.py
import posixpath
from typing import List, Optional
from urllib.parse import unquote, urlparse

from ..dom.elements.image import ImageElement
from ..model import Finding
from ..services.image_meta_service import ImageMetaService, ImageReadError
from ..snapshot import ProjectSnapshot
from .base import Findings, rule_spec
from .structure import IMAGE_SUFFIXES, is_system_file, is_unnecessary_file

OPTIMIZED_FORMATS = (".webp", ".svg")


def resolve_src(page: str, src: str) -> Optional[str]:
    """Working-directory relative path of a relative `src`, None for absolute/URL sources."""
    parsed = urlparse(src)
    if parsed.scheme or parsed.netloc or parsed.path.startswith('/'):
        return None
    return posixpath.normpath(posixpath.join(posixpath.dirname(page), unquote(parsed.path)))


@rule_spec(
    name="images",
    category="IMAGES",
    codes=[
        "IMG_MISSING_SRC", "IMG_MISSING_ALT", "IMG_MISSING_DIMENSIONS", "IMG_ABSOLUTE_PATH",
        "IMG_UNOPTIMIZED_FORMAT", "IMG_NOT_FOUND",
    ],
)
def check_image_markup(snapshot: ProjectSnapshot) -> List[Finding]:
    """<img> attributes, formats and file references."""
    out = Findings("images", "IMAGES")
    files = snapshot.file_index()

    for doc in snapshot.documents:
        for img in doc.find_all('img'):
            if not isinstance(img, ImageElement):
                continue
            context = img.snippet

            if img.alt is None:
                out.add("IMG_MISSING_ALT", doc.path, "Image missing alt attribute",
                        line=img.line, context=context,
                        suggestion='Describe the image, or use alt="" for decorative images')

            if not img.has_attr('width') or not img.has_attr('height'):
                out.add("IMG_MISSING_DIMENSIONS", doc.path, "Image missing width or height attribute",
                        line=img.line, context=context,
                        suggestion="Explicit dimensions prevent layout shifts while loading")

            src = img.src
            if not src:
                out.add("IMG_MISSING_SRC", doc.path, "Image missing src attribute",
                        line=img.line, context=context)
                continue

            target = resolve_src(doc.path, src)
            if target is None:
                out.add("IMG_ABSOLUTE_PATH", doc.path, f"Image path must be relative: {src}",
                        line=img.line, context=context)
                continue

            if not target.lower().endswith(OPTIMIZED_FORMATS) and not img.in_picture_with_webp:
                out.add(
                    "IMG_UNOPTIMIZED_FORMAT", doc.path,
                    f"Image should use WebP or SVG format: {src}",
                    line=img.line, context=context,
                    suggestion="Convert the image or offer a WebP <source> inside <picture>",
                    severity="WARNING",
                )

            if target not in files:
                out.add("IMG_NOT_FOUND", doc.path, f"Image file not found: {src}",
                        line=img.line, context=context)

    return out.as_list()


@rule_spec(
    name="image-files",
    category="IMAGES",
    codes=["IMAGE_INVALID_EXTENSION", "IMAGE_TOO_LARGE", "IMAGE_FILE_TOO_LARGE", "IMAGE_UNREADABLE"],
)
def check_image_files(snapshot: ProjectSnapshot) -> List[Finding]:
    """Generated images under <assets>/images: type, pixel dimensions and file size."""
    settings = snapshot.settings
    out = Findings("image-files", "IMAGES")
    meta = ImageMetaService()
    max_dim = settings.max_image_dimension
    max_bytes = settings.max_image_bytes

    for asset in snapshot.images:
        if not asset.in_assets:
            # Source images are covered by the structure rule
            continue

        if is_system_file(asset.name) or is_unnecessary_file(asset.name):
            # Reported by the structure rule
            continue
        if asset.suffix not in IMAGE_SUFFIXES:
            out.add("IMAGE_INVALID_EXTENSION", asset.path, "Invalid image file extension")
            continue
        if asset.suffix == '.svg':
            continue

        try:
            width, height = meta.dimensions(settings.resolve(asset.path))
        except ImageReadError as e:
            out.add("IMAGE_UNREADABLE", asset.path, f"Error processing image: {e}")
            continue

        if width > max_dim or height > max_dim:
            out.add(
                "IMAGE_TOO_LARGE", asset.path,
                f"Image dimensions too large: {width}x{height}px",
                suggestion=f"Keep images within {max_dim}x{max_dim}px",
            )
        if asset.size > max_bytes:
            out.add(
                "IMAGE_FILE_TOO_LARGE", asset.path,
                f"Image file size too large: {asset.size / (1024 * 1024):.2f}MB",
                suggestion=f"Compress the image below {max_bytes / (1024 * 1024):g}MB",
            )

    return out.as_list()


RULES = [check_image_markup, check_image_files]
