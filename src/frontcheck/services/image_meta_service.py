import logging
from pathlib import Path
from typing import Tuple

from PIL import Image, UnidentifiedImageError

logger = logging.getLogger(__name__)


class ImageReadError(Exception):
    """Raised when a raster image cannot be opened or decoded."""


class ImageMetaService:
    """
    Reads raster image metadata with Pillow.
    Only the header is decoded; pixel data is never loaded.
    """

    def dimensions(self, path: Path) -> Tuple[int, int]:
        try:
            with Image.open(path) as img:
                return img.size
        except UnidentifiedImageError:
            raise ImageReadError("Unrecognized image format") from None
        except Image.DecompressionBombError as e:
            raise ImageReadError(f"Decompression bomb triggered: {e}") from None
        except OSError as e:
            logger.debug("Pillow could not open %s: %s", path, e)
            raise ImageReadError(str(e)) from e
