# tests/rules/test_images.py
import io

from PIL import Image

from frontcheck.rules.images import check_image_files, check_image_markup, resolve_src

PAGE = """<!DOCTYPE html>
<html lang="en">
<body>
  <img src="images/photo.jpg">
  <img src="/images/logo.svg" alt="" width="10" height="10">
  <img alt="x" width="1" height="1">
  <img src="images/missing.webp" alt="" width="1" height="1">
  <picture>
    <source srcset="images/photo.webp" type="image/webp">
    <img src="images/photo.jpg" alt="Photo" width="1" height="1">
  </picture>
</body>
</html>
"""


def png_bytes(width, height):
    buffer = io.BytesIO()
    Image.new("RGB", (width, height), color=(200, 30, 30)).save(buffer, format="PNG")
    return buffer.getvalue()


def test_resolve_src():
    """Relative sources resolve against the page; absolute ones do not."""
    assert resolve_src("index.html", "images/a%20b.png") == "images/a b.png"
    assert resolve_src("index.html", "./images/../images/a.png") == "images/a.png"
    assert resolve_src("index.html", "/images/a.png") is None
    assert resolve_src("index.html", "https://cdn.example.com/a.png") is None


def test_image_markup_findings(snapshot_of):
    """Attributes, paths, formats and missing files are checked per <img>."""
    snapshot = snapshot_of({"index.html": PAGE, "images/photo.jpg": b"jpeg"})
    findings = check_image_markup(snapshot)

    assert [(f.code, f.line) for f in findings] == [
        ("IMG_MISSING_ALT", 4),
        ("IMG_MISSING_DIMENSIONS", 4),
        ("IMG_UNOPTIMIZED_FORMAT", 4),
        ("IMG_ABSOLUTE_PATH", 5),
        ("IMG_MISSING_SRC", 6),
        ("IMG_NOT_FOUND", 7),
    ]
    assert findings[2].severity == "WARNING"
    assert findings[-1].message == "Image file not found: images/missing.webp"


def test_empty_alt_is_allowed(snapshot_of):
    """alt="" marks a decorative image and is not reported."""
    page = PAGE.replace('<img src="images/photo.jpg">', '<img src="images/photo.svg" alt="" width="1" height="1">')
    findings = check_image_markup(snapshot_of({"index.html": page, "images/photo.svg": "<svg></svg>"}))
    assert "IMG_MISSING_ALT" not in [f.code for f in findings]


def test_image_files_in_assets(snapshot_of):
    """Generated images are checked for type, readability and pixel size."""
    snapshot = snapshot_of({
        "assets/images/big.png": png_bytes(2100, 10),
        "assets/images/broken.png": b"not an image",
        "assets/images/icon.svg": "<svg></svg>",
        "assets/images/notes.txt": "x",
        "assets/images/ok.png": png_bytes(10, 10),
        "images/huge.png": png_bytes(2100, 2100),
    })
    findings = check_image_files(snapshot)

    assert [(f.code, f.file_path) for f in findings] == [
        ("IMAGE_TOO_LARGE", "assets/images/big.png"),
        ("IMAGE_UNREADABLE", "assets/images/broken.png"),
        ("IMAGE_INVALID_EXTENSION", "assets/images/notes.txt"),
    ]
    assert findings[0].message == "Image dimensions too large: 2100x10px"
    assert findings[1].message == "Error processing image: Unrecognized image format"


def test_image_file_size_limit(snapshot_of):
    """The byte limit comes from the settings."""
    snapshot = snapshot_of({"assets/images/ok.png": png_bytes(10, 10)}, max_image_bytes=10)
    assert [f.code for f in check_image_files(snapshot)] == ["IMAGE_FILE_TOO_LARGE"]
