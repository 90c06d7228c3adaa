# tests/rules/test_interactive.py
import pytest
from conftest import codes

from frontcheck.rules.interactive import check_interactive, resolve_local_href

PAGE = """<!DOCTYPE html>
<html lang="en">
<body>
  <nav class="nav">
    <a class="nav__link" href="index.html">Home</a>
    <a class="nav__link nav__link--active" href="about.html">About</a>
  </nav>
  <a class="social" href="https://example.com">Site</a>
  <a class="social" href="https://example.org" target="_blank">Org</a>
  <a class="icon" href="#top"></a>
  <a class="empty">Nothing</a>
  <a class="blank" href="">Blank</a>
  <button class="close" type="button"></button>
  <button class="close" type="button" aria-label="Close"></button>
  <a class="logo" href="index.html"><img src="images/logo.svg" alt="Studio"></a>
</body>
</html>
"""


@pytest.mark.parametrize("page, href, expected", [
    ("index.html", "./", "index.html"),
    ("index.html", "about.html#team", "about.html"),
    ("about.html", "/about.html", "about.html"),
    ("index.html", "#top", None),
    ("index.html", "https://example.com/index.html", None),
    ("index.html", "mailto:team@example.com", None),
    ("index.html", None, None),
])
def test_resolve_local_href(page, href, expected):
    """Local hrefs resolve to page paths; fragments and external targets do not."""
    assert resolve_local_href(page, href) == expected


def test_check_interactive_findings(snapshot_of):
    """Every link and button problem is reported once, navigation checks last."""
    findings = check_interactive(snapshot_of({"index.html": PAGE}))

    assert [(f.code, f.line) for f in findings] == [
        ("EXTERNAL_LINK_TARGET", 8),
        ("EXTERNAL_LINK_REL", 9),
        ("LINK_WITHOUT_NAME", 10),
        ("LINK_MISSING_HREF", 11),
        ("LINK_EMPTY_HREF", 12),
        ("BUTTON_WITHOUT_NAME", 13),
        ("CURRENT_LINK_NOT_ACTIVE", 5),
        ("CURRENT_LINK_NO_ARIA", 5),
        ("ACTIVE_LINK_MISMATCH", 6),
    ]
    assert findings[-1].message == "Link marked as current page points to about.html"
    assert findings[1].severity == "WARNING"


def test_titled_svg_gives_a_name(snapshot_of):
    """An icon-only button with a titled SVG has an accessible name."""
    page = PAGE.replace(
        '<button class="close" type="button"></button>',
        '<button class="close" type="button"><svg><title>Close</title></svg></button>',
    )
    assert "BUTTON_WITHOUT_NAME" not in codes(check_interactive(snapshot_of({"index.html": page})))


def test_clean_navigation(clean_snapshot):
    """Each page marks only its own navigation link."""
    assert check_interactive(clean_snapshot) == []
