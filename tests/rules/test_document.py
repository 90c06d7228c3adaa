# tests/rules/test_document.py
from conftest import clean_files, codes, make_page

from frontcheck.rules.document import check_document


def test_clean_pages_pass(clean_snapshot):
    """Both pages of the clean project are valid documents."""
    assert check_document(clean_snapshot) == []


def test_duplicate_title_names_first_page(snapshot_of):
    """The second page using a title is reported and points at the first one."""
    files = clean_files()
    files["about.html"] = make_page("about.html", title="Studio index")
    findings = [f for f in check_document(snapshot_of(files)) if f.code == "DUPLICATE_TITLE"]

    assert len(findings) == 1
    assert findings[0].file_path == "index.html"
    assert findings[0].message == 'Duplicate title "Studio index" also used in about.html'
    assert findings[0].line == 5


def test_duplicate_meta_description(snapshot_of):
    """Meta descriptions must be unique across pages."""
    files = clean_files()
    files["about.html"] = make_page("about.html", description="Same text")
    files["index.html"] = make_page("index.html", description="Same text")
    assert codes(check_document(snapshot_of(files))) == ["DUPLICATE_META_DESCRIPTION"]


def test_missing_head_metadata(snapshot_of):
    """Missing doctype, lang, charset, title, description and favicon are all reported."""
    page = """<html>
<head></head>
<body>
  <header></header><main><h1>Hi</h1></main><footer></footer>
</body>
</html>
"""
    findings = check_document(snapshot_of({"index.html": page}))
    assert codes(findings) == [
        "INVALID_DOCTYPE",
        "MISSING_LANG",
        "MISSING_CHARSET",
        "MISSING_TITLE",
        "MISSING_META_DESCRIPTION",
        "MISSING_FAVICON",
    ]
    favicon = findings[-1]
    assert favicon.severity == "WARNING"
    assert favicon.line == 2


def test_heading_and_landmark_checks(snapshot_of):
    """Two h1 tags and too few semantic tags are reported on the body."""
    page = make_page("index.html").replace(
        '<p class="main__text">Welcome</p>',
        '<h1 class="main__title">Again</h1>',
    ).replace('<footer class="footer">', '<div class="footer">').replace('</footer>', '</div>')
    page = page.replace('<nav class="nav">', '<div class="nav">').replace('</nav>', '</div>')

    findings = check_document(snapshot_of({"index.html": page}))
    assert codes(findings) == ["MULTIPLE_H1", "INSUFFICIENT_SEMANTIC_TAGS"]
    assert findings[0].message == "Multiple h1 tags found (2)"
    assert findings[1].context == "Found: header, main"


def test_missing_h1(snapshot_of):
    """A page without h1 is reported."""
    page = make_page("index.html").replace('<h1 class="main__title">Studio index</h1>', '')
    assert codes(check_document(snapshot_of({"index.html": page}))) == ["MISSING_H1"]


def test_lowercase_doctype_is_accepted(snapshot_of):
    """The doctype check is case-insensitive."""
    page = make_page("index.html").replace("<!DOCTYPE html>", "<!doctype html>")
    assert check_document(snapshot_of({"index.html": page})) == []
