# tests/conftest.py
import pytest

from frontcheck.loader import load_project
from frontcheck.settings import CheckerSettings

PAGE_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <title>{title}</title>
  <meta name="description" content="{description}">
  <link rel="icon" href="images/favicon.svg">
</head>
<body>
  <header class="header">
    <nav class="nav">
      {nav}
    </nav>
  </header>
  <main class="main">
    <h1 class="main__title">{title}</h1>
    <img class="main__logo" src="images/logo.svg" alt="Logo" width="100" height="40">
    <p class="main__text">{body}</p>
  </main>
  <footer class="footer">
    <p class="footer__copy">Copyright</p>
  </footer>
</body>
</html>
"""

NAV_PAGES = (("index.html", "Home"), ("about.html", "About"))

CLEAN_STYLES = """$accent: #1a73e8;

.header {
  padding: 16px;
  background-color: $accent;
}

.nav__link {
  color: $accent;
  font-size: 16px;

  &:hover,
  &:focus {
    opacity: 0.8;
  }

  &:active {
    opacity: 0.6;
  }
}
"""

NORMALIZE = "html {\n  line-height: 1.15;\n}\n"


def make_page(current="index.html", title=None, description=None, body="Welcome"):
    """A page that passes every rule, with `current` marked in the navigation."""
    links = []
    for href, label in NAV_PAGES:
        if href == current:
            links.append(f'<a class="nav__link nav__link--active" href="{href}" aria-current="page">{label}</a>')
        else:
            links.append(f'<a class="nav__link" href="{href}">{label}</a>')
    name = current.rsplit('.', 1)[0]
    return PAGE_TEMPLATE.format(
        title=title or f"Studio {name}",
        description=description or f"About the {name} page of the studio",
        nav="\n      ".join(links),
        body=body,
    )


def clean_files():
    return {
        "index.html": make_page("index.html"),
        "about.html": make_page("about.html"),
        "styles/normalize.css": NORMALIZE,
        "styles/style.scss": CLEAN_STYLES,
        "images/logo.svg": '<svg xmlns="http://www.w3.org/2000/svg"></svg>',
        "images/favicon.svg": '<svg xmlns="http://www.w3.org/2000/svg"></svg>',
    }


@pytest.fixture
def make_project(tmp_path):
    """
    Writes a project into tmp_path. `files` maps relative paths to str/bytes
    content; `dirs` lists extra (possibly empty) directories.
    """
    def _make(files=None, dirs=("assets/images",)):
        root = tmp_path / "project"
        root.mkdir(exist_ok=True)
        for rel in dirs:
            (root / rel).mkdir(parents=True, exist_ok=True)
        for rel, content in (files or {}).items():
            path = root / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, bytes):
                path.write_bytes(content)
            else:
                path.write_text(content, encoding="utf-8")
        return root
    return _make


@pytest.fixture
def snapshot_of(make_project):
    """Loads a snapshot of a freshly written project (w3c and stylelint off)."""
    def _snapshot(files=None, dirs=("assets/images",), **overrides):
        root = make_project(files, dirs)
        options = {"w3c_enabled": False}
        options.update(overrides)
        settings = CheckerSettings(working_dir=root, **options)
        return load_project(settings)
    return _snapshot


@pytest.fixture
def clean_snapshot(snapshot_of):
    return snapshot_of(clean_files())


def codes(findings):
    return [f.code for f in findings]
