# tests/rules/test_styles.py
import pytest
from conftest import NORMALIZE, codes

from frontcheck.rules.styles import (
    check_style_syntax, check_styles, has_partial_overlap, is_interactive_class,
)


@pytest.fixture
def styles_of(snapshot_of):
    """Snapshot with normalize.css plus one authored style.scss (and optional pages)."""
    def _styles(scss, pages=None):
        files = {"styles/normalize.css": NORMALIZE, "styles/style.scss": scss}
        files.update(pages or {})
        return snapshot_of(files)
    return _styles


def test_clean_styles(clean_snapshot):
    """The clean stylesheet follows every convention."""
    assert check_styles(clean_snapshot) == []
    assert check_style_syntax(clean_snapshot) == []


def test_background_image_needs_color(styles_of):
    """A raster background needs a fallback colour; an SVG background does not."""
    scss = """.hero {
  background-image: url("../images/hero.jpg");
}

.badge {
  background: url("../images/badge.svg") no-repeat;
}
"""
    findings = check_styles(styles_of(scss))
    assert [(f.code, f.line) for f in findings] == [("BACKGROUND_WITHOUT_COLOR", 2)]


def test_background_shorthand_with_color(styles_of):
    """A colour inside the background shorthand counts as the fallback."""
    scss = """.hero {
  background: #101010 url("../images/hero.jpg") center / cover;
}
"""
    assert check_styles(styles_of(scss)) == []


def test_nesting_depth_ignores_state_selectors(styles_of):
    """Deep BEM chains are flagged; selectors guarded by a state are exempt."""
    scss = """.block {
  &__a__b__c {
    opacity: 1;
  }
}

.toggle__input:checked + .toggle__label .toggle__icon {
  opacity: 1;
}
"""
    findings = check_styles(styles_of(scss))
    assert codes(findings) == ["NESTING_TOO_DEEP"]
    assert findings[0].message == "Selector nesting too deep (3 levels, max 2): .block__a__b__c"
    assert findings[0].line == 2


def test_interactive_states(styles_of):
    """Buttons need hover/active/focus rules that leave the layout alone."""
    scss = """.btn {
  opacity: 1;
}

.btn:hover {
  width: 110%;
}
"""
    findings = check_styles(styles_of(scss))
    assert [(f.code, f.line) for f in findings] == [
        ("STATE_CHANGES_LAYOUT", 6),
        ("MISSING_INTERACTIVE_STATES", 1),
    ]
    assert findings[0].message == 'Layout property "width" changed in :hover state'
    assert findings[1].message == 'Interactive element ".btn" is missing :active, :focus state(s)'


def test_duplicates_and_colors(styles_of):
    """Repeated properties, non-hex colours and reused literals are reported."""
    scss = """.card {
  color: #333333;
  margin: 10px 20px;
  margin: 10px 20px 5px;
  color: #333333;
}

.card__title {
  color: rgb(0, 0, 0);
  border-color: red;
}
"""
    findings = check_styles(styles_of(scss))
    assert [(f.code, f.line) for f in findings] == [
        ("OVERLAPPING_PROPERTY", 4),
        ("DUPLICATE_PROPERTY", 5),
        ("NON_HEX_COLOR", 9),
        ("NAMED_COLOR", 10),
        ("REPEATED_COLOR", 2),
    ]
    assert findings[-1].message == 'Color "#333333" is used multiple times. Consider using a variable.'


def test_units_follow_font_size(styles_of):
    """Once font-size picks a unit, other font sizes and spacing must follow it."""
    scss = """.page {
  font-size: 16px;
  margin: 1rem;
}

.page__title {
  font-size: 2em;
}
"""
    findings = check_styles(styles_of(scss))
    assert [f.message for f in findings] == [
        "Inconsistent units: margin uses rem while font-size uses px",
        "Inconsistent units: mixing px and em",
    ]


def test_comments_display_and_prefixes(styles_of):
    """Commented code, default display values and hand-written prefixes are reported."""
    scss = """// .old { color: #000; }
/* Layout helpers */
div {
  display: block;
  -webkit-transition: opacity 0.2s;
}
"""
    findings = check_styles(styles_of(scss))
    assert [(f.code, f.line) for f in findings] == [
        ("REDUNDANT_DISPLAY", 4),
        ("COMMENTED_CODE", 1),
        ("VENDOR_PREFIX", 5),
    ]


def test_display_inside_media_is_allowed(styles_of):
    """A display value inside @media may restore an earlier override."""
    scss = """@media (min-width: 768px) {
  div {
    display: block;
  }
}
"""
    assert check_styles(styles_of(scss)) == []


def test_redundant_inherited_from_block(styles_of):
    """An element restating its block's inheritable value is reported."""
    scss = """.menu {
  color: #222222;
}

.menu__item {
  color: #222222;
}
"""
    findings = check_styles(styles_of(scss))
    assert codes(findings) == ["REDUNDANT_INHERITED", "REPEATED_COLOR"]
    assert findings[0].line == 6
    assert findings[0].message == 'Property "color: #222222" is already inherited from ".menu"'


def test_paragraph_typography_is_reported_on_the_page(styles_of):
    """A paragraph class with font styling is reported against the HTML page."""
    page = '<!DOCTYPE html>\n<html lang="en">\n<body>\n<p class="intro__text">Hi</p>\n</body>\n</html>\n'
    scss = """.intro__text {
  font-size: 18px;
}
"""
    findings = check_styles(styles_of(scss, {"index.html": page}))
    assert [(f.code, f.file_path, f.line) for f in findings] == [("PARAGRAPH_TYPOGRAPHY", "index.html", 4)]


def test_normalize_is_not_checked(snapshot_of):
    """The normalize stylesheet is third-party code."""
    snapshot = snapshot_of({"styles/normalize.css": "div {\n  display: block;\n  color: red;\n}\n"})
    assert check_styles(snapshot) == []


def test_style_syntax_errors(styles_of):
    """Statements without a colon and blocks without a selector are syntax errors."""
    scss = """color red;

{
  opacity: 1;
}
"""
    findings = check_style_syntax(styles_of(scss))
    assert [(f.message, f.line) for f in findings] == [
        ("CSS syntax error: Unexpected statement: color red", 1),
        ("CSS syntax error: Block without a selector", 3),
    ]


def test_unreadable_stylesheet(snapshot_of):
    """A stylesheet that is not UTF-8 is reported as unreadable."""
    snapshot = snapshot_of({"styles/normalize.css": NORMALIZE, "styles/style.scss": b"\xff\xfe.a { opacity: 1; }"})
    findings = check_style_syntax(snapshot)
    assert codes(findings) == ["STYLESHEET_UNREADABLE"]
    assert findings[0].file_path == "styles/style.scss"


def test_helpers():
    """Interactive class detection and shorthand overlap."""
    assert is_interactive_class("header__link")
    assert is_interactive_class("btn")
    assert not is_interactive_class("btn--primary")
    assert not is_interactive_class("linkedin")
    assert has_partial_overlap("10px 20px", "10px 20px 5px")
    assert not has_partial_overlap("10px", "20px")


def test_declarations_in_nested_media_are_checked(styles_of):
    """A @media block nested in a rule is checked like the rule itself."""
    scss = """.hero {
  background-color: #000000;

  @media (min-width: 768px) {
    background-image: url("../images/hero-large.jpg");
    color: rgb(0, 0, 0);
    -webkit-transition: opacity 1s;
  }
}

.promo {
  @media (min-width: 768px) {
    background-image: url("../images/promo.jpg");
  }
}
"""
    findings = check_styles(styles_of(scss))
    assert sorted((f.code, f.line) for f in findings) == [
        ("BACKGROUND_WITHOUT_COLOR", 13),
        ("NON_HEX_COLOR", 6),
        ("VENDOR_PREFIX", 7),
    ]


def test_nested_media_does_not_repeat_nesting_finding(styles_of):
    """A too-deep selector is reported once, not again for its nested @media block."""
    scss = """.menu__list__item__link {
  padding: 8px;

  @media (min-width: 768px) {
    padding: 16px;
  }
}
"""
    assert codes(check_styles(styles_of(scss))) == ["NESTING_TOO_DEEP"]
