# tests/core/test_css_parser.py
from frontcheck.css.models import AtRule, StyleRule
from frontcheck.css.parser import StyleSheetParser, convert_line_comments
from frontcheck.css.selectors import bem_depth, has_state_guard, nesting_levels, resolve_selectors, split_selector_list
from frontcheck.css.values import color_functions, first_unit, hex_colors, is_svg_url, named_colors

SCSS = """@use "variables";
$gap: 8px; // spacing
.card {
  padding: $gap;
  color: #fff !important;

  &__title,
  &--wide .card__title {
    margin: 0;
  }

  @media (min-width: 768px) {
    padding: 16px;
  }
}
"""


def test_convert_line_comments_keeps_urls_and_lines():
    """'//' inside url() or strings is not a comment; line count is unchanged."""
    text = 'a { background: url(//cdn.example.com/x.png); } // note\nb { content: "//"; }'
    converted = convert_line_comments(text)
    assert "url(//cdn.example.com/x.png)" in converted
    assert "/* note*/" in converted
    assert 'content: "//"' in converted
    assert converted.count("\n") == text.count("\n")


def test_parse_nested_scss():
    """Variables, nested rules, at-rules and comments keep their source lines."""
    sheet = StyleSheetParser().parse("styles/style.scss", SCSS)

    assert [d.prop for d in sheet.declarations] == ["$gap"]
    assert sheet.declarations[0].is_variable
    assert [c.text.strip() for c in sheet.comments] == ["spacing"]

    use, card = sheet.children
    assert isinstance(use, AtRule) and use.name == "use" and not use.has_block
    assert isinstance(card, StyleRule) and card.selector == ".card" and card.line == 3

    color = card.declarations[1]
    assert color.value == "#fff" and color.important

    nested, media = card.children
    assert nested.line == 7
    assert isinstance(media, AtRule) and media.has_block and media.prelude == "(min-width: 768px)"
    assert sheet.syntax_issues == []


def test_walk_resolves_selectors():
    """The walk yields fully resolved selectors and enclosing conditions."""
    sheet = StyleSheetParser().parse("styles/style.scss", SCSS)
    contexts = list(sheet.walk())

    assert contexts[0].selectors == (".card",)
    assert contexts[1].selectors == (".card__title", ".card--wide .card__title")
    assert contexts[1].parent is contexts[0]
    assert [d.line for d, _ in sheet.all_declarations()] == [2, 4, 5, 9, 13]


def test_walk_includes_nested_media_declarations():
    """Declarations directly inside a nested @media apply to the enclosing selectors."""
    sheet = StyleSheetParser().parse("styles/style.scss", SCSS)
    media = list(sheet.walk())[2]

    assert media.selectors == (".card",)
    assert media.conditions == ("@media (min-width: 768px)",)
    assert media.parent is not None and media.parent.rule.selector == ".card"
    assert [(d.prop, d.value) for d in media.declarations] == [("padding", "16px")]


def test_selector_helpers():
    """Selector lists, nesting levels and state guards."""
    assert split_selector_list("a, b:not(.c, .d)") == ["a", "b:not(.c, .d)"]
    assert resolve_selectors([".card"], "&__item, .title") == [".card__item", ".card .title"]
    assert nesting_levels(".a > .b .c") == 2
    assert nesting_levels(".a + .b ~ .c") == 0
    assert bem_depth(".menu__item .menu__link") == 2
    assert has_state_guard(".btn:hover")
    assert has_state_guard("input[type=checkbox] + .label")
    assert not has_state_guard(".card::before")


def test_value_helpers():
    """Colour, url and unit extraction from declaration values."""
    assert hex_colors("1px solid #ABCDEF, url(img#frag.png)") == ["#abcdef"]
    assert named_colors("1px solid Red") == ["red"]
    assert named_colors("var(--white) transparent") == []
    assert named_colors("1px solid $red") == []
    assert named_colors("darken(Navy, 10%)") == ["navy"]
    assert color_functions("linear-gradient(rgba(0, 0, 0, .5), hsl(0, 0%, 100%)) url(rgb.png)") == ["rgba", "hsl"]
    assert is_svg_url("../images/icon.svg?v=2")
    assert not is_svg_url("../images/photo.jpg")
    assert first_unit("0 1.5rem") == "rem"
    assert first_unit("$gap") is None
