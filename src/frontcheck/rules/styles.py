# src/frontcheck/rules/styles.py
import re
from typing import Dict, List, Optional, Set, Tuple

from ..css.models import Declaration, RuleContext, StyleSheet
from ..css.selectors import (
    CLASS_RE, bem_depth, bem_parts, compounds, has_state_guard, pseudo_classes,
)
from ..css.values import (
    COLOR_PROPERTIES, color_functions, has_color, hex_colors, is_svg_url, is_vendor_prefixed,
    first_unit, named_colors, normalize_value, urls, vendor_values,
)
from ..dom.models import HTMLDocument
from ..model import Finding
from ..snapshot import ProjectSnapshot
from .base import Findings, rule_spec

INTERACTIVE_WORDS = {"btn", "button", "link"}
REQUIRED_STATES = (("hover",), ("active",), ("focus", "focus-visible"))
STATE_TRIGGERS = {"hover", "focus", "focus-visible", "active"}
LAYOUT_PROPERTIES = {"width", "height", "position", "top", "right", "bottom", "left", "inset"}

INHERITABLE_PROPERTIES = {
    "color", "line-height", "letter-spacing", "text-align", "text-transform", "visibility",
    "cursor", "white-space", "word-spacing", "list-style",
}

SHORTHAND_PROPERTIES = {
    "padding", "margin", "border", "background", "font", "border-radius", "transition",
    "animation", "flex", "grid", "outline",
}

DEFAULT_BLOCK_ELEMENTS = {
    "div", "p", "h1", "h2", "h3", "h4", "h5", "h6", "article", "aside", "footer", "header",
    "section", "nav", "main", "form", "ul", "ol",
}
TYPOGRAPHY_PROPERTIES = {"line-height", "letter-spacing", "text-align"}

COMMENTED_DECLARATION_RE = re.compile(r'(^|[\s{;])[a-z-]+\s*:\s*[^;{}\n]+;', re.MULTILINE)
COMMENTED_BLOCK_RE = re.compile(r'[.#&]?[a-zA-Z][\w-]*[^{}\n]*\{[^{}]*\}')
TAG_RE = re.compile(r'^([a-z][a-z0-9]*)')


def _subject(selector: str) -> str:
    parts = compounds(selector)
    return parts[-1] if parts else ""


def is_interactive_class(class_name: str) -> bool:
    if '--' in class_name:
        return False
    return any(part.split('-')[-1] in INTERACTIVE_WORDS for part in bem_parts(class_name))


def is_inheritable(prop: str) -> bool:
    return prop in INHERITABLE_PROPERTIES or prop == "font" or prop.startswith("font-")


def is_layout_property(prop: str) -> bool:
    return prop in LAYOUT_PROPERTIES or prop.startswith(("margin", "padding", "inset"))


def has_partial_overlap(first: str, second: str) -> bool:
    """'10px 20px' vs '10px 20px 5px': same leading parts, different length."""
    parts1, parts2 = first.split(), second.split()
    if len(parts1) == 1 and len(parts2) == 1:
        return False
    shorter, longer = sorted((parts1, parts2), key=len)
    return len(shorter) != len(longer) and longer[:len(shorter)] == shorter


# --- Per-rule checks ---

def in_nested_at_rule(ctx: RuleContext) -> bool:
    """'.hero { @media (...) { ... } }': the block styles the enclosing selectors."""
    return ctx.parent is not None and ctx.selectors == ctx.parent.selectors


def _check_nesting(sheet: StyleSheet, ctx: RuleContext, max_depth: int, out: Findings) -> None:
    if in_nested_at_rule(ctx):
        return
    for selector in ctx.selectors:
        if has_state_guard(selector):
            continue
        depth = bem_depth(selector)
        if depth > max_depth:
            out.add(
                "NESTING_TOO_DEEP", sheet.path,
                f"Selector nesting too deep ({depth} levels, max {max_depth}): {selector}",
                line=ctx.line, context=sheet.source_line(ctx.line),
                suggestion="Flatten the selector; use a new BEM block instead of deeper elements",
            )
            return


def _check_state_layout(sheet: StyleSheet, ctx: RuleContext, out: Findings) -> None:
    states = {p for sel in ctx.selectors for p in pseudo_classes(_subject(sel))} & STATE_TRIGGERS
    if not states:
        return
    for decl in ctx.declarations:
        if is_layout_property(decl.name):
            out.add(
                "STATE_CHANGES_LAYOUT", sheet.path,
                f"Layout property \"{decl.name}\" changed in :{sorted(states)[0]} state",
                line=decl.line, context=sheet.source_line(decl.line),
                suggestion="Animate transform or opacity instead of layout properties",
            )


def _check_background(sheet: StyleSheet, ctx: RuleContext, out: Findings) -> None:
    image_decl: Optional[Declaration] = None
    has_bg_color = in_nested_at_rule(ctx) and any(
        d.name == "background-color" for d in ctx.parent.declarations
    )
    for decl in ctx.declarations:
        if decl.name == "background-color":
            has_bg_color = True
        elif decl.name in ("background", "background-image"):
            if image_decl is None and any(not is_svg_url(u) for u in urls(decl.value)):
                image_decl = decl
            if decl.name == "background" and has_color(re.sub(r'url\([^)]*\)', ' ', decl.value)):
                has_bg_color = True

    if image_decl is not None and not has_bg_color:
        out.add(
            "BACKGROUND_WITHOUT_COLOR", sheet.path,
            "Background image without a fallback background-color",
            line=image_decl.line, context=sheet.source_line(image_decl.line),
            suggestion="Add a background-color close to the image's dominant colour",
        )


def _check_duplicates(sheet: StyleSheet, ctx: RuleContext, out: Findings) -> None:
    seen: Dict[str, Declaration] = {}
    for decl in ctx.declarations:
        prev = seen.get(decl.name)
        if prev is not None:
            same = normalize_value(prev.value) == normalize_value(decl.value)
            if same or (decl.name in SHORTHAND_PROPERTIES and has_partial_overlap(prev.value, decl.value)):
                out.add(
                    "DUPLICATE_PROPERTY" if same else "OVERLAPPING_PROPERTY", sheet.path,
                    f"Duplicate property \"{decl.name}\" with identical values" if same
                    else f"Property \"{decl.name}\" has overlapping values",
                    line=decl.line,
                    context=f"Previous: {prev.name}: {prev.value} (line {prev.line})\n"
                            f"Current: {decl.name}: {decl.value} (line {decl.line})",
                    suggestion="Remove duplicate property" if same
                    else "Use individual properties instead of shorthand with partial overlap",
                )
        seen[decl.name] = decl


def _check_display_override(sheet: StyleSheet, ctx: RuleContext, out: Findings) -> None:
    if ctx.conditions:
        # Inside @media a display value may restore an earlier override
        return
    tags = []
    for selector in ctx.selectors:
        match = TAG_RE.match(_subject(selector))
        if not match:
            return
        tags.append(match.group(1))

    for decl in ctx.declarations:
        if decl.name != "display":
            continue
        value = normalize_value(decl.value)
        if value == "block" and all(t in DEFAULT_BLOCK_ELEMENTS for t in tags):
            element = tags[0]
        elif value == "list-item" and all(t == "li" for t in tags):
            element = "li"
        else:
            continue
        out.add(
            "REDUNDANT_DISPLAY", sheet.path,
            f"Unnecessary display property override on {element}",
            line=decl.line, context=sheet.source_line(decl.line),
            suggestion=f"Remove redundant display property, {element} is {value} by default",
            severity="WARNING",
        )


def _inheritance_parents(ctx: RuleContext, block_rules: Dict[str, List[RuleContext]]) -> List[RuleContext]:
    parents: List[RuleContext] = []
    raw = ctx.rule.selector.strip()
    # '&:hover', '&.is-open', '&[disabled]' style the same element, not a child
    if ctx.parent is not None and not re.match(r'^&(?:[:.\[]|--)', raw):
        parents.append(ctx.parent)

    for selector in ctx.selectors:
        parts = compounds(selector)
        if len(parts) != 1:
            continue
        classes = CLASS_RE.findall(parts[0])
        if len(classes) == 1 and '__' in classes[0] and '--' not in classes[0]:
            block = '.' + classes[0].split('__', 1)[0]
            for candidate in block_rules.get(block, []):
                if candidate is not ctx and candidate not in parents:
                    parents.append(candidate)
    return parents


def _check_inheritance(
        sheet: StyleSheet,
        ctx: RuleContext,
        block_rules: Dict[str, List[RuleContext]],
        out: Findings
) -> None:
    parents = [p for p in _inheritance_parents(ctx, block_rules) if p.conditions == ctx.conditions]
    if not parents:
        return
    for decl in ctx.declarations:
        if decl.is_variable or decl.important or not is_inheritable(decl.name):
            continue
        value = normalize_value(decl.value)
        for parent in parents:
            if any(d.name == decl.name and normalize_value(d.value) == value for d in parent.declarations):
                out.add(
                    "REDUNDANT_INHERITED", sheet.path,
                    f"Property \"{decl.name}: {decl.value}\" is already inherited from \"{', '.join(parent.selectors)}\"",
                    line=decl.line, context=sheet.source_line(decl.line),
                    suggestion="Remove the declaration; the value is inherited",
                    severity="WARNING",
                )
                break


# --- Per-stylesheet checks ---

def _check_comments(sheet: StyleSheet, out: Findings) -> None:
    for comment in sheet.comments:
        text = comment.text
        if COMMENTED_DECLARATION_RE.search(text) or COMMENTED_BLOCK_RE.search(text):
            out.add(
                "COMMENTED_CODE", sheet.path, "Commented-out code should be removed",
                line=comment.line, context=sheet.source_line(comment.line),
                severity="WARNING",
            )


def _check_declaration_values(sheet: StyleSheet, out: Findings) -> None:
    """Colour formats, unit consistency and hand-written vendor prefixes."""
    established: Optional[str] = None

    for decl, _ctx in sheet.all_declarations():
        context = sheet.source_line(decl.line)
        if decl.is_variable:
            continue

        for function in dict.fromkeys(color_functions(decl.value)):
            out.add(
                "NON_HEX_COLOR", sheet.path, f"Color format {function}() should be replaced with hex",
                line=decl.line, context=context, severity="WARNING",
            )
        if decl.name in COLOR_PROPERTIES:
            for name in dict.fromkeys(named_colors(decl.value)):
                out.add(
                    "NAMED_COLOR", sheet.path, f"Named color \"{name}\" should be replaced with hex",
                    line=decl.line, context=context, severity="WARNING",
                )

        if decl.name == "font-size":
            unit = first_unit(decl.value)
            if unit and established is None:
                established = unit
            elif unit and unit != established:
                out.add(
                    "INCONSISTENT_UNITS", sheet.path, f"Inconsistent units: mixing {established} and {unit}",
                    line=decl.line, context=context, severity="WARNING",
                )
        elif established and decl.name.startswith(("margin", "padding")):
            unit = first_unit(decl.value)
            if unit and unit != established:
                kind = "margin" if decl.name.startswith("margin") else "padding"
                out.add(
                    "INCONSISTENT_UNITS", sheet.path,
                    f"Inconsistent units: {kind} uses {unit} while font-size uses {established}",
                    line=decl.line, context=context, severity="WARNING",
                )

        if is_vendor_prefixed(decl.name):
            out.add(
                "VENDOR_PREFIX", sheet.path,
                f"Vendor-prefixed property \"{decl.name}\" should be added by autoprefixer",
                line=decl.line, context=context,
            )
        for prefixed in dict.fromkeys(vendor_values(decl.value)):
            out.add(
                "VENDOR_PREFIX", sheet.path,
                f"Vendor-prefixed value \"{prefixed}\" should be added by autoprefixer",
                line=decl.line, context=context,
            )


# --- Style set checks ---

def _check_interactive_states(sheets: List[StyleSheet], out: Findings) -> None:
    """Every interactive BEM class needs hover, active and focus rules somewhere."""
    defined: Dict[str, Tuple[StyleSheet, RuleContext]] = {}
    states: Dict[str, Set[str]] = {}

    for sheet in sheets:
        for ctx in sheet.walk():
            for selector in ctx.selectors:
                parts = compounds(selector)
                for index, compound in enumerate(parts):
                    pseudos = set(pseudo_classes(compound))
                    for class_name in CLASS_RE.findall(compound):
                        if not is_interactive_class(class_name):
                            continue
                        states.setdefault(class_name, set()).update(pseudos)
                        if index == len(parts) - 1 and not pseudos:
                            defined.setdefault(class_name, (sheet, ctx))

    for class_name, (sheet, ctx) in defined.items():
        found = states.get(class_name, set())
        missing = [":" + group[0] for group in REQUIRED_STATES if not found.intersection(group)]
        if missing:
            out.add(
                "MISSING_INTERACTIVE_STATES", sheet.path,
                f"Interactive element \".{class_name}\" is missing {', '.join(missing)} state(s)",
                line=ctx.line, context=sheet.source_line(ctx.line),
                suggestion="Style hover, active and focus states for every control",
            )


def _check_color_reuse(sheets: List[StyleSheet], out: Findings) -> None:
    usages: Dict[str, List[Tuple[StyleSheet, Declaration]]] = {}
    for sheet in sheets:
        for decl, _ctx in sheet.all_declarations():
            if decl.is_variable or 'var(' in decl.value or '$' in decl.value:
                continue
            for color in dict.fromkeys(hex_colors(decl.value)):
                usages.setdefault(color, []).append((sheet, decl))

    for color, uses in usages.items():
        if len(uses) < 2:
            continue
        sheet, decl = uses[0]
        others = "\n".join(f"  - {s.path}:{d.line}: {s.source_line(d.line)}" for s, d in uses[1:])
        out.add(
            "REPEATED_COLOR", sheet.path,
            f"Color \"{color}\" is used multiple times. Consider using a variable.",
            line=decl.line,
            context=f"First usage: {sheet.source_line(decl.line)}\nOther usages:\n{others}",
            severity="WARNING",
        )


def _check_paragraph_typography(
        documents: List[HTMLDocument],
        sheets: List[StyleSheet],
        out: Findings
) -> None:
    """Paragraphs should inherit typography instead of styling it through their own class."""
    typography: Dict[str, Tuple[StyleSheet, Declaration]] = {}
    for sheet in sheets:
        for ctx in sheet.walk():
            for decl in ctx.declarations:
                if "font" not in decl.name and decl.name not in TYPOGRAPHY_PROPERTIES:
                    continue
                for selector in ctx.selectors:
                    for class_name in CLASS_RE.findall(_subject(selector)):
                        typography.setdefault(class_name, (sheet, decl))

    if not typography:
        return

    for doc in documents:
        for paragraph in doc.find_all('p'):
            for class_name in paragraph.classes:
                if class_name not in typography:
                    continue
                sheet, decl = typography[class_name]
                out.add(
                    "PARAGRAPH_TYPOGRAPHY", doc.path,
                    f"Paragraph element should not have direct font styling. Class: {class_name}",
                    line=paragraph.line,
                    context=f"{decl.name}: {decl.value} - defined in {sheet.path}:{decl.line}",
                    suggestion="Move font styles to a parent element or create a typography class",
                    severity="WARNING",
                )


@rule_spec(
    name="styles",
    category="STYLES",
    codes=[
        "NESTING_TOO_DEEP", "MISSING_INTERACTIVE_STATES", "STATE_CHANGES_LAYOUT",
        "BACKGROUND_WITHOUT_COLOR", "COMMENTED_CODE", "NON_HEX_COLOR", "NAMED_COLOR",
        "REPEATED_COLOR", "INCONSISTENT_UNITS", "DUPLICATE_PROPERTY", "OVERLAPPING_PROPERTY",
        "REDUNDANT_INHERITED", "REDUNDANT_DISPLAY", "PARAGRAPH_TYPOGRAPHY", "VENDOR_PREFIX",
    ],
)
def check_styles(snapshot: ProjectSnapshot) -> List[Finding]:
    """CSS/SCSS authoring conventions over the student's own stylesheets."""
    out = Findings("styles", "STYLES")
    sheets = snapshot.authored_stylesheets()
    max_depth = snapshot.settings.max_nesting_depth

    # Rules whose whole selector is a single class, by selector
    block_rules: Dict[str, List[RuleContext]] = {}
    for sheet in sheets:
        for ctx in sheet.walk():
            for selector in ctx.selectors:
                if re.fullmatch(r'\.[a-z][\w-]*', selector) and '__' not in selector:
                    block_rules.setdefault(selector, []).append(ctx)

    for sheet in sheets:
        for ctx in sheet.walk():
            _check_nesting(sheet, ctx, max_depth, out)
            _check_state_layout(sheet, ctx, out)
            _check_background(sheet, ctx, out)
            _check_duplicates(sheet, ctx, out)
            _check_display_override(sheet, ctx, out)
            _check_inheritance(sheet, ctx, block_rules, out)
        _check_comments(sheet, out)
        _check_declaration_values(sheet, out)

    _check_interactive_states(sheets, out)
    _check_color_reuse(sheets, out)
    _check_paragraph_typography(snapshot.documents, sheets, out)
    return out.as_list()


@rule_spec(
    name="style-syntax",
    category="STYLES",
    codes=["STYLESHEET_UNREADABLE", "CSS_SYNTAX_ERROR"],
)
def check_style_syntax(snapshot: ProjectSnapshot) -> List[Finding]:
    """Unreadable stylesheets and tokenizer/parser errors."""
    out = Findings("style-syntax", "STYLES")
    for sheet in snapshot.stylesheets:
        if sheet.read_error:
            out.add("STYLESHEET_UNREADABLE", sheet.path, sheet.read_error)
        for issue in sheet.syntax_issues:
            out.add(
                "CSS_SYNTAX_ERROR", sheet.path, f"CSS syntax error: {issue.message}",
                line=issue.line, context=sheet.source_line(issue.line),
            )
    return out.as_list()


RULES = [check_style_syntax, check_styles]
