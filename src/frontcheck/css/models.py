# src/frontcheck/css/models.py
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple, Union

from pydantic import BaseModel, Field

from .selectors import resolve_selectors


class Declaration(BaseModel):
    prop: str
    value: str
    line: Optional[int] = None
    important: bool = False

    @property
    def is_variable(self) -> bool:
        """SCSS variables ($x) and CSS custom properties (--x)."""
        return self.prop.startswith(('$', '--'))

    @property
    def name(self) -> str:
        return self.prop.lower()


class CommentNode(BaseModel):
    text: str
    line: Optional[int] = None


class SyntaxIssue(BaseModel):
    message: str
    line: Optional[int] = None


class StyleRule(BaseModel):
    """A selector block, possibly holding nested SCSS rules."""
    selector: str
    line: Optional[int] = None
    declarations: List[Declaration] = Field(default_factory=list)
    children: List[Union['StyleRule', 'AtRule']] = Field(default_factory=list)


class AtRule(BaseModel):
    """@media, @supports, @include, @use ... with or without a block."""
    name: str
    prelude: str = ""
    line: Optional[int] = None
    has_block: bool = False
    declarations: List[Declaration] = Field(default_factory=list)
    children: List[Union['StyleRule', 'AtRule']] = Field(default_factory=list)


StyleRule.model_rebuild()
AtRule.model_rebuild()


@dataclass(frozen=True)
class RuleContext:
    """A style rule seen during a walk, with its selectors fully resolved."""
    rule: StyleRule
    selectors: Tuple[str, ...]
    parent: Optional['RuleContext'] = None
    conditions: Tuple[str, ...] = ()  # enclosing at-rule preludes, e.g. '@media (min-width: 768px)'

    @property
    def line(self) -> Optional[int]:
        return self.rule.line

    @property
    def declarations(self) -> List[Declaration]:
        return self.rule.declarations


class StyleSheet(BaseModel):
    """
    Parsed representation of one .scss/.css file.
    Top-level declarations are SCSS variables and stray statements.
    """
    path: str
    text: str = ""
    lines: List[str] = Field(default_factory=list)
    is_normalize: bool = False
    declarations: List[Declaration] = Field(default_factory=list)
    children: List[Union[StyleRule, AtRule]] = Field(default_factory=list)
    comments: List[CommentNode] = Field(default_factory=list)
    syntax_issues: List[SyntaxIssue] = Field(default_factory=list)
    read_error: Optional[str] = None

    def walk(self) -> Iterator[RuleContext]:
        """
        Yields every style rule (nested ones included) in source order, plus
        one context per at-rule block that holds declarations directly inside
        a style rule.
        """
        yield from _walk(self.children, (), None, ())

    def all_declarations(self) -> List[Tuple[Declaration, Optional[RuleContext]]]:
        """Every declaration with its owning rule, sorted by source line."""
        found: List[Tuple[Declaration, Optional[RuleContext]]] = [(d, None) for d in self.declarations]
        for ctx in self.walk():
            found.extend((d, ctx) for d in ctx.declarations)
        return sorted(found, key=lambda item: item[0].line or 0)

    def source_line(self, line: Optional[int]) -> str:
        if not line or line > len(self.lines):
            return ""
        return self.lines[line - 1].strip()


def _walk(
        nodes: List[Union[StyleRule, AtRule]],
        parent_selectors: Tuple[str, ...],
        parent: Optional[RuleContext],
        conditions: Tuple[str, ...]
) -> Iterator[RuleContext]:
    for node in nodes:
        if isinstance(node, StyleRule):
            ctx = RuleContext(
                rule=node,
                selectors=tuple(resolve_selectors(parent_selectors, node.selector)),
                parent=parent,
                conditions=conditions,
            )
            yield ctx
            yield from _walk(node.children, ctx.selectors, ctx, conditions)
        elif node.has_block:
            inner = conditions + (f"@{node.name} {node.prelude}".strip(),)
            if parent is not None and node.declarations:
                # '.hero { @media (...) { color: ... } }' styles the enclosing selectors
                yield RuleContext(
                    rule=StyleRule(selector="&", line=node.line, declarations=node.declarations),
                    selectors=parent_selectors,
                    parent=parent,
                    conditions=inner,
                )
            yield from _walk(node.children, parent_selectors, parent, inner)
