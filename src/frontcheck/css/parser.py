# src/frontcheck/css/parser.py
import logging
from typing import List, Optional, Tuple, Union

import tinycss2

from ..errors import ParseError
from .models import AtRule, CommentNode, Declaration, StyleRule, StyleSheet, SyntaxIssue

logger = logging.getLogger(__name__)

Node = Union[StyleRule, AtRule]


def convert_line_comments(text: str) -> str:
    """
    Rewrites SCSS '// ...' comments as '/* ... */' so the CSS tokenizer sees
    them as comments. Strings, block comments and url(...) are left alone and
    line numbers are preserved.
    """
    out: List[str] = []
    i, length = 0, len(text)
    quote: Optional[str] = None
    in_block = False
    paren_depth = 0

    while i < length:
        char = text[i]
        pair = text[i:i + 2]

        if in_block:
            out.append(char)
            if pair == '*/':
                out.append('/')
                i += 2
                in_block = False
                continue
            i += 1
            continue

        if quote:
            out.append(char)
            if char == '\\' and i + 1 < length:
                out.append(text[i + 1])
                i += 2
                continue
            if char == quote:
                quote = None
            i += 1
            continue

        if pair == '/*':
            in_block = True
            out.append(pair)
            i += 2
            continue
        if char in ('"', "'"):
            quote = char
        elif char == '(':
            paren_depth += 1
        elif char == ')':
            paren_depth = max(paren_depth - 1, 0)
        elif pair == '//' and paren_depth == 0:
            end = text.find('\n', i)
            end = length if end == -1 else end
            body = text[i + 2:end].replace('*/', '* /')
            out.append(f"/*{body}*/")
            i = end
            continue

        out.append(char)
        i += 1

    return "".join(out)


def _serialize(nodes) -> str:
    return tinycss2.serialize(nodes).replace('/**/', '').strip()


def _strip_whitespace(nodes: list) -> list:
    start, end = 0, len(nodes)
    while start < end and nodes[start].type == 'whitespace':
        start += 1
    while end > start and nodes[end - 1].type == 'whitespace':
        end -= 1
    return nodes[start:end]


def _is_literal(node, value: str) -> bool:
    return node.type == 'literal' and node.value == value


class StyleSheetParser:
    """
    Parses SCSS/CSS source into a StyleSheet tree on top of the tinycss2
    tokenizer. Nesting is preserved; every node keeps its source line.
    """

    def parse(self, path: str, text: str, is_normalize: bool = False) -> StyleSheet:
        clean = text.replace('\ufeff', '')
        sheet = StyleSheet(path=path, text=clean, lines=clean.splitlines(), is_normalize=is_normalize)

        try:
            tokens = tinycss2.parse_component_value_list(convert_line_comments(clean), skip_comments=False)
            declarations, children = self._parse_block(tokens, sheet)
        except RecursionError as e:
            raise ParseError("Blocks are nested too deeply", path) from e
        sheet.declarations = declarations
        sheet.children = children
        logger.debug("Parsed %s: %d top-level nodes, %d comments", path, len(children), len(sheet.comments))
        return sheet

    def _parse_block(self, tokens: list, sheet: StyleSheet) -> Tuple[List[Declaration], List[Node]]:
        declarations: List[Declaration] = []
        children: List[Node] = []
        buffer: list = []

        for token in tokens:
            if token.type == 'comment':
                sheet.comments.append(CommentNode(text=token.value, line=token.source_line))
                continue
            if token.type == 'error':
                sheet.syntax_issues.append(SyntaxIssue(message=token.message, line=token.source_line))
                continue

            if token.type == '{} block':
                # SCSS interpolation: '#{$name}' belongs to the prelude
                if buffer and _is_literal(buffer[-1], '#'):
                    buffer.append(token)
                    continue
                self._close_block(buffer, token, children, sheet)
                buffer = []
            elif _is_literal(token, ';'):
                self._close_statement(buffer, declarations, children, sheet)
                buffer = []
            else:
                buffer.append(token)

        self._close_statement(buffer, declarations, children, sheet)
        return declarations, children

    def _close_block(self, prelude: list, block, children: List[Node], sheet: StyleSheet) -> None:
        prelude = _strip_whitespace(prelude)
        line = prelude[0].source_line if prelude else block.source_line
        declarations, nested = self._parse_block(block.content, sheet)

        if prelude and prelude[0].type == 'at-keyword':
            children.append(AtRule(
                name=prelude[0].lower_value,
                prelude=_serialize(prelude[1:]),
                line=line,
                has_block=True,
                declarations=declarations,
                children=nested,
            ))
            return

        selector = _serialize(prelude)
        if not selector:
            sheet.syntax_issues.append(SyntaxIssue(message="Block without a selector", line=line))
        children.append(StyleRule(selector=selector, line=line, declarations=declarations, children=nested))

    def _close_statement(
            self,
            statement: list,
            declarations: List[Declaration],
            children: List[Node],
            sheet: StyleSheet
    ) -> None:
        statement = _strip_whitespace(statement)
        if not statement:
            return

        line = statement[0].source_line
        if statement[0].type == 'at-keyword':
            children.append(AtRule(name=statement[0].lower_value, prelude=_serialize(statement[1:]), line=line))
            return

        colon = next((i for i, t in enumerate(statement) if _is_literal(t, ':')), None)
        if colon is None or colon == 0:
            sheet.syntax_issues.append(SyntaxIssue(
                message=f"Unexpected statement: {_serialize(statement)[:80]}",
                line=line,
            ))
            return

        prop = _serialize(statement[:colon])
        value = _serialize(statement[colon + 1:])
        important = False
        if value.lower().endswith('!important'):
            important = True
            value = value[:-len('!important')].strip()

        declarations.append(Declaration(prop=prop, value=value, line=line, important=important))
