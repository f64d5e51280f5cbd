# cyselenium/walker.py
# Depth-first traversal of a callback / test body. Chain statements go to the
# ChainTranslator; if / loops keep their header text and are re-emitted with
# Java braces one level deeper; everything else is recursed into silently.

from __future__ import annotations

import logging
from typing import List, Optional

from tree_sitter import Node

from .chain import extract_chain
from .context import TranslationContext
from .source import first_named, named, text
from .translator import ChainTranslator

logger = logging.getLogger(__name__)

CHAIN_TYPES = ("call_expression", "member_expression")
LOOP_TYPES = ("for_statement", "for_in_statement")


def _strip_parens(node: Optional[Node]) -> str:
    raw = text(node).strip()
    if node is not None and node.type == "parenthesized_expression" and raw.startswith("(") and raw.endswith(")"):
        return raw[1:-1].strip()
    return raw


def _loop_header(node: Node) -> str:
    """Source text between the loop's own parentheses."""
    opening = closing = None
    for child in node.children:
        if child.type == "(" and opening is None:
            opening = child
        elif child.type == ")":
            closing = child
        elif child == node.child_by_field_name("body"):
            break
    if opening is None or closing is None:
        return ""
    raw = node.text[opening.end_byte - node.start_byte:closing.start_byte - node.start_byte]
    return raw.decode("utf-8").strip()


class StructuralWalker:
    def __init__(self, ctx: TranslationContext):
        self.ctx = ctx
        self.translator = ChainTranslator(ctx, self)

    def walk(self, node: Optional[Node], receiver: str = "driver") -> str:
        """Translate a statement block (or an arrow function's expression body)."""
        out: List[str] = []
        if node is not None:
            self._visit(node, receiver, out)
        return "".join(line + "\n" for line in out)

    # ---- dispatch ----

    def _visit(self, node: Node, receiver: str, out: List[str]) -> None:
        kind = node.type
        if kind == "comment":
            return
        if kind == "expression_statement":
            expr = first_named(node)
            if expr is not None and expr.type in CHAIN_TYPES and self._emit_chain(expr, receiver, out):
                return
        elif kind in CHAIN_TYPES:
            if self._emit_chain(node, receiver, out):
                return
        elif kind == "if_statement":
            self._emit_if(node, receiver, out)
            return
        elif kind in LOOP_TYPES:
            self._emit_loop(f"for ({_loop_header(node)}) {{", node.child_by_field_name("body"), receiver, out)
            out.append(self.ctx.indent + "}")
            return
        elif kind == "while_statement":
            condition = _strip_parens(node.child_by_field_name("condition"))
            self._emit_loop(f"while ({condition}) {{", node.child_by_field_name("body"), receiver, out)
            out.append(self.ctx.indent + "}")
            return
        elif kind == "do_statement":
            condition = _strip_parens(node.child_by_field_name("condition"))
            self._emit_loop("do {", node.child_by_field_name("body"), receiver, out)
            out.append(f"{self.ctx.indent}}} while ({condition});")
            return

        for child in named(node):
            self._visit(child, receiver, out)

    def _emit_chain(self, expr: Node, receiver: str, out: List[str]) -> bool:
        chain = extract_chain(expr)
        if not chain:
            return False
        logger.debug("chain %s", ".".join(item.verb for item in chain))
        result = self.translator.translate(chain, receiver)
        out.extend(result.lines)
        return True

    def _emit_body(self, body: Optional[Node], receiver: str, out: List[str]) -> None:
        if body is None:
            return
        with self.ctx.indented():
            self._visit(body, receiver, out)

    def _emit_loop(self, header: str, body: Optional[Node], receiver: str, out: List[str]) -> None:
        out.append(self.ctx.indent + header)
        self._emit_body(body, receiver, out)

    def _emit_if(self, node: Node, receiver: str, out: List[str], keyword: str = "if") -> None:
        condition = _strip_parens(node.child_by_field_name("condition"))
        out.append(f"{self.ctx.indent}{keyword} ({condition}) {{")
        self._emit_body(node.child_by_field_name("consequence"), receiver, out)

        alternative = node.child_by_field_name("alternative")
        branch = first_named(alternative)
        if branch is not None and branch.type == "if_statement":
            self._emit_if(branch, receiver, out, keyword="} else if")
            return
        if branch is not None:
            out.append(self.ctx.indent + "} else {")
            self._emit_body(branch, receiver, out)
        out.append(self.ctx.indent + "}")
