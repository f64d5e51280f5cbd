# cyselenium/source.py
# tree-sitter front end: parses Cypress spec / command files (JS or TS) and
# exposes the handful of node helpers the translator works with.

from __future__ import annotations

import logging
from pathlib import PurePath
from typing import Callable, Iterator, List, Optional

import tree_sitter_typescript as tstypescript
from tree_sitter import Language, Node, Parser, Tree

logger = logging.getLogger(__name__)

# ------------------------------ Config ---------------------------------------

TS_LANGUAGE = Language(tstypescript.language_typescript())
TSX_LANGUAGE = Language(tstypescript.language_tsx())

_TSX_SUFFIXES = {".tsx", ".jsx"}

FUNCTION_TYPES = frozenset({"arrow_function", "function_expression", "function", "generator_function"})

# ------------------------------ Parsing --------------------------------------


def parse_source(source: str, filename: str = "") -> Tree:
    """Parse JS/TS source. TSX grammar is used for .tsx/.jsx files."""
    language = TSX_LANGUAGE if PurePath(filename).suffix.lower() in _TSX_SUFFIXES else TS_LANGUAGE
    tree = Parser(language).parse(source.replace("\r\n", "\n").encode("utf-8"))
    if tree.root_node.has_error:
        logger.warning("%s: source has syntax errors; translating what parsed", filename or "<input>")
    return tree


# ------------------------------ Node helpers ---------------------------------


def text(node: Optional[Node]) -> str:
    if node is None or node.text is None:
        return ""
    return node.text.decode("utf-8")


def named(node: Optional[Node]) -> List[Node]:
    """Named children without comments."""
    if node is None:
        return []
    return [c for c in node.named_children if c.type != "comment"]


def first_named(node: Optional[Node]) -> Optional[Node]:
    children = named(node)
    return children[0] if children else None


def walk(node: Node, prune: Optional[Callable[[Node], bool]] = None) -> Iterator[Node]:
    """Pre-order traversal; nodes for which ``prune`` is true are skipped with their subtrees."""
    stack = [node]
    while stack:
        n = stack.pop()
        if prune is not None and prune(n):
            continue
        yield n
        stack.extend(reversed(n.children))


def line_of(node: Node) -> int:
    return node.start_point[0] + 1


def call_arguments(call: Node) -> List[Node]:
    args = call.child_by_field_name("arguments")
    if args is None:
        return []
    # tagged template: foo`x`
    if args.type != "arguments":
        return [args]
    return named(args)


def is_function(node: Optional[Node]) -> bool:
    return node is not None and node.type in FUNCTION_TYPES


def function_body(node: Node) -> Optional[Node]:
    return node.child_by_field_name("body")


def function_params(node: Node) -> List[str]:
    """Parameter names of an arrow function or function expression."""
    single = node.child_by_field_name("parameter")
    if single is not None:
        return [text(single)]
    params = node.child_by_field_name("parameters")
    names: List[str] = []
    for param in named(params):
        target = param.child_by_field_name("pattern")
        if target is None:
            target = param
        if target.type == "assignment_pattern":
            left = target.child_by_field_name("left")
            target = left if left is not None else target
        elif target.type == "rest_pattern":
            inner = first_named(target)
            target = inner if inner is not None else target
        if target.type == "this":
            continue
        names.append(text(target))
    return names
