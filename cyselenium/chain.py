# cyselenium/chain.py
# Unrolls a nested call / property-access expression into the flat, ordered
# list of verbs as they are written: cy.get('a').click() -> [get('a'), click()].

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple

from tree_sitter import Node

from .source import call_arguments, text


@dataclass(frozen=True)
class ChainItem:
    verb: str
    args: Tuple[Node, ...] = ()


def _property_name(member: Node) -> str:
    return text(member.child_by_field_name("property"))


def extract_chain(node: Node) -> List[ChainItem]:
    """Return the chain items of node, innermost receiver first.

    A bare identifier root (``cy``) is not an item. Extraction stops silently at
    anything that is neither a call nor a property access (``this``, a call
    result that is itself called, parenthesised expressions, ...).
    """
    chain: List[ChainItem] = []
    current = node
    while current is not None and current.type in ("call_expression", "member_expression"):
        if current.type == "member_expression":
            chain.insert(0, ChainItem(_property_name(current)))
            current = current.child_by_field_name("object")
            continue

        callee = current.child_by_field_name("function")
        args = tuple(call_arguments(current))
        if callee is None:
            break
        if callee.type == "member_expression":
            chain.insert(0, ChainItem(_property_name(callee), args))
            current = callee.child_by_field_name("object")
        elif callee.type == "identifier":
            chain.insert(0, ChainItem(text(callee), args))
            break
        else:
            break
    return chain


def restore_call(item: ChainItem) -> str:
    """Best-effort source text of one chain step, e.g. ``.eq('x')``."""
    return f".{item.verb}({', '.join(text(a) for a in item.args)})"


def chain_path(chain: Sequence[ChainItem]) -> str:
    return ".".join(item.verb for item in chain)
