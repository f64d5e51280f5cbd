# cyselenium/payload.py
# Lowers a JS object literal (a cy.request body) into Gson builder statements:
#
#   { a: 1, user: { name: 'bob' } }
#   ->  JsonObject jsonObject0 = new JsonObject()
#       jsonObject0.addProperty("a", 1)
#       JsonObject userInner1 = new JsonObject()
#       userInner1.addProperty("name", "bob")
#       jsonObject0.add("user", userInner1)
#       String inputString0 = jsonObject0.toString()

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List

from tree_sitter import Node

from .context import TranslationContext
from .literals import java_string, key_text, render
from .source import named, text

_NULLS = ("null", "undefined")


@dataclass
class Payload:
    statements: List[str]
    root: str
    output: str


def _identifier(raw: str) -> str:
    ident = re.sub(r"[^A-Za-z0-9_$]", "_", raw)
    if not ident or ident[0].isdigit():
        ident = "_" + ident
    return ident


def build_payload(node: Node, ctx: TranslationContext) -> Payload:
    index = ctx.next_index()
    root = f"jsonObject{index}"
    output = f"inputString{index}"
    statements = [f"JsonObject {root} = new JsonObject()"]
    _emit_object(node, root, ctx, statements)
    statements.append(f"String {output} = {root}.toString()")
    return Payload(statements, root, output)


def _emit_object(node: Node, parent: str, ctx: TranslationContext, out: List[str]) -> None:
    for member in named(node):
        if member.type == "pair":
            key = key_text(member.child_by_field_name("key"))
            _emit_member(key, member.child_by_field_name("value"), parent, ctx, out)
        elif member.type == "shorthand_property_identifier":
            name = text(member)
            out.append(f"{parent}.addProperty({java_string(name)}, {name})")
        else:
            placeholder = ctx.report("unsupported-body", "request", f"unsupported body member: {text(member)}")
            if placeholder:
                out.append(placeholder)


def _emit_member(key: str, value: Node, parent: str, ctx: TranslationContext, out: List[str]) -> None:
    quoted = java_string(key)
    if value.type == "object":
        child = f"{_identifier(key)}Inner{ctx.next_index()}"
        out.append(f"JsonObject {child} = new JsonObject()")
        _emit_object(value, child, ctx, out)
        out.append(f"{parent}.add({quoted}, {child})")
    elif value.type == "array":
        child = f"{_identifier(key)}Inner{ctx.next_index()}"
        out.append(f"JsonArray {child} = new JsonArray()")
        _emit_array(value, child, ctx, out)
        out.append(f"{parent}.add({quoted}, {child})")
    elif value.type in _NULLS:
        out.append(f"{parent}.add({quoted}, JsonNull.INSTANCE)")
    else:
        out.append(f"{parent}.addProperty({quoted}, {render(value)})")


def _emit_array(node: Node, parent: str, ctx: TranslationContext, out: List[str]) -> None:
    for element in named(node):
        if element.type == "object":
            child = f"itemInner{ctx.next_index()}"
            out.append(f"JsonObject {child} = new JsonObject()")
            _emit_object(element, child, ctx, out)
            out.append(f"{parent}.add({child})")
        elif element.type == "array":
            child = f"itemInner{ctx.next_index()}"
            out.append(f"JsonArray {child} = new JsonArray()")
            _emit_array(element, child, ctx, out)
            out.append(f"{parent}.add({child})")
        elif element.type in _NULLS:
            out.append(f"{parent}.add(JsonNull.INSTANCE)")
        else:
            out.append(f"{parent}.add({render(element)})")
