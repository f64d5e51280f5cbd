# cyselenium/literals.py
# Renders JS string / template literals as Java string expressions.
# Everything that is not a literal is carried through as its source text.

from __future__ import annotations

import re
from typing import List, Optional, Tuple

from tree_sitter import Node

from .source import text

# ------------------------------ Config ---------------------------------------

SPECIAL_KEY_MAP = {
    "{enter}": "Keys.ENTER",
    "{backspace}": "Keys.BACK_SPACE",
    "{esc}": "Keys.ESCAPE",
    "{del}": "Keys.DELETE",
    "{tab}": "Keys.TAB",
    "{space}": '" "',
    "{leftarrow}": "Keys.ARROW_LEFT",
    "{rightarrow}": "Keys.ARROW_RIGHT",
    "{uparrow}": "Keys.ARROW_UP",
    "{downarrow}": "Keys.ARROW_DOWN",
    "{home}": "Keys.HOME",
    "{end}": "Keys.END",
    "{pagedown}": "Keys.PAGE_DOWN",
    "{pageup}": "Keys.PAGE_UP",
    "{ctrl}": "Keys.CONTROL",
    "{alt}": "Keys.ALT",
    "{shift}": "Keys.SHIFT",
    "{meta}": "Keys.META",
}

_KEY_RE = re.compile("|".join(re.escape(k) for k in SPECIAL_KEY_MAP), re.IGNORECASE)

# \u{1F600} | \u00e9 | \x41 | line continuation | any single escaped char
_JS_ESCAPE = re.compile(r"\\(u\{[0-9a-fA-F]+\}|u[0-9a-fA-F]{4}|x[0-9a-fA-F]{2}|\r\n|[\s\S])")
_SIMPLE_ESCAPES = {
    "n": "\n", "r": "\r", "t": "\t", "b": "\b", "f": "\f", "v": "\v", "0": "\0",
    "\n": "", "\r": "", "\r\n": "",
}

Part = Tuple[str, str]  # ("text", value) | ("expr", source) | ("key", java)

# --------------------------- Helpers -----------------------------------------


def _unescape(raw: str) -> str:
    def repl(m: re.Match) -> str:
        seq = m.group(1)
        if seq.startswith("u{"):
            return chr(int(seq[2:-1], 16))
        if len(seq) > 1 and seq[0] in "ux":
            return chr(int(seq[1:], 16))
        return _SIMPLE_ESCAPES.get(seq, seq)
    return _JS_ESCAPE.sub(repl, raw)


def java_string(value: str) -> str:
    escaped = (
        value.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
    )
    return f'"{escaped}"'


def literal_parts(node: Node) -> Optional[List[Part]]:
    """Split a string/template literal into text and substitution parts; None for non-literals."""
    if node.type == "string":
        return [("text", _unescape(text(node)[1:-1]))]
    if node.type != "template_string":
        return None
    raw = node.text or b""
    base = node.start_byte
    parts: List[Part] = []
    pos = 1  # past the opening backtick
    for child in node.children:
        if child.type != "template_substitution":
            continue
        chunk = raw[pos:child.start_byte - base].decode("utf-8")
        if chunk:
            parts.append(("text", _unescape(chunk)))
        inner = [c for c in child.named_children if c.type != "comment"]
        parts.append(("expr", text(inner[0]) if inner else ""))
        pos = child.end_byte - base
    tail = raw[pos:len(raw) - 1].decode("utf-8")
    if tail:
        parts.append(("text", _unescape(tail)))
    return parts


def string_value(node: Optional[Node]) -> Optional[str]:
    """Python value of a string literal or substitution-free template; else None."""
    if node is None:
        return None
    parts = literal_parts(node)
    if parts is None or any(kind != "text" for kind, _ in parts):
        return None
    return "".join(value for _, value in parts)


def _split_keys(parts: List[Part]) -> List[Part]:
    out: List[Part] = []
    for kind, value in parts:
        if kind != "text":
            out.append((kind, value))
            continue
        pos = 0
        for m in _KEY_RE.finditer(value):
            if m.start() > pos:
                out.append(("text", value[pos:m.start()]))
            out.append(("key", SPECIAL_KEY_MAP[m.group(0).lower()]))
            pos = m.end()
        if pos < len(value):
            out.append(("text", value[pos:]))
    return out


def _join(parts: List[Part]) -> str:
    pieces: List[str] = []
    for kind, value in parts:
        if kind == "text":
            if value:
                pieces.append(java_string(value))
        elif value:
            pieces.append(value)
    if not pieces:
        return '""'
    # keep Java string concatenation when the leading operand is not a string
    if len(pieces) > 1 and not pieces[0].startswith('"'):
        pieces.insert(0, '""')
    return " + ".join(pieces)


def render(node: Node, special_keys: bool = False) -> str:
    """Java expression for an argument node.

    String and template literals are escaped (templates become concatenations);
    with special_keys, bracketed tokens such as {enter} are spliced in as Keys
    constants. Any other expression is returned verbatim.
    """
    parts = literal_parts(node)
    if parts is None:
        return text(node)
    if special_keys:
        parts = _split_keys(parts)
    return _join(parts)


def key_text(node: Optional[Node]) -> str:
    """Object-literal key without its quotes."""
    if node is None:
        return ""
    value = string_value(node)
    if value is not None:
        return value
    return text(node).strip("'\"`")
