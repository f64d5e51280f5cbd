# cyselenium/translator.py
"""Chain translator: one extracted Cypress chain -> Selenium Java statements.

The chain is folded left to right into a StatementBuffer that starts with the
receiver (``driver``, ``this`` or a scope variable). Each verb either extends
the current statement (``.findElement(...)``, ``.click()``), pushes a new one,
rewrites the current one (declaring a temp variable for it), or, for a
leading ``request``, throws the buffer away and starts over.

Verbs outside the vocabulary never abort the run: they leave an inline
``/* unsupported ... */`` placeholder and the rest of the chain is translated.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from functools import partial
from typing import TYPE_CHECKING, Callable, Dict, List, Optional, Sequence, Tuple

from tree_sitter import Node

from .assertions import AssertionTranslator
from .chain import ChainItem, restore_call
from .context import TAB_SIZE, Diagnostic, TranslationContext
from .literals import java_string, key_text, render, string_value
from .payload import build_payload
from .source import function_body, is_function, named, text
from .verbs import Verb, classify

if TYPE_CHECKING:
    from .walker import StructuralWalker

# ------------------------------ Config ---------------------------------------

# should('<state>') -> (assert method, element query); None query asserts on the element itself
STATE_CHECKS: Dict[str, Tuple[str, Optional[str]]] = {
    "be.visible": ("assertTrue", "isDisplayed()"),
    "not.be.visible": ("assertFalse", "isDisplayed()"),
    "be.enabled": ("assertTrue", "isEnabled()"),
    "not.be.enabled": ("assertFalse", "isEnabled()"),
    "be.disabled": ("assertFalse", "isEnabled()"),
    "not.be.disabled": ("assertTrue", "isEnabled()"),
    "be.checked": ("assertTrue", "isSelected()"),
    "not.be.checked": ("assertFalse", "isSelected()"),
    "be.selected": ("assertTrue", "isSelected()"),
    "not.be.selected": ("assertFalse", "isSelected()"),
    "exist": ("assertNotNull", None),
}

# should('<state>', expected) -> (comparison, element query)
VALUE_CHECKS: Dict[str, Tuple[str, str]] = {
    "have.text": ("equals", "getText()"),
    "contain": ("contains", "getText()"),
    "contain.text": ("contains", "getText()"),
    "include.text": ("contains", "getText()"),
    "have.value": ("equals", 'getAttribute("value")'),
    "have.class": ("contains", 'getAttribute("class")'),
}

HTTP_METHODS = frozenset({"GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"})

# contains(selector, text) lookups only carry a plain tag selector over to XPath
_TAG_NAME = re.compile(r"^[A-Za-z][A-Za-z0-9-]*$")

# ------------------------------ Buffer ---------------------------------------


@dataclass
class Fragment:
    text: str
    depth: int = 0
    bare: bool = False                  # running value only; nothing applied to it yet
    comment: bool = False
    lines: Optional[List[str]] = None   # pre-rendered nested block


def _is_block_line(line: str) -> bool:
    stripped = line.rstrip()
    return stripped.endswith("{") or stripped.endswith("}")


class StatementBuffer:
    """Pending statements of one chain; the last fragment is the running value."""

    def __init__(self, receiver: str):
        self.fragments: List[Fragment] = [Fragment(receiver, bare=True)]

    @property
    def last(self) -> Fragment:
        if not self.fragments:
            self.fragments.append(Fragment("", bare=True))
        return self.fragments[-1]

    def append(self, suffix: str) -> None:
        if not suffix:
            return
        frag = self.last
        frag.text += suffix
        frag.bare = False

    def push(self, line: str, depth: int = 0, bare: bool = False) -> None:
        self.fragments.append(Fragment(line, depth=depth, bare=bare))

    def push_comment(self, line: str) -> None:
        if line:
            self.fragments.append(Fragment(line, comment=True))

    def push_block(self, lines: Sequence[str]) -> None:
        self.fragments.append(Fragment("", lines=list(lines)))

    def replace(self, line: str) -> None:
        frag = self.last
        frag.text = line
        frag.bare = False

    def clear(self) -> None:
        self.fragments.clear()

    def render(self, indent: str) -> List[str]:
        out: List[str] = []
        for frag in self.fragments:
            if frag.lines is not None:
                out.extend(frag.lines)
                continue
            if frag.bare or not frag.text:
                continue
            pad = indent + " " * (TAB_SIZE * frag.depth)
            end = "" if frag.comment or _is_block_line(frag.text) else ";"
            out.append(f"{pad}{frag.text}{end}")
        return out


@dataclass
class ChainResult:
    lines: List[str]
    diagnostics: List[Diagnostic] = field(default_factory=list)

    @property
    def text(self) -> str:
        return "\n".join(self.lines)

    @property
    def ok(self) -> bool:
        return not self.diagnostics


@dataclass
class _Step:
    item: ChainItem
    index: int
    length: int
    receiver: str

    @property
    def is_last(self) -> bool:
        return self.index == self.length - 1


@dataclass
class _Request:
    url: str
    method: str
    body: Optional[Node] = None
    headers: List[Tuple[str, str]] = field(default_factory=list)


def _multi_lookup(line: str) -> Optional[str]:
    """Rewrite the last single-element lookup of a statement into a list lookup."""
    head, sep, tail = line.rpartition(".findElement(")
    if not sep:
        return None
    return f"{head}.findElements({tail}"


def _xpath_literal(value: str) -> str:
    """XPath 1.0 has no escapes inside string literals; fall back to concat() when both quotes appear."""
    if "'" not in value:
        return f"'{value}'"
    if '"' not in value:
        return f'"{value}"'
    parts = value.split("'")
    return "concat(" + ", \"'\", ".join(f"'{part}'" for part in parts) + ")"


def _text_xpath(node: Node, tag: str = "*") -> str:
    value = string_value(node)
    if value is not None:
        return java_string(f"//{tag}[contains(text(), {_xpath_literal(value)})]")
    return f"\"//{tag}[contains(text(), '\" + {render(node)} + \"')]\""


# ------------------------------ Translator -----------------------------------


class ChainTranslator:
    def __init__(self, ctx: TranslationContext, walker: Optional["StructuralWalker"] = None):
        self.ctx = ctx
        self.walker = walker
        self.assertions = AssertionTranslator(ctx)
        self._handlers: Dict[Verb, Callable[[StatementBuffer, _Step], None]] = {
            Verb.EXPECT: self._unknown,
            Verb.GET: self._lookup,
            Verb.FIND: self._lookup,
            Verb.CONTAINS: self._contains,
            Verb.FIRST: self._first,
            Verb.LAST: self._last,
            Verb.EQ: self._eq,
            Verb.CLICK: partial(self._method_call, "click()"),
            Verb.CLEAR: partial(self._method_call, "clear()"),
            Verb.SUBMIT: partial(self._method_call, "submit()"),
            Verb.RELOAD: partial(self._method_call, "navigate().refresh()"),
            Verb.TYPE: self._type,
            Verb.VISIT: self._visit,
            Verb.SHOULD: self._should,
            Verb.AND: self._should,
            Verb.REQUEST: self._request,
            Verb.THEN: self._then,
            Verb.WITHIN: self._within,
            Verb.WAIT: self._wait,
            Verb.CUSTOM: self._custom,
            Verb.UNKNOWN: self._unknown,
        }

    def translate(self, chain: Sequence[ChainItem], receiver: str = "driver") -> ChainResult:
        start = len(self.ctx.diagnostics)
        if not chain:
            return ChainResult([])
        if chain[0].verb == Verb.EXPECT.value:
            line = self.assertions.translate(chain)
            lines = [self.ctx.indent + line] if line else []
            return ChainResult(lines, self.ctx.diagnostics[start:])

        buf = StatementBuffer(receiver)
        for index, item in enumerate(chain):
            step = _Step(item, index, len(chain), receiver)
            self._handlers[classify(item.verb, self.ctx.registry)](buf, step)
        return ChainResult(buf.render(self.ctx.indent), self.ctx.diagnostics[start:])

    # -------------------------- diagnostics ----------------------------------

    def _gap(self, step: _Step, kind: str, message: str) -> str:
        return self.ctx.report(kind, step.item.verb, message, source=restore_call(step.item))

    def _syntax_gap(self, step: _Step) -> str:
        source = restore_call(step.item)
        return self._gap(step, "unsupported-syntax", f"unsupported {step.item.verb} syntax({source})")

    # -------------------------- lookup / indexing ----------------------------

    def _lookup(self, buf: StatementBuffer, step: _Step) -> None:
        if not step.item.args:
            buf.append(self._syntax_gap(step))
            return
        buf.append(f".findElement(By.cssSelector({render(step.item.args[0])}))")

    def _contains(self, buf: StatementBuffer, step: _Step) -> None:
        args = step.item.args
        if not args:
            buf.append(self._syntax_gap(step))
            return
        # contains(text) or contains(selector, text)
        content = args[-1]
        if step.index != 0 and step.is_last:
            # trailing contains() asserts on the text of what precedes it
            index = self.ctx.next_index()
            buf.replace(f"WebElement element{index} = {buf.last.text}")
            buf.push(f"AssertJUnit.assertTrue(element{index}.getText().contains({render(content)}))")
            return
        tag = "*"
        if len(args) > 1:
            tag = string_value(args[0]) or ""
            if not _TAG_NAME.match(tag):
                buf.append(self._syntax_gap(step))
                return
        buf.append(f".findElement(By.xpath({_text_xpath(content, tag)}))")

    def _index(self, buf: StatementBuffer, step: _Step, position: str) -> None:
        multi = _multi_lookup(buf.last.text)
        if multi is None:
            buf.append(self._syntax_gap(step))
            return
        buf.replace(f"{multi}.get({position})")

    def _first(self, buf: StatementBuffer, step: _Step) -> None:
        self._index(buf, step, "0")

    def _eq(self, buf: StatementBuffer, step: _Step) -> None:
        args = step.item.args
        if not args or args[0].type != "number" or not text(args[0]).isdigit():
            buf.append(self._syntax_gap(step))
            return
        self._index(buf, step, text(args[0]))

    def _last(self, buf: StatementBuffer, step: _Step) -> None:
        multi = _multi_lookup(buf.last.text)
        if multi is None:
            buf.append(self._syntax_gap(step))
            return
        index = self.ctx.next_index()
        buf.replace(f"List<WebElement> elements{index} = {multi}")
        buf.push(f"elements{index}.get(elements{index}.size() - 1)")

    # -------------------------- interaction / navigation ---------------------

    def _method_call(self, call: str, buf: StatementBuffer, step: _Step) -> None:
        buf.append(f".{call}")

    def _type(self, buf: StatementBuffer, step: _Step) -> None:
        if not step.item.args:
            buf.append(self._syntax_gap(step))
            return
        buf.append(f".sendKeys({render(step.item.args[0], special_keys=True)})")

    def _visit(self, buf: StatementBuffer, step: _Step) -> None:
        if not step.item.args:
            buf.append(self._syntax_gap(step))
            return
        buf.append(f".get({render(step.item.args[0])})")

    def _wait(self, buf: StatementBuffer, step: _Step) -> None:
        args = step.item.args
        # wait('@alias') has no Selenium counterpart
        if not args or args[0].type in ("string", "template_string"):
            buf.append(self._syntax_gap(step))
            return
        buf.push(f"Thread.sleep({render(args[0])})")
        buf.push(step.receiver, bare=True)

    # -------------------------- should / and ---------------------------------

    def _should(self, buf: StatementBuffer, step: _Step) -> None:
        args = step.item.args
        condition = string_value(args[0]) if args and args[0].type == "string" else None
        if condition is None:
            buf.append(self._syntax_gap(step))
            return
        if condition == "not.exist":
            self._expect_absent(buf, step)
            return

        element = None
        assertion: Optional[str] = None
        if condition in STATE_CHECKS:
            method, query = STATE_CHECKS[condition]
            element = f"element{self.ctx.next_index()}"
            subject = element if query is None else f"{element}.{query}"
            assertion = f"AssertJUnit.{method}({subject})"
        elif condition in VALUE_CHECKS and len(args) > 1:
            comparison, query = VALUE_CHECKS[condition]
            element = f"element{self.ctx.next_index()}"
            expected = render(args[1])
            if comparison == "equals":
                assertion = f"AssertJUnit.assertEquals({expected}, {element}.{query})"
            else:
                assertion = f"AssertJUnit.assertTrue({element}.{query}.contains({expected}))"
        elif condition == "have.attr" and len(args) > 1:
            element = f"element{self.ctx.next_index()}"
            attribute = f"{element}.getAttribute({render(args[1])})"
            if len(args) > 2:
                assertion = f"AssertJUnit.assertEquals({render(args[2])}, {attribute})"
            else:
                assertion = f"AssertJUnit.assertNotNull({attribute})"
        elif condition in VALUE_CHECKS or condition == "have.attr":
            buf.append(self._syntax_gap(step))
            return

        if element is None or assertion is None:
            source = restore_call(step.item)
            buf.append(self._gap(step, "unsupported-condition",
                                 f"unsupported {step.item.verb} condition: {condition}({source})"))
            return
        buf.replace(f"WebElement {element} = {buf.last.text}")
        buf.push(assertion)
        buf.push(element, bare=True)

    def _expect_absent(self, buf: StatementBuffer, step: _Step) -> None:
        lookup = buf.last.text
        if buf.last.bare:
            # the element is already bound to a variable; nothing to wrap in try
            source = restore_call(step.item)
            buf.push_comment(self._gap(step, "unsupported-condition",
                                       f"unsupported {step.item.verb} condition: not.exist on {lookup}({source})"))
            buf.push(lookup, bare=True)
            return
        buf.replace("try {")
        buf.push(lookup, depth=1)
        buf.push('AssertJUnit.fail("Element should not exist")', depth=1)
        buf.push("} catch (NoSuchElementException e) {}")
        buf.push(step.receiver, bare=True)

    # -------------------------- request --------------------------------------

    def _request(self, buf: StatementBuffer, step: _Step) -> None:
        if step.index == 0:
            buf.clear()
        request = self._parse_request(step.item.args)
        if request is None:
            source = restore_call(step.item)
            buf.push_comment(self._gap(step, "unsupported-syntax", f"unsupported request syntax({source})"))
            return

        conn = f"conn{self.ctx.next_index()}"
        buf.push(f"HttpURLConnection {conn} = (HttpURLConnection) new URL({request.url}).openConnection()")
        buf.push(f"{conn}.setRequestMethod({request.method})")
        for name, value in request.headers:
            buf.push(f"{conn}.setRequestProperty({name}, {value})")
        if request.body is None:
            return

        buf.push(f"{conn}.setDoOutput(true)")
        if request.body.type == "object":
            payload = build_payload(request.body, self.ctx)
            for line in payload.statements:
                if line.startswith("/*"):
                    buf.push_comment(line)
                else:
                    buf.push(line)
            output = payload.output
        else:
            output = f"inputString{self.ctx.next_index()}"
            buf.push(f"String {output} = {render(request.body)}")
        buf.push(f"try (OutputStream os = {conn}.getOutputStream()) {{")
        buf.push(f'byte[] input = {output}.getBytes("utf-8")', depth=1)
        buf.push("os.write(input, 0, input.length)", depth=1)
        buf.push("}")

    def _parse_request(self, args: Sequence[Node]) -> Optional[_Request]:
        if not args:
            return None
        first = args[0]
        if first.type == "object":
            return self._request_options(first)
        method = string_value(first)
        if len(args) > 1 and method is not None and method.upper() in HTTP_METHODS:
            # cy.request(method, url[, body])
            body = args[2] if len(args) > 2 else None
            return _Request(render(args[1]), java_string(method.upper()), body)
        if first.type in ("string", "template_string"):
            # cy.request(url[, body])
            body = args[1] if len(args) > 1 else None
            return _Request(render(first), java_string("GET"), body)
        return None

    def _request_options(self, options: Node) -> Optional[_Request]:
        request = _Request(url="", method=java_string("GET"))
        for prop in named(options):
            if prop.type != "pair":
                continue
            key = key_text(prop.child_by_field_name("key"))
            value = prop.child_by_field_name("value")
            if value is None:
                continue
            if key == "url":
                request.url = render(value)
            elif key == "method":
                method = string_value(value)
                request.method = java_string(method.upper()) if method is not None else render(value)
            elif key == "body":
                request.body = value
            elif key == "headers" and value.type == "object":
                for header in named(value):
                    if header.type == "pair" and header.child_by_field_name("value") is not None:
                        name = java_string(key_text(header.child_by_field_name("key")))
                        request.headers.append((name, render(header.child_by_field_name("value"))))
        if not request.url:
            return None
        return request

    # -------------------------- callbacks ------------------------------------

    def _nested(self, callback: Node, receiver: str) -> List[str]:
        if self.walker is None:
            raise RuntimeError("ChainTranslator needs a StructuralWalker to translate callbacks")
        body = function_body(callback)
        if body is None:
            return []
        return self.walker.walk(body, receiver).splitlines()

    def _then(self, buf: StatementBuffer, step: _Step) -> None:
        callback = step.item.args[0] if step.item.args else None
        if not is_function(callback):
            buf.push_comment(self._syntax_gap(step))
            return
        buf.push_block(self._nested(callback, step.receiver))
        buf.push(step.receiver, bare=True)

    def _within(self, buf: StatementBuffer, step: _Step) -> None:
        callback = step.item.args[0] if step.item.args else None
        if not is_function(callback):
            buf.append(self._syntax_gap(step))
            return
        parent = buf.last.text
        scope = f"scopeElement{self.ctx.next_index()}"
        lines = self._nested(callback, scope)
        buf.replace(f"WebElement {scope} = {parent}")
        buf.push_block(lines)
        buf.push(scope, bare=True)

    # -------------------------- fallback -------------------------------------

    def _custom(self, buf: StatementBuffer, step: _Step) -> None:
        args = ", ".join(render(a) for a in step.item.args)
        buf.append(f".{step.item.verb}({args})")

    def _unknown(self, buf: StatementBuffer, step: _Step) -> None:
        source = restore_call(step.item)
        buf.append(self._gap(step, "unsupported-method", f"unsupported method: {step.item.verb}({source})"))
