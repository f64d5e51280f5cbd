# cyselenium/suite.py
# describe()/context() blocks -> one TestNG class each.
#
#   describe('Login page', () => {         public class LoginpageTest {
#     beforeEach(() => cy.visit('/'))  ->      @BeforeMethod public void setup() ...
#     it('logs in', () => { ... })             @Test public void logs_in() ...
#   })                                     }

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Dict, List, NamedTuple, Optional, Set

from tree_sitter import Node

from .config import ConvertOptions
from .context import TAB_SIZE, Diagnostic, TranslationContext
from .literals import string_value
from .source import call_arguments, first_named, function_body, is_function, line_of, named, parse_source, text, walk
from .walker import StructuralWalker

logger = logging.getLogger(__name__)

# ------------------------------ Config ---------------------------------------


class Hook(NamedTuple):
    annotation: str
    method: str


HOOKS: Dict[str, Hook] = {
    "beforeEach": Hook("@BeforeMethod", "setup"),
    "afterEach": Hook("@AfterMethod", "end"),
    "before": Hook("@BeforeClass", "setupClass"),
    "after": Hook("@AfterClass", "teardownClass"),
}

SUITE_CALLEES = frozenset({"describe", "context", "describe.only", "context.only"})
TEST_CALLEES = frozenset({"it", "specify", "it.only", "specify.only"})
SKIPPED_TEST_CALLEES = frozenset({"xit", "xspecify", "it.skip", "specify.skip"})
SKIPPED_SUITE_CALLEES = frozenset({"xdescribe", "xcontext", "describe.skip", "context.skip"})

IMPORTS = (
    "com.google.gson.*",
    "java.io.*",
    "java.net.*",
    "java.util.*",
    "org.openqa.selenium.*",
    "org.openqa.selenium.NoSuchElementException",
    "org.openqa.selenium.chrome.ChromeOptions",
    "org.testng.AssertJUnit",
    "org.testng.annotations.*",
)

_INVALID_IDENT = re.compile(r"[^A-Za-z0-9_$]")

# ------------------------------ Helpers --------------------------------------


def class_name_for(description: str) -> str:
    name = _INVALID_IDENT.sub("", re.sub(r"\s+", "", description))
    if not name or name[0].isdigit():
        name = "_" + name
    return name + "Test"


def method_name_for(description: str) -> str:
    name = _INVALID_IDENT.sub("", re.sub(r"\s+", "_", description.strip()))
    if not name:
        return "test"
    if name[0].isdigit():
        name = "_" + name
    return name


def _callee(call: Node) -> str:
    return text(call.child_by_field_name("function"))


def _statement_call(statement: Node) -> Optional[Node]:
    if statement.type != "expression_statement":
        return None
    expr = first_named(statement)
    if expr is not None and expr.type == "call_expression":
        return expr
    return None


def _callback(call: Node) -> Optional[Node]:
    args = call_arguments(call)
    if args and is_function(args[-1]):
        return args[-1]
    return None


def _description(call: Node) -> Optional[str]:
    args = call_arguments(call)
    if len(args) < 2:
        return None
    return string_value(args[0])


def _is_skipped_suite(node: Node) -> bool:
    if node.type == "call_expression" and _callee(node) in SKIPPED_SUITE_CALLEES:
        logger.debug("line %d: %s() skipped with everything inside it", line_of(node), _callee(node))
        return True
    return False


def find_suites(root: Node) -> List[Node]:
    """Every describe()/context() call with a literal title and a function body, outermost first.

    Skipped suites (``xdescribe``, ``describe.skip`` ...) are not descended into.
    """
    found = []
    for node in walk(root, prune=_is_skipped_suite):
        if node.type != "call_expression" or _callee(node) not in SUITE_CALLEES:
            continue
        if _description(node) is None or _callback(node) is None:
            logger.warning("line %d: %s() without literal title and callback; skipped",
                           line_of(node), _callee(node))
            continue
        found.append(node)
    return found


def _body_statements(fn: Node) -> List[Node]:
    body = function_body(fn)
    if body is None:
        return []
    if body.type == "statement_block":
        return named(body)
    return [body]


class _Names:
    def __init__(self):
        self.used: Set[str] = set()

    def claim(self, name: str) -> str:
        candidate = name
        n = 2
        while candidate in self.used:
            candidate = f"{name}_{n}"
            n += 1
        self.used.add(candidate)
        return candidate


# ------------------------------ Assembler ------------------------------------


@dataclass
class SuiteOutput:
    class_name: str
    java_code: str
    diagnostics: List[Diagnostic] = field(default_factory=list)


class SuiteAssembler:
    def __init__(self, ctx: TranslationContext, options: Optional[ConvertOptions] = None):
        self.ctx = ctx
        self.options = options or ConvertOptions()
        self.walker = StructuralWalker(ctx)

    # ---- fixed driver lifecycle ----

    def _driver_setup(self) -> List[str]:
        args = '.addArguments("--headless")' if self.options.headless else ""
        return [
            f"ChromeOptions options = new ChromeOptions(){args};",
            f"driver = new {self.options.driver_class}(options);",
        ]

    def _method(self, annotation: str, name: str, body: List[str]) -> List[str]:
        pad = self.ctx.indent
        return [f"{pad}{annotation}", f"{pad}public void {name}() throws Exception {{", *body, f"{pad}}}"]

    def _fixed(self, statements: List[str]) -> List[str]:
        pad = self.ctx.indent + " " * TAB_SIZE
        return [pad + s for s in statements]

    def _walk(self, fn: Node) -> List[str]:
        with self.ctx.indented():
            lines: List[str] = []
            for statement in _body_statements(fn):
                lines.extend(self.walker.walk(statement).splitlines())
        return lines

    # ---- assembly ----

    def assemble(self, call: Node) -> SuiteOutput:
        start = len(self.ctx.diagnostics)
        description = _description(call) or ""
        class_name = class_name_for(description)
        statements = _body_statements(_callback(call))
        logger.debug("suite %r -> %s", description, class_name)

        present = set()
        for statement in statements:
            inner = _statement_call(statement)
            if inner is not None and _callee(inner) in HOOKS and _callback(inner) is not None:
                present.add(_callee(inner))

        names = _Names()
        blocks: List[List[str]] = []
        with self.ctx.indented():
            if "beforeEach" not in present:
                hook = HOOKS["beforeEach"]
                blocks.append(self._method(hook.annotation, names.claim(hook.method),
                                           self._fixed(self._driver_setup())))
            if "afterEach" not in present:
                hook = HOOKS["afterEach"]
                blocks.append(self._method(hook.annotation, names.claim(hook.method),
                                           self._fixed(["driver.quit();"])))

            for statement in statements:
                block = self._member(statement, names)
                if block:
                    blocks.append(block)

        lines = [f"package {self.options.package};", ""]
        lines += [f"import {imp};" for imp in IMPORTS]
        lines += ["", f"public class {class_name} {{", f"{' ' * TAB_SIZE}{self.options.driver_class} driver;", ""]
        for i, block in enumerate(blocks):
            if i:
                lines.append("")
            lines.extend(block)
        lines.append("}")
        return SuiteOutput(class_name, "\n".join(lines) + "\n", self.ctx.diagnostics[start:])

    def _member(self, statement: Node, names: _Names) -> List[str]:
        call = _statement_call(statement)
        callee = _callee(call) if call is not None else ""
        fn = _callback(call) if call is not None else None

        if callee in SUITE_CALLEES or callee in SKIPPED_SUITE_CALLEES:
            # nested suites become classes of their own
            return []
        if callee in HOOKS and fn is not None:
            hook = HOOKS[callee]
            body = self._walk(fn)
            if callee == "beforeEach":
                body = self._fixed(self._driver_setup()) + body
            elif callee == "afterEach":
                body = body + self._fixed(["driver.quit();"])
            return self._method(hook.annotation, names.claim(hook.method), body)
        if (callee in TEST_CALLEES or callee in SKIPPED_TEST_CALLEES) and fn is not None:
            description = _description(call)
            if description is not None:
                annotation = "@Test(enabled = false)" if callee in SKIPPED_TEST_CALLEES else "@Test"
                return self._method(annotation, names.claim(method_name_for(description)), self._walk(fn))

        # anything else is translated in place at class level
        return self.walker.walk(statement).splitlines()


def convert_spec(source: str, ctx: TranslationContext, options: Optional[ConvertOptions] = None,
                 filename: str = "") -> List[SuiteOutput]:
    """Translate every describe block of a Cypress spec file."""
    tree = parse_source(source, filename)
    assembler = SuiteAssembler(ctx, options)
    return [assembler.assemble(call) for call in find_suites(tree.root_node)]
