# cyselenium/commands.py
# Cypress.Commands.add(...) definitions -> methods on a ChromeDriver subclass.
# Each command name is registered as it is met, so later commands (and later
# convert runs) can call it as a pass-through verb.

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from tree_sitter import Node

from .config import ConvertOptions
from .context import TAB_SIZE, Diagnostic, TranslationContext
from .literals import string_value
from .registry import CommandRegistry
from .source import call_arguments, first_named, function_body, function_params, is_function, line_of, named, parse_source, text
from .walker import StructuralWalker

logger = logging.getLogger(__name__)

COMMANDS_RECEIVER = "Cypress.Commands"

DRIVER_IMPORTS = (
    "com.google.gson.*",
    "java.io.*",
    "java.net.*",
    "java.util.*",
    "org.openqa.selenium.*",
    "org.openqa.selenium.NoSuchElementException",
    "org.openqa.selenium.chrome.ChromeDriver",
    "org.openqa.selenium.chrome.ChromeOptions",
    "org.testng.AssertJUnit",
)


class CommandDefinitionError(Exception):
    def __init__(self, message: str, line: int = 0):
        super().__init__(f"line {line}: {message}" if line else message)
        self.line = line


@dataclass
class CommandMethod:
    name: str
    params: List[str]
    java_code: str


@dataclass
class CommandCollection:
    methods: List[CommandMethod]
    java_code: str
    registry: CommandRegistry
    diagnostics: List[Diagnostic] = field(default_factory=list)


def _is_commands_add(statement: Node) -> Optional[Node]:
    """The call node of a top-level ``Cypress.Commands.add(...)`` statement."""
    if statement.type != "expression_statement":
        return None
    call = first_named(statement)
    if call is None or call.type != "call_expression":
        return None
    callee = call.child_by_field_name("function")
    if callee is None or callee.type != "member_expression":
        return None
    if text(callee.child_by_field_name("property")) != "add":
        return None
    if text(callee.child_by_field_name("object")) != COMMANDS_RECEIVER:
        return None
    return call


class CommandCollector:
    def __init__(self, ctx: TranslationContext, options: Optional[ConvertOptions] = None):
        self.ctx = ctx
        self.options = options or ConvertOptions()
        self.walker = StructuralWalker(ctx)

    def collect(self, root: Node) -> List[CommandMethod]:
        methods = []
        for statement in named(root):
            call = _is_commands_add(statement)
            if call is not None:
                methods.append(self._command(call))
        return methods

    def _command(self, call: Node) -> CommandMethod:
        args = call_arguments(call)
        line = line_of(call)
        name = string_value(args[0]) if args and args[0].type == "string" else None
        if name is None:
            raise CommandDefinitionError("command name must be a string literal", line)
        # Cypress.Commands.add(name, [options,] fn)
        fn = args[-1] if len(args) >= 2 else None
        if not is_function(fn):
            raise CommandDefinitionError(f"command '{name}' needs a function expression or arrow function", line)

        self.ctx.registry.add(name)
        params = function_params(fn)
        logger.debug("command %s(%s)", name, ", ".join(params))

        pad = self.ctx.indent
        signature = ", ".join(f"String {p}" for p in params)
        lines = [f"{pad}public {self.options.driver_class} {name}({signature}) throws Exception {{"]
        with self.ctx.indented():
            body = function_body(fn)
            statements = named(body) if body is not None and body.type == "statement_block" else [body]
            for statement in statements:
                if statement is not None:
                    lines.extend(self.walker.walk(statement, "this").splitlines())
            lines.append(f"{self.ctx.indent}return this;")
        lines.append(f"{pad}}}")
        return CommandMethod(name, params, "\n".join(lines))

    def driver_class(self, methods: List[CommandMethod]) -> str:
        driver = self.options.driver_class
        tab = " " * TAB_SIZE
        lines = [f"package {self.options.package};", ""]
        lines += [f"import {imp};" for imp in DRIVER_IMPORTS]
        lines += [
            "",
            f"public class {driver} extends ChromeDriver {{",
            f"{tab}public {driver}(ChromeOptions options) {{",
            f"{tab}{tab}super(options);",
            f"{tab}}}",
        ]
        for method in methods:
            lines.append("")
            lines.append(method.java_code)
        lines.append("}")
        return "\n".join(lines) + "\n"


def collect_commands(source: str, ctx: TranslationContext, options: Optional[ConvertOptions] = None,
                     filename: str = "") -> CommandCollection:
    """Translate every custom command in a commands file; raises CommandDefinitionError on a malformed one."""
    start = len(ctx.diagnostics)
    tree = parse_source(source, filename)
    collector = CommandCollector(ctx, options)
    with ctx.indented():
        methods = collector.collect(tree.root_node)
    return CommandCollection(
        methods=methods,
        java_code=collector.driver_class(methods),
        registry=ctx.registry,
        diagnostics=ctx.diagnostics[start:],
    )
