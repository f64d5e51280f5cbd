# cyselenium/cli.py
# Command line entry point.
#
#   cyselenium convert cypress/e2e/login.cy.ts --out-dir build/java
#   cyselenium collect cypress/support/commands.ts --out-dir build/java

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .commands import CommandDefinitionError, collect_commands
from .config import ConfigError, ConvertOptions, load_config
from .context import Diagnostic, TranslationContext
from .registry import CommandRegistry
from .suite import convert_spec

logger = logging.getLogger(__name__)


def _options(args: argparse.Namespace) -> ConvertOptions:
    opts = load_config(args.config) if args.config else ConvertOptions()
    if args.out_dir:
        opts.output_dir = args.out_dir
    if args.registry:
        opts.registry = args.registry
    if args.package:
        opts.package = args.package
    if args.driver_class:
        opts.driver_class = args.driver_class
    if args.headed:
        opts.headless = False
    if args.no_inline_diagnostics:
        opts.inline_diagnostics = False
    if args.strict:
        opts.strict = True
    return opts


def _report(diagnostics: List[Diagnostic]) -> None:
    for diag in diagnostics:
        print(f"cyselenium: warning: {diag.message}")


def _convert(in_path: Path, opts: ConvertOptions) -> int:
    registry = CommandRegistry.load(opts.registry_file)
    ctx = TranslationContext(registry, inline_diagnostics=opts.inline_diagnostics)

    suites = convert_spec(in_path.read_text(encoding="utf-8"), ctx, opts, filename=in_path.name)
    logger.info("%s: %d describe block(s)", in_path, len(suites))
    if not suites:
        print(f"cyselenium: no describe() blocks found in {in_path}")

    out_dir = Path(opts.output_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    for suite in suites:
        out_path = out_dir / f"{suite.class_name}.java"
        out_path.write_text(suite.java_code, encoding="utf-8")
        print(f"cyselenium: wrote {out_path}")
    _report(ctx.diagnostics)
    return 1 if opts.strict and ctx.diagnostics else 0


def _collect(in_path: Path, opts: ConvertOptions) -> int:
    # a collect run rebuilds the registry from the commands file alone
    ctx = TranslationContext(CommandRegistry(), inline_diagnostics=opts.inline_diagnostics)
    try:
        collection = collect_commands(in_path.read_text(encoding="utf-8"), ctx, opts, filename=in_path.name)
    except CommandDefinitionError as e:
        print(f"cyselenium: error: {in_path}: {e}")
        return 1

    out_dir = Path(opts.output_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    out_path = out_dir / f"{opts.driver_class}.java"
    out_path.write_text(collection.java_code, encoding="utf-8")
    print(f"cyselenium: wrote {out_path}")

    collection.registry.save(opts.registry_file)
    print(f"cyselenium: wrote command list {opts.registry_file}")
    _report(collection.diagnostics)
    return 1 if opts.strict and collection.diagnostics else 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="cyselenium", description="Translate Cypress tests to Selenium + TestNG Java")
    parser.add_argument("mode", choices=["convert", "collect"],
                        help="convert: spec file -> test classes; collect: commands file -> driver class")
    parser.add_argument("input", help="Cypress spec or commands file (.js/.ts)")
    parser.add_argument("--out-dir", help="Directory for generated .java files (default: output)")
    parser.add_argument("--registry", help="Custom command list (default: <out-dir>/commands.txt)")
    parser.add_argument("--package", help="Java package of generated classes")
    parser.add_argument("--driver-class", help="Name of the generated WebDriver subclass")
    parser.add_argument("--config", help="JSON config file")
    parser.add_argument("--headed", action="store_true", help="Do not add --headless to ChromeOptions")
    parser.add_argument("--no-inline-diagnostics", action="store_true",
                        help="Leave no /* unsupported ... */ comments in the output")
    parser.add_argument("--strict", action="store_true", help="Exit non-zero when anything could not be translated")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    args = parser.parse_args(argv if argv is not None else sys.argv[1:])
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    in_path = Path(args.input)
    if not in_path.exists():
        print(f"cyselenium: input not found: {in_path}")
        return 2

    try:
        opts = _options(args)
    except ConfigError as e:
        print(f"cyselenium: error: {e}")
        return 1

    if args.mode == "collect":
        return _collect(in_path, opts)
    return _convert(in_path, opts)


if __name__ == "__main__":
    raise SystemExit(main())
