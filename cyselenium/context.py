# cyselenium/context.py
# Per-run translation state: temp-variable counter, indentation depth, the
# custom-command registry and the diagnostics collected along the way.

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, List, Optional

from .registry import CommandRegistry

logger = logging.getLogger(__name__)

TAB_SIZE = 4


@dataclass
class Diagnostic:
    """A translation gap: something that could not be converted and was left for a human."""
    kind: str      # "unsupported-method", "unsupported-syntax", "unsupported-expect", ...
    verb: str
    message: str
    source: str = ""

    def comment(self) -> str:
        return f"/* {self.message} */"

    def __str__(self) -> str:
        return self.message


class TranslationContext:
    def __init__(self, registry: Optional[CommandRegistry] = None, *, inline_diagnostics: bool = True):
        self.registry = registry if registry is not None else CommandRegistry()
        self.inline_diagnostics = inline_diagnostics
        self.diagnostics: List[Diagnostic] = []
        self.depth = 0
        self._counter = 0

    def next_index(self) -> int:
        """Suffix for the next temp variable; never reused within a run."""
        index = self._counter
        self._counter += 1
        return index

    @property
    def indent(self) -> str:
        return " " * (TAB_SIZE * self.depth)

    @contextmanager
    def indented(self, levels: int = 1) -> Iterator[None]:
        self.depth += levels
        try:
            yield
        finally:
            self.depth -= levels

    def report(self, kind: str, verb: str, message: str, source: str = "") -> str:
        """Record a diagnostic and return its inline placeholder ('' when inlining is off)."""
        diag = Diagnostic(kind=kind, verb=verb, message=message, source=source)
        self.diagnostics.append(diag)
        logger.info("translation gap (%s): %s", kind, message)
        return diag.comment() if self.inline_diagnostics else ""
