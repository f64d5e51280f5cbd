# cyselenium/assertions.py
# Chai-style `expect(...)` chains -> a single AssertJUnit statement.
#
#   expect(x).to.equal(y)         -> AssertJUnit.assertEquals(y, x);
#   expect(x).to.deep.equal(y)    -> AssertJUnit.assertEquals(y, x);
#   expect(n).to.be.lessThan(3)   -> AssertJUnit.assertTrue(n < 3);
#   expect(v).to.be.null          -> AssertJUnit.assertNull(v);

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Tuple

from tree_sitter import Node

from .chain import ChainItem, chain_path
from .context import TranslationContext
from .literals import render


class Matcher(Enum):
    IS_TRUE = "assertTrue"
    IS_FALSE = "assertFalse"
    IS_NULL = "assertNull"
    NOT_NULL = "assertNotNull"
    EQUALS = "assertEquals"


# Language chains that carry no meaning of their own.
CONNECTIVES = frozenset({"to", "be", "been", "is", "and", "have", "has", "that", "with", "which", "does", "at", "of"})

CONSTANT_MATCHERS = {
    "true": Matcher.IS_TRUE,
    "ok": Matcher.IS_TRUE,
    "false": Matcher.IS_FALSE,
    "null": Matcher.IS_NULL,
    "undefined": Matcher.IS_NULL,
    "exist": Matcher.NOT_NULL,
}

EQUALITY_WORDS = frozenset({"eq", "equal", "equals", "eql"})

COMPARISON_OPERATORS = {
    "lessThan": "<", "below": "<", "lt": "<",
    "greaterThan": ">", "above": ">", "gt": ">",
    "least": ">=", "gte": ">=",
    "most": "<=", "lte": "<=",
}

CONTAINMENT_WORDS = frozenset({"include", "includes", "contain", "contains"})

_NEGATED = {
    Matcher.IS_TRUE: Matcher.IS_FALSE,
    Matcher.IS_FALSE: Matcher.IS_TRUE,
    Matcher.IS_NULL: Matcher.NOT_NULL,
    Matcher.NOT_NULL: Matcher.IS_NULL,
}


@dataclass
class AssertionSpec:
    target: str = ""
    matcher: Optional[Matcher] = None
    expected: Tuple[Node, ...] = ()
    negated: bool = False


class AssertionTranslator:
    def __init__(self, ctx: TranslationContext):
        self.ctx = ctx

    def translate(self, chain: Sequence[ChainItem]) -> str:
        """One terminated assertion statement, or a diagnostic placeholder."""
        if not chain:
            return ""
        spec = AssertionSpec()
        i = 0
        while i < len(chain):
            item = chain[i]
            word = item.verb
            if word == "expect":
                if not item.args:
                    return self._gap("missing-argument", chain, "expect() without arguments")
                spec.target = render(item.args[0])
            elif word in CONNECTIVES:
                pass
            elif word == "not":
                spec.negated = not spec.negated
            elif word in CONSTANT_MATCHERS:
                spec.matcher = CONSTANT_MATCHERS[word]
            elif word in EQUALITY_WORDS:
                spec.matcher = Matcher.EQUALS
                spec.expected = item.args
            elif word == "deep":
                following = chain[i + 1] if i + 1 < len(chain) else None
                if following is not None and following.verb in EQUALITY_WORDS:
                    spec.matcher = Matcher.EQUALS
                    spec.expected = following.args
                    i += 1
            elif word in COMPARISON_OPERATORS:
                if not item.args:
                    return self._gap("missing-argument", chain, f"expect().{word}() without arguments")
                spec.target = f"{spec.target} {COMPARISON_OPERATORS[word]} {render(item.args[0])}"
                spec.matcher = Matcher.IS_TRUE
            elif word in CONTAINMENT_WORDS:
                if not item.args:
                    return self._gap("missing-argument", chain, f"expect().{word}() without arguments")
                spec.target = f"{spec.target}.contains({render(item.args[0])})"
                spec.matcher = Matcher.IS_TRUE
            else:
                return self._gap("unsupported-expect", chain, f"unsupported expect chain: {chain_path(chain)}")
            i += 1
        return self._emit(spec, chain)

    def _emit(self, spec: AssertionSpec, chain: Sequence[ChainItem]) -> str:
        matcher = spec.matcher
        if matcher is None:
            return self._gap("unsupported-matcher", chain, f"unsupported matcher in expect: {chain_path(chain)}")
        if matcher is Matcher.EQUALS:
            if not spec.expected:
                return self._gap("missing-expected", chain, f"missing expected value: {chain_path(chain)}")
            expected = render(spec.expected[0])
            if spec.negated:
                return f"AssertJUnit.assertFalse(Objects.equals({expected}, {spec.target}));"
            return f"AssertJUnit.assertEquals({expected}, {spec.target});"
        if spec.negated:
            matcher = _NEGATED[matcher]
        return f"AssertJUnit.{matcher.value}({spec.target});"

    def _gap(self, kind: str, chain: Sequence[ChainItem], message: str) -> str:
        return self.ctx.report(kind, "expect", message, source=chain_path(chain))
