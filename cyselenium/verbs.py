# cyselenium/verbs.py
# Closed vocabulary of chain verbs. Anything outside it is either a learned
# custom command (CUSTOM) or UNKNOWN.

from __future__ import annotations

from enum import Enum
from typing import Container


class Verb(Enum):
    EXPECT = "expect"
    # lookup
    GET = "get"
    FIND = "find"
    CONTAINS = "contains"
    # indexing
    FIRST = "first"
    LAST = "last"
    EQ = "eq"
    # interaction
    CLICK = "click"
    TYPE = "type"
    CLEAR = "clear"
    SUBMIT = "submit"
    # navigation
    VISIT = "visit"
    RELOAD = "reload"
    # state assertions
    SHOULD = "should"
    AND = "and"
    # http
    REQUEST = "request"
    # callbacks
    THEN = "then"
    WITHIN = "within"
    WAIT = "wait"

    CUSTOM = "<custom>"
    UNKNOWN = "<unknown>"


_BY_NAME = {v.value: v for v in Verb if v not in (Verb.CUSTOM, Verb.UNKNOWN)}


def classify(name: str, registry: Container[str] = ()) -> Verb:
    verb = _BY_NAME.get(name)
    if verb is not None:
        return verb
    if name in registry:
        return Verb.CUSTOM
    return Verb.UNKNOWN
