"""
ZIL Runtime Dispatch Predicates

VERB?, PRSO?, PRSI? and HERE? as pure reads over the Environment. They have
no side effects and are meant to be composed inside COND clauses.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from zilrt.runtime.environment import Environment, VerbTable


@dataclass(frozen=True)
class Command:
    """A resolved player command."""
    verb: str
    prso: Optional[str] = None
    prsi: Optional[str] = None


def verb_matches(env: Environment, verbs: VerbTable, *candidates: str) -> bool:
    """True iff PRSA equals the resolved tag of any candidate verb name."""
    prsa = env.getg("PRSA")
    if prsa is None:
        return False
    return any(verbs.tag(name) == prsa for name in candidates)


def direct_object_is(env: Environment, *candidates: str) -> bool:
    return env.getg("PRSO") in candidates


def indirect_object_is(env: Environment, *candidates: str) -> bool:
    return env.getg("PRSI") in candidates


def room_is(env: Environment, *candidates: str) -> bool:
    return env.getg("HERE") in candidates
