"""
ZIL Runtime Environment

The global variable store plus the two name tables routines are dispatched
through.

Key classes:
- Environment: SETG/GVAL mapping seeded with the reserved globals
- VerbTable: verb name -> canonical action tag
- RoutineRegistry: routine name -> callable
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

logger = logging.getLogger(__name__)

DEFAULT_PLAYER = "PLAYER"


def reserved_globals(player_id: str = DEFAULT_PLAYER, load_max: int = 100) -> Dict[str, Any]:
    """Reserved global names and their initial values."""
    return {
        "PRSO": None,
        "PRSI": None,
        "PRSA": None,
        "WINNER": player_id,
        "HERE": None,
        "PLAYER": player_id,
        "SCORE": 0,
        "MOVES": 0,
        "VERBOSE": False,
        "SUPER-BRIEF": False,
        "WON-FLAG": False,
        "DEAD-FLAG": False,
        "P-CONT": None,
        "QUOTE-FLAG": False,
        "P-OFLAG": None,
        "LOAD-MAX": load_max,
        "LOAD-ALLOWED": load_max,
    }


class Environment:
    """
    Untyped global variable store.

    No validation of names or values. Reading an unset name is a lookup miss
    and yields the default.
    """

    def __init__(self, seed: Optional[Dict[str, Any]] = None):
        self._values: Dict[str, Any] = dict(seed or {})

    def setg(self, name: str, value: Any) -> Any:
        self._values[name] = value
        return value

    def getg(self, name: str, default: Any = None) -> Any:
        if name not in self._values:
            logger.debug("global %s is unset", name)
            return default
        return self._values[name]

    def __contains__(self, name: str) -> bool:
        return name in self._values

    def snapshot(self) -> Dict[str, Any]:
        return dict(self._values)


@dataclass
class VerbTable:
    """
    Verb name -> canonical action tag.

    An unregistered name is its own tag.
    """
    verbs: Dict[str, str] = field(default_factory=dict)

    def register(self, name: str, tag: Optional[str] = None) -> str:
        """Register a verb name; the tag defaults to the name."""
        resolved = tag or name
        self.verbs[name] = resolved
        return resolved

    def tag(self, name: Optional[str]) -> Optional[str]:
        if name is None:
            return None
        return self.verbs.get(name, name)

    def names_for(self, tag: str) -> List[str]:
        return [name for name, t in self.verbs.items() if t == tag]


@dataclass
class RoutineRegistry:
    """Routine name -> callable. Re-registration replaces."""
    routines: Dict[str, Callable[..., Any]] = field(default_factory=dict)

    def register(self, name: str, fn: Callable[..., Any]) -> Callable[..., Any]:
        self.routines[name] = fn
        return fn

    def get(self, name: str) -> Optional[Callable[..., Any]]:
        fn = self.routines.get(name)
        if fn is None:
            logger.debug("routine %s is not registered", name)
        return fn

    def __contains__(self, name: str) -> bool:
        return name in self.routines

    def names(self) -> List[str]:
        return list(self.routines)
