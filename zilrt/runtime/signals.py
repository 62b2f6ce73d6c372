"""
ZIL Runtime Signals and Errors

Two families live here and never overlap:

- EngineError (Exception): something went wrong. AuthoringError marks a bug in
  game content that the engine reports and survives.
- ControlSignal (BaseException): non-local control flow. RoutineSignal unwinds
  to the nearest routine boundary; TerminationSignal unwinds to the game loop.

Key classes:
- RoutineSignal: ReturnTrue, ReturnFalse, FatalReturn, ReturnValue
- GameOver: death / victory / quit
- MalformedOutputStream, ContainmentCycle: authoring diagnostics
"""

from __future__ import annotations

from typing import Any


class _Fatal:
    """Sentinel returned by a routine that exits through rfatal()."""

    def __repr__(self) -> str:
        return "FATAL"

    def __bool__(self) -> bool:
        return True


FATAL = _Fatal()


# -----------------------------
# Failures
# -----------------------------

class EngineError(Exception):
    """Base class for engine failures."""


class AuthoringError(EngineError):
    """A bug in game content; reported, not fatal."""


class MalformedOutputStream(AuthoringError):
    """An output directive is missing its following token or cannot render it."""

    def __init__(self, directive: Any, position: int, reason: str = "has no following token"):
        self.directive = directive
        self.position = position
        self.reason = reason
        super().__init__(f"{directive} at token {position} {reason}")


class ContainmentCycle(AuthoringError):
    """Reparenting would make an object contain itself."""

    def __init__(self, obj_id: str, new_parent: str):
        self.obj_id = obj_id
        self.new_parent = new_parent
        super().__init__(f"moving {obj_id} into {new_parent} would create a containment cycle")


class WorldFileError(EngineError):
    """A world definition file could not be loaded."""


# -----------------------------
# Control flow
# -----------------------------

class ControlSignal(BaseException):
    """Base class for non-local exits. Not an error."""


class RoutineSignal(ControlSignal):
    """Unwinds to the nearest routine invocation boundary."""

    value: Any = None


class ReturnTrue(RoutineSignal):
    value = True


class ReturnFalse(RoutineSignal):
    value = False


class FatalReturn(RoutineSignal):
    value = FATAL


class ReturnValue(RoutineSignal):
    def __init__(self, value: Any = None):
        super().__init__(value)
        self.value = value


class TerminationSignal(ControlSignal):
    """Unwinds past every routine to the game loop."""


class GameOver(TerminationSignal):
    """The session ended. reason is "died", "won" or "quit"."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


def rtrue():
    """Exit the current routine with True."""
    raise ReturnTrue()


def rfalse():
    """Exit the current routine with False."""
    raise ReturnFalse()


def rfatal():
    """Exit the current routine with FATAL."""
    raise FatalReturn()


def rreturn(value: Any = None):
    """Exit the current routine with an explicit value."""
    raise ReturnValue(value)
