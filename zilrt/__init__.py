"""
ZIL Runtime - Interactive Fiction Engine

An interpreter engine for ZIL-style games: an object graph with containment,
flags and properties; a global environment; verb-driven dispatch; TELL-style
output; and JIGS-UP/FINISH termination.

Exports:
- Game: the game instance owning all engine state
- GameConfig, GameResult: configuration and loop outcome
- Directive tokens for TELL: CR, DESC, NUMBER, CHAR
- Routine exits: rtrue, rfalse, rfatal, rreturn
"""

from zilrt.runtime.dispatch import Command
from zilrt.runtime.executor import cond, equal
from zilrt.runtime.interpreter import Game, GameConfig, GameResult, Message
from zilrt.runtime.objects import (
    CONTBIT,
    INVISIBLE,
    LIGHTBIT,
    NDESCBIT,
    OPEN,
    OPENBIT,
    TAKEBIT,
    TOUCHBIT,
    TRANSBIT,
    TRANSPARENT,
    ObjectRecord,
)
from zilrt.runtime.output import CHAR, CR, DESC, NEWLINE, NUMBER, BufferSink, Directive
from zilrt.runtime.signals import (
    FATAL,
    AuthoringError,
    ContainmentCycle,
    ControlSignal,
    EngineError,
    GameOver,
    MalformedOutputStream,
    RoutineSignal,
    WorldFileError,
    rfalse,
    rfatal,
    rreturn,
    rtrue,
)

__version__ = "0.3.0"

__all__ = [
    "Command",
    "cond",
    "equal",
    "Game",
    "GameConfig",
    "GameResult",
    "Message",
    "ObjectRecord",
    "CONTBIT",
    "INVISIBLE",
    "LIGHTBIT",
    "NDESCBIT",
    "OPEN",
    "OPENBIT",
    "TAKEBIT",
    "TOUCHBIT",
    "TRANSBIT",
    "TRANSPARENT",
    "CHAR",
    "CR",
    "DESC",
    "NEWLINE",
    "NUMBER",
    "BufferSink",
    "Directive",
    "FATAL",
    "AuthoringError",
    "ContainmentCycle",
    "ControlSignal",
    "EngineError",
    "GameOver",
    "MalformedOutputStream",
    "RoutineSignal",
    "WorldFileError",
    "rfalse",
    "rfatal",
    "rreturn",
    "rtrue",
]
