"""
ZIL Runtime Engine

This package provides the interpreter engine for ZIL-style games:
- Objects: object graph store with containment, flags and properties
- Environment: global variables, verb table, routine registry
- Dispatch: VERB?/PRSO?/PRSI?/HERE? predicates
- Output: TELL token interpreter and sinks
- Executor: routine boundary, COND, EQUAL?
- Interpreter: the Game instance, termination and the game loop
"""

from zilrt.runtime.dispatch import Command
from zilrt.runtime.environment import Environment, RoutineRegistry, VerbTable
from zilrt.runtime.executor import cond, equal, invoke
from zilrt.runtime.interpreter import Game, GameConfig, GameResult, Message
from zilrt.runtime.objects import ObjectRecord, ObjectStore
from zilrt.runtime.output import (
    BufferSink,
    ConsoleInput,
    Directive,
    EchoSink,
    ScriptedInput,
    TokenRenderer,
)
from zilrt.runtime.randomness import Randomizer

__all__ = [
    "Command",
    "Environment",
    "RoutineRegistry",
    "VerbTable",
    "cond",
    "equal",
    "invoke",
    "Game",
    "GameConfig",
    "GameResult",
    "Message",
    "ObjectRecord",
    "ObjectStore",
    "BufferSink",
    "ConsoleInput",
    "Directive",
    "EchoSink",
    "ScriptedInput",
    "TokenRenderer",
    "Randomizer",
]
