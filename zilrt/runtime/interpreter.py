"""
ZIL Runtime Interpreter

The Game instance owns every piece of engine state: the object graph, the
global environment, the verb table and the routine registry. Construction and
reset are ordinary methods; nothing lives at module level.

Key classes:
- GameConfig: configuration for a game instance
- GameResult: outcome of a game loop run
- Message: symbols delivered to action handlers
- Game: the running game instance
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Sequence

from zilrt.runtime.dispatch import (
    Command,
    direct_object_is,
    indirect_object_is,
    room_is,
    verb_matches,
)
from zilrt.runtime.environment import (
    DEFAULT_PLAYER,
    Environment,
    RoutineRegistry,
    VerbTable,
    reserved_globals,
)
from zilrt.runtime.executor import invoke
from zilrt.runtime.objects import ObjectRecord, ObjectStore
from zilrt.runtime.output import BufferSink, CR, InputSource, OutputSink, TokenRenderer
from zilrt.runtime.randomness import Randomizer
from zilrt.runtime.signals import AuthoringError, GameOver, RoutineSignal

logger = logging.getLogger(__name__)


class Message(str, Enum):
    LOOK = "look"
    BEGIN = "begin"
    END = "end"
    ACTION = "action"
    ENTER = "enter"

    def __str__(self) -> str:
        return self.value


@dataclass
class GameConfig:
    """Configuration for a game instance."""
    seed: Optional[int] = None
    player_id: str = DEFAULT_PLAYER
    strict: bool = False
    max_moves: Optional[int] = None
    prompt: str = ">"
    load_max: int = 100
    death_banner: str = "    ****  You have died  ****"
    victory_banner: str = "    ****  You have won  ****"


@dataclass
class GameResult:
    """Result of a game loop run."""
    reason: str
    score: int = 0
    moves: int = 0
    diagnostics: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "reason": self.reason,
            "score": self.score,
            "moves": self.moves,
            "diagnostics": list(self.diagnostics),
        }


class Game:
    """
    A running game instance.

    Routines are looked up by name and run inside a routine boundary;
    JIGS-UP, FINISH and QUIT unwind past every routine to run().
    """

    def __init__(self, config: Optional[GameConfig] = None, sink: Optional[OutputSink] = None):
        self.config = config or GameConfig()
        self.sink = sink if sink is not None else BufferSink()
        self.rng = Randomizer(self.config.seed)
        self.renderer = TokenRenderer(self.describe)
        self.reset()

    def reset(self) -> None:
        """Discard all state and reseed the four containers together."""
        player = self.config.player_id
        objects = ObjectStore()
        objects.define(player, desc="you")
        env = Environment(reserved_globals(player, self.config.load_max))

        self.objects = objects
        self.env = env
        self.verbs = VerbTable()
        self.routines = RoutineRegistry()
        self.diagnostics: List[str] = []
        self.dead = False
        self.won = False
        self.rng.reseed(self.config.seed)
        logger.info("game reset (player=%s, seed=%s)", player, self.config.seed)

    def setup(self, builder: Callable[["Game"], Any]) -> Any:
        """Run a world builder against this instance."""
        return builder(self)

    # -----------------------------
    # Object graph
    # -----------------------------

    def define(self, obj_id: str, **attrs: Any) -> Optional[ObjectRecord]:
        """Create or replace obj_id; a cycle is reported and nothing is defined."""
        try:
            return self.objects.define(obj_id, **attrs)
        except AuthoringError as exc:
            self.report(exc)
            return None

    def get(self, obj_id: str) -> Optional[ObjectRecord]:
        """The record for obj_id, or None."""
        return self.objects.get(obj_id)

    def parent(self, obj_id: str) -> Optional[str]:
        """Direct container of obj_id."""
        return self.objects.parent(obj_id)

    def locate(self, obj_id: str, levels: int = 1) -> Optional[str]:
        """Ancestor of obj_id up to levels steps out."""
        return self.objects.locate(obj_id, levels)

    def move(self, obj_id: str, new_parent: Optional[str]) -> bool:
        """Reparent; a cycle is reported and the move refused."""
        try:
            self.objects.move(obj_id, new_parent)
        except AuthoringError as exc:
            self.report(exc)
            return False
        return True

    def remove(self, obj_id: str) -> None:
        """Detach obj_id from its container."""
        self.objects.remove(obj_id)

    def children(self, parent_id: Optional[str]) -> List[str]:
        """Contents of parent_id in arrival order."""
        return self.objects.children(parent_id)

    def first(self, parent_id: Optional[str]) -> Optional[str]:
        """First child of parent_id."""
        return self.objects.first(parent_id)

    def next(self, obj_id: str) -> Optional[str]:
        """Next sibling of obj_id."""
        return self.objects.next(obj_id)

    def has_flag(self, obj_id: str, flag: str) -> bool:
        """Test a flag on obj_id."""
        return self.objects.has_flag(obj_id, flag)

    def set_flag(self, obj_id: str, flag: str) -> None:
        """Set a flag on obj_id."""
        self.objects.set_flag(obj_id, flag)

    def clear_flag(self, obj_id: str, flag: str) -> None:
        """Clear a flag on obj_id."""
        self.objects.clear_flag(obj_id, flag)

    def get_property(self, obj_id: str, key: str, default: Any = None) -> Any:
        """Read a field or property of obj_id."""
        return self.objects.get_property(obj_id, key, default)

    def set_property(self, obj_id: str, key: str, value: Any) -> None:
        """Write a field or property of obj_id."""
        self.objects.set_property(obj_id, key, value)

    def visible(self, obj_id: str, location: Optional[str]) -> bool:
        """Two-case visibility of obj_id from location."""
        return self.objects.visible(obj_id, location)

    def in_scope(self, obj_id: str) -> bool:
        """Visible from HERE or carried by WINNER."""
        return (self.objects.visible(obj_id, self.getg("HERE"))
                or self.objects.visible(obj_id, self.getg("WINNER")))

    def describe(self, obj_id: Any) -> str:
        """Printable name for an object id; other values pass through str()."""
        record = self.objects.get(obj_id) if isinstance(obj_id, str) else None
        return record.name if record else str(obj_id)

    # -----------------------------
    # Globals and registries
    # -----------------------------

    def setg(self, name: str, value: Any) -> Any:
        """Set a global variable."""
        return self.env.setg(name, value)

    def getg(self, name: str, default: Any = None) -> Any:
        """Read a global variable."""
        return self.env.getg(name, default)

    def register_verb(self, name: str, tag: Optional[str] = None) -> str:
        """Map a verb name to its action tag."""
        return self.verbs.register(name, tag)

    def verb_tag(self, name: str) -> Optional[str]:
        """Action tag for a verb name."""
        return self.verbs.tag(name)

    def register_routine(self, name: str, fn: Callable[..., Any]) -> Callable[..., Any]:
        """Register a routine under name."""
        return self.routines.register(name, fn)

    def score(self, points: int) -> int:
        """Add points to SCORE and return the new total."""
        return self.setg("SCORE", self.getg("SCORE", 0) + points)

    # -----------------------------
    # Dispatch predicates
    # -----------------------------

    def verb_is(self, *names: str) -> bool:
        """True when PRSA matches any of names (VERB?)."""
        return verb_matches(self.env, self.verbs, *names)

    def prso_is(self, *ids: str) -> bool:
        """True when PRSO is one of ids."""
        return direct_object_is(self.env, *ids)

    def prsi_is(self, *ids: str) -> bool:
        """True when PRSI is one of ids."""
        return indirect_object_is(self.env, *ids)

    def here_is(self, *ids: str) -> bool:
        """True when HERE is one of ids."""
        return room_is(self.env, *ids)

    # -----------------------------
    # Routines
    # -----------------------------

    def call(self, name: str, *args: Any) -> Any:
        """Invoke a registered routine inside its own boundary."""
        fn = self.routines.get(name)
        if fn is None:
            return None
        return invoke(fn, *args)

    def apply_action(self, obj_id: Optional[str], message: Any) -> Any:
        """
        Deliver message to obj_id's action handler.

        A string action names a registered routine. No handler is a lookup
        miss and yields None.
        """
        record = self.objects.get(obj_id)
        if record is None or record.action is None:
            return None
        if isinstance(record.action, str):
            return self.call(record.action, message)
        return invoke(record.action, message)

    # -----------------------------
    # Output
    # -----------------------------

    def tell(self, *tokens: Any) -> None:
        """Render TELL tokens to the sink, reporting malformed streams."""
        try:
            self.renderer.render(tokens, self.sink)
        except AuthoringError as exc:
            self.report(exc)

    def report(self, error: AuthoringError) -> None:
        """Record an authoring diagnostic; re-raise in strict mode."""
        if self.config.strict:
            raise error
        logger.warning("authoring error: %s", error)
        self.diagnostics.append(str(error))

    # -----------------------------
    # Randomness
    # -----------------------------

    def random(self, n: int) -> int:
        """RANDOM n."""
        return self.rng.random(n)

    def pick_one(self, seq: Sequence[Any]) -> Optional[Any]:
        """Random member of seq, or None."""
        return self.rng.pick_one(seq)

    def prob(self, percent: float) -> bool:
        """True with percent/100 probability."""
        return self.rng.prob(percent)

    # -----------------------------
    # Movement and termination
    # -----------------------------

    def goto(self, room_id: str) -> Any:
        """
        Enter room_id and let its handler describe it.

        HERE changes only once WINNER has been moved; a refused move leaves
        both untouched and returns False.
        """
        if not self.move(self.getg("WINNER"), room_id):
            return False
        self.setg("HERE", room_id)
        return self.apply_action(room_id, Message.LOOK)

    def jigs_up(self, message: str) -> None:
        """Print message and the death banner, then end the game."""
        self.sink.write(message)
        self.sink.write("\n\n")
        self.sink.write(self.config.death_banner + "\n")
        self.setg("DEAD-FLAG", True)
        self.dead = True
        logger.info("player died: %s", message)
        raise GameOver("died")

    def finish(self) -> None:
        """Print the victory banner and end the game."""
        self.sink.write("\n" + self.config.victory_banner + "\n")
        self.setg("WON-FLAG", True)
        self.won = True
        logger.info("player won with score %s", self.getg("SCORE"))
        raise GameOver("won")

    def quit(self) -> None:
        """End the game at the player's request."""
        raise GameOver("quit")

    # -----------------------------
    # Command dispatch and game loop
    # -----------------------------

    def perform(self, verb: str, prso: Optional[str] = None, prsi: Optional[str] = None) -> bool:
        """
        Run one command.

        The winner (when not the player), the room, PRSI, PRSO and finally
        the V-<TAG> routine are offered the command in turn; the first truthy
        result handles it. The room always gets an end message afterwards.
        """
        tag = self.verbs.tag(verb)
        self.setg("PRSA", tag)
        self.setg("PRSO", prso)
        self.setg("PRSI", prsi)
        logger.debug("perform %s prso=%s prsi=%s", tag, prso, prsi)

        handled = self._offer(tag, prso, prsi)
        self.apply_action(self.getg("HERE"), Message.END)
        return bool(handled)

    def _offer(self, tag: str, prso: Optional[str], prsi: Optional[str]) -> Any:
        winner = self.getg("WINNER")
        if winner != self.getg("PLAYER"):
            result = self.apply_action(winner, Message.ACTION)
            if result:
                return result
        result = self.apply_action(self.getg("HERE"), Message.BEGIN)
        if result:
            return result
        for obj_id in (prsi, prso):
            if obj_id is not None:
                result = self.apply_action(obj_id, Message.ACTION)
                if result:
                    return result
        routine = f"V-{tag}"
        if routine not in self.routines:
            logger.debug("no verb routine %s", routine)
            self.tell("You can't do that.", CR)
            return False
        return self.call(routine)

    def run(self, reader: InputSource,
            resolve: Callable[[str], Optional[Command]],
            start: Optional[str] = None) -> GameResult:
        """Read, resolve and perform commands until the session ends."""
        reason = "quit"
        try:
            if start is not None:
                self.goto(start)
            while True:
                limit = self.config.max_moves
                if limit is not None and self.getg("MOVES", 0) >= limit:
                    reason = "limit"
                    break
                line = reader.read_line(self.config.prompt)
                if line is None:
                    break
                line = line.strip()
                if not line:
                    continue
                try:
                    command = resolve(line)
                    if command is None:
                        self.tell("I don't understand that.", CR)
                        continue
                    self.perform(command.verb, command.prso, command.prsi)
                except RoutineSignal as signal:
                    logger.error("routine exit %r escaped outside any routine",
                                 type(signal).__name__)
                    self.diagnostics.append(
                        f"{type(signal).__name__} raised outside a routine")
                self.setg("MOVES", self.getg("MOVES", 0) + 1)
        except GameOver as over:
            reason = over.reason

        logger.info("game over: %s", reason)
        return GameResult(
            reason=reason,
            score=self.getg("SCORE", 0),
            moves=self.getg("MOVES", 0),
            diagnostics=list(self.diagnostics),
        )
