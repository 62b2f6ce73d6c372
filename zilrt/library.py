"""
ZIL Runtime Standard Verb Library

The everyday verbs most games share: looking, taking, dropping, inventory,
opening containers and walking between rooms. install() registers the verb
names and their V-<TAG> routines on a game; the routines read PRSO/PRSI/HERE
and exit through rtrue() like hand-written routines do.

Exits are room properties keyed by direction (NORTH, SOUTH, ...). A value
naming an object is a destination; any other string is printed as the
reason the way is blocked. Entering a room with a DEATH property ends the
game with that message; a VICTORY property wins it. An object's VALUE is
added to the score the first time it is taken.
"""

from __future__ import annotations

import logging
from typing import Dict, Optional

from zilrt.runtime.interpreter import Game, Message
from zilrt.runtime.objects import (
    CONTBIT,
    INVISIBLE,
    NDESCBIT,
    OPENBIT,
    TAKEBIT,
    TOUCHBIT,
    TRANSBIT,
)
from zilrt.runtime.output import CR, DESC, NUMBER
from zilrt.runtime.signals import rfalse, rtrue

logger = logging.getLogger(__name__)

VERBS: Dict[str, str] = {
    "LOOK": "LOOK",
    "L": "LOOK",
    "EXAMINE": "EXAMINE",
    "X": "EXAMINE",
    "TAKE": "TAKE",
    "GET": "TAKE",
    "DROP": "DROP",
    "INVENTORY": "INVENTORY",
    "I": "INVENTORY",
    "OPEN": "OPEN",
    "CLOSE": "CLOSE",
    "WALK": "WALK",
    "GO": "WALK",
    "SCORE": "SCORE",
    "QUIT": "QUIT",
    "Q": "QUIT",
}

YUKS = (
    "A valiant attempt.",
    "You can't be serious.",
    "What a concept!",
    "Not a prayer.",
)


def _see_inside(game: Game, obj_id: str) -> bool:
    return game.has_flag(obj_id, OPENBIT) or game.has_flag(obj_id, TRANSBIT)


def weight(game: Game, obj_id: str) -> int:
    """Size of obj_id's contents, recursively."""
    total = 0
    child = game.first(obj_id)
    while child is not None:
        total += game.get_property(child, "size", 0) + weight(game, child)
        child = game.next(child)
    return total


def describe_contents(game: Game, container: str) -> None:
    winner = game.getg("WINNER")
    obj = game.first(container)
    while obj is not None:
        if obj != winner and not game.has_flag(obj, INVISIBLE):
            if not game.has_flag(obj, NDESCBIT):
                fdesc = game.get_property(obj, "fdesc")
                if fdesc and not game.has_flag(obj, TOUCHBIT):
                    game.tell(fdesc, CR)
                else:
                    game.tell("There is a ", DESC, obj, " here.", CR)
            if _see_inside(game, obj) and game.first(obj) is not None:
                game.tell("The ", DESC, obj, " contains:", CR)
                inner = game.first(obj)
                while inner is not None:
                    game.tell("  A ", DESC, inner, CR)
                    inner = game.next(inner)
        obj = game.next(obj)


def describe_room(game: Game, handled: bool = False) -> None:
    """Long description (unless a handler already gave one) and contents."""
    here = game.getg("HERE")
    if not handled:
        text = game.get_property(here, "ldesc")
        if text:
            game.tell(text, CR)
    describe_contents(game, here)
    game.set_flag(here, TOUCHBIT)


def _require_prso(game: Game, verb: str) -> Optional[str]:
    prso = game.getg("PRSO")
    if prso is None:
        game.tell("What do you want to ", verb.lower(), "?", CR)
        return None
    if not game.in_scope(prso):
        game.tell("You can't see any such thing.", CR)
        return None
    return prso


def install(game: Game) -> None:
    """Register the standard verbs and their routines on game."""

    def v_look():
        here = game.getg("HERE")
        game.tell(DESC, here, CR)
        handled = game.apply_action(here, Message.LOOK)
        describe_room(game, bool(handled))
        rtrue()

    def v_examine():
        prso = _require_prso(game, "examine")
        if prso is None:
            rtrue()
        text = game.get_property(prso, "TEXT") or game.get_property(prso, "ldesc")
        if text:
            game.tell(text, CR)
        elif _see_inside(game, prso) and game.first(prso) is not None:
            describe_contents(game, prso)
        else:
            game.tell("There's nothing special about the ", DESC, prso, ".", CR)
        rtrue()

    def v_take():
        prso = _require_prso(game, "take")
        if prso is None:
            rtrue()
        winner = game.getg("WINNER")
        if game.parent(prso) == winner:
            game.tell("You already have that.", CR)
            rtrue()
        if not game.has_flag(prso, TAKEBIT):
            game.tell(game.pick_one(YUKS), CR)
            rtrue()
        load = weight(game, winner) + game.get_property(prso, "size", 0)
        if load > game.getg("LOAD-ALLOWED", 100):
            game.tell("Your load is too heavy.", CR)
            rtrue()
        first_touch = not game.has_flag(prso, TOUCHBIT)
        if not game.move(prso, winner):
            game.tell("You can't take the ", DESC, prso, " while you are in it.", CR)
            rfalse()
        game.set_flag(prso, TOUCHBIT)
        game.tell("Taken.", CR)
        if first_touch:
            game.score(game.get_property(prso, "VALUE", 0))
        rtrue()

    def v_drop():
        prso = game.getg("PRSO")
        winner = game.getg("WINNER")
        if prso is None or game.parent(prso) != winner:
            game.tell("You're not carrying that.", CR)
            rtrue()
        if not game.move(prso, game.getg("HERE")):
            game.tell("You can't drop that here.", CR)
            rfalse()
        game.tell("Dropped.", CR)
        rtrue()

    def v_inventory():
        winner = game.getg("WINNER")
        obj = game.first(winner)
        if obj is None:
            game.tell("You are empty-handed.", CR)
            rtrue()
        game.tell("You are carrying:", CR)
        while obj is not None:
            game.tell("  A ", DESC, obj, CR)
            obj = game.next(obj)
        rtrue()

    def v_open():
        prso = _require_prso(game, "open")
        if prso is None:
            rtrue()
        if not game.has_flag(prso, CONTBIT):
            game.tell("You must tell me how to do that to a ", DESC, prso, ".", CR)
            rtrue()
        if game.has_flag(prso, OPENBIT):
            game.tell("It is already open.", CR)
            rtrue()
        game.set_flag(prso, OPENBIT)
        contents = game.children(prso)
        if not contents or game.has_flag(prso, TRANSBIT):
            game.tell("Opened.", CR)
            rtrue()
        game.tell("Opening the ", DESC, prso, " reveals ")
        for i, obj in enumerate(contents):
            if i:
                game.tell(", ")
            game.tell("a ", DESC, obj)
        game.tell(".", CR)
        rtrue()

    def v_close():
        prso = _require_prso(game, "close")
        if prso is None:
            rtrue()
        if not game.has_flag(prso, CONTBIT):
            game.tell("You must tell me how to do that to a ", DESC, prso, ".", CR)
            rtrue()
        if not game.has_flag(prso, OPENBIT):
            game.tell("It is already closed.", CR)
            rtrue()
        game.clear_flag(prso, OPENBIT)
        game.tell("Closed.", CR)
        rtrue()

    def v_walk():
        direction = game.getg("PRSO")
        here = game.getg("HERE")
        dest = game.get_property(here, direction) if direction else None
        if dest is None:
            game.tell("You can't go that way.", CR)
            rfalse()
        if not game.objects.exists(dest):
            game.tell(dest, CR)
            rfalse()
        game.tell(DESC, dest, CR)
        handled = game.goto(dest)
        if not game.here_is(dest):
            rfalse()
        describe_room(game, bool(handled))
        death = game.get_property(dest, "DEATH")
        if death:
            game.jigs_up(death)
        if game.get_property(dest, "VICTORY"):
            game.finish()
        rtrue()

    def v_score():
        game.tell("Your score is ", NUMBER, game.getg("SCORE", 0),
                  " in ", NUMBER, game.getg("MOVES", 0), " moves.", CR)
        rtrue()

    def v_quit():
        game.quit()

    for name, tag in VERBS.items():
        game.register_verb(name, tag)

    routines = {
        "V-LOOK": v_look,
        "V-EXAMINE": v_examine,
        "V-TAKE": v_take,
        "V-DROP": v_drop,
        "V-INVENTORY": v_inventory,
        "V-OPEN": v_open,
        "V-CLOSE": v_close,
        "V-WALK": v_walk,
        "V-SCORE": v_score,
        "V-QUIT": v_quit,
    }
    for name, fn in routines.items():
        game.register_routine(name, fn)
    logger.debug("standard library installed (%d verbs)", len(VERBS))
