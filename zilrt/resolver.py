"""Literal command resolver for scripted and terminal play."""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from zilrt.runtime.dispatch import Command
from zilrt.runtime.interpreter import Game

logger = logging.getLogger(__name__)

DIRECTIONS: Dict[str, str] = {
    "n": "NORTH", "north": "NORTH",
    "s": "SOUTH", "south": "SOUTH",
    "e": "EAST", "east": "EAST",
    "w": "WEST", "west": "WEST",
    "u": "UP", "up": "UP",
    "d": "DOWN", "down": "DOWN",
}

ARTICLES = {"the", "a", "an"}
PREPOSITIONS = {"with", "in", "into", "on", "to", "at", "from", "under"}


class WordResolver:
    """
    Maps `VERB [OBJ [prep OBJ]]` onto a Command.

    Words are matched literally against registered verb names and object
    ids, synonyms and adjectives. Objects in scope win over the rest.
    """

    def __init__(self, game: Game, walk_verb: str = "WALK"):
        self.game = game
        self.walk_verb = walk_verb

    def __call__(self, line: str) -> Optional[Command]:
        words = [w for w in line.lower().split() if w not in ARTICLES]
        if not words:
            return None

        if len(words) == 1 and words[0] in DIRECTIONS:
            return Command(self.walk_verb, DIRECTIONS[words[0]])

        verb = words[0].upper()
        if verb not in self.game.verbs.verbs:
            logger.debug("unknown verb %s", verb)
            return None

        rest = words[1:]
        if self.game.verb_tag(verb) == self.walk_verb and len(rest) == 1 and rest[0] in DIRECTIONS:
            return Command(verb, DIRECTIONS[rest[0]])

        split = next((i for i, w in enumerate(rest) if w in PREPOSITIONS), None)
        direct, indirect = (rest, []) if split is None else (rest[:split], rest[split + 1:])

        prso = self._match(direct) if direct else None
        prsi = self._match(indirect) if indirect else None
        if (direct and prso is None) or (indirect and prsi is None):
            return None
        return Command(verb, prso, prsi)

    def _match(self, phrase: List[str]) -> Optional[str]:
        candidates = self.game.objects.ids()
        in_scope = [c for c in candidates if self.game.in_scope(c)]
        for pool in (in_scope, candidates):
            for obj_id in pool:
                if self._names(obj_id, phrase):
                    return obj_id
        return None

    def _names(self, obj_id: str, phrase: List[str]) -> bool:
        record = self.game.get(obj_id)
        if record is None:
            return False
        if "-".join(phrase).upper() == obj_id:
            return True
        noun, adjectives = phrase[-1], phrase[:-1]
        nouns = {s.lower() for s in record.synonyms} | {obj_id.lower()}
        if noun not in nouns:
            return False
        known = {a.lower() for a in record.adjectives}
        return all(a in known for a in adjectives)
