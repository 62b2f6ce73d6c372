"""
ZIL Runtime World Files

JSON world definitions validated with pydantic. A world file carries the
object tree, verb names, global overrides and the starting room; action
handlers are referenced by routine name and resolved at call time.

Example:
    {
        "title": "Cellar",
        "start": "CELLAR",
        "objects": [
            {"id": "CELLAR", "desc": "Cellar", "ldesc": "A damp cellar."},
            {"id": "LAMP", "parent": "CELLAR", "desc": "brass lamp",
             "flags": ["TAKEBIT"], "synonyms": ["lamp"]}
        ]
    }
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field, ValidationError

from zilrt.runtime.interpreter import Game
from zilrt.runtime.signals import ContainmentCycle, WorldFileError

logger = logging.getLogger(__name__)


class ObjectSpec(BaseModel):
    """One object definition."""
    id: str
    parent: Optional[str] = None
    desc: Optional[str] = None
    ldesc: Optional[str] = None
    fdesc: Optional[str] = None
    synonyms: List[str] = Field(default_factory=list)
    adjectives: List[str] = Field(default_factory=list)
    flags: List[str] = Field(default_factory=list)
    size: int = 0
    action: Optional[str] = None
    properties: Dict[str, Any] = Field(default_factory=dict)


class WorldSpec(BaseModel):
    """A complete world definition."""
    title: str = "Untitled"
    start: Optional[str] = None
    globals: Dict[str, Any] = Field(default_factory=dict)
    verbs: Dict[str, str] = Field(default_factory=dict)
    objects: List[ObjectSpec] = Field(default_factory=list)

    def install(self, game: Game) -> Optional[str]:
        """Define everything on game and return the starting room."""
        for name, value in self.globals.items():
            game.setg(name, value)
        for name, tag in self.verbs.items():
            game.register_verb(name, tag)
        for spec in self.objects:
            attrs = spec.model_dump(exclude={"id", "parent"}, exclude_none=True)
            attrs["flags"] = set(spec.flags)
            if game.get(spec.id) is not None:
                logger.debug("object %s redefined", spec.id)
            try:
                game.objects.define(spec.id, parent=spec.parent, **attrs)
            except ContainmentCycle as exc:
                raise WorldFileError(str(exc)) from exc
        if self.start is not None and game.get(self.start) is None:
            raise WorldFileError(f"start room {self.start} is not defined")
        logger.info("world %r installed (%d objects)", self.title, len(self.objects))
        return self.start


def parse_world(data: Union[str, Dict[str, Any]]) -> WorldSpec:
    """Validate a world from JSON text or an already-decoded mapping."""
    try:
        if isinstance(data, str):
            return WorldSpec.model_validate_json(data)
        return WorldSpec.model_validate(data)
    except ValidationError as exc:
        raise WorldFileError(f"invalid world definition: {exc}") from exc


def load_world(path: Union[str, Path]) -> WorldSpec:
    """Read and validate a world file."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise WorldFileError(f"cannot read {path}: {exc}") from exc
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise WorldFileError(f"{path} is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise WorldFileError(f"{path} must hold a JSON object")
    return parse_world(data)
