"""Test fixtures for the ZIL Runtime test suite."""
import pytest
import json
import sys
from pathlib import Path
from typing import Dict, Any

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from zilrt import library
from zilrt.runtime.interpreter import Game, GameConfig
from zilrt.runtime.objects import CONTBIT, TAKEBIT
from zilrt.runtime.output import BufferSink


@pytest.fixture
def sink() -> BufferSink:
    """In-memory output sink."""
    return BufferSink()


@pytest.fixture
def game(sink: BufferSink) -> Game:
    """Fresh game with a fixed seed writing to the buffer sink."""
    return Game(GameConfig(seed=1234), sink=sink)


@pytest.fixture
def room_game(game: Game) -> Game:
    """ROOM holding a closed BOX with a LAMP inside, player in ROOM."""
    game.define("ROOM", desc="Room", ldesc="A bare room.")
    game.define("BOX", parent="ROOM", desc="box", flags={CONTBIT}, synonyms=["box"])
    game.define("LAMP", parent="BOX", desc="lamp", flags={TAKEBIT}, synonyms=["lamp"], size=10)
    game.setg("HERE", "ROOM")
    game.move("PLAYER", "ROOM")
    return game


@pytest.fixture
def library_game(room_game: Game) -> Game:
    """room_game with the standard verbs installed."""
    library.install(room_game)
    return room_game


@pytest.fixture
def sample_world() -> Dict[str, Any]:
    """Small world definition with a deadly room and a winning room."""
    return {
        "title": "Test World",
        "start": "HALL",
        "verbs": {"GRAB": "TAKE"},
        "objects": [
            {"id": "HALL", "desc": "Hall", "ldesc": "A long hall.",
             "properties": {"EAST": "PIT", "WEST": "VAULT", "NORTH": "The door is locked."}},
            {"id": "PIT", "desc": "Pit", "properties": {"DEATH": "You fall into the pit."}},
            {"id": "VAULT", "desc": "Vault", "properties": {"VICTORY": True}},
            {"id": "COIN", "parent": "HALL", "desc": "coin", "synonyms": ["coin"],
             "flags": ["TAKEBIT"], "size": 1, "properties": {"VALUE": 10}},
        ],
    }


@pytest.fixture
def world_path(tmp_path, sample_world: Dict[str, Any]) -> Path:
    """sample_world written to a temporary JSON file."""
    path = tmp_path / "world.json"
    with open(path, "w") as f:
        json.dump(sample_world, f)
    return path
