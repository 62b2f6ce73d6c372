"""Smoke tests for ZIL Runtime modules."""
import pytest
import sys
from pathlib import Path

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


class TestModuleImports:
    """Basic import tests for all modules."""

    def test_import_runtime_objects(self):
        """Test runtime.objects module imports."""
        from zilrt.runtime.objects import ObjectStore, ObjectRecord
        assert ObjectStore is not None
        assert ObjectRecord is not None

    def test_import_runtime_environment(self):
        """Test runtime.environment module imports."""
        from zilrt.runtime.environment import Environment, VerbTable, RoutineRegistry
        assert Environment is not None
        assert VerbTable is not None
        assert RoutineRegistry is not None

    def test_import_runtime_interpreter(self):
        """Test runtime.interpreter module imports."""
        from zilrt.runtime.interpreter import Game
        assert Game is not None

    def test_import_top_level(self):
        """Test the package re-exports."""
        import zilrt
        assert zilrt.Game is not None
        assert zilrt.__version__

    def test_import_cli(self):
        """Test CLI imports."""
        from zilrt.cli import main
        assert main is not None


class TestBasicInstantiation:
    """Test basic instantiation."""

    def test_instantiate_game(self):
        """Test Game instantiation with defaults."""
        from zilrt.runtime.interpreter import Game
        game = Game()
        assert game.get("PLAYER") is not None

    def test_reserved_globals_seeded(self):
        """Test reserved globals exist after initialization."""
        from zilrt.runtime.interpreter import Game
        game = Game()
        expected = {
            "PRSO": None, "PRSI": None, "PRSA": None,
            "WINNER": "PLAYER", "HERE": None, "PLAYER": "PLAYER",
            "SCORE": 0, "MOVES": 0, "VERBOSE": False, "SUPER-BRIEF": False,
            "WON-FLAG": False, "DEAD-FLAG": False, "P-CONT": None,
            "QUOTE-FLAG": False, "P-OFLAG": None,
            "LOAD-MAX": 100, "LOAD-ALLOWED": 100,
        }
        snapshot = game.env.snapshot()
        for name, value in expected.items():
            assert name in snapshot
            assert snapshot[name] == value
