"""Test randomness, termination and GOTO."""
import pytest

from zilrt.runtime.interpreter import Game, GameConfig, Message
from zilrt.runtime.randomness import Randomizer
from zilrt.runtime.signals import GameOver


class TestRandomizer:
    """Tests for RANDOM, PICK-ONE and PROB."""

    @pytest.mark.parametrize("n", [1, 2, 6, 100])
    def test_random_positive_range(self, n):
        """Test positive draws stay in [1, n]."""
        rng = Randomizer(seed=7)
        draws = [rng.random(n) for _ in range(1000)]
        assert all(1 <= d <= n for d in draws)

    @pytest.mark.parametrize("n", [-1, -3, -50])
    def test_random_negative_range(self, n):
        """Test negative draws stay in [n, -1]."""
        rng = Randomizer(seed=7)
        draws = [rng.random(n) for _ in range(1000)]
        assert all(n <= d <= -1 for d in draws)

    def test_random_covers_range(self):
        """Test every face of a small die turns up."""
        rng = Randomizer(seed=3)
        assert {rng.random(6) for _ in range(1000)} == set(range(1, 7))

    def test_random_zero(self):
        """Test RANDOM 0 yields 0."""
        assert Randomizer().random(0) == 0

    def test_seeded_is_repeatable(self):
        """Test equal seeds give equal sequences."""
        a, b = Randomizer(seed=99), Randomizer(seed=99)
        assert [a.random(20) for _ in range(50)] == [b.random(20) for _ in range(50)]

    def test_pick_one(self):
        """Test PICK-ONE returns members and None for empty input."""
        rng = Randomizer(seed=1)
        items = ["a", "b", "c"]
        picks = {rng.pick_one(items) for _ in range(200)}
        assert picks == set(items)
        assert rng.pick_one([]) is None

    @pytest.mark.parametrize("percent", [10, 50, 90])
    def test_prob_converges(self, percent):
        """Test PROB frequency approaches percent/100."""
        rng = Randomizer(seed=2024)
        trials = 20000
        hits = sum(rng.prob(percent) for _ in range(trials))
        assert abs(hits / trials - percent / 100) < 0.02

    def test_prob_bounds(self):
        """Test PROB 0 never and PROB 100 always."""
        rng = Randomizer(seed=5)
        assert not any(rng.prob(0) for _ in range(500))
        assert all(rng.prob(100) for _ in range(500))


class TestJigsUp:
    """Tests for death and victory."""

    def test_jigs_up(self, game, sink):
        """Test death output, flags and termination reason."""
        with pytest.raises(GameOver) as exc_info:
            game.jigs_up("The troll kills you.")
        assert exc_info.value.reason == "died"
        assert game.getg("DEAD-FLAG") is True
        assert game.dead
        assert sink.getvalue() == (
            "The troll kills you.\n\n" + game.config.death_banner + "\n"
        )

    def test_jigs_up_stops_later_routines(self, game):
        """Test nothing runs after death, even across routine boundaries."""
        ran = []

        def troll():
            game.jigs_up("The troll kills you.")
            ran.append("troll-after")

        def fight():
            game.call("TROLL")
            ran.append("fight-after")

        game.register_routine("TROLL", troll)
        game.register_routine("FIGHT", fight)
        with pytest.raises(GameOver):
            game.call("FIGHT")
        assert ran == []

    def test_finish(self, game, sink):
        """Test victory output, flags and termination reason."""
        with pytest.raises(GameOver) as exc_info:
            game.finish()
        assert exc_info.value.reason == "won"
        assert game.getg("WON-FLAG") is True
        assert game.won
        assert game.config.victory_banner in sink.getvalue()

    def test_quit(self, game):
        """Test QUIT ends the session."""
        with pytest.raises(GameOver) as exc_info:
            game.quit()
        assert exc_info.value.reason == "quit"


class TestGoto:
    """Tests for GOTO."""

    def test_goto_runs_handler_once(self, game):
        """Test HERE, player location and a single look message."""
        messages = []
        game.define("ROOM1")
        game.define("ROOM2", action=messages.append)
        game.goto("ROOM1")
        game.goto("ROOM2")
        assert game.getg("HERE") == "ROOM2"
        assert game.parent("PLAYER") == "ROOM2"
        assert messages == [Message.LOOK]
        assert messages[0] == "look"

    def test_goto_without_handler(self, game):
        """Test rooms without handlers just move the player."""
        game.define("ROOM")
        assert game.goto("ROOM") is None
        assert game.children("ROOM") == ["PLAYER"]

    def test_goto_moves_winner(self, game):
        """Test GOTO moves WINNER, not necessarily the player."""
        game.define("ROOM")
        game.define("ROBOT")
        game.setg("WINNER", "ROBOT")
        game.goto("ROOM")
        assert game.parent("ROBOT") == "ROOM"
        assert game.parent("PLAYER") is None

    def test_goto_refused_keeps_here(self, game):
        """Test a refused move leaves HERE and the player where they were."""
        messages = []
        game.define("HALL")
        game.define("CLOSET", parent="PLAYER", action=messages.append)
        game.goto("HALL")
        assert game.goto("CLOSET") is False
        assert game.getg("HERE") == "HALL"
        assert game.parent("PLAYER") == "HALL"
        assert messages == []
        assert len(game.diagnostics) == 1


class TestReset:
    """Tests for reset."""

    def test_reset_clears_everything(self, game):
        """Test reset rebuilds all four containers."""
        game.define("LAMP")
        game.setg("SCORE", 50)
        game.register_verb("GET", "TAKE")
        game.register_routine("FOO", lambda: 1)
        game.tell("x", "y")
        game.reset()
        assert game.get("LAMP") is None
        assert game.get("PLAYER") is not None
        assert game.getg("SCORE") == 0
        assert game.verb_tag("GET") == "GET"
        assert game.call("FOO") is None
        assert game.diagnostics == []

    def test_reset_reseeds_rng(self):
        """Test a seeded game replays the same draws after reset."""
        game = Game(GameConfig(seed=11))
        first = [game.random(100) for _ in range(10)]
        game.reset()
        assert [game.random(100) for _ in range(10)] == first
