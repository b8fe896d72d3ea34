#!/usr/bin/env python
"""
Tests for NoGo game flow and the match runner.

Plays short games between the random and MCTS players and checks turn
handling, game termination, results, game records and the command-line
interface.
"""
import contextlib
import io
import json
import os
import tempfile
import unittest

from nogo_ai.core.actions import PlaceAction, NO_ACTION
from nogo_ai.core.agents import RandomAgent
from nogo_ai.core.board import Board
from nogo_ai.core.constants import PieceType, SIDES
from nogo_ai.core.game import Game, GameResult, create_game, simulate_random_game
from nogo_ai.mcts.agent import MCTSAgent
from nogo_ai import play

BLACK = PieceType.BLACK
WHITE = PieceType.WHITE


class TestGameFlow(unittest.TestCase):
    """Test case for the Game manager."""

    def test_new_game(self):
        game = create_game(5, 5)
        self.assertEqual(game.state, Board(5, 5))
        self.assertEqual(game.get_result(), GameResult.IN_PROGRESS)
        self.assertIsNone(game.get_winner())
        self.assertEqual(game.player_names, {BLACK: "Black", WHITE: "White"})

    def test_black_wins_on_two_cell_board(self):
        game = Game(2, 1)
        game.register_agent(BLACK, RandomAgent("role=black seed=1").get_action_callback())
        game.register_agent(WHITE, RandomAgent("role=white seed=2").get_action_callback())

        final = game.run_game()

        self.assertTrue(game.game_over)
        self.assertEqual(game.get_winner(), BLACK)
        self.assertEqual(game.get_result(), GameResult.WINNER)
        self.assertEqual(game.turn_count, 1)
        self.assertFalse(final.has_legal_move())

    def test_manual_steps(self):
        game = Game(3, 1)
        state, over = game.step(PlaceAction(0, BLACK))
        self.assertFalse(over)
        state, over = game.step(PlaceAction(2, WHITE))
        self.assertTrue(over)
        self.assertEqual(game.get_winner(), WHITE)

        # Further steps are no-ops
        self.assertEqual(game.step(), (game.state, True))

    def test_illegal_action_raises(self):
        game = Game(3, 1)
        game.step(PlaceAction(0, BLACK))
        with self.assertRaises(ValueError):
            game.step(PlaceAction(1, WHITE))
        self.assertEqual(game.turn_count, 1)

    def test_missing_agent_raises(self):
        with self.assertRaises(ValueError):
            Game(3, 3).step()
        game = Game(3, 3)
        game.register_agent(BLACK, RandomAgent("role=black").get_action_callback())
        with self.assertRaises(ValueError):
            game.run_game()

    def test_no_action_forfeits(self):
        game = Game(3, 3)
        state, over = game.step(NO_ACTION)
        self.assertTrue(over)
        self.assertEqual(game.get_winner(), WHITE)
        self.assertEqual(game.turn_count, 0)

    def test_stuck_side_loses_without_asking_agent(self):
        game = Game(board=Board.from_rows(["X.O"], side_to_move=BLACK))
        state, over = game.step()
        self.assertTrue(over)
        self.assertEqual(game.get_winner(), WHITE)

    def test_agents_receive_a_copy(self):
        game = Game(3, 3)
        seen = []

        def callback(state, side):
            seen.append(state is game.state)
            state.place(0)
            return PlaceAction(4, side)

        game.register_agent(BLACK, callback)
        game.step()
        self.assertEqual(seen, [False])
        self.assertEqual(game.state[0], PieceType.EMPTY)
        self.assertEqual(game.state[4], BLACK)

    def test_max_turns(self):
        game = Game(5, 5)
        for side in SIDES:
            game.register_agent(side, RandomAgent(f"role={side.name.lower()} seed=4").get_action_callback())
        game.run_game(max_turns=3)
        self.assertEqual(game.turn_count, 3)
        self.assertFalse(game.game_over)

    def test_reset(self):
        game = Game(3, 3)
        game.step(PlaceAction(4, BLACK))
        game.reset()
        self.assertEqual(game.state, Board(3, 3))
        self.assertEqual(game.turn_count, 0)

    def test_statistics(self):
        game = Game(3, 1)
        game.step(PlaceAction(1, BLACK))
        stats = game.get_game_statistics()
        self.assertEqual(stats["turns"], 1)
        self.assertEqual(stats["winner"], "BLACK")
        self.assertEqual(stats["winner_name"], "Black")
        self.assertEqual(stats["black_stones"], 1)
        self.assertIn("Game over", str(game))


class TestGameRecords(unittest.TestCase):
    """Test case for saving and replaying games."""

    def test_save_and_load(self):
        game = Game(4, 4, player_names={BLACK: "alice"})
        for side in SIDES:
            game.register_agent(side, RandomAgent(f"role={side.name.lower()} seed=7").get_action_callback())
        game.run_game()

        with tempfile.TemporaryDirectory() as temp_dir:
            path = os.path.join(temp_dir, "game.json")
            game.save_game(path)
            with open(path) as f:
                data = json.load(f)
            loaded = Game.load_game(path)

        self.assertEqual(len(data["actions"]), game.turn_count)
        self.assertEqual(loaded.state, game.state)
        self.assertEqual(loaded.get_winner(), game.get_winner())
        self.assertEqual(loaded.turn_count, game.turn_count)
        self.assertEqual(loaded.player_names[BLACK], "alice")

    def test_forfeit_survives_round_trip(self):
        game = Game(3, 3)
        game.step(PlaceAction(4, BLACK))
        game.step(NO_ACTION)
        loaded = Game.from_dict(game.to_dict())
        self.assertTrue(loaded.game_over)
        self.assertEqual(loaded.get_winner(), BLACK)


class TestMatches(unittest.TestCase):
    """Full games between agents."""

    def test_random_game_ends_with_stuck_loser(self):
        final, winner = simulate_random_game(5, 5, random_seed=3)
        self.assertFalse(final.has_legal_move())
        self.assertEqual(winner, final.side_to_move.opponent)

    def test_random_game_is_reproducible(self):
        first = simulate_random_game(5, 5, random_seed=12)
        second = simulate_random_game(5, 5, random_seed=12)
        self.assertEqual(first[0], second[0])
        self.assertEqual(first[1], second[1])

    def test_mcts_against_random(self):
        game = Game(3, 3)
        game.register_agent(BLACK, MCTSAgent("role=black T=20 seed=1").get_action_callback())
        game.register_agent(WHITE, RandomAgent("role=white seed=1").get_action_callback())
        game.run_game()
        self.assertTrue(game.game_over)
        self.assertIn(game.get_winner(), SIDES)


class TestCommandLine(unittest.TestCase):
    """Test case for the nogo-play match runner."""

    def run_main(self, argv):
        output = io.StringIO()
        with contextlib.redirect_stdout(output), contextlib.redirect_stderr(io.StringIO()):
            code = play.main(argv)
        return code, output.getvalue()

    def test_random_match(self):
        code, output = self.run_main(["--black", "random", "--white", "random",
                                      "--size", "3", "--games", "3", "--seed", "1"])
        self.assertEqual(code, 0)
        self.assertIn("Results", output)

    def test_save_last_game(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            path = os.path.join(temp_dir, "last.json")
            code, _ = self.run_main(["--black", "mcts", "--black-args", "T=10",
                                     "--white", "random", "--size", "3", "--seed", "2",
                                     "--save", path])
            self.assertEqual(code, 0)
            self.assertTrue(Game.load_game(path).game_over)

    def test_bad_options(self):
        code, output = self.run_main(["--games", "0"])
        self.assertEqual(code, 2)
        code, output = self.run_main(["--white-args", "role=green", "--black", "random"])
        self.assertEqual(code, 2)
        self.assertIn("invalid role", output)

    def test_create_agent(self):
        self.assertIsInstance(play.create_agent("random", "black"), RandomAgent)
        self.assertIsInstance(play.create_agent("mcts", "white", "T=5"), MCTSAgent)
        with self.assertRaises(ValueError):
            play.create_agent("minimax", "black")


if __name__ == "__main__":
    unittest.main()
