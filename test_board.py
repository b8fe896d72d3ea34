#!/usr/bin/env python
"""
Tests for the NoGo board and placement rules.

Covers legality (occupied cells, suicide, capture, turn order), the board's
bookkeeping when placing, and conversions to and from text and dictionaries.
"""
import unittest

from nogo_ai.core.actions import PlaceAction
from nogo_ai.core.board import Board
from nogo_ai.core.constants import PieceType


class TestPlacementRules(unittest.TestCase):
    """Test case for NoGo legality."""

    def test_empty_board_all_cells_legal(self):
        board = Board(9, 9)
        self.assertEqual(board.side_to_move, PieceType.BLACK)
        self.assertEqual(len(board.get_legal_positions()), 81)
        self.assertTrue(board.has_legal_move())

    def test_place_switches_side_and_records_history(self):
        board = Board(3, 3)
        self.assertTrue(board.place(4))
        self.assertEqual(board[4], PieceType.BLACK)
        self.assertEqual(board.side_to_move, PieceType.WHITE)
        self.assertEqual(board.history, [4])
        self.assertEqual(board.move_count, 1)

    def test_occupied_cell_is_illegal(self):
        board = Board(3, 3)
        board.place(0)
        self.assertFalse(board.place(0))

    def test_suicide_is_illegal(self):
        """A stone whose group would have no liberty may not be placed."""
        board = Board.from_rows([".O", "O."], side_to_move=PieceType.BLACK)
        self.assertFalse(board.is_legal(0))
        self.assertFalse(board.is_legal(3))
        self.assertFalse(board.has_legal_move())

    def test_single_cell_board_has_no_move(self):
        self.assertEqual(Board(1, 1).get_legal_positions(), [])

    def test_capture_is_illegal(self):
        """Taking the last liberty of an opponent group is not allowed."""
        board = Board.from_rows(["X.."])
        self.assertEqual(board.side_to_move, PieceType.WHITE)
        self.assertFalse(board.is_legal(1))
        self.assertEqual(board.get_legal_positions(), [2])

    def test_group_liberties_are_shared(self):
        # The two black stones share the liberty at the right end
        board = Board.from_rows(["XX.", "OOO"], side_to_move=PieceType.WHITE)
        self.assertFalse(board.is_legal(2))
        board.side_to_move = PieceType.BLACK
        self.assertFalse(board.is_legal(2))

    def test_wrong_side_is_illegal(self):
        board = Board(3, 3)
        self.assertFalse(board.place(0, PieceType.WHITE))
        self.assertTrue(board.place(0, PieceType.BLACK))

    def test_out_of_range_is_illegal(self):
        board = Board(3, 3)
        self.assertFalse(board.place(-1))
        self.assertFalse(board.place(9))

    def test_illegal_attempt_leaves_board_unchanged(self):
        board = Board.from_rows(["X.."])
        before = board.clone()
        self.assertFalse(board.place(1))
        self.assertEqual(board, before)
        self.assertEqual(board.history, before.history)

    def test_valid_actions_belong_to_side_to_move(self):
        board = Board.from_rows(["X.."])
        self.assertEqual(board.get_valid_actions(), [PlaceAction(2, PieceType.WHITE)])

    def test_invalid_dimensions(self):
        with self.assertRaises(ValueError):
            Board(0, 9)
        with self.assertRaises(ValueError):
            Board(9, 20)


class TestBoardConversions(unittest.TestCase):
    """Test case for copying, labels and serialization."""

    def test_clone_is_independent(self):
        board = Board(3, 3)
        copy = board.clone()
        copy.place(4)
        self.assertEqual(board[4], PieceType.EMPTY)
        self.assertEqual(board.side_to_move, PieceType.BLACK)
        self.assertEqual(board.history, [])

    def test_position_labels_skip_i(self):
        board = Board(9, 9)
        self.assertEqual(board.position_label(0), "A1")
        self.assertEqual(board.position_label(8), "J1")
        self.assertEqual(board.position_label(80), "J9")
        self.assertEqual(board.parse_position("j1"), 8)
        self.assertEqual(board.parse_position("C2"), 11)

    def test_parse_position_rejects_bad_labels(self):
        board = Board(9, 9)
        for label in ["Z1", "A0", "A10", "A", "Ax"]:
            with self.assertRaises(ValueError):
                board.parse_position(label)

    def test_from_rows_infers_side(self):
        self.assertEqual(Board.from_rows(["..", ".."]).side_to_move, PieceType.BLACK)
        self.assertEqual(Board.from_rows(["X.", ".."]).side_to_move, PieceType.WHITE)
        self.assertEqual(Board.from_rows(["XO", ".."]).side_to_move, PieceType.BLACK)

    def test_from_rows_rejects_bad_input(self):
        with self.assertRaises(ValueError):
            Board.from_rows(["..", "."])
        with self.assertRaises(ValueError):
            Board.from_rows(["?."])

    def test_dict_round_trip(self):
        board = Board(4, 3)
        for position in (0, 5, 11):
            board.place(position)
        restored = Board.from_dict(board.to_dict())
        self.assertEqual(restored, board)
        self.assertEqual(restored.history, board.history)
        self.assertEqual(restored.to_rows(), board.to_rows())

    def test_str_shows_coordinates_and_turn(self):
        board = Board.from_rows(["X.", ".O"])
        text = str(board)
        self.assertIn("A B", text)
        self.assertIn(" 1 X .", text)
        self.assertIn("Black to move", text)


if __name__ == "__main__":
    unittest.main()
