from unittest import TestCase, main

from numpy import array
from numpy.random import default_rng

from tilegame.core.gameboard import move_grid
from tilegame.core.gamemove import can_move, is_done, legal_actions, legal_actions_mask
from tilegame.core.types import Direction


class TestGameMove(TestCase):
    def test_legal_actions(self):
        """
        Test if legal actions are correctly identified.
        """
        board = array([[2, 0, 0, 0], [2, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]])
        self.assertEqual(legal_actions(board), [Direction.UP, Direction.DOWN, Direction.RIGHT])

    def test_terminal_board(self):
        """
        Test that a checkerboard without empty cell has no legal move.
        """
        board = array([[2, 4, 2, 4], [4, 2, 4, 2], [2, 4, 2, 4], [4, 2, 4, 2]])
        self.assertFalse(can_move(board))
        self.assertTrue(is_done(board))
        self.assertEqual(legal_actions(board), [])

    def test_full_board_with_merge(self):
        """
        Test that a full board with two equal neighbours is still playable.
        """
        board = array([[2, 4, 2, 4], [4, 2, 4, 2], [2, 4, 2, 4], [4, 2, 8, 8]])
        self.assertTrue(can_move(board))
        self.assertEqual(legal_actions(board), [Direction.LEFT, Direction.RIGHT])

    def test_mask_matches_move_grid(self):
        """
        Test that the vectorised mask agrees with sliding the grid, on random boards.
        """
        generator = default_rng(0)
        for _ in range(200):
            size = int(generator.integers(2, 6))
            board = generator.choice([0, 0, 2, 4, 8], size=(size, size))
            mask = legal_actions_mask(board)
            for direction in Direction:
                self.assertEqual(mask[direction], move_grid(board, direction).has_changed, msg=f'{board}, {direction}')


if __name__ == '__main__':
    main()
