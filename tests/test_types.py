"""
Tests for the game state value type.
"""

from unittest import TestCase, main

from numpy import array, int64, zeros

from tilegame.core.types import GameState, validate_grid


class TestGameState(TestCase):
    """Test validation and immutability of GameState."""

    def test_grid_is_copied_and_frozen(self):
        """Mutating the caller's array does not reach the state, and the state grid is read-only."""
        grid = array([[2, 0], [0, 4]])
        state = GameState(grid=grid)
        grid[0, 0] = 8

        self.assertEqual(state.grid[0, 0], 2)
        self.assertEqual(state.grid.dtype, int64)
        with self.assertRaises(ValueError):
            state.grid[0, 0] = 16

    def test_properties(self):
        """Size and max tile are derived from the grid."""
        state = GameState(grid=array([[2, 0, 0], [0, 32, 0], [0, 0, 4]]))
        self.assertEqual(state.size, 3)
        self.assertEqual(state.max_tile, 32)

    def test_equality_is_identity(self):
        """Two states with the same content are distinct objects."""
        grid = array([[2, 0], [0, 4]])
        self.assertNotEqual(GameState(grid=grid), GameState(grid=grid))

    def test_invalid_grids(self):
        """Non-square, out-of-range and non power-of-two grids are rejected."""
        with self.assertRaises(ValueError):
            GameState(grid=zeros((2, 3), dtype=int64))
        with self.assertRaises(ValueError):
            GameState(grid=zeros((8, 8), dtype=int64))
        with self.assertRaises(ValueError):
            GameState(grid=zeros((1, 1), dtype=int64))
        with self.assertRaises(ValueError):
            GameState(grid=array([[2, 3], [0, 0]]))
        with self.assertRaises(ValueError):
            validate_grid(array([[1, 0], [0, 0]]))

    def test_game_over_is_derived(self):
        """The game-over flag follows the grid when omitted."""
        self.assertFalse(GameState(grid=array([[2, 2], [0, 0]])).is_game_over)
        self.assertTrue(GameState(grid=array([[2, 4], [4, 2]])).is_game_over)

    def test_contradicting_game_over_flag(self):
        """A flag disagreeing with the grid is rejected."""
        with self.assertRaises(ValueError):
            GameState(grid=array([[2, 2, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]]), is_game_over=True)
        with self.assertRaises(ValueError):
            GameState(grid=array([[2, 4], [4, 2]]), is_game_over=False)
        self.assertTrue(GameState(grid=array([[2, 4], [4, 2]]), is_game_over=True).is_game_over)

    def test_negative_score(self):
        """A negative score is rejected."""
        with self.assertRaises(ValueError):
            GameState(grid=zeros((4, 4), dtype=int64), score=-1)


if __name__ == '__main__':
    main()
