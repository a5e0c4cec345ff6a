"""
Pytest configuration and shared fixtures.
"""
import pytest
import sys
from dataclasses import replace
from pathlib import Path
from typing import Callable, Iterable, List, Tuple

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minesweeper import (
    Board,
    Cell,
    Difficulty,
    Game,
    GameSettings,
    count_adjacent_mines,
)


# ============================================================================
# Helpers
# ============================================================================

class FixedShuffle:
    """
    Random stand-in whose shuffle moves chosen positions to the front.

    Lets a test decide exactly where place_mines puts its mines.
    """

    def __init__(self, mines: Iterable[Tuple[int, int]]) -> None:
        self.mines = list(mines)

    def shuffle(self, items: List[Tuple[int, int]]) -> None:
        order = {position: index for index, position in enumerate(self.mines)}
        items.sort(key=lambda position: order.get(position, len(order)))


class FakeClock:
    """Manually advanced clock for timer tests."""

    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def build_board(
    rows: int, cols: int, mines: Iterable[Tuple[int, int]]
) -> Board:
    """Build a board with mines at the given (x, y) positions."""
    mine_set = set(mines)
    board = tuple(
        tuple(Cell(x, y, is_mine=(x, y) in mine_set) for x in range(cols))
        for y in range(rows)
    )
    return tuple(
        tuple(
            cell if cell.is_mine else replace(
                cell, adjacent_mines=count_adjacent_mines(board, cell.x, cell.y)
            )
            for cell in row
        )
        for row in board
    )


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def make_board() -> Callable[..., Board]:
    """Factory for boards with fixed mine positions."""
    return build_board


@pytest.fixture
def corner_mine_board() -> Board:
    """5x5 board with a single mine in the bottom-right corner."""
    return build_board(5, 5, [(4, 4)])


@pytest.fixture
def walled_board() -> Board:
    """
    5x5 board with a wall of mines down column 2.

    Opening the left side floods only columns 0-1.
    """
    return build_board(5, 5, [(2, y) for y in range(5)])


# ============================================================================
# Game Fixtures
# ============================================================================

@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def make_game(clock: FakeClock) -> Callable[..., Game]:
    """Factory for custom games with mines at fixed positions."""
    def factory(
        rows: int, cols: int, mines: Iterable[Tuple[int, int]]
    ) -> Game:
        mines = list(mines)
        return Game(
            Difficulty.CUSTOM,
            GameSettings(rows, cols, len(mines)),
            clock=clock,
            rng=FixedShuffle(mines),
        )
    return factory


@pytest.fixture
def beginner_game(clock: FakeClock) -> Game:
    """Seeded beginner game."""
    return Game(Difficulty.BEGINNER, seed=1234, clock=clock)


@pytest.fixture
def empty_game(clock: FakeClock) -> Game:
    """9x9 game with no mines for cascade testing."""
    return Game(Difficulty.CUSTOM, GameSettings(9, 9, 0), clock=clock)


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def valid_settings() -> GameSettings:
    """Create a valid settings object."""
    return GameSettings(9, 9, 10)
