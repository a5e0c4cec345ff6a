"""
Minesweeper rules engine.

Provides board snapshots and their pure mutation functions, the abstract and
square grids, the board reducer and the game state machine.
"""
from .cell import Cell, CellState, cell_id, parse_cell_id
from .settings import (
    Difficulty,
    GameSettings,
    DIFFICULTY_SETTINGS,
    BEGINNER,
    INTERMEDIATE,
    EXPERT,
    resolve_settings,
)
from .board import (
    Board,
    create_board,
    place_mines,
    open_cell,
    chord_cell,
    toggle_flag,
    reveal_all_mines,
    check_win_condition,
    count_flags,
    count_adjacent_mines,
    get_observation,
)
from .grid import Grid, SquareGrid
from .reducer import (
    BoardState,
    CellActionResult,
    InitializeBoard,
    PlaceMines,
    RevealCell,
    ToggleFlag,
    ChordCell,
    board_reducer,
)
from .timer import GameTimer
from .game import Game, GameStatus
from .context import GameContextError, provide_game, use_game
from .environment import MinesweeperEnv

__all__ = [
    "Cell",
    "CellState",
    "cell_id",
    "parse_cell_id",
    "Difficulty",
    "GameSettings",
    "DIFFICULTY_SETTINGS",
    "BEGINNER",
    "INTERMEDIATE",
    "EXPERT",
    "resolve_settings",
    "Board",
    "create_board",
    "place_mines",
    "open_cell",
    "chord_cell",
    "toggle_flag",
    "reveal_all_mines",
    "check_win_condition",
    "count_flags",
    "count_adjacent_mines",
    "get_observation",
    "Grid",
    "SquareGrid",
    "BoardState",
    "CellActionResult",
    "InitializeBoard",
    "PlaceMines",
    "RevealCell",
    "ToggleFlag",
    "ChordCell",
    "board_reducer",
    "GameTimer",
    "Game",
    "GameStatus",
    "GameContextError",
    "provide_game",
    "use_game",
    "MinesweeperEnv",
]
