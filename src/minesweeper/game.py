"""
Game state machine for Minesweeper.

Owns the board state, the READY/PLAYING/WON/LOST status, the timer and the
difficulty settings, and exposes the operations a user interface calls.
Operations that do not apply in the current state are ignored.
"""
import logging
import random
import time
from enum import Enum
from typing import Callable, Optional

from .board import Board, create_board, get_cell
from .reducer import (
    BoardAction,
    BoardState,
    ChordCell,
    InitializeBoard,
    PlaceMines,
    RevealCell,
    ToggleFlag,
    board_reducer,
)
from .settings import Difficulty, GameSettings, resolve_settings
from .timer import GameTimer

logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

class GameStatus(Enum):
    """Possible states of the game."""

    READY = "ready"
    PLAYING = "playing"
    WON = "won"
    LOST = "lost"


ACTIVE_STATUSES = (GameStatus.READY, GameStatus.PLAYING)


# ============================================================================
# Game
# ============================================================================

class Game:
    """
    Minesweeper game.

    Mines are placed on the first reveal, around which a 3x3 area is kept
    clear. Every operation returns the current board snapshot.
    """

    def __init__(
        self,
        difficulty: Difficulty = Difficulty.BEGINNER,
        custom_settings: Optional[GameSettings] = None,
        seed: Optional[int] = None,
        clock: Callable[[], float] = time.monotonic,
        rng: Optional[random.Random] = None,
    ) -> None:
        """
        Initialize the game.

        Args:
            difficulty: Starting difficulty.
            custom_settings: Settings for CUSTOM difficulty.
            seed: Seed for mine placement.
            clock: Time source for the timer.
            rng: Random source for mine placement; overrides seed.

        Raises:
            ValueError: If CUSTOM is requested without settings.
        """
        self._settings = resolve_settings(difficulty, custom_settings)
        self._difficulty = difficulty
        self._rng = rng or random.Random(seed)
        self._timer = GameTimer(clock)
        self._status = GameStatus.READY
        self._first_click = True
        self._mines_count = self._settings.mines
        self._state = BoardState(
            board=create_board(self._settings.rows, self._settings.cols)
        )

    # ========================================================================
    # Internal Helpers (Low-level)
    # ========================================================================

    def _dispatch(self, action: BoardAction) -> None:
        self._state = board_reducer(self._state, action)

    def _set_status(self, status: GameStatus) -> None:
        """Change status, starting the timer on PLAYING and stopping it otherwise."""
        self._status = status
        if status == GameStatus.PLAYING:
            self._timer.start()
        else:
            self._timer.stop()

        if status == GameStatus.WON:
            logger.info("Game won in %d seconds", self.elapsed_seconds)
        elif status == GameStatus.LOST:
            logger.info("Game lost after %d seconds", self.elapsed_seconds)

    def _settle(self) -> None:
        """Move to LOST or WON according to the last reveal or chord."""
        result = self._state.result
        if result is None:
            return
        if result.hit_mine:
            self._set_status(GameStatus.LOST)
        elif result.is_complete:
            self._set_status(GameStatus.WON)

    def _reset(self, settings: GameSettings) -> None:
        self._dispatch(InitializeBoard(create_board(settings.rows, settings.cols)))
        self._timer.reset()
        self._first_click = True
        self._mines_count = settings.mines
        self._status = GameStatus.READY

    # ========================================================================
    # Game Actions (Mid-level)
    # ========================================================================

    def reveal_cell(self, x: int, y: int) -> Board:
        """
        Reveal a cell.

        The first reveal places mines and starts the game. Revealing a mine
        reveals every mine and loses; revealing the last safe cell wins.

        Args:
            x: Column index.
            y: Row index.

        Returns:
            The board after the action.
        """
        if self._status not in ACTIVE_STATUSES:
            logger.debug("Ignoring reveal at (%d, %d): game is %s",
                         x, y, self._status.value)
            return self.board

        cell = get_cell(self.board, x, y)
        if cell is None or cell.is_revealed or cell.is_flagged:
            return self.board

        if self._first_click:
            self._dispatch(PlaceMines(x, y, self._mines_count, self._rng))
            self._first_click = False
            self._set_status(GameStatus.PLAYING)
            logger.info("Game started at (%d, %d) on %dx%d board with %d mines",
                        x, y, self.rows, self.cols, self._mines_count)

        self._dispatch(RevealCell(x, y))
        self._settle()
        return self.board

    def toggle_flag(self, x: int, y: int) -> Board:
        """Flag or unflag a closed cell."""
        if self._status not in ACTIVE_STATUSES:
            logger.debug("Ignoring flag at (%d, %d): game is %s",
                         x, y, self._status.value)
            return self.board

        self._dispatch(ToggleFlag(x, y))
        return self.board

    def chord_cell(self, x: int, y: int) -> Board:
        """
        Open every unflagged neighbour of a revealed numbered cell.

        Only applies while playing, and only when the number of flagged
        neighbours equals the cell's adjacent mine count. Opening a mine
        reveals every mine and loses.

        Args:
            x: Column index.
            y: Row index.

        Returns:
            The board after the action.
        """
        if self._status != GameStatus.PLAYING:
            return self.board

        self._dispatch(ChordCell(x, y))
        self._settle()
        return self.board

    def reset_game(self) -> Board:
        """Start a new game with the current settings."""
        self._reset(self._settings)
        logger.info("Game reset")
        return self.board

    def change_difficulty(
        self,
        difficulty: Difficulty,
        custom_settings: Optional[GameSettings] = None,
    ) -> Board:
        """
        Switch difficulty and start a new game.

        Raises:
            ValueError: If CUSTOM is requested without settings. The current
                game is left untouched.
        """
        settings = resolve_settings(difficulty, custom_settings)
        self._difficulty = difficulty
        self._settings = settings
        self._reset(settings)
        logger.info("Difficulty changed to %s (%dx%d, %d mines)",
                    difficulty.value, settings.rows, settings.cols, settings.mines)
        return self.board

    def close(self) -> None:
        """Stop the timer; call when the game is discarded."""
        self._timer.stop()

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    @property
    def board(self) -> Board:
        """Current board snapshot."""
        return self._state.board

    @property
    def board_state(self) -> BoardState:
        """Current reducer state."""
        return self._state

    @property
    def status(self) -> GameStatus:
        """Current game status."""
        return self._status

    @property
    def difficulty(self) -> Difficulty:
        """Current difficulty."""
        return self._difficulty

    @property
    def settings(self) -> GameSettings:
        """Board settings for the current game."""
        return self._settings

    @property
    def rows(self) -> int:
        """Board height."""
        return self._settings.rows

    @property
    def cols(self) -> int:
        """Board width."""
        return self._settings.cols

    @property
    def mines_count(self) -> int:
        """Total mines for the current game."""
        return self._mines_count

    @property
    def flags_count(self) -> int:
        """Flagged cells on the board."""
        return self._state.flags_count

    @property
    def mines_remaining(self) -> int:
        """Mines minus flags, never below zero."""
        return max(0, self._mines_count - self._state.flags_count)

    @property
    def elapsed_seconds(self) -> int:
        """Whole seconds on the game timer."""
        return self._timer.elapsed_seconds

    @property
    def is_first_click(self) -> bool:
        """Check if mines are still to be placed."""
        return self._first_click

    @property
    def is_over(self) -> bool:
        """Check if the game is won or lost."""
        return self._status in (GameStatus.WON, GameStatus.LOST)
