"""
Gymnasium environment wrapper for Minesweeper.

Translates a discrete action index into a reveal, flag or chord call on a
Game and exposes the board as an observation array.
"""
from typing import Any, Dict, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .board import chord_targets, get_observation, iter_cells
from .game import Game, GameStatus
from .settings import BEGINNER, Difficulty, GameSettings


# ============================================================================
# Constants
# ============================================================================

REVEAL = 0
FLAG = 1
CHORD = 2
ACTION_KINDS = (REVEAL, FLAG, CHORD)


# ============================================================================
# Minesweeper Environment
# ============================================================================

class MinesweeperEnv(gym.Env):
    """
    Gymnasium environment for Minesweeper.

    Observation:
        2D array where:
        - -1 = closed cell
        - -2 = flagged cell
        - 0-8 = revealed cell with adjacent mine count
        - 9 = revealed mine

    Actions:
        Discrete action space of size 3 * rows * cols. Action i has kind
        i // (rows * cols) (0 reveal, 1 flag, 2 chord) and targets cell
        y = (i % (rows * cols)) // cols, x = i % cols.

    Rewards:
        - +10 for winning the game
        - -10 for hitting a mine
        - +1 for a reveal or chord that opens cells
        - 0 for toggling a flag
        - -0.1 for an action with no effect
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        settings: Optional[GameSettings] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        """
        Initialize the Minesweeper environment.

        Args:
            settings: Board settings (default: beginner, 9x9 with 10 mines).
            render_mode: How to render the environment.
        """
        super().__init__()

        self.settings = settings or BEGINNER
        self.game = Game(Difficulty.CUSTOM, self.settings)
        self.render_mode = render_mode

        self.observation_space = spaces.Box(
            low=-2,
            high=9,
            shape=(self.settings.rows, self.settings.cols),
            dtype=np.int8,
        )
        self._num_cells = self.settings.total_cells
        self.action_space = spaces.Discrete(len(ACTION_KINDS) * self._num_cells)

        self._steps = 0

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Reset the environment for a new episode.

        Args:
            seed: Random seed for reproducibility.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        self.game.close()
        game_seed = int(self.np_random.integers(2**31))
        self.game = Game(Difficulty.CUSTOM, self.settings, seed=game_seed)
        self._steps = 0

        return get_observation(self.game.board), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Execute one action in the environment.

        Args:
            action: Encoded (kind, cell) action index.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        kind, x, y = self.decode_action(action)
        self._steps += 1

        reward = self._apply_action(kind, x, y)
        observation = get_observation(self.game.board)
        terminated = self.game.is_over

        return observation, reward, terminated, False, self._get_info()

    def decode_action(self, action: int) -> Tuple[int, int, int]:
        """Convert flat action index to (kind, x, y)."""
        kind, cell = divmod(int(action), self._num_cells)
        y, x = divmod(cell, self.settings.cols)
        return kind, x, y

    def encode_action(self, kind: int, x: int, y: int) -> int:
        """Convert (kind, x, y) to a flat action index."""
        return kind * self._num_cells + y * self.settings.cols + x

    def _apply_action(self, kind: int, x: int, y: int) -> float:
        """
        Perform the action on the game and score it.

        Returns:
            Reward value.
        """
        before = self.game.board
        if kind == REVEAL:
            after = self.game.reveal_cell(x, y)
        elif kind == FLAG:
            after = self.game.toggle_flag(x, y)
        else:
            after = self.game.chord_cell(x, y)

        if after is before:
            return -0.1
        if self.game.status == GameStatus.WON:
            return 10.0
        if self.game.status == GameStatus.LOST:
            return -10.0
        if kind == FLAG:
            return 0.0
        return 1.0

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        revealed = sum(
            1 for cell in iter_cells(self.game.board)
            if cell.is_revealed and not cell.is_mine
        )

        return {
            "steps": self._steps,
            "revealed": revealed,
            "total_safe": self._num_cells - self.settings.mines,
            "game_state": self.game.status.name,
            "mines_remaining": self.game.mines_remaining,
        }

    def render(self) -> Optional[str]:
        """Render the current board state."""
        if self.render_mode == "ansi":
            return render_ansi(get_observation(self.game.board))
        if self.render_mode == "human":
            print(render_ansi(get_observation(self.game.board)))
        return None

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of actions that would change the game.

        Returns:
            Boolean array where True = valid action.
        """
        mask = np.zeros(self.action_space.n, dtype=bool)
        if self.game.is_over:
            return mask

        board = self.game.board
        for cell in iter_cells(board):
            if not cell.is_revealed:
                mask[self.encode_action(FLAG, cell.x, cell.y)] = True
                if not cell.is_flagged:
                    mask[self.encode_action(REVEAL, cell.x, cell.y)] = True
            elif self._can_chord(cell.x, cell.y):
                mask[self.encode_action(CHORD, cell.x, cell.y)] = True
        return mask

    def _can_chord(self, x: int, y: int) -> bool:
        """Check if a chord at (x, y) would open at least one cell."""
        if self.game.status != GameStatus.PLAYING:
            return False
        return bool(chord_targets(self.game.board, x, y))


def render_ansi(observation: np.ndarray) -> str:
    """Render an observation array as text, one line per row."""
    lines = []
    for row in observation:
        row_str = ""
        for val in row:
            if val == -1:
                row_str += "."
            elif val == -2:
                row_str += "F"
            elif val == 9:
                row_str += "*"
            elif val == 0:
                row_str += " "
            else:
                row_str += str(val)
            row_str += " "
        lines.append(row_str)

    return "\n".join(lines)
