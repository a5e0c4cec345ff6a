"""
Game settings and difficulty presets.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional


# ============================================================================
# Difficulty
# ============================================================================

class Difficulty(Enum):
    """Selectable difficulty levels."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    EXPERT = "expert"
    CUSTOM = "custom"


@dataclass(frozen=True)
class GameSettings:
    """
    Board dimensions and mine count.

    Attributes:
        rows: Number of rows.
        cols: Number of columns.
        mines: Total mines to place.
    """

    rows: int = 9
    cols: int = 9
    mines: int = 10

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure settings values are valid."""
        if self.rows < 1 or self.cols < 1:
            raise ValueError("Board dimensions must be positive")
        if self.mines < 0:
            raise ValueError("Number of mines cannot be negative")
        max_mines = self.rows * self.cols - 1
        if self.mines > max_mines:
            raise ValueError(f"Too many mines (max {max_mines})")

    @property
    def total_cells(self) -> int:
        return self.rows * self.cols


# Preset difficulty levels
BEGINNER = GameSettings(9, 9, 10)
INTERMEDIATE = GameSettings(16, 16, 40)
EXPERT = GameSettings(16, 30, 99)

DIFFICULTY_SETTINGS: Dict[Difficulty, GameSettings] = {
    Difficulty.BEGINNER: BEGINNER,
    Difficulty.INTERMEDIATE: INTERMEDIATE,
    Difficulty.EXPERT: EXPERT,
}


def resolve_settings(
    difficulty: Difficulty,
    custom_settings: Optional[GameSettings] = None,
) -> GameSettings:
    """
    Look up the settings for a difficulty.

    Args:
        difficulty: Requested difficulty.
        custom_settings: Caller-supplied settings, required for CUSTOM.

    Returns:
        The preset settings, or custom_settings for CUSTOM.

    Raises:
        ValueError: If CUSTOM is requested without settings.
    """
    if difficulty == Difficulty.CUSTOM:
        if custom_settings is None:
            raise ValueError("Custom difficulty requires explicit settings")
        return custom_settings
    return DIFFICULTY_SETTINGS[difficulty]
