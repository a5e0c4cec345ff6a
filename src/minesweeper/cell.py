"""
Cell module for Minesweeper.

Cells are immutable values: every change produces a new cell, so a board
built from them can be shared freely between snapshots.
"""
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Tuple


# ============================================================================
# Constants
# ============================================================================

class CellState(Enum):
    """Render-facing state of a cell."""

    CLOSED = "closed"
    OPENED = "opened"
    FLAGGED = "flagged"


# Observation codes shared with the environment
OBS_HIDDEN = -1
OBS_FLAGGED = -2
OBS_MINE = 9


# ============================================================================
# Identity
# ============================================================================

def cell_id(x: int, y: int) -> str:
    """Pair coordinates into the cell's id."""
    return f"{x},{y}"


def parse_cell_id(node_id: str) -> Optional[Tuple[int, int]]:
    """
    Split a cell id back into coordinates.

    Returns:
        (x, y) tuple, or None if the id is malformed.
    """
    parts = node_id.split(",")
    if len(parts) != 2:
        return None
    try:
        return int(parts[0]), int(parts[1])
    except ValueError:
        return None


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass(frozen=True)
class Cell:
    """
    A single square-grid node.

    Attributes:
        x: Column index.
        y: Row index.
        is_mine: Whether this cell contains a mine.
        is_revealed: Whether the cell has been opened.
        is_flagged: Whether the player has flagged the cell.
        adjacent_mines: Mines among the up-to-8 neighbours. Unused for mines.
    """

    x: int
    y: int
    is_mine: bool = False
    is_revealed: bool = False
    is_flagged: bool = False
    adjacent_mines: int = 0

    @property
    def id(self) -> str:
        """Cell id in "x,y" form."""
        return cell_id(self.x, self.y)

    @property
    def state(self) -> CellState:
        """Get the display state of the cell."""
        if self.is_revealed:
            return CellState.OPENED
        if self.is_flagged:
            return CellState.FLAGGED
        return CellState.CLOSED

    def revealed(self) -> "Cell":
        """Return a revealed copy of this cell."""
        return replace(self, is_revealed=True)

    def toggled(self) -> "Cell":
        """
        Return a copy with the flag flipped.

        Revealed cells cannot be flagged and are returned unchanged.
        """
        if self.is_revealed:
            return self
        return replace(self, is_flagged=not self.is_flagged)

    def to_observation(self) -> int:
        """
        Convert cell to an observation value.

        Returns:
            -1: Closed cell
            -2: Flagged cell
            0-8: Opened cell with adjacent mine count
            9: Opened mine
        """
        if self.is_revealed:
            return OBS_MINE if self.is_mine else self.adjacent_mines
        if self.is_flagged:
            return OBS_FLAGGED
        return OBS_HIDDEN
