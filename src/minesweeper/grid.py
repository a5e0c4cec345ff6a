"""
Grid module for Minesweeper.

Defines the shape-independent grid interface and the square-grid
implementation. Reveal, chord, win check and flag counting are written
against the interface only, so another grid shape needs nothing beyond
node lookup, adjacency, generation and mine placement.
"""
import logging
import random
from abc import ABC, abstractmethod
from dataclasses import replace
from typing import List, Optional

from .board import Board, chord_ready, neighbor_coords
from .cell import Cell, cell_id, parse_cell_id
from .settings import GameSettings

logger = logging.getLogger(__name__)


# ============================================================================
# Grid Interface
# ============================================================================

class Grid(ABC):
    """
    Abstract grid of nodes.

    Nodes are immutable cells; the grid replaces a node whenever its state
    changes, so nodes handed out earlier are never modified.
    """

    @abstractmethod
    def get_node(self, node_id: str) -> Optional[Cell]:
        """Get the node with this id, or None if there is none."""

    @abstractmethod
    def get_adjacent_nodes(self, node_id: str) -> List[Cell]:
        """Get the nodes adjacent to a node; empty for an unknown id."""

    @abstractmethod
    def get_all_nodes(self) -> List[Cell]:
        """Get every node in the grid."""

    @abstractmethod
    def generate_grid(self, settings: GameSettings) -> None:
        """Rebuild the grid empty for the given settings."""

    @abstractmethod
    def place_mines(
        self,
        count: int,
        excluded_node_id: Optional[str] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        """Place mines, keeping the excluded node and its neighbours clear."""

    @abstractmethod
    def _set_node(self, node: Cell) -> None:
        """Store a replacement node at its own position."""

    # ========================================================================
    # Shape-independent Actions
    # ========================================================================

    def reveal_node(self, node_id: str) -> bool:
        """
        Reveal a node, flood-filling across zero-count regions.

        Returns:
            True if the revealed node was a mine.
        """
        node = self.get_node(node_id)
        if node is None or node.is_revealed or node.is_flagged:
            return False

        opened = node.revealed()
        self._set_node(opened)
        if node.is_mine:
            return True

        stack = [opened] if opened.adjacent_mines == 0 else []
        while stack:
            current = stack.pop()
            for adjacent in self.get_adjacent_nodes(current.id):
                if adjacent.is_revealed or adjacent.is_flagged:
                    continue
                adjacent = adjacent.revealed()
                self._set_node(adjacent)
                if not adjacent.is_mine and adjacent.adjacent_mines == 0:
                    stack.append(adjacent)
        return False

    def toggle_flag(self, node_id: str) -> bool:
        """
        Toggle the flag on a closed node.

        Returns:
            True if the flag was toggled, False for unknown or revealed nodes.
        """
        node = self.get_node(node_id)
        if node is None or node.is_revealed:
            return False
        self._set_node(node.toggled())
        return True

    def chord_node(self, node_id: str) -> bool:
        """
        Open the unflagged neighbours of a revealed numbered node.

        Runs only when the number of flagged neighbours equals the node's
        adjacent mine count exactly.

        Returns:
            True if any opened neighbour was a mine.
        """
        node = self.get_node(node_id)
        if node is None:
            return False
        adjacent = self.get_adjacent_nodes(node_id)
        if not chord_ready(node, adjacent):
            return False

        hit_mine = False
        for neighbor in adjacent:
            if self.reveal_node(neighbor.id):
                hit_mine = True
        return hit_mine

    def check_win_condition(self) -> bool:
        """Check if all non-mine nodes are revealed."""
        return all(
            node.is_revealed for node in self.get_all_nodes() if not node.is_mine
        )

    def reveal_all_mines(self) -> None:
        """Reveal every mine node."""
        for node in self.get_all_nodes():
            if node.is_mine and not node.is_revealed:
                self._set_node(node.revealed())

    def count_flags(self) -> int:
        """Count flagged nodes."""
        return sum(1 for node in self.get_all_nodes() if node.is_flagged)


# ============================================================================
# Square Grid
# ============================================================================

class SquareGrid(Grid):
    """Rectangular grid with 8-way adjacency."""

    def __init__(self, settings: Optional[GameSettings] = None) -> None:
        self._grid: List[List[Cell]] = []
        self.rows = 0
        self.cols = 0
        if settings is not None:
            self.generate_grid(settings)

    @classmethod
    def from_board(cls, board: Board) -> "SquareGrid":
        """Build a grid holding the cells of a board snapshot."""
        grid = cls()
        grid._grid = [list(row) for row in board]
        grid.rows = len(board)
        grid.cols = len(board[0]) if board else 0
        return grid

    def get_node(self, node_id: str) -> Optional[Cell]:
        position = parse_cell_id(node_id)
        if position is None:
            return None
        x, y = position
        if not (0 <= x < self.cols and 0 <= y < self.rows):
            return None
        return self._grid[y][x]

    def get_adjacent_nodes(self, node_id: str) -> List[Cell]:
        node = self.get_node(node_id)
        if node is None:
            return []
        return [
            self._grid[y][x]
            for x, y in neighbor_coords(node.x, node.y, self.cols, self.rows)
        ]

    def get_all_nodes(self) -> List[Cell]:
        return [node for row in self._grid for node in row]

    def generate_grid(self, settings: GameSettings) -> None:
        self.rows = settings.rows
        self.cols = settings.cols
        self._grid = [
            [Cell(x, y) for x in range(self.cols)]
            for y in range(self.rows)
        ]

    def place_mines(
        self,
        count: int,
        excluded_node_id: Optional[str] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        """
        Place mines uniformly at random.

        With an excluded node, only nodes at Chebyshev distance greater than
        1 from it are candidates; an unknown id places mines anywhere. The
        count is capped at the number of candidates.
        """
        rng = rng or random.Random()
        candidates = self.get_all_nodes()
        excluded = self.get_node(excluded_node_id) if excluded_node_id else None
        if excluded is not None:
            candidates = [
                node for node in candidates
                if max(abs(node.x - excluded.x), abs(node.y - excluded.y)) > 1
            ]

        rng.shuffle(candidates)
        placed = max(0, min(count, len(candidates)))
        for node in candidates[:placed]:
            self._set_node(replace(node, is_mine=True))
        logger.debug("Placed %d mines on %dx%d grid", placed, self.rows, self.cols)
        self._calculate_adjacent_mines()

    def _calculate_adjacent_mines(self) -> None:
        """Recompute adjacent mine counts for all non-mine nodes."""
        for node in self.get_all_nodes():
            if node.is_mine:
                continue
            count = sum(
                1 for adjacent in self.get_adjacent_nodes(node.id)
                if adjacent.is_mine
            )
            self._set_node(replace(node, adjacent_mines=count))

    def _set_node(self, node: Cell) -> None:
        self._grid[node.y][node.x] = node

    def get_grid(self) -> Board:
        """Return an immutable snapshot of the grid."""
        return tuple(tuple(row) for row in self._grid)

    def get_cell(self, x: int, y: int) -> Optional[Cell]:
        """Get node by coordinates, or None if out of range."""
        return self.get_node(cell_id(x, y))
