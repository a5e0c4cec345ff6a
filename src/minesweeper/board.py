"""
Board module for Minesweeper.

Pure functions over immutable board snapshots. A board is a tuple of rows
(indexed by y), each a tuple of cells (indexed by x). Every operation returns
a new board and leaves its input untouched; rows that an operation does not
change are shared with the input.
"""
import logging
import random
from typing import Dict, Iterator, List, Optional, Tuple

import numpy as np

from .cell import Cell, OBS_HIDDEN

logger = logging.getLogger(__name__)

Board = Tuple[Tuple[Cell, ...], ...]
Position = Tuple[int, int]


# ============================================================================
# Construction and Lookup (Low-level)
# ============================================================================

def create_board(rows: int, cols: int) -> Board:
    """Create a rows x cols board with no mines and every cell closed."""
    return tuple(
        tuple(Cell(x, y) for x in range(cols))
        for y in range(rows)
    )


def dimensions(board: Board) -> Tuple[int, int]:
    """Return (rows, cols) of a board."""
    if not board:
        return 0, 0
    return len(board), len(board[0])


def is_valid_position(board: Board, x: int, y: int) -> bool:
    """Check if position is within board bounds."""
    rows, cols = dimensions(board)
    return 0 <= x < cols and 0 <= y < rows


def get_cell(board: Board, x: int, y: int) -> Optional[Cell]:
    """Get cell at position, or None if invalid."""
    if not is_valid_position(board, x, y):
        return None
    return board[y][x]


def iter_cells(board: Board) -> Iterator[Cell]:
    """Iterate cells row by row."""
    for row in board:
        yield from row


def neighbor_coords(x: int, y: int, cols: int, rows: int) -> List[Position]:
    """
    Get in-bounds neighbouring positions.

    Args:
        x: Column of center cell.
        y: Row of center cell.
        cols: Board width.
        rows: Board height.

    Returns:
        List of (x, y) tuples for the up-to-8 cells sharing an edge or corner.
    """
    neighbors = []
    for delta_y in (-1, 0, 1):
        for delta_x in (-1, 0, 1):
            if delta_x == 0 and delta_y == 0:
                continue
            new_x = x + delta_x
            new_y = y + delta_y
            if 0 <= new_x < cols and 0 <= new_y < rows:
                neighbors.append((new_x, new_y))
    return neighbors


def neighbors(board: Board, x: int, y: int) -> List[Cell]:
    """Get the cells adjacent to (x, y)."""
    rows, cols = dimensions(board)
    return [board[ny][nx] for nx, ny in neighbor_coords(x, y, cols, rows)]


def _apply(board: Board, updates: Dict[Position, Cell]) -> Board:
    """Rebuild only the rows touched by updates."""
    if not updates:
        return board
    touched: Dict[int, Dict[int, Cell]] = {}
    for (x, y), cell in updates.items():
        touched.setdefault(y, {})[x] = cell
    new_rows = []
    for y, row in enumerate(board):
        changes = touched.get(y)
        if changes:
            row = tuple(changes.get(x, cell) for x, cell in enumerate(row))
        new_rows.append(row)
    return tuple(new_rows)


# ============================================================================
# Mine Placement
# ============================================================================

def count_adjacent_mines(board: Board, x: int, y: int) -> int:
    """Count mines adjacent to a specific cell."""
    return sum(1 for cell in neighbors(board, x, y) if cell.is_mine)


def place_mines(
    board: Board,
    count: int,
    exclude_x: int,
    exclude_y: int,
    rng: Optional[random.Random] = None,
) -> Board:
    """
    Place mines at random, keeping a safe 3x3 area around the excluded cell.

    Candidates are cells whose Chebyshev distance from (exclude_x, exclude_y)
    exceeds 1. When there are fewer candidates than count, every candidate
    becomes a mine.

    Args:
        board: Board to place mines on.
        count: Number of mines requested.
        exclude_x: Column of the first click.
        exclude_y: Row of the first click.
        rng: Random source; a fresh unseeded random.Random when omitted.

    Returns:
        New board with mines placed and adjacent counts computed.
    """
    rng = rng or random.Random()
    candidates = [
        (cell.x, cell.y)
        for cell in iter_cells(board)
        if max(abs(cell.x - exclude_x), abs(cell.y - exclude_y)) > 1
    ]
    rng.shuffle(candidates)
    mine_positions = set(candidates[:max(0, min(count, len(candidates)))])
    if len(mine_positions) < count:
        logger.debug(
            "Only %d of %d mines fit outside the safe area",
            len(mine_positions), count,
        )

    mined = tuple(
        tuple(
            Cell(cell.x, cell.y, is_mine=(cell.x, cell.y) in mine_positions,
                 is_revealed=cell.is_revealed, is_flagged=cell.is_flagged)
            for cell in row
        )
        for row in board
    )
    return _calculate_adjacent_mines(mined)


def _calculate_adjacent_mines(board: Board) -> Board:
    """Recompute adjacent mine counts for all non-mine cells."""
    return tuple(
        tuple(
            cell if cell.is_mine else Cell(
                cell.x, cell.y,
                is_revealed=cell.is_revealed,
                is_flagged=cell.is_flagged,
                adjacent_mines=count_adjacent_mines(board, cell.x, cell.y),
            )
            for cell in row
        )
        for row in board
    )


# ============================================================================
# Cell Actions (Mid-level)
# ============================================================================

def open_cell(board: Board, x: int, y: int) -> Board:
    """
    Reveal a cell, flood-filling across zero-count regions.

    Opening a cell with no adjacent mines opens each closed, unflagged
    neighbour in turn, so the result is the connected zero region plus its
    numbered border. A mine is revealed on its own. The fill runs on an
    explicit stack and visits each cell at most once.

    Args:
        board: Current board.
        x: Column to open.
        y: Row to open.

    Returns:
        New board, or the same board if the cell is out of range, already
        revealed or flagged.
    """
    target = get_cell(board, x, y)
    if target is None or target.is_revealed or target.is_flagged:
        return board

    rows, cols = dimensions(board)
    updates: Dict[Position, Cell] = {}
    stack = [(x, y)]
    while stack:
        position = stack.pop()
        if position in updates:
            continue
        cell = board[position[1]][position[0]]
        if cell.is_revealed or cell.is_flagged:
            continue
        updates[position] = cell.revealed()
        if cell.is_mine or cell.adjacent_mines > 0:
            continue
        for neighbor in neighbor_coords(cell.x, cell.y, cols, rows):
            if neighbor not in updates:
                stack.append(neighbor)

    return _apply(board, updates)


def chord_ready(cell: Cell, adjacent: List[Cell]) -> bool:
    """
    Check if a cell can be chorded.

    The cell must be revealed, safe and numbered, and exactly as many of its
    neighbours must be flagged as it has adjacent mines.
    """
    if not cell.is_revealed or cell.is_mine or cell.adjacent_mines == 0:
        return False
    flagged = sum(1 for neighbor in adjacent if neighbor.is_flagged)
    return flagged == cell.adjacent_mines


def chord_targets(board: Board, x: int, y: int) -> List[Position]:
    """Get the closed, unflagged neighbours a chord at (x, y) would open."""
    cell = get_cell(board, x, y)
    if cell is None:
        return []
    adjacent = neighbors(board, x, y)
    if not chord_ready(cell, adjacent):
        return []
    return [
        (neighbor.x, neighbor.y) for neighbor in adjacent
        if not neighbor.is_flagged and not neighbor.is_revealed
    ]


def chord_cell(board: Board, x: int, y: int) -> Tuple[Board, bool]:
    """
    Open every unflagged neighbour of a chordable cell.

    Each neighbour is opened as by open_cell, so zero cells flood. Mines
    other than the ones opened stay closed.

    Args:
        board: Current board.
        x: Column of the numbered cell.
        y: Row of the numbered cell.

    Returns:
        Tuple of (new board, whether an opened neighbour was a mine). The
        board is returned unchanged when the cell cannot be chorded.
    """
    hit_mine = False
    for target_x, target_y in chord_targets(board, x, y):
        if board[target_y][target_x].is_mine:
            hit_mine = True
        board = open_cell(board, target_x, target_y)
    return board, hit_mine


def toggle_flag(board: Board, x: int, y: int) -> Board:
    """Flip the flag on a closed cell; revealed cells are left alone."""
    cell = get_cell(board, x, y)
    if cell is None or cell.is_revealed:
        return board
    return _apply(board, {(x, y): cell.toggled()})


def reveal_all_mines(board: Board) -> Board:
    """Reveal every mine; non-mine cells are untouched."""
    updates = {
        (cell.x, cell.y): cell.revealed()
        for cell in iter_cells(board)
        if cell.is_mine and not cell.is_revealed
    }
    return _apply(board, updates)


# ============================================================================
# Board Queries (High-level)
# ============================================================================

def check_win_condition(board: Board) -> bool:
    """Check if all non-mine cells are revealed."""
    return all(cell.is_revealed for cell in iter_cells(board) if not cell.is_mine)


def count_flags(board: Board) -> int:
    """Count flagged cells on the whole board."""
    return sum(1 for cell in iter_cells(board) if cell.is_flagged)


def count_mines(board: Board) -> int:
    """Count mine cells on the whole board."""
    return sum(1 for cell in iter_cells(board) if cell.is_mine)


def get_observation(board: Board) -> np.ndarray:
    """
    Get board state as a numpy array.

    Returns:
        2D int8 array of shape (rows, cols) where:
            -1 = closed
            -2 = flagged
            0-8 = revealed with adjacent count
            9 = revealed mine
    """
    rows, cols = dimensions(board)
    obs = np.full((rows, cols), OBS_HIDDEN, dtype=np.int8)
    for cell in iter_cells(board):
        obs[cell.y, cell.x] = cell.to_observation()
    return obs
