"""
Board state reducer.

Maps (board state, action) to the next board state without side effects.
"""
import random
from dataclasses import dataclass, replace
from typing import Optional, Union

from .board import (
    Board,
    check_win_condition,
    chord_cell,
    count_flags,
    get_cell,
    open_cell,
    place_mines,
    reveal_all_mines,
    toggle_flag,
)


# ============================================================================
# State
# ============================================================================

@dataclass(frozen=True)
class CellActionResult:
    """Outcome of revealing a cell."""

    hit_mine: bool
    is_complete: bool


@dataclass(frozen=True)
class BoardState:
    """
    Reducer state.

    Attributes:
        board: Current board snapshot.
        flags_count: Flagged cells on the board, recomputed on every toggle.
        result: Outcome of the last reveal or chord, if the last action was
            one that changed the board.
    """

    board: Board
    flags_count: int = 0
    result: Optional[CellActionResult] = None


# ============================================================================
# Actions
# ============================================================================

@dataclass(frozen=True)
class InitializeBoard:
    board: Board


@dataclass(frozen=True)
class PlaceMines:
    exclude_x: int
    exclude_y: int
    count: int
    rng: Optional[random.Random] = None


@dataclass(frozen=True)
class RevealCell:
    x: int
    y: int


@dataclass(frozen=True)
class ToggleFlag:
    x: int
    y: int


@dataclass(frozen=True)
class ChordCell:
    x: int
    y: int


BoardAction = Union[InitializeBoard, PlaceMines, RevealCell, ToggleFlag, ChordCell]


# ============================================================================
# Reducer
# ============================================================================

def board_reducer(state: BoardState, action: BoardAction) -> BoardState:
    """
    Compute the next board state.

    Args:
        state: Current state; never modified.
        action: Action to apply.

    Returns:
        Next state. Cell actions that do not apply return the same board
        with no result; unknown actions return state itself.
    """
    if isinstance(action, InitializeBoard):
        return BoardState(board=action.board, flags_count=0)

    if isinstance(action, PlaceMines):
        board = place_mines(
            state.board, action.count, action.exclude_x, action.exclude_y,
            rng=action.rng,
        )
        return replace(state, board=board, result=None)

    if isinstance(action, RevealCell):
        return _reveal_cell(state, action.x, action.y)

    if isinstance(action, ChordCell):
        return _chord_cell(state, action.x, action.y)

    if isinstance(action, ToggleFlag):
        cell = get_cell(state.board, action.x, action.y)
        if cell is None or cell.is_revealed:
            return _unchanged(state)
        board = toggle_flag(state.board, action.x, action.y)
        return replace(state, board=board, flags_count=count_flags(board),
                       result=None)

    return state


def _reveal_cell(state: BoardState, x: int, y: int) -> BoardState:
    """Reveal a cell; a mine reveals every mine on the board."""
    cell = get_cell(state.board, x, y)
    if cell is None or cell.is_revealed or cell.is_flagged:
        return _unchanged(state)

    if cell.is_mine:
        board = reveal_all_mines(state.board)
        return replace(state, board=board,
                       result=CellActionResult(hit_mine=True, is_complete=False))

    board = open_cell(state.board, x, y)
    return replace(
        state,
        board=board,
        result=CellActionResult(hit_mine=False,
                                is_complete=check_win_condition(board)),
    )


def _chord_cell(state: BoardState, x: int, y: int) -> BoardState:
    """Chord a numbered cell; opening a mine reveals every mine."""
    board, hit_mine = chord_cell(state.board, x, y)
    if board is state.board:
        return _unchanged(state)

    if hit_mine:
        return replace(state, board=reveal_all_mines(board),
                       result=CellActionResult(hit_mine=True, is_complete=False))
    return replace(
        state,
        board=board,
        result=CellActionResult(hit_mine=False,
                                is_complete=check_win_condition(board)),
    )


def _unchanged(state: BoardState) -> BoardState:
    """Keep the board but drop the result of an earlier action."""
    if state.result is None:
        return state
    return replace(state, result=None)
