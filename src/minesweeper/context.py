"""
Scoped access to a shared game.

A front end installs one game with provide_game() and its components read it
back with use_game(). Reading it outside any provider is a wiring error.
"""
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Optional

from .game import Game


class GameContextError(RuntimeError):
    """Raised when the shared game is requested outside a provider."""


_current_game: ContextVar[Optional[Game]] = ContextVar("current_game", default=None)


@contextmanager
def provide_game(game: Game) -> Iterator[Game]:
    """
    Make a game available to use_game() for the duration of the block.

    The game is closed when the block exits, however it exits.
    """
    token = _current_game.set(game)
    try:
        yield game
    finally:
        _current_game.reset(token)
        game.close()


def use_game() -> Game:
    """
    Return the game installed by the innermost provide_game().

    Raises:
        GameContextError: If no provider is active.
    """
    game = _current_game.get()
    if game is None:
        raise GameContextError("use_game() must be called within provide_game()")
    return game
