from __future__ import annotations

import logging
from enum import Enum
from typing import Optional

from .board import Mark

logger = logging.getLogger(__name__)


class GameState(Enum):
    """Whose turn it is, or how the game ended."""
    X_TURN = 'X_TURN'
    O_TURN = 'O_TURN'
    X_WON = 'X_WON'
    O_WON = 'O_WON'
    DRAW = 'DRAW'

    def is_game_over(self) -> bool:
        return self in (GameState.X_WON, GameState.O_WON, GameState.DRAW)

    @property
    def mover(self) -> Optional[Mark]:
        """Mark expected to move next, None once the game is over."""
        if self is GameState.X_TURN:
            return Mark.X
        if self is GameState.O_TURN:
            return Mark.O
        return None

    @property
    def winner(self) -> Optional[Mark]:
        if self is GameState.X_WON:
            return Mark.X
        if self is GameState.O_WON:
            return Mark.O
        return None

    def next(self, mark: Mark, has_won: bool) -> 'GameState':
        """
        Transition after `mark` moved. A turn state goes to the winner's WON
        state or hands the turn over; terminal states stay where they are.
        A draw is not decided here, see GameContext.declare_draw.
        """
        if self is GameState.X_TURN:
            if has_won:
                return GameState.X_WON if mark is Mark.X else GameState.O_WON
            return GameState.O_TURN
        if self is GameState.O_TURN:
            if has_won:
                return GameState.O_WON if mark is Mark.O else GameState.X_WON
            return GameState.X_TURN
        if self.is_game_over():
            return self
        raise AssertionError(f'unhandled state {self!r}')

    def __str__(self) -> str:
        return self.value


class GameContext:
    """Holds the single active GameState of a match."""

    def __init__(self, state: GameState = GameState.X_TURN) -> None:
        self._state = state

    @property
    def state(self) -> GameState:
        return self._state

    def set_state(self, state: GameState) -> None:
        self._state = state

    def next(self, mark: Mark, has_won: bool) -> GameState:
        previous = self._state
        self._state = previous.next(mark, has_won)
        if self._state is not previous:
            logger.debug('state %s -> %s', previous, self._state)
        return self._state

    def declare_draw(self) -> GameState:
        """Ends a game in progress as a draw. Terminal states are left alone."""
        if not self._state.is_game_over():
            logger.debug('state %s -> %s', self._state, GameState.DRAW)
            self._state = GameState.DRAW
        return self._state

    def is_game_over(self) -> bool:
        return self._state.is_game_over()
