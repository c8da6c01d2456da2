from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Sequence

from .board import Board, Mark, TerminalOutcome
from .errors import IllegalMove
from .observers import GameObserver
from .player import Player, PlayerFactory, create_players
from .position import Position
from .providers import MoveProvider
from .state import GameContext, GameState

logger = logging.getLogger(__name__)


def announce_outcome(state: GameState) -> str:
    if state is GameState.X_WON:
        return 'Player X wins!'
    if state is GameState.O_WON:
        return 'Player O wins!'
    if state is GameState.DRAW:
        return "It's a draw!"
    raise ValueError(f'Game is not over yet ({state})')


@dataclass(frozen=True)
class MatchOutcome:
    state: GameState
    moves: int

    @property
    def winner(self) -> Optional[Mark]:
        return self.state.winner

    @property
    def is_draw(self) -> bool:
        return self.state is GameState.DRAW

    def message(self) -> str:
        return announce_outcome(self.state)


@dataclass(frozen=True)
class TurnResult:
    state: GameState
    terminal: TerminalOutcome


def play_turn(board: Board, context: GameContext, mark: Mark, position: Position) -> TurnResult:
    """
    Applies one move and moves the state machine on: a completed line wins,
    otherwise a full board is a draw, otherwise the turn passes.
    Observers hear about the move first, then about the new state.
    """
    expected = context.state.mover
    if expected is None:
        raise IllegalMove(f'Game is already over ({context.state})')
    if mark is not expected:
        raise IllegalMove(f'It is {expected.symbol} to move, not {mark.symbol}')
    board.apply_move(position, mark)
    terminal = board.evaluate_terminal(mark)
    if terminal.won:
        state = context.next(mark, True)
    elif board.is_full():
        state = context.declare_draw()
    else:
        state = context.next(mark, False)
    board.notify_state_changed(state)
    return TurnResult(state=state, terminal=terminal)


class Match:
    """
    Runs one game between two move providers on a fresh board.

    The first provider plays X and moves first. `report`, when given, receives
    the board before every turn plus the final board and announcement.
    """

    def __init__(
        self,
        size: int,
        providers: Sequence[MoveProvider],
        observers: Iterable[GameObserver] = (),
        factory: Optional[PlayerFactory] = None,
        report: Optional[Callable[[str], None]] = None,
    ) -> None:
        self.board = Board(size)
        for observer in observers:
            self.board.add_observer(observer)
        self.players: List[Player] = create_players(providers, factory)
        self.context = GameContext()
        self._current = 0
        self._moves = 0
        self._report = report

    @property
    def current_player(self) -> Player:
        return self.players[self._current]

    @property
    def state(self) -> GameState:
        return self.context.state

    @property
    def outcome(self) -> Optional[MatchOutcome]:
        if not self.context.is_game_over():
            return None
        return MatchOutcome(state=self.context.state, moves=self._moves)

    def _show(self, text: str) -> None:
        if self._report is not None:
            self._report(text)

    def _switch_player(self) -> None:
        self._current = (self._current + 1) % len(self.players)

    def step(self) -> TurnResult:
        if self.context.is_game_over():
            raise RuntimeError('Match is already over')
        logger.debug('board before turn %d:\n%s', self._moves + 1, self.board.render())
        self._show(self.board.render())
        player = self.current_player
        move = player.make_move(self.board)
        while not self.board.is_valid_move(move):
            logger.warning('%s offered unavailable cell %s, asking again', player.name, move)
            move = player.make_move(self.board)
        result = play_turn(self.board, self.context, player.mark, move)
        self._moves += 1
        self._switch_player()
        return result

    def play(self) -> MatchOutcome:
        while not self.context.is_game_over():
            self.step()
        outcome = MatchOutcome(state=self.context.state, moves=self._moves)
        logger.info('match finished after %d moves: %s', outcome.moves, outcome.state)
        self._show(self.board.render())
        self._show(outcome.message())
        return outcome
