from __future__ import annotations

from typing import Callable, List, Tuple, Union

from .board import Mark
from .position import Position
from .state import GameState

MoveEvent = Tuple[str, Position, Mark]
StateEvent = Tuple[str, GameState]


class GameObserver:
    """Receives board events. Both hooks are no-ops so subclasses override only what they need."""

    def on_move_made(self, position: Position, mark: Mark) -> None:
        pass

    def on_state_changed(self, state: GameState) -> None:
        pass


class ConsoleObserver(GameObserver):
    def __init__(self, write: Callable[[str], None] = print) -> None:
        self._write = write

    def on_move_made(self, position: Position, mark: Mark) -> None:
        self._write(f'Move made at position: {position} by player with symbol: {mark.symbol}')

    def on_state_changed(self, state: GameState) -> None:
        self._write(f'Game state changed to: {state}')


class EventLog(GameObserver):
    """Keeps every event in arrival order."""

    def __init__(self) -> None:
        self.events: List[Union[MoveEvent, StateEvent]] = []

    def on_move_made(self, position: Position, mark: Mark) -> None:
        self.events.append(('move', position, mark))

    def on_state_changed(self, state: GameState) -> None:
        self.events.append(('state', state))

    def states(self) -> List[GameState]:
        return [e[1] for e in self.events if e[0] == 'state']

    def moves(self) -> List[Tuple[Position, Mark]]:
        return [(e[1], e[2]) for e in self.events if e[0] == 'move']  # type: ignore

    def to_json(self) -> List[dict]:
        out: List[dict] = []
        for e in self.events:
            if e[0] == 'move':
                _, pos, mark = e
                out.append({'type': 'move', 'position': [pos.row, pos.col], 'mark': mark.symbol})
            else:
                out.append({'type': 'state', 'state': str(e[1])})
        return out
