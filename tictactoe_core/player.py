from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

from .board import Board, Mark
from .position import Position
from .providers import MoveProvider

# Players are bound to marks in the order their providers are given.
TURN_ORDER = (Mark.X, Mark.O)


@dataclass
class Player:
    mark: Mark
    provider: MoveProvider
    name: str = ''

    def __post_init__(self) -> None:
        if self.mark is Mark.EMPTY:
            raise ValueError('A player cannot play the EMPTY mark')
        if not self.name:
            self.name = f'Player {self.mark.symbol}'

    def make_move(self, board: Board) -> Position:
        return self.provider.choose_move(board.view())


class PlayerFactory:
    def create_player(self, mark: Mark, provider: MoveProvider, name: Optional[str] = None) -> Player:
        return Player(mark=mark, provider=provider, name=name or '')


def create_players(providers: Sequence[MoveProvider], factory: Optional[PlayerFactory] = None) -> List[Player]:
    """The first provider plays X and moves first, the second plays O."""
    if len(providers) != len(TURN_ORDER):
        raise ValueError(f'Expected {len(TURN_ORDER)} move providers, got {len(providers)}')
    factory = factory or PlayerFactory()
    return [factory.create_player(mark, provider) for mark, provider in zip(TURN_ORDER, providers)]
