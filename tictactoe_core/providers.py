from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Callable, Iterable, Iterator, List, Optional, Sequence, Tuple, Union

from .board import BoardView
from .errors import InvalidInput, MoveProviderExhausted
from .position import Position, parse_position

logger = logging.getLogger(__name__)

ScriptedMove = Union[Position, Tuple[int, int], str]


class MoveProvider(ABC):
    """Produces the next move for a player. Implementations only ever return valid positions."""

    @abstractmethod
    def choose_move(self, board: BoardView) -> Position:
        pass


class HumanMoveProvider(MoveProvider):
    """
    Asks a person for moves over a line-based input source.

    Keeps prompting until the text parses and the cell is free; there is no
    retry limit. `read` and `write` default to the console and can be swapped
    for any callables with the same shape.
    """

    def __init__(
        self,
        name: str,
        read: Optional[Callable[[str], str]] = None,
        write: Optional[Callable[[str], None]] = None,
    ) -> None:
        self.name = name
        self._read = read or input
        self._write = write or print

    def prompt(self, board: BoardView) -> str:
        hi = board.size - 1
        return f'{self.name}, enter your move (row [0-{hi}] and column [0-{hi}]) separated by space: '

    def choose_move(self, board: BoardView) -> Position:
        while True:
            try:
                text = self._read(self.prompt(board))
            except EOFError:
                raise MoveProviderExhausted(f'{self.name}: input closed') from None
            try:
                move = parse_position(text)
            except InvalidInput as e:
                self._write(f'Invalid input. {e}')
                continue
            if board.is_valid_move(move):
                return move
            self._write('Invalid move. Try again.')


def _coerce(move: ScriptedMove) -> Position:
    if isinstance(move, Position):
        return move
    if isinstance(move, str):
        return parse_position(move)
    r, c = move
    return Position(int(r), int(c))


class ScriptedMoveProvider(MoveProvider):
    """Plays a fixed list of moves in order, skipping any the board no longer accepts."""

    def __init__(self, moves: Iterable[ScriptedMove], name: str = 'script') -> None:
        self.name = name
        self._moves: List[Position] = [_coerce(m) for m in moves]
        self._it: Iterator[Position] = iter(self._moves)

    @classmethod
    def from_string(cls, text: str, name: str = 'script') -> 'ScriptedMoveProvider':
        """Builds a script from 'r c; r c; ...'."""
        parts: Sequence[str] = [p for p in (text or '').split(';') if p.strip()]
        return cls(parts, name=name)

    def choose_move(self, board: BoardView) -> Position:
        for move in self._it:
            if board.is_valid_move(move):
                return move
            logger.warning('%s: skipping scripted move %s, cell unavailable', self.name, move)
        raise MoveProviderExhausted(f'{self.name}: no scripted moves left')
