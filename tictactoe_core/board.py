from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Iterable, Iterator, List, Optional, Sequence, Tuple

from .errors import IllegalMove, InconsistentOutcome, InvalidSize
from .position import Position

if TYPE_CHECKING:
    from .observers import GameObserver
    from .state import GameState

logger = logging.getLogger(__name__)


class Mark(Enum):
    X = 'X'
    O = 'O'
    EMPTY = '.'

    @property
    def symbol(self) -> str:
        return self.value

    def opponent(self) -> 'Mark':
        if self is Mark.X:
            return Mark.O
        if self is Mark.O:
            return Mark.X
        raise ValueError('EMPTY has no opponent')

    @classmethod
    def from_symbol(cls, symbol: Optional[str]) -> 'Mark':
        """Reads a cell symbol; '.', ' ', '' and None all mean an empty cell."""
        if symbol is not None and not isinstance(symbol, str):
            raise ValueError(f'Mark symbol must be a string, got {symbol!r}')
        s = (symbol or '').strip().upper()
        if s in ('', '.'):
            return cls.EMPTY
        if s == 'X':
            return cls.X
        if s == 'O':
            return cls.O
        raise ValueError(f'Unknown mark symbol: {symbol!r}')


Line = Tuple[str, int]  # ('row' | 'col' | 'diag' | 'anti', index)


@dataclass(frozen=True)
class TerminalOutcome:
    """Result of scanning the board for a complete line."""
    won: bool
    mark: Optional[Mark] = None
    line: Optional[Line] = None
    cells: Tuple[Position, ...] = ()


NO_WIN = TerminalOutcome(won=False)


class Board:
    """
    Square grid of marks owned by a single match.

    Cells only ever go from EMPTY to X or O. Observers are notified
    synchronously in registration order and must not apply moves from inside
    a callback.
    """

    def __init__(self, size: int) -> None:
        if not isinstance(size, int) or isinstance(size, bool) or size <= 0:
            raise InvalidSize(f'Size must be greater than 0, got {size!r}')
        self._size = size
        self._grid: List[List[Mark]] = [[Mark.EMPTY] * size for _ in range(size)]
        self._observers: List['GameObserver'] = []
        self._notifying = False

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Optional[str]]]) -> 'Board':
        """Rebuilds a board from rows of cell symbols, e.g. [['X', '.', 'O'], ...]."""
        size = len(rows)
        if size == 0 or any(len(r) != size for r in rows):
            raise InvalidSize('Board rows must form a non-empty square')
        board = cls(size)
        for r, row in enumerate(rows):
            for c, symbol in enumerate(row):
                board._grid[r][c] = Mark.from_symbol(symbol)
        return board

    @property
    def size(self) -> int:
        return self._size

    # ---------- Cells ----------

    def in_bounds(self, position: Position) -> bool:
        return 0 <= position.row < self._size and 0 <= position.col < self._size

    def cell(self, position: Position) -> Mark:
        if not self.in_bounds(position):
            raise IndexError(f'{position} is outside a {self._size}x{self._size} board')
        return self._grid[position.row][position.col]

    def positions(self) -> Iterator[Position]:
        """Iterates over all positions in row-major order."""
        for r in range(self._size):
            for c in range(self._size):
                yield Position(r, c)

    def empty_cells(self) -> List[Position]:
        return [p for p in self.positions() if self._grid[p.row][p.col] is Mark.EMPTY]

    def is_full(self) -> bool:
        return all(m is not Mark.EMPTY for row in self._grid for m in row)

    def rows(self) -> Tuple[Tuple[Mark, ...], ...]:
        return tuple(tuple(row) for row in self._grid)

    # ---------- Moves ----------

    def is_valid_move(self, position: Position) -> bool:
        return self.in_bounds(position) and self._grid[position.row][position.col] is Mark.EMPTY

    def apply_move(self, position: Position, mark: Mark) -> None:
        if self._notifying:
            raise IllegalMove('Observers must not apply moves while being notified')
        if mark is Mark.EMPTY:
            raise IllegalMove('Cannot place an EMPTY mark')
        if not self.is_valid_move(position):
            raise IllegalMove(f'Invalid move at {position}')
        self._grid[position.row][position.col] = mark
        logger.debug('placed %s at %s', mark.symbol, position)
        self._notify_move_made(position, mark)

    # ---------- Terminal detection ----------

    def _lines(self) -> Iterator[Tuple[Line, Tuple[Position, ...]]]:
        n = self._size
        for r in range(n):
            yield ('row', r), tuple(Position(r, c) for c in range(n))
        for c in range(n):
            yield ('col', c), tuple(Position(r, c) for r in range(n))
        yield ('diag', 0), tuple(Position(i, i) for i in range(n))
        yield ('anti', 0), tuple(Position(i, n - 1 - i) for i in range(n))

    def _line_owner(self, cells: Iterable[Position]) -> Optional[Mark]:
        marks = {self._grid[p.row][p.col] for p in cells}
        if len(marks) != 1:
            return None
        only = marks.pop()
        return None if only is Mark.EMPTY else only

    def evaluate_terminal(self, acting_mark: Mark) -> TerminalOutcome:
        """
        Scans rows, then columns, then the main and anti diagonals, and stops at
        the first line filled with a single mark.

        The reported mark is the one found on the line. Since only one cell
        changes per turn, it must equal `acting_mark`; anything else means the
        caller broke turn order and raises InconsistentOutcome.
        """
        for line, cells in self._lines():
            owner = self._line_owner(cells)
            if owner is None:
                continue
            if owner is not acting_mark:
                raise InconsistentOutcome(
                    f'{line[0]} {line[1]} is owned by {owner.symbol}, but {acting_mark.symbol} just moved'
                )
            logger.debug('winning %s %d for %s', line[0], line[1], owner.symbol)
            return TerminalOutcome(won=True, mark=owner, line=line, cells=cells)
        return NO_WIN

    # ---------- Observers ----------

    def add_observer(self, observer: 'GameObserver') -> None:
        self._observers.append(observer)

    def remove_observer(self, observer: 'GameObserver') -> None:
        """Drops one registration of `observer`; ValueError if it is not registered."""
        for i, existing in enumerate(self._observers):
            if existing is observer:
                del self._observers[i]
                return
        raise ValueError('Observer is not registered')

    def _notify_move_made(self, position: Position, mark: Mark) -> None:
        self._notifying = True
        try:
            for observer in list(self._observers):
                observer.on_move_made(position, mark)
        finally:
            self._notifying = False

    def notify_state_changed(self, state: 'GameState') -> None:
        self._notifying = True
        try:
            for observer in list(self._observers):
                observer.on_state_changed(state)
        finally:
            self._notifying = False

    # ---------- Presentation ----------

    def render(self) -> str:
        """Generates a human-readable grid, e.g. ' X | O | . ' rows split by '---+---+---'."""
        divider = '+'.join(['---'] * self._size)
        lines: List[str] = []
        for r, row in enumerate(self._grid):
            lines.append('|'.join(f' {m.symbol} ' for m in row))
            if r < self._size - 1:
                lines.append(divider)
        return '\n'.join(lines)

    def view(self) -> 'BoardView':
        return BoardView(self)

    def __str__(self) -> str:
        return self.render()


class BoardView:
    """Read-only window onto a Board, handed to move providers."""

    __slots__ = ('_board',)

    def __init__(self, board: Board) -> None:
        self._board = board

    @property
    def size(self) -> int:
        return self._board.size

    def cell(self, position: Position) -> Mark:
        return self._board.cell(position)

    def is_valid_move(self, position: Position) -> bool:
        return self._board.is_valid_move(position)

    def empty_cells(self) -> List[Position]:
        return self._board.empty_cells()

    def rows(self) -> Tuple[Tuple[Mark, ...], ...]:
        return self._board.rows()

    def render(self) -> str:
        return self._board.render()
