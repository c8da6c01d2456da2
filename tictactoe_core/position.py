from __future__ import annotations

from dataclasses import dataclass

from .errors import InvalidInput


@dataclass(frozen=True, order=True)
class Position:
    """A (row, col) coordinate. Whether it fits a given board is the board's call."""
    row: int
    col: int

    def __post_init__(self) -> None:
        for v in (self.row, self.col):
            if not isinstance(v, int) or isinstance(v, bool):
                raise TypeError(f'Position coordinates must be integers, got {v!r}')
        if self.row < 0 or self.col < 0:
            raise ValueError(f'Position coordinates must be non-negative, got ({self.row}, {self.col})')

    def __str__(self) -> str:
        return f'({self.row}, {self.col})'


def parse_position(text: str) -> Position:
    """Parses 'r c' or 'r,c' into a Position, raising InvalidInput on anything else."""
    text = (text or '').strip()
    sep = ',' if ',' in text else None
    parts = [t.strip() for t in text.split(sep) if t.strip() != '']
    if len(parts) != 2:
        raise InvalidInput('Please enter row and column separated by a space.')
    try:
        row, col = int(parts[0]), int(parts[1])
    except ValueError:
        raise InvalidInput('Please enter numeric values for row and column.') from None
    try:
        return Position(row, col)
    except ValueError as e:
        raise InvalidInput(str(e)) from None
