from __future__ import annotations


class GameError(Exception):
    """Base class for every error raised by the engine."""


class InvalidSize(GameError, ValueError):
    """A board was requested with a size that cannot hold a grid."""


class IllegalMove(GameError, ValueError):
    """A move was applied to an occupied or out-of-range cell."""


class InvalidInput(GameError, ValueError):
    """Text from a move provider could not be turned into a position."""


class InconsistentOutcome(GameError):
    """A winning line belongs to a mark other than the one that just moved."""


class MoveProviderExhausted(GameError):
    """A move provider has no more moves to give."""
