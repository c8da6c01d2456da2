from __future__ import annotations

# Facade module that re-exports the tic-tac-toe core.
# Kept so the Flask app and tests import from one place.
# Single-responsibility modules live under tictactoe_core/*.

from tictactoe_core.board import Board, BoardView, Mark, TerminalOutcome, NO_WIN
from tictactoe_core.errors import (
    GameError,
    InvalidSize,
    IllegalMove,
    InvalidInput,
    InconsistentOutcome,
    MoveProviderExhausted,
)
from tictactoe_core.match import Match, MatchOutcome, TurnResult, announce_outcome, play_turn
from tictactoe_core.observers import ConsoleObserver, EventLog, GameObserver
from tictactoe_core.player import Player, PlayerFactory, TURN_ORDER, create_players
from tictactoe_core.position import Position, parse_position
from tictactoe_core.providers import HumanMoveProvider, MoveProvider, ScriptedMoveProvider
from tictactoe_core.state import GameContext, GameState


def main() -> None:
    # CLI driver delegated to tictactoe_core.cli
    from tictactoe_core.cli import main as _main
    raise SystemExit(_main())


if __name__ == '__main__':
    main()
