from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from .config import Settings, configure_logging
from .errors import GameError, InvalidSize, MoveProviderExhausted
from .match import Match
from .observers import ConsoleObserver, GameObserver
from .providers import HumanMoveProvider, MoveProvider, ScriptedMoveProvider

logger = logging.getLogger(__name__)


def _build_provider(kind: str, mark: str, moves: Optional[str]) -> MoveProvider:
    if kind == 'script':
        return ScriptedMoveProvider.from_string(moves or '', name=f'Player {mark}')
    return HumanMoveProvider(f'Player {mark}')


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Two-player tic-tac-toe on an NxN board')
    parser.add_argument('--size', type=int, default=settings.board_size, help='Board size (NxN)')
    parser.add_argument('--x', choices=['human', 'script'], default='human', help='Who plays X (moves first)')
    parser.add_argument('--o', choices=['human', 'script'], default='human', help='Who plays O')
    parser.add_argument('--x-moves', default=None, help="Scripted moves for X, e.g. '0 0; 1 1'")
    parser.add_argument('--o-moves', default=None, help="Scripted moves for O, e.g. '0 1; 2 2'")
    parser.add_argument('--quiet', action='store_true', help='Do not print move/state events')
    parser.add_argument('--log-level', default=None, help='Logging level (overrides TICTACTOE_LOG_LEVEL)')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    try:
        settings = Settings.from_env()
    except ValueError as e:
        print(f'error: {e}', file=sys.stderr)
        return 1
    args = build_parser(settings).parse_args(argv)
    configure_logging(settings.effective_log_level(args.log_level))

    observers: List[GameObserver] = [] if args.quiet else [ConsoleObserver()]
    try:
        if args.size > settings.max_board_size:
            raise InvalidSize(f'Size must be at most {settings.max_board_size}, got {args.size}')
        providers = [
            _build_provider(args.x, 'X', args.x_moves),
            _build_provider(args.o, 'O', args.o_moves),
        ]
        match = Match(args.size, providers, observers=observers, report=print)
        match.play()
    except MoveProviderExhausted as e:
        print(f'error: {e}', file=sys.stderr)
        return 2
    except GameError as e:
        logger.error('match aborted: %s', e)
        print(f'error: {e}', file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
