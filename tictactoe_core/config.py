from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_SIZE = 3
DEFAULT_MAX_SIZE = 32
_TRUTHY = ('1', 'true', 'yes', 'on')


def _env_flag(name: str, default: str = '0') -> bool:
    return os.getenv(name, default).strip().lower() in _TRUTHY


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == '':
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f'{name} must be an integer, got {raw!r}') from None


@dataclass(frozen=True)
class Settings:
    board_size: int = DEFAULT_SIZE
    log_level: str = 'WARNING'
    debug: bool = False
    max_board_size: int = DEFAULT_MAX_SIZE

    @classmethod
    def from_env(cls) -> 'Settings':
        """
        Reads settings from the environment:
        - TICTACTOE_BOARD_SIZE: default board size (3)
        - TICTACTOE_LOG_LEVEL: logging level name (WARNING)
        - TICTACTOE_DEBUG: 1/true/yes/on forces DEBUG logging
        - TICTACTOE_MAX_SIZE: largest board accepted from users (32)
        """
        return cls(
            board_size=_env_int('TICTACTOE_BOARD_SIZE', DEFAULT_SIZE),
            log_level=os.getenv('TICTACTOE_LOG_LEVEL', 'WARNING').strip().upper() or 'WARNING',
            debug=_env_flag('TICTACTOE_DEBUG'),
            max_board_size=_env_int('TICTACTOE_MAX_SIZE', DEFAULT_MAX_SIZE),
        )

    def effective_log_level(self, override: Optional[str] = None) -> int:
        if self.debug:
            return logging.DEBUG
        name = (override or self.log_level).upper()
        level = logging.getLevelName(name)
        return level if isinstance(level, int) else logging.WARNING


def configure_logging(level: int = logging.WARNING) -> None:
    logging.basicConfig(level=level, format='%(asctime)s %(levelname)s %(name)s: %(message)s')
