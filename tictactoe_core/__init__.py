"""
Tic-tac-toe core Python package.

Turn-based two-player engine for an NxN grid: move validation, full-line win
detection and the turn state machine, kept free of any I/O so the console
driver and the JSON API share it.
Modules:
- position.py: Position, parse_position
- board.py: Mark, Board, BoardView, TerminalOutcome
- state.py: GameState, GameContext
- observers.py: GameObserver, ConsoleObserver, EventLog
- providers.py: MoveProvider, HumanMoveProvider, ScriptedMoveProvider
- player.py: Player, PlayerFactory, create_players
- match.py: Match, play_turn, announce_outcome
- config.py / cli.py: environment settings and the console entry point
"""
