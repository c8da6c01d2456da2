import io
import logging
import os
import unittest
from contextlib import redirect_stdout
from unittest.mock import patch

from tictactoe_core.cli import main
from tictactoe_core.config import Settings


def run_cli(argv):
    out, err = io.StringIO(), io.StringIO()
    with redirect_stdout(out), patch('sys.stderr', err):
        code = main(argv)
    return code, out.getvalue(), err.getvalue()


class TestCli(unittest.TestCase):
    def test_given_scripted_players_when_run_then_board_events_and_winner_printed(self):
        code, out, _ = run_cli([
            '--x', 'script', '--x-moves', '0 0; 0 1; 0 2',
            '--o', 'script', '--o-moves', '1 1; 1 0',
        ])
        self.assertEqual(code, 0)
        self.assertIn('Move made at position: (0, 0) by player with symbol: X', out)
        self.assertIn('Game state changed to: X_WON', out)
        self.assertIn('---+---+---', out)
        self.assertTrue(out.rstrip().endswith('Player X wins!'))

    def test_given_quiet_flag_when_run_then_no_event_lines(self):
        code, out, _ = run_cli([
            '--quiet', '--size', '1', '--x', 'script', '--x-moves', '0 0', '--o', 'script',
        ])
        self.assertEqual(code, 0)
        self.assertNotIn('Move made', out)
        self.assertIn('Player X wins!', out)

    def test_given_short_script_when_run_then_exit_code_2(self):
        code, _, err = run_cli(['--x', 'script', '--x-moves', '0 0', '--o', 'script'])
        self.assertEqual(code, 2)
        self.assertIn('no scripted moves left', err)

    def test_given_bad_size_when_run_then_exit_code_1(self):
        code, _, err = run_cli(['--size', '0', '--x', 'script', '--o', 'script'])
        self.assertEqual(code, 1)
        self.assertIn('Size must be greater than 0', err)

    def test_given_unparseable_script_when_run_then_error_line_and_exit_code_1(self):
        code, _, err = run_cli(['--x', 'script', '--x-moves', 'a b', '--o', 'script'])
        self.assertEqual(code, 1)
        self.assertIn('error: ', err)
        self.assertIn('numeric', err)

    def test_given_non_numeric_env_size_when_run_then_error_line_and_exit_code_1(self):
        with patch.dict(os.environ, {'TICTACTOE_BOARD_SIZE': 'big'}):
            code, _, err = run_cli(['--x', 'script', '--o', 'script'])
        self.assertEqual(code, 1)
        self.assertIn('TICTACTOE_BOARD_SIZE', err)

    def test_given_size_above_limit_when_run_then_exit_code_1(self):
        with patch.dict(os.environ, {'TICTACTOE_MAX_SIZE': '4'}):
            code, _, err = run_cli(['--size', '5', '--x', 'script', '--o', 'script'])
        self.assertEqual(code, 1)
        self.assertIn('at most 4', err)

    def test_given_human_players_when_run_then_reads_console_input(self):
        lines = iter(['0 0', '1 1', '0 1', '1 0', '0 2'])
        with patch('builtins.input', lambda prompt='': next(lines)):
            code, out, _ = run_cli(['--quiet'])
        self.assertEqual(code, 0)
        self.assertIn('Player X wins!', out)


class TestSettings(unittest.TestCase):
    def test_given_empty_env_when_loading_then_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            s = Settings.from_env()
        self.assertEqual(s.board_size, 3)
        self.assertEqual(s.log_level, 'WARNING')
        self.assertFalse(s.debug)
        self.assertEqual(s.max_board_size, 32)
        self.assertEqual(s.effective_log_level(), logging.WARNING)

    def test_given_env_overrides_when_loading_then_applied(self):
        env = {'TICTACTOE_BOARD_SIZE': '4', 'TICTACTOE_LOG_LEVEL': 'info', 'TICTACTOE_DEBUG': 'no',
               'TICTACTOE_MAX_SIZE': '8'}
        with patch.dict(os.environ, env, clear=True):
            s = Settings.from_env()
        self.assertEqual(s.board_size, 4)
        self.assertEqual(s.max_board_size, 8)
        self.assertEqual(s.effective_log_level(), logging.INFO)
        self.assertEqual(s.effective_log_level('error'), logging.ERROR)
        self.assertEqual(s.effective_log_level('bogus'), logging.WARNING)

    def test_given_debug_flag_when_loading_then_debug_level_wins(self):
        with patch.dict(os.environ, {'TICTACTOE_DEBUG': 'On', 'TICTACTOE_LOG_LEVEL': 'ERROR'}, clear=True):
            s = Settings.from_env()
        self.assertTrue(s.debug)
        self.assertEqual(s.effective_log_level(), logging.DEBUG)

    def test_given_non_numeric_size_when_loading_then_error(self):
        with patch.dict(os.environ, {'TICTACTOE_BOARD_SIZE': 'big'}, clear=True):
            with self.assertRaises(ValueError):
                Settings.from_env()


if __name__ == '__main__':
    unittest.main(verbosity=2)
