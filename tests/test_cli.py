import io
import unittest
from contextlib import redirect_stdout
from unittest.mock import patch

from gridboard_core.board import Board
from gridboard_core.cli import main, run_command
from gridboard_core.location import Location
from gridboard_core.pieces import Pieces
from gridboard_core.view import BoardView


class TestCli(unittest.TestCase):
    def setUp(self):
        self.board = Board(3, 3)
        self.view = BoardView(self.board, 31, 31)

    def _run(self, line):
        buf = io.StringIO()
        with redirect_stdout(buf):
            keep = run_command(self.board, self.view, line)
        return keep, buf.getvalue()

    def test_given_click_commands_when_run_then_board_cycles_and_prints(self):
        keep, out = self._run("click 1 1")
        self.assertTrue(keep)
        self.assertIn("(1,1) -> black", out)
        self.assertIn("X . .", out)
        self._run("click 1 1")
        self.assertEqual(self.board[Location(1, 1)], Pieces.WHITE)

    def test_given_fill_and_count_when_run_then_counts_printed(self):
        _, out = self._run("fill")
        self.assertIn("Filled 9 cells", out)
        _, out = self._run("count white")
        self.assertEqual(out.strip(), "white=9")
        _, out = self._run("clear")
        _, out = self._run("count")
        self.assertEqual(out.strip(), "empty=9 black=0 white=0")

    def test_given_ray_command_when_run_then_locations_to_border(self):
        _, out = self._run("ray 1 1 right")
        self.assertEqual(out.strip(), "(1,1) (2,1) (3,1)")
        _, out = self._run("ray 3 1 lower_left")
        self.assertEqual(out.strip(), "(3,1) (2,2) (1,3)")
        with self.assertRaises(ValueError):
            self._run("ray 0 0 right")

    def test_given_quit_or_unknown_when_run_then_expected_flow(self):
        keep, _ = self._run("quit")
        self.assertFalse(keep)
        keep, out = self._run("dance")
        self.assertTrue(keep)
        self.assertIn("Unknown command", out)

    def test_given_session_when_main_runs_then_errors_reported_and_loop_ends(self):
        buf = io.StringIO()
        lines = ["click 1 1", "click 9 9", "count black", "quit"]
        with patch("builtins.input", side_effect=lines), redirect_stdout(buf):
            main(["--xsize", "3", "--ysize", "3", "--style", "go"])
        out = buf.getvalue()
        self.assertIn("error:", out)
        self.assertIn("black=1", out)

    def test_given_eof_when_main_runs_then_exits_cleanly(self):
        buf = io.StringIO()
        with patch("builtins.input", side_effect=EOFError), redirect_stdout(buf):
            main(["--xsize", "2", "--ysize", "2"])
        self.assertIn(". .", buf.getvalue())

    def test_given_style_flag_when_main_runs_then_board_drawn_in_that_style(self):
        outputs = {}
        for style in ("go", "chess"):
            buf = io.StringIO()
            with patch("builtins.input", side_effect=EOFError), redirect_stdout(buf):
                main(["--xsize", "3", "--ysize", "2", "--style", style])
            outputs[style] = buf.getvalue()
        self.assertIn("go board 3x2", outputs["go"])
        self.assertIn("+ + +", outputs["go"])
        self.assertNotIn(". . .", outputs["go"])
        self.assertIn("chess board 3x2", outputs["chess"])
        self.assertIn(". . .", outputs["chess"])

    def test_given_bad_size_when_main_runs_then_usage_error(self):
        with self.assertRaises(SystemExit), redirect_stdout(io.StringIO()), patch("sys.stderr", new=io.StringIO()):
            main(["--xsize", "0"])


if __name__ == '__main__':
    unittest.main(verbosity=2)
