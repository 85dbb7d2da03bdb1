"""Tests for parsing and validating board files."""

from pathlib import Path

import pytest

from src.core.board_loader import load_board, parse_board
from src.core.types import CellKind, InvalidFileFormatError

BOARD_DIR = Path(__file__).resolve().parents[1] / "boards"


class TestParse:
    """Tests for well-formed boards."""

    def test_spaced_rows(self) -> None:
        grid = parse_board("3 3\nO O O\nO 1 X\nO 2 O\n")
        assert grid.rows == ("OOO", "O1X", "O2O")
        assert grid.start == (1, 1)
        assert grid.end == (2, 1)

    def test_unspaced_rows(self) -> None:
        grid = parse_board("2 3\n1OX\nOO2")
        assert grid.rows == ("1OX", "OO2")

    def test_trailing_blank_lines_allowed(self) -> None:
        grid = parse_board("1 3\n1 O 2\n\n   \n")
        assert grid.num_rows == 1

    def test_no_trace_cells_on_load(self) -> None:
        grid = parse_board("2 2\n1 O\nX 2\n")
        assert grid.count(CellKind.TRACE) == 0

    @pytest.mark.parametrize("name", ["grid1.dat", "grid2.dat", "grid3.dat"])
    def test_bundled_boards_load(self, name) -> None:
        grid = load_board(BOARD_DIR / name)
        assert grid.occupancy(*grid.start) is CellKind.START
        assert grid.occupancy(*grid.end) is CellKind.END

    def test_load_from_file(self, tmp_path: Path) -> None:
        path = tmp_path / "board.dat"
        path.write_text("1 3\n1 O 2\n")
        assert load_board(path).rows == ("1O2",)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_board(tmp_path / "nope.dat")


class TestInvalid:
    """Every malformed board is rejected with a reason."""

    @pytest.mark.parametrize(
        "text, reason",
        [
            ("", "empty"),
            ("3\nO O O\n", "Expected two integers"),
            ("3 3 3\nO O O\n", "Expected two integers"),
            ("a b\nO\n", "must be integers"),
            ("0 3\n", "positive"),
            ("2 3\n1 O 2\n", "Too few rows"),
            ("2 3\n1 O 2\nO O\n", "columns at row 1"),
            ("1 3\n1 Z 2\n", "Invalid character 'Z' at (0, 1)"),
            ("1 4\n1 1 O 2\n", "Multiple '1'"),
            ("1 4\n1 2 O 2\n", "Multiple '2'"),
            ("1 3\n1 O 2\nO O O\n", "Too many rows"),
            ("1 3\nO O 2\n", "'1's: 0"),
            ("1 3\n1 O O\n", "'2's: 0"),
        ],
    )
    def test_rejected(self, text, reason) -> None:
        with pytest.raises(InvalidFileFormatError) as exc:
            parse_board(text)
        assert reason in str(exc.value)

    def test_is_a_value_error(self) -> None:
        with pytest.raises(ValueError):
            parse_board("")
