"""Tests for the ftable command."""

import io
import logging
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from ftable.cli import cli
from ftable.config import FLAGS_ENV_VAR
from ftable.exceptions import InputOutputError


class _BrokenPipe:
    def write(self, data: bytes) -> int:
        raise BrokenPipeError("pipe")

    def flush(self) -> None:
        pass


@pytest.fixture
def runner() -> CliRunner:
    """Create a Click CLI runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def no_env_flags(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's FTABLE_FLAGS out of the tests."""
    monkeypatch.delenv(FLAGS_ENV_VAR, raising=False)


class TestHelp:
    """Test help output."""

    def test_help(self, runner: CliRunner) -> None:
        """Test CLI help message."""
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "Align tab-delimited text from stdin" in result.output
        for option in ("-box", "-header", "-rowlines", "-minwidth", "-padchar", "-flags"):
            assert option in result.output

    def test_help_lists_flag_names(self, runner: CliRunner) -> None:
        """Help lists the alignment flag names."""
        result = runner.invoke(cli, ["-help"])
        assert result.exit_code == 0
        assert "align-right" in result.output
        assert "discard-empty" in result.output


class TestAlignOnly:
    """Test output without the box overlay."""

    def test_aligns_columns(self, runner: CliRunner) -> None:
        """Without -box the input is only aligned."""
        result = runner.invoke(cli, [], input="a\tb\nccc\td\n")
        assert result.exit_code == 0
        assert result.stdout == "a   b\nccc d\n"

    def test_empty_input(self, runner: CliRunner) -> None:
        """Empty stdin produces empty output."""
        result = runner.invoke(cli, [], input="")
        assert result.exit_code == 0
        assert result.stdout == ""

    def test_alignment_options(self, runner: CliRunner) -> None:
        """Width, padding and pad character options reach the engine."""
        result = runner.invoke(
            cli,
            ["-minwidth", "4", "-padding", "2", "-padchar", "."],
            input="a\tb\nccc\td\n",
        )
        assert result.exit_code == 0
        assert result.stdout == "a....b\nccc..d\n"

    def test_flags(self, runner: CliRunner) -> None:
        """Flags from -flags are applied."""
        result = runner.invoke(cli, ["-flags", "align-right,debug"], input="a\tb\nccc\td\n")
        assert result.exit_code == 0
        assert result.stdout == "   a|b\n ccc|d\n"

    def test_flags_from_environment(self, runner: CliRunner) -> None:
        """FTABLE_FLAGS supplies default flags."""
        result = runner.invoke(
            cli, [], input="a\tb\nccc\td\n", env={FLAGS_ENV_VAR: "align-right"}
        )
        assert result.exit_code == 0
        assert result.stdout == "   ab\n cccd\n"

    def test_header_without_box_warns(
        self, runner: CliRunner, caplog: pytest.LogCaptureFixture
    ) -> None:
        """-header without -box logs a warning and is ignored."""
        with caplog.at_level(logging.WARNING, logger="ftable.cli"):
            result = runner.invoke(cli, ["-header"], input="a\tb\n")
        assert result.exit_code == 0
        assert result.stdout == "a b\n"
        assert "no effect without -box" in caplog.text


class TestBox:
    """Test boxed output."""

    def test_plain_box(self, runner: CliRunner) -> None:
        """-box draws a plain box."""
        result = runner.invoke(cli, ["-box"], input="a\tb\nccc\td\n")
        assert result.exit_code == 0
        assert result.stdout == (
            "┌─────┬───┐\n"
            "│ a   │ b │\n"
            "│ ccc │ d │\n"
            "└━━━━━┴━━━┘\n"
        )

    def test_double_dash_spelling(self, runner: CliRunner) -> None:
        """Double-dash options behave like single-dash ones."""
        single = runner.invoke(cli, ["-box", "-header"], input="a\tb\nccc\td\n")
        double = runner.invoke(cli, ["--box", "--header"], input="a\tb\nccc\td\n")
        assert single.stdout == double.stdout

    def test_header_box(self, runner: CliRunner) -> None:
        """-box -header draws a header block."""
        result = runner.invoke(cli, ["-box", "-header"], input="a\tb\nccc\td\n")
        assert result.exit_code == 0
        assert result.stdout == (
            "┏━━━━━┳━━━┓\n"
            "┃ a   ┃ b ┃\n"
            "┡━━━━━╇━━━┩\n"
            "│ ccc │ d │\n"
            "└━━━━━┴━━━┘\n"
        )

    def test_rowlines(self, runner: CliRunner) -> None:
        """-rowlines draws a rule between rows."""
        result = runner.invoke(cli, ["-box", "-rowlines"], input="a\tb\nccc\td\ne\tf\n")
        assert result.exit_code == 0
        assert result.stdout.count("├─────┼───┤") == 2

    def test_empty_input(self, runner: CliRunner) -> None:
        """Empty stdin with -box draws an empty box."""
        result = runner.invoke(cli, ["-box"], input="")
        assert result.exit_code == 0
        assert result.stdout == "┌──┐\n└━━┘\n"

    def test_right_aligned_box(self, runner: CliRunner) -> None:
        """Right alignment works with -box."""
        result = runner.invoke(
            cli, ["-box", "-flags", "align-right"], input="a\tb\nccc\td\n"
        )
        assert result.exit_code == 0
        assert result.stdout.splitlines()[1] == "│    a │ b │"


class TestErrors:
    """Test configuration and I/O failures."""

    def test_padchar_too_long(self, runner: CliRunner) -> None:
        """A two-character pad character fails with exit 1."""
        result = runner.invoke(cli, ["-padchar", "ab"], input="a\tb\n")
        assert result.exit_code == 1
        assert result.stdout == ""
        assert "padchar" in result.stderr
        assert "got 2" in result.stderr

    def test_multibyte_padchar(self, runner: CliRunner) -> None:
        """A multi-byte pad character fails with exit 1."""
        result = runner.invoke(cli, ["-box", "-padchar", "é"], input="a\tb\n")
        assert result.exit_code == 1
        assert result.stdout == ""

    def test_unknown_flag(self, runner: CliRunner) -> None:
        """An unknown flag name fails with exit 1."""
        result = runner.invoke(cli, ["-flags", "debug,bogus"], input="a\tb\n")
        assert result.exit_code == 1
        assert result.stdout == ""
        assert "unrecognized flag 'bogus'" in result.stderr

    def test_negative_minwidth(self, runner: CliRunner) -> None:
        """A negative minimum width fails with exit 1."""
        result = runner.invoke(cli, ["--minwidth=-1"], input="a\tb\n")
        assert result.exit_code == 1
        assert "minwidth" in result.stderr

    @patch("ftable.cli.read_input")
    def test_stdin_read_failure(self, mock_read, runner: CliRunner) -> None:
        """A failed read is reported on stderr with exit status 1."""
        mock_read.side_effect = InputOutputError("read", "stdin", OSError("boom"))
        result = runner.invoke(cli, ["-box"], input="a\tb\n")
        assert result.exit_code == 1
        assert result.stdout == ""
        assert "error reading from stdin: boom" in result.stderr

    def test_stdout_write_failure(self, runner: CliRunner) -> None:
        """A failed write is reported on stderr with exit status 1."""
        streams = {"stdin": io.BytesIO(b"a\tb\n"), "stdout": _BrokenPipe()}
        with patch("ftable.cli._binary_stream", side_effect=streams.__getitem__):
            result = runner.invoke(cli, ["-box"])
        assert result.exit_code == 1
        assert result.stdout == ""
        assert "error writing to stdout: pipe" in result.stderr
