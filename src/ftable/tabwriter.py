"""
Elastic tabstop column alignment.

The TabWriter collects tab-terminated cells and pads them so that cells in
the same column line up. A column is a run of adjacent lines that all
have a cell at that index; its width is the widest cell in the run plus
padding, but never less than the minimum width. Text after the last tab
of a line is not part of any column.

Example:
    out = io.BytesIO()
    writer = TabWriter(out, minwidth=0, tabwidth=8, padding=1)
    writer.write(b"a\\tb\\nccc\\td\\n")
    writer.flush()
    # out.getvalue() == b"a   b\\nccc d\\n"
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from typing import BinaryIO

from .exceptions import ValidationError
from .flags import AlignFlag

logger = logging.getLogger(__name__)

ESCAPE = 0xFF
"""Bytes between two ESCAPE bytes are passed through as a single opaque run."""

_TAB = 0x09
_NEWLINE = 0x0A
_VTAB = 0x0B
_FORMFEED = 0x0C
_CELL_TERMINATORS = frozenset((_TAB, _NEWLINE, _VTAB, _FORMFEED))

_LT = ord("<")
_GT = ord(">")
_AMP = ord("&")
_SEMI = ord(";")

_VBAR = b"|"
_HBAR = b"---\n"


@dataclass
class _Cell:
    size: int = 0  # bytes
    width: int = 0  # code points
    htab: bool = False  # terminated by '\t' rather than '\v'


def _text_width(data: bytes) -> int:
    """Count code points; each undecodable byte counts as one."""
    return len(data.decode("utf-8", "surrogateescape"))


class TabWriter:
    """
    Align tab-terminated cells written to it into columns.

    Output is produced only on flush(), or early when a line without any
    tab (or a form feed) ends the current block of columns.
    """

    def __init__(
        self,
        output: BinaryIO,
        minwidth: int = 0,
        tabwidth: int = 8,
        padding: int = 1,
        padchar: bytes = b" ",
        flags: AlignFlag = AlignFlag.NONE,
    ) -> None:
        """
        Initialize the writer.

        Args:
            output: Binary stream receiving the aligned text
            minwidth: Minimal cell width including any padding
            tabwidth: Width of tab characters (used when padding with tabs)
            padding: Padding added to a cell before computing its width
            padchar: Single byte used for padding
            flags: Alignment behavior flags

        Raises:
            ValidationError: If a width is negative or padchar is not one byte
        """
        for field, value in (("minwidth", minwidth), ("tabwidth", tabwidth), ("padding", padding)):
            if value < 0:
                raise ValidationError(field, value, "must not be negative")
        if len(padchar) != 1:
            raise ValidationError("padchar", padchar, f"must be exactly one byte, got {len(padchar)}")

        if padchar == b"\t":
            # tab padding enforces left-alignment
            flags &= ~AlignFlag.ALIGN_RIGHT

        self._output = output
        self.minwidth = minwidth
        self.tabwidth = tabwidth
        self.padding = padding
        self.padchar = padchar
        self.flags = flags
        self._reset()

    def _reset(self) -> None:
        self._buf = bytearray()
        self._pos = 0
        self._cell = _Cell()
        self._end_char = 0
        self._lines: list[list[_Cell]] = [[]]
        self._widths: list[int] = []

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def _write0(self, data: bytes) -> None:
        if data:
            self._output.write(data)

    def _write_padding(self, textw: int, cellw: int, use_tabs: bool) -> None:
        if self.padchar == b"\t" or use_tabs:
            if self.tabwidth == 0:
                return  # tabs have no width, can't pad with them
            # round cellw up to a multiple of tabwidth
            cellw = (cellw + self.tabwidth - 1) // self.tabwidth * self.tabwidth
            n = cellw - textw
            if n < 0:
                raise RuntimeError(f"negative tab padding: cell {cellw}, text {textw}")
            self._write0(b"\t" * ((n + self.tabwidth - 1) // self.tabwidth))
            return

        self._write0(self.padchar * (cellw - textw))

    def _write_lines(self, pos: int, line0: int, line1: int) -> int:
        align_right = bool(self.flags & AlignFlag.ALIGN_RIGHT)
        debug = bool(self.flags & AlignFlag.DEBUG)

        for i in range(line0, line1):
            line = self._lines[i]

            # leading empty cells are padded with tabs under TAB_INDENT
            use_tabs = bool(self.flags & AlignFlag.TAB_INDENT)

            for j, cell in enumerate(line):
                if j > 0 and debug:
                    self._write0(_VBAR)

                if cell.size == 0:
                    if j < len(self._widths):
                        self._write_padding(cell.width, self._widths[j], use_tabs)
                    continue

                use_tabs = False
                text = bytes(self._buf[pos : pos + cell.size])
                pos += cell.size
                if align_right:
                    if j < len(self._widths):
                        self._write_padding(cell.width, self._widths[j], False)
                    self._write0(text)
                else:
                    self._write0(text)
                    if j < len(self._widths):
                        self._write_padding(cell.width, self._widths[j], False)

            if i + 1 == len(self._lines):
                # last buffered line has no newline yet
                self._write0(bytes(self._buf[pos : pos + self._cell.size]))
                pos += self._cell.size
            else:
                self._write0(b"\n")
        return pos

    def _format(self, pos: int, line0: int, line1: int) -> int:
        column = len(self._widths)
        this = line0
        while this < line1:
            if column >= len(self._lines[this]) - 1:
                this += 1
                continue

            # this line has a cell in this column; everything above it is
            # fully determined by the widths found so far
            pos = self._write_lines(pos, line0, this)
            line0 = this

            width = self.minwidth
            discardable = True
            while this < line1:
                line = self._lines[this]
                if column >= len(line) - 1:
                    break
                cell = line[column]
                width = max(width, cell.width + self.padding)
                if cell.width > 0 or cell.htab:
                    discardable = False
                this += 1

            if discardable and self.flags & AlignFlag.DISCARD_EMPTY:
                width = 0

            self._widths.append(width)
            pos = self._format(pos, line0, this)
            self._widths.pop()
            line0 = this
            this += 1

        return self._write_lines(pos, line0, line1)

    # ------------------------------------------------------------------
    # Cell collection
    # ------------------------------------------------------------------

    def _append(self, data: bytes) -> None:
        self._buf += data
        self._cell.size += len(data)

    def _update_width(self) -> None:
        self._cell.width += _text_width(bytes(self._buf[self._pos :]))
        self._pos = len(self._buf)

    def _start_escape(self, ch: int) -> None:
        if ch == ESCAPE:
            self._end_char = ESCAPE
        elif ch == _LT:
            self._end_char = _GT
        elif ch == _AMP:
            self._end_char = _SEMI

    def _end_escape(self) -> None:
        if self._end_char == ESCAPE:
            self._update_width()
            if not self.flags & AlignFlag.STRIP_ESCAPE:
                self._cell.width -= 2  # escape bytes have no width
        elif self._end_char == _SEMI:
            self._cell.width += 1  # entity counts as one character
        # tags have zero width
        self._pos = len(self._buf)
        self._end_char = 0

    def _terminate_cell(self, htab: bool) -> int:
        self._cell.htab = htab
        line = self._lines[-1]
        line.append(self._cell)
        self._cell = _Cell()
        return len(line)

    def _flush_buffered(self) -> None:
        if self._cell.size > 0:
            if self._end_char != 0:
                # unterminated escape at end of input
                self._end_escape()
            self._terminate_cell(False)

        self._format(0, 0, len(self._lines))
        self._reset()

    def write(self, data: bytes) -> int:
        """
        Buffer text, splitting it into cells.

        Args:
            data: Raw text; tabs and vertical tabs end cells, newlines and
                form feeds end cells and lines

        Returns:
            Number of bytes consumed (always len(data))
        """
        n = 0
        for i, ch in enumerate(data):
            if self._end_char == 0:
                if ch in _CELL_TERMINATORS:
                    self._append(data[n:i])
                    self._update_width()
                    n = i + 1
                    ncells = self._terminate_cell(ch == _TAB)
                    if ch in (_NEWLINE, _FORMFEED):
                        self._lines.append([])
                        # a single-cell line has no effect on the columns of
                        # the lines after it, so the block can be emitted now
                        if ch == _FORMFEED or ncells == 1:
                            self._flush_buffered()
                            if ch == _FORMFEED and self.flags & AlignFlag.DEBUG:
                                self._write0(_HBAR)

                elif ch == ESCAPE:
                    self._append(data[n:i])
                    self._update_width()
                    n = i
                    if self.flags & AlignFlag.STRIP_ESCAPE:
                        n += 1
                    self._start_escape(ch)

                elif ch in (_LT, _AMP) and self.flags & AlignFlag.FILTER_HTML:
                    self._append(data[n:i])
                    self._update_width()
                    n = i
                    self._start_escape(ch)

            elif ch == self._end_char:
                j = i + 1
                if ch == ESCAPE and self.flags & AlignFlag.STRIP_ESCAPE:
                    j = i
                self._append(data[n:j])
                n = i + 1
                self._end_escape()

        self._append(data[n:])
        return len(data)

    def flush(self) -> None:
        """Format and emit everything buffered so far."""
        self._flush_buffered()


def align_text(
    data: bytes,
    minwidth: int = 0,
    tabwidth: int = 8,
    padding: int = 1,
    padchar: bytes = b" ",
    flags: AlignFlag = AlignFlag.NONE,
) -> bytes:
    """Align ``data`` in one shot and return the aligned bytes."""
    out = io.BytesIO()
    writer = TabWriter(out, minwidth, tabwidth, padding, padchar, flags)
    writer.write(data)
    writer.flush()
    result = out.getvalue()
    logger.debug("Aligned %d input bytes into %d output bytes", len(data), len(result))
    return result


__all__ = ["ESCAPE", "TabWriter", "align_text"]
