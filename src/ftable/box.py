"""
Box-drawing overlay for aligned, sentinel-marked text.

Column widths are decided by the alignment engine, so the renderer never
computes them. Instead it scans the aligned lines for the sentinel
character: every index where a sentinel appears on any line is a column
boundary. Rules get a junction glyph at each boundary, and data lines get
a vertical bar wherever the sentinel actually survives.

Example output (plain box with -rowlines):
    ┌─────┬───┐
    │ a   │ b │
    ├─────┼───┤
    │ ccc │ d │
    └━━━━━┴━━━┘
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import NamedTuple

from .adapter import SENTINEL_CHAR

logger = logging.getLogger(__name__)

_ENCODING = "utf-8"
_ERRORS = "surrogateescape"


class RuleStyle(NamedTuple):
    """Glyphs for one horizontal rule."""

    left: str
    fill: str
    junction: str
    right: str


TOP_RULE = RuleStyle("┌", "─", "┬", "┐")
HEADER_TOP_RULE = RuleStyle("┏", "━", "┳", "┓")
HEADER_BOTTOM_RULE = RuleStyle("┡", "━", "╇", "┩")
ROW_RULE = RuleStyle("├", "─", "┼", "┤")
BOTTOM_RULE = RuleStyle("└", "━", "┴", "┘")

LIGHT_VERTICAL = "│"
HEAVY_VERTICAL = "┃"


@dataclass(frozen=True)
class BoxOptions:
    """
    Box overlay configuration.

    Attributes:
        header: Render the first line as a heavy-bordered header block
        rowlines: Draw a light rule between consecutive data rows
    """

    header: bool = False
    rowlines: bool = False


def split_lines(aligned: bytes) -> list[str]:
    """
    Decode aligned output into lines of code points.

    A final line terminator ends the last line rather than starting an
    empty one, so empty input gives no lines at all.
    """
    lines = aligned.decode(_ENCODING, _ERRORS).split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


def find_separator_columns(lines: Iterable[str]) -> frozenset[int]:
    """Collect every index, on any line, that holds a sentinel."""
    return frozenset(
        i for line in lines for i, ch in enumerate(line) if ch == SENTINEL_CHAR
    )


def render_width(lines: Sequence[str]) -> int:
    """Width of the box interior: the longest line plus one."""
    return max((len(line) for line in lines), default=0) + 1


def apply_separators(text: str, columns: Iterable[int], glyph: str, force: bool = False) -> str:
    """
    Replace characters at separator columns with ``glyph``.

    Args:
        text: A rule fill or a data line
        columns: Separator column indices
        glyph: Replacement character
        force: Replace unconditionally (rules); otherwise only positions
            still holding a sentinel are replaced (data lines)
    """
    chars = list(text)
    for i in columns:
        if i < len(chars) and (force or chars[i] == SENTINEL_CHAR):
            chars[i] = glyph
    return "".join(chars)


class BoxRenderer:
    """Draw a box around aligned, sentinel-marked text."""

    def __init__(self, options: BoxOptions | None = None, padchar: bytes = b" ") -> None:
        """
        Initialize the renderer.

        Args:
            options: Header and row-rule settings (defaults to a plain box)
            padchar: Pad character used to widen short lines; a tab pad
                character pads with spaces since tabs have no fixed width
        """
        self._options = options or BoxOptions()
        pad = padchar.decode(_ENCODING, _ERRORS)
        self._pad = " " if pad == "\t" else pad

    def _rule(self, style: RuleStyle, columns: frozenset[int], width: int) -> str:
        fill = apply_separators(style.fill * width, columns, style.junction, force=True)
        return f"{style.left}{style.fill}{fill}{style.right}"

    def _row(self, line: str, columns: frozenset[int], width: int, vertical: str) -> str:
        line = apply_separators(line, columns, vertical)
        if len(line) < width:
            line += self._pad * (width - len(line))
        return f"{vertical} {line}{vertical}"

    def render_lines(self, lines: Sequence[str]) -> list[str]:
        """
        Box already-split aligned lines.

        Args:
            lines: Aligned lines, sentinel-marked at field boundaries

        Returns:
            Output lines without terminators, rules included
        """
        columns = find_separator_columns(lines)
        width = render_width(lines)
        header = self._options.header
        logger.debug(
            "Boxing %d lines: %d separator columns, render width %d",
            len(lines),
            len(columns),
            width,
        )

        out: list[str] = []
        if not lines:
            out.append(self._rule(TOP_RULE, columns, width))

        for n, line in enumerate(lines):
            if n == 0 and header:
                out.append(self._rule(HEADER_TOP_RULE, columns, width))
                out.append(self._row(line, columns, width, HEAVY_VERTICAL))
                out.append(self._rule(HEADER_BOTTOM_RULE, columns, width))
            elif n == 0:
                out.append(self._rule(TOP_RULE, columns, width))
                out.append(self._row(line, columns, width, LIGHT_VERTICAL))
            else:
                # the header's bottom rule already separates it from row 1
                if self._options.rowlines and (n > 1 or not header):
                    out.append(self._rule(ROW_RULE, columns, width))
                out.append(self._row(line, columns, width, LIGHT_VERTICAL))

        out.append(self._rule(BOTTOM_RULE, columns, width))
        return out

    def render(self, aligned: bytes) -> bytes:
        """Box aligned output and return the encoded result."""
        lines = self.render_lines(split_lines(aligned))
        return "".join(f"{line}\n" for line in lines).encode(_ENCODING, _ERRORS)


__all__ = [
    "BOTTOM_RULE",
    "HEADER_BOTTOM_RULE",
    "HEADER_TOP_RULE",
    "HEAVY_VERTICAL",
    "LIGHT_VERTICAL",
    "ROW_RULE",
    "TOP_RULE",
    "BoxOptions",
    "BoxRenderer",
    "RuleStyle",
    "apply_separators",
    "find_separator_columns",
    "render_width",
    "split_lines",
]
