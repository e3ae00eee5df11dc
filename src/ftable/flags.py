"""Alignment engine behavior flags.

Flags are addressed on the command line by name. The name table is a
read-only mapping built once at import time.
"""

from __future__ import annotations

import enum
from types import MappingProxyType

from .exceptions import UnknownFlagError


class AlignFlag(enum.IntFlag):
    """Behavior flags understood by the alignment engine."""

    NONE = 0
    FILTER_HTML = 1
    """Ignore html tags and treat entities (``&...;``) as a single character."""
    STRIP_ESCAPE = 2
    """Strip the escape bytes that bracket escaped text segments."""
    ALIGN_RIGHT = 4
    """Right-align cell content instead of left-aligning it."""
    DISCARD_EMPTY = 8
    """Give columns made only of empty, tab-less cells zero width."""
    TAB_INDENT = 16
    """Pad leading empty cells with tabs regardless of the pad character."""
    DEBUG = 32
    """Print a vertical bar between columns."""


FLAG_NAMES: MappingProxyType[str, AlignFlag] = MappingProxyType(
    {
        "filter-html": AlignFlag.FILTER_HTML,
        "strip-escape": AlignFlag.STRIP_ESCAPE,
        "align-right": AlignFlag.ALIGN_RIGHT,
        "discard-empty": AlignFlag.DISCARD_EMPTY,
        "tab-indent": AlignFlag.TAB_INDENT,
        "debug": AlignFlag.DEBUG,
    }
)
"""CLI name to flag lookup."""


def parse_flags(value: str | None) -> AlignFlag:
    """
    Parse a comma-separated list of flag names.

    Args:
        value: Names such as ``"align-right,debug"``. ``None`` or an empty
            string means no flags.

    Returns:
        The combined flags

    Raises:
        UnknownFlagError: If any entry is not a recognized flag name
    """
    flags = AlignFlag.NONE
    if not value or not value.strip():
        return flags

    for name in value.split(","):
        name = name.strip()
        try:
            flags |= FLAG_NAMES[name]
        except KeyError:
            raise UnknownFlagError(name, tuple(sorted(FLAG_NAMES))) from None
    return flags


def format_flags(flags: AlignFlag) -> str:
    """Render flags back to their sorted, comma-separated names."""
    return ",".join(sorted(name for name, bit in FLAG_NAMES.items() if flags & bit == bit))


__all__ = ["FLAG_NAMES", "AlignFlag", "format_flags", "parse_flags"]
