"""
Bridge between raw tab-delimited input and the alignment engine.

When the output is going to be boxed, every field separator is first
rewritten to carry a SENTINEL byte. The alignment engine treats the
sentinel as ordinary one-column text, so after alignment the sentinel's
position in each line marks where a field boundary ended up.

The sentinel is assumed never to occur in real input. Input containing it
produces a corrupted box.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import BinaryIO

from .exceptions import InputOutputError, ValidationError
from .flags import AlignFlag
from .tabwriter import align_text

logger = logging.getLogger(__name__)

SENTINEL = 0x0E
"""Shift-out control byte used to trace column boundaries through alignment."""

SENTINEL_CHAR = chr(SENTINEL)

_SEPARATOR = b"\t"
_MARKER = bytes([SENTINEL])

# The engine pads on the right of left-aligned cells and on the left of
# right-aligned ones; the marker must sit on the side that is not padded.
_LEFT_ALIGNED_BOUNDARY = _SEPARATOR + _MARKER + b" "
_RIGHT_ALIGNED_BOUNDARY = b" " + _MARKER + b" " + _SEPARATOR


@dataclass(frozen=True)
class AlignOptions:
    """
    Alignment engine configuration.

    Attributes:
        minwidth: Minimum column width in bytes, including padding
        tabwidth: Tab expansion width
        padding: Padding added to each cell
        padchar: Single-byte padding character
        flags: Alignment behavior flags
    """

    minwidth: int = 0
    tabwidth: int = 8
    padding: int = 1
    padchar: str = " "
    flags: AlignFlag = AlignFlag.NONE

    def __post_init__(self) -> None:
        if len(self.pad_byte) != 1:
            raise ValidationError(
                "padchar",
                self.padchar,
                f"must be exactly one byte, got {len(self.pad_byte)}",
            )
        if self.minwidth < 0:
            raise ValidationError("minwidth", self.minwidth, "must not be negative")
        if self.tabwidth < 0:
            raise ValidationError("tabwidth", self.tabwidth, "must not be negative")
        if self.padding < 0:
            raise ValidationError("padding", self.padding, "must not be negative")

    @property
    def pad_byte(self) -> bytes:
        """The pad character as raw bytes."""
        return self.padchar.encode("utf-8", "surrogateescape")

    @property
    def align_right(self) -> bool:
        """True when cells are right-aligned."""
        # the engine ignores right alignment when padding with tabs
        return bool(self.flags & AlignFlag.ALIGN_RIGHT) and self.pad_byte != b"\t"


def inject_markers(data: bytes, align_right: bool = False) -> bytes:
    """
    Rewrite every field separator so it carries a sentinel marker.

    Args:
        data: Raw tab-delimited input
        align_right: Whether the engine will right-align cells

    Returns:
        Input with exactly one marker per original separator
    """
    boundary = _RIGHT_ALIGNED_BOUNDARY if align_right else _LEFT_ALIGNED_BOUNDARY
    return data.replace(_SEPARATOR, boundary)


def read_input(stream: BinaryIO, name: str = "stdin") -> bytes:
    """
    Read a stream to end-of-stream.

    Raises:
        InputOutputError: If the read fails
    """
    try:
        data = stream.read()
    except OSError as e:
        raise InputOutputError("read", name, e) from e
    logger.debug("Read %d bytes from %s", len(data), name)
    return data


def write_output(stream: BinaryIO, data: bytes, name: str = "stdout") -> None:
    """
    Write and flush the complete output.

    Raises:
        InputOutputError: If the write or flush fails
    """
    try:
        stream.write(data)
        stream.flush()
    except OSError as e:
        raise InputOutputError("write", name, e) from e
    logger.debug("Wrote %d bytes to %s", len(data), name)


def align(data: bytes, options: AlignOptions, box: bool = False) -> bytes:
    """
    Align tab-delimited input into columns.

    Args:
        data: Raw tab-delimited input
        options: Alignment engine configuration
        box: Inject sentinel markers so the result can be boxed

    Returns:
        Aligned text; sentinel-marked when ``box`` is set
    """
    if box:
        data = inject_markers(data, options.align_right)
        logger.debug("Injected sentinel markers (align_right=%s)", options.align_right)

    return align_text(
        data,
        minwidth=options.minwidth,
        tabwidth=options.tabwidth,
        padding=options.padding,
        padchar=options.pad_byte,
        flags=options.flags,
    )


__all__ = [
    "SENTINEL",
    "SENTINEL_CHAR",
    "AlignOptions",
    "align",
    "inject_markers",
    "read_input",
    "write_output",
]
