"""
ftable: align tab-delimited text into columns and optionally box it.

Text is aligned by an elastic tabstop engine. For boxed output, field
separators are first tagged with a sentinel byte that survives alignment,
which lets the box overlay find column boundaries it never computed.

Example:
    from ftable import AlignOptions, BoxOptions, BoxRenderer, align

    options = AlignOptions(padding=1)
    aligned = align(b"name\\tcount\\nitem-1\\t10\\n", options, box=True)
    table = BoxRenderer(BoxOptions(header=True), options.pad_byte).render(aligned)
    print(table.decode())
"""

from .adapter import SENTINEL, AlignOptions, align, inject_markers, read_input, write_output
from .box import BoxOptions, BoxRenderer
from .exceptions import (
    ConfigurationError,
    FTableError,
    InputOutputError,
    UnknownFlagError,
    ValidationError,
)
from .flags import AlignFlag, format_flags, parse_flags
from .tabwriter import TabWriter, align_text

__version__ = "0.1.0"

__all__ = [
    "SENTINEL",
    "AlignFlag",
    "AlignOptions",
    "BoxOptions",
    "BoxRenderer",
    "ConfigurationError",
    "FTableError",
    "InputOutputError",
    "TabWriter",
    "UnknownFlagError",
    "ValidationError",
    "__version__",
    "align",
    "align_text",
    "format_flags",
    "inject_markers",
    "parse_flags",
    "read_input",
    "write_output",
]
