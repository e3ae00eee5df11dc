"""Command-line interface for ftable."""

import logging
import sys
from typing import BinaryIO, NoReturn

import click

from .adapter import AlignOptions, align, read_input, write_output
from .box import BoxOptions, BoxRenderer
from .config import FLAGS_ENV_VAR, configure_logging, resolve_flags
from .exceptions import ConfigurationError, InputOutputError
from .flags import FLAG_NAMES, parse_flags

logger = logging.getLogger(__name__)


def _binary_stream(name: str) -> BinaryIO:
    """Return the byte stream under sys.stdin or sys.stdout."""
    stream: BinaryIO = getattr(sys, name).buffer
    return stream


def _fail(error: Exception) -> NoReturn:
    click.echo(f"✗ {error}", err=True)
    sys.exit(1)


@click.command(context_settings={"help_option_names": ["-h", "-help", "--help"]})
@click.version_option(package_name="ftable")
@click.option(
    "-box",
    "--box",
    "box",
    is_flag=True,
    help="Box the output with box-drawing characters",
)
@click.option(
    "-header",
    "--header",
    "header",
    is_flag=True,
    help="Render the first line of boxed output as a header box (requires -box)",
)
@click.option(
    "-rowlines",
    "--rowlines",
    "rowlines",
    is_flag=True,
    help="Insert a rule between rows of boxed output (requires -box)",
)
@click.option(
    "-minwidth",
    "--minwidth",
    "minwidth",
    type=int,
    default=0,
    show_default=True,
    help="Minimum width of a column in bytes",
)
@click.option(
    "-tabwidth",
    "--tabwidth",
    "tabwidth",
    type=int,
    default=8,
    show_default=True,
    help="Width of a tab in bytes",
)
@click.option(
    "-padding",
    "--padding",
    "padding",
    type=int,
    default=1,
    show_default=True,
    help="Padding added to each cell",
)
@click.option(
    "-padchar",
    "--padchar",
    "padchar",
    default=" ",
    help="Single-byte padding character (default: space)",
)
@click.option(
    "-flags",
    "--flags",
    "flags",
    default=None,
    help=(
        f"Comma-separated combination of the flags: {', '.join(FLAG_NAMES)} "
        f"(default: ${FLAGS_ENV_VAR})"
    ),
)
def cli(
    box: bool,
    header: bool,
    rowlines: bool,
    minwidth: int,
    tabwidth: int,
    padding: int,
    padchar: str,
    flags: str | None,
) -> None:
    """Align tab-delimited text from stdin into columns.

    All of stdin is read before anything is written, since column widths
    depend on the whole input. With -box the aligned text is wrapped in
    box-drawing characters.
    """
    try:
        options = AlignOptions(
            minwidth=minwidth,
            tabwidth=tabwidth,
            padding=padding,
            padchar=padchar,
            flags=parse_flags(resolve_flags(flags)),
        )
    except ConfigurationError as e:
        _fail(e)

    if (header or rowlines) and not box:
        logger.warning("-header and -rowlines have no effect without -box")

    try:
        data = read_input(_binary_stream("stdin"))
    except InputOutputError as e:
        _fail(e)

    output = align(data, options, box=box)
    if box:
        renderer = BoxRenderer(BoxOptions(header=header, rowlines=rowlines), options.pad_byte)
        output = renderer.render(output)

    try:
        write_output(_binary_stream("stdout"), output)
    except InputOutputError as e:
        _fail(e)


def main() -> None:
    """Console script entry point."""
    try:
        configure_logging()
    except ConfigurationError as e:
        _fail(e)
    cli()
