"""Environment-driven defaults.

Explicit command-line values always win; the environment only fills in
options that were not given.
"""

import logging
import os
import sys

from .exceptions import ValidationError

FLAGS_ENV_VAR = "FTABLE_FLAGS"
"""Environment variable supplying the default alignment flags."""

LOG_LEVEL_ENV_VAR = "FTABLE_LOG_LEVEL"
"""Environment variable for the diagnostic log level."""

DEFAULT_LOG_LEVEL = "WARNING"

LOG_FORMAT = "%(asctime)s %(levelname)s %(message)s"


def resolve_flags(flags: str | None = None) -> str | None:
    """
    Resolve the alignment flag list.

    Args:
        flags: Explicit value from the command line, if any

    Returns:
        The explicit value, else FTABLE_FLAGS, else None
    """
    if flags is not None:
        return flags
    return os.environ.get(FLAGS_ENV_VAR)


def resolve_log_level(level: str | None = None) -> int:
    """
    Resolve the log level name to its numeric value.

    Raises:
        ValidationError: If the name is not a standard logging level
    """
    name = (level or os.environ.get(LOG_LEVEL_ENV_VAR) or DEFAULT_LOG_LEVEL).upper()
    value = logging.getLevelName(name)
    if not isinstance(value, int):
        raise ValidationError(
            "log level",
            name,
            "Expected one of DEBUG, INFO, WARNING, ERROR, CRITICAL",
        )
    return value


def configure_logging(level: str | None = None) -> None:
    """Send diagnostics to stderr so they never mix with table output."""
    logging.basicConfig(
        level=resolve_log_level(level),
        format=LOG_FORMAT,
        stream=sys.stderr,
    )
