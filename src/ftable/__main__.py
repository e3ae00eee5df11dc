"""Allow ``python -m ftable``."""

from .cli import main

main()
