"""Pytest fixtures for ftable tests."""

from collections.abc import Callable

import pytest

from ftable import AlignFlag, AlignOptions, BoxOptions, BoxRenderer, align

BoxFn = Callable[..., str]


@pytest.fixture
def two_by_two() -> str:
    """A two-column table whose first column needs padding."""
    return "a\tb\nccc\td\n"


@pytest.fixture
def boxed() -> BoxFn:
    """Align and box text, returning the decoded table."""

    def _boxed(
        text: str,
        header: bool = False,
        rowlines: bool = False,
        flags: AlignFlag = AlignFlag.NONE,
        **align_options: object,
    ) -> str:
        options = AlignOptions(flags=flags, **align_options)  # type: ignore[arg-type]
        aligned = align(text.encode(), options, box=True)
        renderer = BoxRenderer(BoxOptions(header=header, rowlines=rowlines), options.pad_byte)
        return renderer.render(aligned).decode()

    return _boxed
