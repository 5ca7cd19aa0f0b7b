# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Assembly listing line model and scoped file reader."""

import logging
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


class ResourceUnavailableError(RuntimeError):
    """Represent a listing file that cannot be opened."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Listing unavailable: {path} ({reason})")
        self.path = path
        self.reason = reason


@dataclass(frozen=True)
class ListingLine:
    """Represent one text line of an assembly listing.

    Attributes:
        index: Line number in the listing (1-based), for diagnostics only.
        text: Raw line content without the line terminator.
    """

    index: int
    text: str

    @property
    def is_blank(self) -> bool:
        """Return True for empty lines."""
        return self.text == ""

    @property
    def is_indented(self) -> bool:
        """Return True when the line starts with a space or tab."""
        return self.text[:1] in {" ", "\t"}


def iter_listing_lines(lines: Iterable[str], start: int = 1) -> Iterator[ListingLine]:
    """Wrap raw text lines into listing lines.

    Args:
        lines: Raw text lines, with or without trailing line terminators.
        start: Index assigned to the first line.

    Yields:
        Listing lines in source order.
    """
    for index, text in enumerate(lines, start=start):
        yield ListingLine(index=index, text=text.rstrip("\r\n"))


@contextmanager
def open_listing(path: Path) -> Iterator[Iterator[ListingLine]]:
    """Open a listing file for one scan.

    The file stays open only while the ``with`` block runs and is closed on
    both normal exit and error.

    Args:
        path: Listing file path.

    Yields:
        Lazy iterator over the file's lines.

    Raises:
        ResourceUnavailableError: If the file cannot be opened.
    """
    try:
        handle = path.open("r", encoding="utf-8", errors="replace")
    except OSError as exc:
        logger.warning(f"Failed to open listing (path={path} error={exc})")
        raise ResourceUnavailableError(path=path, reason=str(exc)) from exc
    logger.debug(f"Listing opened (path={path})")
    try:
        yield iter_listing_lines(handle)
    finally:
        handle.close()
        logger.debug(f"Listing closed (path={path})")
