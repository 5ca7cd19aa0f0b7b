# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Instruction window extraction from assembly listings."""

import enum
import itertools
import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path

from asmwin.listing import ListingLine, iter_listing_lines, open_listing
from asmwin.toolchains import ToolchainProfile

logger = logging.getLogger(__name__)

BLANK_TERMINATOR = "blank"


class ScanState(enum.Enum):
    """Scanner states for one extraction pass."""

    SEEKING = "seeking"
    COLLECTING = "collecting"
    DONE = "done"


@dataclass(frozen=True)
class ExtractionResult:
    """Represent the instruction window found in a listing.

    Attributes:
        instructions: Indented lines of the region, in source order.
        symbol_line: Index of the line that matched the symbol, or ``None``.
        end_line: Index of the line that closed the region, or ``None`` when
            the input ended first.
        terminator: ``"blank"``, the end marker that matched, or ``None``.
    """

    instructions: tuple[ListingLine, ...] = ()
    symbol_line: int | None = None
    end_line: int | None = None
    terminator: str | None = None

    @property
    def lines(self) -> list[str]:
        return [line.text for line in self.instructions]

    @property
    def count(self) -> int:
        return len(self.instructions)

    @property
    def symbol_found(self) -> bool:
        return self.symbol_line is not None


class WindowScanner:
    """Two-phase scanner locating one function's instruction region.

    ``SEEKING`` looks for the first line containing the symbol. ``COLLECTING``
    keeps indented lines until a blank line or an end marker. ``DONE`` ignores
    all further input.
    """

    def __init__(self, symbol: str, end_markers: Iterable[str] = ()) -> None:
        """Initialize scanner.

        Args:
            symbol: Encoded function name, matched as a substring.
            end_markers: Patterns closing the region. Empty patterns are ignored.

        Raises:
            ValueError: If ``symbol`` is empty.
        """
        if not symbol:
            raise ValueError("symbol must not be empty.")
        self._symbol = symbol
        self._end_markers = tuple(sorted(marker for marker in end_markers if marker))
        self._state = ScanState.SEEKING
        self._instructions: list[ListingLine] = []
        self._symbol_line: int | None = None
        self._end_line: int | None = None
        self._terminator: str | None = None

    @property
    def state(self) -> ScanState:
        return self._state

    def feed(self, line: ListingLine) -> ScanState:
        """Advance the scanner by one line.

        Args:
            line: Next listing line.

        Returns:
            State after consuming the line.
        """
        if self._state is ScanState.SEEKING:
            if self._symbol in line.text:
                self._symbol_line = line.index
                self._state = ScanState.COLLECTING
                logger.debug(f"Symbol matched (line={line.index})")
        elif self._state is ScanState.COLLECTING:
            terminator = self._match_terminator(line)
            if terminator is not None:
                self._end_line = line.index
                self._terminator = terminator
                self._state = ScanState.DONE
                logger.debug(
                    f"Region closed (line={line.index} terminator={terminator!r})"
                )
            elif line.is_indented:
                self._instructions.append(line)
        return self._state

    def result(self) -> ExtractionResult:
        """Return the window collected so far."""
        return ExtractionResult(
            instructions=tuple(self._instructions),
            symbol_line=self._symbol_line,
            end_line=self._end_line,
            terminator=self._terminator,
        )

    def _match_terminator(self, line: ListingLine) -> str | None:
        if line.is_blank:
            return BLANK_TERMINATOR
        for marker in self._end_markers:
            if marker in line.text:
                return marker
        return None


def extract(
    source: Iterable[str] | Iterable[ListingLine],
    symbol: str,
    end_markers: Iterable[str] = (),
) -> ExtractionResult:
    """Extract the instruction window of ``symbol`` from a listing.

    Only the first occurrence of the symbol opens a region. Input after the
    region closes is not read. A missing symbol or a region running to the end
    of input yields whatever was collected, possibly nothing.

    Args:
        source: Listing lines, either raw text or ``ListingLine`` objects.
        symbol: Encoded function name.
        end_markers: Patterns closing the region; a blank line always does.

    Returns:
        Extraction result.
    """
    scanner = WindowScanner(symbol=symbol, end_markers=end_markers)
    for line in _as_listing_lines(source):
        if scanner.feed(line) is ScanState.DONE:
            break
    result = scanner.result()
    if not result.symbol_found:
        logger.info(f"Symbol not found in listing (symbol={symbol})")
    elif result.terminator is None:
        logger.info(
            f"Region ran to end of listing (symbol={symbol} count={result.count})"
        )
    return result


def extract_listing(path: Path, profile: ToolchainProfile) -> ExtractionResult:
    """Extract a profile's instruction window from a listing file.

    Args:
        path: Listing file path.
        profile: Resolved toolchain profile.

    Returns:
        Extraction result. The file is closed before this returns.

    Raises:
        ResourceUnavailableError: If the listing cannot be opened.
    """
    with open_listing(path) as lines:
        result = extract(lines, symbol=profile.symbol, end_markers=profile.end_markers)
    logger.info(
        f"Extraction completed (path={path} toolchain={profile.name} "
        f"count={result.count} symbol_found={result.symbol_found})"
    )
    return result


def _as_listing_lines(
    source: Iterable[str] | Iterable[ListingLine],
) -> Iterator[ListingLine]:
    iterator = iter(source)
    first = next(iterator, None)
    if first is None:
        return
    rest = itertools.chain([first], iterator)
    if isinstance(first, ListingLine):
        yield from rest  # type: ignore[misc]
    else:
        yield from iter_listing_lines(rest)  # type: ignore[arg-type]
