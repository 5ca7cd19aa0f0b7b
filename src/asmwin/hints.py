# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Near-miss symbol suggestions for listings that lack the probed symbol."""

import logging
import re
from collections.abc import Iterable

import Levenshtein

from asmwin.listing import ListingLine

logger = logging.getLogger(__name__)

_LABEL = re.compile(r"^(?P<name>[^\s:;#]+):")
_MSVC_PROC = re.compile(r"^(?P<name>\S+)\s+PROC\b")


def label_names(lines: Iterable[ListingLine]) -> list[str]:
    """Collect function-like label names defined at column 0.

    Args:
        lines: Listing lines.

    Returns:
        Unique names in first-seen order. Local ``.L`` labels are skipped.
    """
    seen: dict[str, None] = {}
    for line in lines:
        if line.is_indented:
            continue
        match = _LABEL.match(line.text) or _MSVC_PROC.match(line.text)
        if match is None:
            continue
        name = match.group("name")
        if name.startswith((".L", "$L", "L_")):
            continue
        seen.setdefault(name, None)
    return list(seen)


def suggest_symbols(
    lines: Iterable[ListingLine],
    symbol: str,
    limit: int = 3,
    threshold: float = 0.6,
) -> list[str]:
    """Rank listing labels by similarity to ``symbol``.

    Args:
        lines: Listing lines.
        symbol: Symbol that was not found.
        limit: Maximum number of suggestions.
        threshold: Inclusive similarity threshold in [0.0, 1.0].

    Returns:
        Suggested names, best match first.

    Raises:
        ValueError: If threshold is outside [0.0, 1.0] or limit is negative.
    """
    if threshold < 0.0 or threshold > 1.0:
        raise ValueError("threshold must be between 0.0 and 1.0.")
    if limit < 0:
        raise ValueError("limit must be >= 0.")
    scored: list[tuple[float, str]] = []
    for name in label_names(lines):
        ratio = float(Levenshtein.ratio(symbol, name))
        if ratio >= threshold:
            scored.append((ratio, name))
    scored.sort(key=lambda item: (-item[0], item[1]))
    suggestions = [name for _, name in scored[:limit]]
    logger.debug(
        f"Symbol suggestions computed (symbol={symbol} suggestions={len(suggestions)})"
    )
    return suggestions
