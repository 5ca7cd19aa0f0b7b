# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Unit tests for near-miss symbol suggestions."""

import pytest

from asmwin.hints import label_names, suggest_symbols
from asmwin.listing import iter_listing_lines

LISTING = [
    "\t.text",
    "_Z12sum_elementsRKSt6vectorIfSaIfEE:",
    ".LFB0:",
    "\tret",
    "main:",
    ".L3:",
    "?sum_elements@@YAMAEBV?$vector@MV?$allocator@M@std@@@std@@@Z PROC",
    "$LN3:",
    "\tnop",
]


def test_hint_001_label_names_skip_local_and_indented_labels() -> None:
    names = label_names(iter_listing_lines(LISTING))

    assert names == [
        "_Z12sum_elementsRKSt6vectorIfSaIfEE",
        "main",
        "?sum_elements@@YAMAEBV?$vector@MV?$allocator@M@std@@@std@@@Z",
    ]


def test_hint_002_suggest_symbols_ranks_closest_label_first() -> None:
    suggestions = suggest_symbols(
        iter_listing_lines(LISTING), "_Z12sum_elementsRKSt6vectorIdSaIdEE"
    )

    assert suggestions[0] == "_Z12sum_elementsRKSt6vectorIfSaIfEE"
    assert "main" not in suggestions


def test_hint_003_suggest_symbols_respects_limit() -> None:
    suggestions = suggest_symbols(
        iter_listing_lines(LISTING), "sum", limit=0, threshold=0.0
    )

    assert suggestions == []


def test_hint_004_suggest_symbols_rejects_invalid_threshold() -> None:
    with pytest.raises(ValueError):
        suggest_symbols(iter_listing_lines(LISTING), "sum", threshold=1.5)
