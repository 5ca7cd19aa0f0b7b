# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Unit tests for the timed workload."""

import io

import pytest

from asmwin.workload import run_workload


def test_wl_001_run_workload_sums_elements_and_reports_value() -> None:
    stdout = io.StringIO()

    result = run_workload(size=1000, stdout=stdout)

    assert result.value == 1000.0
    assert result.size == 1000
    assert result.elapsed_seconds >= 0.0
    assert stdout.getvalue() == "Sum: 1000.0\n"


@pytest.mark.parametrize("size", [0, -5])
def test_wl_002_run_workload_rejects_non_positive_size(size: int) -> None:
    with pytest.raises(ValueError):
        run_workload(size=size, stdout=io.StringIO())
