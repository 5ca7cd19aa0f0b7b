# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Timed summation workload."""

import logging
import sys
import time
from array import array
from dataclasses import dataclass
from typing import TextIO

logger = logging.getLogger(__name__)

DEFAULT_WORKLOAD_SIZE = 10_000_000


@dataclass(frozen=True)
class WorkloadResult:
    """Represent one timed workload run.

    Attributes:
        value: Sum of all elements.
        elapsed_seconds: Wall-clock duration of the summation loop.
        size: Number of summed elements.
    """

    value: float
    elapsed_seconds: float
    size: int


def run_workload(
    size: int = DEFAULT_WORKLOAD_SIZE, stdout: TextIO | None = None
) -> WorkloadResult:
    """Sum ``size`` doubles set to ``1.0`` and time the loop.

    Buffer allocation happens before the clock starts. The computed value is
    written to ``stdout`` as ``Sum: <value>``.

    Args:
        size: Number of elements.
        stdout: Output stream; standard output when omitted.

    Returns:
        Workload value and elapsed time.

    Raises:
        ValueError: If ``size`` is not positive.
    """
    if size <= 0:
        raise ValueError("size must be > 0.")
    data = array("d", [1.0]) * size

    total = 0.0
    start = time.perf_counter()
    for element in data:
        total += element
    elapsed = time.perf_counter() - start

    stream = stdout if stdout is not None else sys.stdout
    stream.write(f"Sum: {total}\n")
    logger.debug(f"Workload completed (size={size} elapsed_seconds={elapsed:.6f})")
    return WorkloadResult(value=total, elapsed_seconds=elapsed, size=size)
