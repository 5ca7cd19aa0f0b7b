# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Public import surface for the assembly window probe."""

from asmwin.extractor import (
    ExtractionResult,
    ScanState,
    WindowScanner,
    extract,
    extract_listing,
)
from asmwin.listing import ListingLine, ResourceUnavailableError, open_listing
from asmwin.toolchains import (
    ToolchainProfile,
    UnknownToolchainError,
    custom_profile,
    default_toolchain,
    get_profile,
)
from asmwin.workload import WorkloadResult, run_workload

__all__ = [
    "ExtractionResult",
    "ListingLine",
    "ResourceUnavailableError",
    "ScanState",
    "ToolchainProfile",
    "UnknownToolchainError",
    "WindowScanner",
    "WorkloadResult",
    "custom_profile",
    "default_toolchain",
    "extract",
    "extract_listing",
    "get_profile",
    "open_listing",
    "run_workload",
]
