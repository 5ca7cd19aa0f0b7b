# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Toolchain symbol naming table for the probed workload function.

The probed function is ``double sum_elements(const std::vector<double>&)``.
Each compiler family spells that signature differently in its listing and
closes a function body with a different directive, so both the symbol and the
region end markers are looked up per toolchain instead of being fixed in the
extractor.
"""

import logging
import platform
from collections.abc import Iterable
from dataclasses import dataclass, replace

logger = logging.getLogger(__name__)

ITANIUM_SYMBOL = "_Z12sum_elementsRKSt6vectorIdSaIdEE"
LIBCXX_DARWIN_SYMBOL = "__Z12sum_elementsRKNSt3__16vectorIdNS_9allocatorIdEEEE"
MSVC_SYMBOL = "?sum_elements@@YANAEBV?$vector@NV?$allocator@N@std@@@std@@@Z"


class UnknownToolchainError(ValueError):
    """Represent a toolchain name missing from the naming table."""


@dataclass(frozen=True)
class ToolchainProfile:
    """Represent a resolved symbol and end-marker pair for one toolchain.

    Attributes:
        name: Toolchain identifier.
        symbol: Encoded name of the probed function in this toolchain's listing.
        end_markers: Patterns that close the function's instruction region.
        description: Human-readable summary.
    """

    name: str
    symbol: str
    end_markers: frozenset[str]
    description: str = ""


def _markers(patterns: Iterable[str]) -> frozenset[str]:
    return frozenset(pattern for pattern in patterns if pattern)


TOOLCHAINS: dict[str, ToolchainProfile] = {
    "gcc": ToolchainProfile(
        name="gcc",
        symbol=ITANIUM_SYMBOL,
        end_markers=_markers([".cfi_endproc", ".size"]),
        description="GCC, Itanium C++ ABI, ELF (g++ -S)",
    ),
    "clang": ToolchainProfile(
        name="clang",
        symbol=ITANIUM_SYMBOL,
        end_markers=_markers([".cfi_endproc", ".Lfunc_end", "# -- End function"]),
        description="Clang, Itanium C++ ABI, ELF (clang++ -S)",
    ),
    "clang-darwin": ToolchainProfile(
        name="clang-darwin",
        symbol=LIBCXX_DARWIN_SYMBOL,
        end_markers=_markers([".cfi_endproc", "; -- End function"]),
        description="Apple Clang, libc++, Mach-O (clang++ -S)",
    ),
    "mingw": ToolchainProfile(
        name="mingw",
        symbol=ITANIUM_SYMBOL,
        end_markers=_markers([".seh_endproc", ".cfi_endproc"]),
        description="MinGW-w64 GCC, Itanium C++ ABI, PE/COFF",
    ),
    "msvc": ToolchainProfile(
        name="msvc",
        symbol=MSVC_SYMBOL,
        end_markers=_markers(["ENDP"]),
        description="MSVC, Microsoft C++ ABI (cl /FA)",
    ),
}


def available_toolchains() -> list[str]:
    """Return the sorted names of built-in toolchain profiles."""
    return sorted(TOOLCHAINS)


def get_profile(name: str) -> ToolchainProfile:
    """Look up a built-in toolchain profile.

    Args:
        name: Toolchain identifier.

    Returns:
        Matching profile.

    Raises:
        UnknownToolchainError: If the name is not in the table.
    """
    try:
        return TOOLCHAINS[name]
    except KeyError:
        raise UnknownToolchainError(
            f"Unknown toolchain: {name} (available: {', '.join(available_toolchains())})"
        ) from None


def default_toolchain(system: str | None = None) -> str:
    """Pick the toolchain that usually produces listings on a platform.

    Args:
        system: Platform name as reported by ``platform.system()``. Detected
            from the running interpreter when omitted.

    Returns:
        Toolchain identifier.
    """
    system = system if system is not None else platform.system()
    if system == "Windows":
        name = "msvc"
    elif system == "Darwin":
        name = "clang-darwin"
    else:
        name = "gcc"
    logger.debug(f"Default toolchain resolved (system={system} toolchain={name})")
    return name


def custom_profile(
    symbol: str | None = None,
    end_markers: Iterable[str] | None = None,
    base: ToolchainProfile | None = None,
) -> ToolchainProfile:
    """Build a profile overriding the symbol and/or markers of a base profile.

    Args:
        symbol: Replacement symbol; the base symbol is kept when ``None``.
        end_markers: Replacement marker set; the base set is kept when ``None``.
        base: Profile to start from. A nameless empty profile when omitted.

    Returns:
        Derived profile. Empty marker patterns are dropped.
    """
    profile = base or ToolchainProfile(name="custom", symbol="", end_markers=frozenset())
    changes: dict[str, object] = {}
    if symbol is not None:
        changes["symbol"] = symbol
    if end_markers is not None:
        changes["end_markers"] = _markers(end_markers)
    if changes:
        changes["name"] = f"{profile.name}+custom" if base else "custom"
    return replace(profile, **changes)
