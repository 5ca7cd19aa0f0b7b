# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""CLI harness: time the workload, then count its instructions in a listing."""

import argparse
import json
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import TextIO

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.style import Style
from rich.table import Table
from rich.text import Text

from asmwin.extractor import ExtractionResult, extract_listing
from asmwin.hints import suggest_symbols
from asmwin.listing import ResourceUnavailableError, open_listing
from asmwin.toolchains import (
    ToolchainProfile,
    UnknownToolchainError,
    available_toolchains,
    custom_profile,
    default_toolchain,
    get_profile,
)
from asmwin.workload import DEFAULT_WORKLOAD_SIZE, WorkloadResult, run_workload

logger = logging.getLogger(__name__)

AUTO_TOOLCHAIN = "auto"


class MissingRequiredInputError(RuntimeError):
    """Represent required configuration that was not supplied."""


@dataclass(frozen=True)
class ProbeConfig:
    """Represent validated probe settings.

    Attributes:
        listing_path: Assembly listing to scan.
        profile: Resolved symbol and end-marker pair.
        workload_size: Number of summed elements.
        run_workload: Whether to run the timed workload.
        output_format: ``table`` or ``json``.
        output_path: Optional JSON output file.
    """

    listing_path: Path
    profile: ToolchainProfile
    workload_size: int
    run_workload: bool
    output_format: str
    output_path: Path | None


def configure_logging(level: int = logging.INFO) -> None:
    """Configure application logging with Rich handler.

    Args:
        level: Logging severity threshold.
    """
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI parser.

    Returns:
        Configured argument parser instance.
    """
    parser = argparse.ArgumentParser(prog="asmwin")
    parser.add_argument("--listing", help="Compiler-generated assembly listing.")
    parser.add_argument(
        "--toolchain",
        default=AUTO_TOOLCHAIN,
        help=(
            "Toolchain that produced the listing: "
            f"{', '.join([AUTO_TOOLCHAIN, *available_toolchains()])}."
        ),
    )
    parser.add_argument(
        "--symbol", help="Override the encoded function name to search for."
    )
    parser.add_argument(
        "--end-marker",
        action="append",
        dest="end_markers",
        help="Override region end markers (repeatable).",
    )
    parser.add_argument(
        "--size",
        type=int,
        default=DEFAULT_WORKLOAD_SIZE,
        help="Number of elements summed by the workload.",
    )
    parser.add_argument(
        "--skip-workload",
        action="store_true",
        help="Only scan the listing.",
    )
    parser.add_argument(
        "--format",
        choices=("table", "json"),
        default="table",
        help="Output format.",
    )
    parser.add_argument(
        "--output",
        required=False,
        help="Optional output file path for raw JSON when --format json is used.",
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Enable debug logging."
    )
    return parser


def run(argv: list[str], stdout: TextIO, stderr: TextIO) -> int:
    """Run the probe.

    Args:
        argv: CLI arguments.
        stdout: Standard output stream.
        stderr: Standard error stream.

    Returns:
        Exit code.
    """
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as exc:
        if exc.code == 0:
            return 0
        logger.warning(f"Argument parsing failed (argv={argv})")
        return 2
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        config = resolve_config(args)
    except MissingRequiredInputError as exc:
        logger.warning(f"Missing required input (error={exc})")
        stderr.write(f"Missing required input: {exc}\n")
        return 2
    except (UnknownToolchainError, ValueError) as exc:
        logger.warning(f"Invalid configuration (error={exc})")
        stderr.write(f"{exc}\n")
        return 2

    console = Console(file=stdout, force_terminal=False, color_system="truecolor")
    workload: WorkloadResult | None = None
    table_output = config.output_format != "json"
    if config.run_workload:
        workload = run_workload(
            size=config.workload_size, stdout=stdout if table_output else stderr
        )
        if table_output:
            console.print(
                f"Time: {workload.elapsed_seconds} seconds", highlight=False
            )

    try:
        result = extract_listing(config.listing_path, config.profile)
    except ResourceUnavailableError as exc:
        stderr.write(f"Listing unavailable: {exc.path}\n")
        return 2

    if not result.symbol_found:
        try:
            _warn_missing_symbol(config=config)
        except ResourceUnavailableError as exc:
            stderr.write(f"Listing unavailable: {exc.path}\n")
            return 2

    if not table_output:
        payload = _build_payload(config=config, result=result, workload=workload)
        if config.output_path is not None:
            try:
                _write_json_file(payload=payload, output_path=config.output_path)
            except OSError as exc:
                logger.warning(
                    f"Failed to write JSON output file (output_path={config.output_path} error={exc})"
                )
                stderr.write(f"Failed to write JSON output file: {config.output_path}\n")
                return 2
        else:
            console.print(
                json.dumps(payload, indent=2, sort_keys=True),
                markup=False,
                emoji=False,
                highlight=False,
                soft_wrap=True,
            )
    else:
        _write_table(config=config, result=result, console=console)
        console.print(f"Instructions: {result.count}", highlight=False)
    return 0


def resolve_config(args: argparse.Namespace) -> ProbeConfig:
    """Validate parsed arguments and resolve the toolchain profile.

    Args:
        args: Parsed CLI arguments.

    Returns:
        Validated configuration.

    Raises:
        MissingRequiredInputError: If the listing path or toolchain is absent.
        UnknownToolchainError: If the toolchain is not in the naming table.
        ValueError: If a numeric setting or override is invalid.
    """
    if not args.listing:
        raise MissingRequiredInputError("--listing")
    toolchain = (args.toolchain or "").strip()
    if not toolchain:
        raise MissingRequiredInputError("--toolchain")
    if toolchain == AUTO_TOOLCHAIN:
        toolchain = default_toolchain()
    profile = get_profile(toolchain)
    if args.symbol is not None and not args.symbol:
        raise ValueError("--symbol must not be empty")
    if args.symbol is not None or args.end_markers is not None:
        profile = custom_profile(
            symbol=args.symbol, end_markers=args.end_markers, base=profile
        )
    if not args.skip_workload and args.size <= 0:
        raise ValueError("--size must be > 0")
    logger.info(
        f"Configuration resolved (toolchain={profile.name} symbol={profile.symbol} "
        f"end_markers={sorted(profile.end_markers)})"
    )
    return ProbeConfig(
        listing_path=Path(args.listing),
        profile=profile,
        workload_size=args.size,
        run_workload=not args.skip_workload,
        output_format=args.format,
        output_path=Path(args.output) if args.output else None,
    )


def _warn_missing_symbol(config: ProbeConfig) -> None:
    """Log near-miss labels for a symbol that was not found."""
    with open_listing(config.listing_path) as lines:
        suggestions = suggest_symbols(lines, config.profile.symbol)
    if suggestions:
        logger.warning(
            f"Symbol not found (symbol={config.profile.symbol} "
            f"closest={', '.join(suggestions)})"
        )
    else:
        logger.warning(f"Symbol not found (symbol={config.profile.symbol})")


def _build_payload(
    config: ProbeConfig,
    result: ExtractionResult,
    workload: WorkloadResult | None,
) -> dict[str, object]:
    return {
        "toolchain": config.profile.name,
        "symbol": config.profile.symbol,
        "symbol_found": result.symbol_found,
        "symbol_line": result.symbol_line,
        "end_line": result.end_line,
        "terminator": result.terminator,
        "count": result.count,
        "lines": result.lines,
        "value": workload.value if workload else None,
        "elapsed_seconds": workload.elapsed_seconds if workload else None,
    }


def _write_json_file(payload: dict[str, object], output_path: Path) -> None:
    """Write raw JSON payload to an output file.

    Raises:
        OSError: If directory creation or file writing fails.
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(
        json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8"
    )


def _write_table(
    config: ProbeConfig, result: ExtractionResult, console: Console
) -> None:
    """Write matched instruction lines as a table."""
    console.rule(
        escape(f"{config.listing_path} (toolchain={config.profile.name})"),
        style=Style(color="cyan"),
        characters="-",
    )
    if not result.instructions:
        return
    table = Table(show_header=True, expand=True)
    table.add_column("line", ratio=1, justify="right")
    table.add_column("instruction", ratio=8, overflow="fold")
    for line in result.instructions:
        table.add_row(str(line.index), Text(line.text.strip()))
    console.print(table)


def main() -> None:
    """Run the CLI application and exit."""
    configure_logging()
    exit_code = run(sys.argv[1:], stdout=sys.stdout, stderr=sys.stderr)
    raise SystemExit(exit_code)


if __name__ == "__main__":
    main()
