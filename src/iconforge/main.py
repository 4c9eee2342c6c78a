# Copyright (c) 2026 Nate Tritle. Licensed under the MIT License.
"""Entry point for the IconForge command line."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from iconforge.core.constants import APP_NAME, APP_VERSION, MAX_WORKERS

logger = logging.getLogger("iconforge.cli")

EXIT_OK = 0
EXIT_FAILURE = 1


def _parse_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in ("true", "1", "yes", "on"):
        return True
    if lowered in ("false", "0", "no", "off"):
        return False
    raise argparse.ArgumentTypeError(f"expected true or false, got {value!r}")


def _parse_sizes(value: str) -> tuple[int, ...]:
    try:
        sizes = tuple(int(part) for part in value.split(",") if part.strip())
    except ValueError:
        raise argparse.ArgumentTypeError(f"sizes must be comma-separated integers, got {value!r}") from None
    if not sizes or any(s <= 0 for s in sizes):
        raise argparse.ArgumentTypeError(f"sizes must be positive integers, got {value!r}")
    return sizes


def _parse_workers(value: str) -> int:
    try:
        workers = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"workers must be an integer, got {value!r}") from None
    if not 1 <= workers <= MAX_WORKERS:
        raise argparse.ArgumentTypeError(f"workers must be between 1 and {MAX_WORKERS}")
    return workers


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="iconforge",
        description="Icon utility: extract/build ICO/ICNS",
    )
    parser.add_argument("--version", action="version", version=f"{APP_NAME} {APP_VERSION}")
    parser.add_argument("--debug", action="store_true", help="Verbose logging")
    parser.add_argument("--config", type=Path, default=None, help="Path to a JSON config file")
    sub = parser.add_subparsers(dest="command", required=True)

    p_extract = sub.add_parser("extract", help="Extract all frames of an .ico or .icns into PNG files")
    p_extract.add_argument("input", type=Path)
    p_extract.add_argument("out_dir", type=Path)

    p_build = sub.add_parser("build", help="Build .ico/.icns from a single base image (auto-resize)")
    p_build.add_argument("input", type=Path)
    p_build.add_argument("format", choices=["ico", "icns"])
    p_build.add_argument("output", type=Path)
    p_build.add_argument(
        "--contain", type=_parse_bool, default=None, metavar="true|false",
        help="Pad to a square (true, default) or crop to fill it (false)",
    )

    p_dir = sub.add_parser("build-dir", help="Build from a directory of images (largest used as base)")
    p_dir.add_argument("dir", type=Path)
    p_dir.add_argument("format", choices=["ico", "icns"])
    p_dir.add_argument("output", type=Path)

    for p in (p_build, p_dir):
        p.add_argument("--sizes", type=_parse_sizes, default=None, metavar="16,32,...",
                       help="Override the target edge lengths")
        p.add_argument("--workers", type=_parse_workers, default=None,
                       help="Resize sizes in parallel with N threads")

    return parser


def run(argv: list[str] | None = None) -> int:
    """Run one CLI command and return its exit code."""
    args = build_parser().parse_args(argv)

    from iconforge.utils.error_handler import IconForgeError, setup_logging

    setup_logging(debug=args.debug)

    from iconforge.builder.icon_builder import build_icon_file, build_icon_from_dir
    from iconforge.builder.icon_extractor import extract_icon_file
    from iconforge.core.config import IconForgeConfig
    from iconforge.core.models import BuildOptions, ContainerFormat, ScalingMode

    try:
        if args.command == "extract":
            written = extract_icon_file(args.input, args.out_dir)
            print(f"Extracted {len(written)} images to {args.out_dir}")
            return EXIT_OK

        config = IconForgeConfig(args.config)
        fmt = ContainerFormat.from_name(args.format)
        options = BuildOptions.from_config(config, fmt)
        if args.sizes is not None:
            options.sizes = args.sizes
        if args.workers is not None:
            options.workers = args.workers

        if args.command == "build":
            if args.contain is not None:
                options.mode = ScalingMode.from_flag(args.contain)
            build_icon_file(args.input, fmt, args.output, options)
        else:
            build_icon_from_dir(args.dir, fmt, args.output, options)
        print(f"Wrote {args.output}")
        return EXIT_OK
    except IconForgeError as e:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FAILURE


def main() -> None:
    sys.exit(run())


if __name__ == "__main__":
    main()
