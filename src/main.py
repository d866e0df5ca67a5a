#!/usr/bin/env python3
"""Sticker Sheet -- CLI Interface.

Loads a base picture and any number of stickers, places each sticker in
the next free layer, and writes the flattened result as a PNG.

Usage:
    python -m src.main base.png --sticker star.png 10 20 [--sticker ...] [--out out.png]
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from src.app.errors import AppError
from src.app.logging import setup_logging
from src.app.settings import LOG_LEVELS, load_settings
from src.image.png import PNG
from src.pixel.palette import COLORS, get_color
from src.sticker.sheet import NO_SLOT, StickerSheet

logger = logging.getLogger(__name__)


def _non_negative_int(value: str) -> int:
    v = int(value)
    if v < 0:
        raise argparse.ArgumentTypeError(f"must be non-negative, got {v}")
    return v


def parse_args(argv: list[str] | None = None, settings=None):
    settings = settings or load_settings()
    p = argparse.ArgumentParser(description="Compose stickers onto a base picture")
    p.add_argument("base", type=Path, help="Base picture")
    p.add_argument(
        "--sticker",
        nargs=3,
        action="append",
        default=[],
        metavar=("PATH", "X", "Y"),
        help="Sticker image and its top-left position; repeat for more layers",
    )
    p.add_argument(
        "--max",
        type=_non_negative_int,
        default=None,
        help=f"Maximum number of stickers (default: number given, or {settings.max_stickers} if none)",
    )
    p.add_argument(
        "--background",
        choices=sorted(COLORS),
        default=settings.background,
        help=f"Fill for area outside the base picture (default: {settings.background})",
    )
    p.add_argument(
        "--out",
        type=Path,
        default=settings.output_dir / "sheet.png",
        help="Output PNG path (default: <output dir>/sheet.png)",
    )
    p.add_argument(
        "--log-level",
        type=str.upper,
        choices=sorted(LOG_LEVELS),
        default=settings.log_level,
        help=f"Logging level (default: {settings.log_level})",
    )
    return p.parse_args(argv)


def _parse_sticker(spec: list[str]) -> tuple[Path, int, int]:
    path, x, y = spec
    try:
        return Path(path), _non_negative_int(x), _non_negative_int(y)
    except (ValueError, argparse.ArgumentTypeError) as e:
        raise AppError(f"Bad position for sticker {path}: {e}") from None


def build_sheet(args, settings) -> StickerSheet:
    base = PNG.read_from_file(args.base)
    stickers = [_parse_sticker(s) for s in args.sticker]
    max_stickers = args.max if args.max is not None else max(len(stickers), settings.max_stickers)

    sheet = StickerSheet(base, max_stickers, background=get_color(args.background))
    print(f"Base: {args.base} ({base.width}x{base.height}) | Layers: {max_stickers}")

    for path, x, y in stickers:
        sticker = PNG.read_from_file(path)
        index = sheet.add_sticker(sticker, x, y)
        if index == NO_SLOT:
            print(f"  Skipped {path}: all {max_stickers} layers are in use")
            continue
        print(f"  [{index:2d}] {path} ({sticker.width}x{sticker.height}) at ({x}, {y})")

    return sheet


def main(argv: list[str] | None = None) -> int:
    try:
        settings = load_settings()
        args = parse_args(argv, settings)
    except AppError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    setup_logging(args.log_level)

    try:
        sheet = build_sheet(args, settings)
        out = sheet.render()
        args.out.parent.mkdir(parents=True, exist_ok=True)
        out.write_to_file(args.out)
    except AppError as e:
        logger.debug("CLI run failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Rendered {out.width}x{out.height} -> {args.out}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
