#!/usr/bin/env python3
"""
stripcutter command line
========================

Examples:
  stripcutter detect long_page.png                     # print cut rows as JSON
  stripcutter detect page.png --sensitivity 70 --no-fast
  stripcutter split page.png -o out/ --gap 10          # write segments
  stripcutter split page.png -o out/ --cuts 800,1650   # use manual cuts
  stripcutter split *.jpg -o out/ --config strip.yaml
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional, Tuple

from . import __version__
from .config import PRESETS, DetectionParams, SliceConfig, load_config
from .pipeline import STATUS_ERROR, ProcessedImage, process_batch, process_file


def _parse_cuts(text: str) -> List[int]:
    try:
        return [int(float(v)) for v in text.replace(" ", "").split(",") if v]
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid cut list: {text!r}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="stripcutter",
        description="Split tall comic strips into panels at detected seams",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("images", nargs="+", help="Input image files")
    common.add_argument("--config", "-c", help="YAML file with detection/slicing sections")
    common.add_argument("--preset", choices=sorted(PRESETS), help="Start from a named preset")
    common.add_argument("--sensitivity", "-s", type=int, help="1-100, higher finds more cuts (default 50)")
    common.add_argument("--fast", dest="fast_mode", action="store_true", default=None,
                        help="Analyze a 200px-wide copy (default)")
    common.add_argument("--no-fast", dest="fast_mode", action="store_false",
                        help="Analyze at full resolution")
    common.add_argument("--min-height", type=int, help="Minimum segment height in pixels (default 100)")
    common.add_argument("--workers", type=int, default=2, help="Images processed in parallel")
    common.add_argument("--debug", action="store_true", help="Verbose logging")

    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("detect", parents=[common], help="Print detected cut rows as JSON")

    split = sub.add_parser("split", parents=[common], help="Cut images and write the segments")
    split.add_argument("--output", "-o", required=True, help="Output directory")
    split.add_argument("--gap", type=float, help="Pixels discarded around each cut (default 0)")
    split.add_argument("--cuts", type=_parse_cuts,
                       help="Comma separated cut rows, skips detection (single image only)")
    split.add_argument("--format", dest="image_format", help="Output extension: .jpg, .png, .webp")
    split.add_argument("--quality", type=int, help="Quality for lossy formats (default 95)")
    return parser


def resolve_params(args: argparse.Namespace) -> Tuple[DetectionParams, SliceConfig]:
    """Defaults < preset < config file < explicit command line options."""
    if args.preset:
        detection, slicing = (c.copy() for c in PRESETS[args.preset])
    else:
        detection, slicing = DetectionParams(), SliceConfig()

    if args.config:
        detection, slicing = load_config(args.config, base=(detection, slicing))

    if args.sensitivity is not None:
        detection.sensitivity = args.sensitivity
    if args.fast_mode is not None:
        detection.fast_mode = args.fast_mode
    if args.min_height is not None:
        detection.min_segment_height = args.min_height
    if args.debug:
        detection.debug = True

    for name in ("gap", "image_format", "quality"):
        value = getattr(args, name, None)
        if value is not None:
            setattr(slicing, name, value)
    if not slicing.image_format.startswith("."):
        slicing.image_format = "." + slicing.image_format
    return detection, slicing


def write_segments(record: ProcessedImage, out_dir: Path, image_format: str) -> List[Path]:
    """Write the selected segments of ``record`` next to each other in ``out_dir``."""
    out_dir.mkdir(parents=True, exist_ok=True)
    stem = Path(record.name).stem
    written = []
    for n, seg in enumerate(record.selected_segments, start=1):
        path = out_dir / f"{stem}_{n:03d}{image_format}"
        path.write_bytes(seg.data)
        written.append(path)
    return written


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(name)s - %(levelname)s - %(message)s",
    )

    try:
        detection, slicing = resolve_params(args)
    except (OSError, ValueError) as e:
        parser.error(str(e))

    if args.command == "detect":
        records = process_batch(args.images, detection, slicing, args.workers, slice_segments=False)
        report = [
            {
                "file": r.name,
                "width": r.width,
                "height": r.height,
                "status": r.status,
                "cuts": r.split_points,
                **({"error": r.error_message} if r.error_message else {}),
            }
            for r in records
        ]
        print(json.dumps(report, indent=2))
    else:
        if args.cuts is not None:
            if len(args.images) != 1:
                parser.error("--cuts needs exactly one input image")
            records = [process_file(args.images[0], detection, slicing, cuts=args.cuts)]
        else:
            records = process_batch(args.images, detection, slicing, args.workers)

        out_dir = Path(args.output)
        for record in records:
            if record.status == STATUS_ERROR:
                continue
            written = write_segments(record, out_dir, slicing.image_format)
            print(f"{record.name}: {len(written)} segment(s) -> {out_dir}")

    failed = [r for r in records if r.status == STATUS_ERROR]
    for r in failed:
        print(f"error: {r.name}: {r.error_message}", file=sys.stderr)
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
