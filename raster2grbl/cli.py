#!/usr/bin/env python3
"""Command-line front end for raster2grbl.

Stays a thin wrapper: it loads settings, calls the library, and maps the
outcome to exit codes (0 ok, 2 failed, 1 usage).
"""

import argparse
import logging
from pathlib import Path

from .converter import GrblRasterConverter
from .errors import Raster2GrblError
from .job_log import save_job_record
from .patterns import PatternService
from .settings import SettingsStore, default_config_path

logger = logging.getLogger("raster2grbl")


def _load_settings(path):
    return SettingsStore.load_or_default(path or default_config_path())


def cmd_convert(args) -> int:
    try:
        settings = _load_settings(args.config)
    except Raster2GrblError as exc:
        print(exc)
        return 2
    converter = GrblRasterConverter(settings, base_dir=args.base_dir)

    last_pct = -1

    def progress(fraction: float):
        nonlocal last_pct
        pct = int(fraction * 100)
        if pct // 10 != last_pct // 10:
            logger.info("Progress: %d%%", pct)
        last_pct = pct

    out = converter.convert(args.image, output=args.output, progress=progress)
    print(out["message"])
    if not out["ok"]:
        return 2

    if args.record_dir:
        try:
            cfg, _ = save_job_record(args.record_dir, args.image, settings.to_profile(), out)
        except OSError as exc:
            logger.error("Cannot save job record in %s: %s", args.record_dir, exc)
            return 2
        logger.info("Job record: %s", cfg)
    return 0


def cmd_init_config(args) -> int:
    path = Path(args.config) if args.config else default_config_path()
    if path.exists() and not args.force:
        print(f"{path} already exists (use --force to overwrite)")
        return 2
    out = GrblRasterConverter(SettingsStore.defaults()).save_settings(path)
    print(out["message"])
    return 0 if out["ok"] else 2


def cmd_show_config(args) -> int:
    try:
        settings = _load_settings(args.config)
    except Raster2GrblError as exc:
        print(exc)
        return 2
    print(f"# {settings.path}")
    for key in settings:
        print(f"{key} = {settings[key]}")
    return 0


def cmd_pattern(args) -> int:
    try:
        profile = _load_settings(args.config).to_profile()
        img = PatternService.generate(
            args.name, kerf_width=profile.kerf_width, size_mm=args.size_mm, steps=args.steps
        )
    except (Raster2GrblError, ValueError) as exc:
        print(exc)
        return 2
    img.save(args.output)
    print(f"Generated {args.output} ({img.width}x{img.height} px)")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="raster2grbl", description="Convert 8-bit grayscale images to GRBL laser G-code"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    parser.add_argument(
        "--config", help=f"settings file (default: ~/{default_config_path().name})"
    )
    sub = parser.add_subparsers(dest="cmd")

    p = sub.add_parser("convert", help="convert an image to G-code")
    p.add_argument("image")
    p.add_argument("-o", "--output", help="output file (default: outfilename setting)")
    p.add_argument("--base-dir", help="directory for relative outfilename (default: $HOME)")
    p.add_argument("--record-dir", help="save a JSON job record and image copy here")
    p.set_defaults(func=cmd_convert)

    p = sub.add_parser("init-config", help="write the default settings file")
    p.add_argument("--force", action="store_true")
    p.set_defaults(func=cmd_init_config)

    p = sub.add_parser("show-config", help="print the effective settings")
    p.set_defaults(func=cmd_show_config)

    p = sub.add_parser("pattern", help="generate a calibration image")
    p.add_argument("name", choices=PatternService.PATTERNS)
    p.add_argument("-o", "--output", required=True)
    p.add_argument("--size-mm", type=float, default=20.0)
    p.add_argument("--steps", type=int, default=16)
    p.set_defaults(func=cmd_pattern)

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if not getattr(args, "func", None):
        parser.print_help()
        return 1
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
