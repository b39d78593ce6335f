# lcd_cli.py
#
# Command line entry point:
#
#   lcd-asset-code encode [--input-file PATH] [--output-dir DIR]
#   lcd-asset-code decode IMAGE [IMAGE ...]
#   lcd-asset-code show ID

from __future__ import annotations

import argparse
from dataclasses import replace
from pathlib import Path
from typing import Optional, Sequence

from lcd_config import PipelineConfig
from lcd_decode import decode_image
from lcd_digits import build_asset
from lcd_errors import AssetCodeError
from lcd_logging import configure_logging, get_logger
from lcd_pipeline import parse_row, run_from_config

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lcd-asset-code",
        description="Render 4-digit asset IDs as 256x1 LCD segment PNGs, and read them back.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every rendered asset.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    encode = subparsers.add_parser("encode", help="Render one PNG per identifier in the input file.")
    encode.add_argument("--input-file", type=str, default=None,
                        help="Input file, one 4-digit ID per line. Default=inputs/test_input.txt.")
    encode.add_argument("--output-dir", type=str, default=None,
                        help="Directory for <ID>.png files (created if absent). Default=outputs.")

    decode = subparsers.add_parser("decode", help="Read identifiers back from rendered PNGs.")
    decode.add_argument("images", nargs="+", help="Rendered 256x1 PNG file(s).")

    show = subparsers.add_parser("show", help="Print checksum and bit pattern for one identifier.")
    show.add_argument("identifier", help="4-digit asset ID.")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(verbose=args.verbose)

    try:
        if args.command == "encode":
            return _run_encode(args)
        if args.command == "decode":
            return _run_decode(args)
        if args.command == "show":
            return _run_show(args)
    except AssetCodeError as error:
        logger.error("run_failed", error=str(error))
        return 1

    parser.error(f"Unsupported command: {args.command}")
    return 2


def _run_encode(args: argparse.Namespace) -> int:
    config = PipelineConfig.from_env()
    if args.input_file:
        config = replace(config, input_file=Path(args.input_file).expanduser())
    if args.output_dir:
        config = replace(config, output_dir=Path(args.output_dir).expanduser())
    run_from_config(config)
    return 0


def _run_decode(args: argparse.Namespace) -> int:
    all_ok = True
    for path in args.images:
        res = decode_image(path)
        if res.ok:
            print("DECODE OK")
            print("  image   :", path)
            print("  value   :", res.identifier)
            print("  checksum:", res.debug.get("checksum"))
        else:
            all_ok = False
            print("DECODE REJECT")
            print("  image   :", path)
            print("  reason  :", res.reason)
    return 0 if all_ok else 1


def _run_show(args: argparse.Namespace) -> int:
    identifier = parse_row(args.identifier, 1)
    _, meta = build_asset(identifier)
    for k, v in meta.items():
        print(f"  {k}: {v}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
