"""
rmlines CLI

Convert reMarkable version 3/5 .rm (.lines) files to SVG, XFDF or PDF.

Usage:
    python -m rmlines <input.rm> [-o output.svg]
    python -m rmlines <document-dir> -o output.pdf
    cat input.rm | python -m rmlines -t xfdf > output.xfdf
"""

import argparse
import io
import logging
import sys
from pathlib import Path

from .parser import parse, analyze_file
from .bundle import load_bundle
from .config import RenderConfig, load_config, parse_layer_colors
from .errors import LinesError
from .renderer import render_svg
from .xfdf import render_xfdf
from .pdf_export import render_pdf

OUTPUT_TYPES = ("svg", "xfdf", "pdf")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Convert reMarkable .rm files (versions 3 and 5) to SVG, XFDF or PDF",
        prog="rmlines"
    )
    parser.add_argument(
        "input",
        nargs="?",
        type=Path,
        help="Input .rm file or document directory (default: read stdin)"
    )
    parser.add_argument(
        "-o", "--output",
        type=Path,
        help="Output file (default: stdout; required for PDF)"
    )
    parser.add_argument(
        "-t", "--to",
        dest="output_type",
        choices=OUTPUT_TYPES,
        help="Output type (default: from output extension, else svg)"
    )
    parser.add_argument(
        "-n", "--no-crop",
        action="store_true",
        help="Don't crop the page to fit the content"
    )
    parser.add_argument(
        "-c", "--colors",
        help="Colors per layer: L1-black,L1-gray,L1-white;...;L5-black,L5-gray,L5-white"
    )
    parser.add_argument(
        "-d", "--debug-dump",
        action="store_true",
        help="Write line and point data into the SVG as tooltips"
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="TOML render config"
    )
    parser.add_argument(
        "--page",
        type=int,
        default=1,
        help="Page to render as SVG for document directories (default: 1)"
    )
    parser.add_argument(
        "--analyze",
        action="store_true",
        help="Analyze file without converting"
    )
    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Suppress output"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log decoding progress"
    )
    return parser


def resolve_output_type(args) -> str:
    if args.output_type:
        return args.output_type
    if args.output and args.output.suffix:
        ext = args.output.suffix[1:].lower()
        if ext not in OUTPUT_TYPES:
            raise SystemExit(f"Unsupported output file extension {ext}")
        return ext
    return "svg"


def resolve_config(args) -> RenderConfig:
    config = load_config(args.config) if args.config else RenderConfig()
    return RenderConfig(
        layer_colors=parse_layer_colors(args.colors) if args.colors else config.layer_colors,
        auto_crop=config.auto_crop and not args.no_crop,
        debug_dump=config.debug_dump or args.debug_dump,
        highlight_color=config.highlight_color,
    )


def convert(args) -> int:
    output_type = resolve_output_type(args)
    config = resolve_config(args)

    if config.debug_dump and output_type != "svg" and not args.quiet:
        print("Warning: debug-dump only has an effect when writing SVG output", file=sys.stderr)
    if output_type == "pdf" and not args.output:
        print("Error: Output file needed for PDF output", file=sys.stderr)
        return 1

    base_pdf = None
    if args.input is None:
        pages = parse(sys.stdin.buffer).pages
    elif args.input.is_dir():
        bundle = load_bundle(args.input)
        pages = bundle.pages
        base_pdf = bundle.pdf_path if bundle.pdf_path and bundle.pdf_path.exists() else None
    else:
        with open(args.input, "rb") as f:
            pages = parse(f).pages

    if output_type == "pdf":
        drawn = render_pdf(pages, args.output, config.layer_colors, base_pdf=base_pdf)
        if not args.quiet:
            print(f"OK ({drawn} paths on {len(pages)} pages)", file=sys.stderr)
        return 0

    if output_type == "svg":
        if not 1 <= args.page <= len(pages):
            print(f"Error: Page {args.page} out of range (1-{len(pages)})", file=sys.stderr)
            return 1
        page = pages[args.page - 1]

        def write(out):
            render_svg(page, out, config.layer_colors, config.auto_crop, config.debug_dump)
    else:
        def write(out):
            render_xfdf(pages, out, config.layer_colors, config.highlight_color)

    # Render fully before touching the output so failures leave no file behind
    buffer = io.BytesIO()
    write(buffer)
    if args.output:
        args.output.write_bytes(buffer.getvalue())
    else:
        sys.stdout.buffer.write(buffer.getvalue())
        sys.stdout.flush()
    return 0


def main():
    args = build_parser().parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    if args.analyze:
        if args.input is None or not args.input.is_file():
            print("Error: --analyze needs an input file", file=sys.stderr)
            sys.exit(1)
        analyze_file(args.input)
        return

    try:
        status = convert(args)
    except (LinesError, EOFError, OSError) as e:
        print(f"FAILED: {e}", file=sys.stderr)
        sys.exit(1)

    if status == 0 and not args.quiet:
        print("done.", file=sys.stderr)
    sys.exit(status)


if __name__ == "__main__":
    main()
