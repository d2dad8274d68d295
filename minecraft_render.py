"""
Command line entry point for Minecraft Render.

Usage:
    minecraft-render --skin steve.png
    minecraft-render --skin steve.png --output-dir renders --reference-dir refs
    minecraft-render --skin a.png --skin b.png --output-dir renders
    minecraft-render --skin steve.png --precorrect-only steve_corrected.png
    minecraft-render --dump-layout layout.json

A single skin is written straight into the output directory as
chara_3_custom.png, chara_4_custom.png, chara_6_custom.png and output.png.
Several skins are written into one sub-directory per skin.
"""

from pathlib import Path
from typing import List, Optional
import argparse
import logging
import sys

from MR_Libs import __version__
from MR_Libs.errors import SkinRenderError
from MR_Libs.LayoutLib.layout_store import load_layout, save_layout
from MR_Libs.PipelineLib.canvas_writer import CanvasWriterConfig
from MR_Libs.PipelineLib.render_pipeline import (
    PipelineConfig,
    precorrect_skin_file,
    render_skin_batch,
    render_skin_file,
)

logger = logging.getLogger("minecraft_render")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="minecraft-render",
        description="Create fighting-game render textures from a Minecraft Java skin",
    )
    parser.add_argument(
        "--skin",
        action="append",
        type=Path,
        default=[],
        help="Path to a 64x64 Minecraft skin (repeat for several skins)",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=Path("."),
        help="Directory for the output files (default: current directory)",
    )
    parser.add_argument("--layout", type=Path, help="Layout JSON file replacing the built-in layout")
    parser.add_argument(
        "--reference-dir",
        type=Path,
        help="Directory holding chara_N_pickel_00.png portraits whose alpha masks the outputs",
    )
    parser.add_argument(
        "--no-tone-correction",
        action="store_true",
        help="Skip the levels curve (the skin is already corrected)",
    )
    parser.add_argument(
        "--precorrect-only",
        type=Path,
        metavar="OUT",
        help="Only write the tone corrected skin to OUT",
    )
    parser.add_argument(
        "--no-overwrite",
        action="store_true",
        help="Fail instead of replacing existing output files",
    )
    parser.add_argument(
        "--dump-layout",
        type=Path,
        metavar="OUT",
        help="Write the active layout as JSON to OUT",
    )
    parser.add_argument("--no-threads", action="store_true", help="Render several skins one at a time")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )


def run(args: argparse.Namespace) -> None:
    config = PipelineConfig(
        tone_correct=not args.no_tone_correction,
        reference_dir=str(args.reference_dir) if args.reference_dir else None,
        writer=CanvasWriterConfig(
            output_dir=str(args.output_dir),
            overwrite=not args.no_overwrite,
        ),
    )
    if args.layout:
        config.layout = load_layout(args.layout)

    if args.dump_layout:
        save_layout(config.layout, args.dump_layout)
        if not args.skin:
            return

    if args.precorrect_only:
        precorrect_skin_file(
            args.skin[0],
            args.precorrect_only,
            parameters=config.tone_parameters,
            overwrite=not args.no_overwrite,
        )
        return

    if len(args.skin) == 1:
        result = render_skin_file(args.skin[0], config)
        for path in result.written.values():
            print(path)
        return

    results = render_skin_batch(args.skin, config, use_threading=not args.no_threads)
    for result in results.values():
        for path in result.written.values():
            print(path)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.skin and not args.dump_layout:
        parser.error("--skin is required")
    if args.precorrect_only:
        if len(args.skin) != 1:
            parser.error("--precorrect-only takes exactly one --skin")
        # a pre-correction run neither remaps nor masks
        for flag, value in (
            ("--no-tone-correction", args.no_tone_correction),
            ("--layout", args.layout),
            ("--reference-dir", args.reference_dir),
        ):
            if value:
                parser.error(f"--precorrect-only cannot be combined with {flag}")

    configure_logging(args.verbose)

    try:
        run(args)
    except (SkinRenderError, OSError, ValueError) as e:
        logger.error(str(e))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
