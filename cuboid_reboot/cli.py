"""
cuboid-reboot: compute how many cells are left on after a reboot.

Usage:
    cuboid-reboot INPUT                     Volume inside the -50..50 region
    cuboid-reboot INPUT --focus 100         Volume inside the -100..100 region
    cuboid-reboot INPUT --full              Volume of the whole, unclipped reboot
    cuboid-reboot INPUT --full --save runs.h5 --shape-id full
"""

import argparse
import logging
import sys

from cuboid_reboot.engine import DEFAULT_FOCUS_RADIUS, RebootEngine, focus_cube
from cuboid_reboot.errors import RebootError
from cuboid_reboot.logging_config import setup_logging
from cuboid_reboot.parsing import load_instructions

DEFAULT_SHAPE_ID = "reboot"

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cuboid-reboot",
        description="Apply on/off cuboid instructions and print the number of cells left on.",
    )
    parser.add_argument("input", help="Instruction file, one 'on|off x=a..b,y=c..d,z=e..f' per line")
    region = parser.add_mutually_exclusive_group()
    region.add_argument("--focus", type=int, metavar="N", default=DEFAULT_FOCUS_RADIUS,
                        help=f"Clip every cube to -N..N on each axis (default: {DEFAULT_FOCUS_RADIUS})")
    region.add_argument("--full", action="store_true",
                        help="Apply instructions without clipping")
    parser.add_argument("--compact", action="store_true",
                        help="Merge adjacent cubes after every instruction")
    parser.add_argument("--save", metavar="FILE",
                        help="Save the final shape to an HDF5 file")
    parser.add_argument("--shape-id",
                        help=f"Name of the saved shape, requires --save (default: {DEFAULT_SHAPE_ID})")
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="Increase log verbosity (-v info, -vv debug)")
    parser.add_argument("--log-file", metavar="FILE", help="Also write logs to FILE")
    return parser


def run(args: argparse.Namespace) -> int:
    """Execute a parsed command line and return the volume."""
    instructions = load_instructions(args.input)
    focus = None if args.full else focus_cube(args.focus)

    if args.save is None:
        return RebootEngine(focus=focus, compact=args.compact).run(instructions)

    # Local import: h5py is only needed when saving
    from cuboid_reboot.shapestore.hdf5_shapestore import HDF5ShapeStore

    shape_id = DEFAULT_SHAPE_ID if args.shape_id is None else args.shape_id
    with HDF5ShapeStore(args.save) as store:
        engine = RebootEngine(focus=focus, compact=args.compact, store=store, shape_id=shape_id)
        return engine.run(instructions)


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.shape_id is not None and args.save is None:
        parser.error("--shape-id requires --save")

    level = {0: logging.WARNING, 1: logging.INFO}.get(args.verbose, logging.DEBUG)
    setup_logging(level, args.log_file)

    try:
        volume = run(args)
    except (RebootError, OSError, ImportError) as exc:
        logger.debug("Reboot failed", exc_info=True)
        print(f"cuboid-reboot: {exc}", file=sys.stderr)
        return 1

    print(volume)
    return 0


if __name__ == "__main__":
    sys.exit(main())
