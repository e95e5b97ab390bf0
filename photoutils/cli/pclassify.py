"""
pclassify command line front end.

Moves (or copies) the photos and videos at the top level of a directory into
folders named after the date they were taken.

Author: photoutils Project
License: MIT
"""

import argparse
import sys
from typing import List, Optional

from ..errors import PreconditionError
from ..config.schema import ClassifyMode
from ..core.events import ConsoleObserver
from ..classify.classifier import Classifier
from .common import add_common_arguments, load_and_configure, usage_error


def build_parser() -> argparse.ArgumentParser:
    """Argument parser for pclassify."""
    parser = argparse.ArgumentParser(
        prog="pclassify",
        description="Classify photos into dated folders.",
    )
    parser.add_argument("source", metavar="sourcePath", help="source path for photos to be classified")
    parser.add_argument(
        "target",
        metavar="destPath",
        nargs="?",
        help="destination path for classified photos (use source path by default)",
    )
    parser.add_argument(
        "-c",
        dest="copy",
        action="store_true",
        help="copy file(s) from source to target (move file(s) by default)",
    )
    parser.add_argument(
        "-f",
        dest="full_hash",
        action="store_true",
        help="use fullhash mode (slower than default sampled hashing)",
    )

    modes = parser.add_argument_group("classify mode options").add_mutually_exclusive_group()
    modes.add_argument("-m", dest="mode", action="store_const", const=ClassifyMode.MONTH,
                       help="classify photos by month (default)")
    modes.add_argument("-y", dest="mode", action="store_const", const=ClassifyMode.YEAR,
                       help="classify photos by year")
    modes.add_argument("-b", dest="mode", action="store_const", const=ClassifyMode.BIRTHDAY,
                       help="classify photos by birthday")
    modes.add_argument("-d", dest="mode", action="store_const", const=ClassifyMode.DATE,
                       help="classify photos by date")

    add_common_arguments(parser)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run pclassify.

    Returns:
        0 on completion, 1 on usage or precondition errors
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_and_configure(args)
    except ValueError as e:
        return usage_error(parser, str(e))

    classify_config = config.classify
    if args.mode is not None:
        classify_config = classify_config.model_copy(update={"mode": args.mode})

    engine_config = config.engine.model_copy(update={
        "move_mode": not args.copy,
        "full_hash_mode": args.full_hash or config.engine.full_hash_mode,
    })

    classifier = Classifier(classify_config, engine_config, ConsoleObserver(sys.stdout))

    try:
        classifier.run(args.source, args.target or args.source)
    except PreconditionError as e:
        return usage_error(parser, str(e))

    return 0


if __name__ == "__main__":
    sys.exit(main())
