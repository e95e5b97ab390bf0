"""
pcopy command line front end.

Copies (or moves) a file or directory tree. Files whose name is taken at the
target are compared by content: identical files are skipped, different
ones are stored as name(1).ext, name(2).ext and so on.

Author: photoutils Project
License: MIT
"""

import argparse
import sys
from typing import List, Optional

from ..errors import PreconditionError
from ..utils.file_ops import PathStatus, probe
from ..core.events import ConsoleObserver
from ..core.sync_engine import CopyEngine
from .common import add_common_arguments, load_and_configure, usage_error


def build_parser() -> argparse.ArgumentParser:
    """Argument parser for pcopy."""
    parser = argparse.ArgumentParser(
        prog="pcopy",
        description="Copy or move files, skipping content duplicates and renaming name collisions.",
    )
    parser.add_argument("source", help="source file or directory")
    parser.add_argument("target", help="target file or directory")
    parser.add_argument(
        "-m",
        dest="move",
        action="store_true",
        help="move file(s) from source to target (copy file(s) by default)",
    )
    parser.add_argument(
        "-f",
        dest="full_hash",
        action="store_true",
        help="use fullhash mode (slower; the default fast mode samples files over 500 KiB "
             "and may treat large files differing outside the samples as duplicates)",
    )
    parser.add_argument(
        "-r",
        dest="recursive",
        action="store_true",
        help="recursive mode",
    )
    add_common_arguments(parser)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run pcopy.

    Returns:
        0 on completion (individual file failures included), 1 on usage or
        precondition errors
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_and_configure(args)
    except ValueError as e:
        return usage_error(parser, str(e))

    engine_config = config.engine.model_copy(update={
        "move_mode": args.move or config.engine.move_mode,
        "full_hash_mode": args.full_hash or config.engine.full_hash_mode,
        "recursive": args.recursive or config.engine.recursive,
    })
    engine = CopyEngine(engine_config, ConsoleObserver(sys.stdout))

    source_status = probe(args.source)
    if source_status == PathStatus.NOT_EXIST:
        return usage_error(parser, f"{args.source}: No such file or directory")

    try:
        if source_status == PathStatus.FILE:
            engine.copy_single_file(args.source, args.target)
        else:
            engine.copy_tree(args.source, args.target)
    except PreconditionError as e:
        return usage_error(parser, str(e))

    return 0


if __name__ == "__main__":
    sys.exit(main())
