"""
zcatr CLI - View Command
Usage: python -m cli.commands.view FILES... [--list] [--no-styling]
"""
import argparse
import sys

from core import __version__
from core.models import RenderMode
from core.renderer import Renderer
from core.utils.logger import logger, set_verbosity
from core.viewer import Viewer


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="zcatr",
        description="View content and information from compressed files and archives",
        epilog=(
            "Supported formats: ZIP, TAR, GZIP, BZIP2, TAR+GZIP, TAR+BZIP2. "
            "Formats are detected from file contents, not extensions."
        )
    )
    parser.add_argument("files", nargs="+", metavar="FILES", help="Files to read")
    parser.add_argument("-l", "--list", action="store_true",
                        help="Show archive information instead of content")
    parser.add_argument("-n", "--no-styling", action="store_true",
                        help="Do not print the header and footer around file content")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Print diagnostic details to stderr")
    parser.add_argument("-V", "--version", action="version",
                        version=f"%(prog)s {__version__}")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    set_verbosity(args.verbose)

    if hasattr(sys.stdout, "reconfigure"):
        sys.stdout.reconfigure(errors="replace")

    mode = RenderMode.LIST if args.list else RenderMode.CONTENT
    viewer = Viewer(mode=mode, renderer=Renderer(styling=not args.no_styling))

    try:
        summary = viewer.view_files(args.files)
    except KeyboardInterrupt:
        logger.error("\nInterrupted.")
        return 130

    if summary['failed'] > 0:
        logger.error(f"{summary['failed']} of {summary['total']} file(s) failed")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
