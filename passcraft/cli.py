"""
pass-craft - Command-Line Interface

Usage:
    pass-craft --sslf "name:john,email:john@gmail.com,site:john.com;method:sha512,cut:8,end:+,upper-start:5"
    pass-craft --text "name:john,email:john@gmail.com,site:john.com" --hash "method:sha256,cut:10"
    pass-craft --file config.txt --save passwords.txt
    pass-craft --show-platform

Flow: parse -> validate -> digest -> transforms -> report -> [save].
Every entry is parsed and validated before anything is printed, so a bad
input never produces a partial report.

Exit codes:
    0    success
    1    parse, validation, digest or file error
    2    usage error (bad or conflicting flags)
    130  interrupted
"""

import argparse
import logging
import os
import sys
from typing import List, Optional

from . import __version__
from . import report
from .config import ConfigEntry, load_file, parse_slkv, parse_sslf, parse_text_hash
from .errors import FileWriteFailureError, PassCraftError
from .sink import format_saved_line, html_comment_wrap, save_results
from .transform import generate_password


logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130

LOG_LEVEL_ENV = "PASSCRAFT_LOG_LEVEL"

EXAMPLES = """\
Line format:
  name:<v>,email:<v>,site:<v>;method:<alg>,cut:<int>,end:<str>,upper-start:<int>

Examples:
  # Combined string
  pass-craft --sslf "name:john,email:john@gmail.com,site:john.com;method:sha512,cut:8,end:+,upper-start:5"

  # Identity and hash settings given separately
  pass-craft --text "name:john,email:john@gmail.com,site:john.com" --hash "method:sha256,cut:10"

  # Read configuration lines from a file and append results
  pass-craft --file config.txt --save passwords.txt

  # Show platform information
  pass-craft --show-platform
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pass-craft",
        description="Derive deterministic passwords from name, email and site.",
        epilog=EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--show-platform", action="store_true",
                        help="show platform information and exit")
    parser.add_argument("--show-config", action="store_true",
                        help="show the parsed configuration and exit")
    parser.add_argument("--file", metavar="PATH",
                        help="read configuration lines from a file")
    parser.add_argument("--save", metavar="PATH",
                        help="append results to a file")
    parser.add_argument("--sslf", metavar="STRING",
                        help="combined identity;hash configuration string")
    parser.add_argument("--slkv", metavar="STRING",
                        help="single key:value list holding every field")
    parser.add_argument("--text", metavar="STRING",
                        help="identity fields (name, email, site)")
    parser.add_argument("--hash", metavar="STRING",
                        help="hash fields (method, cut, end, upper-start)")
    return parser


def configure_logging():
    """Diagnostics go to stderr; level comes from PASSCRAFT_LOG_LEVEL."""
    level_name = os.environ.get(LOG_LEVEL_ENV, "WARNING").upper()
    level = getattr(logging, level_name, None)
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _input_modes(args) -> List[str]:
    modes = []
    if args.file is not None:
        modes.append("--file")
    if args.sslf is not None:
        modes.append("--sslf")
    if args.slkv is not None:
        modes.append("--slkv")
    if args.text is not None or args.hash is not None:
        modes.append("--text/--hash")
    return modes


def load_entries(args, validate: bool = True) -> List[ConfigEntry]:
    """Parse whichever single input mode was given on the command line."""
    if args.file is not None:
        return load_file(args.file, validate=validate)
    if args.sslf is not None:
        return [parse_sslf(args.sslf, validate=validate)]
    if args.slkv is not None:
        return [parse_slkv(args.slkv, validate=validate)]
    return [parse_text_hash(args.text, args.hash, validate=validate)]


def _same_file(a: Optional[str], b: Optional[str]) -> bool:
    if not a or not b:
        return False
    return os.path.abspath(a) == os.path.abspath(b)


def run(args) -> int:
    info = report.PlatformInfo.current()

    if args.show_platform:
        report.show_platform(info)
        return EXIT_OK

    try:
        entries = load_entries(args, validate=not args.show_config)
    except PassCraftError as e:
        report.failure("Configuration Error", e)
        return EXIT_FAILURE

    if args.show_config:
        valid = report.show_config(entries, args.file, args.save)
        return EXIT_OK if valid else EXIT_FAILURE

    if not entries:
        report.status(f"No configuration lines found in {args.file}", report.WARN, file=sys.stderr)
        return EXIT_OK

    logger.info("Starting pass-craft on %s", info.display())

    try:
        results = [generate_password(e.identity, e.spec) for e in entries]
    except PassCraftError as e:
        report.failure("Password Generation Failed", e)
        return EXIT_FAILURE

    for generated in results:
        report.report_generated(generated, info)

    if args.save:
        if _same_file(args.save, args.file):
            lines = [html_comment_wrap(g.result) for g in results]
        else:
            lines = [format_saved_line(g) for g in results]
        try:
            count = save_results(args.save, lines)
        except FileWriteFailureError as e:
            report.failure("Save Failed", e)
            return EXIT_FAILURE
        report.saved(args.save, count)

    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    modes = _input_modes(args)
    if not args.show_platform:
        if not modes:
            parser.error("one of --file, --sslf, --slkv or --text/--hash is required")
        if len(modes) > 1:
            parser.error(f"choose one input mode, got: {', '.join(modes)}")

    configure_logging()

    try:
        return run(args)
    except KeyboardInterrupt:
        print("\nExiting...")
        return EXIT_INTERRUPTED


if __name__ == "__main__":
    sys.exit(main())
