"""
Command line interface for `riff init`.

Generates the Dockerfile for a riff function from its source directory.
"""

import sys
import argparse
import logging
import traceback
from typing import List, Optional

from . import __version__
from .config import DEFAULT_RIFF_VERSION, SUPPORTED_PROTOCOLS
from .options import HandlerAwareInitOptions, Language, LANGUAGE_KEYS
from .utils.osutils import get_cwd
from .workflow import InitWorkflow


def create_parser() -> argparse.ArgumentParser:
    """Create command line argument parser."""

    parser = argparse.ArgumentParser(
        prog="riff",
        description="Scaffold riff functions for the Java, Python, Node and shell invokers",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"riff init {__version__}"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    init_parser = subparsers.add_parser(
        "init",
        help="Initialize a function",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="Generate the Dockerfile for a function based on its source code.",
        epilog="""
Examples:
  %(prog)s node -f square
  %(prog)s square              (detect the language of the function in ./square)
  %(prog)s java -a target/greeter-1.0.0.jar --handler=Greeter
  %(prog)s python -f words --handler=process
  %(prog)s                    (detect the language in the current directory)
        """
    )

    init_parser.add_argument(
        "arguments",
        nargs="*",
        metavar="language | path",
        help=(
            f"Function language ({', '.join(LANGUAGE_KEYS)}), detected from the source files "
            "when omitted; a single other argument is the function path when --filepath is not given"
        )
    )

    init_parser.add_argument(
        "-f",
        "--filepath",
        dest="function_path",
        default="",
        help="Path or directory of the function source (default: current directory)"
    )

    init_parser.add_argument(
        "-a",
        "--artifact",
        default="",
        help="Path to the function artifact, relative to the function path"
    )

    init_parser.add_argument(
        "-p",
        "--protocol",
        default="",
        help=f"Protocol used by the sidecar ({', '.join(SUPPORTED_PROTOCOLS)})"
    )

    init_parser.add_argument(
        "--handler",
        default="",
        help="Function handler: fully qualified class name (java) or function name (python)"
    )

    init_parser.add_argument(
        "--riff-version",
        default=DEFAULT_RIFF_VERSION,
        help=f"Version of the invoker base image (default: {DEFAULT_RIFF_VERSION})"
    )

    init_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the Dockerfile instead of writing it"
    )

    init_parser.add_argument(
        "--force",
        action="store_true",
        help="Overwrite an existing Dockerfile"
    )

    init_parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose output for debugging"
    )

    return parser


def resolve_positionals(parser: argparse.ArgumentParser, args) -> None:
    """Split positional arguments into an optional language and an optional function path.

    A leading language key selects the language. One remaining argument is taken as the
    function path, but only when --filepath was not given.
    """
    remaining = list(args.arguments)
    args.language = None

    if remaining and remaining[0] in LANGUAGE_KEYS:
        args.language = remaining.pop(0)

    if len(remaining) == 1 and not args.function_path:
        args.function_path = remaining.pop()

    if remaining:
        parser.error(f"Invalid argument(s) {remaining}")


def build_options(args) -> HandlerAwareInitOptions:
    """Build the options record from parsed flags."""
    return HandlerAwareInitOptions(
        function_path=args.function_path or get_cwd(),
        artifact=args.artifact,
        protocol=args.protocol,
        riff_version=args.riff_version,
        handler=args.handler
    )


def run_init(args) -> bool:
    """Run the init workflow and report the outcome."""

    workflow = InitWorkflow(verbose=args.verbose)
    result = workflow.run(
        build_options(args),
        language=args.language,
        dry_run=args.dry_run,
        force=args.force
    )

    if not result.success:
        print(f"❌ Error: {result.error}", file=sys.stderr)
        return False

    if result.dockerfile_path:
        print(f"✅ {result.language} Dockerfile written to {result.dockerfile_path}")
    return True


def main(argv: Optional[List[str]] = None):
    """Main entry point."""

    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s"
    )

    resolve_positionals(parser, args)

    if args.language and Language.parse(args.language).requires_handler and not args.handler:
        parser.error(f"the following arguments are required for {args.language}: --handler")

    try:
        success = run_init(args)
        sys.exit(0 if success else 1)

    except KeyboardInterrupt:
        print("\n⚠️  Process interrupted")
        sys.exit(130)

    except Exception as e:
        print(f"❌ Fatal error: {str(e)}", file=sys.stderr)
        if args.verbose:
            traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
