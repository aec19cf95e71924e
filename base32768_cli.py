import argparse
import logging
import sys
from contextlib import ExitStack
from typing import BinaryIO, List, Optional

from base32768 import Base32768
from base32768_errors import Base32768Error

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(message)s"


def get_parser():
    """Create and configure the CLI argument parser.

    :returns: Configured argument parser.
    :rtype: argparse.ArgumentParser
    """
    parser = argparse.ArgumentParser(
        description="Base32768 binary-to-text encoder/decoder"
    )
    mode = parser.add_mutually_exclusive_group(required=True)
    mode.add_argument(
        "-e", "--encode", action="store_true",
        help="Encode raw input into base32768 text",
    )
    mode.add_argument(
        "-d", "--decode", action="store_true",
        help="Decode base32768 text back into raw bytes",
    )
    parser.add_argument(
        "-i", "--input", default=None,
        help="Input file path (default: standard input)",
    )
    parser.add_argument(
        "-o", "--output", default=None,
        help="Output file path (default: standard output)",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Log codec details to standard error",
    )
    return parser


def _setup_logging(verbose: bool) -> None:
    """Attach a stderr handler to the root logger.

    :param verbose: Log at DEBUG level instead of WARNING.
    :type verbose: bool
    :returns: None
    :rtype: None
    """
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S"))
    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(logging.DEBUG if verbose else logging.WARNING)


def _open_stream(
    stack: ExitStack, path: Optional[str], mode: str, default: BinaryIO
) -> BinaryIO:
    """Open ``path`` in binary ``mode``, or fall back to ``default``.

    Streams opened here are closed with ``stack``; ``default`` is left open.

    :param stack: Exit stack owning any file opened here.
    :type stack: contextlib.ExitStack
    :param path: File path, ``"-"`` or ``None`` for ``default``.
    :type path: Optional[str]
    :param mode: Binary open mode (``"rb"`` or ``"wb"``).
    :type mode: str
    :param default: Stream used when no path is given.
    :type default: BinaryIO
    :returns: The stream to read from or write to.
    :rtype: BinaryIO
    """
    if path is None or path == "-":
        return default
    return stack.enter_context(open(path, mode))


def run(args: argparse.Namespace) -> int:
    """Encode or decode according to parsed CLI arguments.

    :param args: Parsed arguments from ``get_parser``.
    :type args: argparse.Namespace
    :returns: Process exit status.
    :rtype: int
    """
    codec = Base32768()
    try:
        with ExitStack() as stack:
            source = _open_stream(stack, args.input, "rb", sys.stdin.buffer)
            target = _open_stream(stack, args.output, "wb", sys.stdout.buffer)
            if args.encode:
                codec.encode(source, target)
            else:
                codec.decode(source, target)
            target.flush()
    except FileNotFoundError as e:
        print(f"[!] File not found: {e.filename}", file=sys.stderr)
        return 1
    except Base32768Error as e:
        print(f"[!] Invalid input: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"[!] I/O error: {e}", file=sys.stderr)
        return 1
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the CLI tool.

    :param argv: Argument list; ``sys.argv[1:]`` when omitted.
    :type argv: Optional[List[str]]
    :returns: Process exit status.
    :rtype: int
    """
    parser = get_parser()
    args = parser.parse_args(argv)
    _setup_logging(args.verbose)
    return run(args)


if __name__ == "__main__":
    sys.exit(main())
