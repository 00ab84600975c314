"""Command-line interface for omecompanion."""

from __future__ import annotations

import argparse
import sys
import xml.etree.ElementTree as ET
from typing import Callable

import tifffile
from pydantic import ValidationError

from omecompanion._companion import CompanionConfig, to_multifile_companion_xml
from omecompanion._tiff import ImageDescriptionNotFoundError, read_image_description
from omecompanion._xml import pretty_xml, to_ome_xml

# errors caused by the content of the input, rather than by reading it
INVALID_INPUT_ERRORS = (
    ValidationError,
    ValueError,
    ET.ParseError,
    ImageDescriptionNotFoundError,
)


def run_and_print(path: str, produce: Callable[[], str]) -> int:
    """Print the document returned by `produce`, reporting failures on stderr.

    Nothing is written to stdout unless `produce` succeeds.

    Parameters
    ----------
    path : str
        The input file, used in error messages.
    produce : Callable[[], str]
        Builds the output document.

    Returns
    -------
    int
        Exit code (0 for success, 1 for invalid input, 2 for other errors)
    """
    try:
        output = produce()
    except tifffile.TiffFileError as e:
        # a ValueError subclass, but about reading the file
        print(f"✗ Not a readable TIFF file: {e}", file=sys.stderr)
        return 2
    except INVALID_INPUT_ERRORS as e:
        print(f"✗ Invalid input: {path}\n", file=sys.stderr)
        print(str(e), file=sys.stderr)
        return 1
    except OSError as e:
        print(f"✗ Error: {e}", file=sys.stderr)
        return 2
    sys.stdout.write(output)
    return 0


def show_command(args: argparse.Namespace) -> int:
    """Execute the show subcommand: print the embedded OME-XML."""
    return run_and_print(
        args.file, lambda: pretty_xml(read_image_description(args.file))
    )


def concat_command(args: argparse.Namespace) -> int:
    """Execute the concat subcommand.

    Reads the OME-XML embedded in `args.file` and prints the multi-file
    companion document describing `args.size_z` single-slice files.
    """

    def _companion() -> str:
        config = CompanionConfig(
            size_z=args.size_z,
            filename_template=args.filename_template,
            physical_size_z=args.physical_size_z,
            physical_size_z_unit=args.physical_size_z_unit,
            uuids=args.uuids,
        )
        xml_text = read_image_description(args.file)
        return to_ome_xml(to_multifile_companion_xml(xml_text, config))

    return run_and_print(args.file, _companion)


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI.

    Parameters
    ----------
    argv : list[str] | None
        Command-line arguments (defaults to sys.argv[1:])

    Returns
    -------
    int
        Exit code
    """
    parser = argparse.ArgumentParser(
        prog="omecompanion",
        description="Inspect OME-TIFF metadata and write multi-file companion OME-XML",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    show_parser = subparsers.add_parser(
        "show",
        help="Print the OME-XML embedded in a TIFF file",
    )
    show_parser.add_argument("file", help="Path to the (OME-)TIFF file")
    show_parser.set_defaults(func=show_command)

    concat_parser = subparsers.add_parser(
        "concat",
        help="Print a companion OME-XML describing a stack of single-slice files",
    )
    concat_parser.add_argument("file", help="Path to the (OME-)TIFF file")
    concat_parser.add_argument(
        "--filename-template",
        required=True,
        help="File name of each slice; '{z}' is replaced by the 1-based slice number",
    )
    concat_parser.add_argument(
        "--size-z", type=int, required=True, help="Number of slices (1-999)"
    )
    concat_parser.add_argument(
        "--physical-size-z",
        type=float,
        default=1.0,
        help="Distance between slices (default: %(default)s)",
    )
    concat_parser.add_argument(
        "--physical-size-z-unit",
        default="µm",
        help="Unit of --physical-size-z (default: %(default)s)",
    )
    concat_parser.add_argument(
        "--uuids",
        action="store_true",
        help="Add a UUID derived from the file name to every file reference",
    )
    concat_parser.set_defaults(func=concat_command)

    args = parser.parse_args(argv)

    # Show help if no command specified
    if not hasattr(args, "func"):
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
