#!/usr/bin/env python3
"""
Command line interface to assemble contour paths from a CSV file of segment
events and write them to JSON.
"""

import argparse
import logging
import pathlib
import sys

from pyisocon.contour_assembly.assembler import AssemblyParameters
from pyisocon.contour_assembly.contour_paths import (ContourPath,
                                                     compute_contour_paths)
from pyisocon.contour_assembly.write_output import (read_segment_events_csv,
                                                    write_contour_paths_json)
from pyisocon.core.common import (CHECK_VALIDITY, InternalLinkError, Level,
                                  MalformedInputError)
from pyisocon.core.point import SegmentEvent

logger: logging.Logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """
    Parse command line arguments.
    """
    parser = argparse.ArgumentParser(
        prog="assemble_contours",
        description="Assemble contour paths from level-tagged line segments.")
    parser.add_argument("-i", "--input", type=str, required=True,
                        help="CSV file of segment events: [i,j,]level,x1,y1,x2,y2")
    parser.add_argument("-o", "--output", type=str, default="contours.json",
                        help="Output JSON filepath")
    parser.add_argument("--levels", type=float, nargs="+", default=None,
                        help="Iso-levels to assemble. Defaults to the levels in the input")
    parser.add_argument("--no-quick", action="store_true",
                        help="Always use the complete cycle search for loop excision")
    parser.add_argument("--check-validity", action="store_true", default=CHECK_VALIDITY,
                        help="Check endpoint registry consistency before excision")
    parser.add_argument("--log-level", type=str, default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
                        help="Logging level")
    return parser.parse_args(argv)


def main(args: argparse.Namespace) -> int:
    """
    Main
    """
    logging.basicConfig(level=getattr(logging, args.log_level))
    input_filepath = pathlib.Path(args.input)
    output_filepath = pathlib.Path(args.output)
    parameters = AssemblyParameters(quick_excision=not args.no_quick,
                                    check_validity=args.check_validity)

    try:
        events: list[SegmentEvent] = read_segment_events_csv(input_filepath)
        paths: dict[Level, list[ContourPath]] = compute_contour_paths(
            events, args.levels, parameters)
    except MalformedInputError as err:
        logger.error("Rejected input %s: %s", input_filepath, err)
        return 2
    except InternalLinkError:
        logger.exception("Contour assembly failed for %s", input_filepath)
        return 3

    write_contour_paths_json(paths, output_filepath)
    return 0


if __name__ == "__main__":
    sys.exit(main(parse_args()))
