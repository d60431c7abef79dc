"""
write_output.py

Methods for reading segment events from CSV and writing contour paths to JSON.
"""
import csv
import json
import logging
import pathlib

import numpy as np

from pyisocon.contour_assembly.contour_paths import ContourPath
from pyisocon.core.common import Level, MalformedInputError
from pyisocon.core.point import SegmentEvent, make_segment

logger: logging.Logger = logging.getLogger(__name__)

# Columns of an event row without and with the leading cell indices.
_EVENT_COLUMNS: int = 5
_CELL_EVENT_COLUMNS: int = 7


def _parse_event_row(row: list[str], line_number: int) -> SegmentEvent:
    """
    Helper method.
    Parse "level,x1,y1,x2,y2" or "i,j,level,x1,y1,x2,y2".
    """
    if len(row) not in (_EVENT_COLUMNS, _CELL_EVENT_COLUMNS):
        raise MalformedInputError(
            f"line {line_number}: expected {_EVENT_COLUMNS} or {_CELL_EVENT_COLUMNS} "
            f"columns, got {len(row)}")

    i: int = 0
    j: int = 0
    try:
        if len(row) == _CELL_EVENT_COLUMNS:
            i, j = int(row[0]), int(row[1])
            row = row[2:]
        level, x1, y1, x2, y2 = (float(v) for v in row)
    except ValueError as err:
        raise MalformedInputError(f"line {line_number}: {err}") from err

    return SegmentEvent(i, j, make_segment(x1, y1, x2, y2), level)


def read_segment_events_csv(filepath: pathlib.Path) -> list[SegmentEvent]:
    """
    Read segment events from a CSV file. Blank lines, lines starting with '#'
    and a header row starting with "level" or "i" before the first event are
    skipped.

    :param filepath: [in] CSV file
    :return: events in file order
    """
    events: list[SegmentEvent] = []
    with open(filepath, 'r', encoding='utf-8', newline='') as file:
        reader = csv.reader(file)
        for row in reader:
            fields: list[str] = [field.strip() for field in row]
            if not fields or fields == [''] or fields[0].startswith('#'):
                continue
            if not events and fields[0].lower() in ("level", "i"):
                continue
            events.append(_parse_event_row(fields, reader.line_num))

    logger.info("Read %s segment events from %s", len(events), filepath)
    return events


def write_contour_paths_json(paths: dict[Level, list[ContourPath]],
                             filepath: pathlib.Path) -> None:
    """
    Write contour paths to a JSON file.

    :param paths: [in] paths keyed by level
    :param filepath: [in] output file
    """
    levels: list[dict] = []
    for z, level_paths in paths.items():
        levels.append({
            "level": z,
            "paths": [{"closed": pa.is_loop, "points": pa.points.tolist()}
                      for pa in level_paths]})

    with open(filepath, 'w', encoding='utf-8') as file:
        json.dump({"levels": levels}, file, indent=2)
    logger.info("Wrote %s levels to %s", len(levels), filepath)


def load_contour_paths_json(filepath: pathlib.Path) -> dict[Level, list[ContourPath]]:
    """
    Read contour paths written by write_contour_paths_json().

    :param filepath: [in] JSON file
    :return: paths keyed by level in file order
    """
    with open(filepath, 'r', encoding='utf-8') as file:
        obj: dict = json.load(file)

    paths: dict[Level, list[ContourPath]] = {}
    for entry in obj["levels"]:
        z: Level = float(entry["level"])
        paths[z] = [ContourPath(level=z,
                                points=np.array(pa["points"], dtype=np.float64).reshape(-1, 2),
                                is_loop=bool(pa["closed"]))
                    for pa in entry["paths"]]
    return paths
