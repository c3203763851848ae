"""
CSV ingestion of truth tables.

The file holds `header_lines` ignored rows, then one row per table entry:
inputs in the leftmost `n_inputs` columns, outputs in the rightmost
`n_outputs` columns. Columns in between are spacers and are skipped.
"""

import csv
import logging
from typing import Iterable, TextIO

from .errors import StructuralError
from .truth_tables import Entry, TruthTable

log = logging.getLogger(__name__)


def _cell(text: str, line: int, column: int, kind: str) -> bool:
    try:
        return int(text.strip()) != 0
    except ValueError as e:
        log.warning("ignoring %s '%s' (%s) on line %d:%d", kind, text, e, line, column)
        return False


def parse_rows(
    rows: Iterable[list[str]],
    header_lines: int,
    n_inputs: int,
    n_outputs: int,
) -> TruthTable:
    """Build a table from already split CSV records."""
    entries = []
    for line, record in enumerate(rows, start=1):
        if line <= header_lines:
            continue
        if not any(cell.strip() for cell in record):
            continue
        if len(record) < n_inputs + n_outputs:
            raise StructuralError(
                f"line {line}: {len(record)} columns, need at least "
                f"{n_inputs + n_outputs}"
            )

        inputs = [_cell(record[i], line, i, "input") for i in range(n_inputs)]
        # the rightmost columns, not n_inputs..n_inputs+n_outputs
        mincol = len(record) - n_outputs
        outputs = [
            _cell(record[j], line, j, "output")
            for j in range(mincol, len(record))
        ]
        entries.append(Entry.new(inputs, outputs))

    return TruthTable(entries)


def parse(
    data: TextIO,
    header_lines: int,
    n_inputs: int,
    n_outputs: int,
) -> TruthTable:
    """Parse a CSV truth table from an open text stream."""
    return parse_rows(csv.reader(data), header_lines, n_inputs, n_outputs)


def load(
    path: str,
    header_lines: int,
    n_inputs: int,
    n_outputs: int,
) -> TruthTable:
    with open(path, newline="") as f:
        table = parse(f, header_lines, n_inputs, n_outputs)
    log.info("Parsed %s: %d rows", path, len(table))
    return table
