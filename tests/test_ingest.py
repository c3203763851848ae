import io
import logging

import pytest

from minterm.errors import StructuralError
from minterm.ingest import load, parse

from helpers import SMALL_EXAMPLE

EXAMPLE_HEAD = (
    ",COMPONENTS,,,HAVE,,,,,REQUIRED_VARS includes,,,\n"
    "REQUIRED,OGL,GLX,EGL,OGL,GLX,EGL,GL,,OGL,GLX,EGL,GL\n"
    "0,0,0,0,0,0,0,0,,1,1,0,0\n"
    "0,0,0,0,0,0,0,1,,0,0,0,1\n"
)


def test_read_with_headers():
    table = parse(io.StringIO(EXAMPLE_HEAD), 2, 8, 4)
    assert len(table) == 2
    assert table.entries[0].output == (True, True, False, False)
    assert table.entries[1].pattern() == "00000001"
    assert table.entries[1].output == (False, False, False, True)


def test_parse_small(example_table):
    table = parse(io.StringIO(SMALL_EXAMPLE), 0, 3, 2)
    assert len(table) == 8
    assert table.validate().entries == example_table.entries


def test_non_numeric_cell(caplog):
    data = "0,a,1,,1,7\n"
    with caplog.at_level(logging.WARNING, logger="minterm.ingest"):
        table = parse(io.StringIO(data), 0, 3, 2)
    assert table.entries[0].pattern() == "001"
    assert table.entries[0].output == (True, True)
    assert "ignoring input 'a'" in caplog.text
    assert "line 1:1" in caplog.text


def test_blank_lines_skipped():
    table = parse(io.StringIO("0,1\n\n1,0\n"), 0, 1, 1)
    assert len(table) == 2


def test_short_row():
    with pytest.raises(StructuralError):
        parse(io.StringIO("0,1\n"), 0, 3, 1)


def test_input_and_output_windows_overlap():
    with pytest.raises(StructuralError, match="need at least 5"):
        parse(io.StringIO("0,1,1\n"), 0, 3, 2)


def test_load(tmp_path):
    path = tmp_path / "table.csv"
    path.write_text("a,b,c,,x,y\n" + SMALL_EXAMPLE)
    table = load(str(path), 1, 3, 2)
    assert len(table.validate()) == 8
