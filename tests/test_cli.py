import pytest

from minterm.cli import main

from helpers import SMALL_EXAMPLE


@pytest.fixture
def table_path(tmp_path):
    path = tmp_path / "small.csv"
    path.write_text("a,b,c,,x,y\n,,,,,\n" + SMALL_EXAMPLE)
    return str(path)


def args(path, *extra):
    return ["--table", path, "--ivar", "a", "--ivar", "b", "--ivar", "c",
            "--ovar", "x", "--ovar", "y", *extra]


def test_text_output(table_path, capsys):
    assert main(args(table_path)) == 0
    out = capsys.readouterr().out
    assert "Parsed truth table with 3 input bits -> 2 output bits (8 rows)" in out
    assert "y = ab' + c'" in out


def test_equations_format(table_path, capsys):
    assert main(args(table_path, "--format", "equations")) == 0
    assert "x = a'b'c + ac' + bc'" in capsys.readouterr().out


def test_exact_sharing_conditionals(table_path, capsys):
    assert main(args(table_path, "--exact", "--sharing", "maximize", "-f", "conditionals")) == 0
    out = capsys.readouterr().out
    assert out.startswith("def evaluate(a, b, c):")
    assert "    if not c:" in out


def test_c_format(table_path, capsys):
    assert main(args(table_path, "--sharing", "literals", "-f", "c")) == 0
    assert "void evaluate(const bool *in, bool *out) {" in capsys.readouterr().out


def test_truth_table(table_path, capsys):
    assert main(args(table_path, "--truth-table", "--gray")) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[2:4] == ["011 -> 00", "010 -> 11"]


def test_header_lines(tmp_path, capsys):
    path = tmp_path / "plain.csv"
    path.write_text(SMALL_EXAMPLE)
    assert main(args(str(path), "--header-lines", "0", "-f", "equations")) == 0
    assert "y = ab' + c'" in capsys.readouterr().out


def test_short_table(tmp_path, capsys):
    path = tmp_path / "short.csv"
    path.write_text("".join(SMALL_EXAMPLE.splitlines(keepends=True)[:7]))
    assert main(args(str(path), "--header-lines", "0")) == 1
    assert "Error: table has 7 rows" in capsys.readouterr().err


def test_resource_ceiling(table_path, capsys):
    assert main(args(table_path, "--max-implicants", "2")) == 1
    assert "Error:" in capsys.readouterr().err


def test_merge_step_ceiling(table_path, capsys):
    assert main(args(table_path, "--max-merge-steps", "1")) == 1
    assert "merge step ceiling exceeded" in capsys.readouterr().err


def test_missing_file(tmp_path, capsys):
    assert main(args(str(tmp_path / "nope.csv"))) == 1
    assert "Error:" in capsys.readouterr().err
