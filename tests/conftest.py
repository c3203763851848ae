import pytest

from minterm.truth_tables import EXAMPLE_ROWS, TruthTable


@pytest.fixture
def example_table():
    return TruthTable.from_rows(EXAMPLE_ROWS)
