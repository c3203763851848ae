import random

from minterm.cube import Cube
from minterm.truth_tables import TruthTable


def lit(n_vars, *literals):
    """Cube from (index, polarity) pairs."""
    return Cube.from_literals(literals, n_vars)


def random_table(seed, n_inputs, n_outputs):
    rng = random.Random(seed)
    rows = []
    for m in range(1 << n_inputs):
        inp = [(m >> (n_inputs - 1 - i)) & 1 for i in range(n_inputs)]
        rows.append((inp, [rng.randint(0, 1) for _ in range(n_outputs)]))
    return TruthTable.from_rows(rows)


def random_on_set(seed, n_vars):
    rng = random.Random(seed)
    return {m for m in range(1 << n_vars) if rng.random() < 0.5}


SMALL_EXAMPLE = (
    "0,0,0,,0,1\n"
    "0,0,1,,1,0\n"
    "0,1,0,,1,1\n"
    "0,1,1,,0,0\n"
    "1,0,0,,1,1\n"
    "1,0,1,,0,1\n"
    "1,1,0,,1,1\n"
    "1,1,1,,0,0\n"
)
