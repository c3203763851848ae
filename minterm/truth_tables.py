"""
Truth tables: the validated input to minimization.

A table of B input bits and O output bits holds exactly 2^B entries, one per
input pattern. Consider this B=3, O=2 system with inputs a, b, c and outputs
x, y:

    abc   xy
    000 => 01
    001 => 10
    010 => 11
    011 => 00
    100 => 11
    101 => 01
    110 => 11
    111 => 00
"""

import sys
from dataclasses import dataclass
from typing import Iterable, Sequence

from .cube import Bit, Cube
from .errors import PatternNotFound, StructuralError

# The table above as (input, output) bit strings
EXAMPLE_ROWS = [
    ("000", "01"),
    ("001", "10"),
    ("010", "11"),
    ("011", "00"),
    ("100", "11"),
    ("101", "01"),
    ("110", "11"),
    ("111", "00"),
]


@dataclass(frozen=True)
class Entry:
    """A single row: input bits and the output bits they map to."""

    input: tuple[Bit, ...]
    output: tuple[bool, ...]

    @classmethod
    def new(cls, inp: Iterable, outp: Iterable) -> "Entry":
        return cls(
            input=tuple(b if isinstance(b, Bit) else Bit.new(b) for b in inp),
            output=tuple(bool(o) for o in outp),
        )

    def pattern(self) -> str:
        return "".join(str(b) for b in self.input)


class TruthTable:
    """Ordered sequence of entries; immutable once validated."""

    def __init__(self, entries: Iterable[Entry]):
        self.entries: tuple[Entry, ...] = tuple(entries)

    @classmethod
    def from_rows(cls, rows: Iterable[tuple[Sequence, Sequence]]) -> "TruthTable":
        """Build from (input, output) pairs of bit strings or bit sequences."""
        entries = []
        for inp, outp in rows:
            entries.append(Entry.new(
                (int(c) for c in inp) if isinstance(inp, str) else inp,
                (int(c) for c in outp) if isinstance(outp, str) else outp,
            ))
        return cls(entries)

    def __len__(self):
        return len(self.entries)

    def __iter__(self):
        return iter(self.entries)

    @property
    def n_inputs(self) -> int:
        return len(self.entries[0].input) if self.entries else 0

    @property
    def n_outputs(self) -> int:
        return len(self.entries[0].output) if self.entries else 0

    def validate(self) -> "TruthTable":
        """Check the structural invariants, raising StructuralError."""
        if not self.entries:
            raise StructuralError("truth table is empty")

        n_in, n_out = self.n_inputs, self.n_outputs
        for line, ent in enumerate(self.entries):
            if len(ent.input) != n_in:
                raise StructuralError(
                    f"row {line}: {len(ent.input)} input bits, expected {n_in}"
                )
            if len(ent.output) != n_out:
                raise StructuralError(
                    f"row {line}: {len(ent.output)} output bits, expected {n_out}"
                )

        if len(self.entries) != 1 << n_in:
            raise StructuralError(
                f"table has {len(self.entries)} rows, {n_in} input bits "
                f"need {1 << n_in}"
            )

        seen = {}
        for line, ent in enumerate(self.entries):
            if ent.input in seen:
                raise StructuralError(
                    f"rows {seen[ent.input]} and {line} share input "
                    f"pattern {ent.pattern()}"
                )
            seen[ent.input] = line

        return self

    def minterms(self, output: int) -> list[Cube]:
        """One minterm cube per row where `output` is 1, in table order."""
        if not 0 <= output < self.n_outputs:
            raise StructuralError(f"no output bit {output}")
        return [Cube.compute(ent.input) for ent in self.entries if ent.output[output]]

    def on_set(self, output: int) -> set[int]:
        return {cube.value for cube in self.minterms(output)}

    def solution(self, inp: Sequence) -> tuple[bool, ...]:
        """Output vector for an input pattern."""
        if isinstance(inp, str):
            inp = [int(c) for c in inp]
        bits = tuple(b if isinstance(b, Bit) else Bit.new(b) for b in inp)
        for ent in self.entries:
            if ent.input == bits:
                return ent.output
        raise PatternNotFound(
            f"cannot find bit pattern {''.join(str(b) for b in bits)}"
        )


def gray_code(nbits: int) -> list[tuple[bool, ...]]:
    """Reflected binary gray code over `nbits` bits, for table inspection."""
    if nbits <= 0:
        return [()]
    cur = [(False,), (True,)]
    for _ in range(1, nbits):
        # prefix 0 to the list, 1 to its reflection
        cur = [(False,) + g for g in cur] + [(True,) + g for g in reversed(cur)]
    return cur


def print_truth_table(table: TruthTable, gray: bool = False, file=None):
    """Print the table, optionally in gray-code order."""
    out = file or sys.stdout
    entries = table.entries
    if gray:
        entries = [
            Entry.new(code, table.solution(code))
            for code in gray_code(table.n_inputs)
        ]
    for ent in entries:
        outputs = "".join("1" if o else "0" for o in ent.output)
        print(f"{ent.pattern()} -> {outputs}", file=out)


if __name__ == "__main__":
    print_truth_table(TruthTable.from_rows(EXAMPLE_ROWS).validate())
