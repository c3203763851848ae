"""One output's minimized sum of products."""

from dataclasses import dataclass, field
from typing import Sequence

from .cube import Bit, Cube


@dataclass
class Equation:
    """
    An output expressed as the OR of its terms.

    `index` is the output's column in the table and `name` its identifier.
    """

    index: int
    name: str
    n_vars: int
    terms: list[Cube] = field(default_factory=list)

    @property
    def num_literals(self) -> int:
        return sum(t.num_literals for t in self.terms)

    def evaluate(self, inputs: Sequence) -> bool:
        """Evaluate on a fully specified input row."""
        minterm = Cube.compute(
            b if isinstance(b, Bit) else Bit.new(b) for b in inputs
        )
        return any(t.covers(minterm) for t in self.terms)

    def covered_minterms(self) -> set[int]:
        covered = set()
        for t in self.terms:
            covered.update(t.minterms())
        return covered

    def to_expr_str(self, var_names=None) -> str:
        terms = " + ".join(t.to_expr_str(var_names) for t in self.terms)
        return f"{self.name} = {terms or '0'}"

    def __str__(self):
        return self.to_expr_str()
