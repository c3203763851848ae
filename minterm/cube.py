"""
Cubes: partial assignments over input variables.

A cube is represented by its mask and value:
- mask: which variable positions matter (1 = constrained, 0 = don't care)
- value: the required bit values for positions that matter

For 3 variables (a, b, c):
- Bit 2 = a (index 0, MSB)
- Bit 1 = b (index 1)
- Bit 0 = c (index 2, LSB)

so the minterm of a table row is the row's input read as a binary number.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, Optional, Union

from .errors import InvariantViolation, ResourceExhausted


class Bit(Enum):
    """A bit is on, off, or eliminated by merging."""

    OFF = "0"
    ON = "1"
    DONT_CARE = "x"

    @classmethod
    def new(cls, on) -> "Bit":
        return cls.ON if on else cls.OFF

    def __str__(self):
        return self.value


@dataclass(frozen=True)
class Cube:
    """A product term over `n_vars` input variables."""

    mask: int       # Which bits matter (1 = matters)
    value: int      # Required values for bits that matter
    n_vars: int

    def __post_init__(self):
        full = (1 << self.n_vars) - 1
        if self.mask & ~full or self.value & ~self.mask:
            raise InvariantViolation(
                f"malformed cube mask={self.mask:b} value={self.value:b} "
                f"for {self.n_vars} variables"
            )

    @classmethod
    def compute(cls, row: Iterable[Union[Bit, bool, int]]) -> "Cube":
        """Build the minterm of a fully specified row."""
        bits = list(row)
        n_vars = len(bits)
        value = 0
        for i, bit in enumerate(bits):
            if bit is Bit.DONT_CARE:
                raise InvariantViolation(
                    f"don't-care at index {i} while computing a minterm"
                )
            if bit is Bit.ON or (not isinstance(bit, Bit) and bit):
                value |= 1 << (n_vars - 1 - i)
        return cls(mask=(1 << n_vars) - 1, value=value, n_vars=n_vars)

    @classmethod
    def from_minterm(cls, minterm: int, n_vars: int) -> "Cube":
        return cls(mask=(1 << n_vars) - 1, value=minterm, n_vars=n_vars)

    @classmethod
    def from_literals(cls, literals: Iterable[tuple[int, bool]], n_vars: int) -> "Cube":
        """Build a cube from `(index, polarity)` pairs, e.g. `[(0, False)]` is a'."""
        mask = 0
        value = 0
        for index, polarity in literals:
            if not 0 <= index < n_vars:
                raise InvariantViolation(f"index {index} outside 0..{n_vars - 1}")
            bit = 1 << (n_vars - 1 - index)
            if mask & bit:
                raise InvariantViolation(f"index {index} constrained twice")
            mask |= bit
            if polarity:
                value |= bit
        return cls(mask=mask, value=value, n_vars=n_vars)

    @classmethod
    def universe(cls, n_vars: int) -> "Cube":
        """The empty product: every input matches."""
        return cls(mask=0, value=0, n_vars=n_vars)

    def _bit(self, index: int) -> int:
        return 1 << (self.n_vars - 1 - index)

    @property
    def num_literals(self) -> int:
        """Count the number of constrained positions."""
        return bin(self.mask).count('1')

    @property
    def literals(self) -> tuple[tuple[int, bool], ...]:
        """`(index, polarity)` pairs in ascending index order."""
        return tuple(
            (i, bool(self.value & self._bit(i)))
            for i in range(self.n_vars)
            if self.mask & self._bit(i)
        )

    def sort_key(self) -> tuple[tuple[int, bool], ...]:
        return self.literals

    def bit(self, index: int) -> Bit:
        bit = self._bit(index)
        if not self.mask & bit:
            return Bit.DONT_CARE
        return Bit.new(self.value & bit)

    def covers(self, minterm: Union[int, "Cube"]) -> bool:
        """Check if this cube covers a given minterm."""
        if isinstance(minterm, Cube):
            minterm = minterm.value
        return (minterm & self.mask) == self.value

    def minterms(self) -> Iterator[int]:
        """Enumerate every minterm this cube covers, ascending."""
        free = [
            self._bit(i) for i in reversed(range(self.n_vars))
            if not self.mask & self._bit(i)
        ]
        for combo in range(1 << len(free)):
            m = self.value
            for j, bit in enumerate(free):
                if combo >> j & 1:
                    m |= bit
            yield m

    def implies(self, other: "Cube") -> bool:
        """True if every minterm of self is covered by `other`."""
        return (self.mask & other.mask) == other.mask and \
            (self.value & other.mask) == other.value

    def conjoin(self, other: "Cube") -> "Cube":
        """AND of two cubes that constrain disjoint positions."""
        if self.mask & other.mask:
            raise InvariantViolation("conjoined cubes overlap")
        return Cube(self.mask | other.mask, self.value | other.value, self.n_vars)

    def without(self, other: "Cube") -> "Cube":
        """Drop the positions constrained by `other`."""
        mask = self.mask & ~other.mask
        return Cube(mask, self.value & mask, self.n_vars)

    def to_expr_str(self, var_names=None) -> str:
        """Convert to a product term string such as "a'bc"."""
        literals = []
        for index, polarity in self.literals:
            try:
                name = var_names[index] if var_names is not None else f"x{index}"
            except (IndexError, KeyError):
                raise ResourceExhausted(
                    f"no display name for input index {index}",
                    limit=len(var_names), observed=index + 1,
                ) from None
            literals.append(name if polarity else f"{name}'")

        return "".join(literals) if literals else "1"

    def to_pattern(self, dont_care: str = "x") -> str:
        """Positional rendering, e.g. "0x1"."""
        return "".join(
            dont_care if b is Bit.DONT_CARE else str(b)
            for b in (self.bit(i) for i in range(self.n_vars))
        )

    def __repr__(self):
        return f"Cube({self.to_pattern()})"


def compute(row: Iterable[Union[Bit, bool, int]]) -> Cube:
    return Cube.compute(row)


def mergeable(a: Cube, b: Cube) -> bool:
    """
    Hypercube adjacency test.

    Two cubes can merge if:
    1. They constrain the same positions
    2. They differ in exactly one constrained position
    """
    if a.n_vars != b.n_vars or a.mask != b.mask:
        return False
    diff = a.value ^ b.value
    return diff != 0 and diff & (diff - 1) == 0


def try_merge(a: Cube, b: Cube) -> Optional[Cube]:
    """
    Try to merge two cubes differing in exactly one variable.

    Returns new cube with one less literal, or None if can't merge.
    """
    if not mergeable(a, b):
        return None

    diff = a.value ^ b.value
    new_mask = a.mask & ~diff
    return Cube(mask=new_mask, value=a.value & new_mask, n_vars=a.n_vars)


def merge(a: Cube, b: Cube) -> Cube:
    merged = try_merge(a, b)
    if merged is None:
        raise InvariantViolation(f"{a!r} and {b!r} are not adjacent")
    return merged


def covers(cube: Cube, minterm: Union[int, Cube]) -> bool:
    return cube.covers(minterm)
