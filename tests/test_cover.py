import pytest

from minterm.cover import (
    CoverMode,
    check_cover,
    essential_implicants,
    exact_cover,
    greedy_cover,
    select_cover,
)
from minterm.cube import Cube
from minterm.errors import CoverageError
from minterm.quine_mccluskey import prime_implicants

from helpers import lit, random_on_set

# f = m(0, 1, 2, 5, 6, 7): six primes, no essentials, minimum cover of three
CYCLIC = {0b000, 0b001, 0b010, 0b101, 0b110, 0b111}


def covered_by(terms):
    got = set()
    for t in terms:
        got.update(t.minterms())
    return got


def test_essentials_of_example_x():
    required = {0b001, 0b010, 0b100, 0b110}
    primes = prime_implicants(required, 3)
    assert essential_implicants(primes, required) == [
        lit(3, (0, False), (1, False), (2, True)),
        lit(3, (0, True), (2, False)),
        lit(3, (1, True), (2, False)),
    ]


def test_cyclic_core_has_no_essentials():
    primes = prime_implicants(CYCLIC, 3)
    assert len(primes) == 6
    assert essential_implicants(primes, CYCLIC) == []


def test_greedy_on_cyclic_core():
    primes = prime_implicants(CYCLIC, 3)
    selected = greedy_cover(primes, CYCLIC)
    assert selected == [
        lit(3, (0, False), (1, False)),
        lit(3, (0, True), (1, True)),
        lit(3, (0, False), (2, False)),
        lit(3, (0, True), (2, True)),
    ]
    assert covered_by(selected) == CYCLIC


def test_exact_on_cyclic_core():
    primes = prime_implicants(CYCLIC, 3)
    selected = exact_cover(primes, CYCLIC)
    assert len(selected) == 3
    assert covered_by(selected) == CYCLIC


def test_exact_ceiling_falls_back_to_greedy():
    primes = prime_implicants(CYCLIC, 3)
    assert exact_cover(primes, CYCLIC, max_implicants=2) is None
    selected = select_cover(primes, CYCLIC, CoverMode.EXACT, exact_max_implicants=2)
    assert len(selected) == 4


def test_select_cover_is_sorted():
    primes = prime_implicants(CYCLIC, 3)
    selected = select_cover(primes, CYCLIC, CoverMode.EXACT)
    assert selected == sorted(selected, key=Cube.sort_key)


def test_select_cover_empty():
    assert select_cover([], set()) == []


def test_uncoverable_minterm():
    with pytest.raises(CoverageError):
        greedy_cover([lit(2, (0, True))], {0b00})


def test_check_cover():
    check_cover([lit(2, (0, True))], {0b10, 0b11})
    with pytest.raises(CoverageError, match="missing"):
        check_cover([lit(2, (0, True))], {0b01, 0b10, 0b11})
    with pytest.raises(CoverageError, match="extra"):
        check_cover([lit(2, (0, True))], {0b10})


@pytest.mark.parametrize("mode", list(CoverMode))
@pytest.mark.parametrize("seed", range(15))
def test_cover_properties(seed, mode):
    required = random_on_set(seed, 4)
    primes = prime_implicants(required, 4)
    selected = select_cover(primes, required, mode)

    assert covered_by(selected) == required

    # no term can be dropped
    for term in selected:
        rest = [t for t in selected if t != term]
        assert covered_by(rest) != required

    for essential in essential_implicants(primes, required):
        assert essential in selected


@pytest.mark.parametrize("seed", range(15))
def test_exact_never_worse_than_greedy(seed):
    required = random_on_set(seed, 4)
    primes = prime_implicants(required, 4)
    greedy = select_cover(primes, required, CoverMode.GREEDY)
    exact = select_cover(primes, required, CoverMode.EXACT)
    assert len(exact) <= len(greedy)
