import pytest

from minterm.cube import Cube
from minterm.errors import ResourceExhausted
from minterm.quine_mccluskey import merge_level, prime_implicants

from helpers import lit, random_on_set


def test_single_minterm():
    assert prime_implicants({0b101}, 3) == [Cube.from_minterm(0b101, 3)]


def test_constant_function():
    assert prime_implicants({0, 1}, 1) == [Cube.universe(1)]
    assert prime_implicants(range(4), 2) == [Cube.universe(2)]


def test_empty_on_set():
    assert prime_implicants(set(), 3) == []


def test_example_x():
    primes = prime_implicants({0b001, 0b010, 0b100, 0b110}, 3)
    assert set(primes) == {
        lit(3, (0, False), (1, False), (2, True)),
        lit(3, (0, True), (2, False)),
        lit(3, (1, True), (2, False)),
    }


def test_example_y():
    primes = prime_implicants({0b000, 0b010, 0b100, 0b101, 0b110}, 3)
    assert primes == [
        lit(3, (0, True), (1, False)),
        lit(3, (2, False)),
    ]


def test_accepts_minterm_cubes(example_table):
    primes = prime_implicants(example_table.minterms(1), 3)
    assert set(primes) == {lit(3, (0, True), (1, False)), lit(3, (2, False))}


def test_merge_level():
    level = [Cube.from_minterm(m, 3) for m in (0b000, 0b001, 0b011)]
    next_level, absorbed, steps = merge_level(level)
    assert next_level == [
        lit(3, (0, False), (1, False)),
        lit(3, (0, False), (2, True)),
    ]
    assert absorbed == set(level)
    assert steps == 2


@pytest.mark.parametrize("seed", range(20))
def test_primes_are_sound_and_maximal(seed):
    on_set = random_on_set(seed, 4)
    primes = prime_implicants(on_set, 4)

    covered = set()
    for p in primes:
        assert set(p.minterms()) <= on_set
        covered.update(p.minterms())
    assert covered == on_set

    for p in primes:
        for q in primes:
            if p != q:
                assert not p.implies(q)


def test_implicant_ceiling():
    with pytest.raises(ResourceExhausted) as info:
        prime_implicants(range(16), 4, max_implicants=10)
    assert info.value.limit == 10
    assert info.value.observed == 16


def test_merge_step_ceiling():
    with pytest.raises(ResourceExhausted):
        prime_implicants(range(16), 4, max_merge_steps=5)


def test_implicant_ceiling_stops_within_a_level():
    # level 1 of the full 10-variable cube holds 5120 merges
    with pytest.raises(ResourceExhausted) as info:
        prime_implicants(range(1 << 10), 10, max_implicants=1100)
    assert info.value.limit == 1100
    assert info.value.observed == 1101


def test_merge_level_counts_earlier_levels():
    level = [Cube.from_minterm(m, 3) for m in range(8)]
    with pytest.raises(ResourceExhausted) as info:
        merge_level(level, created=8, max_implicants=10)
    assert info.value.observed == 11
