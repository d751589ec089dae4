from fractions import Fraction

from flint import fmpq
import pytest

from toricproj.utils import (denominator_lcm, exact_dot, independent_rows,
                             integer_rank, integral_vector, primitive_vector,
                             ray_key, solve_exact, to_fmpq)


def test_to_fmpq():
    assert to_fmpq(2) == fmpq(2)
    assert to_fmpq("3/4") == fmpq(3, 4)
    assert to_fmpq(Fraction(-1, 3)) == fmpq(-1, 3)
    assert to_fmpq(0.5) == fmpq(1, 2)
    with pytest.raises(TypeError):
        to_fmpq(None)


def test_exact_dot():
    assert exact_dot([1, "1/2"], [2, 3]) == fmpq(7, 2)
    with pytest.raises(ValueError):
        exact_dot([1, 2], [1])


def test_integral_vector():
    assert denominator_lcm(["1/2", "-1/3", 1]) == 6
    assert list(integral_vector(["1/2", "-1/3", 1])) == [3, -2, 6]
    assert denominator_lcm([]) == 1


def test_primitive_vector():
    assert primitive_vector(["1/2", 1, 0]).tolist() == [1, 2, 0]
    assert primitive_vector([-4, 6]).tolist() == [-2, 3]
    with pytest.raises(ValueError):
        primitive_vector([0, 0])


def test_ray_key():
    assert ray_key([1, "1/2"]) == ray_key([fmpq(1), Fraction(1, 2)])
    assert ray_key([1, 2]) != ray_key([2, 4])


def test_rank_and_independent_rows():
    rows = [[1, 0], [2, 0], [0, 1], [1, 1]]
    assert integer_rank(rows) == 2
    assert independent_rows(rows) == [0, 2]
    assert integer_rank([]) == 0


def test_solve_exact():
    x = solve_exact([[2, 0], [1, 1]], [1, 2])
    assert list(x) == [fmpq(1, 2), fmpq(3, 2)]
