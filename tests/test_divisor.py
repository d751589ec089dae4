from flint import fmpq
import pytest

from toricproj import (ToricDivisor, ToricLineBundle, ToricVariety,
                       hirzebruch_surface, projective_space)


def test_coefficients():
    p1 = projective_space(1)
    d = ToricDivisor(p1, [1, "1/2"])
    assert d.coefficients() == (fmpq(1), fmpq(1, 2))
    assert d.coefficient([1]) == 1
    assert d.coefficient([-1]) == fmpq(1, 2)
    assert d.variety() is p1
    with pytest.raises(ValueError):
        ToricDivisor(p1, [1, 2, 3])


def test_coefficient_lookup_on_reordered_variety():
    v1 = ToricVariety([[1], [-1]], [[0], [1]])
    v2 = ToricVariety([[-1], [1]], [[0], [1]])
    d = ToricDivisor(v2, [5, 7])
    assert v1 == v2
    assert d.coefficient([1]) == 7
    assert d == ToricDivisor(v1, [7, 5])


def test_arithmetic():
    p2 = projective_space(2)
    d1 = p2.toric_divisor([1, 0, 0])
    d2 = p2.toric_divisor([0, 2, 1])
    assert (d1 + d2).coefficients() == (1, 2, 1)
    assert (d1 - d2).coefficients() == (1, -2, -1)
    assert (-d1).coefficients() == (-1, 0, 0)
    assert (3*d2).coefficients() == (0, 6, 3)
    with pytest.raises(ValueError):
        d1 + projective_space(1).toric_divisor([0, 0])


def test_is_prime():
    p2 = projective_space(2)
    assert p2.toric_divisor([0, 1, 0]).is_prime()
    assert not p2.toric_divisor([0, 2, 0]).is_prime()
    assert not p2.toric_divisor([1, 1, 0]).is_prime()


def test_is_cartier():
    v = ToricVariety([[1, 0], [0, 1], [-1, -2]], [[1, 2], [0, 2], [0, 1]])
    d1 = v.toric_divisor([1, 0, 0])
    d2 = v.toric_divisor([2, 0, 0])
    assert not d1.is_cartier()
    assert d1.is_q_cartier()
    assert d2.is_cartier()
    assert projective_space(2).toric_divisor([1, 2, 3]).is_cartier()


def test_is_cartier_non_solid_cones():
    v = ToricVariety([[1, 0], [-1, 0]], [[0], [1]])
    with pytest.raises(NotImplementedError):
        v.toric_divisor([1, 0]).is_cartier()


def test_divisor_class():
    p2 = projective_space(2)
    assert p2.toric_divisor([1, 1, 1]).divisor_class() == (3,)
    assert p2.toric_divisor([1, 0, 0]).divisor_class() == (1,)
    f1 = hirzebruch_surface(1)
    # D_0 and D_2 are linearly equivalent on F_1
    assert f1.toric_divisor([0, 0, 1, 0]).divisor_class() == (1, 0)
    assert f1.toric_divisor([1, 0, 0, 0]).divisor_class() == (1, 0)
    assert f1.toric_divisor([0, 1, 0, 0]).divisor_class() == (-1, 1)


def test_line_bundle_to_divisor():
    p1 = projective_space(1)
    l = ToricLineBundle(p1, [2])
    assert l.toric_divisor().coefficients() == (0, 2)
    assert l.divisor_class() == (2,)
    with pytest.raises(ValueError):
        ToricLineBundle(p1, [1, 1])


def test_divisor_to_line_bundle():
    p2 = projective_space(2)
    l = p2.toric_divisor([1, 1, 1]).line_bundle()
    assert l == p2.toric_line_bundle([3])
    v = ToricVariety([[1, 0], [0, 1], [-1, -2]], [[1, 2], [0, 2], [0, 1]])
    with pytest.raises(ValueError):
        v.toric_divisor([1, 0, 0]).line_bundle()


def test_line_bundle_operations():
    p2 = projective_space(2)
    l1 = p2.toric_line_bundle([1])
    l2 = p2.toric_line_bundle([2])
    assert l1*l2 == p2.toric_line_bundle([3])
    assert l1.dual() == p2.toric_line_bundle([-1])
    assert l1*l1.dual() == p2.trivial_line_bundle()
    assert l1 != l2


def test_line_bundle_keeps_its_basis():
    p2 = projective_space(2)
    l1 = p2.toric_line_bundle([1])
    assert l1.divisor_basis() == (2,)
    p2.set_divisor_basis([0])
    l2 = p2.toric_line_bundle([1])
    assert l2.divisor_basis() == (0,)
    assert l1.toric_divisor().coefficients() == (0, 0, 1)
    assert l2.toric_divisor().coefficients() == (1, 0, 0)
    assert l1 == l2
    assert l1 != p2.toric_line_bundle([2])
    assert (l1*l2).divisor_class() == (2,)
    assert (l1*l2).divisor_basis() == (0,)
    assert l1.dual().toric_divisor().coefficients() == (0, 0, -1)
