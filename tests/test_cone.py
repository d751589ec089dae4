from fractions import Fraction

import numpy as np

from toricproj import Cone


def test_ambient_dimension():
    c = Cone([[0, 1, 0], [1, 1, 0]])
    assert c.ambient_dimension() == 3


def test_dimension():
    c = Cone([[0, 1, 0], [1, 1, 0]])
    assert c.dimension() == 2


def test_rational_rays_are_made_primitive():
    c = Cone([["1/2", "1/3"], [2, 4]])
    assert c.rays().tolist() == [[3, 2], [1, 2]]


def test_dual_cone():
    c = Cone([[0, 1], [1, 1]])
    assert sorted(c.dual_cone().rays().tolist()) == [[-1, 1], [1, 0]]


def test_polar_cone():
    c = Cone([[0, 1], [1, 1]])
    pol = c.polar_cone()
    assert sorted(pol.rays().tolist()) == [[-1, 0], [1, -1]]
    for r in c.rays():
        for p in pol.rays():
            assert np.dot(r, p) <= 0


def test_polar_of_non_solid_cone_has_lines():
    c = Cone([[1, 0]])
    pol = c.polar().rays().tolist()
    assert len(pol) == 3
    assert [0, 1] in pol and [0, -1] in pol
    assert all(np.dot([1, 0], p) <= 0 for p in pol)


def test_rays_from_hyperplanes():
    c = Cone(hyperplanes=[[1, 0], [-1, 1]])
    assert sorted(c.rays().tolist()) == [[0, 1], [1, 1]]


def test_extremal_rays():
    c = Cone([[0, 1], [1, 1], [1, 0]])
    assert sorted(c.extremal_rays().tolist()) == [[0, 1], [1, 0]]


def test_contains():
    c = Cone([[1, 0], [0, 1]])
    assert c.contains([1, 1])
    assert c.contains([1, 0])
    assert not c.contains([1, 0], strict=True)
    assert not c.contains([-1, 1])


def test_contains_rational_point():
    c = Cone([[1, 0], [1, 1]])
    assert c.contains([1, Fraction(1, 2)], strict=True)
    assert c.contains(["1/3", "1/3"])
    assert not c.contains([1, "3/2"])


def test_intersection():
    c1 = Cone([[1, 0], [1, 2]])
    c2 = Cone([[0, 1], [2, 1]])
    c3 = c1.intersection(c2)
    assert sorted(c3.rays().tolist()) == [[1, 2], [2, 1]]


def test_is_pointed():
    c1 = Cone([[1, 0], [0, 1]])
    c2 = Cone([[1, 0], [0, 1], [-1, 0]])
    assert c1.is_pointed()
    assert not c2.is_pointed()


def test_is_simplicial():
    c1 = Cone([[1, 0, 0], [0, 1, 0], [0, 0, 1]])
    c2 = Cone([[1, 0, 0], [0, 1, 0], [0, 0, 1], [1, 1, -1]])
    assert c1.is_simplicial()
    assert not c2.is_simplicial()


def test_is_smooth():
    c1 = Cone([[1, 0, 0], [0, 1, 0], [0, 0, 1]])
    c2 = Cone([[2, 0, 1], [0, 1, 0], [1, 0, 2]])
    c3 = Cone([[1, 0, 0], [0, 1, 0]])
    assert c1.is_smooth()
    assert not c2.is_smooth()
    assert c3.is_smooth()


def test_is_solid():
    c1 = Cone([[1, 0], [0, 1]])
    c2 = Cone([[1, 0, 0], [0, 1, 0]])
    assert c1.is_solid()
    assert not c2.is_solid()


def test_equality():
    c1 = Cone([[1, 0, 0], [0, 1, 0], [0, 0, 1]])
    c2 = Cone([[2, 0, 1], [0, 1, 0], [1, 0, 2]])
    c3 = Cone([[0, 1], [1, 1]])
    c4 = Cone(hyperplanes=[[1, 0], [-1, 1]])
    assert c1 == c1
    assert c1 != c2
    assert c3 == c4
    assert hash(c3) == hash(c4)


def test_invalid_input():
    import pytest
    with pytest.raises(ValueError):
        Cone()
    with pytest.raises(ValueError):
        Cone(rays=[[1, 0]], hyperplanes=[[1, 0]])
    with pytest.raises(ValueError):
        Cone([1, 0])
