from itertools import product

import pytest

from toricproj import (ToricVariety, config, hirzebruch_surface, proj,
                       projective_space)
from toricproj.proj import m_sigma
from toricproj.utils import exact_dot


def test_empty_direct_sum():
    with pytest.raises(ValueError, match="empty"):
        proj()


def test_single_summand_returns_base():
    p2 = projective_space(2)
    assert proj(p2.toric_divisor([1, 2, 3])) is p2
    assert proj(p2.toric_line_bundle([4])) is p2


def test_different_varieties():
    d1 = projective_space(1).toric_divisor([0, 0])
    d2 = projective_space(2).toric_divisor([0, 0, 0])
    with pytest.raises(ValueError, match="different toric varieties"):
        proj(d1, d2)


def test_invalid_summand():
    p1 = projective_space(1)
    with pytest.raises(TypeError):
        proj(p1.toric_divisor([0, 0]), [1, 0])


def test_equal_varieties_are_accepted():
    v1 = ToricVariety([[1], [-1]], [[0], [1]])
    v2 = ToricVariety([[-1], [1]], [[0], [1]])
    x = proj(v1.toric_divisor([1, 0]), v2.toric_divisor([0, 0]))
    # the coefficient 1 sits on the ray [1] of v1
    assert x.rays().tolist() == [[1, -1], [-1, 0], [0, 1], [0, -1]]


def test_ray_and_cone_counts():
    p2 = projective_space(2)
    ds = [p2.toric_divisor([0, 0, 0]), p2.toric_divisor([1, 0, 0]),
          p2.toric_divisor([0, 2, 0])]
    x = proj(*ds)
    assert x.ambient_dim() == 4
    assert x.n_rays() == 3 + 3
    assert x.n_maximal_cones() == 3 * 3
    assert all(len(c) == 4 for c in x.maximal_cones())
    assert x.is_smooth()
    assert x.is_fan()


def test_trivial_bundle_is_product():
    p1 = projective_space(1)
    d = p1.toric_divisor([0, 0])
    x = proj(d, d)
    assert x.rays().tolist() == [[1, 0], [-1, 0], [0, 1], [0, -1]]
    assert x.n_maximal_cones() == 4
    assert all(len(c) == 2 for c in x.maximal_cones())
    assert x == p1 * p1


def test_divisors_on_p1():
    p1 = projective_space(1)
    x = proj(p1.toric_divisor([0, 0]), p1.toric_divisor([1, 0]))
    assert x.rays().tolist() == [[1, 1], [-1, 0], [0, 1], [0, -1]]
    assert x.maximal_cones() == ((1, 3), (1, 2), (0, 3), (0, 2))
    assert x.is_fan()


def test_line_bundles_on_p1():
    p1 = projective_space(1)
    y = proj(p1.toric_line_bundle([0]), p1.toric_line_bundle([2]))
    assert y.rays().tolist() == [[1, 0], [-1, 2], [0, 1], [0, -1]]
    assert y.maximal_cones() == ((1, 3), (1, 2), (0, 3), (0, 2))
    assert y == hirzebruch_surface(2)


def test_mixed_summands():
    p1 = projective_space(1)
    y = proj(p1.toric_divisor([0, 0]), p1.toric_line_bundle([2]))
    assert y.rays().tolist() == [[1, 0], [-1, 2], [0, 1], [0, -1]]


def test_hirzebruch_surfaces():
    p1 = projective_space(1)
    for r in range(4):
        x = proj(p1.trivial_line_bundle(), p1.toric_line_bundle([r]))
        assert x == hirzebruch_surface(r)


def test_three_summands_on_p1():
    p1 = projective_space(1)
    x = proj(p1.toric_divisor([0, 0]), p1.toric_divisor([1, 0]),
             p1.toric_divisor([0, 1]))
    assert x.rays().tolist() == [[1, 0, -1], [-1, 1, 1], [0, 1, 0],
                                 [0, 0, 1], [0, -1, -1]]
    assert x.maximal_cones() == ((1, 3, 4), (1, 2, 4), (1, 2, 3),
                                 (0, 3, 4), (0, 2, 4), (0, 2, 3))
    assert x.is_fan()


def test_m_sigma():
    p2 = projective_space(2)
    sigma = p2.maximal_cones(formal=True)[1]
    m = m_sigma(sigma, sigma.polar(), p2.toric_divisor([1, 0, 0]))
    assert list(m) == [1, -1]


def test_m_sigma_is_independent_of_the_cone():
    bases = [projective_space(2), hirzebruch_surface(1), hirzebruch_surface(3),
             projective_space(1) * projective_space(2)]
    for v in bases:
        for coeffs in product([-1, 0, 2], repeat=v.n_rays()):
            if sum(abs(c) for c in coeffs) > 4:
                continue
            d = v.toric_divisor(coeffs)
            values = dict()
            for c,sigma in zip(v.maximal_cones(),
                               v.maximal_cones(formal=True)):
                m = m_sigma(sigma, sigma.polar(), d)
                for i,ray in zip(c, sigma.rays()):
                    val = exact_dot(m, ray)
                    assert values.setdefault(i, val) == val
            assert all(values[i] == coeffs[i] for i in range(v.n_rays()))


def test_non_simplicial_fan():
    v = ToricVariety([[1, 0, 1], [0, 1, 1], [-1, 0, 1], [0, -1, 1]],
                     [[0, 1, 2, 3]])
    d = v.toric_divisor([0, 0, 0, 0])
    with pytest.raises(NotImplementedError):
        proj(d, d)


def test_non_simplicial_fan_experimental(monkeypatch):
    monkeypatch.setattr(config, "_exp_features_enabled", True)
    v = ToricVariety([[1, 0, 1], [0, 1, 1], [-1, 0, 1], [0, -1, 1]],
                     [[0, 1, 2, 3]])
    d = v.toric_divisor([0, 0, 0, 0])
    with pytest.warns(UserWarning):
        x = proj(d, d)
    assert x.n_rays() == 6
    assert x.n_maximal_cones() == 2
    assert x.rays().tolist()[:4] == [[1, 0, 1, 0], [0, 1, 1, 0],
                                     [-1, 0, 1, 0], [0, -1, 1, 0]]


def test_verbose(capsys):
    p1 = projective_space(1)
    d = p1.toric_divisor([0, 0])
    proj(d, d, verbose=True)
    assert "proj: Lifted" in capsys.readouterr().out


def test_enable_experimental_features(monkeypatch):
    monkeypatch.setattr(config, "_exp_features_enabled", False)
    with pytest.warns(UserWarning):
        config.enable_experimental_features()
    assert config._exp_features_enabled


def test_singular_base():
    # the weighted projective plane P(1,1,2), with its cones in two orders
    rays = [[1, 0], [0, 1], [-1, -2]]
    v1 = ToricVariety(rays, [[0, 1], [1, 2], [0, 2]])
    v2 = ToricVariety(rays, [[0, 2], [1, 2], [0, 1]])
    assert v1 == v2
    for v in (v1, v2):
        d = v.toric_divisor([2, 0, 0])
        assert d.is_cartier()
        assert not v.is_smooth()
        with pytest.raises(NotImplementedError):
            proj(v.toric_divisor([0, 0, 0]), d)


def test_m_sigma_singular_cone():
    v = ToricVariety([[1, 0], [0, 1], [-1, -2]], [[0, 1], [1, 2], [0, 2]])
    d = v.toric_divisor([2, 0, 0])
    smooth, _, singular = v.maximal_cones(formal=True)
    assert list(m_sigma(smooth, smooth.polar(), d)) == [2, 0]
    with pytest.raises(NotImplementedError):
        m_sigma(singular, singular.polar(), d)


def test_singular_base_experimental(monkeypatch):
    monkeypatch.setattr(config, "_exp_features_enabled", True)
    v = ToricVariety([[1, 0], [0, 1], [-1, -2]], [[0, 1], [1, 2], [0, 2]])
    with pytest.warns(UserWarning):
        x = proj(v.toric_divisor([0, 0, 0]), v.toric_divisor([2, 0, 0]))
    assert x.n_rays() == 5
    assert x.n_maximal_cones() == 6
