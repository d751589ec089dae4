# This file is part of toricproj.
#
# toricproj is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# toricproj is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with toricproj.  If not, see <https://www.gnu.org/licenses/>.

"""
This module contains the construction of projective bundles over toric
varieties, i.e. projectivizations of direct sums of toric line bundles.
"""

# Standard imports
import warnings
# Third party imports
import numpy as np
# toricproj imports
from toricproj import config
from toricproj.constructors import projective_space
from toricproj.divisor import ToricDivisor, ToricLineBundle
from toricproj.toricvariety import ToricVariety
from toricproj.utils import array_to_fmpq, exact_dot, integral_vector, ray_key



def proj(*summands, verbose=False):
    """
    **Description:**
    Computes the projectivization P(E) of a direct sum E = D_1 + ... + D_n of
    line bundles or torus-invariant divisors on a toric variety X.

    The fan of P(E) lives in a lattice of dimension dim(X)+n-1. Each ray v of
    X is lifted to (v, -sum_i <m_i, v> l_i), where l_1,...,l_n are the rays
    of the fan of P^(n-1) and m_i is the Cartier data of D_i on any maximal
    cone containing v. The fan also contains the rays (0, l_i), and its
    maximal cones are the joins of each maximal cone of X with each maximal
    cone of P^(n-1).

    :::note
    Only smooth toric varieties are supported, unless experimental features
    are enabled. On singular varieties the lifted rays can depend on the
    order of the maximal cones. See [`m_sigma`](#m_sigma).
    :::

    **Arguments:**
    - `*summands` *(ToricDivisor or ToricLineBundle)*: The summands of the
      direct sum. They must all be defined on the same toric variety.
      Divisors and line bundles can be mixed.
    - `verbose` *(bool, optional, default=False)*: When set to True it shows
      the progress while lifting the rays.

    **Returns:**
    *(ToricVariety)* The projective bundle. If a single summand is given then
    its toric variety is returned.

    **Example:**
    We construct the projective bundles P(O + O(1)) and P(O + O(2)) over the
    projective line. They are the Hirzebruch surfaces F_1 and F_2.
    ```python {4,7}
    from toricproj import projective_space, proj
    p1 = projective_space(1)
    d0, d1 = p1.toric_divisor([0,0]), p1.toric_divisor([1,0])
    x = proj(d0, d1)
    # A smooth 2-dimensional toric variety with 4 rays and 4 maximal cones
    l0, l1 = p1.toric_line_bundle([0]), p1.toric_line_bundle([2])
    y = proj(l0, l1)
    y.rays()
    # array([[ 1,  0],
    #        [-1,  2],
    #        [ 0,  1],
    #        [ 0, -1]])
    ```
    """
    if len(summands) == 0:
        raise ValueError("The direct sum is empty.")
    for s in summands:
        if not isinstance(s, (ToricDivisor, ToricLineBundle)):
            raise TypeError("The summands must be toric divisors or toric "
                            "line bundles.")

    v = summands[0].variety()
    if len(summands) == 1:
        return v
    if not all(s.variety() == v for s in summands):
        raise ValueError("The divisors are defined on different toric "
                         "varieties.")
    if not v.is_smooth():
        if not config._exp_features_enabled:
            raise NotImplementedError("Projectivizations are only supported "
                                      "over smooth toric varieties. Enable "
                                      "experimental features to use them on "
                                      "other fans.")
        warnings.warn("The toric variety is not smooth. The result may "
                      "depend on the order of the maximal cones and may be "
                      "incorrect.")

    divisors = [s.toric_divisor() if isinstance(s, ToricLineBundle) else s
                for s in summands]
    n = len(divisors)

    pn = projective_space(n-1)
    l = [array_to_fmpq(r) for r in pn.rays()]

    # Lift each ray using the first maximal cone that contains it
    lifted_rays = dict()
    for a,sigma in enumerate(v.maximal_cones(formal=True)):
        rays = sigma.rays()
        if all(ray_key(r) in lifted_rays for r in rays):
            continue
        pol_sigma = sigma.polar()
        m = [m_sigma(sigma, pol_sigma, d) for d in divisors]
        for r in rays:
            key = ray_key(r)
            if key in lifted_rays:
                continue
            shift = array_to_fmpq([0]*(n-1))
            for m_i,l_i in zip(m, l):
                shift = shift - l_i*exact_dot(m_i, r)
            lifted_rays[key] = np.concatenate([array_to_fmpq(r), shift])
        if verbose:
            print(f"proj: Lifted {len(lifted_rays)} of {v.n_rays()} rays "
                  f"after processing cone {a}.")
        if len(lifted_rays) == v.n_rays():
            break

    n_rays = v.n_rays()
    new_cones = [list(a) + [i+n_rays for i in b]
                 for a in v.maximal_cones() for b in pn.maximal_cones()]
    new_rays = ([lifted_rays[ray_key(r)] for r in v.rays()]
                + [np.concatenate([array_to_fmpq([0]*v.ambient_dim()), l_i])
                   for l_i in l])
    return ToricVariety(new_rays, new_cones)


def m_sigma(sigma, pol_sigma, divisor):
    """
    **Description:**
    Computes the Cartier data of a divisor on a maximal cone. For each ray v
    of the cone, the ray of the polar cone that is dual to the facet opposite
    to v is found and scaled to be integral. The result is minus the sum of
    these dual rays weighted by the coefficients of the divisor.

    On a smooth cone the result m satisfies <m, v> = a_v for every ray v of
    the cone, where a_v is the coefficient of the divisor on v, so <m, v>
    does not depend on the choice of the maximal cone containing v.

    :::note
    Only smooth cones are supported. Otherwise a NotImplementedError is
    raised, unless experimental features are enabled. In that case a
    warning is issued, and if the cone is not simplicial the first polar ray
    with non-zero pairing is used in place of the missing facet-dual ray.
    :::

    **Arguments:**
    - `sigma` *(Cone)*: A maximal cone of the fan.
    - `pol_sigma` *(Cone)*: The polar cone of sigma.
    - `divisor` *(ToricDivisor)*: A divisor on the toric variety.

    **Returns:**
    *(numpy.ndarray)* The vector m, as an array of fmpq entries.

    **Example:**
    ```python {4}
    from toricproj import projective_space
    p2 = projective_space(2)
    sigma = p2.maximal_cones(formal=True)[1]
    m_sigma(sigma, sigma.polar(), p2.toric_divisor([1,0,0]))
    # array([1, -1], dtype=object)
    ```
    """
    if not sigma.is_smooth():
        if not config._exp_features_enabled:
            raise NotImplementedError("The Cartier data is only supported on "
                                      "smooth cones. Enable experimental "
                                      "features to use it on other cones.")
        warnings.warn("The cone is not smooth. The result may be incorrect.")
    rays = sigma.rays()
    pol_rays = pol_sigma.rays()
    ans = array_to_fmpq([0]*sigma.ambient_dim())
    for i,ray in enumerate(rays):
        dual_ray = integral_vector(_facet_dual_ray(rays, i, pol_rays))
        ans = ans - dual_ray*divisor.coefficient(ray)
    return ans


def _facet_dual_ray(rays, i, pol_rays):
    """
    **Description:**
    Finds the ray of the polar cone that is dual to the facet opposite to
    the i-th ray of a simplicial cone. That is, the polar ray that pairs
    non-trivially with the i-th ray and vanishes on all the other rays.

    **Arguments:**
    - `rays` *(array_like)*: The rays of the cone.
    - `i` *(int)*: The index of the ray.
    - `pol_rays` *(array_like)*: The rays of the polar cone.

    **Returns:**
    *(numpy.ndarray)* The polar ray.
    """
    candidates = [p for p in pol_rays if exact_dot(rays[i], p) != 0]
    for p in candidates:
        if all(exact_dot(r, p) == 0 for j,r in enumerate(rays) if j != i):
            return p
    if len(candidates) == 0:
        raise ValueError(f"No ray of the polar cone pairs non-trivially "
                         f"with {list(rays[i])}.")
    if not config._exp_features_enabled:
        raise NotImplementedError("Projectivizations are only supported for "
                                  "simplicial fans. Enable experimental "
                                  "features to use them on other fans.")
    warnings.warn(f"No polar ray is dual to the facet opposite to "
                  f"{list(rays[i])}. The first polar ray with non-zero "
                  "pairing is used instead. The result may be incorrect.")
    return candidates[0]
