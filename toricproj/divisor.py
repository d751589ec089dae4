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
This module contains tools for torus-invariant divisors and line bundles on
toric varieties.
"""

# toricproj imports
from toricproj.utils import (array_to_fmpq, exact_dot, independent_rows,
                             solve_exact, to_fmpq)



class ToricDivisor:
    """
    This class handles torus-invariant Weil divisors on a toric variety,
    i.e. formal combinations of the prime toric divisors, one for each ray of
    the fan. Coefficients are exact rational numbers.

    ## Constructor

    ### `toricproj.divisor.ToricDivisor`

    **Arguments:**
    - `variety` *(ToricVariety)*: The toric variety.
    - `coefficients` *(array_like)*: One coefficient per ray of the fan, in
      the order of the rays of the variety.

    **Example:**
    We construct the divisor of a point on the projective line.
    ```python {3}
    from toricproj import projective_space, ToricDivisor
    p1 = projective_space(1)
    d = ToricDivisor(p1, [1,0])
    # A torus-invariant divisor with coefficients (1, 0) on a smooth 1-dimensional toric variety with 2 rays and 2 maximal cones
    ```
    """

    def __init__(self, variety, coefficients):
        """
        **Description:**
        Initializes a `ToricDivisor` object.

        **Arguments:**
        - `variety` *(ToricVariety)*: The toric variety.
        - `coefficients` *(array_like)*: One coefficient per ray.

        **Returns:**
        Nothing.
        """
        coefficients = tuple(to_fmpq(c) for c in coefficients)
        if len(coefficients) != variety.n_rays():
            raise ValueError(f"Expected {variety.n_rays()} coefficients but "
                             f"{len(coefficients)} were given.")
        self._variety = variety
        self._coefficients = coefficients
        self._hash = None
        self._is_cartier = None
        self._is_q_cartier = None

    def __repr__(self):
        """
        **Description:**
        Returns a string describing the divisor.

        **Arguments:**
        None.

        **Returns:**
        *(str)* A string describing the divisor.
        """
        coeffs = ", ".join(str(c) for c in self._coefficients)
        return (f"A torus-invariant divisor with coefficients ({coeffs}) on "
                f"{str(self._variety)[0].lower()}{str(self._variety)[1:]}")

    def __eq__(self, other):
        """
        **Description:**
        Implements comparison of divisors with ==. Divisors are equal when
        they live on the same toric variety and have the same coefficient
        on every ray.

        **Arguments:**
        - `other` *(ToricDivisor)*: The other divisor.

        **Returns:**
        *(bool)* The truth value of the divisors being equal.
        """
        if not isinstance(other, ToricDivisor):
            return NotImplemented
        if self._variety != other._variety:
            return False
        return all(other.coefficient(r) == c for r,c in
                   zip(self._variety.rays(), self._coefficients))

    def __ne__(self, other):
        if not isinstance(other, ToricDivisor):
            return NotImplemented
        return not (self == other)

    def __hash__(self):
        if self._hash is None:
            self._hash = hash((2, self._variety,
                               frozenset((tuple(int(x) for x in r), int(c.p),
                                          int(c.q)) for r,c in
                                          zip(self._variety.rays(),
                                              self._coefficients))))
        return self._hash

    def _aligned_coefficients(self, other):
        """
        **Description:**
        Returns the coefficients of another divisor in the ray order of this
        divisor's variety.

        **Arguments:**
        - `other` *(ToricDivisor)*: The other divisor.

        **Returns:**
        *(list)* The coefficients of the other divisor.
        """
        if self._variety != other._variety:
            raise ValueError("The divisors are defined on different toric "
                             "varieties.")
        return [other.coefficient(r) for r in self._variety.rays()]

    def __add__(self, other):
        if not isinstance(other, ToricDivisor):
            return NotImplemented
        return ToricDivisor(self._variety,
                            [a+b for a,b in zip(self._coefficients,
                                        self._aligned_coefficients(other))])

    def __neg__(self):
        return ToricDivisor(self._variety, [-c for c in self._coefficients])

    def __sub__(self, other):
        if not isinstance(other, ToricDivisor):
            return NotImplemented
        return self + (-other)

    def __rmul__(self, k):
        return ToricDivisor(self._variety,
                            [to_fmpq(k)*c for c in self._coefficients])

    def variety(self):
        """
        **Description:**
        Returns the toric variety on which the divisor is defined.

        **Arguments:**
        None.

        **Returns:**
        *(ToricVariety)* The toric variety.

        **Aliases:**
        `toric_variety`.
        """
        return self._variety
    # aliases
    toric_variety = variety

    def coefficients(self):
        """
        **Description:**
        Returns the coefficients of the divisor, in the order of the rays of
        its toric variety.

        **Arguments:**
        None.

        **Returns:**
        *(tuple)* The coefficients, as fmpq numbers.
        """
        return self._coefficients

    def coefficient(self, ray):
        """
        **Description:**
        Returns the coefficient of the divisor on the prime toric divisor
        corresponding to a ray. The ray is looked up by exact equality among
        the rays of the divisor's own toric variety.

        **Arguments:**
        - `ray` *(array_like)*: A ray of the fan.

        **Returns:**
        *(flint.fmpq)* The coefficient.

        **Example:**
        ```python {3}
        p1 = projective_space(1)
        d = ToricDivisor(p1, [1,0])
        d.coefficient([1])
        # 1
        ```
        """
        return self._coefficients[self._variety.ray_index(ray)]

    def is_prime(self):
        """
        **Description:**
        Returns True if the divisor is a prime toric divisor.

        **Arguments:**
        None.

        **Returns:**
        *(bool)* The truth value of the divisor being prime.
        """
        return (sum(c == 1 for c in self._coefficients) == 1
                and sum(c == 0 for c in self._coefficients)
                    == len(self._coefficients)-1)

    def _cartier_data(self):
        """
        **Description:**
        For every maximal cone, finds the rational vector m with
        <m, v> = a_v for each ray v of the cone, where a_v is the
        coefficient of the divisor on v, if such a vector exists.

        **Arguments:**
        None.

        **Returns:**
        *(list)* A list with the vector for each maximal cone, or None for
        cones where no such vector exists.
        """
        v = self._variety
        data = []
        for c,cone in zip(v.maximal_cones(), v.maximal_cones(formal=True)):
            if not cone.is_solid():
                raise NotImplementedError("Cartier data is only supported "
                                          "for fans whose maximal cones are "
                                          "full-dimensional.")
            R = v.rays()[list(c)]
            a = [self._coefficients[i] for i in c]
            ind = independent_rows(R)
            m = solve_exact(R[ind], [a[i] for i in ind])
            if all(exact_dot(m, r) == ai for r,ai in zip(R, a)):
                data.append(m)
            else:
                data.append(None)
        return data

    def is_q_cartier(self):
        """
        **Description:**
        Returns True if the divisor is Q-Cartier, i.e. if some multiple of it
        is Cartier.

        **Arguments:**
        None.

        **Returns:**
        *(bool)* The truth value of the divisor being Q-Cartier.
        """
        if self._is_q_cartier is None:
            self._is_q_cartier = all(m is not None
                                     for m in self._cartier_data())
        return self._is_q_cartier

    def is_cartier(self):
        """
        **Description:**
        Returns True if the divisor is Cartier, i.e. if on each maximal cone
        it is the divisor of a character of the torus.

        **Arguments:**
        None.

        **Returns:**
        *(bool)* The truth value of the divisor being Cartier.

        **Example:**
        ```python {4,6}
        from toricproj import ToricVariety
        v = ToricVariety([[1,0],[0,1],[-1,-2]], [[1,2],[0,2],[0,1]])
        v.toric_divisor([1,0,0]).is_cartier()
        # False
        v.toric_divisor([2,0,0]).is_cartier()
        # True
        ```
        """
        if self._is_cartier is None:
            data = self._cartier_data()
            self._is_cartier = all(m is not None and all(c.q == 1 for c in m)
                                   for m in data)
        return self._is_cartier

    def divisor_class(self):
        """
        **Description:**
        Returns the class of the divisor in the divisor basis of its toric
        variety. It is found by subtracting the principal divisor that agrees
        with this divisor on the rays that are not in the basis.

        **Arguments:**
        None.

        **Returns:**
        *(tuple)* The coordinates of the class, as fmpq numbers.

        **Example:**
        ```python {3}
        p2 = projective_space(2)
        d = ToricDivisor(p2, [1,1,1])
        d.divisor_class()
        # (3,)
        ```
        """
        v = self._variety
        rest = v._spanning_rays()
        m = solve_exact(v.rays()[rest], [self._coefficients[i] for i in rest])
        return tuple(self._coefficients[j] - exact_dot(m, v.rays()[j])
                     for j in v.divisor_basis())

    def line_bundle(self):
        """
        **Description:**
        Returns the line bundle associated to the divisor. The divisor must
        be Cartier.

        **Arguments:**
        None.

        **Returns:**
        *(ToricLineBundle)* The line bundle.
        """
        if not self.is_cartier():
            raise ValueError("Only Cartier divisors define line bundles.")
        return ToricLineBundle(self._variety, self.divisor_class())


class ToricLineBundle:
    """
    This class handles toric line bundles, which are specified by their
    divisor class in the divisor basis of the toric variety.

    ## Constructor

    ### `toricproj.divisor.ToricLineBundle`

    **Arguments:**
    - `variety` *(ToricVariety)*: The toric variety.
    - `divisor_class` *(array_like)*: The coordinates of the class in the
      basis given by `ToricVariety.divisor_basis`.
    - `basis` *(array_like, optional)*: The divisor basis in which the
      coordinates are given. If not specified, the current divisor basis of
      the toric variety is used. The basis is stored with the line bundle,
      so later calls to `ToricVariety.set_divisor_basis` do not change it.

    **Example:**
    We construct O(2) on the projective line and find a divisor
    representing it.
    ```python {3}
    from toricproj import projective_space, ToricLineBundle
    p1 = projective_space(1)
    l = ToricLineBundle(p1, [2])
    l.toric_divisor().coefficients()
    # (0, 2)
    ```
    """

    def __init__(self, variety, divisor_class, basis=None):
        divisor_class = tuple(to_fmpq(c) for c in divisor_class)
        if basis is None:
            basis = variety.divisor_basis()
        basis = tuple(int(i) for i in basis)
        if len(divisor_class) != len(basis):
            raise ValueError(f"Expected {len(basis)} coordinates but "
                             f"{len(divisor_class)} were given.")
        self._variety = variety
        self._basis = basis
        self._divisor_class = divisor_class
        self._divisor = None

    def __repr__(self):
        coords = ", ".join(str(c) for c in self._divisor_class)
        return (f"A toric line bundle of class ({coords}) on "
                f"{str(self._variety)[0].lower()}{str(self._variety)[1:]}")

    def __eq__(self, other):
        """
        **Description:**
        Implements comparison of line bundles with ==. Line bundles are
        equal when they live on the same toric variety and their
        representative divisors are linearly equivalent.

        **Arguments:**
        - `other` *(ToricLineBundle)*: The other line bundle.

        **Returns:**
        *(bool)* The truth value of the line bundles being equal.
        """
        if not isinstance(other, ToricLineBundle):
            return NotImplemented
        if self._variety != other._variety:
            return False
        if self._variety is other._variety and self._basis == other._basis:
            return self._divisor_class == other._divisor_class
        diff = self.toric_divisor() - other.toric_divisor()
        return all(c == 0 for c in diff.divisor_class())

    def __ne__(self, other):
        if not isinstance(other, ToricLineBundle):
            return NotImplemented
        return not (self == other)

    def __hash__(self):
        return hash((3, self._variety))

    def __mul__(self, other):
        """
        **Description:**
        Implements the tensor product of line bundles with *.

        **Arguments:**
        - `other` *(ToricLineBundle)*: The other line bundle.

        **Returns:**
        *(ToricLineBundle)* The tensor product.
        """
        if not isinstance(other, ToricLineBundle):
            return NotImplemented
        if self._variety is other._variety and self._basis == other._basis:
            return ToricLineBundle(self._variety,
                                   [a+b for a,b in zip(self._divisor_class,
                                                       other._divisor_class)],
                                   self._basis)
        return (self.toric_divisor() + other.toric_divisor()).line_bundle()

    def dual(self):
        """
        **Description:**
        Returns the dual line bundle.

        **Arguments:**
        None.

        **Returns:**
        *(ToricLineBundle)* The dual line bundle.
        """
        return ToricLineBundle(self._variety, [-c for c in self._divisor_class],
                               self._basis)

    def variety(self):
        """
        **Description:**
        Returns the toric variety on which the line bundle is defined.

        **Arguments:**
        None.

        **Returns:**
        *(ToricVariety)* The toric variety.

        **Aliases:**
        `toric_variety`.
        """
        return self._variety
    # aliases
    toric_variety = variety

    def divisor_class(self):
        """
        **Description:**
        Returns the coordinates of the class of the line bundle in the
        divisor basis given by [`divisor_basis`](#divisor_basis).

        **Arguments:**
        None.

        **Returns:**
        *(tuple)* The coordinates, as fmpq numbers.
        """
        return self._divisor_class

    def divisor_basis(self):
        """
        **Description:**
        Returns the divisor basis in which the class of the line bundle is
        given. It is the basis of the toric variety at the time the line
        bundle was constructed.

        **Arguments:**
        None.

        **Returns:**
        *(tuple)* The indices of the basis divisors.
        """
        return self._basis

    def toric_divisor(self):
        """
        **Description:**
        Returns the torus-invariant divisor representing the line bundle
        whose coefficients are the class coordinates on the divisor basis and
        zero on every other ray.

        **Arguments:**
        None.

        **Returns:**
        *(ToricDivisor)* The representative divisor.
        """
        if self._divisor is None:
            coeffs = array_to_fmpq([0]*self._variety.n_rays())
            for j,c in zip(self._basis, self._divisor_class):
                coeffs[j] = c
            self._divisor = ToricDivisor(self._variety, coeffs)
        return self._divisor
