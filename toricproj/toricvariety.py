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
This module contains tools designed for toric variety computations.
"""

#Standard imports
from itertools import combinations
# Third party imports
from scipy.sparse import csr_matrix
import numpy as np
# toricproj imports
from toricproj.utils import (independent_rows, integer_rank, primitive_vector,
                             ray_key, solve_exact, array_to_fmpq)
from toricproj.divisor import ToricDivisor, ToricLineBundle
from toricproj.cone import Cone



class ToricVariety:
    """
    This class handles normal toric varieties described by a fan, given by
    its rays and its maximal cones. It is the provider of fans used by the
    [`proj`](./proj) construction.

    ## Constructor

    ### `toricproj.toricvariety.ToricVariety`

    **Description:**
    Constructs a `ToricVariety` object. This is handled by the hidden
    [`__init__`](#__init__) function.

    **Arguments:**
    - `rays` *(array_like)*: The rays of the fan. Rational entries are
      allowed, and each vector is replaced by the primitive lattice vector in
      the same direction.
    - `cones` *(array_like)*: The maximal cones of the fan, each given as a
      collection of (0-based) ray indices.
    - `check` *(bool, optional, default=True)*: Whether to check the input.
      Recommended if constructing a variety directly. The full fan axiom is
      not checked here, since it is much slower. Use [`is_fan`](#is_fan) for
      that.

    **Example:**
    We construct the projective plane from its fan.
    ```python {2}
    from toricproj import ToricVariety
    v = ToricVariety([[1,0],[0,1],[-1,-1]], [[1,2],[0,2],[0,1]])
    # A smooth 2-dimensional toric variety with 3 rays and 3 maximal cones
    ```
    """

    def __init__(self, rays, cones, check=True):
        """
        **Description:**
        Initializes a `ToricVariety` object.

        **Arguments:**
        - `rays` *(array_like)*: The rays of the fan.
        - `cones` *(array_like)*: The maximal cones of the fan, each given as
          a collection of ray indices.
        - `check` *(bool, optional, default=True)*: Whether to check the
          input.

        **Returns:**
        Nothing.
        """
        rays = [list(r) for r in rays]
        cones = [tuple(sorted(int(i) for i in c)) for c in cones]
        if check:
            if len(rays) == 0:
                raise ValueError("At least one ray is required.")
            if len({len(r) for r in rays}) != 1 or len(rays[0]) == 0:
                raise ValueError("All rays must have the same positive "
                                 "dimension.")
        self._rays = np.array([primitive_vector(r) for r in rays],
                              dtype=int).reshape(len(rays), -1)
        self._cones = tuple(cones)
        self._ray_indices = {ray_key(r):i for i,r in enumerate(self._rays)}
        if check:
            self._check_input()
        # Initialize remaining hidden attributes
        self.clear_cache()

    def _check_input(self):
        """
        **Description:**
        Performs the structural checks of the input rays and cones. It
        raises an exception if any of them fails.

        **Arguments:**
        None.

        **Returns:**
        Nothing.
        """
        n_rays = len(self._rays)
        if len(self._ray_indices) != n_rays:
            raise ValueError("The rays must be distinct.")
        if len(self._cones) == 0:
            raise ValueError("At least one maximal cone is required.")
        used = set()
        for c in self._cones:
            if len(c) == 0:
                raise ValueError("Maximal cones must contain at least one "
                                 "ray.")
            if c[0] < 0 or c[-1] >= n_rays:
                raise ValueError(f"Cone {c} contains invalid ray indices.")
            if len(set(c)) != len(c):
                raise ValueError(f"Cone {c} contains repeated rays.")
            used.update(c)
        if len(used) != n_rays:
            raise ValueError("Every ray must be contained in a maximal cone.")
        cone_sets = [set(c) for c in self._cones]
        for i,j in combinations(range(len(cone_sets)), 2):
            if (cone_sets[i].issubset(cone_sets[j])
                    or cone_sets[j].issubset(cone_sets[i])):
                raise ValueError(f"Cones {self._cones[i]} and "
                                 f"{self._cones[j]} are not both maximal.")

    def clear_cache(self):
        """
        **Description:**
        Clears the cached results of any previous computation.

        **Arguments:**
        None.

        **Returns:**
        Nothing.
        """
        self._hash = None
        self._dim = None
        self._cone_objs = None
        self._is_simplicial = None
        self._is_smooth = None
        self._is_fan = None
        self._divisor_basis = None
        self._glsm_charge_matrix = None

    def __repr__(self):
        """
        **Description:**
        Returns a string describing the toric variety.

        **Arguments:**
        None.

        **Returns:**
        *(str)* A string describing the toric variety.

        **Example:**
        ```python {2}
        v = ToricVariety([[1,0],[0,1],[-1,-1]], [[1,2],[0,2],[0,1]])
        print(v)
        # A smooth 2-dimensional toric variety with 3 rays and 3 maximal cones
        ```
        """
        if self.is_smooth():
            kind = "smooth "
        elif self.is_simplicial():
            kind = "simplicial "
        else:
            kind = ""
        return (f"A {kind}{self.dim()}-dimensional toric variety with "
                f"{self.n_rays()} rays and {self.n_maximal_cones()} maximal "
                f"cones")

    def _cone_key(self):
        """Returns the fan as a set of maximal cones, each a set of rays."""
        return frozenset(frozenset(tuple(int(c) for c in self._rays[i])
                                   for i in cone) for cone in self._cones)

    def __eq__(self, other):
        """
        **Description:**
        Implements comparison of toric varieties with ==. Two toric varieties
        are equal when their fans coincide, regardless of the order of their
        rays and cones.

        **Arguments:**
        - `other` *(ToricVariety)*: The other toric variety that is being
          compared.

        **Returns:**
        *(bool)* The truth value of the toric varieties being equal.

        **Example:**
        ```python {3}
        v1 = ToricVariety([[1],[-1]], [[0],[1]])
        v2 = ToricVariety([[-1],[1]], [[1],[0]])
        v1 == v2
        # True
        ```
        """
        if not isinstance(other, ToricVariety):
            return NotImplemented
        if self is other:
            return True
        return (self.ambient_dim() == other.ambient_dim()
                and self._cone_key() == other._cone_key())

    def __ne__(self, other):
        """
        **Description:**
        Implements comparison of toric varieties with !=.

        **Arguments:**
        - `other` *(ToricVariety)*: The other toric variety that is being
          compared.

        **Returns:**
        *(bool)* The truth value of the toric varieties being different.
        """
        if not isinstance(other, ToricVariety):
            return NotImplemented
        return not (self == other)

    def __hash__(self):
        """
        **Description:**
        Implements the ability to obtain hash values from toric varieties.

        **Arguments:**
        None.

        **Returns:**
        *(int)* The hash value of the toric variety.
        """
        if self._hash is None:
            self._hash = hash((1, self.ambient_dim(), self._cone_key()))
        return self._hash

    def __mul__(self, other):
        """
        **Description:**
        Implements the cartesian product of toric varieties with *. See
        [`cartesian_product`](#cartesian_product).
        """
        if not isinstance(other, ToricVariety):
            return NotImplemented
        return self.cartesian_product(other)

    def rays(self):
        """
        **Description:**
        Returns the rays of the fan.

        **Arguments:**
        None.

        **Returns:**
        *(numpy.ndarray)* The primitive ray generators.
        """
        return np.array(self._rays)

    def n_rays(self):
        """
        **Description:**
        Returns the number of rays of the fan.

        **Arguments:**
        None.

        **Returns:**
        *(int)* The number of rays.
        """
        return len(self._rays)

    def ray_index(self, ray):
        """
        **Description:**
        Returns the index of a ray of the fan. The ray is looked up by exact
        equality of coordinates.

        **Arguments:**
        - `ray` *(array_like)*: The ray.

        **Returns:**
        *(int)* The index of the ray.

        **Example:**
        ```python {2}
        v = ToricVariety([[1,0],[0,1],[-1,-1]], [[1,2],[0,2],[0,1]])
        v.ray_index([0,1])
        # 1
        ```
        """
        key = ray_key(ray)
        if key not in self._ray_indices:
            raise ValueError(f"{list(ray)} is not a ray of the fan.")
        return self._ray_indices[key]

    def maximal_cones(self, formal=False):
        """
        **Description:**
        Returns the maximal cones of the fan.

        **Arguments:**
        - `formal` *(bool, optional, default=False)*: Whether to return the
          cones as [`Cone`](./cone) objects, whose rays appear in the same
          order as in the fan.

        **Returns:**
        *(tuple)* The maximal cones, each a sorted tuple of ray indices, or
        each a `Cone` object if formal=True.
        """
        if not formal:
            return self._cones
        if self._cone_objs is None:
            self._cone_objs = tuple(Cone(rays=self._rays[list(c)])
                                    for c in self._cones)
        return self._cone_objs

    def n_maximal_cones(self):
        """
        **Description:**
        Returns the number of maximal cones of the fan.

        **Arguments:**
        None.

        **Returns:**
        *(int)* The number of maximal cones.
        """
        return len(self._cones)

    def incidence_matrix(self):
        """
        **Description:**
        Returns the incidence matrix between maximal cones and rays.

        **Arguments:**
        None.

        **Returns:**
        *(scipy.sparse.csr_matrix)* A boolean matrix whose rows correspond to
        maximal cones and whose columns correspond to rays.

        **Example:**
        ```python {2}
        v = ToricVariety([[1],[-1]], [[0],[1]])
        v.incidence_matrix().toarray()
        # array([[ True, False],
        #        [False,  True]])
        ```
        """
        rows = [a for a,c in enumerate(self._cones) for _ in c]
        cols = [i for c in self._cones for i in c]
        return csr_matrix((np.ones(len(cols), dtype=bool), (rows, cols)),
                          shape=(len(self._cones), len(self._rays)))

    def ambient_dimension(self):
        """
        **Description:**
        Returns the dimension of the lattice containing the fan.

        **Arguments:**
        None.

        **Returns:**
        *(int)* The dimension of the ambient lattice.

        **Aliases:**
        `ambient_dim`.
        """
        return self._rays.shape[1]
    # aliases
    ambient_dim = ambient_dimension

    def dimension(self):
        """
        **Description:**
        Returns the dimension of the toric variety, which is the dimension of
        the lattice of the fan.

        **Arguments:**
        None.

        **Returns:**
        *(int)* The complex dimension of the toric variety.

        **Aliases:**
        `dim`.
        """
        return self.ambient_dimension()
    # aliases
    dim = dimension

    def is_simplicial(self):
        """
        **Description:**
        Returns True if all the maximal cones of the fan are simplicial.

        **Arguments:**
        None.

        **Returns:**
        *(bool)* The truth value of the fan being simplicial.
        """
        if self._is_simplicial is None:
            self._is_simplicial = all(
                integer_rank(self._rays[list(c)]) == len(c)
                for c in self._cones)
        return self._is_simplicial

    def is_smooth(self):
        """
        **Description:**
        Returns True if the toric variety is smooth.

        **Arguments:**
        None.

        **Returns:**
        *(bool)* The truth value of the toric variety being smooth.

        **Example:**
        ```python {3,5}
        v1 = ToricVariety([[1,0],[0,1],[-1,-1]], [[1,2],[0,2],[0,1]])
        v2 = ToricVariety([[1,0],[0,1],[-1,-2]], [[1,2],[0,2],[0,1]])
        v1.is_smooth()
        # True
        v2.is_smooth()
        # False
        ```
        """
        if self._is_smooth is None:
            self._is_smooth = (self.is_simplicial()
                               and all(c.is_smooth()
                                   for c in self.maximal_cones(formal=True)))
        return self._is_smooth

    def is_fan(self, verbose=False):
        """
        **Description:**
        Checks that the rays and cones form a fan. That is, each maximal
        cone is pointed and its listed rays are exactly its extremal rays,
        and any two maximal cones meet in the cone generated by their common
        rays.

        :::note
        This check requires a cone intersection for each pair of maximal
        cones, so it can be slow for large fans.
        :::

        **Arguments:**
        - `verbose` *(bool, optional, default=False)*: When set to True it
          prints the reason why the check failed.

        **Returns:**
        *(bool)* The truth value of the input forming a fan.

        **Example:**
        ```python {3,5}
        v1 = ToricVariety([[1,0],[0,1],[-1,-1]], [[1,2],[0,2],[0,1]])
        v2 = ToricVariety([[1,0],[0,1],[-1,-1]], [[0,1,2]])
        v1.is_fan()
        # True
        v2.is_fan()
        # False
        ```
        """
        if self._is_fan is not None:
            return self._is_fan
        cones = self.maximal_cones(formal=True)
        for c,cone in zip(self._cones, cones):
            if not cone.is_pointed():
                if verbose:
                    print(f"ToricVariety.is_fan: Cone {c} is not pointed.")
                self._is_fan = False
                return self._is_fan
            if len(cone.extremal_rays()) != len(c):
                if verbose:
                    print(f"ToricVariety.is_fan: Some rays of cone {c} are "
                          "not extremal.")
                self._is_fan = False
                return self._is_fan
        for i,j in combinations(range(len(cones)), 2):
            inter = cones[i].intersection(cones[j])
            common = sorted(set(self._cones[i]) & set(self._cones[j]))
            if len(common) == 0:
                is_face = (inter.dim() == 0)
            else:
                is_face = (inter == Cone(rays=self._rays[common]))
            if not is_face:
                if verbose:
                    print(f"ToricVariety.is_fan: Cones {self._cones[i]} and "
                          f"{self._cones[j]} do not meet along a common "
                          "face.")
                self._is_fan = False
                return self._is_fan
        self._is_fan = True
        return self._is_fan

    def divisor_basis(self):
        """
        **Description:**
        Returns the current basis of divisor classes of the toric variety,
        given as the indices of the prime toric divisors in the basis. Unless
        it was set with [`set_divisor_basis`](#set_divisor_basis), the basis
        is the complement of the first rays (in order) that span the space of
        rays.

        :::note
        The prime toric divisors that are not in the basis are linear
        combinations of the ones in the basis over the rationals. For smooth
        varieties with the default basis they often are over the integers,
        but this is not guaranteed.
        :::

        **Arguments:**
        None.

        **Returns:**
        *(tuple)* The indices of the basis divisors.

        **Example:**
        ```python {2}
        v = ToricVariety([[1,0],[0,1],[-1,-1]], [[1,2],[0,2],[0,1]])
        v.divisor_basis()
        # (2,)
        ```
        """
        if self._divisor_basis is None:
            spanning = set(independent_rows(self._rays))
            self._divisor_basis = tuple(i for i in range(self.n_rays())
                                        if i not in spanning)
        return self._divisor_basis

    def set_divisor_basis(self, basis):
        """
        **Description:**
        Specifies a basis of divisor classes of the toric variety, given as
        indices of prime toric divisors. The remaining rays must form a basis
        of the ambient space.

        **Arguments:**
        - `basis` *(array_like)*: The indices of the basis divisors.

        **Returns:**
        Nothing.

        **Example:**
        ```python {2}
        v = ToricVariety([[1,0],[0,1],[-1,-1]], [[1,2],[0,2],[0,1]])
        v.set_divisor_basis([0])
        v.divisor_basis()
        # (0,)
        ```
        """
        basis = tuple(sorted(int(i) for i in basis))
        if len(set(basis)) != len(basis) or any(i not in range(self.n_rays())
                                                for i in basis):
            raise ValueError("Invalid divisor indices.")
        rest = [i for i in range(self.n_rays()) if i not in basis]
        if (len(rest) != self.ambient_dim()
                or integer_rank(self._rays[rest]) != self.ambient_dim()):
            raise ValueError("The rays that are not in the basis must form "
                             "a basis of the ambient space.")
        self._divisor_basis = basis
        self._glsm_charge_matrix = None

    def _spanning_rays(self):
        """
        **Description:**
        Returns the indices of the rays that are not in the divisor basis.
        They must form a basis of the ambient space.

        **Arguments:**
        None.

        **Returns:**
        *(list)* The indices of the rays.
        """
        basis = set(self.divisor_basis())
        rest = [i for i in range(self.n_rays()) if i not in basis]
        if len(rest) != self.ambient_dim():
            raise NotImplementedError("Divisor classes are only supported "
                                      "when the rays span the ambient "
                                      "space.")
        return rest

    def glsm_charge_matrix(self):
        """
        **Description:**
        Computes the GLSM charge matrix of the toric variety, i.e. a basis of
        the linear relations among the rays. There is one row for each
        element of the divisor basis, supported on that divisor and on the
        rays that are not in the basis.

        **Arguments:**
        None.

        **Returns:**
        *(numpy.ndarray)* The GLSM charge matrix.

        **Example:**
        ```python {2}
        v = ToricVariety([[1,0],[0,1],[-1,-1]], [[1,2],[0,2],[0,1]])
        v.glsm_charge_matrix()
        # array([[1, 1, 1]])
        ```
        """
        if self._glsm_charge_matrix is not None:
            return np.array(self._glsm_charge_matrix)
        rest = self._spanning_rays()
        basis = self.divisor_basis()
        # solve sum_i q_i v_i = -v_j for the rays that are not in the basis
        A = self._rays[rest].T
        relations = []
        for j in basis:
            q = solve_exact(A, -self._rays[j])
            row = array_to_fmpq([0]*self.n_rays())
            row[j] = 1
            row[rest] = q
            relations.append(primitive_vector(row))
        self._glsm_charge_matrix = np.array(relations,
                                            dtype=int).reshape(-1, self.n_rays())
        return np.array(self._glsm_charge_matrix)

    def toric_divisor(self, coefficients):
        """
        **Description:**
        Returns the torus-invariant divisor with the given coefficients.

        **Arguments:**
        - `coefficients` *(array_like)*: One coefficient per ray.

        **Returns:**
        *(ToricDivisor)* The divisor.
        """
        return ToricDivisor(self, coefficients)

    def canonical_divisor(self):
        """
        **Description:**
        Returns the canonical divisor, i.e. minus the sum of all prime toric
        divisors.

        **Arguments:**
        None.

        **Returns:**
        *(ToricDivisor)* The canonical divisor.
        """
        return ToricDivisor(self, [-1]*self.n_rays())

    def toric_line_bundle(self, divisor_class):
        """
        **Description:**
        Returns the line bundle with the given class in the divisor basis.

        **Arguments:**
        - `divisor_class` *(array_like)*: The coordinates of the class in the
          basis given by [`divisor_basis`](#divisor_basis).

        **Returns:**
        *(ToricLineBundle)* The line bundle.
        """
        return ToricLineBundle(self, divisor_class)

    def trivial_line_bundle(self):
        """
        **Description:**
        Returns the trivial line bundle.

        **Arguments:**
        None.

        **Returns:**
        *(ToricLineBundle)* The trivial line bundle.
        """
        return ToricLineBundle(self, [0]*len(self.divisor_basis()))

    def cartesian_product(self, other):
        """
        **Description:**
        Returns the cartesian product with another toric variety. The rays of
        the product are the rays of the first fan followed by the rays of the
        second one, and the maximal cones are listed with the cones of the
        first fan as the outer index.

        **Arguments:**
        - `other` *(ToricVariety)*: The other toric variety.

        **Returns:**
        *(ToricVariety)* The product toric variety.

        **Example:**
        ```python {3}
        p1 = ToricVariety([[1],[-1]], [[0],[1]])
        p1.cartesian_product(p1)
        # A smooth 2-dimensional toric variety with 4 rays and 4 maximal cones
        ```
        """
        d1, d2 = self.ambient_dim(), other.ambient_dim()
        rays = ([list(r)+[0]*d2 for r in self._rays]
                + [[0]*d1+list(r) for r in other._rays])
        shift = self.n_rays()
        cones = [list(a)+[i+shift for i in b]
                 for a in self._cones for b in other._cones]
        return ToricVariety(rays, cones)
