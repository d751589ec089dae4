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
This module contains tools designed to perform exact cone computations.
"""

# Standard imports
from itertools import combinations
import warnings
# Third party imports
from flint import fmpz_mat
import numpy as np
import ppl
# toricproj imports
from toricproj.utils import (exact_dot, gcd_list, integer_rank,
                             primitive_vector)



class Cone:
    """
    This class handles all computations relating to rational polyhedral cones
    that are needed to construct fans, such as cone duality and extremal ray
    computations. All computations are exact and are performed with the
    Parma Polyhedra Library.

    :::important warning
    This class is primarily tailored to pointed (i.e. strongly convex) cones.
    Cones that are not pointed, and whose dual is also not pointed, are not
    supported for comparisons since they are uncommon and difficult to deal
    with.
    :::

    ## Constructor

    ### `toricproj.cone.Cone`

    **Description:**
    Constructs a `Cone` object. This is handled by the hidden
    [`__init__`](#__init__) function.

    **Arguments:**
    - `rays` *(array_like, optional)*: A list of rays that generates the cone.
        If it is not specified then the hyperplane normals must be specified.
        Rational entries are allowed, and each vector is replaced by the
        primitive lattice vector in the same direction.
    - `hyperplanes` *(array_like, optional)*: A list of inward-pointing
        hyperplane normals that define the cone. If it is not specified then the
        generating rays must be specified.

    :::note
    Exactly one of `rays` or `hyperplanes` must be specified. Otherwise an
    exception is raised.
    :::

    **Example:**
    We construct a cone in two different ways. First from a list of rays then
    from a list of hyperplane normals. We verify that the two inputs result in
    the same cone.
    ```python {2,3}
    from toricproj import Cone
    c1 = Cone([[0,1],[1,1]]) # Create a cone using rays. It can also be done with Cone(rays=[[0,1],[1,1]])
    c2 = Cone(hyperplanes=[[1,0],[-1,1]]) # Create a cone using hyperplane normals.
    c1 == c2 # We verify that the two cones are the same.
    # True
    ```
    """

    def __init__(self, rays=None, hyperplanes=None):
        """
        **Description:**
        Initializes a `Cone` object.

        **Arguments:**
        - `rays` *(array_like, optional)*: A list of rays that generates the
            cone. If it is not specified then the hyperplane normals must be
            specified.
        - `hyperplanes` *(array_like, optional)*: A list of inward-pointing
            hyperplane normals that define the cone. If it is not specified then
            the generating rays must be specified.

        **Returns:**
        Nothing.
        """
        # check whether rays or hyperplanes were input
        if not ((rays is None) ^ (hyperplanes is None)):
            raise ValueError("Exactly one of \"rays\" and \"hyperplanes\" "
                            "must be specified.")
        if rays is None:
            data_name = "hyperplane(s)"
            self._rays_were_input = False
            self._rays = None
            data = np.array(hyperplanes, dtype=object)
        else:
            data_name = "ray(s)"
            self._rays_were_input = True
            self._hyperplanes = None
            data = np.array(rays, dtype=object)

        # initialize other variables
        self.clear_cache()

        # basic data-checking
        if len(data.shape) != 2:
            raise ValueError(f"Input {data_name} must be a 2D matrix.")
        elif data.shape[0]<1:
            raise ValueError(f"At least one {data_name} is required.")
        elif data.shape[1]<1:
            raise ValueError("Zero-dimensional cones are not supported.")

        self._ambient_dim = data.shape[1]

        # reduce to primitive integer vectors, dropping zero rows
        vecs = []
        for v in data:
            try:
                vecs.append(primitive_vector(v))
            except ValueError:
                warnings.warn("Row of zeros found... Skipping it!")
        vecs = np.array(vecs, dtype=int).reshape(-1, self._ambient_dim)

        # put data in correct variable
        if self._rays_were_input:
            self._rays = vecs
            self._dim = integer_rank(self._rays)
        else:
            self._hyperplanes = vecs
            self._dim = None

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
        self._dual = None
        self._polar = None
        self._ext_rays = None
        self._is_pointed = None
        self._is_simplicial = None
        self._is_smooth = None
        if self._rays_were_input:
            self._hyperplanes = None
        else:
            self._rays = None

    def __repr__(self):
        """
        **Description:**
        Returns a string describing the cone.

        **Arguments:**
        None.

        **Returns:**
        *(str)* A string describing the cone.

        **Example:**
        ```python {2}
        c = Cone([[1,0],[1,1],[0,1]])
        print(c)
        # A 2-dimensional rational polyhedral cone in RR^2 generated by 3 rays
        ```
        """
        if self._rays is not None:
            return (f"A {self.dim()}-dimensional rational polyhedral cone in "
                    f"RR^{self._ambient_dim} generated by {len(self._rays)} "
                    f"rays")
        return (f"A rational polyhedral cone in RR^{self._ambient_dim} "
                f"defined by {len(self._hyperplanes)} hyperplanes")

    def __eq__(self, other):
        """
        **Description:**
        Implements comparison of cones with ==.

        :::note
        The comparison of cones that are not pointed, and whose duals are also
        not pointed, is not supported.
        :::

        **Arguments:**
        - `other` *(Cone)*: The other cone that is being compared.

        **Returns:**
        *(bool)* The truth value of the cones being equal.

        **Example:**
        ```python {3}
        c1 = Cone([[0,1],[1,1]])
        c2 = Cone(hyperplanes=[[1,0],[-1,1]])
        c1 == c2
        # True
        ```
        """
        if not isinstance(other, Cone):
            return NotImplemented
        if self._ambient_dim != other._ambient_dim:
            return False
        if self.is_pointed() ^ other.is_pointed():
            return False
        if self.is_pointed() and other.is_pointed():
            return (sorted(self.extremal_rays().tolist())
                    == sorted(other.extremal_rays().tolist()))
        if self.dual().is_pointed() ^ other.dual().is_pointed():
            return False
        if self.dual().is_pointed() and other.dual().is_pointed():
            return (sorted(self.dual().extremal_rays().tolist())
                    == sorted(other.dual().extremal_rays().tolist()))

        warnings.warn("The comparison of cones that are not pointed, and "
                      "whose duals are also not pointed, is not supported.")
        return NotImplemented

    def __ne__(self, other):
        """
        **Description:**
        Implements comparison of cones with !=.

        **Arguments:**
        - `other` *(Cone)*: The other cone that is being compared.

        **Returns:**
        *(bool)* The truth value of the cones being different.
        """
        if not isinstance(other, Cone):
            return NotImplemented
        return not self == other

    def __hash__(self):
        """
        **Description:**
        Implements the ability to obtain hash values from cones.

        :::note
        Cones that are not pointed, and whose duals are also not pointed, are
        not supported.
        :::

        **Arguments:**
        None.

        **Returns:**
        *(int)* The hash value of the cone.
        """
        if self._hash is not None:
            return self._hash
        if self.is_pointed():
            self._hash = hash(tuple(sorted(tuple(v)
                                           for v in self.extremal_rays())))
            return self._hash
        if self.dual().is_pointed():
            # Note: The minus sign is important because otherwise the dual cone
            # would have the same hash.
            self._hash = -hash(tuple(sorted(tuple(v)
                                        for v in self.dual().extremal_rays())))
            return self._hash

        warnings.warn("Cones that are not pointed and whose duals are also "
                      "not pointed are assigned a hash value of 0.")
        return 0

    def ambient_dimension(self):
        """
        **Description:**
        Returns the dimension of the ambient lattice.

        **Arguments:**
        None.

        **Returns:**
        *(int)* The dimension of the ambient lattice.

        **Aliases:**
        `ambient_dim`.
        """
        return self._ambient_dim
    # aliases
    ambient_dim = ambient_dimension

    def dimension(self):
        """
        **Description:**
        Returns the dimension of the cone.

        **Arguments:**
        None.

        **Returns:**
        *(int)* The dimension of the cone.

        **Aliases:**
        `dim`.

        **Example:**
        ```python {2}
        c = Cone([[0,1,0],[1,1,0]])
        c.dimension()
        # 2
        ```
        """
        if self._dim is None:
            self._dim = integer_rank(self.rays())
        return self._dim
    # aliases
    dim = dimension

    def rays(self):
        """
        **Description:**
        Returns the (not necessarily extremal) rays that generate the cone.
        If the cone was defined by hyperplanes, then the rays are computed,
        and each direction of the lineality space appears with both signs.

        **Arguments:**
        None.

        **Returns:**
        *(numpy.ndarray)* The list of rays that generate the cone.

        **Example:**
        We construct two cones and find their generating rays.
        ```python {3,6}
        c1 = Cone([[0,1],[1,1]])
        c2 = Cone(hyperplanes=[[0,1],[1,1]])
        c1.rays()
        # array([[0, 1],
        #        [1, 1]])
        c2.rays()
        # array([[ 1,  0],
        #        [-1,  1]])
        ```
        """
        if self._rays is not None:
            return np.array(self._rays)
        poly = ppl.C_Polyhedron(self._ambient_dim, "universe")
        for h in self._hyperplanes:
            poly.add_constraint(_linear_expression(h) >= 0)
        self._rays = _generators_to_array(poly.minimized_generators(),
                                          self._ambient_dim)
        self._dim = integer_rank(self._rays)
        return np.array(self._rays)

    def hyperplanes(self):
        """
        **Description:**
        Returns the inward-pointing normals to the hyperplanes that define the
        cone. Equalities appear with both signs.

        **Arguments:**
        None.

        **Returns:**
        *(numpy.ndarray)* The list of inward-pointing normals to the
        hyperplanes that define the cone.

        **Example:**
        ```python {2}
        c = Cone([[0,1],[1,1]])
        c.hyperplanes()
        # array([[ 1,  0],
        #        [-1,  1]])
        ```
        """
        if self._hyperplanes is not None:
            return np.array(self._hyperplanes)
        poly = _cone_polyhedron(self._rays, self._ambient_dim)
        hyperplanes = []
        for cstr in poly.minimized_constraints():
            h = _pad_coefficients(cstr.coefficients(), self._ambient_dim)
            if not any(h):
                continue
            hyperplanes.append(h)
            if cstr.is_equality():
                hyperplanes.append(tuple(-c for c in h))
        self._hyperplanes = np.array(hyperplanes,
                                     dtype=int).reshape(-1, self._ambient_dim)
        return np.array(self._hyperplanes)

    def contains(self, pt, strict=False):
        """
        **Description:**
        Checks if a point is in the (strict) interior of the cone.

        **Arguments:**
        - `pt` *(array_like)*: The point of interest. Rational entries are
          allowed.
        - `strict` *(bool, optional, default=False)*: Whether to check if pt
          is in the strict interior (True) or not (False).

        **Returns:**
        *(bool)* Whether pt is in the (strict) interior.
        """
        H = self.hyperplanes()
        if len(H) == 0:
            return True
        gaps = [exact_dot(h, pt) for h in H]
        if strict:
            return min(gaps)>0
        return min(gaps)>=0

    def dual_cone(self):
        """
        **Description:**
        Returns the dual cone, i.e. the cone of linear functionals that are
        non-negative on the cone.

        **Arguments:**
        None.

        **Returns:**
        *(Cone)* The dual cone.

        **Aliases:**
        `dual`.

        **Example:**
        ```python {2,4}
        c = Cone([[0,1],[1,1]])
        c.dual_cone()
        # A 2-dimensional rational polyhedral cone in RR^2 generated by 2 rays
        c.dual_cone().rays()
        # array([[ 1,  0],
        #        [-1,  1]])
        ```
        """
        if self._dual is None:
            H = self.hyperplanes()
            if len(H) == 0:
                self._dual = _origin_cone(self._ambient_dim)
            else:
                self._dual = Cone(rays=H)
            self._dual._dual = self
        return self._dual
    # aliases
    dual = dual_cone

    def polar_cone(self):
        """
        **Description:**
        Returns the polar cone, i.e. the cone of linear functionals that are
        non-positive on the cone. It is the negative of the dual cone.

        **Arguments:**
        None.

        **Returns:**
        *(Cone)* The polar cone.

        **Aliases:**
        `polar`.

        **Example:**
        ```python {2}
        c = Cone([[0,1],[1,1]])
        c.polar_cone().rays()
        # array([[-1,  0],
        #        [ 1, -1]])
        ```
        """
        if self._polar is None:
            H = self.hyperplanes()
            if len(H) == 0:
                self._polar = _origin_cone(self._ambient_dim)
            else:
                self._polar = Cone(rays=-H)
        return self._polar
    # aliases
    polar = polar_cone

    def extremal_rays(self):
        """
        **Description:**
        Returns the extremal rays of the cone. For cones that are not pointed
        each direction of the lineality space is returned with both signs.

        **Arguments:**
        None.

        **Returns:**
        *(numpy.ndarray)* The list of extremal rays of the cone.

        **Example:**
        ```python {2}
        c = Cone([[0,1],[1,1],[1,0]])
        c.extremal_rays()
        # array([[0, 1],
        #        [1, 0]])
        ```
        """
        if self._ext_rays is not None:
            return np.array(self._ext_rays)
        if not self._rays_were_input:
            # rays computed from hyperplanes are already minimal
            self._ext_rays = self.rays()
            return np.array(self._ext_rays)
        poly = _cone_polyhedron(self._rays, self._ambient_dim)
        self._ext_rays = _generators_to_array(poly.minimized_generators(),
                                              self._ambient_dim)
        return np.array(self._ext_rays)

    def is_solid(self):
        """
        **Description:**
        Returns True if the cone is solid, i.e. if it is full-dimensional.

        **Arguments:**
        None.

        **Returns:**
        *(bool)* The truth value of the cone being solid.

        **Aliases:**
        `is_full_dimensional`.
        """
        return self.dim() == self._ambient_dim
    # aliases
    is_full_dimensional = is_solid

    def is_pointed(self):
        """
        **Description:**
        Returns True if the cone is pointed (i.e. strongly convex).

        **Arguments:**
        None.

        **Returns:**
        *(bool)* The truth value of the cone being pointed.

        **Aliases:**
        `is_strongly_convex`.

        **Example:**
        ```python {3,5}
        c1 = Cone([[1,0],[0,1]])
        c2 = Cone([[1,0],[0,1],[-1,0]])
        c1.is_pointed()
        # True
        c2.is_pointed()
        # False
        ```
        """
        if self._is_pointed is None:
            self._is_pointed = self.dual().is_solid()
        return self._is_pointed
    # aliases
    is_strongly_convex = is_pointed

    def is_simplicial(self):
        """
        **Description:**
        Returns True if the cone is simplicial.

        **Arguments:**
        None.

        **Returns:**
        *(bool)* The truth value of the cone being simplicial.

        **Example:**
        ```python {3,5}
        c1 = Cone([[1,0,0],[0,1,0],[0,0,1]])
        c2 = Cone([[1,0,0],[0,1,0],[0,0,1],[1,1,-1]])
        c1.is_simplicial()
        # True
        c2.is_simplicial()
        # False
        ```
        """
        if self._is_simplicial is None:
            self._is_simplicial = (self.is_pointed()
                                   and len(self.extremal_rays()) == self.dim())
        return self._is_simplicial

    def is_smooth(self):
        """
        **Description:**
        Returns True if the cone is smooth, i.e. its extremal rays either form
        a basis of the ambient lattice, or they can be extended into one. This
        is checked by verifying that the maximal minors of the matrix of
        extremal rays are coprime.

        **Arguments:**
        None.

        **Returns:**
        *(bool)* The truth value of the cone being smooth.

        **Example:**
        ```python {3,5}
        c1 = Cone([[1,0,0],[0,1,0],[0,0,1]])
        c2 = Cone([[2,0,1],[0,1,0],[1,0,2]])
        c1.is_smooth()
        # True
        c2.is_smooth()
        # False
        ```
        """
        if self._is_smooth is not None:
            return self._is_smooth
        if not self.is_simplicial():
            self._is_smooth = False
            return self._is_smooth
        R = self.extremal_rays()
        k = len(R)
        if k == 0:
            self._is_smooth = True
            return self._is_smooth
        minors = [fmpz_mat([[int(R[i,j]) for j in cols] for i in range(k)]).det()
                  for cols in combinations(range(self._ambient_dim), k)]
        self._is_smooth = (gcd_list(minors) == 1)
        return self._is_smooth

    def intersection(self, other):
        """
        **Description:**
        Computes the intersection with another cone, or with a list of cones.

        **Arguments:**
        - `other` *(Cone or array_like)*: The other cone that is being
            intersected, or a list of cones to intersect with.

        **Returns:**
        *(Cone)* The cone that results from the intersection.

        **Example:**
        ```python {3}
        c1 = Cone([[1,0],[1,2]])
        c2 = Cone([[0,1],[2,1]])
        c3 = c1.intersection(c2)
        c3.rays()
        # array([[2, 1],
        #        [1, 2]])
        ```
        """
        others = [other] if isinstance(other, Cone) else other
        hyperplanes = self.hyperplanes().tolist()
        for c in others:
            if not isinstance(c, Cone):
                raise ValueError("Elements of the list must be Cone objects.")
            if c.ambient_dim() != self.ambient_dim():
                raise ValueError("Ambient lattices must have the same "
                                 "dimension.")
            hyperplanes.extend(c.hyperplanes().tolist())
        if len(hyperplanes) == 0:
            # all the cones are the whole space
            return Cone(rays=self.rays())
        return Cone(hyperplanes=hyperplanes)


def _linear_expression(v):
    """Returns the homogeneous ppl linear expression with coefficients v."""
    return ppl.Linear_Expression([int(c) for c in v], 0)


def _pad_coefficients(coeffs, dim):
    """Returns the ppl coefficients as integers, padded to dimension dim."""
    coeffs = [int(c) for c in coeffs]
    return tuple(coeffs + [0]*(dim-len(coeffs)))


def _origin_cone(dim):
    """Returns the cone consisting only of the origin."""
    eye = np.eye(dim, dtype=int)
    return Cone(hyperplanes=np.vstack([eye, -eye]))


def _cone_polyhedron(rays, dim):
    """
    **Description:**
    Constructs the ppl polyhedron generated by the origin and a list of rays.

    **Arguments:**
    - `rays` *(array_like)*: The generating rays.
    - `dim` *(int)*: The dimension of the ambient space.

    **Returns:**
    *(ppl.C_Polyhedron)* The polyhedral cone.
    """
    poly = ppl.C_Polyhedron(dim, "empty")
    poly.add_generator(ppl.point())
    for r in rays:
        poly.add_generator(ppl.ray(_linear_expression(r)))
    return poly


def _generators_to_array(gens, dim):
    """
    **Description:**
    Converts a ppl generator system of a cone into an array of rays. Lines
    are returned with both signs, and the vertex at the origin is ignored.

    **Arguments:**
    - `gens` *(ppl.Generator_System)*: The generators.
    - `dim` *(int)*: The dimension of the ambient space.

    **Returns:**
    *(numpy.ndarray)* The rays generating the cone.
    """
    rays = []
    for gen in gens:
        if gen.is_ray():
            rays.append(_pad_coefficients(gen.coefficients(), dim))
        elif gen.is_line():
            r = _pad_coefficients(gen.coefficients(), dim)
            rays.append(r)
            rays.append(tuple(-c for c in r))
    return np.array(rays, dtype=int).reshape(-1, dim)
