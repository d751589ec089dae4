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
This module contains constructors of frequently used toric varieties.
"""

# Third party imports
import numpy as np
# toricproj imports
from toricproj.toricvariety import ToricVariety



def projective_space(d):
    """
    **Description:**
    Constructs the d-dimensional projective space. Its fan is the normal fan
    of the standard d-simplex, with rays e_1,...,e_d,-(e_1+...+e_d), and
    the i-th maximal cone is generated by all the rays except the i-th one.

    **Arguments:**
    - `d` *(int)*: The dimension.

    **Returns:**
    *(ToricVariety)* The projective space.

    **Example:**
    ```python {2}
    from toricproj import projective_space
    projective_space(2)
    # A smooth 2-dimensional toric variety with 3 rays and 3 maximal cones
    ```
    """
    if d < 1:
        raise ValueError("The dimension must be positive.")
    eye = np.eye(d, dtype=int)
    rays = np.vstack([eye, -np.ones((1,d), dtype=int)])
    cones = [[j for j in range(d+1) if j != i] for i in range(d+1)]
    return ToricVariety(rays, cones)


def affine_space(d):
    """
    **Description:**
    Constructs the d-dimensional affine space, whose fan is the positive
    orthant.

    **Arguments:**
    - `d` *(int)*: The dimension.

    **Returns:**
    *(ToricVariety)* The affine space.
    """
    if d < 1:
        raise ValueError("The dimension must be positive.")
    return ToricVariety(np.eye(d, dtype=int), [list(range(d))])


def hirzebruch_surface(r):
    """
    **Description:**
    Constructs the Hirzebruch surface F_r, with rays (1,0), (0,1), (-1,r)
    and (0,-1).

    **Arguments:**
    - `r` *(int)*: A non-negative integer.

    **Returns:**
    *(ToricVariety)* The Hirzebruch surface.

    **Example:**
    ```python {2}
    from toricproj import hirzebruch_surface
    hirzebruch_surface(1)
    # A smooth 2-dimensional toric variety with 4 rays and 4 maximal cones
    ```
    """
    if r < 0:
        raise ValueError("The parameter must be non-negative.")
    rays = [[1,0],[0,1],[-1,r],[0,-1]]
    cones = [[0,1],[1,2],[2,3],[0,3]]
    return ToricVariety(rays, cones)
