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

"""This module contains the exact arithmetic helpers used in toricproj."""

# Standard imports
from fractions import Fraction
from functools import reduce
import math
# Third party imports
from flint import fmpz_mat, fmpq_mat, fmpq, fmpz
import numpy as np



def float_to_fmpq(c):
    """
    **Description:**
    Converts a float to an fmpq.

    **Arguments:**
    - `c` *(float)*: The input number.

    **Returns:**
    *(flint.fmpq)* The rational number that most reasonably approximates the
    input.

    **Example:**
    We convert a few floats to rational numbers.
    ```python {2}
    from toricproj.utils import float_to_fmpq
    float_to_fmpq(0.1), float_to_fmpq(0.333333333333), float_to_fmpq(2.45)
    # (1/10, 1/3, 49/20)
    ```
    """
    f = Fraction(c).limit_denominator()
    return fmpq(f.numerator, f.denominator)


def to_fmpq(c):
    """
    **Description:**
    Converts a number to an exact rational number.

    **Arguments:**
    - `c` *(int, str, Fraction, fmpz, fmpq or float)*: The input number.
      Strings are parsed as fractions, such as "3/4". Floats are approximated
      with [`float_to_fmpq`](#float_to_fmpq).

    **Returns:**
    *(flint.fmpq)* The number as an fmpq.

    **Example:**
    ```python {2}
    from toricproj.utils import to_fmpq
    to_fmpq(2), to_fmpq("3/4"), to_fmpq(0.5)
    # (2, 3/4, 1/2)
    ```
    """
    if isinstance(c, fmpq):
        return c
    if isinstance(c, (int, np.integer, fmpz)):
        return fmpq(int(c))
    if isinstance(c, Fraction):
        return fmpq(c.numerator, c.denominator)
    if isinstance(c, str):
        f = Fraction(c)
        return fmpq(f.numerator, f.denominator)
    if isinstance(c, (float, np.floating)):
        return float_to_fmpq(float(c))
    raise TypeError(f"Unsupported number type: {type(c)}.")


def array_to_fmpq(arr):
    """
    **Description:**
    Converts an array of numbers to a numpy array with fmpq entries.

    **Arguments:**
    - `arr` *(array_like)*: An array of numbers of any type supported by
      [`to_fmpq`](#to_fmpq).

    **Returns:**
    *(numpy.ndarray)* A numpy array with fmpq entries.

    **Example:**
    ```python {2}
    from toricproj.utils import array_to_fmpq
    array_to_fmpq([[1,"1/2"],[0,3]])
    # array([[1, 1/2],
    #        [0, 3]], dtype=object)
    ```
    """
    in_arr = np.array(arr, dtype=object)
    out_arr = np.empty(in_arr.shape, dtype=object)
    for i in range(len(in_arr.flat)):
        out_arr.flat[i] = to_fmpq(in_arr.flat[i])
    return out_arr


def exact_dot(u, v):
    """
    **Description:**
    Computes the dot product of two vectors using exact arithmetic.

    **Arguments:**
    - `u` *(array_like)*: The first vector.
    - `v` *(array_like)*: The second vector.

    **Returns:**
    *(flint.fmpq)* The dot product.

    **Example:**
    ```python {2}
    from toricproj.utils import exact_dot
    exact_dot([1,"1/2"], [2,3])
    # 7/2
    ```
    """
    if len(u) != len(v):
        raise ValueError("Vectors must have the same dimension.")
    return sum((to_fmpq(a)*to_fmpq(b) for a,b in zip(u,v)), fmpq(0))


def denominator_lcm(v):
    """
    **Description:**
    Computes the least common multiple of the denominators of the entries of
    a vector.

    **Arguments:**
    - `v` *(array_like)*: A vector of rational numbers.

    **Returns:**
    *(int)* The lcm of the denominators. It is 1 for integral or empty
    vectors.
    """
    return math.lcm(1, *(int(to_fmpq(c).q) for c in v))


def integral_vector(v):
    """
    **Description:**
    Rescales a rational vector by the least common multiple of the
    denominators of its entries, so that all entries become integers.

    **Arguments:**
    - `v` *(array_like)*: A vector of rational numbers.

    **Returns:**
    *(numpy.ndarray)* An array of fmpq entries, all of which are integers.

    **Example:**
    ```python {2}
    from toricproj.utils import integral_vector
    integral_vector(["1/2","-1/3",1])
    # array([3, -2, 6], dtype=object)
    ```
    """
    v = array_to_fmpq(v)
    return v*fmpq(denominator_lcm(v))


def gcd_list(arr):
    """
    **Description:**
    Compute the greatest common divisor of the elements in a list of
    integers.

    **Arguments:**
    - `arr` *(array_like)*: A list of integers.

    **Returns:**
    *(int)* The (non-negative) gcd of all the elements in the input list.
    """
    return reduce(math.gcd, (int(c) for c in arr), 0)


def primitive_vector(v):
    """
    **Description:**
    Returns the primitive lattice vector generating the ray through a
    non-zero rational vector.

    **Arguments:**
    - `v` *(array_like)*: A non-zero vector of rational numbers.

    **Returns:**
    *(numpy.ndarray)* The primitive integer vector pointing in the same
    direction.

    **Example:**
    ```python {2}
    from toricproj.utils import primitive_vector
    primitive_vector(["1/2", 1, 0])
    # array([1, 2, 0])
    ```
    """
    w = [int(c.p) for c in integral_vector(v)]
    g = gcd_list(w)
    if g == 0:
        raise ValueError("The zero vector does not generate a ray.")
    return np.array([c//g for c in w], dtype=int)


def ray_key(v):
    """
    **Description:**
    Returns a canonical hashable key for an exact vector. Two vectors have
    the same key exactly when they are equal coordinate by coordinate, no
    matter which numeric types hold the coordinates.

    **Arguments:**
    - `v` *(array_like)*: A vector of rational numbers.

    **Returns:**
    *(tuple)* A tuple of (numerator, denominator) pairs of Python integers.
    """
    return tuple((int(c.p), int(c.q)) for c in (to_fmpq(x) for x in v))


def integer_rank(rows):
    """
    **Description:**
    Computes the rank of a rational matrix exactly.

    **Arguments:**
    - `rows` *(array_like)*: The rows of the matrix.

    **Returns:**
    *(int)* The rank of the matrix.
    """
    rows = [list(r) for r in rows]
    if len(rows) == 0 or len(rows[0]) == 0:
        return 0
    return fmpz_mat([[int(c.p) for c in integral_vector(r)]
                     for r in rows]).rank()


def independent_rows(rows):
    """
    **Description:**
    Greedily selects rows that form a basis of the row space of a matrix.
    Rows are considered in order, and a row is selected if it is not in the
    span of the previously selected ones.

    **Arguments:**
    - `rows` *(array_like)*: The rows of the matrix.

    **Returns:**
    *(list)* The indices of the selected rows.

    **Example:**
    ```python {2}
    from toricproj.utils import independent_rows
    independent_rows([[1,0],[2,0],[0,1],[1,1]])
    # [0, 2]
    ```
    """
    rows = [list(r) for r in rows]
    selected = []
    for i in range(len(rows)):
        if integer_rank([rows[j] for j in selected+[i]]) == len(selected)+1:
            selected.append(i)
    return selected


def solve_exact(rows, rhs):
    """
    **Description:**
    Solves the square linear system rows*x = rhs over the rational numbers.

    **Arguments:**
    - `rows` *(array_like)*: The rows of a non-singular square matrix.
    - `rhs` *(array_like)*: The right-hand side.

    **Returns:**
    *(numpy.ndarray)* The unique solution, as an array of fmpq entries.
    """
    A = fmpq_mat([[to_fmpq(c) for c in r] for r in rows])
    b = fmpq_mat([[to_fmpq(c)] for c in rhs])
    x = A.solve(b)
    return np.array([x[i,0] for i in range(x.nrows())], dtype=object)
