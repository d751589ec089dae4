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
This module contains various configuration variables for experimental
features.
"""

import warnings

# Lock experimental features by default.
_exp_features_enabled = False

def enable_experimental_features():
    """
    **Description:**
    Enables the experimental features of toricproj. Currently this allows
    projectivizations over fans with non-simplicial maximal cones, where the
    dual ray of each generator is chosen heuristically.

    **Arguments:**
    None.

    **Returns:**
    Nothing.

    **Example:**
    We enable the experimental features.
    ```python {2}
    import toricproj
    toricproj.config.enable_experimental_features()
    ```
    """
    global _exp_features_enabled
    _exp_features_enabled = True
    warnings.warn("\n**************************************************************\n"
                  "Warning: You have enabled experimental features of toricproj.\n"
                  "Some of these features may be broken or not fully tested,\n"
                  "and they may undergo significant changes in future versions.\n"
                  "**************************************************************\n")
