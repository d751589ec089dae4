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

# Make the main classes and function accessible from the root of toricproj.
from toricproj.cone import Cone
from toricproj.divisor import ToricDivisor, ToricLineBundle
from toricproj.toricvariety import ToricVariety
from toricproj.constructors import projective_space, affine_space, hirzebruch_surface
from toricproj.proj import proj

# Latest version
version = "0.1.0"
