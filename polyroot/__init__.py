# LICENSE HEADER MANAGED BY add-license-header
#
# Copyright 2024 Polyroot Team
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#

# NOTE: kept in sync with the version declared in setup.py
__version__ = "0.1.0"

from . import config, constants, core, solvers, utils
from .config import polyroot_config
from .constants import SolverFamily
from .polynomial import Polynomial, evaluate_polynomial, polynomial_derivative
from .solvers import (
    PolynomialRoots,
    solve_closed_form,
    solve_cubic_blinn,
    solve_cubic_yuksel,
    solve_iterative,
    solve_polynomial,
    solve_quadratic_blinn,
    solve_quadratic_yuksel,
    solve_quartic_yuksel,
)

__all__ = [
    "Polynomial",
    "PolynomialRoots",
    "SolverFamily",
    "evaluate_polynomial",
    "polynomial_derivative",
    "polyroot_config",
    "solve_closed_form",
    "solve_cubic_blinn",
    "solve_cubic_yuksel",
    "solve_iterative",
    "solve_polynomial",
    "solve_quadratic_blinn",
    "solve_quadratic_yuksel",
    "solve_quartic_yuksel",
]
