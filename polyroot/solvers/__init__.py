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

from .closed_form import solve_cubic_blinn, solve_quadratic_blinn
from .iterative import (
    find_closed,
    find_open_max,
    find_open_min,
    resolve_tolerance,
    solve_cubic_yuksel,
    solve_quadratic_yuksel,
    solve_quartic_yuksel,
)
from .linear import solve_constant, solve_linear
from .polynomial_solver import PolynomialRoots, solve_closed_form, solve_iterative, solve_polynomial

__all__ = [
    "PolynomialRoots",
    "find_closed",
    "find_open_max",
    "find_open_min",
    "resolve_tolerance",
    "solve_closed_form",
    "solve_constant",
    "solve_cubic_blinn",
    "solve_cubic_yuksel",
    "solve_iterative",
    "solve_linear",
    "solve_polynomial",
    "solve_quadratic_blinn",
    "solve_quadratic_yuksel",
    "solve_quartic_yuksel",
]
