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

"""Degree and solver family dispatch."""

from __future__ import annotations

import logging
from typing import Optional, Union

from polyroot.config import polyroot_config
from polyroot.constants import SolverFamily
from polyroot.core import Module, Tensor
from polyroot.core.check import POLYROOT_CHECK_DEGREE, POLYROOT_CHECK_IS_FLOATING, POLYROOT_CHECK_SHAPE
from polyroot.polynomial import Polynomial
from polyroot.solvers.closed_form import solve_cubic_blinn, solve_quadratic_blinn
from polyroot.solvers.iterative import (
    resolve_tolerance,
    solve_cubic_yuksel,
    solve_quadratic_yuksel,
    solve_quartic_yuksel,
)
from polyroot.solvers.linear import solve_constant, solve_linear

__all__ = ["PolynomialRoots", "solve_closed_form", "solve_iterative", "solve_polynomial"]

logger = logging.getLogger(__name__)

_CLOSED_FORM_SOLVERS = {2: solve_quadratic_blinn, 3: solve_cubic_blinn}
_ITERATIVE_SOLVERS = {2: solve_quadratic_yuksel, 3: solve_cubic_yuksel, 4: solve_quartic_yuksel}


def _as_coefficients(polynomial: Union[Polynomial, Tensor]) -> Tensor:
    if isinstance(polynomial, Polynomial):
        return polynomial.coeffs
    POLYROOT_CHECK_IS_FLOATING(polynomial)
    POLYROOT_CHECK_SHAPE(polynomial, ["B", "N"])
    return polynomial


def solve_closed_form(polynomial: Union[Polynomial, Tensor]) -> Tensor:
    r"""Real roots of quadratics and cubics with the homogeneous closed formulas.

    Args:
        polynomial: a :class:`~polyroot.Polynomial` or coefficients with shape :math:`(B, N + 1)`.

    Returns:
        a tensor with shape :math:`(B, N)`, unsorted, unused slots hold NaN.

    Raises:
        UnsupportedDegreeError: if the degree is not two or three.

    Example:
        >>> solve_closed_form(torch.tensor([[1.0, -6.0, 9.0]]))
        tensor([[3., 3.]])

    """
    coeffs = _as_coefficients(polynomial)
    degree = coeffs.shape[-1] - 1
    POLYROOT_CHECK_DEGREE(degree, tuple(_CLOSED_FORM_SOLVERS), "The closed form solver handles quadratics and cubics.")
    return _CLOSED_FORM_SOLVERS[degree](coeffs)


def solve_iterative(polynomial: Union[Polynomial, Tensor], tol: Optional[float] = None) -> Tensor:
    r"""Real roots of quadratics, cubics and quartics by derivative isolation.

    Args:
        polynomial: a :class:`~polyroot.Polynomial` or coefficients with shape :math:`(B, N + 1)`.
        tol: the absolute tolerance of the refined roots. When ``None`` the configured
            ``polyroot_config.solver.default_tolerance`` is used, and the machine epsilon of
            the coefficients dtype when that is unset as well.

    Returns:
        a tensor with shape :math:`(B, N)`, the distinct real roots in ascending order followed by NaN.

    Raises:
        UnsupportedDegreeError: if the degree is not two, three or four.

    Example:
        >>> solve_iterative(torch.tensor([[1.0, -6.0, 9.0]]))
        tensor([[3., nan]])

    """
    coeffs = _as_coefficients(polynomial)
    degree = coeffs.shape[-1] - 1
    POLYROOT_CHECK_DEGREE(
        degree, tuple(_ITERATIVE_SOLVERS), "The iterative solver handles quadratics, cubics and quartics."
    )
    return _ITERATIVE_SOLVERS[degree](coeffs, tol)


def solve_polynomial(
    polynomial: Union[Polynomial, Tensor],
    tol: Optional[float] = None,
    method: Union[str, int, SolverFamily, None] = None,
) -> Tensor:
    r"""Real roots of a batch of polynomials of degree zero to four.

    Constant and linear polynomials are solved directly whatever the method. A constant
    is reported as the root ``0`` when its magnitude is within ``tol``.

    Args:
        polynomial: a :class:`~polyroot.Polynomial` or coefficients with shape :math:`(B, N + 1)`.
        tol: the tolerance forwarded to the iterative solver and to the constant test.
        method: ``"closed_form"``, ``"iterative"`` or a :class:`~polyroot.SolverFamily`. The
            configured ``polyroot_config.solver.default_method`` when ``None``.

    Returns:
        a tensor with shape :math:`(B, max(N, 1))`, unused slots hold NaN.

    Raises:
        UnsupportedDegreeError: if the chosen family does not handle the degree.

    Example:
        >>> coeffs = torch.tensor([[1.0, 0.0, -5.0, 0.0, 4.0]])
        >>> roots = solve_polynomial(coeffs, tol=1e-6, method="iterative")

    """
    coeffs = _as_coefficients(polynomial)
    degree = coeffs.shape[-1] - 1

    if degree == 0:
        return solve_constant(coeffs, resolve_tolerance(tol, coeffs))
    if degree == 1:
        return solve_linear(coeffs)

    family = polyroot_config.solver.default_method if method is None else SolverFamily.get(method)
    logger.debug("Solving %d polynomial(s) of degree %d with the %s solver.", coeffs.shape[0], degree, family.name)
    if family == SolverFamily.CLOSED_FORM:
        return solve_closed_form(coeffs)
    return solve_iterative(coeffs, tol)


class PolynomialRoots(Module):
    r"""Module computing the real roots of a batch of polynomials.

    Args:
        tol: the tolerance of the iterative solver, see :func:`solve_polynomial`.
        method: the solver family, the configured default when ``None``.

    Shape:
        - Input: :math:`(B, N + 1)`
        - Output: :math:`(B, max(N, 1))`

    Example:
        >>> solver = PolynomialRoots(method="iterative")
        >>> solver(torch.tensor([[1.0, -1.0, -12.0]]))
        tensor([[-3.,  4.]])

    """

    def __init__(self, tol: Optional[float] = None, method: Union[str, int, SolverFamily, None] = None) -> None:
        super().__init__()
        self.tol = tol
        self.method = None if method is None else SolverFamily.get(method)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(tol={self.tol}, method={self.method})"

    def forward(self, coeffs: Tensor) -> Tensor:
        return solve_polynomial(coeffs, tol=self.tol, method=self.method)
