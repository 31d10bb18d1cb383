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

"""Low degree polynomials stored as batched coefficient tensors, highest degree first."""

from __future__ import annotations

from typing import Optional, Sequence, Union

import torch

from polyroot.constants import MAX_DEGREE, SolverFamily
from polyroot.core import Device, Dtype, Tensor, as_tensor
from polyroot.core.check import (
    POLYROOT_CHECK,
    POLYROOT_CHECK_DEGREE,
    POLYROOT_CHECK_IS_FLOATING,
    POLYROOT_CHECK_IS_TENSOR,
    POLYROOT_CHECK_SHAPE,
)

__all__ = ["Polynomial", "evaluate_polynomial", "polynomial_derivative"]

_EVALUATED_DEGREES = tuple(range(MAX_DEGREE + 1))


def _coefficient(coeffs: Tensor, i: int, x: Tensor) -> Tensor:
    # (*,) column broadcast against x with shape (*,) or (*, K)
    c = coeffs[..., i]
    return c.reshape(c.shape + (1,) * (x.dim() - c.dim()))


def _eval_constant(coeffs: Tensor, x: Tensor) -> Tensor:
    return _coefficient(coeffs, 0, x) + torch.zeros_like(x)


def _eval_linear(coeffs: Tensor, x: Tensor) -> Tensor:
    c0, c1 = (_coefficient(coeffs, i, x) for i in range(2))
    return c0 * x + c1


def _eval_quadratic(coeffs: Tensor, x: Tensor) -> Tensor:
    c0, c1, c2 = (_coefficient(coeffs, i, x) for i in range(3))
    return (c0 * x + c1) * x + c2


def _eval_cubic(coeffs: Tensor, x: Tensor) -> Tensor:
    c0, c1, c2, c3 = (_coefficient(coeffs, i, x) for i in range(4))
    return ((c0 * x + c1) * x + c2) * x + c3


def _eval_quartic(coeffs: Tensor, x: Tensor) -> Tensor:
    c0, c1, c2, c3, c4 = (_coefficient(coeffs, i, x) for i in range(5))
    return (((c0 * x + c1) * x + c2) * x + c3) * x + c4


_EVALUATORS = (_eval_constant, _eval_linear, _eval_quadratic, _eval_cubic, _eval_quartic)


def evaluate_polynomial(coeffs: Tensor, x: Union[Tensor, float]) -> Tensor:
    r"""Evaluate a batch of polynomials at the given abscissas.

    .. math:: p(x) = coeffs[0]x^N + coeffs[1]x^{N-1} + \dots + coeffs[N]

    Args:
        coeffs: the coefficients, highest degree first, with shape :math:`(*, N + 1)` and :math:`N \le 4`.
        x: the evaluation points with shape :math:`(*)`, :math:`(*, K)` or a scalar.

    Returns:
        the polynomial values, with the broadcast shape of ``x`` and the batch dimensions.

    Raises:
        UnsupportedDegreeError: if the degree is larger than four.

    Example:
        >>> coeffs = torch.tensor([[1.0, 5.0, -14.0, 0.0]])
        >>> evaluate_polynomial(coeffs, torch.tensor([4.0]))
        tensor([88.])

    """
    POLYROOT_CHECK_IS_TENSOR(coeffs)
    degree = coeffs.shape[-1] - 1
    POLYROOT_CHECK_DEGREE(degree, _EVALUATED_DEGREES, "Only constant to quartic polynomials can be evaluated.")
    if not isinstance(x, Tensor):
        x = as_tensor(x, device=coeffs.device, dtype=coeffs.dtype)
    return _EVALUATORS[degree](coeffs, x)


def polynomial_derivative(coeffs: Tensor) -> Tensor:
    r"""Return the coefficients of the first derivative.

    Args:
        coeffs: the coefficients, highest degree first, with shape :math:`(*, N + 1)` and :math:`N \ge 1`.

    Returns:
        the derivative coefficients with shape :math:`(*, N)`.

    Example:
        >>> polynomial_derivative(torch.tensor([[1.0, 5.0, -14.0, 0.0]]))
        tensor([[  3.,  10., -14.]])

    """
    degree = coeffs.shape[-1] - 1
    POLYROOT_CHECK_DEGREE(degree, tuple(range(1, MAX_DEGREE + 1)))
    powers = torch.arange(degree, 0, -1, device=coeffs.device, dtype=coeffs.dtype)
    return coeffs[..., :-1] * powers


class Polynomial:
    r"""A batch of real polynomials of a fixed degree :math:`N \le 4`.

    The coefficients are stored highest degree first, so ``coeffs[:, 0]`` multiplies
    :math:`x^N`. The degree is fixed by the coefficient count and the object exposes no
    mutating API.

    Args:
        coeffs: a tensor with shape :math:`(B, N + 1)` or :math:`(N + 1,)`, or a sequence of numbers.
        device: the device used when ``coeffs`` is not a tensor.
        dtype: the floating point type used when ``coeffs`` is not a tensor.

    Example:
        >>> p = Polynomial([1.0, 5.0, -14.0, 0.0])
        >>> p.degree
        3
        >>> p.eval(4.0)
        tensor([88.])
        >>> print(p)
        1×x^3 + 5×x^2 + -14×x^1 + 0

    """

    def __init__(
        self, coeffs: Union[Tensor, Sequence[float]], device: Device = None, dtype: Dtype = None
    ) -> None:
        if not isinstance(coeffs, Tensor):
            coeffs = as_tensor(coeffs, device=device, dtype=dtype or torch.get_default_dtype())
        POLYROOT_CHECK_IS_FLOATING(coeffs, "Polynomial coefficients must be floating point.")
        if coeffs.dim() == 1:
            coeffs = coeffs[None]
        POLYROOT_CHECK_SHAPE(coeffs, ["B", "N"])
        POLYROOT_CHECK(coeffs.shape[-1] > 0, "A polynomial needs at least one coefficient.")
        POLYROOT_CHECK_DEGREE(coeffs.shape[-1] - 1, _EVALUATED_DEGREES)
        self._coeffs = coeffs.clone()

    def __str__(self) -> str:
        return "\n".join(self._format(row) for row in self._coeffs.tolist())

    def __repr__(self) -> str:
        return f"Polynomial(degree={self.degree}, coeffs={self._coeffs})"

    def __len__(self) -> int:
        return self.batch_size

    def __getitem__(self, idx: Union[int, slice]) -> Polynomial:
        coeffs = self._coeffs[idx]
        return Polynomial(coeffs)

    @staticmethod
    def _format_coefficient(c: float) -> str:
        # shortest repr that round-trips, integral values without the trailing ".0"
        s = repr(c)
        return s[:-2] if s.endswith(".0") else s

    @classmethod
    def _format(cls, row: list[float]) -> str:
        degree = len(row) - 1
        terms = [f"{cls._format_coefficient(c)}×x^{degree - i}" for i, c in enumerate(row[:-1])]
        return " + ".join([*terms, cls._format_coefficient(row[-1])])

    @property
    def coeffs(self) -> Tensor:
        """Return the coefficients with shape :math:`(B, N + 1)`."""
        return self._coeffs

    @property
    def degree(self) -> int:
        return self._coeffs.shape[-1] - 1

    @property
    def batch_size(self) -> int:
        return self._coeffs.shape[0]

    @property
    def device(self) -> torch.device:
        return self._coeffs.device

    @property
    def dtype(self) -> torch.dtype:
        return self._coeffs.dtype

    def eval(self, x: Union[Tensor, float]) -> Tensor:
        """Evaluate the polynomials at ``x``, see :func:`evaluate_polynomial`."""
        return evaluate_polynomial(self._coeffs, x)

    def __call__(self, x: Union[Tensor, float]) -> Tensor:
        return self.eval(x)

    def derivative(self) -> Polynomial:
        """Return the first derivative as a polynomial of one degree less."""
        return Polynomial(polynomial_derivative(self._coeffs))

    def roots(
        self, tol: Optional[float] = None, method: Union[str, int, SolverFamily, None] = None
    ) -> Tensor:
        """Compute the real roots, see :func:`polyroot.solvers.solve_polynomial`.

        Args:
            tol: the refinement tolerance of the iterative solver, dtype epsilon when ``None``.
            method: the solver family, the configured default when ``None``.

        Returns:
            a tensor with shape :math:`(B, max(N, 1))`, unused slots hold NaN.

        """
        from polyroot.solvers import solve_polynomial

        return solve_polynomial(self._coeffs, tol=tol, method=method)
