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

from polyroot.core import Tensor, isfinite, nan_like, where, zeros_like
from polyroot.core.check import POLYROOT_CHECK_IS_FLOATING, POLYROOT_CHECK_SHAPE

__all__ = ["solve_constant", "solve_linear"]


def solve_constant(coeffs: Tensor, tol: float) -> Tensor:
    r"""Solve a constant equation :math:`coeffs[0] = 0`.

    A constant polynomial vanishes everywhere or nowhere; the origin is reported as the
    representative root when :math:`|coeffs[0]| \le tol`.

    Args:
        coeffs: the constant term with shape :math:`(B, 1)`.
        tol: the tolerance below which the constant is treated as zero.

    Returns:
        a tensor with shape :math:`(B, 1)` holding 0 or NaN.

    Example:
        >>> solve_constant(torch.tensor([[0.0]]), 1e-7)
        tensor([[0.]])

    """
    POLYROOT_CHECK_SHAPE(coeffs, ["B", "1"])
    POLYROOT_CHECK_IS_FLOATING(coeffs)
    return where(coeffs.abs() <= tol, zeros_like(coeffs), nan_like(coeffs))


def solve_linear(coeffs: Tensor) -> Tensor:
    r"""Solve a linear equation :math:`coeffs[0]x + coeffs[1] = 0`.

    Args:
        coeffs: the coefficients with shape :math:`(B, 2)`.

    Returns:
        a tensor with shape :math:`(B, 1)`, NaN when the slope vanishes.

    Example:
        >>> solve_linear(torch.tensor([[1.0, 1.0]]))
        tensor([[-1.]])

    """
    POLYROOT_CHECK_SHAPE(coeffs, ["B", "2"])
    POLYROOT_CHECK_IS_FLOATING(coeffs)
    return _roots_linear(coeffs)


def _roots_linear(coeffs: Tensor) -> Tensor:
    root = -coeffs[:, 1:] / coeffs[:, :1]
    return where(isfinite(root), root, nan_like(root))
