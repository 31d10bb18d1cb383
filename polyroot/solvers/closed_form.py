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

"""Closed form real roots of quadratic and cubic equations in homogeneous coordinates.

The quadratic follows J. Blinn, "How to solve a quadratic equation?", IEEE CG&A 2005:
every root is produced as a ratio :math:`x / w` whose terms never subtract nearly equal
quantities. The cubic follows the same paper series as refined by R. Levien for kurbo
(https://github.com/linebender/kurbo/pull/224).
"""

import logging
import math

import torch

from polyroot.core import Tensor, atan2, cbrt, copysign, fma, full, isfinite, nan_like, sin_cos, sqrt, stack, where
from polyroot.core.check import POLYROOT_CHECK_IS_FLOATING, POLYROOT_CHECK_SHAPE

__all__ = ["solve_cubic_blinn", "solve_quadratic_blinn"]

logger = logging.getLogger(__name__)


def _roots_quadratic(a: Tensor, b: Tensor, c: Tensor) -> Tensor:
    A = a
    B = b / 2
    C = c
    D = fma(B, B, -(A * C))

    x = full((a.shape[0], 2), float("nan"), device=a.device, dtype=a.dtype)
    w = torch.ones_like(x)

    # D < 0 is a complex conjugate pair, the NaN fill stays
    mask_real = D >= 0

    mask_b_positive = mask_real & (B > 0)
    if torch.any(mask_b_positive):
        B_, C_ = B[mask_b_positive], C[mask_b_positive]
        E = sqrt(D[mask_b_positive])
        x[mask_b_positive] = stack([-C_, -B_ - E], dim=-1)
        w[mask_b_positive] = stack([B_ + E, A[mask_b_positive]], dim=-1)

    mask_b_negative = mask_real & (B < 0)
    if torch.any(mask_b_negative):
        A_, C_ = A[mask_b_negative], C[mask_b_negative]
        F = -B[mask_b_negative] + sqrt(D[mask_b_negative])
        x[mask_b_negative] = stack([F, C_], dim=-1)
        w[mask_b_negative] = stack([A_, F], dim=-1)

    mask_b_zero = mask_real & (B == 0)
    mask_a_dominant = mask_b_zero & (A.abs() >= C.abs())
    if torch.any(mask_a_dominant):
        A_, C_ = A[mask_a_dominant], C[mask_a_dominant]
        F = sqrt(-A_ * C_)
        x[mask_a_dominant] = stack([F, -F], dim=-1)
        w[mask_a_dominant] = stack([A_, A_], dim=-1)

    mask_c_dominant = mask_b_zero & (A.abs() < C.abs())
    if torch.any(mask_c_dominant):
        A_, C_ = A[mask_c_dominant], C[mask_c_dominant]
        F = sqrt(-A_ * C_)
        x[mask_c_dominant] = stack([-C_, C_], dim=-1)
        w[mask_c_dominant] = stack([F, F], dim=-1)

    roots = x / w
    return where(isfinite(roots), roots, nan_like(roots))


def solve_quadratic_blinn(coeffs: Tensor) -> Tensor:
    r"""Solve a batch of quadratic equations with Blinn's homogeneous formulas.

    .. math:: coeffs[0]x^2 + coeffs[1]x + coeffs[2] = 0

    Args:
        coeffs: the coefficients of the quadratic equations with shape :math:`(B, 3)`.

    Returns:
        A tensor of shape :math:`(B, 2)` containing the real roots.

    Example:
        >>> coeffs = torch.tensor([[1.0, -1.0, -12.0]])
        >>> solve_quadratic_blinn(coeffs)
        tensor([[ 4., -3.]])

    .. note::
       The two roots are not sorted. A double root is reported twice, as in ``[3, 3]``
       for :math:`x^2 - 6x + 9`. A complex conjugate pair is reported as ``[nan, nan]``.

    """
    POLYROOT_CHECK_SHAPE(coeffs, ["B", "3"])
    POLYROOT_CHECK_IS_FLOATING(coeffs)
    return _roots_quadratic(coeffs[:, 0], coeffs[:, 1], coeffs[:, 2])


def solve_cubic_blinn(coeffs: Tensor) -> Tensor:
    r"""Solve a batch of cubic equations in closed form.

    .. math:: coeffs[0]x^3 + coeffs[1]x^2 + coeffs[2]x + coeffs[3] = 0

    The cubic is normalised by :math:`1 / (3 coeffs[0])` and classified with the Hessian
    quantities :math:`h_0 = bd - c^2`, :math:`h_1 = d - bc`, :math:`h_2 = c - b^2`:
    three real roots are produced with a trigonometric identity, a double root with a
    square root and a single real root with two real cube roots.

    Args:
        coeffs: the coefficients of the cubic equations with shape :math:`(B, 4)`.

    Returns:
        A tensor of shape :math:`(B, 3)` containing the real roots.

    Example:
        >>> coeffs = torch.tensor([[1.0, 5.0, -14.0, 0.0]])
        >>> roots = solve_cubic_blinn(coeffs)

    .. note::
       The roots are not sorted. Unused slots hold NaN: one slot for a double root, two
       slots for a single real root. When the leading coefficient is too small for the
       normalised coefficients to be finite, the remaining quadratic is solved instead
       and the last slot is NaN.

    """
    POLYROOT_CHECK_SHAPE(coeffs, ["B", "4"])
    POLYROOT_CHECK_IS_FLOATING(coeffs)

    solutions = full((coeffs.shape[0], 3), float("nan"), device=coeffs.device, dtype=coeffs.dtype)

    a_inv = 1.0 / coeffs[:, 0]
    b = coeffs[:, 1] * (a_inv / 3.0)
    c = coeffs[:, 2] * (a_inv / 3.0)
    d = coeffs[:, 3] * a_inv

    mask_degenerate = ~(isfinite(b) & isfinite(c) & isfinite(d))
    if torch.any(mask_degenerate):
        logger.debug(
            "Solving %d cubic(s) with a vanishing leading coefficient as quadratics.", int(mask_degenerate.sum())
        )
        solutions[mask_degenerate, :2] = _roots_quadratic(
            coeffs[mask_degenerate, 1], coeffs[mask_degenerate, 2], coeffs[mask_degenerate, 3]
        )

    mask_cubic = ~mask_degenerate
    if not torch.any(mask_cubic):
        return solutions

    b, c, d = b[mask_cubic], c[mask_cubic], d[mask_cubic]
    roots = full((b.shape[0], 3), float("nan"), device=b.device, dtype=b.dtype)

    h0 = fma(b, d, -(c * c))
    h1 = fma(-c, b, d)
    h2 = fma(-b, b, c)
    h = 4 * h0 * h2 - h1 * h1
    dp = fma(-2 * b, h2, h1)

    # three distinct real roots
    mask_three = h > 0
    if torch.any(mask_three):
        b_, h2_ = b[mask_three], h2[mask_three]
        t = atan2(sqrt(h[mask_three]), -dp[mask_three]) / 3.0
        t_s, t_c = sin_cos(t)
        ps = t_s * math.sqrt(3.0)
        r = stack([t_c, 0.5 * (-t_c + ps), 0.5 * (-t_c - ps)], dim=-1)
        s = 2 * sqrt(-h2_)
        roots[mask_three] = fma(s[:, None], r, -b_[:, None])

    # a double root and a simple root
    mask_double = h == 0
    if torch.any(mask_double):
        b_ = b[mask_double]
        s = copysign(sqrt(-h2[mask_double]), dp[mask_double])
        roots[mask_double, :2] = stack([s - b_, -2 * s - b_], dim=-1)

    # a single real root
    mask_single = h < 0
    if torch.any(mask_single):
        rt = sqrt(-0.25 * h[mask_single])
        r = -0.5 * dp[mask_single]
        s = cbrt(r + rt) + cbrt(r - rt)
        roots[mask_single, 0] = s - b[mask_single]

    solutions[mask_cubic] = where(isfinite(roots), roots, nan_like(roots))
    return solutions
