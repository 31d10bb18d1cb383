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

"""Real roots by derivative isolation and safeguarded Newton refinement.

Reference: C. Yuksel, "High-Performance Polynomial Root Finding for Graphics",
Proc. ACM Comput. Graph. Interact. Tech. (HPG 2022).

The real roots of the derivative split the real line into intervals on which the
polynomial is monotonic, so each interval holds at most one root. Bounded intervals
with a sign change are refined with :func:`find_closed`, the two unbounded ones with
:func:`find_open_min` and :func:`find_open_max`. The derivative roots come from the
same routine one degree lower, down to a closed formula for quadratics.

All sign tests compare ``y < 0`` on both operands: near multiple roots the magnitudes
underflow long before the signs stop being reliable.
"""

from __future__ import annotations

import logging
import math
from typing import Optional

import torch

from polyroot.config import polyroot_config
from polyroot.core import (
    Tensor,
    copysign,
    dtype_eps,
    full,
    full_like,
    isfinite,
    isnan,
    maximum,
    minimum,
    nan_like,
    sort_nan_last,
    sqrt,
    where,
)
from polyroot.core.check import POLYROOT_CHECK_IS_FLOATING, POLYROOT_CHECK_SHAPE
from polyroot.core.exceptions import ValueCheckError
from polyroot.polynomial import evaluate_polynomial, polynomial_derivative
from polyroot.solvers.linear import _roots_linear

__all__ = [
    "find_closed",
    "find_open_max",
    "find_open_min",
    "resolve_tolerance",
    "solve_cubic_yuksel",
    "solve_quadratic_yuksel",
    "solve_quartic_yuksel",
]

logger = logging.getLogger(__name__)


def _different_sign(a: Tensor, b: Tensor) -> Tensor:
    return (a < 0) != (b < 0)


def resolve_tolerance(tol: Optional[float], coeffs: Tensor) -> float:
    """Return the refinement tolerance, falling back to the configuration and then to the dtype epsilon."""
    if tol is None:
        tol = polyroot_config.solver.default_tolerance
    if tol is None:
        tol = dtype_eps(coeffs)
    if not tol >= 0.0:
        raise ValueCheckError(
            f"The tolerance must be non-negative, got {tol}.", actual_value=tol, expected_range=(0.0, math.inf)
        )
    return float(tol)


def find_closed(
    coeffs: Tensor,
    deriv: Tensor,
    x0: Tensor,
    x1: Tensor,
    y0: Tensor,
    y1: Tensor,
    tol: float,
    newton_iterations: Optional[int] = None,
) -> Tensor:
    r"""Refine one root per bracket :math:`[x_0, x_1]` on which the polynomial is monotonic.

    For degrees up to three a few plain Newton steps clamped to the bracket are tried
    first. Brackets that do not converge that way, and every bracket of higher degree,
    go through a Newton-bisection hybrid: a Newton step is accepted only when it lands
    strictly inside the current bracket, otherwise the bracket is bisected. Converged
    Newton steps are confirmed by sampling a point ``tol`` away towards the root.

    Args:
        coeffs: the polynomial of each bracket with shape :math:`(M, N + 1)`.
        deriv: the derivative of each polynomial with shape :math:`(M, N)`.
        x0: lower bracket ends with shape :math:`(M,)`.
        x1: upper bracket ends with shape :math:`(M,)`.
        y0: polynomial values at ``x0``.
        y1: polynomial values at ``x1``.
        tol: the absolute tolerance of the root, brackets narrower than ``2 * tol`` stop.
        newton_iterations: the plain Newton budget, the configured value when ``None``.

    Returns:
        the refined roots with shape :math:`(M,)`.

    """
    if newton_iterations is None:
        newton_iterations = polyroot_config.solver.newton_iterations
    degree = coeffs.shape[-1] - 1

    def p(x: Tensor) -> Tensor:
        return evaluate_polynomial(coeffs, x)

    def dp(x: Tensor) -> Tensor:
        return evaluate_polynomial(deriv, x)

    ep2 = 2 * tol
    xr = (x0 + x1) / 2
    out = xr.clone()
    pending = ~(x1 - x0 <= ep2)

    if degree <= 3 and newton_iterations > 0:
        xr0 = xr
        for _ in range(newton_iterations):
            if not torch.any(pending):
                break
            xn = minimum(maximum(xr - p(xr) / dp(xr), x0), x1)
            converged = pending & ((xr - xn).abs() <= tol)
            out = where(converged, xn, out)
            pending = pending & ~converged
            xr = where(pending, xn, xr)
        xr = where(isfinite(xr), xr, xr0)

    if torch.any(pending):
        out[pending] = _newton_bisection(
            coeffs[pending], deriv[pending], xr[pending], x0[pending], x1[pending], y0[pending], tol
        )
    return out


def _newton_bisection(
    coeffs: Tensor, deriv: Tensor, xr: Tensor, xb0: Tensor, xb1: Tensor, y0: Tensor, tol: float
) -> Tensor:
    def p(x: Tensor) -> Tensor:
        return evaluate_polynomial(coeffs, x)

    def dp(x: Tensor) -> Tensor:
        return evaluate_polynomial(deriv, x)

    eps = dtype_eps(xr)
    ep2 = 2 * tol
    yr = p(xr)
    out = xr.clone()
    active = torch.ones_like(xr, dtype=torch.bool)

    iterations = 0
    while torch.any(active):
        iterations += 1
        # the root lies in [xb0, xr] when side is set, in [xr, xb1] otherwise
        side = _different_sign(y0, yr)
        xb1 = where(active & side, xr, xb1)
        xb0 = where(active & ~side, xr, xb0)

        xn = xr - yr / dp(xr)
        newton = active & (xn > xb0) & (xn < xb1)

        # newton step inside the bracket, small steps are confirmed by a sample tol further on
        far = newton & ((xr - xn).abs() > tol)
        near = newton & ~far
        toward_root = where(side, xb1 - eps, xb0 + eps)
        if tol == 0:
            xs = toward_root
        else:
            xs = xn - where(side, full_like(xn, tol), full_like(xn, -tol))
            xs = where(xs == xn, toward_root, xs)
        ys = p(xs)
        converged = near & (side != _different_sign(y0, ys))
        # a sample that rounds back onto xr cannot shrink the bracket
        sampled = near & ~converged & (xs != xr)
        bisect = active & ~far & ~converged & ~sampled

        # bisection, stopping when the bracket cannot shrink any further
        xm = (xb0 + xb1) / 2
        stop = bisect & ((xm == xb0) | (xm == xb1) | (xb1 - xb0 <= ep2) | isnan(xm))
        final = xm
        if tol == 0:
            xe = where(side, xb0, xb1)
            final = where(p(xe).abs() < yr.abs(), xe, xm)

        out = where(converged, xn, out)
        out = where(stop, final, out)

        xr = where(far, xn, where(sampled, xs, where(bisect, xm, xr)))
        yr = where(sampled, ys, p(xr))
        active = active & ~converged & ~stop

    logger.debug("Newton-bisection refined %d bracket(s) in %d iteration(s).", xr.shape[0], iterations)
    return out


def _find_open(coeffs: Tensor, deriv: Tensor, xm: Tensor, ym: Tensor, tol: float, open_min: bool) -> Tensor:
    def p(x: Tensor) -> Tensor:
        return evaluate_polynomial(coeffs, x)

    def dp(x: Tensor) -> Tensor:
        return evaluate_polynomial(deriv, x)

    # outward direction of the unbounded interval
    direction = -1.0 if open_min else 1.0

    xr = xm + direction
    yr = p(xr)
    delta = torch.ones_like(xr)
    out = xr.clone()
    searching = torch.ones_like(xr, dtype=torch.bool)
    bounded = torch.zeros_like(searching)

    while torch.any(searching):
        on_root = searching & ((yr == 0) | isnan(xr))
        out = where(on_root, xr, out)
        crossed = searching & ~on_root & _different_sign(ym, yr)
        bounded = bounded | crossed
        searching = searching & ~on_root & ~crossed
        if not torch.any(searching):
            break

        xm = where(searching, xr, xm)
        ym = where(searching, yr, ym)
        xn = xr - yr / dp(xr)
        step = direction * (xn - xr)

        # newton steps are only followed while they keep moving outward
        outward = searching & (step >= 0) & isfinite(xn)
        small = outward & (step <= tol)
        stalled = small & (xn == xm)
        xs = xn + direction * tol
        ys = p(xs)
        found = small & ~stalled & _different_sign(ym, ys)
        out = where(stalled | found, xn, out)
        retry = small & ~stalled & ~found
        advance = outward & ~small
        fallback = searching & ~outward

        xr = where(retry, xs, where(advance, xn, where(fallback, xr + direction * delta, xr)))
        delta = where(fallback, delta * 2, delta)
        yr = where(retry, ys, p(xr))
        searching = searching & ~stalled & ~found

    if torch.any(bounded):
        if open_min:
            out[bounded] = find_closed(
                coeffs[bounded], deriv[bounded], xr[bounded], xm[bounded], yr[bounded], ym[bounded], tol
            )
        else:
            out[bounded] = find_closed(
                coeffs[bounded], deriv[bounded], xm[bounded], xr[bounded], ym[bounded], yr[bounded], tol
            )
    return out


def find_open_min(coeffs: Tensor, deriv: Tensor, x1: Tensor, y1: Tensor, tol: float) -> Tensor:
    r"""Refine the root of a monotonic interval :math:`(-\infty, x_1]`.

    The search starts one unit below ``x1`` and follows Newton steps while they move
    downwards. When a step does not, the search point is pushed down by an offset that doubles
    after each attempt. Once the sign flips the bracket is handed to :func:`find_closed`.

    Args:
        coeffs: the polynomial of each interval with shape :math:`(M, N + 1)`.
        deriv: the derivative of each polynomial with shape :math:`(M, N)`.
        x1: the finite interval ends with shape :math:`(M,)`.
        y1: polynomial values at ``x1``.
        tol: the absolute tolerance of the root.

    Returns:
        the refined roots with shape :math:`(M,)`.

    """
    return _find_open(coeffs, deriv, x1, y1, tol, open_min=True)


def find_open_max(coeffs: Tensor, deriv: Tensor, x0: Tensor, y0: Tensor, tol: float) -> Tensor:
    r"""Refine the root of a monotonic interval :math:`[x_0, +\infty)`.

    Mirror of :func:`find_open_min`, searching upwards from one unit above ``x0``.
    """
    return _find_open(coeffs, deriv, x0, y0, tol, open_min=False)


def _roots_quadratic(coeffs: Tensor, tol: float) -> Tensor:
    a, b, c = coeffs[:, 0], coeffs[:, 1], coeffs[:, 2]
    roots = full((coeffs.shape[0], 2), float("nan"), device=coeffs.device, dtype=coeffs.dtype)

    delta = b * b - 4 * a * c

    mask_two = delta > 0
    if torch.any(mask_two):
        a_, b_, c_ = a[mask_two], b[mask_two], c[mask_two]
        q = -0.5 * (b_ + copysign(sqrt(delta[mask_two]), b_))
        rv0 = q / a_
        rv1 = c_ / q
        roots[mask_two, 0] = minimum(rv0, rv1)
        roots[mask_two, 1] = maximum(rv0, rv1)

    # a double root is reported once
    mask_one = delta == 0
    if torch.any(mask_one):
        roots[mask_one, 0] = -0.5 * b[mask_one] / a[mask_one]

    return roots


def _roots_isolated(coeffs: Tensor, tol: float) -> Tensor:
    degree = coeffs.shape[-1] - 1
    deriv = polynomial_derivative(coeffs)
    deriv_roots = _solve(deriv, tol)

    roots = full((coeffs.shape[0], degree), float("nan"), device=coeffs.device, dtype=coeffs.dtype)
    lead = coeffs[:, 0]
    has_critical = isfinite(deriv_roots[:, 0])

    # (-inf, first critical point]: p(-inf) carries the sign of lead times (-1)^degree
    xa = deriv_roots[:, 0]
    ya = evaluate_polynomial(coeffs, xa)
    lower = _different_sign(ya, lead)
    if degree % 2 == 1:
        lower = ~lower
    lower = lower & has_critical
    if torch.any(lower):
        roots[lower, 0] = find_open_min(coeffs[lower], deriv[lower], xa[lower], ya[lower], tol)

    # bounded intervals between consecutive critical points
    for i in range(1, degree - 1):
        xb = deriv_roots[:, i]
        yb = evaluate_polynomial(coeffs, xb)
        valid = isfinite(xb)
        closed = valid & _different_sign(ya, yb)
        if torch.any(closed):
            roots[closed, i] = find_closed(
                coeffs[closed], deriv[closed], xa[closed], xb[closed], ya[closed], yb[closed], tol
            )
        xa = where(valid, xb, xa)
        ya = where(valid, yb, ya)

    # [last critical point, +inf)
    upper = has_critical & _different_sign(ya, lead)
    if torch.any(upper):
        roots[upper, -1] = find_open_max(coeffs[upper], deriv[upper], xa[upper], ya[upper], tol)

    # odd degree without critical points is monotonic everywhere, start from the centroid of the roots
    if degree % 2 == 1:
        monotonic = ~has_critical
        if torch.any(monotonic):
            sub_coeffs, sub_deriv = coeffs[monotonic], deriv[monotonic]
            x_mid = -sub_coeffs[:, 1] / (degree * sub_coeffs[:, 0])
            y_mid = evaluate_polynomial(sub_coeffs, x_mid)
            rising = _different_sign(y_mid, sub_coeffs[:, 0])
            single = nan_like(x_mid)
            if torch.any(rising):
                single[rising] = find_open_max(
                    sub_coeffs[rising], sub_deriv[rising], x_mid[rising], y_mid[rising], tol
                )
            if torch.any(~rising):
                single[~rising] = find_open_min(
                    sub_coeffs[~rising], sub_deriv[~rising], x_mid[~rising], y_mid[~rising], tol
                )
            roots[monotonic, 0] = single

    roots = where(isfinite(roots), roots, nan_like(roots))
    return sort_nan_last(roots)


def _solve(coeffs: Tensor, tol: float) -> Tensor:
    degree = coeffs.shape[-1] - 1
    if degree == 1:
        return _roots_linear(coeffs)

    roots = full((coeffs.shape[0], degree), float("nan"), device=coeffs.device, dtype=coeffs.dtype)

    # rows with a non-finite coefficient keep the NaN fill
    mask_valid = isfinite(coeffs).all(dim=-1)

    # a vanishing leading coefficient makes the normalised coefficients overflow
    normalized = coeffs[:, 1:] / coeffs[:, :1]
    mask_degenerate = mask_valid & ~isfinite(normalized).all(dim=-1)
    if torch.any(mask_degenerate):
        logger.debug(
            "Solving %d polynomial(s) of degree %d with a vanishing leading coefficient one degree lower.",
            int(mask_degenerate.sum()),
            degree,
        )
        roots[mask_degenerate, :-1] = _solve(coeffs[mask_degenerate, 1:], tol)

    mask_regular = mask_valid & ~mask_degenerate
    if torch.any(mask_regular):
        solver = _roots_quadratic if degree == 2 else _roots_isolated
        roots[mask_regular] = solver(coeffs[mask_regular], tol)
    return roots


def solve_quadratic_yuksel(coeffs: Tensor, tol: Optional[float] = None) -> Tensor:
    r"""Solve a batch of quadratic equations, roots in ascending order.

    .. math:: coeffs[0]x^2 + coeffs[1]x + coeffs[2] = 0

    Args:
        coeffs: the coefficients of the quadratic equations with shape :math:`(B, 3)`.
        tol: accepted for a uniform signature, the quadratic formula is exact.

    Returns:
        A tensor of shape :math:`(B, 2)` with the real roots sorted in ascending order.

    Example:
        >>> coeffs = torch.tensor([[1.0, -1.0, -12.0]])
        >>> solve_quadratic_yuksel(coeffs)
        tensor([[-3.,  4.]])

    .. note::
       A double root is reported once, as in ``[3, nan]`` for :math:`x^2 - 6x + 9`.

    """
    POLYROOT_CHECK_SHAPE(coeffs, ["B", "3"])
    POLYROOT_CHECK_IS_FLOATING(coeffs)
    return _solve(coeffs, resolve_tolerance(tol, coeffs))


def solve_cubic_yuksel(coeffs: Tensor, tol: Optional[float] = None) -> Tensor:
    r"""Solve a batch of cubic equations, roots in ascending order.

    .. math:: coeffs[0]x^3 + coeffs[1]x^2 + coeffs[2]x + coeffs[3] = 0

    Args:
        coeffs: the coefficients of the cubic equations with shape :math:`(B, 4)`.
        tol: the absolute tolerance of the refined roots, the dtype epsilon when ``None``.

    Returns:
        A tensor of shape :math:`(B, 3)` with the real roots sorted in ascending order,
        followed by NaN for the missing ones.

    Example:
        >>> coeffs = torch.tensor([[1.0, 5.0, -14.0, 0.0]])
        >>> roots = solve_cubic_yuksel(coeffs, 1e-6)

    """
    POLYROOT_CHECK_SHAPE(coeffs, ["B", "4"])
    POLYROOT_CHECK_IS_FLOATING(coeffs)
    return _solve(coeffs, resolve_tolerance(tol, coeffs))


def solve_quartic_yuksel(coeffs: Tensor, tol: Optional[float] = None) -> Tensor:
    r"""Solve a batch of quartic equations, roots in ascending order.

    .. math:: coeffs[0]x^4 + coeffs[1]x^3 + coeffs[2]x^2 + coeffs[3]x + coeffs[4] = 0

    Args:
        coeffs: the coefficients of the quartic equations with shape :math:`(B, 5)`.
        tol: the absolute tolerance of the refined roots, the dtype epsilon when ``None``.

    Returns:
        A tensor of shape :math:`(B, 4)` with the real roots sorted in ascending order,
        followed by NaN for the missing ones.

    Example:
        >>> coeffs = torch.tensor([[1.0, 0.0, -5.0, 0.0, 4.0]])
        >>> roots = solve_quartic_yuksel(coeffs, 1e-6)

    """
    POLYROOT_CHECK_SHAPE(coeffs, ["B", "5"])
    POLYROOT_CHECK_IS_FLOATING(coeffs)
    return _solve(coeffs, resolve_tolerance(tol, coeffs))
