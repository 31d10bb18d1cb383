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

"""Scalar operations consumed by the solvers that torch does not expose directly.

Together with the aliases in :mod:`polyroot.core._backend` this is the whole numeric
surface the solvers rely on. Any floating point dtype torch supports on the target
device can be used as the scalar type.
"""

from __future__ import annotations

import torch

from polyroot.core._backend import Tensor, cos, full_like, ones_like, sin, zeros_like
from polyroot.utils._compat import torch_version_ge

__all__ = ["cbrt", "dtype_eps", "fma", "nan_like", "one_like", "sin_cos", "sort_nan_last", "zero_like"]


def fma(a: Tensor, b: Tensor, c: Tensor) -> Tensor:
    r"""Compute :math:`a \cdot b + c` in a single kernel.

    ``torch.addcmul`` fuses the product and the sum into one kernel but does not promise a
    single rounding, so this is not guaranteed to be a hardware fused multiply-add.

    Example:
        >>> fma(torch.tensor([2.0]), torch.tensor([3.0]), torch.tensor([1.0]))
        tensor([7.])

    """
    return torch.addcmul(c, a, b)


def cbrt(x: Tensor) -> Tensor:
    """Real cube root, odd in its argument.

    Example:
        >>> root = cbrt(torch.tensor([-8.0, 27.0]))

    """
    return x.abs().pow(1.0 / 3.0).copysign(x)


def sin_cos(x: Tensor) -> tuple[Tensor, Tensor]:
    """Return the sine and the cosine of the input."""
    return sin(x), cos(x)


def nan_like(x: Tensor) -> Tensor:
    return full_like(x, float("nan"))


def zero_like(x: Tensor) -> Tensor:
    return zeros_like(x)


def one_like(x: Tensor) -> Tensor:
    return ones_like(x)


def dtype_eps(x: Tensor) -> float:
    """Machine epsilon of the tensor floating point type.

    Example:
        >>> dtype_eps(torch.zeros(1, dtype=torch.float64))
        2.220446049250313e-16

    """
    return torch.finfo(x.dtype).eps


def sort_nan_last(x: Tensor) -> Tensor:
    """Sort along the last dimension in ascending order, moving NaN entries to the end.

    Example:
        >>> sort_nan_last(torch.tensor([[2.0, float("nan"), -1.0]]))
        tensor([[-1.,  2., nan]])

    """
    # values first, then a stable pass keyed on NaN so that infinities stay ahead of NaN
    key = torch.where(torch.isnan(x), torch.zeros_like(x), x)
    x = x.gather(-1, _stable_argsort(key))
    return x.gather(-1, _stable_argsort(torch.isnan(x).to(x.dtype)))


def _stable_argsort(key: Tensor) -> Tensor:
    if torch_version_ge(1, 13):
        return key.argsort(dim=-1, stable=True)
    _, idx = torch.sort(key, dim=-1, stable=True)
    return idx
