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

"""Polyroot core: tensor aliases, scalar operations and validation guards."""

from ._backend import (
    Device,
    Dtype,
    Module,
    Tensor,
    as_tensor,
    atan2,
    copysign,
    cos,
    full,
    full_like,
    isfinite,
    isnan,
    maximum,
    minimum,
    ones_like,
    sin,
    sqrt,
    stack,
    where,
    zeros_like,
)
from .ops import cbrt, dtype_eps, fma, nan_like, one_like, sin_cos, sort_nan_last, zero_like

__all__ = [
    "Device",
    "Dtype",
    "Module",
    "Tensor",
    "as_tensor",
    "atan2",
    "cbrt",
    "copysign",
    "cos",
    "dtype_eps",
    "fma",
    "full",
    "full_like",
    "isfinite",
    "isnan",
    "maximum",
    "minimum",
    "nan_like",
    "one_like",
    "ones_like",
    "sin",
    "sin_cos",
    "sort_nan_last",
    "sqrt",
    "stack",
    "where",
    "zero_like",
    "zeros_like",
]
