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

"""Validation guards shared by the polynomial entity and the solvers."""

from __future__ import annotations

import os
from typing import Optional, Sequence

import torch
from typing_extensions import TypeGuard

from polyroot.core.exceptions import (
    BaseError,
    ShapeError,
    TypeCheckError,
    UnsupportedDegreeError,
    ValueCheckError,
)

__all__ = [
    "POLYROOT_CHECK",
    "POLYROOT_CHECK_DEGREE",
    "POLYROOT_CHECK_IS_FLOATING",
    "POLYROOT_CHECK_IS_TENSOR",
    "POLYROOT_CHECK_SHAPE",
    "BaseError",
    "ShapeError",
    "TypeCheckError",
    "UnsupportedDegreeError",
    "ValueCheckError",
    "are_checks_enabled",
    "disable_checks",
    "enable_checks",
]


def _should_enable_checks() -> bool:
    """Determine if checks should be enabled.

    Checks are enabled by default in debug mode (normal Python execution).
    Checks are disabled when:
    - Running with `python -O` (optimized mode)
    - Environment variable POLYROOT_CHECKS=0 is set
    """
    env_var = os.getenv("POLYROOT_CHECKS", None)
    if env_var is not None:
        return env_var.lower() in ("1", "true", "yes", "on")
    return __debug__


_POLYROOT_CHECKS_ENABLED: bool = _should_enable_checks()


def are_checks_enabled() -> bool:
    """Check if validation is currently enabled.

    Example:
        >>> are_checks_enabled()
        True
    """
    return _POLYROOT_CHECKS_ENABLED


def disable_checks() -> None:
    """Disable the shape and type guards.

    Degree guards are never disabled: asking for an unsupported degree is a
    contract violation, not an input validation issue.

    Example:
        >>> disable_checks()
        >>> are_checks_enabled()
        False
        >>> enable_checks()
    """
    global _POLYROOT_CHECKS_ENABLED  # noqa: PLW0603
    _POLYROOT_CHECKS_ENABLED = False


def enable_checks() -> None:
    """Enable the shape and type guards.

    Example:
        >>> enable_checks()
        >>> are_checks_enabled()
        True
    """
    global _POLYROOT_CHECKS_ENABLED  # noqa: PLW0603
    _POLYROOT_CHECKS_ENABLED = True


def POLYROOT_CHECK_SHAPE(x: torch.Tensor, shape: list[str], msg: Optional[str] = None, raises: bool = True) -> bool:
    """Check whether a tensor has a specified shape.

    The shape can be specified with a implicit or explicit list of strings.

    Args:
        x: the tensor to evaluate.
        shape: a list with strings with the expected shape.
        msg: optional custom message to append to error.
        raises: bool indicating whether an exception should be raised upon failure.

    Raises:
        ShapeError: if the input tensor does not have the expected shape and raises is True.

    Example:
        >>> x = torch.rand(2, 4)
        >>> POLYROOT_CHECK_SHAPE(x, ["B", "4"])
        True

        >>> POLYROOT_CHECK_SHAPE(x, ["*", "4"])
        True

    """
    if not _POLYROOT_CHECKS_ENABLED:
        return True

    if "*" == shape[0]:
        shape_to_check = shape[1:]
        x_shape_to_check = x.shape[-len(shape) + 1 :]
    elif "*" == shape[-1]:
        shape_to_check = shape[:-1]
        x_shape_to_check = x.shape[: len(shape) - 1]
    else:
        shape_to_check = shape
        x_shape_to_check = x.shape

    if len(x_shape_to_check) != len(shape_to_check):
        if raises:
            error_msg = (
                f"Shape dimension mismatch: expected {len(shape_to_check)} dimensions, got {len(x_shape_to_check)}.\n"
            )
            error_msg += f"  Expected shape: {shape}\n"
            error_msg += f"  Actual shape: {list(x.shape)}"
            if msg is not None:
                error_msg += f"\n  {msg}"
            raise ShapeError(error_msg, actual_shape=list(x.shape), expected_shape=shape)
        return False

    for i in range(len(x_shape_to_check)):
        dim_: str = shape_to_check[i]
        if not dim_.isnumeric():
            continue
        dim = int(dim_)
        if x_shape_to_check[i] != dim:
            if raises:
                error_msg = f"Shape mismatch at dimension {i}: expected {dim}, got {x_shape_to_check[i]}.\n"
                error_msg += f"  Expected shape: {shape}\n"
                error_msg += f"  Actual shape: {list(x.shape)}"
                if msg is not None:
                    error_msg += f"\n  {msg}"
                raise ShapeError(error_msg, actual_shape=list(x.shape), expected_shape=shape)
            return False
    return True


def POLYROOT_CHECK(condition: bool, msg: Optional[str] = None, raises: bool = True) -> bool:
    """Check any arbitrary boolean condition.

    Args:
        condition: the condition to evaluate.
        msg: message to show in the exception.
        raises: bool indicating whether an exception should be raised upon failure.

    Raises:
        BaseError: if the condition is not met and raises is True.

    Example:
        >>> x = torch.rand(2, 3)
        >>> POLYROOT_CHECK(x.shape[-1] == 3, "Invalid quadratic")
        True

    """
    if not _POLYROOT_CHECKS_ENABLED:
        return True

    if not condition:
        if raises:
            raise BaseError(msg if msg is not None else "Validation condition failed")
        return False
    return True


def POLYROOT_CHECK_IS_TENSOR(x: object, msg: Optional[str] = None, raises: bool = True) -> TypeGuard[torch.Tensor]:
    """Check the input variable is a Tensor.

    Args:
        x: any input variable.
        msg: message to show in the exception.
        raises: bool indicating whether an exception should be raised upon failure.

    Raises:
        TypeCheckError: if the input variable is not a tensor and raises is True.

    Example:
        >>> POLYROOT_CHECK_IS_TENSOR(torch.rand(1, 3), "Invalid coefficients")
        True

    """
    if not _POLYROOT_CHECKS_ENABLED:
        return True

    if not isinstance(x, torch.Tensor):
        if raises:
            error_msg = f"Type mismatch: expected Tensor, got {type(x).__name__}."
            if msg is not None:
                error_msg += f"\n  {msg}"
            raise TypeCheckError(error_msg, actual_type=type(x), expected_type=torch.Tensor)
        return False
    return True


def POLYROOT_CHECK_IS_FLOATING(x: torch.Tensor, msg: Optional[str] = None, raises: bool = True) -> bool:
    """Check the tensor carries a real floating point dtype.

    The solvers need NaN, ordering and the transcendental functions, so integer,
    boolean and complex tensors are rejected.

    Args:
        x: the tensor to evaluate.
        msg: message to show in the exception.
        raises: bool indicating whether an exception should be raised upon failure.

    Raises:
        TypeCheckError: if the dtype is not a real floating point type and raises is True.

    Example:
        >>> POLYROOT_CHECK_IS_FLOATING(torch.rand(1, 3))
        True
        >>> POLYROOT_CHECK_IS_FLOATING(torch.ones(1, 3, dtype=torch.int64), raises=False)
        False

    """
    if not _POLYROOT_CHECKS_ENABLED:
        return True

    if not x.is_floating_point():
        if raises:
            error_msg = f"Dtype mismatch: expected a floating point tensor, got {x.dtype}."
            if msg is not None:
                error_msg += f"\n  {msg}"
            raise TypeCheckError(error_msg, actual_type=type(x), expected_type=torch.Tensor)
        return False
    return True


def POLYROOT_CHECK_DEGREE(degree: int, supported: Sequence[int], msg: Optional[str] = None) -> bool:
    """Check the polynomial degree belongs to the supported set.

    Unlike the other guards this one always runs and always raises.

    Args:
        degree: the degree of the polynomial.
        supported: the degrees the caller implements.
        msg: message to show in the exception.

    Raises:
        UnsupportedDegreeError: if the degree is not supported.

    Example:
        >>> POLYROOT_CHECK_DEGREE(3, (2, 3))
        True

    """
    if degree not in supported:
        error_msg = f"Polynomials of degree {degree} are not implemented, supported degrees: {tuple(supported)}."
        if msg is not None:
            error_msg += f"\n  {msg}"
        raise UnsupportedDegreeError(error_msg, degree=degree, supported=tuple(supported))
    return True
