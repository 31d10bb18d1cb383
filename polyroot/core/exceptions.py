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

"""Errors raised by the polyroot guards and solvers."""

from __future__ import annotations

__all__ = ["BaseError", "ShapeError", "TypeCheckError", "UnsupportedDegreeError", "ValueCheckError"]


class BaseError(Exception):
    """Base class of the polyroot errors."""


class ShapeError(BaseError):
    """Coefficients with a shape other than the one a guard expects."""

    def __init__(self, message: str, *, actual_shape: list[int], expected_shape: list[str]) -> None:
        super().__init__(message)
        self.actual_shape = actual_shape
        self.expected_shape = expected_shape


class TypeCheckError(BaseError):
    """An input that is not a tensor."""

    def __init__(self, message: str, *, actual_type: type, expected_type: type) -> None:
        super().__init__(message)
        self.actual_type = actual_type
        self.expected_type = expected_type


class ValueCheckError(BaseError):
    """A tolerance outside of ``[0, inf)``."""

    def __init__(self, message: str, *, actual_value: float, expected_range: tuple[float, float]) -> None:
        super().__init__(message)
        self.actual_value = actual_value
        self.expected_range = expected_range


class UnsupportedDegreeError(BaseError, NotImplementedError):
    """A degree with no evaluator or solver.

    Polynomials without real roots never raise it, their slots come back as NaN.
    """

    def __init__(self, message: str, *, degree: int, supported: tuple[int, ...]) -> None:
        super().__init__(message)
        self.degree = degree
        self.supported = supported
