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

from enum import Enum, EnumMeta
from typing import Iterator, Type, TypeVar, Union

__all__ = ["MAX_DEGREE", "NEWTON_ITERATIONS", "SolverFamily"]

# highest degree with an evaluator and a solver
MAX_DEGREE: int = 4

# plain Newton steps tried before the safeguarded loop on low degree brackets
NEWTON_ITERATIONS: int = 16

T = TypeVar("T", bound=Enum)
TKEnum = Union[str, int, T]


class _POLYROOT_EnumMeta(EnumMeta):
    def __iter__(self) -> Iterator[Enum]:  # type: ignore[override]
        return super().__iter__()

    def __contains__(self, other: TKEnum[Enum]) -> bool:  # type: ignore[override]
        if isinstance(other, str):
            return any(val.name.upper() == other.upper() for val in self)

        elif isinstance(other, int):
            return any(val.value == other for val in self)

        return any(val == other for val in self)

    def __repr__(self) -> str:
        return " | ".join(f"{self.__name__}.{val.name}" for val in self)


def _get(cls: Type[T], value: TKEnum[T]) -> T:
    if isinstance(value, str):
        return cls[value.upper()]

    elif isinstance(value, int):
        return cls(value)

    elif isinstance(value, cls):
        return value

    raise TypeError(
        f"The `.get` method from `{cls}` expects a value with type `str`, `int` or `{cls}`. Gotcha {type(value)}"
    )


class SolverFamily(Enum, metaclass=_POLYROOT_EnumMeta):
    """Root finding strategy selected at the call site.

    ``CLOSED_FORM`` uses the homogeneous coordinate formulas (quadratic and cubic only),
    ``ITERATIVE`` the derivative isolation with safeguarded Newton refinement (up to quartic).
    """

    CLOSED_FORM = 0
    ITERATIVE = 1

    @classmethod
    def get(cls, value: TKEnum["SolverFamily"]) -> "SolverFamily":
        return _get(cls, value)
