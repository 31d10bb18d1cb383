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

from dataclasses import dataclass, field
from typing import Optional, Union

from polyroot.constants import NEWTON_ITERATIONS, SolverFamily

__all__ = ["PolyrootConfig", "SolverConfig", "polyroot_config"]


class SolverConfig:
    _default_tolerance: Optional[float] = None
    _newton_iterations: int = NEWTON_ITERATIONS
    _default_method: SolverFamily = SolverFamily.ITERATIVE

    @property
    def default_tolerance(self) -> Optional[float]:
        # None resolves to the machine epsilon of the coefficients dtype
        return self._default_tolerance

    @default_tolerance.setter
    def default_tolerance(self, value: Optional[float]) -> None:
        if value is None:
            self._default_tolerance = None
            return
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise TypeError("default_tolerance must be a float or None.")
        if not value >= 0.0:
            raise ValueError(f"default_tolerance must be non-negative, got {value}.")
        self._default_tolerance = float(value)

    @property
    def newton_iterations(self) -> int:
        return self._newton_iterations

    @newton_iterations.setter
    def newton_iterations(self, value: int) -> None:
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError("newton_iterations must be an int.")
        if value < 0:
            raise ValueError(f"newton_iterations must be non-negative, got {value}.")
        self._newton_iterations = value

    @property
    def default_method(self) -> SolverFamily:
        return self._default_method

    @default_method.setter
    def default_method(self, value: Union[str, int, SolverFamily]) -> None:
        try:
            self._default_method = SolverFamily.get(value)
        except (KeyError, ValueError):
            raise ValueError(f"{value} is not a valid SolverFamily. Choose from: {list(SolverFamily)}") from None


@dataclass
class PolyrootConfig:
    solver: SolverConfig = field(default_factory=SolverConfig)


polyroot_config = PolyrootConfig()
