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

from __future__ import annotations

from typing import Union

import torch

# classes
Tensor = torch.Tensor
Module = torch.nn.Module

# functions
atan2 = torch.atan2
copysign = torch.copysign
cos = torch.cos
full = torch.full
full_like = torch.full_like
isfinite = torch.isfinite
isnan = torch.isnan
maximum = torch.maximum
minimum = torch.minimum
sin = torch.sin
sqrt = torch.sqrt
stack = torch.stack
where = torch.where
zeros_like = torch.zeros_like
ones_like = torch.ones_like

# constructors
as_tensor = torch.as_tensor

# type alias
Device = Union[str, torch.device, None]
Dtype = Union[torch.dtype, None]
