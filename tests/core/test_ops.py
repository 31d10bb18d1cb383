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

import math

import pytest
import torch

from polyroot.core import cbrt, dtype_eps, fma, nan_like, one_like, sin_cos, sort_nan_last, zero_like

from testing.base import assert_close


class TestFma:
    def test_value(self, device, dtype):
        a = torch.tensor([2.0, -1.5], device=device, dtype=dtype)
        b = torch.tensor([3.0, 4.0], device=device, dtype=dtype)
        c = torch.tensor([1.0, 0.5], device=device, dtype=dtype)
        assert_close(fma(a, b, c), torch.tensor([7.0, -5.5], device=device, dtype=dtype))


class TestCbrt:
    def test_odd(self, device, dtype):
        x = torch.tensor([-8.0, -1.0, 0.0, 1.0, 27.0], device=device, dtype=dtype)
        expected = torch.tensor([-2.0, -1.0, 0.0, 1.0, 3.0], device=device, dtype=dtype)
        assert_close(cbrt(x), expected)
        assert_close(cbrt(-x), -expected)

    def test_nan(self, device, dtype):
        x = torch.tensor([float("nan")], device=device, dtype=dtype)
        assert torch.isnan(cbrt(x)).all()


class TestSinCos:
    def test_value(self, device, dtype):
        x = torch.tensor([0.0, math.pi / 2], device=device, dtype=dtype)
        s, c = sin_cos(x)
        assert_close(s, torch.tensor([0.0, 1.0], device=device, dtype=dtype))
        assert_close(c, torch.tensor([1.0, 0.0], device=device, dtype=dtype))


class TestConstants:
    def test_like(self, device, dtype):
        x = torch.rand(2, 3, device=device, dtype=dtype)
        assert torch.isnan(nan_like(x)).all()
        assert (zero_like(x) == 0).all()
        assert (one_like(x) == 1).all()
        for out in (nan_like(x), zero_like(x), one_like(x)):
            assert out.shape == x.shape
            assert out.dtype == dtype
            assert out.device == x.device

    @pytest.mark.parametrize("dtype", [torch.float32, torch.float64])
    def test_dtype_eps(self, dtype):
        assert dtype_eps(torch.zeros(1, dtype=dtype)) == torch.finfo(dtype).eps


class TestSortNanLast:
    def test_sort(self, device, dtype):
        nan = float("nan")
        x = torch.tensor([[2.0, nan, -1.0], [nan, nan, 0.5], [3.0, 1.0, 2.0]], device=device, dtype=dtype)
        expected = torch.tensor([[-1.0, 2.0, nan], [0.5, nan, nan], [1.0, 2.0, 3.0]], device=device, dtype=dtype)
        assert_close(sort_nan_last(x), expected)

    def test_infinity_before_nan(self, device, dtype):
        x = torch.tensor([[float("nan"), float("inf"), 0.0]], device=device, dtype=dtype)
        out = sort_nan_last(x)
        assert out[0, 0] == 0.0
        assert out[0, 1] == float("inf")
        assert torch.isnan(out[0, 2])
