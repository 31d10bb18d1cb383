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

import logging

import pytest
import torch

import polyroot
from polyroot import Polynomial, PolynomialRoots, SolverFamily, polyroot_config
from polyroot.core.exceptions import UnsupportedDegreeError
from polyroot.solvers import solve_closed_form, solve_iterative, solve_polynomial

from testing.base import assert_close, assert_roots_close

nan = float("nan")


class TestSolvePolynomial:
    @pytest.mark.parametrize(
        "coeffs, expected",
        [
            ([0.0], [0.0]),
            ([1.0], [nan]),
            ([1.0, 1.0], [-1.0]),
            ([0.0, 1.0], [nan]),
        ],
    )
    @pytest.mark.parametrize("method", ["closed_form", "iterative"])
    def test_low_degree(self, coeffs, expected, method, device, dtype):
        coeffs = torch.tensor([coeffs], device=device, dtype=dtype)
        roots = solve_polynomial(coeffs, tol=1e-7, method=method)
        assert_close(roots, torch.tensor([expected], device=device, dtype=dtype))

    def test_constant_tolerance(self, device, dtype):
        coeffs = torch.tensor([[1e-3], [1e-1]], device=device, dtype=dtype)
        roots = solve_polynomial(coeffs, tol=1e-2)
        assert roots[0, 0] == 0.0
        assert torch.isnan(roots[1, 0])

    def test_double_root_per_family(self, device, dtype):
        coeffs = torch.tensor([[1.0, -6.0, 9.0]], device=device, dtype=dtype)
        closed = solve_polynomial(coeffs, method=SolverFamily.CLOSED_FORM)
        iterative = solve_polynomial(coeffs, method=SolverFamily.ITERATIVE)
        assert_close(closed, torch.tensor([[3.0, 3.0]], device=device, dtype=dtype))
        assert_close(iterative, torch.tensor([[3.0, nan]], device=device, dtype=dtype))

    def test_families_agree(self, device):
        dtype = torch.float64
        coeffs = torch.tensor(
            [[1.0, 5.0, -14.0, 0.0], [2.0, 3.0, -11.0, -6.0], [1.0, 0.0, 1.0, 1.0]], device=device, dtype=dtype
        )
        closed = solve_polynomial(coeffs, method="closed_form")
        iterative = solve_polynomial(coeffs, method="iterative")
        assert_roots_close(closed, iterative, rtol=1e-9, atol=1e-9)

    def test_default_method(self, device, dtype):
        coeffs = torch.tensor([[1.0, -1.0, -12.0]], device=device, dtype=dtype)
        assert_close(solve_polynomial(coeffs), torch.tensor([[-3.0, 4.0]], device=device, dtype=dtype))
        polyroot_config.solver.default_method = "closed_form"
        assert_close(solve_polynomial(coeffs), torch.tensor([[4.0, -3.0]], device=device, dtype=dtype))

    def test_polynomial_input(self, device, dtype):
        p = Polynomial([1.0, 0.0, -5.0, 0.0, 4.0], device=device, dtype=dtype)
        roots = solve_polynomial(p, method="iterative")
        assert_close(roots, torch.tensor([[-2.0, -1.0, 1.0, 2.0]], device=device, dtype=dtype))

    def test_quartic_closed_form_unsupported(self, device, dtype):
        coeffs = torch.tensor([[1.0, 0.0, -5.0, 0.0, 4.0]], device=device, dtype=dtype)
        with pytest.raises(UnsupportedDegreeError) as errinfo:
            solve_polynomial(coeffs, method="closed_form")
        assert errinfo.value.degree == 4
        assert errinfo.value.supported == (2, 3)

    def test_invalid_method(self, device, dtype):
        with pytest.raises(KeyError):
            solve_polynomial(torch.rand(1, 3, device=device, dtype=dtype), method="newton")

    def test_debug_logging(self, caplog, device, dtype):
        coeffs = torch.tensor([[1.0, -1.0, -12.0]], device=device, dtype=dtype)
        with caplog.at_level(logging.DEBUG, logger="polyroot"):
            solve_polynomial(coeffs, method="iterative")
        assert "ITERATIVE" in caplog.text


class TestSolveClosedForm:
    @pytest.mark.parametrize("degree", [0, 1, 4])
    def test_unsupported(self, degree, device, dtype):
        with pytest.raises(NotImplementedError):
            solve_closed_form(torch.ones(1, degree + 1, device=device, dtype=dtype))

    def test_cubic(self, device, dtype):
        coeffs = torch.tensor([[1.0, 5.0, -14.0, 0.0]], device=device, dtype=dtype)
        assert_roots_close(solve_closed_form(coeffs), torch.tensor([[-7.0, 0.0, 2.0]]), rtol=1e-4, atol=1e-4)


class TestSolveIterative:
    @pytest.mark.parametrize("degree", [0, 1])
    def test_unsupported(self, degree, device, dtype):
        with pytest.raises(UnsupportedDegreeError):
            solve_iterative(torch.ones(1, degree + 1, device=device, dtype=dtype))

    def test_polynomial_roots(self, device, dtype):
        p = Polynomial([1.0, -6.0, 9.0], device=device, dtype=dtype)
        assert_close(solve_iterative(p), p.roots(method="iterative"))


class TestPolynomialRoots:
    def test_smoke(self, device, dtype):
        module = PolynomialRoots(method="iterative")
        roots = module(torch.rand(3, 4, device=device, dtype=dtype))
        assert roots.shape == (3, 3)

    def test_forward(self, device, dtype):
        coeffs = torch.tensor([[1.0, -1.0, -12.0]], device=device, dtype=dtype)
        assert_close(
            PolynomialRoots(method="iterative")(coeffs), torch.tensor([[-3.0, 4.0]], device=device, dtype=dtype)
        )
        assert_close(
            PolynomialRoots(method=0)(coeffs), torch.tensor([[4.0, -3.0]], device=device, dtype=dtype)
        )

    def test_repr(self):
        module = PolynomialRoots(tol=1e-6, method="closed_form")
        assert repr(module) == "PolynomialRoots(tol=1e-06, method=SolverFamily.CLOSED_FORM)"

    def test_module(self):
        assert isinstance(PolynomialRoots(), torch.nn.Module)
        assert polyroot.__version__
