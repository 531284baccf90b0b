import math

import pytest
import torch

from LPCE.solver import DenseOperator, WeightedVectorSpace


def test_apply_matches_matrix_vector_product():
    A = torch.tensor([[2.0, 1.0, 0.0], [1.0, 3.0, 1.0], [0.0, 1.0, 4.0]], dtype=torch.float64)
    u = torch.tensor([1.0, -1.0, 2.0], dtype=torch.float64)
    op = DenseOperator(A)
    assert torch.allclose(op.apply(u), A @ u)


def test_apply_writes_into_output_vector():
    A = torch.eye(3, dtype=torch.float64) * 2.0
    u = torch.arange(3, dtype=torch.float64)
    out = torch.empty(3, dtype=torch.float64)
    result = DenseOperator(A).apply(u, out=out)
    assert result.data_ptr() == out.data_ptr()
    assert torch.equal(out, 2.0 * u)


def test_operator_keeps_reference_to_matrix():
    A = torch.eye(2, dtype=torch.float64)
    op = DenseOperator(A)
    assert op.A is A
    assert op.shape == (2, 2)


@pytest.mark.parametrize('u', [torch.ones(4, dtype=torch.float64),
                               torch.ones(2, dtype=torch.float64),
                               torch.ones(3, 1, dtype=torch.float64)])
def test_dimension_mismatch_is_rejected(u):
    op = DenseOperator(torch.eye(3, dtype=torch.float64))
    with pytest.raises(ValueError):
        op.apply(u)


def test_nan_propagates():
    # 0 * nan is nan, so every entry of a dense product picks it up
    op = DenseOperator(torch.eye(2, dtype=torch.float64))
    v = op.apply(torch.tensor([math.nan, 1.0], dtype=torch.float64))
    assert math.isnan(v[0].item())
    assert math.isnan(v[1].item())


def test_aliased_output_is_rejected():
    A = torch.tensor([[0.0, 1.0], [1.0, 0.0]], dtype=torch.float64)
    u = torch.tensor([1.0, 2.0], dtype=torch.float64)
    op = DenseOperator(A)
    with pytest.raises(ValueError):
        op.apply(u, out=u)
    with pytest.raises(ValueError):
        op.apply(u, out=A[0])
    assert torch.equal(u, torch.tensor([1.0, 2.0], dtype=torch.float64))
    assert torch.equal(A, torch.tensor([[0.0, 1.0], [1.0, 0.0]], dtype=torch.float64))
    v = op.apply(u, out=torch.empty(2, dtype=torch.float64))
    assert torch.equal(v, torch.tensor([2.0, 1.0], dtype=torch.float64))


def test_weighted_inner_product():
    vs = WeightedVectorSpace(torch.tensor([1.0, 2.0, 6.0], dtype=torch.float64))
    u = torch.tensor([1.0, 1.0, 1.0], dtype=torch.float64)
    v = torch.tensor([1.0, 0.5, 2.0], dtype=torch.float64)
    assert vs.inner_product(u, v).item() == pytest.approx(1.0 + 1.0 + 12.0)
    assert vs.norm(u).item() == pytest.approx(3.0)
    with pytest.raises(ValueError):
        vs.inner_product(u, torch.ones(2, dtype=torch.float64))
