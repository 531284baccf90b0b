"""
Example random variables and triple-product tensors.
"""
import torch
from LPCE.basis import PCE, Sparse3Tensor


def gen_dirac_pce(basis, value=1.0):
    # Constant random variable U = value; p_0 = 1/gamma_0
    coeffs = torch.zeros(basis.size(), dtype=basis.alpha.dtype)
    coeffs[0] = value * basis.gamma[0]
    return PCE(basis, coeffs)


def gen_identity_tensor(dim):
    # C[i,i,0] = 1: the triple products of an orthonormal basis restricted to k = 0
    Cijk = Sparse3Tensor()
    for i in range(dim):
        Cijk.add_term(i, i, 0, 1.0)
    return Cijk


def gen_linear_pce(basis, a=0.0, b=1.0):
    return PCE.project(basis, lambda x: a + b * x)


def gen_quadratic_pce(basis, a=0.0, b=1.0, c=0.5):
    return PCE.project(basis, lambda x: a + b * x + c * x**2)


def gen_lognormal_pce(basis, mu=0.0, sigma=0.5):
    # Not polynomial: integrate with a generous rule
    return PCE.project(basis, lambda x: torch.exp(mu + sigma * x),
                       num_points=4 * (basis.order + 1))
