import torch
from LPCE import config

#-----------------------------------------------------------------------------
# Polynomial chaos expansion U = sum_k c_k p_k(xi) of a random variable in an
# orthogonal basis of xi.
class PCE():

    def __init__(self, basis, coeffs=None):
        self.basis = basis
        if coeffs is None:
            coeffs = torch.zeros(basis.size(), dtype=config.DTYPE)
        coeffs = torch.as_tensor(coeffs, dtype=config.DTYPE)
        if tuple(coeffs.shape) != (basis.size(),):
            raise ValueError(
                f'Expected {basis.size()} coefficients for a basis of order '
                f'{basis.order}, got shape {tuple(coeffs.shape)}')
        self.coeffs = coeffs

    @classmethod
    def project(cls, basis, f, num_points=None):
        """Galerkin projection c_k = <f, p_k> / <p_k, p_k> using the Gauss
        rule of the basis. The default rule uses one point per basis
        polynomial, exact for f of degree up to basis.order + 1 against
        every p_k."""
        if num_points is None: num_points = basis.order + 1
        x, w = basis.get_quadrature(num_points)
        P = basis.evaluate_bases(x)
        fx = torch.as_tensor(f(x), dtype=P.dtype)
        coeffs = (P.T @ (w * fx)) / basis.norm_squared()
        return cls(basis, coeffs)

    @property
    def size(self):
        return self.coeffs.shape[0]

    def __getitem__(self, k):
        return self.coeffs[k]

    def support(self, tol=0.0):
        return torch.nonzero(self.coeffs.abs() > tol).view(-1).tolist()

    def evaluate(self, x):
        return self.basis.evaluate_bases(x) @ self.coeffs

    def mean(self):
        return (self.coeffs[0] / self.basis.gamma[0]).item()

    def variance(self):
        h = self.basis.norm_squared()
        return (torch.sum(self.coeffs[1:]**2 * h[1:]) / self.basis.total_mass()).item()

    def standard_deviation(self):
        return self.variance() ** 0.5

    def __repr__(self):
        return f'PCE({self.basis!r}, coeffs={self.coeffs.tolist()})'
