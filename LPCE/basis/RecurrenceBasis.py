import abc

import torch
from LPCE import config
from .Sparse3Tensor import Sparse3Tensor


class RecurrenceBasis(abc.ABC):

    def __init__(self, name, order, normalize):
        """Univariate orthogonal polynomial basis defined by a three-term
        recurrence of the form

        gamma_{k+1} p_{k+1}(x) = (delta_k x - alpha_k) p_k(x) - beta_k p_{k-1}(x),

        with p_0(x) = 1/gamma_0 and p_{-1}(x) = 0. beta_0 * gamma_0 is the
        total mass of the underlying measure.

        Parameters
        ----------
        name:
            Human readable name of the basis.
        order:
            The maximum degree of the polynomials.
        normalize:
            Whether the polynomials are scaled to unit norm.

        Notes
        -----
        Subclasses call setup() once their own state is in place.

        """
        if order < 0:
            raise ValueError(f'Basis order must be non-negative, got {order}')
        self.name = name
        self.order = order
        self.normalize = normalize
        self.alpha = None
        self.beta = None
        self.delta = None
        self.gamma = None
        self.norms = None

    @abc.abstractmethod
    def compute_recurrence_coefficients(self, n):
        """Return (alpha, beta, delta, gamma, is_normalized) for the first
        n polynomials. Fewer than n coefficients may be returned when the
        measure does not support n orthogonal polynomials."""

    @abc.abstractmethod
    def clone_with_order(self, p):
        """Return a basis of the same family with order p."""

    def setup(self):
        alpha, beta, delta, gamma, is_normalized = \
            self.compute_recurrence_coefficients(self.order + 1)
        if self.normalize and not is_normalized:
            alpha, beta, delta, gamma = \
                self.normalize_recurrence_coefficients(alpha, beta, delta, gamma)

        n = alpha.shape[0]
        if n == 0:
            raise ValueError(f'{self.name} basis produced no recurrence coefficients')
        self.order = n - 1
        self.alpha, self.beta, self.delta, self.gamma = alpha, beta, delta, gamma
        self.norms = self._compute_norms(alpha, beta, delta, gamma)

    def size(self):
        return self.order + 1

    def recurrence_coefficients(self):
        return self.alpha, self.beta, self.delta, self.gamma

    def norm_squared(self):
        return self.norms

    def total_mass(self):
        return (self.beta[0] * self.gamma[0]).item()

    @staticmethod
    def normalize_recurrence_coefficients(alpha, beta, delta, gamma):
        # Reduce to the monic recurrence x p_k = p_{k+1} + a_k p_k + b_k p_{k-1}
        a = alpha / delta
        b = torch.empty_like(beta)
        b[0] = beta[0] * gamma[0]
        b[1:] = beta[1:] * gamma[1:] / (delta[1:] * delta[:-1])

        # Orthonormal polynomials: sqrt(b_{k+1}) q_{k+1} = (x - a_k) q_k - sqrt(b_k) q_{k-1}
        s = torch.sqrt(b)
        return a, s.clone(), torch.ones_like(delta), s

    @staticmethod
    def _compute_norms(alpha, beta, delta, gamma):
        n = alpha.shape[0]
        norms = torch.empty_like(alpha)
        norms[0] = beta[0] / gamma[0]
        for k in range(1, n):
            norms[k] = norms[k-1] * (beta[k] / delta[k]) / (gamma[k] / delta[k-1])
        return norms

    def _as_points(self, x):
        return torch.as_tensor(x, dtype=self.alpha.dtype, device=self.alpha.device).reshape(-1)

    def evaluate_bases(self, x):
        x = self._as_points(x)
        P = torch.zeros((x.numel(), self.order+1), dtype=x.dtype, device=x.device)

        # Compute first two terms in recurrence relation
        P[:, 0] = 1.0 / self.gamma[0]
        if self.order > 0:
            P[:, 1] = (self.delta[0] * x - self.alpha[0]) * P[:, 0] / self.gamma[1]

        # Compute remaining terms
        for k in range(1, self.order):
            P[:, k+1] = ((self.delta[k] * x - self.alpha[k]) * P[:, k]
                         - self.beta[k] * P[:, k-1]) / self.gamma[k+1]

        return P

    def evaluate_bases_and_derivatives(self, x):
        x = self._as_points(x)
        P = self.evaluate_bases(x)
        D = torch.zeros_like(P)

        if self.order > 0:
            D[:, 1] = self.delta[0] * P[:, 0] / self.gamma[1]

        for k in range(1, self.order):
            D[:, k+1] = (self.delta[k] * P[:, k]
                         + (self.delta[k] * x - self.alpha[k]) * D[:, k]
                         - self.beta[k] * D[:, k-1]) / self.gamma[k+1]

        return P, D

    def get_quadrature(self, num_points):
        """Gauss quadrature rule of the basis measure by the Golub-Welsch
        method.

        Returns
        -------
        points, weights:
            Vectors of length num_points, or shorter if the basis cannot
            supply num_points recurrence coefficients. Weights sum to the
            total mass of the measure.

        References
        ----------
        Golub, GH and Welsch, JH (1969). Calculation of Gauss
        quadrature rules.

        """
        if num_points < 1:
            raise ValueError(f'Quadrature needs at least one point, got {num_points}')
        if num_points <= self.order + 1:
            alpha, beta, delta, gamma = (c[:num_points] for c in self.recurrence_coefficients())
        else:
            alpha, beta, delta, gamma, _ = self.compute_recurrence_coefficients(num_points)
        n = alpha.shape[0]

        # Build symmetric tridiagonal Jacobi matrix
        a = alpha / delta
        b = torch.sqrt(beta[1:n] * gamma[1:n] / (delta[1:n] * delta[:n-1]))
        J = torch.diag(a) + torch.diag(b, -1) + torch.diag(b, 1)

        points, eigvecs = torch.linalg.eigh(J)
        weights = (beta[0] * gamma[0]) * eigvecs[0] ** 2
        return points, weights

    def compute_triple_product_tensor(self, order=None, sparse_tol=None):
        if order is None: order = self.order
        if sparse_tol is None: sparse_tol = config.SPARSE_TOL
        if order > self.order:
            raise ValueError(f'Triple products up to order {order} requested from a basis of order {self.order}')

        # Gauss rule exact for degree 3 * order
        x, w = self.get_quadrature((3 * order) // 2 + 1)
        P = self.evaluate_bases(x)[:, :order+1]
        C = torch.einsum('q,qi,qj,qk->ijk', w, P, P, P)

        Cijk = Sparse3Tensor()
        for i, j, k in torch.nonzero(C.abs() > sparse_tol).tolist():
            Cijk.add_term(i, j, k, C[i, j, k].item())
        return Cijk

    def __repr__(self):
        return f'{type(self).__name__}(order={self.order}, normalize={self.normalize})'
