import torch
from LPCE import config
from .RecurrenceBasis import RecurrenceBasis

# Legendre polynomials, orthogonal with respect to the uniform probability
# measure on [-1, 1].
class LegendreBasis(RecurrenceBasis):

    def __init__(self, order, normalize=False):
        super().__init__('Legendre', order, normalize)
        self.setup()

    def compute_recurrence_coefficients(self, n):
        # Monic: p_{k+1} = x p_k - k^2 / (4k^2 - 1) p_{k-1}
        k = torch.arange(n, dtype=config.DTYPE)
        alpha = torch.zeros(n, dtype=config.DTYPE)
        beta = k**2 / (4 * k**2 - 1)
        beta[:1] = 1.0
        delta = torch.ones(n, dtype=config.DTYPE)
        gamma = torch.ones(n, dtype=config.DTYPE)
        return alpha, beta, delta, gamma, False

    def clone_with_order(self, p):
        return LegendreBasis(p, self.normalize)
