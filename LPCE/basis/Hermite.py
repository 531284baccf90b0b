import torch
from LPCE import config
from .RecurrenceBasis import RecurrenceBasis

# Probabilists' Hermite polynomials, orthogonal with respect to the standard
# normal distribution.
class HermiteBasis(RecurrenceBasis):

    def __init__(self, order, normalize=False):
        super().__init__('Hermite', order, normalize)
        self.setup()

    def compute_recurrence_coefficients(self, n):
        # Monic: He_{k+1} = x He_k - k He_{k-1}
        alpha = torch.zeros(n, dtype=config.DTYPE)
        beta = torch.arange(n, dtype=config.DTYPE)
        beta[:1] = 1.0
        delta = torch.ones(n, dtype=config.DTYPE)
        gamma = torch.ones(n, dtype=config.DTYPE)
        return alpha, beta, delta, gamma, False

    def clone_with_order(self, p):
        return HermiteBasis(p, self.normalize)
