import torch
from .base import IterativeProcess
from LPCE import config

#-----------------------------------------------------------------------------
# Weighted Lanczos process with full re-orthogonalization.
#
# Generates the three-term recurrence of the polynomials orthogonal with
# respect to the measure whose moments are encoded by the operator A under
# the weighted inner product of vs. Coefficients follow the form
#
#     gamma_{k+1} p_{k+1}(x) = (delta_k x - alpha_k) p_k(x) - beta_k p_{k-1}(x)
#
# with p_0 = 1/gamma_0, and beta_0 * gamma_0 = <u0, u0>_w, the total mass.
#
#   normalize=True:  Lanczos vectors have unit weighted norm.
#                    beta_0 = gamma_0 = ||u0||_w,
#                    beta_k = gamma_k = norm removed from Lanczos vector k.
#   normalize=False: monic polynomials.
#                    beta_0 = <u0, u0>_w,
#                    beta_k = <u_k, u_k>_w / <u_{k-1}, u_{k-1}>_w,
#                    gamma_k = 1.
#
# delta_k = 1 in both cases.
#
# The history of Lanczos vectors and the coefficient lists only grow. Each
# call to compute() continues from the last stored step, so requesting n+1
# coefficients and dropping the last gives exactly the n coefficients.
class Lanczos(IterativeProcess):

    def __init__(self, vs, A, u0, normalize=None, tol=None):
        if normalize is None: normalize = config.NORMALIZE
        if tol is None: tol = config.TOLERANCE

        d = vs.dim
        if tuple(A.shape) != (d, d):
            raise ValueError(f'Operator of shape {tuple(A.shape)} does not act on a space of dimension {d}')
        if tuple(u0.shape) != (d,):
            raise ValueError(f'Initial vector of shape {tuple(u0.shape)} does not belong to a space of dimension {d}')
        if not vs.norm(u0).item() > 0:
            raise ValueError('Initial Lanczos vector has zero weighted norm')

        self.vs = vs
        self.A = A
        self.u0 = u0
        self.normalize = normalize
        self.tol = tol

        self.vecs = []
        self.nrm_sqrd = []
        self.alpha = []
        self.beta = []
        self.gamma = []

        # Number of Lanczos vectors the sequence supports, once known
        self.breakdown = None

        self.hist_nrm = []
        self.hist_time = []
        self.ortho_map = None

    @property
    def dim(self):
        return self.vs.dim

    @property
    def history(self):
        return tuple(self.vecs)

    def norms_squared(self):
        return list(self.nrm_sqrd)

    def compute(self, n, progress_bar=False):
        if n < 0:
            raise ValueError(f'Cannot compute {n} recurrence coefficients')

        tic, pbar = self._prepare(n, 'Lanczos', progress_bar)
        if pbar: pbar.update(min(n, len(self.alpha)))

        if n > 0 and len(self.vecs) == 0:
            self._start()

        while len(self.alpha) < n and self.breakdown is None:
            self._step(len(self.alpha), tic)
            if pbar: pbar.update()

        if pbar: pbar.close()

        if config.TRACK_ORTHOGONALITY:
            self.ortho_map = self.orthogonality()

        return self.coefficients(min(n, len(self.alpha)))

    def coefficients(self, n):
        n = min(n, len(self.alpha))
        dtype, device = self.u0.dtype, self.u0.device
        alpha = torch.tensor(self.alpha[:n], dtype=dtype, device=device)
        beta = torch.tensor(self.beta[:n], dtype=dtype, device=device)
        delta = torch.ones(n, dtype=dtype, device=device)
        gamma = torch.tensor(self.gamma[:n], dtype=dtype, device=device)
        return alpha, beta, delta, gamma

    def fork(self, n):
        """
        New process sharing the operator, the inner product and the initial
        vector, holding the first n coefficients of this one and the
        Lanczos vectors needed to continue from there. This process is left
        untouched.
        """
        m = min(n, len(self.alpha))

        other = type(self).__new__(type(self))
        other.vs = self.vs
        other.A = self.A
        other.u0 = self.u0
        other.normalize = self.normalize
        other.tol = self.tol

        other.vecs = self.vecs[:m+1]
        other.nrm_sqrd = self.nrm_sqrd[:m+1]
        other.alpha = self.alpha[:m]
        other.beta = self.beta[:m+1]
        other.gamma = self.gamma[:m+1]

        other.breakdown = None
        if self.breakdown is not None and self.breakdown <= m:
            other.breakdown = self.breakdown

        other.hist_nrm = []
        other.hist_time = []
        other.ortho_map = None
        return other

    def orthogonality(self):
        if len(self.vecs) == 0:
            return None
        V = torch.stack(self.vecs, dim=1)
        return self._compute_orthogonality(V, self.vs)

    def _start(self):
        nrm_sqrd = self.vs.inner_product(self.u0, self.u0).item()
        if self.normalize:
            nrm = nrm_sqrd ** 0.5
            self.vecs.append(self.u0 / nrm)
            self.nrm_sqrd.append(1.0)
            self.beta.append(nrm)
            self.gamma.append(nrm)
        else:
            self.vecs.append(self.u0.clone())
            self.nrm_sqrd.append(nrm_sqrd)
            self.beta.append(nrm_sqrd)
            self.gamma.append(1.0)

    def _step(self, k, tic):
        v = self.vecs[k]
        w = self.A.apply(v)
        scale = self.vs.norm(w).item()

        alpha = self.vs.inner_product(w, v).item() / self.nrm_sqrd[k]
        self.alpha.append(alpha)

        # Three-term part
        w = w - alpha * v
        if k > 0:
            w = w - self.beta[k] * self.vecs[k-1]

        # Full Re-orthogonalization
        # Round-off destroys orthogonality of the three-term sequence after a
        # few steps, so project out every stored vector. Two passes are enough.
        for _ in range(2):
            for j in range(k+1):
                coeff = self.vs.inner_product(self.vecs[j], w).item() / self.nrm_sqrd[j]
                w = w - coeff * self.vecs[j]

        nrm = self.vs.norm(w).item()
        self._update_history(nrm, tic)

        # Check for breakdown
        if k + 1 >= self.dim or nrm <= self.tol * scale:
            self.breakdown = k + 1
            return False

        if self.normalize:
            self.vecs.append(w / nrm)
            self.nrm_sqrd.append(1.0)
            self.beta.append(nrm)
            self.gamma.append(nrm)
        else:
            nrm_sqrd = nrm * nrm
            self.vecs.append(w)
            self.beta.append(nrm_sqrd / self.nrm_sqrd[k])
            self.nrm_sqrd.append(nrm_sqrd)
            self.gamma.append(1.0)
        return True
