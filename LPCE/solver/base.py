"""
Base class for iterative processes.
Provides common progress reporting and diagnostics.
"""
import time
import torch
from tqdm import tqdm

class IterativeProcess:
    def _prepare(self, total, desc, progress_bar=True):
        # Timer & Progress Bar
        tic = time.time()
        pbar = None

        if progress_bar: pbar = tqdm(total=total, desc=desc)

        return tic, pbar

    def _update_history(self, nrm, tic):
        self.hist_nrm.append(float(nrm))
        self.hist_time.append(time.time() - tic)

    def _compute_orthogonality(self, V, vs):
        """Compute the normalized weighted Gram matrix of the columns of V.

        Returns:
            H: numpy array where H[i,j] = |<v_i, v_j>_w| / (||v_i||_w * ||v_j||_w)
               Diagonal is 1.0, off-diagonal measures loss of orthogonality.
               Returns None if V has no columns.
        """
        if V.shape[1] == 0:
            return None

        M = torch.abs(vs.gram(V))       # Computes V^T * W * V
        diag = torch.diag(M)            # Extracts the diagonal <v_i, v_i>_w
        N = torch.sqrt(diag + 1e-300)   # Weighted lengths
        outer_N = torch.outer(N, N)     # Length(i) * Length(j) for the whole grid
        H = M / outer_N

        return H.cpu().numpy()
