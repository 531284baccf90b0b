import torch
from LPCE import config

#-----------------------------------------------------------------------------
# Sparse storage of triple products C[i,j,k] = <p_i p_j p_k>, keyed by the
# ordered index triple.
class Sparse3Tensor():

    def __init__(self):
        self._entries = {}

    def add_term(self, i, j, k, c):
        key = (int(i), int(j), int(k))
        self._entries[key] = self._entries.get(key, 0.0) + float(c)

    def get(self, i, j, k, default=0.0):
        return self._entries.get((i, j, k), default)

    def __len__(self):
        return len(self._entries)

    def __contains__(self, key):
        return tuple(key) in self._entries

    def __iter__(self):
        for (i, j, k), c in self._entries.items():
            yield i, j, k, c

    def k_indices(self):
        return {k for (_, _, k) in self._entries}

    def max_index(self):
        if not self._entries:
            return -1
        return max(max(key) for key in self._entries)

    def to_coo(self, dtype=None, device=None):
        """Return (indices, values): a (3, nnz) index tensor and the matching values."""
        if dtype is None: dtype = config.DTYPE
        keys = list(self._entries.keys())
        indices = torch.tensor(keys, dtype=torch.long, device=device).reshape(-1, 3).T
        values = torch.tensor([self._entries[key] for key in keys], dtype=dtype, device=device)
        return indices, values
