import torch

# Linear operator backed by a dense matrix. The matrix is held by reference
# and never written to.
class DenseOperator():

    def __init__(self, A):
        if A.dim() != 2:
            raise ValueError(f'DenseOperator expects a 2-D matrix, got shape {tuple(A.shape)}')
        self.A = A

    @property
    def shape(self):
        return self.A.shape

    @property
    def dtype(self):
        return self.A.dtype

    @property
    def device(self):
        return self.A.device

    def apply(self, u, out=None):
        n_rows, n_cols = self.A.shape
        if u.dim() != 1 or u.shape[0] != n_cols:
            raise ValueError(
                f'Cannot apply a {n_rows}x{n_cols} operator to a vector of shape {tuple(u.shape)}')
        if out is None:
            return torch.mv(self.A, u)
        if out.shape != (n_rows,):
            raise ValueError(
                f'Output vector has shape {tuple(out.shape)}, expected ({n_rows},)')
        out_storage = out.untyped_storage().data_ptr()
        if out_storage in (u.untyped_storage().data_ptr(),
                           self.A.untyped_storage().data_ptr()):
            raise ValueError('Output vector must not share memory with the input or the matrix')
        return torch.mv(self.A, u, out=out)
