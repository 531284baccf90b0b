import torch

#-----------------------------------------------------------------------------
# Vector space with the element-wise weighted inner product
#     <u, v>_w = sum_i w_i u_i v_i.
# With w the squared norms of an orthogonal basis, <u, v>_w is the L2 inner
# product of the functions whose coefficients are u and v.
class WeightedVectorSpace():

    def __init__(self, weights):
        if weights.dim() != 1:
            raise ValueError(f'Weights must be a vector, got shape {tuple(weights.shape)}')
        self.weights = weights

    @property
    def dim(self):
        return self.weights.shape[0]

    def zeros(self):
        return torch.zeros_like(self.weights)

    def inner_product(self, u, v):
        if u.shape != self.weights.shape or v.shape != self.weights.shape:
            raise ValueError(
                f'Vectors of shape {tuple(u.shape)} and {tuple(v.shape)} do not '
                f'belong to a space of dimension {self.dim}')
        return torch.dot(self.weights * u, v)

    def norm(self, u):
        return torch.sqrt(self.inner_product(u, u))

    def gram(self, V):
        # V holds one vector per column
        return V.T @ (self.weights.view(-1, 1) * V)
