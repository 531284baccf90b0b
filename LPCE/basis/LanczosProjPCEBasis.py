import os
import inspect
import torch
from warnings import warn
from LPCE import config
from LPCE.exceptions import AssemblyError, RankDeficiencyError, RankDeficiencyWarning
from LPCE.solver import DenseOperator, WeightedVectorSpace, Lanczos
from .RecurrenceBasis import RecurrenceBasis

_PACKAGE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


def _caller_stacklevel():
    # First frame outside the LPCE package, counted as warn's stacklevel
    # from the function calling this one.
    frame = inspect.currentframe()
    level = 0
    try:
        while frame is not None and \
              os.path.abspath(frame.f_code.co_filename).startswith(_PACKAGE_DIR + os.sep):
            frame = frame.f_back
            level += 1
    finally:
        del frame
    return level


def assemble_moment_matrix(pce, Cijk, weights):
    """
    Galerkin matrix of multiplication by the PCE variable,

        A[i,j] = sum_k C[i,j,k] c_k / <p_i, p_i>,

    restricted to the support of the PCE coefficients. A is self-adjoint in
    the inner product weighted by the basis norms.
    """
    dim = pce.size
    support = pce.support()

    max_index = Cijk.max_index()
    if max_index >= dim:
        raise AssemblyError(
            f'Triple-product tensor references basis index {max_index}, '
            f'but the PCE has dimension {dim}')
    missing = sorted(set(support) - Cijk.k_indices())
    if missing:
        raise AssemblyError(
            f'Triple-product tensor has no entries for PCE terms {missing} '
            f'(PCE dimension {dim})')

    A = torch.zeros(dim, dim, dtype=weights.dtype, device=weights.device)
    if len(Cijk) > 0:
        indices, values = Cijk.to_coo(dtype=weights.dtype, device=weights.device)
        i, j, k = indices
        coeffs = pce.coeffs.to(dtype=weights.dtype, device=weights.device)
        A.index_put_((i, j), values * coeffs[k], accumulate=True)
    return A / weights.view(-1, 1)


# Recurrence basis orthogonal with respect to the density of a random
# variable given by a PCE, generated by the Lanczos process on the moment
# matrix of the PCE. No quadrature of the new density is needed.
class LanczosProjPCEBasis(RecurrenceBasis):

    def __init__(self, order, pce, Cijk, normalize=None, u0=None,
                 strict=False, progress_bar=False):
        """
        Args:
            order: order of the basis
            pce: PCE defining the new density function
            Cijk: triple-product tensor of the basis of the PCE
            normalize: keep Lanczos vectors (and the basis) unit-norm
            u0: initial Lanczos vector, defaults to the constant function
            strict: raise RankDeficiencyError instead of warning when the
                PCE cannot support the requested order
        """
        if normalize is None: normalize = config.NORMALIZE
        super().__init__('Lanczos PCE', order, normalize)
        self._check_order(order, pce.size)

        self.pce = pce
        self.Cijk = Cijk
        self.strict = strict
        self.progress_bar = progress_bar
        self.requested_order = order

        # Weighting vector used in inner products
        self.weights = pce.basis.norm_squared().to(config.DTYPE)

        # Triple-product matrix used in generating Lanczos vectors
        self.Cijk_matrix = assemble_moment_matrix(pce, Cijk, self.weights)

        # Initial Lanczos vector
        if u0 is None:
            u0 = torch.zeros(pce.size, dtype=config.DTYPE)
            u0[0] = 1.0
        else:
            u0 = torch.as_tensor(u0, dtype=config.DTYPE).clone()
        self.u0 = u0

        self.lanczos = Lanczos(WeightedVectorSpace(self.weights),
                               DenseOperator(self.Cijk_matrix),
                               self.u0, normalize=normalize)
        self.setup()

    @classmethod
    def from_basis(cls, order, basis):
        """
        Build a basis of a different order from an existing one, sharing its
        moment matrix, weights and initial vector, and the part of its
        Lanczos history the new order needs. basis is not modified.
        """
        cls._check_order(order, basis.dimension)

        new = cls.__new__(cls)
        RecurrenceBasis.__init__(new, basis.name, order, basis.normalize)
        new.pce = basis.pce
        new.Cijk = basis.Cijk
        new.strict = basis.strict
        new.progress_bar = basis.progress_bar
        new.requested_order = order
        new.weights = basis.weights
        new.Cijk_matrix = basis.Cijk_matrix
        new.u0 = basis.u0
        new.lanczos = basis.lanczos.fork(order + 1)
        new.setup()
        return new

    def clone_with_order(self, p):
        return type(self).from_basis(p, self)

    @staticmethod
    def _check_order(order, dim):
        if order < 0 or order + 1 > dim:
            raise ValueError(
                f'Cannot build a basis of order {order} from moment data of '
                f'dimension {dim} (at most order {dim - 1})')

    @property
    def dimension(self):
        return self.Cijk_matrix.shape[0]

    @property
    def moment_matrix(self):
        return self.Cijk_matrix

    @property
    def initial_vector(self):
        return self.u0

    @property
    def max_order(self):
        return self.order

    @property
    def is_truncated(self):
        return self.order < self.requested_order

    def compute_recurrence_coefficients(self, n):
        if n > self.dimension:
            raise ValueError(
                f'Cannot compute {n} recurrence coefficients from moment data '
                f'of dimension {self.dimension}')

        alpha, beta, delta, gamma = self.lanczos.compute(n, progress_bar=self.progress_bar)

        achieved = alpha.shape[0]
        if achieved < n:
            if self.strict:
                raise RankDeficiencyError(n, achieved, self.dimension)
            warn(f'Insufficient rank to generate order {n - 1}: Lanczos '
                 f'produced {achieved} of {n} recurrence coefficients from '
                 f'moment data of dimension {self.dimension}. Order capped '
                 f'at {achieved - 1}.', RankDeficiencyWarning, stacklevel=_caller_stacklevel())

        return alpha, beta, delta, gamma, self.normalize
