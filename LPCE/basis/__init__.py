from .Sparse3Tensor import Sparse3Tensor
from .RecurrenceBasis import RecurrenceBasis
from .Legendre import LegendreBasis
from .Hermite import HermiteBasis
from .PCE import PCE
from .LanczosProjPCEBasis import LanczosProjPCEBasis, assemble_moment_matrix

__all__ = ['Sparse3Tensor', 'RecurrenceBasis', 'LegendreBasis', 'HermiteBasis',
           'PCE', 'LanczosProjPCEBasis', 'assemble_moment_matrix']
