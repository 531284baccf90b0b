from .base import IterativeProcess
from .DenseOperator import DenseOperator
from .VectorSpace import WeightedVectorSpace
from .Lanczos import Lanczos

__all__ = ['IterativeProcess', 'DenseOperator', 'WeightedVectorSpace', 'Lanczos']
