"""
Numerical defaults and example settings.
"""
import torch

# Dense tensors
DTYPE = torch.float64

# Relative breakdown tolerance of the Lanczos process
TOLERANCE = 1e-12

# Keep Lanczos vectors unit-norm
NORMALIZE = True

# Triple products below this magnitude are not stored
SPARSE_TOL = 1e-12

# Orthogonality diagnostics of the Lanczos history
TRACK_ORTHOGONALITY = False

# Examples
ORDER = 5
PCE_ORDER = 10
NUM_PLOT_POINTS = 200

# System & Paths
DEFAULT_DUMP_PATH = './dump/'
