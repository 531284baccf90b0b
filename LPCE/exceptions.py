"""
Errors and warnings raised while building induced recurrence bases.
"""


class LanczosError(Exception):
    pass


class AssemblyError(LanczosError, ValueError):
    """The triple-product tensor does not cover the PCE it is paired with."""


class RankDeficiencyError(LanczosError):
    """
    The Lanczos sequence collapsed before the requested number of
    coefficients could be generated.
    """

    def __init__(self, requested, achieved, dimension):
        self.requested = requested
        self.achieved = achieved
        self.dimension = dimension
        super().__init__(
            f'Insufficient rank to generate {requested} recurrence '
            f'coefficients: only {achieved} could be produced from moment '
            f'data of dimension {dimension}.')


class RankDeficiencyWarning(UserWarning):
    pass
