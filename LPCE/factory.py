"""
Factory module for resolving basis classes and example problems from string names.
This module handles the lazy imports to avoid circular dependencies.
"""


def get_basis_class(basis_name: str):
    """
    Get the source basis class from a string name.

    Args:
        basis_name: Name of the basis (e.g., 'legendre', 'hermite')

    Returns:
        The basis class object
    """
    from LPCE.basis import LegendreBasis, HermiteBasis

    basis_classes = {
        'legendre': LegendreBasis,
        'hermite': HermiteBasis,
    }

    if basis_name not in basis_classes:
        raise ValueError(f"Unknown basis: {basis_name}. Available: {list(basis_classes.keys())}")

    return basis_classes[basis_name]


def get_problem(problem_name: str):
    """
    Get a PCE generator from a string name.

    Args:
        problem_name: Name of the problem (e.g., 'linear', 'quadratic', 'lognormal')

    Returns:
        Function taking a source basis (plus keyword parameters) and returning a PCE
    """
    from LPCE.problems import gen_dirac_pce, gen_linear_pce, gen_quadratic_pce, gen_lognormal_pce

    problems = {
        'dirac': gen_dirac_pce,
        'linear': gen_linear_pce,
        'quadratic': gen_quadratic_pce,
        'lognormal': gen_lognormal_pce,
    }

    if problem_name not in problems:
        raise ValueError(f"Unknown problem: {problem_name}. Available: {list(problems.keys())}")

    return problems[problem_name]
