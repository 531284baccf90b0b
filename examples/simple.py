import os
import argparse
from datetime import datetime
from pathlib import Path
import numpy as np
import torch
import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt

from LPCE.basis import LanczosProjPCEBasis
from LPCE.factory import get_basis_class, get_problem
from LPCE import config

def get_timestamp_dir(base_dump_path):
    """Creates a directory based on today's date (MM-DD-YYYY)."""
    date_str = datetime.now().strftime("%m-%d-%Y")
    path = os.path.join(base_dump_path, date_str)
    Path(path).mkdir(parents=True, exist_ok=True)
    return path

def main():
    parser = argparse.ArgumentParser(description='Orthogonal polynomials induced by a PCE via Lanczos')
    parser.add_argument('--basis', type=str, default='hermite', help='Source basis (legendre, hermite)')
    parser.add_argument('--problem', type=str, default='lognormal', help='PCE of the new random variable')
    parser.add_argument('--pce-order', type=int, default=config.PCE_ORDER)
    parser.add_argument('--order', type=int, default=config.ORDER)
    parser.add_argument('--no-normalize', action='store_true')
    parser.add_argument('--dump_root', type=str, default=config.DEFAULT_DUMP_PATH, help='Root directory for plots')
    parser.add_argument('--progress-bar', action='store_true')
    args = parser.parse_args()

    # directory setup
    args.dump_root = os.path.abspath(os.path.expanduser(args.dump_root))
    plot_dir = get_timestamp_dir(args.dump_root)
    print(f"plots will be saved to: {plot_dir}")

    # problem setup
    basis = get_basis_class(args.basis)(args.pce_order, normalize=True)
    pce = get_problem(args.problem)(basis)
    print(f'\nSource basis: {basis}')
    print(f'PCE {args.problem}: mean={pce.mean():.6f}, std={pce.standard_deviation():.6f}')

    print('Computing triple-product tensor...')
    Cijk = basis.compute_triple_product_tensor()
    print(f'Triple-product tensor: {len(Cijk)} nonzeros')

    new_basis = LanczosProjPCEBasis(args.order, pce, Cijk,
                                    normalize=not args.no_normalize,
                                    progress_bar=args.progress_bar)
    if new_basis.is_truncated:
        print(f'Warning: order capped at {new_basis.max_order} (requested {args.order})')

    alpha, beta, delta, gamma = new_basis.recurrence_coefficients()
    print(f"\n{'='*40}")
    print(f"{'k':>3} {'alpha':>14} {'beta':>14} {'gamma':>14}")
    for k in range(new_basis.size()):
        print(f'{k:>3} {alpha[k].item():>14.6e} {beta[k].item():>14.6e} {gamma[k].item():>14.6e}')
    print(f"{'='*40}")

    H = new_basis.lanczos.orthogonality()
    off = H - np.eye(H.shape[0])
    print(f'Max loss of orthogonality of Lanczos vectors: {np.abs(off).max():.2e}')

    x, w = new_basis.get_quadrature(new_basis.size())
    print(f'Gauss points: {x.tolist()}')
    print(f'Gauss weights: {w.tolist()}')

    # Check: the Gauss rule of the new basis reproduces the PCE mean
    print(f'Quadrature mean {torch.sum(w * x).item():.6f} vs PCE mean {pce.mean():.6f}')

    # plotting
    lo, hi = x.min().item(), x.max().item()
    pad = 0.1 * (hi - lo + 1.0)
    xs = torch.linspace(lo - pad, hi + pad, config.NUM_PLOT_POINTS, dtype=config.DTYPE)
    P = new_basis.evaluate_bases(xs)

    plt.figure(figsize=(10, 6))
    for k in range(new_basis.size()):
        plt.plot(xs.numpy(), P[:, k].numpy(), linewidth=2, label=f'$p_{k}$')
    plt.plot(x.numpy(), np.zeros(x.numel()), 'ko', label='Gauss points')
    plt.title(f'Polynomials induced by {args.problem} PCE in {args.basis} basis')
    plt.xlabel('x')
    plt.ylabel('p_k(x)')
    plt.legend()
    plt.grid(True, which='both', linestyle='--', alpha=0.3)
    out_file = os.path.join(plot_dir, f'{args.basis}_{args.problem}_order{new_basis.max_order}.png')
    plt.savefig(out_file)
    print(f"Saved plot: {out_file}")

if __name__ == '__main__':
    main()
