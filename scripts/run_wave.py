"""Run a 1D wave simulation from the command line.

Run from the repository root:

    PYTHONPATH=src python scripts/run_wave.py --Nx 101 --final-time 1.0
    PYTHONPATH=src python scripts/run_wave.py --idsignum -1 --out out/pulse.npz
    PYTHONPATH=src python scripts/run_wave.py --convergence 3 --final-time 0.2

Configuration flags map one-to-one onto :meth:`SimulationConfig.from_mapping`.
"""

from __future__ import annotations

import argparse
import logging
import sys

from wave1d import ConfigurationError, ConvergenceError, SimulationConfig, solve_wave_1d
from wave1d.numerics.wave import available_methods


def _build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    ap.add_argument("--xmin", type=float, default=0.0)
    ap.add_argument("--xmax", type=float, default=1.0)
    ap.add_argument("--Nx", type=int, default=101)
    ap.add_argument("--dt", type=float, default=None, help="default: courant*dx")
    ap.add_argument("--courant", type=float, default=0.5)
    ap.add_argument("--amp", type=float, default=1.0)
    ap.add_argument("--xc", type=float, default=0.5)
    ap.add_argument("--xwid", type=float, default=0.05)
    ap.add_argument("--idsignum", type=int, choices=[-1, 0, 1], default=0)
    ap.add_argument("--tolerance", type=float, default=1e-10)
    ap.add_argument("--max-iterations", type=int, default=100)
    ap.add_argument("--norm", choices=["max", "l2"], default="max")
    ap.add_argument("--method", choices=available_methods(), default="relaxation")
    steps = ap.add_mutually_exclusive_group()
    steps.add_argument("--final-time", type=float, default=None)
    steps.add_argument("--n-steps", type=int, default=None)
    ap.add_argument("--out", default=None, help="write snapshots to this .npz file")
    ap.add_argument("--plot", action="store_true", help="show snapshot plot")
    ap.add_argument(
        "--convergence",
        type=int,
        default=0,
        metavar="LEVELS",
        help="run a refinement study with LEVELS levels instead of a single run",
    )
    ap.add_argument("-v", "--verbose", action="count", default=0)
    return ap


def main() -> int:
    args = _build_parser().parse_args()
    level = logging.WARNING
    if args.verbose:
        level = logging.DEBUG if args.verbose > 1 else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    final_time = args.final_time
    if final_time is None and args.n_steps is None:
        final_time = 1.0

    try:
        cfg = SimulationConfig.from_mapping(
            {
                "xmin": args.xmin,
                "xmax": args.xmax,
                "Nx": args.Nx,
                "dt": args.dt,
                "courant": args.courant,
                "amp": args.amp,
                "xc": args.xc,
                "xwid": args.xwid,
                "idsignum": args.idsignum,
                "tolerance": args.tolerance,
                "max_iterations": args.max_iterations,
                "norm": args.norm,
                "method": args.method,
                "final_time": final_time,
                "n_steps": args.n_steps,
            }
        )
    except ConfigurationError as e:
        print(f"configuration error: {e}", file=sys.stderr)
        return 2

    if args.convergence:
        from wave1d.diagnostics import convergence_study

        if final_time is None:
            final_time = args.n_steps * cfg.time_step
        df = convergence_study(cfg, final_time=final_time, levels=args.convergence)
        print(df.to_string(index=False))
        return 0

    try:
        sol = solve_wave_1d(cfg)
    except ConvergenceError as e:
        print(f"convergence failure: {e}", file=sys.stderr)
        return 1

    print(
        f"t_final={sol.t_final:.6g} steps={sol.sweeps.size} "
        f"max_sweeps={int(sol.sweeps.max()) if sol.sweeps.size else 0} "
        f"max|pp|={abs(sol.pp_final).max():.3e} max|pi|={abs(sol.pi_final).max():.3e}"
    )

    if args.out:
        from wave1d.io import write_snapshots_npz

        path = write_snapshots_npz(args.out, sol)
        print(f"wrote {path}")

    if args.plot:
        from wave1d.diagnostics._mpl import get_plt
        from wave1d.diagnostics.plots import plot_snapshots

        plot_snapshots(sol)
        get_plt().show()

    return 0


if __name__ == "__main__":
    sys.exit(main())
