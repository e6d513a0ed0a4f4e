from __future__ import annotations


def main() -> None:
    from wave1d import (
        GridConfig,
        InitialDataConfig,
        RelaxationConfig,
        SimulationConfig,
        solve_wave_1d,
    )
    from wave1d.diagnostics import max_error

    cfg = SimulationConfig(
        grid=GridConfig(Nx=101, xmin=0.0, xmax=1.0),
        initial_data=InitialDataConfig(amp=1.0, xc=0.5, xwid=0.05, idsignum=0),
        relaxation=RelaxationConfig(tolerance=1e-10, max_iterations=100),
        final_time=0.2,
    )
    sol = solve_wave_1d(cfg)

    print("steps:", sol.sweeps.size, "sweeps/step:", sol.sweeps.max())
    print("max|pp| at t=0.2:", abs(sol.pp_final).max())
    print(
        "max error vs exact:",
        max_error(sol.grid.x, sol.t_final, sol.pp_final, sol.pi_final, cfg.initial_data),
    )


if __name__ == "__main__":
    main()
