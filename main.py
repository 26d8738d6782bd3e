import argparse
import os

os.environ.setdefault("XLA_PYTHON_CLIENT_PREALLOCATE", "false")

import json
from datetime import datetime, timezone
import numpy as np
from core.configs import AdvectionConfig, DiffusionConfig
from core.pacing import TickGate, drive
from core.profiler import Profiler
from core.render import TITLES, animate, save_frame

# Import Simulations
from simulations.advection.advection_numpy import AdvectionNumPy
from simulations.advection.advection_jax import AdvectionJax

from simulations.diffusion.diffusion_numpy import DiffusionNumPy
from simulations.diffusion.diffusion_jax import DiffusionJax


def build_solver(simulation, backend, **overrides):
    match simulation:
        case "advection":
            cfg = AdvectionConfig(**overrides)
            match backend:
                case "numpy":
                    return AdvectionNumPy(cfg)
                case "jax":
                    return AdvectionJax(cfg)
                case _:
                    raise ValueError(f"Unknown advection backend: {backend}")

        case "diffusion":
            cfg = DiffusionConfig(**overrides)
            match backend:
                case "numpy":
                    return DiffusionNumPy(cfg)
                case "jax":
                    return DiffusionJax(cfg)
                case _:
                    raise ValueError(f"Unknown diffusion backend: {backend}")

        case _:
            raise ValueError(f"Unknown simulation: {simulation}")


def run_simulation(args):
    print(
        f"Running Simulation: {args.simulation} | Backend: {args.backend} | Iterations: {args.iterations}"
    )

    solver = build_solver(
        args.simulation,
        args.backend,
        rows=args.rows,
        cols=args.cols,
        iterations=args.iterations,
        precision=args.precision,
        steps_every=args.steps_every,
    )
    if not solver.cfg.stable:
        print("Warning: coefficients are outside the explicit stability limit")

    if args.frame_every < 1:
        raise ValueError(f"frame_every must be >= 1, got {args.frame_every}")

    gate = TickGate(args.steps_every)

    if args.show:
        animate(solver, gate, title=TITLES[args.simulation])
        return solver.state

    if args.frames_dir:
        cell_size = solver.cfg.cell_size

        def on_frame(frame, state):
            if frame % args.frame_every == 0:
                path = os.path.join(args.frames_dir, f"frame_{frame:05d}.png")
                save_frame(state.snapshot(), path, cell_size=cell_size)

        ticks = args.iterations * args.steps_every
        with Profiler(f"{args.simulation}_{args.backend}") as p:
            drive(solver, gate, ticks, on_frame)
        steps = solver.state.step_count
        print(f"Frames saved to {args.frames_dir}")
    else:
        # The first JAX call compiles; keep it out of the timed region
        steps = args.iterations
        if args.backend != "numpy" and steps > 0:
            solver.step()
            steps -= 1

        print("Starting simulation...")
        with Profiler(f"{args.simulation}_{args.backend}") as p:
            solver.run(steps)

    print(f"{p.name} completed in {p.duration:.4f} seconds")

    perf_value = p.throughput(args.rows * args.cols, steps)
    perf_unit = "Mpts/s"
    print(f"Performance: {perf_value:.2f} {perf_unit}")

    grid = solver.state.snapshot()
    if args.output_json:
        results = {
            "simulation": args.simulation,
            "backend": args.backend,
            "rows": args.rows,
            "cols": args.cols,
            "iterations": args.iterations,
            "steps": solver.state.step_count,
            "precision": args.precision,
            "duration": p.duration,
            "performance_metric": perf_value,
            "performance_unit": perf_unit,
            "min": float(np.min(grid)),
            "max": float(np.max(grid)),
            "sum": float(np.sum(grid, dtype=np.float64)),
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        }
        with open(args.output_json, "w") as f:
            json.dump(results, f, indent=4)
        print(f"Results saved to {args.output_json}")

    return solver.state


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="2D scalar field simulations")
    parser.add_argument(
        "--simulation",
        type=str,
        required=True,
        choices=["advection", "diffusion"],
        help="Simulation to run",
    )
    parser.add_argument(
        "--backend",
        type=str,
        default="numpy",
        choices=["numpy", "jax"],
        help="Backend to use",
    )
    parser.add_argument("--rows", type=int, default=100, help="Grid height")
    parser.add_argument("--cols", type=int, default=100, help="Grid width")
    parser.add_argument(
        "--iterations", type=int, default=1000, help="Number of steps"
    )
    parser.add_argument(
        "--precision",
        type=str,
        default="f32",
        choices=["f32", "f64"],
        help="Precision (f32 or f64)",
    )
    parser.add_argument(
        "--steps-every", type=int, default=1, help="Step once every N ticks"
    )
    parser.add_argument("--frames-dir", type=str, help="Directory for PNG frames")
    parser.add_argument(
        "--frame-every", type=int, default=1, help="Save one frame every N ticks"
    )
    parser.add_argument("--show", action="store_true", help="Open a live window")
    parser.add_argument(
        "--output-json", type=str, help="Path to save results in JSON format"
    )
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    run_simulation(args)


if __name__ == "__main__":
    main()
