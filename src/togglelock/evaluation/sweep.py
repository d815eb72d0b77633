from __future__ import annotations

import logging
import time

import numpy as np
import yaml

from ..board import ToggleGrid
from ..config import ConfigError
from ..solvers import METHODS, make_solver

logger = logging.getLogger(__name__)

FIELDNAMES = [
    "rows",
    "cols",
    "method",
    "board_id",
    "seed",
    "initial_locked",
    "toggles",
    "opened",
    "time_ms",
]


def load_sweep_config(path) -> dict:
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except OSError as exc:
        raise ConfigError(f"Cannot read sweep config {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc

    if not isinstance(raw, dict) or not isinstance(raw.get("sweep"), dict):
        raise ConfigError(f"{path}: expected a 'sweep' mapping")
    return parse_sweep_config(raw["sweep"])


def parse_sweep_config(cfg: dict) -> dict:
    if "shapes" not in cfg or not cfg["shapes"]:
        raise ConfigError("sweep.shapes must list at least one shape")
    shapes = []
    for item in cfg["shapes"]:
        if isinstance(item, int) and not isinstance(item, bool) and item > 0:
            shapes.append((item, item))
        elif (
            isinstance(item, (list, tuple))
            and len(item) == 2
            and all(isinstance(v, int) and v > 0 for v in item)
        ):
            shapes.append((int(item[0]), int(item[1])))
        else:
            raise ConfigError(f"Invalid shape spec: {item}")

    methods = [str(m).lower() for m in cfg.get("methods", ["cells"])]
    for m in methods:
        if m not in METHODS:
            raise ConfigError(f"Unknown solver: {m}")

    try:
        n_samples = int(cfg.get("n_samples", 100))
        seed = int(cfg.get("seed", 0))
        max_shuffle = int(cfg.get("max_shuffle", 1000))
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid sweep setting: {exc}") from exc
    if seed < 0 or n_samples < 0 or max_shuffle < 0:
        raise ConfigError("sweep seed, n_samples and max_shuffle must be non-negative")

    return {
        "shapes": shapes,
        "methods": methods,
        "n_samples": n_samples,
        "seed": seed,
        "max_shuffle": max_shuffle,
        "solver": dict(cfg.get("solver", {}) or {}),
        "output_dir": str(cfg.get("output_dir", "results/runs")),
    }


def _task_seed(base_seed: int, *coords: int) -> int:
    """Generate deterministic seed for each board."""
    ss = np.random.SeedSequence([int(base_seed)] + [int(c) for c in coords])

    return int(
        ss.generate_state(1, dtype=np.uint64)[0] & np.uint64((1 << 63) - 1)
    )


def run_sweep(cfg: dict, progress=None) -> list[dict]:
    """Solve n_samples seeded boards for every shape and method.

    The same board seeds are reused across methods so their records line up.
    `progress(done, total)` is called after every board when given.
    """
    total = len(cfg["shapes"]) * len(cfg["methods"]) * cfg["n_samples"]
    done = 0
    records = []
    for rows, cols in cfg["shapes"]:
        for method in cfg["methods"]:
            solver = make_solver(method, cfg["solver"])
            for board_id in range(cfg["n_samples"]):
                seed = _task_seed(cfg["seed"], rows, cols, board_id)
                box = ToggleGrid(
                    rows, cols, seed=seed, max_shuffle=cfg["max_shuffle"]
                )
                start_time = time.perf_counter()
                attempt = solver.attempt(box)
                time_ms = (time.perf_counter() - start_time) * 1000

                records.append(
                    {
                        "rows": rows,
                        "cols": cols,
                        "method": method,
                        "board_id": board_id,
                        "seed": seed,
                        "initial_locked": int(attempt.before.sum()),
                        "toggles": len(attempt.plan),
                        "opened": int(not attempt.locked),
                        "time_ms": time_ms,
                    }
                )
                done += 1
                if progress is not None:
                    progress(done, total)
            logger.info("Finished %dx%d with %s", rows, cols, method)
    return records
