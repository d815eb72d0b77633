import argparse
import logging

from .board import ToggleGrid
from .box import attempt_open
from .config import ConfigError, load_config
from .logging_config import setup_logging
from .solvers import METHODS

logger = logging.getLogger(__name__)


def positive_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got {text!r}")
    if value <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value}")
    return value


def non_negative_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got {text!r}")
    if value < 0:
        raise argparse.ArgumentTypeError(f"expected a non-negative integer, got {value}")
    return value


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="togglelock",
        description="Shuffle a toggle-lock box and try to open it.",
    )
    ap.add_argument("rows", type=positive_int, help="Number of grid rows")
    ap.add_argument("cols", type=positive_int, help="Number of grid columns")
    ap.add_argument("--config", default=None, help="YAML config file")
    ap.add_argument(
        "--seed", type=non_negative_int, default=None, help="Shuffle seed"
    )
    ap.add_argument(
        "--max-shuffle",
        type=non_negative_int,
        default=None,
        help="Upper bound on random toggles used to lock the box",
    )
    ap.add_argument("--method", choices=METHODS, default=None, help="Solver")
    ap.add_argument(
        "--no-min-weight",
        action="store_true",
        help="Skip the minimum-weight search over the nullspace",
    )
    ap.add_argument(
        "--show", action="store_true", help="Print the grid before and after"
    )
    ap.add_argument("--plot", default=None, help="Save a before/after figure")
    ap.add_argument(
        "-v", "--verbose", action="count", default=0, help="More logging"
    )
    return ap


def main(argv=None) -> int:
    ap = build_parser()
    args = ap.parse_args(argv)

    try:
        cfg = load_config(args.config)
    except ConfigError as exc:
        ap.error(str(exc))

    if args.seed is not None:
        cfg["box"]["seed"] = args.seed
    if args.max_shuffle is not None:
        cfg["box"]["max_shuffle"] = args.max_shuffle
    if args.method is not None:
        cfg["solver"]["method"] = args.method
    if args.no_min_weight:
        cfg["solver"]["min_weight"] = False

    level = cfg["logging"]["level"]
    if args.verbose == 1:
        level = "INFO"
    elif args.verbose > 1:
        level = "DEBUG"
    setup_logging(level, cfg["logging"]["file"])

    attempt = attempt_open(
        args.rows,
        args.cols,
        seed=cfg["box"]["seed"],
        method=cfg["solver"]["method"],
        min_weight=cfg["solver"]["min_weight"],
        max_nullspace_dim=cfg["solver"]["max_nullspace_dim"],
        max_shuffle=cfg["box"]["max_shuffle"],
    )

    if args.show:
        for label, state in (("before", attempt.before), ("after", attempt.after)):
            grid = ToggleGrid.from_state(state)
            print(f"{label} ({grid.count_locked()} locked):\n{grid}")

    if args.plot:
        import matplotlib

        matplotlib.use("Agg")
        import matplotlib.pyplot as plt

        from .viz import show_before_after

        fig, _ = show_before_after(attempt.before, attempt.after, attempt.plan)
        fig.savefig(args.plot)
        plt.close(fig)
        logger.info("Saved figure to %s", args.plot)

    print("BOX: LOCKED!" if attempt.locked else "BOX: OPENED!")
    return int(attempt.locked)
