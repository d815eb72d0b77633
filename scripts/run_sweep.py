import argparse
import csv
import time
from pathlib import Path

from togglelock.evaluation.metrics import summarize
from togglelock.evaluation.sweep import FIELDNAMES, load_sweep_config, run_sweep
from togglelock.logging_config import setup_logging

ROOT = Path(__file__).resolve().parents[1]


def _progress(start_time):
    def report(done, total):
        elapsed = time.time() - start_time
        pct = done / total
        eta_seconds = (elapsed / done) * (total - done)
        progress_line = (
            f"\r[progress] {done}/{total} boards ({pct:>6.1%}) | "
            f"elapsed: {int(elapsed // 60)}m {int(elapsed % 60)}s | "
            f"ETA: {int(eta_seconds // 60)}m {int(eta_seconds % 60)}s"
        )
        print(progress_line, end="", flush=True)
        if done == total:
            print()  # Final newline

    return report


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument(
        "--config",
        default=str(ROOT / "configs" / "sweep.yaml"),
    )
    ap.add_argument("--out", default=None, help="Output CSV path")
    ap.add_argument("--log-level", default="WARNING")
    args = ap.parse_args()

    setup_logging(args.log_level)
    cfg = load_sweep_config(args.config)

    out_dir = Path(cfg["output_dir"])
    out_dir.mkdir(parents=True, exist_ok=True)
    out_csv = args.out or str(out_dir / "sweep.csv")

    n_boards = len(cfg["shapes"]) * len(cfg["methods"]) * cfg["n_samples"]
    print(f"\nSolving {n_boards:,} boards...\n")

    start_time = time.time()
    records = run_sweep(cfg, progress=_progress(start_time))
    with open(out_csv, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=FIELDNAMES)
        writer.writeheader()
        writer.writerows(records)

    for (rows, cols, method), stats in summarize(records).items():
        print(
            f"{rows}x{cols} {method:>5}: "
            f"opened {stats['success_rate']:>6.1%} | "
            f"mean toggles {stats['mean_toggles']:.1f}"
        )

    elapsed = time.time() - start_time
    print(f"\nDone in {int(elapsed/60)}m {int(elapsed%60)}s")
    print(f"Output: {out_csv}\n")


if __name__ == "__main__":
    main()
