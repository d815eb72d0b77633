from __future__ import annotations


def success_rate(records) -> float:
    if not records:
        return 0.0
    return sum(int(r["opened"]) for r in records) / len(records)


def mean_toggles(records) -> float:
    # toggles issued per board, opened or not
    if not records:
        return 0.0
    return sum(int(r["toggles"]) for r in records) / len(records)


def summarize(records) -> dict:
    """Group records by (rows, cols, method) and report rate and effort."""
    groups: dict = {}
    for r in records:
        groups.setdefault((r["rows"], r["cols"], r["method"]), []).append(r)
    return {
        key: {
            "boards": len(group),
            "success_rate": success_rate(group),
            "mean_toggles": mean_toggles(group),
        }
        for key, group in groups.items()
    }
