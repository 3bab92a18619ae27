from __future__ import annotations

import statistics
from typing import Sequence

from .report import Measurement, Summary


def summarize(results: Sequence[Measurement]) -> Summary:
    if len(results) == 0:
        raise ValueError("cannot summarize an empty result set")

    strategies = {r.strategy for r in results}
    if len(strategies) != 1:
        names = ", ".join(sorted(s.value for s in strategies))
        raise ValueError(f"results mix strategies: {names}")
    sums = {r.sum for r in results}
    if len(sums) != 1:
        raise ValueError(f"results disagree on the sum: {sorted(sums)}")

    elapsed = [r.elapsed_ns for r in results]
    lo = min(elapsed)
    hi = max(elapsed)
    # fsum rounding can land a hair outside [lo, hi] when all samples are equal
    mean = min(max(statistics.fmean(elapsed), float(lo)), float(hi))
    return Summary(
        strategy=results[0].strategy,
        runs=len(results),
        mean_ns=mean,
        min_ns=lo,
        max_ns=hi,
        median_ns=float(statistics.median(elapsed)),
        sum=results[0].sum,
    )
