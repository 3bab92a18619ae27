from __future__ import annotations

import logging
import time
from datetime import datetime, timezone
from typing import Sequence

from .config import ALL_STRATEGIES, BenchmarkConfig
from .errors import InvalidConfigurationError, SumMismatchError
from .io import load_operands
from .operands import Operands, make_operands, validate_operands
from .report import Measurement, Report, Summary
from .stats import summarize
from .strategies import SummationStrategy, all_strategies, get_strategy

logger = logging.getLogger(__name__)


def _check_count(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidConfigurationError(f"{name} must be an integer, got {value!r}")
    if value < 1:
        raise InvalidConfigurationError(f"{name} must be positive, got {value}")


def _validate(operands: Sequence[int], iterations: int, warmup_iterations: int) -> Operands:
    _check_count("iterations", iterations)
    _check_count("warmup_iterations", warmup_iterations)
    return validate_operands(operands)


def _timed_calls(
    strategy: SummationStrategy, operands: Operands, iterations: int, warmup_iterations: int
) -> list[Measurement]:
    compute = strategy.compute
    name = strategy.name.value

    logger.debug("%s: %d warm-up calls", name, warmup_iterations)
    for _ in range(warmup_iterations):
        compute(operands)

    logger.debug("%s: %d timed calls", name, iterations)
    samples: list[tuple[int, int]] = []
    clock = time.perf_counter_ns
    for _ in range(iterations):
        start = clock()
        total = compute(operands)
        samples.append((clock() - start, total))

    expected = samples[0][1]
    for i, (_, total) in enumerate(samples):
        if total != expected:
            raise SumMismatchError(f"{name}: timed call {i} returned {total}, first call returned {expected}")

    n = len(operands)
    return [
        Measurement(strategy=strategy.name, input_size=n, elapsed_ns=elapsed, sum=total)
        for elapsed, total in samples
    ]


def run(
    strategy: SummationStrategy,
    operands: Sequence[int],
    iterations: int,
    warmup_iterations: int,
) -> list[Measurement]:
    """Time ``iterations`` calls of ``strategy`` after ``warmup_iterations`` discarded ones.

    Validation happens before the strategy is called at all.
    """
    ops = _validate(operands, iterations, warmup_iterations)
    return _timed_calls(strategy, ops, iterations, warmup_iterations)


def cross_check(summaries: Sequence[Summary], reference: int | None = None) -> int:
    if len(summaries) == 0:
        raise ValueError("nothing to cross-check")
    sums = {s.strategy.value: s.sum for s in summaries}
    if len(set(sums.values())) != 1:
        detail = ", ".join(f"{k}={v}" for k, v in sums.items())
        raise SumMismatchError(f"strategies disagree on the sum: {detail}")
    agreed = summaries[0].sum
    if reference is not None and agreed != reference:
        detail = ", ".join(sums)
        raise SumMismatchError(f"{detail} returned {agreed}, reference sum is {reference}")
    return agreed


def run_all(
    strategies: Sequence[SummationStrategy],
    operands: Sequence[int],
    iterations: int,
    warmup_iterations: int,
) -> list[Summary]:
    """Run each strategy in turn over the same operands and verify they agree."""
    if len(strategies) == 0:
        raise InvalidConfigurationError("at least one strategy is required")
    ops = _validate(operands, iterations, warmup_iterations)

    summaries: list[Summary] = []
    for strategy in strategies:
        summary = summarize(_timed_calls(strategy, ops, iterations, warmup_iterations))
        logger.debug(
            "%s: mean=%.1fns min=%dns max=%dns sum=%d",
            summary.strategy.value,
            summary.mean_ns,
            summary.min_ns,
            summary.max_ns,
            summary.sum,
        )
        summaries.append(summary)

    # a lone strategy has nothing to agree with, so always check against the builtin
    cross_check(summaries, reference=sum(ops))
    return summaries


def resolve_operands(config: BenchmarkConfig) -> Operands:
    if config.operands_file is not None:
        return load_operands(config.operands_file)
    return make_operands(config.operands, seed=config.seed)


def benchmark(config: BenchmarkConfig) -> Report:
    operands = resolve_operands(config)
    if config.strategy == ALL_STRATEGIES:
        strategies = all_strategies()
    else:
        strategies = [get_strategy(config.strategy)]
    summaries = run_all(strategies, operands, config.iterations, config.warmup_iterations)

    notes = ["Timings are environment-dependent; compare strategies within one run only."]
    if len(summaries) > 1:
        fastest = min(summaries, key=lambda s: s.mean_ns)
        notes.append(f"Lowest mean: {fastest.strategy.value}")

    return Report(
        generated_at=datetime.now(timezone.utc).isoformat(),
        config=config,
        summaries=summaries,
        verified_sum=summaries[0].sum,
        notes=notes,
    )
