import pytest

from inline_bench.config import BenchmarkConfig
from inline_bench.errors import InvalidConfigurationError, InvalidInputError, SumMismatchError
from inline_bench.harness import benchmark, run, run_all
from inline_bench.operands import make_operands
from inline_bench.strategies import FlatStrategy, NestedCallStrategy, StrategyName, SummationStrategy, all_strategies

ONES = (1,) * 128


class _CountingStrategy(SummationStrategy):
    name = StrategyName.flat

    def __init__(self) -> None:
        self.calls = 0

    def compute(self, operands):  # noqa: ANN001
        self.calls += 1
        return sum(operands)


class _OffByOneStrategy(SummationStrategy):
    name = StrategyName.dispatch

    def compute(self, operands):  # noqa: ANN001
        return sum(operands) + 1


class _DriftingStrategy(SummationStrategy):
    name = StrategyName.nested

    def __init__(self) -> None:
        self.calls = 0

    def compute(self, operands):  # noqa: ANN001
        self.calls += 1
        return self.calls


def test_run_flat_on_ones() -> None:
    results = run(FlatStrategy(), ONES, iterations=5, warmup_iterations=2)
    assert len(results) == 5
    for r in results:
        assert r.sum == 128
        assert r.strategy == StrategyName.flat
        assert r.input_size == 128
        assert r.elapsed_ns >= 0


def test_run_calls_warmup_plus_iterations() -> None:
    strategy = _CountingStrategy()
    run(strategy, ONES, iterations=4, warmup_iterations=3)
    assert strategy.calls == 7


@pytest.mark.parametrize("size", [127, 129])
def test_run_rejects_wrong_length(size: int) -> None:
    strategy = _CountingStrategy()
    with pytest.raises(InvalidInputError, match="expected 128 operands"):
        run(strategy, (1,) * size, iterations=1, warmup_iterations=1)
    assert strategy.calls == 0


def test_run_rejects_zero_iterations() -> None:
    strategy = _CountingStrategy()
    with pytest.raises(InvalidConfigurationError, match="iterations must be positive"):
        run(strategy, ONES, iterations=0, warmup_iterations=1)
    assert strategy.calls == 0


def test_run_rejects_negative_warmup() -> None:
    with pytest.raises(InvalidConfigurationError, match="warmup_iterations"):
        run(FlatStrategy(), ONES, iterations=1, warmup_iterations=-1)


def test_run_rejects_non_integer_iterations() -> None:
    with pytest.raises(InvalidConfigurationError, match="must be an integer"):
        run(FlatStrategy(), ONES, iterations=2.5, warmup_iterations=1)  # type: ignore[arg-type]


def test_run_detects_unstable_sum() -> None:
    with pytest.raises(SumMismatchError, match="timed call"):
        run(_DriftingStrategy(), ONES, iterations=3, warmup_iterations=1)


def test_run_all_returns_one_summary_per_strategy() -> None:
    operands = make_operands("random", seed=7)
    summaries = run_all(all_strategies(), operands, iterations=10, warmup_iterations=2)
    assert [s.strategy for s in summaries] == [StrategyName.flat, StrategyName.nested, StrategyName.dispatch]
    assert {s.sum for s in summaries} == {sum(operands)}
    for s in summaries:
        assert s.runs == 10
        assert s.min_ns <= s.mean_ns <= s.max_ns


def test_run_all_detects_cross_strategy_mismatch() -> None:
    with pytest.raises(SumMismatchError, match="dispatch=129"):
        run_all([FlatStrategy(), NestedCallStrategy(), _OffByOneStrategy()], ONES, iterations=2, warmup_iterations=1)


def test_run_all_single_strategy_checked_against_reference() -> None:
    with pytest.raises(SumMismatchError, match="dispatch returned 129, reference sum is 128"):
        run_all([_OffByOneStrategy()], ONES, iterations=2, warmup_iterations=1)


def test_run_all_validates_before_running() -> None:
    strategy = _CountingStrategy()
    with pytest.raises(InvalidConfigurationError):
        run_all([strategy], ONES, iterations=1, warmup_iterations=0)
    assert strategy.calls == 0


def test_benchmark_builds_report() -> None:
    config = BenchmarkConfig(iterations=3, warmup_iterations=1, operands="ones")
    report = benchmark(config)
    assert report.verified_sum == 128
    assert len(report.summaries) == 3
    assert report.config.iterations == 3
    assert report.notes


def test_benchmark_single_strategy_uses_operands_file(tmp_path) -> None:  # noqa: ANN001
    path = tmp_path / "ops.json"
    path.write_text("[" + ", ".join(["2"] * 128) + "]", encoding="utf-8")
    config = BenchmarkConfig(strategy="nested", iterations=2, warmup_iterations=1, operands_file=path)
    report = benchmark(config)
    assert [s.strategy for s in report.summaries] == [StrategyName.nested]
    assert report.verified_sum == 256
