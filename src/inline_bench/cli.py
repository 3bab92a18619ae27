from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import NoReturn

from .config import ALL_STRATEGIES, BenchmarkConfig
from .errors import InvalidConfigurationError, InvalidInputError, SumMismatchError
from .harness import benchmark
from .operands import OperandSource
from .report import render_json, render_table
from .strategies import StrategyName

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_MISMATCH = 2

logger = logging.getLogger(__name__)


class _ArgumentParser(argparse.ArgumentParser):
    # usage errors count as invalid configuration, not as a sum mismatch
    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(EXIT_INVALID, f"{self.prog}: error: {message}\n")


def _existing_path(value: str) -> Path:
    path = Path(value)
    if not path.exists():
        raise argparse.ArgumentTypeError(f"File not found: {value}")
    return path


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(prog="benchrun", add_help=True)
    parser.add_argument(
        "--strategy",
        choices=[s.value for s in StrategyName] + [ALL_STRATEGIES],
        default=None,
        help="Strategy to time (default: all)",
    )
    parser.add_argument("--iterations", type=int, default=None, help="Timed calls per strategy (default: 1000)")
    parser.add_argument("--warmup", type=int, default=None, help="Discarded warm-up calls per strategy (default: 100)")
    parser.add_argument("--config", type=_existing_path, default=None, help="Path to a benchmark config YAML")
    parser.add_argument(
        "--operands",
        choices=[s.value for s in OperandSource],
        default=None,
        help="How to generate the 128 operands (default: sequential)",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for --operands random")
    parser.add_argument(
        "--operands-file",
        type=_existing_path,
        default=None,
        help="Load operands from a JSON/YAML file instead of generating them",
    )
    parser.add_argument("--format", choices=["table", "json"], default="table", help="Output format")
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write the report to this path (default: stdout)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output to stderr")
    return parser


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    _configure_logging(args.verbose)

    overrides = {
        "strategy": args.strategy,
        "iterations": args.iterations,
        "warmup_iterations": args.warmup,
        "operands": args.operands,
        "seed": args.seed,
        "operands_file": args.operands_file,
    }

    try:
        if args.config is not None:
            config = BenchmarkConfig.from_yaml(args.config)
            for key, value in overrides.items():
                if value is not None:
                    logger.info("overriding %s from %s with %r", key, args.config, value)
        else:
            config = BenchmarkConfig()
        config = config.merged(**overrides)
        report = benchmark(config)
    except SumMismatchError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_MISMATCH
    except (InvalidConfigurationError, InvalidInputError, FileNotFoundError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_INVALID

    text = render_json(report) if args.format == "json" else render_table(report)
    if args.output is None:
        print(text)
        return EXIT_OK

    args.output.parent.mkdir(parents=True, exist_ok=True)
    args.output.write_text(text + "\n", encoding="utf-8")
    return EXIT_OK
