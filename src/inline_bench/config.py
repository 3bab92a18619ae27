from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from pydantic import BaseModel, Field, field_validator

from .errors import InvalidConfigurationError
from .operands import OperandSource
from .strategies import StrategyName

ALL_STRATEGIES = "all"


class BenchmarkConfig(BaseModel):
    strategy: str = ALL_STRATEGIES
    # strict: YAML `true` must not pass as a count of 1
    iterations: int = Field(1000, ge=1, strict=True)
    warmup_iterations: int = Field(100, ge=1, strict=True)
    operands: OperandSource = OperandSource.sequential
    seed: int | None = None
    operands_file: Path | None = None

    @field_validator("strategy")
    @classmethod
    def _validate_strategy(cls, v: str) -> str:
        if v == ALL_STRATEGIES:
            return v
        try:
            return StrategyName(v).value
        except ValueError:
            choices = ", ".join([s.value for s in StrategyName] + [ALL_STRATEGIES])
            raise ValueError(f"unknown strategy {v!r} (expected one of: {choices})") from None

    def merged(self, **overrides: Any) -> "BenchmarkConfig":
        data = self.model_dump()
        data.update({k: v for k, v in overrides.items() if v is not None})
        try:
            return type(self).model_validate(data)
        except ValidationError as exc:
            raise InvalidConfigurationError(f"Invalid benchmark config\n{exc}") from exc

    @classmethod
    def from_yaml(cls, path: str | Path) -> "BenchmarkConfig":
        data = _load_yaml(path)
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise InvalidConfigurationError(f"Invalid benchmark config: {path}\n{exc}") from exc


def _load_yaml(path: str | Path) -> dict[str, Any]:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(str(path))
    try:
        text = p.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise InvalidConfigurationError(f"Failed to read benchmark config: {p}: {exc}") from exc
    try:
        data = yaml.safe_load(text) or {}
    except yaml.YAMLError as exc:
        raise InvalidConfigurationError(f"Failed to parse YAML: {p}") from exc
    if not isinstance(data, dict):
        raise InvalidConfigurationError(f"Invalid benchmark config: {p} (expected a mapping)")
    return data
