from __future__ import annotations

import json
import logging
from pathlib import Path

import yaml

from .errors import InvalidInputError
from .operands import Operands, validate_operands

logger = logging.getLogger(__name__)


def load_operands(path: str | Path) -> Operands:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(str(path))

    suffix = p.suffix.lower()
    if suffix not in {".json", ".yaml", ".yml"}:
        raise InvalidInputError(f"Unsupported operands format: {p.suffix} (expected .json/.yaml/.yml)")
    try:
        text = p.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise InvalidInputError(f"Failed to read operands file: {p}: {exc}") from exc
    try:
        raw = yaml.safe_load(text) if suffix in {".yaml", ".yml"} else json.loads(text)
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        raise InvalidInputError(f"Failed to parse operands file: {p}") from exc

    if isinstance(raw, dict):
        raw = raw.get("operands")
    if not isinstance(raw, list):
        raise InvalidInputError(f"Invalid operands file: {p} (expected a list or an 'operands' key)")

    try:
        ops = validate_operands(raw)
    except InvalidInputError as exc:
        raise InvalidInputError(f"Invalid operands file: {p}: {exc}") from exc
    logger.debug("loaded %d operands from %s", len(ops), p)
    return ops
