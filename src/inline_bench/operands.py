from __future__ import annotations

import random
from enum import Enum
from typing import Sequence

from .errors import InvalidInputError

OPERAND_COUNT = 128
RANDOM_BOUND = 1000

Operands = tuple[int, ...]


class OperandSource(str, Enum):
    sequential = "sequential"
    ones = "ones"
    zeros = "zeros"
    random = "random"


def validate_operands(values: Sequence[int]) -> Operands:
    if isinstance(values, (str, bytes)):
        raise InvalidInputError("operands must be a sequence of integers")
    try:
        ops = tuple(values)
    except TypeError as exc:
        raise InvalidInputError("operands must be a sequence of integers") from exc
    if len(ops) != OPERAND_COUNT:
        raise InvalidInputError(f"expected {OPERAND_COUNT} operands, got {len(ops)}")
    for i, v in enumerate(ops):
        if isinstance(v, bool) or not isinstance(v, int):
            raise InvalidInputError(f"operand {i} is not an integer: {v!r}")
    return ops


def make_operands(source: OperandSource | str = OperandSource.sequential, seed: int | None = None) -> Operands:
    source = OperandSource(source)
    if source == OperandSource.sequential:
        return tuple(range(OPERAND_COUNT))
    if source == OperandSource.ones:
        return (1,) * OPERAND_COUNT
    if source == OperandSource.zeros:
        return (0,) * OPERAND_COUNT
    rng = random.Random(seed)
    return tuple(rng.randint(-RANDOM_BOUND, RANDOM_BOUND) for _ in range(OPERAND_COUNT))
