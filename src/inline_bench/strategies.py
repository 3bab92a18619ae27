from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import ClassVar

from .errors import InvalidConfigurationError
from .operands import OPERAND_COUNT, Operands


class StrategyName(str, Enum):
    flat = "flat"
    nested = "nested"
    dispatch = "dispatch"


class SummationStrategy(ABC):
    name: ClassVar[StrategyName]

    @abstractmethod
    def compute(self, operands: Operands) -> int:
        """Return the sum of a 128-element operand vector."""


# Flat: the hand-inlined form, one expression over every element.


def _flat_sum(v: Operands) -> int:
    return (
        v[0] + v[1] + v[2] + v[3] + v[4] + v[5] + v[6] + v[7] + v[8] + v[9] + v[10] + v[11] +
        v[12] + v[13] + v[14] + v[15] + v[16] + v[17] + v[18] + v[19] + v[20] + v[21] + v[22] +
        v[23] + v[24] + v[25] + v[26] + v[27] + v[28] + v[29] + v[30] + v[31] + v[32] + v[33] +
        v[34] + v[35] + v[36] + v[37] + v[38] + v[39] + v[40] + v[41] + v[42] + v[43] + v[44] +
        v[45] + v[46] + v[47] + v[48] + v[49] + v[50] + v[51] + v[52] + v[53] + v[54] + v[55] +
        v[56] + v[57] + v[58] + v[59] + v[60] + v[61] + v[62] + v[63] + v[64] + v[65] + v[66] +
        v[67] + v[68] + v[69] + v[70] + v[71] + v[72] + v[73] + v[74] + v[75] + v[76] + v[77] +
        v[78] + v[79] + v[80] + v[81] + v[82] + v[83] + v[84] + v[85] + v[86] + v[87] + v[88] +
        v[89] + v[90] + v[91] + v[92] + v[93] + v[94] + v[95] + v[96] + v[97] + v[98] + v[99] +
        v[100] + v[101] + v[102] + v[103] + v[104] + v[105] + v[106] + v[107] + v[108] + v[109] +
        v[110] + v[111] + v[112] + v[113] + v[114] + v[115] + v[116] + v[117] + v[118] + v[119] +
        v[120] + v[121] + v[122] + v[123] + v[124] + v[125] + v[126] + v[127]
    )


class FlatStrategy(SummationStrategy):
    name = StrategyName.flat

    def compute(self, operands: Operands) -> int:
        return _flat_sum(operands)


# Nested: 128 -> 64 -> ... -> 2 through direct calls, seven frames deep.


def _add2(v: Operands, i: int) -> int:
    return v[i] + v[i + 1]


def _add4(v: Operands, i: int) -> int:
    return _add2(v, i) + _add2(v, i + 2)


def _add8(v: Operands, i: int) -> int:
    return _add4(v, i) + _add4(v, i + 4)


def _add16(v: Operands, i: int) -> int:
    return _add8(v, i) + _add8(v, i + 8)


def _add32(v: Operands, i: int) -> int:
    return _add16(v, i) + _add16(v, i + 16)


def _add64(v: Operands, i: int) -> int:
    return _add32(v, i) + _add32(v, i + 32)


def _add128(v: Operands, i: int) -> int:
    return _add64(v, i) + _add64(v, i + 64)


class NestedCallStrategy(SummationStrategy):
    name = StrategyName.nested

    def compute(self, operands: Operands) -> int:
        return _add128(operands, 0)


# Dispatch: the same reduction tree, but each level reaches the next one
# through an Adder held on the instance, so the callee is only known at run time.


class Adder(ABC):
    width: int

    @abstractmethod
    def add(self, values: Operands, offset: int) -> int:
        """Sum ``values[offset:offset + self.width]``."""

    @abstractmethod
    def depth(self) -> int:
        ...


class PairAdder(Adder):
    width = 2

    def add(self, values: Operands, offset: int) -> int:
        return values[offset] + values[offset + 1]

    def depth(self) -> int:
        return 1


class HalvingAdder(Adder):
    def __init__(self, half: Adder) -> None:
        self._half = half
        self._step = half.width
        self.width = 2 * half.width

    @property
    def half(self) -> Adder:
        return self._half

    def add(self, values: Operands, offset: int) -> int:
        return self._half.add(values, offset) + self._half.add(values, offset + self._step)

    def depth(self) -> int:
        return 1 + self._half.depth()


def build_adder_chain(width: int = OPERAND_COUNT) -> Adder:
    if width < 2 or width & (width - 1):
        raise ValueError(f"adder width must be a power of two >= 2, got {width}")
    adder: Adder = PairAdder()
    while adder.width < width:
        adder = HalvingAdder(adder)
    return adder


class DispatchStrategy(SummationStrategy):
    name = StrategyName.dispatch

    def __init__(self, root: Adder | None = None) -> None:
        self._root = root if root is not None else build_adder_chain()
        if self._root.width != OPERAND_COUNT:
            raise ValueError(f"root adder must cover {OPERAND_COUNT} operands, got {self._root.width}")

    def compute(self, operands: Operands) -> int:
        return self._root.add(operands, 0)


STRATEGIES: dict[StrategyName, type[SummationStrategy]] = {
    StrategyName.flat: FlatStrategy,
    StrategyName.nested: NestedCallStrategy,
    StrategyName.dispatch: DispatchStrategy,
}


def get_strategy(name: StrategyName | str) -> SummationStrategy:
    try:
        key = StrategyName(name)
    except ValueError as exc:
        choices = ", ".join(s.value for s in StrategyName)
        raise InvalidConfigurationError(f"Unknown strategy: {name!r} (expected one of: {choices})") from exc
    return STRATEGIES[key]()


def all_strategies() -> list[SummationStrategy]:
    return [cls() for cls in STRATEGIES.values()]
