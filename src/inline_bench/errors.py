from __future__ import annotations


class InvalidInputError(ValueError):
    """The operand vector is malformed."""


class InvalidConfigurationError(ValueError):
    """Iteration counts, strategy name or config file are invalid."""


class SumMismatchError(RuntimeError):
    """Two computations over the same operands disagreed.

    This points at a bug in a strategy implementation, not at bad input.
    """
