"""Nested-call vs. flat vs. virtual-dispatch summation microbenchmark."""

__version__ = "0.1.0"
