from __future__ import annotations


class CoolingModelError(Exception):
    """Base class for every failure raised by the winding solver."""


class ConfigurationError(CoolingModelError, ValueError):
    """The design cannot be simulated (no discs/sections, non-directed flow, bad parameters)."""


class SolverError(CoolingModelError, RuntimeError):
    """A sparse solve returned no usable solution (singular or non-finite)."""


class ConvergenceError(CoolingModelError, RuntimeError):
    def __init__(self, what: str, last_delta: float, iterations: int):
        self.what = what
        self.last_delta = float(last_delta)
        self.iterations = int(iterations)
        super().__init__(
            f"{what} did not converge after {iterations} iterations (last change {last_delta:.4g})"
        )
