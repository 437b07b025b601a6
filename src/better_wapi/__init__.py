"""better_wapi - ACME DNS-01 challenge solver for the better-wapi DNS API."""

from better_wapi.solver import BetterWapiSolver, Solver

__all__ = ["BetterWapiSolver", "Solver"]
__version__ = "0.1.0"
