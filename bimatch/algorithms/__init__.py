"""Max-flow algorithms operating on `FlowNetwork`."""

from bimatch.algorithms.blocking_flow import BlockingFlowSolver, calc_max_flow

__all__ = ["BlockingFlowSolver", "calc_max_flow"]
