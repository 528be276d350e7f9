"""
Plan optimizers - cost estimation and cost-based rewriting

The optimizer module provides a pipeline-based rewrite framework:

- Estimator: statistics propagation and plan cost
- Base classes: Optimizer, OptimizerPipeline, OptimizationContext
- Rewrite phases: PlanCollector, PredicatePushdown, ProjectionPushdown,
  JoinReordering
- QueryPlanner: Main orchestrator that applies all phases

Example:
    ```python
    from relcost.optimizers import QueryPlanner, estimate

    planner = QueryPlanner(catalogue)
    better = planner.optimize(plan)
    print(estimate(better))
    ```
"""

from relcost.optimizers.base import OptimizationContext, Optimizer, OptimizerPipeline
from relcost.optimizers.collect import PlanCollector, copy_plan
from relcost.optimizers.estimator import Estimator, estimate
from relcost.optimizers.join_reordering import JoinReorderingOptimizer, predicate_orderings
from relcost.optimizers.planner import QueryPlanner, optimise
from relcost.optimizers.predicate_pushdown import PredicatePushdownOptimizer
from relcost.optimizers.projection_pushdown import ProjectionPushdownOptimizer

__all__ = [
    "Estimator",
    "estimate",
    "Optimizer",
    "OptimizerPipeline",
    "OptimizationContext",
    "QueryPlanner",
    "optimise",
    "PlanCollector",
    "copy_plan",
    "PredicatePushdownOptimizer",
    "ProjectionPushdownOptimizer",
    "JoinReorderingOptimizer",
    "predicate_orderings",
]
