"""
Query Planner - orchestrates the optimization pipeline

The planner runs the rewrite phases over a fresh context and returns the
cheapest plan it found. This is the main entry point for optimization.
"""

import logging
from typing import Optional

from relcost.core.catalogue import Catalogue
from relcost.operators.base import Operator
from relcost.optimizers.base import OptimizationContext, Optimizer, OptimizerPipeline
from relcost.optimizers.collect import PlanCollector, copy_plan
from relcost.optimizers.estimator import Estimator
from relcost.optimizers.join_reordering import JoinReorderingOptimizer
from relcost.optimizers.predicate_pushdown import PredicatePushdownOptimizer
from relcost.optimizers.projection_pushdown import ProjectionPushdownOptimizer

logger = logging.getLogger(__name__)


class QueryPlanner:
    """
    Cost-based plan optimizer

    Applies the rewrite pipeline:
    1. Plan collection - fresh scans, predicates, required attributes
    2. Predicate pushdown - selections moved onto the scans
    3. Projection pushdown - unneeded attributes dropped early
    4. Join reordering - cheapest predicate order chosen by estimated cost

    The caller's plan is never modified. A detached copy of it is costed
    as well, and returned instead if the rewrite turns out more expensive.

    Example:
        ```python
        planner = QueryPlanner(catalogue)
        better = planner.optimize(plan)
        print(planner.get_optimization_summary())
        ```
    """

    def __init__(self, catalogue: Catalogue, warn_predicate_count: int = 8):
        """
        Initialize planner with the default optimization pipeline

        Args:
            catalogue: Base relation statistics
            warn_predicate_count: Log a warning when more cross-relation
                predicates than this are left for the factorial join search
        """
        self.catalogue = catalogue
        self.warn_predicate_count = warn_predicate_count
        self.pipeline = OptimizerPipeline(
            [
                PlanCollector(),
                PredicatePushdownOptimizer(),
                ProjectionPushdownOptimizer(),
                JoinReorderingOptimizer(warn_predicate_count),
            ]
        )
        self.original_cost: Optional[int] = None
        self.optimized_cost: Optional[int] = None

    def optimize(self, plan: Operator) -> Operator:
        """
        Rewrite a plan into the cheapest equivalent plan found

        Args:
            plan: Input plan

        Returns:
            A new plan emitting the same attributes under the same predicates

        Raises:
            RelationNotFoundError: If the plan scans an unknown relation
            InvalidPlanError: If a predicate references an unknown attribute
        """
        estimator = Estimator()
        context = OptimizationContext(catalogue=self.catalogue, plan=plan, estimator=estimator)

        self.pipeline.optimize(context)

        baseline = copy_plan(self.catalogue, plan)
        self.original_cost = estimator.estimate(baseline)

        if context.result is None or self.original_cost < context.result_cost:
            logger.info("Rewrite did not beat the original plan (cost %d)", self.original_cost)
            self.optimized_cost = self.original_cost
            return baseline

        self.optimized_cost = context.result_cost
        logger.info(
            "Optimized plan cost %d (original %d)", self.optimized_cost, self.original_cost
        )
        return context.result

    def get_optimization_summary(self) -> str:
        """Report of the phases that changed the plan in the last run"""
        return self.pipeline.get_summary()

    def get_optimizers(self) -> list:
        return self.pipeline.optimizers

    def add_optimizer(self, optimizer: Optimizer) -> None:
        """
        Append a rule after join ordering

        It runs on the same context, so it can inspect or replace
        ``context.result``. The baseline comparison still applies.
        """
        self.pipeline.optimizers.append(optimizer)


def optimise(catalogue: Catalogue, plan: Operator) -> Operator:
    """Optimize a plan with the default pipeline"""
    return QueryPlanner(catalogue).optimize(plan)
