"""
Join Reordering Optimizer (phase 3)

Searches the order in which cross-relation predicates are applied.

Each ordering of the remaining predicates yields one candidate plan:
predicates are applied in that order to a pool of partial plans, turning
two partial plans into a Join or filtering one with a Select, and whatever
is left is combined with Products. Every candidate is costed with the
Estimator and the cheapest one wins.

Example:
    Tables: A (1000 rows), B (100 rows), C (10 rows)
    Predicates: a = b, b2 = c

    Ordering (a = b, b2 = c) joins A with B first,
    ordering (b2 = c, a = b) joins B with C first.
    Whichever produces the smaller intermediate result is cheaper.

Note:
    The search is exhaustive over orderings, so it is factorial in the
    number of cross-relation predicates. It is meant for a handful of
    joins.
"""

import logging
from collections.abc import Iterator
from itertools import permutations
from typing import List, Optional, Sequence, Tuple

from relcost.core.errors import OptimizerInvariantError
from relcost.operators.base import Operator
from relcost.operators.join import Join
from relcost.operators.product import Product
from relcost.operators.project import Project
from relcost.operators.select import Select
from relcost.optimizers.base import OptimizationContext, Optimizer
from relcost.sql.ast_nodes import Predicate

logger = logging.getLogger(__name__)


def predicate_orderings(predicates: Sequence[Predicate]) -> Iterator[Tuple[Predicate, ...]]:
    """
    Lazily yield every ordering of the predicates

    An empty sequence yields a single empty ordering. Call again to restart.
    """
    return permutations(predicates)


class JoinReorderingOptimizer(Optimizer):
    """
    Pick the cheapest order to apply cross-relation predicates

    Partial plans built before the search (the pool) are shared by all
    candidates. That is sound because an operator's output depends only on
    its own subtree. Each candidate's cost is a traversal of that
    candidate's own tree.
    """

    def __init__(self, warn_predicate_count: int = 8):
        """
        Initialize optimizer

        Args:
            warn_predicate_count: Log a warning above this many predicates
        """
        super().__init__()
        self.warn_predicate_count = warn_predicate_count
        self.candidates_considered = 0

    def get_name(self) -> str:
        return "Join reordering"

    def can_optimize(self, context: OptimizationContext) -> bool:
        return bool(context.pool)

    def optimize(self, context: OptimizationContext) -> None:
        best_plan: Optional[Operator] = None
        best_cost: Optional[int] = None
        self.candidates_considered = 0

        count = len(context.pending)
        if count > self.warn_predicate_count:
            logger.warning(
                "%d cross-relation predicates: considering %d! join orderings", count, count
            )

        for ordering in predicate_orderings(context.pending):
            candidate = self.build_candidate(context, ordering)
            cost = context.estimator.estimate(candidate)
            self.candidates_considered += 1
            logger.debug("Ordering %s costs %d", list(ordering), cost)

            # Strictly cheaper only: ties keep the earliest ordering
            if best_cost is None or cost < best_cost:
                best_plan, best_cost = candidate, cost

        context.applied.extend(context.pending)
        context.pending = []
        context.result = best_plan
        context.result_cost = best_cost

        self.applied = True
        self.description = (
            f"{self.candidates_considered} ordering(s) considered, best cost {best_cost}"
        )

    def build_candidate(self, context: OptimizationContext, ordering: Sequence[Predicate]) -> Operator:
        """
        Build the plan for one predicate ordering

        Args:
            context: Optimization state holding the shared pool
            ordering: Predicates in the order to apply them

        Returns:
            Root of the candidate plan, fully estimated

        Raises:
            OptimizerInvariantError: If a predicate cannot be placed
        """
        pool: List[Operator] = list(context.pool)

        for position, predicate in enumerate(ordering):
            node = self._apply_predicate(pool, predicate)
            context.estimator.estimate(node)

            needed = context.required_names(list(ordering[position + 1:]))
            pool.append(context.project_if_narrower(node, needed))

        while len(pool) > 1:
            left = pool.pop(0)
            right = pool.pop(0)
            product = Product(left, right)
            context.estimator.estimate(product)
            pool.append(product)

        return self._restrict_to_required(context, pool[0])

    def _apply_predicate(self, pool: List[Operator], predicate: Predicate) -> Operator:
        """
        Take the partial plans a predicate needs out of the pool and combine them

        Two partial plans become a Join; a single one holding every
        attribute of the predicate gets a Select on top.
        """
        holders: List[Operator] = []
        for attr in predicate.attributes:
            holder = self._find_holder(pool, attr.name)
            if holder is None:
                raise OptimizerInvariantError(
                    f"No partial plan provides '{attr.name}' for predicate {predicate!r}"
                )
            if not any(holder is seen for seen in holders):
                holders.append(holder)

        for holder in holders:
            pool.remove(holder)

        if len(holders) == 2:
            return Join(holders[0], holders[1], predicate)
        return Select(holders[0], predicate)

    def _find_holder(self, pool: List[Operator], name: str) -> Optional[Operator]:
        for op in pool:
            if name in op.output.attribute_names():
                return op
        return None

    def _restrict_to_required(self, context: OptimizationContext, plan: Operator) -> Operator:
        """
        Project the candidate onto the attributes the input plan emits

        Partial plans no predicate or projection touched keep all their
        attributes; those must not leak into the result.
        """
        wanted = {attr.name for attr in context.required}
        if set(plan.output.attribute_names()) <= wanted:
            return plan

        restricted = Project(plan, list(context.required))
        context.estimator.estimate(restricted)
        return restricted
