"""
Predicate Pushdown Optimizer (phase 2, selections)

Places every predicate that a single base relation can evaluate directly
above that relation's scan, so filtering happens before any product or
join multiplies the row count.
"""

import logging
from typing import Optional

from relcost.operators.base import Operator
from relcost.operators.select import Select
from relcost.optimizers.base import OptimizationContext, Optimizer
from relcost.sql.ast_nodes import Predicate

logger = logging.getLogger(__name__)


class PredicatePushdownOptimizer(Optimizer):
    """
    Push predicates down to the scans

    For each scan this is a fixed point: find a pending predicate whose
    attributes the current operator emits, wrap the operator in a Select,
    and search again against the filtered output until nothing applies.
    Several predicates on the same relation therefore all end up at its
    leaf.

    Example:
        SELECT * FROM Person, Project WHERE age = "30" AND persid = manager

        Before: Select(age="30") over Select(persid=manager) over Product
        After:  Select(age="30") over Scan(Person), joined later with Project
    """

    def get_name(self) -> str:
        return "Predicate pushdown"

    def can_optimize(self, context: OptimizationContext) -> bool:
        return bool(context.scans)

    def optimize(self, context: OptimizationContext) -> None:
        pushed = 0
        pool = []

        for scan in context.scans:
            current: Operator = scan
            context.estimator.estimate(current)

            while True:
                predicate = self._find_applicable(current, context.pending)
                if predicate is None:
                    break

                current = Select(current, predicate)
                context.estimator.estimate(current)
                context.pending.remove(predicate)
                context.applied.append(predicate)
                pushed += 1
                logger.debug("Pushed %r down to %r", predicate, scan)

            pool.append(current)

        context.pool = pool

        if pushed:
            self.applied = True
            self.description = f"{pushed} predicate(s)"

    def _find_applicable(self, op: Operator, pending: list[Predicate]) -> Optional[Predicate]:
        """
        First pending predicate that op's output can evaluate on its own

        Args:
            op: Estimated operator
            pending: Predicates not yet placed

        Returns:
            The predicate, or None if none applies
        """
        available = set(op.output.attribute_names())
        for predicate in pending:
            if predicate.attribute_names() <= available:
                return predicate
        return None
