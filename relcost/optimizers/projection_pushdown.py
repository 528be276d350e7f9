"""
Projection Pushdown Optimizer (phase 2, projections)

Narrows each filtered base relation to the attributes something further
up still needs, so products and joins carry fewer attributes.
"""

import logging

from relcost.optimizers.base import OptimizationContext, Optimizer

logger = logging.getLogger(__name__)


class ProjectionPushdownOptimizer(Optimizer):
    """
    Project each pool entry onto the attributes still required

    Required attributes are those referenced by predicates not yet placed,
    plus those the final result emits. An entry is only projected when it
    carries attributes outside that set and shares at least one with it.
    """

    def get_name(self) -> str:
        return "Projection pushdown"

    def can_optimize(self, context: OptimizationContext) -> bool:
        return bool(context.pool)

    def optimize(self, context: OptimizationContext) -> None:
        needed = context.required_names(context.pending)
        projected = 0
        pool = []

        for op in context.pool:
            narrowed = context.project_if_narrower(op, needed)
            if narrowed is not op:
                projected += 1
                logger.debug("Projected %r onto %s", op, narrowed.output.attribute_names())
            pool.append(narrowed)

        context.pool = pool

        if projected:
            self.applied = True
            self.description = f"{projected} relation(s) narrowed"
