"""
Plan Collection (phase 1)

Decomposes the caller's plan into the pieces the rewrite works with:
one fresh scan per base relation, the predicates of every Select and
Join, and the attributes the final result has to emit.

The caller's plan is only read. Fresh scans are looked up again in the
catalogue, so nothing estimated later is cached on the caller's nodes.
"""

import logging
from typing import Dict, List

from relcost.core.catalogue import Catalogue
from relcost.core.errors import InvalidPlanError
from relcost.core.types import Attribute
from relcost.operators.base import Operator, walk
from relcost.operators.join import Join
from relcost.operators.product import Product
from relcost.operators.project import Project
from relcost.operators.scan import Scan
from relcost.operators.select import Select
from relcost.optimizers.base import OptimizationContext, Optimizer
from relcost.sql.ast_nodes import Predicate

logger = logging.getLogger(__name__)


class PlanCollector(Optimizer):
    """
    Gather scans, predicates and required attributes from the input plan

    Required attributes are the names the input plan emits at its root.
    For a plan rooted in a Project that is the projection list; for any
    other root it is every attribute that reaches the root, so the rewrite
    never drops attributes the original returns.

    Raises (from optimize):
        RelationNotFoundError: If a scanned relation is not in the catalogue
        InvalidPlanError: If a predicate references an attribute no scan provides
    """

    def get_name(self) -> str:
        return "Plan collection"

    def can_optimize(self, context: OptimizationContext) -> bool:
        return True

    def optimize(self, context: OptimizationContext) -> None:
        scans: Dict[str, Scan] = {}
        predicates: Dict[Predicate, None] = {}

        for op in walk(context.plan):
            if isinstance(op, Scan):
                name = op.relation_name
                if name not in scans:
                    scans[name] = context.catalogue.scan(name)
            elif isinstance(op, (Select, Join)):
                # Ordered set: the same predicate twice filters nothing extra
                predicates.setdefault(op.predicate, None)

        context.scans = list(scans.values())
        context.pending = list(predicates)
        context.applied = []
        context.required = [Attribute(name) for name in context.plan.attribute_names()]

        self._validate(context)

        logger.debug(
            "Collected %d scan(s), %d predicate(s), %d required attribute(s)",
            len(context.scans),
            len(context.pending),
            len(context.required),
        )

        self.applied = True
        self.description = (
            f"{len(context.scans)} relation(s), {len(context.pending)} predicate(s)"
        )

    def _validate(self, context: OptimizationContext) -> None:
        """
        Reject predicates that no base relation can satisfy

        Doing this before the search keeps unresolvable attributes from
        surfacing deep inside join ordering.
        """
        available = set()
        for scan in context.scans:
            available.update(scan.attribute_names())

        for predicate in context.pending:
            missing = sorted(predicate.attribute_names() - available)
            if missing:
                raise InvalidPlanError(
                    f"Predicate {predicate!r} references unknown attribute(s): {', '.join(missing)}"
                )


def copy_plan(catalogue: Catalogue, plan: Operator) -> Operator:
    """
    Build a detached copy of a plan

    The copy has the same shape, fresh scans looked up in the catalogue and
    no cached outputs, so estimating it leaves the original untouched.

    Args:
        catalogue: Catalogue to look base relations up in
        plan: Plan to copy

    Returns:
        Root of the copy
    """
    if isinstance(plan, Scan):
        return catalogue.scan(plan.relation_name)

    inputs: List[Operator] = [copy_plan(catalogue, child) for child in plan.inputs]

    if isinstance(plan, Select):
        return Select(inputs[0], plan.predicate)
    elif isinstance(plan, Project):
        return Project(inputs[0], plan.attributes)
    elif isinstance(plan, Join):
        return Join(inputs[0], inputs[1], plan.predicate)
    elif isinstance(plan, Product):
        return Product(inputs[0], inputs[1])

    raise InvalidPlanError(f"Unsupported operator: {plan.__class__.__name__}")
