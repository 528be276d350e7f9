"""
Cost Estimator

Propagates statistics bottom-up through a plan and totals its cost.

For every operator the estimator computes the output Relation (tuple
count plus per-attribute value counts) from its inputs' outputs:

    Scan(R)              T = T(R)
    Project(c, A)        T = T(c)
    Select(c, a=v)       T = ceil(T(c) / V(a))              V(a) = 1
    Select(c, a=b)       T = ceil(T(c) / max(V(a), V(b)))   V(a) = V(b) = min
    Product(L, R)        T = T(L) * T(R)
    Join(L, R, a=b)      T = ceil(T(L) * T(R) / max(V(a), V(b)))   V(a) = V(b) = min

The cost of a plan is the sum of the output tuple counts of all its
operators.
"""

import logging

from relcost.core.errors import InvalidPlanError, InvalidStatisticsError
from relcost.core.types import Attribute, Relation
from relcost.operators.base import Operator, walk
from relcost.operators.join import Join
from relcost.operators.product import Product
from relcost.operators.project import Project
from relcost.operators.scan import Scan
from relcost.operators.select import Select

logger = logging.getLogger(__name__)


def ceil_div(numerator: int, denominator: int) -> int:
    """Integer division rounding towards positive infinity"""
    if denominator == 0:
        raise InvalidStatisticsError("Value count of 0 in a selectivity formula")
    return -(-numerator // denominator)


class Estimator:
    """
    Statistics-propagating cost estimator

    Outputs are cached on the operators themselves. An operator whose
    output is already set is not recomputed, but its tuple count still
    counts towards the cost of every plan it is part of.

    Example:
        ```python
        estimator = Estimator()
        cost = estimator.estimate(plan)
        print(plan.output.tuple_count, cost)
        ```
    """

    def estimate(self, plan: Operator) -> int:
        """
        Estimate every operator of a plan and return its total cost

        Args:
            plan: Root operator

        Returns:
            Sum of the output tuple counts of all operators in the plan

        Raises:
            InvalidPlanError: If an operator references a missing attribute
            InvalidStatisticsError: If a formula would divide by zero
        """
        cost = 0
        for op in walk(plan):
            if op.output is None:
                op.set_output(self.visit(op))
            cost += op.output.tuple_count
        return cost

    def visit(self, op: Operator) -> Relation:
        """
        Compute the output of a single operator

        The inputs of op must already have their outputs set.

        Args:
            op: Operator to estimate

        Returns:
            Estimated output relation
        """
        for child in op.inputs:
            if child.output is None:
                raise InvalidPlanError(f"Input of {op!r} has not been estimated")

        if isinstance(op, Scan):
            return self._visit_scan(op)
        elif isinstance(op, Project):
            return self._visit_project(op)
        elif isinstance(op, Select):
            return self._visit_select(op)
        elif isinstance(op, Join):
            return self._visit_join(op)
        elif isinstance(op, Product):
            return self._visit_product(op)

        raise InvalidPlanError(f"Unsupported operator: {op.__class__.__name__}")

    def _visit_scan(self, op: Scan) -> Relation:
        relation = op.relation
        return Relation(relation.tuple_count, relation.attributes)

    def _visit_project(self, op: Project) -> Relation:
        source = op.child.output
        wanted = {attr.name for attr in op.attributes}
        return Relation(
            source.tuple_count,
            [attr for attr in source.attributes if attr.name in wanted],
        )

    def _visit_select(self, op: Select) -> Relation:
        source = op.child.output
        predicate = op.predicate

        if predicate.equals_value:
            attr = source.get_attribute(predicate.attribute)
            tuple_count = ceil_div(source.tuple_count, _checked(attr))
            return source.replace_value_counts({attr.name: 1}, tuple_count)

        left = source.get_attribute(predicate.left)
        right = source.get_attribute(predicate.right)
        tuple_count = ceil_div(source.tuple_count, max(_checked(left), _checked(right)))
        shared = min(left.value_count, right.value_count)
        return source.replace_value_counts({left.name: shared, right.name: shared}, tuple_count)

    def _visit_product(self, op: Product) -> Relation:
        left, right = op.left.output, op.right.output
        return Relation(
            left.tuple_count * right.tuple_count,
            left.attributes + right.attributes,
        )

    def _visit_join(self, op: Join) -> Relation:
        left, right = op.left.output, op.right.output
        predicate = op.predicate

        first = _resolve(predicate.left, left, right)
        second = _resolve(predicate.right, left, right)

        tuple_count = ceil_div(
            left.tuple_count * right.tuple_count,
            max(_checked(first), _checked(second)),
        )
        shared = min(first.value_count, second.value_count)
        combined = Relation(0, left.attributes + right.attributes)
        return combined.replace_value_counts({first.name: shared, second.name: shared}, tuple_count)


def _resolve(attr: Attribute, left: Relation, right: Relation) -> Attribute:
    # Join predicates are not oriented: either side may hold either attribute
    found = left.find_attribute(attr) or right.find_attribute(attr)
    if found is None:
        raise InvalidPlanError(f"Join attribute '{attr.name}' not found in either input")
    return found


def _checked(attr: Attribute) -> int:
    if attr.value_count < 1:
        raise InvalidStatisticsError(
            f"Attribute '{attr.name}' has value count {attr.value_count}; must be at least 1"
        )
    return attr.value_count


def estimate(plan: Operator) -> int:
    """
    Convenience function to estimate the cost of a plan

    Args:
        plan: Root operator

    Returns:
        Total estimated cost
    """
    return Estimator().estimate(plan)
