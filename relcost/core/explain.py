"""
Plan explanation - human-readable operator trees with estimated statistics
"""

from typing import Any, Dict

from relcost.operators.base import Operator
from relcost.optimizers.estimator import Estimator


def format_plan(operator: Operator, indent: int = 0, stats: bool = False) -> str:
    """
    Format operator tree as string

    Args:
        operator: Root operator
        indent: Current indentation level
        stats: Append the estimated output of each operator

    Returns:
        Formatted string representation

    Example output:
        Project(persname)  [T=20]
          Join(persid=manager)  [T=20]
            Scan(Person)  [T=400]
            Scan(Project)  [T=40]
    """
    lines = []
    prefix = "  " * indent

    line = f"{prefix}{operator!r}"
    if stats and operator.output is not None:
        line += f"  [T={operator.output.tuple_count}]"
    lines.append(line)

    for child in operator.inputs:
        lines.append(format_plan(child, indent + 1, stats))

    return "\n".join(lines)


def explain(plan: Operator, estimator: Estimator = None) -> str:
    """
    Estimate a plan and describe it

    Args:
        plan: Root operator
        estimator: Estimator to use (a new one by default)

    Returns:
        Plan tree with cardinalities, the root's attribute statistics and
        the total estimated cost
    """
    estimator = estimator or Estimator()
    cost = estimator.estimate(plan)

    output = ["Query Plan:", "=" * 40]
    output.append(format_plan(plan, stats=True))
    output.append("")
    attrs = ", ".join(f"{a.name}(V={a.value_count})" for a in plan.output.attributes)
    output.append(f"Output attributes: {attrs or '(none)'}")
    output.append(f"Estimated cost: {cost}")

    return "\n".join(output)


def plan_to_dict(plan: Operator) -> Dict[str, Any]:
    """
    Convert an estimated plan to a JSON-serialisable dictionary

    Args:
        plan: Root operator, already estimated

    Returns:
        Nested dictionary with operator, tuple count, attributes and inputs
    """
    node: Dict[str, Any] = {"operator": repr(plan)}
    if plan.output is not None:
        node["tuples"] = plan.output.tuple_count
        node["attributes"] = {a.name: a.value_count for a in plan.output.attributes}
    if plan.inputs:
        node["inputs"] = [plan_to_dict(child) for child in plan.inputs]
    return node
