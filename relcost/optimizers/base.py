"""
Base classes for plan optimizers

Optimization runs as a pipeline of rules over a shared context. Each rule
implements one phase of the rewrite: collecting the plan's pieces, pushing
selections and projections down, and searching join orders.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Optional

from relcost.core.catalogue import Catalogue
from relcost.core.types import Attribute
from relcost.operators.base import Operator
from relcost.operators.project import Project
from relcost.optimizers.estimator import Estimator
from relcost.sql.ast_nodes import Predicate


@dataclass
class OptimizationContext:
    """
    State shared by the rules of one optimization run

    Attributes:
        catalogue: Source of base relation statistics
        plan: The caller's plan (never modified)
        estimator: Estimator used as the cost oracle
        scans: Fresh scans, one per distinct base relation
        pending: Predicates not yet placed in the new plan
        applied: Predicates already placed
        required: Attributes the final result must emit, in order
        pool: Partial plans awaiting combination
        result: Final plan, set by the last phase
        result_cost: Estimated cost of result
    """

    catalogue: Catalogue
    plan: Operator
    estimator: Estimator = field(default_factory=Estimator)
    scans: List[Operator] = field(default_factory=list)
    pending: List[Predicate] = field(default_factory=list)
    applied: List[Predicate] = field(default_factory=list)
    required: List[Attribute] = field(default_factory=list)
    pool: List[Operator] = field(default_factory=list)
    result: Optional[Operator] = None
    result_cost: Optional[int] = None

    def required_names(self, predicates: List[Predicate]) -> set[str]:
        """Attributes still needed downstream, given the predicates left to apply"""
        needed = {attr.name for attr in self.required}
        for predicate in predicates:
            needed |= predicate.attribute_names()
        return needed

    def project_if_narrower(self, op: Operator, needed: set[str]) -> Operator:
        """
        Wrap op in a Project restricted to the needed attributes

        A Project is only added when op emits attributes outside needed and
        at least one of its attributes is needed; otherwise op is returned
        unchanged. The wrapped operator is estimated before returning.
        """
        if op.output is None:
            self.estimator.estimate(op)

        available = op.output.attributes
        keep = [attr for attr in available if attr.name in needed]
        if not keep or len(keep) == len(available):
            return op

        projected = Project(op, [Attribute(attr.name) for attr in keep])
        self.estimator.estimate(projected)
        return projected


class Optimizer(ABC):
    """
    One phase of the rewrite

    A rule reads and advances the shared OptimizationContext. After a run,
    ``applied`` and ``description`` say whether the rule changed anything
    and how, for the planner's summary.
    """

    def __init__(self):
        self.applied = False
        self.description = ""

    @abstractmethod
    def can_optimize(self, context: OptimizationContext) -> bool:
        """Whether the context holds anything for this rule to work on"""
        pass

    @abstractmethod
    def optimize(self, context: OptimizationContext) -> None:
        """
        Run the rule against the context

        Implementations set ``applied`` and ``description`` when they
        change the plan under construction.
        """
        pass

    @abstractmethod
    def get_name(self) -> str:
        """Human-readable rule name, used in summaries"""
        pass

    def reset(self) -> None:
        """Forget the outcome of a previous run"""
        self.applied = False
        self.description = ""

    def get_description(self) -> str:
        """What the last run did, or an empty string if it did nothing"""
        return self.description if self.applied else ""

    def was_applied(self) -> bool:
        return self.applied


class OptimizerPipeline:
    """
    Ordered list of rules run over one context

    Later rules see the context as the earlier ones left it, so order
    matters: collection first, join ordering last.
    """

    def __init__(self, optimizers: List[Optimizer]):
        self.optimizers = optimizers

    def optimize(self, context: OptimizationContext) -> None:
        """Reset every rule, then run those that have work to do"""
        for optimizer in self.optimizers:
            optimizer.reset()
            if optimizer.can_optimize(context):
                optimizer.optimize(context)

    def get_applied_optimizations(self) -> List[str]:
        """'<name>: <description>' for each rule that changed something"""
        return [
            f"{opt.get_name()}: {opt.get_description()}"
            for opt in self.optimizers
            if opt.was_applied()
        ]

    def get_summary(self) -> str:
        """
        Multi-line report of the last run

        Example:
            Optimizations applied:
              - Plan collection: 2 relation(s), 2 predicate(s)
              - Join reordering: 1 ordering(s) considered, best cost 872
        """
        applied = self.get_applied_optimizations()
        if not applied:
            return "No optimizations applied"

        lines = ["Optimizations applied:"]
        lines.extend(f"  - {entry}" for entry in applied)
        return "\n".join(lines)
