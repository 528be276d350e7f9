"""
Join operator - equi-join of two inputs on attr1 = attr2
"""

from relcost.operators.base import Operator, BinaryOperator
from relcost.sql.ast_nodes import JoinPredicate


class Join(BinaryOperator):
    """
    Join operator for equi-joins

    Logically a Product followed by a Select on the join predicate. Either
    predicate attribute may come from either input.
    """

    def __init__(self, left: Operator, right: Operator, predicate: JoinPredicate):
        """
        Initialize join operator

        Args:
            left: Left input
            right: Right input
            predicate: Join condition attr1 = attr2
        """
        super().__init__(left, right)
        self.predicate = predicate

    def __repr__(self) -> str:
        return f"Join({self.predicate!r})"
