"""
Select operator - implements one WHERE condition

Keeps the rows of its child that satisfy a single predicate.
"""

from relcost.operators.base import Operator, UnaryOperator
from relcost.sql.ast_nodes import Predicate


class Select(UnaryOperator):
    """
    Select operator - filters its child by one predicate

    Several conditions on the same input are expressed as a chain of
    Select operators.
    """

    def __init__(self, child: Operator, predicate: Predicate):
        """
        Initialize select operator

        Args:
            child: Child operator to filter
            predicate: attr = value or attr = attr
        """
        super().__init__(child)
        self.predicate = predicate

    def attribute_names(self) -> list[str]:
        return self.child.attribute_names()

    def __repr__(self) -> str:
        return f"Select({self.predicate!r})"
