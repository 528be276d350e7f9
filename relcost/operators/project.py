"""
Project operator - implements SELECT attribute list

Restricts its child's output to the listed attributes.
"""

from typing import List

from relcost.core.types import Attribute
from relcost.operators.base import Operator, UnaryOperator


class Project(UnaryOperator):
    """
    Project operator - keeps only the requested attributes

    The output keeps the child's attribute order, not the order of the
    attribute list. Requested attributes the child lacks are ignored.
    """

    def __init__(self, child: Operator, attributes: List[Attribute]):
        """
        Initialize project operator

        Args:
            child: Child operator to project
            attributes: Attributes to keep
        """
        super().__init__(child)
        self.attributes = list(attributes)

    def attribute_names(self) -> list[str]:
        wanted = {attr.name for attr in self.attributes}
        return [name for name in self.child.attribute_names() if name in wanted]

    def __repr__(self) -> str:
        attr_str = ", ".join(attr.name for attr in self.attributes)
        return f"Project({attr_str})"
