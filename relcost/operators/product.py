"""
Product operator - cartesian product of two inputs
"""

from relcost.operators.base import BinaryOperator


class Product(BinaryOperator):
    """
    Product operator - every left row paired with every right row

    Attribute names are globally unique across a plan, so the output is
    simply the left attributes followed by the right ones.
    """

    def __repr__(self) -> str:
        return "Product"
