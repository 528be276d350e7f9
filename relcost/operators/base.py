"""
Base operator class for logical query plans

A plan is a tree of operators. Each operator owns its inputs and a
write-once output slot that the Estimator fills with the operator's
estimated output Relation. No tuples ever flow through the tree.
"""

from collections.abc import Callable, Iterator
from typing import Optional, TypeVar

from relcost.core.errors import OutputAlreadySetError
from relcost.core.types import Relation

T = TypeVar("T")


class Operator:
    """
    Base class for all plan operators

    Operators form a tree where:
    - Leaf operators (Scan) read a base relation
    - Unary operators (Select, Project) have a single child
    - Binary operators (Product, Join) have a left and a right input

    The output slot starts empty and may be set exactly once.
    """

    def __init__(self, *inputs: "Operator"):
        """
        Initialize operator

        Args:
            inputs: Input operators, in order (none for leaf operators)
        """
        self.inputs: tuple["Operator", ...] = inputs
        self._output: Optional[Relation] = None

    @property
    def output(self) -> Optional[Relation]:
        """Estimated output relation, or None if not yet estimated"""
        return self._output

    def set_output(self, relation: Relation) -> None:
        """
        Store the estimated output

        Raises:
            OutputAlreadySetError: If the output was already set
        """
        if self._output is not None:
            raise OutputAlreadySetError(f"Output of {self!r} is already set")
        self._output = relation

    def attribute_names(self) -> list[str]:
        """
        Names of the attributes this operator emits, in order

        Derived from the schema alone, without estimating anything.
        """
        raise NotImplementedError(f"{self.__class__.__name__} must implement attribute_names()")

    def __repr__(self) -> str:
        """String representation for debugging"""
        return f"{self.__class__.__name__}()"


class UnaryOperator(Operator):
    """Operator with exactly one input"""

    def __init__(self, child: Operator):
        super().__init__(child)

    @property
    def child(self) -> Operator:
        return self.inputs[0]


class BinaryOperator(Operator):
    """Operator with a left and a right input"""

    def __init__(self, left: Operator, right: Operator):
        super().__init__(left, right)

    @property
    def left(self) -> Operator:
        return self.inputs[0]

    @property
    def right(self) -> Operator:
        return self.inputs[1]

    def attribute_names(self) -> list[str]:
        return self.left.attribute_names() + self.right.attribute_names()


def walk(plan: Operator) -> Iterator[Operator]:
    """
    Yield every operator of a plan in post-order (inputs before parents)

    Args:
        plan: Root operator

    Yields:
        Operators, leaves first
    """
    for child in plan.inputs:
        yield from walk(child)
    yield plan


def fold(plan: Operator, fn: Callable[[Operator, list[T]], T]) -> T:
    """
    Bottom-up fold over a plan

    Args:
        plan: Root operator
        fn: Called with each operator and the folded results of its inputs

    Returns:
        The result of fn at the root
    """
    return fn(plan, [fold(child, fn) for child in plan.inputs])
