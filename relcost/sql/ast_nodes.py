"""
Predicate and query statement definitions

Predicates come in exactly two shapes:
    attr = "value"   (EqualityPredicate)
    attr1 = attr2    (JoinPredicate)

They reference attributes by name only and never point at a relation.
"""

from dataclasses import dataclass
from typing import Optional

from relcost.core.types import Attribute


class Predicate:
    """Common interface of the two predicate shapes"""

    @property
    def attributes(self) -> tuple[Attribute, ...]:
        raise NotImplementedError(f"{self.__class__.__name__} must implement attributes")

    @property
    def equals_value(self) -> bool:
        raise NotImplementedError(f"{self.__class__.__name__} must implement equals_value")

    def attribute_names(self) -> set[str]:
        return {attr.name for attr in self.attributes}


@dataclass(frozen=True)
class EqualityPredicate(Predicate):
    """attr = value"""

    attribute: Attribute
    value: str

    @property
    def attributes(self) -> tuple[Attribute, ...]:
        return (self.attribute,)

    @property
    def equals_value(self) -> bool:
        return True

    def __repr__(self) -> str:
        return f'{self.attribute.name}="{self.value}"'


@dataclass(frozen=True)
class JoinPredicate(Predicate):
    """attr1 = attr2"""

    left: Attribute
    right: Attribute

    @property
    def attributes(self) -> tuple[Attribute, ...]:
        return (self.left, self.right)

    @property
    def equals_value(self) -> bool:
        return False

    def __repr__(self) -> str:
        return f"{self.left.name}={self.right.name}"


@dataclass
class SelectStatement:
    """
    A parsed query

    Examples:
        SELECT * FROM Person
        SELECT persname FROM Person, Project WHERE persid = manager
        SELECT projid FROM Project WHERE dept = "Research"
    """

    attributes: Optional[list[Attribute]]  # None for SELECT *
    relations: list[str]
    predicates: list[Predicate]

    def __repr__(self) -> str:
        cols = "*" if self.attributes is None else ", ".join(a.name for a in self.attributes)
        parts = [f"SELECT {cols}", f"FROM {', '.join(self.relations)}"]
        if self.predicates:
            parts.append("WHERE " + " AND ".join(repr(p) for p in self.predicates))
        return " ".join(parts)
