"""Value types describing schemas and statistics.

Relations and attributes are immutable. Attributes compare by name only,
because the same logical attribute carries a different value count at
different points of a plan.
"""

from dataclasses import dataclass, field
from typing import Optional, Union

from relcost.core.errors import InvalidPlanError


@dataclass(frozen=True, eq=False)
class Attribute:
    """A named attribute and its number of distinct values.

    ``value_count`` is only meaningful for attributes owned by a relation.
    Attributes referenced from predicates or projections leave it at 0.
    """

    name: str
    value_count: int = 0

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Attribute):
            return self.name == other.name
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.name)

    def with_value_count(self, value_count: int) -> "Attribute":
        """Copy of this attribute carrying a different value count."""
        return Attribute(self.name, value_count)

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"Attribute({self.name!r}, {self.value_count})"


AttributeRef = Union[Attribute, str]


def attribute_name(attr: AttributeRef) -> str:
    """Name of an attribute given either an Attribute or a bare name."""
    return attr.name if isinstance(attr, Attribute) else attr


@dataclass(frozen=True)
class Relation:
    """Schema and cardinality of a base relation or an operator output."""

    tuple_count: int
    attributes: tuple[Attribute, ...] = field(default_factory=tuple)

    def __post_init__(self):
        # Accept any iterable for convenience, store a tuple
        object.__setattr__(self, "attributes", tuple(self.attributes))
        names = [attr.name for attr in self.attributes]
        if len(names) != len(set(names)):
            raise InvalidPlanError(f"Duplicate attribute names in relation: {names}")

    def attribute_names(self) -> list[str]:
        return [attr.name for attr in self.attributes]

    def has_attribute(self, attr: AttributeRef) -> bool:
        name = attribute_name(attr)
        return any(a.name == name for a in self.attributes)

    def find_attribute(self, attr: AttributeRef) -> Optional[Attribute]:
        name = attribute_name(attr)
        for candidate in self.attributes:
            if candidate.name == name:
                return candidate
        return None

    def get_attribute(self, attr: AttributeRef) -> Attribute:
        """
        Look up an attribute of this relation by name

        Raises:
            InvalidPlanError: If the relation has no such attribute
        """
        found = self.find_attribute(attr)
        if found is None:
            raise InvalidPlanError(
                f"Attribute '{attribute_name(attr)}' not found in relation "
                f"with attributes {self.attribute_names()}"
            )
        return found

    def replace_value_counts(self, counts: dict[str, int], tuple_count: int) -> "Relation":
        """Copy with a new tuple count and some attributes' value counts replaced."""
        return Relation(
            tuple_count,
            [
                attr.with_value_count(counts[attr.name]) if attr.name in counts else attr
                for attr in self.attributes
            ],
        )


@dataclass(frozen=True)
class NamedRelation(Relation):
    """A base relation as stored in the catalogue."""

    name: str = ""

    def __str__(self) -> str:
        return self.name

