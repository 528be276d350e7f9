"""
Scan operator - reads a base relation

This is a leaf operator (has no inputs).
"""

from relcost.core.types import NamedRelation
from relcost.operators.base import Operator


class Scan(Operator):
    """
    Scan operator - leaf of every plan

    Holds the catalogue's NamedRelation for the scanned table. Build scans
    through Catalogue.scan() so that unknown names fail early.
    """

    def __init__(self, relation: NamedRelation):
        """
        Initialize scan operator

        Args:
            relation: Base relation to scan
        """
        super().__init__()
        self.relation = relation

    @property
    def relation_name(self) -> str:
        return self.relation.name

    def attribute_names(self) -> list[str]:
        return self.relation.attribute_names()

    def __repr__(self) -> str:
        return f"Scan({self.relation.name})"
