"""
Catalogue of base relation statistics

The catalogue maps relation names to NamedRelations. It is built either
programmatically (create_relation / create_attribute) or loaded from a
catalogue file in one of two formats:

Text, one relation per line:
    Person:400:persid,400:persname,350:age,47
    # comments and blank lines are ignored

JSON:
    {"Person": {"tuples": 400, "attributes": {"persid": 400, "age": 47}}}
"""

import json
import logging
from pathlib import Path
from typing import Dict, Iterator, Optional, Union

from relcost.core.errors import (
    CatalogueFormatError,
    InvalidStatisticsError,
    RelationNotFoundError,
)
from relcost.core.types import Attribute, NamedRelation

logger = logging.getLogger(__name__)


class Catalogue:
    """
    Read-only (from the optimiser's point of view) store of base relations

    Example:
        ```python
        cat = Catalogue()
        cat.create_relation("Person", 400)
        cat.create_attribute("Person", "persid", 400)
        scan = cat.scan("Person")
        ```
    """

    def __init__(self):
        self._relations: Dict[str, NamedRelation] = {}

    def create_relation(self, name: str, tuple_count: int) -> NamedRelation:
        """
        Register a new base relation with no attributes

        Raises:
            InvalidStatisticsError: If tuple_count is negative
            ValueError: If a relation with this name already exists
        """
        if tuple_count < 0:
            raise InvalidStatisticsError(
                f"Tuple count of relation '{name}' must be non-negative, got {tuple_count}"
            )
        if name in self._relations:
            raise ValueError(f"Relation already exists in catalogue: {name}")

        relation = NamedRelation(tuple_count=tuple_count, attributes=(), name=name)
        self._relations[name] = relation
        return relation

    def create_attribute(self, relation_name: str, attribute_name: str, value_count: int) -> Attribute:
        """
        Add an attribute to a registered relation

        Raises:
            RelationNotFoundError: If the relation is unknown
            InvalidStatisticsError: If value_count is below 1
        """
        relation = self.get_relation(relation_name)
        if value_count < 1:
            raise InvalidStatisticsError(
                f"Value count of attribute '{attribute_name}' must be at least 1, got {value_count}"
            )

        attribute = Attribute(attribute_name, value_count)
        self._relations[relation_name] = NamedRelation(
            tuple_count=relation.tuple_count,
            attributes=relation.attributes + (attribute,),
            name=relation_name,
        )
        return attribute

    def find(self, name: str) -> Optional[NamedRelation]:
        """Return the relation called name, or None if there is none"""
        return self._relations.get(name)

    def get_relation(self, name: str) -> NamedRelation:
        """
        Return the relation called name

        Raises:
            RelationNotFoundError: If the catalogue has no such relation
        """
        relation = self.find(name)
        if relation is None:
            raise RelationNotFoundError(name)
        return relation

    def scan(self, name: str):
        """Build a fresh Scan of the named relation"""
        # Imported here: operators depend on core.types, not the other way round
        from relcost.operators.scan import Scan

        return Scan(self.get_relation(name))

    def __contains__(self, name: str) -> bool:
        return name in self._relations

    def __iter__(self) -> Iterator[NamedRelation]:
        return iter(self._relations.values())

    def __len__(self) -> int:
        return len(self._relations)

    def __repr__(self) -> str:
        return f"Catalogue({', '.join(self._relations)})"

    @classmethod
    def from_text(cls, text: str) -> "Catalogue":
        """
        Parse a catalogue in the line-oriented text format

        Args:
            text: Catalogue file contents

        Returns:
            Populated catalogue

        Raises:
            CatalogueFormatError: If a line is malformed
        """
        catalogue = cls()

        for lineno, raw_line in enumerate(text.splitlines(), start=1):
            line = raw_line.strip()
            if not line or line.startswith("#"):
                continue

            parts = line.split(":")
            if len(parts) < 2:
                raise CatalogueFormatError(
                    f"Line {lineno}: expected 'Name:tuples[:attr,values...]', got '{line}'"
                )

            name = parts[0].strip()
            if name in catalogue:
                raise CatalogueFormatError(f"Line {lineno}: relation '{name}' defined twice")
            tuple_count = _parse_count(parts[1], lineno)
            catalogue.create_relation(name, tuple_count)

            for field in parts[2:]:
                attr_parts = field.split(",")
                if len(attr_parts) != 2:
                    raise CatalogueFormatError(
                        f"Line {lineno}: expected 'attr,values', got '{field}'"
                    )
                catalogue.create_attribute(
                    name, attr_parts[0].strip(), _parse_count(attr_parts[1], lineno)
                )

        logger.debug("Loaded %d relation(s) from text catalogue", len(catalogue))
        return catalogue

    @classmethod
    def from_dict(cls, data: dict) -> "Catalogue":
        """
        Build a catalogue from the JSON document structure

        Raises:
            CatalogueFormatError: If the structure is not as expected
        """
        if not isinstance(data, dict):
            raise CatalogueFormatError("Catalogue document must be an object of relations")

        catalogue = cls()
        for name, entry in data.items():
            try:
                tuple_count = entry["tuples"]
                attributes = entry.get("attributes", {})
            except (TypeError, KeyError, AttributeError) as e:
                raise CatalogueFormatError(f"Malformed entry for relation '{name}': {e}") from e

            if not isinstance(tuple_count, int):
                raise CatalogueFormatError(f"Tuple count of '{name}' must be an integer")

            catalogue.create_relation(name, tuple_count)
            for attr_name, value_count in attributes.items():
                if not isinstance(value_count, int):
                    raise CatalogueFormatError(
                        f"Value count of '{name}.{attr_name}' must be an integer"
                    )
                catalogue.create_attribute(name, attr_name, value_count)

        logger.debug("Loaded %d relation(s) from JSON catalogue", len(catalogue))
        return catalogue

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "Catalogue":
        """
        Load a catalogue file, choosing the format by extension

        Files ending in .json are read as JSON, anything else as text.

        Raises:
            FileNotFoundError: If the file does not exist
            CatalogueFormatError: If the contents are malformed
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Catalogue file not found: {path}")

        text = path.read_text()
        if path.suffix.lower() == ".json":
            try:
                data = json.loads(text)
            except json.JSONDecodeError as e:
                raise CatalogueFormatError(f"Invalid JSON in {path}: {e}") from e
            return cls.from_dict(data)

        return cls.from_text(text)


def _parse_count(token: str, lineno: int) -> int:
    try:
        return int(token.strip())
    except ValueError as e:
        raise CatalogueFormatError(f"Line {lineno}: expected an integer, got '{token}'") from e
