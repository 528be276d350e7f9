"""
Tests for attribute and relation value types
"""

import pytest

from relcost.core.errors import InvalidPlanError
from relcost.core.types import Attribute, NamedRelation, Relation


class TestAttribute:
    """Test attribute identity"""

    def test_equal_by_name_only(self):
        """Value counts do not take part in equality"""
        assert Attribute("age", 47) == Attribute("age", 1)
        assert Attribute("age", 47) != Attribute("persid", 47)

    def test_hash_by_name_only(self):
        """Attributes with different value counts collapse in a set"""
        attrs = {Attribute("age", 47), Attribute("age", 1), Attribute("persid", 400)}
        assert len(attrs) == 2

    def test_with_value_count(self):
        """Copy keeps the name and replaces the value count"""
        attr = Attribute("age", 47)
        copy = attr.with_value_count(1)

        assert copy.name == "age"
        assert copy.value_count == 1
        assert attr.value_count == 47

    def test_immutable(self):
        """Attributes cannot be modified in place"""
        attr = Attribute("age", 47)
        with pytest.raises(AttributeError):
            attr.value_count = 3


class TestRelation:
    """Test relation lookups"""

    def test_attribute_names_in_order(self):
        relation = Relation(10, [Attribute("b", 2), Attribute("a", 5)])
        assert relation.attribute_names() == ["b", "a"]

    def test_get_attribute_by_name_or_attribute(self):
        relation = Relation(10, [Attribute("a", 5)])

        assert relation.get_attribute("a").value_count == 5
        assert relation.get_attribute(Attribute("a")).value_count == 5
        assert relation.has_attribute("a")
        assert not relation.has_attribute("z")

    def test_get_missing_attribute(self):
        relation = Relation(10, [Attribute("a", 5)])

        assert relation.find_attribute("z") is None
        with pytest.raises(InvalidPlanError, match="'z' not found"):
            relation.get_attribute("z")

    def test_duplicate_names_rejected(self):
        with pytest.raises(InvalidPlanError, match="Duplicate"):
            Relation(10, [Attribute("a", 5), Attribute("a", 3)])

    def test_replace_value_counts(self):
        relation = Relation(10, [Attribute("a", 5), Attribute("b", 7)])
        updated = relation.replace_value_counts({"a": 1}, 2)

        assert updated.tuple_count == 2
        assert updated.get_attribute("a").value_count == 1
        assert updated.get_attribute("b").value_count == 7
        # Original untouched
        assert relation.get_attribute("a").value_count == 5

    def test_named_relation(self):
        relation = NamedRelation(tuple_count=3, attributes=[Attribute("x", 3)], name="R")

        assert str(relation) == "R"
        assert relation.attribute_names() == ["x"]
