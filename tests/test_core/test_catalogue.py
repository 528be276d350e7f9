"""
Tests for the catalogue and catalogue loaders
"""

import json

import pytest

from relcost.core.catalogue import Catalogue
from relcost.core.errors import (
    CatalogueFormatError,
    InvalidStatisticsError,
    RelationNotFoundError,
)
from relcost.operators.scan import Scan


class TestCatalogue:
    """Test programmatic catalogue construction"""

    def test_create_and_lookup(self, catalogue):
        person = catalogue.get_relation("Person")

        assert person.name == "Person"
        assert person.tuple_count == 400
        assert person.attribute_names() == ["persid", "persname", "age"]
        assert person.get_attribute("age").value_count == 47

    def test_unknown_relation(self, catalogue):
        """get_relation raises, find returns None"""
        assert catalogue.find("Nope") is None
        with pytest.raises(RelationNotFoundError, match="Nope"):
            catalogue.get_relation("Nope")

    def test_not_found_is_key_error(self, catalogue):
        with pytest.raises(KeyError):
            catalogue.get_relation("Nope")

    def test_attribute_on_unknown_relation(self):
        cat = Catalogue()
        with pytest.raises(RelationNotFoundError):
            cat.create_attribute("Nope", "a", 1)

    def test_zero_value_count_rejected(self):
        cat = Catalogue()
        cat.create_relation("R", 10)
        with pytest.raises(InvalidStatisticsError):
            cat.create_attribute("R", "a", 0)

    def test_negative_tuple_count_rejected(self):
        with pytest.raises(InvalidStatisticsError):
            Catalogue().create_relation("R", -1)

    def test_duplicate_relation_rejected(self, catalogue):
        with pytest.raises(ValueError, match="already exists"):
            catalogue.create_relation("Person", 1)

    def test_scan(self, catalogue):
        scan = catalogue.scan("Project")

        assert isinstance(scan, Scan)
        assert scan.relation_name == "Project"
        assert scan.output is None

    def test_scan_unknown(self, catalogue):
        with pytest.raises(RelationNotFoundError):
            catalogue.scan("Nope")

    def test_container_protocol(self, catalogue):
        assert "Person" in catalogue
        assert len(catalogue) == 3
        assert [r.name for r in catalogue] == ["Person", "Project", "Department"]


class TestTextFormat:
    """Test the line-oriented catalogue format"""

    def test_parse(self, catalogue_text):
        cat = Catalogue.from_text(catalogue_text)

        assert len(cat) == 3
        project = cat.get_relation("Project")
        assert project.tuple_count == 40
        assert project.get_attribute("dept").value_count == 5

    def test_relation_without_attributes(self):
        cat = Catalogue.from_text("Empty:0")
        assert cat.get_relation("Empty").attributes == ()

    def test_bad_count(self):
        with pytest.raises(CatalogueFormatError, match="Line 1"):
            Catalogue.from_text("R:many:a,1")

    def test_bad_attribute(self):
        with pytest.raises(CatalogueFormatError, match="attr,values"):
            Catalogue.from_text("R:10:a")

    def test_missing_count(self):
        with pytest.raises(CatalogueFormatError):
            Catalogue.from_text("R")

    def test_duplicate_relation(self):
        with pytest.raises(CatalogueFormatError, match="defined twice"):
            Catalogue.from_text("R:1:a,1\nR:2:a,1")


class TestJSONFormat:
    """Test JSON catalogues"""

    def test_from_dict(self):
        cat = Catalogue.from_dict({"R": {"tuples": 10, "attributes": {"a": 5, "b": 2}}})

        relation = cat.get_relation("R")
        assert relation.tuple_count == 10
        assert relation.attribute_names() == ["a", "b"]

    def test_missing_tuples(self):
        with pytest.raises(CatalogueFormatError, match="Malformed"):
            Catalogue.from_dict({"R": {"attributes": {}}})

    def test_not_an_object(self):
        with pytest.raises(CatalogueFormatError):
            Catalogue.from_dict([1, 2])


class TestFromFile:
    """Test loading catalogue files"""

    def test_text_file(self, tmp_path, catalogue_text):
        path = tmp_path / "catalogue.txt"
        path.write_text(catalogue_text)

        cat = Catalogue.from_file(path)
        assert "Department" in cat

    def test_json_file(self, tmp_path):
        path = tmp_path / "catalogue.json"
        path.write_text(json.dumps({"R": {"tuples": 3, "attributes": {"x": 3}}}))

        cat = Catalogue.from_file(str(path))
        assert cat.get_relation("R").tuple_count == 3

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "catalogue.json"
        path.write_text("{not json")

        with pytest.raises(CatalogueFormatError, match="Invalid JSON"):
            Catalogue.from_file(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            Catalogue.from_file(tmp_path / "missing.txt")
