"""
Tests for canonical plan construction
"""

import pytest

from relcost.core.errors import RelationNotFoundError
from relcost.operators.base import walk
from relcost.operators.product import Product
from relcost.operators.project import Project
from relcost.operators.scan import Scan
from relcost.sql.builder import build_plan, plan_query
from relcost.sql.parser import parse


class TestBuildPlan:
    """Test the canonical operator tree of a query"""

    def test_single_scan(self, catalogue):
        plan = plan_query(catalogue, "SELECT * FROM Person")

        assert isinstance(plan, Scan)
        assert plan.relation_name == "Person"

    def test_left_deep_products(self, catalogue):
        plan = plan_query(catalogue, "SELECT * FROM Person, Project, Department")

        assert isinstance(plan, Product)
        assert isinstance(plan.left, Product)
        assert repr(plan.right) == "Scan(Department)"
        assert [repr(op) for op in (plan.left.left, plan.left.right)] == [
            "Scan(Person)",
            "Scan(Project)",
        ]

    def test_selects_in_query_order(self, catalogue):
        plan = plan_query(
            catalogue,
            'SELECT persname FROM Person, Project WHERE persid = manager AND dept = "Research"',
        )

        assert [repr(op) for op in walk(plan)] == [
            "Scan(Person)",
            "Scan(Project)",
            "Product",
            "Select(persid=manager)",
            'Select(dept="Research")',
            "Project(persname)",
        ]

    def test_project_only_for_attribute_list(self, catalogue):
        assert isinstance(plan_query(catalogue, "SELECT age FROM Person"), Project)
        assert not isinstance(plan_query(catalogue, "SELECT * FROM Person"), Project)

    def test_unknown_relation(self, catalogue):
        with pytest.raises(RelationNotFoundError):
            build_plan(catalogue, parse("SELECT * FROM Nope"))
