"""
Tests for the query planner
"""

import pytest

from relcost.core.catalogue import Catalogue
from relcost.core.errors import InvalidPlanError
from relcost.core.types import Attribute
from relcost.operators.base import walk
from relcost.operators.join import Join
from relcost.operators.product import Product
from relcost.operators.project import Project
from relcost.operators.scan import Scan
from relcost.operators.select import Select
from relcost.optimizers import QueryPlanner, estimate, optimise
from relcost.optimizers.base import Optimizer
from relcost.sql.ast_nodes import JoinPredicate
from relcost.sql.builder import plan_query

PERSON_PROJECT = (
    'SELECT persname FROM Person, Project WHERE persid = manager AND dept = "Research"'
)


def predicates_of(plan):
    return {op.predicate for op in walk(plan) if isinstance(op, (Select, Join))}


def relations_of(plan):
    return {op.relation_name for op in walk(plan) if isinstance(op, Scan)}


class TestQueryPlanner:
    """Test end-to-end optimization"""

    def test_person_project(self, catalogue):
        plan = plan_query(catalogue, PERSON_PROJECT)
        planner = QueryPlanner(catalogue)

        better = planner.optimize(plan)

        assert planner.original_cost == 16496
        assert planner.optimized_cost == 872
        assert estimate(better) == 872
        assert better.output.attribute_names() == ["persname"]

        assert isinstance(better, Project)
        join = better.child
        assert isinstance(join, Join)
        assert join.output.tuple_count == 8
        assert join.left.output.attribute_names() == ["persid", "persname"]
        assert join.right.output.attribute_names() == ["manager"]
        assert repr(join.right.child) == 'Select(dept="Research")'

    def test_chain_join_order(self, chain_catalogue):
        plan = plan_query(chain_catalogue, "SELECT * FROM A, B, C WHERE a = b1 AND b2 = c")

        better = optimise(chain_catalogue, plan)

        assert estimate(better) == 1142
        assert repr(better.left) == "Scan(A)"
        assert repr(better.right) == "Join(b2=c)"

    def test_input_plan_untouched(self, catalogue):
        plan = plan_query(catalogue, PERSON_PROJECT)
        shape = [repr(op) for op in walk(plan)]

        optimise(catalogue, plan)

        assert [repr(op) for op in walk(plan)] == shape
        assert all(op.output is None for op in walk(plan))

    def test_preserves_predicates_relations_and_output(self, catalogue):
        plan = plan_query(catalogue, PERSON_PROJECT)
        better = optimise(catalogue, plan)

        assert predicates_of(better) == predicates_of(plan)
        assert relations_of(better) == relations_of(plan)
        assert set(better.attribute_names()) == set(plan.attribute_names())

    def test_never_more_expensive(self, catalogue):
        """The rewrite costs more here, so the original shape comes back"""
        plan = plan_query(catalogue, "SELECT persname FROM Person, Department")
        planner = QueryPlanner(catalogue)

        better = planner.optimize(plan)

        assert planner.original_cost == 4405
        assert planner.optimized_cost == 4405
        assert better is not plan
        assert [repr(op) for op in walk(better)] == [repr(op) for op in walk(plan)]
        assert better.output.attribute_names() == ["persname"]

    def test_single_relation_selections_pushed(self, catalogue):
        plan = plan_query(catalogue, 'SELECT * FROM Person WHERE age = 30 AND persname = "x"')
        better = optimise(catalogue, plan)

        assert estimate(better) == 410
        assert predicates_of(better) == predicates_of(plan)

    def test_products_only(self):
        cat = Catalogue()
        for name, count in (("A", 10), ("B", 20), ("C", 30)):
            cat.create_relation(name, count)
            cat.create_attribute(name, name.lower(), count)

        plan = plan_query(cat, "SELECT * FROM A, B, C")
        better = optimise(cat, plan)

        assert estimate(better) == 6260
        assert better.output.tuple_count == 10 * 20 * 30
        assert isinstance(better, Product)

    def test_idempotent(self, chain_catalogue):
        plan = plan_query(chain_catalogue, "SELECT * FROM A, B, C WHERE a = b1 AND b2 = c")

        once = optimise(chain_catalogue, plan)
        twice = optimise(chain_catalogue, once)

        assert estimate(twice) <= estimate(once)

    def test_accepts_join_nodes(self, catalogue):
        predicate = JoinPredicate(Attribute("persid"), Attribute("manager"))
        plan = Project(
            Join(catalogue.scan("Person"), catalogue.scan("Project"), predicate),
            [Attribute("persname")],
        )

        better = optimise(catalogue, plan)

        assert predicates_of(better) == {predicate}
        assert better.output.attribute_names() == ["persname"]

    def test_unknown_attribute(self, catalogue):
        plan = plan_query(catalogue, "SELECT * FROM Person WHERE salary = 10")

        with pytest.raises(InvalidPlanError):
            optimise(catalogue, plan)


class TestPlannerPipeline:
    """Test pipeline bookkeeping"""

    def test_summary(self, catalogue):
        planner = QueryPlanner(catalogue)
        planner.optimize(plan_query(catalogue, PERSON_PROJECT))

        summary = planner.get_optimization_summary()
        assert summary.startswith("Optimizations applied:")
        assert "Plan collection: 2 relation(s), 2 predicate(s)" in summary
        assert "Predicate pushdown: 1 predicate(s)" in summary
        assert "Projection pushdown: 2 relation(s) narrowed" in summary
        assert "Join reordering: 1 ordering(s) considered, best cost 872" in summary

    def test_summary_resets_between_runs(self, catalogue):
        planner = QueryPlanner(catalogue)
        planner.optimize(plan_query(catalogue, PERSON_PROJECT))
        planner.optimize(plan_query(catalogue, "SELECT * FROM Department"))

        assert "Predicate pushdown" not in planner.get_optimization_summary()

    def test_get_optimizers(self, catalogue):
        names = [opt.get_name() for opt in QueryPlanner(catalogue).get_optimizers()]
        assert names == [
            "Plan collection",
            "Predicate pushdown",
            "Projection pushdown",
            "Join reordering",
        ]

    def test_add_optimizer(self, catalogue):
        class CountingOptimizer(Optimizer):
            def __init__(self):
                super().__init__()
                self.runs = 0

            def get_name(self):
                return "Counting"

            def can_optimize(self, context):
                return context.result is not None

            def optimize(self, context):
                self.runs += 1
                self.applied = True
                self.description = f"cost {context.result_cost}"

        planner = QueryPlanner(catalogue)
        counting = CountingOptimizer()
        planner.add_optimizer(counting)
        planner.optimize(plan_query(catalogue, PERSON_PROJECT))

        assert counting.runs == 1
        assert "Counting: cost 872" in planner.get_optimization_summary()
