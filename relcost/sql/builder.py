"""
Canonical plan builder

Turns a parsed query into the straightforward plan it describes, before
any optimization:

    Project(attributes)          (omitted for SELECT *)
      Select(last condition)
        ...
          Select(first condition)
            Product
              Product
                Scan(R1)
                Scan(R2)
              Scan(R3)
"""

from relcost.core.catalogue import Catalogue
from relcost.operators.base import Operator
from relcost.operators.product import Product
from relcost.operators.project import Project
from relcost.operators.select import Select
from relcost.sql.ast_nodes import SelectStatement
from relcost.sql.parser import parse


def build_plan(catalogue: Catalogue, statement: SelectStatement) -> Operator:
    """
    Build the canonical plan of a statement

    Args:
        catalogue: Catalogue to look the FROM relations up in
        statement: Parsed query

    Returns:
        Root operator

    Raises:
        RelationNotFoundError: If a FROM relation is not in the catalogue
    """
    plan: Operator = catalogue.scan(statement.relations[0])
    for name in statement.relations[1:]:
        plan = Product(plan, catalogue.scan(name))

    for predicate in statement.predicates:
        plan = Select(plan, predicate)

    if statement.attributes is not None:
        plan = Project(plan, statement.attributes)

    return plan


def plan_query(catalogue: Catalogue, text: str) -> Operator:
    """Parse a query and build its canonical plan"""
    return build_plan(catalogue, parse(text))
