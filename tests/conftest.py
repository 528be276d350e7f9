"""
Pytest configuration and shared fixtures
"""

import pytest

from relcost.core.catalogue import Catalogue


@pytest.fixture
def catalogue():
    """Small company schema"""
    cat = Catalogue()

    cat.create_relation("Person", 400)
    cat.create_attribute("Person", "persid", 400)
    cat.create_attribute("Person", "persname", 350)
    cat.create_attribute("Person", "age", 47)

    cat.create_relation("Project", 40)
    cat.create_attribute("Project", "projid", 40)
    cat.create_attribute("Project", "projname", 35)
    cat.create_attribute("Project", "dept", 5)
    cat.create_attribute("Project", "manager", 40)

    cat.create_relation("Department", 5)
    cat.create_attribute("Department", "deptid", 5)
    cat.create_attribute("Department", "deptname", 5)

    return cat


@pytest.fixture
def chain_catalogue():
    """Three relations joined in a chain A.a = B.b1, B.b2 = C.c"""
    cat = Catalogue()

    cat.create_relation("A", 1000)
    cat.create_attribute("A", "a", 1000)

    cat.create_relation("B", 100)
    cat.create_attribute("B", "b1", 100)
    cat.create_attribute("B", "b2", 10)

    cat.create_relation("C", 2)
    cat.create_attribute("C", "c", 2)

    return cat


@pytest.fixture
def catalogue_text():
    """Catalogue contents in the text format"""
    return """# company schema
Person:400:persid,400:persname,350:age,47
Project:40:projid,40:projname,35:dept,5:manager,40

Department:5:deptid,5:deptname,5
"""
