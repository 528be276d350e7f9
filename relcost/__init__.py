"""
relcost - A relational query-plan cost estimator and cost-based rewriter

This package estimates the cardinalities and total cost of logical query
plans built from Scan, Select, Project, Product and Join operators, and
rewrites plans into cheaper equivalents by pushing selections and
projections down and searching join orders.
"""

__version__ = "0.1.0"

# Main API
from relcost.core.catalogue import Catalogue
from relcost.optimizers.estimator import estimate
from relcost.optimizers.planner import optimise

__all__ = ["__version__", "Catalogue", "estimate", "optimise"]
