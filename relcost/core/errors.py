"""
Exception hierarchy for relcost

Every error raised by the library derives from RelcostError so callers
(the CLI in particular) can catch them in one place.
"""


class RelcostError(Exception):
    """Base class for all relcost errors"""

    pass


class RelationNotFoundError(RelcostError, KeyError):
    """Raised when the catalogue has no relation with the requested name"""

    def __init__(self, name: str):
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Relation not found in catalogue: {self.name}"


class InvalidPlanError(RelcostError):
    """Raised when a plan references attributes its inputs do not provide"""

    pass


class InvalidStatisticsError(RelcostError, ValueError):
    """Raised when statistics would make a cost formula undefined"""

    pass


class OptimizerInvariantError(RelcostError, AssertionError):
    """Raised when the join ordering search reaches a state validation rules out"""

    pass


class OutputAlreadySetError(RelcostError):
    """Raised when an operator's output relation is written a second time"""

    pass


class CatalogueFormatError(RelcostError):
    """Raised when a catalogue file cannot be parsed"""

    pass
