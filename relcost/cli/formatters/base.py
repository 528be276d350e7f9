"""
Base formatter interface for CLI output

A report is a dictionary:
    {
        "query": "SELECT ...",
        "plans": [{"label": "...", "cost": 123, "tree": {...}}],
        "optimizations": ["Predicate pushdown: 2 predicate(s)", ...],
    }

where each tree is produced by relcost.core.explain.plan_to_dict.
"""

from typing import Any, Dict


class BaseFormatter:
    """Base class for all output formatters"""

    def format(self, report: Dict[str, Any], **kwargs) -> str:
        """
        Format a cost report for output

        Args:
            report: Report dictionary
            **kwargs: Additional formatter-specific options

        Returns:
            Formatted string ready for output
        """
        raise NotImplementedError("Formatters must implement format() method")

    def get_name(self) -> str:
        """Get formatter name"""
        return self.__class__.__name__.replace("Formatter", "").lower()
