"""
JSON formatter for machine-readable output
"""

import json
from typing import Any

from relcost.cli.formatters.base import BaseFormatter


class JSONFormatter(BaseFormatter):
    """Format reports as JSON"""

    def format(self, report: dict[str, Any], **kwargs) -> str:
        """
        Format a report as JSON

        Args:
            report: Report dictionary
            **kwargs: Options like 'compact', 'indent'

        Returns:
            JSON string
        """
        if kwargs.get("compact", False):
            return json.dumps(report, separators=(",", ":"))

        indent = kwargs.get("indent", 2)
        return json.dumps(report, indent=indent)
