"""
Report formatters for the relcost CLI

- table: Rich panels with the plan tree and root attribute statistics
- text: plain indented plan trees, for logs and pipes
- json: the report dictionary as a JSON document
"""

from relcost.cli.formatters.base import BaseFormatter
from relcost.cli.formatters.json import JSONFormatter
from relcost.cli.formatters.table import TableFormatter
from relcost.cli.formatters.text import TextFormatter

__all__ = ["BaseFormatter", "TableFormatter", "TextFormatter", "JSONFormatter", "get_formatter"]

FORMATTERS = {
    "table": TableFormatter,
    "text": TextFormatter,
    "json": JSONFormatter,
}


def get_formatter(format_name: str) -> BaseFormatter:
    """
    Instantiate the formatter registered under format_name

    Raises:
        ValueError: If no formatter has that name
    """
    if format_name not in FORMATTERS:
        raise ValueError(
            f"Unknown format: {format_name}. Available formats: {', '.join(FORMATTERS)}"
        )
    return FORMATTERS[format_name]()
