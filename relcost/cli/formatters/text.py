"""
Plain text formatter for logs and pipes
"""

from typing import Any, Dict, List

from relcost.cli.formatters.base import BaseFormatter


class TextFormatter(BaseFormatter):
    """Format reports as indented plain-text plan trees"""

    def format(self, report: Dict[str, Any], **kwargs) -> str:
        """
        Format a report as plain text

        Args:
            report: Report dictionary
            **kwargs: Unused

        Returns:
            Text with one indented tree per plan
        """
        output: List[str] = []

        for entry in report.get("plans", []):
            output.append(f"{entry['label']}:")
            output.append("=" * 40)
            _render(entry["tree"], 0, output)
            output.append(f"Estimated cost: {entry['cost']}")
            output.append("")

        optimizations = report.get("optimizations")
        if optimizations is not None:
            if optimizations:
                output.append("Optimizations applied:")
                output.extend(f"  - {line}" for line in optimizations)
            else:
                output.append("No optimizations applied")

        return "\n".join(output).rstrip()


def _render(node: Dict[str, Any], indent: int, output: List[str]) -> None:
    output.append(f"{'  ' * indent}{node['operator']}  [T={node.get('tuples', '?')}]")
    for child in node.get("inputs", []):
        _render(child, indent + 1, output)
