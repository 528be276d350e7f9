"""
Rich formatter for terminal output
"""

from typing import Any, Dict

from rich import box
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.tree import Tree

from relcost.cli.formatters.base import BaseFormatter


class TableFormatter(BaseFormatter):
    """Format reports as Rich plan trees with an attribute statistics table"""

    def format(self, report: Dict[str, Any], **kwargs) -> str:
        """
        Format a report with Rich

        Args:
            report: Report dictionary
            **kwargs: Options like 'no_color', 'show_footer'

        Returns:
            Rendered string
        """
        plans = report.get("plans", [])
        if not plans:
            return "No plans to show."

        no_color = kwargs.get("no_color", False)
        console = Console(force_terminal=not no_color, no_color=no_color)

        with console.capture() as capture:
            for entry in plans:
                tree = self._build_tree(entry["tree"])
                stats = self._build_attribute_table(entry["tree"])
                console.print(
                    Panel(
                        Group(tree, stats),
                        title=f"[bold]{entry['label']}[/bold]",
                        subtitle=f"cost {entry['cost']}",
                        box=box.ROUNDED,
                    )
                )

            optimizations = report.get("optimizations")
            if optimizations and kwargs.get("show_footer", True):
                for line in optimizations:
                    console.print(f"[dim]- {line}[/dim]")

        return capture.get()

    def _build_tree(self, node: Dict[str, Any], parent: Tree = None) -> Tree:
        label = f"[cyan]{node['operator']}[/cyan] [dim]T={node.get('tuples', '?')}[/dim]"
        branch = Tree(label) if parent is None else parent.add(label)
        for child in node.get("inputs", []):
            self._build_tree(child, branch)
        return branch

    def _build_attribute_table(self, node: Dict[str, Any]) -> Table:
        table = Table(show_header=True, header_style="bold magenta", box=box.SIMPLE)
        table.add_column("attribute", style="cyan")
        table.add_column("distinct values", justify="right")

        for name, value_count in node.get("attributes", {}).items():
            table.add_row(name, str(value_count))

        return table
