"""
relcost CLI - estimate and optimize query plans

Usage:
    relcost estimate -c catalogue.txt "<query>"   # cost of the canonical plan
    relcost optimise -c catalogue.txt "<query>"   # canonical vs optimized plan
"""

import logging
import sys
from typing import Optional

import click

from relcost import __version__
from relcost.cli.formatters import get_formatter
from relcost.core.catalogue import Catalogue
from relcost.core.errors import RelcostError
from relcost.core.explain import plan_to_dict
from relcost.optimizers.estimator import Estimator
from relcost.optimizers.planner import QueryPlanner
from relcost.sql.builder import plan_query

logger = logging.getLogger(__name__)


def _configure_logging(verbose: bool, debug: bool) -> None:
    level = logging.DEBUG if debug else logging.INFO if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
        stream=sys.stderr,
    )


def _read_query(query_text: Optional[str], query_file: Optional[str]) -> str:
    if query_file:
        with open(query_file) as f:
            return f.read().strip()
    if not query_text:
        raise click.UsageError("Provide a query argument or --query-file")
    return query_text


def _emit(report: dict, fmt: str, no_color: bool, output: Optional[str]) -> None:
    formatter = get_formatter(fmt)
    output_text = formatter.format(
        report,
        no_color=no_color or output is not None or not sys.stdout.isatty(),
        show_footer=True,
    )

    if output:
        with open(output, "w") as f:
            f.write(output_text)
        click.echo(f"Report written to {output} ({fmt} format)", err=True)
    else:
        click.echo(output_text)


def common_options(fn):
    """Options shared by the estimate and optimise commands"""
    decorators = [
        click.argument("query_text", type=str, required=False),
        click.option(
            "--catalogue",
            "-c",
            "catalogue_path",
            type=click.Path(exists=True, dir_okay=False),
            required=True,
            help="Catalogue file (text or .json)",
        ),
        click.option(
            "--query-file",
            "-q",
            type=click.Path(exists=True, dir_okay=False),
            default=None,
            help="Read the query from a file",
        ),
        click.option(
            "--format",
            "-f",
            "fmt",
            type=click.Choice(["table", "text", "json"], case_sensitive=False),
            default="table",
            help="Output format (default: table)",
        ),
        click.option(
            "--output",
            "-o",
            type=click.Path(),
            default=None,
            help="Write output to file instead of stdout",
        ),
        click.option("--no-color", is_flag=True, help="Disable colored output"),
        click.option("--verbose", "-v", is_flag=True, help="Log optimizer decisions"),
        click.option("--debug", is_flag=True, help="Log everything and show tracebacks"),
    ]
    for decorator in reversed(decorators):
        fn = decorator(fn)
    return fn


@click.group()
@click.version_option(version=__version__, prog_name="relcost")
def cli():
    """
    relcost - estimate and optimize relational query plans

    Query plans are built from SELECT ... FROM ... WHERE ... text against a
    catalogue of relation statistics.
    """


@cli.command()
@common_options
def estimate(
    query_text: Optional[str],
    catalogue_path: str,
    query_file: Optional[str],
    fmt: str,
    output: Optional[str],
    no_color: bool,
    verbose: bool,
    debug: bool,
):
    """
    Estimate the cost of a query's canonical plan

    Examples:

        \b
        $ relcost estimate -c cat.txt "SELECT * FROM Person WHERE age = 30"

        \b
        $ relcost estimate -c cat.json -q query.txt -f json
    """
    _configure_logging(verbose, debug)
    try:
        catalogue = Catalogue.from_file(catalogue_path)
        text = _read_query(query_text, query_file)
        plan = plan_query(catalogue, text)
        cost = Estimator().estimate(plan)

        report = {
            "query": text,
            "plans": [{"label": "Canonical plan", "cost": cost, "tree": plan_to_dict(plan)}],
        }
        _emit(report, fmt.lower(), no_color, output)

    except click.UsageError:
        raise
    except (RelcostError, OSError) as e:
        click.echo(f"Error: {e}", err=True)
        if debug:
            raise
        sys.exit(1)


@cli.command()
@common_options
def optimise(
    query_text: Optional[str],
    catalogue_path: str,
    query_file: Optional[str],
    fmt: str,
    output: Optional[str],
    no_color: bool,
    verbose: bool,
    debug: bool,
):
    """
    Optimize a query and compare the plans

    Examples:

        \b
        $ relcost optimise -c cat.txt \\
            "SELECT persname FROM Person, Project WHERE persid = manager"
    """
    _configure_logging(verbose, debug)
    try:
        catalogue = Catalogue.from_file(catalogue_path)
        text = _read_query(query_text, query_file)
        plan = plan_query(catalogue, text)

        planner = QueryPlanner(catalogue)
        optimized = planner.optimize(plan)

        # The canonical plan is costed on its own nodes only for display
        canonical_cost = Estimator().estimate(plan)

        report = {
            "query": text,
            "plans": [
                {"label": "Canonical plan", "cost": canonical_cost, "tree": plan_to_dict(plan)},
                {
                    "label": "Optimized plan",
                    "cost": planner.optimized_cost,
                    "tree": plan_to_dict(optimized),
                },
            ],
            "optimizations": planner.pipeline.get_applied_optimizations(),
        }
        _emit(report, fmt.lower(), no_color, output)

    except click.UsageError:
        raise
    except (RelcostError, OSError) as e:
        click.echo(f"Error: {e}", err=True)
        if debug:
            raise
        sys.exit(1)


# Accept the American spelling too
cli.add_command(optimise, name="optimize")


if __name__ == "__main__":
    cli()
