"""CLI entry point for the lsdir command."""

from pathlib import Path

import click
from rich.table import Table

from .. import __version__
from ..config import LsdirConfig
from ..core.scanner import read_directory
from ..queries.display import print_aggregates, print_groups, write_tsv
from ..queries.fields import list_fields
from ..queries.parse import parse_aggregate, parse_grouping, parse_predicate
from ..queries.query_engine import run_query
from .common import console, setup_logging, spec_callback


def _show_config() -> None:
    table = Table(title="Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    table.add_column("Source", style="dim")
    for name, value, source in LsdirConfig.describe():
        table.add_row(name, value, source)
    console.print(table)
    console.print(f"Fields: {', '.join(list_fields())}")


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__)
@click.argument(
    "path",
    required=False,
    type=click.Path(exists=True, file_okay=False, dir_okay=True, path_type=Path),
)
@click.option(
    "-w",
    "--where",
    "predicate",
    metavar="CONDITION",
    callback=spec_callback(parse_predicate),
    help="Filter condition: field,operator,value (e.g. size,gt,1000 or name,eq,^test_)",
)
@click.option(
    "-g",
    "--group-by",
    "grouping",
    metavar="FIELD",
    callback=spec_callback(parse_grouping),
    help="Group by field: extension, file_type, size,UNIT or modified|accessed|created,y,m,d,h,min,s",
)
@click.option(
    "-a",
    "--aggregate",
    "--function",
    "aggregate",
    metavar="FUNCTION",
    callback=spec_callback(parse_aggregate),
    help="Aggregate per group: count, sum[,size], avg[,size], max,FIELD or min,FIELD",
)
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write TSV output to file",
)
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    help="Enable debug logging",
)
@click.option(
    "--show-config",
    is_flag=True,
    help="Show effective configuration and exit",
)
def lsdir_cli(path, predicate, grouping, aggregate, output, verbose, show_config):
    """
    List directory entries and query them with SQL-like clauses.

    PATH is the directory to list (defaults to LSDIR_DEFAULT_PATH, or the
    current directory).  Only direct children are listed.

    \b
    Examples:
      lsdir                                   # list current directory
      lsdir docs -w size,gt,1000              # entries larger than 1000 bytes
      lsdir -w "name,contains,test"           # names containing 'test'
      lsdir -w "modified,ge,01.01.2024 00:00" # modified since 2024
      lsdir -g extension -a count             # count per extension
      lsdir -g extension -a sum,size          # total size per extension
      lsdir -g size,kb                        # bucket by whole KB
      lsdir -g modified,y,m -a max,size       # largest entry per month
    """
    setup_logging("DEBUG" if verbose else LsdirConfig.LOG_LEVEL)

    if show_config:
        _show_config()
        return

    if path is None:
        path = Path(LsdirConfig.DEFAULT_PATH)

    try:
        records = read_directory(path)
    except OSError as e:
        raise click.UsageError(f"Cannot list {path}: {e.strerror or e}") from e

    result = run_query(
        records,
        predicate=predicate,
        grouping=grouping,
        aggregate=aggregate,
        default_key=str(path),
    )

    if output:
        write_tsv(result, output)
    elif result.aggregates is not None:
        print_aggregates(result)
    else:
        print_groups(result)


if __name__ == "__main__":
    lsdir_cli()
