"""Reference commands."""

import click
from rich.table import Table

from coveragegate.cli._helpers import console
from coveragegate.model import Baseline, Metric


@click.command("metrics")
def metrics():
    """List the supported metrics and baselines."""
    table = Table(title="Metrics")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Tag")
    table.add_column("Display Name")
    table.add_column("Type")

    for metric in Metric:
        kind = "coverage" if metric.is_coverage else "count"
        if not metric.larger_is_better:
            kind += " (smaller is better)"
        table.add_row(metric.name, metric.tag_name, metric.display_name, kind)
    console.print(table)

    table = Table(title="Baselines")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Tag")
    table.add_column("Title")
    table.add_column("Delta")

    for baseline in Baseline:
        table.add_row(baseline.name, baseline.value, baseline.title, "yes" if baseline.is_delta else "")
    console.print(table)
