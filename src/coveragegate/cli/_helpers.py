"""CLI shared helpers."""

from typing import Optional

import click
from rich.console import Console
from rich.table import Table

from coveragegate.config import ConfigurationError, RecorderConfig, load_statistics, parse_gate_option
from coveragegate.quality_gates import QualityGateResult, QualityGateStatus
from coveragegate.statistics import CoverageStatistics

console = Console()

STATUS_STYLES = {
    QualityGateStatus.INACTIVE: "dim",
    QualityGateStatus.PASSED: "green",
    QualityGateStatus.NOTE: "cyan",
    QualityGateStatus.WARNING: "yellow",
    QualityGateStatus.FAILED: "red",
}


def read_statistics(path: str) -> CoverageStatistics:
    """Load a statistics file, reporting invalid input as a usage error."""
    try:
        return load_statistics(path)
    except ConfigurationError as e:
        raise click.BadParameter(str(e), param_hint="STATISTICS_FILE") from e


def read_config(config_path: Optional[str], gate_options: tuple[str, ...] = ()) -> RecorderConfig:
    """Build the recorder config from a YAML file and ``--gate`` options.

    Gates given on the command line are appended to those of the file.
    """
    try:
        config = RecorderConfig.from_yaml(config_path) if config_path else RecorderConfig()
        config.quality_gates.extend(parse_gate_option(option) for option in gate_options)
    except ConfigurationError as e:
        raise click.UsageError(str(e)) from e
    return config


def display_result(result: QualityGateResult, title: str = "Quality Gates") -> None:
    """Print the per-gate outcome as a table."""
    if not result.results:
        console.print("[dim]No quality gates have been set[/dim]")
        return

    table = Table(title=title)
    table.add_column("Quality Gate", style="cyan")
    table.add_column("Threshold", justify="right")
    table.add_column("Actual", justify="right")
    table.add_column("Result")

    for item in result.results:
        style = STATUS_STYLES[item.status]
        table.add_row(
            item.gate.name,
            f"{item.gate.threshold:.2f}",
            item.actual_value,
            f"[{style}]{item.status.label}[/{style}]",
        )

    console.print(table)
    style = STATUS_STYLES[result.overall_status]
    console.print(f"\n[bold]Overall result:[/bold] [{style}]{result.overall_status.name}[/{style}]")
