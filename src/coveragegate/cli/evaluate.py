"""Quality gate evaluation commands."""

import json
import sys
from pathlib import Path

import click

from coveragegate.api import CoverageApi
from coveragegate.cli._helpers import console, display_result, read_config, read_statistics
from coveragegate.handlers import BuildResult, BuildStatusHandler, NullResultHandler
from coveragegate.log import FilteredLog
from coveragegate.quality_gates import CoverageQualityGateEvaluator


@click.command("evaluate")
@click.argument("statistics_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--config", "-c", "config_path", type=click.Path(exists=True, dir_okay=False), help="YAML file with quality gates")
@click.option(
    "--gate",
    "-g",
    "gate_options",
    multiple=True,
    help="Quality gate METRIC[:BASELINE[:THRESHOLD[:CRITICALITY]]], repeatable",
)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.option("--strict", is_flag=True, help="Exit with an error for unstable builds as well")
@click.option("--verbose", "-v", is_flag=True, help="Show the evaluation log")
def evaluate(statistics_file: str, config_path: str, gate_options: tuple, as_json: bool, strict: bool, verbose: bool):
    """Evaluate quality gates against the coverage statistics of a build.

    STATISTICS_FILE is a JSON file with the values per baseline and metric.

    Examples:
        coveragegate evaluate stats.json -g LINE:PROJECT:80:FAILURE
        coveragegate evaluate stats.json -c gates.yaml --strict
    """
    statistics = read_statistics(statistics_file)
    config = read_config(config_path, gate_options)

    handler = BuildStatusHandler()
    log = FilteredLog("Errors while evaluating quality gates")
    result = CoverageQualityGateEvaluator(config.quality_gates, statistics).evaluate(handler, log)

    if as_json:
        output = {
            "buildResult": handler.result.name,
            **result.to_dict(),
            "log": log.info_messages,
        }
        click.echo(json.dumps(output, indent=2, ensure_ascii=False))
    else:
        console.print(f"[bold]{config.name}[/bold] ({statistics_file})\n")
        display_result(result)
        if verbose:
            console.print()
            for line in log.info_messages:
                console.print(line, style="dim", markup=False, highlight=False)
        console.print(f"[bold]Build result:[/bold] {handler.result.name}")

    if handler.result is BuildResult.FAILURE or (strict and handler.result is BuildResult.UNSTABLE):
        sys.exit(1)


@click.command("api")
@click.argument("statistics_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--config", "-c", "config_path", type=click.Path(exists=True, dir_okay=False), help="YAML file with quality gates")
@click.option("--reference-build", "-r", default=None, help="Display name of the reference build")
@click.option("--output", "-o", type=click.Path(), help="Write the document to a file")
def api(statistics_file: str, config_path: str, reference_build: str, output: str):
    """Print the remote API document of a build as JSON.

    Examples:
        coveragegate api stats.json -c gates.yaml -r "#41"
    """
    statistics = read_statistics(statistics_file)
    config = read_config(config_path)

    result = CoverageQualityGateEvaluator(config.quality_gates, statistics).evaluate(
        NullResultHandler(), FilteredLog()
    )
    document = json.dumps(
        CoverageApi(statistics, result, reference_build).to_dict(), indent=2, ensure_ascii=False
    )

    if output:
        output_path = Path(output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(document, encoding="utf-8")
        console.print(f"[green]API document written to:[/green] {output}")
    else:
        click.echo(document)
