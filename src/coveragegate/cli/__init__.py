"""Command-line interface for coveragegate."""

import click

from coveragegate import __version__
from coveragegate.cli._helpers import console  # noqa: F401


# Main CLI group
@click.group()
@click.version_option(version=__version__, prog_name="coveragegate")
def main():
    """coveragegate - Evaluate code coverage quality gates for a build."""
    pass


# --- Register commands from submodules ---

# evaluate.py
from coveragegate.cli.evaluate import api, evaluate  # noqa: E402

main.add_command(evaluate)
main.add_command(api)

# info.py
from coveragegate.cli.info import metrics  # noqa: E402

main.add_command(metrics)
