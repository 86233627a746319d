"""CLI for vibrapy."""

import logging
import pathlib

import typer

from vibrapy.core import config, exceptions

logger = config.get_logger()
app = typer.Typer(
    help="Run the vibrapy vibration health pipeline.",
)


def version_check(version: bool) -> None:
    """Print the current version of vibrapy and exit."""
    if version:
        typer.echo(f"Vibrapy version: {config.get_version()}")
        raise typer.Exit()


@app.command()
def main(
    input: pathlib.Path = typer.Argument(
        ...,
        help="Path to a recording (.csv or .parquet) or a directory of recordings.",
        exists=True,
    ),
    output: pathlib.Path = typer.Option(
        None,
        "-o",
        "--output",
        help="Path where results will be saved. A .json file for a single "
        "recording, a directory when processing a directory.",
    ),
    baseline: pathlib.Path = typer.Option(
        None,
        "-b",
        "--baseline",
        help="Baseline of the machine: a stored metrics .json file or a baseline "
        "recording. Recordings are compared against it when given.",
        exists=True,
    ),
    verbosity: bool = typer.Option(
        False,
        "-v",
        "--verbosity",
        help="Determines the level of verbosity. Use -v for DEBUG. "
        "Defaults to INFO if not included.",
    ),
    version: bool = typer.Option(
        False,
        "-V",
        "--version",
        help="Print the current version of vibrapy and exit.",
        is_eager=True,
        callback=version_check,
    ),
) -> None:
    """Run vibrapy orchestrator with command line arguments."""
    from vibrapy.core import orchestrator

    log_level = logging.INFO
    if verbosity:
        log_level = logging.DEBUG
    logger.setLevel(log_level)

    logger.debug("Running vibrapy. arguments given: %s", locals())
    try:
        results = orchestrator.run(
            input=input,
            output=output,
            baseline_file=baseline,
            verbosity=log_level,
        )
    except (
        exceptions.EmptyDirectoryError,
        exceptions.InvalidFileTypeError,
        exceptions.InvalidRecordingError,
        exceptions.InvalidMetricsError,
    ) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if output is None and not isinstance(results, dict):
        typer.echo(
            f"Health score: {results.health.score} ({results.health.status.value})"
        )
        for alert in results.alerts:
            typer.echo(f"[{alert.severity.value}] {alert.title}: {alert.description}")


if __name__ == "__main__":
    app()
