"""Python based runner."""

import itertools
import logging
import pathlib
from typing import Dict, Optional, Union

from rich import progress

from vibrapy.core import config, exceptions, models
from vibrapy.io.readers import readers
from vibrapy.io.writers import writers
from vibrapy.processing import alerts, baseline, features, health, thresholds

logger = config.get_logger()

RECORDING_FILE_TYPES = readers.RECORDING_FILE_TYPES


def run(
    input: Union[pathlib.Path, str],
    output: Optional[Union[pathlib.Path, str]] = None,
    baseline_file: Optional[Union[pathlib.Path, str]] = None,
    table: thresholds.ThresholdTable = thresholds.DEFAULT_THRESHOLDS,
    verbosity: int = logging.WARNING,
) -> Union[writers.AnalysisResults, Dict[str, writers.AnalysisResults]]:
    """Runs the vibration pipeline on a single recording, or a directory of them.

    The run() function will execute _run_file() on individual files, or
    _run_directory() on entire directories. When the input path points to a file,
    the results are saved to the given output path (if any). When the input path
    points to a directory the output path must be a directory as well, and the
    output file names are derived from the recording file names.

    Args:
        input: Path to the recording file or directory of recordings. Recordings
            are .csv or .parquet files.
        output: Path where the results will be saved, a .json file for a single
            recording or a directory for a directory of recordings.
        baseline_file: The baseline of the machine, either a stored metrics .json
            file or a baseline recording. Recordings are compared against it when
            given.
        table: The threshold table used by the health scorer and the alert
            classifier.
        verbosity: The logging level for the logger.

    Returns:
        The results of the recording, or a dictionary of results keyed by recording
        path when processing a directory.
    """
    logger.setLevel(verbosity)

    input = pathlib.Path(input)
    output = pathlib.Path(output) if output is not None else None
    baseline_features = (
        readers.read_baseline(baseline_file) if baseline_file is not None else None
    )

    if input.is_file():
        return _run_file(
            input=input,
            output=output,
            baseline_features=baseline_features,
            table=table,
            baseline_file=baseline_file,
        )

    return _run_directory(
        input=input,
        output=output,
        baseline_features=baseline_features,
        table=table,
        baseline_file=baseline_file,
    )


def _run_directory(
    input: pathlib.Path,
    output: Optional[pathlib.Path] = None,
    baseline_features: Optional[models.FeatureSet] = None,
    table: thresholds.ThresholdTable = thresholds.DEFAULT_THRESHOLDS,
    baseline_file: Optional[Union[pathlib.Path, str]] = None,
) -> Dict[str, writers.AnalysisResults]:
    """Runs the vibration pipeline on every recording of a directory.

    Recordings that fail to process are logged and skipped.

    Args:
        input: Path to the directory of recordings.
        output: Path to the directory results will be saved to.
        baseline_features: The baseline features all recordings are compared to.
        table: The threshold table used by the scorer and the classifier.
        baseline_file: The file the baseline was read from, for the processing
            parameters.

    Returns:
        A dictionary of results keyed by recording path.

    Raises:
        ValueError: If the output given is not a directory.
        EmptyDirectoryError: If the input directory contained no recordings.
    """
    if output is not None and output.is_file():
        raise ValueError(
            "Output is a file, but must be a directory when input is a directory."
        )

    file_names = sorted(
        itertools.chain.from_iterable(
            input.glob(f"*{suffix}") for suffix in RECORDING_FILE_TYPES
        )
    )

    if not file_names:
        raise exceptions.EmptyDirectoryError(
            f"Directory {input} contains no .csv or .parquet recordings."
        )
    results_dict = {}
    with progress.Progress(
        progress.SpinnerColumn(),
        progress.TextColumn("[progress.description]{task.description}"),
        progress.BarColumn(),
        progress.TaskProgressColumn(),
        console=None,
    ) as progress_bar:
        task = progress_bar.add_task(
            f"[cyan]Processing recordings in {input.name}...", total=len(file_names)
        )

        for file in file_names:
            output_file_path = (
                output / pathlib.Path(file.stem).with_suffix(".json")
                if output
                else None
            )
            logger.debug(
                "Processing directory: %s, current file: %s, save path: %s",
                input,
                file,
                output_file_path,
            )
            try:
                results_dict[str(file)] = _run_file(
                    input=file,
                    output=output_file_path,
                    baseline_features=baseline_features,
                    table=table,
                    baseline_file=baseline_file,
                )
            except Exception as e:
                logger.error("Did not run file: %s, Error: %s", file, e)
            progress_bar.update(task, advance=1)
    logger.info("Processing for directory %s completed successfully.", input)
    return results_dict


def _run_file(
    input: pathlib.Path,
    output: Optional[pathlib.Path] = None,
    baseline_features: Optional[models.FeatureSet] = None,
    table: thresholds.ThresholdTable = thresholds.DEFAULT_THRESHOLDS,
    baseline_file: Optional[Union[pathlib.Path, str]] = None,
) -> writers.AnalysisResults:
    """Runs the vibration pipeline on one recording.

    Extracts the features of the recording, scores its health, classifies alerts
    and, when a baseline is given, computes the deviation from it.

    Args:
        input: Path to the recording.
        output: Path to save the results to, must end in .json.
        baseline_features: The baseline features the recording is compared to.
        table: The threshold table used by the scorer and the classifier.
        baseline_file: The file the baseline was read from, for the processing
            parameters.

    Returns:
        The results of the recording.
    """
    if output is not None:
        writers.AnalysisResults.validate_output(output=output)

    window = readers.read_recording(input)
    analysis = analyze(window, baseline_features=baseline_features, table=table)
    analysis.processing_params = {
        "input_file": str(input),
        "baseline_file": str(baseline_file) if baseline_file is not None else None,
    }

    if output is not None:
        try:
            analysis.save_results(output=output)
        except (
            exceptions.InvalidFileTypeError,
            PermissionError,
            FileExistsError,
        ) as exc_info:
            # Allowed to pass to recover in Jupyter Notebook scenarios.
            logger.error(
                "Could not save output due to: %s. Call save_results on the output "
                "object with a correct filename to save these results.",
                exc_info,
            )
    logger.info("Processing for %s completed successfully.", input.stem)
    return analysis


def analyze(
    window: models.SampleWindow,
    baseline_features: Optional[models.FeatureSet] = None,
    table: thresholds.ThresholdTable = thresholds.DEFAULT_THRESHOLDS,
) -> writers.AnalysisResults:
    """Run the feature extractor, scorer, comparator and classifier on a window.

    Args:
        window: The recorded samples.
        baseline_features: The baseline features, if the machine has a baseline.
        table: The threshold table used by the scorer and the classifier.

    Returns:
        The results. The deviation is None without a baseline.
    """
    if len(window) == 0:
        logger.warning("Recording holds no samples, all features will be zero.")

    feature_set = features.extract(window)
    deviation = (
        baseline.compare(feature_set, baseline_features)
        if baseline_features is not None
        else None
    )

    return writers.AnalysisResults(
        features=feature_set,
        health=health.score(feature_set, table=table),
        alerts=alerts.classify(feature_set, table=table),
        deviation=deviation,
        sample_count=len(window),
        duration_seconds=window.duration_seconds,
    )
