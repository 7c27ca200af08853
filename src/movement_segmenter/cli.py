"""
Command-line interface for the Movement Segmenter package.

This module provides a command-line interface for segmenting recorded
tracks and inspecting the intermediate peaks and sub-bands used to tune
the analysis parameters.
"""

import logging
from pathlib import Path

import click

from .exceptions import MovementSegmenterError
from .pipeline import SegmentationPipeline
from .segmentation import segment_table
from .settings import load_settings


# Configure basic logging
def configure_logging(verbose: bool = False) -> None:
    """Configure logging with appropriate level."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )


config_option = click.option(
    "--config",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to configuration file",
)
column_option = click.option(
    "--column",
    type=str,
    default=None,
    help="Track column to segment (overrides config)",
)
track_argument = click.argument(
    "track",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)


@click.group()
def main():
    """
    Segment movement tracks into behavioural phases.

    This tool decomposes a movement-speed profile into wavelet sub-bands and
    splits it into segments from approximation-band peaks and from
    detail-band change points.
    """


@main.command()
@config_option
@column_option
@track_argument
@click.option(
    "--output-dir",
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory for the CSV outputs (overrides config)",
)
@click.option(
    "--verbose/--quiet",
    default=False,
    help="Enable verbose output",
)
def segment(
    config: Path | None,
    column: str | None,
    track: Path,
    output_dir: Path | None,
    verbose: bool,
) -> None:
    """
    Segment a track with both branches and save the results.

    Writes the per-fix labelings, the peak table and the sub-bands to CSV
    files in the output directory.
    """
    configure_logging(verbose)
    logger = logging.getLogger(__name__)

    try:
        settings = load_settings(config)
        if output_dir is not None:
            settings.output_dir = output_dir

        pipeline = SegmentationPipeline(settings)
        result = pipeline.run_file(track, column)
        files = pipeline.save_results(result)

        click.echo("\nSegmentation Summary")
        click.echo("=" * 40)
        click.echo(f"Fixes: {len(result.signal)}")
        click.echo(f"Peaks: {len(result.peaks)}")
        click.echo(f"Peak segments: {len(segment_table(result.peak_labels))}")
        click.echo(f"Change-point chunks: {len(result.chunks)}")
        click.echo(f"Stitched segments: {len(segment_table(result.stitched_labels))}")
        click.echo(f"\nSegments saved to {files['segments']}")

    except MovementSegmenterError as e:
        logger.error(f"Segmentation failed: {str(e)}")
        raise click.Abort() from e


@main.command()
@config_option
@column_option
@track_argument
def peaks(config: Path | None, column: str | None, track: Path) -> None:
    """
    Print the peaks of the configured approximation band.

    Useful for choosing the minimum height and distance by inspection.
    """
    logger = logging.getLogger(__name__)

    try:
        settings = load_settings(config)
        pipeline = SegmentationPipeline(settings)
        result = pipeline.run_file(track, column)

        frame = result.peaks_frame()
        if frame.empty:
            click.echo("No peaks found")
            return

        click.echo(f"\nPeaks at approximation level {settings.peaks.level}")
        click.echo("-" * 40)
        click.echo(frame.to_string(index=False))

    except MovementSegmenterError as e:
        logger.error(f"Peak detection failed: {str(e)}")
        raise click.Abort() from e


@main.command()
@config_option
@column_option
@track_argument
@click.option(
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    required=True,
    help="CSV file for the sub-bands",
)
def bands(
    config: Path | None, column: str | None, track: Path, output: Path
) -> None:
    """
    Write all approximation and detail sub-bands of a track to CSV.

    Useful for choosing the analyzed levels and the change threshold by
    plotting the bands.
    """
    logger = logging.getLogger(__name__)

    try:
        settings = load_settings(config)
        pipeline = SegmentationPipeline(settings)
        signal = pipeline.loader.load_signal(track, column)
        sub_bands = pipeline.decomposer.decompose(
            signal, settings.decomposition.levels
        )

        output.parent.mkdir(parents=True, exist_ok=True)
        sub_bands.to_frame().to_csv(output, index=False, sep=settings.csv_separator)
        click.echo(
            f"Wrote {sub_bands.levels} levels of {len(signal)} fixes to {output}"
        )

    except MovementSegmenterError as e:
        logger.error(f"Decomposition failed: {str(e)}")
        raise click.Abort() from e


if __name__ == "__main__":
    main()
