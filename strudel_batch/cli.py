"""Command-line interface for strudel-batch.

Batch-converts audio files into Strudel patterns: each input file is decoded,
analyzed (notes, key, chords, tempo) and written as ``<name>.strudel.txt``.
"""

import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from . import __version__
from .core import AnalysisResult, InvalidArgumentError, DEFAULT_SENSITIVITY, DEFAULT_TIME_SIGNATURE

app = typer.Typer(
    name="strudel-batch",
    help="Batch process audio files to Strudel patterns",
    rich_markup_mode="markdown",
)
console = Console()

OUTPUT_SUFFIX = ".strudel.txt"


def _configure_logging(verbose: bool) -> None:
    """Send library log records through rich when verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"strudel-batch {__version__}")
        raise typer.Exit()


@app.command()
def convert(
    files: List[Path] = typer.Argument(..., help="Audio files to process"),
    output: Path = typer.Option(
        Path("./output"), "-o", "--output", help="Output directory"
    ),
    tempo: Optional[float] = typer.Option(
        None, "-t", "--tempo", help="Target tempo in BPM (overrides auto-detection)"
    ),
    key: Optional[str] = typer.Option(
        None, "-k", "--key", help="Target key, e.g. C, F#, Am (overrides auto-detection)"
    ),
    sensitivity: int = typer.Option(
        DEFAULT_SENSITIVITY, "-s", "--sensitivity", min=0, max=100,
        help="Pitch detection sensitivity (0-100)",
    ),
    time_signature: str = typer.Option(
        DEFAULT_TIME_SIGNATURE, "--time-signature", help="Time signature as N/D"
    ),
    verbose: bool = typer.Option(
        False, "-v", "--verbose", help="Verbose output"
    ),
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True,
        help="Show version and exit",
    ),
):
    """Convert audio files to Strudel patterns.

    **Examples:**

        strudel-batch song.wav

        strudel-batch *.mp3 -o patterns -k Am -t 96
    """
    from .input import AudioLoader
    from .pipeline import AnalysisPipeline, PipelineOptions

    _configure_logging(verbose)

    try:
        options = PipelineOptions(
            tempo=tempo,
            key=key,
            sensitivity=sensitivity,
            time_signature=time_signature,
        )
        pipeline = AnalysisPipeline(options)
    except InvalidArgumentError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(2)

    console.print("\n[bold cyan]Strudel Batch[/bold cyan]\n")

    output.mkdir(parents=True, exist_ok=True)

    console.print(f"[dim]Output directory: {output}[/dim]")
    console.print(f"[dim]Tempo: {tempo if tempo is not None else 'auto'}[/dim]")
    console.print(f"[dim]Key: {key or 'auto'}[/dim]\n")

    loader = AudioLoader()
    processed = 0
    failed = 0

    for file in files:
        try:
            buffer = loader.load(str(file))
            result, pattern = pipeline.process(buffer)

            output_path = output / f"{file.stem}{OUTPUT_SUFFIX}"
            output_path.write_text(pattern.combined, encoding="utf-8")

            console.print(f"[green]✓ {file.name}[/green]")
            console.print(
                f"[dim]  Key: {result.detected_key} | "
                f"Tempo: {result.estimated_tempo:.0f} BPM | "
                f"Notes: {len(result.notes)}[/dim]"
            )
            console.print(f"[dim]  Saved to: {output_path}[/dim]\n")

            if verbose and result.chords:
                _show_chords_table(result)

            processed += 1
        except Exception as e:
            console.print(f"[red]✗ {file.name}[/red]")
            console.print(f"[dim]  Error: {escape(str(e))}[/dim]\n")
            failed += 1

    console.print("\n[bold]Summary[/bold]")
    console.print(f"[green]  Processed: {processed}[/green]")
    if failed > 0:
        console.print(f"[red]  Failed: {failed}[/red]")
    console.print(f"[dim]  Output: {output}[/dim]\n")

    if failed > 0:
        raise typer.Exit(1)


def _show_chords_table(result: AnalysisResult) -> None:
    """Display generated chords in a table."""
    table = Table(title=f"Chords in {result.detected_key}")
    table.add_column("Chord", style="cyan")
    table.add_column("Notes", style="green")
    table.add_column("Time", style="yellow")

    for chord in result.chords:
        table.add_row(
            chord.name,
            " ".join(chord.notes),
            f"{chord.time:.2f}-{chord.time + chord.duration:.2f}s",
        )

    console.print(table)


def main():
    """Entry point."""
    app()


if __name__ == "__main__":
    main()
