"""
speakscore.cli - Typer CLI entry point.

Provides subcommands for analyzing recordings, validating uploads and
checking the environment.
"""

from __future__ import annotations

import mimetypes
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from speakscore import __version__
from speakscore.config import CONFIG_FILENAME, AnalysisConfig, create_default_config, write_config
from speakscore.exceptions import SpeakScoreError
from speakscore.logging import configure_logging
from speakscore.utils import format_duration, format_size, get_score_style

app = typer.Typer(
    name="speakscore",
    help="Public-speaking delivery scoring.\n\n"
    "Scores speech rate, intonation, vocal energy and pauses of a recorded talk "
    "from its audio and time-aligned transcript.",
    add_completion=False,
)
console = Console()


def version_callback(value: bool) -> None:
    if value:
        console.print(f"speakscore {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """SpeakScore - public-speaking delivery scoring."""
    pass


def _load_config(config_file: str | None) -> AnalysisConfig:
    from speakscore.config import load_config

    if config_file is not None:
        return load_config(Path(config_file))
    default = Path.cwd() / CONFIG_FILENAME
    if default.exists():
        return load_config(default)
    return AnalysisConfig()


@app.command("init")
def init_config(
    path: str = typer.Option(".", "--path", "-d", help="Directory to write the config file in"),
) -> None:
    """Write a speakscore.yaml with the default analysis parameters."""
    config_path = Path(path) / CONFIG_FILENAME
    if config_path.exists():
        console.print(f"[red]Error: '{config_path}' already exists[/red]")
        raise typer.Exit(1)

    write_config(create_default_config(), config_path)
    console.print(f"[green]✓[/green] Wrote {config_path}")


@app.command("analyze")
def analyze_recording(
    audio_file: str = typer.Argument(..., help="Recording to analyze"),
    transcript_file: str | None = typer.Option(
        None, "--transcript", "-t", help="Transcription response JSON (text + segments)"
    ),
    output: str | None = typer.Option(None, "--output", "-o", help="Write result JSON here"),
    config_file: str | None = typer.Option(None, "--config", "-c", help="Config YAML file"),
    convert: bool = typer.Option(
        False, "--convert", help="Normalise the recording with FFmpeg before decoding"
    ),
    no_series: bool = typer.Option(
        False, "--no-series", help="Leave pitch and energy time series out of the JSON"
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging"),
) -> None:
    """Score the delivery of a recorded talk."""
    configure_logging(verbose)

    audio = Path(audio_file)
    if not audio.exists():
        console.print(f"[red]Error: Audio file not found: {audio}[/red]")
        raise typer.Exit(1)

    from speakscore.analyze.delivery import analyze
    from speakscore.audio.convert import convert_to_wav
    from speakscore.audio.loader import decode_audio, load_audio
    from speakscore.io import read_transcript, write_result
    from speakscore.models import TranscriptInput

    try:
        config = _load_config(config_file)

        console.print(f"[cyan]Analyzing {audio.name}...[/cyan]")
        if convert:
            wav = convert_to_wav(audio.read_bytes(), config.target_sample_rate, console=console)
            buffer = decode_audio(wav)
        else:
            buffer = load_audio(audio)

        if transcript_file is not None:
            transcript_input = read_transcript(
                Path(transcript_file), duration=buffer.duration_seconds
            )
        else:
            console.print("[yellow]No transcript given; speech rate will not be scored[/yellow]")
            transcript_input = TranscriptInput()

        result = analyze(buffer, transcript_input, config)
    except (SpeakScoreError, FileNotFoundError, ValueError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    table = Table(title=f"Delivery Scores ({format_duration(result.audio.duration_seconds)})")
    table.add_column("Metric", style="cyan")
    table.add_column("Value")
    table.add_column("Category", style="yellow")
    table.add_column("Score", justify="right")
    table.add_column("Feedback", style="dim")

    rows = [
        ("Speech rate", f"{result.speech_rate.avg_wpm:.0f} wpm", result.speech_rate),
        ("Intonation", f"σ {result.intonation.std_dev:.1f} Hz", result.intonation),
        ("Energy", f"{result.energy.average_energy:.4f} RMS", result.energy),
        ("Pauses", f"{result.pauses.total_pauses} ({result.pauses.pause_rate:.2f}/s)", result.pauses),
    ]
    for name, value, metrics in rows:
        category = metrics.category.value if metrics.category is not None else "-"
        style = get_score_style(metrics.score)
        table.add_row(
            name, value, category, f"[{style}]{metrics.score:.1f}[/{style}]", metrics.feedback
        )

    console.print(table)
    style = get_score_style(result.overall_score)
    console.print(f"\nOverall score: [{style}]{result.overall_score:.1f}[/{style}]")

    if output is not None:
        write_result(Path(output), result, include_series=not no_series)
        console.print(f"[green]✓[/green] Result written to {output}")


@app.command("validate")
def validate_upload(
    audio_file: str = typer.Argument(..., help="Audio file to validate"),
    content_type: str | None = typer.Option(
        None, "--content-type", help="MIME type (guessed from the filename if omitted)"
    ),
    config_file: str | None = typer.Option(None, "--config", "-c", help="Config YAML file"),
    no_convert: bool = typer.Option(
        False, "--no-convert", help="Decode directly instead of normalising with FFmpeg"
    ),
) -> None:
    """Check an audio file against the upload limits."""
    from speakscore.validation import validate_audio_file

    audio = Path(audio_file)
    if not audio.is_file():
        console.print(f"[red]Error: Audio file not found: {audio}[/red]")
        raise typer.Exit(1)

    try:
        config = _load_config(config_file)
    except (SpeakScoreError, FileNotFoundError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    data = audio.read_bytes()
    content_type = content_type or mimetypes.guess_type(audio.name)[0]
    result = validate_audio_file(
        data,
        filename=audio.name,
        content_type=content_type,
        config=config,
        convert=not no_convert,
    )

    console.print(
        f"[dim]  {audio.name}: {format_size(len(data))}, {content_type or 'unknown type'}[/dim]"
    )
    if result["valid"]:
        console.print(
            f"[green]✓[/green] Valid ({format_duration(result['duration_seconds'])} of audio)"
        )
    else:
        console.print(f"[red]✗[/red] {result['error_message']}")
        raise typer.Exit(1)


@app.command("doctor")
def run_doctor() -> None:
    """Check dependencies and environment setup."""
    console.print("[cyan]Running preflight checks...[/cyan]\n")

    from speakscore.exceptions import DependencyError
    from speakscore.validation import check_ffmpeg, check_librosa

    table = Table(title="Dependency Status")
    table.add_column("Component", style="cyan")
    table.add_column("Status", style="green")
    table.add_column("Version/Details")

    all_passed = True

    try:
        versions = check_ffmpeg()
        table.add_row("FFmpeg", "✓ Installed", versions.get("ffmpeg_version", "unknown"))
    except DependencyError as e:
        table.add_row("FFmpeg", "✗ Missing", e.install_hint or "")
        all_passed = False

    try:
        versions = check_librosa()
        table.add_row("librosa", "✓ Installed", versions.get("librosa_version", "unknown"))
    except DependencyError as e:
        table.add_row("librosa", "✗ Missing", e.install_hint or "")
        all_passed = False

    console.print(table)

    if all_passed:
        console.print("\n[green]✓ All checks passed[/green]")
    else:
        console.print("\n[yellow]⚠ Some checks failed[/yellow]")
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
