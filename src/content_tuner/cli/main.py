"""
Main CLI application for content-tuner.

Provides the command-line interface for:
- Scoring coefficients against the test corpus
- Tuning coefficients by simulated annealing
- Managing configuration
"""

import random
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from content_tuner import __version__
from content_tuner.config import Settings, get_default_config_path, load_config
from content_tuner.core.exceptions import ConfigurationError, ContentTunerError
from content_tuner.utils.logging import get_logger, setup_logging

COEFFICIENT_NAMES = (
    "link_density",
    "paragraph_tag",
    "length",
    "different_depth",
    "different_tag",
    "same_tag",
    "stride",
)

app = typer.Typer(
    name="content-tuner",
    help="Extract main page content and tune the extractor against a corpus",
    add_completion=False,
)

console = Console()
logger = get_logger(__name__)


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        console.print(f"[bold blue]content-tuner[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Enable verbose logging",
    ),
) -> None:
    """
    Score the current coefficients against the test corpus.

    Runs 'score' when no command is given.
    """
    ctx.obj = {"verbose": verbose}
    if ctx.invoked_subcommand is None:
        _run_score(
            config_file=None,
            corpus=None,
            coefficients=None,
            tune=False,
            cooling_steps=None,
            steps_per_temp=None,
            seed=None,
            verbose=verbose,
        )


def parse_coefficients(text: str) -> list[float]:
    """Parse a comma-separated coefficient vector."""
    try:
        return [float(part) for part in text.split(",") if part.strip()]
    except ValueError as e:
        raise ConfigurationError(
            "Coefficients must be comma-separated numbers",
            details={"value": text},
        ) from e


@app.command()
def score(
    ctx: typer.Context,
    tune: bool = typer.Option(
        False,
        "--tune",
        "-t",
        help="Tune coefficients by simulated annealing before scoring",
    ),
    config_file: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to configuration file",
        exists=True,
        dir_okay=False,
    ),
    corpus: Optional[Path] = typer.Option(
        None,
        "--corpus",
        help="Corpus directory with one sub-directory per test case",
    ),
    coefficients: Optional[str] = typer.Option(
        None,
        "--coefficients",
        help="Comma-separated coefficient vector to start from",
    ),
    cooling_steps: Optional[int] = typer.Option(
        None,
        "--cooling-steps",
        help="Number of annealing temperature reductions",
        min=1,
    ),
    steps_per_temp: Optional[int] = typer.Option(
        None,
        "--steps-per-temp",
        help="Maximum transitions tried per temperature",
        min=1,
    ),
    seed: Optional[int] = typer.Option(
        None,
        "--seed",
        help="Random seed for tuning",
    ),
) -> None:
    """
    Print the active coefficients and their deviation score.

    Examples:
        content-tuner score --corpus data/readability_test_data
        content-tuner score --tune --cooling-steps 20 --seed 1
    """
    _run_score(
        config_file=config_file,
        corpus=corpus,
        coefficients=coefficients,
        tune=tune,
        cooling_steps=cooling_steps,
        steps_per_temp=steps_per_temp,
        seed=seed,
        verbose=bool(ctx.obj and ctx.obj.get("verbose")),
    )


def _run_score(
    config_file: Optional[Path],
    corpus: Optional[Path],
    coefficients: Optional[str],
    tune: bool,
    cooling_steps: Optional[int],
    steps_per_temp: Optional[int],
    seed: Optional[int],
    verbose: bool,
) -> None:
    """Load settings, optionally tune, then report."""
    try:
        settings = load_config(config_file or get_default_config_path())
        setup_logging(settings.logging, level="DEBUG" if verbose else None)

        # Override with CLI options
        if corpus is not None:
            settings.corpus.root = corpus
        if coefficients is not None:
            settings.extraction.coefficients = parse_coefficients(coefficients)
        if cooling_steps is not None:
            settings.tuner.cooling_steps = cooling_steps
        if steps_per_temp is not None:
            settings.tuner.steps_per_temp = steps_per_temp
        if seed is not None:
            settings.tuner.seed = seed

        _score(settings, tune)
    except ContentTunerError as e:
        console.print(f"[red]Error:[/red] {e}")
        logger.debug("Scoring failed", exc_info=True)
        raise typer.Exit(1)
    except KeyboardInterrupt:
        console.print("\n[yellow]Cancelled by user[/yellow]")
        raise typer.Exit(1)


def _score(settings: Settings, tune: bool) -> None:
    """Score (and possibly tune) against the configured corpus."""
    from content_tuner.evaluation import deviation_score, readability_doc_pairs
    from content_tuner.extraction import Coefficients
    from content_tuner.tuning import CoefficientTuner

    coefficients = Coefficients.from_sequence(settings.extraction.coefficients)

    with console.status("[cyan]Loading corpus..."):
        doc_pairs = readability_doc_pairs(settings.corpus)

    if tune:
        tuner = CoefficientTuner.from_settings(settings, doc_pairs)
        with console.status("[cyan]Tuning coefficients..."):
            result = tuner.tune()
        coefficients = result.coefficients
        console.print(Panel(
            f"Iterations: [bold]{result.annealing.iterations}[/bold]\n"
            f"Uphill jumps: [bold]{result.annealing.jumps}[/bold]\n"
            f"Improvement: [bold]{result.improvement:.4f}[/bold] points",
            title="Tuning",
            border_style="blue",
        ))

    with console.status("[cyan]Scoring..."):
        deviation = deviation_score(doc_pairs, coefficients)

    table = Table(title="Tuned coefficients", show_header=True)
    table.add_column("Coefficient", style="cyan")
    table.add_column("Value", justify="right")
    for name, value in zip(COEFFICIENT_NAMES, coefficients.as_tuple()):
        table.add_row(name, f"{value:g}")
    console.print(table)

    console.print(
        f"% difference from ideal: [bold]{deviation:.4f}[/bold] "
        f"[dim]({len(doc_pairs)} test cases)[/dim]"
    )


@app.command()
def config(
    show: bool = typer.Option(
        False,
        "--show",
        "-s",
        help="Show current configuration",
    ),
    init: bool = typer.Option(
        False,
        "--init",
        help="Create default configuration file",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output path for config file",
    ),
) -> None:
    """
    Configuration management.

    Examples:
        content-tuner config --show
        content-tuner config --init --output ./my-config.yaml
    """
    if init:
        _init_config(output)
    elif show:
        _show_config()
    else:
        console.print(
            "Use --show to view config or --init to create default config")


def _show_config() -> None:
    """Show current configuration."""
    try:
        settings = load_config(get_default_config_path())
    except ContentTunerError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    console.print(Panel(
        "[bold]Current Configuration[/bold]",
        border_style="blue",
    ))

    for section, values in settings.model_dump(mode="json").items():
        console.print(f"\n[bold cyan]{section}:[/bold cyan]")
        for key, value in values.items():
            console.print(f"  {key}: [dim]{value}[/dim]")


def _init_config(output: Optional[Path]) -> None:
    """Create default configuration file."""
    import yaml

    config_dict = Settings().model_dump(mode="json")
    output_path = output or Path("config.yaml")

    if output_path.exists():
        if not typer.confirm(f"File {output_path} exists. Overwrite?"):
            raise typer.Exit(0)

    with open(output_path, "w", encoding="utf-8") as f:
        yaml.dump(config_dict, f, default_flow_style=False, sort_keys=False)

    console.print(f"[green]✓[/green] Configuration saved to: {output_path}")


if __name__ == "__main__":
    app()
