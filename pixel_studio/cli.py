"""Rich command-line interface powered by Typer."""

from __future__ import annotations

import logging
import time
from pathlib import Path

import numpy as np
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel

from pixel_studio.config import StudioConfig
from pixel_studio.errors import InvalidArgument
from pixel_studio.image_io import load_grid, make_comparison_grid, save_grid
from pixel_studio.operations import OPERATIONS, apply_operation
from pixel_studio.patterns import PATTERNS
from pixel_studio.script import ScriptRunner

app = typer.Typer(
    name="pixel-studio",
    help="Filter, dither, mosaic and generate images.",
    add_completion=False,
    rich_markup_mode="rich",
)
console = Console()


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False, markup=True)],
    )


def _collect_images(folder: Path, extensions: frozenset[str]) -> list[Path]:
    if not folder.exists():
        return []
    return sorted(
        f for f in folder.iterdir()
        if f.is_file() and f.suffix.lower() in extensions
    )


def _fail(exc: Exception) -> typer.Exit:
    console.print(f"[red]Error:[/red] {exc}")
    return typer.Exit(1)


# Defaults come from StudioConfig - single source of truth
_DEFAULTS = StudioConfig()


# -- run command -------------------------------------------------------

@app.command()
def run(
    script: Path = typer.Argument(..., help="Batch script file"),
    base_dir: Path | None = typer.Option(
        None, "--base-dir", "-d",
        help="Resolve relative load/save paths here (default: working dir)",
    ),
    seed: int | None = typer.Option(
        _DEFAULTS.seed, "--seed", "-s", help="Random seed for mosaicing",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Execute a batch SCRIPT of load/filter/generate/save commands."""
    _setup_logging(verbose)

    try:
        text = script.read_text()
    except OSError as exc:
        raise _fail(exc) from exc

    t0 = time.perf_counter()
    runner = ScriptRunner(rng=seed, base_dir=base_dir)
    try:
        grid = runner.run(text)
    except InvalidArgument as exc:
        raise _fail(exc) from exc

    console.print(
        f"[green]✓[/green] {script.name}  "
        f"[dim]final image {grid.width}x{grid.height}"
        f"  time={time.perf_counter() - t0:.1f}s[/dim]"
    )


# -- single-image command ----------------------------------------------

@app.command()
def apply(
    source: Path = typer.Argument(..., help="Path to the source image"),
    operation: str = typer.Argument(..., help=f"One of: {', '.join(OPERATIONS)}"),
    output: Path = typer.Option(Path("output/result.png"), "--output", "-o"),
    seeds: int = typer.Option(
        _DEFAULTS.mosaic_seeds, "--seeds", "-n", help="Mosaic seed count",
    ),
    seed: int | None = typer.Option(_DEFAULTS.seed, "--seed", "-s"),
    upscale: int = typer.Option(_DEFAULTS.pixel_upscale, "--upscale", "-u"),
    compare: bool = typer.Option(
        _DEFAULTS.save_comparison, "--compare/--no-compare",
        help="Also save a before/after panel",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Apply one OPERATION to a single image."""
    _setup_logging(verbose)

    output.parent.mkdir(parents=True, exist_ok=True)

    try:
        grid = load_grid(source)
    except OSError as exc:
        raise _fail(exc) from exc

    try:
        result = apply_operation(grid, operation, seeds, np.random.default_rng(seed))
    except InvalidArgument as exc:
        raise _fail(exc) from exc

    try:
        save_grid(result, output, upscale)
        if compare:
            comp_path = output.with_name(f"{output.stem}_comparison{output.suffix}")
            make_comparison_grid(grid, result, comp_path, upscale)
    except (OSError, ValueError) as exc:
        raise _fail(exc) from exc

    console.print(
        f"[green]✓[/green] Saved to {output}  "
        f"[dim]{operation}  {result.width}x{result.height}[/dim]"
    )


# -- generate command --------------------------------------------------

@app.command()
def generate(
    pattern: str = typer.Argument(..., help=f"One of: {', '.join(PATTERNS)}"),
    output: Path = typer.Option(Path("output/pattern.png"), "--output", "-o"),
    height: int = typer.Option(90, "--height", "-H"),
    width: int = typer.Option(135, "--width", "-W"),
    direction: str = typer.Option("h", "--direction", help="Rainbow stripes: 'h' or 'v'"),
    size: int = typer.Option(16, "--size", help="Checkerboard square size"),
    upscale: int = typer.Option(_DEFAULTS.pixel_upscale, "--upscale", "-u"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Generate a flag or checkerboard PATTERN from parameters alone."""
    _setup_logging(verbose)

    if pattern not in PATTERNS:
        raise _fail(InvalidArgument(
            f"Unknown pattern '{pattern}'. Available: {', '.join(PATTERNS)}",
        ))

    try:
        if pattern == "checkerboard":
            grid = PATTERNS[pattern](size)
        elif pattern == "rainbowFlag":
            grid = PATTERNS[pattern](height, width, direction)
        else:
            grid = PATTERNS[pattern](height, width)
    except InvalidArgument as exc:
        raise _fail(exc) from exc

    output.parent.mkdir(parents=True, exist_ok=True)
    try:
        save_grid(grid, output, upscale)
    except (OSError, ValueError) as exc:
        raise _fail(exc) from exc
    console.print(
        f"[green]✓[/green] Saved to {output}  "
        f"[dim]{pattern}  {grid.width}x{grid.height}[/dim]"
    )


# -- batch command -----------------------------------------------------

@app.command()
def batch(
    operation: str = typer.Argument(..., help=f"One of: {', '.join(OPERATIONS)}"),
    input_dir: Path = typer.Option(
        _DEFAULTS.input_dir, "--input", "-i", help="Folder with source images",
    ),
    output_dir: Path = typer.Option(
        _DEFAULTS.output_dir, "--output", "-o", help="Results folder",
    ),
    seeds: int = typer.Option(_DEFAULTS.mosaic_seeds, "--seeds", "-n"),
    seed: int | None = typer.Option(_DEFAULTS.seed, "--seed", "-s"),
    upscale: int = typer.Option(_DEFAULTS.pixel_upscale, "--upscale", "-u"),
    compare: bool = typer.Option(_DEFAULTS.save_comparison, "--compare/--no-compare"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Apply OPERATION to every image in INPUT_DIR, writing to OUTPUT_DIR."""
    _setup_logging(verbose)
    logger = logging.getLogger("pixel_studio")

    cfg = StudioConfig(
        seed=seed,
        mosaic_seeds=seeds,
        pixel_upscale=upscale,
        save_comparison=compare,
        input_dir=input_dir,
        output_dir=output_dir,
    )

    images = _collect_images(input_dir, cfg.SUPPORTED_EXTENSIONS)
    if not images:
        console.print(f"\n[yellow]No images found in {input_dir}/[/yellow]")
        raise typer.Exit(0)

    output_dir.mkdir(parents=True, exist_ok=True)
    rng = np.random.default_rng(cfg.seed)

    console.print(Panel.fit(
        f"[bold]PIXEL STUDIO[/bold]\n"
        f"Operation: {operation}  |  Images: {len(images)}",
        border_style="cyan",
    ))

    for idx, img_path in enumerate(images, 1):
        console.rule(f"[bold cyan][{idx}/{len(images)}] {img_path.name}[/bold cyan]")
        t0 = time.perf_counter()

        try:
            grid = load_grid(img_path)
        except OSError as exc:
            raise _fail(exc) from exc
        logger.info("Source: %dx%d", grid.width, grid.height)
        try:
            result = apply_operation(grid, operation, cfg.mosaic_seeds, rng)
        except InvalidArgument as exc:
            raise _fail(exc) from exc

        out_path = output_dir / f"{img_path.stem}_{operation}.{cfg.output_format}"
        try:
            save_grid(result, out_path, cfg.pixel_upscale)
            if cfg.save_comparison:
                comp_path = output_dir / f"{img_path.stem}_comparison.{cfg.output_format}"
                make_comparison_grid(grid, result, comp_path, cfg.pixel_upscale)
        except (OSError, ValueError) as exc:
            raise _fail(exc) from exc

        console.print(
            f"  [green]✓[/green] {out_path.name}  "
            f"[dim]time={time.perf_counter() - t0:.1f}s[/dim]"
        )

    console.print(Panel.fit(
        f"[bold green]ALL DONE[/bold green] - results in [bold]{output_dir}/[/bold]",
        border_style="green",
    ))


if __name__ == "__main__":
    app()
