from __future__ import annotations

import json
from collections.abc import Sequence
from pathlib import Path
from typing import Optional, Tuple

import typer
from typer.main import get_command

from quadset.cli.common import build_index
from quadset.data import points_to_frame, save_points
from quadset.utils.atomic import atomic_write_text
from quadset.utils.loggers import log_output_written

app = typer.Typer(add_completion=False, no_args_is_help=True, rich_markup_mode="rich")


@app.command("query")
def cli_query(
    points: Path = typer.Argument(..., exists=True, dir_okay=False, help="CSV with x, y[, label] columns."),
    xl: float = typer.Option(..., "--xl", help="Lower x bound (inclusive)."),
    yl: float = typer.Option(..., "--yl", help="Lower y bound (inclusive)."),
    xu: float = typer.Option(..., "--xu", help="Upper x bound (inclusive)."),
    yu: float = typer.Option(..., "--yu", help="Upper y bound (inclusive)."),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="YAML config file."),
    transition_size: Optional[int] = typer.Option(None, "--transition-size", "-t"),
    out: Optional[Path] = typer.Option(None, "--out", "-o", help="Write matches to this CSV."),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Print (or save) every point inside the closed rectangle [xl, xu] x [yl, yu]."""
    tree, _ = build_index(points, config=config, transition_size=transition_size, verbose=verbose)
    found = tree.range_query(xl, yl, xu, yu)
    if out is not None:
        save_points(out, found)
        log_output_written(f"{len(found)} match(es)", out)
        return
    typer.echo(points_to_frame(found).to_csv(index=False), nl=False)


@app.command("dump")
def cli_dump(
    points: Path = typer.Argument(..., exists=True, dir_okay=False, help="CSV with x, y[, label] columns."),
    config: Optional[Path] = typer.Option(None, "--config", "-c"),
    transition_size: Optional[int] = typer.Option(None, "--transition-size", "-t"),
    out: Optional[Path] = typer.Option(None, "--out", "-o"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Print the tree structure, centroids between north and south subtrees."""
    from quadset.visualization.dump import format_tree

    tree, _ = build_index(points, config=config, transition_size=transition_size, verbose=verbose)
    text = format_tree(tree)
    if out is not None:
        atomic_write_text(out, text)
        log_output_written("tree dump", out)
        return
    typer.echo(text, nl=False)


@app.command("stats")
def cli_stats(
    points: Path = typer.Argument(..., exists=True, dir_okay=False, help="CSV with x, y[, label] columns."),
    config: Optional[Path] = typer.Option(None, "--config", "-c"),
    transition_size: Optional[int] = typer.Option(None, "--transition-size", "-t"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    from quadset.visualization.dump import format_stats

    tree, _ = build_index(points, config=config, transition_size=transition_size, verbose=verbose)
    typer.echo(json.dumps(format_stats(tree), indent=2))


@app.command("plot")
def cli_plot(
    points: Path = typer.Argument(..., exists=True, dir_okay=False, help="CSV with x, y[, label] columns."),
    out: Path = typer.Option(Path("quadtree.png"), "--out", "-o"),
    config: Optional[Path] = typer.Option(None, "--config", "-c"),
    transition_size: Optional[int] = typer.Option(None, "--transition-size", "-t"),
    query: Optional[Tuple[float, float, float, float]] = typer.Option(
        None, "--query", help="Overlay a query rectangle: XL YL XU YU."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Draw points and centroid split lines."""
    from quadset.visualization.partition import plot_partition

    tree, cfg = build_index(points, config=config, transition_size=transition_size, verbose=verbose)
    path = plot_partition(tree, out, cfg=cfg.plot, query=query)
    log_output_written("partition plot", path)


def run(argv: Sequence[str] | None = None, *, prog_name: str | None = None) -> None:
    cmd = get_command(app)
    cmd.main(args=None if argv is None else list(argv), prog_name=prog_name)


def main(argv: list[str] | None = None) -> None:
    run(argv, prog_name="quadset")


if __name__ == "__main__":
    main()
