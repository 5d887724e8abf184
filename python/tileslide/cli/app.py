"""Command-line front end.

Usage::

    tileslide scramble -r 3 -c 3 --seed 7
    tileslide solve "1 2 3/4 5 6/7 0 8"
    tileslide check "1 2 3/4 5 6/8 7 0"
"""

from __future__ import annotations

import logging
import random
import time
from typing import Optional

import typer
from rich.align import Align
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from tileslide.cli.render import moved_cells, render_grid
from tileslide.config import DEFAULT_MAX_BOUND, SearchBudget, SolverSettings, TieBreak
from tileslide.engine.heuristic import HeuristicKind, heuristic
from tileslide.engine.permutation import PermutationAnalyzer
from tileslide.engine.scrambler import Cycle, RandomMoves, RandomState, Scrambler, Strategy
from tileslide.engine.solver import Solution, Solver
from tileslide.models.errors import TilePuzzleError
from tileslide.models.grid import GridState, Size
from tileslide.models.moves import Metric

console = Console()

app = typer.Typer(add_completion=False, help="Sliding tile puzzle toolkit.")


# -- helpers ------------------------------------------------------------------


def _parse_state(text: str) -> GridState:
    try:
        return GridState.from_display(text)
    except TilePuzzleError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(code=1) from None


def _grid_panel(
    state: GridState, title: str, highlight: set[tuple[int, int]] | None = None
) -> Panel:
    return Panel(
        Align.center(render_grid(state, highlight or ())),
        title=f"[bold cyan]{title}[/bold cyan]",
        border_style="cyan",
        padding=(1, 2),
    )


def _print_solution(solution: Solution) -> None:
    stats = solution.stats
    if solution.unsolvable:
        console.print(f"[red]Unsolvable:[/red] {solution.reason}.")
        return
    if solution.budget_exceeded:
        console.print(
            f"[yellow]No solution within budget:[/yellow] {solution.reason} "
            f"(last bound {stats.final_bound}, {stats.expanded} nodes)."
        )
        return
    if not solution.moves:
        console.print("[green]Already solved![/green]")
        return

    moves = solution.moves
    summary = Text()
    summary.append("  Solution: ", style="dim")
    summary.append(str(moves.combined()), style="bold yellow")
    summary.append(f"\n  {moves.len_stm} moves (STM), ", style="dim")
    summary.append(f"{moves.combined().len_mtm} slides (MTM)", style="dim")
    summary.append(
        f"\n  {stats.expanded} nodes expanded in {len(stats.iterations)} "
        f"iterations, {stats.elapsed:.3f}s",
        style="dim",
    )
    console.print(summary)


def _animate(solution: Solution, delay: float) -> None:
    total = len(solution.moves)
    previous = solution.start
    for i, frame in enumerate(solution.frames()):
        moved = moved_cells(previous, frame)
        previous = frame
        console.clear()
        console.print()
        console.print(Align.center(_grid_panel(frame, f"Auto-Solve  {frame.size}", moved)))
        progress = Text()
        if i:
            progress.append(f"  Solving… move {i}/{total} ", style="bold cyan")
            progress.append(f"({solution.moves[i - 1]})", style="dim")
        console.print(Align.center(progress))
        time.sleep(delay)


# -- commands -----------------------------------------------------------------


@app.callback()
def main(
    verbose: bool = typer.Option(
        False, "-v", "--verbose", help="Show solver progress logs.",
    ),
) -> None:
    """Sliding tile puzzle toolkit."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


@app.command("scramble")
def scramble_cmd(
    rows: int = typer.Option(4, "-r", "--rows", min=1, help="Number of rows."),
    cols: int = typer.Option(4, "-c", "--cols", min=1, help="Number of columns."),
    blanks: int = typer.Option(1, "-b", "--blanks", min=1, help="Number of blank cells."),
    seed: Optional[int] = typer.Option(None, "--seed", help="Seed for a reproducible scramble."),
    walk: Optional[int] = typer.Option(
        None, "--walk", min=0,
        help="Scramble with this many random moves instead of a uniform random state.",
    ),
    cycle: Optional[int] = typer.Option(
        None, "--cycle", min=2,
        help="Scramble by rotating this many random tiles in one cycle.",
    ),
) -> None:
    """Print a random solvable puzzle."""
    rng = random.Random(seed)
    strategy: Strategy = RandomState()
    if walk is not None:
        strategy = RandomMoves(moves=walk)
    elif cycle is not None:
        strategy = Cycle(length=cycle)
    try:
        state = Scrambler.scramble(Size(rows, cols), rng, blank_count=blanks, strategy=strategy)
    except TilePuzzleError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(code=1) from None

    console.print(Align.center(_grid_panel(state, f"Scramble  {state.size}")))
    console.print(str(state))


@app.command("solve")
def solve_cmd(
    state_text: str = typer.Argument(..., metavar="STATE", help='Puzzle such as "1 2 3/4 5 6/7 0 8".'),
    heuristic_kind: HeuristicKind = typer.Option(
        HeuristicKind.MANHATTAN, "--heuristic", help="Lower bound used to prune the search.",
    ),
    tie_break: TieBreak = typer.Option(
        TieBreak.CANONICAL, "--tie-break", help="Order in which moves are explored.",
    ),
    metric: Metric = typer.Option(
        Metric.STM, "--metric", help="stm counts every tile moved, mtm counts each slide once.",
    ),
    max_bound: int = typer.Option(
        DEFAULT_MAX_BOUND, "--max-bound", min=0, help="Give up beyond this solution length.",
    ),
    max_nodes: Optional[int] = typer.Option(
        None, "--max-nodes", min=0, help="Give up after expanding this many nodes.",
    ),
    time_limit: Optional[float] = typer.Option(
        None, "--time-limit", min=0.0, help="Give up after this many seconds.",
    ),
    animate: bool = typer.Option(False, "--animate", help="Replay the solution frame by frame."),
    delay: float = typer.Option(0.05, "--delay", min=0.0, help="Seconds between animation frames."),
) -> None:
    """Find an optimal solution."""
    state = _parse_state(state_text)
    settings = SolverSettings(
        heuristic=heuristic_kind,
        tie_break=tie_break,
        metric=metric,
        budget=SearchBudget(max_bound=max_bound, max_nodes=max_nodes, time_limit=time_limit),
    )
    solution = Solver(settings).solve(state)

    if animate and solution.solved and solution.moves:
        _animate(solution, delay)
    else:
        console.print(Align.center(_grid_panel(state, f"Puzzle  {state.size}")))
    _print_solution(solution)
    if not solution.solved:
        raise typer.Exit(code=1)


@app.command("check")
def check_cmd(
    state_text: str = typer.Argument(..., metavar="STATE", help='Puzzle such as "1 2 3/4 5 6/8 7 0".'),
) -> None:
    """Report solvability, parity and heuristic values."""
    state = _parse_state(state_text)
    sig = PermutationAnalyzer.signature(state)
    solvable = PermutationAnalyzer.is_solvable(state)

    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_row("Size", f"{state.size} ({state.variant})")
    table.add_row("Solved", "yes" if state.is_solved() else "no")
    table.add_row("Solvable", "[green]yes[/green]" if solvable else "[red]no[/red]")
    table.add_row("Parity", "odd" if sig.parity else "even")
    table.add_row("Blank offset", f"{sig.blank_offset[0]:+d} rows, {sig.blank_offset[1]:+d} cols")
    table.add_row("Cycles", " ".join(
        "(" + " ".join(str(i) for i in cycle) + ")"
        for cycle in PermutationAnalyzer.cycles(state)
    ) or "none")
    for kind in HeuristicKind:
        table.add_row(kind.value.replace("_", " ").capitalize(), str(heuristic(state, kind)))

    console.print(Align.center(_grid_panel(state, f"Puzzle  {state.size}")))
    console.print(table)
