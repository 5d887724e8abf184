"""Rich renderables for grid states."""

from __future__ import annotations

from collections.abc import Collection

import rich.box
from rich.table import Table

from tileslide.models.grid import GridState


def moved_cells(before: GridState, after: GridState) -> set[tuple[int, int]]:
    """Cells of *after* holding a tile that was not there in *before*."""
    size = after.size
    out: set[tuple[int, int]] = set()
    for i, (old, new) in enumerate(zip(before.labels, after.labels)):
        if old != new and not after.is_blank(new):
            out.add(size.coords(i))
    return out


def _blank_cell(state: GridState, label: int, width: int) -> str:
    if state.blank_count == 1:
        return "[dim]·[/dim]"
    # multi-blank moves name their blank, e.g. D2#14
    return f"[dim]{'#' + str(label):>{width}}[/dim]"


def render_grid(state: GridState, highlight: Collection[tuple[int, int]] = ()) -> Table:
    """Return a Rich Table of the grid in display numbering.

    Tiles on their home cell are green.  Cells in *highlight*, typically the
    tiles moved by the last slide, are drawn in reverse video.
    """
    width = len(str(state.tile_count))
    if state.blank_count > 1:
        width = max(width, len(str(state.size.area - 1)) + 1)

    table = Table(
        show_header=False,
        show_edge=True,
        box=rich.box.HEAVY,
        border_style="bright_blue",
        padding=(0, 1),
    )
    for _ in range(state.size.cols):
        table.add_column(width=width + 1, justify="center")

    for r, row in enumerate(state.rows()):
        cells: list[str] = []
        for c, label in enumerate(row):
            if state.is_blank(label):
                cells.append(_blank_cell(state, label, width))
                continue
            style = "bold green" if state.is_tile_correct(r, c) else "bold white"
            if (r, c) in highlight:
                style = "bold reverse yellow"
            cells.append(f"[{style}]{label + 1:>{width}}[/{style}]")
        table.add_row(*cells)

    return table
