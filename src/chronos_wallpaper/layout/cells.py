"""Cell enumeration and past/current/future state assignment."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ..model import LifeView, ViewMode
from ..temporal import TemporalContext
from .planner import GridSpec


class CellState(str, Enum):
    PAST = "past"
    CURRENT = "current"
    FUTURE = "future"
    EMPTY = "empty"  # calendar padding, never drawn


@dataclass(frozen=True)
class Cell:
    """One grid unit.

    ``index`` is the day-of-year (1-based) in the year view and the week
    offset since birth (0-based) in the life view; empty cells carry 0.
    ``block`` is the month block for the months layout, else None.
    """

    index: int
    row: int
    col: int
    state: CellState
    block: int | None = None

    @property
    def drawn(self) -> bool:
        return self.state is not CellState.EMPTY


def color_of(cell_index: int, current_index: int) -> CellState:
    if cell_index < current_index:
        return CellState.PAST
    if cell_index == current_index:
        return CellState.CURRENT
    return CellState.FUTURE


def current_index(view: ViewMode, temporal: TemporalContext) -> int:
    """Progress index for ``view``, clamped to the last valid cell."""
    if isinstance(view, LifeView):
        return min(max(temporal.weeks_lived, 0), temporal.total_life_weeks - 1)
    return min(max(temporal.current_day_of_year, 1), temporal.total_days_in_year)


def layout_cells(grid: GridSpec, view: ViewMode, temporal: TemporalContext) -> tuple[Cell, ...]:
    """Every cell of ``grid`` in drawing order, with its state assigned."""
    current = current_index(view, temporal)

    if grid.layout == "life":
        return tuple(
            Cell(index=i, row=i // grid.columns, col=i % grid.columns, state=color_of(i, current))
            for i in range(temporal.total_life_weeks)
        )

    if grid.layout == "days":
        cells = [
            Cell(index=0, row=slot // grid.columns, col=slot % grid.columns, state=CellState.EMPTY)
            for slot in range(grid.start_offset)
        ]
        for day in range(1, temporal.total_days_in_year + 1):
            slot = day - 1 + grid.start_offset
            cells.append(
                Cell(
                    index=day,
                    row=slot // grid.columns,
                    col=slot % grid.columns,
                    state=color_of(day, current),
                )
            )
        return tuple(cells)

    cells = []
    for block in grid.blocks:
        columns = block.density.columns
        for i in range(block.density.cells):
            day_num = i - block.leading_blanks + 1
            row, col = divmod(i, columns)
            if 1 <= day_num <= block.day_count:
                day = block.first_day + day_num - 1
                cells.append(Cell(day, row, col, color_of(day, current), block.index))
            else:
                cells.append(Cell(0, row, col, CellState.EMPTY, block.index))
    return tuple(cells)
