"""Responsive grid geometry for the year and life views.

One planner serves every view. Each view contributes a ``Density``
(columns x rows of cells) and a few proportional constants; the planner
turns those into concrete pixel geometry that fits inside the safe area
of the canvas.

Safe area tiers (by aspect ratio = height / width):
  - taller than 2.0:1 -> top padding at least 28% (lock-screen clock)
  - taller than 2.1:1 -> side padding at most 12%
  - taller than 2.0:1 -> side padding at most 15%

Every cell size is capped by the exact horizontal and vertical fit of
the whole content block (cells, gaps, labels and stats footer), so the
grid never leaves the safe area whatever the canvas or spacing.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import date

from ..model import (
    CanvasSpec,
    DaysLayoutMode,
    LayoutConfig,
    LifeView,
    ViewMode,
    YearView,
    YearViewLayout,
)
from ..temporal import TemporalContext, days_in_month, first_weekday

logger = logging.getLogger(__name__)

MONTH_NAMES = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

# Life view: one row per year of an 80-year lifespan
LIFE_COLUMNS = 52
LIFE_ROWS = 80
LIFE_LABEL_EVERY = 5

# Year view, days layout: two weeks per row
DAYS_COLUMNS = 14

# Year view, months layout: 3x4 month blocks of 7x6 day cells
MONTH_BLOCK_COLUMNS = 3
MONTH_BLOCK_ROWS = 4
MONTH_GRID_COLUMNS = 7
MONTH_GRID_ROWS = 6
MONTHS_MAX_CELL = 20.0

# Dots in the dense layouts fill 70% of their raw pitch
DOT_FILL = 0.7

# Proportions relative to the cell size
DENSE_STATS_MARGIN = 2.0
DENSE_STATS_FONT = 0.8
MONTH_LABEL = 1.6  # label height; the row gap equals it
MONTH_STATS_MARGIN = 3.0 * MONTH_LABEL
LIFE_LABEL_MIN_PX = 8.0
LIFE_LABEL_SCALE = 1.2
LIFE_LABEL_MARGIN = 0.5  # of the cell size, at least one gap

TALL_ASPECT = 2.0
EXTRA_TALL_ASPECT = 2.1
TALL_MIN_TOP_PADDING = 0.28
TALL_MAX_SIDE_PADDING = 0.15
EXTRA_TALL_MAX_SIDE_PADDING = 0.12
TOP_FLOOR = 0.9


@dataclass(frozen=True)
class Density:
    columns: int
    rows: int

    @property
    def cells(self) -> int:
        return self.columns * self.rows


@dataclass(frozen=True)
class SafeArea:
    """Pixel insets reserved for device chrome."""

    top: float
    bottom: float
    side: float
    height: float  # usable height between top and bottom
    width: float  # usable width between the side insets


@dataclass(frozen=True)
class GridBlock:
    """One independently laid-out sub-grid: a month in the months layout."""

    index: int
    label: str
    label_x: float
    label_y: float
    origin_x: float
    origin_y: float
    leading_blanks: int
    day_count: int
    first_day: int  # day-of-year of the block's first day
    density: Density = Density(MONTH_GRID_COLUMNS, MONTH_GRID_ROWS)


@dataclass(frozen=True)
class GridLabel:
    """Row label drawn in the side gutter (life view years)."""

    text: str
    x: float  # right edge, just left of the grid
    y: float  # vertical center of the labelled row
    row: int


@dataclass(frozen=True)
class GridSpec:
    """Concrete geometry of a planned grid.

    For the months layout ``columns``/``rows`` count month blocks and the
    cells live in ``blocks``; otherwise they count cells directly.
    """

    layout: str
    columns: int
    rows: int
    cell_size: float
    gap: float
    origin_x: float
    origin_y: float
    grid_width: float
    grid_height: float
    safe_area_top: float
    safe_area_bottom: float
    side_padding: float
    stats_y: float
    stats_font_size: float
    label_size: float = 0.0
    start_offset: int = 0
    blocks: tuple[GridBlock, ...] = ()
    labels: tuple[GridLabel, ...] = ()

    @property
    def pitch(self) -> float:
        return self.cell_size + self.gap

    @property
    def bounds(self) -> tuple[float, float, float, float]:
        """(left, top, right, bottom) of the cell area, labels excluded for life."""
        return (
            self.origin_x,
            self.origin_y,
            self.origin_x + self.grid_width,
            self.origin_y + self.grid_height,
        )

    def cell_position(self, row: int, col: int, block: int | None = None) -> tuple[float, float]:
        """Top-left pixel of the cell at (row, col), inside ``block`` if given."""
        if block is None:
            base_x, base_y = self.origin_x, self.origin_y
        else:
            b = self.blocks[block]
            base_x, base_y = b.origin_x, b.origin_y
        return (base_x + col * self.pitch, base_y + row * self.pitch)


def safe_area(canvas: CanvasSpec, layout: LayoutConfig) -> SafeArea:
    """Apply aspect-ratio tiering to the configured padding ratios."""
    aspect = canvas.aspect_ratio
    top_ratio = layout.top_padding
    if aspect > TALL_ASPECT:
        top_ratio = max(top_ratio, TALL_MIN_TOP_PADDING)

    side_ratio = layout.side_padding
    if aspect > EXTRA_TALL_ASPECT:
        side_ratio = min(side_ratio, EXTRA_TALL_MAX_SIDE_PADDING)
    elif aspect > TALL_ASPECT:
        side_ratio = min(side_ratio, TALL_MAX_SIDE_PADDING)

    top = canvas.height * top_ratio
    bottom = canvas.height * layout.bottom_padding
    side = canvas.width * side_ratio
    return SafeArea(
        top=top,
        bottom=bottom,
        side=side,
        height=max(0.0, canvas.height - top - bottom),
        width=max(0.0, canvas.width - 2 * side),
    )


def fit_cell(
    width_budget: float,
    height_budget: float,
    horizontal_units: float,
    vertical_units: float,
) -> float:
    """Largest cell size for content measuring the given units of cell size."""
    if horizontal_units <= 0 or vertical_units <= 0:
        return 0.0
    return max(0.0, min(width_budget / horizontal_units, height_budget / vertical_units))


def days_start_offset(year: int, view: YearView) -> int:
    """Blank cells before January 1 in the days layout."""
    if view.days_layout_mode != DaysLayoutMode.CALENDAR:
        return 0
    return first_weekday(date(year, 1, 1), view.is_monday_first)


def plan_grid(
    canvas: CanvasSpec,
    view: ViewMode,
    layout: LayoutConfig,
    temporal: TemporalContext,
) -> GridSpec:
    """Compute the grid geometry for ``view`` on ``canvas``."""
    area = safe_area(canvas, layout)
    if isinstance(view, LifeView):
        grid = _plan_life(area, view, layout)
    elif view.year_view_layout == YearViewLayout.DAYS:
        grid = _plan_days(area, view, layout, temporal)
    else:
        grid = _plan_months(area, view, layout, temporal)

    logger.debug(
        "Planned %s grid on %dx%d: %dx%d cell=%.2f gap=%.2f origin=(%.1f, %.1f)",
        grid.layout,
        canvas.width,
        canvas.height,
        grid.columns,
        grid.rows,
        grid.cell_size,
        grid.gap,
        grid.origin_x,
        grid.origin_y,
    )
    return grid


def _plan_dense(
    area: SafeArea, density: Density, layout: LayoutConfig
) -> tuple[float, float, float, float, float, float]:
    """Shared sizing for the flat layouts (days and life).

    Returns (cell, gap, origin_x, origin_y, grid_width, grid_height).
    """
    gap_ratio = layout.dot_spacing * 0.5
    raw = min(area.width / density.columns, area.height / (density.rows + 2)) * DOT_FILL
    exact = fit_cell(
        area.width,
        area.height,
        density.columns + (density.columns - 1) * gap_ratio,
        density.rows + (density.rows - 1) * gap_ratio + DENSE_STATS_MARGIN + DENSE_STATS_FONT,
    )
    cell = min(raw, exact)
    gap = cell * gap_ratio

    grid_width = density.columns * (cell + gap) - gap
    grid_height = density.rows * (cell + gap) - gap
    content_height = grid_height + cell * (DENSE_STATS_MARGIN + DENSE_STATS_FONT)

    origin_x = area.side + (area.width - grid_width) / 2
    centered_y = area.top + (area.height - content_height) / 2
    origin_y = max(area.top * TOP_FLOOR, centered_y)
    return cell, gap, origin_x, origin_y, grid_width, grid_height


def _plan_life(area: SafeArea, view: LifeView, layout: LayoutConfig) -> GridSpec:
    density = Density(LIFE_COLUMNS, LIFE_ROWS)
    cell, gap, origin_x, origin_y, grid_width, grid_height = _plan_dense(area, density, layout)

    # Right edge of the labels, just left of the first column
    label_x = origin_x - max(gap, cell * LIFE_LABEL_MARGIN)
    labels = tuple(
        GridLabel(
            text=str(view.birth_date.year + row),
            x=label_x,
            y=origin_y + row * (cell + gap) + cell / 2,
            row=row,
        )
        for row in range(0, LIFE_ROWS, LIFE_LABEL_EVERY)
    )

    return GridSpec(
        layout="life",
        columns=density.columns,
        rows=density.rows,
        cell_size=cell,
        gap=gap,
        origin_x=origin_x,
        origin_y=origin_y,
        grid_width=grid_width,
        grid_height=grid_height,
        safe_area_top=area.top,
        safe_area_bottom=area.bottom,
        side_padding=area.side,
        stats_y=origin_y + grid_height + cell * DENSE_STATS_MARGIN,
        stats_font_size=cell * DENSE_STATS_FONT,
        label_size=max(cell * LIFE_LABEL_SCALE, LIFE_LABEL_MIN_PX),
        labels=labels,
    )


def _plan_days(
    area: SafeArea, view: YearView, layout: LayoutConfig, temporal: TemporalContext
) -> GridSpec:
    offset = days_start_offset(temporal.year, view)
    rows = math.ceil((offset + temporal.total_days_in_year) / DAYS_COLUMNS)
    density = Density(DAYS_COLUMNS, rows)
    cell, gap, origin_x, origin_y, grid_width, grid_height = _plan_dense(area, density, layout)

    return GridSpec(
        layout="days",
        columns=density.columns,
        rows=density.rows,
        cell_size=cell,
        gap=gap,
        origin_x=origin_x,
        origin_y=origin_y,
        grid_width=grid_width,
        grid_height=grid_height,
        safe_area_top=area.top,
        safe_area_bottom=area.bottom,
        side_padding=area.side,
        stats_y=origin_y + grid_height + cell * DENSE_STATS_MARGIN,
        stats_font_size=cell * DENSE_STATS_FONT,
        start_offset=offset,
    )


def _plan_months(
    area: SafeArea, view: YearView, layout: LayoutConfig, temporal: TemporalContext
) -> GridSpec:
    k = layout.dot_spacing
    column_width = area.width / MONTH_BLOCK_COLUMNS

    # Block: label, one cell of spacing, 6 rows of cells with 5 gaps
    block_units = MONTH_LABEL + 1 + MONTH_GRID_ROWS + (MONTH_GRID_ROWS - 1) * k
    vertical_units = (
        MONTH_BLOCK_ROWS * block_units
        + (MONTH_BLOCK_ROWS - 1) * MONTH_LABEL
        + MONTH_STATS_MARGIN
        + MONTH_LABEL
    )
    exact = fit_cell(
        column_width,
        area.height,
        MONTH_GRID_COLUMNS + (MONTH_GRID_COLUMNS - 1) * k,
        vertical_units,
    )
    cell = min(
        column_width / (MONTH_GRID_COLUMNS + 1),
        area.height / (MONTH_BLOCK_ROWS * 9),
        exact,
        MONTHS_MAX_CELL,
    )
    cell = max(0.0, cell)
    gap = cell * k
    label_size = cell * MONTH_LABEL

    block_height = block_units * cell
    row_gap = label_size
    grid_height = MONTH_BLOCK_ROWS * block_height + (MONTH_BLOCK_ROWS - 1) * row_gap
    content_height = grid_height + cell * MONTH_STATS_MARGIN + label_size

    centered_y = area.top + (area.height - content_height) / 2
    origin_y = max(area.top * TOP_FLOOR, centered_y)

    dot_grid_width = MONTH_GRID_COLUMNS * cell + (MONTH_GRID_COLUMNS - 1) * gap
    center_offset = max(0.0, (column_width - dot_grid_width) / 2)

    blocks = []
    first_day = 1
    for month_index, name in enumerate(MONTH_NAMES):
        month = month_index + 1
        count = days_in_month(temporal.year, month)
        block_x = area.side + (month_index % MONTH_BLOCK_COLUMNS) * column_width + center_offset
        block_y = origin_y + (month_index // MONTH_BLOCK_COLUMNS) * (block_height + row_gap)
        blocks.append(
            GridBlock(
                index=month_index,
                label=name,
                label_x=block_x,
                label_y=block_y,
                origin_x=block_x,
                origin_y=block_y + label_size + cell,
                leading_blanks=first_weekday(date(temporal.year, month, 1), view.is_monday_first),
                day_count=count,
                first_day=first_day,
            )
        )
        first_day += count

    return GridSpec(
        layout="months",
        columns=MONTH_BLOCK_COLUMNS,
        rows=MONTH_BLOCK_ROWS,
        cell_size=cell,
        gap=gap,
        origin_x=area.side + center_offset,
        origin_y=origin_y,
        grid_width=(MONTH_BLOCK_COLUMNS - 1) * column_width + dot_grid_width,
        grid_height=grid_height,
        safe_area_top=area.top,
        safe_area_bottom=area.bottom,
        side_padding=area.side,
        stats_y=origin_y + grid_height + cell * MONTH_STATS_MARGIN,
        stats_font_size=label_size,
        label_size=label_size,
        blocks=tuple(blocks),
    )
