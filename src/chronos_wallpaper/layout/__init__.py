from .cells import Cell, CellState, layout_cells
from .planner import GridSpec, plan_grid, safe_area

__all__ = ["Cell", "CellState", "GridSpec", "layout_cells", "plan_grid", "safe_area"]
