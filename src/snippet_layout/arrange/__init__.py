"""
Module: arrange

Purpose:
    Arrangement algorithms (grid, align, distribute, unify, pack,
    repack) as pure Document functions, plus the ArrangementEngine
    facade that applies them as single undoable steps.
"""

# engine must bind the align/pack submodules before the function
# re-exports below shadow them as package attributes.
from .engine import ArrangementEngine
from .grid import GridOrder, GridSpec, grid_arrange, grid_cells, fit_in_cell
from .align import (
    Edge,
    Direction,
    Dimension,
    align,
    distribute,
    unify_size,
    unify_all_pages_width,
)
from .pack import RepackAnchor, pack, repack_page, repack_across_pages

__all__ = [
    "GridOrder",
    "GridSpec",
    "grid_arrange",
    "grid_cells",
    "fit_in_cell",
    "Edge",
    "Direction",
    "Dimension",
    "align",
    "distribute",
    "unify_size",
    "unify_all_pages_width",
    "RepackAnchor",
    "pack",
    "repack_page",
    "repack_across_pages",
    "ArrangementEngine",
]
