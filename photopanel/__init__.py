"""Parametric photo panel: dimensions, multi-image layout, panel solid and face rasters."""
from .build import PanelBuild, build_panel
from .dimensions import PanelSpec, ScrewHole, bevel, printable_area, screw_holes
from .layout import (ImageSlot, LayoutMode, Margin, Placement, compute_layout, fit_margins, matched_height,
                     matched_width)
from .raster import canvas_size, composite_face, hole_mask
from .solid import build_panel_solid

__version__ = '1.0'
