# -*- coding: utf-8 -*-
"""One full generation of a panel: solid, face texture and hole mask built from the same spec."""
import logging
from dataclasses import dataclass, field

from . import config as C
from .dimensions import printable_area, screw_holes
from .layout import LayoutMode
from .raster import canvas_size, composite_face, hole_mask
from .solid import build_panel_solid

logger = logging.getLogger(__name__)


@dataclass
class PanelBuild:
    spec: object
    solid: object
    texture: object = None
    mask: object = None
    holes: list = field(default_factory=list)
    placements: list = field(default_factory=list)
    canvas: tuple = (C.BASE_SIZE, C.BASE_SIZE)


def build_panel(spec, slots=(), mode=LayoutMode.HORIZONTAL, ppi=C.DEFAULT_PPI,
                max_texture_size=C.MAX_TEXTURE_SIZE, show_holes=True):
    """
    Rebuild everything for `spec`; each call returns a fresh PanelBuild and
    shares nothing with earlier ones. With show_holes=False the solid and
    mask leave the screw holes out even if the spec asks for them.
    """
    holes = screw_holes(spec) if show_holes else []
    solid = build_panel_solid(spec, force_holes=bool(holes))
    pw, ph = printable_area(spec)
    texture, placements = composite_face(slots, mode, pw, ph, ppi, max_texture_size)
    size = texture.size if texture is not None else canvas_size(pw, ph, 1, ppi, max_texture_size)
    mask = hole_mask(holes, pw, ph, size) if holes else None
    if spec.screw_holes and show_holes and not holes:
        logger.info("Screw holes enabled but panel %.2fx%.2f has no room for them", spec.width, spec.height)
    return PanelBuild(spec, solid, texture, mask, holes, placements, size)
