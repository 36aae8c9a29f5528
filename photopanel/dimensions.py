# -*- coding: utf-8 -*-
"""Panel dimensions, chamfer bevel, printable area and screw hole placement."""
import logging
import math
from dataclasses import dataclass, replace

from . import config as C

logger = logging.getLogger(__name__)


def _clamp(value, lo, hi=math.inf, default=None):
    try:
        v = float(value)
    except (TypeError, ValueError):
        v = math.nan
    if not math.isfinite(v):
        v = lo if default is None else default
    return min(max(v, lo), hi)


def parse_dimension(value, lo, hi=math.inf):
    """Clamped float for a form value, or None when it is blank or not a finite number."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    try:
        v = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(v):
        return None
    return min(max(v, lo), hi)


@dataclass(frozen=True)
class PanelSpec:
    width: float = C.DEFAULT_WIDTH
    height: float = C.DEFAULT_HEIGHT
    depth: float = C.DEFAULT_DEPTH
    chamfer: bool = False
    screw_holes: bool = False

    def __post_init__(self):
        # frozen, so clamp through object.__setattr__
        object.__setattr__(self, 'width', _clamp(self.width, C.MIN_WIDTH, default=C.DEFAULT_WIDTH))
        object.__setattr__(self, 'height', _clamp(self.height, C.MIN_HEIGHT, C.MAX_HEIGHT, C.DEFAULT_HEIGHT))
        object.__setattr__(self, 'depth', _clamp(self.depth, C.MIN_DEPTH, C.MAX_DEPTH, C.DEFAULT_DEPTH))
        object.__setattr__(self, 'chamfer', bool(self.chamfer))
        object.__setattr__(self, 'screw_holes', bool(self.screw_holes))

    def evolve(self, **changes):
        """Copy with changes applied; the copy is clamped like any new spec."""
        return replace(self, **changes)

    def as_dict(self):
        return {'width': self.width, 'height': self.height, 'depth': self.depth,
                'chamfer': self.chamfer, 'screwHoles': self.screw_holes}


@dataclass(frozen=True)
class ScrewHole:
    x: float
    y: float
    radius: float = C.SCREW_HOLE_RADIUS


def bevel(spec):
    if not spec.chamfer:
        return 0.0
    chamfer = max(C.MIN_CHAMFER, spec.depth * C.CHAMFER_RATIO)
    return min(max(chamfer, 0.0), min(spec.width / 2, spec.height / 2, spec.depth / 2))


def printable_area(spec):
    """(width, height) of the face left for image content once the bevel is taken off both sides."""
    b = bevel(spec)
    return max(C.MIN_PRINTABLE, spec.width - 2 * b), max(C.MIN_PRINTABLE, spec.height - 2 * b)


def hole_center(spec):
    """Per-axis center offset for the corner holes, or None when no hole fits."""
    pw, ph = printable_area(spec)
    margin = C.SCREW_HOLE_RADIUS + C.HOLE_KEEPOUT
    cx = min(spec.width / 2 - C.EDGE_OFFSET, pw / 2 - margin)
    cy = min(spec.height / 2 - C.EDGE_OFFSET, ph / 2 - margin)
    if cx <= 0 or cy <= 0:
        return None
    return cx, cy


def screw_holes(spec, force=None):
    """
    Mounting holes in model space (origin at the panel center, y up).

    Always four holes at (±cx, ±cy) or none at all; a panel too small for
    the keep-out margin simply gets no holes. `force` overrides
    `spec.screw_holes` when given.
    """
    enabled = spec.screw_holes if force is None else bool(force)
    if not enabled:
        return []
    c = hole_center(spec)
    if c is None:
        logger.debug("Panel %.2fx%.2f too small for screw holes, skipping", spec.width, spec.height)
        return []
    cx, cy = c
    return [ScrewHole(sx * cx, sy * cy) for sy in (1, -1) for sx in (-1, 1)]
