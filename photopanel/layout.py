# -*- coding: utf-8 -*-
"""Multi-image face layout: slot placement in raster space and the inverse 'match to content' sizing."""
import logging
import math
from dataclasses import dataclass, field
from enum import Enum

from . import config as C
from .dimensions import bevel, printable_area

logger = logging.getLogger(__name__)


class LayoutMode(str, Enum):
    HORIZONTAL = 'horizontal'
    VERTICAL = 'vertical'
    GRID = 'grid'


def _side(v):
    try:
        v = float(v)
    except (TypeError, ValueError):
        return 0.0
    return v if math.isfinite(v) and v > 0 else 0.0


def _turn(v):
    try:
        v = float(v or 0)
    except (TypeError, ValueError):
        return 0
    return int(round(v)) % 360 if math.isfinite(v) else 0


@dataclass(frozen=True)
class Margin:
    left: float = 0.0
    right: float = 0.0
    top: float = 0.0
    bottom: float = 0.0

    def __post_init__(self):
        for k in ('left', 'right', 'top', 'bottom'):
            object.__setattr__(self, k, _side(getattr(self, k)))

    @property
    def horizontal(self):
        return self.left + self.right

    @property
    def vertical(self):
        return self.top + self.bottom

    @classmethod
    def from_dict(cls, d):
        d = d or {}
        return cls(d.get('left', 0), d.get('right', 0), d.get('top', 0), d.get('bottom', 0))


@dataclass(frozen=True, eq=False)
class ImageSlot:
    index: int = 0
    image: object = None
    rotation: int = 0
    margin: Margin = field(default_factory=Margin)
    name: str = ''
    source: bytes = None  # encoded upload, carried into the export bundle

    def __post_init__(self):
        object.__setattr__(self, 'rotation', _turn(self.rotation))


@dataclass(frozen=True)
class Placement:
    slot: ImageSlot
    x: float
    y: float
    width: float
    height: float

    def as_dict(self):
        return {'index': self.slot.index, 'x': self.x, 'y': self.y, 'width': self.width,
                'height': self.height, 'rotation': self.slot.rotation}


def rotated_size(slot):
    """Image (w, h) with quarter-turn rotations applied; (0, 0) for an empty slot."""
    if slot.image is None:
        return 0, 0
    w, h = slot.image.size
    if slot.rotation % 180:
        w, h = h, w
    return w, h


def image_aspect(slot):
    w, h = rotated_size(slot)
    if w <= 0 or h <= 0:
        return 0.0
    return w / h


def margins_px(slot, px_per_in_x, px_per_in_y):
    m = slot.margin
    return m.left * px_per_in_x, m.right * px_per_in_x, m.top * px_per_in_y, m.bottom * px_per_in_y


def active_slots(slots):
    slots = list(slots or [])
    if len(slots) > C.MAX_SLOTS:
        logger.warning("Only %d image slots are laid out, dropping %d", C.MAX_SLOTS, len(slots) - C.MAX_SLOTS)
    return slots[:C.MAX_SLOTS]


# === FORWARD LAYOUT ===
def _layout_horizontal(items, rw, rh):
    sum_aspects = sum(a for _, a, _ in items)
    avail_w = rw - sum(l + r for _, _, (l, r, _, _) in items)
    avail_h = min(rh - (t + b) for _, _, (_, _, t, b) in items)
    target_h = max(C.MIN_CONTENT_PX, min(avail_h, avail_w / sum_aspects))
    widths = [max(C.MIN_CONTENT_PX, a * target_h) for _, a, _ in items]
    total = sum(w + l + r for w, (_, _, (l, r, _, _)) in zip(widths, items))
    x = max(0.0, (rw - total) / 2)
    out = []
    for w, (slot, _, (l, r, t, b)) in zip(widths, items):
        y = t + (rh - t - b - target_h) / 2
        out.append(Placement(slot, x + l, y, w, target_h))
        x += l + w + r
    return out


def _layout_vertical(items, rw, rh):
    sum_inv = sum(1.0 / a for _, a, _ in items)
    avail_h = rh - sum(t + b for _, _, (_, _, t, b) in items)
    avail_w = min(rw - (l + r) for _, _, (l, r, _, _) in items)
    target_w = max(C.MIN_CONTENT_PX, min(avail_w, avail_h / sum_inv))
    heights = [max(C.MIN_CONTENT_PX, target_w / a) for _, a, _ in items]
    total = sum(h + t + b for h, (_, _, (_, _, t, b)) in zip(heights, items))
    y = max(0.0, (rh - total) / 2)
    out = []
    for h, (slot, _, (l, r, t, b)) in zip(heights, items):
        x = l + (rw - l - r - target_w) / 2
        out.append(Placement(slot, x, y + t, target_w, h))
        y += t + h + b
    return out


def _layout_grid(items, rw, rh):
    cw, ch = rw / C.GRID_COLS, rh / C.GRID_ROWS
    out = []
    for cell, slot, (l, r, t, b) in items:
        col, row = cell % C.GRID_COLS, cell // C.GRID_COLS
        out.append(Placement(slot, col * cw + l, row * ch + t,
                             max(C.MIN_CONTENT_PX, cw - l - r), max(C.MIN_CONTENT_PX, ch - t - b)))
    return out


def compute_layout(slots, mode, printable_w, printable_h, raster_w, raster_h):
    """
    Placement rectangles (raster pixels, y down) for every slot that has an image.

    Margins are given in inches on the printable face and converted with the
    raster's pixels-per-inch on the matching axis. Horizontal rows share one
    height, vertical columns share one width, grid cells are a fixed 2x2.
    """
    mode = LayoutMode(mode)
    ppx = raster_w / max(C.MIN_CONTENT_IN, printable_w)
    ppy = raster_h / max(C.MIN_CONTENT_IN, printable_h)
    slots = active_slots(slots)
    if mode is LayoutMode.GRID:
        items = [(i, s, margins_px(s, ppx, ppy)) for i, s in enumerate(slots) if image_aspect(s) > 0]
        return _layout_grid(items, raster_w, raster_h)
    items = [(s, image_aspect(s), margins_px(s, ppx, ppy)) for s in slots]
    items = [it for it in items if it[1] > 0]
    if not items:
        return []
    if mode is LayoutMode.HORIZONTAL:
        return _layout_horizontal(items, raster_w, raster_h)
    return _layout_vertical(items, raster_w, raster_h)


# === INVERSE SIZING ===
def _drawn(slots):
    return [(image_aspect(s), s.margin) for s in active_slots(slots) if image_aspect(s) > 0]


def _finish(spec, axis, printable_value):
    value = max(C.MIN_MATCHED, printable_value + 2 * bevel(spec))
    return getattr(spec.evolve(**{axis: value}), axis)


def matched_height(spec, slots, mode):
    """Panel height that makes the laid out content exactly fill the face at the current width."""
    mode = LayoutMode(mode)
    items = _drawn(slots)
    if not items:
        return spec.height
    pw, _ = printable_area(spec)
    if mode is LayoutMode.HORIZONTAL:
        content_w = max(C.MIN_CONTENT_IN, pw - sum(m.horizontal for _, m in items))
        h = content_w / sum(a for a, _ in items) + max(m.vertical for _, m in items)
    elif mode is LayoutMode.VERTICAL:
        content_w = max(C.MIN_CONTENT_IN, pw - max(m.horizontal for _, m in items))
        h = content_w * sum(1.0 / a for a, _ in items) + sum(m.vertical for _, m in items)
    else:
        cell_w = pw / C.GRID_COLS
        cell_h = max(max(C.MIN_CONTENT_IN, cell_w - m.horizontal) / a + m.vertical for a, m in items)
        h = cell_h * C.GRID_ROWS
    return _finish(spec, 'height', h)


def matched_width(spec, slots, mode):
    """Panel width that makes the laid out content exactly fill the face at the current height."""
    mode = LayoutMode(mode)
    items = _drawn(slots)
    if not items:
        return spec.width
    _, ph = printable_area(spec)
    if mode is LayoutMode.HORIZONTAL:
        content_h = max(C.MIN_CONTENT_IN, ph - max(m.vertical for _, m in items))
        w = content_h * sum(a for a, _ in items) + sum(m.horizontal for _, m in items)
    elif mode is LayoutMode.VERTICAL:
        content_h = max(C.MIN_CONTENT_IN, ph - sum(m.vertical for _, m in items))
        w = content_h / sum(1.0 / a for a, _ in items) + max(m.horizontal for _, m in items)
    else:
        cell_h = ph / C.GRID_ROWS
        cell_w = max(max(C.MIN_CONTENT_IN, cell_h - m.vertical) * a + m.horizontal for a, m in items)
        w = cell_w * C.GRID_COLS
    return _finish(spec, 'width', w)


def fit_margins(spec, slot):
    """Symmetric margins that make a single image fill the printable face along its limiting axis."""
    aspect = image_aspect(slot)
    if aspect <= 0:
        return Margin()
    pw, ph = printable_area(spec)
    pad_x = pad_y = 0.0
    if aspect >= pw / ph:
        pad_y = max(0.0, (ph - pw / aspect) / 2)
    else:
        pad_x = max(0.0, (pw - ph * aspect) / 2)
    if pad_x < C.SNAP_MARGIN:
        pad_x = 0.0
    if pad_y < C.SNAP_MARGIN:
        pad_y = 0.0
    return Margin(pad_x, pad_x, pad_y, pad_y)
