# -*- coding: utf-8 -*-
"""Face texture and hole alpha mask rasters, aligned to the printable area."""
import io
import logging
import math

from PIL import Image, ImageDraw

from . import config as C
from .layout import compute_layout, image_aspect, rotated_size

logger = logging.getLogger(__name__)


def canvas_size(face_w, face_h, count=1, ppi=C.DEFAULT_PPI, max_texture_size=C.MAX_TEXTURE_SIZE):
    """
    Raster (width, height) in pixels for a face of face_w x face_h inches.

    The short axis starts at BASE_SIZE, grows toward print resolution (ppi)
    and gets up to 2x more for multi-image faces; the long axis is then
    derived from it through the face aspect so the ratio holds to the pixel.
    A face longer than max_texture_size times its short side cannot keep its
    ratio: the short axis floors at 1 px and the long axis stops at the limit.
    """
    if not all(math.isfinite(v) and v > 0 for v in (face_w, face_h)):
        return C.BASE_SIZE, C.BASE_SIZE
    limit = max(1, int(max_texture_size))
    count_scale = max(1.0, min(C.MAX_COUNT_SCALE, math.sqrt(max(0, count))))
    short_in, long_in = min(face_w, face_h), max(face_w, face_h)
    aspect = long_in / short_in
    short_px = max(C.BASE_SIZE, short_in * ppi) * count_scale
    short_px = max(1, int(min(short_px, limit, limit / aspect)))
    long_px = max(1, min(limit, int(round(short_px * aspect))))
    return (long_px, short_px) if face_w >= face_h else (short_px, long_px)


def _draw_slot(canvas, p):
    img = p.slot.image
    if img.mode != 'RGBA':
        img = img.convert('RGBA')
    rw, rh = rotated_size(p.slot)
    scale = min(p.width / rw, p.height / rh)
    iw, ih = img.size
    img = img.resize((max(1, round(iw * scale)), max(1, round(ih * scale))), Image.Resampling.LANCZOS)
    if p.slot.rotation:
        # PIL turns counter-clockwise, the face layout turns clockwise
        img = img.rotate(-p.slot.rotation, resample=Image.Resampling.BICUBIC, expand=True)
    tile = Image.new('RGBA', (max(1, round(p.width)), max(1, round(p.height))), (0, 0, 0, 0))
    tile.paste(img, (round((tile.width - img.width) / 2), round((tile.height - img.height) / 2)), img)
    canvas.paste(tile, (round(p.x), round(p.y)), tile)


def composite_face(slots, mode, printable_w, printable_h, ppi=C.DEFAULT_PPI, max_texture_size=C.MAX_TEXTURE_SIZE):
    """
    RGB face texture with every image contain-fit into its placement.

    Returns (image, placements); image is None when no slot has an image,
    meaning the face keeps its plain material.
    """
    count = sum(1 for s in slots or [] if image_aspect(s) > 0)
    if not count:
        return None, []
    w, h = canvas_size(printable_w, printable_h, count, ppi, max_texture_size)
    placements = compute_layout(slots, mode, printable_w, printable_h, w, h)
    canvas = Image.new('RGB', (w, h), (255, 255, 255))
    for p in placements:
        _draw_slot(canvas, p)
    logger.debug("Composited %d image(s) into %dx%d face texture", len(placements), w, h)
    return canvas, placements


def hole_mask(holes, printable_w, printable_h, size):
    """Single channel mask, white face with a black ellipse per screw hole (model y up, raster y down)."""
    w, h = size
    mask = Image.new('L', (w, h), 255)
    if not holes:
        return mask
    ppx, ppy = w / printable_w, h / printable_h
    draw = ImageDraw.Draw(mask)
    for hole in holes:
        cx = (hole.x + printable_w / 2) * ppx
        cy = (printable_h / 2 - hole.y) * ppy
        rx, ry = hole.radius * ppx, hole.radius * ppy
        draw.ellipse([cx - rx, cy - ry, cx + rx, cy + ry], fill=0)
    return mask


def png_bytes(img):
    buf = io.BytesIO()
    img.save(buf, format='PNG')
    return buf.getvalue()
