# -*- coding: utf-8 -*-
"""Export bundle: ASCII STL, metadata text, face rasters and the uploaded images in one zip."""
import io
import logging
import os
import zipfile
from datetime import datetime, timezone

from . import config as C
from .build import build_panel
from .dimensions import bevel
from .layout import LayoutMode, active_slots
from .raster import png_bytes

logger = logging.getLogger(__name__)


def _num(v):
    return ('%.6f' % v).rstrip('0').rstrip('.')


def _iso(ts):
    return ts.astimezone(timezone.utc).isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def metadata_text(spec, slots=(), generated_at=None):
    """key=value lines describing the exported panel, one per line."""
    slots = active_slots(slots)
    b = bevel(spec)
    padding = ';'.join(','.join(_num(v) for v in (s.margin.left, s.margin.right, s.margin.top, s.margin.bottom))
                       for s in slots) or 'none'
    names = [s.name for s in slots if s.name]
    lines = [
        f'width_in={_num(spec.width)}',
        f'height_in={_num(spec.height)}',
        f'depth_in={_num(spec.depth)}',
        f'padding_in={padding}',
        f'chamfer_enabled={"true" if spec.chamfer else "false"}',
        f'chamfer_angle_deg={C.CHAMFER_ANGLE_DEG if spec.chamfer else 0}',
        f'chamfer_depth_in={_num(b)}',
        f'image_filenames={",".join(names) if names else "none"}',
        f'generated_at={_iso(generated_at or datetime.now(timezone.utc))}',
    ]
    return '\n'.join(lines)


def stl_bytes(mesh):
    data = mesh.export(file_type='stl_ascii')
    return data.encode('utf-8') if isinstance(data, str) else data


def _image_entry(slot, used):
    name = os.path.basename(slot.name or '') or f'{slot.index}.png'
    entry = f'image_{name}'
    if entry in used:
        entry = f'image_{slot.index}_{name}'
    used.add(entry)
    return entry


def export_zip(spec, slots=(), mode=LayoutMode.HORIZONTAL, ppi=C.DEFAULT_PPI,
               max_texture_size=C.MAX_TEXTURE_SIZE, generated_at=None):
    """
    Zip bytes with panel.stl, metadata.txt, face_texture.png, hole_mask.png
    and the original uploads. The solid is always built with the panel's
    screw holes, whatever the live preview is showing.
    """
    build = build_panel(spec, slots, mode, ppi, max_texture_size, show_holes=True)
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, 'w', zipfile.ZIP_DEFLATED) as zf:
        zf.writestr('panel.stl', stl_bytes(build.solid))
        zf.writestr('metadata.txt', metadata_text(spec, slots, generated_at))
        if build.texture is not None:
            zf.writestr('face_texture.png', png_bytes(build.texture))
        if build.mask is not None:
            zf.writestr('hole_mask.png', png_bytes(build.mask))
        used = set()
        for s in active_slots(slots):
            if s.source:
                zf.writestr(_image_entry(s, used), s.source)
    logger.info("Exported panel %.2fx%.2fx%.2f with %d hole(s), %d image(s)",
                spec.width, spec.height, spec.depth, len(build.holes), len(build.placements))
    return buf.getvalue()
