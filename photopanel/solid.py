# -*- coding: utf-8 -*-
"""Panel solid: rectangular profile with optional screw hole cutouts, extruded straight or with a chamfer."""
import logging

import numpy as np
import trimesh
from shapely.geometry import Polygon, box

from . import config as C
from .dimensions import bevel, printable_area, screw_holes

logger = logging.getLogger(__name__)


def _circle(x, y, r, n=C.HOLE_SEGMENTS):
    t = np.linspace(0, 2 * np.pi, n, endpoint=False)
    return np.column_stack([x + r * np.cos(t), y + r * np.sin(t)])


def _rect(hx, hy):
    return np.array([[-hx, -hy], [hx, -hy], [hx, hy], [-hx, hy]], dtype=float)


def panel_profile(width, height, holes=()):
    """Centered width x height rectangle with one circular cutout per hole."""
    outer = box(-width / 2, -height / 2, width / 2, height / 2)
    if not holes:
        return outer
    return Polygon(outer.exterior.coords, [_circle(h.x, h.y, h.radius).tolist() for h in holes])


def _recenter(mesh):
    mesh.apply_translation(-mesh.bounds.mean(axis=0))
    return mesh


def _add_wall(upper, lower, zu, zl, verts, faces):
    # rings are CCW seen from +z for outward walls, CW for hole bores
    n = len(upper)
    off = len(verts)
    verts.extend([[x, y, zu] for x, y in upper])
    verts.extend([[x, y, zl] for x, y in lower])
    for i in range(n):
        a0, a1 = off + i, off + (i + 1) % n
        b0, b1 = a0 + n, a1 + n
        faces += [[a0, b0, b1], [a0, b1, a1]]


def _add_cap(profile, z, up, verts, faces):
    v2, f = trimesh.creation.triangulate_polygon(profile)
    v2 = np.asarray(v2, dtype=float)
    f = np.asarray(f, dtype=np.int64)
    tri = v2[f]
    e1, e2 = tri[:, 1] - tri[:, 0], tri[:, 2] - tri[:, 0]
    cross = e1[:, 0] * e2[:, 1] - e1[:, 1] * e2[:, 0]
    flip = cross < 0 if up else cross > 0
    f[flip] = f[flip][:, ::-1]
    off = len(verts)
    verts.extend([[x, y, z] for x, y in v2])
    faces.extend((f + off).tolist())


def _chamfered_solid(spec, holes):
    b = bevel(spec)
    pw, ph = printable_area(spec)
    straight = max(C.MIN_STRAIGHT_DEPTH, spec.depth - 2 * b)
    zm = straight / 2
    zf = zm + b
    inner, outer = _rect(pw / 2, ph / 2), _rect(pw / 2 + b, ph / 2 + b)
    verts, faces = [], []
    # front face, bevel, straight band, bevel, back face
    _add_wall(inner, outer, zf, zm, verts, faces)
    _add_wall(outer, outer, zm, -zm, verts, faces)
    _add_wall(outer, inner, -zm, -zf, verts, faces)
    for h in holes:
        ring = _circle(h.x, h.y, h.radius)[::-1]
        _add_wall(ring, ring, zf, -zf, verts, faces)
    profile = panel_profile(pw, ph, holes)
    _add_cap(profile, zf, True, verts, faces)
    _add_cap(profile, -zf, False, verts, faces)
    mesh = trimesh.Trimesh(vertices=verts, faces=faces, process=True)
    mesh.merge_vertices()
    mesh.fix_normals()
    return mesh


def build_panel_solid(spec, force_holes=None):
    """
    Triangulated panel centered on its own bounding box.

    `force_holes` overrides `spec.screw_holes` for this build only, so an
    export can bake the holes in while the preview shows a plain face.
    """
    holes = screw_holes(spec, force=force_holes)
    if spec.chamfer:
        mesh = _chamfered_solid(spec, holes)
    elif holes:
        mesh = trimesh.creation.extrude_polygon(panel_profile(spec.width, spec.height, holes), spec.depth)
        mesh.fix_normals()
    else:
        mesh = trimesh.creation.box(extents=(spec.width, spec.height, spec.depth))
    logger.debug("Built panel %.2fx%.2fx%.2f chamfer=%s holes=%d: %d vertices",
                 spec.width, spec.height, spec.depth, spec.chamfer, len(holes), len(mesh.vertices))
    return _recenter(mesh)


def mesh_buffers(mesh):
    """Flat position/normal/index lists for a renderer."""
    return {'vertices': mesh.vertices.flatten().tolist(), 'normals': mesh.vertex_normals.flatten().tolist(),
            'faces': mesh.faces.flatten().tolist()}
