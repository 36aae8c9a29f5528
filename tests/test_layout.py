import math

import pytest

from conftest import make_slot
from photopanel.dimensions import PanelSpec
from photopanel.layout import (ImageSlot, LayoutMode, Margin, compute_layout, fit_margins, image_aspect,
                               matched_height, matched_width)


def _rect(p):
    return (pytest.approx(p.x), pytest.approx(p.y), pytest.approx(p.width), pytest.approx(p.height))


def test_rotation_swaps_aspect_for_quarter_turns():
    assert image_aspect(make_slot(200, 100)) == 2.0
    assert image_aspect(make_slot(200, 100, rotation=90)) == 0.5
    assert image_aspect(make_slot(200, 100, rotation=-90)) == 0.5
    assert image_aspect(make_slot(200, 100, rotation=180)) == 2.0
    assert image_aspect(make_slot(200, 100, rotation=450)) == 0.5
    assert make_slot(10, 10, rotation=-90).rotation == 270


@pytest.mark.parametrize("rotation", [math.inf, -math.inf, math.nan, 'ninety', None, [90]])
def test_malformed_rotation_falls_back_to_unrotated(rotation):
    slot = make_slot(200, 100, rotation=rotation)
    assert slot.rotation == 0
    assert image_aspect(slot) == 2.0


def test_rotation_given_as_text():
    assert make_slot(200, 100, rotation='90').rotation == 90


def test_empty_slot_has_no_aspect():
    assert image_aspect(ImageSlot(index=0)) == 0.0


def test_horizontal_two_images_share_row_height(two_slots):
    placements = compute_layout(two_slots, 'horizontal', 9, 6, 900, 600)
    assert [_rect(p) for p in placements] == [(0, 150, 300, 300), (300, 150, 600, 300)]
    # widths follow each slot's aspect and fill the panel width
    assert sum(p.width for p in placements) == pytest.approx(900)


def test_horizontal_margins_inset_slot():
    slot = make_slot(100, 100, margin=Margin(left=0.5))
    (p,) = compute_layout([slot], LayoutMode.HORIZONTAL, 9, 6, 900, 600)
    assert _rect(p) == (175, 0, 600, 600)


def test_horizontal_row_height_limited_by_largest_vertical_margin(two_slots):
    two_slots[1] = make_slot(200, 100, 1, margin=Margin(top=1, bottom=1))
    placements = compute_layout(two_slots, 'horizontal', 15, 6, 1500, 600)
    assert all(p.height == pytest.approx(400) for p in placements)
    assert placements[0].y == pytest.approx(100)
    assert placements[1].y == pytest.approx(100)


def test_vertical_stacks_with_shared_width():
    slots = [make_slot(100, 100, 0), make_slot(100, 100, 1)]
    placements = compute_layout(slots, 'vertical', 6, 9, 600, 900)
    assert [_rect(p) for p in placements] == [(75, 0, 450, 450), (75, 450, 450, 450)]


def test_grid_keeps_cells_and_skips_empty_slots():
    slots = [make_slot(100, 100, 0), ImageSlot(index=1),
             make_slot(100, 50, 2, margin=Margin(0.1, 0.1, 0.1, 0.1))]
    placements = compute_layout(slots, 'grid', 8, 6, 800, 600)
    assert [p.slot.index for p in placements] == [0, 2]
    assert _rect(placements[0]) == (0, 0, 400, 300)
    assert _rect(placements[1]) == (10, 310, 380, 280)


def test_layout_without_images_is_empty():
    assert compute_layout([ImageSlot()], 'horizontal', 9, 6, 900, 600) == []
    assert compute_layout([], 'grid', 9, 6, 900, 600) == []


def test_unknown_mode_rejected(two_slots):
    with pytest.raises(ValueError):
        compute_layout(two_slots, 'diagonal', 9, 6, 900, 600)


def test_content_floors_at_one_pixel():
    slot = make_slot(100, 100, margin=Margin(5, 5, 5, 5))
    (p,) = compute_layout([slot], 'horizontal', 9, 6, 900, 600)
    assert p.width >= 1 and p.height >= 1


def test_match_height_then_width_round_trips(two_slots):
    m = Margin(0.25, 0.25, 0.25, 0.25)
    slots = [make_slot(100, 100, 0, margin=m), make_slot(200, 100, 1, margin=m)]
    spec = PanelSpec(10, 6, 0.5)
    h = matched_height(spec, slots, 'horizontal')
    assert h == pytest.approx(3.5)
    assert matched_width(spec.evolve(height=h), slots, 'horizontal') == pytest.approx(10)


def test_match_round_trip_keeps_chamfer_inset():
    m = Margin(0.25, 0.25, 0.25, 0.25)
    slots = [make_slot(100, 100, 0, margin=m), make_slot(200, 100, 1, margin=m)]
    spec = PanelSpec(10, 6, 0.5, chamfer=True)
    h = matched_height(spec, slots, 'horizontal')
    assert h == pytest.approx(3.7)
    assert matched_width(spec.evolve(height=h), slots, 'horizontal') == pytest.approx(10)


def test_match_vertical():
    slots = [make_slot(100, 100, 0), make_slot(100, 100, 1)]
    spec = PanelSpec(4, 6, 0.5)
    assert matched_height(spec, slots, 'vertical') == pytest.approx(8)
    assert matched_width(spec.evolve(height=8), slots, 'vertical') == pytest.approx(4)


def test_match_grid_uses_largest_cell(two_slots):
    spec = PanelSpec(10, 6, 0.5)
    assert matched_height(spec, two_slots, 'grid') == pytest.approx(10)
    assert matched_width(spec.evolve(height=10), two_slots, 'grid') == pytest.approx(20)


def test_match_results_clamped():
    spec = PanelSpec(100, 6, 0.5)
    assert matched_height(spec, [make_slot(100, 100)], 'horizontal') == 35
    wide = PanelSpec(10, 6, 0.5)
    assert matched_height(wide, [make_slot(1000, 10)], 'horizontal') == 1.0


def test_match_without_images_keeps_dimension():
    spec = PanelSpec(10, 6, 0.5)
    assert matched_height(spec, [ImageSlot()], 'horizontal') == 6
    assert matched_width(spec, [], 'grid') == 10


def test_fit_margins_contain():
    spec = PanelSpec(10, 6, 0.5)
    assert fit_margins(spec, make_slot(100, 100)) == Margin(2, 2, 0, 0)
    assert fit_margins(spec, make_slot(200, 100)) == Margin(0, 0, 0.5, 0.5)
    assert fit_margins(spec, ImageSlot()) == Margin()


def test_fit_margins_snaps_tiny_padding():
    spec = PanelSpec(10, 5.01, 0.5)
    assert fit_margins(spec, make_slot(200, 100)) == Margin()
