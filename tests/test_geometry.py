"""Error-bar clamping and tooltip placement against literal boundary cases."""

from lightspeed_chart.geometry import (
    CAP_HALF_WIDTH,
    PlotBounds,
    Segment,
    error_bar,
    place_tooltip,
)

BOUNDS = PlotBounds(left=0.0, bottom=0.0, right=400.0, top=300.0)


def test_error_bar_inside_bounds_has_stem_and_both_caps():
    bar = error_bar(100.0, 150.0, 20.0, BOUNDS)
    assert bar.stem == Segment((100.0, 130.0), (100.0, 170.0))
    assert bar.top_cap == Segment((100.0 - CAP_HALF_WIDTH, 170.0), (100.0 + CAP_HALF_WIDTH, 170.0))
    assert bar.bottom_cap == Segment((100.0 - CAP_HALF_WIDTH, 130.0), (100.0 + CAP_HALF_WIDTH, 130.0))
    assert len(bar.segments()) == 3


def test_top_cap_beyond_axis_maximum_is_omitted_and_stem_clamped():
    bar = error_bar(100.0, 290.0, 20.0, BOUNDS)
    assert bar.top_cap is None
    assert bar.bottom_cap is not None
    assert bar.stem == Segment((100.0, 270.0), (100.0, 300.0))


def test_bottom_cap_below_axis_minimum_is_omitted_and_stem_clamped():
    bar = error_bar(50.0, 10.0, 25.0, BOUNDS)
    assert bar.bottom_cap is None
    assert bar.top_cap is not None
    assert bar.stem == Segment((50.0, 0.0), (50.0, 35.0))


def test_both_ends_clamped_leaves_only_the_stem():
    bar = error_bar(50.0, 150.0, 1000.0, BOUNDS)
    assert bar.segments() == [Segment((50.0, 0.0), (50.0, 300.0))]


def test_cap_exactly_on_the_boundary_is_kept():
    bar = error_bar(100.0, 280.0, 20.0, BOUNDS)
    assert bar.top_cap is not None
    assert bar.stem.end == (100.0, 300.0)


def test_zero_uncertainty_draws_no_caps():
    bar = error_bar(100.0, 150.0, 0.0, BOUNDS)
    assert bar.top_cap is None
    assert bar.bottom_cap is None
    assert bar.stem == Segment((100.0, 150.0), (100.0, 150.0))


def test_custom_cap_width():
    bar = error_bar(100.0, 150.0, 10.0, BOUNDS, cap_half_width=1.0)
    assert bar.top_cap == Segment((99.0, 160.0), (101.0, 160.0))


def test_tooltip_default_is_right_and_above():
    placement = place_tooltip(100.0, 100.0, BOUNDS)
    assert placement.x == 110.0
    assert placement.align == "left"
    assert placement.y == 118.0
    assert placement.second_line_y == 106.0


def test_tooltip_flips_left_near_right_edge():
    placement = place_tooltip(275.0, 100.0, BOUNDS)
    assert placement.x == 265.0
    assert placement.align == "right"


def test_tooltip_stays_right_at_the_margin():
    placement = place_tooltip(270.0, 100.0, BOUNDS)
    assert placement.x == 280.0
    assert placement.align == "left"


def test_tooltip_flips_below_when_above_top():
    placement = place_tooltip(100.0, 290.0, BOUNDS)
    assert placement.y == 290.0 - 18.0 - 4.0
    assert placement.second_line_y == placement.y - 12.0


def test_tooltip_flips_both_ways_in_top_right_corner():
    placement = place_tooltip(395.0, 295.0, BOUNDS)
    assert placement.align == "right"
    assert placement.x < 395.0
    assert placement.y < 295.0


def test_bar_entirely_below_axis_minimum_has_no_caps_and_clamped_stem():
    bounds = PlotBounds(left=0.0, bottom=100.0, right=400.0, top=200.0)
    bar = error_bar(50.0, 50.0, 10.0, bounds)
    assert bar.top_cap is None
    assert bar.bottom_cap is None
    assert bar.stem == Segment((50.0, 100.0), (50.0, 100.0))


def test_bar_entirely_above_axis_maximum_has_no_caps_and_clamped_stem():
    bounds = PlotBounds(left=0.0, bottom=100.0, right=400.0, top=200.0)
    bar = error_bar(50.0, 250.0, 10.0, bounds)
    assert bar.segments() == [Segment((50.0, 200.0), (50.0, 200.0))]


def test_stem_never_runs_outside_bounds():
    for y in (-50.0, 0.0, 150.0, 300.0, 450.0):
        bar = error_bar(10.0, y, 40.0, BOUNDS)
        (_, y0), (_, y1) = bar.stem.start, bar.stem.end
        assert BOUNDS.bottom <= y0 <= y1 <= BOUNDS.top


def test_tooltip_flips_when_first_line_glyphs_would_cross_top():
    # 275 + 18 = 293 is inside, but the line's glyphs reach 293 + 11 = 304.
    placement = place_tooltip(100.0, 275.0, BOUNDS)
    assert placement.y == 275.0 - 18.0 - 4.0


def test_tooltip_stays_above_when_whole_line_fits():
    placement = place_tooltip(100.0, 270.0, BOUNDS)
    assert placement.y == 288.0
