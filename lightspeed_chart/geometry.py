"""Screen-space helpers for error bars and hover labels.

All coordinates are in points with y growing upward, the same orientation as
matplotlib display coordinates. Nothing here touches a figure.
"""

from dataclasses import dataclass

CAP_HALF_WIDTH = 4.0

TOOLTIP_OFFSET_X = 10.0
TOOLTIP_OFFSET_Y = 18.0
TOOLTIP_EDGE_MARGIN = 120.0
TOOLTIP_BOUNDARY_MARGIN = 4.0
TOOLTIP_LINE_SPACING = 12.0
TOOLTIP_LINE_HEIGHT = 11.0


@dataclass(frozen=True)
class PlotBounds:
    left: float
    bottom: float
    right: float
    top: float


@dataclass(frozen=True)
class Segment:
    start: tuple[float, float]
    end: tuple[float, float]


@dataclass(frozen=True)
class ErrorBar:
    stem: Segment
    top_cap: Segment | None
    bottom_cap: Segment | None

    def segments(self) -> list[Segment]:
        return [s for s in (self.stem, self.top_cap, self.bottom_cap) if s is not None]


@dataclass(frozen=True)
class TooltipPlacement:
    x: float
    y: float
    second_line_y: float
    align: str


def _cap(x: float, y: float, half_width: float) -> Segment:
    return Segment((x - half_width, y), (x + half_width, y))


def _inside(y: float, bounds: PlotBounds) -> bool:
    return bounds.bottom <= y <= bounds.top


def _clamp(y: float, bounds: PlotBounds) -> float:
    return max(bounds.bottom, min(bounds.top, y))


def error_bar(
    x: float,
    y: float,
    half_height: float,
    bounds: PlotBounds,
    cap_half_width: float = CAP_HALF_WIDTH,
) -> ErrorBar:
    top = y + half_height
    bottom = y - half_height
    top_cap = None
    bottom_cap = None

    # A cap is drawn only when its end lies inside the plot, on either side.
    if half_height > 0 and _inside(top, bounds):
        top_cap = _cap(x, top, cap_half_width)
    if half_height > 0 and _inside(bottom, bounds):
        bottom_cap = _cap(x, bottom, cap_half_width)

    stem = Segment((x, _clamp(bottom, bounds)), (x, _clamp(top, bounds)))
    return ErrorBar(stem=stem, top_cap=top_cap, bottom_cap=bottom_cap)


def place_tooltip(
    x: float,
    y: float,
    bounds: PlotBounds,
    offset_x: float = TOOLTIP_OFFSET_X,
    offset_y: float = TOOLTIP_OFFSET_Y,
    edge_margin: float = TOOLTIP_EDGE_MARGIN,
    boundary_margin: float = TOOLTIP_BOUNDARY_MARGIN,
    line_spacing: float = TOOLTIP_LINE_SPACING,
    line_height: float = TOOLTIP_LINE_HEIGHT,
) -> TooltipPlacement:
    # Only the plot edges are considered, not other labels.
    label_x = x + offset_x
    align = "left"
    if label_x > bounds.right - edge_margin:
        label_x = x - offset_x
        align = "right"

    # label_y is the bottom of the first line; its glyphs reach line_height above it.
    label_y = y + offset_y
    if label_y + line_height > bounds.top:
        label_y = y - offset_y - boundary_margin

    return TooltipPlacement(x=label_x, y=label_y, second_line_y=label_y - line_spacing, align=align)
