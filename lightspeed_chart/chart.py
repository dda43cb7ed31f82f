import io
from dataclasses import dataclass

import matplotlib.pyplot as plt
from matplotlib.collections import LineCollection
from matplotlib.lines import Line2D
from matplotlib.transforms import Affine2D

from .dataset import Measurement
from .geometry import ErrorBar, PlotBounds, error_bar, place_tooltip
from .state import HoverState, is_hovered

POINTS_PER_INCH = 72.0


@dataclass(frozen=True)
class ChartConfig:
    title: str = "Historical measurements of the speed of light"
    x_label: str = "Year"
    y_label: str = "Speed of light (km/s)"
    width: float = 12.0
    height: float = 6.0
    dpi: int = 100
    y_min: float | None = None
    y_max: float | None = None
    margin: float = 0.05
    point_color: str = "#2563eb"
    error_bar_color: str = "#94a3b8"
    highlight_color: str = "#dc2626"
    text_color: str = "#0f172a"
    font_size: float = 9.0
    subplot_left: float = 0.09
    subplot_right: float = 0.98
    subplot_bottom: float = 0.1
    subplot_top: float = 0.92


DEFAULT_CONFIG = ChartConfig()


def default_marker(config: ChartConfig = DEFAULT_CONFIG) -> dict:
    return {
        "marker": "o",
        "markersize": 6.0,
        "markerfacecolor": config.point_color,
        "markeredgecolor": config.point_color,
        "markeredgewidth": 1.0,
    }


def hovered_marker(config: ChartConfig = DEFAULT_CONFIG) -> dict:
    return {
        "marker": "o",
        "markersize": 4.5,
        "markerfacecolor": "none",
        "markeredgecolor": config.highlight_color,
        "markeredgewidth": 1.5,
    }


def marker_style(record: Measurement, state: HoverState, config: ChartConfig = DEFAULT_CONFIG) -> dict:
    if is_hovered(record, state):
        return hovered_marker(config)
    return default_marker(config)


def _padded(lo: float, hi: float, margin: float) -> tuple[float, float]:
    if hi <= lo:
        return lo - 1.0, hi + 1.0
    pad = (hi - lo) * margin
    return lo - pad, hi + pad


def axis_limits(records, config: ChartConfig = DEFAULT_CONFIG):
    if not records:
        return (-1.0, 1.0), (-1.0, 1.0)

    x_lim = _padded(min(r.year for r in records), max(r.year for r in records), config.margin)
    y_lo, y_hi = _padded(min(r.value for r in records), max(r.value for r in records), config.margin)
    if config.y_min is not None:
        y_lo = config.y_min
    if config.y_max is not None:
        y_hi = config.y_max
    return x_lim, (y_lo, y_hi)


def new_figure(config: ChartConfig = DEFAULT_CONFIG):
    fig, ax = plt.subplots(figsize=(config.width, config.height), dpi=config.dpi)
    # Fixed margins keep screen geometry identical between drawing and saving.
    fig.subplots_adjust(
        left=config.subplot_left,
        right=config.subplot_right,
        bottom=config.subplot_bottom,
        top=config.subplot_top,
    )
    return fig, ax


def screen_transform(ax):
    """Data coordinates to points measured from the figure's lower-left corner."""
    return ax.transData + ax.figure.dpi_scale_trans.inverted() + Affine2D().scale(POINTS_PER_INCH)


def plot_bounds(ax) -> PlotBounds:
    (x0, x1), (y0, y1) = ax.get_xlim(), ax.get_ylim()
    (left, bottom), (right, top) = screen_transform(ax).transform([(x0, y0), (x1, y1)])
    return PlotBounds(left=left, bottom=bottom, right=right, top=top)


def record_error_bar(ax, record: Measurement) -> ErrorBar:
    screen = screen_transform(ax)
    (x, y), (_, y_top) = screen.transform(
        [(record.year, record.value), (record.year, record.value + record.uncertainty)]
    )
    return error_bar(x, y, abs(y_top - y), plot_bounds(ax))


def _error_bar_collection(ax, bar: ErrorBar, **kwargs) -> LineCollection:
    to_data = screen_transform(ax).inverted()
    segments = [to_data.transform([s.start, s.end]) for s in bar.segments()]
    return LineCollection(segments, **kwargs)


def draw_hover_overlay(
    ax,
    index: int,
    record: Measurement,
    config: ChartConfig = DEFAULT_CONFIG,
    include_marker: bool = True,
):
    """Highlighted error bar plus the two-line observer/method label."""
    gid = f"hover-{index}"
    ax.add_collection(
        _error_bar_collection(
            ax,
            record_error_bar(ax, record),
            colors=config.highlight_color,
            linewidths=1.6,
            zorder=5,
            gid=f"{gid}-bar",
        )
    )
    if include_marker:
        ax.plot(
            [record.year],
            [record.value],
            linestyle="none",
            zorder=6,
            gid=f"{gid}-marker",
            **hovered_marker(config),
        )

    screen = screen_transform(ax)
    x, y = screen.transform((record.year, record.value))
    placement = place_tooltip(x, y, plot_bounds(ax), line_height=config.font_size * 1.2)
    to_data = screen.inverted()
    lines = (
        (record.observer, placement.y, f"{gid}-observer", "bold"),
        (record.method, placement.second_line_y, f"{gid}-method", "normal"),
    )
    for text, line_y, text_gid, weight in lines:
        tx, ty = to_data.transform((placement.x, line_y))
        ax.text(
            tx,
            ty,
            text,
            ha=placement.align,
            va="bottom",
            fontsize=config.font_size,
            fontweight=weight,
            color=config.text_color,
            zorder=7,
            gid=text_gid,
        )


def draw_error_bars(ax, records, config: ChartConfig = DEFAULT_CONFIG):
    for i, record in enumerate(records):
        ax.add_collection(
            _error_bar_collection(
                ax,
                record_error_bar(ax, record),
                colors=config.error_bar_color,
                linewidths=0.9,
                zorder=2,
                gid=f"errorbar-{i}",
            )
        )


def remove_screen_artists(ax):
    """Drop artists whose geometry was computed for the previous view limits."""
    for artist in [*ax.collections, *ax.texts, *ax.lines]:
        if (artist.get_gid() or "").startswith(("errorbar-", "hover-")):
            artist.remove()


def draw_chart(ax, records, state: HoverState = HoverState(), config: ChartConfig = DEFAULT_CONFIG):
    """Draw every record onto ``ax`` and return the point artists in record order."""
    x_lim, y_lim = axis_limits(records, config)
    ax.set_xlim(*x_lim)
    ax.set_ylim(*y_lim)
    ax.set_title(config.title)
    ax.set_xlabel(config.x_label)
    ax.set_ylabel(config.y_label)
    ax.ticklabel_format(axis="y", style="plain", useOffset=False)
    ax.grid(alpha=0.25)

    draw_error_bars(ax, records, config)

    points = []
    hovered_index = None
    for i, record in enumerate(records):
        (line,) = ax.plot(
            [record.year],
            [record.value],
            linestyle="none",
            zorder=3,
            gid=f"point-{i}",
            **marker_style(record, state, config),
        )
        points.append(line)
        if hovered_index is None and is_hovered(record, state):
            hovered_index = i

    if hovered_index is not None:
        draw_hover_overlay(ax, hovered_index, records[hovered_index], config, include_marker=False)

    legend_handle = Line2D([], [], linestyle="none", label="Measurement", **default_marker(config))
    ax.legend(handles=[legend_handle], loc="lower right")
    return points


def render_figure(records, state: HoverState = HoverState(), config: ChartConfig = DEFAULT_CONFIG):
    fig, ax = new_figure(config)
    draw_chart(ax, records, state, config)
    return fig, ax


def figure_to_svg(fig) -> str:
    buf = io.StringIO()
    fig.savefig(buf, format="svg")
    plt.close(fig)
    return buf.getvalue()


def render_svg(records, state: HoverState = HoverState(), config: ChartConfig = DEFAULT_CONFIG) -> str:
    fig, _ = render_figure(records, state, config)
    return figure_to_svg(fig)
