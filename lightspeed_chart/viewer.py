import logging

import matplotlib.pyplot as plt

from .chart import (
    DEFAULT_CONFIG,
    ChartConfig,
    draw_chart,
    draw_error_bars,
    draw_hover_overlay,
    new_figure,
    remove_screen_artists,
)
from .state import Hover, HoverState, Unhover, update

logger = logging.getLogger(__name__)


class HoverViewer:
    """Matplotlib window that re-renders the chart on every hover transition."""

    def __init__(self, records, config: ChartConfig = DEFAULT_CONFIG):
        self.records = tuple(records)
        self.config = config
        self.state = HoverState()
        self.fig, self.ax = new_figure(config)
        self.points = []

        canvas = self.fig.canvas
        canvas.mpl_connect("motion_notify_event", self.on_motion)
        canvas.mpl_connect("axes_leave_event", self.on_leave)
        canvas.mpl_connect("resize_event", self.on_resize)

        self.render()

    def render(self):
        self.ax.clear()
        self.points = draw_chart(self.ax, self.records, self.state, self.config)
        # clear() replaces the callback registry, so limits are watched again per render.
        self.ax.callbacks.connect("xlim_changed", self.on_limits_changed)
        self.ax.callbacks.connect("ylim_changed", self.on_limits_changed)
        self.fig.canvas.draw_idle()

    def on_limits_changed(self, ax):
        # Zoom and pan change the view without a state change; re-clamp to the new bounds.
        remove_screen_artists(ax)
        draw_error_bars(ax, self.records, self.config)
        if self.state.hovered is not None and self.state.hovered in self.records:
            index = self.records.index(self.state.hovered)
            draw_hover_overlay(ax, index, self.state.hovered, self.config, include_marker=False)
        self.fig.canvas.draw_idle()

    def hit_test(self, event):
        if event.inaxes is not self.ax:
            return None
        for record, point in zip(self.records, self.points):
            hit, _ = point.contains(event)
            if hit:
                return record
        return None

    def dispatch(self, event) -> bool:
        new_state = update(self.state, event)
        if new_state == self.state:
            return False
        self.state = new_state
        logger.debug("Hover state -> %s", new_state.hovered)
        self.render()
        return True

    def on_motion(self, event):
        record = self.hit_test(event)
        self.dispatch(Hover(record) if record is not None else Unhover())

    def on_leave(self, event):
        self.dispatch(Unhover())

    def on_resize(self, event):
        self.render()

    def show(self):
        plt.show()
