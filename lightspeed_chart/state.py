from dataclasses import dataclass

from .dataset import Measurement


@dataclass(frozen=True)
class HoverState:
    hovered: Measurement | None = None


@dataclass(frozen=True)
class Hover:
    record: Measurement


@dataclass(frozen=True)
class Unhover:
    pass


def update(state: HoverState, event: Hover | Unhover) -> HoverState:
    if isinstance(event, Hover):
        return HoverState(hovered=event.record)
    if isinstance(event, Unhover):
        return HoverState()
    raise TypeError(f"Unknown hover event: {event!r}")


def is_hovered(record: Measurement, state: HoverState) -> bool:
    return state.hovered is not None and record == state.hovered
