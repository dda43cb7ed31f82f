from .dataset import MEASUREMENTS, Measurement, load_measurements
from .state import Hover, HoverState, Unhover, update

__all__ = [
    "MEASUREMENTS",
    "Measurement",
    "load_measurements",
    "Hover",
    "HoverState",
    "Unhover",
    "update",
]
