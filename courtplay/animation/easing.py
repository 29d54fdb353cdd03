"""Easing curves applied to interpolation progress."""

from typing import Callable

EasingFn = Callable[[float], float]


def ease_in_out(t: float) -> float:
    """Smooth cubic ease-in-out curve."""
    return 2 * t * t if t < 0.5 else -1 + (4 - 2 * t) * t


def linear(t: float) -> float:
    """No easing."""
    return t


EASINGS: dict[str, EasingFn] = {
    "ease_in_out": ease_in_out,
    "linear": linear,
}


def get_easing(name: str) -> EasingFn:
    """Look up an easing function by name."""
    try:
        return EASINGS[name]
    except KeyError:
        raise ValueError(f"Unknown easing '{name}', expected one of {sorted(EASINGS)}") from None
