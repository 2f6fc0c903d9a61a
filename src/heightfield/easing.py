"""Easing curves that reshape a parameter in [0, 1].

Every curve maps 0 to 0 and 1 to 1, and works on scalars and numpy arrays
alike.
"""

from typing import Any, Callable

import numpy as np
from numpy.typing import NDArray

from .types import Easing

EasingFunction = Callable[[Any], Any]


def linear(x: NDArray[np.float64]) -> NDArray[np.float64]:
    return x


def ease_in(x: NDArray[np.float64]) -> NDArray[np.float64]:
    """Slow start: x^2."""
    return x * x


def ease_out(x: NDArray[np.float64]) -> NDArray[np.float64]:
    """Slow finish: -x(x - 2)."""
    return -x * (x - 2)


def ease_in_out(x: NDArray[np.float64]) -> NDArray[np.float64]:
    """Smoothstep curve x^2(3 - 2x)."""
    return x * x * (3 - 2 * x)


def in_ease_out(x: NDArray[np.float64]) -> NDArray[np.float64]:
    """Fast at both ends, flat in the middle: 0.5(2x - 1)^3 + 0.5."""
    y = 2 * x - 1
    return 0.5 * y * y * y + 0.5


_EASINGS: dict[Easing, EasingFunction] = {
    Easing.LINEAR: linear,
    Easing.EASE_IN: ease_in,
    Easing.EASE_OUT: ease_out,
    Easing.EASE_IN_OUT: ease_in_out,
    Easing.IN_EASE_OUT: in_ease_out,
}


def resolve_easing(easing: Easing | EasingFunction) -> EasingFunction:
    """Return the callable for a named easing, or the custom callable itself."""
    if isinstance(easing, Easing):
        return _EASINGS[easing]
    return easing
