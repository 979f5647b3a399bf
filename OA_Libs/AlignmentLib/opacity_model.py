"""
Opacity model for Overlay Align.

The overlay's blend alpha, always within [0.0, 1.0]. Out-of-range input is
clamped rather than rejected.
"""

import math
import logging

from OA_Libs.constants import DEFAULT_OPACITY, OPACITY_MAX, OPACITY_MIN, OPACITY_PERCENT_MAX

logger = logging.getLogger(__name__)


def clamp_opacity(value: float) -> float:
    return max(OPACITY_MIN, min(OPACITY_MAX, float(value)))


class OpacityModel:
    """
    Holds the overlay opacity.

    Example:
        >>> model = OpacityModel()
        >>> model.set_percent(40)
        >>> model.opacity
        0.4
        >>> model.set_opacity(1.5)
        >>> model.opacity
        1.0
    """

    def __init__(self, initial: float = DEFAULT_OPACITY):
        self._opacity = clamp_opacity(initial)

    @property
    def opacity(self) -> float:
        return self._opacity

    @property
    def percent(self) -> int:
        """Opacity as a rounded percentage, for the slider label."""
        return int(round(self._opacity * OPACITY_PERCENT_MAX))

    def set_opacity(self, value: float) -> None:
        """
        Set the opacity, clamping to [0, 1].

        NaN carries no usable value and leaves the opacity unchanged.
        """
        value = float(value)
        if math.isnan(value):
            logger.debug("Ignoring NaN opacity")
            return
        self._opacity = clamp_opacity(value)

    def set_percent(self, percent: float) -> None:
        """Set the opacity from a slider percentage (0-100)."""
        self.set_opacity(float(percent) / OPACITY_PERCENT_MAX)
