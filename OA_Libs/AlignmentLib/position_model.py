"""
Position model for Overlay Align.

The position is the pixel offset applied to the overlay image relative to the
base image. It is unbounded: negative offsets and offsets larger than the
viewport are valid, clipping happens at render time.

Classes:
    Position: Immutable 2D integer offset
    PositionModel: Holder for the current offset with set/adjust semantics
"""

from dataclasses import dataclass
import logging

logger = logging.getLogger(__name__)


def _require_int(name: str, value) -> None:
    # bool is an int subclass but never a meaningful coordinate
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an int, got {type(value).__name__}")


@dataclass(frozen=True)
class Position:
    """A 2D pixel offset.

    Attributes:
        x: Horizontal offset in pixels (positive is right)
        y: Vertical offset in pixels (positive is down)
    """
    x: int = 0
    y: int = 0

    def __post_init__(self):
        _require_int("x", self.x)
        _require_int("y", self.y)

    def __add__(self, other: "Position") -> "Position":
        if not isinstance(other, Position):
            return NotImplemented
        return Position(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Position") -> "Position":
        if not isinstance(other, Position):
            return NotImplemented
        return Position(self.x - other.x, self.y - other.y)

    def as_tuple(self):
        return (self.x, self.y)


ORIGIN = Position(0, 0)


class PositionModel:
    """Holds the current overlay offset.

    Example:
        >>> model = PositionModel()
        >>> model.adjust(3, -2)
        >>> model.position
        Position(x=3, y=-2)
    """

    def __init__(self, initial: Position = ORIGIN):
        if not isinstance(initial, Position):
            raise TypeError(f"Expected Position, got {type(initial)}")
        self._position = initial

    @property
    def position(self) -> Position:
        return self._position

    def set(self, position: Position) -> None:
        """Replace the held offset."""
        if not isinstance(position, Position):
            raise TypeError(f"Expected Position, got {type(position)}")
        self._position = position

    def adjust(self, dx: int, dy: int) -> None:
        """Add (dx, dy) to the held offset."""
        _require_int("dx", dx)
        _require_int("dy", dy)
        self._position = Position(self._position.x + dx, self._position.y + dy)

    def reset(self) -> None:
        self._position = ORIGIN
        logger.debug("Position reset to origin")
