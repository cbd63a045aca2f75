"""Mouse controller interface definition."""

from abc import ABC, abstractmethod
from enum import Enum


class MouseButton(Enum):
    """Mouse button enumeration."""

    LEFT = "left"
    RIGHT = "right"
    MIDDLE = "middle"


class IMouseController(ABC):
    """Interface for synthetic mouse input.

    Coordinates are in input-injection space; callers convert capture
    coordinates through the coordinate normalizer first.
    """

    @abstractmethod
    def move_cursor(self, x: int, y: int) -> None:
        """Move the cursor to an absolute position.

        Args:
            x: Target X coordinate
            y: Target Y coordinate

        Raises:
            MouseOperationException: If the move fails
        """
        pass

    @abstractmethod
    def click(self, button: MouseButton = MouseButton.LEFT, double: bool = False) -> None:
        """Click at the current cursor position.

        Args:
            button: Mouse button to click
            double: Double-click instead of a single click

        Raises:
            MouseOperationException: If the click fails
        """
        pass

    @abstractmethod
    def position(self) -> tuple[int, int]:
        """Get the current cursor position.

        Returns:
            Tuple of (x, y)
        """
        pass
