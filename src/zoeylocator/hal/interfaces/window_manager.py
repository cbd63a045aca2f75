"""Window management interface definition.

No implementation ships with zoeylocator; hosts that need window lookup
provide their own and pass ``Window.region`` to restrict a search.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from ...model import Region


@dataclass
class Window:
    """Represents a top-level window."""

    handle: Any
    title: str
    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0

    @property
    def region(self) -> Region:
        """Window bounds, usable as ``LocatorOptions.region``."""
        return Region(self.x, self.y, self.width, self.height)


class IWindowManager(ABC):
    """Interface for window enumeration and activation."""

    @abstractmethod
    def list_windows(self) -> list[Window]:
        """List visible top-level windows.

        Returns:
            List of Window objects
        """
        pass

    @abstractmethod
    def activate_window(self, title: str) -> bool:
        """Bring the first window whose title contains ``title`` to front.

        Args:
            title: Case-insensitive title fragment

        Returns:
            True if a window was activated
        """
        pass
