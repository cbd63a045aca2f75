"""Pynput-based mouse controller implementation."""

from pynput import mouse
from pynput.mouse import Button as PynputButton

from ...hardware_exceptions import MouseOperationException, hal_error_context
from ...logging import get_logger
from ..config import HALConfig
from ..interfaces.mouse_controller import IMouseController, MouseButton

logger = get_logger(__name__)


class PynputMouseController(IMouseController):
    """Mouse controller implementation using Pynput.

    Pynput injects input at the OS level without GUI automation
    dependencies.
    """

    def __init__(self, config: HALConfig | None = None) -> None:
        """Initialize Pynput controller.

        Args:
            config: HAL configuration
        """
        self.config = config or HALConfig()
        self.mouse_controller = mouse.Controller()

        self._button_map = {
            MouseButton.LEFT: PynputButton.left,
            MouseButton.RIGHT: PynputButton.right,
            MouseButton.MIDDLE: PynputButton.middle,
        }

        logger.info("pynput_controller_initialized")

    def move_cursor(self, x: int, y: int) -> None:
        try:
            self.mouse_controller.position = (x, y)
        except Exception as e:
            raise MouseOperationException("move", str(e), x=x, y=y) from e
        logger.debug("mouse_moved", x=x, y=y)

    def click(self, button: MouseButton = MouseButton.LEFT, double: bool = False) -> None:
        count = 2 if double else 1
        try:
            self.mouse_controller.click(self._button_map[button], count)
        except Exception as e:
            raise MouseOperationException("click", str(e), button=button.value, count=count) from e
        logger.debug("mouse_clicked", button=button.value, count=count)

    def position(self) -> tuple[int, int]:
        with hal_error_context("mouse_position"):
            x, y = self.mouse_controller.position
        return int(x), int(y)
