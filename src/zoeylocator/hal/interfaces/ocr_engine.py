"""OCR engine interface definition."""

from abc import ABC, abstractmethod

from PIL import Image

from ...model import OCRResult


class IOCREngine(ABC):
    """Interface for an external OCR engine.

    Engines are expensive to construct and not reentrant; the text
    recognizer serializes every call.
    """

    @abstractmethod
    def recognize(self, image: Image.Image) -> list[OCRResult]:
        """Recognize all text boxes in an image.

        Args:
            image: Image to analyze

        Returns:
            One OCRResult per text box, quads in image pixel coordinates
        """
        pass

    def close(self) -> None:
        """Release engine resources."""
        return None
