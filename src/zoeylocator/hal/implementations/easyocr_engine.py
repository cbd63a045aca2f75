"""EasyOCR-based OCR engine implementation."""

from typing import Any

import easyocr
import numpy as np
from PIL import Image

from ...logging import get_logger
from ...model import OCRResult, Point, Quad
from ..config import HALConfig
from ..interfaces.ocr_engine import IOCREngine

logger = get_logger(__name__)


class EasyOCREngine(IOCREngine):
    """OCR engine implementation using EasyOCR.

    The reader is built once in the constructor; model loading is the
    expensive part and callers construct this engine lazily.
    """

    def __init__(self, config: HALConfig | None = None) -> None:
        """Initialize EasyOCR engine.

        Args:
            config: HAL configuration
        """
        self.config = config or HALConfig()
        self.languages = list(self.config.ocr_languages) or ["en"]

        self.use_gpu = self.config.ocr_gpu_enabled
        if self.use_gpu:
            try:
                import torch

                if not torch.cuda.is_available():
                    self.use_gpu = False
                    logger.info("cuda_unavailable_using_cpu")
            except ImportError:
                self.use_gpu = False
                logger.info("torch_missing_using_cpu")

        self._reader: Any = easyocr.Reader(self.languages, gpu=self.use_gpu, verbose=False)

        logger.info("easyocr_engine_initialized", gpu_enabled=self.use_gpu, languages=self.languages)

    def recognize(self, image: Image.Image) -> list[OCRResult]:
        if image.mode != "RGB":
            image = image.convert("RGB")
        results = self._reader.readtext(np.array(image), detail=1)

        recognized = []
        for bbox, text, confidence in results:
            # EasyOCR boxes are [tl, tr, br, bl]
            corners = [Point(int(round(px)), int(round(py))) for px, py in bbox]
            recognized.append(OCRResult(text=str(text), confidence=float(confidence), quad=Quad(*corners)))

        logger.debug("text_recognized", count=len(recognized))
        return recognized

    def close(self) -> None:
        self._reader = None
