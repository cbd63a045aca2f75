"""Query images with a cached decode.

A Template accepts whatever a caller has at hand (a file path, a
``data:image/...;base64,`` URL, a raw base64 string, encoded bytes, a PIL
image or a numpy array) and decodes it once. Polling the same template
repeatedly reuses the decoded BGR array.
"""

import base64
import binascii
import os
import threading
from pathlib import Path
from typing import Any, Union

import cv2
import numpy as np
from PIL import Image

from ..logging import get_logger
from ..vision_exceptions import InvalidImageException
from .image_utils import ensure_bgr, pil_to_cv2

logger = get_logger(__name__)

TemplateSource = Union[str, Path, bytes, Image.Image, np.ndarray]

DATA_URL_PREFIX = "data:image/"
# Longer strings that are not existing paths are tried as base64 first
RAW_BASE64_MIN_LENGTH = 100


class Template:
    """A query image, decoded lazily and cached until :meth:`close`."""

    def __init__(self, source: TemplateSource, name: str | None = None) -> None:
        self.source = source
        self.name = name or _describe(source)
        self._image: np.ndarray[Any, Any] | None = None
        self._lock = threading.Lock()

    @classmethod
    def of(cls, value: "Template | TemplateSource") -> "Template":
        """Wrap a raw source, passing existing templates through."""
        if isinstance(value, Template):
            return value
        return cls(value)

    @property
    def image(self) -> np.ndarray[Any, Any]:
        """Decoded BGR array.

        Raises:
            InvalidImageException: If the source cannot be decoded
        """
        with self._lock:
            if self._image is None:
                self._image = self._decode()
                logger.debug("template_decoded", template=self.name, shape=self._image.shape)
            return self._image

    @property
    def size(self) -> tuple[int, int]:
        """(width, height) of the decoded image."""
        h, w = self.image.shape[:2]
        return w, h

    @property
    def is_loaded(self) -> bool:
        return self._image is not None

    def close(self) -> None:
        """Drop the cached decode."""
        with self._lock:
            self._image = None

    def __enter__(self) -> "Template":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"Template({self.name!r})"

    def _decode(self) -> np.ndarray[Any, Any]:
        src = self.source
        if isinstance(src, np.ndarray):
            if src.size == 0:
                raise InvalidImageException(self.name, "empty array")
            return ensure_bgr(src)
        if isinstance(src, Image.Image):
            return pil_to_cv2(src)
        if isinstance(src, bytes | bytearray):
            return _decode_bytes(bytes(src), self.name)
        if isinstance(src, Path):
            return _read_file(src, self.name)
        if isinstance(src, str):
            return _decode_string(src, self.name)
        raise InvalidImageException(self.name, f"unsupported template type {type(src).__name__}")


def _decode_string(value: str, name: str) -> np.ndarray[Any, Any]:
    if value.startswith(DATA_URL_PREFIX):
        return _decode_data_url(value, name)

    if len(value) > RAW_BASE64_MIN_LENGTH and not os.path.exists(value):
        try:
            return _decode_bytes(base64.b64decode(value, validate=True), name)
        except (binascii.Error, ValueError, InvalidImageException):
            logger.debug("template_not_base64", template=name)

    return _read_file(Path(value), name)


def _decode_data_url(value: str, name: str) -> np.ndarray[Any, Any]:
    header, sep, payload = value.partition(",")
    if not sep or ";base64" not in header:
        raise InvalidImageException(name, "malformed base64 data URL")
    try:
        data = base64.b64decode(payload, validate=False)
    except (binascii.Error, ValueError) as e:
        raise InvalidImageException(name, f"base64 decode failed: {e}") from e
    return _decode_bytes(data, name)


def _decode_bytes(data: bytes, name: str) -> np.ndarray[Any, Any]:
    buffer = np.frombuffer(data, dtype=np.uint8)
    image = cv2.imdecode(buffer, cv2.IMREAD_COLOR) if buffer.size else None
    if image is None:
        raise InvalidImageException(name, "not a decodable image")
    return image


def _read_file(path: Path, name: str) -> np.ndarray[Any, Any]:
    if not path.is_file():
        raise InvalidImageException(name, "file not found")
    # imread cannot open non-ASCII paths on Windows; decode from bytes instead
    return _decode_bytes(path.read_bytes(), name)


def _describe(source: TemplateSource) -> str:
    if isinstance(source, Path):
        return str(source)
    if isinstance(source, str):
        if source.startswith(DATA_URL_PREFIX) or len(source) > RAW_BASE64_MIN_LENGTH:
            return f"<base64 {len(source)} chars>"
        return os.fspath(source)
    if isinstance(source, bytes | bytearray):
        return f"<bytes {len(source)}>"
    if isinstance(source, Image.Image):
        return f"<PIL {source.size[0]}x{source.size[1]}>"
    if isinstance(source, np.ndarray):
        return f"<array {source.shape[1]}x{source.shape[0]}>" if source.ndim >= 2 else "<array>"
    return repr(source)
