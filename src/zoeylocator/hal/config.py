"""HAL configuration management."""

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class CaptureBackend(Enum):
    """Available screen capture backends."""

    MSS = "mss"


class InputBackend(Enum):
    """Available input control backends."""

    PYNPUT = "pynput"


class OCRBackend(Enum):
    """Available OCR backends."""

    EASYOCR = "easyocr"
    NONE = "none"


class NormalizationMode(Enum):
    """When coordinate scale detection runs.

    AUTO detects on Windows only, where capture pixels and input pixels can
    disagree depending on process DPI awareness. Elsewhere it is identity.
    """

    AUTO = "auto"
    ALWAYS = "always"
    NEVER = "never"


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


@dataclass
class HALConfig:
    """HAL configuration settings.

    Configuration can be set via:
    1. Environment variables (ZOEYLOCATOR_* prefix)
    2. Direct instantiation
    """

    capture_backend: str = field(
        default_factory=lambda: os.getenv("ZOEYLOCATOR_CAPTURE_BACKEND", CaptureBackend.MSS.value)
    )
    input_backend: str = field(
        default_factory=lambda: os.getenv("ZOEYLOCATOR_INPUT_BACKEND", InputBackend.PYNPUT.value)
    )
    ocr_backend: str = field(
        default_factory=lambda: os.getenv("ZOEYLOCATOR_OCR_BACKEND", OCRBackend.EASYOCR.value)
    )
    ocr_languages: list[str] = field(
        default_factory=lambda: [
            lang.strip()
            for lang in os.getenv("ZOEYLOCATOR_OCR_LANGUAGES", "en").split(",")
            if lang.strip()
        ]
    )
    ocr_gpu_enabled: bool = field(
        default_factory=lambda: _env_bool("ZOEYLOCATOR_OCR_GPU_ENABLED", "false")
    )
    normalization_mode: str = field(
        default_factory=lambda: os.getenv(
            "ZOEYLOCATOR_NORMALIZATION_MODE", NormalizationMode.AUTO.value
        )
    )
    debug_mode: bool = field(default_factory=lambda: _env_bool("ZOEYLOCATOR_HAL_DEBUG", "false"))

    def validate(self) -> bool:
        """Validate configuration settings.

        Returns:
            True if configuration is valid

        Raises:
            ValueError: If configuration is invalid
        """
        if self.capture_backend not in [b.value for b in CaptureBackend]:
            raise ValueError(f"Invalid capture backend: {self.capture_backend}")

        if self.input_backend not in [b.value for b in InputBackend]:
            raise ValueError(f"Invalid input backend: {self.input_backend}")

        if self.ocr_backend not in [b.value for b in OCRBackend]:
            raise ValueError(f"Invalid OCR backend: {self.ocr_backend}")

        if self.normalization_mode not in [m.value for m in NormalizationMode]:
            raise ValueError(f"Invalid normalization mode: {self.normalization_mode}")

        if self.ocr_backend != OCRBackend.NONE.value and not self.ocr_languages:
            raise ValueError("At least one OCR language is required")

        return True

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary.

        Returns:
            Configuration as dictionary
        """
        return {
            "capture_backend": self.capture_backend,
            "input_backend": self.input_backend,
            "ocr_backend": self.ocr_backend,
            "ocr_languages": list(self.ocr_languages),
            "ocr_gpu_enabled": self.ocr_gpu_enabled,
            "normalization_mode": self.normalization_mode,
            "debug_mode": self.debug_mode,
        }

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> "HALConfig":
        """Create configuration from dictionary.

        Args:
            config_dict: Configuration dictionary

        Returns:
            HALConfig instance
        """
        return cls(**config_dict)

    def __str__(self) -> str:
        """String representation."""
        return (
            f"HALConfig(capture={self.capture_backend}, "
            f"input={self.input_backend}, "
            f"ocr={self.ocr_backend}, "
            f"normalization={self.normalization_mode})"
        )
