"""
Module: output.quality

Purpose:
    Export quality presets and optional image enhancement settings.

Key Classes:
    - QualityPreset: maximum / high / standard / light
    - QualitySettings: Encoding parameters of a preset
    - ImageEnhancement: Contrast, brightness and sharpening

Dependencies:
    - PIL: ImageEnhance, ImageFilter

Used By:
    - output.images: prepare_image()
    - controller: ExportConfig
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from PIL import Image, ImageEnhance, ImageFilter


@dataclass(frozen=True)
class QualitySettings:
    """
    Encoding parameters for embedded bitmaps (immutable).

    Attributes:
        image_format: "PNG" or "JPEG"
        jpeg_quality: JPEG quality in 0..1 (ignored for PNG)
        resolution_multiplier: Pixels per screen unit in the output
        smoothing: Use LANCZOS resampling (else NEAREST)
    """

    image_format: str
    jpeg_quality: float
    resolution_multiplier: int
    smoothing: bool

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.image_format not in ("PNG", "JPEG"):
            raise ValueError(f"image_format must be PNG or JPEG: {self.image_format}")
        if not 0 < self.jpeg_quality <= 1:
            raise ValueError(f"jpeg_quality must be in (0, 1]: {self.jpeg_quality}")
        if self.resolution_multiplier < 1:
            raise ValueError(f"resolution_multiplier must be >= 1: {self.resolution_multiplier}")

    @property
    def resample(self) -> Image.Resampling:
        return Image.Resampling.LANCZOS if self.smoothing else Image.Resampling.NEAREST

    @property
    def pil_jpeg_quality(self) -> int:
        """JPEG quality on PIL's 1..95 scale."""
        return max(1, min(95, round(self.jpeg_quality * 100)))


class QualityPreset(str, Enum):
    MAXIMUM = "maximum"
    HIGH = "high"
    STANDARD = "standard"
    LIGHT = "light"

    @property
    def settings(self) -> QualitySettings:
        return _PRESETS[self]


_PRESETS = {
    QualityPreset.MAXIMUM: QualitySettings("PNG", 1.0, 3, True),
    QualityPreset.HIGH: QualitySettings("JPEG", 0.92, 2, True),
    QualityPreset.STANDARD: QualitySettings("JPEG", 0.85, 2, True),
    QualityPreset.LIGHT: QualitySettings("JPEG", 0.7, 1, False),
}


@dataclass(frozen=True)
class ImageEnhancement:
    """
    Optional correction applied to snippet bitmaps before encoding.

    Attributes:
        contrast: Contrast factor (1.0 = unchanged)
        brightness: Brightness factor (1.0 = unchanged)
        sharpen: Apply an unsharp mask

    Example:
        >>> ImageEnhancement(contrast=1.2).is_identity
        False
    """

    contrast: float = 1.0
    brightness: float = 1.0
    sharpen: bool = False

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.contrast <= 0:
            raise ValueError(f"contrast must be positive: {self.contrast}")
        if self.brightness <= 0:
            raise ValueError(f"brightness must be positive: {self.brightness}")

    @property
    def is_identity(self) -> bool:
        return self.contrast == 1.0 and self.brightness == 1.0 and not self.sharpen

    def apply(self, image: Image.Image) -> Image.Image:
        """Return an enhanced copy (or image itself if nothing to do)."""
        if self.is_identity:
            return image
        result = image
        if result.mode not in ("RGB", "L"):
            result = result.convert("RGB")
        if self.contrast != 1.0:
            result = ImageEnhance.Contrast(result).enhance(self.contrast)
        if self.brightness != 1.0:
            result = ImageEnhance.Brightness(result).enhance(self.brightness)
        if self.sharpen:
            result = result.filter(ImageFilter.UnsharpMask(radius=2, percent=150, threshold=3))
        return result
