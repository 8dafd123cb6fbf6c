"""
Module: output.images

Purpose:
    Prepare snippet bitmaps for embedding: rescale to the placed size
    times the quality multiplier, apply optional enhancement and
    re-encode as PNG or JPEG.

Key Classes:
    - PreparedImage: Encoded bytes plus the decoded image
    - RenderAssetError: One image could not be decoded or encoded (from core.errors)

Key Functions:
    - prepare_image(): Rescale, enhance and encode one bitmap
    - to_image_reader(): Wrap encoded bytes for ReportLab
    - decode_prepared(): Decode encoded bytes for the print path

Dependencies:
    - PIL: Resampling and encoding
    - reportlab: ImageReader

Used By:
    - output.renderer: PDF embedding
    - output.print_surface: Print page rasters
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from typing import Optional

from PIL import Image
from reportlab.lib.utils import ImageReader

from snippet_layout.core.errors import RenderAssetError
from snippet_layout.core.models import Size

from .quality import ImageEnhancement, QualitySettings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PreparedImage:
    """
    Encoded bitmap ready for embedding.

    Attributes:
        data: Encoded PNG/JPEG bytes
        image: Decoded image at output pixel size
        image_format: "PNG" or "JPEG"
    """

    data: bytes
    image: Image.Image
    image_format: str

    @property
    def pixel_size(self) -> tuple[int, int]:
        return self.image.size


def target_pixels(size: Size, multiplier: int) -> tuple[int, int]:
    """Output pixel dimensions for a placed size (at least 1x1)."""
    return max(1, round(size.width * multiplier)), max(1, round(size.height * multiplier))


def _flatten(image: Image.Image) -> Image.Image:
    """Composite transparency onto white for formats without alpha."""
    if image.mode in ("RGBA", "LA") or (image.mode == "P" and "transparency" in image.info):
        rgba = image.convert("RGBA")
        background = Image.new("RGB", rgba.size, "white")
        background.paste(rgba, mask=rgba.split()[-1])
        return background
    if image.mode != "RGB":
        return image.convert("RGB")
    return image


def prepare_image(
    bitmap: Image.Image,
    size: Size,
    quality: QualitySettings,
    *,
    enhancement: Optional[ImageEnhancement] = None,
    asset_id: str = "",
) -> PreparedImage:
    """
    Rescale and re-encode a snippet bitmap.

    Args:
        bitmap: Source bitmap from the asset library
        size: Placed size in screen units
        quality: Encoding settings
        enhancement: Optional contrast/brightness/sharpen pass
        asset_id: Used in error messages

    Returns:
        PreparedImage at size x resolution_multiplier pixels

    Raises:
        RenderAssetError: If the bitmap cannot be processed
    """
    try:
        image = bitmap.resize(target_pixels(size, quality.resolution_multiplier), quality.resample)
        if enhancement is not None:
            image = enhancement.apply(image)

        buf = io.BytesIO()
        if quality.image_format == "JPEG":
            image = _flatten(image)
            image.save(buf, format="JPEG", quality=quality.pil_jpeg_quality)
        else:
            if image.mode not in ("RGB", "RGBA", "L", "LA"):
                image = image.convert("RGBA")
            image.save(buf, format="PNG")
    except (OSError, ValueError) as e:
        raise RenderAssetError(asset_id, str(e)) from e

    logger.debug(f"Prepared {asset_id or 'image'} at {image.size} as {quality.image_format}")
    return PreparedImage(data=buf.getvalue(), image=image, image_format=quality.image_format)


def to_image_reader(prepared: PreparedImage) -> ImageReader:
    """
    Wrap encoded bytes for ReportLab.

    Args:
        prepared: Output of prepare_image()

    Returns:
        ImageReader for use with canvas.drawImage
    """
    return ImageReader(io.BytesIO(prepared.data))


def decode_prepared(prepared: PreparedImage, asset_id: str = "") -> Image.Image:
    """
    Decode the encoded bytes back into pixels.

    The print path composites these rather than ``prepared.image`` so
    lossy JPEG artifacts match what the PDF embeds.

    Raises:
        RenderAssetError: If the encoded bytes cannot be decoded
    """
    try:
        with Image.open(io.BytesIO(prepared.data)) as img:
            img.load()
            return img.copy()
    except (OSError, ValueError) as e:
        raise RenderAssetError(asset_id or "image", str(e)) from e
