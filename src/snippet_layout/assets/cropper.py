"""
Module: assets.cropper

Purpose:
    Crop a snippet bitmap out of an already decoded source page.

Key Functions:
    - crop_snippet(): Crop one rectangular region

Dependencies:
    - PIL: Image manipulation

Used By:
    - assets.provider: InMemoryAssetLibrary.add_from_page
"""

from __future__ import annotations

from typing import Tuple

from PIL import Image


def crop_snippet(
    page_bitmap: Image.Image,
    crop_box: Tuple[int, int, int, int],
) -> Image.Image:
    """
    Crop a region from a decoded page image.

    Args:
        page_bitmap: Source page bitmap
        crop_box: (left, top, right, bottom) in page pixels

    Returns:
        Cropped image (new copy, not a view)

    Raises:
        ValueError: If the box is empty or outside the image

    Example:
        >>> snippet = crop_snippet(page, (10, 20, 110, 70))
        >>> snippet.size
        (100, 50)
    """
    left, top, right, bottom = crop_box
    if left < 0 or top < 0:
        raise ValueError(f"Crop box {crop_box} has a negative origin")
    if right <= left or bottom <= top:
        raise ValueError(f"Crop box {crop_box} is empty")
    if right > page_bitmap.width or bottom > page_bitmap.height:
        raise ValueError(
            f"Crop box {crop_box} exceeds image size {page_bitmap.size}"
        )
    return page_bitmap.crop(crop_box)
