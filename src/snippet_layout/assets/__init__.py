"""
Module: assets

Purpose:
    Access to the external snippet asset library. Placements store
    only asset ids; bitmaps and native sizes are resolved here.

Key Classes:
    - AssetLibrary: Abstract interface
    - InMemoryAssetLibrary: Dict-backed library
    - DirectoryAssetLibrary: Directory of image files
    - MissingAssetError: Unknown asset id

Key Functions:
    - crop_snippet(): Crop a snippet from a decoded source page

Dependencies:
    - PIL: Image manipulation

Used By:
    - editor, arrange, output
"""

from .provider import (
    AssetLibrary,
    InMemoryAssetLibrary,
    DirectoryAssetLibrary,
    MissingAssetError,
    missing_asset_ids,
)
from .cropper import crop_snippet

__all__ = [
    "AssetLibrary",
    "InMemoryAssetLibrary",
    "DirectoryAssetLibrary",
    "MissingAssetError",
    "missing_asset_ids",
    "crop_snippet",
]
