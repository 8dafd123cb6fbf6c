"""
Module: assets.provider

Purpose:
    Interface to the external asset library that owns snippet bitmaps.
    Placements only hold an asset id; the compositor and the editor
    resolve bitmaps and native sizes through an AssetLibrary.

Key Classes:
    - AssetLibrary: Abstract base class for asset access
    - InMemoryAssetLibrary: Bitmaps held in a dict (tests, embedding hosts)
    - DirectoryAssetLibrary: Bitmaps stored as <asset_id>.png/.jpg files
    - MissingAssetError: Asset id no longer present in the library
    - RenderAssetError: Asset file present but undecodable (core.errors)

Dependencies:
    - PIL: Image loading
    - core.models.geometry: Size

Used By:
    - editor.interaction: Native size on drop
    - arrange.grid: Native size for grid scaling
    - output: Bitmaps for compositing
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Iterable, Optional, Tuple

from PIL import Image

from snippet_layout.core.errors import LayoutError, RenderAssetError
from snippet_layout.core.models import Size

from .cropper import crop_snippet

logger = logging.getLogger(__name__)

IMAGE_SUFFIXES = (".png", ".jpg", ".jpeg")


class MissingAssetError(LayoutError, LookupError):
    """A placement references an asset id the library no longer has."""

    def __init__(self, asset_id: str):
        super().__init__(f"Asset not found: {asset_id}")
        self.asset_id = asset_id


class AssetLibrary(ABC):
    """
    Abstract interface for accessing snippet bitmaps.

    The library owns the bitmaps; the layout core only holds ids.
    """

    @abstractmethod
    def get_bitmap(self, asset_id: str) -> Image.Image:
        """
        Get the bitmap for an asset.

        Raises:
            MissingAssetError: If asset_id is unknown
            RenderAssetError: If the stored bitmap cannot be decoded
        """

    @abstractmethod
    def native_size(self, asset_id: str) -> Size:
        """
        Size the snippet had when it was cropped, in screen units.

        Raises:
            MissingAssetError: If asset_id is unknown
            RenderAssetError: If the size has to be read from an undecodable bitmap
        """

    @property
    @abstractmethod
    def asset_ids(self) -> list[str]:
        """Ids of all assets, in creation order."""

    def has_asset(self, asset_id: str) -> bool:
        return asset_id in self.asset_ids


class InMemoryAssetLibrary(AssetLibrary):
    """
    Library backed by a dict of PIL images.

    Example:
        >>> library = InMemoryAssetLibrary()
        >>> library.add("s1", Image.new("RGB", (120, 80)))
        >>> library.native_size("s1")
        Size(width=120.0, height=80.0)
    """

    def __init__(self, bitmaps: Optional[Dict[str, Image.Image]] = None) -> None:
        self._bitmaps: Dict[str, Image.Image] = {}
        self._sizes: Dict[str, Size] = {}
        for asset_id, bitmap in (bitmaps or {}).items():
            self.add(asset_id, bitmap)

    def add(self, asset_id: str, bitmap: Image.Image, native_size: Optional[Size] = None) -> None:
        """Register a bitmap; native size defaults to its pixel size."""
        self._bitmaps[asset_id] = bitmap
        self._sizes[asset_id] = native_size or Size(float(bitmap.width), float(bitmap.height))

    def add_from_page(
        self,
        asset_id: str,
        page_bitmap: Image.Image,
        crop_box: Tuple[int, int, int, int],
        *,
        crop_zoom: float = 1.0,
    ) -> Size:
        """
        Crop a snippet out of a decoded source page and register it.

        The native size is the crop size multiplied by the zoom the user
        was looking at while cropping.

        Returns:
            Native size of the new asset
        """
        bitmap = crop_snippet(page_bitmap, crop_box)
        native = Size(bitmap.width * crop_zoom, bitmap.height * crop_zoom)
        self.add(asset_id, bitmap, native)
        return native

    def remove(self, asset_id: str) -> None:
        self._bitmaps.pop(asset_id, None)
        self._sizes.pop(asset_id, None)

    def get_bitmap(self, asset_id: str) -> Image.Image:
        try:
            return self._bitmaps[asset_id]
        except KeyError:
            raise MissingAssetError(asset_id) from None

    def native_size(self, asset_id: str) -> Size:
        try:
            return self._sizes[asset_id]
        except KeyError:
            raise MissingAssetError(asset_id) from None

    @property
    def asset_ids(self) -> list[str]:
        return list(self._bitmaps.keys())


class DirectoryAssetLibrary(AssetLibrary):
    """
    Library reading `<asset_id>.png` / `.jpg` files from a directory.

    Bitmaps are loaded lazily and cached.

    Attributes:
        root: Directory containing the asset files
    """

    def __init__(self, root: Path, native_sizes: Optional[Dict[str, Size]] = None) -> None:
        self.root = Path(root)
        self._native_sizes = dict(native_sizes or {})
        self._cache: Dict[str, Image.Image] = {}

    def _path_for(self, asset_id: str) -> Path:
        for suffix in IMAGE_SUFFIXES:
            candidate = self.root / f"{asset_id}{suffix}"
            if candidate.exists():
                return candidate
        raise MissingAssetError(asset_id)

    def get_bitmap(self, asset_id: str) -> Image.Image:
        """
        Load and cache one asset bitmap.

        Raises:
            MissingAssetError: No file for this id
            RenderAssetError: The file exists but cannot be decoded
        """
        if asset_id not in self._cache:
            path = self._path_for(asset_id)
            try:
                with Image.open(path) as img:
                    img.load()
                    self._cache[asset_id] = img.copy()
            except (OSError, ValueError) as e:
                raise RenderAssetError(asset_id, str(e)) from e
            logger.debug(f"Loaded asset {asset_id} from {path}")
        return self._cache[asset_id]

    def native_size(self, asset_id: str) -> Size:
        if asset_id in self._native_sizes:
            return self._native_sizes[asset_id]
        bitmap = self.get_bitmap(asset_id)
        return Size(float(bitmap.width), float(bitmap.height))

    @property
    def asset_ids(self) -> list[str]:
        if not self.root.is_dir():
            return []
        files = sorted(p for p in self.root.iterdir() if p.suffix.lower() in IMAGE_SUFFIXES)
        return [p.stem for p in files]

    def has_asset(self, asset_id: str) -> bool:
        try:
            self._path_for(asset_id)
        except MissingAssetError:
            return False
        return True

    def close(self) -> None:
        """Drop cached bitmaps."""
        for img in self._cache.values():
            img.close()
        self._cache.clear()

    def __enter__(self) -> "DirectoryAssetLibrary":
        return self

    def __exit__(self, *args) -> None:
        self.close()


def missing_asset_ids(asset_ids: Iterable[str], library: AssetLibrary) -> list[str]:
    """Return the ids (in input order) that the library does not have."""
    return [asset_id for asset_id in asset_ids if not library.has_asset(asset_id)]
