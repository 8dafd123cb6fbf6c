"""
Base exception for the layout engine.

Each subsystem defines its own concrete errors next to the code that
raises them; they all derive from LayoutError so callers can catch the
whole family at once. RenderAssetError lives here because both the
asset libraries and the compositor raise it.
"""


class LayoutError(Exception):
    """Root of all snippet_layout errors."""


class RenderAssetError(LayoutError):
    """A single bitmap failed to decode, resample or encode."""

    def __init__(self, asset_id: str, reason: str):
        super().__init__(f"Cannot render asset {asset_id}: {reason}")
        self.asset_id = asset_id
        self.reason = reason
