"""Top-level package for snippet-layout.

Provides subpackages:
- snippet_layout.core – units, immutable page/element models, serialization
- snippet_layout.editor – placement state, resize, undo history, pointer interaction
- snippet_layout.arrange – grid auto-layout, alignment, distribution, packing
- snippet_layout.output – PDF compositor and print surface
"""

def _get_version() -> str:
    """Get version from pyproject.toml (dev) or importlib.metadata (installed)."""
    from pathlib import Path

    pyproject = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        try:
            content = pyproject.read_text(encoding="utf-8")
        except OSError:
            content = ""
        for line in content.splitlines():
            if line.strip().startswith("version"):
                # Parse: version = "0.3.0"
                return line.split("=")[1].strip().strip('"').strip("'")

    from importlib.metadata import PackageNotFoundError, version as pkg_version
    try:
        return pkg_version("snippet-layout")
    except PackageNotFoundError:
        return "0.0.0"


__version__ = _get_version()
__all__: list[str] = ["__version__"]
