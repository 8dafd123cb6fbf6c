import pytest
import sys
from pathlib import Path
from PIL import Image

# Add src to sys.path so we can import snippet_layout
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from snippet_layout.assets import InMemoryAssetLibrary  # noqa: E402
from snippet_layout.core.models import (  # noqa: E402
    Document,
    Margin,
    Orientation,
    Page,
    PaperSize,
    PlacedSnippet,
    Position,
    Size,
)


# Common test fixtures
@pytest.fixture
def sample_image(tmp_path: Path):
    """Create a simple test image."""
    img = Image.new("RGB", (200, 100), color="white")
    img_path = tmp_path / "sample.png"
    img.save(img_path)
    return img_path


@pytest.fixture
def library():
    """Three snippet assets with distinct native sizes, in creation order."""
    lib = InMemoryAssetLibrary()
    lib.add("s1", Image.new("RGB", (120, 80), color="red"))
    lib.add("s2", Image.new("RGB", (200, 100), color="green"))
    lib.add("s3", Image.new("RGB", (60, 60), color="blue"))
    return lib


@pytest.fixture
def a4_page():
    """Empty A4 portrait page with a 15 mm margin."""
    return Page(
        id="p1",
        paper_size=PaperSize.A4,
        orientation=Orientation.PORTRAIT,
        margin=Margin.uniform(15),
    )


@pytest.fixture
def a4_document(a4_page):
    """Document with one empty A4 page, active."""
    return Document(pages=(a4_page,), active_page_id=a4_page.id)


@pytest.fixture
def populated_document(a4_page):
    """A4 page holding s1 and s2 side by side."""
    page = Page(
        id=a4_page.id,
        paper_size=a4_page.paper_size,
        orientation=a4_page.orientation,
        margin=a4_page.margin,
        snippets=(
            PlacedSnippet("s1", Position(0, 0), Size(120, 80)),
            PlacedSnippet("s2", Position(200, 0), Size(200, 100)),
        ),
    )
    return Document(pages=(page,), active_page_id=page.id)
