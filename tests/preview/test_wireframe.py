"""
Tests for preview.wireframe

Test Coverage:
- render_wireframe(): Page size, element boxes, hidden elements
- save_wireframe(): Directory creation and PNG output
"""

import pytest
from PIL import Image

from invoice_designer.core.models import Design, Element, ElementKind, page_preset
from invoice_designer.preview import render_wireframe, save_wireframe


@pytest.fixture
def boxed_design() -> Design:
    shape = Element("box", ElementKind.SHAPE, 10, 10, 50, 30, label="Box")
    hidden = Element("ghost", ElementKind.TEXT, 100, 100, 50, 30, visible=False)
    return Design(page_size=page_preset("a4_portrait"), elements=(shape, hidden))


def test_render_wireframe_matches_page_size(boxed_design):
    """Image size is page size times scale."""
    img = render_wireframe(boxed_design, scale=2)

    assert img.mode == "RGB"
    assert img.size == (420, 594)


def test_render_wireframe_draws_visible_elements_only(boxed_design):
    """Visible element outlines are drawn; hidden ones are not."""
    img = render_wireframe(boxed_design, scale=2)

    # Left edge of the shape box
    assert img.getpixel((20, 40)) != (255, 255, 255)
    # Inside where the hidden element would be
    assert img.getpixel((260, 260)) == (255, 255, 255)


def test_save_wireframe_creates_directory(tmp_path, boxed_design):
    """save_wireframe creates the output directory if it doesn't exist."""
    # Arrange
    output = tmp_path / "nested" / "preview.png"

    # Act
    result = save_wireframe(boxed_design, output, scale=1)

    # Assert
    assert result.exists()
    with Image.open(result) as img:
        assert img.format == "PNG"
        assert img.size == (210, 297)
