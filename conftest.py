"""Shared pytest fixtures for the album layout tests."""
import io

import pytest
from PIL import Image

from models import AlbumSettings


def _png(width, height, color='red'):
    img = Image.new('RGB', (width, height), color)
    buf = io.BytesIO()
    img.save(buf, format='PNG')
    return buf.getvalue()


@pytest.fixture
def sample_photos():
    """Simple Pillow images as (PNG bytes, file name) pairs, varied aspect ratios."""
    specs = [
        ('red', (400, 300), 'beach.png'),
        ('blue', (300, 400), 'portrait.png'),
        ('green', (500, 500), 'square.png'),
        ('orange', (800, 200), 'panorama.png'),
    ]
    return [(_png(w, h, color), name) for color, (w, h), name in specs]


@pytest.fixture
def make_png():
    """Factory fixture: make_png(width, height, color) -> PNG bytes."""
    return _png


@pytest.fixture
def settings():
    """Small album page (20 x 20 mm at 100 dpi) so numbers stay readable."""
    return AlbumSettings(album_width_mm=20.0, album_height_mm=20.0, padding_mm=1.0,
                         text_area_percent=20.0, dpi=100)
