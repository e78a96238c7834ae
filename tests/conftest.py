import pytest
from PIL import Image

from xibao.font import DEFAULT_FONT_PATH, FontContext
from xibao.themes import Canvas


@pytest.fixture
def font_context():
    return FontContext(DEFAULT_FONT_PATH)


@pytest.fixture
def background_path(tmp_path):
    path = tmp_path / "background.png"
    Image.new("RGB", (400, 300), (255, 255, 255)).save(path)
    return path


@pytest.fixture
def canvas(background_path):
    return Canvas(width=400, height=300, background=background_path)
