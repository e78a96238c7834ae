from dataclasses import dataclass
from pathlib import Path
from typing import Union

from .layout import DEFAULT_LINE_SPACE
from .options import StyleConfig

ASSETS_DIR = Path(__file__).parent / "assets"


@dataclass(frozen=True)
class Canvas:
    width: int
    height: int
    # file path, raw bytes, binary file object or PIL image
    background: object

    @property
    def size(self):
        return self.width, self.height


@dataclass(frozen=True)
class Theme:
    name: str
    canvas: Canvas
    style: StyleConfig
    line_space: int = DEFAULT_LINE_SPACE


# celebration: red text on a yellow stroke
XIBAO = Theme(
    name="xibao",
    canvas=Canvas(width=1292, height=968, background=ASSETS_DIR / "xibao.png"),
    style=StyleConfig(color="red", stroke_color="#fcf88d", stroke_size=12, font_size=108),
)

# commiseration: dark grey text on a white stroke
BEIBAO = Theme(
    name="beibao",
    canvas=Canvas(width=1300, height=974, background=ASSETS_DIR / "beibao.png"),
    style=StyleConfig(color="#2d2d2d", stroke_color="white", stroke_size=12, font_size=108),
)

THEMES = {theme.name: theme for theme in (XIBAO, BEIBAO)}


def get_theme(theme: Union[str, Theme]) -> Theme:
    if isinstance(theme, Theme):
        return theme
    try:
        return THEMES[theme]
    except KeyError:
        raise ValueError(
            f"Unknown theme {theme!r}, expected one of {sorted(THEMES)}"
        ) from None


def as_canvas(background) -> Canvas:
    """Accept a Canvas or a mapping like {"path": ..., "width": ..., "height": ...}."""
    if isinstance(background, Canvas):
        return background
    return Canvas(
        width=int(background["width"]),
        height=int(background["height"]),
        background=background["path"],
    )
