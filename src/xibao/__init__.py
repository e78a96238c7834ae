"""
Composite styled text onto poster backgrounds.

    from xibao import xibao
    xibao("Good news everyone").save("out.png")

Text is split into lines, rendered to stroked outlines with fontTools,
shrunk to fit the canvas and overlaid on the theme background with Pillow.
The bundled font is Latin only, call set_font_path with a CJK font to
render Chinese text.
"""

from .compose import (
    beibao,
    compose_custom,
    compose_themed,
    default_font_context,
    get_font_path,
    set_font_path,
    xibao,
)
from .font import FontContext, FontLoadError
from .layout import PlacedLine, TextScaledWarning, layout
from .lines import split_lines
from .options import LineSpec, StyleConfig, merge_style, normalize
from .themes import BEIBAO, XIBAO, Canvas, Theme

__all__ = [
    "BEIBAO",
    "XIBAO",
    "Canvas",
    "FontContext",
    "FontLoadError",
    "LineSpec",
    "PlacedLine",
    "StyleConfig",
    "TextScaledWarning",
    "Theme",
    "beibao",
    "compose_custom",
    "compose_themed",
    "default_font_context",
    "get_font_path",
    "layout",
    "merge_style",
    "normalize",
    "set_font_path",
    "split_lines",
    "xibao",
]
