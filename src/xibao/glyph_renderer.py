"""
Render one line of text to a filled + stroked SVG outline drawing.

Glyph outlines come from fontTools and are laid out by advance width, the
drawing is assembled with svgwrite. The reported box follows the font's
vertical metrics: width is the summed advance, height is ascender - descender.
"""

import logging
import math
import re
from dataclasses import dataclass

import svgwrite
from fontTools.pens.svgPathPen import SVGPathPen
from fontTools.pens.transformPen import TransformPen

from .font import FontContext
from .options import StyleConfig

logger = logging.getLogger(__name__)

# the width attribute of the root <svg> element, not stroke-width
_SVG_WIDTH_RE = re.compile(r'(<svg\b[^>]*?\s)width="([^"]*)"')


@dataclass(frozen=True)
class RenderedLine:
    width: int
    height: int
    svg: str


def _fmt(value):
    return f"{value:g}" if isinstance(value, float) else str(value)


def pad_for_stroke(svg, width, height, stroke_size) -> RenderedLine:
    """Widen a drawing by the stroke size.

    The outline box does not account for the stroke spilling over the glyph
    edges, so both the reported width and the drawing's width attribute grow
    by `stroke_size`.
    """
    padded_width = width + stroke_size
    if isinstance(padded_width, float) and padded_width.is_integer():
        padded_width = int(padded_width)
    svg, n = _SVG_WIDTH_RE.subn(
        lambda m: f'{m.group(1)}width="{_fmt(padded_width)}"', svg, count=1
    )
    if n == 0:
        raise ValueError("SVG drawing has no width attribute")
    return RenderedLine(width=math.floor(padded_width), height=height, svg=svg)


class GlyphRenderer:
    def __init__(self, font_context: FontContext):
        self.font_context = font_context

    def render(self, text: str, style: StyleConfig) -> RenderedLine:
        svg, width, height = self.text_to_svg(
            text,
            font_size=style.font_size,
            x=math.ceil(style.stroke_size / 2),
            y=0,
            layers=self.paint_layers(style),
        )
        rendered = pad_for_stroke(svg, width, height, style.stroke_size)
        logger.debug(
            f"Rendered {text!r}: {rendered.width}x{rendered.height} "
            f"(font_size={style.font_size}, stroke={style.stroke_size})"
        )
        return rendered

    @staticmethod
    def paint_layers(style):
        """Path attributes, bottom layer first.

        The stroke goes under the fill: the outline is first painted and
        stroked in the stroke color, then filled again on top, so the stroke
        only shows outside the glyph edges.
        """
        layers = []
        if style.stroke_size > 0:
            layers.append(
                {
                    "fill": style.stroke_color,
                    "stroke": style.stroke_color,
                    "stroke_width": style.stroke_size,
                }
            )
        layers.append({"fill": style.color})
        return layers

    def text_to_svg(self, text, *, font_size, x=0, y=0, layers=None):
        """Draw `text` with its top-left corner at (x, y).

        Every entry of `layers` adds one path with the same outline and its own
        attributes, in order.

        Returns:
            (svg string, reported width, reported height), the reported box
            truncated to whole pixels.
        """
        font = self.font_context.font
        upm = font["head"].unitsPerEm
        scale = font_size / upm

        glyph_set = font.getGlyphSet()
        cmap = font.getBestCmap()

        asc = font["hhea"].ascent * scale
        desc = font["hhea"].descent * scale

        # Pick a single space advance we can fall back to
        if "space" in glyph_set:
            space_advance = glyph_set["space"].width * scale
        else:  # 1/4 em as a last resort
            space_advance = upm * 0.25 * scale

        pen = SVGPathPen(glyph_set)
        x_cursor = 0
        for ch in text:
            gname = cmap.get(ord(ch))
            if gname is None:
                if ch.isspace():
                    x_cursor += space_advance
                    continue
                if ".notdef" not in glyph_set:
                    continue
                gname = ".notdef"

            glyph = glyph_set[gname]
            # flip y, then move the baseline down by the ascender (top anchor)
            glyph.draw(TransformPen(pen, (scale, 0, 0, -scale, x + x_cursor, y + asc)))
            x_cursor += glyph.width * scale

        width = x_cursor
        height = asc - desc
        dwg = svgwrite.Drawing(size=(_fmt(width), _fmt(height)), debug=False)
        d = pen.getCommands()
        if d:
            for attributes in layers or [{}]:
                dwg.add(dwg.path(d=d, **attributes))

        return dwg.tostring(), math.floor(width), math.floor(height)
