"""
Public composition API: text in, composited PIL image out.
"""

import logging

from .compositor import CompositeRequest, composite
from .font import FontContext
from .glyph_renderer import GlyphRenderer
from .layout import DEFAULT_LINE_SPACE, layout
from .options import normalize
from .themes import BEIBAO, XIBAO, as_canvas, get_theme

logger = logging.getLogger(__name__)

# process-wide font used by the module-level API
default_font_context = FontContext()


def set_font_path(font_path, font_context=None):
    """Point the font context at another font file.

    Nothing is read here, the font is reloaded on the next render.
    """
    (font_context or default_font_context).font_path = font_path


def get_font_path(font_context=None):
    return (font_context or default_font_context).font_path


def compose_custom(
    background,
    text_or_lines,
    default_style=None,
    line_space=DEFAULT_LINE_SPACE,
    *,
    font_context=None,
    max_workers=1,
):
    """Composite text onto an arbitrary background.

    Args:
        background: a Canvas or {"path": ..., "width": ..., "height": ...}.
        text_or_lines: a raw string or a list of strings / line option dicts.
        default_style: StyleConfig or partial mapping applied to every line.
        line_space: gap between lines in pixels before scaling.

    Returns:
        PIL.Image.Image. With no lines to draw it is the unmodified background.
    """
    canvas = as_canvas(background)
    specs = normalize(text_or_lines, default_style)

    renderer = GlyphRenderer(font_context or default_font_context)
    rendered = [renderer.render(spec.text, spec.style) for spec in specs]
    placed = layout(rendered, canvas.size, line_space)
    logger.debug(f"Placed {len(placed)} lines on {canvas.width}x{canvas.height}")

    request = CompositeRequest(
        canvas=canvas, lines=tuple(zip(rendered, placed)), line_space=line_space
    )
    return composite(request, max_workers=max_workers)


def compose_themed(theme, text_or_lines, **kwargs):
    theme = get_theme(theme)
    return compose_custom(
        theme.canvas,
        text_or_lines,
        default_style=theme.style,
        line_space=theme.line_space,
        **kwargs,
    )


def xibao(text_or_lines, **kwargs):
    """Celebration poster: red text with a yellow stroke."""
    return compose_themed(XIBAO, text_or_lines, **kwargs)


def beibao(text_or_lines, **kwargs):
    """Commiseration poster: dark grey text with a white stroke."""
    return compose_themed(BEIBAO, text_or_lines, **kwargs)
