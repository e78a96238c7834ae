"""
Rasterise placed lines and overlay them on the background.

cairosvg renders each drawing at its own size, Pillow resamples it to the
placed size when the layout scaled it, then everything is alpha-composited
onto the background in input order.
"""

import io
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Sequence, Tuple

import cairosvg
from PIL import Image

from .glyph_renderer import RenderedLine
from .layout import DEFAULT_LINE_SPACE, PlacedLine
from .themes import Canvas

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompositeRequest:
    canvas: Canvas
    lines: Sequence[Tuple[RenderedLine, PlacedLine]] = field(default_factory=tuple)
    line_space: int = DEFAULT_LINE_SPACE


def svg_to_image(svg) -> Image.Image:
    png_bytes = cairosvg.svg2png(bytestring=svg.encode("utf-8"))
    image = Image.open(io.BytesIO(png_bytes))
    image.load()
    return image.convert("RGBA")


def rasterize(svg, width, height) -> Image.Image:
    """Render `svg` at its own size, then resample it to (width, height)."""
    return svg_to_image(svg).resize((width, height), Image.LANCZOS)


def prepare_overlay(rendered: RenderedLine, placed: PlacedLine):
    if placed.target_width <= 0 or placed.target_height <= 0:
        return None
    if not placed.needs_resample:
        # NOTE: unscaled lines skip the resampling pass
        return svg_to_image(rendered.svg)
    return rasterize(rendered.svg, placed.target_width, placed.target_height)


def open_background(background) -> Image.Image:
    if isinstance(background, Image.Image):
        return background.convert("RGBA")
    if isinstance(background, (bytes, bytearray)):
        background = io.BytesIO(background)
    # FileNotFoundError for a missing path propagates to the caller
    image = Image.open(background)
    image.load()
    return image.convert("RGBA")


def composite(request: CompositeRequest, max_workers: int = 1) -> Image.Image:
    """Overlay every placed line on the background.

    Returns:
        The composited RGBA image. Encoding it is up to the caller.
    """
    image = open_background(request.canvas.background)
    if not request.lines:
        return image

    if max_workers > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as ex:
            overlays = list(ex.map(lambda pair: prepare_overlay(*pair), request.lines))
    else:
        overlays = [prepare_overlay(*pair) for pair in request.lines]

    for overlay, (_, placed) in zip(overlays, request.lines):
        if overlay is None:
            logger.debug(f"Skip empty line at top={placed.top}")
            continue
        image.alpha_composite(overlay, dest=_clip_dest(placed.left, placed.top))
    return image


def _clip_dest(left, top):
    # alpha_composite rejects negative offsets
    return max(0, left), max(0, top)


def save_image(image: Image.Image, output_path) -> Path:
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    if output_path.suffix.lower() in (".jpg", ".jpeg", ".bmp"):
        image = image.convert("RGB")
    image.save(output_path)
    return output_path
