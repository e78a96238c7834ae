"""
python -m xibao.cli render xibao "Good news everyone" misc/xibao.png
python -m xibao.cli render custom "hello" misc/out.png --background bg.png --width 800 --height 600
python -m xibao.cli batch data/posters.jsonl misc/posters --workers 4

Batch input is JSONL, one poster per line:
    {"theme": "beibao", "text": "line one\\nline two", "name": "optional_stem"}
"text" may also be a list of strings or {"text": ..., "color": ...} dicts.

The bundled font is Latin only, pass --font (or set XIBAO_FONT) with a CJK
font for Chinese text.
"""

from pathlib import Path
from types import SimpleNamespace

import click
from tqdm import tqdm

from .compose import compose_custom, compose_themed, set_font_path
from .compositor import save_image
from .layout import DEFAULT_LINE_SPACE
from .themes import THEMES, Canvas
from .utils import load_jsonl, prepare_output_dir_and_logger, setup_logger


def _style_from_args(args):
    return {
        "color": args.color,
        "stroke_color": args.stroke_color,
        "stroke_size": args.stroke_size,
        "font_size": args.font_size,
    }


def _compose(theme, text_or_lines, args):
    if theme == "custom":
        if args.background is None or args.width is None or args.height is None:
            raise click.UsageError(
                "custom theme needs --background, --width and --height"
            )
        canvas = Canvas(width=args.width, height=args.height, background=args.background)
        return compose_custom(
            canvas,
            text_or_lines,
            default_style=_style_from_args(args),
            line_space=args.line_space,
            max_workers=args.workers,
        )
    return compose_themed(theme, text_or_lines, max_workers=args.workers)


def _unescape_newlines(text):
    return text.replace("\\n", "\n")


style_options = [
    click.option("--color", default=None, help="Text fill color (custom theme)."),
    click.option("--stroke-color", default=None, help="Stroke color (custom theme)."),
    click.option("--stroke-size", type=float, default=None, help="Stroke width in px."),
    click.option("--font-size", type=float, default=None, help="Font size in px."),
    click.option("--background", type=click.Path(exists=True), default=None),
    click.option("--width", type=int, default=None, help="Custom canvas width."),
    click.option("--height", type=int, default=None, help="Custom canvas height."),
    click.option("--line-space", type=int, default=DEFAULT_LINE_SPACE, show_default=True),
    click.option(
        "--font",
        type=click.Path(),
        envvar="XIBAO_FONT",
        default=None,
        help="Font file, defaults to the bundled font.",
    ),
    click.option(
        "--workers",
        type=int,
        default=1,
        show_default=True,
        help="Threads used to rasterise lines.",
    ),
]


def add_options(options):
    def wrapper(func):
        for option in reversed(options):
            func = option(func)
        return func

    return wrapper


@click.group(context_settings=dict(help_option_names=["-h", "--help"]))
def main():
    """Composite styled text onto poster backgrounds."""


@main.command()
@click.argument("theme", type=click.Choice(sorted(THEMES) + ["custom"]))
@click.argument("text", type=str)
@click.argument("output_path", type=click.Path(dir_okay=False, path_type=Path))
@add_options(style_options)
def render(**kargs):
    """Render TEXT with THEME and write the image to OUTPUT_PATH."""
    args = SimpleNamespace(**kargs)
    logger = setup_logger(args.output_path.parent)
    if args.font is not None:
        set_font_path(args.font)

    image = _compose(args.theme, _unescape_newlines(args.text), args)
    save_image(image, args.output_path)
    logger.info(f"save image to: {args.output_path}")


@main.command()
@click.argument("input_jsonl", type=click.Path(exists=True, dir_okay=False))
@click.argument("output_dir", type=click.Path(file_okay=False, path_type=Path))
@click.option(
    "--theme",
    "default_theme",
    type=click.Choice(sorted(THEMES) + ["custom"]),
    default="xibao",
    show_default=True,
    help="Theme for records without a 'theme' field.",
)
@click.option("--format", "image_format", default="png", show_default=True)
@click.option("--overwrite", is_flag=True, default=False)
@add_options(style_options)
def batch(**kargs):
    """Render every record of INPUT_JSONL into OUTPUT_DIR."""
    args = SimpleNamespace(**kargs)
    should_skip, logger = prepare_output_dir_and_logger(
        output_dir=args.output_dir, overwrite=args.overwrite
    )
    if should_skip:
        return
    if args.font is not None:
        set_font_path(args.font)

    records = load_jsonl(args.input_jsonl, logger=logger)
    for idx, record in enumerate(tqdm(records, desc="Posters")):
        theme = record.get("theme", args.default_theme)
        text = record["text"]
        name = record.get("name", f"{idx:05d}")
        output_path = args.output_dir / f"{name}.{args.image_format}"
        try:
            image = _compose(theme, text, args)
        except Exception:
            logger.exception(f"Failed to render record {idx} ({name})")
            raise
        save_image(image, output_path)

    logger.info(f"Done. {len(records)} images in {args.output_dir}")


if __name__ == "__main__":
    main()
