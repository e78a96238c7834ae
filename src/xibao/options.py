"""
Text options: style records and the normalisation of caller input into one
fully resolved LineSpec per display line.
"""

from dataclasses import dataclass, field, fields, replace
from typing import Mapping, Optional, Sequence, Union

from .lines import DEFAULT_MAX_UNITS, split_lines


@dataclass(frozen=True)
class StyleConfig:
    color: str = "red"
    stroke_color: str = "#fcf88d"
    stroke_size: float = 12
    font_size: float = 108

    def __post_init__(self):
        if self.stroke_size < 0:
            raise ValueError(f"stroke_size must be >= 0, got {self.stroke_size}")
        if self.font_size <= 0:
            raise ValueError(f"font_size must be > 0, got {self.font_size}")


BUILTIN_STYLE = StyleConfig()

STYLE_FIELDS = tuple(f.name for f in fields(StyleConfig))

# camelCase keys are accepted for payloads written for the JS tooling
_KEY_ALIASES = {
    "strokeColor": "stroke_color",
    "strokeSize": "stroke_size",
    "fontSize": "font_size",
}


@dataclass(frozen=True)
class LineSpec:
    text: str
    overrides: Mapping[str, object] = field(default_factory=dict)
    style: Optional[StyleConfig] = None


TextLike = Union[str, LineSpec, Mapping[str, object]]


def _canonical_style_dict(layer):
    if layer is None:
        return {}
    if isinstance(layer, StyleConfig):
        return {name: getattr(layer, name) for name in STYLE_FIELDS}
    out = {}
    for key, value in layer.items():
        key = _KEY_ALIASES.get(key, key)
        if key not in STYLE_FIELDS:
            raise ValueError(f"Unknown style option: {key!r}")
        out[key] = value
    return out


def merge_style(*layers) -> StyleConfig:
    """Merge style layers field by field, later layers winning.

    Each layer is a StyleConfig, a (partial) mapping or None. A None value
    inside a mapping leaves the field from earlier layers untouched, so adding
    a field to StyleConfig never silently changes how existing callers merge.
    """
    resolved = {}
    for layer in layers:
        for key, value in _canonical_style_dict(layer).items():
            if value is None:
                continue
            resolved[key] = value
    return replace(BUILTIN_STYLE, **resolved)


def _to_line_spec(textlike: TextLike) -> LineSpec:
    if isinstance(textlike, str):
        return LineSpec(text=textlike)
    if isinstance(textlike, LineSpec):
        return textlike
    overrides = dict(textlike)
    if "text" not in overrides:
        raise ValueError(f"Line option without text: {textlike!r}")
    text = overrides.pop("text")
    return LineSpec(text=text, overrides=overrides)


def normalize(
    text_or_lines: Union[str, Sequence[TextLike]],
    defaults=None,
    max_units: int = DEFAULT_MAX_UNITS,
) -> list[LineSpec]:
    """Resolve caller input into LineSpecs with a complete style each.

    Args:
        text_or_lines: a raw string (wrapped by split_lines) or a sequence of
            strings, LineSpecs or dicts like {"text": ..., "color": ...}.
        defaults: caller default style, a StyleConfig or a partial mapping.
            A LineSpec that already carries a style keeps it over `defaults`,
            its overrides still win over both.

    Returns:
        One LineSpec per display line, in input order.
    """
    if isinstance(text_or_lines, str):
        specs = [LineSpec(text=t) for t in split_lines(text_or_lines, max_units)]
    else:
        specs = [_to_line_spec(t) for t in text_or_lines]

    return [
        replace(
            spec,
            style=merge_style(BUILTIN_STYLE, defaults, spec.style, spec.overrides),
        )
        for spec in specs
    ]
