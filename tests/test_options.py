"""Tests for style merging and input normalisation."""

import pytest

from xibao.options import BUILTIN_STYLE, LineSpec, StyleConfig, merge_style, normalize


class TestStyleConfig:
    def test_builtin_defaults(self):
        assert BUILTIN_STYLE == StyleConfig(
            color="red", stroke_color="#fcf88d", stroke_size=12, font_size=108
        )

    def test_negative_stroke_rejected(self):
        with pytest.raises(ValueError):
            StyleConfig(stroke_size=-1)

    def test_zero_font_size_rejected(self):
        with pytest.raises(ValueError):
            StyleConfig(font_size=0)


class TestMergeStyle:
    def test_later_layer_wins(self):
        style = merge_style(BUILTIN_STYLE, {"color": "blue"}, {"color": "green"})
        assert style.color == "green"

    def test_none_does_not_override(self):
        style = merge_style(BUILTIN_STYLE, {"font_size": 40}, {"font_size": None})
        assert style.font_size == 40

    def test_camel_case_keys(self):
        style = merge_style({"strokeColor": "white", "strokeSize": 4, "fontSize": 30})
        assert style.stroke_color == "white"
        assert style.stroke_size == 4
        assert style.font_size == 30

    def test_unknown_key_rejected(self):
        with pytest.raises(ValueError, match="Unknown style option"):
            merge_style({"colour": "red"})

    def test_no_layers_gives_builtin(self):
        assert merge_style() == BUILTIN_STYLE


class TestNormalize:
    def test_empty_string(self):
        assert normalize("") == []

    def test_string_is_split(self):
        specs = normalize("ABCDEFGHXY", max_units=8)
        assert [s.text for s in specs] == ["ABCDEF", "GHXY"]
        assert all(s.style == BUILTIN_STYLE for s in specs)

    def test_sequence_keeps_order_and_overrides(self):
        specs = normalize(["first", {"text": "second", "color": "blue"}])
        assert [s.text for s in specs] == ["first", "second"]
        assert specs[0].style.color == "red"
        assert specs[1].style.color == "blue"

    def test_color_override_keeps_other_defaults(self):
        defaults = StyleConfig(
            color="#2d2d2d", stroke_color="white", stroke_size=8, font_size=64
        )
        (spec,) = normalize([{"text": "hi", "color": "blue"}], defaults)
        assert spec.style == StyleConfig(
            color="blue", stroke_color="white", stroke_size=8, font_size=64
        )

    def test_partial_defaults(self):
        (spec,) = normalize(["hi"], {"color": "green"})
        assert spec.style.color == "green"
        assert spec.style.font_size == 108
        assert spec.style.stroke_color == "#fcf88d"

    def test_line_spec_passthrough(self):
        (spec,) = normalize([LineSpec(text="hi", overrides={"stroke_size": 0})])
        assert spec.text == "hi"
        assert spec.style.stroke_size == 0

    def test_sequence_is_not_split(self):
        long_line = "A" * 40
        assert [s.text for s in normalize([long_line])] == [long_line]

    def test_mapping_without_text_rejected(self):
        with pytest.raises(ValueError):
            normalize([{"color": "red"}])

    def test_resolved_style_is_kept(self):
        resolved = StyleConfig(color="blue", font_size=40)
        (spec,) = normalize([LineSpec(text="hi", style=resolved)])
        assert spec.style == resolved

    def test_resolved_style_beats_defaults_overrides_beat_both(self):
        line = LineSpec(
            text="hi",
            overrides={"stroke_size": 2},
            style=StyleConfig(color="blue", font_size=40),
        )
        (spec,) = normalize([line], {"color": "green", "font_size": 20})
        assert spec.style.color == "blue"
        assert spec.style.font_size == 40
        assert spec.style.stroke_size == 2

    def test_normalize_is_stable(self):
        once = normalize(["hi", {"text": "there", "color": "blue"}], {"color": "green"})
        assert normalize(once) == once
