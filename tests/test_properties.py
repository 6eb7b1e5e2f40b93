import pytest

from termprofile.colors import BUILTIN_PALETTES, PALETTE_SIZE, RGBA, parse_color
from termprofile.enums import CursorShape, EraseBinding, ScrollbarPosition
from termprofile.font import FontDescription
from termprofile.properties import (
    SPECS,
    PropertyKind,
    PropertySpec,
    find_spec,
    spec_for_key,
)

STORED_NAMES = [
    "allow-bold",
    "background-color",
    "background-darkness",
    "background-image-file",
    "background-type",
    "backspace-binding",
    "bold-color",
    "bold-color-same-as-fg",
    "cursor-blink-mode",
    "cursor-shape",
    "custom-command",
    "default-show-menubar",
    "default-size-columns",
    "default-size-rows",
    "delete-binding",
    "exit-action",
    "font",
    "foreground-color",
    "login-shell",
    "palette",
    "scroll-background",
    "scrollback-lines",
    "scrollback-unlimited",
    "scrollbar-position",
    "scroll-on-keystroke",
    "scroll-on-output",
    "silent-bell",
    "copy-selection",
    "title-mode",
    "title",
    "use-custom-command",
    "use-custom-default-size",
    "use-skey",
    "use-urls",
    "use-system-font",
    "use-theme-colors",
    "visible-name",
    "word-chars",
]


def spec(name: str) -> PropertySpec:
    found = find_spec(name)
    assert found is not None
    return found


def test_find_boolean_spec_and_default():
    allow_bold = spec("allow-bold")
    assert allow_bold.kind is PropertyKind.BOOLEAN
    assert allow_bold.key == "allow-bold"
    assert allow_bold.default() is True


def test_unknown_names_and_keys():
    assert find_spec("no-such-property") is None
    assert spec_for_key("no-such-key") is None


def test_background_image_file_uses_different_key():
    assert spec_for_key("background-image").name == "background-image-file"
    assert spec("background-image-file").default() == ""


def test_name_and_image_are_not_stored():
    name = spec("name")
    assert name.key is None
    assert name.construct_only is True
    assert name.stored is False
    image = spec("background-image")
    assert image.writable is False
    assert image.stored is False


def test_every_key_maps_back_to_its_spec():
    for item in SPECS:
        if item.key is not None:
            assert spec_for_key(item.key) is item
    assert len({item.name for item in SPECS}) == len(SPECS)


def test_source_defaults():
    assert spec("default-size-columns").default() == 80
    assert spec("default-size-rows").default() == 24
    assert spec("scrollback-lines").default() == 512
    assert spec("background-darkness").default() == 0.5
    assert spec("word-chars").default() == "-A-Za-z0-9,./?%&#:_=+@~"
    assert spec("title").default() == "Terminal"
    assert spec("visible-name").default() == "Unnamed"
    assert spec("backspace-binding").default() is EraseBinding.ASCII_DELETE
    assert spec("delete-binding").default() is EraseBinding.DELETE_SEQUENCE
    assert spec("scrollbar-position").default() is ScrollbarPosition.RIGHT


def test_color_font_and_palette_defaults():
    assert spec("background-color").default() == parse_color("#FFFFDD")
    assert spec("foreground-color").default() == parse_color("#000000")
    assert spec("bold-color").default() == parse_color("#000000")
    assert spec("font").default() == FontDescription.from_string("Monospace 12")
    assert spec("palette").default() == list(BUILTIN_PALETTES[0])


def test_palette_default_is_a_fresh_list():
    palette = spec("palette")
    first = palette.default()
    first[0] = RGBA(1, 1, 1, 1)
    assert palette.default()[0] == BUILTIN_PALETTES[0][0]


def test_int_validation_clamps():
    columns = spec("default-size-columns")
    assert columns.validate(0) == 1
    assert columns.validate(5000) == 1024
    assert columns.validate(80) == 80
    with pytest.raises(TypeError):
        columns.validate(True)


def test_double_validation_clamps():
    darkness = spec("background-darkness")
    assert darkness.validate(2.0) == 1.0
    assert darkness.validate(-1) == 0.0
    with pytest.raises(TypeError):
        darkness.validate("0.5")


def test_enum_validation_falls_back_to_default():
    shape = spec("cursor-shape")
    assert shape.validate(99) is CursorShape.BLOCK
    assert shape.validate(CursorShape.IBEAM) is CursorShape.IBEAM
    with pytest.raises(TypeError):
        shape.validate("ibeam")


def test_boolean_and_string_validation_types():
    with pytest.raises(TypeError):
        spec("allow-bold").validate("yes")
    with pytest.raises(TypeError):
        spec("custom-command").validate(3)
    assert spec("custom-command").validate(None) is None


def test_palette_validation_rejects_non_colours():
    palette = spec("palette")
    with pytest.raises(TypeError):
        palette.validate(["#000000"])
    with pytest.raises(TypeError):
        palette.validate("#000000")
    colors = (RGBA(0, 0, 0), RGBA(1, 1, 1))
    assert palette.validate(colors) == list(colors)


@pytest.mark.parametrize("name", STORED_NAMES + ["name"])
def test_defaults_survive_validation(name):
    item = find_spec(name)
    assert item is not None
    value = item.default()
    assert item.values_equal(item.validate(value), value)


def test_enum_decode_and_encode():
    shape = spec("cursor-shape")
    assert shape.decode("ibeam") is CursorShape.IBEAM
    assert shape.encode(CursorShape.IBEAM) == "ibeam"
    with pytest.raises(ValueError):
        shape.decode("triangle")
    with pytest.raises(TypeError):
        shape.decode(1)


def test_color_decode_and_encode():
    color = spec("foreground-color")
    assert color.decode("#FF0000") == RGBA(1.0, 0.0, 0.0, 1.0)
    assert color.encode(RGBA(1.0, 0.0, 0.0, 1.0)) == "#FFFF00000000"
    assert color.encode(None) is None
    with pytest.raises(ValueError):
        color.decode("not a colour")


def test_boolean_int_double_decode_types():
    with pytest.raises(TypeError):
        spec("allow-bold").decode("true")
    with pytest.raises(TypeError):
        spec("scrollback-lines").decode(True)
    with pytest.raises(TypeError):
        spec("background-darkness").decode("0.5")
    assert spec("scrollback-lines").decode(100) == 100
    assert spec("background-darkness").decode(0.25) == 0.25


def test_string_encode_none_is_empty():
    assert spec("custom-command").encode(None) == ""
    assert spec("custom-command").decode("bash") == "bash"


def test_image_is_not_coded():
    image = spec("background-image")
    with pytest.raises(TypeError):
        image.decode("x")
    with pytest.raises(TypeError):
        image.encode(None)


def test_short_palette_is_padded_with_default():
    palette = spec("palette")
    decoded = palette.decode("#FFFFFF:#000000")
    assert len(decoded) == PALETTE_SIZE
    assert decoded[0] == RGBA(1.0, 1.0, 1.0, 1.0)
    assert decoded[2:] == list(BUILTIN_PALETTES[0][2:])
    assert palette.decode("") == list(BUILTIN_PALETTES[0])


def test_long_palette_keeps_extra_entries():
    text = ":".join(["#101010"] * (PALETTE_SIZE + 2))
    assert len(spec("palette").decode(text)) == PALETTE_SIZE + 2


def test_palette_round_trip_for_builtins():
    palette = spec("palette")
    for builtin in BUILTIN_PALETTES:
        decoded = palette.decode(palette.encode(list(builtin)))
        assert palette.values_equal(decoded, list(builtin))


@pytest.mark.parametrize("name", STORED_NAMES)
def test_stored_defaults_round_trip(name):
    item = find_spec(name)
    assert item is not None
    assert item.stored is True
    value = item.default()
    assert item.values_equal(item.decode(item.encode(value)), value)


def test_font_round_trip():
    font = spec("font")
    value = FontDescription.from_string("Sans Bold 10")
    assert font.decode(font.encode(value)) == value


def test_color_values_equal_is_loose():
    color = spec("background-color")
    assert color.values_equal(RGBA(0.5, 0.5, 0.5), RGBA(0.501, 0.5, 0.5))
    assert not color.values_equal(RGBA(0.5, 0.5, 0.5), RGBA(0.6, 0.5, 0.5))
    assert not color.values_equal(None, RGBA(0, 0, 0))


def test_palette_values_equal():
    palette = spec("palette")
    base = list(BUILTIN_PALETTES[0])
    nudged = [RGBA(c.red + 0.001, c.green, c.blue, c.alpha) for c in base]
    assert palette.values_equal(base, nudged)
    assert not palette.values_equal(base, base[:-1])
    assert not palette.values_equal(base, None)
    assert not palette.values_equal(base, list(BUILTIN_PALETTES[1]))


def test_image_values_equal_by_identity():
    image = spec("background-image")
    first = object()
    assert image.values_equal(first, first)
    assert not image.values_equal(first, object())