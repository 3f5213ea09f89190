from geopaths.colors import PATH_COLORS, color_for_key


def test_color_for_key_wraps_palette():
    assert color_for_key(0) == PATH_COLORS[0]
    assert color_for_key(len(PATH_COLORS)) == PATH_COLORS[0]
    assert color_for_key(len(PATH_COLORS) + 3) == PATH_COLORS[3]


def test_palette_entries_are_hex_colors():
    for color in PATH_COLORS:
        assert color.startswith('#') and len(color) == 7
