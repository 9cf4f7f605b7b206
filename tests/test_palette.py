import pytest

from gpl2ase.core.errors import PaletteFullError
from gpl2ase.core.palette import DEFAULT_CAPACITY, Color, Palette


def test_color_channels():
    color = Color(184, 194, 185)

    assert color.rgb == (184, 194, 185)
    assert color.hex_name == "b8c2b9"
    assert color.to_unit_floats() == (184 / 255.0, 194 / 255.0, 185 / 255.0)


@pytest.mark.parametrize("rgb", [(256, 0, 0), (0, -1, 0), (0, 0, 1000)])
def test_color_range_checked(rgb):
    with pytest.raises(ValueError):
        Color(*rgb)


@pytest.mark.parametrize("rgb", [(1.0, 0, 0), (0, "1", 0), (0, 0, True)])
def test_color_requires_ints(rgb):
    with pytest.raises(TypeError):
        Color(*rgb)


def test_palette_defaults():
    palette = Palette()

    assert palette.capacity == DEFAULT_CAPACITY == 2048
    assert len(palette) == 0
    assert not palette.is_full


def test_append_past_capacity_raises():
    palette = Palette(capacity=2)
    palette.append(Color(0, 0, 0))
    palette.append(Color(1, 1, 1))

    assert palette.is_full
    with pytest.raises(PaletteFullError) as excinfo:
        palette.append(Color(2, 2, 2))

    assert excinfo.value.capacity == 2
    assert len(palette) == 2


def test_zero_capacity_is_full():
    assert Palette(capacity=0).is_full


def test_unbounded_palette():
    palette = Palette.from_rgb([(1, 2, 3)] * 5000)

    assert palette.capacity is None
    assert len(palette) == 5000
    assert not palette.is_full


def test_palette_is_ordered_and_indexable():
    palette = Palette.from_rgb([(3, 3, 3), (1, 1, 1), (2, 2, 2)])

    assert palette[0] == Color(3, 3, 3)
    assert [c.red for c in palette] == [3, 1, 2]
    assert palette.colors == (Color(3, 3, 3), Color(1, 1, 1), Color(2, 2, 2))


def test_negative_capacity_rejected():
    with pytest.raises(ValueError):
        Palette(capacity=-5)
