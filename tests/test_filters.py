"""Tests for filter expressions and the catalog."""

import numpy as np
import pytest
from PIL import Image

from photo_booth.errors import InvalidInput, UnknownFilter
from photo_booth.filters import (
    CATALOG,
    FilterCatalog,
    apply_expression,
    brightness_lut,
    contrast_lut,
    parse_expression,
)
from photo_booth.models import FilterEffect, FilterOp


def test_parse_expression_keeps_order_and_units() -> None:
    ops = parse_expression("brightness(95%) contrast(135%) hue-rotate(340deg) sepia(5%) blur(0.3px)")

    assert [op.name for op in ops] == ["brightness", "contrast", "hue-rotate", "sepia", "blur"]
    assert ops[0].amount == pytest.approx(0.95)
    assert ops[1].amount == pytest.approx(1.35)
    assert ops[2].amount == pytest.approx(340.0)
    assert ops[3].amount == pytest.approx(0.05)
    assert ops[4].amount == pytest.approx(0.3)


def test_parse_expression_accepts_plain_numbers_and_turns() -> None:
    ops = parse_expression("saturate(0.5) hue-rotate(0.5turn) sepia(250%)")

    assert ops[0] == FilterOp("saturate", 0.5)
    assert ops[1].amount == pytest.approx(180.0)
    assert ops[2].amount == 1.0  # sepia is capped at 100%


def test_parse_expression_empty_is_empty() -> None:
    assert parse_expression("") == ()
    assert parse_expression("   ") == ()


@pytest.mark.parametrize(
    "text",
    ["invert(100%)", "brightness(abc)", "brightness(95%", "blur(2deg)", "hue-rotate(10%)", "contrast(-5%)"],
)
def test_parse_expression_rejects_bad_terms(text: str) -> None:
    with pytest.raises(InvalidInput):
        parse_expression(text)


def test_catalog_contains_every_look_once() -> None:
    ids = CATALOG.ids()

    assert len(CATALOG) == 25
    assert len(set(ids)) == len(ids)
    assert "blue-jeans" in CATALOG
    assert CATALOG.get("born-to-die").name == "Born to Die"
    assert ids[0] == "blue-jeans"


def test_catalog_unknown_id() -> None:
    with pytest.raises(UnknownFilter) as exc:
        CATALOG.get("no-such-look")

    assert isinstance(exc.value, KeyError)
    assert CATALOG.find("no-such-look") is None
    assert CATALOG.find(None) is None


def test_catalog_rejects_duplicate_ids() -> None:
    effect = FilterEffect("dup", "Dup", parse_expression("sepia(10%)"))

    with pytest.raises(InvalidInput):
        FilterCatalog([effect, effect])


def test_filter_effect_css_round_trips_through_parser() -> None:
    effect = CATALOG.get("summertime-sadness")

    assert parse_expression(effect.css) == effect.expression


def test_brightness_lut_floors() -> None:
    lut = brightness_lut(1.2)

    assert lut[128] == 153
    assert lut[255] == 255
    assert lut[0] == 0


def test_contrast_lut_pivots_on_mid_gray() -> None:
    lut = contrast_lut(2.0)

    assert lut[0] == 0
    assert lut[255] == 255
    assert lut[64] < 64
    assert lut[192] > 192


def test_identity_expression_returns_equal_copy(noisy_image) -> None:
    ops = parse_expression("brightness(100%) contrast(100%) saturate(100%) hue-rotate(0deg) sepia(0%)")

    out = apply_expression(noisy_image, ops)

    assert out is not noisy_image
    assert np.array_equal(np.asarray(out), np.asarray(noisy_image))


def test_grayscale_equalises_channels(noisy_image) -> None:
    out = np.asarray(apply_expression(noisy_image, parse_expression("grayscale(100%)")))

    assert np.array_equal(out[..., 0], out[..., 1])
    assert np.array_equal(out[..., 1], out[..., 2])


def test_sepia_warms_neutral_gray() -> None:
    img = Image.new("RGB", (4, 4), (128, 128, 128))

    r, g, b = apply_expression(img, parse_expression("sepia(100%)")).getpixel((0, 0))

    assert r > g > b


def test_expression_preserves_alpha() -> None:
    img = Image.new("RGBA", (8, 8), (100, 150, 200, 77))

    out = apply_expression(img, parse_expression("sepia(50%) blur(1px)"))

    assert out.mode == "RGBA"
    assert out.getpixel((4, 4))[3] == 77
