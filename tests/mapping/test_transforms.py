import logging
import math

import pytest

from genmap.mapping.paths import MISSING
from genmap.mapping.transforms import CUSTOM_FUNCTIONS, apply_transforms, register_custom_fn


@pytest.mark.parametrize(
    "raw",
    ["", "abc", None, MISSING, "   ", math.nan, "nan", "1_000", "inf", "Infinity", "1e999", math.inf, "-0x10", "0x", "1e", "12px"],
)
def test_to_number_empty_values_become_missing(raw):
    assert apply_transforms(raw, [{"op": "toNumber"}]) is MISSING


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("512", 512), (" 42 ", 42), ("1.5", 1.5), ("1e3", 1000.0), (7, 7), (2.5, 2.5), (True, 1),
        ("0x10", 16), ("0b1", 1), ("0o7", 7), ("5.", 5.0), (".5", 0.5), ("+3", 3), ("007", 7), ("-2.5e1", -25.0),
    ],
)
def test_to_number_parses(raw, expected):
    assert apply_transforms(raw, [{"op": "toNumber"}]) == expected


def test_to_number_then_default():
    chain = [{"op": "toNumber"}, {"op": "default", "value": 1024}]
    assert apply_transforms("", chain) == 1024
    assert apply_transforms("512", chain) == 512


def test_no_transforms_is_identity():
    assert apply_transforms("x") == "x"
    assert apply_transforms("x", []) == "x"


def test_not():
    assert apply_transforms(True, [{"op": "not"}]) is False
    assert apply_transforms(MISSING, [{"op": "not"}]) is True


@pytest.mark.parametrize(
    "raw, expected",
    [(None, True), (0, True), (0.0, True), (math.nan, True), ("", True),
     ([], False), ({}, False), ("0", False), (" ", False), (3, False)],
)
def test_not_uses_payload_truthiness(raw, expected):
    # empty containers are truthy, NaN is falsy
    assert apply_transforms(raw, [{"op": "not"}]) is expected


def test_enum_map():
    t = [{"op": "enumMap", "map": {"png": "png", "jpg": "jpeg"}, "default": "png"}]
    assert apply_transforms("jpg", t) == "jpeg"
    assert apply_transforms("webp", t) == "png"
    assert apply_transforms(MISSING, t) == "png"


def test_enum_map_keys_match_json_spelling():
    t = [{"op": "enumMap", "map": {"true": "on", "1": "one"}}]
    assert apply_transforms(True, t) == "on"
    assert apply_transforms(1.0, t) == "one"
    assert apply_transforms("nope", t) is MISSING


def test_coalesce():
    assert apply_transforms([MISSING, None, "  ", "v", "w"], [{"op": "coalesce"}]) == "v"
    assert apply_transforms([None, ""], [{"op": "coalesce"}]) is MISSING
    assert apply_transforms("scalar", [{"op": "coalesce"}]) == "scalar"


def test_random_int_bounds():
    for _ in range(50):
        v = apply_transforms(None, [{"op": "randomInt", "min": 3, "max": 5}])
        assert 3 <= v <= 5
    v = apply_transforms(None, [{"op": "randomInt"}])
    assert 1 <= v <= 2**31 - 1


def test_array():
    assert apply_transforms("x", [{"op": "array"}]) == ["x"]
    assert apply_transforms(["x"], [{"op": "array"}]) == ["x"]
    assert apply_transforms(MISSING, [{"op": "array"}]) == []
    assert apply_transforms(None, [{"op": "array"}]) == [None]


def test_to_string():
    assert apply_transforms(5, [{"op": "toString"}]) == "5"
    assert apply_transforms(5.0, [{"op": "toString"}]) == "5"
    assert apply_transforms(False, [{"op": "toString"}]) == "false"
    assert apply_transforms(MISSING, [{"op": "toString"}, {"op": "default", "value": "5"}]) == "5"


def test_pick():
    assert apply_transforms(["a", "b"], [{"op": "pick"}]) == "a"
    assert apply_transforms(["a", "b"], [{"op": "pick", "index": 1}]) == "b"
    assert apply_transforms(["a", "b"], [{"op": "pick", "index": 1.0}]) == "b"
    assert apply_transforms(["a"], [{"op": "pick", "index": 4}]) is MISSING
    assert apply_transforms("solo", [{"op": "pick", "index": 1}]) == "solo"


def test_string_ops_ignore_non_strings():
    assert apply_transforms("  Hi ", [{"op": "trim"}, {"op": "uppercase"}]) == "HI"
    assert apply_transforms("MiXed", [{"op": "lowercase"}]) == "mixed"
    assert apply_transforms(3, [{"op": "trim"}, {"op": "lowercase"}, {"op": "uppercase"}]) == 3


def test_slice():
    assert apply_transforms([1, 2, 3, 4], [{"op": "slice", "start": 0, "end": 2}]) == [1, 2]
    assert apply_transforms([1, 2, 3, 4], [{"op": "slice", "start": 1}]) == [2, 3, 4]
    assert apply_transforms([1, 2, 3, 4], [{"op": "slice", "start": -1}]) == [4]
    assert apply_transforms("abc", [{"op": "slice", "end": 1}]) == "abc"


@pytest.mark.parametrize("empty", [MISSING, None, "", "  ", []])
def test_default_replaces_empty(empty):
    assert apply_transforms(empty, [{"op": "default", "value": "d"}]) == "d"


def test_default_keeps_false_and_zero():
    assert apply_transforms(False, [{"op": "default", "value": True}]) is False
    assert apply_transforms(0, [{"op": "default", "value": 9}]) == 0


def test_custom_fn_inline_callable():
    assert apply_transforms(3, [{"op": "customFn", "fn": lambda v: v * 2}]) == 6


def test_custom_fn_unknown_name_passes_through(caplog):
    with caplog.at_level(logging.WARNING, logger="genmap.mapping.transforms"):
        assert apply_transforms("raw", [{"op": "customFn", "fn": "doesNotExist"}]) == "raw"
    assert "doesNotExist" in caplog.text


def test_custom_fn_error_is_logged_and_value_kept(caplog):
    def boom(v):
        raise RuntimeError("kaput")

    with caplog.at_level(logging.WARNING, logger="genmap.mapping.transforms"):
        assert apply_transforms("raw", [{"op": "customFn", "fn": boom}]) == "raw"
    assert "kaput" in caplog.text


def test_custom_fn_registry():
    @register_custom_fn("test_double")
    def double(v):
        return v * 2

    try:
        assert apply_transforms(4, [{"op": "customFn", "fn": "test_double"}]) == 8
    finally:
        CUSTOM_FUNCTIONS.pop("test_double", None)


def test_builtin_custom_fns():
    assert apply_transforms(1000, [{"op": "customFn", "fn": "multiple_of_32"}]) == 992
    assert apply_transforms("16:9", [{"op": "customFn", "fn": "aspect_ratio_to_size"}]) == {
        "width": 1024,
        "height": 576,
    }
    assert apply_transforms("7:1", [{"op": "customFn", "fn": "aspect_ratio_to_size"}]) == "7:1"


def test_unknown_op_rejected():
    with pytest.raises(ValueError, match="unknown transform op"):
        apply_transforms(1, [{"op": "explode"}])
