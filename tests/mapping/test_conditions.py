import pytest

from genmap.mapping.conditions import eval_condition
from genmap.mapping.types import Equals, Exists, Not


DATA = {
    "prompt": "a cat",
    "blank": "   ",
    "nothing": None,
    "count": 1,
    "flag": True,
    "meta_data": {"light_type": "Left"},
}


def test_no_condition_always_fires():
    assert eval_condition(None, DATA) is True


@pytest.mark.parametrize(
    "path, expected",
    [
        ("prompt", True),
        ("meta_data.light_type", True),
        ("blank", False),
        ("nothing", False),
        ("missing", False),
        ("count", True),
    ],
)
def test_exists(path, expected):
    assert eval_condition({"exists": path}, DATA) is expected


def test_equals_is_strict():
    assert eval_condition({"equals": ["count", 1]}, DATA)
    assert not eval_condition({"equals": ["count", "1"]}, DATA)
    assert not eval_condition({"equals": ["count", True]}, DATA)
    assert eval_condition({"equals": ["flag", True]}, DATA)
    assert not eval_condition({"equals": ["flag", 1]}, DATA)
    assert eval_condition({"equals": ["nothing", None]}, DATA)
    assert not eval_condition({"equals": ["missing", None]}, DATA)


def test_not_negates_recursively():
    assert eval_condition({"not": {"exists": "missing"}}, DATA)
    assert not eval_condition({"not": {"not": {"exists": "missing"}}}, DATA)


def test_typed_conditions():
    assert eval_condition(Exists("prompt"), DATA)
    assert eval_condition(Not(Equals("meta_data.light_type", "Right")), DATA)


def test_malformed_condition_rejected():
    with pytest.raises(ValueError):
        eval_condition({"within": ["a", 1]}, DATA)
