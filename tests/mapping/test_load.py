import pytest
import yaml

from genmap.mapping.engine import build_api_input
from genmap.mapping.load import build_schema, load_schema_yaml
from genmap.mapping.paths import MISSING
from genmap.mapping.types import Equals, FileRef, Not, TransformOp


def test_build_schema_from_yaml_text():
    doc = yaml.safe_load(
        """
provider: fal
endpoint: fal-ai/flux/dev
rules:
  - { to: prompt, from: [prompt_process, prompt], transform: [{ op: coalesce }] }
  - { to: seed, const: null }
  - { to: end_image_url, fromFile: { name: control_images_2, index: 0, use: url } }
  - to: steps
    const: 28
    when: { not: { equals: [fast, true] } }
"""
    )
    schema = build_schema(doc)
    assert schema.endpoint == "fal-ai/flux/dev"
    prompt, seed, end_image, steps = schema.rules

    assert prompt.source == ["prompt_process", "prompt"]
    assert prompt.transform[0].op is TransformOp.COALESCE
    assert prompt.const is MISSING

    assert seed.const is None
    assert end_image.from_file == FileRef(name="control_images_2", index=0, use="url")
    assert steps.when == Not(Equals("fast", True))


@pytest.mark.parametrize(
    "rules, match",
    [
        ([{"from": "x"}], "rule 0: rule is missing 'to'"),
        ([{"to": "a"}, {"to": "b", "transform": [{"op": "nope"}]}], "rule 1: unknown transform op"),
        ([{"to": "a", "when": {"maybe": "x"}}], "unknown condition"),
        ([{"to": "a", "when": {"equals": "x"}}], r"equals expects \[path, value\]"),
        ([{"to": "a", "transform": [{"op": "enumMap"}]}], "requires a 'map'"),
        ([{"to": "a", "transform": [{"op": "default"}]}], "requires a 'value'"),
        ([{"to": "a", "transform": [{"op": "customFn", "fn": 3}]}], "requires 'fn'"),
        ([{"to": "a", "fromFile": {"name": "f", "use": "blob"}}], "fromFile.use"),
        ([{"to": "a", "transform": [{"op": "pick", "index": "first"}]}], "pick.index must be an integer"),
        ([{"to": "a", "transform": [{"op": "pick", "index": True}]}], "pick.index must be an integer"),
        ([{"to": "a", "transform": [{"op": "slice", "start": 0, "end": 1.5}]}], "slice.end must be an integer"),
        ([{"to": "a", "transform": [{"op": "randomInt", "min": "a"}]}], "randomInt.min must be an integer"),
    ],
)
def test_malformed_rules_rejected(rules, match):
    with pytest.raises(ValueError, match=match):
        build_schema({"rules": rules})


def test_load_schema_yaml_accepts_model_entry(tmp_path):
    p = tmp_path / "model.yaml"
    p.write_text(
        """
id: my-model
apiInput:
  endpoint: fal-ai/custom
  rules:
    - { to: width, from: w, transform: [{ op: toNumber }] }
""",
        encoding="utf-8",
    )
    schema = load_schema_yaml(p)
    assert schema.endpoint == "fal-ai/custom"
    assert schema.rules[0].to == "width"


def test_load_schema_yaml_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_schema_yaml(tmp_path / "nope.yaml")


def test_integral_float_params_become_ints():
    doc = yaml.safe_load(
        """
rules:
  - { to: second, from: items, transform: [{ op: pick, index: 1.0 }] }
  - { to: head, from: items, transform: [{ op: slice, start: 0.0, end: 2.0 }] }
  - { to: n, transform: [{ op: randomInt, min: 3.0, max: 3.0 }] }
"""
    )
    schema = build_schema(doc)
    assert schema.rules[0].transform[0].params["index"] == 1
    assert isinstance(schema.rules[0].transform[0].params["index"], int)

    out = build_api_input(schema, {"items": ["a", "b", "c"]})
    assert out == {"second": "b", "head": ["a", "b"], "n": 3}
