from . import paths
from . import types
from . import load
from . import conditions
from . import transforms
from . import engine
from . import validate

from .paths import MISSING, get_by_path, set_by_path, split_path
from .conditions import eval_condition
from .transforms import apply_transforms, register_custom_fn
from .engine import build_api_input
from .load import build_schema, load_schema_yaml

__all__ = [
    "paths",
    "types",
    "load",
    "conditions",
    "transforms",
    "engine",
    "validate",
    "MISSING",
    "get_by_path",
    "set_by_path",
    "split_path",
    "eval_condition",
    "apply_transforms",
    "register_custom_fn",
    "build_api_input",
    "build_schema",
    "load_schema_yaml",
]
