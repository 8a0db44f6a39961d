from genmap.mapping import MISSING, apply_transforms, build_api_input, eval_condition, get_by_path, set_by_path

__version__ = "0.1.0"

__all__ = [
    "MISSING",
    "apply_transforms",
    "build_api_input",
    "eval_condition",
    "get_by_path",
    "set_by_path",
]
