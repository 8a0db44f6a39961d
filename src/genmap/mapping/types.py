from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Union

from .paths import MISSING


class TransformOp(str, Enum):
    NOT = "not"
    ENUM_MAP = "enumMap"
    COALESCE = "coalesce"
    RANDOM_INT = "randomInt"
    ARRAY = "array"
    TO_NUMBER = "toNumber"
    TO_STRING = "toString"
    PICK = "pick"
    TRIM = "trim"
    LOWERCASE = "lowercase"
    UPPERCASE = "uppercase"
    SLICE = "slice"
    DEFAULT = "default"
    CUSTOM_FN = "customFn"


@dataclass(frozen=True)
class Transform:
    op: TransformOp
    params: Dict[str, Any] = field(default_factory=dict)   # map/default, min/max, index, start/end, value, fn

    def get(self, key: str, default: Any = None) -> Any:
        v = self.params.get(key, MISSING)
        return default if v is MISSING or v is None else v


@dataclass(frozen=True)
class Exists:
    path: str


@dataclass(frozen=True)
class Equals:
    path: str
    value: Any


@dataclass(frozen=True)
class Not:
    cond: "Condition"


Condition = Union[Exists, Equals, Not]


@dataclass(frozen=True)
class FileRef:
    name: str                   # form field holding the uploaded files, e.g. "control_images"
    index: Optional[int] = None
    use: str = "file"           # file|url


@dataclass
class MappingRule:
    to: str                                         # target path, e.g. "image_size.width"
    source: Union[str, List[str], None] = None      # "from"; a list feeds a coalesce
    from_file: Optional[FileRef] = None
    const: Any = MISSING
    when: Optional[Condition] = None
    transform: List[Transform] = field(default_factory=list)


@dataclass
class ApiInputSchema:
    provider: str = "fal"       # fal|replicate|huggingface|...
    endpoint: Optional[str] = None
    variant_endpoint: Optional[str] = None
    options: Dict[str, Any] = field(default_factory=dict)
    rules: List[MappingRule] = field(default_factory=list)


CustomFn = Callable[[Any], Any]
