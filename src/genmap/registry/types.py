from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from genmap.mapping.types import ApiInputSchema


@dataclass(frozen=True)
class CustomParameterOption:
    value: Union[str, int, float]
    label: str = ""


@dataclass(frozen=True)
class CustomParameter:
    """A model-specific form control (select/slider/switch/input)."""

    name: str                   # key in the submitted form data
    label: str
    type: str                   # select|slider|switch|input
    default_value: Union[str, int, float, bool]
    description: Optional[str] = None
    options: List[CustomParameterOption] = field(default_factory=list)
    min: Optional[float] = None
    max: Optional[float] = None
    step: Optional[float] = None


@dataclass(frozen=True)
class SupportFileSetting:
    name: str                   # form field, e.g. "control_images"
    label: str
    type: str                   # image|audio|video
    is_support: int = 0         # 0 = unsupported, n = max number of files
    is_required: bool = False
    options: Dict[str, Any] = field(default_factory=dict)


@dataclass
class ModelSetting:
    id: str
    label: str
    description: str = ""
    badge: List[str] = field(default_factory=list)
    tag: List[str] = field(default_factory=list)
    type: str = "image"         # image|video
    provider: List[str] = field(default_factory=list)
    supported_aspect_ratios: List[str] = field(default_factory=list)
    custom_parameters: List[CustomParameter] = field(default_factory=list)
    support_add_files: List[SupportFileSetting] = field(default_factory=list)
    prompt_ignore: bool = False
    use_credits: Optional[float] = None
    options: Dict[str, Any] = field(default_factory=dict)
    api_input: Optional[ApiInputSchema] = None

    @property
    def endpoint(self) -> str:
        return (self.api_input.endpoint if self.api_input else None) or ""
