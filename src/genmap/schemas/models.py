from __future__ import annotations
from typing import Optional, Dict, Any, List
from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator, model_validator

class GenerationRequest(BaseModel):
    # Schema for form data submitted for one generation
    model_config = ConfigDict(extra='allow', protected_namespaces=())

    model_id: str = Field(min_length=1)
    prompt: Optional[str] = Field(default=None, max_length=1500)
    prompt_process: Optional[str] = None
    seed: int = 0
    randomize_seed: bool = True
    aspect_ratio: str = Field(default='1:1', min_length=1)

    control_images: List[Any] = Field(default_factory=list)
    control_images_2: List[Any] = Field(default_factory=list)
    control_files: List[Any] = Field(default_factory=list)
    control_files_2: List[Any] = Field(default_factory=list)

    disable_safety_checker: bool = False
    enable_safety_checker: bool = False
    output_format: str = Field(default='jpg', min_length=1)
    num_outputs: int = Field(default=1, ge=1, le=4)
    meta_data: Optional[Dict[str, Any]] = None

    width: Optional[int] = Field(default=1024, ge=256, le=1536)
    height: Optional[int] = Field(default=1024, ge=256, le=1536)

    duration: Optional[str] = '5'
    resolution: Optional[str] = Field(default='480p', min_length=1)
    generation_type: Optional[str] = 'image'

    @field_validator('num_outputs', mode='before')
    @classmethod
    def _parse_num_outputs(cls, v: Any) -> Any:
        if isinstance(v, str) and v.strip():
            return int(v, 10)
        return v

    @field_validator('duration', mode='before')
    @classmethod
    def _duration_as_string(cls, v: Any) -> Any:
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator('control_images', 'control_images_2', 'control_files', 'control_files_2', mode='before')
    @classmethod
    def _none_is_empty(cls, v: Any) -> Any:
        return [] if v is None else v

    @model_validator(mode='after')
    def _check_against_model(self, info: ValidationInfo) -> 'GenerationRequest':
        # Model-aware checks need a registry passed as validation context
        registry = (info.context or {}).get('registry')
        if registry is None:
            return self
        setting = registry.find_setting(self.model_id)
        if not (setting and setting.prompt_ignore) and not (self.prompt or '').strip():
            raise ValueError('Prompt is required')
        if setting is not None:
            for support in setting.support_add_files:
                if support.is_required and support.is_support > 0:
                    value = getattr(self, support.name, None)
                    if not isinstance(value, list) or not value:
                        raise ValueError(f'Please upload at least one {support.type} for {support.label}')
        return self


class SubmissionResult(BaseModel):
    # Envelope returned by a generation submission
    success: bool
    data: Optional[Any] = None
    error: Optional[str] = None
    endpoint: Optional[str] = None
    payload: Optional[Dict[str, Any]] = None


def validate_request(data: Dict[str, Any], registry: Any = None) -> GenerationRequest:
    """Validate raw form data; raises pydantic.ValidationError."""
    return GenerationRequest.model_validate(data, context={'registry': registry})
