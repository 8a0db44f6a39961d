"""
genmap | submit.py

Submission seam between validated form data and a provider queue client.

The mapping engine produces the payload; the client (fal.ai, Replicate, ...)
is injected and only has to accept ``(endpoint, request)`` and return a
request id.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Protocol

from pydantic import ValidationError

from genmap.config import GenmapConfig
from genmap.mapping.engine import build_api_input
from genmap.registry.registry import ModelRegistry, default_registry
from genmap.schemas.models import SubmissionResult, validate_request

logger = logging.getLogger(__name__)


class GenerationClient(Protocol):
    def submit(self, endpoint: str, request: Dict[str, Any]) -> str: ...


class ClientError(RuntimeError):
    """Raised by clients for provider-side failures (HTTP status + detail)."""

    def __init__(self, message: str, status: Optional[int] = None, detail: Any = None):
        super().__init__(message)
        self.status = status
        self.detail = detail


def _format_validation_error(e: ValidationError) -> str:
    parts = []
    for err in e.errors():
        loc = ".".join(str(p) for p in err.get("loc", ())) or "request"
        parts.append(f"{loc}: {err.get('msg')}")
    return "; ".join(parts)


# ---------------------------------------------------------------------------
# SUBMIT
# ---------------------------------------------------------------------------
def submit_generation(
    data: Dict[str, Any],
    client: GenerationClient,
    *,
    registry: Optional[ModelRegistry] = None,
    config: Optional[GenmapConfig] = None,
    in_flight: int = 0,
) -> SubmissionResult:
    """
    Map ``data`` for its model and hand it to ``client``.

    Never raises for expected failures; the returned envelope carries
    ``success``/``data`` (request id)/``error``.
    """
    config = config or GenmapConfig()
    registry = registry or default_registry()

    model_id = str(data.get("model_id") or "")
    setting = registry.find_setting(model_id)
    if setting is None or setting.api_input is None or not setting.endpoint:
        return SubmissionResult(success=False, error="Unsupported model, no endpoint")
    endpoint = setting.endpoint

    if config.validate_requests:
        try:
            validate_request(data, registry)
        except ValidationError as e:
            return SubmissionResult(success=False, endpoint=endpoint, error=_format_validation_error(e))

    if in_flight >= config.max_in_flight:
        return SubmissionResult(
            success=False,
            endpoint=endpoint,
            error=f"Too many generations in progress ({in_flight}/{config.max_in_flight})",
        )

    payload = build_api_input(setting.api_input, data)
    request: Dict[str, Any] = {"input": payload}
    if config.webhook_url:
        request["webhookUrl"] = f"{config.webhook_url}?model_id={model_id}"

    logger.info("submitting %s to %s", model_id, endpoint)
    try:
        request_id = client.submit(endpoint, request)
    except ClientError as e:
        logger.error("api error for %s: %s %s", model_id, e.status, e.detail)
        return SubmissionResult(
            success=False, endpoint=endpoint, payload=payload,
            error=f"api error: {e.status} {e.detail}",
        )
    except Exception as e:
        logger.error("submission of %s failed: %s", model_id, e)
        return SubmissionResult(
            success=False, endpoint=endpoint, payload=payload,
            error=str(e) or "Unexpected api error occurred, please check your api key",
        )

    return SubmissionResult(success=True, data=request_id, endpoint=endpoint, payload=payload)
