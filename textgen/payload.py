"""
Canonical payload construction.

The payload always carries ``model`` and a single user message built from the
prompt. Caller overrides are merged on a candidate copy and only committed once
every key has been accepted, so a rejected override never leaves a half-merged
payload behind.
"""

import json
import logging
from typing import Any, Dict

from .types import JSON_PARSE_ERROR, MSG_OVERRIDE_FORBIDDEN_ERROR

logger = logging.getLogger(__name__)

MESSAGES_KEY = "messages"


class PayloadError(Exception):
    """Payload could not be built. ``message`` is the caller-facing text."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class OverrideJsonError(PayloadError):
    def __init__(self):
        super().__init__(JSON_PARSE_ERROR)


class OverrideForbiddenError(PayloadError):
    def __init__(self):
        super().__init__(MSG_OVERRIDE_FORBIDDEN_ERROR)


def build_canonical_payload(prompt: str, model: str, default_model: str) -> Dict[str, Any]:
    return {
        "model": model if model else default_model,
        MESSAGES_KEY: [{"role": "user", "content": prompt}],
    }


def _reject_constant(token: str):
    # NaN and +/-Infinity are not JSON; the standard library accepts them by default
    raise ValueError(f"non-standard JSON constant {token}")


def parse_overrides(overrides: str) -> Dict[str, Any]:
    """
    Parse override JSON. Key order follows the source text.

    Raises:
        OverrideJsonError: Malformed JSON, or a JSON value that is not an object
    """
    try:
        parsed = json.loads(overrides, parse_constant=_reject_constant)
    except json.JSONDecodeError as e:
        logger.warning(
            f"{JSON_PARSE_ERROR}: {e.msg}, offset input {e.pos}",
            extra={"input_line": e.lineno, "input_column": e.colno},
        )
        raise OverrideJsonError()
    except (ValueError, RecursionError) as e:
        logger.warning(f"{JSON_PARSE_ERROR}: {e}")
        raise OverrideJsonError()

    if not isinstance(parsed, dict):
        logger.warning(
            f"{JSON_PARSE_ERROR}: overrides must be a JSON object, "
            f"got {type(parsed).__name__}"
        )
        raise OverrideJsonError()
    return parsed


def merge_overrides(payload: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Shallow key-wise merge. Existing keys keep their position, new keys are
    appended. The input payload is not modified.

    Raises:
        OverrideForbiddenError: An override tries to set ``messages``
    """
    candidate = dict(payload)
    for key, value in overrides.items():
        if key == MESSAGES_KEY:
            logger.warning(
                f"{JSON_PARSE_ERROR}: 'messages' is constructed from 'prompt', "
                "cannot be overridden"
            )
            raise OverrideForbiddenError()
        candidate[key] = value
    return candidate


def serialize_payload(payload: Dict[str, Any]) -> str:
    """
    Compact JSON that is valid UTF-8 on the wire.

    Raises:
        OverrideJsonError: A value cannot be written as standard JSON or encoded
            as UTF-8 (lone surrogates)
    """
    try:
        body = json.dumps(payload, separators=(",", ":"), ensure_ascii=False, allow_nan=False)
        body.encode("utf-8")
    except (ValueError, UnicodeEncodeError) as e:
        logger.warning(f"{JSON_PARSE_ERROR}: payload cannot be serialized: {e}")
        raise OverrideJsonError()
    return body


def build_payload(prompt: str, model: str, default_model: str, overrides: str = "") -> str:
    """
    Build the serialized request body.

    Args:
        prompt: Validated, non-empty prompt
        model: Caller model, empty for the default
        default_model: Configured default model
        overrides: JSON object text to merge, empty for none

    Returns:
        Compact JSON string

    Raises:
        PayloadError: Override JSON is malformed or forbidden
    """
    payload = build_canonical_payload(prompt, model, default_model)
    if overrides:
        payload = merge_overrides(payload, parse_overrides(overrides))
    return serialize_payload(payload)
