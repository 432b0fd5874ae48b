"""
Interpretation of chat-completion responses.

Only ``choices[0].message.content`` is read. Unknown fields are ignored; any
deviation on that path collapses to the same parse-error outcome, and the failing
step is only reported in the logs.
"""

import json
import logging
from typing import Any, Optional

from .types import JSON_PARSE_ERROR, Outcome

logger = logging.getLogger(__name__)

RESPONSE_FIELD_CHOICES = "choices"
RESPONSE_FIELD_MESSAGE = "message"
RESPONSE_FIELD_CONTENT = "content"


def _reject_constant(token: str):
    raise ValueError(f"non-standard JSON constant {token}")


def extract_content(document: Any) -> Optional[str]:
    """
    Walk choices[0].message.content.

    Returns:
        The content string, or None at the first missing or mis-typed step
    """
    if not isinstance(document, dict):
        logger.warning("Response is not a JSON object")
        return None

    choices = document.get(RESPONSE_FIELD_CHOICES)
    if not isinstance(choices, list) or not choices:
        logger.warning("Response has no non-empty 'choices' array")
        return None

    first_choice = choices[0]
    message = first_choice.get(RESPONSE_FIELD_MESSAGE) if isinstance(first_choice, dict) else None
    if not isinstance(message, dict):
        logger.warning("First choice has no 'message' object")
        return None

    content = message.get(RESPONSE_FIELD_CONTENT)
    if not isinstance(content, str):
        logger.warning("Message has no string 'content' field")
        return None
    return content


def interpret_response(body: str) -> Outcome:
    """Turn a raw response body into a text outcome or the parse-error outcome."""
    try:
        document = json.loads(body, parse_constant=_reject_constant)
    except json.JSONDecodeError as e:
        logger.warning(f"{JSON_PARSE_ERROR}: {e.msg} at offset {e.pos}: {body}")
        return Outcome.error(JSON_PARSE_ERROR)
    except (ValueError, RecursionError) as e:
        logger.warning(f"{JSON_PARSE_ERROR}: {e}")
        return Outcome.error(JSON_PARSE_ERROR)

    content = extract_content(document)
    # An empty completion is indistinguishable from a missing one for callers
    if not content:
        logger.warning(f"{JSON_PARSE_ERROR}: {body}")
        return Outcome.error(JSON_PARSE_ERROR)

    logger.debug(f"AI generate text: response: {content}")
    return Outcome.text(content)
