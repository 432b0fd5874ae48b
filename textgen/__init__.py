"""
Text-generation boundary layer.

Builds one validated chat-completion request from a prompt and turns the
response back into plain text, or one of a fixed set of error strings.

Transports:
- HttpTransport: HTTPS POST via requests (default)
- DryRunTransport: returns the serialized request instead of sending it

Example usage:
    from infra import GenerationConfig
    from textgen import RequestResponseEngine, EnvSecretResolver

    engine = RequestResponseEngine(GenerationConfig.from_env(), EnvSecretResolver())
    text = engine.ai_generate_text_default("Hello, world!")
"""

from .types import (
    GenerationRequest,
    PreparedRequest,
    Outcome,
    OutcomeKind,
    JSON_PARSE_ERROR,
    INVALID_PROTOCOL_ERROR,
    UNSUPPORTED_ENDPOINT_ERROR,
    INVALID_PROMPT_ERROR,
    MSG_OVERRIDE_FORBIDDEN_ERROR,
)
from .base import Transport
from .dry_run import DryRunTransport
from .http import HttpTransport
from .secrets import (
    SecretResolver,
    SecretResolutionError,
    EnvSecretResolver,
    KeyFileSecretResolver,
    StaticSecretResolver,
)
from .engine import RequestResponseEngine

__all__ = [
    "GenerationRequest",
    "PreparedRequest",
    "Outcome",
    "OutcomeKind",
    "JSON_PARSE_ERROR",
    "INVALID_PROTOCOL_ERROR",
    "UNSUPPORTED_ENDPOINT_ERROR",
    "INVALID_PROMPT_ERROR",
    "MSG_OVERRIDE_FORBIDDEN_ERROR",
    "Transport",
    "DryRunTransport",
    "HttpTransport",
    "SecretResolver",
    "SecretResolutionError",
    "EnvSecretResolver",
    "KeyFileSecretResolver",
    "StaticSecretResolver",
    "RequestResponseEngine",
]
