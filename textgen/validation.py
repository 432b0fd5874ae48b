"""
Input validation for generation requests.

Endpoint checks run against the effective endpoint (caller value or configured
default). The host check is a case-insensitive substring match by default so that
every endpoint accepted so far keeps working; strict mode parses the URL and matches
the hostname exactly.
"""

import logging
from typing import Optional, Tuple
from urllib.parse import urlsplit

from .types import (
    INVALID_PROMPT_ERROR,
    INVALID_PROTOCOL_ERROR,
    UNSUPPORTED_ENDPOINT_ERROR,
)

logger = logging.getLogger(__name__)

API_ENDPOINT_PREFIX = "https://"

# OpenAI-compatible hosts
OPEN_AI_PUBLIC_ENDPOINT = "api.openai.com"
OPEN_AI_AZURE_ENDPOINT = "openai.azure.com"
SUPPORTED_HOSTS = (OPEN_AI_AZURE_ENDPOINT, OPEN_AI_PUBLIC_ENDPOINT)


def is_api_endpoint_valid(endpoint: str) -> bool:
    """True if the endpoint starts with https:// (any case)."""
    return endpoint[: len(API_ENDPOINT_PREFIX)].lower() == API_ENDPOINT_PREFIX


def is_api_endpoint_supported(endpoint: str, strict: bool = False) -> bool:
    """
    True if the endpoint points at a supported OpenAI host.

    Args:
        endpoint: Effective endpoint URL
        strict: Match the parsed hostname instead of a raw substring. Azure
            deployments live on per-resource subdomains, so any
            ``*.openai.azure.com`` host is accepted.
    """
    if not strict:
        lowered = endpoint.lower()
        return any(host in lowered for host in SUPPORTED_HOSTS)

    try:
        hostname = urlsplit(endpoint).hostname
    except ValueError:
        return False
    if not hostname:
        return False
    return (
        hostname == OPEN_AI_PUBLIC_ENDPOINT
        or hostname == OPEN_AI_AZURE_ENDPOINT
        or hostname.endswith("." + OPEN_AI_AZURE_ENDPOINT)
    )


def is_prompt_valid(prompt: Optional[str]) -> bool:
    """Non-empty and encodable as UTF-8 (no lone surrogates)."""
    if prompt is None or len(prompt) == 0:
        return False
    try:
        prompt.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def resolve_endpoint(endpoint: Optional[str], default_endpoint: str) -> str:
    return endpoint if endpoint else default_endpoint


def validate_endpoint(endpoint: str, strict: bool = False) -> Optional[str]:
    """
    Check protocol, then host.

    Returns:
        None when the endpoint is usable, otherwise the error string to return
    """
    if not is_api_endpoint_valid(endpoint):
        logger.error(f"AI generate text: invalid protocol: {endpoint}")
        return INVALID_PROTOCOL_ERROR
    if not is_api_endpoint_supported(endpoint, strict=strict):
        logger.error(f"AI generate text: unsupported endpoint: {endpoint}")
        return UNSUPPORTED_ENDPOINT_ERROR
    return None


def validate_prompt(prompt: Optional[str]) -> Optional[str]:
    if not is_prompt_valid(prompt):
        logger.warning("AI generate text: prompt is null or empty")
        return INVALID_PROMPT_ERROR
    return None


def validate_request(
    endpoint: Optional[str],
    prompt: Optional[str],
    default_endpoint: str,
    strict: bool = False,
) -> Tuple[str, Optional[str]]:
    """
    Resolve and validate endpoint and prompt together.

    Returns:
        (effective_endpoint, error) where error is None on success
    """
    effective = resolve_endpoint(endpoint, default_endpoint)
    error = validate_endpoint(effective, strict=strict)
    if error is None:
        error = validate_prompt(prompt)
    return effective, error
