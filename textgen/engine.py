"""
Request/response pipeline for text generation.

validate -> headers -> payload -> transport -> outcome

Every stage can end the call early with an error outcome. Nothing here raises to
the caller: the public surface returns plain strings, either generated text or
one of the fixed error messages.
"""

import logging
from typing import List, Optional, Tuple

from .base import Transport
from .dry_run import DryRunTransport
from .http import HttpTransport
from .payload import PayloadError, build_payload
from .secrets import SecretResolutionError, SecretResolver
from .types import CONTENT_TYPE_HEADER, GenerationRequest, Outcome, PreparedRequest
from .validation import validate_request

logger = logging.getLogger(__name__)


class RequestResponseEngine:
    """
    Turns a prompt into one validated chat-completion call.

    Configuration and the default API key are fixed at construction and only
    read afterwards, so one engine can serve concurrent callers.
    """

    def __init__(
        self,
        config,
        resolver: SecretResolver,
        transport: Optional[Transport] = None,
        default_api_key: Optional[str] = None,
    ):
        """
        Args:
            config: GenerationConfig with default endpoint, model, key and timeout
            resolver: Resolves per-call credential references
            transport: Transport for real sends; HttpTransport by default
            default_api_key: Token used when a call names no credential.
                Falls back to config.default_api_key.
        """
        self.config = config
        self.resolver = resolver
        self.transport = transport or HttpTransport(timeout_s=config.connection_timeout_s)
        self.dry_run_transport = DryRunTransport()
        self.default_api_key = (
            default_api_key if default_api_key is not None else config.default_api_key
        )

    def generate(self, request: GenerationRequest) -> Outcome:
        endpoint, error = validate_request(
            request.endpoint,
            request.prompt,
            default_endpoint=self.config.default_endpoint,
            strict=self.config.strict_host_check,
        )
        if error is not None:
            return Outcome.error(error)

        headers, error = self._build_headers(request.credential_ref)
        if error is not None:
            return Outcome.error(error)

        try:
            payload = build_payload(
                request.prompt,
                request.model,
                default_model=self.config.default_model,
                overrides=request.overrides,
            )
        except PayloadError as e:
            return Outcome.error(e.message)

        logger.debug(f"AI generate text: endpoint: {endpoint} payload: {payload}")

        prepared = PreparedRequest(endpoint=endpoint, payload=payload, headers=headers)
        transport = self._select_transport(request.dry_run)
        try:
            return transport.send(prepared)
        except Exception as e:
            logger.error(f"Transport {type(transport).__name__} failed: {e}", exc_info=True)
            return Outcome.error(str(e))

    def _select_transport(self, dry_run: bool) -> Transport:
        return self.dry_run_transport if dry_run else self.transport

    def _build_headers(self, credential_ref: str) -> Tuple[List[str], Optional[str]]:
        """
        Content type first, then exactly one Authorization header.

        Returns:
            (headers, error); error is the resolver's message when the named
            credential cannot be resolved
        """
        headers = [CONTENT_TYPE_HEADER]
        if credential_ref:
            try:
                api_key = self.resolver.resolve(credential_ref)
            except SecretResolutionError as e:
                logger.error(f"Credential '{credential_ref}' could not be resolved")
                return headers, str(e)
        else:
            api_key = self.default_api_key or ""
        headers.append(f"Authorization: Bearer {api_key}")
        return headers, None

    def ai_generate_text(
        self,
        endpoint: Optional[str],
        prompt: Optional[str],
        model: Optional[str] = "",
        credential_ref: Optional[str] = "",
        overrides: Optional[str] = "",
    ) -> str:
        """Full-arity surface: None and empty both mean "use the default"."""
        request = GenerationRequest(
            prompt=prompt,
            endpoint=endpoint or "",
            model=model or "",
            credential_ref=credential_ref or "",
            overrides=overrides or "",
        )
        return self.generate(request).value

    def ai_generate_text_default(self, prompt: Optional[str]) -> str:
        """Prompt-only surface using the default endpoint, model and key."""
        return self.generate(GenerationRequest(prompt=prompt)).value
