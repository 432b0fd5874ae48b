"""
Generation configuration system.

Environment-based settings read once at process startup. Values from a local
.env file are loaded first; real environment variables take precedence.
"""

import os
from pathlib import Path
from typing import Literal
from dataclasses import dataclass

from dotenv import load_dotenv

from textgen import (
    Transport,
    HttpTransport,
    DryRunTransport,
    SecretResolver,
    EnvSecretResolver,
    KeyFileSecretResolver,
)

env_path = Path(__file__).parent.parent / ".env"
load_dotenv(env_path)


TransportType = Literal["http", "dry_run"]
SecretBackendType = Literal["env", "keyfile"]

DEFAULT_ENDPOINT = "https://api.openai.com/v1/chat/completions"
DEFAULT_MODEL = "gpt-4o-mini"
DEFAULT_CONNECTION_TIMEOUT_S = 10


@dataclass
class GenerationConfig:
    """Process-wide generation configuration from environment."""

    # Request defaults
    default_endpoint: str
    default_model: str

    # Credentials
    default_api_key: str
    default_api_key_secret: str     # named secret, resolved once at bootstrap
    secret_backend: SecretBackendType
    secret_dir: str

    # Transport
    transport: TransportType
    connection_timeout_s: int

    # Validation
    strict_host_check: bool

    @classmethod
    def from_env(cls) -> "GenerationConfig":
        """
        Load configuration from environment variables.

        Defaults target the public OpenAI endpoint over HTTPS with a 10 second
        connection timeout and the backward-compatible host check.
        """
        return cls(
            default_endpoint=os.getenv("AI_ENDPOINT", DEFAULT_ENDPOINT),
            default_model=os.getenv("AI_MODEL", DEFAULT_MODEL),

            default_api_key=os.getenv("AI_API_KEY", ""),
            default_api_key_secret=os.getenv("AI_API_KEY_SECRET", ""),
            secret_backend=os.getenv("AI_SECRET_BACKEND", "env"),  # type: ignore
            secret_dir=os.getenv("AI_SECRET_DIR", "./secrets"),

            transport=os.getenv("AI_TRANSPORT", "http"),  # type: ignore
            connection_timeout_s=int(
                os.getenv("AI_CONNECTION_TIMEOUT_S", str(DEFAULT_CONNECTION_TIMEOUT_S))
            ),

            strict_host_check=os.getenv("AI_STRICT_HOST_CHECK", "false").lower() == "true",
        )

    def create_secret_resolver(self) -> SecretResolver:
        """Create secret resolver based on configuration."""
        if self.secret_backend == "keyfile":
            return KeyFileSecretResolver(directory=self.secret_dir)
        # Default to environment variables
        return EnvSecretResolver()

    def create_transport(self) -> Transport:
        """Create transport instance based on configuration."""
        if self.transport == "dry_run":
            return DryRunTransport()
        # Default to HTTP
        return HttpTransport(timeout_s=self.connection_timeout_s)


def get_config() -> GenerationConfig:
    """Get process-wide generation configuration."""
    return GenerationConfig.from_env()
