"""
Named-secret resolution for bearer tokens.

A credential reference on a request is a secret *name*; resolvers turn it into the
token. Failures carry a message that is returned to the caller unchanged, so it must
never contain the secret itself.
"""

import os
import re
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional


class SecretResolutionError(Exception):
    """Secret could not be resolved."""
    pass


class SecretResolver(ABC):
    """
    Abstract secret store.
    The engine depends ONLY on this interface.
    """

    @abstractmethod
    def resolve(self, name: str) -> str:
        """Return the secret value for ``name`` or raise SecretResolutionError."""
        raise NotImplementedError


class EnvSecretResolver(SecretResolver):
    """
    Reads secrets from environment variables.

    ``openai.api-key`` with prefix ``SECRET_`` maps to ``SECRET_OPENAI_API_KEY``.
    """

    def __init__(self, prefix: str = "", environ: Optional[Dict[str, str]] = None):
        self.prefix = prefix
        self.environ = environ if environ is not None else os.environ

    def variable_name(self, name: str) -> str:
        return self.prefix + re.sub(r"[^0-9A-Za-z]", "_", name).upper()

    def resolve(self, name: str) -> str:
        var = self.variable_name(name)
        value = self.environ.get(var)
        if not value:
            raise SecretResolutionError(
                f"Secret '{name}' not found: environment variable {var} is not set"
            )
        return value


class KeyFileSecretResolver(SecretResolver):
    """Reads ``<directory>/<name>.key`` files, one secret per file."""

    def __init__(self, directory: str):
        self.directory = Path(directory)

    def resolve(self, name: str) -> str:
        # Secret names are plain identifiers, never paths
        if not name or Path(name).name != name or name in (".", ".."):
            raise SecretResolutionError(f"Invalid secret name '{name}'")

        path = self.directory / f"{name}.key"
        try:
            value = path.read_text(encoding="utf-8").strip()
        except OSError as e:
            raise SecretResolutionError(
                f"Secret '{name}' not readable from {path}: {e.strerror}"
            )
        if not value:
            raise SecretResolutionError(f"Secret '{name}' is empty in {path}")
        return value


class StaticSecretResolver(SecretResolver):
    """In-memory secrets, for embedding and tests."""

    def __init__(self, secrets: Optional[Dict[str, str]] = None):
        self.secrets = dict(secrets or {})

    def resolve(self, name: str) -> str:
        if name not in self.secrets:
            raise SecretResolutionError(f"Secret '{name}' not found")
        return self.secrets[name]
