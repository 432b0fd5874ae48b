"""
Process startup for the generation engine.

Singleton pattern - configuration is read and the default API key resolved
once per process; afterwards both are read-only.
"""

import logging
from typing import Optional

from textgen import RequestResponseEngine, SecretResolver, SecretResolutionError

from .config import GenerationConfig, get_config

logger = logging.getLogger(__name__)


class GenerationBootstrap:
    """
    Bootstrap the engine based on configuration.

    Singleton pattern - single instance per process.
    """

    _instance: Optional["GenerationBootstrap"] = None

    def __init__(
        self,
        config: Optional[GenerationConfig] = None,
        resolver: Optional[SecretResolver] = None,
    ):
        """Initialize bootstrap with configuration."""
        self.config = config or get_config()
        self.resolver = resolver or self.config.create_secret_resolver()
        self.default_api_key = self._load_default_api_key()
        self.engine = RequestResponseEngine(
            config=self.config,
            resolver=self.resolver,
            transport=self.config.create_transport(),
            default_api_key=self.default_api_key,
        )

    def _load_default_api_key(self) -> str:
        """
        A configured default secret wins over the plain AI_API_KEY value.

        An unresolvable default secret is logged and leaves the default key
        empty; calls naming their own credential still work.
        """
        secret_name = self.config.default_api_key_secret
        if not secret_name:
            return self.config.default_api_key

        try:
            return self.resolver.resolve(secret_name)
        except SecretResolutionError as e:
            logger.error(f"Default API key secret could not be resolved: {e}")
            return ""

    @classmethod
    def get_instance(
        cls,
        config: Optional[GenerationConfig] = None,
        resolver: Optional[SecretResolver] = None,
    ) -> "GenerationBootstrap":
        """
        Get singleton instance.

        Args:
            config: Optional custom configuration (only used first time)
            resolver: Optional custom secret resolver (only used first time)

        Returns:
            Singleton GenerationBootstrap instance
        """
        if cls._instance is None:
            cls._instance = cls(config, resolver)
        return cls._instance

    @classmethod
    def reset(cls):
        """Reset singleton (for testing)."""
        cls._instance = None

    def get_engine(self) -> RequestResponseEngine:
        """Get the generation engine."""
        return self.engine

    def __repr__(self) -> str:
        """String representation without credentials."""
        return (
            f"GenerationBootstrap(endpoint={self.config.default_endpoint}, "
            f"model={self.config.default_model}, "
            f"transport={self.config.transport}, "
            f"secrets={self.config.secret_backend})"
        )


def bootstrap_generation(
    config: Optional[GenerationConfig] = None,
    resolver: Optional[SecretResolver] = None,
) -> GenerationBootstrap:
    """
    Bootstrap the generation engine.

    Args:
        config: Optional custom configuration
        resolver: Optional custom secret resolver

    Returns:
        GenerationBootstrap instance with the engine initialized
    """
    return GenerationBootstrap.get_instance(config, resolver)
