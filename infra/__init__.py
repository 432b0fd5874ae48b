"""
Infrastructure module exports.

Configuration and bootstrap for the generation engine.
"""

from .config import GenerationConfig, get_config, TransportType, SecretBackendType
from .bootstrap import GenerationBootstrap, bootstrap_generation

__all__ = [
    "GenerationConfig",
    "get_config",
    "TransportType",
    "SecretBackendType",
    "GenerationBootstrap",
    "bootstrap_generation",
]
