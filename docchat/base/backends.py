"""Backend configuration and registry public surface."""

from .backends_parts.backend_config import BackendConfig, BackendVariant, HeaderFn
from .backends_parts.backend_registry import BackendRegistry
from .backends_parts.variants import (
    azure_header,
    bearer_header,
    register_azure,
    register_openai_compatible,
)

__all__ = [
    "BackendConfig",
    "BackendVariant",
    "HeaderFn",
    "BackendRegistry",
    "register_openai_compatible",
    "register_azure",
    "bearer_header",
    "azure_header",
]
