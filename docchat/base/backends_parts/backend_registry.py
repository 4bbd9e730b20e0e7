"""
Owned name → BackendConfig mapping.

The registry is an explicit object passed through the composition root rather
than module-global state. Registration under an existing name silently
replaces the earlier entry. Access is not synchronized; multi-threaded hosts
must guard it themselves.
"""
from __future__ import annotations

from typing import Dict, Iterator, List, Optional

from ..errors import BackendNotFound
from ..logging import get_logger, log_event
from .backend_config import BackendConfig

_logger = get_logger("docchat.registry")


class BackendRegistry:
    """Mapping of backend names to their configuration.

    Example:
        >>> registry = BackendRegistry()
        >>> register_openai_compatible(registry, "local", host="localhost:8080",
        ...                            protocol="http", models=("llama",))
        >>> registry.lookup("local").url
        'http://localhost:8080/v1/chat/completions'
    """

    def __init__(self) -> None:
        self._entries: Dict[str, BackendConfig] = {}

    def register(self, backend: BackendConfig) -> BackendConfig:
        """Store ``backend`` under its name; last registration wins."""
        if not backend.name:
            raise ValueError("backend name must be non-empty")
        replaced = backend.name in self._entries
        # Drop first so a re-registered name moves to the end of names()
        self._entries.pop(backend.name, None)
        self._entries[backend.name] = backend
        log_event(
            _logger,
            "registry.register",
            provider=backend.name,
            url=backend.url,
            variant=backend.variant.value,
            replaced=replaced,
        )
        return backend

    def lookup(self, name: str) -> BackendConfig:
        """Return the backend registered as ``name``.

        Raises:
            BackendNotFound: When no such backend exists.
        """
        try:
            return self._entries[name]
        except KeyError:
            raise BackendNotFound(provider=name, message=f"no backend registered as {name!r}") from None

    def get(self, name: str) -> Optional[BackendConfig]:
        return self._entries.get(name)

    def names(self) -> List[str]:
        return list(self._entries)

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[BackendConfig]:
        return iter(list(self._entries.values()))


__all__ = ["BackendRegistry"]
