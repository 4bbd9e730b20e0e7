"""
Per-variant default construction of backends.

``register_openai_compatible`` and ``register_azure`` build a `BackendConfig`
with the same shape and store it in a registry. They differ only in how the
default header function presents the credential:

* OpenAI-compatible: ``Authorization: Bearer <key>``
* Azure: ``api-key: <key>``

An explicit ``header`` (callable or static mapping) replaces the default.
"""
from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional, Union

from ...config.defaults import OPENAI_DEFAULT_ENDPOINT, OPENAI_DEFAULT_HOST
from ...config.env import KeyHandle, resolve_key
from .backend_config import BackendConfig, BackendVariant, HeaderFn, unique_models
from .backend_registry import BackendRegistry

HeaderSpec = Union[HeaderFn, Mapping[str, str], None]


def bearer_header(key: KeyHandle, backend_name: str) -> HeaderFn:
    """Default OpenAI-style header function; empty when no key resolves."""

    def _header() -> Optional[Mapping[str, str]]:
        if resolved := resolve_key(key, backend_name):
            return {"Authorization": f"Bearer {resolved}"}
        return None

    return _header


def azure_header(key: KeyHandle, backend_name: str) -> HeaderFn:
    """Default Azure header function; empty when no key resolves."""

    def _header() -> Optional[Mapping[str, str]]:
        if resolved := resolve_key(key, backend_name):
            return {"api-key": resolved}
        return None

    return _header


def _header_fn(header: HeaderSpec) -> Optional[HeaderFn]:
    if header is None or callable(header):
        return header
    static = dict(header)
    return lambda: static


def _build(
    variant: BackendVariant,
    name: str,
    *,
    host: str,
    endpoint: str,
    protocol: Optional[str],
    header: HeaderSpec,
    models: Iterable[str],
    stream: bool,
    key: KeyHandle,
    curl_args: Iterable[str],
    media_models: Iterable[str],
    request_params: Optional[Mapping[str, Any]],
) -> BackendConfig:
    if header is None:
        default = azure_header if variant is BackendVariant.AZURE_COMPATIBLE else bearer_header
        header_fn: Optional[HeaderFn] = default(key, name)
    else:
        header_fn = _header_fn(header)
    return BackendConfig(
        name=name,
        host=host,
        endpoint=endpoint,
        protocol=protocol,
        header=header_fn,
        models=unique_models(models),
        stream=bool(stream),
        key=key,
        curl_args=tuple(curl_args or ()),
        variant=variant,
        media_models=frozenset(media_models or ()),
        request_params=dict(request_params or {}),
    )


def register_openai_compatible(
    registry: BackendRegistry,
    name: str,
    *,
    host: str = OPENAI_DEFAULT_HOST,
    endpoint: str = OPENAI_DEFAULT_ENDPOINT,
    protocol: Optional[str] = "https",
    header: HeaderSpec = None,
    models: Iterable[str] = (),
    stream: bool = False,
    key: KeyHandle = None,
    curl_args: Iterable[str] = (),
    media_models: Iterable[str] = (),
    request_params: Optional[Mapping[str, Any]] = None,
) -> BackendConfig:
    """Register an OpenAI-compatible backend (OpenAI, local servers, proxies).

    Returns the stored `BackendConfig`. A previous backend with the same name
    is replaced without notice.
    """
    backend = _build(
        BackendVariant.OPENAI_COMPATIBLE,
        name,
        host=host,
        endpoint=endpoint,
        protocol=protocol,
        header=header,
        models=models,
        stream=stream,
        key=key,
        curl_args=curl_args,
        media_models=media_models,
        request_params=request_params,
    )
    return registry.register(backend)


def register_azure(
    registry: BackendRegistry,
    name: str,
    *,
    host: str,
    endpoint: str,
    protocol: Optional[str] = "https",
    header: HeaderSpec = None,
    models: Iterable[str] = (),
    stream: bool = False,
    key: KeyHandle = None,
    curl_args: Iterable[str] = (),
    media_models: Iterable[str] = (),
    request_params: Optional[Mapping[str, Any]] = None,
) -> BackendConfig:
    """Register an Azure OpenAI deployment.

    ``endpoint`` is the deployment path including the ``api-version`` query,
    e.g. ``/openai/deployments/<id>/chat/completions?api-version=2024-10-21``.
    """
    backend = _build(
        BackendVariant.AZURE_COMPATIBLE,
        name,
        host=host,
        endpoint=endpoint,
        protocol=protocol,
        header=header,
        models=models,
        stream=stream,
        key=key,
        curl_args=curl_args,
        media_models=media_models,
        request_params=request_params,
    )
    return registry.register(backend)


__all__ = ["register_openai_compatible", "register_azure", "bearer_header", "azure_header"]
