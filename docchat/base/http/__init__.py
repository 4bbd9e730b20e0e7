"""HTTP transport utilities."""

from .client import close_all_clients, get_httpx_client, send

__all__ = ["get_httpx_client", "close_all_clients", "send"]
