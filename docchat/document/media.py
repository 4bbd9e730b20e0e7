"""Image detection and inline encoding for multimodal prompts."""
from __future__ import annotations

import base64
import re
from pathlib import Path
from typing import Optional, Union
from urllib.parse import urlparse

IMAGE_EXTENSIONS = frozenset(
    {"png", "jpg", "jpeg", "gif", "webp", "bmp", "tif", "tiff", "svg", "heic", "heif"}
)

# tramp-style "/ssh:host:/path" or "/user@host:/path"
_REMOTE_PATH = re.compile(r"^/[-\w.@]+:")
_HOST_PREFIX = re.compile(r"^[-\w.@]{2,}:")


def _extension(name: str) -> str:
    suffix = Path(name).suffix
    return suffix[1:].lower() if suffix else ""


def is_remote_path(path: str) -> bool:
    return bool(_REMOTE_PATH.match(path) or _HOST_PREFIX.match(path))


def is_image_file(path: Union[str, Path]) -> bool:
    return _extension(str(path)) in IMAGE_EXTENSIONS


def is_image_url(url: str) -> bool:
    """True when the URL path ends in a known image extension."""
    return _extension(urlparse(url).path) in IMAGE_EXTENSIONS


def mime_subtype(path: Union[str, Path]) -> str:
    ext = _extension(str(path))
    return "jpeg" if ext == "jpg" else ext


def encode_data_uri(path: Union[str, Path]) -> str:
    """Read ``path`` and return ``data:image/<ext>;base64,<data>``."""
    data = base64.b64encode(Path(path).read_bytes()).decode("ascii")
    return f"data:image/{mime_subtype(path)};base64,{data}"


def resolve_local(path: str, base_dir: Optional[Path]) -> Path:
    """Expand ``~`` and resolve a relative path against ``base_dir``."""
    p = Path(path).expanduser()
    if not p.is_absolute() and base_dir is not None:
        p = base_dir / p
    return p


__all__ = [
    "IMAGE_EXTENSIONS",
    "encode_data_uri",
    "is_image_file",
    "is_image_url",
    "is_remote_path",
    "mime_subtype",
    "resolve_local",
]
