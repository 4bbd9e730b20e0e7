"""docchat.config.defaults
=======================

Central place for small, stable default values used across the docchat
package. These defaults can be overridden via environment variables or an
external configuration file.

This module intentionally avoids importing from other docchat packages to
prevent circular dependencies. Only plain constants live here.
"""

from __future__ import annotations

# ---- Conversation ----
DEFAULT_SYSTEM_PROMPT = "You are a large language model living in a document and a helpful assistant. Respond concisely."
DEFAULT_BACKEND = "openai"
DEFAULT_MODEL = "gpt-4o-mini"

# Prefix markers inserted before prompts / responses, per document mode.
DEFAULT_PROMPT_PREFIXES = {"markdown": "### ", "org": "*** ", "text": ""}
DEFAULT_RESPONSE_PREFIXES = {"markdown": "", "org": "", "text": ""}

# ---- Built-in OpenAI backend ----
OPENAI_DEFAULT_HOST = "api.openai.com"
OPENAI_DEFAULT_ENDPOINT = "/v1/chat/completions"
OPENAI_DEFAULT_MODELS = ("gpt-4o-mini", "gpt-4o", "gpt-4.1", "gpt-4.1-mini", "o3-mini")
OPENAI_MEDIA_MODELS = ("gpt-4o-mini", "gpt-4o", "gpt-4.1", "gpt-4.1-mini")

# ---- HTTP ----
DEFAULT_HTTP_TIMEOUT_SECONDS = 60.0
DEFAULT_STREAM_TIMEOUT_SECONDS = 300.0

# ---- CLI ----
CLI_PROG = "docchat-cli"
BOUNDS_SUFFIX = ".bounds.json"

__all__ = [
    "DEFAULT_SYSTEM_PROMPT",
    "DEFAULT_BACKEND",
    "DEFAULT_MODEL",
    "DEFAULT_PROMPT_PREFIXES",
    "DEFAULT_RESPONSE_PREFIXES",
    "OPENAI_DEFAULT_HOST",
    "OPENAI_DEFAULT_ENDPOINT",
    "OPENAI_DEFAULT_MODELS",
    "OPENAI_MEDIA_MODELS",
    "DEFAULT_HTTP_TIMEOUT_SECONDS",
    "DEFAULT_STREAM_TIMEOUT_SECONDS",
    "CLI_PROG",
    "BOUNDS_SUFFIX",
]
