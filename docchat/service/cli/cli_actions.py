"""CLI action handlers.

Dry-run paths never touch the network: they build the request and print it
with credentials redacted. ``--execute`` sends it and streams the reply.

Exit codes: ``0`` success, ``2`` for provider, validation or input errors.
Errors are printed as JSON to stderr.
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any, Dict, Optional

from ...base.errors import ProviderError
from ...config import get_settings
from ...document import Document
from ..conversation import Conversation


def _error(payload: Dict[str, Any]) -> int:
    print(json.dumps(payload), file=sys.stderr)
    return 2


def build_conversation(args: argparse.Namespace) -> Conversation:
    overrides = {"max_entries": getattr(args, "max_entries", None)}
    return Conversation(settings=get_settings(overrides))


def plan_run(args: argparse.Namespace, conversation: Optional[Conversation] = None) -> Dict[str, Any]:
    """Return the JSON-serializable request ``run`` would send.

    Raises:
        ProviderError: Unknown backend or no model.
        ValueError: Invalid bounds or generation parameters.
        OSError: Unreadable document or sidecar.
    """
    conversation = conversation or build_conversation(args)
    document = Document.from_file(args.path, bounds_path=args.bounds)
    request = conversation.prepare(
        document,
        args.cursor,
        backend=args.backend,
        model=args.model,
        stream=args.stream,
        temperature=args.temperature,
        max_tokens=args.max_tokens,
    )
    return {
        "backend": args.backend or conversation.settings.backend,
        "mode": document.mode,
        "url": request.url,
        "method": request.method,
        "headers": request.redacted_headers(),
        "stream": request.stream,
        "body": request.body,
    }


def execute(args: argparse.Namespace, conversation: Optional[Conversation] = None) -> int:
    """Send the request for ``args.path``; stream text to stdout unless ``--json``."""
    conversation = conversation or build_conversation(args)
    document = Document.from_file(args.path, bounds_path=args.bounds)

    def _echo(fragment: str) -> None:
        sys.stdout.write(fragment)
        sys.stdout.flush()

    text = conversation.send(
        document,
        args.cursor,
        backend=args.backend,
        model=args.model,
        stream=args.stream,
        temperature=args.temperature,
        max_tokens=args.max_tokens,
        on_delta=None if args.json else _echo,
    )
    if args.json:
        print(json.dumps({"backend": args.backend or conversation.settings.backend, "text": text}, ensure_ascii=False))
    else:
        sys.stdout.write("\n")
    return 0


def handle_run(args: argparse.Namespace, conversation: Optional[Conversation] = None) -> int:
    """Execute the ``run`` subcommand (dry-run unless ``--execute``)."""
    try:
        if args.execute:
            return execute(args, conversation)
        print(json.dumps(plan_run(args, conversation), indent=2, ensure_ascii=False))
        return 0
    except ProviderError as e:
        return _error({"error": e.message, "code": e.code.value, "provider": e.provider})
    except (OSError, ValueError) as e:
        return _error({"error": str(e)})


def handle_backends(args: argparse.Namespace, conversation: Optional[Conversation] = None) -> int:
    """Print the registered backends, one per line or as JSON."""
    conversation = conversation or build_conversation(args)
    rows = [
        {
            "name": b.name,
            "url": b.url,
            "variant": b.variant.value,
            "stream": b.supports_streaming,
            "models": list(b.models),
            "media_models": sorted(b.media_models),
        }
        for b in conversation.registry
    ]
    if getattr(args, "json", False):
        print(json.dumps({"backends": rows}))
    else:
        for row in rows:
            print(f"{row['name']}\t{row['url']}\t{','.join(row['models'])}")
    return 0


__all__ = ["plan_run", "execute", "handle_run", "handle_backends", "build_conversation"]
