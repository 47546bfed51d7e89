"""
Shared helpers for CLI commands: exit codes, message input, hasher
selection and error output.
"""

from __future__ import annotations

import json
import sys
from argparse import Namespace
from pathlib import Path

from merkle_core.config import RuntimeConfig, get_default_config
from merkle_core.crypto.hashers import MerkleHasher, get_hasher
from merkle_core.schemas.errors import MerkleException


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def decode_message(text: str, as_hex: bool) -> bytes:
    """Turn a command-line message into bytes (UTF-8, or hex with --hex)."""
    if as_hex:
        return bytes.fromhex(text[2:] if text.startswith("0x") else text)
    return text.encode("utf-8")


def read_messages(args: Namespace) -> list[bytes]:
    """
    Collect messages from positional arguments and an optional --file.

    File messages are one per line, line terminator stripped, and come
    after positional messages.
    """
    texts: list[str] = list(args.messages or [])
    if getattr(args, "file", None):
        content = Path(args.file).read_text(encoding="utf-8")
        texts.extend(content.splitlines())
    return [decode_message(t, args.hex) for t in texts]


def runtime_config(args: Namespace) -> RuntimeConfig:
    return getattr(args, "runtime_config", None) or get_default_config()


def resolve_hasher(args: Namespace) -> type[MerkleHasher]:
    """Hasher from --algorithm, falling back to the configured algorithm."""
    name = getattr(args, "algorithm", None)
    if name:
        return get_hasher(name)
    return runtime_config(args).hash.resolve()


def print_error(error: MerkleException, output_json: bool = False) -> None:
    """Report a MerkleException on stderr, as text or as a JSON error model."""
    if output_json:
        print(error.to_error_model().model_dump_json(indent=2), file=sys.stderr)
    else:
        print(f"Error: {error.message}", file=sys.stderr)


def print_json(data: dict) -> None:
    print(json.dumps(data, indent=2))
