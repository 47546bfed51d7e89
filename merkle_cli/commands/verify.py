"""
CLI Verify Command

Verify a JSON proof document against a claimed leaf and a trusted root.

Only the index and siblings are taken from the document. The claimed leaf
(--message or --leaf) and the root (--root) come from the caller, so a
document cannot vouch for its own leaf or root.

Usage:
    merkle verify proof.json (--message TEXT | --leaf HEX) --root HEX [--hex] [--json]
"""

from __future__ import annotations

import logging
import sys
from argparse import Namespace
from dataclasses import asdict, dataclass
from pathlib import Path

from pydantic import ValidationError

from merkle_core.crypto.digest import Digest
from merkle_core.crypto.hashing import leaf_hash
from merkle_core.schemas.errors import ErrorCodes, MerkleException
from merkle_cli.common import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    EXIT_VERIFICATION_FAILED,
    decode_message,
    print_error,
    print_json,
)
from merkle_cli.models import ProofDocument


logger = logging.getLogger(__name__)


@dataclass
class VerifySummary:
    """Summary of proof verification for CLI output."""
    proof_path: str
    algorithm: str
    index: int
    leaf: str
    root: str
    valid: bool


def load_document(path: Path) -> ProofDocument:
    """
    Read and validate a proof document.

    Raises:
        MerkleException: PROOF_DOCUMENT_INVALID if the file is not a valid document
    """
    try:
        return ProofDocument.model_validate_json(path.read_text(encoding="utf-8"))
    except ValidationError as e:
        raise MerkleException(
            message=f"Invalid proof document {path}: {e.error_count()} validation error(s)",
            code=ErrorCodes.PROOF_DOCUMENT_INVALID,
            details={"path": str(path), "errors": e.errors(include_url=False, include_context=False)},
        ) from e


def print_summary_human(summary: VerifySummary) -> None:
    """Print summary in human-readable format."""
    print(f"proof: {summary.proof_path}")
    print(f"algorithm: {summary.algorithm}")
    print(f"index: {summary.index}")
    print(f"leaf: {summary.leaf}")
    print(f"root: {summary.root}")
    print(f"valid: {str(summary.valid).lower()}")


def verify_cmd(args: Namespace) -> int:
    """
    Execute the verify command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 valid, 2 invalid, 1 error)
    """
    proof_path = Path(args.proof_path)
    if not proof_path.exists():
        print(f"Error: Proof not found: {proof_path}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    try:
        document = load_document(proof_path)
        hasher = document.hasher
        if args.message is not None:
            leaf = leaf_hash(decode_message(args.message, args.hex), hasher)
        else:
            leaf = Digest.from_hex(args.leaf)
        root = Digest.from_hex(args.root)
    except MerkleException as e:
        print_error(e, args.json)
        return EXIT_RUNTIME_ERROR
    except (OSError, ValueError) as e:
        print(f"Error loading proof: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    valid = document.to_proof().verify(leaf, root, hasher)

    summary = VerifySummary(
        proof_path=str(proof_path),
        algorithm=hasher.name,
        index=document.index,
        leaf=leaf.to_hex(),
        root=root.to_hex(),
        valid=valid,
    )
    if args.json:
        print_json(asdict(summary))
    else:
        print_summary_human(summary)

    if valid:
        logger.info("Verification passed")
        return EXIT_SUCCESS
    logger.warning("Verification failed")
    return EXIT_VERIFICATION_FAILED
