"""
CLI Prove Command

Build a tree over messages and emit the inclusion proof for one of them as
a JSON proof document.

Usage:
    merkle prove --index 2 "block 1" "block 2" "block 3" [--out proof.json]
"""

from __future__ import annotations

import logging
import sys
from argparse import Namespace
from pathlib import Path

from merkle_core.crypto.hashing import leaf_hash
from merkle_core.merkle.merkle_tree import MerkleTree
from merkle_core.schemas.errors import MerkleException
from merkle_cli.common import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    print_error,
    print_json,
    read_messages,
    resolve_hasher,
)
from merkle_cli.models import ProofDocument


logger = logging.getLogger(__name__)


def prove_cmd(args: Namespace) -> int:
    """
    Execute the prove command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    try:
        hasher = resolve_hasher(args)
        messages = read_messages(args)
        leaves = [leaf_hash(m, hasher) for m in messages]
        tree = MerkleTree.from_leaves(leaves, hasher)
        proof = tree.proof(args.index)
    except MerkleException as e:
        print_error(e, args.json)
        return EXIT_RUNTIME_ERROR
    except (OSError, ValueError) as e:
        print(f"Error reading messages: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    document = ProofDocument.from_proof(proof, leaves[args.index], tree.root, hasher)
    payload = document.model_dump_json(indent=2)

    if args.out:
        out_path = Path(args.out)
        out_path.write_text(payload + "\n", encoding="utf-8")
        logger.info(f"Wrote proof for index {args.index} to {out_path}")
        if args.json:
            print_json({"proof": str(out_path), "root": tree.root.to_hex()})
        else:
            print(f"proof: {out_path}")
            print(f"root: {tree.root}")
    else:
        print(payload)

    return EXIT_SUCCESS
