"""
CLI Root Command

Leaf-hash a list of messages, build the tree and print its root.

Usage:
    merkle root "block 1" "block 2" "block 3" [--file PATH] [--hex] [--json]
"""

from __future__ import annotations

import logging
import sys
from argparse import Namespace

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


logger = logging.getLogger(__name__)


def root_cmd(args: Namespace) -> int:
    """
    Execute the root command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    try:
        hasher = resolve_hasher(args)
        messages = read_messages(args)
        tree = MerkleTree.from_leaves([leaf_hash(m, hasher) for m in messages], hasher)
    except MerkleException as e:
        print_error(e, args.json)
        return EXIT_RUNTIME_ERROR
    except (OSError, ValueError) as e:
        print(f"Error reading messages: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    logger.info(f"Computed root over {tree.leaf_count} messages")

    if args.json:
        print_json({
            "algorithm": hasher.name,
            "leaves": tree.leaf_count,
            "depth": tree.depth,
            "root": tree.root.to_hex(),
        })
    else:
        print(f"algorithm: {hasher.name}")
        print(f"leaves: {tree.leaf_count}")
        print(f"depth: {tree.depth}")
        print(f"root: {tree.root}")

    return EXIT_SUCCESS
