"""
CLI Bench Command

Time tree construction and prove+verify over synthetic leaves. Leaf i is
leaf_hash of i encoded as 8 little-endian bytes.

Usage:
    merkle bench [--leaves N] [--rounds R] [--algorithm NAME] [--json]
"""

from __future__ import annotations

import logging
import sys
import time
from argparse import Namespace
from dataclasses import asdict, dataclass

from merkle_core.crypto.digest import Digest
from merkle_core.crypto.hashers import MerkleHasher
from merkle_core.crypto.hashing import leaf_hash
from merkle_core.merkle.merkle_tree import MerkleTree
from merkle_core.schemas.errors import MerkleException
from merkle_cli.common import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    print_error,
    print_json,
    resolve_hasher,
    runtime_config,
)


logger = logging.getLogger(__name__)


@dataclass
class BenchSummary:
    """Benchmark results for CLI output."""
    algorithm: str
    leaves: int
    rounds: int
    root: str
    build_avg_ms: float
    leaves_per_s: float
    prove_verify_ms: float
    verified: int


def make_leaves(n: int, hasher: type[MerkleHasher]) -> list[Digest]:
    return [leaf_hash(i.to_bytes(8, "little"), hasher) for i in range(n)]


def run_bench(n: int, rounds: int, hasher: type[MerkleHasher]) -> BenchSummary:
    """Average `rounds` builds over `n` leaves, then prove and verify every leaf once."""
    leaves = make_leaves(n, hasher)

    total = 0.0
    tree = None
    for _ in range(rounds):
        t0 = time.perf_counter()
        tree = MerkleTree.from_leaves(leaves, hasher)
        total += time.perf_counter() - t0
        logger.debug(f"root={tree.root}")
    avg = total / rounds

    root = tree.root
    t0 = time.perf_counter()
    verified = 0
    for i in range(n):
        if tree.proof(i).verify(leaves[i], root, hasher):
            verified += 1
    prove_verify = time.perf_counter() - t0

    return BenchSummary(
        algorithm=hasher.name,
        leaves=n,
        rounds=rounds,
        root=root.to_hex(),
        build_avg_ms=avg * 1e3,
        leaves_per_s=n / avg if avg > 0 else float("inf"),
        prove_verify_ms=prove_verify * 1e3,
        verified=verified,
    )


def bench_cmd(args: Namespace) -> int:
    """
    Execute the bench command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    config = runtime_config(args)
    n = args.leaves if args.leaves is not None else config.bench.leaves
    rounds = args.rounds if args.rounds is not None else config.bench.rounds
    if n < 1 or rounds < 1:
        print("Error: --leaves and --rounds must be positive", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    try:
        hasher = resolve_hasher(args)
    except MerkleException as e:
        print_error(e, args.json)
        return EXIT_RUNTIME_ERROR

    if not args.json:
        print(f"Hasher: {hasher.name}, leaves: {n}, rounds: {rounds}")

    summary = run_bench(n, rounds, hasher)

    if args.json:
        print_json(asdict(summary))
    else:
        print(f"root={summary.root}")
        print(
            f"Build avg: {summary.build_avg_ms:.3f} ms "
            f"(~{summary.leaves_per_s:.1f} leaves/s)"
        )
        print(
            f"Prove+verify all: {summary.prove_verify_ms:.3f} ms "
            f"({summary.verified} ok)"
        )

    return EXIT_SUCCESS
