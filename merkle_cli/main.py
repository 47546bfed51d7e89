"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    merkle root MESSAGE... [--file PATH] [--hex] [--algorithm NAME] [--json]
    merkle prove --index N MESSAGE... [--file PATH] [--hex] [--algorithm NAME] [--out PATH]
    merkle verify PROOF_PATH (--message TEXT | --leaf HEX) --root HEX [--hex] [--json]
    merkle bench [--leaves N] [--rounds R] [--algorithm NAME] [--json]
    merkle algorithms [--json]

Environment Variables:
    MERKLE_HASH_ALGORITHM       Hash algorithm (default: sha3-256)
    MERKLE_LOG_LEVEL            Log level (default: INFO)
    MERKLE_LOG_FILE             Optional log file
    MERKLE_BENCH_LEAVES         Default benchmark leaf count
    MERKLE_BENCH_ROUNDS         Default benchmark rounds
"""

from __future__ import annotations

import argparse
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from merkle_core.config import RuntimeConfig, get_default_config
from merkle_core.crypto.hashers import DEFAULT_HASHER, available_hashers
from merkle_core.schemas.errors import MerkleException
from merkle_cli import __version__
from merkle_cli.commands import bench, prove, root, verify
from merkle_cli.common import EXIT_RUNTIME_ERROR, EXIT_SUCCESS, print_json


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
        force=True,
    )


def _add_message_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "messages",
        nargs="*",
        help="Messages to commit, in order",
    )
    parser.add_argument(
        "--file", "-f",
        type=str,
        default=None,
        help="Read additional messages from a file, one per line",
    )
    parser.add_argument(
        "--hex",
        action="store_true",
        default=False,
        help="Messages are hex-encoded bytes instead of UTF-8 text",
    )
    _add_algorithm_argument(parser)


def _add_algorithm_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--algorithm", "-a",
        type=str,
        default=None,
        choices=available_hashers(),
        help="Hash algorithm (default: from config or sha3-256)",
    )


def _add_json_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="merkle",
        description="Build Merkle roots, issue inclusion proofs and verify them.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to a YAML configuration file",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- root command ---
    root_parser = subparsers.add_parser(
        "root",
        help="Compute the Merkle root of messages",
        description="Leaf-hash each message and print the root of the resulting tree.",
    )
    _add_message_arguments(root_parser)
    _add_json_argument(root_parser)
    root_parser.set_defaults(func=root.root_cmd)

    # --- prove command ---
    prove_parser = subparsers.add_parser(
        "prove",
        help="Issue an inclusion proof for one message",
        description="Build the tree over messages and write a JSON proof document for one index.",
    )
    prove_parser.add_argument(
        "--index", "-i",
        type=int,
        required=True,
        help="0-based index of the message to prove",
    )
    prove_parser.add_argument(
        "--out", "-o",
        type=str,
        default=None,
        help="Write the proof document to this path instead of stdout",
    )
    _add_message_arguments(prove_parser)
    _add_json_argument(prove_parser)
    prove_parser.set_defaults(func=prove.prove_cmd)

    # --- verify command ---
    verify_parser = subparsers.add_parser(
        "verify",
        help="Verify a proof document",
        description="Recompute the root from a leaf and a proof document and compare.",
    )
    verify_parser.add_argument(
        "proof_path",
        type=str,
        help="Path to a JSON proof document",
    )
    claim = verify_parser.add_mutually_exclusive_group(required=True)
    claim.add_argument(
        "--message", "-m",
        type=str,
        default=None,
        help="Claimed message (leaf-hashed before verification)",
    )
    claim.add_argument(
        "--leaf",
        type=str,
        default=None,
        help="Claimed leaf digest, hex",
    )
    verify_parser.add_argument(
        "--root", "-r",
        type=str,
        required=True,
        help="Trusted root digest, hex, obtained independently of the proof document",
    )
    verify_parser.add_argument(
        "--hex",
        action="store_true",
        default=False,
        help="--message is hex-encoded bytes",
    )
    _add_json_argument(verify_parser)
    verify_parser.set_defaults(func=verify.verify_cmd)

    # --- bench command ---
    bench_parser = subparsers.add_parser(
        "bench",
        help="Time tree construction and proof verification",
        description="Average build time over several rounds, then prove and verify every leaf.",
    )
    bench_parser.add_argument(
        "--leaves", "-n",
        type=int,
        default=None,
        help="Number of leaves (default: from config, 65536)",
    )
    bench_parser.add_argument(
        "--rounds",
        type=int,
        default=None,
        help="Number of build rounds (default: from config, 10)",
    )
    _add_algorithm_argument(bench_parser)
    _add_json_argument(bench_parser)
    bench_parser.set_defaults(func=bench.bench_cmd)

    # --- algorithms command ---
    algorithms_parser = subparsers.add_parser(
        "algorithms",
        help="List available hash algorithms",
    )
    _add_json_argument(algorithms_parser)
    algorithms_parser.set_defaults(func=algorithms_cmd)

    return parser


def algorithms_cmd(args: argparse.Namespace) -> int:
    """Handle algorithms command."""
    names = available_hashers()
    if args.json:
        print_json({"default": DEFAULT_HASHER.name, "algorithms": names})
    else:
        for name in names:
            marker = " (default)" if name == DEFAULT_HASHER.name else ""
            print(f"{name}{marker}")
    return EXIT_SUCCESS


def load_runtime_config(config_path: Path | None) -> RuntimeConfig:
    """Config file (if given) with environment overrides, else env/defaults."""
    if config_path is not None:
        return RuntimeConfig.from_yaml(config_path).with_env_overrides()
    return get_default_config()


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=verification failed)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    # Load configuration
    try:
        config = load_runtime_config(args.config)
    except (MerkleException, FileNotFoundError) as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    # Setup logging
    log_level = args.log_level or config.logging.level
    setup_logging(level=log_level, log_file=config.logging.file)

    # Attach config to args for commands to use
    args.runtime_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if log_level.upper() == "DEBUG":
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
