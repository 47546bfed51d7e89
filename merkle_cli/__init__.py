"""
merkle CLI

Command-line interface for building Merkle roots and issuing and checking
inclusion proofs.

Usage:
    python -m merkle_cli root "block 1" "block 2" "block 3"
    python -m merkle_cli prove --index 2 "block 1" "block 2" "block 3" --out proof.json
    python -m merkle_cli verify proof.json --message "block 3"
    python -m merkle_cli bench --leaves 65536 --rounds 10
"""

__version__ = "0.1.0"
