"""
CLI command modules.
"""

from merkle_cli.commands import bench, prove, root, verify

__all__ = ["bench", "prove", "root", "verify"]
