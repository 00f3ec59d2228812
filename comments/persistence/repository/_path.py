"""Materialized path arithmetic for structure nodes.

A path is one zero-padded ordinal per level joined with dots, e.g.
"000002.000001". Lexical order of paths is depth-first thread order.
"""

from typing import Optional

SEGMENT_WIDTH = 6
SEPARATOR = "."


def child_path(parent_path: Optional[str], ordinal: int) -> str:
    """Path of the ordinal-th child of a parent (None = root level)."""
    segment = f"{ordinal:0{SEGMENT_WIDTH}d}"
    return f"{parent_path}{SEPARATOR}{segment}" if parent_path else segment


def next_ordinal(last_sibling_path: Optional[str]) -> int:
    """Ordinal for a node appended after the given last sibling."""
    if not last_sibling_path:
        return 1
    return int(last_sibling_path.rsplit(SEPARATOR, 1)[-1]) + 1


def descendant_prefix(path: str) -> str:
    """Prefix shared by every path below the given one."""
    return f"{path}{SEPARATOR}"


def rebase(path: str, old_prefix: str, new_prefix: str) -> str:
    """Move a descendant path from one subtree root to another."""
    return new_prefix + path[len(old_prefix) :]
