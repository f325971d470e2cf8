"""Filesystem path helpers."""

import os
from typing import List


def split_path(path: str) -> List[str]:
    """Split ``path`` into its components without touching the disk.

    ``"../frontend/dist/assets/app.js"`` becomes
    ``["..", "frontend", "dist", "assets", "app.js"]``. Trailing separators
    are ignored and an absolute path keeps its root as the first component.
    """
    if not path:
        return []

    parts: List[str] = []
    head = os.path.normpath(path)
    while head:
        head, tail = os.path.split(head)
        if tail:
            parts.append(tail)
            continue
        # Only the root ("/" or a drive) is left
        parts.append(head)
        break
    parts.reverse()
    return parts
