"""Content fingerprints used for change detection.

SHA-256 is used for collision resistance only, so that an edited file is never
mistaken for an unchanged one. It is not a security control.
"""

from __future__ import annotations

import hashlib
import os


def fingerprint(data: bytes) -> str:
    """Return the lowercase hex SHA-256 digest of ``data``."""
    return hashlib.sha256(data).hexdigest()


def fingerprint_file(path: str | os.PathLike) -> str:
    """Read the whole file and return its fingerprint.

    Raises OSError if the file cannot be read.
    """
    with open(path, "rb") as f:
        data = f.read()
    return fingerprint(data)
