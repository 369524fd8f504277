from __future__ import annotations

import logging
import os
import stat
import tempfile

logger = logging.getLogger(__name__)


def atomic_write_text(path: str | os.PathLike, content: str, encoding: str = "utf-8") -> None:
    """Replace ``path`` with ``content`` without ever leaving it half-written.

    The text goes to a temporary file in the same directory, which is then
    moved over ``path`` with os.replace. An existing file's permission bits are
    carried over. On any failure the temporary file is removed, the original
    is left as it was, and the error propagates.
    """
    path = os.fspath(path)
    directory = os.path.dirname(os.path.abspath(path))
    fd, tmp_path = tempfile.mkstemp(prefix=os.path.basename(path) + ".", suffix=".tmp", dir=directory)
    try:
        with os.fdopen(fd, "w", encoding=encoding) as f:
            f.write(content)
        if os.path.exists(path):
            os.chmod(tmp_path, stat.S_IMODE(os.stat(path).st_mode))
        os.replace(tmp_path, path)
    except Exception:
        if os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise
    logger.debug("Wrote %d character(s) to %s", len(content), path)
